"""Table data model and the candidate record placed in the extraction pool.

``TableData`` is the validated header+rows shape every generated table goes
through before rendering.  ``TableCandidate`` is what a strategy contributes
to the pool: rendered text plus the node it came from, so a marker that
deferred that very node can claim it later.
"""

from dataclasses import dataclass

from bs4 import Tag
from pydantic import BaseModel, model_validator


class TableData(BaseModel):
    """Column headers plus data rows, each row exactly as wide as the headers."""

    headers: list[str]
    rows: list[list[str]]

    @model_validator(mode="after")
    def validate_row_widths(self) -> "TableData":
        """Ensure every data row has exactly len(headers) cells."""
        n_cols = len(self.headers)
        for i, row in enumerate(self.rows):
            if len(row) != n_cols:
                raise ValueError(f"Row {i} has {len(row)} cells, expected {n_cols} (matching headers)")
        return self

    @classmethod
    def padded(cls, headers: list[str], rows: list[list[str]]) -> "TableData":
        """Build a TableData, padding short rows with empty cells and truncating long ones."""
        width = len(headers)
        fitted = [(list(row) + [""] * width)[:width] for row in rows]
        return cls(headers=headers, rows=fitted)


@dataclass(eq=False)
class TableCandidate:
    """One rendered table in the extraction pool.

    ``priority`` is the strategy number (1 = preformatted ... 4 = custom div);
    lower numbers win when a marker has no better match.
    """

    content: str
    source: Tag | None
    priority: int
