"""Fixed-width bordered ASCII rendering for generated tables.

Layout (blank lines included) is part of the output contract:

    <blank>
    +----------+----------+
    | Plan     | Price    |
    +----------+----------+
    | Pro      | 10       |
    <blank>
    | Team     | 25       |
    +----------+----------+
    <blank>
"""

from ai_readable.tables.patterns import MIN_COLUMN_WIDTH
from ai_readable.tables.schema import TableData


def column_widths(headers: list[str], rows: list[list[str]]) -> list[int]:
    """Width per column: the longest header or cell, never below MIN_COLUMN_WIDTH."""
    widths = []
    for col, header in enumerate(headers):
        cells = [row[col] for row in rows if col < len(row)]
        widths.append(max([len(header), MIN_COLUMN_WIDTH] + [len(cell) for cell in cells]))
    return widths


def _border(widths: list[int]) -> str:
    return "+" + "+".join("-" * (width + 2) for width in widths) + "+"


def _row(cells: list[str], widths: list[int]) -> str:
    padded = [(cells[i] if i < len(cells) else "").ljust(width) for i, width in enumerate(widths)]
    return "| " + " | ".join(padded) + " |"


def format_ascii_table(headers: list[str], rows: list[list[str]], widths: list[int] | None = None) -> str:
    """Render headers and rows as a bordered table framed by blank lines."""
    if widths is None:
        widths = column_widths(headers, rows)
    border = _border(widths)

    lines = ["", border, _row(headers, widths), border]
    for i, row in enumerate(rows):
        if i > 0:
            lines.append("")
        lines.append(_row(row, widths))
    lines.extend([border, ""])
    return "\n".join(lines)


def render_table(table: TableData) -> str:
    """Render a validated TableData."""
    return format_ascii_table(table.headers, table.rows)
