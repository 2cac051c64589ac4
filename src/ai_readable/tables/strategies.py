"""The four table extraction strategies, highest priority first.

  1. preformatted  -- ``<pre>`` blocks already drawn as pipe tables, kept verbatim
  2. structural    -- ``<table>`` / ``[role=table]`` elements
  3. chart         -- bar/percentage visualisations paired into Metric/Value rows
  4. custom div    -- div grids validated by size, row shape and text mix

Each strategy scans the whole document and returns candidates in document
order.  A failure on one node is logged and that node skipped; the pipeline
module handles dedup and caps.
"""

import logging

from bs4 import Tag

from ai_readable.document.model import Document
from ai_readable.tables.cells import extract_cell_content
from ai_readable.tables.formatting import render_table
from ai_readable.tables.patterns import (
    BAR_CHART_SELECTOR,
    BAR_LABEL_SELECTOR,
    BAR_VALUE_SELECTOR,
    CHART_CONTAINER_TAGS,
    CUSTOM_CONTAINER_HINTS,
    CUSTOM_ROW_SELECTOR,
    MAX_CUSTOM_DATA_ROWS,
    MAX_CUSTOM_HEADERS,
    MAX_CUSTOM_HEIGHT,
    MAX_CUSTOM_ROWS,
    MAX_CUSTOM_WIDTH,
    MAX_PARAGRAPH_TEXT_RATIO,
    MAX_STRUCTURAL_DATA_ROWS,
    MIN_CUSTOM_HEADERS,
    MIN_CUSTOM_HEIGHT,
    MIN_CUSTOM_ROWS,
    MIN_CUSTOM_WIDTH,
    MIN_MEANINGFUL_CELL_LENGTH,
    MIN_PREFORMATTED_LINES,
    MIN_ROW_FILL_RATIO,
    PERCENTAGE_CHART_SELECTOR,
    PERCENTAGE_LABEL_SELECTOR,
    PERCENTAGE_VALUE_SELECTOR,
    STRUCTURAL_CELL_SELECTOR,
    STRUCTURAL_ROW_SELECTOR,
    STRUCTURAL_TABLE_SELECTOR,
)
from ai_readable.tables.schema import TableCandidate, TableData
from ai_readable.text.normalize import clean_text

logger = logging.getLogger(__name__)

PRIORITY_PREFORMATTED = 1
PRIORITY_STRUCTURAL = 2
PRIORITY_CHART = 3
PRIORITY_CUSTOM = 4


# ─── Strategy 1: Preformatted Pipe Tables ─────────────────────────────────────


def preformatted_table(pre: Tag) -> str | None:
    """Return the trimmed text of a ``<pre>`` that already holds a pipe table."""
    text = Document.text(pre).strip()
    if not text:
        return None
    lines = text.split("\n")
    if len(lines) < MIN_PREFORMATTED_LINES:
        return None
    has_pipe_row = any(line.strip().startswith("|") and line.strip().endswith("|") for line in lines)
    return text if has_pipe_row else None


def extract_preformatted_tables(document: Document) -> list[TableCandidate]:
    candidates: list[TableCandidate] = []
    for pre in document.select("pre"):
        try:
            table = preformatted_table(pre)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.warning("Skipping <pre> block: %s", exc)
            continue
        if table:
            candidates.append(TableCandidate(content=table, source=pre, priority=PRIORITY_PREFORMATTED))
    return candidates


# ─── Strategy 2: Structural Tables ────────────────────────────────────────────


def _is_structural_table(node: Tag) -> bool:
    return Document.tag_name(node) == "table" or node.get("role") == "table"


def _is_structural_row(node: Tag) -> bool:
    return Document.tag_name(node) == "tr" or node.get("role") == "row"


def _owned_by(node: Tag, owner: Tag, predicate) -> bool:
    """True if the nearest ancestor of *node* matching *predicate* is *owner*."""
    for parent in node.parents:
        if predicate(parent):
            return parent is owner
    return False


def structural_table(table: Tag, document: Document) -> TableData | None:
    """Header row plus up to MAX_STRUCTURAL_DATA_ROWS data rows from a table element.

    Rows and cells of nested tables are left to those tables.
    """
    rows = [row for row in table.select(STRUCTURAL_ROW_SELECTOR) if _owned_by(row, table, _is_structural_table)]
    if not rows:
        return None

    def row_cells(row: Tag) -> list[str]:
        cells = [cell for cell in row.select(STRUCTURAL_CELL_SELECTOR) if _owned_by(cell, row, _is_structural_row)]
        return [extract_cell_content(cell, document) for cell in cells]

    headers = row_cells(rows[0])
    if not any(headers):
        return None

    data_rows: list[list[str]] = []
    for row in rows[1 : 1 + MAX_STRUCTURAL_DATA_ROWS]:
        cells = (row_cells(row) + [""] * len(headers))[: len(headers)]
        if any(cells):
            data_rows.append(cells)
    return TableData(headers=headers, rows=data_rows)


def extract_structural_tables(document: Document) -> list[TableCandidate]:
    candidates: list[TableCandidate] = []
    for table in document.select(STRUCTURAL_TABLE_SELECTOR):
        try:
            data = structural_table(table, document)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.warning("Skipping structural table: %s", exc)
            continue
        if data is not None:
            candidates.append(TableCandidate(content=render_table(data), source=table, priority=PRIORITY_STRUCTURAL))
    return candidates


# ─── Strategy 3: Chart Heuristic ──────────────────────────────────────────────


def chart_table(container: Tag, value_selector: str, label_selector: str, value_header: str) -> TableData | None:
    """Pair the i-th value node with the i-th label node inside *container*."""
    values = container.select(value_selector)
    labels = container.select(label_selector)

    rows: list[list[str]] = []
    for value_node, label_node in zip(values, labels):
        value = clean_text(Document.text(value_node))
        label = clean_text(Document.text(label_node))
        if value and label:
            rows.append([label, value])
    if not rows:
        return None
    return TableData(headers=["Metric", value_header], rows=rows)


def extract_chart_tables(document: Document) -> list[TableCandidate]:
    """Bar charts first (Metric/Value), then percentage visualisations (Metric/Percentage)."""
    passes = (
        (BAR_CHART_SELECTOR, BAR_VALUE_SELECTOR, BAR_LABEL_SELECTOR, "Value"),
        (PERCENTAGE_CHART_SELECTOR, PERCENTAGE_VALUE_SELECTOR, PERCENTAGE_LABEL_SELECTOR, "Percentage"),
    )
    candidates: list[TableCandidate] = []
    for chart_selector, value_selector, label_selector, value_header in passes:
        for chart in document.select(chart_selector):
            try:
                container = Document.closest(chart, CHART_CONTAINER_TAGS)
                if container is None:
                    continue
                data = chart_table(container, value_selector, label_selector, value_header)
            except Exception as exc:  # pylint: disable=broad-exception-caught
                logger.warning("Skipping chart element: %s", exc)
                continue
            if data is not None:
                candidates.append(TableCandidate(content=render_table(data), source=container, priority=PRIORITY_CHART))
    return candidates


# ─── Strategy 4: Custom Div Tables ────────────────────────────────────────────


def _custom_rows(container: Tag) -> list[Tag]:
    return Document.outermost(container.select(CUSTOM_ROW_SELECTOR))


def _custom_row_cells(row: Tag) -> list[Tag]:
    """Cells of a row: th/td for table rows, otherwise the row's element children."""
    if Document.tag_name(row) == "tr":
        return row.find_all(["th", "td"], recursive=False)
    return row.find_all(True, recursive=False)


def is_custom_table_container(container: Tag, document: Document) -> bool:
    """Validate a candidate div by rendered size, row shape, and paragraph share."""
    width, height = document.box_size(container)
    if not (MIN_CUSTOM_WIDTH <= width <= MAX_CUSTOM_WIDTH and MIN_CUSTOM_HEIGHT <= height <= MAX_CUSTOM_HEIGHT):
        return False

    rows = _custom_rows(container)
    if not MIN_CUSTOM_ROWS <= len(rows) <= MAX_CUSTOM_ROWS:
        return False

    # Every row needs cells, and none may be wider than the header row
    header_count = len(_custom_row_cells(rows[0]))
    if header_count < MIN_CUSTOM_HEADERS:
        return False
    for row in rows[1:]:
        count = len(_custom_row_cells(row))
        if count == 0 or count > header_count:
            return False

    # Mostly-paragraph containers are prose laid out in a grid, not data
    total_text = len(clean_text(Document.text(container)))
    if total_text == 0:
        return False
    paragraph_text = sum(len(clean_text(Document.text(p))) for p in Document.outermost(container.select("p")))
    return paragraph_text / total_text < MAX_PARAGRAPH_TEXT_RATIO


def custom_table(container: Tag, document: Document) -> TableData | None:
    """Headers from the first row, then up to MAX_CUSTOM_DATA_ROWS well-filled rows.

    Columns are positional: a row is cut or padded to the header row's width.
    """
    rows = _custom_rows(container)
    if len(rows) < MIN_CUSTOM_ROWS:
        return None

    # Blank header cells (a grid's top-left corner) still own a column
    headers = [extract_cell_content(cell, document) for cell in _custom_row_cells(rows[0])]
    if not MIN_CUSTOM_HEADERS <= sum(1 for header in headers if header) <= MAX_CUSTOM_HEADERS:
        return None

    data_rows: list[list[str]] = []
    for row in rows[1 : 1 + MAX_CUSTOM_DATA_ROWS]:
        cells = [extract_cell_content(cell, document) for cell in _custom_row_cells(row)][: len(headers)]
        filled = sum(1 for cell in cells if cell)
        if filled >= MIN_ROW_FILL_RATIO * len(headers):
            data_rows.append(cells)

    if not any(len(cell) > MIN_MEANINGFUL_CELL_LENGTH for row in data_rows for cell in row):
        return None
    return TableData.padded(headers, data_rows)


def _custom_containers(document: Document) -> list[Tag]:
    containers = []
    for div in document.select("div[class]"):
        class_string = Document.class_string(div).lower()
        if any(hint in class_string for hint in CUSTOM_CONTAINER_HINTS):
            containers.append(div)
    return containers


def extract_custom_tables(document: Document) -> list[TableCandidate]:
    candidates: list[TableCandidate] = []
    for container in _custom_containers(document):
        try:
            if not is_custom_table_container(container, document):
                continue
            data = custom_table(container, document)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.warning("Skipping custom table container: %s", exc)
            continue
        if data is not None:
            candidates.append(TableCandidate(content=render_table(data), source=container, priority=PRIORITY_CUSTOM))
    return candidates
