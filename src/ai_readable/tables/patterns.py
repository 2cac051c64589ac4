"""Compiled regex patterns, class hints and caps for table detection.

These constants drive the shared table classifier (detection.py) and the
four extraction strategies (strategies.py).
"""

import re

# ─── Classifier Hints ─────────────────────────────────────────────────────────

# Class-name substrings (case-insensitive) that mark a node as table-like
TABLE_CLASS_HINTS = (
    "table",
    "grid",
    "chart",
    "graph",
    "data-table",
    "pricing-table",
    "benchmark",
    "metrics",
    "stats",
)

# Words that show up in comparison/benchmark blocks rendered as plain text
TABLE_TEXT_KEYWORDS = (" vs ", "Category", "Accuracy", "Win Rate")

# A line that looks like it has columns: a pipe, a run of 2+ spaces, or a tab
COLUMN_SEPARATOR_RE = re.compile(r"\||\s{2,}|\t")

# Minimum non-empty lines for a text block to count as tabular
MIN_TABULAR_LINES = 3


# ─── Strategy 1: Preformatted Pipe Tables ─────────────────────────────────────

MIN_PREFORMATTED_LINES = 3


# ─── Strategy 2: Structural Tables ────────────────────────────────────────────

STRUCTURAL_TABLE_SELECTOR = 'table, [role="table"]'
STRUCTURAL_ROW_SELECTOR = 'tr, [role="row"]'
STRUCTURAL_CELL_SELECTOR = 'th, td, [role="cell"], [role="columnheader"], [role="rowheader"]'

# Data rows kept after the header row
MAX_STRUCTURAL_DATA_ROWS = 14


# ─── Strategy 3: Chart Heuristic ──────────────────────────────────────────────

BAR_CHART_SELECTOR = '.bar-graph, [class*="chart"], [class*="graph"]'
BAR_VALUE_SELECTOR = '[class*="number"], [class*="percentage"], [class*="value"]'
BAR_LABEL_SELECTOR = '[class*="tag"], [class*="label"], [class*="title"]'

PERCENTAGE_CHART_SELECTOR = '[class*="percentage"], [class*="metric"], [class*="stat"]'
PERCENTAGE_VALUE_SELECTOR = '[class*="number"], [class*="percentage"], [class*="value"], [class*="stat"]'
PERCENTAGE_LABEL_SELECTOR = '[class*="tag"], [class*="label"], [class*="title"], [class*="name"]'

CHART_CONTAINER_TAGS = ("section", "div")


# ─── Strategy 4: Custom Div Tables ────────────────────────────────────────────

CUSTOM_CONTAINER_HINTS = ("table", "grid", "chart", "data", "pricing", "comparison", "stats", "metrics")
CUSTOM_ROW_SELECTOR = '[class*="row"], [class*="item"], [class*="entry"], tr, li'

MIN_CUSTOM_WIDTH, MAX_CUSTOM_WIDTH = 100, 2000
MIN_CUSTOM_HEIGHT, MAX_CUSTOM_HEIGHT = 50, 2000
MIN_CUSTOM_ROWS, MAX_CUSTOM_ROWS = 2, 50
MIN_CUSTOM_HEADERS, MAX_CUSTOM_HEADERS = 2, 10

MAX_CUSTOM_DATA_ROWS = 15
MAX_CUSTOM_TABLES = 10

# Paragraph text at or above this share of the container text means prose, not a table
MAX_PARAGRAPH_TEXT_RATIO = 0.8

# A data row needs at least this share of header-count cells filled in
MIN_ROW_FILL_RATIO = 0.5

# At least one data cell must be longer than this
MIN_MEANINGFUL_CELL_LENGTH = 3


# ─── Cell Icons ───────────────────────────────────────────────────────────────

ICON_SELECTOR = 'svg, i[class], [class*="icon"]'

# (hint substrings, glyph), checked in order; first hit wins
ICON_GLYPHS = (
    (("check", "tick"), "✓"),
    (("star", "favorite"), "★"),
    (("arrow", "chevron"), "→"),
    (("plus", "add"), "+"),
    (("minus", "remove"), "-"),
    (("fire", "flame"), "\U0001f525"),
)
DEFAULT_ICON_GLYPH = "•"


# ─── Rendering ────────────────────────────────────────────────────────────────

MIN_COLUMN_WIDTH = 8
