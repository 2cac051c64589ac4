"""Shared classifier deciding whether a node holds tabular content.

The heading walk uses it to defer a node to table extraction, and the
paragraph extractor uses it to refuse table content, so both sides agree on
what belongs to the tables pass.
"""

from bs4 import Tag

from ai_readable.document.model import Document
from ai_readable.tables.patterns import (
    COLUMN_SEPARATOR_RE,
    MIN_TABULAR_LINES,
    TABLE_CLASS_HINTS,
    TABLE_TEXT_KEYWORDS,
)


def has_table_class(node: Tag) -> bool:
    """Return True if the node's class string mentions a table-like hint."""
    class_string = Document.class_string(node).lower()
    if not class_string:
        return False
    return any(hint in class_string for hint in TABLE_CLASS_HINTS)


def looks_like_text_table(node: Tag) -> bool:
    """Return True for a block whose plain text reads like a comparison table."""
    text = Document.text(node)
    if not any(keyword in text for keyword in TABLE_TEXT_KEYWORDS):
        return False
    lines = [line for line in text.split("\n") if line.strip()]
    if len(lines) < MIN_TABULAR_LINES:
        return False
    return any(COLUMN_SEPARATOR_RE.search(line.strip()) for line in lines)


def _is_direct_table(node: Tag) -> bool:
    return Document.tag_name(node) == "table" or has_table_class(node)


def is_table_related(node: Tag) -> bool:
    """Return True if *node* is, or contains, content owned by table extraction."""
    name = Document.tag_name(node)
    if _is_direct_table(node):
        return True

    # Preformatted text drawn with pipes and dashes
    if name == "pre":
        text = Document.text(node)
        if "|" in text and "-" in text:
            return True

    if name == "div" and looks_like_text_table(node):
        return True

    # A real table or table-classed node anywhere below
    return any(_is_direct_table(child) for child in node.find_all(True))
