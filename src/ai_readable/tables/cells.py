"""Cell content extraction for generated tables.

A cell renders as: one glyph per icon, then each link as ``[text](href)``,
then whatever plain text is left once icon and link text are taken out.
"""

from bs4 import Tag

from ai_readable.document.model import Document
from ai_readable.tables.patterns import DEFAULT_ICON_GLYPH, ICON_GLYPHS, ICON_SELECTOR
from ai_readable.text.normalize import clean_text


def icon_glyph(icon: Tag) -> str:
    """Map an icon node to a glyph using hints in its markup (class, id, path names)."""
    hint = str(icon).lower()
    for hints, glyph in ICON_GLYPHS:
        if any(word in hint for word in hints):
            return glyph
    return DEFAULT_ICON_GLYPH


def extract_cell_content(cell: Tag, document: Document) -> str:
    """Return the cell's icons, links and remaining text as one cleaned string."""
    parts: list[str] = []
    remaining = Document.text(cell)

    for icon in Document.outermost(cell.select(ICON_SELECTOR)):
        parts.append(icon_glyph(icon))
        icon_text = Document.text(icon)
        if icon_text:
            remaining = remaining.replace(icon_text, "", 1)

    for link in cell.select("a"):
        raw_text = Document.text(link)
        text = clean_text(raw_text)
        if not text:
            continue
        href = document.resolve_href(link)
        parts.append(f"[{text}]({href})" if href else text)
        remaining = remaining.replace(raw_text, "", 1)

    plain = clean_text(remaining)
    if plain:
        parts.append(plain)
    return " ".join(parts)
