"""Whitespace/character cleanup and inline markdown link rendering.

``clean_text`` is applied to every string that reaches the output.  Link
substitution runs in a single pass over the raw text so that inserted link
markup is never matched again, and only the plain-text segments between links
are stripped of disallowed characters.
"""

import re

from bs4 import Tag

from ai_readable.document.model import Document
from ai_readable.tables.detection import is_table_related

# ─── Patterns ─────────────────────────────────────────────────────────────────

_WHITESPACE_RE = re.compile(r"\s+")

# Everything except word characters, whitespace and - . , ! ? ( ) | @ + % / : [ ]
_DISALLOWED_RE = re.compile(r"[^\w\s\-.,!?()|@+%/:\[\]]")

_NEWLINES_RE = re.compile(r"\n+")

# Anchors a site marks as hidden from machine readers are not linkified
LINK_SELECTOR = "a[href]:not(.machine\\:hidden)"

# Spans carrying a duplicate, pre-rendered markdown copy of the content
HIDDEN_MARKDOWN_SELECTOR = "span.not-machine\\:hidden"


# ─── Cleaning ─────────────────────────────────────────────────────────────────


def clean_text(raw: str | None) -> str:
    """Trim, collapse whitespace, and drop characters outside the allowed set."""
    if not raw:
        return ""
    text = raw.strip()
    text = _WHITESPACE_RE.sub(" ", text)
    text = _DISALLOWED_RE.sub("", text)
    return _NEWLINES_RE.sub(" ", text)


def _clean_fragment(raw: str) -> str:
    """clean_text without the trim, for text that sits between two links."""
    return _DISALLOWED_RE.sub("", _WHITESPACE_RE.sub(" ", raw))


# ─── Links ────────────────────────────────────────────────────────────────────


def markdown_link(text: str, href: str, document: Document, mark_cross_origin: bool = True) -> str:
    """Render ``[text](href)``; cross-origin targets get a ``$`` before the URL."""
    if mark_cross_origin and not document.is_same_origin(href):
        return f"[{text}](${href})"
    return f"[{text}]({href})"


def substitute_links(text: str, replacements: dict[str, str]) -> str:
    """Replace every literal occurrence of each key with its link markup, then clean.

    Longer anchor texts win when two of them overlap.
    """
    keys = [key for key in replacements if key.strip()]
    if not keys:
        return clean_text(text)

    keys.sort(key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(key) for key in keys))

    pieces: list[str] = []
    last = 0
    for match in pattern.finditer(text):
        pieces.append(_clean_fragment(text[last : match.start()]))
        pieces.append(replacements[match.group(0)])
        last = match.end()
    pieces.append(_clean_fragment(text[last:]))
    return "".join(pieces).strip()


def extract_text_with_links(node: Tag, document: Document) -> str | None:
    """Return the node's cleaned text with its anchors rendered as markdown links.

    Returns None for table-related nodes: their content belongs to table
    extraction and must not also be emitted as prose.
    """
    if is_table_related(node):
        return None

    text = Document.text(node)
    for span in node.select(HIDDEN_MARKDOWN_SELECTOR):
        span_text = Document.text(span)
        if span_text:
            text = text.replace(span_text, "", 1)

    # First anchor with a given text decides the markup for every occurrence
    replacements: dict[str, str] = {}
    for link in node.select(LINK_SELECTOR):
        raw_text = Document.text(link)
        href = document.resolve_href(link)
        if not raw_text.strip() or href is None:
            continue
        replacements.setdefault(raw_text, markdown_link(clean_text(raw_text), href, document))

    return substitute_links(text, replacements)
