"""Document-order heading walk with deferred table markers.

Each heading becomes a markdown heading followed by up to
MAX_ASSOCIATED_ITEMS of the paragraphs and lists that follow it as siblings.
Table-related nodes found along the way are not rendered here; a marker is
registered in their place and resolved once the table pool exists.  Pages
without usable headings fall back to a document-wide paragraph scan.
"""

import logging

from bs4 import Tag

from ai_readable.content.context import (
    ExtractionContext,
    MarkerKind,
    Segment,
    TextSegment,
    marker_segments,
)
from ai_readable.document.model import HEADING_TAGS, Document
from ai_readable.tables.detection import has_table_class, is_table_related
from ai_readable.text.normalize import clean_text, extract_text_with_links

logger = logging.getLogger(__name__)

PARAGRAPH_TAGS = ("p", "div")
LIST_TAGS = ("ul", "ol")

# A div containing any of these is a layout wrapper, not a paragraph
BLOCK_TAGS = ("p", "div", "ul", "ol", "table", "section", "article", "pre") + HEADING_TAGS

# Page chrome is covered by the navigation and footer sections
CHROME_TAGS = ("nav", "header", "footer")

# Blank lines before a heading (only once something has been emitted)
MAJOR_HEADING_GAP = 3
MINOR_HEADING_GAP = 1

MAX_ASSOCIATED_ITEMS = 5
MIN_ASSOCIATED_LENGTH = 10
MIN_FALLBACK_PARAGRAPH_LENGTH = 20


def is_heading(node: Tag) -> bool:
    return Document.tag_name(node) in HEADING_TAGS


def heading_level(node: Tag) -> int:
    return int(Document.tag_name(node)[1])


def render_list(list_node: Tag) -> str:
    """``- item`` per list item, one per line."""
    lines = []
    for item in list_node.find_all("li"):
        text = clean_text(Document.text(item))
        if text:
            lines.append("- " + text)
    return "\n".join(lines)


# ─── Heading Walk ────────────────────────────────────────────────────────────


def _associated_content(
    heading: Tag, heading_text: str, document: Document, context: ExtractionContext
) -> list[Segment]:
    """Paragraphs, lists and table markers from the siblings that follow *heading*."""
    segments: list[Segment] = []
    accepted = 0

    for sibling in heading.find_next_siblings():
        if accepted >= MAX_ASSOCIATED_ITEMS or is_heading(sibling):
            break
        if context.is_processed(sibling):
            continue

        try:
            name = Document.tag_name(sibling)
            if is_table_related(sibling):
                entry = context.markers.register(MarkerKind.ASSOCIATED, source=sibling, anchor_text=heading_text)
                segments.extend(marker_segments(entry))
                context.mark_processed(sibling)
                accepted += 1

            elif name in PARAGRAPH_TAGS:
                text = extract_text_with_links(sibling, document)
                if text is not None and len(text) > MIN_ASSOCIATED_LENGTH and not context.has_text(text):
                    segments.extend([TextSegment(""), TextSegment(text)])
                    context.mark_processed(sibling)
                    context.record_text(text)
                    accepted += 1

            elif name in LIST_TAGS:
                text = render_list(sibling)
                if text and not context.has_text(text):
                    segments.extend([TextSegment(""), TextSegment(text), TextSegment("")])
                    context.mark_processed(sibling)
                    context.record_text(text)
                    accepted += 1
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.warning("Skipping sibling <%s> of heading %r: %s", sibling.name, heading_text, exc)

    return segments


def _walk_heading(heading: Tag, document: Document, context: ExtractionContext, first: bool) -> list[Segment]:
    text = clean_text(Document.text(heading))
    if not text or context.has_text(text):
        return []

    # The marker stands in for the whole section
    if is_table_related(heading):
        entry = context.markers.register(MarkerKind.HEADING, source=heading, anchor_text=text)
        context.mark_processed(heading)
        return marker_segments(entry)

    level = heading_level(heading)
    segments: list[Segment] = []
    if not first:
        gap = MAJOR_HEADING_GAP if level <= 2 else MINOR_HEADING_GAP
        segments.extend(TextSegment("") for _ in range(gap))
    segments.append(TextSegment("#" * level + " " + text))
    context.mark_processed(heading)
    context.record_text(text)

    segments.extend(_associated_content(heading, text, document, context))
    return segments


def walk_headings(document: Document, context: ExtractionContext) -> list[Segment]:
    """Walk every unprocessed heading in document order and return the content stream."""
    headings = document.sort_in_document_order([h for h in document.headings() if not context.is_processed(h)])
    segments: list[Segment] = []

    for heading in headings:
        # An earlier sibling scan may have emitted the block this heading sits in
        if context.is_processed(heading):
            continue
        try:
            segments.extend(_walk_heading(heading, document, context, first=not segments))
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.warning("Skipping heading <%s>: %s", heading.name, exc)

    logger.info("Heading walk: %d heading(s), %d marker(s)", len(headings), len(context.markers))
    if not segments:
        logger.info("No heading content found; falling back to paragraph scan")
        segments = extract_paragraphs(document, context)
    return segments


# ─── No-Heading Fallback ─────────────────────────────────────────────────────


def _is_paragraph_like(node: Tag) -> bool:
    name = Document.tag_name(node)
    if name == "p":
        return True
    return name == "div" and node.find(BLOCK_TAGS) is None


def _inside_chrome_or_table(node: Tag) -> bool:
    for parent in node.parents:
        name = Document.tag_name(parent)
        if name in CHROME_TAGS or name == "table" or has_table_class(parent):
            return True
    return False


def extract_paragraphs(document: Document, context: ExtractionContext) -> list[Segment]:
    """Document-wide scan of paragraph-like nodes for pages whose headings yielded nothing."""
    segments: list[Segment] = []
    for node in document.select(", ".join(PARAGRAPH_TAGS)):
        try:
            if not _is_paragraph_like(node) or context.is_processed(node) or _inside_chrome_or_table(node):
                continue

            if is_table_related(node):
                entry = context.markers.register(MarkerKind.PARAGRAPH, source=node)
                segments.extend(marker_segments(entry))
                context.mark_processed(node)
                continue

            text = extract_text_with_links(node, document)
            if text and len(text) > MIN_FALLBACK_PARAGRAPH_LENGTH and not context.has_text(text):
                if segments:
                    segments.append(TextSegment(""))
                segments.append(TextSegment(text))
                context.mark_processed(node)
                context.record_text(text)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.warning("Skipping paragraph <%s>: %s", node.name, exc)
    return segments
