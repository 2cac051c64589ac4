"""Assemble the AI-readable text view of a page.

Section order is fixed:
  1. navigation    -- brand, nav links, CTAs
  2. main content  -- heading walk with table markers resolved in place
  3. footer        -- footer links, only when there are any

Sparse pages get a last-resort pass that collects any visible text.

Usage:
  python -m ai_readable.content.assemble page.html --url https://example.com/ -o page.txt
"""

import argparse
import logging
import sys
from pathlib import Path

from ai_readable import config
from ai_readable.content.context import ExtractionContext
from ai_readable.content.headings import walk_headings
from ai_readable.content.markers import resolve_markers
from ai_readable.content.navigation import extract_navigation, get_footer_links
from ai_readable.document.model import Document
from ai_readable.tables.pipeline import extract_tables
from ai_readable.text.normalize import clean_text

logger = logging.getLogger(__name__)

# Below this many output lines the page counts as nearly empty
MIN_CONTENT_ITEMS = 5

FALLBACK_SELECTOR = "p, div, span, h1, h2, h3, h4, h5, h6, li, td, th"
FALLBACK_MIN_LENGTH = 15
FALLBACK_MAX_LENGTH = 500
MAX_FALLBACK_ITEMS = 10

NAVIGATION_GAP = 3
FOOTER_GAP = 3


def section_divider(name: str) -> str:
    return f'<div class="section-divider"><!-- {name} --></div>'


def extract_fallback_content(document: Document, context: ExtractionContext) -> list[str]:
    """Up to MAX_FALLBACK_ITEMS visible, unseen text blocks of reasonable length."""
    content: list[str] = []
    for element in document.select(FALLBACK_SELECTOR):
        if len(content) >= MAX_FALLBACK_ITEMS:
            break
        try:
            if context.is_processed(element):
                continue
            text = clean_text(Document.text(element))
            if not FALLBACK_MIN_LENGTH < len(text) < FALLBACK_MAX_LENGTH or context.has_text(text):
                continue
            if not Document.is_visible(element):
                continue
            content.append(text)
            context.mark_processed(element)
            context.record_text(text)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.warning("Skipping fallback element <%s>: %s", element.name, exc)
    return content


def translate_website(document: Document, section_dividers: bool | None = None) -> str:
    """Return the full AI-readable text for *document*."""
    if section_dividers is None:
        section_dividers = config.SECTION_DIVIDERS
    context = ExtractionContext()
    result: list[str] = [""]

    # ── 1. Navigation ────────────────────────────────────────────────────
    navigation = extract_navigation(document)
    if section_dividers:
        result.append(section_divider("NAVIGATION"))
    if navigation.brand:
        result.append(f'<span class="brand-name">{navigation.brand}</span>')
    result.extend(navigation.links)
    result.extend(navigation.ctas)
    result.extend([""] * NAVIGATION_GAP)

    # ── 2. Main content: walk headings, then fill table markers ─────────
    segments = walk_headings(document, context)
    pool = extract_tables(document)
    if section_dividers:
        result.append(section_divider("MAIN CONTENT"))
    result.extend(resolve_markers(segments, context.markers, pool))

    # ── 3. Footer ────────────────────────────────────────────────────────
    footer = get_footer_links(document)
    if footer:
        result.extend([""] * FOOTER_GAP)
        if section_dividers:
            result.append(section_divider("FOOTER"))
        result.extend(footer)

    if len(result) < MIN_CONTENT_ITEMS:
        logger.info("Sparse page (%d lines); collecting fallback text", len(result))
        result.extend(extract_fallback_content(document, context))

    result.append("")
    return "\n".join(result)


def translate_html(html: str, url: str | None = None) -> str:
    """Parse *html* and translate it."""
    return translate_website(Document(html, url))


def main() -> int:
    parser = argparse.ArgumentParser(description="Convert a saved web page into AI-readable text.")
    parser.add_argument("html_path", help="Path to the saved HTML page")
    parser.add_argument("--url", default=None, help="URL the page was loaded from (resolves relative links)")
    parser.add_argument("--output", "-o", default=None, help="Write here instead of stdout")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    html_path = Path(args.html_path)
    if not html_path.exists():
        logger.error("File not found: %s", html_path)
        return 1

    html = html_path.read_text(encoding="utf-8", errors="replace")
    text = translate_html(html, args.url)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")
        logger.info("Wrote %d characters to %s", len(text), output_path)
    else:
        sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
