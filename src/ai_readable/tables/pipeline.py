"""Table extraction waterfall.

Runs every strategy over the whole document, in priority order, and pools the
results.  A later candidate whose rendered text is byte-identical to one
already pooled is dropped.  The comparison is exact on purpose: two tables
that differ only in whitespace or case both survive.
"""

import logging

from ai_readable.document.model import Document
from ai_readable.tables.patterns import MAX_CUSTOM_TABLES
from ai_readable.tables.schema import TableCandidate
from ai_readable.tables.strategies import (
    extract_chart_tables,
    extract_custom_tables,
    extract_preformatted_tables,
    extract_structural_tables,
)

logger = logging.getLogger(__name__)

# (name, strategy, max candidates accepted from it)
STRATEGIES = (
    ("preformatted", extract_preformatted_tables, None),
    ("structural", extract_structural_tables, None),
    ("chart", extract_chart_tables, None),
    ("custom", extract_custom_tables, MAX_CUSTOM_TABLES),
)


def extract_tables(document: Document) -> list[TableCandidate]:
    """Return the deduplicated candidate pool, ordered by strategy then discovery."""
    pool: list[TableCandidate] = []
    seen_content: set[str] = set()

    for name, strategy, limit in STRATEGIES:
        accepted = 0
        for candidate in strategy(document):
            if limit is not None and accepted >= limit:
                break
            if candidate.content in seen_content:
                logger.debug("Dedup: dropping repeated %s table", name)
                continue
            seen_content.add(candidate.content)
            pool.append(candidate)
            accepted += 1
        logger.info("Strategy %s contributed %d table(s)", name, accepted)

    logger.info("Table pool holds %d candidate(s)", len(pool))
    return pool
