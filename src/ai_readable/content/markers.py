"""Resolve deferred table markers against the extracted table pool.

For each marker, in output order, the first rule that finds a candidate wins:

  1. the candidate extracted from the very node that was deferred
  2. a candidate extracted from inside that node
  3. a candidate whose text contains the marker's heading (case and
     punctuation ignored)
  4. the remaining candidate from the highest-priority strategy

The chosen candidate leaves the pool, so no table is emitted twice.  A marker
with nothing left to claim stays in the output as its literal token.
"""

import logging
import re

from ai_readable.content.context import MARKER_TOKEN, MarkerEntry, MarkerRegistry, Segment, TextSegment
from ai_readable.tables.schema import TableCandidate

logger = logging.getLogger(__name__)

_NON_ALNUM_RE = re.compile(r"[\W_]+")


def normalize_for_match(text: str) -> str:
    return _NON_ALNUM_RE.sub("", text.lower())


def _is_inside(candidate: TableCandidate, entry: MarkerEntry) -> bool:
    if candidate.source is None or entry.source is None:
        return False
    return any(parent is entry.source for parent in candidate.source.parents)


def find_candidate(entry: MarkerEntry, pool: list[TableCandidate]) -> TableCandidate | None:
    """Pick the pool candidate for *entry* without removing it."""
    if not pool:
        return None

    if entry.source is not None:
        for candidate in pool:
            if candidate.source is entry.source:
                return candidate
        for candidate in pool:
            if _is_inside(candidate, entry):
                return candidate

    anchor = normalize_for_match(entry.anchor_text or "")
    if anchor:
        for candidate in pool:
            if anchor in normalize_for_match(candidate.content):
                return candidate

    # min() keeps the first of equal priorities, i.e. discovery order
    return min(pool, key=lambda candidate: candidate.priority)


def resolve_markers(segments: list[Segment], registry: MarkerRegistry, pool: list[TableCandidate]) -> list[str]:
    """Turn the segment stream into output lines, consuming pool candidates."""
    lines: list[str] = []
    resolved = 0
    unresolved = 0

    for segment in segments:
        if isinstance(segment, TextSegment):
            lines.append(segment.text)
            continue

        entry = registry.get(segment.marker_id)
        candidate = find_candidate(entry, pool) if entry is not None else None
        if candidate is None:
            lines.append(MARKER_TOKEN.format(marker_id=segment.marker_id))
            unresolved += 1
            continue

        pool.remove(candidate)
        lines.append(candidate.content)
        resolved += 1

    logger.info("Markers: %d resolved, %d left as tokens", resolved, unresolved)
    if pool:
        logger.info("Discarding %d unclaimed table(s)", len(pool))
    return lines
