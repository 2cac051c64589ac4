"""Per-invocation extraction state and the typed output stream.

One ``ExtractionContext`` is created for each translation and threaded
through every stage; nothing here outlives that call.  Output is built as a
list of segments, either literal text lines or references to a deferred
table marker, so markers never have to be parsed back out of strings.
"""

from dataclasses import dataclass, field
from enum import Enum

from bs4 import Tag

MARKER_TOKEN = "[TABLE_MARKER:{marker_id}]"


class MarkerKind(str, Enum):
    """Where a marker was emitted from."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    ASSOCIATED = "associated"


@dataclass(eq=False)
class MarkerEntry:
    """A deferred table: the node that triggered it and the heading it sits under."""

    marker_id: int
    kind: MarkerKind
    source: Tag | None = None
    anchor_text: str | None = None

    @property
    def token(self) -> str:
        return MARKER_TOKEN.format(marker_id=self.marker_id)


@dataclass(frozen=True)
class TextSegment:
    text: str


@dataclass(frozen=True)
class MarkerSegment:
    marker_id: int


Segment = TextSegment | MarkerSegment


class MarkerRegistry:
    """Markers registered during the heading walk, keyed by a per-call sequential id."""

    def __init__(self):
        self._entries: dict[int, MarkerEntry] = {}
        self._next_id = 1

    def register(self, kind: MarkerKind, source: Tag | None = None, anchor_text: str | None = None) -> MarkerEntry:
        entry = MarkerEntry(marker_id=self._next_id, kind=kind, source=source, anchor_text=anchor_text)
        self._entries[entry.marker_id] = entry
        self._next_id += 1
        return entry

    def get(self, marker_id: int) -> MarkerEntry | None:
        return self._entries.get(marker_id)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries.values())


@dataclass
class ExtractionContext:
    """Everything already emitted in this translation, by node identity and by text."""

    processed_nodes: set[int] = field(default_factory=set)
    processed_texts: set[str] = field(default_factory=set)
    markers: MarkerRegistry = field(default_factory=MarkerRegistry)

    def mark_processed(self, node: Tag) -> None:
        self.processed_nodes.add(id(node))

    def is_processed(self, node: Tag) -> bool:
        """True if the node or any ancestor has already contributed output."""
        if id(node) in self.processed_nodes:
            return True
        return any(id(parent) in self.processed_nodes for parent in node.parents)

    def record_text(self, text: str) -> None:
        self.processed_texts.add(text)

    def has_text(self, text: str) -> bool:
        return text in self.processed_texts


def marker_segments(entry: MarkerEntry) -> list[Segment]:
    """A marker on its own line, with a blank line either side."""
    return [TextSegment(""), MarkerSegment(entry.marker_id), TextSegment("")]
