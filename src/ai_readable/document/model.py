"""Read-only view over a parsed HTML page.

Wraps a BeautifulSoup tree (lxml parser) and exposes the handful of
capabilities the extractors rely on: CSS queries, document order, text and
attribute reads, link resolution, and approximations of rendered box size and
computed visibility.  Nodes are plain ``bs4.Tag`` objects and are never
mutated here.
"""

import re
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from ai_readable import config

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

# "width: 320px" / "height:40.5px" inside an inline style attribute
_STYLE_DIMENSION_RE = re.compile(r"(?:^|;)\s*(width|height)\s*:\s*(\d+(?:\.\d+)?)\s*px", re.IGNORECASE)

# "display: none", "visibility: hidden", "opacity: 0" inside an inline style attribute
_STYLE_HIDDEN_RE = re.compile(
    r"(?:^|;)\s*(?:display\s*:\s*none|visibility\s*:\s*hidden|opacity\s*:\s*0(?:\.0+)?\s*(?:;|$))",
    re.IGNORECASE,
)

_NUMBER_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)")


def _parse_number(raw) -> float | None:
    """Return the leading number in an attribute value such as ``"300"`` or ``"300px"``."""
    if raw is None:
        return None
    match = _NUMBER_RE.match(str(raw))
    return float(match.group(1)) if match else None


class Document:
    """A parsed page plus the URL it was loaded from."""

    def __init__(self, html: str, url: str | None = None):
        self.soup = BeautifulSoup(html or "", "lxml")
        self.url = url
        self._positions: dict[int, int] | None = None

    # ─── Queries ────────────────────────────────────────────────────────────

    @property
    def root(self) -> Tag:
        """The ``<body>`` element, or the whole tree when there is none."""
        return self.soup.body or self.soup

    @property
    def title(self) -> str:
        title_tag = self.soup.select_one("head > title") or self.soup.find("title")
        return title_tag.get_text() if title_tag else ""

    def select(self, selector: str, scope: Tag | None = None) -> list[Tag]:
        return (scope if scope is not None else self.soup).select(selector)

    def select_one(self, selector: str, scope: Tag | None = None) -> Tag | None:
        return (scope if scope is not None else self.soup).select_one(selector)

    def headings(self) -> list[Tag]:
        """All h1-h6 elements in document order."""
        return self.soup.find_all(HEADING_TAGS)

    def position(self, node: Tag) -> int:
        """Pre-order index of *node*; unknown nodes sort last."""
        if self._positions is None:
            self._positions = {id(tag): idx for idx, tag in enumerate(self.soup.find_all(True))}
        return self._positions.get(id(node), len(self._positions))

    def sort_in_document_order(self, nodes: list[Tag]) -> list[Tag]:
        return sorted(nodes, key=self.position)

    @staticmethod
    def outermost(nodes: list[Tag]) -> list[Tag]:
        """Drop nodes that sit inside another node of the same list."""
        node_ids = {id(node) for node in nodes}
        return [node for node in nodes if not any(id(parent) in node_ids for parent in node.parents)]

    @staticmethod
    def closest(node: Tag, names: tuple[str, ...]) -> Tag | None:
        """The node itself or its nearest ancestor whose tag is one of *names*."""
        if Document.tag_name(node) in names:
            return node
        return node.find_parent(list(names))

    # ─── Node reads ─────────────────────────────────────────────────────────

    @staticmethod
    def text(node: Tag) -> str:
        """Raw text content of *node* and all its descendants."""
        return node.get_text()

    @staticmethod
    def class_string(node: Tag) -> str:
        """Space-joined class list, like a DOM element's ``className``."""
        classes = node.get("class") or []
        if isinstance(classes, str):
            return classes
        return " ".join(classes)

    @staticmethod
    def tag_name(node: Tag) -> str:
        return (node.name or "").lower()

    # ─── Links ──────────────────────────────────────────────────────────────

    def resolve_href(self, node: Tag) -> str | None:
        """Absolute URL for the node's ``href``, or None when it has none."""
        href = node.get("href")
        if not href or not str(href).strip():
            return None
        href = str(href).strip()
        return urljoin(self.url, href) if self.url else href

    def is_same_origin(self, href: str) -> bool:
        """True when *href* points at the page's own host."""
        target_host = urlparse(href).hostname
        if not self.url:
            return target_host is None
        return target_host is None or target_host == urlparse(self.url).hostname

    # ─── Layout approximations ──────────────────────────────────────────────

    def box_size(self, node: Tag) -> tuple[float, float]:
        """Approximate rendered (width, height) of *node* in pixels.

        Reads inline style, then width/height attributes, then data-width /
        data-height; anything still missing is estimated from the viewport
        width and the node's line count.
        """
        dims: dict[str, float] = {}
        for name, value in _STYLE_DIMENSION_RE.findall(node.get("style") or ""):
            dims.setdefault(name.lower(), float(value))
        for name in ("width", "height"):
            if name in dims:
                continue
            for attr in (name, f"data-{name}"):
                value = _parse_number(node.get(attr))
                if value is not None:
                    dims[name] = value
                    break

        if "width" not in dims:
            dims["width"] = float(config.VIEWPORT_WIDTH)
        if "height" not in dims:
            lines = [line for line in node.get_text("\n").split("\n") if line.strip()]
            dims["height"] = float(config.LINE_HEIGHT * max(1, len(lines)))
        return dims["width"], dims["height"]

    @staticmethod
    def is_visible(node: Tag) -> bool:
        """False if the node or an ancestor is hidden via attribute or inline style."""
        current = node
        while isinstance(current, Tag) and current.name != "[document]":
            if current.has_attr("hidden"):
                return False
            if _STYLE_HIDDEN_RE.search(current.get("style") or ""):
                return False
            current = current.parent
        return True
