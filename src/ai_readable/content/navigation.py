"""Brand name, navigation links, calls-to-action, and footer links."""

import logging
from dataclasses import dataclass, field

from ai_readable.document.model import Document
from ai_readable.text.normalize import clean_text

logger = logging.getLogger(__name__)

# ─── Selectors & Vocabularies ────────────────────────────────────────────────

# Tried in order; the first match with text wins
BRAND_SELECTORS = (
    "h1",
    ".logo",
    ".brand",
    ".site-title",
    '[class*="logo"]',
    '[class*="brand"]',
    "header h1",
    "nav h1",
    ".navbar-brand",
    ".site-logo",
    ".company-name",
    ".brand-name",
)

NAV_LINK_SELECTOR = "nav a, header a, .nav a, .menu a, .navigation a"

# Lower-cased link text containing any of these is housekeeping, not navigation
SKIP_LINK_PATTERNS = ("cookie", "privacy", "terms", "login", "sign up", "cart")

CTA_SELECTORS = (
    "button",
    ".btn",
    ".cta",
    '[role="button"]',
    ".button",
    ".call-to-action",
    ".primary-button",
)

CTA_PATTERNS = (
    "start",
    "get",
    "try",
    "sign up",
    "download",
    "learn more",
    "contact",
    "build",
    "create",
    "join",
    "register",
    "subscribe",
    "book",
    "schedule",
    "buy",
    "purchase",
    "order",
    "shop",
    "explore",
    "discover",
    "find out",
    "request",
    "apply",
    "submit",
    "send",
    "call",
    "email",
    "demo",
)

MAX_NAV_LINKS = 10
MAX_CTAS = 3
MAX_FOOTER_LINKS = 20


@dataclass
class NavigationData:
    brand: str | None = None
    links: list[str] = field(default_factory=list)
    ctas: list[str] = field(default_factory=list)


# ─── Extractors ──────────────────────────────────────────────────────────────


def get_brand_name(document: Document) -> str | None:
    """Upper-cased brand from the first matching selector, else from the page title."""
    for selector in BRAND_SELECTORS:
        element = document.select_one(selector)
        if element is None:
            continue
        brand = clean_text(Document.text(element))
        if brand:
            return brand.upper()

    # "Acme | Home" or "Acme - Home" -> "ACME"
    title = document.title.split("|")[0].split("-")[0]
    brand = clean_text(title).upper()
    return brand or None


def should_skip_link(text: str) -> bool:
    lowered = text.lower()
    return any(pattern in lowered for pattern in SKIP_LINK_PATTERNS)


def get_navigation_links(document: Document) -> list[str]:
    """Up to MAX_NAV_LINKS ``[text](href)`` links from header/nav menus, in document order."""
    links: list[str] = []
    for link in document.select(NAV_LINK_SELECTOR):
        raw_text = Document.text(link)
        href = document.resolve_href(link)
        if not raw_text.strip() or href is None or should_skip_link(raw_text):
            continue
        links.append(f"[{clean_text(raw_text)}]({href})")
        if len(links) >= MAX_NAV_LINKS:
            break
    return links


def is_cta(text: str) -> bool:
    lowered = text.lower()
    return any(pattern in lowered for pattern in CTA_PATTERNS)


def get_primary_ctas(document: Document) -> list[str]:
    """Up to MAX_CTAS highlighted calls-to-action, selector by selector."""
    ctas: list[str] = []
    seen: set[int] = set()
    for selector in CTA_SELECTORS:
        for element in document.select(selector):
            # An element matching several selectors counts once
            if id(element) in seen:
                continue
            seen.add(id(element))
            raw_text = Document.text(element)
            if not raw_text.strip() or not is_cta(raw_text):
                continue
            text = clean_text(raw_text)
            href = document.resolve_href(element)
            label = f"[{text}]({href})" if href else f"[{text}]"
            ctas.append(f'<span class="cta-highlight">{label}</span>')
            if len(ctas) >= MAX_CTAS:
                return ctas
    return ctas


def extract_navigation(document: Document) -> NavigationData:
    navigation = NavigationData(
        brand=get_brand_name(document),
        links=get_navigation_links(document),
        ctas=get_primary_ctas(document),
    )
    logger.info(
        "Navigation: brand=%r, %d link(s), %d CTA(s)", navigation.brand, len(navigation.links), len(navigation.ctas)
    )
    return navigation


def get_footer_links(document: Document) -> list[str]:
    """Up to MAX_FOOTER_LINKS ``[text](href)`` links from the first ``<footer>``."""
    footer = document.select_one("footer")
    if footer is None:
        return []
    links: list[str] = []
    for link in document.select("a", scope=footer):
        raw_text = Document.text(link)
        href = document.resolve_href(link)
        if not raw_text.strip() or href is None:
            continue
        links.append(f"[{clean_text(raw_text)}]({href})")
        if len(links) >= MAX_FOOTER_LINKS:
            break
    return links
