"""AI-mode control layer: toggle state, page snapshot/restore, and the message protocol.

A ``WebsiteTranslator`` is bound to one ``Page``.  Enabling waits (briefly)
for the page to finish loading, snapshots it, translates it, and swaps the
body for the AI view.  Disabling puts the snapshot back.  Both directions are
idempotent.

Overlapping requests: an enable that arrives while another enable is still
waiting is coalesced (the flag is already set, so it returns at once).  A
disable during that wait wins; the waiting enable then leaves the page alone.
If enable is requested again before the load finishes, only that newest
request snapshots and mounts the view.
"""

import asyncio
import logging

from bs4 import BeautifulSoup
from pydantic import BaseModel, ValidationError

from ai_readable import config
from ai_readable.content.assemble import translate_website
from ai_readable.document.model import Document

logger = logging.getLogger(__name__)

TOGGLE_ACTION = "toggleAIMode"


# ─── Protocol ────────────────────────────────────────────────────────────────


class ToggleRequest(BaseModel):
    action: str
    enabled: bool


class ToggleResponse(BaseModel):
    success: bool
    error: str | None = None


# ─── Page ────────────────────────────────────────────────────────────────────


class Page:
    """A loaded (or still loading) HTML page that the AI view is mounted onto."""

    def __init__(self, html: str, url: str | None = None, loaded: bool = True):
        self.html = html
        self.url = url
        self.ready_state = "complete" if loaded else "loading"
        self._load_event = asyncio.Event()
        if loaded:
            self._load_event.set()

    @property
    def title(self) -> str:
        return Document(self.html).title

    def mark_loaded(self, html: str | None = None) -> None:
        """Signal load completion, optionally with the fully rendered html."""
        if html is not None:
            self.html = html
        self.ready_state = "complete"
        self._load_event.set()

    async def wait_until_loaded(self) -> None:
        await self._load_event.wait()


def render_ai_view(page_html: str, translated: str) -> tuple[str, str]:
    """Replace the body of *page_html* with the AI container; return (page html, container html)."""
    soup = BeautifulSoup(page_html or "", "lxml")
    body = soup.body
    if body is None:
        body = soup.new_tag("body")
        (soup.html or soup).append(body)
    body.clear()

    container = soup.new_tag("div", attrs={"class": "ai-readable-container"})
    content = soup.new_tag("div", attrs={"class": "ai-content"})
    markdown = soup.new_tag("div", attrs={"class": "ai-markdown"})
    # Parsed as markup so the brand/CTA spans render as elements
    markdown.append(BeautifulSoup(translated, "html.parser"))
    content.append(markdown)
    container.append(content)
    body.append(container)
    return str(soup), str(container)


# ─── Translator ──────────────────────────────────────────────────────────────


class WebsiteTranslator:
    """Owns the AI-mode flag and the original-content snapshot for one page."""

    def __init__(self, page: Page, timeout: float | None = None):
        self.page = page
        self.timeout = config.DYNAMIC_CONTENT_TIMEOUT if timeout is None else timeout
        self.is_active = False
        self.original_content: dict[str, str] | None = None
        self.ai_container: str | None = None
        self.translated: str | None = None
        # Bumped by every enable that starts waiting; only the latest may mount
        self._generation = 0

    @property
    def status(self) -> str:
        return "AI Mode: On" if self.is_active else "AI Mode: Off"

    async def handle_message(self, request: dict) -> dict:
        """Answer a ``{"action": "toggleAIMode", "enabled": bool}`` request."""
        try:
            message = ToggleRequest.model_validate(request)
        except ValidationError as exc:
            return ToggleResponse(success=False, error=str(exc)).model_dump(exclude_none=True)

        if message.action != TOGGLE_ACTION:
            return ToggleResponse(success=False, error=f"Unknown action: {message.action}").model_dump(exclude_none=True)

        if message.enabled:
            try:
                await self.enable_ai_mode()
            except Exception as exc:  # pylint: disable=broad-exception-caught
                logger.error("Error enabling AI mode: %s", exc)
                return ToggleResponse(success=False, error=str(exc)).model_dump(exclude_none=True)
        else:
            self.disable_ai_mode()
        return ToggleResponse(success=True).model_dump(exclude_none=True)

    async def enable_ai_mode(self) -> None:
        if self.is_active:
            return
        self.is_active = True
        self._generation += 1
        generation = self._generation

        await self.wait_for_dynamic_content()
        if not self.is_active:
            logger.info("AI mode was switched off while the page was loading; leaving the page as is")
            return
        if generation != self._generation:
            logger.info("A later enable request superseded this one")
            return

        self.save_original_content()
        try:
            self.create_ai_view()
        except Exception:
            self.is_active = False
            self.restore_original_content()
            raise

    def disable_ai_mode(self) -> None:
        if not self.is_active:
            return
        self.is_active = False
        self.restore_original_content()

    async def wait_for_dynamic_content(self) -> None:
        """Return once the page has loaded, or after ``timeout`` seconds, whichever is first."""
        if self.page.ready_state == "complete":
            return
        try:
            await asyncio.wait_for(self.page.wait_until_loaded(), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.info("Page still loading after %.1fs; translating what is there", self.timeout)

    def save_original_content(self) -> None:
        self.original_content = {"html": self.page.html, "title": self.page.title}

    def restore_original_content(self) -> None:
        if self.original_content is not None:
            self.page.html = self.original_content["html"]
            self.original_content = None
        self.ai_container = None
        self.translated = None

    def create_ai_view(self) -> None:
        """Translate the page before clearing it, then mount the AI container."""
        self.translated = translate_website(Document(self.page.html, self.page.url))
        self.page.html, self.ai_container = render_ai_view(self.page.html, self.translated)
        logger.info("AI view mounted (%d characters of text)", len(self.translated))
