"""FastAPI web server for page translation and the AI-mode toggle.

Usage:
    python -m ai_readable.web.app
    # => Uvicorn running on http://localhost:8000
"""

import logging
import uuid

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ai_readable import config
from ai_readable.content.assemble import translate_html
from ai_readable.translator import Page, WebsiteTranslator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# In-memory state (lost on server restart)
# ---------------------------------------------------------------------------

_pages: dict[str, WebsiteTranslator] = {}  # page_id -> translator bound to that page


class TranslateRequest(BaseModel):
    html: str
    url: str | None = None


class PageRequest(BaseModel):
    html: str
    url: str | None = None
    loaded: bool = True


app = FastAPI(title="AI-Readable Web")


def _get_translator(page_id: str) -> WebsiteTranslator:
    translator = _pages.get(page_id)
    if translator is None:
        raise HTTPException(status_code=404, detail=f"Unknown page: {page_id}")
    return translator


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.post("/api/translate")
async def translate(body: TranslateRequest):
    """One-shot translation of an HTML document."""
    if not body.html.strip():
        raise HTTPException(status_code=400, detail="html is required")
    markdown = translate_html(body.html, body.url)
    logger.info("Translated %d characters of html into %d characters", len(body.html), len(markdown))
    return JSONResponse({"markdown": markdown})


@app.post("/api/pages")
async def create_page(body: PageRequest):
    """Register a page so it can be toggled in and out of AI mode."""
    page_id = str(uuid.uuid4())
    _pages[page_id] = WebsiteTranslator(Page(body.html, url=body.url, loaded=body.loaded))
    logger.info("Page registered: %s", page_id)
    return JSONResponse({"page_id": page_id})


@app.post("/api/pages/{page_id}/message")
async def page_message(page_id: str, body: dict):
    """Relay a control message (``{"action": "toggleAIMode", "enabled": bool}``)."""
    translator = _get_translator(page_id)
    return JSONResponse(await translator.handle_message(body))


@app.post("/api/pages/{page_id}/loaded")
async def page_loaded(page_id: str):
    """Signal that the page has finished loading."""
    translator = _get_translator(page_id)
    translator.page.mark_loaded()
    return JSONResponse({"ok": True})


@app.get("/api/pages/{page_id}")
async def get_page(page_id: str):
    """Current page html plus AI-mode status."""
    translator = _get_translator(page_id)
    return JSONResponse({"active": translator.is_active, "status": translator.status, "html": translator.page.html})


@app.delete("/api/pages/{page_id}")
async def delete_page(page_id: str):
    _get_translator(page_id)
    del _pages[page_id]
    logger.info("Page removed: %s", page_id)
    return JSONResponse({"ok": True})


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main():
    """Start the web server via uvicorn."""
    import uvicorn  # pylint: disable=import-outside-toplevel

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
