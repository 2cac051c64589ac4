"""Shared configuration for page translation and the AI-mode control layer."""

import os
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")


def _env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean flag such as ``1``/``true``/``yes`` from the environment."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# Seconds to wait for a still-loading page before translating anyway
DYNAMIC_CONTENT_TIMEOUT = float(os.getenv("AI_READABLE_DYNAMIC_TIMEOUT", "2.0"))

# Static HTML has no layout engine; these stand in for rendered box sizes
VIEWPORT_WIDTH = int(os.getenv("AI_READABLE_VIEWPORT_WIDTH", "1280"))
LINE_HEIGHT = int(os.getenv("AI_READABLE_LINE_HEIGHT", "24"))

# Emit <div class="section-divider"> comments between output sections
SECTION_DIVIDERS = _env_flag("AI_READABLE_SECTION_DIVIDERS")

# Web server bind address
HOST = os.getenv("AI_READABLE_HOST", "0.0.0.0")
PORT = int(os.getenv("AI_READABLE_PORT", "8000"))
