from __future__ import annotations

import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_CONTENT_DIR = BASE_DIR / "blog-files"

HEADING_FALLBACK_MODES = ("random", "counter")

_TRUTHY = {"1", "true", "yes", "on"}


def content_dir() -> Path:
    return Path(os.getenv("FOLIO_CONTENT_DIR", str(DEFAULT_CONTENT_DIR))).expanduser()


def log_level() -> str:
    return os.getenv("FOLIO_LOG_LEVEL", "INFO").upper()


def skip_invalid_posts() -> bool:
    """Whether a listing skips unreadable files instead of failing as a whole."""
    return os.getenv("FOLIO_SKIP_INVALID_POSTS", "").strip().lower() in _TRUTHY


def heading_fallback() -> str:
    mode = os.getenv("FOLIO_HEADING_FALLBACK", "random").strip().lower()
    if mode not in HEADING_FALLBACK_MODES:
        raise ValueError(
            f"FOLIO_HEADING_FALLBACK must be one of {', '.join(HEADING_FALLBACK_MODES)}, got '{mode}'"
        )
    return mode


def ascii_heading_ids() -> bool:
    """Whether heading ids keep the older ASCII-only form (`ber-uns` for "Über uns")."""
    return os.getenv("FOLIO_ASCII_HEADING_IDS", "").strip().lower() in _TRUTHY
