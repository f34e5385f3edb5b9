"""
Environment variable loading for Jupiter DEX.

- LOG_LEVEL / LOG_FORMAT: consumed by jupiter_dex.dex_logging
- JUPITER_DATA_DIR: default directory for block and snapshot JSON files
- JUPITER_SINK_PROTOCOL: primary key of the global_metrics sink row
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

# Project root: config is jupiter_dex/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_SINK_PROTOCOL = "jupiter"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "json"


def load_jupiter_env() -> None:
    """Load .env from project root. Safe to call multiple times; existing env wins."""
    from dotenv import load_dotenv

    load_dotenv(_ENV_PATH, override=False)


def get_data_dir() -> Path:
    """Return JUPITER_DATA_DIR, or <project root>/data when unset."""
    load_jupiter_env()
    raw = (os.getenv("JUPITER_DATA_DIR") or "").strip()
    if raw:
        return Path(raw).expanduser()
    return _ROOT / "data"


def get_sink_protocol() -> str:
    """Return JUPITER_SINK_PROTOCOL; default 'jupiter'."""
    load_jupiter_env()
    return (os.getenv("JUPITER_SINK_PROTOCOL") or DEFAULT_SINK_PROTOCOL).strip() or DEFAULT_SINK_PROTOCOL


def get_log_level() -> str:
    load_jupiter_env()
    return (os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()


def get_log_format() -> str:
    """Return LOG_FORMAT: json | console."""
    load_jupiter_env()
    raw = (os.getenv("LOG_FORMAT") or DEFAULT_LOG_FORMAT).strip().lower()
    return raw if raw in ("json", "console") else DEFAULT_LOG_FORMAT
