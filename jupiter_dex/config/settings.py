"""
Application settings.

Typed, immutable view of the environment for the CLI and sink builder.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from jupiter_dex.config.env import (
    get_data_dir,
    get_log_format,
    get_log_level,
    get_sink_protocol,
)


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    sink_protocol: str
    log_level: str
    log_format: str


def get_settings() -> Settings:
    """Return the current application settings (re-read from env on each call)."""
    return Settings(
        data_dir=get_data_dir(),
        sink_protocol=get_sink_protocol(),
        log_level=get_log_level(),
        log_format=get_log_format(),
    )
