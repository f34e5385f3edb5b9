"""
Configuration management for Jupiter DEX.

Loads settings from environment variables and an optional .env file.
Exposes a single source of truth for CLI and sink configuration.
"""

from jupiter_dex.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
