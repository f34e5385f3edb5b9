"""
Core utilities: exceptions and cross-cutting helpers shared by the
listener, decoder, analytics stages and sink.
"""

from jupiter_dex.core.exceptions import (
    BlockStructureError,
    JupiterDexError,
    SnapshotFormatError,
)

__all__ = ["BlockStructureError", "JupiterDexError", "SnapshotFormatError"]
