"""
Application-level exceptions.

Only structural faults in the input are raised. Decode misses and
unresolved account references are normal outcomes and never surface
as exceptions.
"""

from __future__ import annotations


class JupiterDexError(Exception):
    """Base class for all jupiter_dex errors."""

    code = "jupiter_dex_error"

    def __init__(self, message: str, **context: object) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, object]:
        return {"code": self.code, "message": self.message, **self.context}


class BlockStructureError(JupiterDexError):
    """
    Block input is malformed: missing slot/message, or an instruction
    references an account index outside the transaction's account keys.
    Aborts processing of the whole block.
    """

    code = "block_structure_error"


class SnapshotFormatError(JupiterDexError):
    """Ownership or price snapshot file is not a list of records."""

    code = "snapshot_format_error"
