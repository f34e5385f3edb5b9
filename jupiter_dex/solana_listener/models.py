"""
Data models for ledger input.

Addresses are base58 strings; instruction payloads are raw bytes.
Instructions of a transaction are stored in call order: each outer
instruction is followed by the inner instructions it invoked.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Instruction:
    """One program invocation inside a transaction."""

    program_id: str
    accounts: list[str] = field(default_factory=list)
    data: bytes = b""


@dataclass(frozen=True)
class Transaction:
    """
    A transaction as delivered to the stages.

    id is the first signature (base58). Failed transactions are expected
    to be filtered upstream; stages tolerate them either way.
    """

    id: str
    instructions: list[Instruction] = field(default_factory=list)

    def walk_instructions(self):
        """Yield instructions in program-call order."""
        yield from self.instructions


@dataclass(frozen=True)
class Block:
    """A ledger block: slot, optional block time, ordered transactions."""

    slot: int
    block_time: int | None = None
    transactions: list[Transaction] = field(default_factory=list)

    @property
    def timestamp(self) -> int:
        """Block time in unix seconds; 0 when absent or negative."""
        if self.block_time is None:
            return 0
        return max(int(self.block_time), 0)
