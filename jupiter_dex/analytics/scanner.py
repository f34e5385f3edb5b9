"""
Instruction scanner: walk a block and yield Jupiter instructions.

Walks transactions in block order and instructions in program-call order
(outer, then its inner instructions), keeping only those whose program
passes is_jupiter_program.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from jupiter_dex.constants import is_jupiter_program
from jupiter_dex.solana_listener.models import Block, Instruction


@dataclass(frozen=True)
class ScannedInstruction:
    """A Jupiter instruction with its transaction and block context."""

    transaction_id: str
    slot: int
    block_time: int
    instruction: Instruction


def scan_block(block: Block) -> Iterator[ScannedInstruction]:
    """Yield every Jupiter instruction in the block, in call order."""
    block_time = block.timestamp
    for trx in block.transactions:
        for instruction in trx.walk_instructions():
            if not is_jupiter_program(instruction.program_id):
                continue
            yield ScannedInstruction(
                transaction_id=trx.id,
                slot=block.slot,
                block_time=block_time,
                instruction=instruction,
            )
