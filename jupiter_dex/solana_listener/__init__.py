"""
Solana block input package.

Ledger-side models (Block, Transaction, Instruction) and the parser that
turns getBlock-style JSON into them. Block delivery itself is external;
this package only normalizes what it is handed.
"""

from jupiter_dex.solana_listener.models import Block, Instruction, Transaction
from jupiter_dex.solana_listener.parser import load_block, parse_block

__all__ = [
    "Block",
    "Instruction",
    "Transaction",
    "load_block",
    "parse_block",
]
