"""
Jupiter DEX: block-level swap extraction and analytics for Solana.

Filters Jupiter program instructions out of ledger blocks, decodes swap
amounts from instruction payloads, enriches referenced accounts with
ownership context, and rolls the result into per-block analytics and
SQL sink rows. Every stage is a pure function of the block it is given.
"""

__version__ = "0.1.0"
