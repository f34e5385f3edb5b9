"""
Jupiter instruction payload decoding.

Recovers swap amounts from instruction data by discriminator dispatch,
with a heuristic scan for unknown layouts. Never raises on payload bytes.
"""

from jupiter_dex.decoder.swap_decoder import (
    EXACT_OUT_ROUTE_DISCRIMINATOR,
    MAX_REASONABLE_AMOUNT,
    MIN_VALID_AMOUNT,
    ROUTE_DISCRIMINATOR,
    SENTINEL,
    SHARED_ACCOUNTS_EXACT_OUT_ROUTE_DISCRIMINATOR,
    SHARED_ACCOUNTS_ROUTE_DISCRIMINATOR,
    SwapAmounts,
    decode_swap,
    extract_mints_from_accounts,
    register_decoder,
    unregister_decoder,
)

__all__ = [
    "EXACT_OUT_ROUTE_DISCRIMINATOR",
    "MAX_REASONABLE_AMOUNT",
    "MIN_VALID_AMOUNT",
    "ROUTE_DISCRIMINATOR",
    "SENTINEL",
    "SHARED_ACCOUNTS_EXACT_OUT_ROUTE_DISCRIMINATOR",
    "SHARED_ACCOUNTS_ROUTE_DISCRIMINATOR",
    "SwapAmounts",
    "decode_swap",
    "extract_mints_from_accounts",
    "register_decoder",
    "unregister_decoder",
]
