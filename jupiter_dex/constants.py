"""
Jupiter program catalogue.

Single source of truth for Jupiter program addresses and the program
filter used by every stage.
"""

from __future__ import annotations

# SPL Token program (InitializeAccount instructions feed the ownership index)
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"

JUPITER_V6_PROGRAM_ID = "JUP6LkbZbjS1jKKwapdHNy74zcZ3tLUZoi5QNyVTaV4"
JUPITER_V4_PROGRAM_ID = "JUP4Fb2cqiRUcaTHdrPC8h2gNsA2ETXiPDD33WcGuJB"
JUPITER_V3_PROGRAM_ID = "JUP3c2Uh3WA4Ng34tw6kPd2G4C5BB21Xo36Je1s32Ph"
JUPITER_V2_PROGRAM_ID = "JUP2jxvXaqu7NQY1GmNF4m1vodw12LVXYxbFL2uJvfo"
JUPITER_LIMIT_ORDERS_PROGRAM_ID = "jupoNjAxXgZ4rjzxzPMP4oxduvQsQtZzyknqvzYNrNu"
JUPITER_DCA_PROGRAM_ID = "DCA265Vj8a9CEuX1eb1LWRnDT7uK6q1xMipnNyatn23M"

JUPITER_SWAP_PROGRAM_IDS = (
    JUPITER_V6_PROGRAM_ID,
    JUPITER_V4_PROGRAM_ID,
    JUPITER_V3_PROGRAM_ID,
    JUPITER_V2_PROGRAM_ID,
)

JUPITER_PROGRAM_IDS = JUPITER_SWAP_PROGRAM_IDS + (
    JUPITER_LIMIT_ORDERS_PROGRAM_ID,
    JUPITER_DCA_PROGRAM_ID,
)

_JUPITER_PROGRAM_SET = frozenset(JUPITER_PROGRAM_IDS)

_VERSIONS = {
    JUPITER_V6_PROGRAM_ID: "v6",
    JUPITER_V4_PROGRAM_ID: "v4",
    JUPITER_V3_PROGRAM_ID: "v3",
    JUPITER_V2_PROGRAM_ID: "v2",
    JUPITER_LIMIT_ORDERS_PROGRAM_ID: "limit_orders",
    JUPITER_DCA_PROGRAM_ID: "dca",
}


def is_jupiter_program(program_id: str) -> bool:
    """Return True if program_id is any of the six Jupiter programs."""
    return program_id in _JUPITER_PROGRAM_SET


def is_jupiter_swap_program(program_id: str) -> bool:
    """Return True for the swap routers (v2-v6); False for limit orders and DCA."""
    return program_id in JUPITER_SWAP_PROGRAM_IDS


def is_jupiter_limit_orders(program_id: str) -> bool:
    return program_id == JUPITER_LIMIT_ORDERS_PROGRAM_ID


def is_jupiter_dca(program_id: str) -> bool:
    return program_id == JUPITER_DCA_PROGRAM_ID


def get_jupiter_version(program_id: str) -> str | None:
    """Return 'v6', 'v4', 'v3', 'v2', 'limit_orders' or 'dca'; None for other programs."""
    return _VERSIONS.get(program_id)
