"""
Pytest fixtures for Jupiter DEX tests: payload builders and small blocks.
"""

from __future__ import annotations

import pytest

from jupiter_dex.constants import JUPITER_V6_PROGRAM_ID
from jupiter_dex.decoder import SHARED_ACCOUNTS_ROUTE_DISCRIMINATOR
from jupiter_dex.solana_listener.models import Block, Instruction, Transaction

SYSTEM_PROGRAM_ID = "11111111111111111111111111111111"


def u64(value: int) -> bytes:
    return value.to_bytes(8, "little")


@pytest.fixture
def shared_route_payload():
    """Build a SharedAccountsRoute payload: disc + id + route_plan + in + out + slippage(2) + fee(1)."""

    def _build(amount_in: int, amount_out: int, route_plan: bytes = b"\x01\x02\x03\x04\x05") -> bytes:
        return (
            SHARED_ACCOUNTS_ROUTE_DISCRIMINATOR
            + b"\x00"
            + route_plan
            + u64(amount_in)
            + u64(amount_out)
            + (50).to_bytes(2, "little")
            + b"\x00"
        )

    return _build


@pytest.fixture
def swap_accounts() -> list[str]:
    return ["P", "U", "S", "D", "I", "M"]


@pytest.fixture
def make_block():
    """Build a Block from (tx_id, [Instruction, ...]) pairs."""

    def _build(txs, slot: int = 250_000_000, block_time: int | None = 1_705_276_800) -> Block:
        return Block(
            slot=slot,
            block_time=block_time,
            transactions=[Transaction(id=tx_id, instructions=list(ixs)) for tx_id, ixs in txs],
        )

    return _build


@pytest.fixture
def swap_block(make_block, shared_route_payload, swap_accounts) -> Block:
    """One v6 SharedAccountsRoute swap (2_000_000 -> 1_000_000) plus a non-Jupiter instruction."""
    return make_block(
        [
            (
                "sig1",
                [
                    Instruction(program_id=SYSTEM_PROGRAM_ID, accounts=["P", "U"], data=b"\x02" + u64(5)),
                    Instruction(
                        program_id=JUPITER_V6_PROGRAM_ID,
                        accounts=swap_accounts,
                        data=shared_route_payload(2_000_000, 1_000_000),
                    ),
                ],
            )
        ]
    )
