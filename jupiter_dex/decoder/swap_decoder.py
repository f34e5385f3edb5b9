"""
Swap amount decoder for Jupiter instruction payloads.

Jupiter v6 route instructions carry a variable-length route plan before
the amounts, so amounts are located relative to the end of the payload:

    Route:               disc(8) + route_plan + in_amount(8) + quoted_out_amount(8)
                         + slippage_bps(2)
    SharedAccountsRoute: disc(8) + id(1) + route_plan + in_amount(8)
                         + quoted_out_amount(8) + slippage_bps(2) + platform_fee_bps(1)
    ExactOutRoute:       disc(8) + route_plan + out_amount(8) + quoted_in_amount(8)
                         + slippage_bps(2) + platform_fee_bps(1)

Each known discriminator maps to a layout decoder in _DECODERS; anything
else goes through a bounded scan for two plausible consecutive u64 values.
A miss is the SENTINEL record, never an exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

MIN_VALID_AMOUNT = 1_000
MAX_REASONABLE_AMOUNT = 10**18

DISCRIMINATOR_LEN = 8
U64_LEN = 8

ROUTE_DISCRIMINATOR = bytes([229, 23, 203, 151, 122, 227, 173, 42])
SHARED_ACCOUNTS_ROUTE_DISCRIMINATOR = bytes([193, 32, 155, 51, 65, 214, 156, 129])
EXACT_OUT_ROUTE_DISCRIMINATOR = bytes([208, 51, 239, 151, 123, 43, 237, 92])
SHARED_ACCOUNTS_EXACT_OUT_ROUTE_DISCRIMINATOR = bytes([176, 209, 105, 168, 154, 125, 69, 62])

ROUTE_MIN_LEN = 26
SHARED_ACCOUNTS_ROUTE_MIN_LEN = 30
EXACT_OUT_ROUTE_MIN_LEN = 24

# (amount_in, amount_out) or None when the layout does not match
AmountDecoder = Callable[[bytes], tuple[int, int] | None]


@dataclass(frozen=True)
class SwapAmounts:
    """Decoded swap fields of one instruction. amount_in == 0 means no swap recovered."""

    amount_in: int = 0
    amount_out: int = 0
    input_mint: str = ""
    output_mint: str = ""
    user_wallet: str = ""

    @property
    def is_swap(self) -> bool:
        return self.amount_in > 0


SENTINEL = SwapAmounts()


def read_u64_le(data: bytes, offset: int) -> int:
    """Read a little-endian u64 at offset; 0 if the slice would run out of bounds."""
    if offset < 0 or offset + U64_LEN > len(data):
        return 0
    return int.from_bytes(data[offset:offset + U64_LEN], "little")


def _valid_pair(first: int, second: int) -> bool:
    """First value must look like a real amount; second only needs to be bounded."""
    return MIN_VALID_AMOUNT <= first < MAX_REASONABLE_AMOUNT and second < MAX_REASONABLE_AMOUNT


def _decode_route(data: bytes) -> tuple[int, int] | None:
    n = len(data)
    if n < ROUTE_MIN_LEN:
        return None
    amount_in = read_u64_le(data, n - 18)
    amount_out = read_u64_le(data, n - 10)
    if _valid_pair(amount_in, amount_out):
        return amount_in, amount_out
    return None


def _decode_shared_accounts_route(data: bytes) -> tuple[int, int] | None:
    """Trailing window first; then the fixed offsets right after disc + id byte."""
    n = len(data)
    if n < SHARED_ACCOUNTS_ROUTE_MIN_LEN:
        return None
    amount_in = read_u64_le(data, n - 19)
    amount_out = read_u64_le(data, n - 11)
    if _valid_pair(amount_in, amount_out):
        return amount_in, amount_out
    amount_in = read_u64_le(data, 9)
    amount_out = read_u64_le(data, 17)
    if _valid_pair(amount_in, amount_out):
        return amount_in, amount_out
    return None


def _decode_exact_out_route(data: bytes) -> tuple[int, int] | None:
    """ExactOut fixes the output amount and caps the input; returns (max_amount_in, amount_out)."""
    n = len(data)
    if n < EXACT_OUT_ROUTE_MIN_LEN:
        return None
    amount_out = read_u64_le(data, n - 19)
    max_amount_in = read_u64_le(data, n - 11)
    if max_amount_in > 0 and _valid_pair(amount_out, max_amount_in):
        return max_amount_in, amount_out
    return None


def _decode_generic(data: bytes) -> tuple[int, int] | None:
    """Scan for the first offset holding two consecutive plausible amounts."""
    for i in range(DISCRIMINATOR_LEN, len(data) - 2 * U64_LEN):
        val1 = read_u64_le(data, i)
        val2 = read_u64_le(data, i + U64_LEN)
        if MIN_VALID_AMOUNT <= val1 < MAX_REASONABLE_AMOUNT and 0 < val2 < MAX_REASONABLE_AMOUNT:
            return val1, val2
    return None


_DECODERS: dict[bytes, AmountDecoder] = {
    ROUTE_DISCRIMINATOR: _decode_route,
    SHARED_ACCOUNTS_ROUTE_DISCRIMINATOR: _decode_shared_accounts_route,
    EXACT_OUT_ROUTE_DISCRIMINATOR: _decode_exact_out_route,
    SHARED_ACCOUNTS_EXACT_OUT_ROUTE_DISCRIMINATOR: _decode_exact_out_route,
}


def register_decoder(discriminator: bytes, decoder: AmountDecoder) -> AmountDecoder | None:
    """
    Install a layout decoder for an 8-byte discriminator.

    Returns the decoder previously registered for it (None if none), so
    callers can restore it.
    """
    discriminator = bytes(discriminator)
    if len(discriminator) != DISCRIMINATOR_LEN:
        raise ValueError(f"discriminator must be {DISCRIMINATOR_LEN} bytes, got {len(discriminator)}")
    previous = _DECODERS.get(discriminator)
    _DECODERS[discriminator] = decoder
    return previous


def unregister_decoder(discriminator: bytes) -> AmountDecoder | None:
    """Remove a layout decoder; its discriminator falls back to the generic scan."""
    return _DECODERS.pop(bytes(discriminator), None)


def extract_mints_from_accounts(accounts: list[str]) -> tuple[str, str, str]:
    """
    Return (input_mint, output_mint, user_wallet) from the instruction's accounts.

    Follows the SharedAccountsRoute ordering:
    [0] token_program/user, [1] transfer authority, [2] source token account,
    [3] destination token account, [4] program destination, [5] destination mint.
    Best effort for other layouts.
    """
    user_wallet = accounts[0] if accounts else ""
    input_mint = accounts[2] if len(accounts) > 2 else ""
    if len(accounts) > 5:
        output_mint = accounts[5]
    elif len(accounts) > 3:
        output_mint = accounts[3]
    else:
        output_mint = ""
    return input_mint, output_mint, user_wallet


def decode_swap(data: bytes, accounts: list[str]) -> SwapAmounts:
    """
    Decode swap amounts and mints from an instruction payload.

    Dispatches on the 8-byte discriminator; unknown discriminators use the
    generic scan. Returns SENTINEL when nothing valid is found.
    """
    data = bytes(data or b"")
    if len(data) < DISCRIMINATOR_LEN:
        return SENTINEL
    decoder = _DECODERS.get(data[:DISCRIMINATOR_LEN], _decode_generic)
    amounts = decoder(data)
    if amounts is None:
        return SENTINEL
    amount_in, amount_out = amounts
    input_mint, output_mint, user_wallet = extract_mints_from_accounts(accounts)
    return SwapAmounts(
        amount_in=amount_in,
        amount_out=amount_out,
        input_mint=input_mint,
        output_mint=output_mint,
        user_wallet=user_wallet,
    )
