"""
Ownership and price indices, rebuilt from full snapshots on every call.

The owner index maps token account -> (owner wallet, mint); the price
index is the set of addresses known to be token mints. Both are plain
dict/set values, so any mapping with the same get / in interface (for
example a persistent key-value store) can be passed to enrichment instead.

Records can also be taken from a block: token account initializations
give ownership records, Jupiter v6 / v4 swaps give price records.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from jupiter_dex.analytics.models import AccountOwnershipRecord, TokenPriceRecord
from jupiter_dex.constants import JUPITER_V4_PROGRAM_ID, JUPITER_V6_PROGRAM_ID, TOKEN_PROGRAM_ID
from jupiter_dex.core.exceptions import SnapshotFormatError
from jupiter_dex.solana_listener.models import Block
from jupiter_dex.utils.wallet_utils import to_address

OwnerIndex = dict[str, tuple[str, str]]
PriceIndex = set[str]

PRICE_SOURCE_PROGRAM_IDS = frozenset({JUPITER_V6_PROGRAM_ID, JUPITER_V4_PROGRAM_ID})


def _address(value: str | bytes, field_name: str) -> str:
    try:
        return to_address(value)
    except (TypeError, ValueError) as e:
        raise SnapshotFormatError(f"invalid {field_name} address: {e}", field=field_name) from e


def build_owner_index(records: Iterable[AccountOwnershipRecord]) -> OwnerIndex:
    """Map account -> (owner, mint). A later record for the same account replaces an earlier one."""
    index: OwnerIndex = {}
    for record in records:
        account = _address(record.account, "account")
        index[account] = (_address(record.owner, "owner"), _address(record.mint, "mint"))
    return index


def build_price_index(prices: Iterable[TokenPriceRecord]) -> PriceIndex:
    """Return the set of mint addresses present in the price snapshot."""
    return {_address(price.mint_address, "mint_address") for price in prices}


def extract_initialized_accounts(block: Block) -> Iterator[AccountOwnershipRecord]:
    """
    Yield ownership records from SPL Token program instructions in block.

    Token account initialization lists [account, mint, owner, ...];
    instructions with fewer than 3 accounts are skipped.
    """
    for trx in block.transactions:
        for instruction in trx.walk_instructions():
            if instruction.program_id != TOKEN_PROGRAM_ID:
                continue
            accounts = instruction.accounts
            if len(accounts) < 3:
                continue
            yield AccountOwnershipRecord(
                account=accounts[0],
                mint=accounts[1],
                owner=accounts[2],
            )


def extract_token_prices(block: Block) -> Iterator[TokenPriceRecord]:
    """
    Yield a price record for every v6 / v4 Jupiter swap instruction in block.

    The mint is the instruction's first account and the timestamp is the
    block time; price and volume fields stay 0 since swap payloads carry no
    USD figures. Instructions without accounts are skipped.
    """
    for trx in block.transactions:
        for instruction in trx.walk_instructions():
            if instruction.program_id not in PRICE_SOURCE_PROGRAM_IDS or not instruction.accounts:
                continue
            yield TokenPriceRecord(
                mint_address=instruction.accounts[0],
                timestamp=block.timestamp,
            )
