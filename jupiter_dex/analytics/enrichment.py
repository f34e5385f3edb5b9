"""
Enrichment stage: annotate Jupiter instruction accounts with owner and mint.

Lookup order per account: owner index (owner, mint verbatim), then the
price index (the address is itself a mint), else unresolved ("", "").
Swap fields come from the trading data stage, joined by transaction id
and the instruction's position among that transaction's Jupiter
instructions.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Container, Iterable, Mapping

from jupiter_dex.analytics.indices import build_owner_index, build_price_index
from jupiter_dex.analytics.models import (
    AccountOwnershipRecord,
    EnrichedAccount,
    JupiterInstruction,
    JupiterInstructions,
    TokenPriceRecord,
    TradingData,
    TradingDataList,
)
from jupiter_dex.analytics.scanner import scan_block
from jupiter_dex.dex_logging import get_logger
from jupiter_dex.solana_listener.models import Block
from jupiter_dex.utils.saturating import saturating_add

logger = get_logger(__name__)


def enrich_account(
    address: str,
    owner_index: Mapping[str, tuple[str, str]],
    price_index: Container[str],
) -> EnrichedAccount:
    """Resolve one account address; a miss yields empty owner and mint."""
    resolved = owner_index.get(address)
    if resolved is not None:
        owner, mint = resolved
        return EnrichedAccount(address=address, owner=owner, mint=mint)
    if address in price_index:
        return EnrichedAccount(address=address, owner="", mint=address)
    return EnrichedAccount(address=address)


def group_trades_by_tx(trading_data: TradingDataList) -> dict[str, list[TradingData]]:
    """Group trades by transaction id, keeping call order within each transaction."""
    grouped: defaultdict[str, list[TradingData]] = defaultdict(list)
    for trade in trading_data.items:
        grouped[trade.transaction_id].append(trade)
    return dict(grouped)


def enrich_instructions(
    block: Block,
    owner_index: Mapping[str, tuple[str, str]],
    price_index: Container[str],
    trading_data: TradingDataList,
) -> JupiterInstructions:
    """Enrich every Jupiter instruction in block against prebuilt indices."""
    trades_by_tx = group_trades_by_tx(trading_data)
    position: defaultdict[str, int] = defaultdict(int)

    instructions: list[JupiterInstruction] = []
    total_volume = 0
    resolved_accounts = 0

    for scanned in scan_block(block):
        ix = scanned.instruction
        tx_id = scanned.transaction_id

        accounts = [enrich_account(addr, owner_index, price_index) for addr in ix.accounts]
        resolved_accounts += sum(1 for a in accounts if a.mint)

        trades = trades_by_tx.get(tx_id) or []
        k = position[tx_id]
        position[tx_id] = k + 1
        trade = trades[k] if k < len(trades) else None

        if trade is not None:
            amount_in, amount_out = trade.amount_in, trade.amount_out
            input_mint, output_mint = trade.input_mint, trade.output_mint
        else:
            amount_in, amount_out, input_mint, output_mint = 0, 0, "", ""

        if amount_in > 0:
            total_volume = saturating_add(total_volume, amount_in)

        instructions.append(
            JupiterInstruction(
                program_id=ix.program_id,
                transaction_id=tx_id,
                slot=scanned.slot,
                block_time=scanned.block_time,
                accounts=accounts,
                data=bytes(ix.data),
                amount_in=amount_in,
                amount_out=amount_out,
                input_mint=input_mint,
                output_mint=output_mint,
            )
        )

    logger.debug(
        "jupiter_instructions_enriched",
        slot=block.slot,
        instruction_count=len(instructions),
        resolved_accounts=resolved_accounts,
        total_volume=total_volume,
    )
    return JupiterInstructions(
        instructions=instructions,
        total_volume=total_volume,
        instruction_count=len(instructions),
    )


def map_jupiter_instructions(
    block: Block,
    owner_records: Iterable[AccountOwnershipRecord],
    trading_data: TradingDataList,
    token_prices: Iterable[TokenPriceRecord],
) -> JupiterInstructions:
    """Build both indices from their snapshots, then enrich the block's Jupiter instructions."""
    owner_index = build_owner_index(owner_records)
    price_index = build_price_index(token_prices)
    return enrich_instructions(block, owner_index, price_index, trading_data)
