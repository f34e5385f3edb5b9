"""
Trading data stage: block -> decoded Jupiter swap records.

One TradingData per Jupiter instruction (swap or not), plus block-level
swap volume and swap count over records with amount_in > 0.
"""

from __future__ import annotations

from jupiter_dex.analytics.models import TradingData, TradingDataList
from jupiter_dex.analytics.scanner import scan_block
from jupiter_dex.decoder import decode_swap
from jupiter_dex.dex_logging import get_logger
from jupiter_dex.solana_listener.models import Block
from jupiter_dex.utils.saturating import saturating_add

logger = get_logger(__name__)


def map_trading_data(block: Block) -> TradingDataList:
    """Decode every Jupiter instruction in block."""
    items: list[TradingData] = []
    total_volume = 0
    swap_count = 0

    for scanned in scan_block(block):
        ix = scanned.instruction
        accounts = list(ix.accounts)
        swap = decode_swap(ix.data, accounts)

        if swap.amount_in > 0:
            total_volume = saturating_add(total_volume, swap.amount_in)
            swap_count += 1

        items.append(
            TradingData(
                program_id=ix.program_id,
                transaction_id=scanned.transaction_id,
                slot=scanned.slot,
                block_time=scanned.block_time,
                accounts=accounts,
                data=bytes(ix.data),
                amount_in=swap.amount_in,
                amount_out=swap.amount_out,
                input_mint=swap.input_mint,
                output_mint=swap.output_mint,
                user_wallet=swap.user_wallet,
            )
        )

    logger.debug(
        "trading_data_mapped",
        slot=block.slot,
        instructions=len(items),
        swap_count=swap_count,
        total_volume=total_volume,
    )
    return TradingDataList(items=items, total_volume=total_volume, swap_count=swap_count)
