"""
Per-block pipeline: trading data -> enrichment -> analytics.

Single entrypoint for the CLI and for orchestrators: runs every stage on
one block with the ownership and price snapshots valid for that block.
Independent blocks can be processed in parallel; nothing is shared.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from jupiter_dex.analytics.aggregator import map_jupiter_analytics
from jupiter_dex.analytics.enrichment import map_jupiter_instructions
from jupiter_dex.analytics.models import (
    AccountOwnershipRecord,
    JupiterAnalytics,
    JupiterInstructions,
    TokenPriceRecord,
    TradingDataList,
)
from jupiter_dex.analytics.trading_data import map_trading_data
from jupiter_dex.dex_logging import bind_slot
from jupiter_dex.solana_listener.models import Block


@dataclass
class BlockResult:
    slot: int
    trading_data: TradingDataList
    instructions: JupiterInstructions
    analytics: JupiterAnalytics

    def to_dict(self) -> dict[str, Any]:
        return {
            "slot": self.slot,
            "trading_data": self.trading_data.to_dict(),
            "instructions": self.instructions.to_dict(),
            "analytics": self.analytics.to_dict(),
        }


def process_block(
    block: Block,
    owner_records: Iterable[AccountOwnershipRecord] = (),
    token_prices: Iterable[TokenPriceRecord] = (),
) -> BlockResult:
    """Run all stages on block. Raises only on structural faults in the input."""
    trading_data = map_trading_data(block)
    instructions = map_jupiter_instructions(block, owner_records, trading_data, token_prices)
    analytics = map_jupiter_analytics(instructions)
    bind_slot(block.slot).info(
        "block_processed",
        jupiter_instructions=analytics.total_instructions,
        swap_count=trading_data.swap_count,
        total_volume=trading_data.total_volume,
    )
    return BlockResult(
        slot=block.slot,
        trading_data=trading_data,
        instructions=instructions,
        analytics=analytics,
    )
