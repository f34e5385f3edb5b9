"""
Jupiter block analytics stages.

Modules: scanner, trading_data, indices, enrichment, aggregator, pipeline.
"""

from jupiter_dex.analytics.aggregator import map_jupiter_analytics
from jupiter_dex.analytics.enrichment import enrich_account, map_jupiter_instructions
from jupiter_dex.analytics.indices import (
    build_owner_index,
    build_price_index,
    extract_initialized_accounts,
    extract_token_prices,
)
from jupiter_dex.analytics.pipeline import BlockResult, process_block
from jupiter_dex.analytics.scanner import scan_block
from jupiter_dex.analytics.trading_data import map_trading_data

__all__ = [
    "BlockResult",
    "build_owner_index",
    "build_price_index",
    "enrich_account",
    "extract_initialized_accounts",
    "extract_token_prices",
    "map_jupiter_analytics",
    "map_jupiter_instructions",
    "map_trading_data",
    "process_block",
    "scan_block",
]
