"""
Analytics aggregator: enriched instructions -> per-block summary.

Single pass. Program stats are grouped in an insertion-ordered dict and
sorted with a stable sort, so programs with equal instruction counts keep
first-seen order and replays of the same block give identical output.
"""

from __future__ import annotations

from jupiter_dex.analytics.models import JupiterAnalytics, JupiterInstructions, ProgramStat
from jupiter_dex.dex_logging import get_logger
from jupiter_dex.utils.saturating import saturating_add

logger = get_logger(__name__)

TOP_PROGRAMS_LIMIT = 5


def map_jupiter_analytics(instructions: JupiterInstructions) -> JupiterAnalytics:
    account_set: set[str] = set()
    mint_set: set[str] = set()
    program_stats: dict[str, list[int]] = {}  # program_id -> [count, volume]
    total_volume = 0
    total_swaps = 0

    for ix in instructions.instructions:
        stat = program_stats.setdefault(ix.program_id, [0, 0])
        stat[0] += 1
        stat[1] = saturating_add(stat[1], ix.amount_in)

        if ix.amount_in > 0:
            total_volume = saturating_add(total_volume, ix.amount_in)
            total_swaps += 1

        for account in ix.accounts:
            account_set.add(account.address)
            if account.mint:
                mint_set.add(account.mint)

    top_programs = [
        ProgramStat(program_id=pid, instruction_count=count, total_volume=volume)
        for pid, (count, volume) in program_stats.items()
    ]
    top_programs.sort(key=lambda p: p.instruction_count, reverse=True)
    del top_programs[TOP_PROGRAMS_LIMIT:]

    analytics = JupiterAnalytics(
        total_instructions=len(instructions.instructions),
        unique_accounts=len(account_set),
        unique_mints=len(mint_set),
        top_programs=top_programs,
        total_volume=total_volume,
        total_swaps=total_swaps,
    )
    logger.debug(
        "jupiter_analytics_computed",
        total_instructions=analytics.total_instructions,
        unique_accounts=analytics.unique_accounts,
        unique_mints=analytics.unique_mints,
        total_swaps=total_swaps,
    )
    return analytics
