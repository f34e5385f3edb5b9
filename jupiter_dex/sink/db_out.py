"""
Database sink module: trading data + analytics -> table changes.

Row keys determine sink row identity, so format_date must stay exactly
as written: greedy whole-year subtraction from 1970, then month lengths.

Tables:
  jupiter_swaps     create, pk "<transaction_id>:<slot>", one per swap
  daily_swap_stats  upsert, pk "YYYY-MM-DD" of the block's first trade
  program_stats     upsert, pk program_id, one per top program
  global_metrics    upsert, pk protocol name
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from jupiter_dex.analytics.models import JupiterAnalytics, TradingData, TradingDataList
from jupiter_dex.dex_logging import get_logger

logger = get_logger(__name__)

SECONDS_PER_DAY = 86_400
EPOCH_YEAR = 1970

OP_CREATE = "create"
OP_UPSERT = "upsert"

FIELD_SET = "set"
FIELD_ADD = "add"
FIELD_MAX = "max"

_DAYS_IN_MONTHS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_DAYS_IN_MONTHS_LEAP = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


@dataclass(frozen=True)
class FieldChange:
    name: str
    op: str
    value: Any

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "op": self.op, "value": self.value}


@dataclass
class TableChange:
    """One row change: table, primary key, create|upsert, ordered field changes."""

    table: str
    pk: str
    operation: str
    fields: list[FieldChange] = field(default_factory=list)

    def set(self, name: str, value: Any) -> "TableChange":
        self.fields.append(FieldChange(name, FIELD_SET, value))
        return self

    def add(self, name: str, value: Any) -> "TableChange":
        self.fields.append(FieldChange(name, FIELD_ADD, value))
        return self

    def max(self, name: str, value: Any) -> "TableChange":
        self.fields.append(FieldChange(name, FIELD_MAX, value))
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "table": self.table,
            "pk": self.pk,
            "operation": self.operation,
            "fields": [f.to_dict() for f in self.fields],
        }


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def format_date(timestamp: int) -> str:
    """Format a unix timestamp (seconds, >= 0) as YYYY-MM-DD (UTC)."""
    remaining_days = timestamp // SECONDS_PER_DAY

    year = EPOCH_YEAR
    while True:
        days_in_year = 366 if is_leap_year(year) else 365
        if remaining_days < days_in_year:
            break
        remaining_days -= days_in_year
        year += 1

    month = 1
    for days_in_month in _DAYS_IN_MONTHS_LEAP if is_leap_year(year) else _DAYS_IN_MONTHS:
        if remaining_days < days_in_month:
            break
        remaining_days -= days_in_month
        month += 1

    day = remaining_days + 1
    return f"{year:04d}-{month:02d}-{day:02d}"


def swap_id(trade: TradingData) -> str:
    return f"{trade.transaction_id}:{trade.slot}"


def build_database_changes(
    trading_data: TradingDataList,
    analytics: JupiterAnalytics,
    protocol: str = "jupiter",
) -> list[TableChange]:
    """
    Build table changes for one block.

    u64 volumes are written as decimal strings; counts as ints. Trades with
    amount_in == 0 are not swaps and produce no jupiter_swaps row.
    """
    changes: list[TableChange] = []

    for trade in trading_data.items:
        if trade.amount_in == 0:
            continue
        changes.append(
            TableChange("jupiter_swaps", swap_id(trade), OP_CREATE)
            .set("tx_hash", trade.transaction_id)
            .set("program_id", trade.program_id)
            .set("slot", trade.slot)
            .set("block_time", trade.block_time)
            .set("amount_in", str(trade.amount_in))
            .set("amount_out", str(trade.amount_out))
            .set("input_mint", trade.input_mint)
            .set("output_mint", trade.output_mint)
            .set("user_wallet", trade.user_wallet)
        )

    if trading_data.swap_count > 0:
        date = format_date(trading_data.items[0].block_time) if trading_data.items else "unknown"
        changes.append(
            TableChange("daily_swap_stats", date, OP_UPSERT)
            .set("date", date)
            .add("swap_count", trading_data.swap_count)
            .add("total_volume", str(trading_data.total_volume))
        )

    for stat in analytics.top_programs:
        changes.append(
            TableChange("program_stats", stat.program_id, OP_UPSERT)
            .set("program_id", stat.program_id)
            .add("instruction_count", stat.instruction_count)
            .add("total_volume", str(stat.total_volume))
        )

    if analytics.total_swaps > 0:
        changes.append(
            TableChange("global_metrics", protocol, OP_UPSERT)
            .set("protocol", protocol)
            .add("total_swaps", analytics.total_swaps)
            .add("total_volume", str(analytics.total_volume))
            .max("unique_accounts", analytics.unique_accounts)
            .max("unique_mints", analytics.unique_mints)
        )

    logger.debug("database_changes_built", rows=len(changes), protocol=protocol)
    return changes
