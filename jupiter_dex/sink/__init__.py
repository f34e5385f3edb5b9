"""
SQL sink rows for Jupiter analytics.

Translates per-block trading data and analytics into table changes
(create / upsert with set, add and max field operations).
"""

from jupiter_dex.sink.db_out import (
    FieldChange,
    TableChange,
    build_database_changes,
    format_date,
    is_leap_year,
    swap_id,
)

__all__ = [
    "FieldChange",
    "TableChange",
    "build_database_changes",
    "format_date",
    "is_leap_year",
    "swap_id",
]
