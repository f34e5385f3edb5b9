"""
Snapshot file loaders for the ownership and price indices.

Each file is a JSON array of objects:
  owners: [{"account": ..., "owner": ..., "mint": ...}, ...]
  prices: [{"mint_address": ..., "price_usd": ..., ...}, ...]
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jupiter_dex.analytics.models import AccountOwnershipRecord, TokenPriceRecord
from jupiter_dex.core.exceptions import SnapshotFormatError
from jupiter_dex.dex_logging import get_logger

logger = get_logger(__name__)


def _read_records(path: str | Path) -> list[dict[str, Any]]:
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise SnapshotFormatError("snapshot must be a JSON array", path=str(path))
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise SnapshotFormatError("snapshot entry is not an object", path=str(path), index=i)
    return raw


def load_owner_records(path: str | Path) -> list[AccountOwnershipRecord]:
    try:
        records = [AccountOwnershipRecord.from_dict(item) for item in _read_records(path)]
    except KeyError as e:
        raise SnapshotFormatError(f"owner record missing field {e}", path=str(path)) from e
    logger.debug("owner_snapshot_loaded", path=str(path), records=len(records))
    return records


def load_token_prices(path: str | Path) -> list[TokenPriceRecord]:
    try:
        records = [TokenPriceRecord.from_dict(item) for item in _read_records(path)]
    except KeyError as e:
        raise SnapshotFormatError(f"price record missing field {e}", path=str(path)) from e
    except (TypeError, ValueError) as e:
        raise SnapshotFormatError(f"invalid price record: {e}", path=str(path)) from e
    logger.debug("price_snapshot_loaded", path=str(path), records=len(records))
    return records
