"""
Run the Jupiter pipeline on one getBlock JSON dump and print JSON.

Relative paths are resolved against JUPITER_DATA_DIR (default ./data).

Usage:
  python -m jupiter_dex.tools.process_block block.json --slot 250000000 \
      --owners owners.json --prices prices.json --output all --pretty
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from jupiter_dex.analytics.indices import extract_initialized_accounts, extract_token_prices
from jupiter_dex.analytics.pipeline import process_block
from jupiter_dex.analytics.snapshots import load_owner_records, load_token_prices
from jupiter_dex.config import get_settings
from jupiter_dex.core.exceptions import JupiterDexError
from jupiter_dex.dex_logging import configure_structlog, get_logger
from jupiter_dex.sink.db_out import build_database_changes
from jupiter_dex.solana_listener.parser import load_block

logger = get_logger(__name__)

OUTPUT_CHOICES = ("trading", "instructions", "analytics", "db", "all")


def _resolve(path: Path, data_dir: Path) -> Path:
    if path.is_absolute() or path.exists():
        return path
    return data_dir / path


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Extract Jupiter swaps and analytics from a Solana block")
    ap.add_argument("block", type=Path, help="getBlock JSON file (encoding=json)")
    ap.add_argument("--slot", type=int, default=None, help="Slot of the block if the file has no 'slot' key")
    ap.add_argument("--owners", type=Path, default=None, help="Account ownership snapshot (JSON array)")
    ap.add_argument("--prices", type=Path, default=None, help="Token price snapshot (JSON array)")
    ap.add_argument(
        "--extract-owners",
        action="store_true",
        help="Add ownership records from SPL token account initializations in this block",
    )
    ap.add_argument(
        "--extract-prices",
        action="store_true",
        help="Add price records from Jupiter v6 / v4 swap instructions in this block",
    )
    ap.add_argument("--output", choices=OUTPUT_CHOICES, default="analytics", help="What to print")
    ap.add_argument("--pretty", action="store_true", help="Indent JSON output")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_structlog(settings.log_level, settings.log_format)

    try:
        block = load_block(_resolve(args.block, settings.data_dir), slot=args.slot)
        owners = load_owner_records(_resolve(args.owners, settings.data_dir)) if args.owners else []
        prices = load_token_prices(_resolve(args.prices, settings.data_dir)) if args.prices else []
    except (OSError, json.JSONDecodeError) as e:
        logger.error("process_block_input_error", error=str(e))
        print(f"[process_block] Could not read input: {e}", file=sys.stderr)
        return 2
    except JupiterDexError as e:
        logger.error("process_block_invalid_input", **e.to_dict())
        print(f"[process_block] Invalid input: {e.message}", file=sys.stderr)
        return 1

    if args.extract_owners:
        owners = list(owners) + list(extract_initialized_accounts(block))
    if args.extract_prices:
        prices = list(prices) + list(extract_token_prices(block))

    try:
        result = process_block(block, owners, prices)
    except JupiterDexError as e:
        logger.error("process_block_failed", slot=block.slot, **e.to_dict())
        print(f"[process_block] Block {block.slot} failed: {e.message}", file=sys.stderr)
        return 1

    changes = build_database_changes(result.trading_data, result.analytics, protocol=settings.sink_protocol)

    out: dict[str, Any]
    if args.output == "trading":
        out = result.trading_data.to_dict()
    elif args.output == "instructions":
        out = result.instructions.to_dict()
    elif args.output == "analytics":
        out = result.analytics.to_dict()
    elif args.output == "db":
        out = {"changes": [c.to_dict() for c in changes]}
    else:
        out = {**result.to_dict(), "changes": [c.to_dict() for c in changes]}

    print(json.dumps(out, indent=2 if args.pretty else None))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
