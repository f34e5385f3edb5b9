"""
Tests for the per-block pipeline and the process_block CLI.
"""

from __future__ import annotations

import json

import base58
import pytest

from jupiter_dex.analytics.models import AccountOwnershipRecord, TokenPriceRecord
from jupiter_dex.analytics.pipeline import process_block
from jupiter_dex.constants import JUPITER_V6_PROGRAM_ID, TOKEN_PROGRAM_ID
from jupiter_dex.decoder import SHARED_ACCOUNTS_ROUTE_DISCRIMINATOR
from jupiter_dex.dex_logging import configure_structlog
from jupiter_dex.tools.process_block import main

KEYS = [
    "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka",  # 0 user
    JUPITER_V6_PROGRAM_ID,  # 1
    TOKEN_PROGRAM_ID,  # 2
    "So11111111111111111111111111111111111111112",  # 3 source mint
    "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",  # 4 destination mint
    "7dHbWXmci3dT8UFYWYZweBLXgycu7Y3iL6trKn1Y7ARj",  # 5 source token account
]


def _payload(amount_in: int, amount_out: int) -> bytes:
    return (
        SHARED_ACCOUNTS_ROUTE_DISCRIMINATOR
        + b"\x00\x02\x09\x09\x09\x09"
        + amount_in.to_bytes(8, "little")
        + amount_out.to_bytes(8, "little")
        + b"\x32\x00\x00"
    )


def _raw_block() -> dict:
    return {
        "slot": 250_000_000,
        "blockTime": 1_582_934_400,
        "transactions": [
            {
                "transaction": {
                    "signatures": ["sigA"],
                    "message": {
                        "accountKeys": KEYS,
                        "instructions": [
                            {
                                "programIdIndex": 1,
                                "accounts": [0, 2, 5, 5, 5, 4],
                                "data": base58.b58encode(_payload(2_000_000, 1_000_000)).decode(),
                            }
                        ],
                    },
                },
                "meta": {
                    "err": None,
                    "innerInstructions": [
                        {"index": 0, "instructions": [{"programIdIndex": 2, "accounts": [5, 3, 0], "data": "2"}]}
                    ],
                },
            }
        ],
    }


def test_process_block_runs_all_stages(swap_block):
    owners = [AccountOwnershipRecord(account="S", owner="P", mint="MintIn")]
    prices = [TokenPriceRecord(mint_address="M")]
    result = process_block(swap_block, owners, prices)

    assert result.slot == swap_block.slot
    assert result.trading_data.swap_count == 1
    assert result.instructions.instruction_count == 1
    analytics = result.analytics
    assert analytics.total_instructions == 1
    assert analytics.total_swaps == 1
    assert analytics.total_volume == 2_000_000
    assert analytics.unique_accounts == 6
    assert analytics.unique_mints == 2  # MintIn, M
    assert [p.program_id for p in analytics.top_programs] == [JUPITER_V6_PROGRAM_ID]


def test_process_block_is_deterministic(swap_block):
    assert process_block(swap_block).to_dict() == process_block(swap_block).to_dict()


def test_cli_prints_analytics(tmp_path, capsys):
    block_path = tmp_path / "block.json"
    block_path.write_text(json.dumps(_raw_block()), encoding="utf-8")
    prices_path = tmp_path / "prices.json"
    prices_path.write_text(json.dumps([{"mint_address": KEYS[4], "price_usd": 1.0}]), encoding="utf-8")

    rc = main([str(block_path), "--prices", str(prices_path), "--extract-owners"])
    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["total_instructions"] == 1
    assert out["total_swaps"] == 1
    assert out["total_volume"] == 2_000_000
    # source token account resolved via the inner InitializeAccount, destination mint via prices
    assert out["unique_mints"] == 2


def test_cli_all_output_includes_db_changes(tmp_path, capsys):
    block_path = tmp_path / "block.json"
    block_path.write_text(json.dumps(_raw_block()), encoding="utf-8")

    rc = main([str(block_path), "--output", "all"])
    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["slot"] == 250_000_000
    assert out["trading_data"]["items"][0]["input_mint"] == KEYS[5]
    assert out["trading_data"]["items"][0]["output_mint"] == KEYS[4]
    daily = [c for c in out["changes"] if c["table"] == "daily_swap_stats"]
    assert daily[0]["pk"] == "2020-02-29"


def test_cli_extract_prices_marks_swap_account_as_mint(tmp_path, capsys):
    block_path = tmp_path / "block.json"
    block_path.write_text(json.dumps(_raw_block()), encoding="utf-8")

    rc = main([str(block_path), "--extract-prices", "--output", "instructions"])
    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    accounts = out["instructions"][0]["accounts"]
    assert accounts[0] == {"address": KEYS[0], "owner": "", "mint": KEYS[0]}
    assert accounts[1] == {"address": KEYS[2], "owner": "", "mint": ""}


@pytest.fixture
def default_logging():
    yield
    configure_structlog("INFO", "json")


def test_cli_applies_log_level_from_settings(tmp_path, capsys, monkeypatch, default_logging):
    block_path = tmp_path / "block.json"
    block_path.write_text(json.dumps(_raw_block()), encoding="utf-8")
    monkeypatch.setenv("LOG_FORMAT", "json")

    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    assert main([str(block_path)]) == 0
    assert "block_processed" not in capsys.readouterr().err

    monkeypatch.setenv("LOG_LEVEL", "INFO")
    assert main([str(block_path)]) == 0
    lines = [line for line in capsys.readouterr().err.splitlines() if "block_processed" in line]
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record["event_type"] == "block_processed"
    assert record["slot"] == 250_000_000


def test_cli_structural_fault_returns_error(tmp_path, capsys):
    raw = _raw_block()
    raw["transactions"][0]["transaction"]["message"]["instructions"][0]["accounts"] = [0, 42]
    block_path = tmp_path / "block.json"
    block_path.write_text(json.dumps(raw), encoding="utf-8")

    assert main([str(block_path)]) == 1
    assert capsys.readouterr().out == ""


def test_cli_malformed_inner_instructions_returns_error(tmp_path, capsys):
    raw = _raw_block()
    raw["transactions"][0]["meta"]["innerInstructions"] = ["bogus"]
    block_path = tmp_path / "block.json"
    block_path.write_text(json.dumps(raw), encoding="utf-8")

    assert main([str(block_path)]) == 1
    assert capsys.readouterr().out == ""


def test_cli_missing_file_returns_error(tmp_path):
    assert main([str(tmp_path / "missing.json")]) == 2
