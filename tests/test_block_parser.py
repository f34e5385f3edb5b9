"""
Tests for getBlock JSON -> Block parsing: account key resolution,
inner instruction ordering, failed transactions, structural faults.
"""

from __future__ import annotations

import base64
import json

import base58
import pytest

from jupiter_dex.constants import JUPITER_V6_PROGRAM_ID, TOKEN_PROGRAM_ID
from jupiter_dex.core.exceptions import BlockStructureError
from jupiter_dex.solana_listener.parser import load_block, parse_block, parse_transaction

USER = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"
MINT = "So11111111111111111111111111111111111111112"
LOADED = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


def b58(data: bytes) -> str:
    return base58.b58encode(data).decode()


def _raw_tx(signature="sig1", instructions=None, inner=None, err=None, loaded=None):
    meta = {"err": err, "innerInstructions": inner or []}
    if loaded is not None:
        meta["loadedAddresses"] = loaded
    return {
        "transaction": {
            "signatures": [signature],
            "message": {
                "accountKeys": [USER, JUPITER_V6_PROGRAM_ID, TOKEN_PROGRAM_ID, MINT],
                "instructions": instructions or [],
            },
        },
        "meta": meta,
    }


def test_parse_block_resolves_program_and_accounts():
    raw = {
        "blockTime": 1_700_000_000,
        "transactions": [
            _raw_tx(instructions=[{"programIdIndex": 1, "accounts": [0, 3], "data": b58(b"\x01\x02\x03")}])
        ],
    }
    block = parse_block(raw, slot=42)
    assert block.slot == 42
    assert block.block_time == 1_700_000_000
    assert len(block.transactions) == 1
    tx = block.transactions[0]
    assert tx.id == "sig1"
    ix = tx.instructions[0]
    assert ix.program_id == JUPITER_V6_PROGRAM_ID
    assert ix.accounts == [USER, MINT]
    assert ix.data == b"\x01\x02\x03"


def test_inner_instructions_follow_their_outer_instruction():
    raw = {
        "slot": 7,
        "transactions": [
            _raw_tx(
                instructions=[
                    {"programIdIndex": 1, "accounts": [], "data": b58(b"outer0")},
                    {"programIdIndex": 2, "accounts": [], "data": b58(b"outer1")},
                ],
                inner=[{"index": 0, "instructions": [{"programIdIndex": 2, "accounts": [3], "data": b58(b"inner0")}]}],
            )
        ],
    }
    block = parse_block(raw)
    assert [ix.data for ix in block.transactions[0].instructions] == [b"outer0", b"inner0", b"outer1"]


def test_loaded_addresses_extend_account_keys():
    raw = {
        "slot": 1,
        "transactions": [
            _raw_tx(
                instructions=[{"programIdIndex": 1, "accounts": [4], "data": ""}],
                loaded={"writable": [LOADED], "readonly": []},
            )
        ],
    }
    assert parse_block(raw).transactions[0].instructions[0].accounts == [LOADED]


def test_failed_transactions_are_skipped():
    raw = {
        "slot": 1,
        "transactions": [
            _raw_tx(signature="bad", err={"InstructionError": [0, "Custom"]}),
            _raw_tx(signature="good"),
        ],
    }
    assert [tx.id for tx in parse_block(raw).transactions] == ["good"]
    assert parse_transaction(_raw_tx(err={"x": 1})) is None


def test_base64_data_pair_and_undecodable_data():
    raw = {
        "slot": 1,
        "transactions": [
            _raw_tx(
                instructions=[
                    {"programIdIndex": 1, "accounts": [], "data": [base64.b64encode(b"abc").decode(), "base64"]},
                    {"programIdIndex": 1, "accounts": [], "data": "!!!"},
                ]
            )
        ],
    }
    ixs = parse_block(raw).transactions[0].instructions
    assert ixs[0].data == b"abc"
    assert ixs[1].data == b""


def test_missing_block_time_is_none_and_timestamp_zero():
    block = parse_block({"slot": 5, "transactions": []})
    assert block.block_time is None
    assert block.timestamp == 0


@pytest.mark.parametrize(
    "ix",
    [
        {"programIdIndex": 9, "accounts": [], "data": ""},
        {"programIdIndex": 1, "accounts": [0, 17], "data": ""},
        {"programIdIndex": 1, "accounts": [-1], "data": ""},
        {"accounts": [], "data": ""},
    ],
)
def test_out_of_range_index_is_structural_fault(ix):
    raw = {"slot": 1, "transactions": [_raw_tx(instructions=[ix])]}
    with pytest.raises(BlockStructureError):
        parse_block(raw)


def test_missing_slot_is_structural_fault():
    with pytest.raises(BlockStructureError):
        parse_block({"transactions": []})


def test_non_object_inner_instruction_group_is_structural_fault():
    ix = {"programIdIndex": 1, "accounts": [0], "data": ""}
    raw = {"slot": 1, "transactions": [_raw_tx(instructions=[ix], inner=["bogus"])]}
    with pytest.raises(BlockStructureError):
        parse_block(raw)


def test_missing_message_is_structural_fault():
    with pytest.raises(BlockStructureError):
        parse_block({"slot": 1, "transactions": [{"transaction": {"signatures": ["s"]}, "meta": None}]})


def test_load_block_accepts_rpc_envelope(tmp_path):
    path = tmp_path / "block.json"
    envelope = {
        "jsonrpc": "2.0",
        "id": 1,
        "result": {
            "blockTime": 1_582_934_400,
            "transactions": [_raw_tx(instructions=[{"programIdIndex": 1, "accounts": [0], "data": ""}])],
        },
    }
    path.write_text(json.dumps(envelope), encoding="utf-8")
    block = load_block(path, slot=99)
    assert block.slot == 99
    assert block.transactions[0].instructions[0].program_id == JUPITER_V6_PROGRAM_ID
