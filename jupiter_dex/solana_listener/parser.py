"""
Solana block parser: raw getBlock payloads to ledger models.

Accepts getBlock results fetched with encoding "json" (account keys as
base58 strings, instruction accounts as indices, data as base58). Index
resolution is strict: an index outside the account keys is a structural
fault. Payload decoding is lenient: undecodable data becomes b"".
"""

from __future__ import annotations

import base64
import json
from pathlib import Path
from typing import Any

import base58

from jupiter_dex.core.exceptions import BlockStructureError
from jupiter_dex.dex_logging import get_logger
from jupiter_dex.solana_listener.models import Block, Instruction, Transaction

logger = get_logger(__name__)


def _get_account_keys(
    message: dict[str, Any],
    meta: dict[str, Any] | None = None,
) -> list[str]:
    """
    Resolve accountKeys to a list of base58 strings (handles json vs jsonParsed).
    For versioned transactions, appends meta.loadedAddresses (writable + readonly).
    """
    keys = message.get("accountKeys") or []
    if keys and isinstance(keys[0], str):
        out = list(keys)
    else:
        out = [k.get("pubkey", "") for k in keys if isinstance(k, dict)]
    loaded = (meta or {}).get("loadedAddresses") or {}
    for role in ("writable", "readonly"):
        for addr in loaded.get(role) or []:
            out.append(addr if isinstance(addr, str) else str(addr))
    return out


def _resolve_key(account_keys: list[str], idx: Any, tx_id: str, what: str) -> str:
    """Return account_keys[idx]; raise BlockStructureError if idx is missing or out of range."""
    if isinstance(idx, bool) or not isinstance(idx, int):
        raise BlockStructureError(
            f"{what} index is not an integer", transaction_id=tx_id, index=idx
        )
    if not 0 <= idx < len(account_keys):
        raise BlockStructureError(
            f"{what} index out of range",
            transaction_id=tx_id,
            index=idx,
            account_keys=len(account_keys),
        )
    return account_keys[idx]


def _decode_data(data: Any) -> bytes:
    """
    Decode instruction data to bytes; base58 by default, ["...", "base64"] pairs as base64.
    Returns b"" when the payload cannot be decoded.
    """
    if data is None:
        return b""
    if isinstance(data, list) and len(data) == 2 and data[1] == "base64":
        try:
            return base64.b64decode(data[0], validate=True)
        except Exception as e:
            logger.debug("instruction_data_undecodable", encoding="base64", error=str(e))
            return b""
    if not isinstance(data, str):
        logger.debug("instruction_data_undecodable", encoding=type(data).__name__)
        return b""
    try:
        return base58.b58decode(data)
    except Exception:
        pass
    try:
        return base64.b64decode(data, validate=True)
    except Exception as e:
        logger.debug("instruction_data_undecodable", encoding="base58", error=str(e))
        return b""


def _parse_instruction(
    raw_ix: dict[str, Any],
    account_keys: list[str],
    tx_id: str,
) -> Instruction:
    if not isinstance(raw_ix, dict):
        raise BlockStructureError("instruction is not an object", transaction_id=tx_id)
    program_id = _resolve_key(account_keys, raw_ix.get("programIdIndex"), tx_id, "programIdIndex")
    accounts = [
        _resolve_key(account_keys, idx, tx_id, "account")
        for idx in raw_ix.get("accounts") or []
    ]
    return Instruction(
        program_id=program_id,
        accounts=accounts,
        data=_decode_data(raw_ix.get("data")),
    )


def _inner_by_index(meta: dict[str, Any] | None) -> dict[int, list[dict[str, Any]]]:
    """Map outer instruction index -> inner instructions it invoked."""
    out: dict[int, list[dict[str, Any]]] = {}
    for inner_block in (meta or {}).get("innerInstructions") or []:
        if not isinstance(inner_block, dict):
            raise BlockStructureError("inner instruction group is not an object")
        idx = inner_block.get("index")
        if not isinstance(idx, int):
            continue
        out.setdefault(idx, []).extend(inner_block.get("instructions") or [])
    return out


def parse_transaction(raw_tx: dict[str, Any]) -> Transaction | None:
    """
    Parse one getBlock transaction entry ({transaction, meta}).

    Returns None for failed transactions (meta.err set). Raises
    BlockStructureError when the message is missing or indices are invalid.
    """
    if not isinstance(raw_tx, dict):
        raise BlockStructureError("transaction entry is not an object")
    tx_obj = raw_tx.get("transaction")
    if not isinstance(tx_obj, dict):
        raise BlockStructureError("transaction must be json-encoded (object with message)")
    message = tx_obj.get("message")
    if not isinstance(message, dict):
        raise BlockStructureError("transaction has no message")
    meta = raw_tx.get("meta")
    if not isinstance(meta, dict):
        meta = None

    signatures = tx_obj.get("signatures") or []
    tx_id = signatures[0] if signatures else ""

    if meta is not None and meta.get("err") is not None:
        logger.debug("transaction_skipped_failed", transaction_id=tx_id)
        return None

    account_keys = _get_account_keys(message, meta)
    inner = _inner_by_index(meta)

    instructions: list[Instruction] = []
    for i, raw_ix in enumerate(message.get("instructions") or []):
        instructions.append(_parse_instruction(raw_ix, account_keys, tx_id))
        for raw_inner in inner.get(i, []):
            instructions.append(_parse_instruction(raw_inner, account_keys, tx_id))

    return Transaction(id=tx_id, instructions=instructions)


def parse_block(raw: dict[str, Any], slot: int | None = None) -> Block:
    """
    Parse a getBlock result into a Block.

    getBlock results carry no slot of their own; pass it explicitly or
    include a "slot" key in raw. Failed transactions are dropped.
    """
    if not isinstance(raw, dict):
        raise BlockStructureError("block payload is not an object")
    if slot is None:
        slot = raw.get("slot")
    if isinstance(slot, bool) or not isinstance(slot, int) or slot < 0:
        raise BlockStructureError("block slot is missing or invalid", slot=slot)

    block_time = raw.get("blockTime")
    if block_time is not None and not isinstance(block_time, int):
        try:
            block_time = int(block_time)
        except (TypeError, ValueError):
            block_time = None

    transactions: list[Transaction] = []
    skipped = 0
    for raw_tx in raw.get("transactions") or []:
        tx = parse_transaction(raw_tx)
        if tx is None:
            skipped += 1
            continue
        transactions.append(tx)

    logger.debug(
        "block_parsed",
        slot=slot,
        transactions=len(transactions),
        skipped_failed=skipped,
    )
    return Block(slot=slot, block_time=block_time, transactions=transactions)


def load_block(path: str | Path, slot: int | None = None) -> Block:
    """Read a getBlock JSON file (bare result or JSON-RPC envelope) and parse it."""
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    if isinstance(raw, dict) and "result" in raw and "jsonrpc" in raw:
        raw = raw["result"]
    if raw is None:
        raise BlockStructureError("block not available (null result)", path=str(path))
    return parse_block(raw, slot=slot)
