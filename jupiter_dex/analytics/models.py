"""
Data models for derived per-block records.

TradingData is one decoded Jupiter instruction; JupiterInstruction adds
enriched accounts; JupiterAnalytics is the per-block summary. All are
recomputed from the block on every call and never persisted here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AccountOwnershipRecord:
    """
    Immutable (account, owner, mint) fact learned when a token account is initialized.

    Fields are base58 strings or raw 32-byte addresses; the owner index
    normalizes both to base58.
    """

    account: str | bytes
    owner: str | bytes
    mint: str | bytes

    @classmethod
    def from_dict(cls, item: dict[str, Any]) -> "AccountOwnershipRecord":
        return cls(account=item["account"], owner=item["owner"], mint=item["mint"])


@dataclass(frozen=True)
class TokenPriceRecord:
    """Token price snapshot entry. Only mint_address is used by the stages."""

    mint_address: str
    price_usd: float = 0.0
    timestamp: int = 0
    volume_24h: float = 0.0
    price_change_24h: float = 0.0

    @classmethod
    def from_dict(cls, item: dict[str, Any]) -> "TokenPriceRecord":
        return cls(
            mint_address=item["mint_address"],
            price_usd=float(item.get("price_usd") or 0.0),
            timestamp=int(item.get("timestamp") or 0),
            volume_24h=float(item.get("volume_24h") or 0.0),
            price_change_24h=float(item.get("price_change_24h") or 0.0),
        )


@dataclass
class TradingData:
    """Decode result for one Jupiter instruction. amount_in == 0 means no swap recovered."""

    program_id: str
    transaction_id: str
    slot: int
    block_time: int
    accounts: list[str]
    data: bytes
    amount_in: int = 0
    amount_out: int = 0
    input_mint: str = ""
    output_mint: str = ""
    user_wallet: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "program_id": self.program_id,
            "transaction_id": self.transaction_id,
            "slot": self.slot,
            "block_time": self.block_time,
            "accounts": list(self.accounts),
            "data": self.data.hex(),
            "amount_in": self.amount_in,
            "amount_out": self.amount_out,
            "input_mint": self.input_mint,
            "output_mint": self.output_mint,
            "user_wallet": self.user_wallet,
        }


@dataclass
class TradingDataList:
    items: list[TradingData] = field(default_factory=list)
    total_volume: int = 0
    swap_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [t.to_dict() for t in self.items],
            "total_volume": self.total_volume,
            "swap_count": self.swap_count,
        }


@dataclass(frozen=True)
class EnrichedAccount:
    """Account reference with resolved owner and mint ("" when unresolved)."""

    address: str
    owner: str = ""
    mint: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"address": self.address, "owner": self.owner, "mint": self.mint}


@dataclass
class JupiterInstruction:
    program_id: str
    transaction_id: str
    slot: int
    block_time: int
    accounts: list[EnrichedAccount]
    data: bytes
    amount_in: int = 0
    amount_out: int = 0
    input_mint: str = ""
    output_mint: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "program_id": self.program_id,
            "transaction_id": self.transaction_id,
            "slot": self.slot,
            "block_time": self.block_time,
            "accounts": [a.to_dict() for a in self.accounts],
            "data": self.data.hex(),
            "amount_in": self.amount_in,
            "amount_out": self.amount_out,
            "input_mint": self.input_mint,
            "output_mint": self.output_mint,
        }


@dataclass
class JupiterInstructions:
    instructions: list[JupiterInstruction] = field(default_factory=list)
    total_volume: int = 0
    instruction_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "instructions": [ix.to_dict() for ix in self.instructions],
            "total_volume": self.total_volume,
            "instruction_count": self.instruction_count,
        }


@dataclass(frozen=True)
class ProgramStat:
    program_id: str
    instruction_count: int
    total_volume: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "program_id": self.program_id,
            "instruction_count": self.instruction_count,
            "total_volume": self.total_volume,
        }


@dataclass
class JupiterAnalytics:
    """
    Per-block summary.

    top_programs holds at most 5 entries, instruction_count descending,
    ties in first-seen order.
    """

    total_instructions: int = 0
    unique_accounts: int = 0
    unique_mints: int = 0
    top_programs: list[ProgramStat] = field(default_factory=list)
    total_volume: int = 0
    total_swaps: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_instructions": self.total_instructions,
            "unique_accounts": self.unique_accounts,
            "unique_mints": self.unique_mints,
            "top_programs": [p.to_dict() for p in self.top_programs],
            "total_volume": self.total_volume,
            "total_swaps": self.total_swaps,
        }
