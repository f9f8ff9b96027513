from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GetBalanceInput:
    wallet_address: str
    token_contract_address: str | None = None


@dataclass(frozen=True)
class GetBalanceOutput:
    balance: int
    formatted_balance: str
    decimals: int
    symbol: str
