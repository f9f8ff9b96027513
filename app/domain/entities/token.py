from __future__ import annotations

from dataclasses import dataclass


NATIVE_SYMBOL = "ETH"
NATIVE_DECIMALS = 18


@dataclass(frozen=True)
class TokenMetadata:
    symbol: str
    decimals: int


@dataclass(frozen=True)
class TokenBalance:
    balance: int
    decimals: int
    symbol: str
