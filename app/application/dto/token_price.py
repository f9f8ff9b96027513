from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class GetTokenPriceInput:
    symbol: str | None = None
    contract_address: str | None = None


@dataclass(frozen=True)
class GetTokenPriceOutput:
    symbol: str
    address: str
    price_usd: Decimal
    price_native: Decimal
    timestamp: int
