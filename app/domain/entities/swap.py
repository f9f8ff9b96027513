from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# 0.05%, 0.3% and 1% in hundredths of a basis point, in probing order.
STANDARD_FEE_TIERS: tuple[int, ...] = (500, 3000, 10000)

TYPICAL_SWAP_GAS = 150_000
SWAP_DEADLINE_SECONDS = 3600


class ProtocolVersion(str, Enum):
    V2 = "v2"
    V3 = "v3"


@dataclass(frozen=True)
class SwapQuote:
    amount_out: int
    gas_estimate: int
    fee_tier: int | None = None


@dataclass(frozen=True)
class FeeTierOutcome:
    fee_tier: int
    quote: SwapQuote | None
    error: str | None = None
