from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PairReserves:
    reserve_a: int
    reserve_b: int
    token_a: str
    token_b: str

    @property
    def has_liquidity(self) -> bool:
        return self.reserve_a > 0 and self.reserve_b > 0
