from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulateSwapInput:
    from_token: str
    to_token: str
    amount: str
    slippage_tolerance: str
    protocol_version: str | None = None
    from_address: str | None = None


@dataclass(frozen=True)
class SimulateSwapOutput:
    estimated_output: str
    estimated_output_raw: int
    minimum_output: str
    minimum_output_raw: int
    estimated_gas: int
    estimated_gas_native: str
    price_impact: str
    exchange_rate: str
    note: str
    fee_tier: int | None = None
