from __future__ import annotations

from pydantic import BaseModel, Field


class TokenPriceRequest(BaseModel):
    symbol: str | None = Field(None, description="Simbolo registrado (ex.: USDC, WETH).")
    contract_address: str | None = Field(None, description="Contrato do token (0x...).")


class TokenPriceResponse(BaseModel):
    symbol: str
    address: str
    price_usd: str
    price_eth: str
    timestamp: int = Field(..., description="Unix timestamp em segundos.")
