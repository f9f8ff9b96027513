from __future__ import annotations

from pydantic import BaseModel, Field


class SwapSimulationRequest(BaseModel):
    from_token: str = Field(..., description="Simbolo ou contrato do token de entrada.")
    to_token: str = Field(..., description="Simbolo ou contrato do token de saida.")
    amount: str = Field(..., description="Quantidade de entrada em unidades do token (ex.: 1.5).")
    slippage_tolerance: str = Field(..., description="Tolerancia de slippage em percentual (ex.: 0.5).")
    uniswap_version: str | None = Field("v2", description="Versao do protocolo: v2|v3.")
    from_address: str | None = Field(
        None,
        description="Carteira usada na simulacao de gas. Quando ausente, usa estimativa tipica.",
    )


class SwapSimulationResponse(BaseModel):
    estimated_output: str
    estimated_output_raw: str
    minimum_output: str
    estimated_gas: str
    estimated_gas_eth: str
    price_impact: str
    exchange_rate: str
    fee_tier: int | None = None
    transaction_data: str = Field(..., description="Descricao legivel da simulacao, nao assinavel.")
