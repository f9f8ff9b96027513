from __future__ import annotations

from pydantic import BaseModel, Field


class BalanceRequest(BaseModel):
    wallet_address: str = Field(..., description="Endereco da carteira (0x...).")
    token_contract_address: str | None = Field(
        None,
        description="Contrato ERC20. Quando ausente, retorna o saldo nativo (ETH).",
    )


class BalanceResponse(BaseModel):
    balance: str = Field(..., description="Saldo bruto na menor unidade do token.")
    formatted_balance: str
    decimals: int
    symbol: str
