from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import get_balance_use_case
from app.api.errors import to_http_exception
from app.api.schemas.balance import BalanceRequest, BalanceResponse
from app.application.dto.balance import GetBalanceInput
from app.application.use_cases.get_balance import GetBalanceUseCase
from app.domain.exceptions import ServiceError

router = APIRouter()


@router.post("/v1/balance", response_model=BalanceResponse)
def get_balance(
    req: BalanceRequest,
    use_case: GetBalanceUseCase = Depends(get_balance_use_case),
):
    try:
        result = use_case.execute(
            GetBalanceInput(
                wallet_address=req.wallet_address,
                token_contract_address=req.token_contract_address,
            )
        )
    except ServiceError as exc:
        raise to_http_exception(exc) from exc

    return BalanceResponse(
        balance=str(result.balance),
        formatted_balance=result.formatted_balance,
        decimals=result.decimals,
        symbol=result.symbol,
    )
