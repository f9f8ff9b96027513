from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import get_token_price_use_case
from app.api.errors import to_http_exception
from app.api.schemas.token_price import TokenPriceRequest, TokenPriceResponse
from app.application.dto.token_price import GetTokenPriceInput
from app.application.use_cases.get_token_price import GetTokenPriceUseCase
from app.domain.exceptions import ServiceError
from app.domain.services.amounts import format_decimal

router = APIRouter()


@router.post("/v1/token-price", response_model=TokenPriceResponse)
def get_token_price(
    req: TokenPriceRequest,
    use_case: GetTokenPriceUseCase = Depends(get_token_price_use_case),
):
    try:
        result = use_case.execute(
            GetTokenPriceInput(
                symbol=req.symbol,
                contract_address=req.contract_address,
            )
        )
    except ServiceError as exc:
        raise to_http_exception(exc) from exc

    return TokenPriceResponse(
        symbol=result.symbol,
        address=result.address,
        price_usd=format_decimal(result.price_usd),
        price_eth=format_decimal(result.price_native),
        timestamp=result.timestamp,
    )
