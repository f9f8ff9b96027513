from __future__ import annotations

from fastapi import HTTPException

from app.domain.exceptions import (
    BlockchainError,
    ExternalApiError,
    InsufficientBalanceError,
    InsufficientLiquidityError,
    InvalidAmountError,
    InvalidWalletAddressError,
    LiquidityPoolNotFoundError,
    PriceImpactTooHighError,
    ServiceError,
    SlippageExceededError,
    SwapAmountTooSmallError,
    SwapSimulationFailedError,
    TokenNotFoundError,
)


STATUS_BY_ERROR: dict[type[ServiceError], int] = {
    InvalidWalletAddressError: 400,
    InvalidAmountError: 400,
    TokenNotFoundError: 404,
    LiquidityPoolNotFoundError: 404,
    InsufficientLiquidityError: 422,
    SwapSimulationFailedError: 422,
    InsufficientBalanceError: 422,
    PriceImpactTooHighError: 422,
    SlippageExceededError: 422,
    SwapAmountTooSmallError: 422,
    BlockchainError: 502,
    ExternalApiError: 502,
}


def to_http_exception(exc: ServiceError) -> HTTPException:
    status_code = STATUS_BY_ERROR.get(type(exc), 500)
    return HTTPException(
        status_code=status_code,
        detail={"type": exc.kind, "message": str(exc)},
    )
