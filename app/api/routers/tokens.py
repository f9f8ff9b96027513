from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import get_token_registry
from app.api.schemas.tokens import SupportedTokensResponse
from app.domain.services.token_registry import TokenRegistry

router = APIRouter()


@router.get("/v1/tokens", response_model=SupportedTokensResponse)
def list_supported_tokens(registry: TokenRegistry = Depends(get_token_registry)):
    symbols = registry.list_supported()
    return SupportedTokensResponse(tokens=symbols, count=len(symbols))
