from __future__ import annotations

from functools import lru_cache
import logging

from fastapi import HTTPException

from app.application.ports.chain_repository_port import ParseError
from app.application.use_cases.get_balance import GetBalanceUseCase
from app.application.use_cases.get_token_price import GetTokenPriceUseCase
from app.application.use_cases.simulate_swap import SimulateSwapUseCase
from app.domain.services.token_registry import TOKEN_REGISTRY, TokenRegistry
from app.infrastructure.clients.web3_chain_repository import (
    Web3ChainRepository,
    Web3ChainRepositorySettings,
    build_web3,
)
from app.shared.config import get_settings


logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _get_chain_repository() -> Web3ChainRepository:
    settings = get_settings()
    if not settings.rpc_url:
        raise HTTPException(status_code=500, detail="RPC_URL is required.")
    try:
        repository = Web3ChainRepository(
            web3=build_web3(rpc_url=settings.rpc_url, timeout_seconds=settings.rpc_timeout_seconds),
            settings=Web3ChainRepositorySettings(
                uniswap_v2_factory=settings.uniswap_v2_factory,
                uniswap_v2_router=settings.uniswap_v2_router,
                uniswap_v3_quoter=settings.uniswap_v3_quoter,
                uniswap_v3_swap_router=settings.uniswap_v3_swap_router,
                usd_stablecoin_address=settings.usd_stablecoin_address,
                usd_stablecoin_decimals=settings.usd_stablecoin_decimals,
                wrapped_native_address=settings.wrapped_native_address,
            ),
            private_key=settings.wallet_private_key,
        )
    except ParseError as exc:
        raise HTTPException(status_code=500, detail="WALLET_PRIVATE_KEY is invalid.") from exc

    if repository.wallet_address:
        logger.info("deps: chain_repository_ready wallet=%s", repository.wallet_address)
    else:
        logger.info("deps: chain_repository_ready mode=read_only")
    return repository


def get_token_registry() -> TokenRegistry:
    return TOKEN_REGISTRY


def get_balance_use_case() -> GetBalanceUseCase:
    return GetBalanceUseCase(chain_port=_get_chain_repository())


def get_token_price_use_case() -> GetTokenPriceUseCase:
    settings = get_settings()
    return GetTokenPriceUseCase(
        chain_port=_get_chain_repository(),
        registry=get_token_registry(),
        wrapped_native_address=settings.wrapped_native_address,
    )


def get_simulate_swap_use_case() -> SimulateSwapUseCase:
    return SimulateSwapUseCase(
        chain_port=_get_chain_repository(),
        registry=get_token_registry(),
    )
