from __future__ import annotations

import logging
import time
from decimal import Decimal
from typing import Callable

from app.application.dto.token_price import GetTokenPriceInput, GetTokenPriceOutput
from app.application.ports.chain_repository_port import (
    ChainRepositoryPort,
    RepositoryError,
    to_service_error,
)
from app.application.use_cases.token_resolution import resolve_symbol
from app.domain.entities.token import NATIVE_DECIMALS, TokenMetadata
from app.domain.exceptions import InsufficientLiquidityError, InvalidAmountError
from app.domain.services.addresses import parse_address, same_address
from app.domain.services.amounts import normalize
from app.domain.services.pricing import RATIO_CONTEXT, price
from app.domain.services.token_registry import (
    TOKEN_REGISTRY,
    WRAPPED_NATIVE_ADDRESS,
    TokenRegistry,
)


logger = logging.getLogger(__name__)


class GetTokenPriceUseCase:
    def __init__(
        self,
        *,
        chain_port: ChainRepositoryPort,
        registry: TokenRegistry = TOKEN_REGISTRY,
        wrapped_native_address: str = WRAPPED_NATIVE_ADDRESS,
        clock: Callable[[], float] = time.time,
    ):
        self._chain_port = chain_port
        self._registry = registry
        self._wrapped_native = parse_address(wrapped_native_address)
        self._clock = clock

    def execute(self, command: GetTokenPriceInput) -> GetTokenPriceOutput:
        if (command.symbol is None) == (command.contract_address is None):
            raise InvalidAmountError("Provide exactly one of symbol or contract_address.")

        try:
            metadata: TokenMetadata | None = None
            if command.symbol is not None:
                symbol = command.symbol.strip().upper()
                address = resolve_symbol(symbol, registry=self._registry)
            else:
                address = parse_address(command.contract_address, field_name="contract_address")
                metadata = self._chain_port.get_token_metadata(token=address)
                symbol = metadata.symbol

            logger.info("get_token_price: resolving symbol=%s address=%s", symbol, address)
            if same_address(address, self._wrapped_native):
                price_native = Decimal("1")
                price_usd = self._chain_port.get_native_usd_price()
            else:
                price_native, price_usd = self._price_from_native_pair(
                    token=address,
                    metadata=metadata,
                )
        except RepositoryError as exc:
            raise to_service_error(exc) from exc

        return GetTokenPriceOutput(
            symbol=symbol,
            address=address,
            price_usd=normalize(price_usd),
            price_native=normalize(price_native),
            timestamp=int(self._clock()),
        )

    def _price_from_native_pair(
        self,
        *,
        token: str,
        metadata: TokenMetadata | None,
    ) -> tuple[Decimal, Decimal]:
        if metadata is None:
            metadata = self._chain_port.get_token_metadata(token=token)

        reserves = self._chain_port.get_pair_reserves(token_a=token, token_b=self._wrapped_native)
        if not reserves.has_liquidity:
            raise InsufficientLiquidityError(
                f"No liquidity in pair for token {token} and {self._wrapped_native}"
            )

        price_native = price(
            reserves.reserve_b,
            reserves.reserve_a,
            NATIVE_DECIMALS,
            metadata.decimals,
        )
        native_usd = self._chain_port.get_native_usd_price()
        return price_native, RATIO_CONTEXT.multiply(price_native, native_usd)
