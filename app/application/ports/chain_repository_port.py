from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from app.domain.entities.pool import PairReserves
from app.domain.entities.swap import SwapQuote
from app.domain.entities.token import TokenBalance, TokenMetadata
from app.domain.exceptions import (
    BlockchainError,
    InternalError,
    InvalidWalletAddressError,
    LiquidityPoolNotFoundError,
    ServiceError,
)


class RepositoryError(RuntimeError):
    """Falha ao ler dados da blockchain."""


class RpcError(RepositoryError):
    """Erro retornado pelo no RPC."""


class ContractError(RepositoryError):
    """Chamada de contrato revertida ou com retorno invalido."""


class PoolNotFoundError(ContractError):
    """Factory nao possui pool para o par."""

    def __init__(self, *, token_a: str, token_b: str):
        super().__init__(f"Pair not found for {token_a}/{token_b}")
        self.token_a = token_a
        self.token_b = token_b


class NetworkError(RepositoryError):
    """Falha de transporte ate o no."""


class ParseError(RepositoryError):
    """Endereco ou dado de entrada nao pode ser interpretado."""


def to_service_error(exc: RepositoryError) -> ServiceError:
    if isinstance(exc, PoolNotFoundError):
        return LiquidityPoolNotFoundError(token0=exc.token_a, token1=exc.token_b)
    if isinstance(exc, (RpcError, NetworkError, ContractError)):
        return BlockchainError(f"Failed to interact with blockchain: {exc}")
    if isinstance(exc, ParseError):
        return InvalidWalletAddressError(str(exc))
    return InternalError(str(exc))


class ChainRepositoryPort(Protocol):
    def get_native_balance(self, *, address: str) -> int:
        ...

    def get_token_balance(self, *, token: str, owner: str) -> TokenBalance:
        ...

    def get_token_metadata(self, *, token: str) -> TokenMetadata:
        ...

    def get_gas_price(self) -> int:
        ...

    def get_pair_reserves(self, *, token_a: str, token_b: str) -> PairReserves:
        ...

    def get_native_usd_price(self) -> Decimal:
        ...

    def get_swap_output_amounts(self, *, amount_in: int, path: list[str]) -> list[int]:
        ...

    def simulate_swap(
        self,
        *,
        from_address: str,
        amount_in: int,
        min_out: int,
        path: list[str],
        deadline: int,
    ) -> int:
        ...

    def get_concentrated_liquidity_quote(
        self,
        *,
        token_in: str,
        token_out: str,
        amount_in: int,
        fee_tier: int,
    ) -> SwapQuote:
        ...

    def simulate_concentrated_liquidity_swap(
        self,
        *,
        from_address: str,
        token_in: str,
        token_out: str,
        amount_in: int,
        min_out: int,
        fee_tier: int,
        deadline: int,
    ) -> int:
        ...
