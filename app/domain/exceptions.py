from __future__ import annotations


class DomainError(Exception):
    """Base para erros de dominio."""


class ServiceError(DomainError):
    """Erro classificado retornado pelas operacoes de consulta e simulacao."""

    kind = "InternalError"
    prefix = "Internal error"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        if not self.message:
            return self.prefix
        return f"{self.prefix}: {self.message}"


class InvalidWalletAddressError(ServiceError):
    """Endereco de carteira ou contrato invalido."""

    kind = "InvalidWalletAddress"
    prefix = "Invalid wallet address"


class TokenNotFoundError(ServiceError):
    """Simbolo nao registrado."""

    kind = "TokenNotFound"
    prefix = "Token not found or not supported"


class InvalidAmountError(ServiceError):
    """Quantidade, slippage ou versao de protocolo invalidos."""

    kind = "InvalidAmount"
    prefix = "Invalid amount"


class InsufficientBalanceError(ServiceError):
    """Saldo insuficiente para a operacao."""

    kind = "InsufficientBalance"
    prefix = "Insufficient balance"

    def __init__(self, *, required: str, available: str):
        super().__init__(f"required {required}, available {available}")
        self.required = required
        self.available = available


class PriceImpactTooHighError(ServiceError):
    """Impacto de preco acima do limite permitido."""

    kind = "PriceImpactTooHigh"
    prefix = "Price impact too high"

    def __init__(self, *, impact: str, max_impact: str):
        super().__init__(f"{impact}%, maximum allowed: {max_impact}%")
        self.impact = impact
        self.max_impact = max_impact


class SlippageExceededError(ServiceError):
    """Slippage real acima da tolerancia."""

    kind = "SlippageExceeded"
    prefix = "Slippage tolerance exceeded"


class SwapAmountTooSmallError(ServiceError):
    """Quantidade abaixo do minimo para o swap."""

    kind = "SwapAmountTooSmall"
    prefix = "Swap amount too small"

    def __init__(self, *, minimum: str):
        super().__init__(f"minimum {minimum}")
        self.minimum = minimum


class LiquidityPoolNotFoundError(ServiceError):
    """Nao existe pool para o par solicitado."""

    kind = "LiquidityPoolNotFound"
    prefix = "Liquidity pool not found"

    def __init__(self, *, token0: str, token1: str):
        super().__init__(f"pair {token0}/{token1}")
        self.token0 = token0
        self.token1 = token1


class InsufficientLiquidityError(ServiceError):
    """Pool com reserva zerada em algum dos lados."""

    kind = "InsufficientLiquidity"
    prefix = "Insufficient liquidity in pool"


class SwapSimulationFailedError(ServiceError):
    """Simulacao de swap falhou com diagnostico acionavel."""

    kind = "SwapSimulationFailed"
    prefix = "Swap simulation failed"


class ExternalApiError(ServiceError):
    """Falha em fonte de dados externa fora da blockchain."""

    kind = "ExternalApiError"
    prefix = "External API error"


class BlockchainError(ServiceError):
    """Falha de RPC, contrato ou rede ao consultar a blockchain."""

    kind = "BlockchainError"
    prefix = "Blockchain connection error"


class InternalError(ServiceError):
    """Erro nao classificado."""
