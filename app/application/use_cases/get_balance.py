from __future__ import annotations

import logging

from app.application.dto.balance import GetBalanceInput, GetBalanceOutput
from app.application.ports.chain_repository_port import (
    ChainRepositoryPort,
    RepositoryError,
    to_service_error,
)
from app.domain.entities.token import NATIVE_DECIMALS, NATIVE_SYMBOL, TokenBalance
from app.domain.services.addresses import parse_address
from app.domain.services.amounts import format_raw_amount


logger = logging.getLogger(__name__)


class GetBalanceUseCase:
    def __init__(self, *, chain_port: ChainRepositoryPort):
        self._chain_port = chain_port

    def execute(self, command: GetBalanceInput) -> GetBalanceOutput:
        wallet = parse_address(command.wallet_address, field_name="wallet_address")
        token = None
        if command.token_contract_address is not None:
            token = parse_address(
                command.token_contract_address,
                field_name="token_contract_address",
            )

        try:
            if token is None:
                holding = TokenBalance(
                    balance=self._chain_port.get_native_balance(address=wallet),
                    decimals=NATIVE_DECIMALS,
                    symbol=NATIVE_SYMBOL,
                )
            else:
                holding = self._chain_port.get_token_balance(token=token, owner=wallet)
        except RepositoryError as exc:
            raise to_service_error(exc) from exc

        logger.info(
            "get_balance: fetched wallet=%s token=%s symbol=%s balance=%s",
            wallet,
            token or "native",
            holding.symbol,
            holding.balance,
        )
        return GetBalanceOutput(
            balance=holding.balance,
            formatted_balance=format_raw_amount(holding.balance, holding.decimals),
            decimals=holding.decimals,
            symbol=holding.symbol,
        )
