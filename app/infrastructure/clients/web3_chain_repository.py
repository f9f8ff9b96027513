from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
import logging
from typing import Any, Callable, TypeVar

from eth_account import Account
from web3 import Web3
from web3.exceptions import BadFunctionCallOutput, ContractLogicError, Web3Exception

from app.application.ports.chain_repository_port import (
    ContractError,
    NetworkError,
    ParseError,
    PoolNotFoundError,
    RpcError,
)
from app.domain.entities.pool import PairReserves
from app.domain.entities.swap import SwapQuote
from app.domain.entities.token import NATIVE_DECIMALS, TokenBalance, TokenMetadata
from app.domain.services.addresses import same_address
from app.domain.services.pricing import price
from app.infrastructure.clients.abis import (
    ERC20_ABI,
    ERC20_BYTES32_SYMBOL_ABI,
    UNISWAP_V2_FACTORY_ABI,
    UNISWAP_V2_PAIR_ABI,
    UNISWAP_V2_ROUTER_ABI,
    UNISWAP_V3_QUOTER_V2_ABI,
    UNISWAP_V3_SWAP_ROUTER_ABI,
)


logger = logging.getLogger(__name__)

T = TypeVar("T")

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


@dataclass(frozen=True)
class Web3ChainRepositorySettings:
    uniswap_v2_factory: str
    uniswap_v2_router: str
    uniswap_v3_quoter: str
    uniswap_v3_swap_router: str
    usd_stablecoin_address: str
    usd_stablecoin_decimals: int
    wrapped_native_address: str


def build_web3(*, rpc_url: str, timeout_seconds: float) -> Web3:
    return Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout_seconds}))


def _checksum(value: str) -> str:
    try:
        return Web3.to_checksum_address(value)
    except (TypeError, ValueError) as exc:
        raise ParseError(f"Invalid address: {value}") from exc


def _decode_symbol(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).split(b"\x00")[0].decode("utf-8", errors="replace")
    return str(value)


class Web3ChainRepository:
    def __init__(
        self,
        *,
        web3: Web3,
        settings: Web3ChainRepositorySettings,
        private_key: str | None = None,
    ):
        self._web3 = web3
        self._settings = settings
        self._wallet_address: str | None = None
        if private_key:
            try:
                self._wallet_address = Account.from_key(private_key).address
            except (TypeError, ValueError) as exc:
                raise ParseError("Invalid wallet private key") from exc

    @property
    def wallet_address(self) -> str | None:
        return self._wallet_address

    def get_native_balance(self, *, address: str) -> int:
        owner = _checksum(address)
        return int(self._guard("get_native_balance", lambda: self._web3.eth.get_balance(owner)))

    def get_token_balance(self, *, token: str, owner: str) -> TokenBalance:
        contract = self._contract(token, ERC20_ABI)
        holder = _checksum(owner)
        balance = self._guard("balanceOf", lambda: contract.functions.balanceOf(holder).call())
        metadata = self.get_token_metadata(token=token)
        return TokenBalance(balance=int(balance), decimals=metadata.decimals, symbol=metadata.symbol)

    def get_token_metadata(self, *, token: str) -> TokenMetadata:
        contract = self._contract(token, ERC20_ABI)
        decimals = self._guard("decimals", lambda: contract.functions.decimals().call())
        return TokenMetadata(symbol=self._read_symbol(token, contract), decimals=int(decimals))

    def _read_symbol(self, token: str, contract: Any) -> str:
        try:
            return str(self._guard("symbol", lambda: contract.functions.symbol().call()))
        except ContractError:
            logger.info("web3_chain_repository: symbol_retry_bytes32 token=%s", token)
        legacy = self._contract(token, ERC20_BYTES32_SYMBOL_ABI)
        raw = self._guard("symbol_bytes32", lambda: legacy.functions.symbol().call())
        return _decode_symbol(raw)

    def get_gas_price(self) -> int:
        return int(self._guard("gas_price", lambda: self._web3.eth.gas_price))

    def get_pair_reserves(self, *, token_a: str, token_b: str) -> PairReserves:
        first = _checksum(token_a)
        second = _checksum(token_b)
        factory = self._contract(self._settings.uniswap_v2_factory, UNISWAP_V2_FACTORY_ABI)
        pair_address = self._guard("getPair", lambda: factory.functions.getPair(first, second).call())
        if same_address(pair_address, ZERO_ADDRESS):
            raise PoolNotFoundError(token_a=first, token_b=second)

        pair = self._contract(pair_address, UNISWAP_V2_PAIR_ABI)
        reserve0, reserve1, _ = self._guard("getReserves", lambda: pair.functions.getReserves().call())
        token0 = self._guard("token0", lambda: pair.functions.token0().call())
        logger.debug(
            "web3_chain_repository: pair_reserves pair=%s token0=%s reserve0=%s reserve1=%s",
            pair_address,
            token0,
            reserve0,
            reserve1,
        )
        if same_address(token0, first):
            return PairReserves(
                reserve_a=int(reserve0),
                reserve_b=int(reserve1),
                token_a=first,
                token_b=second,
            )
        return PairReserves(
            reserve_a=int(reserve1),
            reserve_b=int(reserve0),
            token_a=first,
            token_b=second,
        )

    def get_native_usd_price(self) -> Decimal:
        reserves = self.get_pair_reserves(
            token_a=self._settings.usd_stablecoin_address,
            token_b=self._settings.wrapped_native_address,
        )
        if not reserves.has_liquidity:
            raise ContractError("Invalid reserves in stablecoin/wrapped native pair")
        return price(
            reserves.reserve_a,
            reserves.reserve_b,
            self._settings.usd_stablecoin_decimals,
            NATIVE_DECIMALS,
        )

    def get_swap_output_amounts(self, *, amount_in: int, path: list[str]) -> list[int]:
        route = self._route(path)
        router = self._contract(self._settings.uniswap_v2_router, UNISWAP_V2_ROUTER_ABI)
        amounts = self._guard(
            "getAmountsOut",
            lambda: router.functions.getAmountsOut(amount_in, route).call(),
        )
        return [int(value) for value in amounts]

    def simulate_swap(
        self,
        *,
        from_address: str,
        amount_in: int,
        min_out: int,
        path: list[str],
        deadline: int,
    ) -> int:
        sender = _checksum(from_address)
        route = self._route(path)
        router = self._contract(self._settings.uniswap_v2_router, UNISWAP_V2_ROUTER_ABI)
        swap = router.functions.swapExactTokensForTokens(amount_in, min_out, route, sender, deadline)
        return self._dry_run("swapExactTokensForTokens", swap, sender)

    def get_concentrated_liquidity_quote(
        self,
        *,
        token_in: str,
        token_out: str,
        amount_in: int,
        fee_tier: int,
    ) -> SwapQuote:
        params = (_checksum(token_in), _checksum(token_out), amount_in, fee_tier, 0)
        quoter = self._contract(self._settings.uniswap_v3_quoter, UNISWAP_V3_QUOTER_V2_ABI)
        amount_out, _, _, gas_estimate = self._guard(
            "quoteExactInputSingle",
            lambda: quoter.functions.quoteExactInputSingle(params).call(),
        )
        return SwapQuote(amount_out=int(amount_out), gas_estimate=int(gas_estimate), fee_tier=fee_tier)

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
        sender = _checksum(from_address)
        params = (
            _checksum(token_in),
            _checksum(token_out),
            fee_tier,
            sender,
            deadline,
            amount_in,
            min_out,
            0,
        )
        router = self._contract(self._settings.uniswap_v3_swap_router, UNISWAP_V3_SWAP_ROUTER_ABI)
        swap = router.functions.exactInputSingle(params)
        return self._dry_run("exactInputSingle", swap, sender)

    def _dry_run(self, operation: str, function: Any, sender: str) -> int:
        transaction = {"from": sender}
        self._guard(operation, lambda: function.call(transaction))
        gas = self._guard(f"{operation}.estimate_gas", lambda: function.estimate_gas(transaction))
        logger.debug("web3_chain_repository: dry_run operation=%s sender=%s gas=%s", operation, sender, gas)
        return int(gas)

    def _route(self, path: list[str]) -> list[str]:
        if len(path) < 2:
            raise ParseError("Swap path must contain at least two tokens")
        return [_checksum(token) for token in path]

    def _contract(self, address: str, abi: list[dict]) -> Any:
        return self._web3.eth.contract(address=_checksum(address), abi=abi)

    def _guard(self, operation: str, call: Callable[[], T]) -> T:
        try:
            return call()
        except (ContractLogicError, BadFunctionCallOutput) as exc:
            logger.warning("web3_chain_repository: contract_error operation=%s error=%s", operation, exc)
            raise ContractError(f"{operation}: {exc}") from exc
        except OSError as exc:
            logger.warning("web3_chain_repository: network_error operation=%s error=%s", operation, exc)
            raise NetworkError(f"{operation}: {exc}") from exc
        except (Web3Exception, ValueError) as exc:
            logger.warning("web3_chain_repository: rpc_error operation=%s error=%s", operation, exc)
            raise RpcError(f"{operation}: {exc}") from exc
