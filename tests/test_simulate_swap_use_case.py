from __future__ import annotations

from decimal import Decimal
import unittest

from app.application.dto.simulate_swap import SimulateSwapInput
from app.application.ports.chain_repository_port import (
    ContractError,
    PoolNotFoundError,
    RepositoryError,
    RpcError,
)
from app.application.use_cases.simulate_swap import SimulateSwapUseCase
from app.domain.entities.pool import PairReserves
from app.domain.entities.swap import SwapQuote
from app.domain.entities.token import TokenMetadata
from app.domain.exceptions import (
    BlockchainError,
    InsufficientLiquidityError,
    InvalidAmountError,
    InvalidWalletAddressError,
    SwapSimulationFailedError,
    TokenNotFoundError,
)


WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
SENDER = "0x1111111111111111111111111111111111111111"
NOW = 1_700_000_000


class FakeChainRepository:
    def __init__(
        self,
        *,
        amounts_out: list[int] | None = None,
        reserves: PairReserves | RepositoryError | None = None,
        quotes: dict[int, SwapQuote | RepositoryError] | None = None,
        simulated_gas: int | RepositoryError | None = None,
        metadata_error: RepositoryError | None = None,
        gas_price: int = 10,
    ):
        self._metadata = {
            WETH.lower(): TokenMetadata(symbol="WETH", decimals=18),
            USDC.lower(): TokenMetadata(symbol="USDC", decimals=6),
        }
        self._amounts_out = amounts_out if amounts_out is not None else []
        self._reserves = reserves
        self._quotes = quotes or {}
        self._simulated_gas = simulated_gas
        self._metadata_error = metadata_error
        self._gas_price = gas_price
        self.probed_fee_tiers: list[int] = []
        self.simulations: list[dict] = []

    def get_native_balance(self, *, address: str) -> int:
        raise AssertionError("not used")

    def get_token_balance(self, *, token: str, owner: str):
        raise AssertionError("not used")

    def get_token_metadata(self, *, token: str) -> TokenMetadata:
        if self._metadata_error is not None:
            raise self._metadata_error
        return self._metadata[token.lower()]

    def get_gas_price(self) -> int:
        return self._gas_price

    def get_pair_reserves(self, *, token_a: str, token_b: str) -> PairReserves:
        if self._reserves is None:
            raise PoolNotFoundError(token_a=token_a, token_b=token_b)
        if isinstance(self._reserves, RepositoryError):
            raise self._reserves
        return self._reserves

    def get_native_usd_price(self) -> Decimal:
        return Decimal("2000")

    def get_swap_output_amounts(self, *, amount_in: int, path: list[str]) -> list[int]:
        _ = (amount_in, path)
        return self._amounts_out

    def simulate_swap(
        self,
        *,
        from_address: str,
        amount_in: int,
        min_out: int,
        path: list[str],
        deadline: int,
    ) -> int:
        return self._record_simulation(
            from_address=from_address,
            amount_in=amount_in,
            min_out=min_out,
            deadline=deadline,
            fee_tier=None,
        )

    def get_concentrated_liquidity_quote(
        self,
        *,
        token_in: str,
        token_out: str,
        amount_in: int,
        fee_tier: int,
    ) -> SwapQuote:
        _ = (token_in, token_out, amount_in)
        self.probed_fee_tiers.append(fee_tier)
        outcome = self._quotes.get(fee_tier, ContractError("execution reverted"))
        if isinstance(outcome, RepositoryError):
            raise outcome
        return outcome

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
        _ = (token_in, token_out)
        return self._record_simulation(
            from_address=from_address,
            amount_in=amount_in,
            min_out=min_out,
            deadline=deadline,
            fee_tier=fee_tier,
        )

    def _record_simulation(self, **call) -> int:
        self.simulations.append(call)
        if self._simulated_gas is None:
            raise AssertionError("simulation not expected")
        if isinstance(self._simulated_gas, RepositoryError):
            raise self._simulated_gas
        return self._simulated_gas


def _deep_pool() -> PairReserves:
    return PairReserves(
        reserve_a=1_000 * 10**18,
        reserve_b=2_000_000 * 10**6,
        token_a=WETH,
        token_b=USDC,
    )


def _use_case(repository: FakeChainRepository) -> SimulateSwapUseCase:
    return SimulateSwapUseCase(chain_port=repository, clock=lambda: NOW)


def _input(**overrides) -> SimulateSwapInput:
    payload = {
        "from_token": "WETH",
        "to_token": "usdc",
        "amount": "1",
        "slippage_tolerance": "0.5",
        "protocol_version": None,
        "from_address": None,
    }
    payload.update(overrides)
    return SimulateSwapInput(**payload)


class ConstantProductSwapTests(unittest.TestCase):
    def test_quote_with_typical_gas(self):
        repository = FakeChainRepository(
            amounts_out=[10**18, 1_992_013_962],
            reserves=_deep_pool(),
        )

        result = _use_case(repository).execute(_input())

        self.assertEqual(result.estimated_output, "1992.013962")
        self.assertEqual(result.estimated_output_raw, 1_992_013_962)
        self.assertEqual(result.minimum_output_raw, 1_982_053_892)
        self.assertEqual(result.minimum_output, "1982.053892")
        self.assertEqual(result.estimated_gas, 150_000)
        self.assertEqual(result.estimated_gas_native, "0.0000000000015")
        self.assertTrue(result.price_impact.startswith("0.199"))
        self.assertEqual(result.exchange_rate, "1992.013962")
        self.assertIsNone(result.fee_tier)
        self.assertEqual(result.note, f"Swap simulation (V2): {WETH} -> {USDC}")
        self.assertEqual(repository.simulations, [])

    def test_gas_comes_from_simulation_when_sender_is_given(self):
        repository = FakeChainRepository(
            amounts_out=[10**18, 1_992_013_962],
            reserves=_deep_pool(),
            simulated_gas=123_456,
        )

        result = _use_case(repository).execute(_input(from_address=SENDER))

        self.assertEqual(result.estimated_gas, 123_456)
        self.assertEqual(repository.simulations[0]["deadline"], NOW + 3600)
        self.assertEqual(repository.simulations[0]["min_out"], 1_982_053_892)

    def test_failed_gas_simulation_falls_back_to_typical_gas(self):
        repository = FakeChainRepository(
            amounts_out=[10**18, 1_992_013_962],
            reserves=_deep_pool(),
            simulated_gas=ContractError("TRANSFER_FROM_FAILED"),
        )

        result = _use_case(repository).execute(_input(from_address=SENDER))

        self.assertEqual(result.estimated_gas, 150_000)

    def test_zero_output_without_pool_reports_missing_pool(self):
        repository = FakeChainRepository(amounts_out=[10**18, 0], reserves=None)

        with self.assertRaises(SwapSimulationFailedError) as ctx:
            _use_case(repository).execute(_input())
        self.assertIn("No liquidity pool found for WETH/USDC", str(ctx.exception))

    def test_zero_output_with_empty_pool_reports_no_liquidity(self):
        repository = FakeChainRepository(
            amounts_out=[10**18, 0],
            reserves=PairReserves(reserve_a=0, reserve_b=0, token_a=WETH, token_b=USDC),
        )

        with self.assertRaises(SwapSimulationFailedError) as ctx:
            _use_case(repository).execute(_input())
        self.assertIn("no liquidity", str(ctx.exception))

    def test_zero_output_with_healthy_pool_reports_amount_too_small(self):
        repository = FakeChainRepository(amounts_out=[1, 0], reserves=_deep_pool())

        with self.assertRaises(SwapSimulationFailedError) as ctx:
            _use_case(repository).execute(_input(amount="0.000000000000000001"))
        message = str(ctx.exception)
        self.assertIn("too small", message)
        self.assertIn("Estimated output is 0 USDC for 0.000000000000000001 WETH", message)

    def test_empty_reserve_with_output_is_insufficient_liquidity(self):
        repository = FakeChainRepository(
            amounts_out=[10**18, 5],
            reserves=PairReserves(reserve_a=10**18, reserve_b=0, token_a=WETH, token_b=USDC),
        )

        with self.assertRaises(InsufficientLiquidityError):
            _use_case(repository).execute(_input())

    def test_empty_amounts_list_fails_simulation(self):
        repository = FakeChainRepository(amounts_out=[], reserves=_deep_pool())

        with self.assertRaises(SwapSimulationFailedError):
            _use_case(repository).execute(_input())


class ConcentratedLiquiditySwapTests(unittest.TestCase):
    def test_selects_tier_with_highest_output(self):
        repository = FakeChainRepository(
            quotes={
                500: SwapQuote(amount_out=90, gas_estimate=100_000),
                3000: SwapQuote(amount_out=120, gas_estimate=110_000),
                10000: ContractError("execution reverted"),
            }
        )

        result = _use_case(repository).execute(_input(protocol_version="v3"))

        self.assertEqual(repository.probed_fee_tiers, [500, 3000, 10000])
        self.assertEqual(result.fee_tier, 3000)
        self.assertEqual(result.estimated_output_raw, 120)
        self.assertEqual(result.estimated_output, "0.00012")
        self.assertEqual(result.minimum_output, "0.000119")
        self.assertEqual(result.estimated_gas, 110_000)
        self.assertEqual(result.estimated_gas_native, "0.0000000000011")
        self.assertEqual(result.price_impact, "N/A (V3)")
        self.assertEqual(result.exchange_rate, "0.00012")
        self.assertEqual(result.note, f"Swap simulation (V3, fee=3000): {WETH} -> {USDC}")

    def test_ties_keep_first_probed_tier(self):
        repository = FakeChainRepository(
            quotes={
                500: SwapQuote(amount_out=100, gas_estimate=100_000),
                3000: SwapQuote(amount_out=100, gas_estimate=90_000),
            }
        )

        result = _use_case(repository).execute(_input(protocol_version="V3"))

        self.assertEqual(result.fee_tier, 500)

    def test_no_usable_tier_suggests_v2(self):
        repository = FakeChainRepository(
            quotes={
                500: SwapQuote(amount_out=0, gas_estimate=100_000),
                3000: RpcError("timeout"),
            }
        )

        with self.assertRaises(SwapSimulationFailedError) as ctx:
            _use_case(repository).execute(_input(protocol_version="v3"))
        message = str(ctx.exception)
        self.assertIn("WETH/USDC", message)
        self.assertIn("0.05%, 0.3%, 1%", message)
        self.assertIn("- 0.05%: no output", message)
        self.assertIn("- 0.3%: timeout", message)
        self.assertIn("- 1%: execution reverted", message)
        self.assertIn("set uniswap_version to 'v2'", message)

    def test_simulated_gas_uses_selected_tier(self):
        repository = FakeChainRepository(
            quotes={10000: SwapQuote(amount_out=50, gas_estimate=100_000)},
            simulated_gas=140_000,
        )

        result = _use_case(repository).execute(_input(protocol_version="v3", from_address=SENDER))

        self.assertEqual(result.estimated_gas, 140_000)
        self.assertEqual(repository.simulations[0]["fee_tier"], 10000)
        self.assertEqual(repository.simulations[0]["deadline"], NOW + 3600)

    def test_failed_simulation_falls_back_to_quote_gas(self):
        repository = FakeChainRepository(
            quotes={3000: SwapQuote(amount_out=50, gas_estimate=98_000)},
            simulated_gas=ContractError("STF"),
        )

        result = _use_case(repository).execute(_input(protocol_version="v3", from_address=SENDER))

        self.assertEqual(result.estimated_gas, 98_000)


class SwapInputValidationTests(unittest.TestCase):
    def test_unknown_protocol_version(self):
        with self.assertRaises(InvalidAmountError) as ctx:
            _use_case(FakeChainRepository()).execute(_input(protocol_version="v4"))
        self.assertIn("Invalid Uniswap version", str(ctx.exception))

    def test_unknown_symbol_lists_supported_tokens(self):
        with self.assertRaises(TokenNotFoundError) as ctx:
            _use_case(FakeChainRepository()).execute(_input(to_token="DOGE"))
        self.assertIn("Supported tokens", str(ctx.exception))

    def test_invalid_slippage(self):
        repository = FakeChainRepository(amounts_out=[10**18, 5], reserves=_deep_pool())
        with self.assertRaises(InvalidAmountError):
            _use_case(repository).execute(_input(slippage_tolerance="abc"))
        with self.assertRaises(InvalidAmountError):
            _use_case(repository).execute(_input(slippage_tolerance="100"))

    def test_invalid_sender_address(self):
        repository = FakeChainRepository(amounts_out=[10**18, 5], reserves=_deep_pool())
        with self.assertRaises(InvalidWalletAddressError):
            _use_case(repository).execute(_input(from_address="0xnot-an-address"))

    def test_repository_failure_maps_to_blockchain_error(self):
        repository = FakeChainRepository(metadata_error=RpcError("connection reset"))

        with self.assertRaises(BlockchainError) as ctx:
            _use_case(repository).execute(_input())
        self.assertIn("Failed to interact with blockchain", str(ctx.exception))
