from __future__ import annotations

from dataclasses import replace
import logging
import time
from typing import Callable

from app.application.dto.simulate_swap import SimulateSwapInput, SimulateSwapOutput
from app.application.ports.chain_repository_port import (
    ChainRepositoryPort,
    RepositoryError,
    to_service_error,
)
from app.application.use_cases.token_resolution import parse_protocol_version, resolve_token
from app.domain.entities.swap import (
    STANDARD_FEE_TIERS,
    SWAP_DEADLINE_SECONDS,
    TYPICAL_SWAP_GAS,
    FeeTierOutcome,
    ProtocolVersion,
)
from app.domain.entities.token import NATIVE_DECIMALS, TokenMetadata
from app.domain.exceptions import InsufficientLiquidityError, SwapSimulationFailedError
from app.domain.services.addresses import parse_address
from app.domain.services.amounts import (
    format_decimal,
    format_raw_amount,
    parse_decimal,
    parse_human_amount,
)
from app.domain.services.fee_tiers import (
    describe_fee_tiers,
    describe_tier_failures,
    fee_tier_percent,
    select_best_quote,
)
from app.domain.services.pricing import check_slippage, exchange_rate, minimum_output, price_impact
from app.domain.services.token_registry import TOKEN_REGISTRY, TokenRegistry


logger = logging.getLogger(__name__)


CONCENTRATED_PRICE_IMPACT = "N/A (V3)"


class SimulateSwapUseCase:
    def __init__(
        self,
        *,
        chain_port: ChainRepositoryPort,
        registry: TokenRegistry = TOKEN_REGISTRY,
        clock: Callable[[], float] = time.time,
    ):
        self._chain_port = chain_port
        self._registry = registry
        self._clock = clock

    def execute(self, command: SimulateSwapInput) -> SimulateSwapOutput:
        version = parse_protocol_version(command.protocol_version)
        try:
            if version is ProtocolVersion.V3:
                return self._simulate_concentrated_liquidity(command)
            return self._simulate_constant_product(command)
        except RepositoryError as exc:
            raise to_service_error(exc) from exc

    def _simulate_constant_product(self, command: SimulateSwapInput) -> SimulateSwapOutput:
        from_token = resolve_token(command.from_token, registry=self._registry, field_name="from_token")
        to_token = resolve_token(command.to_token, registry=self._registry, field_name="to_token")
        from_metadata = self._chain_port.get_token_metadata(token=from_token)
        amount_in = parse_human_amount(command.amount, from_metadata.decimals)
        slippage = check_slippage(parse_decimal(command.slippage_tolerance, field_name="slippage"))
        sender = self._parse_sender(command.from_address)
        logger.info(
            "simulate_swap: v2_amount_in raw=%s formatted=%s symbol=%s",
            amount_in,
            format_raw_amount(amount_in, from_metadata.decimals),
            from_metadata.symbol,
        )

        path = [from_token, to_token]
        amounts = self._chain_port.get_swap_output_amounts(amount_in=amount_in, path=path)
        if not amounts:
            raise SwapSimulationFailedError("No output amount returned")
        amount_out = amounts[-1]
        if amount_out == 0:
            raise self._zero_output_error(
                from_token=from_token,
                to_token=to_token,
                from_metadata=from_metadata,
                amount_in=amount_in,
            )

        minimum = minimum_output(amount_out, slippage)
        to_metadata = self._chain_port.get_token_metadata(token=to_token)
        reserves = self._chain_port.get_pair_reserves(token_a=from_token, token_b=to_token)
        if not reserves.has_liquidity:
            raise InsufficientLiquidityError(
                f"{from_metadata.symbol}/{to_metadata.symbol} pool has an empty reserve"
            )

        gas = self._estimate_constant_product_gas(
            sender=sender,
            amount_in=amount_in,
            min_out=minimum,
            path=path,
        )
        impact = price_impact(
            amount_in,
            amount_out,
            reserves.reserve_a,
            reserves.reserve_b,
            decimals_in=from_metadata.decimals,
            decimals_out=to_metadata.decimals,
        )
        output = self._build_output(
            amount_in=amount_in,
            amount_out=amount_out,
            minimum=minimum,
            gas=gas,
            from_metadata=from_metadata,
            to_metadata=to_metadata,
            impact_text=format_decimal(impact),
            note=f"Swap simulation (V2): {from_token} -> {to_token}",
        )
        logger.info(
            "simulate_swap: v2_complete output=%s impact=%s rate=%s",
            output.estimated_output,
            output.price_impact,
            output.exchange_rate,
        )
        return output

    def _simulate_concentrated_liquidity(self, command: SimulateSwapInput) -> SimulateSwapOutput:
        from_token = resolve_token(command.from_token, registry=self._registry, field_name="from_token")
        to_token = resolve_token(command.to_token, registry=self._registry, field_name="to_token")
        from_metadata = self._chain_port.get_token_metadata(token=from_token)
        to_metadata = self._chain_port.get_token_metadata(token=to_token)
        amount_in = parse_human_amount(command.amount, from_metadata.decimals)
        slippage = check_slippage(parse_decimal(command.slippage_tolerance, field_name="slippage"))
        sender = self._parse_sender(command.from_address)
        logger.info(
            "simulate_swap: v3_amount_in raw=%s formatted=%s symbol=%s",
            amount_in,
            format_raw_amount(amount_in, from_metadata.decimals),
            from_metadata.symbol,
        )

        outcomes = [
            self._probe_fee_tier(
                token_in=from_token,
                token_out=to_token,
                amount_in=amount_in,
                fee_tier=fee_tier,
            )
            for fee_tier in STANDARD_FEE_TIERS
        ]
        best = select_best_quote(outcomes)
        if best is None:
            raise SwapSimulationFailedError(
                f"No V3 liquidity pool found for {from_metadata.symbol}/{to_metadata.symbol} pair "
                f"across all fee tiers ({describe_fee_tiers(STANDARD_FEE_TIERS)}).\n"
                f"{describe_tier_failures(outcomes)}\n\n"
                "Suggestions:\n"
                "- Try using V2 instead (set uniswap_version to 'v2')\n"
                "- Use a different token pair\n"
                f"- Try routing through WETH (e.g., {from_metadata.symbol} -> WETH -> {to_metadata.symbol})"
            )
        logger.info(
            "simulate_swap: v3_selected fee_tier=%s (%s) amount_out=%s",
            best.fee_tier,
            fee_tier_percent(best.fee_tier),
            best.amount_out,
        )

        minimum = minimum_output(best.amount_out, slippage)
        gas = best.gas_estimate
        if sender is not None:
            try:
                gas = self._chain_port.simulate_concentrated_liquidity_swap(
                    from_address=sender,
                    token_in=from_token,
                    token_out=to_token,
                    amount_in=amount_in,
                    min_out=minimum,
                    fee_tier=best.fee_tier,
                    deadline=self._deadline(),
                )
            except RepositoryError as exc:
                logger.warning(
                    "simulate_swap: v3_gas_simulation_failed sender=%s fee_tier=%s error=%s",
                    sender,
                    best.fee_tier,
                    exc,
                )

        output = self._build_output(
            amount_in=amount_in,
            amount_out=best.amount_out,
            minimum=minimum,
            gas=gas,
            from_metadata=from_metadata,
            to_metadata=to_metadata,
            impact_text=CONCENTRATED_PRICE_IMPACT,
            note=f"Swap simulation (V3, fee={best.fee_tier}): {from_token} -> {to_token}",
            fee_tier=best.fee_tier,
        )
        logger.info(
            "simulate_swap: v3_complete fee_tier=%s output=%s gas=%s",
            best.fee_tier,
            output.estimated_output,
            output.estimated_gas,
        )
        return output

    def _probe_fee_tier(
        self,
        *,
        token_in: str,
        token_out: str,
        amount_in: int,
        fee_tier: int,
    ) -> FeeTierOutcome:
        try:
            quote = self._chain_port.get_concentrated_liquidity_quote(
                token_in=token_in,
                token_out=token_out,
                amount_in=amount_in,
                fee_tier=fee_tier,
            )
        except RepositoryError as exc:
            logger.debug("simulate_swap: v3_quote_failed fee_tier=%s error=%s", fee_tier, exc)
            return FeeTierOutcome(fee_tier=fee_tier, quote=None, error=str(exc))

        logger.debug(
            "simulate_swap: v3_quote fee_tier=%s amount_out=%s gas=%s",
            fee_tier,
            quote.amount_out,
            quote.gas_estimate,
        )
        return FeeTierOutcome(fee_tier=fee_tier, quote=replace(quote, fee_tier=fee_tier))

    def _zero_output_error(
        self,
        *,
        from_token: str,
        to_token: str,
        from_metadata: TokenMetadata,
        amount_in: int,
    ) -> SwapSimulationFailedError:
        from_symbol = from_metadata.symbol
        to_symbol = "Unknown"
        try:
            to_symbol = self._chain_port.get_token_metadata(token=to_token).symbol
        except RepositoryError as exc:
            logger.warning("simulate_swap: v2_to_metadata_unavailable token=%s error=%s", to_token, exc)

        try:
            reserves = self._chain_port.get_pair_reserves(token_a=from_token, token_b=to_token)
        except RepositoryError as exc:
            logger.warning(
                "simulate_swap: v2_reserves_unavailable pair=%s/%s error=%s",
                from_symbol,
                to_symbol,
                exc,
            )
            return SwapSimulationFailedError(
                f"No liquidity pool found for {from_symbol}/{to_symbol} pair. "
                "The trading pair may not exist on Uniswap V2.\n\n"
                "Suggestions:\n"
                "- Use a different DEX or token pair\n"
                f"- Try routing through WETH (e.g., {from_symbol} -> WETH -> {to_symbol})"
            )

        amount = format_raw_amount(amount_in, from_metadata.decimals)
        reserve_note = (
            f"Reserve {from_symbol}: {reserves.reserve_a}, Reserve {to_symbol}: {reserves.reserve_b}"
        )
        if not reserves.has_liquidity:
            return SwapSimulationFailedError(
                f"Estimated output is 0 {to_symbol} for {amount} {from_symbol}. "
                f"The pool has no liquidity ({reserve_note}).\n\n"
                "Suggestion: Try using WETH as an intermediate token, or use a different token pair."
            )
        return SwapSimulationFailedError(
            f"Estimated output is 0 {to_symbol} for {amount} {from_symbol}. "
            f"The input amount is too small for this pool ({reserve_note}).\n\n"
            "Suggestion: Increase the swap amount, or try using WETH as an intermediate token."
        )

    def _estimate_constant_product_gas(
        self,
        *,
        sender: str | None,
        amount_in: int,
        min_out: int,
        path: list[str],
    ) -> int:
        if sender is None:
            return TYPICAL_SWAP_GAS
        try:
            return self._chain_port.simulate_swap(
                from_address=sender,
                amount_in=amount_in,
                min_out=min_out,
                path=path,
                deadline=self._deadline(),
            )
        except RepositoryError as exc:
            logger.warning("simulate_swap: v2_gas_simulation_failed sender=%s error=%s", sender, exc)
            return TYPICAL_SWAP_GAS

    def _build_output(
        self,
        *,
        amount_in: int,
        amount_out: int,
        minimum: int,
        gas: int,
        from_metadata: TokenMetadata,
        to_metadata: TokenMetadata,
        impact_text: str,
        note: str,
        fee_tier: int | None = None,
    ) -> SimulateSwapOutput:
        gas_price = self._chain_port.get_gas_price()
        rate = exchange_rate(amount_in, amount_out, from_metadata.decimals, to_metadata.decimals)
        return SimulateSwapOutput(
            estimated_output=format_raw_amount(amount_out, to_metadata.decimals),
            estimated_output_raw=amount_out,
            minimum_output=format_raw_amount(minimum, to_metadata.decimals),
            minimum_output_raw=minimum,
            estimated_gas=gas,
            estimated_gas_native=format_raw_amount(gas * gas_price, NATIVE_DECIMALS),
            price_impact=impact_text,
            exchange_rate=format_decimal(rate),
            note=note,
            fee_tier=fee_tier,
        )

    def _parse_sender(self, from_address: str | None) -> str | None:
        if from_address is None or not from_address.strip():
            return None
        return parse_address(from_address, field_name="from_address")

    def _deadline(self) -> int:
        return int(self._clock()) + SWAP_DEADLINE_SECONDS
