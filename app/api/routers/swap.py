from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import get_simulate_swap_use_case
from app.api.errors import to_http_exception
from app.api.schemas.swap import SwapSimulationRequest, SwapSimulationResponse
from app.application.dto.simulate_swap import SimulateSwapInput
from app.application.use_cases.simulate_swap import SimulateSwapUseCase
from app.domain.exceptions import ServiceError

router = APIRouter()


@router.post("/v1/swap/simulate", response_model=SwapSimulationResponse)
def simulate_swap(
    req: SwapSimulationRequest,
    use_case: SimulateSwapUseCase = Depends(get_simulate_swap_use_case),
):
    try:
        result = use_case.execute(
            SimulateSwapInput(
                from_token=req.from_token,
                to_token=req.to_token,
                amount=req.amount,
                slippage_tolerance=req.slippage_tolerance,
                protocol_version=req.uniswap_version,
                from_address=req.from_address,
            )
        )
    except ServiceError as exc:
        raise to_http_exception(exc) from exc

    return SwapSimulationResponse(
        estimated_output=result.estimated_output,
        estimated_output_raw=str(result.estimated_output_raw),
        minimum_output=result.minimum_output,
        estimated_gas=str(result.estimated_gas),
        estimated_gas_eth=result.estimated_gas_native,
        price_impact=result.price_impact,
        exchange_rate=result.exchange_rate,
        fee_tier=result.fee_tier,
        transaction_data=result.note,
    )
