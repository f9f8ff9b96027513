from __future__ import annotations

from app.domain.exceptions import (
    InsufficientBalanceError,
    InternalError,
    LiquidityPoolNotFoundError,
    PriceImpactTooHighError,
    SwapAmountTooSmallError,
)


def test_swap_amount_too_small_renders_single_separator():
    exc = SwapAmountTooSmallError(minimum="0.001 WETH")

    assert str(exc) == "Swap amount too small: minimum 0.001 WETH"
    assert exc.kind == "SwapAmountTooSmall"
    assert exc.minimum == "0.001 WETH"


def test_structured_errors_render_prefix_and_details():
    assert str(InsufficientBalanceError(required="2", available="1")) == (
        "Insufficient balance: required 2, available 1"
    )
    assert str(PriceImpactTooHighError(impact="12.5", max_impact="5")) == (
        "Price impact too high: 12.5%, maximum allowed: 5%"
    )
    assert str(LiquidityPoolNotFoundError(token0="0xa", token1="0xb")) == (
        "Liquidity pool not found: pair 0xa/0xb"
    )


def test_empty_message_renders_prefix_only():
    assert str(InternalError()) == "Internal error"
