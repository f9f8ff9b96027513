from __future__ import annotations

from decimal import ROUND_FLOOR, ROUND_HALF_EVEN, Context, Decimal

from app.domain.exceptions import InvalidAmountError
from app.domain.services.amounts import EXACT_CONTEXT, normalize, to_decimal


HUNDRED = Decimal("100")
ONE = Decimal("1")

RATIO_CONTEXT = Context(prec=28, rounding=ROUND_HALF_EVEN)


def price(reserve_out: int, reserve_in: int, decimals_out: int, decimals_in: int) -> Decimal:
    numerator = to_decimal(reserve_out, decimals_out)
    denominator = to_decimal(reserve_in, decimals_in)
    if numerator.is_zero() or denominator.is_zero():
        raise InvalidAmountError("division by zero")
    return normalize(RATIO_CONTEXT.divide(numerator, denominator))


def price_impact(
    amount_in: int,
    amount_out: int,
    reserve_in: int,
    reserve_out: int,
    *,
    decimals_in: int = 18,
    decimals_out: int = 18,
) -> Decimal:
    if reserve_in == 0 or reserve_out == 0 or amount_in == 0:
        return Decimal("0")

    price_before = price(reserve_out, reserve_in, decimals_out, decimals_in)
    remaining_out = max(reserve_out - amount_out, 0)
    if remaining_out == 0:
        return HUNDRED
    price_after = price(remaining_out, reserve_in + amount_in, decimals_out, decimals_in)

    ratio = RATIO_CONTEXT.divide(price_after, price_before)
    change = RATIO_CONTEXT.abs(RATIO_CONTEXT.subtract(ONE, ratio))
    return normalize(RATIO_CONTEXT.multiply(change, HUNDRED))


def exchange_rate(amount_in: int, amount_out: int, decimals_in: int, decimals_out: int) -> Decimal:
    if amount_in == 0 or amount_out == 0:
        return Decimal("0")
    return price(amount_out, amount_in, decimals_out, decimals_in)


def apply_percentage(value: int, percent: Decimal | int) -> int:
    percent = Decimal(percent)
    if value < 0:
        raise InvalidAmountError(f"value must be non-negative, got {value}")
    if not percent.is_finite() or percent < 0:
        raise InvalidAmountError(f"percentage must be a non-negative number, got {percent}")
    scaled = EXACT_CONTEXT.divide(EXACT_CONTEXT.multiply(Decimal(value), percent), HUNDRED)
    return int(scaled.to_integral_value(rounding=ROUND_FLOOR, context=EXACT_CONTEXT))


def check_slippage(slippage_percent: Decimal | int) -> Decimal:
    slippage_percent = Decimal(slippage_percent)
    if not slippage_percent.is_finite() or slippage_percent < 0 or slippage_percent >= HUNDRED:
        raise InvalidAmountError(f"slippage must be in [0, 100), got {slippage_percent}")
    return slippage_percent


def minimum_output(amount_out: int, slippage_percent: Decimal | int) -> int:
    slippage_percent = check_slippage(slippage_percent)
    return apply_percentage(amount_out, EXACT_CONTEXT.subtract(HUNDRED, slippage_percent))
