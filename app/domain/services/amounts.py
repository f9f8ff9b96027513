from __future__ import annotations

from decimal import ROUND_DOWN, Context, Decimal, InvalidOperation

from app.domain.exceptions import InvalidAmountError


MAX_DECIMALS = 255
MAX_UINT256 = 2**256 - 1

# Wide enough to hold any uint256 coefficient plus user supplied fractions exactly.
EXACT_CONTEXT = Context(prec=600, rounding=ROUND_DOWN)


def _check_decimals(decimals: int) -> None:
    if decimals < 0 or decimals > MAX_DECIMALS:
        raise InvalidAmountError(f"decimals must be between 0 and {MAX_DECIMALS}, got {decimals}")


def _check_raw(raw: int) -> None:
    if raw < 0:
        raise InvalidAmountError(f"raw amount must be non-negative, got {raw}")
    if raw > MAX_UINT256:
        raise InvalidAmountError(f"raw amount exceeds uint256: {raw}")


def normalize(value: Decimal) -> Decimal:
    if value.is_zero():
        return Decimal("0")
    normalized = value.normalize(EXACT_CONTEXT)
    if normalized.as_tuple().exponent > 0:
        return normalized.quantize(Decimal("1"), context=EXACT_CONTEXT)
    return normalized


def format_decimal(value: Decimal) -> str:
    return format(normalize(value), "f")


def to_decimal(raw: int, decimals: int) -> Decimal:
    _check_decimals(decimals)
    _check_raw(raw)
    return normalize(Decimal(raw).scaleb(-decimals, EXACT_CONTEXT))


def from_decimal(value: Decimal, decimals: int) -> int:
    _check_decimals(decimals)
    if not value.is_finite():
        raise InvalidAmountError(f"amount is not numeric: {value}")
    if value < 0:
        raise InvalidAmountError(f"amount must be non-negative: {value}")
    if value.is_zero():
        return 0
    try:
        scaled = value.scaleb(decimals, EXACT_CONTEXT)
    except ArithmeticError as exc:
        raise InvalidAmountError(f"amount out of range: {value}") from exc
    if scaled.adjusted() > 77:
        raise InvalidAmountError(f"amount exceeds uint256: {value}")
    raw = int(scaled.to_integral_value(rounding=ROUND_DOWN, context=EXACT_CONTEXT))
    _check_raw(raw)
    return raw


def parse_decimal(text: str, *, field_name: str = "amount") -> Decimal:
    try:
        value = Decimal(text.strip())
    except (InvalidOperation, AttributeError) as exc:
        raise InvalidAmountError(f"Invalid {field_name}: {text}") from exc
    if not value.is_finite():
        raise InvalidAmountError(f"Invalid {field_name}: {text}")
    return value


def parse_human_amount(text: str, decimals: int) -> int:
    """Convert a user supplied amount into the token's smallest unit.

    Decimal notation always wins: "100" means one hundred whole tokens, never
    one hundred smallest units. Only text that is not a decimal number at all
    (for example ``0x1bc16d674ec80000``) is read as a raw integer.
    """
    candidate = text.strip()
    try:
        value = Decimal(candidate)
    except InvalidOperation:
        value = None

    if value is not None and value.is_finite():
        try:
            return from_decimal(value, decimals)
        except InvalidAmountError as exc:
            raise InvalidAmountError(f"{text} ({exc.message})") from exc

    try:
        raw = int(candidate, 0)
    except ValueError as exc:
        raise InvalidAmountError(f"Invalid amount format: {text}") from exc
    if raw < 0 or raw > MAX_UINT256:
        raise InvalidAmountError(f"Invalid amount format: {text}")
    return raw


def format_raw_amount(raw: int, decimals: int) -> str:
    _check_decimals(decimals)
    _check_raw(raw)
    if decimals == 0:
        return str(raw)

    whole, remainder = divmod(raw, 10**decimals)
    if remainder == 0:
        return str(whole)
    fraction = str(remainder).rjust(decimals, "0").rstrip("0")
    return f"{whole}.{fraction}"
