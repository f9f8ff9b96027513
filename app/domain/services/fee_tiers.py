from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from app.domain.entities.swap import FeeTierOutcome, SwapQuote
from app.domain.services.amounts import format_decimal


def select_best_quote(outcomes: Iterable[FeeTierOutcome]) -> SwapQuote | None:
    best: SwapQuote | None = None
    for outcome in outcomes:
        quote = outcome.quote
        if quote is None or quote.amount_out <= 0:
            continue
        if best is None or quote.amount_out > best.amount_out:
            best = quote
    return best


def fee_tier_percent(fee_tier: int) -> str:
    return f"{format_decimal(Decimal(fee_tier) / Decimal(10000))}%"


def describe_fee_tiers(fee_tiers: Iterable[int]) -> str:
    return ", ".join(fee_tier_percent(fee) for fee in fee_tiers)


def describe_tier_failures(outcomes: Iterable[FeeTierOutcome]) -> str:
    lines = []
    for outcome in outcomes:
        if outcome.error is not None:
            reason = outcome.error
        elif outcome.quote is None or outcome.quote.amount_out <= 0:
            reason = "no output"
        else:
            continue
        lines.append(f"- {fee_tier_percent(outcome.fee_tier)}: {reason}")
    return "\n".join(lines)
