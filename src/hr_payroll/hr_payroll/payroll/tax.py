from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from .model import DEFAULT_BRACKETS, TaxBracket


def round_vnd(amount: float) -> int:
    """Round to whole VND, half up."""
    return int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_pit(taxable_income: float, brackets: Sequence[TaxBracket] = DEFAULT_BRACKETS) -> float:
    """Progressive personal income tax (thuế TNCN) on monthly taxable income.

    Bracket i taxes ``min(remaining, width_i)`` at ``rate_i``. Income above
    the last bounded bracket is taxed at the last rate. The result keeps full
    precision; round only the final payslip figure.
    """
    if taxable_income <= 0 or not brackets:
        return 0.0

    tax = 0.0
    remaining = float(taxable_income)
    lower = 0.0
    for bracket in brackets:
        if remaining <= 0:
            break
        width = remaining if bracket.up_to is None else bracket.up_to - lower
        amount = min(remaining, max(width, 0.0))
        tax += amount * bracket.rate
        remaining -= amount
        if bracket.up_to is not None:
            lower = max(lower, bracket.up_to)

    if remaining > 0:
        tax += remaining * brackets[-1].rate
    return tax
