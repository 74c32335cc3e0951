"""
Income tax estimate shown next to the offer breakdown.

Simple progressive slab estimate on the annual figure, display only: it is
NOT subtracted from net take-home. No standard deduction, rebate or cess.
"""
from __future__ import annotations

from talentflow.offers.salary_calculator import round_rupees, validate_amount

# ===========================================================================
# SLAB BREAKPOINTS
# ===========================================================================

SLAB_2_5L = 250_000
SLAB_5L   = 500_000
SLAB_10L  = 1_000_000

# list[tuple[ceiling, rate]]
INCOME_TAX_SLABS: list[tuple[float, float]] = [
    (SLAB_2_5L,    0.00),   # 0–2.5L: 0%
    (SLAB_5L,      0.05),   # 2.5–5L: 5%
    (SLAB_10L,     0.20),   # 5–10L: 20%
    (float("inf"), 0.30),   # >10L: 30%
]


def _calculate_slab_tax(income: float, slabs: list[tuple[float, float]]) -> float:
    """Accumulate tax bracket by bracket, stopping once income is exhausted."""
    tax = 0.0
    prev_ceiling = 0.0
    for ceiling, rate in slabs:
        if income <= prev_ceiling:
            break
        tax += (min(income, ceiling) - prev_ceiling) * rate
        prev_ceiling = ceiling
    return tax


def estimate_income_tax(annual_income: object) -> int:
    """
    Annual income tax for annual_income, rounded to whole rupees.

    Raises:
        InvalidInput: negative, non-finite or fractional-rupee income.
    """
    income = validate_amount(annual_income, "annual_income", allow_zero=True)
    return round_rupees(_calculate_slab_tax(income, INCOME_TAX_SLABS))


__all__ = [
    "INCOME_TAX_SLABS",
    "estimate_income_tax",
]
