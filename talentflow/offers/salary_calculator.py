"""
TalentFlow Salary Breakdown Calculator: Indian payroll CTC split for offers.
Pure Python, no I/O, deterministic. Same CTC in, same breakdown out.

The earnings pool (A) excludes employer PF, which sits in B. Flexi pay and
total B are residuals, so total_ab.annual == ctc holds by construction.

Rounding follows the offer screen exactly: round-half-up to whole rupees
(JavaScript Math.round), NOT Python's banker's rounding.
"""
from __future__ import annotations

import logging
import math
from decimal import Decimal
from numbers import Real

from talentflow.offers.schemas import Amount, SalaryBreakdown
from talentflow.schemas import DomainValidationError, ErrorDetail

logger = logging.getLogger(__name__)

# ===========================================================================
# EARNINGS RATIOS
# ===========================================================================

BASIC_PCT_OF_CTC   = 0.60
HRA_PCT_OF_BASIC   = 0.40

# ===========================================================================
# FIXED ALLOWANCES
# ===========================================================================

CONVEYANCE_MONTHLY = 1_600
CONVEYANCE_ANNUAL  = 19_200
MEDICAL_MONTHLY    = 1_250
MEDICAL_ANNUAL     = 15_000

# ===========================================================================
# PROVIDENT FUND (EPF Act statutory limits)
# ===========================================================================

PF_RATE                = 0.12
PF_WAGE_CEILING_MONTHLY = 15_000   # PF computed on basic capped at this wage
PF_MAX_MONTHLY         = 1_800     # 12% of 15,000: contribution ceiling

# ===========================================================================
# FIXED DEDUCTIONS
# ===========================================================================

PROFESSIONAL_TAX_MONTHLY = 200
PROFESSIONAL_TAX_ANNUAL  = 2_400
INSURANCE_MONTHLY        = 500
INSURANCE_ANNUAL         = 6_000

MONTHS_PER_YEAR = 12


class InvalidInput(DomainValidationError):
    """Raised when a CTC (or other amount) cannot be used for a calculation."""

    code = "INVALID_INPUT"
    message = "Invalid salary input"

    def __init__(self, field: str, issue: str):
        super().__init__([ErrorDetail(field=field, issue=issue)])


# ===========================================================================
# INTERNAL HELPERS
# ===========================================================================

def round_rupees(value: float) -> int:
    """Half rounds toward +inf, so 2.5 → 3 and -2.5 → -2."""
    return int(math.floor(value + 0.5))


def validate_amount(value: object, field: str = "ctc", allow_zero: bool = False) -> int:
    """
    Coerce a whole-rupee amount to int or raise InvalidInput.

    Rejects None, bool, non-numbers, NaN/inf, fractional rupees and
    non-positive values (zero is accepted only with allow_zero=True).
    """
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise InvalidInput(field, f"{field} must be a number, got {type(value).__name__}")
    try:
        as_float = float(value)
    except (OverflowError, ValueError) as exc:
        # ints beyond float range, signaling NaN
        raise InvalidInput(field, f"{field} must be a finite number") from exc
    if not math.isfinite(as_float):
        raise InvalidInput(field, f"{field} must be a finite number")
    if as_float != math.floor(as_float):
        raise InvalidInput(field, f"{field} must be a whole rupee amount (no paise)")
    if as_float < 0 or (as_float == 0 and not allow_zero):
        bound = "zero or greater" if allow_zero else "greater than zero"
        raise InvalidInput(field, f"{field} must be {bound}")
    return int(as_float)


def _employer_pf_monthly_raw(basic_annual: int) -> float:
    """12% of basic, basic capped at the ₹15,000 wage ceiling, contribution capped at ₹1,800."""
    basic_monthly_raw = basic_annual / MONTHS_PER_YEAR
    return min(PF_RATE * min(PF_WAGE_CEILING_MONTHLY, basic_monthly_raw), PF_MAX_MONTHLY)


# ===========================================================================
# PUBLIC ENTRY POINT
# ===========================================================================

def calculate(annual_ctc: object) -> SalaryBreakdown:
    """
    Split an annual CTC into the offer-letter salary breakdown.

    Annual figures are the source of truth. Monthly figures are rounded
    independently for display; flexi is a residual on each side, so
    flexi.monthly × 12 != flexi.annual in general.

    Raises:
        InvalidInput: ctc is not a positive, finite, whole-rupee number.
    """
    ctc = validate_amount(annual_ctc, "ctc")

    # Step 1: annual earnings components
    basic_annual = round_rupees(BASIC_PCT_OF_CTC * ctc)
    hra_annual = round_rupees(HRA_PCT_OF_BASIC * basic_annual)

    # Step 2: PF (unrounded monthly feeds the annual figure)
    pf_monthly_raw = _employer_pf_monthly_raw(basic_annual)
    employer_pf_annual = round_rupees(pf_monthly_raw * MONTHS_PER_YEAR)
    employer_pf_monthly = round_rupees(pf_monthly_raw)

    # Step 3: earnings pool A and flexi residual
    a_annual = ctc - employer_pf_annual
    flexi_annual = a_annual - (basic_annual + hra_annual + CONVEYANCE_ANNUAL + MEDICAL_ANNUAL)

    # Step 4: monthly display values; flexi balances the monthly row to A
    basic_monthly = round_rupees(basic_annual / MONTHS_PER_YEAR)
    hra_monthly = round_rupees(hra_annual / MONTHS_PER_YEAR)
    a_monthly = round_rupees(a_annual / MONTHS_PER_YEAR)
    flexi_monthly = a_monthly - (basic_monthly + hra_monthly + CONVEYANCE_MONTHLY + MEDICAL_MONTHLY)

    # Step 5: A + B
    total_ab_monthly = a_monthly + employer_pf_monthly
    total_ab_annual = a_annual + employer_pf_annual

    # Step 6: deductions (employee PF mirrors employer PF)
    deductions_monthly = employer_pf_monthly + PROFESSIONAL_TAX_MONTHLY + INSURANCE_MONTHLY
    deductions_annual = employer_pf_annual + PROFESSIONAL_TAX_ANNUAL + INSURANCE_ANNUAL

    net_monthly = a_monthly - deductions_monthly

    employer_pf = Amount(monthly=employer_pf_monthly, annual=employer_pf_annual)
    breakdown = SalaryBreakdown(
        ctc=ctc,
        basic=Amount(monthly=basic_monthly, annual=basic_annual),
        conveyance=Amount(monthly=CONVEYANCE_MONTHLY, annual=CONVEYANCE_ANNUAL),
        hra=Amount(monthly=hra_monthly, annual=hra_annual),
        medical=Amount(monthly=MEDICAL_MONTHLY, annual=MEDICAL_ANNUAL),
        flexi=Amount(monthly=flexi_monthly, annual=flexi_annual),
        total_a=Amount(monthly=a_monthly, annual=a_annual),
        esi=None,
        employer_pf=employer_pf,
        total_b=Amount(
            monthly=total_ab_monthly - a_monthly,
            annual=total_ab_annual - a_annual,
        ),
        total_ab=Amount(monthly=total_ab_monthly, annual=total_ab_annual),
        professional_tax=Amount(monthly=PROFESSIONAL_TAX_MONTHLY, annual=PROFESSIONAL_TAX_ANNUAL),
        employee_pf=employer_pf,
        insurance=Amount(monthly=INSURANCE_MONTHLY, annual=INSURANCE_ANNUAL),
        total_deductions=Amount(monthly=deductions_monthly, annual=deductions_annual),
        net_take_home_monthly=net_monthly,
    )

    if breakdown.has_negative_flexi:
        # Residual kept as-is; A+B must still equal CTC
        logger.warning(
            "Negative flexi pay in salary breakdown (fixed components exceed earnings pool)"
        )
    return breakdown


__all__ = [
    "InvalidInput",
    "calculate",
    "round_rupees",
    "validate_amount",
]
