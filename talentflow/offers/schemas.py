"""
schemas.py — Offer-letter salary data contracts (Pydantic v2).

Defines:
  - Amount              (one salary line: whole-rupee monthly + annual)
  - SalaryBreakdown     (output of calculate(), immutable)
  - OfferSalaryFields   (salary columns persisted on the offer-letter record)
  - SalaryTableRow      (one row of the Annexure-1 monthly/annual table)

All monetary values are whole rupees (int). No paise anywhere.
ESI is Optional[Amount] = None: "not applicable" is NOT the same as ₹0.
"""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Amount: a single monthly/annual pair
# ---------------------------------------------------------------------------

class Amount(BaseModel):
    """
    One salary line as shown in the side-by-side table.

    monthly and annual are rounded independently; monthly × 12 == annual
    is NOT guaranteed (flexi in particular is a residual on both sides).
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    monthly: int
    annual: int


# ---------------------------------------------------------------------------
# SalaryBreakdown: calculate() output
# ---------------------------------------------------------------------------

class SalaryBreakdown(BaseModel):
    """
    Full CTC breakdown for an offer, recomputed on every CTC change.

    Layout mirrors the offer annexure:
      A  (earnings)        basic, conveyance, hra, medical, flexi → total_a
      B  (other benefits)  esi (n/a), employer_pf → total_b
      A+B                  total_ab  (annual == ctc, exactly)
      Deductions           professional_tax, employee_pf, insurance → total_deductions
      Net                  net_take_home_monthly = total_a.monthly − total_deductions.monthly
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    ctc: int

    # --- A: earnings ---
    basic: Amount
    conveyance: Amount
    hra: Amount
    medical: Amount
    flexi: Amount                 # Balancing residual, negative for low CTC
    total_a: Amount

    # --- B: other benefits ---
    esi: Optional[Amount] = None  # Always None: ESI is not applicable, rendered as "—"
    employer_pf: Amount
    total_b: Amount

    # --- A + B ---
    total_ab: Amount

    # --- Deductions ---
    professional_tax: Amount
    employee_pf: Amount
    insurance: Amount
    total_deductions: Amount

    net_take_home_monthly: int

    @property
    def has_negative_flexi(self) -> bool:
        """True when fixed components exceed the earnings pool (low-CTC edge case)."""
        return self.flexi.annual < 0 or self.flexi.monthly < 0


# ---------------------------------------------------------------------------
# OfferSalaryFields: persisted offer-letter salary columns
# ---------------------------------------------------------------------------

class OfferSalaryFields(BaseModel):
    """
    Salary columns stored on the offer-letter record at creation time.

    The annexure is re-derived from these persisted values, never by
    recomputing from ctc.
    """
    model_config = ConfigDict(extra="forbid")

    ctc: int = Field(..., gt=0)

    # Earnings (annual)
    basic_salary: int
    hra: int
    conveyance_allowance: int = 0
    medical_allowance: int = 0
    flexi_pay: int = 0
    special_allowance: int = 0    # Legacy column, not produced by calculate()
    employer_pf: int
    other_benefits: int = 0       # Legacy column, not produced by calculate()

    # Deductions (annual)
    employee_pf: int
    professional_tax: int = 2_400
    insurance: int = 6_000
    income_tax: int = 0
    other_deductions: int = 0     # Legacy column: mirrors insurance, not rendered separately

    net_salary: int               # Annual net = monthly net take-home × 12
    gross_salary: int             # Total A annual (CTC minus employer PF)


# ---------------------------------------------------------------------------
# SalaryTableRow: annexure table row
# ---------------------------------------------------------------------------

TableSection = Literal["earnings", "other_benefits", "totals", "deductions", "net"]


class SalaryTableRow(BaseModel):
    """One row of the Annexure-1 table. None amounts render as a dash."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    section: TableSection
    label: str
    monthly: Optional[int] = None
    annual: Optional[int] = None
    is_total: bool = False


__all__ = [
    "Amount",
    "SalaryBreakdown",
    "OfferSalaryFields",
    "SalaryTableRow",
    "TableSection",
]
