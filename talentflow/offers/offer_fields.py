"""
offer_fields.py — Offer-letter salary projection and annexure table.

Pure function module, no I/O.
Exports:
  - build_offer_salary_fields(breakdown, income_tax) -> OfferSalaryFields
  - create_offer_salary_fields(ctc, include_income_tax) -> OfferSalaryFields
  - build_salary_table(fields) -> list[SalaryTableRow]

The breakdown is computed ONCE when the offer is created and stored as
individual columns. Everything downstream (annexure, PDF, email) re-derives
its figures from those stored columns and never calls calculate() again.
"""
from __future__ import annotations

import logging

from talentflow.offers.income_tax import estimate_income_tax
from talentflow.offers.salary_calculator import (
    MONTHS_PER_YEAR,
    calculate,
    round_rupees,
    validate_amount,
)
from talentflow.offers.schemas import OfferSalaryFields, SalaryBreakdown, SalaryTableRow

logger = logging.getLogger(__name__)


def build_offer_salary_fields(
    breakdown: SalaryBreakdown,
    income_tax: int = 0,
) -> OfferSalaryFields:
    """
    Project a SalaryBreakdown onto the persisted offer-letter salary columns.

    Args:
        breakdown: Output of calculate().
        income_tax: Annual TDS to record on the offer (display only; 0 by default).

    Returns:
        OfferSalaryFields with annual figures; net_salary is monthly net × 12.
    """
    tds = validate_amount(income_tax, "income_tax", allow_zero=True)
    return OfferSalaryFields(
        ctc=breakdown.ctc,
        basic_salary=breakdown.basic.annual,
        hra=breakdown.hra.annual,
        conveyance_allowance=breakdown.conveyance.annual,
        medical_allowance=breakdown.medical.annual,
        flexi_pay=breakdown.flexi.annual,
        special_allowance=0,
        employer_pf=breakdown.employer_pf.annual,
        other_benefits=0,
        employee_pf=breakdown.employee_pf.annual,
        professional_tax=breakdown.professional_tax.annual,
        insurance=breakdown.insurance.annual,
        income_tax=tds,
        other_deductions=breakdown.insurance.annual,
        net_salary=breakdown.net_take_home_monthly * MONTHS_PER_YEAR,
        gross_salary=breakdown.total_a.annual,
    )


def create_offer_salary_fields(
    ctc: object,
    include_income_tax: bool = False,
) -> OfferSalaryFields:
    """
    Offer-creation entry point: calculate once, project to stored columns.

    include_income_tax=True records the slab estimate on the CTC in the
    income_tax column. It never changes net_salary.
    """
    breakdown = calculate(ctc)
    income_tax = estimate_income_tax(breakdown.ctc) if include_income_tax else 0
    fields = build_offer_salary_fields(breakdown, income_tax=income_tax)
    logger.info(
        "Built offer salary fields include_income_tax=%s negative_flexi=%s",
        include_income_tax,
        breakdown.has_negative_flexi,
    )
    return fields


def _monthly(annual: int) -> int:
    return round_rupees(annual / MONTHS_PER_YEAR)


def build_salary_table(fields: OfferSalaryFields) -> list[SalaryTableRow]:
    """
    Annexure-1 rows derived from stored offer columns.

    Monthly values are round(annual / 12) of each stored column; the ESI row
    carries no amounts. Legacy special_allowance / other_benefits rows and the
    Income Tax (TDS) row appear only when non-zero.
    """
    total_a = fields.gross_salary
    total_b = fields.employer_pf + fields.other_benefits
    deductions = fields.employee_pf + fields.professional_tax + fields.insurance

    rows: list[SalaryTableRow] = []

    def add(section, label, annual, is_total=False):
        rows.append(
            SalaryTableRow(
                section=section,
                label=label,
                monthly=None if annual is None else _monthly(annual),
                annual=annual,
                is_total=is_total,
            )
        )

    add("earnings", "Basic", fields.basic_salary)
    add("earnings", "Conveyance Allowance", fields.conveyance_allowance)
    add("earnings", "House Rent Allowance", fields.hra)
    add("earnings", "Medical Allowance", fields.medical_allowance)
    add("earnings", "Flexi Benefit Allowances", fields.flexi_pay)
    if fields.special_allowance:
        add("earnings", "Special Allowance", fields.special_allowance)
    add("earnings", "Total (A)", total_a, is_total=True)

    add("other_benefits", "ESI", None)
    add("other_benefits", "EPF (Employer)", fields.employer_pf)
    if fields.other_benefits:
        add("other_benefits", "Other Benefits", fields.other_benefits)
    add("other_benefits", "Total (B)", total_b, is_total=True)

    add("totals", "Total CTC (A+B)", total_a + total_b, is_total=True)

    add("deductions", "Professional Tax", fields.professional_tax)
    add("deductions", "PF (Employee)", fields.employee_pf)
    add("deductions", "Insurance", fields.insurance)
    add("deductions", "Total Deductions", deductions, is_total=True)
    if fields.income_tax:
        # Estimate only: outside Total Deductions and net take-home
        add("deductions", "Income Tax (TDS)", fields.income_tax)

    rows.append(
        SalaryTableRow(
            section="net",
            label="Net Take Home",
            monthly=_monthly(fields.net_salary),
            annual=fields.net_salary,
            is_total=True,
        )
    )
    if total_a + total_b != fields.ctc:
        logger.warning("Stored offer salary columns do not sum to CTC (A+B mismatch)")
    return rows


__all__ = [
    "build_offer_salary_fields",
    "create_offer_salary_fields",
    "build_salary_table",
]
