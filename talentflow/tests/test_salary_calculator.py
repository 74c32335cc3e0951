"""
Salary breakdown calculator test suite.
All expected values hand-computed from the breakdown rules (60% basic, 40% HRA,
fixed conveyance/medical, PF capped at ₹1,800/month, flexi as residual).

Groups:
  1. Named constant verification (exact equality)
  2. Hand-computed breakdown fixtures
  3. Properties that hold for every CTC
  4. Low-CTC and PF-ceiling edge cases
  5. Invalid input
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal

import pytest
from pydantic import ValidationError

from talentflow.offers.salary_calculator import (
    BASIC_PCT_OF_CTC, HRA_PCT_OF_BASIC,
    CONVEYANCE_MONTHLY, CONVEYANCE_ANNUAL,
    MEDICAL_MONTHLY, MEDICAL_ANNUAL,
    PF_RATE, PF_WAGE_CEILING_MONTHLY, PF_MAX_MONTHLY,
    PROFESSIONAL_TAX_MONTHLY, PROFESSIONAL_TAX_ANNUAL,
    INSURANCE_MONTHLY, INSURANCE_ANNUAL,
    InvalidInput, calculate, round_rupees, validate_amount,
)
from talentflow.offers.schemas import Amount


# ===========================================================================
# TEST GROUP 1: Named constant verification
# ===========================================================================

def test_earnings_ratio_constants() -> None:
    assert BASIC_PCT_OF_CTC == pytest.approx(0.60)
    assert HRA_PCT_OF_BASIC == pytest.approx(0.40)


def test_fixed_allowance_constants() -> None:
    """Annual figures are exactly 12× the monthly ones."""
    assert CONVEYANCE_MONTHLY == 1_600
    assert CONVEYANCE_ANNUAL  == 19_200
    assert MEDICAL_MONTHLY    == 1_250
    assert MEDICAL_ANNUAL     == 15_000


def test_pf_constants() -> None:
    assert PF_RATE                 == pytest.approx(0.12)
    assert PF_WAGE_CEILING_MONTHLY == 15_000
    assert PF_MAX_MONTHLY          == 1_800


def test_fixed_deduction_constants() -> None:
    assert PROFESSIONAL_TAX_MONTHLY == 200
    assert PROFESSIONAL_TAX_ANNUAL  == 2_400
    assert INSURANCE_MONTHLY        == 500
    assert INSURANCE_ANNUAL         == 6_000


# ===========================================================================
# TEST GROUP 2: Hand-computed breakdown fixtures
# ===========================================================================

@dataclass
class BreakdownCase:
    """Single hand-computed calculate() case."""
    description: str
    ctc: int
    basic: tuple[int, int]
    hra: tuple[int, int]
    flexi: tuple[int, int]
    total_a: tuple[int, int]
    employer_pf: tuple[int, int]
    total_ab_monthly: int
    total_deductions: tuple[int, int]
    net_take_home_monthly: int


BREAKDOWN_CASES: list[BreakdownCase] = [
    BreakdownCase(
        description="ctc_650000_pf_capped",
        ctc=650_000,
        # basic=0.6×650000=390000 (32500/m), hra=0.4×390000=156000 (13000/m)
        # PF: basic/m 32500 > 15000 → 1800/m, 21600/yr
        # A=650000-21600=628400 (52366.67 → 52367/m)
        # flexi=628400-(390000+156000+19200+15000)=48200
        # flexi/m=52367-(32500+13000+1600+1250)=4017
        basic=(32_500, 390_000),
        hra=(13_000, 156_000),
        flexi=(4_017, 48_200),
        total_a=(52_367, 628_400),
        employer_pf=(1_800, 21_600),
        total_ab_monthly=54_167,
        total_deductions=(2_500, 30_000),
        # net=52367-(1800+200+500)=49867
        net_take_home_monthly=49_867,
    ),
    BreakdownCase(
        description="ctc_600000_pf_capped",
        ctc=600_000,
        # basic=360000 (30000/m), hra=144000 (12000/m), A=578400 (48200/m)
        # flexi=578400-538200=40200, flexi/m=48200-44850=3350
        basic=(30_000, 360_000),
        hra=(12_000, 144_000),
        flexi=(3_350, 40_200),
        total_a=(48_200, 578_400),
        employer_pf=(1_800, 21_600),
        total_ab_monthly=50_000,
        total_deductions=(2_500, 30_000),
        net_take_home_monthly=45_700,
    ),
    BreakdownCase(
        description="ctc_250000_pf_below_ceiling",
        ctc=250_000,
        # basic=150000 (12500/m) < 15000 → PF=12%×12500=1500/m, 18000/yr
        # hra=60000 (5000/m), A=232000 (19333.33 → 19333/m)
        # flexi=232000-(150000+60000+19200+15000)=-12200
        # flexi/m=19333-(12500+5000+1600+1250)=-1017
        basic=(12_500, 150_000),
        hra=(5_000, 60_000),
        flexi=(-1_017, -12_200),
        total_a=(19_333, 232_000),
        employer_pf=(1_500, 18_000),
        total_ab_monthly=20_833,
        total_deductions=(2_200, 26_400),
        # net=19333-(1500+200+500)=17133
        net_take_home_monthly=17_133,
    ),
]


@pytest.mark.parametrize(
    "case",
    [pytest.param(c, id=c.description) for c in BREAKDOWN_CASES],
)
def test_breakdown_matches_hand_computation(case: BreakdownCase) -> None:
    """
    Every figure is exact: the calculator works in whole rupees, so no tolerance.
    If this test fails, the CALCULATOR is wrong, not the expected value.
    """
    b = calculate(case.ctc)

    assert b.ctc == case.ctc
    assert (b.basic.monthly, b.basic.annual) == case.basic
    assert (b.hra.monthly, b.hra.annual) == case.hra
    assert (b.flexi.monthly, b.flexi.annual) == case.flexi
    assert (b.total_a.monthly, b.total_a.annual) == case.total_a
    assert (b.employer_pf.monthly, b.employer_pf.annual) == case.employer_pf
    assert b.total_ab.monthly == case.total_ab_monthly
    assert b.total_ab.annual == case.ctc
    assert (b.total_deductions.monthly, b.total_deductions.annual) == case.total_deductions
    assert b.net_take_home_monthly == case.net_take_home_monthly


def test_fixed_lines_are_constant() -> None:
    b = calculate(650_000)
    assert b.conveyance == Amount(monthly=1_600, annual=19_200)
    assert b.medical == Amount(monthly=1_250, annual=15_000)
    assert b.professional_tax == Amount(monthly=200, annual=2_400)
    assert b.insurance == Amount(monthly=500, annual=6_000)


def test_esi_is_not_applicable_rather_than_zero() -> None:
    """ESI is absent (None), never Amount(0, 0)."""
    assert calculate(650_000).esi is None


# ===========================================================================
# TEST GROUP 3: Properties that hold for every CTC
# ===========================================================================

PROPERTY_CTCS = [
    1, 12, 99_999, 180_000, 250_000, 299_999, 300_000, 300_001,
    456_789, 600_000, 650_000, 1_000_003, 2_400_000, 9_999_999, 50_000_000,
]


@pytest.mark.parametrize("ctc", PROPERTY_CTCS)
def test_total_ab_annual_equals_ctc_exactly(ctc: int) -> None:
    assert calculate(ctc).total_ab.annual == ctc


@pytest.mark.parametrize("ctc", PROPERTY_CTCS)
def test_total_ab_monthly_is_a_plus_pf(ctc: int) -> None:
    b = calculate(ctc)
    assert b.total_ab.monthly == b.total_a.monthly + b.employer_pf.monthly
    assert b.total_b == b.employer_pf


@pytest.mark.parametrize("ctc", PROPERTY_CTCS)
def test_earnings_lines_sum_to_total_a(ctc: int) -> None:
    """Flexi is the residual on BOTH the monthly and the annual side."""
    b = calculate(ctc)
    lines = (b.basic, b.conveyance, b.hra, b.medical, b.flexi)
    assert sum(x.annual for x in lines) == b.total_a.annual
    assert sum(x.monthly for x in lines) == b.total_a.monthly


@pytest.mark.parametrize("ctc", PROPERTY_CTCS)
def test_pf_never_exceeds_statutory_ceiling(ctc: int) -> None:
    b = calculate(ctc)
    assert 0 <= b.employer_pf.monthly <= 1_800
    assert 0 <= b.employer_pf.annual <= 21_600


@pytest.mark.parametrize("ctc", PROPERTY_CTCS)
def test_employee_pf_mirrors_employer_pf(ctc: int) -> None:
    b = calculate(ctc)
    assert b.employee_pf == b.employer_pf


@pytest.mark.parametrize("ctc", PROPERTY_CTCS)
def test_net_take_home_formula(ctc: int) -> None:
    b = calculate(ctc)
    assert b.total_deductions.monthly == b.employee_pf.monthly + 200 + 500
    assert b.total_deductions.annual == b.employee_pf.annual + 2_400 + 6_000
    assert b.net_take_home_monthly == b.total_a.monthly - b.total_deductions.monthly


@pytest.mark.parametrize("ctc", [300_000, 650_000, 2_400_000, 50_000_000])
def test_pf_cap_binds_from_300000(ctc: int) -> None:
    """Basic/month reaches the ₹15,000 wage ceiling at CTC ₹3,00,000."""
    b = calculate(ctc)
    assert b.employer_pf == Amount(monthly=1_800, annual=21_600)


def test_calculate_is_deterministic() -> None:
    assert calculate(456_789) == calculate(456_789)


def test_breakdown_is_immutable() -> None:
    b = calculate(650_000)
    with pytest.raises(ValidationError):
        b.ctc = 1
    with pytest.raises(ValidationError):
        b.basic.annual = 1


def test_integral_float_and_decimal_ctc_accepted() -> None:
    assert calculate(650_000.0) == calculate(650_000)
    assert calculate(Decimal("650000")) == calculate(650_000)


# ===========================================================================
# TEST GROUP 4: Low-CTC edge cases
# ===========================================================================

def test_low_ctc_pf_is_twelve_percent_of_basic() -> None:
    """CTC 1,80,000 → basic 9,000/m → PF 1,080/m, 12,960/yr."""
    b = calculate(180_000)
    assert b.employer_pf == Amount(monthly=1_080, annual=12_960)


def test_low_ctc_negative_flexi_is_reported_not_clamped(caplog: pytest.LogCaptureFixture) -> None:
    """
    CTC 2,00,000: A=185600, fixed=120000+48000+19200+15000=202200
    → flexi=-16600/yr. The residual is kept so A+B still equals CTC.
    """
    with caplog.at_level("WARNING", logger="talentflow.offers.salary_calculator"):
        b = calculate(200_000)
    assert b.flexi.annual == -16_600
    assert b.flexi.monthly == -1_383
    assert b.has_negative_flexi is True
    assert b.total_ab.annual == 200_000
    assert "Negative flexi" in caplog.text


def test_normal_ctc_has_no_negative_flexi() -> None:
    assert calculate(650_000).has_negative_flexi is False


# ===========================================================================
# TEST GROUP 5: Invalid input
# ===========================================================================

@pytest.mark.parametrize(
    "value",
    [
        pytest.param(0, id="zero"),
        pytest.param(-650_000, id="negative"),
        pytest.param(None, id="none"),
        pytest.param("650000", id="string"),
        pytest.param(True, id="bool"),
        pytest.param(math.nan, id="nan"),
        pytest.param(math.inf, id="inf"),
        pytest.param(650_000.5, id="fractional_rupees"),
        pytest.param(10**400, id="int_beyond_float_range"),
        pytest.param(Decimal("sNaN"), id="signaling_nan"),
        pytest.param(Decimal("Infinity"), id="decimal_inf"),
    ],
)
def test_invalid_ctc_raises_invalid_input(value: object) -> None:
    with pytest.raises(InvalidInput) as exc_info:
        calculate(value)
    detail = exc_info.value.details[0]
    assert detail.field == "ctc"


def test_invalid_input_renders_error_envelope() -> None:
    with pytest.raises(InvalidInput) as exc_info:
        calculate(0)
    envelope = exc_info.value.to_error_response().model_dump()
    assert envelope["error"]["code"] == "INVALID_INPUT"
    assert envelope["error"]["details"] == [
        {"field": "ctc", "issue": "ctc must be greater than zero"},
    ]


def test_invalid_input_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        calculate(-1)


def test_validate_amount_allow_zero() -> None:
    assert validate_amount(0, "income", allow_zero=True) == 0
    with pytest.raises(InvalidInput):
        validate_amount(-1, "income", allow_zero=True)


# ===========================================================================
# round_rupees: JavaScript Math.round semantics
# ===========================================================================

@pytest.mark.parametrize(
    "value, expected",
    [
        (2.5, 3),        # banker's rounding would give 2
        (3.5, 4),
        (-2.5, -2),      # half rounds toward +inf
        (0.49, 0),
        (52_366.67, 52_367),
        (4_016.5, 4_017),
    ],
)
def test_round_rupees_half_up(value: float, expected: int) -> None:
    assert round_rupees(value) == expected
