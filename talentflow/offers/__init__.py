"""Offer letters: CTC salary breakdown, income tax estimate, stored salary columns."""
from talentflow.offers.salary_calculator import InvalidInput, calculate
from talentflow.offers.schemas import Amount, SalaryBreakdown

__all__ = ["InvalidInput", "calculate", "Amount", "SalaryBreakdown"]
