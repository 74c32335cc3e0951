"""
Display formatting for offer letters: Indian digit grouping and ordinal dates.
"""
from __future__ import annotations

import datetime
from typing import Optional

NOT_APPLICABLE = "—"


def _group_indian(digits: str) -> str:
    """'1234567' -> '12,34,567' (last three, then pairs)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_inr(amount: Optional[int], symbol: str = "₹") -> str:
    """
    Format a whole-rupee amount in en-IN style, e.g. 1234567 -> '₹12,34,567'.

    None means "not applicable" and renders as a dash (used for ESI).
    """
    if amount is None:
        return NOT_APPLICABLE
    value = int(round(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{_group_indian(str(abs(value)))}"


def _ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def format_offer_date(value: datetime.date) -> str:
    """datetime.date(2025, 3, 1) -> 'March 1st, 2025'."""
    return f"{value.strftime('%B')} {_ordinal(value.day)}, {value.year}"
