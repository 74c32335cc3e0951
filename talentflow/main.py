"""
main.py — TalentFlow developer entry point.

Prints the offer salary breakdown for a CTC, the same figures the offer
screen shows and the offer-letter record stores:

    python -m talentflow.main 650000
    python -m talentflow.main 6,50,000 --with-tax

Output is JSON on stdout; diagnostics go to the log. An unusable CTC prints
the standard error envelope instead and exits with status 1.
"""
import argparse
import json
import logging
import sys
from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence, Union

from talentflow.config import settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Logging, configured before anything else
# ---------------------------------------------------------------------------
def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=level or settings.effective_log_level,
        format="%(asctime)s %(levelname)s %(name)s — %(message)s",
    )


def _parse_amount(text: str) -> Union[Decimal, str]:
    """'6,50,000' -> Decimal('650000'); unparseable text is returned as-is for calculate() to reject."""
    try:
        return Decimal(text.replace(",", "").strip())
    except InvalidOperation:
        return text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m talentflow.main",
        description="Print the offer salary breakdown for an annual CTC as JSON",
    )
    parser.add_argument("ctc", help="Annual CTC in whole rupees, e.g. 650000 or 6,50,000")
    parser.add_argument(
        "--with-tax",
        action="store_true",
        help="Record the slab income tax estimate on the offer fields",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging()

    from talentflow.offers.income_tax import estimate_income_tax
    from talentflow.offers.offer_fields import build_offer_salary_fields, build_salary_table
    from talentflow.offers.salary_calculator import InvalidInput, calculate

    args = build_parser().parse_args(argv)

    try:
        breakdown = calculate(_parse_amount(args.ctc))
    except InvalidInput as exc:
        logger.error("Cannot calculate breakdown: %s", exc)
        print(json.dumps(exc.to_error_response().model_dump(), indent=2, ensure_ascii=False))
        return 1

    income_tax = estimate_income_tax(breakdown.ctc) if args.with_tax else 0
    fields = build_offer_salary_fields(breakdown, income_tax=income_tax)
    output = {
        "company_name": settings.company_name,
        "breakdown": breakdown.model_dump(),
        "offer_fields": fields.model_dump(),
        "annexure": [row.model_dump() for row in build_salary_table(fields)],
    }
    print(json.dumps(output, indent=2, ensure_ascii=False))
    logger.info("TalentFlow v%s breakdown printed", settings.app_version)
    return 0


if __name__ == "__main__":
    sys.exit(main())
