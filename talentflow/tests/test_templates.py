"""Email template placeholder substitution tests."""
from __future__ import annotations

import pytest

from talentflow.notifications.templates import (
    EmailTemplate,
    find_placeholders,
    render_template,
    replace_placeholders,
)
from talentflow.offers.schemas import Amount


@pytest.fixture
def offer_data() -> dict:
    return {
        "candidate": {"name": "Asha Rao", "email": "asha@example.com"},
        "offer": {"designation": "Data Engineer", "ctc": "₹6,50,000", "joining_date": None},
        "company_name": "TalentFlow Solutions",
        "remote": False,
    }


def test_replaces_nested_paths(offer_data: dict) -> None:
    text = "Hi {{candidate.name}}, welcome to {{company_name}}."
    assert replace_placeholders(text, offer_data) == "Hi Asha Rao, welcome to TalentFlow Solutions."


def test_whitespace_inside_braces_is_ignored(offer_data: dict) -> None:
    assert replace_placeholders("{{ offer.designation }}", offer_data) == "Data Engineer"


def test_missing_and_none_values_stay_visible(offer_data: dict) -> None:
    text = "Join on {{offer.joining_date}} at {{offer.location}}"
    assert replace_placeholders(text, offer_data) == text


def test_non_string_values_are_stringified(offer_data: dict) -> None:
    assert replace_placeholders("remote={{remote}} n={{n}}", {**offer_data, "n": 3}) == "remote=false n=3"


def test_lookup_through_pydantic_models() -> None:
    data = {"salary": Amount(monthly=49_867, annual=598_404)}
    assert replace_placeholders("{{salary.monthly}}/{{salary.annual}}", data) == "49867/598404"


def test_repeated_placeholder_replaced_everywhere(offer_data: dict) -> None:
    assert replace_placeholders("{{candidate.name}} {{candidate.name}}", offer_data) == "Asha Rao Asha Rao"


def test_find_placeholders_distinct_in_order() -> None:
    text = "{{b}} {{ a.x }} {{b}} {{c}}"
    assert find_placeholders(text) == ["b", "a.x", "c"]


def test_render_template_reports_unresolved(offer_data: dict) -> None:
    template = EmailTemplate(
        template_key="offer_released",
        category="offer",
        subject="Offer for {{offer.designation}}",
        html_content="<p>Dear {{candidate.name}}, joining {{offer.joining_date}}</p>",
    )
    rendered = render_template(template, offer_data)
    assert rendered.subject == "Offer for Data Engineer"
    assert rendered.html_content == "<p>Dear Asha Rao, joining {{offer.joining_date}}</p>"
    assert rendered.unresolved == ["offer.joining_date"]
