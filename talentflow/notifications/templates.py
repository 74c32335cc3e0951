"""
templates.py — Email template variable substitution.

Templates use {{ dotted.path }} placeholders, e.g. "Hi {{candidate.name}}".
Values are looked up through nested dicts (or object attributes / pydantic
models). Unresolved placeholders are left in place untouched so a missing
variable is visible in the preview instead of silently becoming blank.

Delivery (SMTP / Graph) is handled elsewhere; this module only renders.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{\{([^}]+)\}\}")

_MISSING = object()


class EmailTemplate(BaseModel):
    """A stored email template (subject + HTML body) for one ATS event."""
    model_config = ConfigDict(extra="forbid")

    template_key: str = Field(..., min_length=1)    # e.g. "offer_released"
    category: Optional[str] = None                   # application, interview, offer, rejection
    subject: str
    html_content: str = ""
    is_active: bool = True


class RenderedEmail(BaseModel):
    model_config = ConfigDict(extra="forbid")

    template_key: str
    subject: str
    html_content: str
    unresolved: list[str] = Field(default_factory=list)


def _lookup(data: Any, path: str) -> Any:
    value = data
    for key in path.split("."):
        if value is None:
            return _MISSING
        if isinstance(value, Mapping):
            value = value.get(key, _MISSING)
        elif isinstance(value, BaseModel) or hasattr(value, key):
            value = getattr(value, key, _MISSING)
        else:
            return _MISSING
        if value is _MISSING:
            return _MISSING
    return value


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def find_placeholders(template: str) -> list[str]:
    """Distinct placeholder paths in order of first appearance."""
    seen: list[str] = []
    for match in PLACEHOLDER_PATTERN.finditer(template):
        path = match.group(1).strip()
        if path not in seen:
            seen.append(path)
    return seen


def replace_placeholders(template: str, data: Mapping[str, Any]) -> str:
    """Replace every resolvable {{path}} in template; leave the rest as written."""

    def _sub(match: re.Match) -> str:
        value = _lookup(data, match.group(1).strip())
        if value is _MISSING or value is None:
            return match.group(0)
        return _stringify(value)

    return PLACEHOLDER_PATTERN.sub(_sub, template)


def render_template(template: EmailTemplate, data: Mapping[str, Any]) -> RenderedEmail:
    """Render subject and body, reporting placeholders that had no value."""
    unresolved = [
        path
        for path in find_placeholders(template.subject + template.html_content)
        if _lookup(data, path) in (_MISSING, None)
    ]
    if unresolved:
        logger.info(
            "Template rendered with %d unresolved placeholder(s) template_key=%s",
            len(unresolved),
            template.template_key,
        )
    return RenderedEmail(
        template_key=template.template_key,
        subject=replace_placeholders(template.subject, data),
        html_content=replace_placeholders(template.html_content, data),
        unresolved=unresolved,
    )


__all__ = [
    "EmailTemplate",
    "RenderedEmail",
    "find_placeholders",
    "replace_placeholders",
    "render_template",
]
