"""
Candidate business-rule validator.

Validates a CandidateProfile AFTER Pydantic structural validation has already
passed. Collects all violations in a single pass and raises ValueError with a
JSON-encoded list of {field, issue} dicts, which callers turn into the
standard error envelope via violations_to_error_response().

Rules enforced:
  1. phone                10 digits
  2. aadhaar_number       12 digits + Verhoeff checksum (when given)
  3. uan_number           12 digits (when given)
  4. linkedin_url         https://(www.)linkedin.com/in/<handle> (when given)
  5. current/expected CTC <= 1 crore
  6. experience           <= 50 years, relevant <= total
  7. external candidates  recruiter_name, source, client_name required
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any

from talentflow.candidates.checksums import is_valid_aadhaar
from talentflow.candidates.schemas import CandidateProfile, CandidateType
from talentflow.schemas import ErrorBody, ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)

_MAX_CTC              = 10_000_000   # 1 crore
_MAX_EXPERIENCE_YEARS = 50
_EXTERNAL_REQUIRED    = ("recruiter_name", "source", "client_name")

_PHONE_RE    = re.compile(r"^\d{10}$")
_TWELVE_RE   = re.compile(r"^\d{12}$")
_LINKEDIN_RE = re.compile(r"^https://(www\.)?linkedin\.com/in/[a-zA-Z0-9-]+/?$")


def validate_candidate_business_rules(profile: CandidateProfile) -> None:
    """
    Validate a candidate against every business rule, reporting all violations at once.

    Raises:
        ValueError: JSON string of [{"field": str, "issue": str}, ...].
    """
    violations: list[dict[str, Any]] = []

    # ---- 1. Phone ------------------------------------------------------------
    if not _PHONE_RE.match(profile.phone):
        violations.append({"field": "phone", "issue": "Phone number must be exactly 10 digits"})

    # ---- 2. Aadhaar ----------------------------------------------------------
    if profile.aadhaar_number:
        if not _TWELVE_RE.match(profile.aadhaar_number):
            violations.append({"field": "aadhaar_number", "issue": "Aadhaar must be exactly 12 digits"})
        elif not is_valid_aadhaar(profile.aadhaar_number):
            violations.append({"field": "aadhaar_number", "issue": "Invalid Aadhaar number"})

    # ---- 3. UAN --------------------------------------------------------------
    if profile.uan_number and not _TWELVE_RE.match(profile.uan_number):
        violations.append({"field": "uan_number", "issue": "UAN must be exactly 12 digits"})

    # ---- 4. LinkedIn ---------------------------------------------------------
    if profile.linkedin_url and not _LINKEDIN_RE.match(profile.linkedin_url):
        violations.append({"field": "linkedin_url", "issue": "Invalid LinkedIn URL format"})

    # ---- 5. CTC range --------------------------------------------------------
    for field in ("current_ctc", "expected_ctc"):
        value = getattr(profile, field)
        if value is not None and value > _MAX_CTC:
            violations.append({
                "field": field,
                "issue": f"CTC ₹{value:,.0f} seems unrealistically high (max ₹1 crore)",
            })

    # ---- 6. Experience -------------------------------------------------------
    if profile.total_experience > _MAX_EXPERIENCE_YEARS:
        violations.append({
            "field": "total_experience",
            "issue": f"Experience cannot exceed {_MAX_EXPERIENCE_YEARS} years",
        })
    if profile.relevant_experience > profile.total_experience:
        violations.append({
            "field": "relevant_experience",
            "issue": "Relevant experience cannot exceed total experience",
        })

    # ---- 7. External candidate fields ---------------------------------------
    if profile.candidate_type == CandidateType.external:
        for field in _EXTERNAL_REQUIRED:
            if not (getattr(profile, field) or "").strip():
                violations.append({
                    "field": field,
                    "issue": f"{field} is required for external candidates",
                })

    if violations:
        # Log only candidate_id and count, never identity numbers or CTC
        logger.info(
            "Candidate validation failed: %d violation(s) candidate_id=%s",
            len(violations),
            profile.candidate_id,
        )
        raise ValueError(json.dumps(violations))


def violations_to_error_response(violations_json: str) -> ErrorResponse:
    """Parse JSON-encoded violations into the standard error envelope."""
    try:
        violations: list[dict] = json.loads(violations_json)
    except (json.JSONDecodeError, ValueError):
        violations = [{"field": None, "issue": violations_json}]
    details = [ErrorDetail(field=v.get("field"), issue=v["issue"]) for v in violations]
    return ErrorResponse(
        error=ErrorBody(
            code="VALIDATION_ERROR",
            message="Candidate validation failed",
            details=details,
        )
    )
