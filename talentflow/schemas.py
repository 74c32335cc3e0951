"""
schemas.py — cross-cutting error envelope shared by every TalentFlow module.

Structure: {"error": {"code": "...", "message": "...", "details": [...]}}

Domain errors (InvalidInput, DocumentSchemaError, SectionValidationError) all
render into this one shape so callers surface a single user-facing format.
"""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ErrorDetail(BaseModel):
    """Single field-level validation or business-rule error."""
    model_config = ConfigDict(extra="forbid")

    field: Optional[str] = None   # Dot-notation field path, e.g. "employment_data.0.from_date"
    issue: str                     # Human-readable description of the problem


class ErrorBody(BaseModel):
    """Error envelope body."""
    model_config = ConfigDict(extra="forbid")

    code: str                                      # VALIDATION_ERROR, INVALID_INPUT, etc.
    message: str                                   # High-level error description
    details: List[ErrorDetail] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Standard error response format for all TalentFlow operations."""
    model_config = ConfigDict(extra="forbid")

    error: ErrorBody


def details_from_validation_error(
    exc: ValidationError,
    prefix: str = "",
) -> list[ErrorDetail]:
    """
    Convert a pydantic ValidationError into ErrorDetail entries.
    Returns ALL field violations, dot-joined, optionally under a prefix path.
    """
    details = []
    for error in exc.errors():
        loc: list[Any] = [prefix] if prefix else []
        loc.extend(error["loc"])
        field = ".".join(str(part) for part in loc)
        details.append(ErrorDetail(field=field or None, issue=error["msg"]))
    return details


class DomainValidationError(ValueError):
    """
    Base class for TalentFlow validation failures.

    Subclasses set `code` and `message`; `details` carries every violation
    found so callers can report them all at once.
    """

    code = "VALIDATION_ERROR"
    message = "Validation failed"

    def __init__(self, details: list[ErrorDetail], message: Optional[str] = None):
        self.details = details
        if message is not None:
            self.message = message
        summary = "; ".join(
            f"{d.field}: {d.issue}" if d.field else d.issue for d in details
        )
        super().__init__(summary or self.message)

    def to_error_response(self) -> ErrorResponse:
        return ErrorResponse(
            error=ErrorBody(code=self.code, message=self.message, details=self.details)
        )


__all__ = [
    "ErrorDetail",
    "ErrorBody",
    "ErrorResponse",
    "DomainValidationError",
    "details_from_validation_error",
]
