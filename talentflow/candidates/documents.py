"""
documents.py — Persistence boundary for candidate document columns.

The candidates table keeps four JSON columns:
  education_data   list[EducationEntry]
  employment_data  list[EmploymentEntry]
  identity_data    IdentityDocumentSet
  additional_data  AdditionalDocumentSet

Everything written to or read from those columns goes through this module.
Reads validate against the tagged record types and fail loudly with
DocumentSchemaError; nothing downstream ever sees an unvalidated dict.

Design principles (same as the store layer):
  - Returns domain Pydantic objects, never raw dicts
  - Logs only column names and counts, never identity numbers
"""
import json
import logging
from typing import Any, List, Mapping, Optional, Union

from pydantic import TypeAdapter, ValidationError

from talentflow.candidates.schemas import (
    AdditionalDocumentSet,
    CandidateProfile,
    EducationEntry,
    EmploymentEntry,
    IdentityDocumentSet,
)
from talentflow.schemas import DomainValidationError, ErrorDetail, details_from_validation_error

logger = logging.getLogger(__name__)

RawColumn = Union[str, bytes, list, dict, None]

_EDUCATION_ADAPTER = TypeAdapter(List[EducationEntry])
_EMPLOYMENT_ADAPTER = TypeAdapter(List[EmploymentEntry])


class DocumentSchemaError(DomainValidationError):
    """A stored or incoming document column failed schema validation."""

    code = "DOCUMENT_SCHEMA_ERROR"
    message = "Candidate document data failed validation"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _decode(raw: RawColumn, column: str) -> Any:
    """Accept JSON text (legacy rows) or already-decoded JSON (json/jsonb columns)."""
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        if not raw.strip():
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DocumentSchemaError(
                [ErrorDetail(field=column, issue=f"Column is not valid JSON: {exc.msg}")]
            ) from exc
    return raw


def _validate(adapter_or_model: Any, value: Any, column: str) -> Any:
    try:
        if isinstance(adapter_or_model, TypeAdapter):
            return adapter_or_model.validate_python(value)
        return adapter_or_model.model_validate(value)
    except ValidationError as exc:
        details = details_from_validation_error(exc, prefix=column)
        logger.info("Document column failed validation column=%s violations=%d", column, len(details))
        raise DocumentSchemaError(details) from exc


# ---------------------------------------------------------------------------
# Loaders (column -> domain objects)
# ---------------------------------------------------------------------------

def load_education(raw: RawColumn) -> list[EducationEntry]:
    value = _decode(raw, "education_data")
    if value is None:
        return []
    return _validate(_EDUCATION_ADAPTER, value, "education_data")


def load_employment(raw: RawColumn) -> list[EmploymentEntry]:
    value = _decode(raw, "employment_data")
    if value is None:
        return []
    return _validate(_EMPLOYMENT_ADAPTER, value, "employment_data")


def load_identity(raw: RawColumn) -> IdentityDocumentSet:
    value = _decode(raw, "identity_data")
    if not value:
        return IdentityDocumentSet()
    return _validate(IdentityDocumentSet, value, "identity_data")


def load_additional(raw: RawColumn) -> AdditionalDocumentSet:
    value = _decode(raw, "additional_data")
    if not value:
        return AdditionalDocumentSet()
    return _validate(AdditionalDocumentSet, value, "additional_data")


# ---------------------------------------------------------------------------
# Dumpers (domain objects -> JSON-ready column values)
# ---------------------------------------------------------------------------

def dump_education(entries: list[EducationEntry]) -> list[dict]:
    return _EDUCATION_ADAPTER.dump_python(entries, mode="json")


def dump_employment(entries: list[EmploymentEntry]) -> list[dict]:
    return _EMPLOYMENT_ADAPTER.dump_python(entries, mode="json")


def dump_identity(identity: IdentityDocumentSet) -> dict:
    return identity.model_dump(mode="json")


def dump_additional(additional: AdditionalDocumentSet) -> dict:
    return additional.model_dump(mode="json")


# ---------------------------------------------------------------------------
# Whole-record helpers
# ---------------------------------------------------------------------------

def dump_candidate_documents(profile: CandidateProfile) -> dict[str, Any]:
    """All four document columns for a candidate, ready for a json/jsonb insert."""
    return {
        "education_data": dump_education(profile.education_data),
        "employment_data": dump_employment(profile.employment_data),
        "identity_data": dump_identity(profile.identity_data),
        "additional_data": dump_additional(profile.additional_data),
    }


def load_candidate_documents(row: Mapping[str, Optional[RawColumn]]) -> dict[str, Any]:
    """
    Validate the four document columns of a stored candidate row.

    Every column is checked before raising, so one DocumentSchemaError lists
    the problems in all of them.
    """
    loaders = {
        "education_data": load_education,
        "employment_data": load_employment,
        "identity_data": load_identity,
        "additional_data": load_additional,
    }
    loaded: dict[str, Any] = {}
    details: list[ErrorDetail] = []
    for column, loader in loaders.items():
        try:
            loaded[column] = loader(row.get(column))
        except DocumentSchemaError as exc:
            details.extend(exc.details)
    if details:
        raise DocumentSchemaError(details)
    return loaded


__all__ = [
    "DocumentSchemaError",
    "load_education",
    "load_employment",
    "load_identity",
    "load_additional",
    "dump_education",
    "dump_employment",
    "dump_identity",
    "dump_additional",
    "dump_candidate_documents",
    "load_candidate_documents",
]
