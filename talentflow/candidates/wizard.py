"""
wizard.py — Candidate form as an explicit section state machine.

State = (current section index, completed set) over one shared record.
Transitions:
  advance()      validate current section → mark completed → move forward
  back()         move back, no validation
  goto(section)  only to a completed section or the first incomplete one
  update(...)    mutate the record; sections whose fields changed become incomplete
  submit()       every section completed → validated CandidateProfile

Section order: basic, [external], experience, compensation, documents.
The external section exists only while candidate_type == "external".

No UI framework is involved; a form (web, CLI, import job) drives this.
"""
from __future__ import annotations

import datetime
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from talentflow.candidates.schemas import (
    AdditionalDocumentSet,
    CandidateProfile,
    CandidateType,
    EducationEntry,
    EmploymentEntry,
    IdentityDocumentSet,
)
from talentflow.candidates.validator import validate_candidate_business_rules
from talentflow.schemas import DomainValidationError, ErrorDetail, details_from_validation_error

logger = logging.getLogger(__name__)


class Section(str, Enum):
    basic = "basic"
    external = "external"
    experience = "experience"
    compensation = "compensation"
    documents = "documents"


# ---------------------------------------------------------------------------
# Per-section field validators
# ---------------------------------------------------------------------------

class BasicSection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    candidate_type: CandidateType = CandidateType.internal
    name: str = Field(..., min_length=1)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str = Field(..., pattern=r"^\d{10}$")
    primary_skill: str = Field(..., min_length=1)
    linkedin_url: str = Field(default="", pattern=r"^$|^https://(www\.)?linkedin\.com/in/[a-zA-Z0-9-]+/?$")
    aadhaar_number: str = Field(default="", pattern=r"^$|^\d{12}$")
    uan_number: str = Field(default="", pattern=r"^$|^\d{12}$")


class ExternalSection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    recruiter_name: str = Field(..., min_length=1)
    source: str = Field(..., min_length=1)
    client_name: str = Field(..., min_length=1)


class ExperienceSection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    total_experience: float = Field(..., ge=0, le=50)
    relevant_experience: float = Field(..., ge=0, le=50)
    current_company: Optional[str] = None
    current_location: Optional[str] = None
    preferred_location: Optional[str] = None

    @model_validator(mode="after")
    def validate_relevant_within_total(self) -> "ExperienceSection":
        if self.relevant_experience > self.total_experience:
            raise ValueError("relevant_experience cannot exceed total_experience")
        return self


class CompensationSection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    current_ctc: Optional[int] = Field(default=None, ge=0, le=10_000_000)
    expected_ctc: Optional[int] = Field(default=None, ge=0, le=10_000_000)
    notice_period: Optional[str] = None
    tentative_doj: Optional[datetime.date] = None


class DocumentsSection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    education_data: List[EducationEntry] = Field(default_factory=list)
    employment_data: List[EmploymentEntry] = Field(default_factory=list)
    identity_data: IdentityDocumentSet = Field(default_factory=IdentityDocumentSet)
    additional_data: AdditionalDocumentSet = Field(default_factory=AdditionalDocumentSet)


SECTION_MODELS: dict[Section, type[BaseModel]] = {
    Section.basic: BasicSection,
    Section.external: ExternalSection,
    Section.experience: ExperienceSection,
    Section.compensation: CompensationSection,
    Section.documents: DocumentsSection,
}


def section_fields(section: Section) -> frozenset[str]:
    return frozenset(SECTION_MODELS[section].model_fields)


def sections_for(candidate_type: CandidateType) -> list[Section]:
    """Ordered section list for a candidate type."""
    if candidate_type == CandidateType.external:
        return [Section.basic, Section.external, Section.experience,
                Section.compensation, Section.documents]
    return [Section.basic, Section.experience, Section.compensation, Section.documents]


class SectionValidationError(DomainValidationError):
    """A wizard transition was refused; details say which fields blocked it."""

    code = "SECTION_INVALID"
    message = "Section validation failed"


def _parse_section(name: Any) -> Section:
    try:
        return Section(name)
    except ValueError as exc:
        raise SectionValidationError(
            [ErrorDetail(field=None, issue=f"No section named {name!r}")],
            message="Unknown section",
        ) from exc


@dataclass(frozen=True)
class WizardState:
    current: int
    completed: frozenset


# ---------------------------------------------------------------------------
# The state machine
# ---------------------------------------------------------------------------

class CandidateFormWizard:
    """
    Multi-section candidate form over a shared mutable record.

    `data` is the single source of truth for field values; the state only
    tracks position and which sections have passed validation.
    """

    def __init__(self, data: Optional[dict[str, Any]] = None):
        self.data: dict[str, Any] = dict(data or {})
        self._state = WizardState(current=0, completed=frozenset())

    # ---- Introspection ---------------------------------------------------

    @property
    def candidate_type(self) -> CandidateType:
        raw = self.data.get("candidate_type", CandidateType.internal)
        try:
            return CandidateType(raw)
        except ValueError:
            return CandidateType.internal

    @property
    def sections(self) -> list[Section]:
        return sections_for(self.candidate_type)

    @property
    def state(self) -> WizardState:
        return self._state

    @property
    def current_section(self) -> Section:
        return self.sections[self._state.current]

    @property
    def completed(self) -> frozenset:
        return self._state.completed

    @property
    def is_complete(self) -> bool:
        return all(s in self._state.completed for s in self.sections)

    def first_incomplete_index(self) -> int:
        for index, section in enumerate(self.sections):
            if section not in self._state.completed:
                return index
        return len(self.sections) - 1

    def validate_section(self, section: Section) -> list[ErrorDetail]:
        """Errors for one section's fields; empty list when it passes."""
        fields = section_fields(section)
        values = {k: v for k, v in self.data.items() if k in fields}
        try:
            SECTION_MODELS[section].model_validate(values)
        except ValidationError as exc:
            return details_from_validation_error(exc)
        return []

    # ---- Transitions -----------------------------------------------------

    def advance(self) -> WizardState:
        """Validate the current section, mark it completed and move forward."""
        section = self.current_section
        errors = self.validate_section(section)
        if errors:
            logger.info("Wizard advance blocked section=%s violations=%d", section.value, len(errors))
            raise SectionValidationError(errors, message=f"Section '{section.value}' is incomplete")
        completed = self._state.completed | {section}
        current = min(self._state.current + 1, len(self.sections) - 1)
        self._state = WizardState(current=current, completed=frozenset(completed))
        logger.debug("Wizard advanced section=%s next=%s", section.value, self.sections[current].value)
        return self._state

    def back(self) -> WizardState:
        self._state = WizardState(
            current=max(self._state.current - 1, 0),
            completed=self._state.completed,
        )
        return self._state

    def goto(self, section: Section) -> WizardState:
        """Jump to a completed section or the first incomplete one."""
        section = _parse_section(section)
        if section not in self.sections:
            raise SectionValidationError(
                [ErrorDetail(field=None, issue=f"Section '{section.value}' does not apply to "
                                                f"{self.candidate_type.value} candidates")],
                message="Unknown section",
            )
        index = self.sections.index(section)
        if section not in self._state.completed and index != self.first_incomplete_index():
            raise SectionValidationError(
                [ErrorDetail(field=None, issue=f"Complete earlier sections before '{section.value}'")],
                message="Section not reachable yet",
            )
        self._state = WizardState(current=index, completed=self._state.completed)
        return self._state

    def update(self, **fields: Any) -> WizardState:
        """
        Write field values into the shared record.

        Any completed section owning a changed field loses its completed mark.
        Changing candidate_type re-derives the section list; the cursor never
        lands beyond the first incomplete section.
        """
        changed = {k for k, v in fields.items() if self.data.get(k, _UNSET) != v}
        self.data.update(fields)
        if not changed:
            return self._state

        valid_sections = set(self.sections)
        completed = {
            s for s in self._state.completed
            if s in valid_sections and not (section_fields(s) & changed)
        }
        self._state = WizardState(current=self._state.current, completed=frozenset(completed))
        self._state = WizardState(
            current=min(self._state.current, self.first_incomplete_index()),
            completed=self._state.completed,
        )
        return self._state

    def submit(self) -> CandidateProfile:
        """
        Build the validated CandidateProfile from the shared record.

        Raises:
            SectionValidationError: a section is incomplete, the merged record
                fails structural validation, or a business rule is violated.
        """
        missing = [s.value for s in self.sections if s not in self._state.completed]
        if missing:
            raise SectionValidationError(
                [ErrorDetail(field=None, issue=f"Section '{name}' is not completed") for name in missing],
                message="Form is incomplete",
            )
        try:
            profile = CandidateProfile.model_validate(self.data)
        except ValidationError as exc:
            raise SectionValidationError(details_from_validation_error(exc)) from exc
        try:
            validate_candidate_business_rules(profile)
        except ValueError as exc:
            violations = json.loads(str(exc))
            raise SectionValidationError(
                [ErrorDetail(field=v.get("field"), issue=v["issue"]) for v in violations]
            ) from exc
        logger.info("Candidate form submitted candidate_id=%s type=%s",
                    profile.candidate_id, profile.candidate_type.value)
        return profile

    # ---- Session persistence --------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        """Wizard progress for the session store (section keys, not indices)."""
        return {
            "current": self.current_section.value,
            "completed": sorted(s.value for s in self._state.completed),
            "data": dict(self.data),
        }

    @classmethod
    def restore(cls, snapshot: dict[str, Any]) -> "CandidateFormWizard":
        wizard = cls(snapshot.get("data"))
        completed = frozenset(
            section for section in map(_parse_section, snapshot.get("completed", []))
            if section in wizard.sections
        )
        wizard._state = WizardState(current=0, completed=completed)
        current = _parse_section(snapshot.get("current", Section.basic.value))
        if current in wizard.sections:
            index = min(wizard.sections.index(current), wizard.first_incomplete_index())
            wizard._state = WizardState(current=index, completed=completed)
        return wizard


_UNSET = object()


__all__ = [
    "Section",
    "SectionValidationError",
    "WizardState",
    "CandidateFormWizard",
    "sections_for",
]
