"""
schemas.py — Candidate data contracts (Pydantic v2).

Defines:
  - CandidateType                                   enum (internal / external)
  - UploadedDocument                                one stored file reference
  - EducationEntry, EmploymentEntry                 list-column records
  - IdentityDocument, IdentityDocumentSet           identity_data column
  - LinkedDocument, AdditionalDocumentSet           additional_data column
  - CandidateProfile                                the candidate record the wizard submits

Document columns used to be free-form JSON blobs. Each record now carries a
literal `kind` tag and extra='forbid', so a blob written for one column can
never be read back as another.
"""
from __future__ import annotations

import datetime
import re
import uuid
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from talentflow.candidates.checksums import is_valid_aadhaar


def _new_id() -> str:
    return str(uuid.uuid4())


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class CandidateType(str, Enum):
    internal = "internal"
    external = "external"


class CandidateStatus(str, Enum):
    available = "Available"
    email_sent = "Email Sent"
    interested = "Interested"
    not_interested = "Not Interested"
    interviewing = "Interviewing"
    offered = "Offered"
    offer_released = "Offer Released"
    joined = "Joined"
    rejected = "Rejected"
    not_joined = "Not Joined"


# ---------------------------------------------------------------------------
# Uploaded files
# ---------------------------------------------------------------------------

class UploadedDocument(BaseModel):
    """Reference to a file already stored by the upload service."""
    model_config = ConfigDict(extra="forbid")

    id: str = Field(default_factory=_new_id)
    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    uploaded_at: datetime.datetime
    size: int = Field(..., ge=0, description="File size in bytes.")


# ---------------------------------------------------------------------------
# education_data / employment_data entries
# ---------------------------------------------------------------------------

class EducationEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["education"] = "education"
    id: str = Field(default_factory=_new_id)
    qualification: str = Field(..., min_length=1)
    institution_name: str = Field(..., min_length=1)
    passed_out_year: str = Field(..., pattern=r"^\d{4}$")
    percentage: Optional[float] = Field(default=None, ge=0, le=100)
    documents: List[UploadedDocument] = Field(default_factory=list)


class EmploymentEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["employment"] = "employment"
    id: str = Field(default_factory=_new_id)
    organization_name: str = Field(..., min_length=1)
    designation: str = Field(..., min_length=1)
    from_date: datetime.date
    to_date: Optional[datetime.date] = None       # None = current employer
    ctc: Optional[int] = Field(default=None, ge=0)
    location: str = ""
    documents: List[UploadedDocument] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_date_order(self) -> "EmploymentEntry":
        if self.to_date is not None and self.to_date < self.from_date:
            raise ValueError(
                f"to_date ({self.to_date.isoformat()}) cannot be before "
                f"from_date ({self.from_date.isoformat()})"
            )
        return self


# ---------------------------------------------------------------------------
# identity_data
# ---------------------------------------------------------------------------

_PAN_RE = re.compile(r"^[A-Z]{5}\d{4}[A-Z]$")
_PASSPORT_RE = re.compile(r"^[A-Z]\d{7}$")
_TWELVE_DIGITS_RE = re.compile(r"^\d{12}$")


class IdentityDocument(BaseModel):
    """Identity number (empty string = not provided) plus scanned copies."""
    model_config = ConfigDict(extra="forbid")

    number: str = ""
    documents: List[UploadedDocument] = Field(default_factory=list)

    @field_validator("number")
    @classmethod
    def strip_number(cls, value: str) -> str:
        return value.replace(" ", "").strip().upper()


class IdentityDocumentSet(BaseModel):
    """Aadhaar, PAN, passport and UAN, each optional but well-formed when given."""
    model_config = ConfigDict(extra="forbid")

    kind: Literal["identity"] = "identity"
    aadhaar: IdentityDocument = Field(default_factory=IdentityDocument)
    pan: IdentityDocument = Field(default_factory=IdentityDocument)
    passport: IdentityDocument = Field(default_factory=IdentityDocument)
    uan: IdentityDocument = Field(default_factory=IdentityDocument)

    @model_validator(mode="after")
    def validate_numbers(self) -> "IdentityDocumentSet":
        problems = []
        aadhaar = self.aadhaar.number
        if aadhaar and not (_TWELVE_DIGITS_RE.match(aadhaar) and is_valid_aadhaar(aadhaar)):
            problems.append("aadhaar.number is not a valid 12-digit Aadhaar number")
        if self.pan.number and not _PAN_RE.match(self.pan.number):
            problems.append("pan.number must look like ABCDE1234F")
        if self.passport.number and not _PASSPORT_RE.match(self.passport.number):
            problems.append("passport.number must be one letter followed by 7 digits")
        if self.uan.number and not _TWELVE_DIGITS_RE.match(self.uan.number):
            problems.append("uan.number must be exactly 12 digits")
        if problems:
            raise ValueError("; ".join(problems))
        return self


# ---------------------------------------------------------------------------
# additional_data
# ---------------------------------------------------------------------------

class LinkedDocument(BaseModel):
    """A URL (LinkedIn profile, screening video) with supporting uploads."""
    model_config = ConfigDict(extra="forbid")

    url: str = ""
    documents: List[UploadedDocument] = Field(default_factory=list)


class AdditionalDocumentSet(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["additional"] = "additional"
    resume: List[UploadedDocument] = Field(default_factory=list)
    linkedin_verification: LinkedDocument = Field(default_factory=LinkedDocument)
    video_screening: LinkedDocument = Field(default_factory=LinkedDocument)
    other: List[UploadedDocument] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# CandidateProfile: the full record the candidate form submits
# ---------------------------------------------------------------------------

class CandidateProfile(BaseModel):
    """
    Candidate record as submitted by the form wizard.

    Structural checks live here; cross-field business rules (Aadhaar checksum,
    external-candidate required fields, experience ordering) are enforced by
    validator.validate_candidate_business_rules so all violations are reported
    together.
    """
    model_config = ConfigDict(extra="forbid")

    candidate_id: str = Field(default_factory=_new_id)
    candidate_type: CandidateType = CandidateType.internal
    status: CandidateStatus = CandidateStatus.available

    # --- Basic ---
    name: str = Field(..., min_length=1)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str
    primary_skill: str = Field(..., min_length=1)
    linkedin_url: str = ""
    aadhaar_number: str = ""
    uan_number: str = ""

    # --- External candidates ---
    recruiter_name: Optional[str] = None
    source: Optional[str] = None          # Naukri, LinkedIn, referral, ...
    client_name: Optional[str] = None

    # --- Experience ---
    total_experience: float = Field(default=0, ge=0)
    relevant_experience: float = Field(default=0, ge=0)
    current_company: Optional[str] = None
    current_location: Optional[str] = None
    preferred_location: Optional[str] = None

    # --- Compensation ---
    current_ctc: Optional[int] = Field(default=None, ge=0)
    expected_ctc: Optional[int] = Field(default=None, ge=0)
    notice_period: Optional[str] = None
    tentative_doj: Optional[datetime.date] = None

    # --- Documents ---
    education_data: List[EducationEntry] = Field(default_factory=list)
    employment_data: List[EmploymentEntry] = Field(default_factory=list)
    identity_data: IdentityDocumentSet = Field(default_factory=IdentityDocumentSet)
    additional_data: AdditionalDocumentSet = Field(default_factory=AdditionalDocumentSet)


__all__ = [
    "CandidateType",
    "CandidateStatus",
    "UploadedDocument",
    "EducationEntry",
    "EmploymentEntry",
    "IdentityDocument",
    "IdentityDocumentSet",
    "LinkedDocument",
    "AdditionalDocumentSet",
    "CandidateProfile",
]
