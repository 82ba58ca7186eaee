"""Pydantic schemas for Candidate model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from recruitment_api.models.candidate import Candidate, RecruitmentStatus

PHONE_SEPARATORS = (" ", "-", "(", ")")
PHONE_MIN_DIGITS = 9
PHONE_MAX_DIGITS = 15


def validate_phone_number(value: str) -> str:
    """Accept digits with an optional leading '+' and common separators."""
    cleaned = value.strip()
    if cleaned.startswith("+"):
        cleaned = cleaned[1:]
    for separator in PHONE_SEPARATORS:
        cleaned = cleaned.replace(separator, "")
    if not cleaned.isdigit():
        raise ValueError("Phone number should contain only digits and common separators")
    if not PHONE_MIN_DIGITS <= len(cleaned) <= PHONE_MAX_DIGITS:
        raise ValueError(
            f"Phone number must contain between {PHONE_MIN_DIGITS} and {PHONE_MAX_DIGITS} digits"
        )
    return value


def require_iso_string(value):
    """Date-times arrive as ISO 8601 strings; numbers and other types are rejected."""
    if not isinstance(value, str):
        raise ValueError("Date must be an ISO 8601 date-time string")
    return value


class CandidateCreate(BaseModel):
    """Schema for creating a new candidate."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    first_name: str = Field(..., min_length=2, max_length=100, examples=["Jan"])
    last_name: str = Field(..., min_length=2, max_length=100, examples=["Kowalski"])
    email: EmailStr = Field(..., examples=["jan.kowalski@example.pl"])
    phone: str = Field(..., examples=["+48 123 456 789"])
    years_of_experience: int = Field(..., gt=0, strict=True, examples=[5])
    recruiter_notes: Optional[str] = Field(None, max_length=1000)
    status: RecruitmentStatus = Field(default=RecruitmentStatus.NEW)
    consent_date: datetime = Field(..., examples=["2024-01-15T10:00:00Z"])
    job_offer_id: int = Field(..., gt=0, strict=True, description="Job offer the candidate applies for")

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return validate_phone_number(v)

    @field_validator("consent_date", mode="before")
    @classmethod
    def validate_consent_date(cls, v):
        return require_iso_string(v)


class CandidateUpdate(BaseModel):
    """Schema for partially updating a candidate.

    Only fields present in the payload are applied. ``recruiterNotes`` can be
    cleared with an explicit null; every other field rejects null.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    first_name: Optional[str] = Field(None, min_length=2, max_length=100)
    last_name: Optional[str] = Field(None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    years_of_experience: Optional[int] = Field(None, gt=0, strict=True)
    recruiter_notes: Optional[str] = Field(None, max_length=1000)
    status: Optional[RecruitmentStatus] = None
    consent_date: Optional[datetime] = None

    @field_validator(
        "first_name", "last_name", "email", "phone",
        "years_of_experience", "status", "consent_date",
        mode="before"
    )
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if v is not None:
            return validate_phone_number(v)
        return v

    @field_validator("consent_date", mode="before")
    @classmethod
    def validate_consent_date(cls, v):
        if v is None:
            return v
        return require_iso_string(v)

    def changes(self) -> dict:
        """Fields explicitly provided in the payload."""
        return self.model_dump(exclude_unset=True)


class CandidateResponse(BaseModel):
    """Externally visible candidate representation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    years_of_experience: int
    recruiter_notes: Optional[str] = None
    status: RecruitmentStatus
    consent_date: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, candidate: Candidate) -> "CandidateResponse":
        return cls.model_validate(candidate)
