"""Pydantic schemas for JobOffer model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from recruitment_api.models.job_offer import JobOffer


class JobOfferCreate(BaseModel):
    """Schema for creating a job offer."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    title: str = Field(..., min_length=2, max_length=200, examples=["Senior Fullstack Developer"])
    description: str = Field(..., min_length=10, max_length=2000)
    salary_range: Optional[str] = Field(None, min_length=5, max_length=100, examples=["15 000 - 22 000 PLN"])
    location: Optional[str] = Field(None, min_length=2, max_length=100, examples=["Warszawa"])


class JobOfferUpdate(BaseModel):
    """Schema for partially updating a job offer."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    title: Optional[str] = Field(None, min_length=2, max_length=200)
    description: Optional[str] = Field(None, min_length=10, max_length=2000)
    salary_range: Optional[str] = Field(None, min_length=5, max_length=100)
    location: Optional[str] = Field(None, min_length=2, max_length=100)

    @field_validator("title", "description", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    def changes(self) -> dict:
        """Fields explicitly provided in the payload."""
        return self.model_dump(exclude_unset=True)


class JobOfferResponse(BaseModel):
    """Externally visible job offer representation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    title: str
    description: str
    salary_range: Optional[str] = None
    location: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, job_offer: JobOffer) -> "JobOfferResponse":
        return cls.model_validate(job_offer)
