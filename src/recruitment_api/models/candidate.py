"""Candidate model for job applicants."""

import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, Enum
from sqlalchemy.orm import relationship

from recruitment_api.core.base import Base, utcnow


class RecruitmentStatus(str, enum.Enum):
    """Stage of a candidate in the recruitment pipeline."""
    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class Candidate(Base):
    """Candidate model representing job applicants."""

    __tablename__ = "candidates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    phone = Column(String(50), nullable=False)
    years_of_experience = Column(Integer, nullable=False)
    recruiter_notes = Column(Text, nullable=True)
    status = Column(
        Enum(RecruitmentStatus, name="recruitment_status"),
        default=RecruitmentStatus.NEW,
        nullable=False,
        index=True
    )
    consent_date = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    job_offer_links = relationship(
        "CandidateJobOffer",
        back_populates="candidate",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Candidate(id={self.id}, email='{self.email}', status={self.status})>"
