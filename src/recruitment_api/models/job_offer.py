"""Job offer model for open positions."""

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship

from recruitment_api.core.base import Base, utcnow


class JobOffer(Base):
    """Job offer model representing an open position."""

    __tablename__ = "job_offers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    salary_range = Column(String(100), nullable=True)
    location = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    candidate_links = relationship(
        "CandidateJobOffer",
        back_populates="job_offer",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<JobOffer(id={self.id}, title='{self.title}')>"
