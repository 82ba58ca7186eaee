"""Association between a candidate and the job offer they applied for."""

from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from recruitment_api.core.base import Base, utcnow


class CandidateJobOffer(Base):
    """Join record written once when a candidate is created."""

    __tablename__ = "candidate_job_offers"
    __table_args__ = (
        UniqueConstraint("candidate_id", "job_offer_id", name="uq_candidate_job_offer"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    candidate_id = Column(
        Integer, ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False, index=True
    )
    job_offer_id = Column(
        Integer, ForeignKey("job_offers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Relationships
    candidate = relationship("Candidate", back_populates="job_offer_links")
    job_offer = relationship("JobOffer", back_populates="candidate_links")

    def __repr__(self) -> str:
        return f"<CandidateJobOffer(candidate_id={self.candidate_id}, job_offer_id={self.job_offer_id})>"
