"""Candidate repository for database operations."""

from typing import Optional, List, Tuple

from sqlalchemy.orm import Session
import structlog

from recruitment_api.models.candidate import Candidate, RecruitmentStatus
from recruitment_api.models.candidate_job_offer import CandidateJobOffer
from .base import BaseRepository

logger = structlog.get_logger(__name__)


class CandidateRepository(BaseRepository[Candidate]):
    """Repository for Candidate model operations."""

    def __init__(self):
        super().__init__(Candidate)

    def create_with_job_offer(self, db: Session, job_offer_id: int, **fields) -> Candidate:
        """Create a candidate and its job offer association in one transaction.

        Args:
            db: Database session
            job_offer_id: Job offer the candidate applies for
            **fields: Candidate column values

        Returns:
            Created candidate

        Raises:
            IntegrityError: On unique or foreign key violations, after rollback
        """
        if fields.get("status") is None:
            fields["status"] = RecruitmentStatus.NEW

        try:
            candidate = Candidate(**fields)
            db.add(candidate)
            db.flush()

            db.add(CandidateJobOffer(candidate_id=candidate.id, job_offer_id=job_offer_id))
            db.commit()
            db.refresh(candidate)

            logger.debug(
                "Candidate row created",
                candidate_id=candidate.id,
                job_offer_id=job_offer_id
            )
            return candidate

        except Exception:
            db.rollback()
            raise

    def get_by_email(self, db: Session, email: str) -> Optional[Candidate]:
        """Get candidate by email.

        Args:
            db: Database session
            email: Candidate email

        Returns:
            Candidate if found, None otherwise
        """
        return db.query(Candidate).filter(Candidate.email == email).first()

    def get_by_status(self, db: Session, status: RecruitmentStatus) -> List[Candidate]:
        """Get all candidates in a recruitment status, newest first."""
        return self.get_all(db, {"status": status})

    def get_page(
        self,
        db: Session,
        skip: int,
        limit: int,
        status: Optional[RecruitmentStatus] = None
    ) -> Tuple[List[Candidate], int]:
        """Get a page of candidates and the total matching the same filter.

        Args:
            db: Database session
            skip: Number of records to skip
            limit: Maximum number of records
            status: Optional recruitment status filter

        Returns:
            Tuple of (candidates, total count)
        """
        filters = {"status": status} if status else None
        return (
            self.get_multi(db, skip=skip, limit=limit, filters=filters),
            self.count(db, filters),
        )
