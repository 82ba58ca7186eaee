"""Job offer management service."""

from typing import List, Optional

from sqlalchemy.orm import Session
import structlog

from recruitment_api.core.error_handling import (
    InternalError,
    NotFoundError,
    RecruitmentError,
    ValidationError,
)
from recruitment_api.repositories.job_offer import JobOfferRepository
from recruitment_api.schemas.job_offer import JobOfferCreate, JobOfferResponse, JobOfferUpdate

logger = structlog.get_logger(__name__)


class JobOfferService:
    """Service for managing job offer operations."""

    def __init__(self, db: Session, repository: Optional[JobOfferRepository] = None):
        self.db = db
        self.repository = repository or JobOfferRepository()

    def create(self, job_offer_data: JobOfferCreate) -> JobOfferResponse:
        """Create a job offer."""
        try:
            job_offer = self.repository.create(self.db, **job_offer_data.model_dump())
        except Exception as e:
            logger.error("Job offer creation failed", title=job_offer_data.title, error=str(e))
            raise InternalError("Failed to create job offer", original_error=e)

        logger.info("Job offer created", job_offer_id=job_offer.id)
        return JobOfferResponse.from_entity(job_offer)

    def find_all(self) -> List[JobOfferResponse]:
        """List every job offer, newest first."""
        try:
            job_offers = self.repository.get_all(self.db)
        except Exception as e:
            logger.error("Failed to fetch job offers", error=str(e))
            raise InternalError("Failed to fetch job offers", original_error=e)
        return [JobOfferResponse.from_entity(job_offer) for job_offer in job_offers]

    def find_one(self, job_offer_id: int) -> JobOfferResponse:
        """Get a job offer by ID."""
        try:
            job_offer = self.repository.get_by_id(self.db, job_offer_id)
        except Exception as e:
            logger.error("Failed to fetch job offer", job_offer_id=job_offer_id, error=str(e))
            raise InternalError("Failed to fetch job offer", original_error=e)

        if job_offer is None:
            raise self._not_found(job_offer_id)
        return JobOfferResponse.from_entity(job_offer)

    def update(self, job_offer_id: int, job_offer_data: JobOfferUpdate) -> JobOfferResponse:
        """Apply a partial update to a job offer.

        Raises:
            ValidationError: If no field is provided
            NotFoundError: If the job offer does not exist
            InternalError: On any other persistence failure
        """
        changes = job_offer_data.changes()
        if not changes:
            raise ValidationError("At least one field must be provided for update")

        try:
            job_offer = self.repository.get_by_id(self.db, job_offer_id)
            if job_offer is None:
                raise self._not_found(job_offer_id)

            job_offer = self.repository.update(self.db, job_offer, **changes)
            logger.info("Job offer updated", job_offer_id=job_offer_id, fields=sorted(changes))

        except RecruitmentError:
            raise
        except Exception as e:
            logger.error("Job offer update failed", job_offer_id=job_offer_id, error=str(e))
            raise InternalError("Failed to update job offer", original_error=e)

        return JobOfferResponse.from_entity(job_offer)

    def remove(self, job_offer_id: int) -> None:
        """Delete a job offer together with its candidate associations."""
        try:
            job_offer = self.repository.get_by_id(self.db, job_offer_id)
            if job_offer is None:
                raise self._not_found(job_offer_id)

            self.repository.delete(self.db, job_offer)
            logger.info("Job offer deleted", job_offer_id=job_offer_id)

        except RecruitmentError:
            raise
        except Exception as e:
            logger.error("Job offer deletion failed", job_offer_id=job_offer_id, error=str(e))
            raise InternalError("Failed to delete job offer", original_error=e)

    @staticmethod
    def _not_found(job_offer_id: int) -> NotFoundError:
        return NotFoundError(f"Job offer with ID {job_offer_id} not found")
