"""Candidate management service."""

import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import structlog

from recruitment_api.core.config import settings
from recruitment_api.core.error_handling import (
    ConflictError,
    InternalError,
    NotFoundError,
    RecruitmentError,
    ValidationError,
    is_foreign_key_violation,
    is_unique_violation,
)
from recruitment_api.models.candidate import RecruitmentStatus
from recruitment_api.repositories.candidate import CandidateRepository
from recruitment_api.schemas.candidate import CandidateCreate, CandidateResponse, CandidateUpdate
from recruitment_api.schemas.pagination import PaginatedResponse
from recruitment_api.services.legacy_api_client import LegacyApiClient, get_legacy_api_client

logger = structlog.get_logger(__name__)

MAX_PAGE_SIZE = 100

_legacy_sync_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def get_legacy_sync_executor() -> ThreadPoolExecutor:
    """Process-wide sync executor, created on first use and after a shutdown."""
    global _legacy_sync_executor
    with _executor_lock:
        if _legacy_sync_executor is None:
            _legacy_sync_executor = ThreadPoolExecutor(
                max_workers=settings.legacy_sync_workers,
                thread_name_prefix="legacy-sync"
            )
        return _legacy_sync_executor


def shutdown_legacy_sync() -> None:
    """Stop accepting sync jobs; in-flight calls finish within their timeout."""
    global _legacy_sync_executor
    with _executor_lock:
        executor, _legacy_sync_executor = _legacy_sync_executor, None
    if executor is not None:
        executor.shutdown(wait=False)


class CandidateService:
    """Service for managing candidate operations."""

    def __init__(
        self,
        db: Session,
        repository: Optional[CandidateRepository] = None,
        legacy_client: Optional[LegacyApiClient] = None,
        sync_executor: Optional[Executor] = None
    ):
        self.db = db
        self.repository = repository or CandidateRepository()
        self.legacy_client = legacy_client or get_legacy_api_client()
        self.sync_executor = sync_executor or get_legacy_sync_executor()

    def create(self, candidate_data: CandidateCreate) -> CandidateResponse:
        """Create a candidate linked to a job offer and notify the legacy API.

        Args:
            candidate_data: Validated candidate creation data

        Returns:
            Created candidate

        Raises:
            ConflictError: If the email is already taken
            ValidationError: If the job offer does not exist
            InternalError: On any other persistence failure
        """
        email = candidate_data.email
        try:
            if self.repository.get_by_email(self.db, email):
                raise self._email_taken(email)

            fields = candidate_data.model_dump(exclude={"job_offer_id"})
            candidate = self.repository.create_with_job_offer(
                self.db,
                job_offer_id=candidate_data.job_offer_id,
                **fields
            )
            logger.info("Candidate created", candidate_id=candidate.id, email=email)

        except RecruitmentError:
            raise
        except IntegrityError as e:
            raise self._translate_integrity_error(e, email, "Failed to create candidate")
        except Exception as e:
            logger.error("Candidate creation failed", email=email, error=str(e))
            raise InternalError("Failed to create candidate", original_error=e)

        self._schedule_legacy_sync(candidate_data.first_name, candidate_data.last_name, email)
        return CandidateResponse.from_entity(candidate)

    def find_all(self) -> List[CandidateResponse]:
        """List every candidate, newest first."""
        try:
            candidates = self.repository.get_all(self.db)
        except Exception as e:
            logger.error("Failed to fetch candidates", error=str(e))
            raise InternalError("Failed to fetch candidates", original_error=e)
        return [CandidateResponse.from_entity(candidate) for candidate in candidates]

    def find_all_paginated(
        self,
        page: int,
        limit: int,
        status: Optional[RecruitmentStatus] = None
    ) -> PaginatedResponse[CandidateResponse]:
        """List candidates one page at a time.

        Args:
            page: 1-based page number
            limit: Page size, 1 to 100
            status: Optional recruitment status filter

        Returns:
            Page of candidates with pagination metadata
        """
        if page < 1:
            raise ValidationError("Page must be greater than 0")
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")

        skip = (page - 1) * limit
        try:
            candidates, total = self.repository.get_page(self.db, skip=skip, limit=limit, status=status)
        except Exception as e:
            logger.error(
                "Failed to fetch paginated candidates",
                page=page,
                limit=limit,
                status=status,
                error=str(e)
            )
            raise InternalError("Failed to fetch candidates", original_error=e)

        return PaginatedResponse[CandidateResponse].create(
            [CandidateResponse.from_entity(candidate) for candidate in candidates],
            page,
            limit,
            total,
        )

    def find_one(self, candidate_id: int) -> CandidateResponse:
        """Get a candidate by ID."""
        try:
            candidate = self.repository.get_by_id(self.db, candidate_id)
        except Exception as e:
            logger.error("Failed to fetch candidate", candidate_id=candidate_id, error=str(e))
            raise InternalError("Failed to fetch candidate", original_error=e)

        if candidate is None:
            raise self._not_found(candidate_id)
        return CandidateResponse.from_entity(candidate)

    def find_by_status(self, status: RecruitmentStatus) -> List[CandidateResponse]:
        """List candidates in a recruitment status, newest first."""
        try:
            candidates = self.repository.get_by_status(self.db, status)
        except Exception as e:
            logger.error("Failed to fetch candidates by status", status=status, error=str(e))
            raise InternalError("Failed to fetch candidates by status", original_error=e)
        return [CandidateResponse.from_entity(candidate) for candidate in candidates]

    def find_by_email(self, email: str) -> Optional[CandidateResponse]:
        """Get a candidate by email, or None when there is no match."""
        try:
            candidate = self.repository.get_by_email(self.db, email)
        except Exception as e:
            logger.error("Failed to fetch candidate by email", email=email, error=str(e))
            raise InternalError("Failed to fetch candidate by email", original_error=e)

        if candidate is None:
            return None
        return CandidateResponse.from_entity(candidate)

    def update(self, candidate_id: int, candidate_data: CandidateUpdate) -> CandidateResponse:
        """Apply a partial update to a candidate.

        Args:
            candidate_id: Candidate ID
            candidate_data: Validated partial update

        Returns:
            Updated candidate

        Raises:
            ValidationError: If no field is provided or a reference is invalid
            NotFoundError: If the candidate does not exist
            ConflictError: If the new email belongs to another candidate
            InternalError: On any other persistence failure
        """
        changes = candidate_data.changes()
        if not changes:
            raise ValidationError("At least one field must be provided for update")

        new_email = changes.get("email")
        try:
            candidate = self.repository.get_by_id(self.db, candidate_id)
            if candidate is None:
                raise self._not_found(candidate_id)

            if new_email is not None and new_email != candidate.email:
                if self.repository.get_by_email(self.db, new_email):
                    raise self._email_in_use(new_email)

            candidate = self.repository.update(self.db, candidate, **changes)
            logger.info("Candidate updated", candidate_id=candidate_id, fields=sorted(changes))

        except RecruitmentError:
            raise
        except IntegrityError as e:
            raise self._translate_integrity_error(
                e, new_email, "Failed to update candidate", conflict=self._email_in_use
            )
        except Exception as e:
            logger.error("Candidate update failed", candidate_id=candidate_id, error=str(e))
            raise InternalError("Failed to update candidate", original_error=e)

        return CandidateResponse.from_entity(candidate)

    def remove(self, candidate_id: int) -> None:
        """Delete a candidate."""
        try:
            candidate = self.repository.get_by_id(self.db, candidate_id)
            if candidate is None:
                raise self._not_found(candidate_id)

            self.repository.delete(self.db, candidate)
            logger.info("Candidate deleted", candidate_id=candidate_id)

        except RecruitmentError:
            raise
        except Exception as e:
            logger.error("Candidate deletion failed", candidate_id=candidate_id, error=str(e))
            raise InternalError("Failed to delete candidate", original_error=e)

    def _schedule_legacy_sync(self, first_name: str, last_name: str, email: str) -> None:
        try:
            self.sync_executor.submit(self._sync_to_legacy_api, first_name, last_name, email)
        except Exception as e:
            logger.warning("Could not schedule legacy API sync", email=email, error=str(e))

    def _sync_to_legacy_api(self, first_name: str, last_name: str, email: str) -> None:
        """Run on the sync executor; its outcome is only logged."""
        try:
            result = self.legacy_client.send_candidate(first_name, last_name, email)
        except Exception as e:
            logger.error("Failed to sync candidate to legacy API", email=email, error=str(e))
            return

        if result.success:
            logger.info("Candidate synced to legacy API", email=email)
        else:
            logger.warning("Legacy API sync failed", email=email, error=result.error)

    def _translate_integrity_error(
        self,
        error: IntegrityError,
        email: Optional[str],
        message: str,
        conflict: Optional[Callable[[str], ConflictError]] = None
    ) -> RecruitmentError:
        if is_foreign_key_violation(error):
            return ValidationError("Invalid job offer or recruiter id", original_error=error)
        if is_unique_violation(error) and email is not None:
            return (conflict or self._email_taken)(email)
        logger.error(message, email=email, error=str(error))
        return InternalError(message, original_error=error)

    @staticmethod
    def _not_found(candidate_id: int) -> NotFoundError:
        return NotFoundError(f"Candidate with ID {candidate_id} not found")

    @staticmethod
    def _email_taken(email: str) -> ConflictError:
        return ConflictError(f"Candidate with email {email} already exists")

    @staticmethod
    def _email_in_use(email: str) -> ConflictError:
        return ConflictError(f"Email {email} is already in use")
