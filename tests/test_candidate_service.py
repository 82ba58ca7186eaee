"""Unit tests for the candidate service with a mocked repository."""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from recruitment_api.core.error_handling import (
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from recruitment_api.models.candidate import RecruitmentStatus
from recruitment_api.repositories.candidate import CandidateRepository
from recruitment_api.schemas.candidate import CandidateCreate, CandidateUpdate
from recruitment_api.services.candidate_service import (
    CandidateService,
    get_legacy_sync_executor,
    shutdown_legacy_sync,
)
from recruitment_api.services.legacy_api_client import SyncResult


def _create_data(**overrides) -> CandidateCreate:
    fields = {
        "firstName": "Jan",
        "lastName": "Kowalski",
        "email": "jan.kowalski@example.pl",
        "phone": "+48 123 456 789",
        "yearsOfExperience": 5,
        "consentDate": "2024-01-15T10:00:00Z",
        "jobOfferId": 1,
    }
    fields.update(overrides)
    return CandidateCreate.model_validate(fields)


class _DriverError(Exception):
    """Driver exception carrying a SQLSTATE code, like psycopg errors."""

    def __init__(self, message, sqlstate=None):
        super().__init__(message)
        self.sqlstate = sqlstate


def _integrity_error(message: str, sqlstate=None) -> IntegrityError:
    orig = _DriverError(message, sqlstate)
    return IntegrityError("INSERT INTO candidates ...", {}, orig)


@pytest.fixture
def repository():
    return MagicMock(spec=CandidateRepository)


@pytest.fixture
def service(mock_db_session, repository, mock_legacy_client, immediate_executor):
    return CandidateService(
        mock_db_session,
        repository=repository,
        legacy_client=mock_legacy_client,
        sync_executor=immediate_executor,
    )


class TestCreateCandidate:
    """Test candidate creation."""

    def test_create_success_links_job_offer(self, service, repository, make_candidate):
        repository.get_by_email.return_value = None
        repository.create_with_job_offer.return_value = make_candidate(id=7)

        result = service.create(_create_data())

        assert result.id == 7
        assert result.status == RecruitmentStatus.NEW
        call = repository.create_with_job_offer.call_args
        assert call.kwargs["job_offer_id"] == 1
        assert call.kwargs["status"] == RecruitmentStatus.NEW

    def test_create_triggers_legacy_sync_with_name_and_email(
        self, service, repository, mock_legacy_client, make_candidate
    ):
        repository.get_by_email.return_value = None
        repository.create_with_job_offer.return_value = make_candidate()

        service.create(_create_data())

        mock_legacy_client.send_candidate.assert_called_once_with(
            "Jan", "Kowalski", "jan.kowalski@example.pl"
        )

    def test_create_duplicate_email_raises_conflict(self, service, repository, make_candidate, mock_legacy_client):
        repository.get_by_email.return_value = make_candidate()

        with pytest.raises(ConflictError) as exc_info:
            service.create(_create_data())

        assert exc_info.value.message == "Candidate with email jan.kowalski@example.pl already exists"
        repository.create_with_job_offer.assert_not_called()
        mock_legacy_client.send_candidate.assert_not_called()

    def test_create_unknown_job_offer_raises_validation_error(self, service, repository, mock_legacy_client):
        repository.get_by_email.return_value = None
        repository.create_with_job_offer.side_effect = _integrity_error("FOREIGN KEY constraint failed")

        with pytest.raises(ValidationError) as exc_info:
            service.create(_create_data(jobOfferId=999))

        assert exc_info.value.message == "Invalid job offer or recruiter id"
        mock_legacy_client.send_candidate.assert_not_called()

    def test_create_concurrent_duplicate_maps_to_conflict(self, service, repository):
        repository.get_by_email.return_value = None
        repository.create_with_job_offer.side_effect = _integrity_error(
            "duplicate key value violates unique constraint", sqlstate="23505"
        )

        with pytest.raises(ConflictError) as exc_info:
            service.create(_create_data())

        assert exc_info.value.status_code == 409
        assert "already exists" in exc_info.value.message

    def test_create_postgres_foreign_key_code(self, service, repository):
        repository.get_by_email.return_value = None
        repository.create_with_job_offer.side_effect = _integrity_error(
            "insert or update violates foreign key constraint", sqlstate="23503"
        )

        with pytest.raises(ValidationError):
            service.create(_create_data())

    def test_create_other_integrity_error_is_internal(self, service, repository):
        repository.get_by_email.return_value = None
        repository.create_with_job_offer.side_effect = _integrity_error(
            "NOT NULL constraint failed: candidates.phone"
        )

        with patch("recruitment_api.services.candidate_service.logger") as mock_logger:
            with pytest.raises(InternalError) as exc_info:
                service.create(_create_data())

        assert exc_info.value.message == "Failed to create candidate"
        mock_logger.error.assert_called_once()

    def test_create_unexpected_failure_is_internal(self, service, repository):
        repository.get_by_email.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))

        with pytest.raises(InternalError) as exc_info:
            service.create(_create_data())

        assert exc_info.value.message == "Failed to create candidate"
        assert exc_info.value.to_response_body() == {"detail": "Failed to create candidate"}
        assert isinstance(exc_info.value.original_error, OperationalError)

    def test_legacy_failure_does_not_affect_create(
        self, service, repository, mock_legacy_client, make_candidate
    ):
        repository.get_by_email.return_value = None
        repository.create_with_job_offer.return_value = make_candidate()
        mock_legacy_client.send_candidate.return_value = SyncResult(success=False, error="Legacy API error")

        with patch("recruitment_api.services.candidate_service.logger") as mock_logger:
            result = service.create(_create_data())

        assert result.email == "jan.kowalski@example.pl"
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.kwargs["error"] == "Legacy API error"

    def test_legacy_exception_is_logged_not_raised(
        self, service, repository, mock_legacy_client, make_candidate
    ):
        repository.get_by_email.return_value = None
        repository.create_with_job_offer.return_value = make_candidate()
        mock_legacy_client.send_candidate.side_effect = RuntimeError("boom")

        with patch("recruitment_api.services.candidate_service.logger") as mock_logger:
            result = service.create(_create_data())

        assert result.id == 1
        assert mock_logger.error.call_args.args[0] == "Failed to sync candidate to legacy API"

    def test_executor_rejection_does_not_affect_create(
        self, mock_db_session, repository, mock_legacy_client, make_candidate
    ):
        executor = MagicMock()
        executor.submit.side_effect = RuntimeError("cannot schedule new futures after shutdown")
        service = CandidateService(
            mock_db_session,
            repository=repository,
            legacy_client=mock_legacy_client,
            sync_executor=executor,
        )
        repository.get_by_email.return_value = None
        repository.create_with_job_offer.return_value = make_candidate()

        result = service.create(_create_data())

        assert result.id == 1
        mock_legacy_client.send_candidate.assert_not_called()


class TestListCandidates:
    """Test candidate listing and pagination."""

    def test_find_all_paginated_computes_meta(self, service, repository, make_candidate):
        repository.get_page.return_value = ([make_candidate(id=2), make_candidate(id=1)], 2)

        result = service.find_all_paginated(1, 10)

        repository.get_page.assert_called_once_with(
            service.db, skip=0, limit=10, status=None
        )
        assert [c.id for c in result.data] == [2, 1]
        assert result.meta.total == 2
        assert result.meta.total_pages == 1
        assert result.meta.has_next_page is False
        assert result.meta.has_previous_page is False

    def test_find_all_paginated_offset_and_status(self, service, repository):
        repository.get_page.return_value = ([], 25)

        result = service.find_all_paginated(3, 10, RecruitmentStatus.ACCEPTED)

        repository.get_page.assert_called_once_with(
            service.db, skip=20, limit=10, status=RecruitmentStatus.ACCEPTED
        )
        assert result.meta.total_pages == 3
        assert result.meta.has_next_page is False
        assert result.meta.has_previous_page is True

    def test_page_past_the_end_returns_empty_data(self, service, repository):
        repository.get_page.return_value = ([], 5)

        result = service.find_all_paginated(4, 2)

        assert result.data == []
        assert result.meta.total_pages == 3
        assert result.meta.has_next_page is False

    @pytest.mark.parametrize("page", [0, -1])
    def test_invalid_page_rejected(self, service, repository, page):
        with pytest.raises(ValidationError) as exc_info:
            service.find_all_paginated(page, 10)
        assert exc_info.value.message == "Page must be greater than 0"
        repository.get_page.assert_not_called()

    @pytest.mark.parametrize("limit", [0, 101])
    def test_invalid_limit_rejected(self, service, repository, limit):
        with pytest.raises(ValidationError) as exc_info:
            service.find_all_paginated(1, limit)
        assert exc_info.value.message == "Limit must be between 1 and 100"
        repository.get_page.assert_not_called()

    def test_find_all_returns_every_candidate(self, service, repository, make_candidate):
        repository.get_all.return_value = [make_candidate(id=3), make_candidate(id=2)]

        assert [c.id for c in service.find_all()] == [3, 2]

    def test_find_by_status(self, service, repository, make_candidate):
        repository.get_by_status.return_value = [make_candidate(status=RecruitmentStatus.REJECTED)]

        result = service.find_by_status(RecruitmentStatus.REJECTED)

        assert result[0].status == RecruitmentStatus.REJECTED
        repository.get_by_status.assert_called_once_with(service.db, RecruitmentStatus.REJECTED)

    def test_list_failure_is_internal(self, service, repository):
        repository.get_page.side_effect = OperationalError("SELECT", {}, Exception("timeout"))

        with pytest.raises(InternalError) as exc_info:
            service.find_all_paginated(1, 10)
        assert exc_info.value.message == "Failed to fetch candidates"


class TestGetCandidate:
    """Test single candidate lookups."""

    def test_find_one(self, service, repository, make_candidate):
        repository.get_by_id.return_value = make_candidate(id=4)

        assert service.find_one(4).id == 4

    def test_find_one_missing(self, service, repository):
        repository.get_by_id.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            service.find_one(42)
        assert exc_info.value.message == "Candidate with ID 42 not found"

    def test_find_by_email_absent_returns_none(self, service, repository):
        repository.get_by_email.return_value = None

        assert service.find_by_email("nobody@example.com") is None

    def test_find_by_email_present(self, service, repository, make_candidate):
        repository.get_by_email.return_value = make_candidate()

        assert service.find_by_email("jan.kowalski@example.pl").first_name == "Jan"


class TestUpdateCandidate:
    """Test partial candidate updates."""

    def test_update_applies_only_provided_fields(self, service, repository, make_candidate):
        existing = make_candidate()
        repository.get_by_id.return_value = existing
        repository.update.return_value = make_candidate(status=RecruitmentStatus.IN_PROGRESS)

        result = service.update(1, CandidateUpdate.model_validate({"status": "IN_PROGRESS"}))

        repository.update.assert_called_once_with(
            service.db, existing, status=RecruitmentStatus.IN_PROGRESS
        )
        assert result.status == RecruitmentStatus.IN_PROGRESS

    def test_update_empty_payload_rejected_before_lookup(self, service, repository):
        with pytest.raises(ValidationError) as exc_info:
            service.update(999, CandidateUpdate.model_validate({}))

        assert exc_info.value.message == "At least one field must be provided for update"
        repository.get_by_id.assert_not_called()

    def test_update_missing_candidate(self, service, repository):
        repository.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            service.update(5, CandidateUpdate.model_validate({"firstName": "Anna"}))

    def test_update_email_taken_by_other(self, service, repository, make_candidate):
        repository.get_by_id.return_value = make_candidate(id=1)
        repository.get_by_email.return_value = make_candidate(id=2, email="anna@example.com")

        with pytest.raises(ConflictError) as exc_info:
            service.update(1, CandidateUpdate.model_validate({"email": "anna@example.com"}))

        assert exc_info.value.message == "Email anna@example.com is already in use"
        repository.update.assert_not_called()

    def test_update_same_email_skips_uniqueness_check(self, service, repository, make_candidate):
        existing = make_candidate()
        repository.get_by_id.return_value = existing
        repository.update.return_value = existing

        service.update(1, CandidateUpdate.model_validate({"email": "jan.kowalski@example.pl"}))

        repository.get_by_email.assert_not_called()

    def test_update_clears_recruiter_notes(self, service, repository, make_candidate):
        existing = make_candidate(recruiter_notes="old")
        repository.get_by_id.return_value = existing
        repository.update.return_value = make_candidate(recruiter_notes=None)

        service.update(1, CandidateUpdate.model_validate({"recruiterNotes": None}))

        repository.update.assert_called_once_with(service.db, existing, recruiter_notes=None)

    def test_update_unique_race_maps_to_email_in_use(self, service, repository, make_candidate):
        repository.get_by_id.return_value = make_candidate()
        repository.get_by_email.return_value = None
        repository.update.side_effect = _integrity_error("UNIQUE constraint failed: candidates.email")

        with pytest.raises(ConflictError) as exc_info:
            service.update(1, CandidateUpdate.model_validate({"email": "new@example.com"}))

        assert exc_info.value.message == "Email new@example.com is already in use"


class TestRemoveCandidate:
    """Test candidate deletion."""

    def test_remove(self, service, repository, make_candidate):
        existing = make_candidate()
        repository.get_by_id.return_value = existing

        service.remove(1)

        repository.delete.assert_called_once_with(service.db, existing)

    def test_remove_missing(self, service, repository):
        repository.get_by_id.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            service.remove(3)
        assert exc_info.value.message == "Candidate with ID 3 not found"
        repository.delete.assert_not_called()

    def test_remove_failure_is_internal(self, service, repository, make_candidate):
        repository.get_by_id.return_value = make_candidate()
        repository.delete.side_effect = OperationalError("DELETE", {}, Exception("locked"))

        with pytest.raises(InternalError) as exc_info:
            service.remove(1)
        assert exc_info.value.message == "Failed to delete candidate"


class TestLegacySyncExecutor:
    """Test the lifecycle of the shared sync executor."""

    def test_executor_recreated_after_shutdown(self, mock_db_session, repository, mock_legacy_client, make_candidate):
        first = get_legacy_sync_executor()
        assert get_legacy_sync_executor() is first

        shutdown_legacy_sync()
        second = get_legacy_sync_executor()

        assert second is not first
        assert second.submit(lambda: "scheduled").result(timeout=5) == "scheduled"

        service = CandidateService(mock_db_session, repository=repository, legacy_client=mock_legacy_client)
        repository.get_by_email.return_value = None
        repository.create_with_job_offer.return_value = make_candidate()

        with patch("recruitment_api.services.candidate_service.logger") as mock_logger:
            service.create(_create_data())
            shutdown_legacy_sync()

        assert service.sync_executor is second
        assert all(
            call.args[0] != "Could not schedule legacy API sync"
            for call in mock_logger.warning.call_args_list
        )

    def test_shutdown_twice_is_safe(self):
        get_legacy_sync_executor()

        shutdown_legacy_sync()
        shutdown_legacy_sync()
