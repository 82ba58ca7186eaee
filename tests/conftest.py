"""Pytest configuration for recruitment API tests."""

from concurrent.futures import Executor, Future
from datetime import datetime, timezone
from typing import Generator
from unittest.mock import MagicMock

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Configure Hypothesis before importing test modules
from tests.property_based.config import PropertyTestConfig
PropertyTestConfig.configure_hypothesis()

from recruitment_api.api.candidates import get_candidate_service
from recruitment_api.core.base import Base
from recruitment_api.core.database import enable_sqlite_foreign_keys, get_db
from recruitment_api.main import app
from recruitment_api.models import Candidate, JobOffer
from recruitment_api.models.candidate import RecruitmentStatus
from recruitment_api.services.candidate_service import CandidateService
from recruitment_api.services.legacy_api_client import (
    LegacyApiClient,
    SyncResult,
    get_legacy_api_client,
)


class ImmediateExecutor(Executor):
    """Executor that runs submitted work inline and records the calls."""

    def __init__(self):
        self.submitted = []

    def submit(self, fn, *args, **kwargs):
        self.submitted.append((fn, args, kwargs))
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across threads, with foreign keys enforced."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    """Provide a real database session for repository tests."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def mock_db_session():
    """Provide a mock database session for service unit tests."""
    mock_session = MagicMock()
    mock_session.add = MagicMock()
    mock_session.commit = MagicMock()
    mock_session.rollback = MagicMock()
    mock_session.close = MagicMock()
    mock_session.query = MagicMock()
    return mock_session


@pytest.fixture
def immediate_executor():
    return ImmediateExecutor()


@pytest.fixture
def mock_legacy_client():
    """Legacy client that accepts every candidate without network access."""
    client = MagicMock(spec=LegacyApiClient)
    client.send_candidate.return_value = SyncResult(success=True, message="Candidate received")
    client.health_check.return_value = False
    return client


@pytest.fixture
def job_offer(db_session) -> JobOffer:
    """Persisted job offer candidates can apply to."""
    offer = JobOffer(
        title="Senior Fullstack Developer",
        description="Poszukujemy doświadczonego programisty do pracy nad aplikacjami webowymi.",
        salary_range="15 000 - 22 000 PLN",
        location="Warszawa",
    )
    db_session.add(offer)
    db_session.commit()
    db_session.refresh(offer)
    return offer


@pytest.fixture
def make_candidate():
    """Factory for detached candidate entities used with mocked repositories."""
    def _make(**overrides) -> Candidate:
        now = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
        fields = {
            "id": 1,
            "first_name": "Jan",
            "last_name": "Kowalski",
            "email": "jan.kowalski@example.pl",
            "phone": "+48 123 456 789",
            "years_of_experience": 5,
            "recruiter_notes": None,
            "status": RecruitmentStatus.NEW,
            "consent_date": now,
            "created_at": now,
            "updated_at": now,
        }
        fields.update(overrides)
        return Candidate(**fields)

    return _make


@pytest.fixture
def candidate_payload():
    """Valid camelCase body for POST /candidates, minus the job offer id."""
    return {
        "firstName": "Jan",
        "lastName": "Kowalski",
        "email": "jan.kowalski@example.pl",
        "phone": "+48 123 456 789",
        "yearsOfExperience": 5,
        "recruiterNotes": "Strong TypeScript background",
        "consentDate": "2024-01-15T10:00:00Z",
    }


@pytest.fixture
def api_client(session_factory, mock_legacy_client, immediate_executor):
    """TestClient bound to the in-memory database and the mock legacy client."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def override_get_candidate_service(
        db: Session = Depends(override_get_db),
    ) -> CandidateService:
        return CandidateService(
            db,
            legacy_client=mock_legacy_client,
            sync_executor=immediate_executor,
        )

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_legacy_api_client] = lambda: mock_legacy_client
    app.dependency_overrides[get_candidate_service] = override_get_candidate_service

    # No context manager: the lifespan would connect to the configured database
    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()


# Pytest markers for organizing tests
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "property_test: mark test as a property-based test"
    )
    config.addinivalue_line(
        "markers", "database: mark test as requiring database access"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
