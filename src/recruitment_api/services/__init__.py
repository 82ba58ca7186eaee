"""Service layer for business logic."""

from .legacy_api_client import LegacyApiClient, SyncResult, get_legacy_api_client
from .candidate_service import CandidateService, get_legacy_sync_executor, shutdown_legacy_sync
from .job_offer_service import JobOfferService

__all__ = [
    "LegacyApiClient",
    "SyncResult",
    "get_legacy_api_client",
    "CandidateService",
    "get_legacy_sync_executor",
    "shutdown_legacy_sync",
    "JobOfferService",
]
