"""Pydantic schemas for data validation and serialization."""

from .candidate import CandidateCreate, CandidateUpdate, CandidateResponse
from .job_offer import JobOfferCreate, JobOfferUpdate, JobOfferResponse
from .pagination import PaginationMeta, PaginatedResponse
from .validation import validate_payload, parse_payload

__all__ = [
    "CandidateCreate", "CandidateUpdate", "CandidateResponse",
    "JobOfferCreate", "JobOfferUpdate", "JobOfferResponse",
    "PaginationMeta", "PaginatedResponse",
    "validate_payload", "parse_payload",
]
