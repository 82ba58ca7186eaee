"""Repository pattern implementations for data access."""

from .base import BaseRepository
from .candidate import CandidateRepository
from .job_offer import JobOfferRepository

__all__ = [
    "BaseRepository",
    "CandidateRepository",
    "JobOfferRepository",
]
