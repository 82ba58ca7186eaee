"""Job offer repository for database operations."""

from recruitment_api.models.job_offer import JobOffer
from .base import BaseRepository


class JobOfferRepository(BaseRepository[JobOffer]):
    """Repository for JobOffer model operations."""

    def __init__(self):
        super().__init__(JobOffer)
