"""Database models for the recruitment API."""

from .candidate import Candidate, RecruitmentStatus
from .job_offer import JobOffer
from .candidate_job_offer import CandidateJobOffer
from .recruiter import Recruiter

__all__ = ["Candidate", "RecruitmentStatus", "JobOffer", "CandidateJobOffer", "Recruiter"]
