"""Candidate management API endpoints."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.orm import Session

from recruitment_api.core.database import get_db
from recruitment_api.core.logging import performance_logger
from recruitment_api.models.candidate import RecruitmentStatus
from recruitment_api.schemas.candidate import CandidateCreate, CandidateResponse, CandidateUpdate
from recruitment_api.schemas.pagination import PaginatedResponse
from recruitment_api.schemas.validation import parse_payload
from recruitment_api.services.candidate_service import CandidateService
from recruitment_api.services.legacy_api_client import LegacyApiClient, get_legacy_api_client

router = APIRouter(prefix="/candidates", tags=["Candidates"])


def get_candidate_service(
    db: Session = Depends(get_db),
    legacy_client: LegacyApiClient = Depends(get_legacy_api_client)
) -> CandidateService:
    """Build a candidate service bound to the request session."""
    return CandidateService(db, legacy_client=legacy_client)


@router.post(
    "",
    response_model=CandidateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid data"}, 409: {"description": "Email already exists"}},
)
def create_candidate(
    payload: Dict[str, Any] = Body(...),
    service: CandidateService = Depends(get_candidate_service)
):
    """Create a new candidate.

    The candidate is linked to ``jobOfferId`` and forwarded to the legacy
    system in the background; the response does not wait for that call.
    """
    with performance_logger.log_operation_time("create_candidate"):
        candidate_data = parse_payload(CandidateCreate, payload)
        return service.create(candidate_data)


@router.get("", response_model=PaginatedResponse[CandidateResponse])
def list_candidates(
    page: int = Query(1, description="Page number"),
    limit: int = Query(10, description="Items per page (max 100)"),
    recruitment_status: Optional[RecruitmentStatus] = Query(
        None, alias="status", description="Filter by recruitment status"
    ),
    service: CandidateService = Depends(get_candidate_service)
):
    """List candidates with pagination and an optional status filter."""
    with performance_logger.log_operation_time(
        "list_candidates", page=page, limit=limit, status=recruitment_status
    ):
        return service.find_all_paginated(page, limit, recruitment_status)


@router.get(
    "/{candidate_id}",
    response_model=CandidateResponse,
    responses={404: {"description": "Candidate not found"}},
)
def get_candidate(
    candidate_id: int,
    service: CandidateService = Depends(get_candidate_service)
):
    """Get a specific candidate by ID."""
    with performance_logger.log_operation_time("get_candidate", candidate_id=candidate_id):
        return service.find_one(candidate_id)


@router.patch(
    "/{candidate_id}",
    response_model=CandidateResponse,
    responses={
        400: {"description": "Invalid data"},
        404: {"description": "Candidate not found"},
        409: {"description": "Email already exists"},
    },
)
def update_candidate(
    candidate_id: int,
    payload: Dict[str, Any] = Body(...),
    service: CandidateService = Depends(get_candidate_service)
):
    """Update a candidate's information.

    Only provided fields are updated, others remain unchanged.
    """
    with performance_logger.log_operation_time("update_candidate", candidate_id=candidate_id):
        candidate_data = parse_payload(CandidateUpdate, payload)
        return service.update(candidate_id, candidate_data)


@router.delete(
    "/{candidate_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Candidate not found"}},
)
def delete_candidate(
    candidate_id: int,
    service: CandidateService = Depends(get_candidate_service)
):
    """Delete a candidate."""
    with performance_logger.log_operation_time("delete_candidate", candidate_id=candidate_id):
        service.remove(candidate_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
