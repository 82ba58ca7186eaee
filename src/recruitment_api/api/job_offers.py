"""Job offer management API endpoints."""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

from recruitment_api.core.database import get_db
from recruitment_api.core.logging import performance_logger
from recruitment_api.schemas.job_offer import JobOfferCreate, JobOfferResponse, JobOfferUpdate
from recruitment_api.schemas.validation import parse_payload
from recruitment_api.services.job_offer_service import JobOfferService

router = APIRouter(prefix="/job-offers", tags=["Job Offers"])


def get_job_offer_service(db: Session = Depends(get_db)) -> JobOfferService:
    return JobOfferService(db)


@router.post(
    "",
    response_model=JobOfferResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid data"}},
)
def create_job_offer(
    payload: Dict[str, Any] = Body(...),
    service: JobOfferService = Depends(get_job_offer_service)
):
    """Create a new job offer."""
    with performance_logger.log_operation_time("create_job_offer"):
        return service.create(parse_payload(JobOfferCreate, payload))


@router.get("", response_model=List[JobOfferResponse])
def list_job_offers(service: JobOfferService = Depends(get_job_offer_service)):
    """List all job offers, newest first."""
    with performance_logger.log_operation_time("list_job_offers"):
        return service.find_all()


@router.get(
    "/{job_offer_id}",
    response_model=JobOfferResponse,
    responses={404: {"description": "Job offer not found"}},
)
def get_job_offer(job_offer_id: int, service: JobOfferService = Depends(get_job_offer_service)):
    with performance_logger.log_operation_time("get_job_offer", job_offer_id=job_offer_id):
        return service.find_one(job_offer_id)


@router.patch(
    "/{job_offer_id}",
    response_model=JobOfferResponse,
    responses={400: {"description": "Invalid data"}, 404: {"description": "Job offer not found"}},
)
def update_job_offer(
    job_offer_id: int,
    payload: Dict[str, Any] = Body(...),
    service: JobOfferService = Depends(get_job_offer_service)
):
    """Partially update a job offer."""
    with performance_logger.log_operation_time("update_job_offer", job_offer_id=job_offer_id):
        return service.update(job_offer_id, parse_payload(JobOfferUpdate, payload))


@router.delete(
    "/{job_offer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Job offer not found"}},
)
def delete_job_offer(job_offer_id: int, service: JobOfferService = Depends(get_job_offer_service)):
    with performance_logger.log_operation_time("delete_job_offer", job_offer_id=job_offer_id):
        service.remove(job_offer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
