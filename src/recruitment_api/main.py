"""FastAPI application for the recruitment API."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog

from recruitment_api import __version__
from recruitment_api.api import candidates, job_offers
from recruitment_api.core.config import settings
from recruitment_api.core.database import close_db, db_manager, init_db
from recruitment_api.core.error_handling import register_exception_handlers
from recruitment_api.core.logging import configure_logging
from recruitment_api.services.candidate_service import shutdown_legacy_sync
from recruitment_api.services.legacy_api_client import LegacyApiClient, get_legacy_api_client

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: database setup and background sync shutdown."""
    configure_logging()
    init_db()
    logger.info("Application starting up", environment=settings.environment)
    yield
    shutdown_legacy_sync()
    close_db()
    logger.info("Application shutting down")


app = FastAPI(
    title="Recruitment API",
    description="Candidate and job offer management",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(candidates.router)
app.include_router(job_offers.router)


@app.get("/", tags=["Health"])
def root():
    """Returns API status and basic information."""
    return {
        "message": "Welcome to Recruitment API!",
        "version": __version__,
        "status": "running",
    }


@app.get("/health", tags=["Health"])
def health_check(legacy_client: LegacyApiClient = Depends(get_legacy_api_client)):
    """Health check endpoint including downstream dependencies."""
    return {
        "status": "healthy",
        "service": "recruitment-api",
        "database": db_manager.health_check(),
        "legacyApi": legacy_client.health_check(),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "recruitment_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True
    )
