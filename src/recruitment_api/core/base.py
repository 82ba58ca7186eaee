"""Declarative base shared by all models."""

from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    """Timezone-aware current UTC time used for model timestamps."""
    return datetime.now(timezone.utc)
