"""Recruiter model."""

from sqlalchemy import Column, Integer, String, DateTime

from recruitment_api.core.base import Base, utcnow


class Recruiter(Base):
    """Recruiter working with candidates. Populated by the seed script."""

    __tablename__ = "recruiters"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    phone = Column(String(50), nullable=True)
    company = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Recruiter(id={self.id}, name='{self.name}')>"
