"""Seed job offers and recruiters for local development.

Run with ``python -m recruitment_api.scripts.seed`` or the
``recruitment-api-seed`` console script. Seeding is skipped for any table
that already holds rows.
"""

import sys

from sqlalchemy.orm import Session
import structlog

from recruitment_api.core.database import db_manager
from recruitment_api.core.logging import configure_logging
from recruitment_api.models.job_offer import JobOffer
from recruitment_api.models.recruiter import Recruiter

logger = structlog.get_logger(__name__)

JOB_OFFERS = [
    {
        "title": "Senior Fullstack Developer",
        "description": "Poszukujemy doświadczonego programisty do pracy nad aplikacjami webowymi.",
        "salary_range": "15 000 - 22 000 PLN",
        "location": "Warszawa",
    },
    {
        "title": "Data Scientist",
        "description": "Analiza dużych zbiorów danych i tworzenie modeli predykcyjnych.",
        "salary_range": "18 000 - 25 000 PLN",
        "location": "Kraków",
    },
    {
        "title": "Product Manager",
        "description": "Zarządzanie rozwojem produktu od koncepcji do wdrożenia.",
        "salary_range": "20 000 - 28 000 PLN",
        "location": "Warszawa",
    },
    {
        "title": "UX/UI Designer",
        "description": "Projektowanie interfejsów użytkownika dla aplikacji webowych i mobilnych.",
        "salary_range": "12 000 - 18 000 PLN",
        "location": "Wrocław",
    },
    {
        "title": "DevOps Engineer",
        "description": "Automatyzacja procesów CI/CD i zarządzanie infrastrukturą chmurową.",
        "salary_range": "16 000 - 24 000 PLN",
        "location": "Gdańsk",
    },
    {
        "title": "Backend Developer Python",
        "description": "Rozwój aplikacji backendowych w Pythonie i FastAPI.",
        "salary_range": "14 000 - 20 000 PLN",
        "location": "Poznań",
    },
    {
        "title": "Frontend Developer React",
        "description": "Tworzenie nowoczesnych interfejsów użytkownika w React i TypeScript.",
        "salary_range": "13 000 - 19 000 PLN",
        "location": "Warszawa",
    },
    {
        "title": "QA Automation Engineer",
        "description": "Automatyzacja testów i zapewnianie jakości oprogramowania.",
        "salary_range": "11 000 - 16 000 PLN",
        "location": "Kraków",
    },
    {
        "title": "Cloud Architect",
        "description": "Projektowanie i wdrażanie rozwiązań chmurowych (AWS/Azure/GCP).",
        "salary_range": "22 000 - 30 000 PLN",
        "location": "Warszawa",
    },
    {
        "title": "Tech Lead",
        "description": "Kierowanie zespołem programistów i nadzór nad architekturą systemu.",
        "salary_range": "24 000 - 32 000 PLN",
        "location": "Warszawa",
    },
]

RECRUITERS = [
    {
        "name": "Anna Kowalska",
        "email": "anna.kowalska@techpolska.pl",
        "phone": "+48 123 456 789",
        "company": "TechPolska",
    },
    {
        "name": "Piotr Nowak",
        "email": "piotr.nowak@itrecruitment.pl",
        "phone": "+48 234 567 890",
        "company": "IT Recruitment",
    },
    {
        "name": "Katarzyna Wiśniewska",
        "email": "katarzyna.wisniewska@devhub.pl",
        "phone": "+48 345 678 901",
        "company": "DevHub Polska",
    },
]


def seed_job_offers(db: Session) -> int:
    """Insert the sample job offers unless the table already has rows.

    Returns:
        Number of job offers created
    """
    existing = db.query(JobOffer).count()
    if existing:
        logger.info("Job offers already seeded", existing=existing)
        return 0

    db.add_all(JobOffer(**data) for data in JOB_OFFERS)
    db.commit()
    logger.info("Job offers seeded", created=len(JOB_OFFERS))
    return len(JOB_OFFERS)


def seed_recruiters(db: Session) -> int:
    """Insert the sample recruiters unless the table already has rows.

    Returns:
        Number of recruiters created
    """
    existing = db.query(Recruiter).count()
    if existing:
        logger.info("Recruiters already seeded", existing=existing)
        return 0

    db.add_all(Recruiter(**data) for data in RECRUITERS)
    db.commit()
    logger.info("Recruiters seeded", created=len(RECRUITERS))
    return len(RECRUITERS)


def main() -> int:
    configure_logging()
    db_manager.initialize()
    db_manager.create_tables()

    try:
        with db_manager.get_session() as db:
            seed_job_offers(db)
            seed_recruiters(db)
    except Exception as e:
        logger.error("Database seed failed", error=str(e))
        return 1
    finally:
        db_manager.close()

    logger.info("Database seed completed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
