"""Database connection and session management with connection pooling."""

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .config import settings
from .base import Base
import structlog

logger = structlog.get_logger(__name__)


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """Turn on foreign key enforcement for every SQLite connection.

    SQLite ignores REFERENCES clauses unless the pragma is set per connection.

    Args:
        engine: Engine bound to a SQLite database
    """
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class DatabaseManager:
    """Manages database connections with connection pooling."""

    def __init__(self, database_url: str) -> None:
        """Initialize database manager.

        Args:
            database_url: SQLAlchemy connection URL
        """
        self.database_url = database_url
        self.engine: Optional[Engine] = None
        self.SessionLocal: Optional[sessionmaker] = None

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def initialize(self) -> None:
        """Initialize database engine."""
        if self.engine is not None:
            logger.warning("Database engine already initialized")
            return

        if self.is_sqlite:
            self.engine = create_engine(
                self.database_url,
                connect_args={"check_same_thread": False},
                echo=settings.log_level == "DEBUG",
            )
            enable_sqlite_foreign_keys(self.engine)
        else:
            self.engine = create_engine(
                self.database_url,
                pool_size=10,  # Number of connections to maintain
                max_overflow=20,  # Additional connections when pool is full
                pool_timeout=30,
                pool_recycle=3600,
                pool_pre_ping=True,
                echo=settings.log_level == "DEBUG",
            )

        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

        logger.info(
            "Database engine initialized",
            dialect=self.engine.dialect.name,
        )

    def close(self) -> None:
        """Close database engine and dispose of connection pool."""
        if self.engine:
            self.engine.dispose()
            logger.info("Database engine closed")
            self.engine = None
            self.SessionLocal = None

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get database session with automatic cleanup.

        Yields:
            Database session

        Raises:
            RuntimeError: If database is not initialized
        """
        if self.SessionLocal is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")

        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_tables(self) -> None:
        """Create all database tables."""
        if self.engine is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")

        # Register every model on the metadata before creating tables
        import recruitment_api.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables created")

    def health_check(self) -> bool:
        """Check database connectivity.

        Returns:
            True if database is accessible, False otherwise
        """
        try:
            if self.engine is None:
                return False

            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            return False


# Global database manager instance
db_manager = DatabaseManager(settings.database_url)


def get_db() -> Generator[Session, None, None]:
    """Dependency for FastAPI to get database session.

    Yields:
        Database session
    """
    with db_manager.get_session() as session:
        yield session


def init_db() -> None:
    """Initialize database connection and create tables if configured."""
    db_manager.initialize()
    if settings.create_tables_on_startup:
        db_manager.create_tables()


def close_db() -> None:
    """Close database connections."""
    db_manager.close()
