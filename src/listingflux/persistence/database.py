"""Database connection and session management.

A HistoryStore owns one engine and session factory. The application holds a
store when history is available and None otherwise; there is no module-level
"connected" flag.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Generator, List, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..logger import get_logger
from ..models import HistoryRecord, OptimizedListing, RawListing
from .exceptions import DatabaseConnectionError, PersistenceError
from .repository import HistoryRepository
from .schema import create_schema

logger = get_logger(__name__)


class HistoryStore:
    """Connected history database."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._session_factory = sessionmaker(
            bind=engine,
            autoflush=True,
            expire_on_commit=False,  # Keep objects accessible after commit
        )

    @classmethod
    def connect(cls, database_url: str) -> HistoryStore:
        """Create the engine, validate the connection and create the schema.

        Args:
            database_url: SQLAlchemy URL (e.g., "mysql+pymysql://user:pw@host/db")

        Raises:
            DatabaseConnectionError: If initialization fails
        """
        if not database_url or not isinstance(database_url, str):
            raise DatabaseConnectionError("Database URL must be a non-empty string")

        logger.info(f"Initializing database: {redact_url(database_url)}")

        try:
            engine = create_engine(database_url, pool_pre_ping=True, **_engine_options(database_url))

            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))

            create_schema(engine)
        except Exception as e:
            error_msg = f"Failed to initialize database: {e}"
            logger.error(error_msg)
            raise DatabaseConnectionError(error_msg) from e

        logger.info("Database connected, optimization_history table synced")
        return cls(engine)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Provide a session that commits on success and rolls back on error."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.warning(f"Database session rolled back due to exception: {e}")
            raise PersistenceError(f"Database transaction failed: {e}") from e
        except Exception as e:
            session.rollback()
            logger.warning(f"Database session rolled back due to exception: {e}")
            raise
        finally:
            session.close()

    def save(
        self,
        identifier: str,
        original: RawListing,
        optimized: OptimizedListing,
        provider: str,
    ) -> HistoryRecord:
        """Persist one before/after pair in its own transaction."""
        with self.session() as session:
            return HistoryRepository(session).save(identifier, original, optimized, provider)

    def list_recent(self, limit: int = 50) -> List[HistoryRecord]:
        """Newest saved records first."""
        with self.session() as session:
            return HistoryRepository(session).list_recent(limit)

    def close(self) -> None:
        """Dispose of pooled connections."""
        logger.info("Closing database connections")
        self.engine.dispose()


def _engine_options(database_url: str) -> dict:
    if not database_url.startswith("sqlite"):
        return {}

    options = {"connect_args": {"check_same_thread": False}}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise each session sees an empty database
        options["poolclass"] = StaticPool
    return options


def redact_url(url: str) -> str:
    """Redact the password from a database URL for logging.

    Examples:
        >>> redact_url("mysql://user:secret@db:3306/app")
        'mysql://user:***@db:3306/app'
    """
    if url.startswith("sqlite") or "@" not in url:
        return url

    credentials, _, host = url.rpartition("@")
    scheme, sep, userinfo = credentials.partition("://")
    if not sep or ":" not in userinfo:
        return url

    username = userinfo.split(":", 1)[0]
    return f"{scheme}://{username}:***@{host}"


def connect_history(database_url: Optional[str]) -> Optional[HistoryStore]:
    """Connect to the history database, or return None if unset or unreachable."""
    if not database_url:
        logger.warning("DATABASE_URL not set. History/Save DISABLED.")
        return None

    try:
        return HistoryStore.connect(database_url)
    except DatabaseConnectionError as e:
        logger.error(f"Unable to connect to the database. History/Save DISABLED: {e}")
        return None
