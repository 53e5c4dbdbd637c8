"""Data access for optimization history.

Repositories take a session, run the queries and return domain models
rather than ORM objects.
"""
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..logger import get_logger
from ..models import HistoryRecord, OptimizedListing, RawListing
from .exceptions import PersistenceError
from .schema import OptimizationHistoryModel

logger = get_logger(__name__)


class HistoryRepository:
    """Repository for optimization_history rows."""

    def __init__(self, session: Session):
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def save(
        self,
        identifier: str,
        original: RawListing,
        optimized: OptimizedListing,
        provider: str,
    ) -> HistoryRecord:
        """Insert one before/after pair.

        Args:
            identifier: Product identifier
            original: Scraped listing
            optimized: Rewritten listing
            provider: Model id or "fallback"

        Returns:
            The created record

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            row = OptimizationHistoryModel(
                asin=identifier,
                original_title=original.title,
                original_bullets=list(original.bullets),
                original_description=original.description,
                optimized_title=optimized.title,
                optimized_bullets=list(optimized.bullets),
                optimized_description=optimized.description,
                optimized_keywords=list(optimized.keywords),
                ai_model=provider,
            )
            self.session.add(row)
            self.session.flush()

            logger.info(f"Saved optimization history for {identifier} (id={row.id}, ai_model={provider})")
            return row.to_domain()

        except SQLAlchemyError as e:
            logger.error(f"Error saving history for {identifier}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to save optimization record: {e}") from e

    def list_recent(self, limit: int = 50) -> List[HistoryRecord]:
        """Newest records first.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            stmt = (
                select(OptimizationHistoryModel)
                .order_by(OptimizationHistoryModel.created_at.desc(), OptimizationHistoryModel.id.desc())
                .limit(limit)
            )
            rows = self.session.execute(stmt).scalars().all()
            return [row.to_domain() for row in rows]

        except SQLAlchemyError as e:
            logger.error(f"Error fetching optimization history: {e}", exc_info=True)
            raise PersistenceError(f"Failed to fetch optimization history: {e}") from e
