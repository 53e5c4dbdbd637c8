"""Database schema definition and ORM models.

Defines the optimization_history table and conversion to domain models.
"""
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Index, Integer, String, Text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from ..models import HistoryRecord, OptimizedListing, RawListing
from ..utils.validators import MAX_IDENTIFIER_LENGTH

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OptimizationHistoryModel(Base):
    """ORM model for the optimization_history table.

    One row per saved before/after pair.
    """

    __tablename__ = "optimization_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    asin = Column(String(MAX_IDENTIFIER_LENGTH), nullable=False)

    original_title = Column(String(255), nullable=False)
    original_bullets = Column(JSON, nullable=True)
    original_description = Column(Text, nullable=True)

    optimized_title = Column(String(255), nullable=False)
    optimized_bullets = Column(JSON, nullable=True)
    optimized_description = Column(Text, nullable=True)
    optimized_keywords = Column(JSON, nullable=True)

    ai_model = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        Index("idx_history_asin", "asin"),
        Index("idx_history_created_at", "created_at"),
    )

    def to_domain(self) -> HistoryRecord:
        """Convert ORM model to domain model."""
        return HistoryRecord(
            id=self.id,
            identifier=self.asin,
            original=RawListing(
                title=self.original_title,
                bullets=tuple(self.original_bullets or ()),
                description=self.original_description or "",
            ),
            optimized=OptimizedListing(
                title=self.optimized_title,
                bullets=list(self.optimized_bullets or []),
                description=self.optimized_description or "",
                keywords=list(self.optimized_keywords or []),
            ),
            provider=self.ai_model,
            created_at=self.created_at,
        )


def create_schema(engine: Engine) -> None:
    """Create tables that do not exist yet."""
    Base.metadata.create_all(engine)
