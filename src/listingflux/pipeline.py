"""
Acquire -> optimize -> (optionally) save, for one identifier.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .acquisition.base import ListingAcquirer
from .logger import get_logger
from .models import HistoryRecord, OptimizationResult, RawListing
from .optimizer.client import ListingOptimizer
from .persistence.database import HistoryStore
from .persistence.exceptions import PersistenceError

logger = get_logger(__name__)


@dataclass(slots=True)
class PipelineResult:
    """Outcome of one acquisition + optimization cycle."""
    identifier: str
    original: RawListing
    result: OptimizationResult
    record: Optional[HistoryRecord] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "asin": self.identifier,
            "original": self.original.to_dict(),
            **self.result.to_dict(),
            "record": self.record.to_dict() if self.record else None,
        }


class ListingPipeline:
    """
    Run one listing through acquisition, optimization and optional history.

    Persistence is a capability handed in at construction: without a
    HistoryStore, saving is skipped. Acquisition errors propagate unchanged;
    optimization never fails; storage failures are logged and the run still
    succeeds without a record.
    """

    def __init__(
        self,
        acquirer: ListingAcquirer,
        optimizer: ListingOptimizer,
        history: Optional[HistoryStore] = None,
    ) -> None:
        self.acquirer = acquirer
        self.optimizer = optimizer
        self.history = history

    def run(self, identifier: str, *, save: bool = False) -> PipelineResult:
        """
        Process one identifier.

        Raises:
            InvalidIdentifierError: Identifier rejected
            ListingNotFoundError: No product title on the page
            AcquisitionError: Page could not be loaded or read
        """
        # Stored as-is in history, so keep the same form the acquirer validated
        identifier = (identifier or "").strip()

        original = self.acquirer.acquire(identifier)
        result = self.optimizer.optimize(original)

        outcome = PipelineResult(identifier=identifier, original=original, result=result)

        if save:
            outcome.record = self._save(identifier, original, result)

        return outcome

    def _save(
        self,
        identifier: str,
        original: RawListing,
        result: OptimizationResult,
    ) -> Optional[HistoryRecord]:
        if self.history is None:
            logger.warning(f"History unavailable, not saving {identifier}")
            return None

        try:
            return self.history.save(identifier, original, result.listing, result.provider)
        except PersistenceError as e:
            logger.error(f"Failed to save history for {identifier}: {e}")
            return None
