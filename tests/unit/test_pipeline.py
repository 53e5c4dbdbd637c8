"""
Unit tests for the acquire -> optimize -> save pipeline.
"""
from unittest.mock import MagicMock

import pytest

from listingflux.acquisition import ListingAcquirer
from listingflux.exceptions import AcquisitionError, ListingNotFoundError
from listingflux.models import FALLBACK_PROVIDER, OptimizationResult, OptimizedListing
from listingflux.optimizer import ListingOptimizer
from listingflux.persistence import HistoryStore, PersistenceError
from listingflux.pipeline import ListingPipeline


@pytest.fixture
def acquirer(raw_listing):
    acquirer = MagicMock(spec=ListingAcquirer)
    acquirer.acquire.return_value = raw_listing
    return acquirer


@pytest.fixture
def optimizer():
    optimizer = MagicMock(spec=ListingOptimizer)
    optimizer.optimize.return_value = OptimizationResult(
        listing=OptimizedListing(title="X", bullets=["a"], description="d", keywords=["k"]),
        provider="gpt-test",
    )
    return optimizer


class TestListingPipeline:
    """Tests for ListingPipeline.run."""

    def test_runs_without_history(self, acquirer, optimizer, raw_listing):
        outcome = ListingPipeline(acquirer, optimizer).run("B000TEST01")

        acquirer.acquire.assert_called_once_with("B000TEST01")
        optimizer.optimize.assert_called_once_with(raw_listing)
        assert outcome.original == raw_listing
        assert outcome.result.provider == "gpt-test"
        assert outcome.record is None

    def test_save_without_history_is_skipped(self, acquirer, optimizer):
        outcome = ListingPipeline(acquirer, optimizer, history=None).run("B000TEST01", save=True)
        assert outcome.record is None

    def test_saves_when_history_available(self, acquirer, optimizer, raw_listing):
        history = HistoryStore.connect("sqlite://")

        outcome = ListingPipeline(acquirer, optimizer, history).run("B000TEST01", save=True)

        assert outcome.record is not None
        assert outcome.record.provider == "gpt-test"
        assert history.list_recent()[0].original == raw_listing
        history.close()

    def test_does_not_save_unless_asked(self, acquirer, optimizer):
        history = MagicMock(spec=HistoryStore)

        ListingPipeline(acquirer, optimizer, history).run("B000TEST01")

        history.save.assert_not_called()

    def test_storage_failure_does_not_fail_run(self, acquirer, optimizer):
        history = MagicMock(spec=HistoryStore)
        history.save.side_effect = PersistenceError("disk full")

        outcome = ListingPipeline(acquirer, optimizer, history).run("B000TEST01", save=True)

        assert outcome.record is None
        assert outcome.result.provider == "gpt-test"

    def test_not_found_propagates(self, acquirer, optimizer):
        acquirer.acquire.side_effect = ListingNotFoundError("B000TEST01")

        with pytest.raises(ListingNotFoundError):
            ListingPipeline(acquirer, optimizer).run("B000TEST01")

        optimizer.optimize.assert_not_called()

    def test_acquisition_error_propagates(self, acquirer, optimizer):
        acquirer.acquire.side_effect = AcquisitionError("B000TEST01", cause=TimeoutError("slow"))

        with pytest.raises(AcquisitionError):
            ListingPipeline(acquirer, optimizer).run("B000TEST01")

    def test_fallback_provider_is_kept(self, acquirer, raw_listing):
        optimizer = ListingOptimizer(model="gpt-test", client=MagicMock())
        optimizer.client.chat.completions.create.side_effect = RuntimeError("down")

        outcome = ListingPipeline(acquirer, optimizer).run("B000TEST01")

        assert outcome.result.provider == FALLBACK_PROVIDER
        assert outcome.to_dict()["ai_used"] == FALLBACK_PROVIDER
