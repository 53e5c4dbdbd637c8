"""
Listing acquisition strategies.

Supports two interchangeable backends:
- BrowserListingAcquirer: Playwright render-then-extract
- HttpListingAcquirer: requests fetch-then-parse
"""
from typing import Optional

from ..config import Config
from ..logger import get_logger
from .base import ListingAcquirer
from .browser import BrowserListingAcquirer
from .http_fetch import HttpListingAcquirer
from .parser import ListingParser, looks_like_bot_challenge

logger = get_logger(__name__)


def get_acquirer(strategy: Optional[str] = None) -> ListingAcquirer:
    """Get the acquirer for a strategy name (defaults to ACQUISITION_STRATEGY)."""
    strategy = (strategy or Config.ACQUISITION_STRATEGY).lower()

    if strategy == "http":
        logger.debug("Using HTTP acquirer")
        return HttpListingAcquirer()
    if strategy == "browser":
        logger.debug("Using browser acquirer")
        return BrowserListingAcquirer()

    raise ValueError(f"Unknown acquisition strategy: {strategy}. Must be 'browser' or 'http'")


__all__ = [
    "ListingAcquirer",
    "BrowserListingAcquirer",
    "HttpListingAcquirer",
    "ListingParser",
    "looks_like_bot_challenge",
    "get_acquirer",
]
