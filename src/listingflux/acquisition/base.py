"""
Common contract for listing acquisition strategies.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..config import Config
from ..exceptions import AcquisitionError, ListingNotFoundError
from ..logger import get_logger
from ..models import RawListing
from ..utils.validators import build_listing_url
from .parser import ListingParser, looks_like_bot_challenge

logger = get_logger(__name__)


class ListingAcquirer(ABC):
    """
    Fetch a product page by identifier and extract a RawListing.

    Subclasses only implement ``_fetch_html``: opening and tearing down their
    transport, and returning the page source. Classification of the outcome
    is shared:

    - any exception while fetching becomes ``AcquisitionError`` with the
      original exception on ``cause``;
    - a page without a product title becomes ``ListingNotFoundError``.

    Nothing is retried and no state is kept between calls.
    """

    strategy: str = "base"

    def __init__(
        self,
        *,
        timeout_s: Optional[float] = None,
        user_agent: Optional[str] = None,
        url_template: Optional[str] = None,
        parser: Optional[ListingParser] = None,
    ) -> None:
        """
        Args:
            timeout_s: Upper bound for one whole attempt, in seconds
            user_agent: User-Agent header sent with the request
            url_template: Listing URL with an ``{identifier}`` placeholder
            parser: Field extractor (defaults to ListingParser)
        """
        self.timeout_s = timeout_s if timeout_s is not None else Config.ACQUISITION_TIMEOUT_S
        self.user_agent = user_agent or Config.USER_AGENT
        self.url_template = url_template or Config.LISTING_URL_TEMPLATE
        self.parser = parser or ListingParser()

    def build_url(self, identifier: str) -> str:
        """Listing URL for an identifier. Raises InvalidIdentifierError."""
        return build_listing_url(self.url_template, identifier)

    def acquire(self, identifier: str) -> RawListing:
        """
        Acquire the listing for ``identifier``.

        Raises:
            InvalidIdentifierError: Identifier rejected before any request
            ListingNotFoundError: Page had no product title
            AcquisitionError: Launch, navigation, timeout or extraction failed
        """
        url = self.build_url(identifier)
        logger.info(f"Acquiring listing {identifier} via {self.strategy}: {url}")

        try:
            html = self._fetch_html(url)
            listing = self.parser.parse(html)
        except Exception as e:
            logger.error(f"Acquisition failed for {identifier} ({self.strategy}): {type(e).__name__}: {e}")
            raise AcquisitionError(identifier, cause=e) from e

        if not listing.title:
            if looks_like_bot_challenge(html):
                logger.warning(f"No title for {identifier}: page looks like a bot challenge")
            else:
                logger.warning(f"No title for {identifier}: invalid identifier or blocked")
            raise ListingNotFoundError(identifier)

        logger.info(
            f"Acquired {identifier}: {len(listing.bullets)} bullets, "
            f"description={len(listing.description)} chars"
        )
        return listing

    @abstractmethod
    def _fetch_html(self, url: str) -> Optional[str]:
        """Load ``url`` and return its HTML, releasing every resource before returning."""
