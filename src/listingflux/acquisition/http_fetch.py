"""
Fetch-then-parse acquisition over plain HTTP.
"""
from __future__ import annotations

from typing import Any, Callable, Optional

import requests

from ..logger import get_logger
from .base import ListingAcquirer

logger = get_logger(__name__)


class HttpListingAcquirer(ListingAcquirer):
    """
    Download the listing HTML with requests and parse it without rendering.

    Cheaper than the browser strategy but blocked more often. A 404 is
    treated as an empty page (so it surfaces as not-found); any other error
    status fails the attempt.
    """

    strategy = "http"

    def __init__(
        self,
        *,
        session_factory: Optional[Callable[[], Any]] = None,
        accept_language: str = "en-US,en;q=0.9",
        **kwargs: Any,
    ) -> None:
        """
        Args:
            session_factory: Callable returning a ``requests.Session``-like object
            accept_language: Accept-Language header value
            **kwargs: Passed to ListingAcquirer
        """
        super().__init__(**kwargs)
        self._session_factory = session_factory or requests.Session
        self.accept_language = accept_language

    def _fetch_html(self, url: str) -> Optional[str]:
        with self._session_factory() as session:
            session.headers.update({
                "User-Agent": self.user_agent,
                "Accept-Language": self.accept_language,
                "Accept": "text/html,application/xhtml+xml",
            })

            r = session.get(url, timeout=self.timeout_s)

            logger.debug("HTTP Response: status=%d, length=%d", r.status_code, len(r.text or ""))

            if r.status_code == 404:
                return None

            r.raise_for_status()
            return r.text
