"""
Render-then-extract acquisition with a headless Playwright browser.
"""
from __future__ import annotations

import time
from typing import Any, Callable, Optional

from playwright.sync_api import TimeoutError as PWTimeoutError
from playwright.sync_api import sync_playwright

from ..logger import get_logger
from .base import ListingAcquirer

logger = get_logger(__name__)


class BrowserListingAcquirer(ListingAcquirer):
    """
    Load the listing in headless Chromium and read the rendered DOM.

    Every attempt launches its own browser, so concurrent requests never
    share a session. The browser is closed in ``finally`` on success, error
    and timeout alike.
    """

    strategy = "browser"

    # Restricted flags for small containers without a usable sandbox or /dev/shm
    LAUNCH_ARGS = [
        "--no-sandbox",
        "--disable-setuid-sandbox",
        "--disable-gpu",
        "--disable-dev-shm-usage",
    ]

    BLOCKED_RESOURCE_TYPES = {"image", "media", "font"}

    def __init__(
        self,
        *,
        playwright_factory: Optional[Callable[[], Any]] = None,
        headless: bool = True,
        block_resources: bool = True,
        locale: str = "en-US",
        **kwargs: Any,
    ) -> None:
        """
        Args:
            playwright_factory: Callable returning a Playwright context manager
                (defaults to ``sync_playwright``)
            headless: Run Chromium without a window
            block_resources: Abort image/media/font requests
            locale: Browser locale
            **kwargs: Passed to ListingAcquirer
        """
        super().__init__(**kwargs)
        self._playwright_factory = playwright_factory or sync_playwright
        self.headless = headless
        self.block_resources = block_resources
        self.locale = locale

    def _fetch_html(self, url: str) -> Optional[str]:
        deadline = time.monotonic() + self.timeout_s

        with self._playwright_factory() as p:
            browser = p.chromium.launch(
                headless=self.headless,
                args=self.LAUNCH_ARGS,
                timeout=self._remaining_ms(deadline),
            )
            context = None
            try:
                context = browser.new_context(
                    user_agent=self.user_agent,
                    locale=self.locale,
                    viewport={"width": 1365, "height": 900},
                )

                if self.block_resources:
                    context.route("**/*", self._route_request)

                page = context.new_page()
                page.set_default_timeout(self._remaining_ms(deadline))

                # Base document only; product fields are in the initial HTML
                page.goto(url, wait_until="domcontentloaded", timeout=self._remaining_ms(deadline))
                return page.content()
            finally:
                try:
                    if context is not None:
                        context.close()
                finally:
                    browser.close()
                logger.debug(f"Browser closed for {url}")

    def _route_request(self, route: Any) -> None:
        if route.request.resource_type in self.BLOCKED_RESOURCE_TYPES:
            route.abort()
        else:
            route.continue_()

    @staticmethod
    def _remaining_ms(deadline: float) -> float:
        """Milliseconds left before the attempt deadline."""
        remaining = (deadline - time.monotonic()) * 1000
        if remaining <= 0:
            raise PWTimeoutError("Acquisition deadline exceeded")
        return remaining
