"""
Field extraction from a rendered or fetched listing page.
"""
from __future__ import annotations

from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from ..models import RawListing
from ..utils.text_cleaning import normalize_whitespace


class ListingParser:
    """
    Extract title, feature bullets and description from listing HTML.

    Both acquisition strategies feed their page source through this class so
    the filtering rules stay identical regardless of how the page was loaded.
    """

    TITLE_SELECTOR = "#productTitle"
    BULLET_SELECTOR = "#feature-bullets li span"

    # Tried in order; the first one with text wins
    DESCRIPTION_SELECTORS = (
        "#productDescription",
        "#aplus_feature_div",
        "#aplus",
    )

    # Bullets this short are layout placeholders ("See more", separators, ...)
    MIN_BULLET_CHARS = 20
    MAX_BULLETS = 8

    def __init__(
        self,
        *,
        min_bullet_chars: int = MIN_BULLET_CHARS,
        max_bullets: int = MAX_BULLETS,
    ) -> None:
        self.min_bullet_chars = min_bullet_chars
        self.max_bullets = max_bullets

    def parse(self, html: Optional[str]) -> RawListing:
        """
        Parse listing HTML into a RawListing.

        Missing fields come back as empty values; deciding whether an empty
        title means "not found" is left to the acquirer.
        """
        if not html or not html.strip():
            return RawListing(title="")

        soup = BeautifulSoup(html, "html.parser")

        return RawListing(
            title=self._extract_title(soup),
            bullets=tuple(self._extract_bullets(soup)),
            description=self._extract_description(soup),
        )

    def _extract_title(self, soup: BeautifulSoup) -> str:
        node = soup.select_one(self.TITLE_SELECTOR)
        if node is None:
            return ""
        return normalize_whitespace(node.get_text())

    def _extract_bullets(self, soup: BeautifulSoup) -> List[str]:
        bullets = []
        for node in soup.select(self.BULLET_SELECTOR):
            text = node.get_text().strip()
            if len(text) > self.min_bullet_chars:
                bullets.append(text)
        return bullets[:self.max_bullets]

    def _extract_description(self, soup: BeautifulSoup) -> str:
        for selector in self.DESCRIPTION_SELECTORS:
            node = soup.select_one(selector)
            if node is None:
                continue
            text = self._visible_text(node)
            if text:
                return text
        return ""

    @staticmethod
    def _visible_text(node: Tag) -> str:
        # Rich-content blocks embed their own scripts and styles
        for hidden in node.find_all(["script", "style", "noscript"]):
            hidden.decompose()
        return normalize_whitespace(node.get_text(" "))


def looks_like_bot_challenge(html: Optional[str]) -> bool:
    """
    Check if HTML appears to be a bot/CAPTCHA challenge page.

    Only used to make not-found log messages more useful; it never changes
    how an attempt is classified.
    """
    h = (html or "").lower()

    if "captcha" in h and len(h) < 10000:
        return True

    if len(h) < 3000 and any(phrase in h for phrase in [
        "access denied",
        "checking your browser",
        "just a moment",
        "robot check",
    ]):
        return True

    return any([
        "enter the characters you see below" in h,
        ("sorry, we just need to make sure you're not a robot" in h),
        ("cloudflare" in h and "ray id" in h and len(h) < 15000),
    ])
