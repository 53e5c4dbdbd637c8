"""
Listing rewriting with OpenAI ChatGPT.

Sends the scraped listing to the model and normalizes whatever comes back.
Provider errors degrade to the fallback listing instead of failing the
request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from openai import OpenAI

from ..config import Config
from ..logger import get_logger
from ..models import OptimizationResult, RawListing
from .normalizer import fallback_result, normalize_response
from .prompts import SYSTEM_MESSAGE, build_prompt

logger = get_logger(__name__)


@dataclass
class ListingOptimizer:
    """
    Rewrites a RawListing through the OpenAI chat completions API.

    Attributes:
        model: OpenAI model to use (also recorded as provider name)
        temperature: Creativity level (0.0-1.0)
        max_tokens: Maximum tokens in response
        api_key: OpenAI API key (defaults to OPENAI_API_KEY)
        client: Pre-built client, mainly for tests
    """
    model: str = field(default_factory=lambda: Config.OPTIMIZER_MODEL)
    temperature: float = field(default_factory=lambda: Config.OPTIMIZER_TEMPERATURE)
    max_tokens: int = field(default_factory=lambda: Config.OPTIMIZER_MAX_TOKENS)
    api_key: Optional[str] = None
    client: Any = field(default=None, repr=False)

    def __post_init__(self):
        """Initialize OpenAI client."""
        if self.client is not None:
            return

        key = self.api_key or Config.OPENAI_API_KEY
        if key:
            self.client = OpenAI(api_key=key)
            logger.info(f"OpenAI client initialized with model: {self.model}")
        else:
            logger.warning("OPENAI_API_KEY not set. Optimizer will return fallback content.")

    def is_available(self) -> bool:
        """Check if a provider client is configured."""
        return self.client is not None

    def optimize(self, listing: RawListing) -> OptimizationResult:
        """
        Rewrite a listing.

        Args:
            listing: Scraped listing

        Returns:
            OptimizationResult tagged with the model id, or the fallback
            result when the provider is unavailable, fails, or returns
            unusable text
        """
        if not self.is_available():
            logger.warning(f"No provider client, using fallback for '{listing.title[:60]}'")
            return fallback_result(listing)

        try:
            logger.info(f"Calling {self.model} for '{listing.title[:60]}'")
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_MESSAGE},
                    {"role": "user", "content": build_prompt(listing)}
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens
            )
            raw_text = response.choices[0].message.content or ""
        except Exception as e:
            logger.error(f"{self.model} call failed: {e}")
            return fallback_result(listing)

        result = normalize_response(raw_text, listing, self.model)

        logger.info(
            f"Optimization complete for '{listing.title[:60]}': provider={result.provider}, "
            f"{len(result.listing.bullets)} bullets, {len(result.listing.keywords)} keywords"
        )
        return result
