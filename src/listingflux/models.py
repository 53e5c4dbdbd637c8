"""
Data models for ListingFlux listings.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Tuple

# Provider tag for records produced by the deterministic fallback generator
FALLBACK_PROVIDER = "fallback"


@dataclass(frozen=True, slots=True)
class RawListing:
    """
    Listing fields extracted from the product page before rewriting.

    Attributes:
        title: Product title (never empty once returned by an acquirer)
        bullets: Feature bullets, at most 8, each longer than 20 characters
        description: Product description, empty string if none was found
    """

    title: str
    bullets: Tuple[str, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        # Lists handed in by callers are frozen so the listing stays immutable
        object.__setattr__(self, "bullets", tuple(self.bullets))

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "bullets": list(self.bullets),
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> RawListing:
        """Build a listing from a JSON payload."""
        return cls(
            title=data.get("title") or "",
            bullets=tuple(data.get("bullets") or ()),
            description=data.get("description") or "",
        )


@dataclass(slots=True)
class OptimizedListing:
    """
    Rewritten listing produced by the response normalizer.

    Attributes:
        title: Optimized title
        bullets: Benefit-focused bullets (5 expected)
        description: Optimized description
        keywords: Search keyword phrases (5 expected)
    """

    title: str
    bullets: List[str] = field(default_factory=list)
    description: str = ""
    keywords: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "bullets": list(self.bullets),
            "description": self.description,
            "keywords": list(self.keywords),
        }


@dataclass(slots=True)
class OptimizationResult:
    """
    Normalized rewrite plus the provider that produced it.

    Attributes:
        listing: The optimized listing
        provider: Model identifier, or "fallback" for the deterministic record
    """

    listing: OptimizedListing
    provider: str

    @property
    def is_fallback(self) -> bool:
        """True when the listing came from the fallback generator."""
        return self.provider == FALLBACK_PROVIDER

    def to_dict(self) -> dict:
        """Convert to the API response shape."""
        return {
            "optimized": self.listing.to_dict(),
            "ai_used": self.provider,
        }


@dataclass(slots=True)
class HistoryRecord:
    """
    A persisted before/after optimization pair.

    Attributes:
        id: Database row id
        identifier: Product identifier (ASIN)
        original: Listing as scraped
        optimized: Listing after rewriting
        provider: Model identifier or "fallback"
        created_at: Row creation time (UTC)
    """

    id: int
    identifier: str
    original: RawListing
    optimized: OptimizedListing
    provider: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert to dictionary using the storage column names."""
        return {
            "id": self.id,
            "asin": self.identifier,
            "original_title": self.original.title,
            "original_bullets": list(self.original.bullets),
            "original_description": self.original.description,
            "optimized_title": self.optimized.title,
            "optimized_bullets": list(self.optimized.bullets),
            "optimized_description": self.optimized.description,
            "optimized_keywords": list(self.optimized.keywords),
            "ai_model": self.provider,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
