"""
ListingFlux - Product listing acquisition and AI rewriting.

Scrapes a product listing by identifier, rewrites it with an LLM and
optionally stores the before/after pair.
"""

__version__ = "1.0.0"
__author__ = "Fluxer Atelier"

from .models import RawListing, OptimizedListing, OptimizationResult, FALLBACK_PROVIDER
from .acquisition import BrowserListingAcquirer, HttpListingAcquirer, get_acquirer
from .optimizer import ListingOptimizer, normalize_response
from .pipeline import ListingPipeline

__all__ = [
    "RawListing",
    "OptimizedListing",
    "OptimizationResult",
    "FALLBACK_PROVIDER",
    "BrowserListingAcquirer",
    "HttpListingAcquirer",
    "get_acquirer",
    "ListingOptimizer",
    "normalize_response",
    "ListingPipeline",
]
