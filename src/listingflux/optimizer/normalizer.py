"""
Recover a structured listing from free-text model output.

Models wrap JSON in code fences or add commentary around it despite being
told not to. The normalizer strips the fences, takes the span from the first
``{`` to the last ``}`` and parses it. When that fails, it builds a
deterministic fallback record from the original listing and tags it with
the "fallback" provider so it is never mistaken for model output.

``normalize_response`` never raises.
"""
from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..logger import get_logger
from ..models import FALLBACK_PROVIDER, OptimizationResult, OptimizedListing, RawListing
from ..schemas.listing import OptimizedListingSchema
from ..utils.text_cleaning import first_tokens

logger = get_logger(__name__)

CODE_FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)
BRACE_SPAN_PATTERN = re.compile(r"\{[\s\S]*\}")

FALLBACK_TITLE_SUFFIX = " - FALLBACK IMPROVEMENT (AI Failed)"

FALLBACK_BULLETS = (
    "Set of high-quality items crafted for reliable use",
    "Designed to support repeated usage across relevant scenarios",
    "Made with attention to material quality and consistency",
    "Suitable for everyday and traditional requirements",
    "Simple and practical construction focused on usability",
)

FALLBACK_DESCRIPTION = "AI optimization failed. This is fallback content for testing."

FALLBACK_KEYWORD_COUNT = 5


def strip_code_fences(text: Optional[str]) -> str:
    """Remove ```json / ``` markers and surrounding whitespace."""
    return CODE_FENCE_PATTERN.sub("", text or "").strip()


def extract_json(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Parse the JSON object embedded in model output.

    Args:
        text: Raw model output

    Returns:
        The parsed object, or None if there is no brace span, it is not
        valid JSON, or it does not decode to an object
    """
    cleaned = strip_code_fences(text)

    match = BRACE_SPAN_PATTERN.search(cleaned)
    if not match:
        return None

    try:
        data = json.loads(match.group(0))
    except (ValueError, RecursionError):
        return None

    if not isinstance(data, dict):
        return None

    return data


def build_fallback(original: RawListing) -> OptimizedListing:
    """
    Deterministic stand-in used whenever the model output cannot be used.

    Keywords are the first five whitespace-separated tokens of the title.
    """
    return OptimizedListing(
        title=f"{original.title}{FALLBACK_TITLE_SUFFIX}",
        bullets=list(FALLBACK_BULLETS),
        description=FALLBACK_DESCRIPTION,
        keywords=first_tokens(original.title, FALLBACK_KEYWORD_COUNT),
    )


def fallback_result(original: RawListing) -> OptimizationResult:
    """Fallback listing tagged with the fallback provider."""
    return OptimizationResult(listing=build_fallback(original), provider=FALLBACK_PROVIDER)


def normalize_response(text: Optional[str], original: RawListing, model: str) -> OptimizationResult:
    """
    Turn raw model output into an OptimizationResult.

    Args:
        text: Raw model output (may be None or empty)
        original: Listing the model was asked to rewrite
        model: Model identifier recorded as provider on success

    Returns:
        Parsed listing tagged with ``model``, or the fallback listing
        tagged with "fallback"
    """
    data = extract_json(text)
    if data is None:
        logger.warning(f"Model output for '{original.title[:60]}' had no usable JSON object, using fallback")
        return fallback_result(original)

    try:
        listing = OptimizedListingSchema.model_validate(data).to_listing()
    except ValidationError as e:
        logger.warning(f"Model output could not be coerced into a listing: {e}")
        return fallback_result(original)
    except Exception as e:
        # Validators can fail outside pydantic, e.g. RecursionError on pathological nesting
        logger.warning(f"Coercing model output failed ({type(e).__name__}): {e}")
        return fallback_result(original)

    return OptimizationResult(listing=listing, provider=model)
