"""
Listing rewriting and model-output normalization.
"""
from .client import ListingOptimizer
from .normalizer import (
    build_fallback,
    extract_json,
    fallback_result,
    normalize_response,
    strip_code_fences,
)
from .prompts import build_prompt

__all__ = [
    "ListingOptimizer",
    "build_fallback",
    "build_prompt",
    "extract_json",
    "fallback_result",
    "normalize_response",
    "strip_code_fences",
]
