"""
Utility modules for ListingFlux.
"""
from .validators import MAX_IDENTIFIER_LENGTH, is_valid_identifier, build_listing_url
from .text_cleaning import normalize_whitespace, first_tokens

__all__ = [
    "MAX_IDENTIFIER_LENGTH",
    "is_valid_identifier",
    "build_listing_url",
    "normalize_whitespace",
    "first_tokens",
]
