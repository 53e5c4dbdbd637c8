"""
Input validation utilities.
"""
import re
from urllib.parse import quote

from ..exceptions import InvalidIdentifierError

# ASINs are 10 alphanumerics; other marketplaces use short slug-like keys.
# The length cap matches the history table's asin column.
MAX_IDENTIFIER_LENGTH = 20
IDENTIFIER_PATTERN = re.compile(rf"^[A-Za-z0-9_-]{{1,{MAX_IDENTIFIER_LENGTH}}}$")


def is_valid_identifier(identifier: str) -> bool:
    """
    Check if a product identifier is safe to embed in a listing URL.

    Examples:
        >>> is_valid_identifier("B08N5WRWNW")
        True
        >>> is_valid_identifier("../admin")
        False
    """
    if not identifier or not isinstance(identifier, str):
        return False

    return bool(IDENTIFIER_PATTERN.fullmatch(identifier))


def build_listing_url(template: str, identifier: str) -> str:
    """
    Interpolate an identifier into a listing URL template.

    Args:
        template: URL template containing an ``{identifier}`` placeholder
        identifier: Product identifier

    Returns:
        The listing URL

    Raises:
        InvalidIdentifierError: If the identifier fails validation
    """
    identifier = (identifier or "").strip()
    if not is_valid_identifier(identifier):
        raise InvalidIdentifierError(identifier)

    return template.format(identifier=quote(identifier, safe=""))
