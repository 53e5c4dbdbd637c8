"""
Unit tests for identifier validation and listing URL construction.
"""
import pytest

from listingflux.exceptions import InvalidIdentifierError, ListingFluxError
from listingflux.persistence import OptimizationHistoryModel
from listingflux.utils import (
    MAX_IDENTIFIER_LENGTH,
    build_listing_url,
    first_tokens,
    is_valid_identifier,
    normalize_whitespace,
)

TEMPLATE = "https://www.amazon.com/dp/{identifier}"


class TestIsValidIdentifier:
    """Tests for is_valid_identifier."""

    @pytest.mark.parametrize("identifier", ["B08N5WRWNW", "b000test01", "sku_42-blue"])
    def test_accepts(self, identifier):
        assert is_valid_identifier(identifier)

    @pytest.mark.parametrize(
        "identifier", ["", None, "../admin", "B08N5 WRWNW", "a/b", "B08N5WRWNW\n", "x" * 21]
    )
    def test_rejects(self, identifier):
        assert not is_valid_identifier(identifier)

    def test_length_cap_matches_history_column(self):
        assert MAX_IDENTIFIER_LENGTH == OptimizationHistoryModel.__table__.c.asin.type.length
        assert is_valid_identifier("x" * MAX_IDENTIFIER_LENGTH)
        assert not is_valid_identifier("x" * (MAX_IDENTIFIER_LENGTH + 1))


class TestBuildListingUrl:
    """Tests for build_listing_url."""

    def test_interpolates_identifier(self):
        assert build_listing_url(TEMPLATE, "B08N5WRWNW") == "https://www.amazon.com/dp/B08N5WRWNW"

    def test_strips_surrounding_whitespace(self):
        assert build_listing_url(TEMPLATE, "  B08N5WRWNW ") == "https://www.amazon.com/dp/B08N5WRWNW"

    def test_rejects_path_traversal(self):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            build_listing_url(TEMPLATE, "../../etc/passwd")

        assert isinstance(exc_info.value, ListingFluxError)
        assert exc_info.value.identifier == "../../etc/passwd"


class TestTextCleaning:
    """Tests for the whitespace helpers."""

    def test_normalize_whitespace(self):
        assert normalize_whitespace("  Blue \n\t Widget   Pro ") == "Blue Widget Pro"

    def test_normalize_whitespace_empty(self):
        assert normalize_whitespace(None) == ""

    def test_first_tokens(self):
        assert first_tokens("one two  three", 5) == ["one", "two", "three"]
        assert first_tokens("a b c d e f g", 5) == ["a", "b", "c", "d", "e"]
