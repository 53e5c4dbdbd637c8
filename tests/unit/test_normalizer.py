"""
Unit tests for model output normalization.

Tests:
- Brace-span extraction through fences and commentary
- Deterministic fallback shape
- Lenient field coercion
"""
import pytest

from listingflux.models import FALLBACK_PROVIDER, RawListing
from listingflux.optimizer.normalizer import (
    FALLBACK_BULLETS,
    FALLBACK_DESCRIPTION,
    build_fallback,
    extract_json,
    normalize_response,
    strip_code_fences,
)

MODEL = "gpt-4o-mini"


@pytest.fixture
def original():
    return RawListing(title="Blue Widget Pro", bullets=(), description="")


class TestExtractJson:
    """Tests for locating the embedded object."""

    def test_strips_tagged_and_closing_fences(self):
        assert strip_code_fences("```json\n{}\n```") == "{}"

    def test_fence_removal_is_case_insensitive(self):
        assert extract_json('```JSON\n{"title": "X"}\n```') == {"title": "X"}

    def test_tolerates_leading_and_trailing_commentary(self):
        text = 'Sure! Here is the listing: {"title": "X"} Let me know if you need more.'
        assert extract_json(text) == {"title": "X"}

    def test_nested_objects_use_greedy_span(self):
        text = 'prefix {"title": "X", "meta": {"a": 1}} suffix'
        assert extract_json(text) == {"title": "X", "meta": {"a": 1}}

    def test_no_braces(self):
        assert extract_json("Sorry, I cannot comply.") is None

    def test_invalid_json_inside_braces(self):
        assert extract_json("{title: X, bullets: [}") is None

    def test_two_separate_objects_do_not_parse(self):
        assert extract_json('{"a": 1} and also {"b": 2}') is None

    def test_none_and_empty(self):
        assert extract_json(None) is None
        assert extract_json("") is None


class TestNormalizeSuccess:
    """Tests for the model output path."""

    def test_fenced_object_with_commentary(self, original):
        text = (
            "Here you go:\n```json\n"
            '{"title":"X","bullets":["a"],"description":"d","keywords":["k"]}'
            "\n```"
        )

        result = normalize_response(text, original, MODEL)

        assert result.provider == MODEL
        assert not result.is_fallback
        assert result.listing.to_dict() == {
            "title": "X",
            "bullets": ["a"],
            "description": "d",
            "keywords": ["k"],
        }

    def test_missing_fields_become_empty(self, original):
        result = normalize_response('{"title": "Only a title"}', original, MODEL)

        assert result.provider == MODEL
        assert result.listing.title == "Only a title"
        assert result.listing.bullets == []
        assert result.listing.description == ""
        assert result.listing.keywords == []

    def test_wrong_types_are_coerced(self, original):
        text = '{"title": 42, "bullets": "single bullet", "description": null, "keywords": ["a", 7, null]}'

        result = normalize_response(text, original, MODEL)

        assert result.provider == MODEL
        assert result.listing.title == "42"
        assert result.listing.bullets == ["single bullet"]
        assert result.listing.description == ""
        assert result.listing.keywords == ["a", "7"]

    def test_nested_values_are_serialized(self, original):
        text = '{"title": ["a", ["b", "c"]], "keywords": [["x"], {"k": 1}]}'

        result = normalize_response(text, original, MODEL)

        assert result.provider == MODEL
        assert result.listing.title == 'a ["b", "c"]'
        assert result.listing.keywords == ['["x"]', '{"k": 1}']

    def test_deeply_nested_output_never_raises(self, original):
        text = '{"title": ' + "[" * 600 + "]" * 600 + "}"

        result = normalize_response(text, original, MODEL)

        assert result.provider in (MODEL, FALLBACK_PROVIDER)
        assert isinstance(result.listing.title, str)
        assert isinstance(result.listing.keywords, list)

    def test_extra_keys_are_dropped(self, original):
        result = normalize_response('{"title": "X", "notes": "ignore me"}', original, MODEL)
        assert "notes" not in result.listing.to_dict()

    def test_idempotent(self, original):
        text = 'Here:\n```json\n{"title":"X","bullets":["a","b"],"keywords":["k"]}\n```'

        first = normalize_response(text, original, MODEL)
        second = normalize_response(text, original, MODEL)

        assert first == second
        assert first.to_dict() == second.to_dict()


class TestNormalizeFallback:
    """Tests for the fallback path."""

    def test_refusal_without_braces(self, original):
        result = normalize_response("Sorry, I cannot comply.", original, MODEL)

        assert result.provider == FALLBACK_PROVIDER
        assert result.is_fallback
        assert result.listing.keywords == ["Blue", "Widget", "Pro"]

    def test_invalid_json_gives_fallback(self, original):
        result = normalize_response('```json\n{"title": "X",}\n```', original, MODEL)
        assert result.provider == FALLBACK_PROVIDER

    def test_empty_output_gives_fallback(self, original):
        assert normalize_response("", original, MODEL).is_fallback
        assert normalize_response(None, original, MODEL).is_fallback

    def test_fallback_shape(self, original):
        listing = build_fallback(original)

        assert listing.title.startswith("Blue Widget Pro")
        assert "FALLBACK" in listing.title
        assert listing.bullets == list(FALLBACK_BULLETS)
        assert len(listing.bullets) == 5
        assert listing.description == FALLBACK_DESCRIPTION

    def test_keywords_are_first_five_title_tokens(self):
        original = RawListing(title="Stainless  Steel Insulated Travel Mug With Lid 20oz")

        listing = build_fallback(original)

        assert listing.keywords == ["Stainless", "Steel", "Insulated", "Travel", "Mug"]

    def test_fallback_is_deterministic(self, original):
        first = normalize_response("no json here", original, MODEL)
        second = normalize_response("no json here", original, MODEL)
        assert first.to_dict() == second.to_dict()
