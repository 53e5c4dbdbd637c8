"""
Pydantic schemas for listing payloads.

Used both at the API boundary and to coerce parsed model output into an
OptimizedListing.
"""
from __future__ import annotations

import json
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import OptimizedListing, RawListing
from ..utils.validators import IDENTIFIER_PATTERN, MAX_IDENTIFIER_LENGTH


def _item_text(value: Any) -> str:
    # Nested containers are serialized rather than walked
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(_item_text(v) for v in value if v is not None)
    return _item_text(value)


def _as_text_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (list, tuple)):
        return [_item_text(v) for v in value if v is not None]
    return [_item_text(value)]


class RawListingSchema(BaseModel):
    """Scraped listing as sent back by the frontend."""
    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1, description="Original product title")
    bullets: List[str] = Field(default_factory=list, description="Original feature bullets")
    description: str = Field(default="", description="Original description")

    @field_validator("description", mode="before")
    @classmethod
    def coerce_description(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("bullets", mode="before")
    @classmethod
    def coerce_bullets(cls, v: Any) -> List[str]:
        return _as_text_list(v)

    def to_listing(self) -> RawListing:
        return RawListing(title=self.title, bullets=tuple(self.bullets), description=self.description)


class OptimizedListingSchema(BaseModel):
    """
    Rewritten listing.

    Lenient on purpose: missing fields become empty, a bare string becomes a
    one-item list, scalars are stringified and unknown keys are dropped.
    Validation of this schema never fails for a JSON object.
    """
    model_config = ConfigDict(extra="ignore")

    title: str = ""
    bullets: List[str] = Field(default_factory=list)
    description: str = ""
    keywords: List[str] = Field(default_factory=list)

    @field_validator("title", "description", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("bullets", "keywords", mode="before")
    @classmethod
    def coerce_text_list(cls, v: Any) -> List[str]:
        return _as_text_list(v)

    def to_listing(self) -> OptimizedListing:
        return OptimizedListing(
            title=self.title,
            bullets=list(self.bullets),
            description=self.description,
            keywords=list(self.keywords),
        )


class OptimizeRequest(BaseModel):
    """Body of POST /api/optimize."""
    asin: Optional[str] = Field(default=None, description="Product identifier")
    data: RawListingSchema


class SaveRequest(BaseModel):
    """Body of POST /api/save."""
    asin: str = Field(
        ...,
        max_length=MAX_IDENTIFIER_LENGTH,
        pattern=IDENTIFIER_PATTERN.pattern,
        description="Product identifier",
    )
    original: RawListingSchema
    optimized: OptimizedListingSchema
    ai_used: Optional[str] = Field(default=None, max_length=50, description="Provider name")


class ProcessRequest(BaseModel):
    """Body of POST /api/process/<identifier>."""
    save: bool = Field(default=False, description="Store the result in history")
