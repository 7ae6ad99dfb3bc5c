"""Pydantic request and response models for the photoshoot API.

These models define the JSON schema for every API endpoint.  Field names are
snake_case in Python and camelCase on the wire, matching what the browser
composer sends.

Models
------
CreativeBrief
    Payload for ``POST /api/generate`` — the full creative brief including the
    compiled prompt and negative prompt.  Frozen once validated.
BriefSelections
    Payload for ``POST /api/prompt/compile`` — the composer's raw selections.
    Missing fields take the composer defaults.
GeneratedImage
    One rendered (or fallback) look returned to the gallery.
GenerateResponse
    Response body for ``POST /api/generate``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from aloha.api.prompt_builder import DEFAULT_SELECTIONS

MIN_VARIATIONS = 1
MAX_VARIATIONS = 6


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class CreativeBrief(_CamelModel):
    """Request body for the ``POST /api/generate`` endpoint.

    Attributes:
        collection_name: Campaign/collection title.  At least 1 character.
        polish_color: Polish shade, expected as a hex colour.  At least 4
            characters.
        finish: Signature finish.  At least 1 character.
        mood: Editorial mood.  At least 1 character.
        location: Set location.  At least 1 character.
        accessories: Styling accents.  At least 1 character.
        variations: Number of looks to render (1–6 inclusive).  Must be a
            JSON number with an integral value (``3`` or ``3.0``); strings,
            fractional numbers and booleans are rejected.
        prompt: Compiled prompt.  At least 20 characters.
        negative_prompt: Negative prompt.  At least 10 characters.
    """

    collection_name: str = Field(..., min_length=1, strict=True)
    polish_color: str = Field(..., min_length=4, strict=True)
    finish: str = Field(..., min_length=1, strict=True)
    mood: str = Field(..., min_length=1, strict=True)
    location: str = Field(..., min_length=1, strict=True)
    accessories: str = Field(..., min_length=1, strict=True)
    variations: int = Field(..., ge=MIN_VARIATIONS, le=MAX_VARIATIONS)
    prompt: str = Field(..., min_length=20, strict=True)
    negative_prompt: str = Field(..., min_length=10, strict=True)

    @field_validator("variations", mode="before")
    @classmethod
    def _integral_number(cls, value: object) -> object:
        # bool is an int subclass; JSON true/false are not counts.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("variations must be a JSON number")
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError("variations must be a whole number")
            return int(value)
        return value


class BriefSelections(_CamelModel):
    """Request body for the ``POST /api/prompt/compile`` endpoint."""

    collection_name: str = Field(default=DEFAULT_SELECTIONS["collection_name"])
    polish_color: str = Field(default=DEFAULT_SELECTIONS["polish_color"])
    finish: str = Field(default=DEFAULT_SELECTIONS["finish"])
    mood: str = Field(default=DEFAULT_SELECTIONS["mood"])
    location: str = Field(default=DEFAULT_SELECTIONS["location"])
    accessories: str = Field(default=DEFAULT_SELECTIONS["accessories"])
    variations: int = Field(
        default=DEFAULT_SELECTIONS["variations"],
        ge=MIN_VARIATIONS,
        le=MAX_VARIATIONS,
    )


class GeneratedImage(_CamelModel):
    """A single look in the gallery.

    Attributes:
        id: Unique identifier (UUID4 for live renders, ``fallback-<n>`` for
            curated fallbacks).
        url: Absolute image URL.
        prompt: Echo of the submitted prompt.
        accent: ``#rrggbb`` accent derived from the polish colour.
    """

    id: str
    url: str = Field(..., min_length=1)
    prompt: str
    accent: str


class GenerateResponse(_CamelModel):
    """Response body for ``POST /api/generate``.

    Exactly one of ``warning`` (no credential configured) or ``error``
    (render service failed) is set when fallback imagery was served; both are
    ``None`` for a live render.
    """

    images: list[GeneratedImage]
    warning: str | None = None
    error: str | None = None
