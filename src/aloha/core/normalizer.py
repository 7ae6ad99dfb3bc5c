"""Flatten render-service results into an ordered list of image URLs.

The hosted render service does not return a single stable payload shape.
Depending on the model and queue path, images can arrive as:

- ``{"images": [{"url": ...}, ...]}``
- ``{"images": ["https://...", ...]}``
- ``{"output": [{"images": [...]}, ...]}``
- ``{"output": {"images": [...]}}``
- ``{"image": {"images": [...]}}``
- a bare list of any of the above

:func:`normalize_images` walks these shapes and returns ``[{"url": ...}]``
records in encounter order.  It never raises: entries it cannot interpret are
dropped, and anything without recognisable image data yields an empty list.

Each container is classified into a :class:`PayloadShape` before dispatch.
Recursion stops at :data:`MAX_DEPTH` levels and on containers already being
visited, so pathological or self-referencing payloads still terminate.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from typing import Any

ImageRef = dict[str, str]

MAX_DEPTH = 32


class PayloadShape(enum.Enum):
    """Structural classification of a value found in a render result."""

    ARRAY = "array"
    OBJECT = "object"
    UNRECOGNIZED = "unrecognized"


def classify_payload(value: Any) -> PayloadShape:
    """Return the :class:`PayloadShape` of *value*.

    Strings and bytes are sequences in Python but are never treated as
    arrays here.  Empty containers carry no image data and are
    unrecognized, as are ``None`` and every other scalar.
    """
    if isinstance(value, Mapping):
        return PayloadShape.OBJECT if len(value) else PayloadShape.UNRECOGNIZED
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return PayloadShape.ARRAY if len(value) else PayloadShape.UNRECOGNIZED
    return PayloadShape.UNRECOGNIZED


def parse_image_list(value: Any) -> list[ImageRef]:
    """Convert an ``images`` array into URL records.

    Non-empty strings become ``{"url": value}``; mappings with a non-empty
    string ``url`` become ``{"url": value["url"]}``.  Anything else,
    including a non-array *value*, is dropped.
    """
    if classify_payload(value) is not PayloadShape.ARRAY:
        return []

    refs: list[ImageRef] = []
    for item in value:
        if isinstance(item, Mapping):
            item = item.get("url")
        # Empty strings are not URLs.
        if isinstance(item, str) and item:
            refs.append({"url": item})
    return refs


def normalize_images(value: Any) -> list[ImageRef]:
    """Extract image URL records from an arbitrary render result.

    Args:
        value: Decoded JSON (or any Python value) returned by the render
            service.

    Returns:
        ``[{"url": ...}, ...]`` in encounter order.  Empty when *value*
        contains no recognisable image data.
    """
    return _normalize(value, depth=0, active=set())


def _normalize(value: Any, *, depth: int, active: set[int]) -> list[ImageRef]:
    if depth > MAX_DEPTH:
        return []

    shape = classify_payload(value)
    if shape is PayloadShape.UNRECOGNIZED:
        return []

    marker = id(value)
    if marker in active:
        return []

    active.add(marker)
    try:
        if shape is PayloadShape.ARRAY:
            return _normalize_array(value, depth=depth, active=active)
        return _normalize_object(value, depth=depth, active=active)
    finally:
        active.discard(marker)


def _normalize_array(value: Sequence, *, depth: int, active: set[int]) -> list[ImageRef]:
    refs: list[ImageRef] = []
    for entry in value:
        refs.extend(_normalize(entry, depth=depth + 1, active=active))
    return refs


def _normalize_object(value: Mapping, *, depth: int, active: set[int]) -> list[ImageRef]:
    # Precedence: images, output array, output object, image object.
    direct = parse_image_list(value.get("images"))
    if direct:
        return direct

    output = value.get("output")
    output_shape = classify_payload(output)

    if output_shape is PayloadShape.ARRAY:
        nested = _normalize_array(output, depth=depth + 1, active=active)
        if nested:
            return nested

    if output_shape is PayloadShape.OBJECT:
        nested = _normalize(output, depth=depth + 1, active=active)
        if nested:
            return nested

    image = value.get("image")
    if classify_payload(image) is PayloadShape.OBJECT:
        nested = _normalize(image, depth=depth + 1, active=active)
        if nested:
            return nested

    return []
