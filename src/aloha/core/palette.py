"""Accent colour derivation for gallery cards.

Every generated look is badged with an accent colour derived from the polish
shade the user picked.  The derivation is a pure function of the base colour,
the image's position in the batch, and the batch size, so re-rendering the
gallery never makes a badge flicker to a different colour.

Derivation
----------
1. Parse the base colour (``#rgb`` or ``#rrggbb``, ``#`` optional).
   Unparseable input falls back to :data:`DEFAULT_BASE_COLOR`.
2. Convert to HLS.
3. Rotate the hue by up to :data:`HUE_SPREAD` degrees in proportion to the
   image's share of the batch (``index / total``).
4. Nudge lightness along the batch, clamped to a band that keeps the badge
   legible on the dark card overlay.
5. Convert back to lowercase ``#rrggbb``.
"""

from __future__ import annotations

import colorsys
import re

DEFAULT_BASE_COLOR = "#ff6f8e"

HUE_SPREAD = 40.0
LIGHTNESS_STEP = 0.12
LIGHTNESS_MIN = 0.32
LIGHTNESS_MAX = 0.78

_HEX_RE = re.compile(r"^#?(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def parse_hex_color(color: str) -> tuple[float, float, float] | None:
    """Parse a hex colour string into unit RGB floats.

    Args:
        color: ``#rgb`` or ``#rrggbb`` string.  The leading ``#`` is optional
            and surrounding whitespace is ignored.

    Returns:
        ``(r, g, b)`` each in ``[0, 1]``, or ``None`` if *color* is not a
        recognised hex colour.
    """
    if not isinstance(color, str):
        return None

    value = color.strip()
    if not _HEX_RE.match(value):
        return None

    digits = value.lstrip("#")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)

    r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    return r / 255.0, g / 255.0, b / 255.0


def to_hex(r: float, g: float, b: float) -> str:
    """Format unit RGB floats as a lowercase ``#rrggbb`` string."""
    return "#" + "".join(f"{round(max(0.0, min(1.0, c)) * 255):02x}" for c in (r, g, b))


def accent_from_base(color: str, index: int, total: int) -> str:
    """Derive the accent colour for one image in a batch.

    Args:
        color: The brief's polish colour.
        index: Zero-based position of the image in the batch.
        total: Number of images in the batch.  Values below 1 are treated
            as 1.

    Returns:
        Lowercase ``#rrggbb`` accent colour.
    """
    rgb = parse_hex_color(color) or parse_hex_color(DEFAULT_BASE_COLOR)
    h, lightness, s = colorsys.rgb_to_hls(*rgb)

    total = max(int(total), 1)
    share = (int(index) % total) / total

    h = (h + (HUE_SPREAD / 360.0) * share) % 1.0

    # Centre the lightness shift on the middle of the batch so the first and
    # last looks move in opposite directions.
    lightness = lightness + LIGHTNESS_STEP * (share - 0.5)
    lightness = max(LIGHTNESS_MIN, min(LIGHTNESS_MAX, lightness))

    return to_hex(*colorsys.hls_to_rgb(h, lightness, s))
