"""Creative brief prompt composition for the photoshoot studio.

The composer turns a handful of discrete choices into one natural-language
prompt for the render service.  The option sets below are the only values the
browser form offers; the collection name is the one free-text field.

Prompt Structure
----------------
The compiled prompt is nine sentences joined with ``". "``::

    Editorial macro photography of manicured hands for Aloha Nails (alohanails.gr).
    Collection: <collection name>.
    Mood: <mood>.
    Polish shade: <polish colour> with <finish>.
    Outfit palette perfectly color-matched to polish.
    Setting: <location>, styled with <accessories>.
    [Fixed: lighting and finish directive].
    [Fixed: framing directive].
    [Fixed: fidelity directive]

Composition is deterministic: identical selections always produce the same
prompt.  The negative prompt is a fixed constant.

Usage
-----
::

    prompt = build_prompt(
        collection_name="Hibiscus Reverie",
        polish_color="#ff6f8e",
        finish="glass shine",
        mood="sunset Waikiki couture",
        location="ocean-view penthouse terrace",
        accessories="stacked gold rings",
    )
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Composer option sets.
# ---------------------------------------------------------------------------

FINISHES = (
    "glass shine",
    "velvet matte",
    "holographic shimmer",
    "pearlescent glow",
)

MOODS = (
    "sunset Waikiki couture",
    "modern tropical minimalism",
    "midnight neon soirée",
    "ethereal editorial luxe",
)

LOCATIONS = (
    "ocean-view penthouse terrace",
    "black sand beach runway",
    "glasshouse botanical atelier",
    "platinum VIP backstage lounge",
)

ACCESSORIES = (
    "stacked gold rings",
    "pearl statement bracelet",
    "abalone clutch",
    "diamond tennis bracelet",
)

COLOR_SWATCHES = (
    "#ff6f8e",
    "#fb8d3b",
    "#23b0a5",
    "#7053ff",
    "#cc73ff",
)

DEFAULT_SELECTIONS: dict = {
    "collection_name": "Hibiscus Reverie",
    "polish_color": COLOR_SWATCHES[0],
    "finish": FINISHES[0],
    "mood": MOODS[0],
    "location": LOCATIONS[0],
    "accessories": ACCESSORIES[0],
    "variations": 3,
}

NEGATIVE_PROMPT = (
    "extra digits, disfigured hands, blurred nails, watermark, plain background, "
    "low-res, duplicated text, anatomy errors, cropped fingers"
)

# ---------------------------------------------------------------------------
# Fixed prompt sections.
# ---------------------------------------------------------------------------

_BRAND_LEAD = "Editorial macro photography of manicured hands for Aloha Nails (alohanails.gr)"

_OUTFIT_DIRECTIVE = "Outfit palette perfectly color-matched to polish"

_CLOSING_DIRECTIVES = (
    "luxury lighting, hyperreal skin, immaculate nails, jewelry sparkle",
    "Shot for fashion magazine cover, cinematic depth of field, full frame",
    "Include full hands and nails, ensure high fidelity details",
)


def build_prompt(
    *,
    collection_name: str,
    polish_color: str,
    finish: str,
    mood: str,
    location: str,
    accessories: str,
) -> str:
    """Compile the render prompt from the composer selections.

    Args:
        collection_name: Free-text collection title.
        polish_color: Selected polish swatch (hex colour).
        finish: One of :data:`FINISHES`.
        mood: One of :data:`MOODS`.
        location: One of :data:`LOCATIONS`.
        accessories: One of :data:`ACCESSORIES`.

    Returns:
        The compiled prompt, sentences separated by ``". "``.
    """
    parts = [
        _BRAND_LEAD,
        f"Collection: {collection_name}",
        f"Mood: {mood}",
        f"Polish shade: {polish_color} with {finish}",
        _OUTFIT_DIRECTIVE,
        f"Setting: {location}, styled with {accessories}",
        *_CLOSING_DIRECTIVES,
    ]
    return ". ".join(parts)


def composer_options() -> dict:
    """Return the option sets and defaults the browser form renders.

    Keys are camelCase to match the rest of the JSON API.
    """
    return {
        "finishes": list(FINISHES),
        "moods": list(MOODS),
        "locations": list(LOCATIONS),
        "accessories": list(ACCESSORIES),
        "swatches": list(COLOR_SWATCHES),
        "defaults": {
            "collectionName": DEFAULT_SELECTIONS["collection_name"],
            "polishColor": DEFAULT_SELECTIONS["polish_color"],
            "finish": DEFAULT_SELECTIONS["finish"],
            "mood": DEFAULT_SELECTIONS["mood"],
            "location": DEFAULT_SELECTIONS["location"],
            "accessories": DEFAULT_SELECTIONS["accessories"],
            "variations": DEFAULT_SELECTIONS["variations"],
        },
        "negativePrompt": NEGATIVE_PROMPT,
    }
