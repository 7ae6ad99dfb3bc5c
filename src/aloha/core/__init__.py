"""Core functionality for the photoshoot studio.

- **config**: Configuration management using Pydantic Settings
- **gateway**: Render-service calls with curated fallback looks
- **normalizer**: Flattening of render-service result payloads
- **palette**: Per-look accent colour derivation
"""

from aloha.core.config import AlohaConfig, config
from aloha.core.normalizer import normalize_images
from aloha.core.palette import accent_from_base

__all__ = [
    "AlohaConfig",
    "config",
    "normalize_images",
    "accent_from_base",
]
