"""Configuration management for the Aloha Nails photoshoot service.

This module provides centralized configuration management using Pydantic
Settings.  Server settings are loaded from environment variables with the
``ALOHA_`` prefix, while the render-service credential and model override use
the names the hosted service documents (``FAL_KEY`` and ``FAL_MODEL_ID``).

Environment Variable Loading
----------------------------
Configuration values are loaded in the following priority order:

1. Environment variables
2. ``.env`` file in the working directory
3. Default values defined in :class:`AlohaConfig`

Example ``.env`` file::

    FAL_KEY=key-id:key-secret
    FAL_MODEL_ID=fal-ai/flux-pro/v1.1-ultra
    ALOHA_SERVER_PORT=3000
    ALOHA_RENDER_TIMEOUT=60

Credential Handling
-------------------
A missing ``FAL_KEY`` is not a startup failure.  The generation endpoint
builds a fresh :class:`AlohaConfig` on every request and, when no credential
is present, serves the curated fallback photography instead of calling the
render service.

Usage Example
-------------
::

    from aloha.core.config import config

    print(config.server_port)
    print(config.fal_model_id)
"""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Package root: ``src/aloha``.  Static assets and the HTML template ship
# inside the package so an installed wheel can serve them.
_PACKAGE_DIR = Path(__file__).resolve().parent.parent

DEFAULT_MODEL_ID = "fal-ai/flux-pro/v1.1-ultra"

# Remote hosts the gallery is allowed to render images from.
DEFAULT_IMAGE_HOSTS = (
    "fal.media",
    "storage.googleapis.com",
    "replicate.delivery",
    "images.unsplash.com",
)


class AlohaConfig(BaseSettings):
    """Main configuration for the photoshoot service.

    Attributes
    ----------
    Render Service:
        fal_key : str | None
            Credential for the hosted render service.  ``None`` (or empty)
            switches the generation endpoint to curated fallback imagery.
        fal_model_id : str
            Render model identifier passed to the hosted service.
        render_timeout : float
            Overall ceiling, in seconds, for a single render call.

    Server:
        server_host : str
            Bind address for uvicorn.
        server_port : int
            Port for uvicorn (1024-65535).
        log_level : str
            Root logging level used by :func:`aloha.api.main.main`.

    Paths:
        static_dir : Path
            Directory served at ``/static``.
        templates_dir : Path
            Directory containing ``index.html``.

    Gallery:
        allowed_image_hosts : list[str]
            Hostnames the browser gallery may load images from.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ALOHA_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Render service settings
    fal_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("fal_key", "FAL_KEY", "ALOHA_FAL_KEY"),
        description="Render service credential (fallback imagery when unset)",
    )
    fal_model_id: str = Field(
        default=DEFAULT_MODEL_ID,
        validation_alias=AliasChoices("fal_model_id", "FAL_MODEL_ID", "ALOHA_FAL_MODEL_ID"),
        description="Render model identifier",
    )
    render_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Overall ceiling in seconds for one render call",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=3000,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level for the server process",
    )

    # Paths
    static_dir: Path = Field(
        default=_PACKAGE_DIR / "static",
        description="Directory served at /static",
    )
    templates_dir: Path = Field(
        default=_PACKAGE_DIR / "templates",
        description="Directory containing index.html",
    )

    # Gallery settings
    allowed_image_hosts: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IMAGE_HOSTS),
        description="Remote hosts the gallery may render images from",
    )

    @property
    def live_rendering(self) -> bool:
        """Whether a render-service credential is configured."""
        return bool(self.fal_key and self.fal_key.strip())


# Global configuration instance
# Process-wide settings (bind address, paths, log level) come from here.  The
# generation endpoint builds its own instance per request so credential
# changes are picked up without a restart.
config = AlohaConfig()
