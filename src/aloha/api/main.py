"""Aloha Nails AI Photoshoot — FastAPI Application.

This module is the single entry point for the web application.  It defines
the FastAPI ``app`` instance, all routes, and the ``main()`` CLI function that
launches the uvicorn server.

Architecture
------------
The application is stateless across requests:

- **The HTML page** is served as a raw ``HTMLResponse``; the browser composer
  fetches option sets and the image host allow-list from ``/api/config``.
- **Prompt composition** happens in :mod:`aloha.api.prompt_builder` and is
  previewed through ``POST /api/prompt/compile``.
- **Image generation** is delegated to
  :class:`~aloha.core.gateway.GenerationGateway`, which calls the hosted
  render service or falls back to curated photography.
- **Configuration** for the render path (credential, model id, timeout) is
  re-read from the environment on every request.

Endpoints
---------
========  ==========================  ====================================
Method    Path                        Purpose
========  ==========================  ====================================
GET       ``/``                       Serve the composer HTML page
GET       ``/api/config``             Option sets, defaults, allow-list
GET       ``/api/health``             Liveness probe
POST      ``/api/prompt/compile``     Preview the compiled prompt
POST      ``/api/generate``           Render a batch of looks
========  ==========================  ====================================

Usage
-----
CLI (installed entry point)::

    aloha-nails

Direct invocation::

    python -m aloha.api.main
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from aloha import __version__
from aloha.api.models import MAX_VARIATIONS, BriefSelections
from aloha.api.prompt_builder import NEGATIVE_PROMPT, build_prompt, composer_options
from aloha.api.validation import BriefValidationError, validate_brief
from aloha.core.config import AlohaConfig, config
from aloha.core.gateway import GenerationGateway

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Application lifecycle — gateway setup.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the generation gateway on startup.

    Tests may pre-populate ``app.state.gateway`` with a gateway wired to a
    fake render client; an existing gateway is left in place.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    if getattr(app.state, "gateway", None) is None:
        app.state.gateway = GenerationGateway()
    logger.info("Generation gateway ready (version %s).", __version__)

    yield


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Aloha Nails AI Photoshoot",
    description="Creative brief composer and render gateway for manicure campaign imagery.",
    version=__version__,
    lifespan=lifespan,
)

# Allow cross-origin requests so the composer can be served from a different
# port during development.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/static", StaticFiles(directory=str(config.static_dir)), name="static")


def get_request_config() -> AlohaConfig:
    """Load configuration for the current request.

    Built fresh per request so a credential added to the environment (or
    ``.env``) takes effect without restarting the server.
    """
    return AlohaConfig()


def get_gateway(request: Request) -> GenerationGateway:
    """Return the application's :class:`GenerationGateway`."""
    return request.app.state.gateway


@app.exception_handler(BriefValidationError)
async def brief_validation_handler(request: Request, exc: BriefValidationError) -> JSONResponse:
    """Map an invalid brief to a 400 with a generic message."""
    return JSONResponse(status_code=400, content={"error": exc.message})


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    """Serve the composer HTML page.

    Raises:
        HTTPException: 404 if ``index.html`` is not found.
    """
    index_path = config.templates_dir / "index.html"
    if index_path.exists():
        return HTMLResponse(content=index_path.read_text(encoding="utf-8"))
    raise HTTPException(status_code=404, detail="index.html not found")


@app.get("/api/config")
async def get_config(cfg: AlohaConfig = Depends(get_request_config)) -> dict:
    """Return everything the browser composer needs to render the form.

    The response includes the option sets and defaults from
    :func:`~aloha.api.prompt_builder.composer_options`, plus:

    - ``version`` — API version string.
    - ``maxVariations`` — upper bound for the looks-per-drop slider.
    - ``allowedImageHosts`` — hosts the gallery may load images from.
    - ``liveRendering`` — whether a render credential is configured.
    """
    return {
        "version": __version__,
        **composer_options(),
        "maxVariations": MAX_VARIATIONS,
        "allowedImageHosts": list(cfg.allowed_image_hosts),
        "liveRendering": cfg.live_rendering,
    }


@app.get("/api/health")
async def health() -> dict:
    """Liveness probe."""
    return {"status": "ok", "version": __version__}


@app.post("/api/prompt/compile")
async def compile_prompt(selections: BriefSelections) -> dict:
    """Preview the compiled prompt for a set of composer selections.

    Returns:
        Dictionary with ``prompt`` and ``negativePrompt``.
    """
    prompt = build_prompt(
        collection_name=selections.collection_name,
        polish_color=selections.polish_color,
        finish=selections.finish,
        mood=selections.mood,
        location=selections.location,
        accessories=selections.accessories,
    )
    return {"prompt": prompt, "negativePrompt": NEGATIVE_PROMPT}


@app.post("/api/generate")
async def generate_images(
    request: Request,
    cfg: AlohaConfig = Depends(get_request_config),
    gateway: GenerationGateway = Depends(get_gateway),
) -> dict:
    """Render a batch of looks for a creative brief.

    This endpoint:

    1. Decodes the JSON body (an unreadable body counts as ``null``).
    2. Validates it as a :class:`~aloha.api.models.CreativeBrief`.
    3. Hands the brief to the gateway, which renders live or serves the
       curated fallback set.

    Returns:
        ``{"images": [...]}`` plus ``warning`` or ``error`` when fallback
        looks were served.  Always 200 once the brief is valid.

    Raises:
        BriefValidationError: Mapped to 400 ``{"error": ...}``.
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        payload = None

    brief = validate_brief(payload)

    response = await gateway.generate(
        brief,
        credential=cfg.fal_key,
        model_id=cfg.fal_model_id,
        timeout=cfg.render_timeout,
    )
    return response.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from :data:`~aloha.core.config.config`
    (``ALOHA_SERVER_HOST``, ``ALOHA_SERVER_PORT``, ``ALOHA_LOG_LEVEL``).
    Defaults to ``0.0.0.0:3000``.

    This function is registered as the ``aloha-nails`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "aloha.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
