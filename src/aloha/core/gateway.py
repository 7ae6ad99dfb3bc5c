"""Render-service gateway for the photoshoot studio.

This module provides :class:`GenerationGateway`, the single point of contact
with the hosted render service.  It turns a validated
:class:`~aloha.api.models.CreativeBrief` into a
:class:`~aloha.api.models.GenerateResponse` and never lets a render failure
reach the browser as an error status.

Outcomes
--------
- **No credential** — curated fallback looks plus a ``warning``.
- **Live render** — one call to the render service, the result flattened by
  :func:`~aloha.core.normalizer.normalize_images`, one look per URL.
- **Render failure** — transport errors, service errors, timeouts and
  results with no usable images are logged and replaced by the curated
  fallback looks plus an ``error``.

Every look carries an accent colour from
:func:`~aloha.core.palette.accent_from_base`.

Usage
-----
::

    gateway = GenerationGateway()
    response = await gateway.generate(
        brief,
        credential=cfg.fal_key,
        model_id=cfg.fal_model_id,
        timeout=cfg.render_timeout,
    )

See Also
--------
- :mod:`aloha.api.main` — the FastAPI application that owns the gateway.
"""

from __future__ import annotations

import asyncio
import logging
import random
import uuid
from collections.abc import Callable
from typing import Any, Protocol

import fal_client

from aloha.api.models import CreativeBrief, GeneratedImage, GenerateResponse
from aloha.core.config import DEFAULT_MODEL_ID
from aloha.core.normalizer import ImageRef, normalize_images
from aloha.core.palette import accent_from_base

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Fixed sampling parameters sent with every render.
# ---------------------------------------------------------------------------
GUIDANCE_SCALE = 3.8
INFERENCE_STEPS = 28
MAX_SEED = 99_999_999

DEFAULT_TIMEOUT = 60.0

MISSING_CREDENTIAL_WARNING = "FAL_KEY missing. Returned curated fallback photography references."
RENDER_UNAVAILABLE_ERROR = (
    "The live render queue is unavailable. Served curated fallback photography instead."
)

CURATED_LOOKS = (
    "https://images.unsplash.com/photo-1522333140766-8fa2960ecb30?auto=format&fit=crop&w=720&q=90",
    "https://images.unsplash.com/photo-1524504388940-b1c1722653e1?auto=format&fit=crop&w=720&q=90",
    "https://images.unsplash.com/photo-1504593811423-6dd665756598?auto=format&fit=crop&w=720&q=90",
    "https://images.unsplash.com/photo-1520341280432-4749d4d7bcf9?auto=format&fit=crop&w=720&q=90",
    "https://images.unsplash.com/photo-1526045612212-70caf35c14df?auto=format&fit=crop&w=720&q=90",
)


class RenderClient(Protocol):
    """The slice of ``fal_client.AsyncClient`` the gateway relies on."""

    async def subscribe(self, application: str, arguments: dict[str, Any]) -> Any: ...


RenderClientFactory = Callable[[str], RenderClient]


class EmptyRenderError(RuntimeError):
    """The render service answered but no usable image URL could be extracted."""


def fal_client_factory(credential: str) -> RenderClient:
    """Create a render client bound to *credential*.

    ``fal_client.AsyncClient`` has no close method; its pooled
    ``httpx.AsyncClient`` is released when the client is garbage-collected
    at the end of the request.  Clients are not shared across requests
    because the pooled connections are bound to the event loop that opened
    them.
    """
    return fal_client.AsyncClient(key=credential)


class GenerationGateway:
    """Submits briefs to the render service and shapes the gallery response.

    The gateway is stateless across requests: the credential and model
    identifier are passed in per call, and a fresh client is created for
    every render.

    Attributes:
        _client_factory (RenderClientFactory):
            Builds a render client from a credential.
        _rng (random.Random):
            Source of render seeds.
        curated_looks (tuple[str, ...]):
            Fallback image URLs, cycled by index.
    """

    def __init__(
        self,
        client_factory: RenderClientFactory | None = None,
        *,
        rng: random.Random | None = None,
        curated_looks: tuple[str, ...] = CURATED_LOOKS,
    ) -> None:
        if not curated_looks:
            raise ValueError("curated_looks must contain at least one URL")

        self._client_factory = client_factory or fal_client_factory
        self._rng = rng or random.Random()
        self.curated_looks = tuple(curated_looks)

    # -- Public interface ---------------------------------------------------

    async def generate(
        self,
        brief: CreativeBrief,
        *,
        credential: str | None,
        model_id: str = DEFAULT_MODEL_ID,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> GenerateResponse:
        """Render *brief*, falling back to curated looks when needed.

        Args:
            brief: Validated creative brief.
            credential: Render service credential.  ``None`` or blank serves
                the fallback set with a warning.
            model_id: Render model identifier.
            timeout: Overall ceiling in seconds for the render call.

        Returns:
            The gallery response.  Never raises for render-service problems.
        """
        if not credential or not credential.strip():
            logger.warning("No render credential configured; serving curated fallback looks.")
            return self.fallback(brief, warning=MISSING_CREDENTIAL_WARNING)

        try:
            refs = await self._render(brief, credential, model_id, timeout)
            images = self.live_images(brief, refs)
        except Exception:
            logger.exception("[generate] render service error (model=%s)", model_id)
            return self.fallback(brief, error=RENDER_UNAVAILABLE_ERROR)

        logger.info("Rendered %d look(s) with %s", len(images), model_id)
        return GenerateResponse(images=images)

    def build_arguments(self, brief: CreativeBrief) -> dict[str, Any]:
        """Build the render-service input for *brief* with a fresh seed."""
        return {
            "prompt": brief.prompt,
            "negative_prompt": brief.negative_prompt,
            "guidance_scale": GUIDANCE_SCALE,
            "steps": INFERENCE_STEPS,
            "num_images": brief.variations,
            "enable_safety_checker": True,
            "seed": self._rng.randrange(0, MAX_SEED),
        }

    def live_images(self, brief: CreativeBrief, refs: list[ImageRef]) -> list[GeneratedImage]:
        """Wrap normalized URLs as gallery looks."""
        total = len(refs)
        return [
            GeneratedImage(
                id=str(uuid.uuid4()),
                url=ref["url"],
                prompt=brief.prompt,
                accent=accent_from_base(brief.polish_color, index, total),
            )
            for index, ref in enumerate(refs)
        ]

    def fallback(
        self,
        brief: CreativeBrief,
        *,
        warning: str | None = None,
        error: str | None = None,
    ) -> GenerateResponse:
        """Build the curated fallback response for *brief*.

        One look per requested variation, cycling through
        :attr:`curated_looks` by index.
        """
        count = brief.variations
        images = [
            GeneratedImage(
                id=f"fallback-{index + 1}",
                url=self.curated_looks[index % len(self.curated_looks)],
                prompt=brief.prompt,
                accent=accent_from_base(brief.polish_color, index, count),
            )
            for index in range(count)
        ]
        return GenerateResponse(images=images, warning=warning, error=error)

    # -- Internal helpers ---------------------------------------------------

    async def _render(
        self,
        brief: CreativeBrief,
        credential: str,
        model_id: str,
        timeout: float,
    ) -> list[ImageRef]:
        client = self._client_factory(credential)
        arguments = self.build_arguments(brief)

        logger.debug("Submitting render to %s (seed=%s)", model_id, arguments["seed"])
        result = await asyncio.wait_for(
            client.subscribe(model_id, arguments=arguments),
            timeout=timeout,
        )

        refs = normalize_images(result)
        if not refs:
            raise EmptyRenderError("No imagery returned from the render engine.")
        return refs
