"""Shared pytest fixtures for the photoshoot studio tests."""

from __future__ import annotations

import asyncio
import random
from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from aloha.api.models import CreativeBrief
from aloha.core.config import AlohaConfig
from aloha.core.gateway import GenerationGateway


class FakeRenderClient:
    """Stand-in for ``fal_client.AsyncClient`` that records every call.

    Attributes:
        result: Value returned from :meth:`subscribe`.
        exc: Exception raised from :meth:`subscribe` instead, if set.
        delay: Seconds to sleep before answering.
        calls: ``(application, arguments)`` tuples in call order.
        keys: Credentials the factory was called with.
    """

    def __init__(self) -> None:
        self.result: Any = {"images": [{"url": "https://fal.media/files/look-1.png"}]}
        self.exc: BaseException | None = None
        self.delay: float = 0.0
        self.calls: list[tuple[str, dict]] = []
        self.keys: list[str] = []

    def factory(self, credential: str) -> FakeRenderClient:
        self.keys.append(credential)
        return self

    async def subscribe(self, application: str, arguments: dict[str, Any]) -> Any:
        self.calls.append((application, arguments))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.exc is not None:
            raise self.exc
        return self.result


@pytest.fixture
def valid_brief_payload() -> dict:
    """A JSON body that passes brief validation.

    Returns:
        Dictionary suitable for ``POST /api/generate``.
    """
    return {
        "collectionName": "Hibiscus Reverie",
        "polishColor": "#ff6f8e",
        "finish": "glass shine",
        "mood": "sunset Waikiki couture",
        "location": "ocean-view penthouse terrace",
        "accessories": "stacked gold rings",
        "variations": 3,
        "prompt": "Editorial macro photography of manicured hands for Aloha Nails",
        "negativePrompt": "extra digits, disfigured hands, watermark",
    }


@pytest.fixture
def valid_brief(valid_brief_payload: dict) -> CreativeBrief:
    """The validated form of :func:`valid_brief_payload`."""
    return CreativeBrief.model_validate(valid_brief_payload)


@pytest.fixture
def fake_render_client() -> FakeRenderClient:
    """A fresh fake render client answering with one image."""
    return FakeRenderClient()


@pytest.fixture
def gateway(fake_render_client: FakeRenderClient) -> GenerationGateway:
    """A gateway wired to the fake render client with a seeded RNG."""
    return GenerationGateway(
        client_factory=fake_render_client.factory,
        rng=random.Random(1234),
    )


@pytest.fixture
def clean_env(monkeypatch) -> None:
    """Remove every environment variable the configuration reads."""
    for name in (
        "FAL_KEY",
        "FAL_MODEL_ID",
        "ALOHA_FAL_KEY",
        "ALOHA_FAL_MODEL_ID",
        "ALOHA_RENDER_TIMEOUT",
        "ALOHA_SERVER_HOST",
        "ALOHA_SERVER_PORT",
        "ALOHA_LOG_LEVEL",
        "ALOHA_ALLOWED_IMAGE_HOSTS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def test_client(clean_env, gateway: GenerationGateway) -> Generator[TestClient, None, None]:
    """A TestClient for the FastAPI app with the fake render client installed.

    The per-request configuration ignores any ``.env`` file so tests control
    the credential purely through ``monkeypatch.setenv``.
    """
    from aloha.api.main import app, get_request_config

    app.state.gateway = gateway
    app.dependency_overrides[get_request_config] = lambda: AlohaConfig(_env_file=None)
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
        app.state.gateway = None
