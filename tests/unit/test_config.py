"""Tests for aloha.core.config — configuration management.

Tests cover:
- Default values for all configuration fields.
- The un-prefixed FAL_KEY / FAL_MODEL_ID variables.
- ALOHA_-prefixed overrides.
- Pydantic validation constraints (port range, positive timeout).
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from aloha.core.config import DEFAULT_IMAGE_HOSTS, DEFAULT_MODEL_ID, AlohaConfig


class TestConfigDefaults:
    """Verify that AlohaConfig provides sensible defaults."""

    def test_no_credential_by_default(self, clean_env):
        """Without FAL_KEY the credential should be None."""
        cfg = AlohaConfig(_env_file=None)
        assert cfg.fal_key is None
        assert cfg.live_rendering is False

    def test_default_model(self, clean_env):
        """The default model should be the flux ultra endpoint."""
        assert AlohaConfig(_env_file=None).fal_model_id == DEFAULT_MODEL_ID

    def test_default_timeout(self, clean_env):
        """Renders should be capped at 60 seconds by default."""
        assert AlohaConfig(_env_file=None).render_timeout == 60.0

    def test_default_server(self, clean_env):
        """The server should bind 0.0.0.0:3000 by default."""
        cfg = AlohaConfig(_env_file=None)
        assert cfg.server_host == "0.0.0.0"
        assert cfg.server_port == 3000

    def test_default_image_hosts(self, clean_env):
        """The gallery allow-list should contain the known render and stock hosts."""
        assert AlohaConfig(_env_file=None).allowed_image_hosts == list(DEFAULT_IMAGE_HOSTS)

    def test_bundled_paths_exist(self, clean_env):
        """Static assets and the template should ship with the package."""
        cfg = AlohaConfig(_env_file=None)
        assert (cfg.static_dir / "js" / "app.js").is_file()
        assert (cfg.templates_dir / "index.html").is_file()


class TestEnvironmentOverrides:
    """Verify environment variable loading."""

    def test_fal_key_from_env(self, clean_env, monkeypatch):
        """FAL_KEY should be read without the ALOHA_ prefix."""
        monkeypatch.setenv("FAL_KEY", "key-id:secret")
        cfg = AlohaConfig(_env_file=None)
        assert cfg.fal_key == "key-id:secret"
        assert cfg.live_rendering is True

    def test_blank_fal_key_is_not_live(self, clean_env, monkeypatch):
        """A whitespace-only credential should not enable live rendering."""
        monkeypatch.setenv("FAL_KEY", "   ")
        assert AlohaConfig(_env_file=None).live_rendering is False

    def test_model_override(self, clean_env, monkeypatch):
        """FAL_MODEL_ID should override the default model."""
        monkeypatch.setenv("FAL_MODEL_ID", "fal-ai/flux/dev")
        assert AlohaConfig(_env_file=None).fal_model_id == "fal-ai/flux/dev"

    def test_prefixed_overrides(self, clean_env, monkeypatch):
        """ALOHA_-prefixed variables should override server settings."""
        monkeypatch.setenv("ALOHA_SERVER_PORT", "8080")
        monkeypatch.setenv("ALOHA_RENDER_TIMEOUT", "12.5")
        cfg = AlohaConfig(_env_file=None)
        assert cfg.server_port == 8080
        assert cfg.render_timeout == 12.5

    def test_env_file(self, clean_env, tmp_path):
        """Values should also load from a .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("FAL_KEY=from-file\nALOHA_LOG_LEVEL=DEBUG\n", encoding="utf-8")
        cfg = AlohaConfig(_env_file=env_file)
        assert cfg.fal_key == "from-file"
        assert cfg.log_level == "DEBUG"


class TestValidation:
    """Verify Pydantic constraints."""

    @pytest.mark.parametrize("port", [80, 70000])
    def test_port_range(self, clean_env, port):
        """Ports outside 1024-65535 should be rejected."""
        with pytest.raises(ValidationError):
            AlohaConfig(_env_file=None, server_port=port)

    def test_timeout_positive(self, clean_env):
        """A zero timeout should be rejected."""
        with pytest.raises(ValidationError):
            AlohaConfig(_env_file=None, render_timeout=0)
