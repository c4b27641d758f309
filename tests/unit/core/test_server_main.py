"""Unit tests for the server entry point: bind guard and startup content check."""

from __future__ import annotations

import pytest

from terrain.core.config.settings import Settings
from terrain.core.server import main


class TestLoopbackGuard:
    @pytest.mark.parametrize("host", ["127.0.0.1", "::1", "localhost", "LOCALHOST"])
    def test_loopback_hosts(self, host):
        assert main._is_loopback_host(host)

    @pytest.mark.parametrize("host", ["0.0.0.0", "192.168.1.10", "example.com"])
    def test_non_loopback_hosts(self, host):
        assert not main._is_loopback_host(host)

    def test_run_refuses_public_bind(self, monkeypatch):
        monkeypatch.setenv("TERRAIN_HOST", "0.0.0.0")
        with pytest.raises(RuntimeError, match="TERRAIN_ALLOW_INSECURE_BIND"):
            main.run()


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.terrain_host == "127.0.0.1"
        assert settings.terrain_port == 8010
        assert settings.trend_window_days == 14

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("TREND_WINDOW_DAYS", "21")
        assert Settings().trend_window_days == 21


class TestCheckContent:
    def test_bundled_packs_have_no_problems(self):
        assert main.check_content(Settings()) == []

    def test_empty_directory_reported(self, tmp_path):
        errors = main.check_content(Settings(content_dir=str(tmp_path)))
        assert errors == [f"No content packs found in {tmp_path}"]
