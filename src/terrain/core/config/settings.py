"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Terrain server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Loopback by default; daily logs are personal data and there is no auth layer.
    terrain_host: str = "127.0.0.1"
    terrain_port: int = 8010
    terrain_log_level: str = "info"
    # Binding to a non-loopback host is refused unless this is set true.
    terrain_allow_insecure_bind: bool = False

    # Content pack directory; empty means the packs bundled with the package.
    content_dir: str = ""

    # Trends
    trend_window_days: int = 14


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
