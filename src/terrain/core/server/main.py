"""Terrain server entry point — ``python -m terrain.core.server.main``.

Validates the content catalog before binding so a bad pack shows up in the
startup log rather than as a missing suggestion later.
"""

from __future__ import annotations

import logging
from ipaddress import ip_address
from pathlib import Path

from terrain.core.config.settings import Settings, get_settings
from terrain.core.server.app import create_app
from terrain.domains.wellness.content.loader import DEFAULT_PACK_DIR
from terrain.domains.wellness.content.validator import validate_content_directory

logger = logging.getLogger(__name__)

LOOPBACK_NAMES = frozenset({"localhost", "ip6-localhost"})


def _is_loopback_host(host: str) -> bool:
    if host.lower() in LOOPBACK_NAMES:
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def _content_dir(settings: Settings) -> Path:
    return Path(settings.content_dir).expanduser() if settings.content_dir else DEFAULT_PACK_DIR


def check_content(settings: Settings) -> list[str]:
    """Validate the configured content packs, logging each problem found."""
    directory = _content_dir(settings)
    count, errors = validate_content_directory(directory)
    for error in errors:
        logger.warning("Content pack problem: %s", error)
    logger.info("Validated %d catalog items in %s (%d problems)", count, directory, len(errors))
    return errors


def run() -> None:
    """Start the Terrain MCP server with Streamable HTTP transport."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.terrain_log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    host, port = settings.terrain_host, settings.terrain_port
    if not _is_loopback_host(host) and not settings.terrain_allow_insecure_bind:
        raise RuntimeError(
            f"Terrain serves personal daily logs without authentication; refusing to bind {host}. "
            "Set TERRAIN_ALLOW_INSECURE_BIND=true to bind a non-loopback address anyway."
        )

    check_content(settings)
    logger.info(
        "Starting Terrain on %s:%d (trend window %d days)",
        host,
        port,
        settings.trend_window_days,
    )
    create_app().run(transport="streamable-http", host=host, port=port)


if __name__ == "__main__":
    run()
