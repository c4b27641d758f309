"""Terrain MCP server — application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastmcp import FastMCP

from terrain.core.config.settings import get_settings
from terrain.domains.wellness.content.loader import DEFAULT_PACK_DIR, load_content_directory
from terrain.domains.wellness.content.registry import ContentRegistry
from terrain.domains.wellness.domain_logic.trend_analyzer import TrendAnalyzer
from terrain.domains.wellness.stores import DailyLogStore, ProfileStore
from terrain.domains.wellness.stores.memory import InMemoryDailyLogStore, InMemoryProfileStore
from terrain.domains.wellness.tools.insight_tools import register_insight_tools
from terrain.domains.wellness.tools.suggestion_tools import register_suggestion_tools
from terrain.domains.wellness.tools.terrain_tools import register_terrain_tools
from terrain.domains.wellness.tools.trend_tools import register_trend_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "Terrain"
SERVER_VERSION = "0.1.0"


def create_app(
    *,
    content_registry_override: ContentRegistry | None = None,
    log_store_override: DailyLogStore | None = None,
    profile_store_override: ProfileStore | None = None,
) -> FastMCP:
    """Create and configure the Terrain MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Loads the content catalog (ingredients and routines)
    3. Sets up the daily log and profile stores (in-memory unless overridden)
    4. Registers terrain, suggestion, trend and insight tools
    """
    settings = get_settings()

    # --- Server instance ---
    server = FastMCP(
        SERVER_NAME,
        instructions=(
            "Terrain: a constitutional wellness engine. Classifies a user's terrain "
            "from a short quiz, ranks ingredients and routines for quick needs, "
            "tracks 14-day trends from daily check-ins and writes plain-language "
            "daily guidance."
        ),
    )

    # --- Content catalog ---
    if content_registry_override is not None:
        registry = content_registry_override
        content_dir = None
    else:
        registry = ContentRegistry()
        content_dir = Path(settings.content_dir).expanduser() if settings.content_dir else DEFAULT_PACK_DIR
        loaded = load_content_directory(content_dir, registry)
        logger.info("Loaded %d catalog items from %s", loaded, content_dir)

    # --- Stores ---
    if log_store_override is not None:
        log_store = log_store_override
    else:
        log_store = InMemoryDailyLogStore()
        logger.info("Using in-memory daily log store")

    if profile_store_override is not None:
        profile_store = profile_store_override
    else:
        profile_store = InMemoryProfileStore()
        logger.info("Using in-memory profile store")

    trend_analyzer = TrendAnalyzer(window_days=settings.trend_window_days)

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        profile = profile_store.get_profile()
        return {
            "status": "ok",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "content_dir": str(content_dir) if content_dir else None,
            "ingredients_loaded": len(registry.ingredients),
            "routines_loaded": len(registry.routines),
            "logs_stored": log_store.count(),
            "profile_saved": profile is not None,
            "trend_window_days": trend_analyzer.window_days,
        }

    register_terrain_tools(server, profile_store)
    logger.info("Terrain quiz and drift tools registered")

    register_suggestion_tools(server, registry, log_store, profile_store, trend_analyzer)
    logger.info("Suggestion tools registered")

    register_trend_tools(server, log_store, profile_store, trend_analyzer)
    logger.info("Daily log and trend tools registered")

    register_insight_tools(server, registry, log_store, profile_store)
    logger.info("Insight tools registered")

    return server


# Module-level instance for FastMCP discovery ("...app.py:mcp").
# Lazy: only created when this module is loaded directly (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
