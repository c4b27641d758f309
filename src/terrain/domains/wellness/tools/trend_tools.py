"""MCP tools for daily logs and the trends computed from them."""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any

from fastmcp import Context, FastMCP

from terrain.domains.wellness.domain_logic.daily_log import DailyLog
from terrain.domains.wellness.domain_logic.trend_analyzer import TrendAnalyzer
from terrain.domains.wellness.domain_logic.trend_tables import CATEGORIES
from terrain.domains.wellness.stores import DailyLogStore, ProfileStore
from terrain.domains.wellness.tools.context import (
    InvalidInput,
    invalid_input,
    parse_day,
    resolve_terrain,
    window_logs,
)

logger = logging.getLogger(__name__)


def register_trend_tools(
    mcp: FastMCP,
    log_store: DailyLogStore,
    profile_store: ProfileStore,
    trend_analyzer: TrendAnalyzer,
) -> None:
    """Register daily log and trend tools on the MCP server."""

    @mcp.tool
    async def record_daily_log(ctx: Context, log: dict[str, Any]) -> str:
        """Save today's (or a given day's) check-in, replacing any existing log for that date.

        Args:
            log: Daily log fields. ``date`` (YYYY-MM-DD) defaults to today; other
                fields include quick_symptoms, energy_level, mood_rating,
                sleep_quality, thermal_feeling, dominant_emotion, digestive_state,
                routine_feedback, completed_routine_ids, step_count and
                weather_condition. Unknown vocabulary is dropped.
        """
        data = dict(log)
        data.setdefault("date", date.today().isoformat())
        try:
            parsed = DailyLog.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            return invalid_input(f"Malformed daily log: {exc}")

        log_store.save_log(parsed)
        logger.info("Daily log recorded for %s", parsed.date)
        return json.dumps({"status": "saved", "log": parsed.to_dict(), "logs_stored": log_store.count()})

    @mcp.tool
    async def terrain_trends(ctx: Context, today: str = "", terrain_type: str = "", modifier: str = "") -> str:
        """Fourteen-day trends per category, ranked for the user's terrain.

        Without a saved profile or explicit terrain the trends come back in
        the default category order without terrain notes.

        Args:
            today: ISO date ending the window (defaults to today).
            terrain_type: Terrain type id. Defaults to the saved profile.
            modifier: Modifier id. Defaults to the saved profile.
        """
        try:
            day = parse_day(today)
        except InvalidInput as exc:
            return exc.to_json()
        logs = window_logs(log_store, trend_analyzer, day)

        try:
            terrain, mod = resolve_terrain(profile_store, terrain_type, modifier)
        except InvalidInput as exc:
            if terrain_type:
                return exc.to_json()
            trends = trend_analyzer.compute_trends(logs, day)
            return json.dumps({
                "status": "ok" if trends else "insufficient_data",
                "annotated": False,
                "trends": [t.to_dict() for t in trends],
            })

        annotated = trend_analyzer.prioritize_trends(logs, terrain, mod, day)
        return json.dumps({
            "status": "ok" if annotated else "insufficient_data",
            "annotated": True,
            "terrain_type": terrain,
            "modifier": mod,
            "trends": [a.to_dict() for a in annotated],
            "activity": trend_analyzer.compute_activity_minutes(logs, day).to_dict(),
        })

    @mcp.tool
    async def healthy_zone(ctx: Context, category: str, terrain_type: str = "") -> str:
        """Terrain-adjusted healthy range for a trend category.

        Args:
            category: Trend category id (e.g., sleep, mood, digestion).
            terrain_type: Terrain type id. Defaults to the saved profile.
        """
        if category not in CATEGORIES:
            return invalid_input(f"Unknown category {category!r}", valid=CATEGORIES)
        try:
            terrain, _ = resolve_terrain(profile_store, terrain_type)
        except InvalidInput as exc:
            return exc.to_json()
        zone = trend_analyzer.healthy_zone(category, terrain)
        return json.dumps({"status": "ok", "terrain_type": terrain, **zone.to_dict()})

    @mcp.tool
    async def terrain_pulse_insight(ctx: Context, today: str = "") -> str:
        """One headline insight from recent trends: a decline, an improvement, or steady.

        Args:
            today: ISO date ending the window (defaults to today).
        """
        try:
            day = parse_day(today)
            terrain, mod = resolve_terrain(profile_store)
        except InvalidInput as exc:
            return exc.to_json()
        insight = trend_analyzer.generate_terrain_pulse(window_logs(log_store, trend_analyzer, day), terrain, mod, day)
        return json.dumps({"status": "ok", **insight.to_dict()})

    @mcp.tool
    async def daily_log_drift(ctx: Context, today: str = "") -> str:
        """Check recent thermal feelings and emotions against the saved terrain.

        Args:
            today: ISO date ending the window (defaults to today).
        """
        try:
            day = parse_day(today)
            terrain, mod = resolve_terrain(profile_store)
        except InvalidInput as exc:
            return exc.to_json()
        drift = trend_analyzer.detect_daily_log_drift(window_logs(log_store, trend_analyzer, day), terrain, mod, day)
        return json.dumps({"status": "ok", **drift.to_dict()})

    @mcp.tool
    async def routine_effectiveness(ctx: Context, routine_id: str, today: str = "") -> str:
        """How well a routine seems to work, from -1 (worse) to 1 (better).

        Args:
            routine_id: Routine id as it appears in routine feedback.
            today: ISO date ending the window (defaults to today).
        """
        try:
            day = parse_day(today)
        except InvalidInput as exc:
            return exc.to_json()
        score = trend_analyzer.compute_routine_effectiveness(window_logs(log_store, trend_analyzer, day), routine_id)
        return json.dumps({
            "status": "ok" if score is not None else "insufficient_data",
            "routine_id": routine_id,
            "effectiveness": score,
        })
