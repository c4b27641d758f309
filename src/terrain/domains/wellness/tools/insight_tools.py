"""MCP tools for home-screen insights and why-for-you explanations."""

from __future__ import annotations

import json
import logging

from fastmcp import Context, FastMCP

from terrain.domains.wellness.content.registry import ContentRegistry
from terrain.domains.wellness.domain_logic.daily_log import QUICK_SYMPTOMS
from terrain.domains.wellness.domain_logic.insight_composer import (
    InsightContext,
    compose_home_insights,
    generate_why_for_you,
)
from terrain.domains.wellness.domain_logic.signals import DiagnosticSignals
from terrain.domains.wellness.domain_logic.suggestion_models import (
    SEASON_DISPLAY_NAMES,
    season_for_month,
)
from terrain.domains.wellness.stores import DailyLogStore, ProfileStore
from terrain.domains.wellness.tools.context import (
    InvalidInput,
    check_vocabulary,
    invalid_input,
    parse_day,
    resolve_terrain,
)

logger = logging.getLogger(__name__)


def register_insight_tools(
    mcp: FastMCP,
    content_registry: ContentRegistry,
    log_store: DailyLogStore,
    profile_store: ProfileStore,
) -> None:
    """Register insight tools on the MCP server."""

    @mcp.tool
    async def home_insights(
        ctx: Context,
        symptoms: list[str] | None = None,
        weather: str = "",
        step_count: int | None = None,
        season: str = "",
        month: int | None = None,
        terrain_type: str = "",
        modifier: str = "",
        today: str = "",
    ) -> str:
        """Headline, do/don't lists, life-area and modifier-area readings for today.

        Symptoms, check-in signals, weather and step count default to
        today's daily log.

        Args:
            symptoms: Reported symptoms (overrides the log).
            weather: Weather condition (cold, hot, humid, rainy, dry, windy).
            step_count: Steps so far today.
            season: Season for the seasonality reading; omitted when empty.
            month: Calendar month (1-12); picks the season when season is not given.
            terrain_type: Terrain type id. Defaults to the saved profile.
            modifier: Modifier id. Defaults to the saved profile.
            today: ISO date of the log to read (defaults to today).
        """
        if season and season not in SEASON_DISPLAY_NAMES:
            return invalid_input(f"Unknown season {season!r}", valid=list(SEASON_DISPLAY_NAMES))
        if month is not None and not 1 <= month <= 12:
            return invalid_input("month must be between 1 and 12")
        if not season and month is not None:
            season = season_for_month(month)
        try:
            terrain, mod = resolve_terrain(profile_store, terrain_type, modifier)
            day = parse_day(today)
            if symptoms is not None:
                check_vocabulary("symptoms", symptoms, QUICK_SYMPTOMS)
        except InvalidInput as exc:
            return exc.to_json()

        log = log_store.get_log(day)
        profile = profile_store.get_profile()
        if symptoms is None:
            symptoms = sorted(log.quick_symptoms) if log else []
        if not weather and log and log.weather_condition:
            weather = log.weather_condition
        if step_count is None and log:
            step_count = log.step_count

        context = InsightContext.build(
            terrain,
            mod,
            symptoms,
            DiagnosticSignals.from_log(log),
            weather=weather or None,
            step_count=step_count,
            season=season or None,
            alcohol_frequency=profile.alcohol_frequency if profile else None,
            smoking_status=profile.smoking_status if profile else None,
        )
        insights = compose_home_insights(context)
        return json.dumps({"status": "ok", "terrain_type": terrain, "modifier": mod, **insights})

    @mcp.tool
    async def why_for_you(
        ctx: Context, candidate_id: str, terrain_type: str = "", modifier: str = ""
    ) -> str:
        """Why a catalog ingredient or routine matters for this terrain.

        Args:
            candidate_id: Ingredient or routine id from the content catalog.
            terrain_type: Terrain type id. Defaults to the saved profile.
            modifier: Modifier id. Defaults to the saved profile.
        """
        candidate = content_registry.get(candidate_id)
        if candidate is None:
            return invalid_input(f"Unknown candidate {candidate_id!r}")
        try:
            terrain, mod = resolve_terrain(profile_store, terrain_type, modifier)
        except InvalidInput as exc:
            return exc.to_json()

        explanation = generate_why_for_you(candidate.tags, terrain, mod, kind=candidate.kind)
        return json.dumps({
            "status": "ok",
            "candidate": candidate.to_dict(),
            "why_for_you": explanation,
        })
