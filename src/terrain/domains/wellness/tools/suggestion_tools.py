"""MCP tools for quick-need suggestions.

A suggestion blends the saved terrain profile, today's daily log (symptoms,
check-in signals and completed routines) and routine effectiveness from
recent logs. Time of day and season always come from the caller.
"""

from __future__ import annotations

import json
import logging

from fastmcp import Context, FastMCP

from terrain.domains.wellness.content.registry import ContentRegistry
from terrain.domains.wellness.domain_logic.candidate_scorer import ordered_needs as rank_needs
from terrain.domains.wellness.domain_logic.candidate_scorer import suggest
from terrain.domains.wellness.domain_logic.daily_log import QUICK_SYMPTOMS
from terrain.domains.wellness.domain_logic.insight_composer import generate_why_for_you
from terrain.domains.wellness.domain_logic.signals import DiagnosticSignals
from terrain.domains.wellness.domain_logic.suggestion_models import (
    NEEDS,
    SEASON_DISPLAY_NAMES,
    TAGS,
    TIMES_OF_DAY,
    season_for_month,
    time_of_day_for_hour,
)
from terrain.domains.wellness.domain_logic.trend_analyzer import TrendAnalyzer
from terrain.domains.wellness.stores import DailyLogStore, ProfileStore
from terrain.domains.wellness.tools.context import (
    InvalidInput,
    check_vocabulary,
    invalid_input,
    parse_day,
    resolve_terrain,
    window_logs,
)

logger = logging.getLogger(__name__)


def register_suggestion_tools(
    mcp: FastMCP,
    content_registry: ContentRegistry,
    log_store: DailyLogStore,
    profile_store: ProfileStore,
    trend_analyzer: TrendAnalyzer,
) -> None:
    """Register suggestion tools on the MCP server."""

    @mcp.tool
    async def suggest_quick_fix(
        ctx: Context,
        need: str,
        time_of_day: str = "",
        hour: int | None = None,
        season: str = "",
        month: int | None = None,
        symptoms: list[str] | None = None,
        avoid_tags: list[str] | None = None,
        terrain_type: str = "",
        modifier: str = "",
        today: str = "",
    ) -> str:
        """Best ingredient or routine for a quick need right now.

        Args:
            need: One of energy, calm, digestion, warmth, cooling, focus.
            time_of_day: morning, afternoon, evening or night.
            hour: Local hour (0-23); used when time_of_day is not given.
            season: spring, summer, late_summer, autumn or winter.
            month: Calendar month (1-12); picks the season when season is not given.
            symptoms: Symptoms to score against. Defaults to today's log.
            avoid_tags: Tags to penalize, added to the profile's avoid list.
            terrain_type: Terrain type id. Defaults to the saved profile.
            modifier: Modifier id. Defaults to the saved profile.
            today: ISO date of "today" (defaults to the server's date).
        """
        if need not in NEEDS:
            return invalid_input(f"Unknown need {need!r}", valid=list(NEEDS))
        if time_of_day and time_of_day not in TIMES_OF_DAY:
            return invalid_input(f"Unknown time of day {time_of_day!r}", valid=TIMES_OF_DAY)
        if hour is not None and not 0 <= hour <= 23:
            return invalid_input("hour must be between 0 and 23")
        if season and season not in SEASON_DISPLAY_NAMES:
            return invalid_input(f"Unknown season {season!r}", valid=list(SEASON_DISPLAY_NAMES))
        if month is not None and not 1 <= month <= 12:
            return invalid_input("month must be between 1 and 12")

        try:
            terrain, mod = resolve_terrain(profile_store, terrain_type, modifier)
            day = parse_day(today)
            if symptoms is not None:
                check_vocabulary("symptoms", symptoms, QUICK_SYMPTOMS)
            check_vocabulary("tags", avoid_tags or [], TAGS)
        except InvalidInput as exc:
            return exc.to_json()

        if not season and month is not None:
            season = season_for_month(month)
        if not time_of_day and hour is not None:
            time_of_day = time_of_day_for_hour(hour)

        profile = profile_store.get_profile()
        todays_log = log_store.get_log(day)
        if symptoms is None:
            symptoms = sorted(todays_log.quick_symptoms) if todays_log else []

        recent = window_logs(log_store, trend_analyzer, day)
        effectiveness = {}
        for routine in content_registry.routines:
            score = trend_analyzer.compute_routine_effectiveness(recent, routine.id)
            if score is not None:
                effectiveness[routine.id] = score

        suggestion = suggest(
            need,
            terrain,
            mod,
            symptoms,
            time_of_day or None,
            content_registry.ingredients,
            content_registry.routines,
            avoid_tags=set(avoid_tags or []) | (profile.avoid_tags if profile else frozenset()),
            season=season or None,
            completed_ids=todays_log.completed_routine_ids if todays_log else (),
            cabinet_ids=profile.cabinet_ids if profile else (),
            user_goals=profile.goals if profile else (),
            routine_effectiveness=effectiveness,
            signals=DiagnosticSignals.from_log(todays_log),
        )

        why = None
        if suggestion.source_id:
            candidate = content_registry.get(suggestion.source_id)
            why = generate_why_for_you(candidate.tags, terrain, mod, kind=candidate.kind)

        logger.info("Quick fix for %s: %s", need, suggestion.source_id or "fallback")
        return json.dumps({
            "status": "ok",
            "need": need,
            "terrain_type": terrain,
            "modifier": mod,
            "time_of_day": time_of_day or None,
            "suggestion": suggestion.to_dict(),
            "why_for_you": why,
        })

    @mcp.tool
    async def ordered_needs(ctx: Context, symptoms: list[str] | None = None, today: str = "") -> str:
        """Quick needs ordered by relevance to symptoms (default: today's log).

        Args:
            symptoms: Symptoms to rank against.
            today: ISO date used to look up the log when symptoms are omitted.
        """
        try:
            if symptoms is None:
                log = log_store.get_log(parse_day(today))
                symptoms = sorted(log.quick_symptoms) if log else []
            check_vocabulary("symptoms", symptoms, QUICK_SYMPTOMS)
        except InvalidInput as exc:
            return exc.to_json()

        return json.dumps({
            "status": "ok",
            "symptoms": symptoms,
            "needs": [
                {"id": need_id, "display_name": NEEDS[need_id].display_name}
                for need_id in rank_needs(symptoms)
            ],
        })
