"""Shared input handling for the wellness MCP tools."""

from __future__ import annotations

import json
from datetime import date
from typing import Any

from terrain.domains.wellness.domain_logic.daily_log import DailyLog
from terrain.domains.wellness.domain_logic.terrain_models import (
    MODIFIERS,
    TERRAIN_TYPES,
    normalize_modifier,
)
from terrain.domains.wellness.domain_logic.trend_analyzer import TrendAnalyzer
from terrain.domains.wellness.stores import DailyLogStore, ProfileStore


class InvalidInput(ValueError):
    """A tool argument is outside its vocabulary."""

    def __init__(self, message: str, **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_json(self) -> str:
        return invalid_input(self.message, **self.extra)


def invalid_input(message: str, **extra: Any) -> str:
    return json.dumps({"status": "invalid_input", "message": message, **extra})


def parse_day(value: str) -> date:
    """ISO date string, or today when empty."""
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidInput(f"Invalid date {value!r}; expected YYYY-MM-DD") from exc


def resolve_terrain(
    profile_store: ProfileStore, terrain_type: str = "", modifier: str = ""
) -> tuple[str, str]:
    """Explicit arguments win; otherwise the saved profile supplies the terrain."""
    if terrain_type:
        if terrain_type not in TERRAIN_TYPES:
            raise InvalidInput(
                f"Unknown terrain type {terrain_type!r}", valid=sorted(TERRAIN_TYPES)
            )
        if modifier and modifier not in MODIFIERS:
            raise InvalidInput(f"Unknown modifier {modifier!r}")
        return terrain_type, normalize_modifier(modifier)

    profile = profile_store.get_profile()
    if profile is None:
        raise InvalidInput("No terrain profile saved; run classify_terrain or pass terrain_type")
    return profile.terrain_type, normalize_modifier(modifier or profile.modifier)


def check_vocabulary(name: str, values: list[str], allowed: list[str] | frozenset[str]) -> None:
    unknown = sorted(set(values) - set(allowed))
    if unknown:
        raise InvalidInput(f"Unknown {name}: {', '.join(unknown)}")


def window_logs(
    log_store: DailyLogStore, trend_analyzer: TrendAnalyzer, day: date
) -> list[DailyLog]:
    """Logs inside the analyzer's trailing window ending on ``day``."""
    # The analyzer's window includes both endpoints.
    return log_store.recent_logs(trend_analyzer.window_days + 1, day)
