"""Stores — where daily logs and the saved terrain profile come from."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Protocol, runtime_checkable

from terrain.domains.wellness.domain_logic.daily_log import DailyLog
from terrain.domains.wellness.domain_logic.terrain_models import normalize_modifier

ALCOHOL_FREQUENCIES = ["never", "occasional", "weekly", "daily"]
SMOKING_STATUSES = ["never", "former", "occasional", "regular"]


@dataclass(frozen=True)
class TerrainProfile:
    """The user's saved classification plus the preferences that shape suggestions."""

    terrain_type: str
    modifier: str = "none"
    goals: frozenset[str] = field(default_factory=frozenset)
    avoid_tags: frozenset[str] = field(default_factory=frozenset)
    cabinet_ids: frozenset[str] = field(default_factory=frozenset)
    alcohol_frequency: str | None = None
    smoking_status: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TerrainProfile:
        return cls(
            terrain_type=data["terrain_type"],
            modifier=normalize_modifier(data.get("modifier")),
            goals=frozenset(data.get("goals", [])),
            avoid_tags=frozenset(data.get("avoid_tags", [])),
            cabinet_ids=frozenset(data.get("cabinet_ids", [])),
            alcohol_frequency=data.get("alcohol_frequency"),
            smoking_status=data.get("smoking_status"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "terrain_type": self.terrain_type,
            "modifier": self.modifier,
            "goals": sorted(self.goals),
            "avoid_tags": sorted(self.avoid_tags),
            "cabinet_ids": sorted(self.cabinet_ids),
            "alcohol_frequency": self.alcohol_frequency,
            "smoking_status": self.smoking_status,
        }


@runtime_checkable
class DailyLogStore(Protocol):
    """Read/write access to daily logs, one per calendar day.

    The engine only ever reads an ordered slice; writes come from the
    record tool.
    """

    def save_log(self, log: DailyLog) -> None:
        """Insert or replace the log for ``log.date``."""
        ...

    def get_log(self, day: date) -> DailyLog | None:
        ...

    def recent_logs(self, days: int, today: date | None = None) -> list[DailyLog]:
        """Logs in the trailing ``days`` window ending today, oldest first."""
        ...

    def count(self) -> int:
        ...


@runtime_checkable
class ProfileStore(Protocol):
    """The currently persisted terrain profile."""

    def get_profile(self) -> TerrainProfile | None:
        ...

    def save_profile(self, profile: TerrainProfile) -> None:
        ...
