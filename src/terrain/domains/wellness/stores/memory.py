"""In-memory store implementations. Always available, nothing survives a restart."""

from __future__ import annotations

import logging
from datetime import date, timedelta

from terrain.domains.wellness.domain_logic.daily_log import DailyLog
from terrain.domains.wellness.stores import TerrainProfile

logger = logging.getLogger(__name__)


class InMemoryDailyLogStore:
    def __init__(self, logs: list[DailyLog] | None = None) -> None:
        self._logs: dict[date, DailyLog] = {}
        for log in logs or []:
            self.save_log(log)

    def save_log(self, log: DailyLog) -> None:
        replaced = log.date in self._logs
        self._logs[log.date] = log
        logger.debug("%s daily log for %s", "Replaced" if replaced else "Stored", log.date)

    def get_log(self, day: date) -> DailyLog | None:
        return self._logs.get(day)

    def recent_logs(self, days: int, today: date | None = None) -> list[DailyLog]:
        today = today or date.today()
        start = today - timedelta(days=days - 1)
        return [self._logs[d] for d in sorted(self._logs) if start <= d <= today]

    def count(self) -> int:
        return len(self._logs)


class InMemoryProfileStore:
    def __init__(self, profile: TerrainProfile | None = None) -> None:
        self._profile = profile

    def get_profile(self) -> TerrainProfile | None:
        return self._profile

    def save_profile(self, profile: TerrainProfile) -> None:
        self._profile = profile
        logger.debug("Saved terrain profile: %s/%s", profile.terrain_type, profile.modifier)
