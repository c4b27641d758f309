"""Unit tests for the in-memory daily log and profile stores."""

from __future__ import annotations

from datetime import date, timedelta

from terrain.domains.wellness.domain_logic.daily_log import DailyLog
from terrain.domains.wellness.domain_logic.trend_analyzer import TrendAnalyzer
from terrain.domains.wellness.stores import DailyLogStore, ProfileStore, TerrainProfile
from terrain.domains.wellness.stores.memory import InMemoryDailyLogStore, InMemoryProfileStore
from terrain.domains.wellness.tools.context import window_logs

TODAY = date(2026, 3, 15)


def _log(days_ago: int, **fields) -> DailyLog:
    return DailyLog(date=TODAY - timedelta(days=days_ago), **fields)


class TestDailyLogStore:
    def test_satisfies_protocol(self, log_store):
        assert isinstance(log_store, DailyLogStore)

    def test_recent_logs_window_is_inclusive_of_today(self, log_store):
        for days_ago in (0, 6, 7, 20):
            log_store.save_log(_log(days_ago))
        recent = log_store.recent_logs(7, TODAY)
        assert [log.date for log in recent] == [TODAY - timedelta(days=6), TODAY]

    def test_recent_logs_sorted_oldest_first(self):
        store = InMemoryDailyLogStore([_log(0), _log(3), _log(1)])
        assert [log.date for log in store.recent_logs(14, TODAY)] == [
            TODAY - timedelta(days=3),
            TODAY - timedelta(days=1),
            TODAY,
        ]

    def test_same_date_replaces(self, log_store):
        log_store.save_log(_log(0, mood_rating=3))
        log_store.save_log(_log(0, mood_rating=8))
        assert log_store.count() == 1
        assert log_store.get_log(TODAY).mood_rating == 8

    def test_missing_day_is_none(self, log_store):
        assert log_store.get_log(TODAY) is None


class TestWindowLogs:
    def test_matches_analyzer_window(self, log_store):
        for days_ago in (0, 7, 14, 15):
            log_store.save_log(_log(days_ago))
        analyzer = TrendAnalyzer()

        logs = window_logs(log_store, analyzer, TODAY)

        assert [log.date for log in logs] == [
            TODAY - timedelta(days=14), TODAY - timedelta(days=7), TODAY,
        ]
        assert analyzer.window(logs, TODAY) == logs


class TestProfileStore:
    def test_satisfies_protocol(self, profile_store):
        assert isinstance(profile_store, ProfileStore)

    def test_empty_until_saved(self, profile_store):
        assert profile_store.get_profile() is None
        profile_store.save_profile(TerrainProfile(terrain_type="warm_excess_overclocked"))
        assert profile_store.get_profile().terrain_type == "warm_excess_overclocked"

    def test_seeded_profile(self):
        store = InMemoryProfileStore(TerrainProfile(terrain_type="cold_deficient_low_flame", modifier="shen"))
        assert store.get_profile().modifier == "shen"


class TestTerrainProfile:
    def test_round_trip(self):
        profile = TerrainProfile(
            terrain_type="cold_deficient_low_flame",
            modifier="damp",
            goals=frozenset({"sleep", "energy"}),
            avoid_tags=frozenset({"cooling"}),
            cabinet_ids=frozenset({"ginger"}),
            alcohol_frequency="weekly",
        )
        data = profile.to_dict()
        assert data["goals"] == ["energy", "sleep"]
        assert TerrainProfile.from_dict(data) == profile

    def test_unknown_modifier_normalized(self):
        profile = TerrainProfile.from_dict({"terrain_type": "neutral_balanced_steady_core", "modifier": "sparkly"})
        assert profile.modifier == "none"
