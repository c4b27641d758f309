"""Tests for the TrendAnalyzer — rolling trends from daily logs."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from terrain.domains.wellness.domain_logic.daily_log import DailyLog
from terrain.domains.wellness.domain_logic.terrain_models import (
    COLD_DEFICIENT,
    MODIFIER_SHEN,
    MODIFIER_STAGNATION,
    NEUTRAL_BALANCED,
    WARM_EXCESS,
)
from terrain.domains.wellness.domain_logic.trend_analyzer import (
    DECLINING,
    IMPROVING,
    NEUTRAL_RATE,
    STABLE,
    TrendAnalyzer,
)
from terrain.domains.wellness.domain_logic.trend_tables import CATEGORIES

TODAY = date(2026, 3, 15)

# Days ago that fall in the earlier and later half of the 14-day window.
EARLY_DAYS = range(8, 14)
LATE_DAYS = range(0, 7)


def _log(days_ago: int, **fields) -> DailyLog:
    """Create a daily log dated ``days_ago`` days before TODAY."""
    return DailyLog.from_dict({"date": (TODAY - timedelta(days=days_ago)).isoformat(), **fields})


def _split(early: dict, late: dict) -> list[DailyLog]:
    return [_log(d, **early) for d in EARLY_DAYS] + [_log(d, **late) for d in LATE_DAYS]


def _by_category(records) -> dict:
    return {r.category: r for r in records}


@pytest.fixture
def analyzer() -> TrendAnalyzer:
    return TrendAnalyzer()


class TestComputeTrends:
    def test_fewer_than_three_days_returns_empty(self, analyzer):
        assert analyzer.compute_trends([_log(0), _log(1)], TODAY) == []

    def test_repeat_logs_on_one_day_count_once(self, analyzer):
        assert analyzer.compute_trends([_log(0), _log(0), _log(1)], TODAY) == []

    def test_logs_outside_window_ignored(self, analyzer):
        logs = [_log(0), _log(1), _log(30)]
        assert analyzer.compute_trends(logs, TODAY) == []

    def test_seven_days_returns_every_category(self, analyzer):
        records = analyzer.compute_trends([_log(d) for d in range(7)], TODAY)
        assert [r.category for r in records] == CATEGORIES
        for record in records:
            assert len(record.daily_rates) == analyzer.window_days

    def test_missing_days_sit_at_neutral_midpoint(self, analyzer):
        records = _by_category(analyzer.compute_trends([_log(d) for d in range(3)], TODAY))
        rates = records["stress"].daily_rates
        assert rates[0] == NEUTRAL_RATE
        assert rates[-1] == 1.0

    def test_more_symptoms_later_is_declining(self, analyzer):
        logs = _split({}, {"quick_symptoms": ["stressed"]})
        records = _by_category(analyzer.compute_trends(logs, TODAY))
        assert records["stress"].direction == DECLINING

    def test_fewer_symptoms_later_is_improving(self, analyzer):
        logs = _split({"quick_symptoms": ["headache"]}, {})
        records = _by_category(analyzer.compute_trends(logs, TODAY))
        assert records["headache"].direction == IMPROVING

    def test_mood_polarity(self, analyzer):
        records = _by_category(analyzer.compute_trends(
            _split({"mood_rating": 3}, {"mood_rating": 8}), TODAY
        ))
        assert records["mood"].direction == IMPROVING

    def test_lower_resting_hr_is_improving(self, analyzer):
        records = _by_category(analyzer.compute_trends(
            _split({"resting_heart_rate": 75}, {"resting_heart_rate": 65}), TODAY
        ))
        assert records["resting_hr"].direction == IMPROVING

    def test_sleep_quality_preferred_over_symptom(self, analyzer):
        logs = _split(
            {"sleep_quality": "fell_asleep_easily"},
            {"sleep_quality": "hard_to_fall_asleep"},
        )
        records = _by_category(analyzer.compute_trends(logs, TODAY))
        assert records["sleep"].direction == DECLINING

    def test_unchanged_is_stable(self, analyzer):
        logs = _split({"quick_symptoms": ["stiff"]}, {"quick_symptoms": ["stiff"]})
        records = _by_category(analyzer.compute_trends(logs, TODAY))
        assert records["stiffness"].direction == STABLE


class TestPrioritizeTrends:
    def test_sorted_by_terrain_priority(self, analyzer):
        annotated = analyzer.prioritize_trends([_log(d) for d in range(7)], WARM_EXCESS, today=TODAY)
        assert annotated[0].category == "stress"
        assert [a.priority for a in annotated] == sorted(a.priority for a in annotated)

    def test_modifier_adds_watch_for(self, analyzer):
        logs = [_log(d) for d in range(7)]
        plain = _by_category(analyzer.prioritize_trends(logs, WARM_EXCESS, today=TODAY))
        shen = _by_category(analyzer.prioritize_trends(logs, WARM_EXCESS, MODIFIER_SHEN, TODAY))
        assert not plain["stress"].is_watch_for
        assert shen["stress"].is_watch_for
        assert shen["sleep"].is_watch_for

    def test_declining_note_is_terrain_specific(self, analyzer):
        logs = _split({}, {"quick_symptoms": ["stressed"]})
        annotated = _by_category(analyzer.prioritize_trends(logs, WARM_EXCESS, today=TODAY))
        assert annotated["stress"].terrain_note.startswith("Warm types feel stress")
        assert annotated["mood"].terrain_note == "Holding steady."

    def test_insufficient_data_returns_empty(self, analyzer):
        assert analyzer.prioritize_trends([], COLD_DEFICIENT, today=TODAY) == []


class TestHealthyZone:
    def test_terrain_specific_range(self, analyzer):
        zone = analyzer.healthy_zone("energy", COLD_DEFICIENT)
        assert (zone.low, zone.high) == (0.4, 0.7)
        assert zone.label == "Your healthy range"

    def test_default_range(self, analyzer):
        zone = analyzer.healthy_zone("mood", NEUTRAL_BALANCED)
        assert (zone.low, zone.high) == (0.5, 0.9)
        assert zone.label == "Healthy range"
        assert zone.contains(0.7)


class TestRoutineEffectiveness:
    def test_needs_five_logs(self, analyzer):
        logs = [_log(d) for d in range(4)]
        assert analyzer.compute_routine_effectiveness(logs, "box_breathing") is None

    def test_needs_days_with_and_without_routine(self, analyzer):
        feedback = [{"routine_id": "box_breathing", "feedback": "better"}]
        logs = [_log(d, routine_feedback=feedback) for d in range(6)]
        assert analyzer.compute_routine_effectiveness(logs, "box_breathing") is None

    def test_better_feedback_and_fewer_symptoms_scores_high(self, analyzer):
        feedback = [{"routine_id": "box_breathing", "feedback": "better"}]
        logs = [_log(d, routine_feedback=feedback) for d in range(3)]
        logs += [_log(d, quick_symptoms=["stressed", "tired", "headache"]) for d in range(3, 6)]
        assert analyzer.compute_routine_effectiveness(logs, "box_breathing") == pytest.approx(1.0)

    def test_can_score_negative(self, analyzer):
        feedback = [{"routine_id": "box_breathing", "feedback": "same"}]
        logs = [
            _log(d, routine_feedback=feedback, quick_symptoms=["stressed", "tired", "headache"])
            for d in range(3)
        ]
        logs += [_log(d) for d in range(3, 6)]
        assert analyzer.compute_routine_effectiveness(logs, "box_breathing") == pytest.approx(-1.0)


class TestActivityMinutes:
    def test_routine_and_movement_split(self, analyzer):
        feedback = [
            {"routine_id": "box_breathing", "actual_duration_seconds": 600, "activity_type": "routine"},
            {"routine_id": "walk", "actual_duration_seconds": 1200, "activity_type": "movement"},
            {"routine_id": "untyped", "actual_duration_seconds": 300},
            {"routine_id": "untimed", "activity_type": "movement"},
        ]
        minutes = analyzer.compute_activity_minutes([_log(0, routine_feedback=feedback)], TODAY)
        assert len(minutes.routine_minutes) == analyzer.window_days
        assert minutes.routine_minutes[-1] == 15.0
        assert minutes.movement_minutes[-1] == 20.0
        assert minutes.total_routine_minutes == 15.0

    def test_oldest_day_is_index_zero(self, analyzer):
        feedback = [{"routine_id": "walk", "actual_duration_seconds": 60, "activity_type": "movement"}]
        minutes = analyzer.compute_activity_minutes([_log(13, routine_feedback=feedback)], TODAY)
        assert minutes.movement_minutes[0] == 1.0


class TestTerrainPulse:
    def test_decline_takes_precedence(self, analyzer):
        logs = _split({"quick_symptoms": ["headache"]}, {"quick_symptoms": ["stressed"]})
        insight = analyzer.generate_terrain_pulse(logs, WARM_EXCESS, today=TODAY)
        assert insight.headline == "Stress is building up"
        assert insight.accent_category == "stress"
        assert not insight.is_urgent

    def test_watched_decline_is_urgent(self, analyzer):
        logs = _split({}, {"quick_symptoms": ["stressed"]})
        insight = analyzer.generate_terrain_pulse(logs, WARM_EXCESS, MODIFIER_SHEN, TODAY)
        assert insight.is_urgent

    def test_improvement_when_nothing_declines(self, analyzer):
        logs = _split({"quick_symptoms": ["headache"]}, {})
        insight = analyzer.generate_terrain_pulse(logs, COLD_DEFICIENT, today=TODAY)
        assert insight.headline == "Headache is trending well"

    def test_steady_without_movement(self, analyzer):
        insight = analyzer.generate_terrain_pulse([_log(d) for d in range(7)], COLD_DEFICIENT, today=TODAY)
        assert insight.headline == "Holding steady"
        assert insight.accent_category is None

    def test_decline_without_specific_text_names_terrain_and_modifier(self, analyzer):
        logs = _split({}, {"quick_symptoms": ["cramps"]})
        insight = analyzer.generate_terrain_pulse(logs, NEUTRAL_BALANCED, MODIFIER_STAGNATION, TODAY)
        assert insight.headline == "Cramps deserves attention"
        assert insight.body == (
            "Your cramps trend has been declining. For Steady Core types with a "
            "Stagnation (Stuck) modifier, this is worth addressing now."
        )

    def test_improving_text_fills_nickname(self, analyzer):
        logs = _split({"quick_symptoms": ["poor_sleep"]}, {})
        insight = analyzer.generate_terrain_pulse(logs, WARM_EXCESS, today=TODAY)
        assert insight.headline == "Your sleep is improving"
        assert insight.body.startswith("For Overclocked types, better sleep")

    def test_steady_fallback_mentions_modifier(self, analyzer):
        logs = [_log(d) for d in range(7)]
        insight = analyzer.generate_terrain_pulse(logs, NEUTRAL_BALANCED, MODIFIER_SHEN, TODAY)
        assert insight.headline == "In your rhythm"

        insight = analyzer.generate_terrain_pulse(logs, "warm_balanced_high_flame", MODIFIER_SHEN, TODAY)
        assert insight.headline == "All systems steady"
        assert "High Flame pattern is well-supported. Your Shen (Restless) modifier" in insight.body


class TestDailyLogDrift:
    def test_feeling_hot_on_cold_terrain_drifts_warmer(self, analyzer):
        logs = [_log(d, thermal_feeling="hot") for d in range(7)]
        drift = analyzer.detect_daily_log_drift(logs, COLD_DEFICIENT, today=TODAY)
        assert drift.has_thermal_drift
        assert "warmer than your Low Flame pattern" in drift.thermal_summary

    def test_too_few_readings_no_drift(self, analyzer):
        logs = [_log(d, thermal_feeling="hot") for d in range(6)]
        assert not analyzer.detect_daily_log_drift(logs, COLD_DEFICIENT, today=TODAY).has_drift

    def test_expected_feeling_no_drift(self, analyzer):
        logs = [_log(d, thermal_feeling="cold") for d in range(10)]
        assert not analyzer.detect_daily_log_drift(logs, COLD_DEFICIENT, today=TODAY).has_drift

    def test_recurring_emotion_drifts(self, analyzer):
        logs = [_log(d, dominant_emotion="irritable") for d in range(8)]
        drift = analyzer.detect_daily_log_drift(logs, NEUTRAL_BALANCED, today=TODAY)
        assert drift.has_emotion_drift
        assert drift.dominant_emotion == "irritable"
        assert "Liver" in drift.emotion_summary

    def test_emotion_explained_by_modifier_is_not_drift(self, analyzer):
        logs = [_log(d, dominant_emotion="irritable") for d in range(8)]
        drift = analyzer.detect_daily_log_drift(logs, NEUTRAL_BALANCED, MODIFIER_STAGNATION, TODAY)
        assert not drift.has_emotion_drift
        assert drift.dominant_emotion_count == 8

    def test_calm_never_counts(self, analyzer):
        logs = [_log(d, dominant_emotion="calm") for d in range(10)]
        drift = analyzer.detect_daily_log_drift(logs, NEUTRAL_BALANCED, today=TODAY)
        assert drift.dominant_emotion is None
