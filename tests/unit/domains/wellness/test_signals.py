"""Unit tests for daily log parsing and diagnostic check-in signals."""

from __future__ import annotations

from datetime import date

import pytest

from terrain.domains.wellness.domain_logic.daily_log import DailyLog, DigestiveState
from terrain.domains.wellness.domain_logic.signals import (
    DiagnosticSignals,
    Rule,
    all_matches,
    first_match,
    thermal_mismatch,
    unexpected_thermal,
)
from terrain.domains.wellness.domain_logic.terrain_models import (
    COLD_DEFICIENT,
    NEUTRAL_BALANCED,
    WARM_EXCESS,
)


class TestDailyLogFromDict:
    def test_unknown_vocabulary_dropped(self):
        log = DailyLog.from_dict({
            "date": "2026-03-15",
            "quick_symptoms": ["tired", "itchy"],
            "sleep_quality": "dreamt_of_sheep",
            "dominant_emotion": "worried",
            "thermal_feeling": "lukewarm",
            "digestive_state": {"appetite": "ravenous", "stool": "loose"},
        })
        assert log.date == date(2026, 3, 15)
        assert log.quick_symptoms == frozenset({"tired"})
        assert log.sleep_quality is None
        assert log.dominant_emotion == "worried"
        assert log.thermal_feeling is None
        assert log.digestive_state == DigestiveState(appetite="normal", stool="loose")

    def test_mood_rating_clamped(self):
        assert DailyLog.from_dict({"date": "2026-03-15", "mood_rating": 14}).mood_rating == 10
        assert DailyLog.from_dict({"date": "2026-03-15", "mood_rating": 0}).mood_rating == 1

    def test_datetime_string_accepted(self):
        assert DailyLog.from_dict({"date": "2026-03-15T08:30:00"}).date == date(2026, 3, 15)

    def test_round_trip(self):
        data = {
            "date": "2026-03-15",
            "quick_symptoms": ["stressed", "cold"],
            "routine_feedback": [{"routine_id": "box_breathing", "feedback": "better"}],
            "step_count": 4200,
        }
        log = DailyLog.from_dict(data)
        assert DailyLog.from_dict(log.to_dict()) == log
        assert log.has_routine("box_breathing")
        assert not log.has_routine("qi_shaking")

    def test_numeric_text_readings_coerced(self):
        log = DailyLog.from_dict({
            "date": "2026-03-15",
            "sleep_duration_minutes": "420",
            "resting_heart_rate": "62",
            "step_count": "4200",
        })
        assert log.sleep_duration_minutes == 420.0
        assert log.resting_heart_rate == 62
        assert log.step_count == 4200

    def test_non_numeric_reading_rejected(self):
        with pytest.raises(ValueError):
            DailyLog.from_dict({"date": "2026-03-15", "sleep_duration_minutes": "a while"})


class TestActiveSignals:
    def test_neutral_values_inactive(self):
        signals = DiagnosticSignals(
            sleep_quality="fell_asleep_easily",
            dominant_emotion="calm",
            thermal_feeling="comfortable",
            digestive_state=DigestiveState(),
        )
        assert signals.active_sleep is None
        assert signals.active_emotion is None
        assert signals.active_thermal is None
        assert signals.active_appetite is None
        assert signals.active_stool is None
        assert signals.is_empty

    def test_active_values(self):
        signals = DiagnosticSignals(
            sleep_quality="woke_early",
            digestive_state=DigestiveState(appetite="low"),
        )
        assert signals.active_sleep == "woke_early"
        assert signals.active_appetite == "low"
        assert signals.active_stool is None
        assert not signals.is_empty

    def test_from_log(self):
        log = DailyLog(date=date(2026, 3, 15), dominant_emotion="sad")
        assert DiagnosticSignals.from_log(log).active_emotion == "sad"
        assert DiagnosticSignals.from_log(None).is_empty

    def test_from_dict_drops_unknown(self):
        signals = DiagnosticSignals.from_dict({"sleep_quality": "nope", "dominant_emotion": "restless"})
        assert signals.sleep_quality is None
        assert signals.active_emotion == "restless"


class TestThermal:
    @pytest.mark.parametrize("feeling,terrain,expected", [
        ("hot", COLD_DEFICIENT, True),
        ("cool", WARM_EXCESS, True),
        ("cold", COLD_DEFICIENT, False),
        ("hot", NEUTRAL_BALANCED, False),
        ("comfortable", WARM_EXCESS, False),
        (None, COLD_DEFICIENT, False),
    ])
    def test_thermal_mismatch(self, feeling, terrain, expected):
        assert thermal_mismatch(feeling, terrain) is expected

    def test_neutral_terrain_has_no_expected_direction(self):
        assert unexpected_thermal("cold", NEUTRAL_BALANCED)
        assert unexpected_thermal("warm", NEUTRAL_BALANCED)

    def test_expected_direction_is_not_unexpected(self):
        assert not unexpected_thermal("cold", COLD_DEFICIENT)
        assert not unexpected_thermal("hot", WARM_EXCESS)


class TestRules:
    RULES = [
        Rule(lambda n: n > 10, "big", name="big"),
        Rule(lambda n: n > 5, "medium", name="medium"),
        Rule(lambda n: n > 0, "small", name="small"),
    ]

    def test_first_match_in_order(self):
        assert first_match(self.RULES, 12) == "big"
        assert first_match(self.RULES, 7) == "medium"

    def test_default_when_nothing_matches(self):
        assert first_match(self.RULES, -1) is None
        assert first_match(self.RULES, -1, default="none") == "none"

    def test_all_matches(self):
        assert all_matches(self.RULES, 7) == ["medium", "small"]
