"""Daily log models — one self-report per calendar day.

The engine only reads logs. Field values are plain snake-case strings so logs
round-trip through JSON without translation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any


# ---------------------------------------------------------------------------
# Vocabularies
# ---------------------------------------------------------------------------

SYMPTOM_COLD = "cold"
SYMPTOM_BLOATING = "bloating"
SYMPTOM_CRAMPS = "cramps"
SYMPTOM_STRESSED = "stressed"
SYMPTOM_TIRED = "tired"
SYMPTOM_HEADACHE = "headache"
SYMPTOM_POOR_SLEEP = "poor_sleep"
SYMPTOM_STIFF = "stiff"

QUICK_SYMPTOMS = [
    SYMPTOM_COLD,
    SYMPTOM_BLOATING,
    SYMPTOM_CRAMPS,
    SYMPTOM_STRESSED,
    SYMPTOM_TIRED,
    SYMPTOM_HEADACHE,
    SYMPTOM_POOR_SLEEP,
    SYMPTOM_STIFF,
]

SYMPTOM_DISPLAY_NAMES = {
    SYMPTOM_COLD: "cold",
    SYMPTOM_BLOATING: "bloating",
    SYMPTOM_CRAMPS: "cramps",
    SYMPTOM_STRESSED: "stressed",
    SYMPTOM_TIRED: "tired",
    SYMPTOM_HEADACHE: "headache",
    SYMPTOM_POOR_SLEEP: "poor sleep",
    SYMPTOM_STIFF: "stiff",
}

ENERGY_LEVELS = ["low", "normal", "wired"]

SLEEP_QUALITIES = [
    "fell_asleep_easily",
    "hard_to_fall_asleep",
    "woke_middle_of_night",
    "woke_early",
    "unrefreshing",
]

DOMINANT_EMOTIONS = ["calm", "irritable", "worried", "anxious", "sad", "restless", "overwhelmed"]

THERMAL_FEELINGS = ["cold", "cool", "comfortable", "warm", "hot"]

# Numeric scale used when averaging thermal check-ins.
THERMAL_VALUES = {"cold": -2, "cool": -1, "comfortable": 0, "warm": 1, "hot": 2}

APPETITE_LEVELS = ["none", "low", "normal", "strong"]
STOOL_QUALITIES = ["normal", "loose", "constipated", "sticky", "mixed"]

FEEDBACK_BETTER = "better"
FEEDBACK_SAME = "same"
FEEDBACK_NOT_SURE = "not_sure"

ACTIVITY_ROUTINE = "routine"
ACTIVITY_MOVEMENT = "movement"


def _str_or_none(value: Any, allowed: list[str]) -> str | None:
    """Return value if it is a known vocabulary entry, else None."""
    if isinstance(value, str) and value in allowed:
        return value
    return None


def _float_or_none(value: Any) -> float | None:
    """Coerce a numeric reading; non-numeric text raises ValueError."""
    return float(value) if value is not None else None


def _int_or_none(value: Any) -> int | None:
    return int(float(value)) if value is not None else None


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value)).date()


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DigestiveState:
    """Appetite and stool check-in for one day."""

    appetite: str = "normal"
    stool: str = "normal"

    @property
    def is_normal(self) -> bool:
        return self.appetite == "normal" and self.stool == "normal"

    @classmethod
    def from_dict(cls, data: dict) -> DigestiveState:
        return cls(
            appetite=_str_or_none(data.get("appetite"), APPETITE_LEVELS) or "normal",
            stool=_str_or_none(data.get("stool"), STOOL_QUALITIES) or "normal",
        )


@dataclass(frozen=True)
class RoutineFeedback:
    """Post-routine feedback for a routine or movement."""

    routine_id: str
    feedback: str = FEEDBACK_NOT_SURE
    actual_duration_seconds: int | None = None
    activity_type: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> RoutineFeedback:
        return cls(
            routine_id=data["routine_id"],
            feedback=data.get("feedback", FEEDBACK_NOT_SURE),
            actual_duration_seconds=_int_or_none(data.get("actual_duration_seconds")),
            activity_type=data.get("activity_type"),
        )


@dataclass(frozen=True)
class DailyLog:
    """One day of self-reported (and optionally device-sourced) signals."""

    date: date
    energy_level: str | None = None
    mood_rating: int | None = None
    sleep_quality: str | None = None
    quick_symptoms: frozenset[str] = field(default_factory=frozenset)
    routine_feedback: tuple[RoutineFeedback, ...] = ()
    completed_routine_ids: tuple[str, ...] = ()
    thermal_feeling: str | None = None
    dominant_emotion: str | None = None
    digestive_state: DigestiveState | None = None
    sleep_duration_minutes: float | None = None
    resting_heart_rate: int | None = None
    step_count: int | None = None
    weather_condition: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> DailyLog:
        """Parse a log from a JSON-style dict. Unknown vocabulary is dropped."""
        digestive = data.get("digestive_state")
        mood = data.get("mood_rating")
        return cls(
            date=_parse_date(data["date"]),
            energy_level=_str_or_none(data.get("energy_level"), ENERGY_LEVELS),
            mood_rating=max(1, min(10, int(mood))) if mood is not None else None,
            sleep_quality=_str_or_none(data.get("sleep_quality"), SLEEP_QUALITIES),
            quick_symptoms=frozenset(
                s for s in data.get("quick_symptoms", []) if s in QUICK_SYMPTOMS
            ),
            routine_feedback=tuple(
                RoutineFeedback.from_dict(entry) for entry in data.get("routine_feedback", [])
            ),
            completed_routine_ids=tuple(data.get("completed_routine_ids", [])),
            thermal_feeling=_str_or_none(data.get("thermal_feeling"), THERMAL_FEELINGS),
            dominant_emotion=_str_or_none(data.get("dominant_emotion"), DOMINANT_EMOTIONS),
            digestive_state=DigestiveState.from_dict(digestive) if digestive else None,
            sleep_duration_minutes=_float_or_none(data.get("sleep_duration_minutes")),
            resting_heart_rate=_int_or_none(data.get("resting_heart_rate")),
            step_count=_int_or_none(data.get("step_count")),
            weather_condition=data.get("weather_condition"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "energy_level": self.energy_level,
            "mood_rating": self.mood_rating,
            "sleep_quality": self.sleep_quality,
            "quick_symptoms": sorted(self.quick_symptoms),
            "routine_feedback": [
                {
                    "routine_id": f.routine_id,
                    "feedback": f.feedback,
                    "actual_duration_seconds": f.actual_duration_seconds,
                    "activity_type": f.activity_type,
                }
                for f in self.routine_feedback
            ],
            "completed_routine_ids": list(self.completed_routine_ids),
            "thermal_feeling": self.thermal_feeling,
            "dominant_emotion": self.dominant_emotion,
            "digestive_state": (
                {"appetite": self.digestive_state.appetite, "stool": self.digestive_state.stool}
                if self.digestive_state
                else None
            ),
            "sleep_duration_minutes": self.sleep_duration_minutes,
            "resting_heart_rate": self.resting_heart_rate,
            "step_count": self.step_count,
            "weather_condition": self.weather_condition,
        }

    def has_routine(self, routine_id: str) -> bool:
        return any(f.routine_id == routine_id for f in self.routine_feedback)
