"""Suggestion vocabulary: tags, goals, seasons, needs and candidates.

Tag, goal, season and need ids are shared with the content pack and with
stored history, so they are stable snake-case strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from terrain.domains.wellness.domain_logic.daily_log import (
    SYMPTOM_BLOATING,
    SYMPTOM_COLD,
    SYMPTOM_CRAMPS,
    SYMPTOM_HEADACHE,
    SYMPTOM_POOR_SLEEP,
    SYMPTOM_STIFF,
    SYMPTOM_STRESSED,
    SYMPTOM_TIRED,
)
from terrain.domains.wellness.domain_logic.terrain_models import (
    COLD_BALANCED,
    COLD_DEFICIENT,
    MODIFIER_DAMP,
    MODIFIER_DRY,
    MODIFIER_SHEN,
    MODIFIER_STAGNATION,
    NEUTRAL_BALANCED,
    NEUTRAL_DEFICIENT,
    NEUTRAL_EXCESS,
    WARM_BALANCED,
    WARM_DEFICIENT,
    WARM_EXCESS,
)


# ---------------------------------------------------------------------------
# Tags, goals, seasons
# ---------------------------------------------------------------------------

WARMING = "warming"
COOLING = "cooling"
SUPPORTS_DEFICIENCY = "supports_deficiency"
REDUCES_EXCESS = "reduces_excess"
MOVES_QI = "moves_qi"
CALMS_SHEN = "calms_shen"
DRIES_DAMP = "dries_damp"
MOISTENS_DRYNESS = "moistens_dryness"
SUPPORTS_DIGESTION = "supports_digestion"
GENTLE_FOR_ACUTE = "gentle_for_acute"

TAGS = [
    WARMING,
    COOLING,
    SUPPORTS_DEFICIENCY,
    REDUCES_EXCESS,
    MOVES_QI,
    CALMS_SHEN,
    DRIES_DAMP,
    MOISTENS_DRYNESS,
    SUPPORTS_DIGESTION,
    GENTLE_FOR_ACUTE,
]

GOALS = ["sleep", "digestion", "energy", "stress", "skin", "menstrual_comfort"]

SEASONS = ["spring", "summer", "late_summer", "autumn", "winter", "all_year"]

SEASON_DISPLAY_NAMES = {
    "spring": "Spring",
    "summer": "Summer",
    "late_summer": "Late Summer",
    "autumn": "Autumn",
    "winter": "Winter",
}


def season_for_month(month: int) -> str:
    """Five-season calendar: spring 3-5, summer 6-7, late summer 8-9, autumn 10-11."""
    if 3 <= month <= 5:
        return "spring"
    if month in (6, 7):
        return "summer"
    if month in (8, 9):
        return "late_summer"
    if month in (10, 11):
        return "autumn"
    return "winter"


# ---------------------------------------------------------------------------
# Time of day
# ---------------------------------------------------------------------------

TimeOfDay = Literal["morning", "afternoon", "evening", "night"]

TIMES_OF_DAY = ["morning", "afternoon", "evening", "night"]


def time_of_day_for_hour(hour: int) -> TimeOfDay:
    """Bucket a wall-clock hour: morning 5-11, afternoon 12-16, evening 17-21."""
    if 5 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 22:
        return "evening"
    return "night"


TIME_TAGS: dict[str, frozenset[str]] = {
    "morning": frozenset({WARMING, SUPPORTS_DEFICIENCY}),
    "afternoon": frozenset({MOVES_QI, SUPPORTS_DIGESTION}),
    "evening": frozenset({CALMS_SHEN, COOLING}),
    "night": frozenset({CALMS_SHEN}),
}


# ---------------------------------------------------------------------------
# Needs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Fallback:
    title: str
    description: str
    avoid_hours: int | None = None


@dataclass(frozen=True)
class QuickNeed:
    id: str
    display_name: str
    relevant_tags: frozenset[str]
    relevant_goals: frozenset[str]
    fallback: Fallback


NEEDS: dict[str, QuickNeed] = {
    n.id: n
    for n in (
        QuickNeed(
            "energy", "Energy",
            frozenset({SUPPORTS_DEFICIENCY, WARMING}),
            frozenset({"energy"}),
            Fallback(
                "Ginger Honey Tea",
                "A quick warm drink to gently boost your energy without the crash.",
            ),
        ),
        QuickNeed(
            "calm", "Calm",
            frozenset({CALMS_SHEN, MOVES_QI}),
            frozenset({"sleep", "stress"}),
            Fallback(
                "5 Deep Breaths",
                "Box breathing: inhale 4, hold 4, exhale 4, hold 4. Repeat 5 times.",
            ),
        ),
        QuickNeed(
            "digestion", "Digestion",
            frozenset({SUPPORTS_DIGESTION}),
            frozenset({"digestion"}),
            Fallback(
                "Post-Meal Walk",
                "A gentle 10-minute walk aids digestion and prevents sluggishness.",
            ),
        ),
        QuickNeed(
            "warmth", "Warmth",
            frozenset({WARMING}),
            frozenset({"energy"}),
            Fallback(
                "Warm Ginger Tea",
                "Fresh ginger steeped in hot water warms from the inside.",
                avoid_hours=2,
            ),
        ),
        QuickNeed(
            "cooling", "Cooling",
            frozenset({COOLING, MOISTENS_DRYNESS}),
            frozenset({"skin"}),
            Fallback(
                "Cucumber Water",
                "Cool (not ice-cold) cucumber-infused water to gently cool.",
            ),
        ),
        QuickNeed(
            "focus", "Focus",
            frozenset({MOVES_QI, CALMS_SHEN}),
            frozenset({"stress"}),
            Fallback(
                "Peppermint Inhale",
                "Crush fresh mint between fingers and inhale deeply 3 times.",
            ),
        ),
    )
}


# ---------------------------------------------------------------------------
# Tag maps
# ---------------------------------------------------------------------------

TERRAIN_TAGS: dict[str, frozenset[str]] = {
    COLD_DEFICIENT: frozenset({WARMING, SUPPORTS_DEFICIENCY, SUPPORTS_DIGESTION}),
    COLD_BALANCED: frozenset({WARMING, SUPPORTS_DIGESTION}),
    NEUTRAL_DEFICIENT: frozenset({SUPPORTS_DEFICIENCY, SUPPORTS_DIGESTION}),
    NEUTRAL_BALANCED: frozenset({SUPPORTS_DIGESTION, MOVES_QI}),
    NEUTRAL_EXCESS: frozenset({MOVES_QI, CALMS_SHEN, COOLING}),
    WARM_BALANCED: frozenset({COOLING, MOISTENS_DRYNESS}),
    WARM_EXCESS: frozenset({COOLING, CALMS_SHEN}),
    WARM_DEFICIENT: frozenset({MOISTENS_DRYNESS, CALMS_SHEN, SUPPORTS_DEFICIENCY}),
}

MODIFIER_TAGS: dict[str, frozenset[str]] = {
    MODIFIER_SHEN: frozenset({CALMS_SHEN}),
    MODIFIER_STAGNATION: frozenset({MOVES_QI}),
    MODIFIER_DAMP: frozenset({DRIES_DAMP}),
    MODIFIER_DRY: frozenset({MOISTENS_DRYNESS}),
}

SYMPTOM_TAGS: dict[str, frozenset[str]] = {
    SYMPTOM_COLD: frozenset({WARMING}),
    SYMPTOM_BLOATING: frozenset({SUPPORTS_DIGESTION, MOVES_QI, DRIES_DAMP}),
    SYMPTOM_STRESSED: frozenset({CALMS_SHEN, MOVES_QI}),
    SYMPTOM_TIRED: frozenset({SUPPORTS_DEFICIENCY, WARMING}),
    SYMPTOM_POOR_SLEEP: frozenset({CALMS_SHEN}),
    SYMPTOM_HEADACHE: frozenset({MOVES_QI, COOLING}),
    SYMPTOM_CRAMPS: frozenset({WARMING, MOVES_QI}),
    SYMPTOM_STIFF: frozenset({MOVES_QI}),
}

# (symptom, need) -> extra ordering weight.
NEED_SYMPTOM_BOOSTS: dict[tuple[str, str], int] = {
    (SYMPTOM_COLD, "warmth"): 3,
    (SYMPTOM_TIRED, "energy"): 3,
    (SYMPTOM_STRESSED, "calm"): 3,
    (SYMPTOM_STRESSED, "focus"): 1,
    (SYMPTOM_BLOATING, "digestion"): 3,
    (SYMPTOM_HEADACHE, "calm"): 2,
    (SYMPTOM_HEADACHE, "focus"): 1,
    (SYMPTOM_POOR_SLEEP, "calm"): 3,
    (SYMPTOM_STIFF, "energy"): 2,
    (SYMPTOM_CRAMPS, "warmth"): 2,
}

# Check-in values that point at a specific tag family.
SLEEP_SIGNAL_TAGS: dict[str, frozenset[str]] = {
    "hard_to_fall_asleep": frozenset({CALMS_SHEN}),
    "woke_middle_of_night": frozenset({CALMS_SHEN, MOVES_QI}),
    "woke_early": frozenset({MOISTENS_DRYNESS}),
    "unrefreshing": frozenset({DRIES_DAMP}),
}

EMOTION_SIGNAL_TAGS: dict[str, frozenset[str]] = {
    "irritable": frozenset({MOVES_QI}),
    "worried": frozenset({SUPPORTS_DIGESTION}),
    "anxious": frozenset({CALMS_SHEN}),
    "sad": frozenset({SUPPORTS_DEFICIENCY}),
    "restless": frozenset({CALMS_SHEN}),
    "overwhelmed": frozenset({SUPPORTS_DEFICIENCY, SUPPORTS_DIGESTION}),
}

THERMAL_SIGNAL_TAGS: dict[str, frozenset[str]] = {
    "cold": frozenset({WARMING}),
    "cool": frozenset({WARMING}),
    "warm": frozenset({COOLING}),
    "hot": frozenset({COOLING}),
}

APPETITE_SIGNAL_TAGS: dict[str, frozenset[str]] = {
    "none": frozenset({SUPPORTS_DIGESTION}),
    "low": frozenset({SUPPORTS_DIGESTION}),
    "strong": frozenset({COOLING}),
}

STOOL_SIGNAL_TAGS: dict[str, frozenset[str]] = {
    "loose": frozenset({DRIES_DAMP, WARMING}),
    "constipated": frozenset({MOISTENS_DRYNESS}),
    "sticky": frozenset({DRIES_DAMP}),
    "mixed": frozenset({MOVES_QI}),
}


# ---------------------------------------------------------------------------
# Candidates and results
# ---------------------------------------------------------------------------

CandidateKind = Literal["ingredient", "routine"]


@dataclass(frozen=True)
class Candidate:
    """A content item eligible for ranking. Supplied by the content catalog."""

    id: str
    display_name: str
    kind: CandidateKind = "ingredient"
    tags: frozenset[str] = field(default_factory=frozenset)
    goals: frozenset[str] = field(default_factory=frozenset)
    seasons: frozenset[str] = field(default_factory=frozenset)
    terrain_fit: frozenset[str] = field(default_factory=frozenset)
    avoid_for_hours: int = 0
    avoid_notes: str | None = None
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "display_name": self.display_name,
            "kind": self.kind,
            "tags": sorted(self.tags),
            "goals": sorted(self.goals),
            "seasons": sorted(self.seasons),
            "terrain_fit": sorted(self.terrain_fit),
            "avoid_for_hours": self.avoid_for_hours,
            "avoid_notes": self.avoid_notes,
            "description": self.description,
        }


@dataclass(frozen=True)
class Suggestion:
    """The winning candidate for a need, or the need's fallback."""

    title: str
    description: str
    score: float
    source_id: str | None = None
    kind: str | None = None
    avoid_hours: int | None = None
    avoid_notes: str | None = None
    contributions: dict[str, float] = field(default_factory=dict)

    @property
    def is_fallback(self) -> bool:
        return self.source_id is None

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "score": self.score,
            "source_id": self.source_id,
            "kind": self.kind,
            "avoid_hours": self.avoid_hours,
            "avoid_notes": self.avoid_notes,
            "is_fallback": self.is_fallback,
            "contributions": dict(self.contributions),
        }
