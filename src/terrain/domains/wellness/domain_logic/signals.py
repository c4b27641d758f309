"""Diagnostic check-in signals and the ordered rule helper.

Each signal is independently optional. A signal is "active" only when it
carries a non-neutral value: good sleep, a calm mood, a comfortable
temperature and normal digestion are not signals.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

from terrain.domains.wellness.domain_logic.daily_log import (
    DOMINANT_EMOTIONS,
    SLEEP_QUALITIES,
    THERMAL_FEELINGS,
    DailyLog,
    DigestiveState,
)
from terrain.domains.wellness.domain_logic.terrain_models import COLD_TYPES, WARM_TYPES

SIGNAL_SLEEP_QUALITY = "sleep_quality"
SIGNAL_DOMINANT_EMOTION = "dominant_emotion"
SIGNAL_THERMAL_FEELING = "thermal_feeling"
SIGNAL_DIGESTIVE_STATE = "digestive_state"

# Resolution order when several signals compete for the same slot.
SIGNAL_PRIORITY = [
    SIGNAL_SLEEP_QUALITY,
    SIGNAL_DOMINANT_EMOTION,
    SIGNAL_THERMAL_FEELING,
    SIGNAL_DIGESTIVE_STATE,
]

NEUTRAL_SLEEP = "fell_asleep_easily"
NEUTRAL_EMOTION = "calm"
NEUTRAL_THERMAL = "comfortable"

FEELS_COLD = frozenset({"cold", "cool"})
FEELS_HOT = frozenset({"warm", "hot"})


@dataclass(frozen=True)
class DiagnosticSignals:
    """Today's check-in signals."""

    sleep_quality: str | None = None
    dominant_emotion: str | None = None
    thermal_feeling: str | None = None
    digestive_state: DigestiveState | None = None

    @classmethod
    def from_log(cls, log: DailyLog | None) -> DiagnosticSignals:
        if log is None:
            return cls()
        return cls(
            sleep_quality=log.sleep_quality,
            dominant_emotion=log.dominant_emotion,
            thermal_feeling=log.thermal_feeling,
            digestive_state=log.digestive_state,
        )

    @classmethod
    def from_dict(cls, data: dict | None) -> DiagnosticSignals:
        if not data:
            return cls()
        sleep = data.get("sleep_quality")
        emotion = data.get("dominant_emotion")
        thermal = data.get("thermal_feeling")
        digestive = data.get("digestive_state")
        return cls(
            sleep_quality=sleep if sleep in SLEEP_QUALITIES else None,
            dominant_emotion=emotion if emotion in DOMINANT_EMOTIONS else None,
            thermal_feeling=thermal if thermal in THERMAL_FEELINGS else None,
            digestive_state=DigestiveState.from_dict(digestive) if digestive else None,
        )

    # --- Active (non-neutral) values -------------------------------------

    @property
    def active_sleep(self) -> str | None:
        if self.sleep_quality and self.sleep_quality != NEUTRAL_SLEEP:
            return self.sleep_quality
        return None

    @property
    def active_emotion(self) -> str | None:
        if self.dominant_emotion and self.dominant_emotion != NEUTRAL_EMOTION:
            return self.dominant_emotion
        return None

    @property
    def active_thermal(self) -> str | None:
        if self.thermal_feeling and self.thermal_feeling != NEUTRAL_THERMAL:
            return self.thermal_feeling
        return None

    @property
    def active_appetite(self) -> str | None:
        state = self.digestive_state
        if state and state.appetite != "normal":
            return state.appetite
        return None

    @property
    def active_stool(self) -> str | None:
        state = self.digestive_state
        if state and state.stool != "normal":
            return state.stool
        return None

    @property
    def is_empty(self) -> bool:
        return not (
            self.active_sleep
            or self.active_emotion
            or self.active_thermal
            or self.active_appetite
            or self.active_stool
        )

    def to_dict(self) -> dict:
        return {
            "sleep_quality": self.sleep_quality,
            "dominant_emotion": self.dominant_emotion,
            "thermal_feeling": self.thermal_feeling,
            "digestive_state": (
                {"appetite": self.digestive_state.appetite, "stool": self.digestive_state.stool}
                if self.digestive_state
                else None
            ),
        }


def thermal_mismatch(thermal_feeling: str | None, terrain_type: str) -> bool:
    """True when today's temperature runs against the terrain's baseline."""
    if thermal_feeling in FEELS_COLD:
        return terrain_type in WARM_TYPES
    if thermal_feeling in FEELS_HOT:
        return terrain_type in COLD_TYPES
    return False


def unexpected_thermal(thermal_feeling: str | None, terrain_type: str) -> bool:
    """True when today's temperature is not what the terrain would predict.

    Feeling cold is expected for cold types, feeling warm for warm types;
    neutral types have no expected direction.
    """
    if thermal_feeling in FEELS_COLD:
        return terrain_type not in COLD_TYPES
    if thermal_feeling in FEELS_HOT:
        return terrain_type not in WARM_TYPES
    return False


# ---------------------------------------------------------------------------
# Ordered (predicate, result) rules
# ---------------------------------------------------------------------------

C = TypeVar("C")
T = TypeVar("T")


@dataclass(frozen=True)
class Rule(Generic[C, T]):
    """One row of a top-to-bottom rule table."""

    when: Callable[[C], bool]
    then: T
    name: str = ""


def first_match(rules: Iterable[Rule[C, T]], context: C, default: T | None = None) -> T | None:
    """Return the result of the first rule whose predicate holds."""
    for rule in rules:
        if rule.when(context):
            return rule.then
    return default


def all_matches(rules: Iterable[Rule[C, T]], context: C) -> list[T]:
    """Return the results of every rule whose predicate holds, in order."""
    return [rule.then for rule in rules if rule.when(context)]
