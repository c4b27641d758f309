"""Trend analyzer — 14-day rolling trends from daily logs.

The window is split at its midpoint; the mean of the earlier half is compared
against the later half with a per-category threshold and polarity. Each
record also carries one rate per day for sparklines, where a day without data
sits at the neutral midpoint 0.5.

All methods accept ``today`` so callers and tests control the clock.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Literal

from terrain.domains.wellness.domain_logic.daily_log import (
    ACTIVITY_MOVEMENT,
    FEEDBACK_BETTER,
    SYMPTOM_BLOATING,
    SYMPTOM_CRAMPS,
    SYMPTOM_HEADACHE,
    SYMPTOM_POOR_SLEEP,
    SYMPTOM_STIFF,
    SYMPTOM_STRESSED,
    THERMAL_VALUES,
    DailyLog,
    DigestiveState,
)
from terrain.domains.wellness.domain_logic.signals import first_match
from terrain.domains.wellness.domain_logic.terrain_models import (
    MODIFIER_DISPLAY_NAMES,
    MODIFIER_NONE,
    normalize_modifier,
)
from terrain.domains.wellness.domain_logic.terrain_models import (
    terrain_type as lookup_terrain_type,
)
from terrain.domains.wellness.domain_logic.trend_tables import (
    CATEGORY_DISPLAY_NAMES,
    CRAMPS,
    DECLINE_NOTE_RULES,
    DECLINE_PULSE_DEFAULT,
    DECLINE_PULSE_RULES,
    DEFAULT_HEALTHY_ZONE,
    DIGESTION,
    EMOTION_ORGANS,
    ENERGY,
    EXPECTED_THERMAL_RANGES,
    HEADACHE,
    HEALTHY_ZONE_RULES,
    IMPROVING_PULSE_DEFAULT,
    IMPROVING_PULSE_RULES,
    MODIFIER_EMOTIONS,
    MOOD,
    NOTE_DEFAULT,
    NOTE_IMPROVING,
    NOTE_STABLE,
    PRIORITY_BY_TERRAIN,
    RESTING_HR,
    SLEEP,
    SLEEP_DURATION,
    STABLE_PULSE_DEFAULT,
    STABLE_PULSE_RULES,
    STIFFNESS,
    STRESS,
    UNRANKED_PRIORITY,
    HealthyZone,
    TrendContext,
    watch_for_categories,
)

logger = logging.getLogger(__name__)

Direction = Literal["improving", "declining", "stable"]

IMPROVING: Direction = "improving"
DECLINING: Direction = "declining"
STABLE: Direction = "stable"

NEUTRAL_RATE = 0.5
MIN_UNIQUE_DAYS = 3
MIN_EFFECTIVENESS_LOGS = 5
MIN_DRIFT_READINGS = 7
MIN_EMOTION_OCCURRENCES = 8
THERMAL_DRIFT_DISTANCE = 1.5

SYMPTOM_THRESHOLD = 0.15
MOOD_THRESHOLD = 1.5
SLEEP_MINUTES_THRESHOLD = 30.0
RESTING_HR_THRESHOLD = 3.0

SLEEP_QUALITY_SCORES = {
    "fell_asleep_easily": 1.0,
    "hard_to_fall_asleep": 0.4,
    "woke_middle_of_night": 0.3,
    "woke_early": 0.35,
    "unrefreshing": 0.25,
}

APPETITE_SCORES = {"normal": 1.0, "low": 0.5, "none": 0.2, "strong": 0.7}
STOOL_SCORES = {"normal": 1.0, "loose": 0.4, "constipated": 0.4, "sticky": 0.3, "mixed": 0.5}

ENERGY_RATES = {"low": 0.0, "normal": 0.5, "wired": 1.0}


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TrendRecord:
    category: str
    direction: Direction
    daily_rates: tuple[float, ...]

    @property
    def display_name(self) -> str:
        return CATEGORY_DISPLAY_NAMES[self.category]

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "display_name": self.display_name,
            "direction": self.direction,
            "daily_rates": [round(r, 4) for r in self.daily_rates],
        }


@dataclass(frozen=True)
class AnnotatedTrend:
    trend: TrendRecord
    priority: int
    terrain_note: str
    is_watch_for: bool

    @property
    def category(self) -> str:
        return self.trend.category

    @property
    def direction(self) -> Direction:
        return self.trend.direction

    def to_dict(self) -> dict:
        data = self.trend.to_dict()
        data.update(
            priority=self.priority,
            terrain_note=self.terrain_note,
            is_watch_for=self.is_watch_for,
        )
        return data


@dataclass(frozen=True)
class PulseInsight:
    headline: str
    body: str
    accent_category: str | None = None
    is_urgent: bool = False

    def to_dict(self) -> dict:
        return {
            "headline": self.headline,
            "body": self.body,
            "accent_category": self.accent_category,
            "is_urgent": self.is_urgent,
        }


@dataclass(frozen=True)
class ActivityMinutes:
    routine_minutes: tuple[float, ...]
    movement_minutes: tuple[float, ...]

    @property
    def total_routine_minutes(self) -> float:
        return sum(self.routine_minutes)

    @property
    def total_movement_minutes(self) -> float:
        return sum(self.movement_minutes)

    def to_dict(self) -> dict:
        return {
            "routine_minutes": list(self.routine_minutes),
            "movement_minutes": list(self.movement_minutes),
            "total_routine_minutes": self.total_routine_minutes,
            "total_movement_minutes": self.total_movement_minutes,
            "window_days": len(self.routine_minutes),
        }


@dataclass(frozen=True)
class DailyLogDrift:
    expected_thermal_range: tuple[float, float]
    thermal_average: float = 0.0
    has_thermal_drift: bool = False
    thermal_summary: str | None = None
    has_emotion_drift: bool = False
    emotion_summary: str | None = None
    dominant_emotion: str | None = None
    dominant_emotion_count: int = 0

    @property
    def has_drift(self) -> bool:
        return self.has_thermal_drift or self.has_emotion_drift

    def to_dict(self) -> dict:
        return {
            "has_drift": self.has_drift,
            "has_thermal_drift": self.has_thermal_drift,
            "thermal_summary": self.thermal_summary,
            "thermal_average": round(self.thermal_average, 3),
            "expected_thermal_range": list(self.expected_thermal_range),
            "has_emotion_drift": self.has_emotion_drift,
            "emotion_summary": self.emotion_summary,
            "dominant_emotion": self.dominant_emotion,
            "dominant_emotion_count": self.dominant_emotion_count,
        }


# ---------------------------------------------------------------------------
# Scoring helpers
# ---------------------------------------------------------------------------

def _clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, value))


def _direction(first: float, second: float, threshold: float, lower_is_better: bool) -> Direction:
    change = second - first
    if lower_is_better:
        change = -change
    if change > threshold:
        return IMPROVING
    if -change > threshold:
        return DECLINING
    return STABLE


def _average(values: list[float], default: float) -> float:
    if not values:
        return default
    return sum(values) / len(values)


def digestive_score(state: DigestiveState) -> float:
    """Blend appetite and stool into one score; stool weighs more."""
    return APPETITE_SCORES[state.appetite] * 0.3 + STOOL_SCORES[state.stool] * 0.7


def _symptom_rate(symptom: str, logs: Sequence[DailyLog]) -> float:
    if not logs:
        return 0.0
    return sum(1 for log in logs if symptom in log.quick_symptoms) / len(logs)


def _low_energy_rate(logs: Sequence[DailyLog]) -> float:
    if not logs:
        return 0.0
    return sum(1 for log in logs if log.energy_level == "low") / len(logs)


def _symptom_count(logs: Sequence[DailyLog]) -> float:
    if not logs:
        return 0.0
    return sum(len(log.quick_symptoms) for log in logs) / len(logs)


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------

@dataclass
class TrendAnalyzer:
    """Computes and annotates rolling trends over a fixed trailing window."""

    window_days: int = 14

    # --- Windowing -----------------------------------------------------------

    def _today(self, today: date | None) -> date:
        return today or date.today()

    def window(self, logs: Iterable[DailyLog], today: date | None = None) -> list[DailyLog]:
        """Logs dated within [today - window_days, today]."""
        end = self._today(today)
        start = end - timedelta(days=self.window_days)
        return [log for log in logs if start <= log.date <= end]

    def _days(self, today: date) -> list[date]:
        return [today - timedelta(days=offset) for offset in range(self.window_days - 1, -1, -1)]

    def _daily_rates(
        self,
        logs: Sequence[DailyLog],
        today: date,
        rate: Callable[[DailyLog], float | None],
    ) -> tuple[float, ...]:
        """One rate per day from the first log of that day, else the midpoint."""
        first_by_day: dict[date, DailyLog] = {}
        for log in logs:
            first_by_day.setdefault(log.date, log)
        rates = []
        for day in self._days(today):
            log = first_by_day.get(day)
            value = rate(log) if log is not None else None
            rates.append(NEUTRAL_RATE if value is None else value)
        return tuple(rates)

    # --- Per-category trends -------------------------------------------------

    def _symptom_trend(
        self, category: str, symptom: str, halves, logs: Sequence[DailyLog], today: date
    ) -> TrendRecord:
        first, second = halves
        direction = _direction(
            _symptom_rate(symptom, first),
            _symptom_rate(symptom, second),
            SYMPTOM_THRESHOLD,
            lower_is_better=True,
        )

        def present(log: DailyLog) -> float:
            return 0.0 if symptom in log.quick_symptoms else 1.0

        return TrendRecord(category, direction, self._daily_rates(logs, today, present))

    def _mood_trend(self, halves, logs, today) -> TrendRecord:
        first, second = halves
        direction = _direction(
            _average([log.mood_rating for log in first if log.mood_rating is not None], 5.0),
            _average([log.mood_rating for log in second if log.mood_rating is not None], 5.0),
            MOOD_THRESHOLD,
            lower_is_better=False,
        )
        rates = self._daily_rates(
            logs, today, lambda log: log.mood_rating / 10.0 if log.mood_rating is not None else None
        )
        return TrendRecord(MOOD, direction, rates)

    def _sleep_trend(self, halves, logs, today) -> TrendRecord:
        if not any(log.sleep_quality for log in logs):
            return self._symptom_trend(SLEEP, SYMPTOM_POOR_SLEEP, halves, logs, today)

        def score(log: DailyLog) -> float | None:
            return SLEEP_QUALITY_SCORES.get(log.sleep_quality) if log.sleep_quality else None

        first, second = halves
        direction = _direction(
            _average([s for s in map(score, first) if s is not None], NEUTRAL_RATE),
            _average([s for s in map(score, second) if s is not None], NEUTRAL_RATE),
            SYMPTOM_THRESHOLD,
            lower_is_better=False,
        )
        return TrendRecord(SLEEP, direction, self._daily_rates(logs, today, score))

    def _digestion_trend(self, halves, logs, today) -> TrendRecord:
        if not any(log.digestive_state for log in logs):
            return self._symptom_trend(DIGESTION, SYMPTOM_BLOATING, halves, logs, today)

        def score(log: DailyLog) -> float | None:
            return digestive_score(log.digestive_state) if log.digestive_state else None

        first, second = halves
        direction = _direction(
            _average([s for s in map(score, first) if s is not None], NEUTRAL_RATE),
            _average([s for s in map(score, second) if s is not None], NEUTRAL_RATE),
            SYMPTOM_THRESHOLD,
            lower_is_better=False,
        )
        return TrendRecord(DIGESTION, direction, self._daily_rates(logs, today, score))

    def _energy_trend(self, halves, logs, today) -> TrendRecord:
        # Fewer low-energy days is improving; wired is not treated as better.
        first, second = halves
        direction = _direction(
            _low_energy_rate(first),
            _low_energy_rate(second),
            SYMPTOM_THRESHOLD,
            lower_is_better=True,
        )
        rates = self._daily_rates(logs, today, lambda log: ENERGY_RATES.get(log.energy_level))
        return TrendRecord(ENERGY, direction, rates)

    def _sleep_duration_trend(self, halves, logs, today) -> TrendRecord:
        first, second = halves
        direction = _direction(
            _average([log.sleep_duration_minutes for log in first
                      if log.sleep_duration_minutes is not None], 450.0),
            _average([log.sleep_duration_minutes for log in second
                      if log.sleep_duration_minutes is not None], 450.0),
            SLEEP_MINUTES_THRESHOLD,
            lower_is_better=False,
        )
        rates = self._daily_rates(
            logs,
            today,
            lambda log: (
                _clamp(log.sleep_duration_minutes / 480.0)
                if log.sleep_duration_minutes is not None
                else None
            ),
        )
        return TrendRecord(SLEEP_DURATION, direction, rates)

    def _resting_hr_trend(self, halves, logs, today) -> TrendRecord:
        first, second = halves
        direction = _direction(
            _average([log.resting_heart_rate for log in first
                      if log.resting_heart_rate is not None], 70.0),
            _average([log.resting_heart_rate for log in second
                      if log.resting_heart_rate is not None], 70.0),
            RESTING_HR_THRESHOLD,
            lower_is_better=True,
        )
        rates = self._daily_rates(
            logs,
            today,
            lambda log: (
                _clamp((80 - log.resting_heart_rate) / 20.0)
                if log.resting_heart_rate is not None
                else None
            ),
        )
        return TrendRecord(RESTING_HR, direction, rates)

    # --- Public API ------------------------------------------------------------

    def compute_trends(
        self, logs: Iterable[DailyLog], today: date | None = None
    ) -> list[TrendRecord]:
        """One record per tracked category, or [] with fewer than 3 logged days."""
        today = self._today(today)
        window = self.window(logs, today)
        if len({log.date for log in window}) < MIN_UNIQUE_DAYS:
            logger.debug("Insufficient trend data: %d logs in window", len(window))
            return []

        midpoint = today - timedelta(days=self.window_days // 2)
        halves = (
            [log for log in window if log.date < midpoint],
            [log for log in window if log.date >= midpoint],
        )

        return [
            self._mood_trend(halves, window, today),
            self._sleep_trend(halves, window, today),
            self._digestion_trend(halves, window, today),
            self._symptom_trend(STRESS, SYMPTOM_STRESSED, halves, window, today),
            self._energy_trend(halves, window, today),
            self._symptom_trend(HEADACHE, SYMPTOM_HEADACHE, halves, window, today),
            self._symptom_trend(CRAMPS, SYMPTOM_CRAMPS, halves, window, today),
            self._symptom_trend(STIFFNESS, SYMPTOM_STIFF, halves, window, today),
            self._sleep_duration_trend(halves, window, today),
            self._resting_hr_trend(halves, window, today),
        ]

    def prioritize_trends(
        self,
        logs: Iterable[DailyLog],
        terrain_type: str,
        modifier: str | None = None,
        today: date | None = None,
    ) -> list[AnnotatedTrend]:
        """Trends sorted by terrain priority, each with a note and watch-for flag."""
        trends = self.compute_trends(logs, today)
        if not trends:
            return []

        modifier = normalize_modifier(modifier)
        priorities = PRIORITY_BY_TERRAIN.get(terrain_type, {})
        watch_for = watch_for_categories(terrain_type, modifier)

        annotated = [
            AnnotatedTrend(
                trend=trend,
                priority=priorities.get(trend.category, UNRANKED_PRIORITY),
                terrain_note=terrain_note(trend.category, trend.direction, terrain_type, modifier),
                is_watch_for=trend.category in watch_for,
            )
            for trend in trends
        ]
        annotated.sort(key=lambda a: a.priority)
        return annotated

    def healthy_zone(self, category: str, terrain_type: str) -> HealthyZone:
        return healthy_zone(category, terrain_type)

    def compute_routine_effectiveness(
        self, logs: Sequence[DailyLog], routine_id: str
    ) -> float | None:
        """Score in [-1, 1] from feedback on routine days and symptom load.

        Returns None with fewer than 5 logs or when every log (or no log)
        includes the routine.
        """
        if len(logs) < MIN_EFFECTIVENESS_LOGS:
            return None

        routine_days = [log for log in logs if log.has_routine(routine_id)]
        other_days = [log for log in logs if not log.has_routine(routine_id)]
        if not routine_days or not other_days:
            return None

        better = sum(
            1
            for log in routine_days
            if any(
                f.routine_id == routine_id and f.feedback == FEEDBACK_BETTER
                for f in log.routine_feedback
            )
        )
        feedback_score = (better / len(routine_days) - 0.5) * 2.0
        symptom_score = _clamp(
            (_symptom_count(other_days) - _symptom_count(routine_days)) / 3.0, -1.0, 1.0
        )
        return feedback_score * 0.7 + symptom_score * 0.3

    def compute_activity_minutes(
        self, logs: Iterable[DailyLog], today: date | None = None
    ) -> ActivityMinutes:
        """Per-day routine and movement minutes; index 0 is the oldest day."""
        today = self._today(today)
        start = today - timedelta(days=self.window_days - 1)
        routine = [0.0] * self.window_days
        movement = [0.0] * self.window_days

        for log in self.window(logs, today):
            index = (log.date - start).days
            if not 0 <= index < self.window_days:
                continue
            for entry in log.routine_feedback:
                if entry.actual_duration_seconds is None:
                    continue
                minutes = entry.actual_duration_seconds / 60.0
                # Entries without a type count as routines.
                if entry.activity_type == ACTIVITY_MOVEMENT:
                    movement[index] += minutes
                else:
                    routine[index] += minutes

        return ActivityMinutes(tuple(routine), tuple(movement))

    def generate_terrain_pulse(
        self,
        logs: Iterable[DailyLog],
        terrain_type: str,
        modifier: str | None = None,
        today: date | None = None,
    ) -> PulseInsight:
        """Headline insight: a decline first, then an improvement, else steady."""
        modifier = normalize_modifier(modifier)
        annotated = self.prioritize_trends(logs, terrain_type, modifier, today)

        declining = [a for a in annotated if a.direction == DECLINING]
        decline = next((a for a in declining if a.is_watch_for), None) or (
            declining[0] if declining else None
        )
        if decline is not None:
            return _decline_insight(decline, terrain_type, modifier)

        improving = next((a for a in annotated if a.direction == IMPROVING), None)
        if improving is not None:
            return _improving_insight(improving, terrain_type)

        return _stable_insight(terrain_type, modifier)

    def detect_daily_log_drift(
        self,
        logs: Iterable[DailyLog],
        terrain_type: str,
        modifier: str | None = None,
        today: date | None = None,
    ) -> DailyLogDrift:
        """Watch thermal feelings and dominant emotions for slow terrain shifts."""
        modifier = normalize_modifier(modifier)
        window = self.window(logs, today)
        expected = EXPECTED_THERMAL_RANGES.get(terrain_type, (-0.5, 0.5))
        nickname = terrain_type_nickname(terrain_type)

        result: dict = {"expected_thermal_range": expected}

        thermal = [THERMAL_VALUES[log.thermal_feeling] for log in window if log.thermal_feeling]
        if len(thermal) >= MIN_DRIFT_READINGS:
            average = sum(thermal) / len(thermal)
            low, high = expected
            distance = low - average if average < low else max(0.0, average - high)
            result["thermal_average"] = average
            if distance >= THERMAL_DRIFT_DISTANCE:
                direction = "warmer" if average > high else "cooler"
                result["has_thermal_drift"] = True
                result["thermal_summary"] = (
                    f"You've been feeling {direction} than your {nickname} pattern expects. "
                    f"This may signal your terrain is shifting {direction}."
                )

        emotions = [log.dominant_emotion for log in window if log.dominant_emotion]
        if len(emotions) >= MIN_DRIFT_READINGS:
            counts = Counter(e for e in emotions if e != "calm")
            if counts:
                top, count = counts.most_common(1)[0]
                if count >= MIN_EMOTION_OCCURRENCES:
                    result["dominant_emotion"] = top
                    result["dominant_emotion_count"] = count
                    if top not in MODIFIER_EMOTIONS.get(modifier, frozenset()):
                        result["has_emotion_drift"] = True
                        result["emotion_summary"] = (
                            f"{top.capitalize()} has appeared {count} times in the last "
                            f"{self.window_days} days. Your {EMOTION_ORGANS[top]} system may "
                            "need attention. Consider retaking the quiz."
                        )

        drift = DailyLogDrift(**result)
        if drift.has_drift:
            logger.debug("Daily log drift detected for %s", terrain_type)
        return drift


# ---------------------------------------------------------------------------
# Table lookups
# ---------------------------------------------------------------------------

def terrain_type_nickname(terrain_type_id: str) -> str:
    return lookup_terrain_type(terrain_type_id).nickname


def terrain_note(category: str, direction: str, terrain_type: str, modifier: str) -> str:
    """Explain a trend for this terrain; only declines get specific advice."""
    if direction == IMPROVING:
        return NOTE_IMPROVING
    if direction != DECLINING:
        return NOTE_STABLE
    ctx = TrendContext(category, terrain_type, modifier)
    return first_match(DECLINE_NOTE_RULES, ctx, NOTE_DEFAULT)


def healthy_zone(category: str, terrain_type: str) -> HealthyZone:
    """Terrain-adjusted target range on the 0-1 daily-rate scale."""
    ctx = TrendContext(category, terrain_type, MODIFIER_NONE)
    low, high, label, context = first_match(HEALTHY_ZONE_RULES, ctx, DEFAULT_HEALTHY_ZONE)
    return HealthyZone(category, low, high, label, context)


# ---------------------------------------------------------------------------
# Pulse text
# ---------------------------------------------------------------------------

def _decline_days(rates: Sequence[float]) -> int:
    """Consecutive day-over-day drops ending at the most recent day."""
    recent = list(rates[-7:])
    days = 0
    for i in range(len(recent) - 1, 0, -1):
        if recent[i] < recent[i - 1]:
            days += 1
        else:
            break
    return days


def _pulse_text(template: tuple[str, str], **values: object) -> tuple[str, str]:
    headline, body = template
    return headline.format(**values), body.format(**values)


def _decline_insight(trend: AnnotatedTrend, terrain_type: str, modifier: str) -> PulseInsight:
    category = trend.category
    name = CATEGORY_DISPLAY_NAMES[category]
    days = _decline_days(trend.trend.daily_rates)
    template = first_match(
        DECLINE_PULSE_RULES, TrendContext(category, terrain_type, modifier), DECLINE_PULSE_DEFAULT
    )
    headline, body = _pulse_text(
        template,
        name=name,
        name_lower=name.lower(),
        days=days,
        day_word="day" if days == 1 else "days",
        span=f"{days}-day decline" if days > 2 else "recent dip",
        nickname=terrain_type_nickname(terrain_type),
        with_modifier=(
            f" with a {MODIFIER_DISPLAY_NAMES[modifier]} modifier" if modifier != MODIFIER_NONE else ""
        ),
    )
    return PulseInsight(headline, body, accent_category=category, is_urgent=trend.is_watch_for)


def _improving_insight(trend: AnnotatedTrend, terrain_type: str) -> PulseInsight:
    category = trend.category
    name = CATEGORY_DISPLAY_NAMES[category]
    template = first_match(
        IMPROVING_PULSE_RULES,
        TrendContext(category, terrain_type, MODIFIER_NONE),
        IMPROVING_PULSE_DEFAULT,
    )
    headline, body = _pulse_text(
        template, name=name, name_lower=name.lower(), nickname=terrain_type_nickname(terrain_type)
    )
    return PulseInsight(headline, body, accent_category=category)


def _stable_insight(terrain_type: str, modifier: str) -> PulseInsight:
    template = first_match(
        STABLE_PULSE_RULES, TrendContext("", terrain_type, modifier), STABLE_PULSE_DEFAULT
    )
    modifier_note = (
        f" Your {MODIFIER_DISPLAY_NAMES[modifier]} modifier is well-managed."
        if modifier != MODIFIER_NONE
        else ""
    )
    headline, body = _pulse_text(
        template, nickname=terrain_type_nickname(terrain_type), modifier_note=modifier_note
    )
    return PulseInsight(headline, body)
