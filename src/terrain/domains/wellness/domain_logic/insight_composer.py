"""Insight composer — headline, do/don't, life-area and modifier-area readings.

All functions are pure over the fixed tables in ``insight_tables``. When
several sources speak to the same slot the precedence is always the same:
reported symptoms, then check-in signals (sleep quality, dominant emotion,
thermal mismatch, digestive state), then the terrain and modifier base.
Readings accumulate a reason per contributing source so the final text can
be traced back to what produced it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Literal

from terrain.domains.wellness.domain_logic import insight_tables as tables
from terrain.domains.wellness.domain_logic.signals import (
    FEELS_COLD,
    FEELS_HOT,
    DiagnosticSignals,
    first_match,
    thermal_mismatch,
)
from terrain.domains.wellness.domain_logic.suggestion_models import SEASON_DISPLAY_NAMES
from terrain.domains.wellness.domain_logic.terrain_models import (
    COLD_DEFICIENT,
    COLD_TYPES,
    DEFICIENT_TYPES,
    EXCESS_TYPES,
    MODIFIER_DAMP,
    MODIFIER_DRY,
    MODIFIER_STAGNATION,
    NEUTRAL_BALANCED,
    WARM_EXCESS,
    WARM_TYPES,
    normalize_modifier,
)

logger = logging.getLogger(__name__)

FocusLevel = Literal["neutral", "moderate", "priority"]

FOCUS_ORDER = {"neutral": 0, "moderate": 1, "priority": 2}

SOURCE_QUIZ = "Quiz"
SOURCE_SYMPTOMS = "Symptoms"
SOURCE_CHECK_IN = "Check-in"
SOURCE_ACTIVITY = "Activity"
SOURCE_PATTERNS = "Patterns"
SOURCE_WEATHER = "Weather"

LIFE_AREAS = ["energy", "digestion", "sleep", "mood", "seasonality"]
MODIFIER_AREAS = ["inner_climate", "fluid_balance", "qi_movement"]


def raise_focus(current: str, floor: str) -> str:
    """Return whichever focus level is higher."""
    return floor if FOCUS_ORDER[floor] > FOCUS_ORDER[current] else current


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InsightContext:
    """Who the user is and what today looks like."""

    terrain_type: str
    modifier: str = "none"
    symptoms: frozenset[str] = frozenset()
    signals: DiagnosticSignals = field(default_factory=DiagnosticSignals)
    weather: str | None = None
    step_count: int | None = None
    season: str | None = None
    alcohol_frequency: str | None = None
    smoking_status: str | None = None

    @classmethod
    def build(
        cls,
        terrain_type: str,
        modifier: str | None = None,
        symptoms: Iterable[str] = (),
        signals: DiagnosticSignals | None = None,
        **extras,
    ) -> InsightContext:
        return cls(
            terrain_type=terrain_type,
            modifier=normalize_modifier(modifier),
            symptoms=frozenset(symptoms),
            signals=signals or DiagnosticSignals(),
            **extras,
        )


@dataclass(frozen=True)
class ReadingReason:
    source: str
    detail: str

    def to_dict(self) -> dict:
        return {"source": self.source, "detail": self.detail}


@dataclass(frozen=True)
class Headline:
    wisdom: str
    truths: tuple[str, ...]
    is_symptom_adjusted: bool = False
    is_signal_adjusted: bool = False

    @property
    def text(self) -> str:
        return " ".join((self.wisdom, *self.truths))

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "wisdom": self.wisdom,
            "truths": list(self.truths),
            "is_symptom_adjusted": self.is_symptom_adjusted,
            "is_signal_adjusted": self.is_signal_adjusted,
        }


@dataclass(frozen=True)
class DoDontItem:
    text: str
    priority: int
    why_for_you: str = ""

    def to_dict(self) -> dict:
        return {"text": self.text, "priority": self.priority, "why_for_you": self.why_for_you}


@dataclass(frozen=True)
class DoDont:
    dos: tuple[DoDontItem, ...]
    donts: tuple[DoDontItem, ...]

    def to_dict(self) -> dict:
        return {
            "dos": [item.to_dict() for item in self.dos],
            "donts": [item.to_dict() for item in self.donts],
        }


@dataclass
class LifeAreaReading:
    area: str
    focus: str
    reading: str
    balance_advice: str
    reasons: list[ReadingReason] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "area": self.area,
            "focus": self.focus,
            "reading": self.reading,
            "balance_advice": self.balance_advice,
            "reasons": [r.to_dict() for r in self.reasons],
        }


@dataclass
class ModifierAreaReading:
    area: str
    reading: str
    balance_advice: str
    reasons: list[ReadingReason] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "area": self.area,
            "reading": self.reading,
            "balance_advice": self.balance_advice,
            "reasons": [r.to_dict() for r in self.reasons],
        }


@dataclass(frozen=True)
class DailyTone:
    label: str
    environmental_note: str | None = None

    def to_dict(self) -> dict:
        return {"label": self.label, "environmental_note": self.environmental_note}


@dataclass(frozen=True)
class WhyContext:
    tags: frozenset[str]
    terrain_type: str
    modifier: str


# ---------------------------------------------------------------------------
# Signal resolution
# ---------------------------------------------------------------------------

def thermal_direction(feeling: str | None) -> str | None:
    """Collapse the five-point thermal scale to cold/hot."""
    if feeling in FEELS_COLD:
        return "cold"
    if feeling in FEELS_HOT:
        return "hot"
    return None


def active_signal_keys(ctx: InsightContext) -> list[tuple[str, str]]:
    """Active check-in signals as (family, value), highest precedence first.

    Thermal feelings only count on a mismatch with the terrain; digestion
    reports stool before appetite.
    """
    signals = ctx.signals
    keys: list[tuple[str, str]] = []
    if signals.active_sleep:
        keys.append(("sleep", signals.active_sleep))
    if signals.active_emotion:
        keys.append(("emotion", signals.active_emotion))
    if thermal_mismatch(signals.active_thermal, ctx.terrain_type):
        keys.append(("thermal", thermal_direction(signals.active_thermal)))
    if signals.active_stool:
        keys.append(("stool", signals.active_stool))
    if signals.active_appetite:
        keys.append(("appetite", signals.active_appetite))
    return keys


SIGNAL_HEADLINE_TABLES = {
    "sleep": tables.SLEEP_HEADLINES,
    "emotion": tables.EMOTION_HEADLINES,
    "thermal": tables.THERMAL_HEADLINES,
    "stool": tables.STOOL_HEADLINES,
    "appetite": tables.APPETITE_HEADLINES,
}

SIGNAL_DO_DONT_TABLES = {
    "sleep": tables.SLEEP_DO_DONTS,
    "emotion": tables.EMOTION_DO_DONTS,
    "thermal": tables.THERMAL_DO_DONTS,
    "stool": tables.STOOL_DO_DONTS,
}


# ---------------------------------------------------------------------------
# Headline
# ---------------------------------------------------------------------------

def _thermal_key(terrain_type: str) -> str | None:
    if terrain_type in COLD_TYPES:
        return "cold"
    if terrain_type in WARM_TYPES:
        return "warm"
    return None


def _cold_symptom_truth(terrain_type: str) -> str:
    key = _thermal_key(terrain_type)
    if key == "cold":
        return tables.COLD_SYMPTOM_TRUTH_COLD
    if key == "warm":
        return tables.COLD_SYMPTOM_TRUTH_WARM
    return tables.COLD_SYMPTOM_TRUTH_NEUTRAL


def _weather_truth(weather: str | None, terrain_type: str) -> str | None:
    variants = tables.WEATHER_TRUTHS.get((weather or "").lower())
    if not variants:
        return None
    return variants.get(_thermal_key(terrain_type), variants.get(None))


def _step_truth(steps: int | None, terrain_type: str) -> str | None:
    if steps is None:
        return None
    if steps < tables.LOW_STEPS:
        return tables.LOW_STEP_TRUTH_EXCESS if terrain_type in EXCESS_TYPES else tables.LOW_STEP_TRUTH
    if steps > tables.HIGH_STEPS:
        return tables.HIGH_STEP_TRUTH_DEFICIENT if terrain_type in DEFICIENT_TYPES else tables.HIGH_STEP_TRUTH
    return None


def generate_headline(ctx: InsightContext) -> Headline:
    """Wisdom line plus up to four supporting truths."""
    terrain = ctx.terrain_type
    base_truths = list(tables.BASE_TRUTHS.get(terrain, tables.BASE_TRUTHS[NEUTRAL_BALANCED]))
    modifier_truth = tables.MODIFIER_TRUTHS.get(ctx.modifier)

    symptom_entry = next(
        (entry for entry in tables.SYMPTOM_HEADLINES if entry[0] in ctx.symptoms), None
    )
    signal_keys = active_signal_keys(ctx)
    signal_entry = None
    if signal_keys:
        family, value = signal_keys[0]
        signal_entry = SIGNAL_HEADLINE_TABLES[family].get(value)

    truths: list[str] = []
    if symptom_entry:
        symptom, wisdom, symptom_truths = symptom_entry
        truths.extend(symptom_truths or (_cold_symptom_truth(terrain),))
        if signal_entry:
            truths.append(signal_entry[1])
    elif signal_entry:
        wisdom = signal_entry[0]
        truths.append(signal_entry[1])
        truths.append(base_truths[0])
        if modifier_truth:
            truths.append(modifier_truth)
    else:
        wisdom = tables.BASE_WISDOM.get(terrain, tables.BASE_WISDOM[NEUTRAL_BALANCED])
        truths.extend(base_truths)
        if modifier_truth:
            truths.append(modifier_truth)

    for extra in (_weather_truth(ctx.weather, terrain), _step_truth(ctx.step_count, terrain)):
        if extra:
            truths.append(extra)

    return Headline(
        wisdom=wisdom,
        truths=tuple(truths[: tables.MAX_TRUTHS]),
        is_symptom_adjusted=symptom_entry is not None,
        is_signal_adjusted=symptom_entry is None and signal_entry is not None,
    )


# ---------------------------------------------------------------------------
# Do / don't
# ---------------------------------------------------------------------------

def _item(raw: tuple[str, int, str]) -> DoDontItem:
    text, priority, why = raw
    return DoDontItem(text=text, priority=priority, why_for_you=why)


def _top(items: list[DoDontItem]) -> tuple[DoDontItem, ...]:
    # Stable sort keeps source precedence among equal priorities.
    seen: set[str] = set()
    unique: list[DoDontItem] = []
    for item in sorted(items, key=lambda i: i.priority):
        if item.text in seen:
            continue
        seen.add(item.text)
        unique.append(item)
    return tuple(unique[: tables.MAX_DO_DONTS])


def generate_do_dont(ctx: InsightContext) -> DoDont:
    """Top four dos and don'ts for today.

    Sources are gathered in precedence order (symptoms, check-in signals,
    lifestyle, weather, modifier, terrain base) and then stably sorted by
    priority, so situational priority-0 items lead and keep that order.
    """
    pairs: list[tuple] = []

    for symptom, pair in tables.SYMPTOM_DO_DONTS.items():
        if symptom in ctx.symptoms:
            pairs.append(pair)

    for family, value in active_signal_keys(ctx):
        table = SIGNAL_DO_DONT_TABLES.get(family)
        if table and value in table:
            pairs.append(table[value])

    if ctx.alcohol_frequency in tables.ALCOHOL_TRIGGERS:
        pairs.append((tables.ALCOHOL_DO, tables.ALCOHOL_DONT))
    if ctx.smoking_status in tables.SMOKING_TRIGGERS:
        pairs.append((tables.SMOKING_DO, None))
    if ctx.step_count is not None:
        if ctx.step_count < tables.LOW_STEPS:
            pairs.append((tables.LOW_STEPS_DO, None))
        elif ctx.step_count > tables.HIGH_STEPS:
            pairs.append((tables.HIGH_STEPS_DO, None))

    weather_pair = tables.WEATHER_DO_DONTS.get((ctx.weather or "").lower())
    if weather_pair:
        pairs.append(weather_pair)

    modifier_pair = tables.MODIFIER_DO_DONTS.get(ctx.modifier)
    if modifier_pair:
        pairs.append(modifier_pair)

    dos = [_item(do) for do, _ in pairs if do]
    donts = [_item(dont) for _, dont in pairs if dont]
    dos.extend(_item(raw) for raw in tables.BASE_DOS.get(ctx.terrain_type, tables.BASE_DOS[NEUTRAL_BALANCED]))
    donts.extend(_item(raw) for raw in tables.BASE_DONTS.get(ctx.terrain_type, tables.BASE_DONTS[NEUTRAL_BALANCED]))

    return DoDont(dos=_top(dos), donts=_top(donts))


# ---------------------------------------------------------------------------
# Life areas
# ---------------------------------------------------------------------------

def _base_reading(area: str, table: dict, terrain_type: str) -> LifeAreaReading:
    reading, advice, focus, detail = table.get(terrain_type, table[NEUTRAL_BALANCED])
    return LifeAreaReading(
        area=area,
        focus=focus,
        reading=reading,
        balance_advice=advice,
        reasons=[ReadingReason(SOURCE_QUIZ, detail)],
    )


def _apply_modifier(result: LifeAreaReading, modifier: str) -> None:
    override = tables.MODIFIER_AREA_OVERRIDES.get(result.area)
    if not override or override[0] != modifier:
        return
    _, reading, advice, focus, detail = override
    result.reading = reading
    result.balance_advice = advice
    result.focus = raise_focus(result.focus, focus)
    result.reasons.append(ReadingReason(SOURCE_QUIZ, detail))


def _signal_override(area: str, ctx: InsightContext) -> tuple[str, str, str, str] | None:
    """(reading, advice, focus, reason detail) from today's check-in, if any."""
    signals = ctx.signals
    if area == "energy" and signals.active_thermal:
        feeling = signals.active_thermal
        direction = thermal_direction(feeling)
        if thermal_mismatch(feeling, ctx.terrain_type):
            reading, advice = tables.THERMAL_MISMATCH_READINGS[direction]
            return reading, advice, "priority", f"You felt {feeling}, which runs against your terrain"
        reading, advice = tables.THERMAL_READINGS[direction]
        return reading, advice, "moderate", f"You felt {feeling} today"
    if area == "digestion":
        if signals.active_stool:
            reading, advice, focus = tables.STOOL_SIGNAL_READINGS[signals.active_stool]
            return reading, advice, focus, f"You reported {signals.active_stool} stools today"
        if signals.active_appetite:
            reading, advice, focus = tables.APPETITE_SIGNAL_READINGS[signals.active_appetite]
            return reading, advice, focus, f"You reported {signals.active_appetite} appetite today"
    if area == "sleep" and signals.active_sleep:
        reading, advice, focus = tables.SLEEP_SIGNAL_READINGS[signals.active_sleep]
        label = tables.SIGNAL_DISPLAY.get(signals.active_sleep, signals.active_sleep)
        return reading, advice, focus, f"You reported '{label}'"
    if area == "mood" and signals.active_emotion:
        reading, advice, focus = tables.EMOTION_SIGNAL_READINGS[signals.active_emotion]
        return reading, advice, focus, f"You felt {signals.active_emotion} today"
    return None


def _apply_signal(result: LifeAreaReading, ctx: InsightContext) -> None:
    override = _signal_override(result.area, ctx)
    if override is None:
        return
    reading, advice, focus, detail = override
    result.reading = reading
    result.balance_advice = advice
    result.focus = raise_focus(result.focus, focus)
    result.reasons.append(ReadingReason(SOURCE_CHECK_IN, detail))


def _apply_symptom(result: LifeAreaReading, symptoms: frozenset[str]) -> None:
    override = tables.SYMPTOM_AREA_OVERRIDES.get(result.area)
    if not override or override[0] not in symptoms:
        return
    symptom, reading, advice = override
    result.reading = reading
    if advice:
        result.balance_advice = advice
    result.focus = "priority"
    result.reasons.append(
        ReadingReason(SOURCE_SYMPTOMS, f"You checked '{symptom.replace('_', ' ')}' today")
    )


def _apply_steps(result: LifeAreaReading, ctx: InsightContext) -> None:
    steps = ctx.step_count
    if steps is None:
        return
    if steps < tables.LOW_STEPS:
        result.reasons.append(ReadingReason(SOURCE_ACTIVITY, f"Low movement today ({steps} steps)"))
        result.focus = raise_focus(result.focus, "moderate")
    elif steps > tables.HIGH_STEPS:
        result.reasons.append(ReadingReason(SOURCE_ACTIVITY, f"Active day ({steps} steps)"))
        if ctx.terrain_type in DEFICIENT_TYPES:
            result.balance_advice += " High activity means extra nourishment tonight."


def _seasonality_reading(ctx: InsightContext) -> LifeAreaReading:
    season = ctx.season
    matched = first_match(tables.SEASONAL_RULES, ctx)
    if matched:
        reading, advice, focus, detail = matched
    else:
        name = SEASON_DISPLAY_NAMES.get(season, season.replace("_", " ").title())
        reading = (
            f"{name} is here. Your body naturally responds to the season; tuning in "
            "helps you ride rather than fight the rhythm."
        )
        advice, focus, detail = tables.SEASONAL_DEFAULT_ADVICE, "neutral", tables.SEASONAL_DEFAULT_REASON

    result = LifeAreaReading(
        area="seasonality",
        focus=focus,
        reading=reading,
        balance_advice=advice,
        reasons=[ReadingReason(SOURCE_PATTERNS, detail)],
    )

    weather = (ctx.weather or "").lower()
    if weather in tables.WEATHER_REASONS:
        result.reasons.append(ReadingReason(SOURCE_WEATHER, tables.WEATHER_REASONS[weather]))
        floors = tables.WEATHER_SEASONAL_FOCUS.get(weather, {})
        for key in (ctx.terrain_type, ctx.modifier):
            if key in floors:
                result.focus = raise_focus(result.focus, floors[key])
    return result


def generate_life_area_readings(ctx: InsightContext) -> list[LifeAreaReading]:
    """Energy, digestion, sleep and mood readings, plus seasonality when a season is known.

    Each area starts from the terrain base and is then overridden, in
    increasing precedence, by the modifier, the check-in and reported
    symptoms.
    """
    area_tables = {
        "energy": tables.ENERGY_READINGS,
        "digestion": tables.DIGESTION_READINGS,
        "sleep": tables.SLEEP_READINGS,
        "mood": tables.MOOD_READINGS,
    }
    readings: list[LifeAreaReading] = []
    for area, table in area_tables.items():
        result = _base_reading(area, table, ctx.terrain_type)
        _apply_modifier(result, ctx.modifier)
        _apply_signal(result, ctx)
        _apply_symptom(result, ctx.symptoms)
        if area == "energy":
            _apply_steps(result, ctx)
        readings.append(result)

    if ctx.season:
        readings.append(_seasonality_reading(ctx))
    return readings


# ---------------------------------------------------------------------------
# Modifier areas
# ---------------------------------------------------------------------------

def _inner_climate(ctx: InsightContext) -> ModifierAreaReading | None:
    result = None
    if ctx.terrain_type == COLD_DEFICIENT:
        reading, advice, detail = tables.INNER_CLIMATE_COLD
        result = ModifierAreaReading("inner_climate", reading, advice, [ReadingReason(SOURCE_QUIZ, detail)])
    elif ctx.terrain_type == WARM_EXCESS:
        reading, advice, detail = tables.INNER_CLIMATE_HOT
        result = ModifierAreaReading("inner_climate", reading, advice, [ReadingReason(SOURCE_QUIZ, detail)])

    feeling = ctx.signals.active_thermal
    if thermal_mismatch(feeling, ctx.terrain_type):
        reading, advice = tables.THERMAL_MISMATCH_READINGS[thermal_direction(feeling)]
        reason = ReadingReason(SOURCE_CHECK_IN, f"You felt {feeling}, which runs against your terrain")
        if result is None:
            result = ModifierAreaReading("inner_climate", reading, advice, [reason])
        else:
            result.reading, result.balance_advice = reading, advice
            result.reasons.append(reason)
    return result


FLUID_STOOLS = frozenset({"loose", "sticky", "constipated"})


def _fluid_balance(ctx: InsightContext) -> ModifierAreaReading | None:
    result = None
    if ctx.modifier == MODIFIER_DAMP:
        reading, advice, detail = tables.FLUID_DAMP
        result = ModifierAreaReading("fluid_balance", reading, advice, [ReadingReason(SOURCE_QUIZ, detail)])
    elif ctx.modifier == MODIFIER_DRY:
        reading, advice, detail = tables.FLUID_DRY
        result = ModifierAreaReading("fluid_balance", reading, advice, [ReadingReason(SOURCE_QUIZ, detail)])

    stool = ctx.signals.active_stool
    if stool in FLUID_STOOLS:
        reading, advice, _ = tables.STOOL_SIGNAL_READINGS[stool]
        reason = ReadingReason(SOURCE_CHECK_IN, f"You reported {stool} stools today")
        if result is None:
            result = ModifierAreaReading("fluid_balance", reading, advice, [reason])
        else:
            result.reading, result.balance_advice = reading, advice
            result.reasons.append(reason)
    return result


def _qi_movement(ctx: InsightContext) -> ModifierAreaReading | None:
    reasons: list[ReadingReason] = []
    text = None
    if ctx.modifier == MODIFIER_STAGNATION:
        reading, advice, detail = tables.QI_STAGNATION_READING
        text = (reading, advice)
        reasons.append(ReadingReason(SOURCE_QUIZ, detail))
    if ctx.signals.active_emotion == "irritable":
        text = tables.QI_IRRITABLE_TODAY
        reasons.append(ReadingReason(SOURCE_CHECK_IN, "You felt irritable today"))
    blocked = [s for s in ("stiff", "stressed") if s in ctx.symptoms]
    if blocked:
        text = tables.QI_BLOCKED_TODAY
        reasons.append(ReadingReason(SOURCE_SYMPTOMS, f"You checked '{blocked[0]}' today"))
    if text is None:
        return None
    return ModifierAreaReading("qi_movement", text[0], text[1], reasons)


def generate_modifier_area_readings(ctx: InsightContext) -> list[ModifierAreaReading]:
    """Inner climate, fluid balance and qi movement readings that apply today."""
    readings = [_inner_climate(ctx), _fluid_balance(ctx), _qi_movement(ctx)]
    return [r for r in readings if r is not None]


# ---------------------------------------------------------------------------
# Why-for-you and daily tone
# ---------------------------------------------------------------------------

def generate_why_for_you(
    tags: Iterable[str],
    terrain_type: str,
    modifier: str | None = None,
    *,
    kind: str = "routine",
) -> str | None:
    """Terrain-specific sentence on why a routine or ingredient matters, or None."""
    ctx = WhyContext(frozenset(tags), terrain_type, normalize_modifier(modifier))
    rules = tables.INGREDIENT_WHY_RULES if kind == "ingredient" else tables.ROUTINE_WHY_RULES
    return first_match(rules, ctx)


def daily_tone(terrain_type: str, weather: str | None = None) -> DailyTone:
    label = tables.DAILY_TONE_LABELS.get(terrain_type, tables.DAILY_TONE_LABELS[NEUTRAL_BALANCED])
    note = None
    if weather:
        lowered = weather.lower()
        note = next(
            (text for needles, text in tables.WEATHER_TONE_NOTES if any(n in lowered for n in needles)),
            None,
        )
    return DailyTone(label=label, environmental_note=note)


def compose_home_insights(ctx: InsightContext) -> dict:
    """Everything the home screen shows, as plain data."""
    logger.debug(
        "Composing insights for %s/%s (symptoms=%d, signals=%s)",
        ctx.terrain_type, ctx.modifier, len(ctx.symptoms), not ctx.signals.is_empty,
    )
    return {
        "headline": generate_headline(ctx).to_dict(),
        "do_dont": generate_do_dont(ctx).to_dict(),
        "life_areas": [r.to_dict() for r in generate_life_area_readings(ctx)],
        "modifier_areas": [r.to_dict() for r in generate_modifier_area_readings(ctx)],
        "daily_tone": daily_tone(ctx.terrain_type, ctx.weather).to_dict(),
    }
