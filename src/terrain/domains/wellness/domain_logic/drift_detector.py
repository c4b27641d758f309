"""Pulse check drift detection.

A pulse check asks one question per axis. The answers are turned into a
vector, classified, and compared against the stored classification.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from terrain.domains.wellness.domain_logic.classifier import classify_vector, select_modifier
from terrain.domains.wellness.domain_logic.terrain_models import (
    COLD_HEAT,
    DAMP_DRY,
    DEF_EXCESS,
    FLUID_THRESHOLD,
    MODIFIER_DAMP,
    MODIFIER_DISPLAY_NAMES,
    MODIFIER_DRY,
    MODIFIER_NONE,
    MODIFIER_SHEN,
    MODIFIER_STAGNATION,
    NEUTRAL_BALANCED,
    QI_STAGNATION,
    SHEN_THRESHOLD,
    SHEN_UNSETTLED,
    STAGNATION_THRESHOLD,
    TERRAIN_TYPES,
    Vector,
    normalize_modifier,
    reserve_band,
    thermal_band,
)

logger = logging.getLogger(__name__)

NO_CHANGE = "no_change"
MINOR_SHIFT = "minor_shift"
SIGNIFICANT_DRIFT = "significant_drift"


@dataclass(frozen=True)
class PulseOption:
    id: int
    text: str
    value: int


@dataclass(frozen=True)
class PulseQuestion:
    id: int
    text: str
    axis: str
    options: tuple[PulseOption, ...]

    def value_for(self, option_id: int) -> int | None:
        for opt in self.options:
            if opt.id == option_id:
                return opt.value
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "axis": self.axis,
            "options": [{"id": o.id, "text": o.text, "value": o.value} for o in self.options],
        }


# Fluid options sit at +/-5 so a pulse answer can still reach the fluid
# modifier threshold.
PULSE_QUESTIONS: tuple[PulseQuestion, ...] = (
    PulseQuestion(1, "Lately, do you run cold or warm?", COLD_HEAT, (
        PulseOption(1, "Cold hands and feet", -3),
        PulseOption(2, "Comfortable", 0),
        PulseOption(3, "Run warm, seek cool", 3),
    )),
    PulseQuestion(2, "How's your energy been?", DEF_EXCESS, (
        PulseOption(4, "Tired often, need rest", -3),
        PulseOption(5, "Steady and adequate", 0),
        PulseOption(6, "Restless, excess energy", 3),
    )),
    PulseQuestion(3, "Any fluid or moisture patterns?", DAMP_DRY, (
        PulseOption(7, "Heavy, puffy, sluggish digestion", -5),
        PulseOption(8, "Normal", 0),
        PulseOption(9, "Dry skin, thirsty, constipated", 5),
    )),
    PulseQuestion(4, "How does your body feel in terms of tension?", QI_STAGNATION, (
        PulseOption(10, "Relaxed and flowing", 0),
        PulseOption(11, "Some tightness", 2),
        PulseOption(12, "Stuck, stiff, headaches", 4),
    )),
    PulseQuestion(5, "How's your sleep and mind?", SHEN_UNSETTLED, (
        PulseOption(13, "Peaceful, sleep well", 0),
        PulseOption(14, "Occasionally restless", 2),
        PulseOption(15, "Racing thoughts, poor sleep", 4),
    )),
)

PULSE_QUESTIONS_BY_ID: dict[int, PulseQuestion] = {q.id: q for q in PULSE_QUESTIONS}

# One-sided axes: the modifier each one raises and its threshold.
_ONE_SIDED_AXES: dict[str, tuple[str, int]] = {
    SHEN_UNSETTLED: (MODIFIER_SHEN, SHEN_THRESHOLD),
    QI_STAGNATION: (MODIFIER_STAGNATION, STAGNATION_THRESHOLD),
}


@dataclass(frozen=True)
class DriftResult:
    current_type: str
    current_modifier: str
    pulse_type: str
    pulse_modifier: str
    recommendation: str

    @property
    def has_drifted(self) -> bool:
        return self.recommendation != NO_CHANGE

    @property
    def drift_summary(self) -> str:
        if self.recommendation == SIGNIFICANT_DRIFT:
            return "Your body may have shifted. Consider retaking the full assessment."
        if self.recommendation == MINOR_SHIFT:
            name = MODIFIER_DISPLAY_NAMES[self.pulse_modifier]
            if not name:
                return "A secondary pattern may have changed."
            return f"Your {name} pattern may have changed."
        return "Your terrain profile is stable."

    def to_dict(self) -> dict:
        return {
            "current_type": self.current_type,
            "current_modifier": self.current_modifier,
            "pulse_type": self.pulse_type,
            "pulse_modifier": self.pulse_modifier,
            "recommendation": self.recommendation,
            "has_drifted": self.has_drifted,
            "drift_summary": self.drift_summary,
        }


def build_pulse_vector(
    answers: Mapping[int, int],
    questions: Mapping[int, PulseQuestion] = PULSE_QUESTIONS_BY_ID,
) -> Vector:
    """Build a vector from {pulse_question_id: option_id} answers.

    Each known question sets its axis to the chosen option's value; unknown
    question or option ids leave the axis at zero.
    """
    values: dict[str, int] = {}
    for question_id, option_id in answers.items():
        question = questions.get(question_id)
        if question is None:
            continue
        value = question.value_for(option_id)
        if value is None:
            continue
        values[question.axis] = value
    return Vector(**values)


def _axis_class(axis: str, value: int, modifier: str | None = None) -> str:
    """What one axis value contributes to a classification.

    Thermal and reserve axes contribute their band. The modifier axes only
    matter when they decide the modifier: pass ``modifier`` to classify a
    stored value by the modifier its whole vector selected, or leave it out
    to classify a lone option value by its threshold.
    """
    if axis == COLD_HEAT:
        return thermal_band(value)
    if axis == DEF_EXCESS:
        return reserve_band(value)
    if axis == DAMP_DRY:
        if modifier is not None:
            return modifier if modifier in (MODIFIER_DAMP, MODIFIER_DRY) else MODIFIER_NONE
        if value <= -FLUID_THRESHOLD:
            return MODIFIER_DAMP
        if value >= FLUID_THRESHOLD:
            return MODIFIER_DRY
        return MODIFIER_NONE
    axis_modifier, threshold = _ONE_SIDED_AXES[axis]
    if modifier is not None:
        return axis_modifier if modifier == axis_modifier else MODIFIER_NONE
    return axis_modifier if value >= threshold else MODIFIER_NONE


def representative_answers(
    vector: Vector,
    questions: tuple[PulseQuestion, ...] = PULSE_QUESTIONS,
) -> dict[int, int]:
    """Choose, per pulse question, an option that classifies like the vector.

    Options are limited to those in the same band (or modifier role) as the
    stored axis value, then the nearest value wins, so a pulse answered with
    these options reads as no change. Useful for seeding a pulse check from a
    stored quiz vector.
    """
    stored_modifier = select_modifier(vector)
    answers: dict[int, int] = {}
    axis_values = vector.as_dict()
    for question in questions:
        target = axis_values[question.axis]
        wanted = _axis_class(question.axis, target, stored_modifier)
        same_class = [
            o for o in question.options if _axis_class(question.axis, o.value) == wanted
        ]
        nearest = min(same_class or question.options, key=lambda o: abs(o.value - target))
        answers[question.id] = nearest.id
    return answers


def recommend(
    current_type: str, current_modifier: str, pulse_type: str, pulse_modifier: str
) -> str:
    """A type mismatch always dominates a modifier mismatch."""
    if pulse_type != current_type:
        return SIGNIFICANT_DRIFT
    if pulse_modifier != current_modifier:
        return MINOR_SHIFT
    return NO_CHANGE


def detect_drift(
    answers: Mapping[int, int],
    current_type_id: str,
    current_modifier_id: str | None = None,
) -> DriftResult:
    """Re-classify pulse answers and compare against the stored terrain."""
    current_type = current_type_id if current_type_id in TERRAIN_TYPES else NEUTRAL_BALANCED
    current_modifier = normalize_modifier(current_modifier_id)

    pulse = classify_vector(build_pulse_vector(answers))
    result = DriftResult(
        current_type=current_type,
        current_modifier=current_modifier,
        pulse_type=pulse.primary_type,
        pulse_modifier=pulse.modifier,
        recommendation=recommend(
            current_type, current_modifier, pulse.primary_type, pulse.modifier
        ),
    )
    logger.debug("Pulse drift check: %s", result.recommendation)
    return result
