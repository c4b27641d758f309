"""Terrain classifier — quiz answers to vector to primary type and modifier.

Both entry points are pure functions. The answer form folds every known
option's deltas into a fresh vector (clamping after each step) and then
delegates to the vector form.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from terrain.domains.wellness.domain_logic.quiz_tables import QUESTIONS_BY_ID, QuizQuestion
from terrain.domains.wellness.domain_logic.terrain_models import (
    FLUID_THRESHOLD,
    MODIFIER_DAMP,
    MODIFIER_DRY,
    MODIFIER_NONE,
    MODIFIER_SHEN,
    MODIFIER_STAGNATION,
    MODIFIER_TIE_PRIORITY,
    SHEN_THRESHOLD,
    STAGNATION_THRESHOLD,
    ScoringResult,
    Vector,
    primary_type_for,
)

logger = logging.getLogger(__name__)


def select_modifier(vector: Vector) -> str:
    """Pick at most one modifier from the fluid extremes and one-sided axes.

    A candidate must clear its threshold. The largest magnitude wins; exact
    ties go to shen, then stagnation, then the fluid modifiers.
    """
    candidates: list[tuple[str, int]] = []
    if vector.shen_unsettled >= SHEN_THRESHOLD:
        candidates.append((MODIFIER_SHEN, vector.shen_unsettled))
    if vector.qi_stagnation >= STAGNATION_THRESHOLD:
        candidates.append((MODIFIER_STAGNATION, vector.qi_stagnation))
    if vector.damp_dry <= -FLUID_THRESHOLD:
        candidates.append((MODIFIER_DAMP, -vector.damp_dry))
    elif vector.damp_dry >= FLUID_THRESHOLD:
        candidates.append((MODIFIER_DRY, vector.damp_dry))

    if not candidates:
        return MODIFIER_NONE

    candidates.sort(key=lambda c: (-c[1], MODIFIER_TIE_PRIORITY[c[0]]))
    return candidates[0][0]


def classify_vector(vector: Vector, flags: Iterable[str] = ()) -> ScoringResult:
    """Classify a vector into a primary type and modifier."""
    result = ScoringResult(
        vector=vector,
        primary_type=primary_type_for(vector),
        modifier=select_modifier(vector),
        flags=frozenset(flags),
    )
    logger.debug(
        "Classified %s -> %s (modifier=%s)",
        vector.as_dict(),
        result.primary_type,
        result.modifier,
    )
    return result


def build_vector(
    answers: Iterable[tuple[str, str]],
    questions: Mapping[str, QuizQuestion] = QUESTIONS_BY_ID,
) -> tuple[Vector, frozenset[str]]:
    """Fold answer deltas into a vector and collect flags.

    Unknown question or option ids contribute nothing.
    """
    vector = Vector()
    flags: set[str] = set()
    for question_id, option_id in answers:
        question = questions.get(question_id)
        if question is None:
            logger.debug("Ignoring unknown question id %r", question_id)
            continue
        option = question.option(option_id)
        if option is None:
            logger.debug("Ignoring unknown option %r for %s", option_id, question_id)
            continue
        vector = vector.add(option.deltas, weight=question.weight)
        flags.update(option.flags)
    return vector, frozenset(flags)


def classify_answers(
    answers: Iterable[tuple[str, str]],
    questions: Mapping[str, QuizQuestion] = QUESTIONS_BY_ID,
) -> ScoringResult:
    """Classify an ordered list of (question_id, option_id) answers."""
    vector, flags = build_vector(answers, questions)
    return classify_vector(vector, flags)
