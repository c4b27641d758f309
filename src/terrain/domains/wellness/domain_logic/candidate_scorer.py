"""Candidate scorer — multi-factor ranking of ingredients and routines for a need.

Every contribution is an independent additive term. Integer terms decide the
ranking; cabinet ownership and routine effectiveness add fractional
increments that together stay below 1 so they only separate otherwise tied
candidates.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from terrain.domains.wellness.domain_logic.signals import DiagnosticSignals, unexpected_thermal
from terrain.domains.wellness.domain_logic.suggestion_models import (
    APPETITE_SIGNAL_TAGS,
    COOLING,
    EMOTION_SIGNAL_TAGS,
    MODIFIER_TAGS,
    NEED_SYMPTOM_BOOSTS,
    NEEDS,
    SLEEP_SIGNAL_TAGS,
    STOOL_SIGNAL_TAGS,
    SYMPTOM_TAGS,
    TERRAIN_TAGS,
    THERMAL_SIGNAL_TAGS,
    TIME_TAGS,
    WARMING,
    Candidate,
    QuickNeed,
    Suggestion,
)
from terrain.domains.wellness.domain_logic.terrain_models import normalize_modifier

logger = logging.getLogger(__name__)

# Scoring weights
NEED_TAG_WEIGHT = 3
TERRAIN_FIT_BONUS = 4
TERRAIN_TAG_BONUS = 2
MODIFIER_BONUS = 2
SYMPTOM_BONUS = 3
NEED_GOAL_BONUS = 2
USER_GOAL_BONUS = 1
TIME_BONUS = 2
SEASON_BONUS = 1
AVOID_GUIDANCE_BONUS = 1
SIGNAL_BONUS = 2
AVOID_TAG_PENALTY = 4
THERMAL_CONTRADICTION_PENALTY = 2

# Tie-break increments (sum stays below one integer point)
CABINET_INCREMENT = 0.25
EFFECTIVENESS_INCREMENT = 0.25

# Ordering weights for ordered_needs
NEED_SYMPTOM_OVERLAP_WEIGHT = 2


@dataclass(frozen=True)
class ScoringContext:
    """Everything about the user and the moment that a candidate is scored against."""

    terrain_type: str
    modifier: str = "none"
    symptoms: frozenset[str] = frozenset()
    time_of_day: str | None = None
    season: str | None = None
    avoid_tags: frozenset[str] = frozenset()
    completed_ids: frozenset[str] = frozenset()
    cabinet_ids: frozenset[str] = frozenset()
    user_goals: frozenset[str] = frozenset()
    routine_effectiveness: Mapping[str, float] = field(default_factory=dict)
    signals: DiagnosticSignals = field(default_factory=DiagnosticSignals)

    @property
    def symptom_tags(self) -> frozenset[str]:
        tags: set[str] = set()
        for symptom in self.symptoms:
            tags |= SYMPTOM_TAGS.get(symptom, frozenset())
        return frozenset(tags)


# ---------------------------------------------------------------------------
# Tag helpers
# ---------------------------------------------------------------------------

def terrain_recommended_tags(terrain_type: str, modifier: str | None = None) -> frozenset[str]:
    """Tags that generally suit a terrain, plus the active modifier's tags."""
    tags = set(TERRAIN_TAGS.get(terrain_type, frozenset()))
    tags |= MODIFIER_TAGS.get(normalize_modifier(modifier), frozenset())
    return frozenset(tags)


def signal_tag_boosts(signals: DiagnosticSignals, terrain_type: str) -> list[frozenset[str]]:
    """Tag families boosted by today's check-in, one entry per active signal.

    Thermal feelings only count when they are unexpected for the terrain: a
    cold type feeling cold is already covered by the terrain tags.
    """
    boosts: list[frozenset[str]] = []
    if signals.active_sleep in SLEEP_SIGNAL_TAGS:
        boosts.append(SLEEP_SIGNAL_TAGS[signals.active_sleep])
    if signals.active_emotion in EMOTION_SIGNAL_TAGS:
        boosts.append(EMOTION_SIGNAL_TAGS[signals.active_emotion])
    thermal = signals.active_thermal
    if thermal in THERMAL_SIGNAL_TAGS and unexpected_thermal(thermal, terrain_type):
        boosts.append(THERMAL_SIGNAL_TAGS[thermal])
    if signals.active_stool in STOOL_SIGNAL_TAGS:
        boosts.append(STOOL_SIGNAL_TAGS[signals.active_stool])
    if signals.active_appetite in APPETITE_SIGNAL_TAGS:
        boosts.append(APPETITE_SIGNAL_TAGS[signals.active_appetite])
    return boosts


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

def score_candidate(
    candidate: Candidate, need: QuickNeed, context: ScoringContext
) -> dict[str, float]:
    """Return the non-zero score contributions for one candidate, keyed by name."""
    tags = candidate.tags
    parts: dict[str, float] = {}

    matched = len(tags & need.relevant_tags)
    if matched:
        parts["need_tags"] = NEED_TAG_WEIGHT * matched

    if context.terrain_type in candidate.terrain_fit:
        parts["terrain_fit"] = TERRAIN_FIT_BONUS
    elif tags & TERRAIN_TAGS.get(context.terrain_type, frozenset()):
        parts["terrain_tags"] = TERRAIN_TAG_BONUS

    if tags & MODIFIER_TAGS.get(context.modifier, frozenset()):
        parts["modifier"] = MODIFIER_BONUS

    symptom_tags = context.symptom_tags
    if tags & symptom_tags:
        parts["symptoms"] = SYMPTOM_BONUS

    if candidate.goals & need.relevant_goals:
        parts["need_goals"] = NEED_GOAL_BONUS
    if candidate.goals & context.user_goals:
        parts["user_goals"] = USER_GOAL_BONUS

    if context.time_of_day and tags & TIME_TAGS.get(context.time_of_day, frozenset()):
        parts["time_of_day"] = TIME_BONUS
    if context.season and context.season in candidate.seasons:
        parts["season"] = SEASON_BONUS

    if candidate.avoid_for_hours > 0:
        parts["avoid_guidance"] = AVOID_GUIDANCE_BONUS

    signal_points = sum(
        SIGNAL_BONUS for family in signal_tag_boosts(context.signals, context.terrain_type)
        if tags & family
    )
    if signal_points:
        parts["signals"] = signal_points

    if tags & context.avoid_tags:
        parts["avoid_tags"] = -AVOID_TAG_PENALTY

    # Both-ways candidates lose out when symptoms point in one thermal direction.
    if WARMING in tags and COOLING in tags:
        wants_warm = WARMING in symptom_tags
        wants_cool = COOLING in symptom_tags
        if wants_warm != wants_cool:
            parts["thermal_contradiction"] = -THERMAL_CONTRADICTION_PENALTY

    if candidate.id in context.cabinet_ids:
        parts["cabinet"] = CABINET_INCREMENT
    effectiveness = context.routine_effectiveness.get(candidate.id)
    if effectiveness:
        parts["effectiveness"] = EFFECTIVENESS_INCREMENT * max(-1.0, min(1.0, effectiveness))

    return parts


def _fallback(need: QuickNeed) -> Suggestion:
    fb = need.fallback
    return Suggestion(
        title=fb.title,
        description=fb.description,
        score=0,
        avoid_hours=fb.avoid_hours,
    )


def best_candidate(
    need: QuickNeed,
    context: ScoringContext,
    candidates: Iterable[Candidate],
) -> Suggestion:
    """Pick the highest-scoring candidate, or the need's fallback.

    Completed candidates are skipped. A later candidate replaces the current
    best only when it scores strictly higher, so ties keep input order.
    """
    best: Candidate | None = None
    best_parts: dict[str, float] = {}
    best_score = 0.0

    for candidate in candidates:
        if candidate.id in context.completed_ids:
            continue
        parts = score_candidate(candidate, need, context)
        score = sum(parts.values())
        if score > best_score:
            best, best_parts, best_score = candidate, parts, score

    if best is None:
        logger.debug("No candidate scored above zero for need %s; using fallback", need.id)
        return _fallback(need)

    logger.debug("Need %s -> %s (score=%.2f)", need.id, best.id, best_score)
    return Suggestion(
        title=best.display_name,
        description=best.description,
        score=best_score,
        source_id=best.id,
        kind=best.kind,
        avoid_hours=best.avoid_for_hours or None,
        avoid_notes=best.avoid_notes,
        contributions=best_parts,
    )


def suggest(
    need: str,
    terrain_type: str,
    modifier: str | None,
    symptoms: Iterable[str],
    time_of_day: str | None,
    ingredients: Iterable[Candidate],
    routines: Iterable[Candidate],
    *,
    avoid_tags: Iterable[str] = (),
    season: str | None = None,
    completed_ids: Iterable[str] = (),
    cabinet_ids: Iterable[str] = (),
    user_goals: Iterable[str] = (),
    routine_effectiveness: Mapping[str, float] | None = None,
    signals: DiagnosticSignals | None = None,
) -> Suggestion:
    """Best ingredient or routine for a need, across both pools.

    Raises KeyError for an unknown need id; callers validate need ids at the
    edge.
    """
    quick_need = NEEDS[need]
    context = ScoringContext(
        terrain_type=terrain_type,
        modifier=normalize_modifier(modifier),
        symptoms=frozenset(symptoms),
        time_of_day=time_of_day,
        season=season,
        avoid_tags=frozenset(avoid_tags),
        completed_ids=frozenset(completed_ids),
        cabinet_ids=frozenset(cabinet_ids),
        user_goals=frozenset(user_goals),
        routine_effectiveness=routine_effectiveness or {},
        signals=signals or DiagnosticSignals(),
    )
    return best_candidate(quick_need, context, [*ingredients, *routines])


def ordered_needs(symptoms: Iterable[str]) -> list[str]:
    """Need ids ordered by relevance to today's symptoms.

    A need gains weight for every symptom whose tags overlap its own and for
    direct symptom/need pairings. Ties keep the default need order.
    """
    symptom_set = frozenset(symptoms)
    weights: dict[str, int] = {}
    for need in NEEDS.values():
        weight = 0
        for symptom in symptom_set:
            if SYMPTOM_TAGS.get(symptom, frozenset()) & need.relevant_tags:
                weight += NEED_SYMPTOM_OVERLAP_WEIGHT
            weight += NEED_SYMPTOM_BOOSTS.get((symptom, need.id), 0)
        weights[need.id] = weight
    return sorted(NEEDS, key=lambda need_id: -weights[need_id])
