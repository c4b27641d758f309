"""Unit tests for the terrain vector and classifier.

Covers clamping, band boundaries, modifier selection and the quiz answer
path end to end.
"""

from __future__ import annotations

import pytest

from terrain.domains.wellness.domain_logic.classifier import (
    build_vector,
    classify_answers,
    classify_vector,
    select_modifier,
)
from terrain.domains.wellness.domain_logic.quiz_tables import QUIZ_QUESTIONS
from terrain.domains.wellness.domain_logic.terrain_models import (
    AXES,
    AXIS_BOUNDS,
    COLD_BALANCED,
    COLD_DEFICIENT,
    FLAG_LOOSE_STOOL,
    FLAG_REFLUX,
    MODIFIER_DAMP,
    MODIFIER_DRY,
    MODIFIER_NONE,
    MODIFIER_SHEN,
    MODIFIER_STAGNATION,
    NEUTRAL_BALANCED,
    NEUTRAL_DEFICIENT,
    TERRAIN_TYPES,
    WARM_BALANCED,
    WARM_EXCESS,
    Vector,
    normalize_modifier,
    primary_type_for,
)


# ---------------------------------------------------------------------------
# Vector
# ---------------------------------------------------------------------------

class TestVectorClamping:
    def test_construction_clamps_every_axis(self):
        v = Vector(cold_heat=15, def_excess=-40, damp_dry=11, qi_stagnation=-3, shen_unsettled=99)
        assert v.as_dict() == {
            "cold_heat": 10,
            "def_excess": -10,
            "damp_dry": 10,
            "qi_stagnation": 0,
            "shen_unsettled": 10,
        }

    def test_add_clamps_after_each_step(self):
        v = Vector(cold_heat=9).add({"cold_heat": 5})
        assert v.cold_heat == 10
        assert v.add({"cold_heat": -3}).cold_heat == 7

    def test_weighted_delta_truncates_toward_zero(self):
        assert Vector().add({"cold_heat": 3}, weight=0.6).cold_heat == 1
        assert Vector().add({"cold_heat": -3}, weight=0.6).cold_heat == -1

    def test_unknown_axis_ignored(self):
        assert Vector().add({"not_an_axis": 5}) == Vector()

    def test_every_quiz_answer_path_stays_in_bounds(self):
        # Always pick the most extreme option for every question.
        for pick in (0, -1):
            answers = [(q.id, q.options[pick].id) for q in QUIZ_QUESTIONS]
            vector, _ = build_vector(answers)
            for axis in AXES:
                lo, hi = AXIS_BOUNDS[axis]
                assert lo <= getattr(vector, axis) <= hi


# ---------------------------------------------------------------------------
# Primary type
# ---------------------------------------------------------------------------

class TestPrimaryType:
    def test_minus_three_is_cold_band(self):
        assert primary_type_for(Vector(cold_heat=-3)) == COLD_BALANCED

    def test_minus_two_is_neutral(self):
        assert primary_type_for(Vector(cold_heat=-2)) == NEUTRAL_BALANCED

    def test_plus_three_is_warm_band(self):
        assert primary_type_for(Vector(cold_heat=3)) == WARM_BALANCED

    def test_reserve_boundaries_match_thermal(self):
        assert primary_type_for(Vector(def_excess=-3)) == NEUTRAL_DEFICIENT
        assert primary_type_for(Vector(def_excess=-2)) == NEUTRAL_BALANCED
        assert primary_type_for(Vector(cold_heat=3, def_excess=3)) == WARM_EXCESS

    def test_cold_excess_maps_to_cold_balanced(self):
        assert primary_type_for(Vector(cold_heat=-6, def_excess=6)) == COLD_BALANCED

    def test_zero_vector_is_neutral_balanced(self):
        result = classify_vector(Vector())
        assert result.primary_type == NEUTRAL_BALANCED
        assert result.modifier == MODIFIER_NONE


# ---------------------------------------------------------------------------
# Modifier
# ---------------------------------------------------------------------------

class TestSelectModifier:
    def test_below_threshold_is_none(self):
        assert select_modifier(Vector(shen_unsettled=3, qi_stagnation=3, damp_dry=4)) == MODIFIER_NONE

    def test_shen_at_threshold(self):
        assert select_modifier(Vector(shen_unsettled=4)) == MODIFIER_SHEN

    def test_fluid_extremes(self):
        assert select_modifier(Vector(damp_dry=-5)) == MODIFIER_DAMP
        assert select_modifier(Vector(damp_dry=5)) == MODIFIER_DRY

    def test_equal_shen_and_stagnation_resolves_to_shen(self):
        assert select_modifier(Vector(shen_unsettled=6, qi_stagnation=6)) == MODIFIER_SHEN

    def test_larger_stagnation_beats_shen(self):
        assert select_modifier(Vector(shen_unsettled=5, qi_stagnation=7)) == MODIFIER_STAGNATION

    def test_stagnation_wins_tie_with_fluid(self):
        assert select_modifier(Vector(qi_stagnation=5, damp_dry=-5)) == MODIFIER_STAGNATION

    def test_larger_fluid_beats_shen(self):
        assert select_modifier(Vector(shen_unsettled=4, damp_dry=8)) == MODIFIER_DRY

    @pytest.mark.parametrize("raw", [None, "", "bogus"])
    def test_normalize_unknown_modifier(self, raw):
        assert normalize_modifier(raw) == MODIFIER_NONE


# ---------------------------------------------------------------------------
# Quiz answers
# ---------------------------------------------------------------------------

class TestClassifyAnswers:
    def test_cold_deficient_end_to_end(self):
        result = classify_answers([
            ("q1_run_temp", "always_cold"),
            ("q3_sweat_night", "hardly_sweat"),
            ("q4_energy_pattern", "low_all_day"),
        ])
        assert result.vector.cold_heat == -5
        assert result.vector.def_excess == -5
        assert result.primary_type == COLD_DEFICIENT
        data = result.to_dict()
        assert data["terrain_type_id"] == "cold_deficient_low_flame"
        assert data["label"] == "Cold + Deficient"
        assert data["nickname"] == "Low Flame"
        assert data["modifier"] == MODIFIER_NONE

    def test_shen_modifier_from_answers(self):
        result = classify_answers([
            ("q5_stress_response", "gets_anxious"),
            ("q11_mood_flow", "restless"),
        ])
        assert result.vector.shen_unsettled == 6
        assert result.modifier == MODIFIER_SHEN
        assert result.to_dict()["modifier_display_name"] == "Shen (Restless)"

    def test_flags_collected(self):
        result = classify_answers([
            ("q6_after_meals", "acid_reflux"),
            ("q7_stools_usually", "loose_soft"),
        ])
        assert result.flags == frozenset({FLAG_REFLUX, FLAG_LOOSE_STOOL})

    def test_question_weight_applied(self):
        result = classify_answers([("q8_cravings", "spicy")])
        assert result.vector.cold_heat == 0

    def test_unknown_ids_contribute_nothing(self):
        result = classify_answers([
            ("q99_unknown", "whatever"),
            ("q1_run_temp", "not_an_option"),
        ])
        assert result.vector == Vector()
        assert result.primary_type == NEUTRAL_BALANCED

    def test_every_type_id_is_stable_snake_case(self):
        for type_id in TERRAIN_TYPES:
            assert type_id == type_id.lower()
            assert " " not in type_id
