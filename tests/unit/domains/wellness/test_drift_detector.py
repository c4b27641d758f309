"""Unit tests for pulse-check drift detection."""

from __future__ import annotations

import pytest

from terrain.domains.wellness.domain_logic.classifier import classify_answers, classify_vector
from terrain.domains.wellness.domain_logic.drift_detector import (
    MINOR_SHIFT,
    NO_CHANGE,
    PULSE_QUESTIONS,
    SIGNIFICANT_DRIFT,
    build_pulse_vector,
    detect_drift,
    recommend,
    representative_answers,
)
from terrain.domains.wellness.domain_logic.terrain_models import (
    AXES,
    COLD_DEFICIENT,
    MODIFIER_DAMP,
    MODIFIER_NONE,
    MODIFIER_SHEN,
    NEUTRAL_BALANCED,
    WARM_EXCESS,
    Vector,
)

# Cold hands, tired, normal fluids, relaxed, peaceful.
COLD_DEFICIENT_PULSE = {1: 1, 2: 4, 3: 8, 4: 10, 5: 13}


class TestBuildPulseVector:
    def test_answers_set_axes(self):
        v = build_pulse_vector(COLD_DEFICIENT_PULSE)
        assert v == Vector(cold_heat=-3, def_excess=-3)

    def test_unknown_ids_leave_axis_at_zero(self):
        assert build_pulse_vector({9: 1, 1: 99}) == Vector()

    def test_fluid_option_reaches_modifier_threshold(self):
        assert build_pulse_vector({3: 7}).damp_dry == -5


class TestDetectDrift:
    def test_same_type_and_modifier_is_no_change(self):
        result = detect_drift(COLD_DEFICIENT_PULSE, COLD_DEFICIENT, MODIFIER_NONE)
        assert result.recommendation == NO_CHANGE
        assert not result.has_drifted
        assert result.drift_summary == "Your terrain profile is stable."

    def test_type_change_is_significant(self):
        result = detect_drift({1: 3, 2: 6}, COLD_DEFICIENT)
        assert result.pulse_type == WARM_EXCESS
        assert result.recommendation == SIGNIFICANT_DRIFT
        assert "retaking" in result.drift_summary

    def test_type_change_dominates_modifier_state(self):
        # Modifier matches, type does not.
        result = detect_drift({1: 3, 2: 6, 5: 15}, COLD_DEFICIENT, MODIFIER_SHEN)
        assert result.pulse_modifier == MODIFIER_SHEN
        assert result.recommendation == SIGNIFICANT_DRIFT

    def test_modifier_change_is_minor(self):
        answers = {**COLD_DEFICIENT_PULSE, 5: 15}
        result = detect_drift(answers, COLD_DEFICIENT, MODIFIER_NONE)
        assert result.recommendation == MINOR_SHIFT
        assert result.drift_summary == "Your Shen (Restless) pattern may have changed."

    def test_lost_modifier_is_minor(self):
        result = detect_drift(COLD_DEFICIENT_PULSE, COLD_DEFICIENT, MODIFIER_DAMP)
        assert result.recommendation == MINOR_SHIFT
        assert result.drift_summary == "A secondary pattern may have changed."

    def test_unknown_stored_type_defaults_to_neutral_balanced(self):
        result = detect_drift({}, "retired_type_id")
        assert result.current_type == NEUTRAL_BALANCED
        assert result.recommendation == NO_CHANGE

    def test_recommend_table(self):
        assert recommend("a", "none", "a", "none") == NO_CHANGE
        assert recommend("a", "none", "a", "shen") == MINOR_SHIFT
        assert recommend("a", "none", "b", "none") == SIGNIFICANT_DRIFT


class TestRepresentativeAnswers:
    def test_one_answer_per_question(self):
        answers = representative_answers(Vector())
        assert set(answers) == {q.id for q in PULSE_QUESTIONS}

    def test_nearest_option_in_band_chosen(self):
        answers = representative_answers(Vector(cold_heat=-5, def_excess=-5))
        assert answers == COLD_DEFICIENT_PULSE

    def test_quiz_to_pulse_round_trip_is_no_change(self):
        quiz = classify_answers([
            ("q1_run_temp", "always_cold"),
            ("q3_sweat_night", "hardly_sweat"),
            ("q4_energy_pattern", "low_all_day"),
        ])
        assert quiz.primary_type == COLD_DEFICIENT

        result = detect_drift(representative_answers(quiz.vector), quiz.primary_type, quiz.modifier)
        assert result.recommendation == NO_CHANGE

    @pytest.mark.parametrize("axis", AXES)
    def test_every_single_axis_value_reads_as_no_change(self, axis):
        for value in range(-10, 11):
            stored = classify_vector(Vector(**{axis: value}))
            result = detect_drift(
                representative_answers(stored.vector), stored.primary_type, stored.modifier
            )
            assert result.recommendation == NO_CHANGE, (axis, value, result.to_dict())

    def test_values_just_inside_neutral_band_stay_neutral(self):
        answers = representative_answers(Vector(cold_heat=-2, def_excess=2, damp_dry=-3))
        assert answers[1] == 2
        assert answers[2] == 5
        assert answers[3] == 8

    @pytest.mark.parametrize("vector", [
        Vector(qi_stagnation=6, shen_unsettled=4),
        Vector(qi_stagnation=5, shen_unsettled=5),
        Vector(damp_dry=-6, shen_unsettled=4),
        Vector(damp_dry=8, qi_stagnation=7, cold_heat=3, def_excess=-3),
    ])
    def test_competing_modifiers_keep_the_stored_winner(self, vector):
        stored = classify_vector(vector)
        result = detect_drift(representative_answers(vector), stored.primary_type, stored.modifier)
        assert result.recommendation == NO_CHANGE
