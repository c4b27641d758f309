"""Quiz content: questions, options, axis deltas and flags.

Question and option ids are persisted with quiz responses, so they never
change once published. Options may be added; unknown ids are ignored by the
classifier.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from terrain.domains.wellness.domain_logic.terrain_models import (
    COLD_HEAT as CH,
    DAMP_DRY as DD,
    DEF_EXCESS as DE,
    FLAG_CONSTIPATION,
    FLAG_LOOSE_STOOL,
    FLAG_NIGHT_SWEATS,
    FLAG_REFLUX,
    FLAG_STICKY_STOOL,
    FLAG_WAKE_THIRSTY_HOT,
    QI_STAGNATION as QI,
    SHEN_UNSETTLED as SH,
)


@dataclass(frozen=True)
class QuizOption:
    id: str
    label: str
    deltas: dict[str, int] = field(default_factory=dict)
    flags: tuple[str, ...] = ()


@dataclass(frozen=True)
class QuizQuestion:
    id: str
    title: str
    options: tuple[QuizOption, ...]
    weight: float = 1.0

    def option(self, option_id: str) -> QuizOption | None:
        for opt in self.options:
            if opt.id == option_id:
                return opt
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "weight": self.weight,
            "options": [{"id": o.id, "label": o.label} for o in self.options],
        }


def _q(id: str, title: str, *options: QuizOption, weight: float = 1.0) -> QuizQuestion:
    return QuizQuestion(id=id, title=title, options=tuple(options), weight=weight)


def _o(id: str, label: str, flags: tuple[str, ...] = (), **deltas: int) -> QuizOption:
    return QuizOption(id=id, label=label, deltas=deltas, flags=flags)


QUIZ_QUESTIONS: tuple[QuizQuestion, ...] = (
    _q(
        "q1_run_temp", "Do you generally run cold or run hot?",
        _o("always_cold", "Always cold", **{CH: -4}),
        _o("often_cold", "Often cold", **{CH: -2}),
        _o("neutral", "Neutral"),
        _o("often_hot", "Often hot", **{CH: 2}),
        _o("always_hot", "Always hot", **{CH: 4}),
    ),
    _q(
        "q2_drinks_feel_best", "What drinks feel best most of the time?",
        _o("hot_tea", "Hot tea", **{CH: -2}),
        _o("warm_water", "Warm water", **{CH: -1}),
        _o("room_temp", "Room temp"),
        _o("iced", "Iced", **{CH: 1}),
        _o("anything_cold", "Anything cold", **{CH: 2}),
    ),
    _q(
        "q3_sweat_night", "Sweat + nights: which is more you?",
        _o("hardly_sweat", "Hardly sweat", **{CH: -1, DE: -1}),
        _o("sweat_easily", "Sweat easily", **{CH: 1, DE: 1}),
        _o("night_sweats", "Night sweats", (FLAG_NIGHT_SWEATS,), **{CH: 1, DE: -1, DD: 1}),
        _o("wake_thirsty_hot", "Wake up thirsty/hot", (FLAG_WAKE_THIRSTY_HOT,), **{CH: 2, DD: 2}),
        _o("normal", "Normal"),
    ),
    _q(
        "q4_energy_pattern", "Your energy pattern is...",
        _o("low_all_day", "Low all day", **{DE: -4}),
        _o("am_better_crash", "AM better then crash", **{DE: -2}),
        _o("pm_better", "PM better", **{DE: -1, SH: 1}),
        _o("wired_but_tired", "Wired but tired", **{DE: 2, QI: 1, SH: 2}),
        _o("steady", "Steady"),
    ),
    _q(
        "q5_stress_response", "When you're stressed, your body does what first?",
        _o("shuts_down_fatigue", "Shuts down (fatigue)", **{DE: -2}),
        _o("tightens_neck_jaw", "Tightens (neck/jaw)", **{DE: 1, QI: 3}),
        _o("gets_hot_irritable", "Gets hot/irritable", **{CH: 2, DE: 1, QI: 2}),
        _o("gets_bloated", "Gets bloated", **{DD: -2, QI: 2}),
        _o("gets_anxious", "Gets anxious", **{DE: 1, QI: 1, SH: 3}),
    ),
    _q(
        "q6_after_meals", "After meals, you're most likely to feel...",
        _o("light_normal", "Light/normal"),
        _o("sleepy_heavy", "Sleepy heavy", **{DE: -1, DD: -3}),
        _o("bloated_gassy", "Bloated/gassy", **{DD: -2, QI: 1}),
        _o("acid_reflux", "Acid/reflux", (FLAG_REFLUX,), **{CH: 1, QI: 1}),
        _o("hungry_again_quickly", "Hungry again quickly", **{CH: 1, DE: 1}),
    ),
    _q(
        "q7_stools_usually", "Your stools are usually...",
        _o("loose_soft", "Loose/soft", (FLAG_LOOSE_STOOL,), **{CH: -1, DE: -1, DD: -2}),
        _o("normal", "Normal"),
        _o("constipated_dry", "Constipated/dry", (FLAG_CONSTIPATION,), **{CH: 1, DD: 3}),
        _o("alternating", "Alternating", **{DD: -1, QI: 2}),
        _o("sticky_hard_to_wipe", "Sticky, hard to wipe", (FLAG_STICKY_STOOL,), **{DD: -3}),
    ),
    _q(
        "q8_cravings", "Cravings you relate to most:",
        _o("sweet", "Sweet", **{DD: -1}),
        _o("salty", "Salty", **{DD: -1}),
        _o("spicy", "Spicy", **{CH: 1}),
        _o("greasy_fried", "Greasy/fried", **{DD: -2}),
        _o("cold_foods", "Cold foods (ice cream, smoothies)", **{CH: 1}),
        weight=0.6,
    ),
    _q(
        "q9_body_tends", "Your body tends to be...",
        _o("puffy_heavy", "Puffy/heavy", **{DD: -4}),
        _o("normal", "Normal"),
        _o("dry_skin_lips_eyes", "Dry (skin/lips/eyes)", **{DD: 4}),
        _o("mucusy", "Mucusy", **{DD: -3}),
        _o("swollen_legs_face_sometimes", "Swollen legs/face sometimes", **{DD: -3}),
    ),
    _q(
        "q10_thirst_mouth", "Thirst & mouth:",
        _o("rarely_thirsty", "Rarely thirsty", **{CH: -1, DD: -1}),
        _o("sip_a_lot", "Sip a lot", **{DD: 1}),
        _o("very_thirsty", "Very thirsty", **{CH: 1, DD: 3}),
        _o("dry_mouth_at_night", "Dry mouth at night", **{DD: 4, SH: 1}),
        _o("thirst_small_sips", "Thirst but small sips", **{CH: 1, DD: -1}),
    ),
    _q(
        "q11_mood_flow", "Mood/flow: you relate most to...",
        _o("easygoing", "Easygoing"),
        _o("overthinking", "Overthinking", **{QI: 1, SH: 2}),
        _o("irritable_snappy", "Irritable/snappy", **{CH: 1, QI: 3}),
        _o("sad_low", "Sad/low", **{DE: -1, SH: 1}),
        _o("restless", "Restless", **{DE: 1, SH: 3}),
    ),
    _q(
        "q12_sleep", "Sleep is usually...",
        _o("sleep_good", "Fall asleep easy, stay asleep"),
        _o("trouble_falling", "Trouble falling asleep", **{DE: 1, QI: 1, SH: 3}),
        _o("wake_at_night", "Wake at night", **{DD: 1, SH: 2}),
        _o("vivid_dreams", "Vivid dreams", **{QI: 1, SH: 2}),
        _o("wake_tired", "Wake tired", **{DE: -2, SH: 1}),
    ),
)

QUESTIONS_BY_ID: dict[str, QuizQuestion] = {q.id: q for q in QUIZ_QUESTIONS}
