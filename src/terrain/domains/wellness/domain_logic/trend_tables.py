"""Fixed trend content: categories, terrain priorities, watch-fors, notes and healthy zones.

Priority orderings and healthy-zone ranges are authored content, not derived
from a formula. Text lookups are ordered rule lists evaluated top to bottom.
"""

from __future__ import annotations

from dataclasses import dataclass

from terrain.domains.wellness.domain_logic.signals import Rule
from terrain.domains.wellness.domain_logic.terrain_models import (
    COLD_BALANCED,
    COLD_DEFICIENT,
    DEFICIENT_TYPES,
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
# Categories
# ---------------------------------------------------------------------------

MOOD = "mood"
SLEEP = "sleep"
DIGESTION = "digestion"
STRESS = "stress"
ENERGY = "energy"
HEADACHE = "headache"
CRAMPS = "cramps"
STIFFNESS = "stiffness"
SLEEP_DURATION = "sleep_duration"
RESTING_HR = "resting_hr"

# Output order of compute_trends.
CATEGORIES = [
    MOOD,
    SLEEP,
    DIGESTION,
    STRESS,
    ENERGY,
    HEADACHE,
    CRAMPS,
    STIFFNESS,
    SLEEP_DURATION,
    RESTING_HR,
]

CATEGORY_DISPLAY_NAMES = {
    MOOD: "Mood",
    SLEEP: "Sleep",
    DIGESTION: "Digestion",
    STRESS: "Stress",
    ENERGY: "Energy",
    HEADACHE: "Headache",
    CRAMPS: "Cramps",
    STIFFNESS: "Stiffness",
    SLEEP_DURATION: "Sleep Duration",
    RESTING_HR: "Resting HR",
}

UNRANKED_PRIORITY = 99


# ---------------------------------------------------------------------------
# Terrain priority (1 = shown first)
# ---------------------------------------------------------------------------

def _ranks(*categories: str) -> dict[str, int]:
    return {category: rank for rank, category in enumerate(categories, start=1)}


PRIORITY_BY_TERRAIN: dict[str, dict[str, int]] = {
    COLD_DEFICIENT: _ranks(
        ENERGY, DIGESTION, STIFFNESS, SLEEP, MOOD, STRESS, HEADACHE, CRAMPS,
        SLEEP_DURATION, RESTING_HR,
    ),
    COLD_BALANCED: _ranks(
        STIFFNESS, ENERGY, SLEEP, DIGESTION, MOOD, CRAMPS, STRESS, HEADACHE,
        SLEEP_DURATION, RESTING_HR,
    ),
    NEUTRAL_DEFICIENT: _ranks(
        ENERGY, SLEEP, DIGESTION, MOOD, STRESS, STIFFNESS, HEADACHE, CRAMPS,
        SLEEP_DURATION, RESTING_HR,
    ),
    NEUTRAL_BALANCED: _ranks(
        MOOD, ENERGY, SLEEP, DIGESTION, STRESS, STIFFNESS, HEADACHE, CRAMPS,
        SLEEP_DURATION, RESTING_HR,
    ),
    NEUTRAL_EXCESS: _ranks(
        STRESS, STIFFNESS, HEADACHE, SLEEP, MOOD, ENERGY, DIGESTION, CRAMPS,
        SLEEP_DURATION, RESTING_HR,
    ),
    WARM_BALANCED: _ranks(
        SLEEP, HEADACHE, STRESS, DIGESTION, MOOD, ENERGY, STIFFNESS, CRAMPS,
        SLEEP_DURATION, RESTING_HR,
    ),
    WARM_EXCESS: _ranks(
        STRESS, SLEEP, HEADACHE, MOOD, DIGESTION, ENERGY, STIFFNESS, CRAMPS,
        SLEEP_DURATION, RESTING_HR,
    ),
    WARM_DEFICIENT: _ranks(
        SLEEP, ENERGY, STRESS, MOOD, DIGESTION, HEADACHE, STIFFNESS, CRAMPS,
        SLEEP_DURATION, RESTING_HR,
    ),
}


# ---------------------------------------------------------------------------
# Watch-for categories
# ---------------------------------------------------------------------------

WATCH_FOR_BY_TERRAIN: dict[str, frozenset[str]] = {
    COLD_DEFICIENT: frozenset({MOOD, ENERGY}),
    COLD_BALANCED: frozenset({STIFFNESS}),
    NEUTRAL_DEFICIENT: frozenset({MOOD, STRESS}),
    NEUTRAL_BALANCED: frozenset(),
    NEUTRAL_EXCESS: frozenset({SLEEP}),
    WARM_BALANCED: frozenset({DIGESTION}),
    WARM_EXCESS: frozenset({SLEEP, HEADACHE}),
    WARM_DEFICIENT: frozenset({ENERGY}),
}

WATCH_FOR_BY_MODIFIER: dict[str, frozenset[str]] = {
    MODIFIER_SHEN: frozenset({SLEEP, STRESS, MOOD, RESTING_HR}),
    MODIFIER_STAGNATION: frozenset({STIFFNESS, HEADACHE, STRESS}),
    MODIFIER_DAMP: frozenset({DIGESTION, ENERGY}),
    MODIFIER_DRY: frozenset({SLEEP}),
}


def watch_for_categories(terrain_type: str, modifier: str) -> frozenset[str]:
    """Categories that signal trouble for this terrain and modifier."""
    categories = set(WATCH_FOR_BY_TERRAIN.get(terrain_type, frozenset()))
    categories |= WATCH_FOR_BY_MODIFIER.get(modifier, frozenset())
    if terrain_type in DEFICIENT_TYPES:
        categories.add(SLEEP_DURATION)
    return frozenset(categories)


# ---------------------------------------------------------------------------
# Terrain notes for declining trends
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TrendContext:
    """The (category, terrain, modifier) triple that text rules dispatch on."""

    category: str
    terrain_type: str
    modifier: str


def _is(category: str, *terrain_types: str, modifier: str | None = None):
    def predicate(ctx: TrendContext) -> bool:
        if ctx.category != category:
            return False
        if terrain_types and ctx.terrain_type not in terrain_types:
            return False
        return modifier is None or ctx.modifier == modifier

    return predicate


NOTE_IMPROVING = "Trending in a good direction."
NOTE_STABLE = "Holding steady."
NOTE_DEFAULT = "This trend deserves attention. Your terrain suggests focusing on balance."

DECLINE_NOTE_RULES: list[Rule[TrendContext, str]] = [
    Rule(_is(SLEEP, COLD_DEFICIENT, COLD_BALANCED),
         "Cold patterns often struggle with sleep when warmth depletes. Warm feet before bed can help."),
    Rule(_is(SLEEP, WARM_EXCESS, WARM_BALANCED),
         "Heat rises at night, disrupting sleep. Earlier wind-down and cooling foods may help."),
    Rule(_is(SLEEP, WARM_DEFICIENT),
         "Your reserves run thin at night. Nourishing foods and earlier bedtime rebuild what you need."),
    Rule(_is(ENERGY, COLD_DEFICIENT),
         "Low Flame types feel energy dips most. Warm starts and cooked foods rebuild your fire."),
    Rule(_is(ENERGY, NEUTRAL_DEFICIENT),
         "Your battery needs consistent charging. Regular meals and gentle rest fill the tank."),
    Rule(_is(ENERGY, WARM_DEFICIENT),
         "Bright but thin: your energy needs nourishment, not more stimulation."),
    Rule(_is(DIGESTION, COLD_DEFICIENT, COLD_BALANCED),
         "Cold weakens digestive fire. Warm, cooked foods are easier for your system to process."),
    Rule(_is(DIGESTION, WARM_EXCESS),
         "Heat can disrupt digestion. Cooling foods and lighter meals help balance."),
    Rule(_is(STRESS, WARM_EXCESS),
         "Warm types feel stress as heat rising. Cooling practices and release matter more now."),
    Rule(_is(STRESS, NEUTRAL_EXCESS),
         "Excess energy stagnates under stress. Movement is your release valve."),
    Rule(_is(MOOD, COLD_DEFICIENT),
         "Low mood often follows low reserves. Warmth and nourishment lift your spirits naturally."),
    Rule(_is(MOOD, NEUTRAL_DEFICIENT),
         "Energy and mood are closely linked for you. Rest is productive, not lazy."),
    Rule(_is(HEADACHE, WARM_EXCESS, WARM_BALANCED),
         "Heat rises, causing tension headaches. Cooling and releasing pressure helps."),
    Rule(_is(STIFFNESS, COLD_BALANCED),
         "Cold settles into joints. Gentle warmth and movement prevent stagnation."),
    Rule(_is(STIFFNESS, modifier=MODIFIER_STAGNATION),
         "Your energy gets stuck easily. Regular movement keeps things flowing."),
    Rule(_is(SLEEP_DURATION, COLD_DEFICIENT, NEUTRAL_DEFICIENT, WARM_DEFICIENT),
         "Deficient types need more recovery time. Shorter sleep means less rebuilding overnight."),
    Rule(_is(SLEEP_DURATION, WARM_EXCESS),
         "Heat can make sleep restless, cutting total hours. Evening cooling helps you stay asleep longer."),
    Rule(_is(SLEEP_DURATION),
         "Your total sleep time is dropping. Consistent bedtimes help protect sleep quantity."),
    Rule(_is(RESTING_HR, WARM_EXCESS),
         "Rising heart rate can signal accumulating heat. Cooling practices and rest bring it down."),
    Rule(_is(RESTING_HR, COLD_DEFICIENT),
         "Your heart works harder when reserves are low. Gentle nourishment helps your system settle."),
    Rule(_is(RESTING_HR, modifier=MODIFIER_SHEN),
         "An unsettled spirit shows up in your heart rate. Calming practices lower it naturally."),
    Rule(_is(RESTING_HR),
         "Rising resting heart rate may reflect stress or poor recovery. Prioritize rest this week."),
    # Modifier fallbacks
    Rule(_is(SLEEP, modifier=MODIFIER_SHEN),
         "Your mind tends to race. A settling routine before bed helps your spirit rest."),
    Rule(_is(STRESS, modifier=MODIFIER_SHEN),
         "Your shen modifier means stress affects you more deeply. Calming practices are essential."),
    Rule(_is(DIGESTION, modifier=MODIFIER_DAMP),
         "Dampness accumulates when digestion struggles. Light, warm meals help your body process."),
]


# ---------------------------------------------------------------------------
# Terrain pulse text
# ---------------------------------------------------------------------------
# Results are (headline, body) templates. Bodies may use {name}, {name_lower},
# {days}, {day_word}, {span}, {nickname}, {with_modifier} and {modifier_note}.

def _terrain_is(*terrain_types: str):
    def predicate(ctx: TrendContext) -> bool:
        return ctx.terrain_type in terrain_types

    return predicate


DECLINE_PULSE_RULES: list[Rule[TrendContext, tuple[str, str]]] = [
    Rule(_is(SLEEP, COLD_DEFICIENT), (
        "Your sleep has been declining",
        "For Low Flame types, sleep is when your reserves rebuild. This {span} deserves "
        "attention. Warm feet before bed and earlier wind-down can help restore your pattern.")),
    Rule(_is(SLEEP, WARM_EXCESS), (
        "Sleep is showing strain",
        "Heat rises at night for your terrain. When sleep declines, it often means your "
        "system is running too hot. Prioritize evening cooling and earlier quiet time this week.")),
    Rule(_is(SLEEP, modifier=MODIFIER_SHEN), (
        "Your sleep pattern needs attention",
        "With a Shen modifier, your mind races more than most. This sleep decline suggests "
        "your spirit needs settling. Calming routines and less stimulation before bed will help.")),
    Rule(_is(ENERGY, COLD_DEFICIENT), (
        "Energy is trending down",
        "Low Flame types feel energy dips most acutely. This {days}-{day_word} decline is "
        "your body asking for warmth and gentle nourishment. Warm starts and cooked foods "
        "will help rebuild.")),
    Rule(_is(ENERGY, NEUTRAL_DEFICIENT), (
        "Your energy needs attention",
        "Low Battery types can push through fatigue, but it costs you. This decline is a "
        "signal to prioritize rest and regular meals. Your body rebuilds with consistency.")),
    Rule(_is(STRESS, WARM_EXCESS), (
        "Stress is building up",
        "Overclocked types feel stress as rising heat. This trend suggests your system needs "
        "release. Movement, cooling foods and deliberate wind-down will help before it compounds.")),
    Rule(_is(STRESS, modifier=MODIFIER_STAGNATION), (
        "Stress is accumulating",
        "Your Stagnation modifier means stress gets stuck rather than flowing through. "
        "Movement is your release valve, so prioritize it now before tension builds.")),
    Rule(_is(DIGESTION, COLD_DEFICIENT, COLD_BALANCED), (
        "Digestion is struggling",
        "Cold patterns have sensitive digestive fire. This decline suggests your body needs "
        "warmer, easier-to-digest foods. Cooked meals and warm drinks will help.")),
    Rule(_is(DIGESTION, modifier=MODIFIER_DAMP), (
        "Your digestion needs support",
        "With a Damp modifier, digestive struggles mean moisture is accumulating. Light, warm "
        "meals and gentle movement help your body process and drain.")),
    Rule(_is(MOOD, COLD_DEFICIENT), (
        "Mood is dipping",
        "For Low Flame types, mood follows energy. This decline often signals reserve "
        "depletion. Warmth and nourishment will lift your spirits naturally.")),
    Rule(_is(HEADACHE, WARM_EXCESS), (
        "Headaches are increasing",
        "Heat rises for Overclocked types, often causing tension headaches. This trend calls "
        "for cooling practices and releasing pressure before it builds.")),
    Rule(_is(STIFFNESS, modifier=MODIFIER_STAGNATION), (
        "Stiffness is building",
        "Your Stagnation modifier makes you prone to stuck energy showing as stiffness. "
        "Regular movement, even short breaks, keeps things flowing.")),
]

DECLINE_PULSE_DEFAULT = (
    "{name} deserves attention",
    "Your {name_lower} trend has been declining. For {nickname} types{with_modifier}, "
    "this is worth addressing now.",
)

IMPROVING_PULSE_RULES: list[Rule[TrendContext, tuple[str, str]]] = [
    Rule(_is(SLEEP, WARM_EXCESS, WARM_BALANCED), (
        "Your sleep is improving",
        "For {nickname} types, better sleep means your cooling practices are working. Keep "
        "the evening routine steady. This momentum matters.")),
    Rule(_is(ENERGY, COLD_DEFICIENT), (
        "Energy is building",
        "Low Flame types build energy slowly but surely. This upward trend shows your "
        "warming practices are working. Keep kindling that fire.")),
    Rule(_is(DIGESTION), (
        "Digestion is smoothing out",
        "Your digestive pattern is improving. Whatever you've been doing, keep it up. "
        "Consistency is the foundation for lasting change.")),
    Rule(_is(STRESS, WARM_EXCESS), (
        "Stress is easing",
        "Your stress levels are improving. For Overclocked types, this is hard-won progress. "
        "Protect it with continued cooling and release.")),
]

IMPROVING_PULSE_DEFAULT = (
    "{name} is trending well",
    "Your {name_lower} pattern is improving. This is your body responding to the "
    "right inputs. Stay consistent.",
)

STABLE_PULSE_RULES: list[Rule[TrendContext, tuple[str, str]]] = [
    Rule(_terrain_is(COLD_DEFICIENT), (
        "Holding steady",
        "Your patterns are stable, a good sign for Low Flame types. Keep the warmth "
        "consistent and your body will continue building.")),
    Rule(_terrain_is(NEUTRAL_BALANCED), (
        "In your rhythm",
        "Steady Core types thrive on consistency. Your stable trends show your body is "
        "calibrated. Trust your routines.")),
    Rule(_terrain_is(WARM_EXCESS), (
        "Well balanced",
        "For Overclocked types, stability is an achievement. Your cooling and pacing "
        "practices are keeping your heat in check.")),
]

STABLE_PULSE_DEFAULT = (
    "All systems steady",
    "Your trends are stable. Your {nickname} pattern is well-supported.{modifier_note} "
    "Keep doing what you're doing.",
)


# ---------------------------------------------------------------------------
# Healthy zones
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HealthyZone:
    category: str
    low: float
    high: float
    label: str
    context: str

    def contains(self, rate: float) -> bool:
        return self.low <= rate <= self.high

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "low": self.low,
            "high": self.high,
            "label": self.label,
            "context": self.context,
        }


YOUR_RANGE = "Your healthy range"
GENERIC_RANGE = "Healthy range"

# (category, terrain types or empty for any) -> (low, high, label, context)
HEALTHY_ZONE_RULES: list[Rule[TrendContext, tuple[float, float, str, str]]] = [
    Rule(_is(ENERGY, COLD_DEFICIENT, NEUTRAL_DEFICIENT, WARM_DEFICIENT), (
        0.4, 0.7, YOUR_RANGE,
        "Deficient types have lower baseline energy. Steady beats high.")),
    Rule(_is(ENERGY, WARM_EXCESS, NEUTRAL_EXCESS), (
        0.5, 0.8, YOUR_RANGE,
        "Excess types run higher, but too high means burnout risk.")),
    Rule(_is(SLEEP, WARM_EXCESS, WARM_BALANCED), (
        0.5, 0.85, YOUR_RANGE,
        "Warm types need extra attention to sleep. Heat disrupts rest.")),
    Rule(_is(SLEEP, COLD_DEFICIENT), (
        0.6, 0.9, YOUR_RANGE,
        "Good sleep rebuilds your reserves. Prioritize it.")),
    Rule(_is(STRESS, WARM_EXCESS), (
        0.5, 0.8, YOUR_RANGE,
        "Your threshold for stress symptoms is lower than others. Early intervention helps.")),
    Rule(_is(DIGESTION, COLD_DEFICIENT, COLD_BALANCED), (
        0.5, 0.85, YOUR_RANGE,
        "Cold patterns have more sensitive digestion. Consistency matters.")),
    Rule(_is(SLEEP_DURATION, COLD_DEFICIENT, NEUTRAL_DEFICIENT, WARM_DEFICIENT), (
        0.65, 1.0, YOUR_RANGE,
        "Deficient types need more sleep for recovery. Aim for 7.5-9 hours.")),
    Rule(_is(SLEEP_DURATION, WARM_EXCESS, NEUTRAL_EXCESS), (
        0.6, 0.9, YOUR_RANGE,
        "Excess types do well with 7-8 hours. More isn't always better.")),
    Rule(_is(SLEEP_DURATION), (
        0.6, 0.95, GENERIC_RANGE,
        "Most people feel best with 7-8.5 hours of sleep.")),
    Rule(_is(RESTING_HR, WARM_EXCESS, WARM_BALANCED), (
        0.6, 1.0, YOUR_RANGE,
        "Warm types run hotter. A lower resting heart rate means your system is managing heat well.")),
    Rule(_is(RESTING_HR, COLD_DEFICIENT, NEUTRAL_DEFICIENT), (
        0.4, 0.8, YOUR_RANGE,
        "Deficient types may have slightly higher resting rates. Focus on steady improvement.")),
    Rule(_is(RESTING_HR), (
        0.5, 1.0, GENERIC_RANGE,
        "A lower resting heart rate generally indicates good cardiovascular health.")),
]

DEFAULT_HEALTHY_ZONE = (0.5, 0.9, GENERIC_RANGE, "Most people feel best in this range.")


# ---------------------------------------------------------------------------
# Daily-log drift
# ---------------------------------------------------------------------------

EXPECTED_THERMAL_RANGES: dict[str, tuple[float, float]] = {
    COLD_DEFICIENT: (-2.0, -1.0),
    COLD_BALANCED: (-2.0, -1.0),
    WARM_BALANCED: (1.0, 2.0),
    WARM_EXCESS: (1.0, 2.0),
    WARM_DEFICIENT: (0.0, 2.0),
    NEUTRAL_DEFICIENT: (-0.5, 0.5),
    NEUTRAL_BALANCED: (-0.5, 0.5),
    NEUTRAL_EXCESS: (-0.5, 0.5),
}

# Emotions a modifier already accounts for.
MODIFIER_EMOTIONS: dict[str, frozenset[str]] = {
    MODIFIER_SHEN: frozenset({"restless", "anxious"}),
    MODIFIER_STAGNATION: frozenset({"irritable"}),
    MODIFIER_DAMP: frozenset({"worried", "overwhelmed"}),
}

EMOTION_ORGANS = {
    "irritable": "Liver",
    "worried": "Spleen",
    "anxious": "Kidney",
    "sad": "Lung",
    "restless": "Heart",
    "overwhelmed": "Spleen",
}
