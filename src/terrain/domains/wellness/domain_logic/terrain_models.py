"""Terrain vector, primary types, modifiers and scoring results.

Identifiers defined here (terrain ids, modifier ids, flag ids) are persisted by
callers and used to cross-reference content, so they are stable snake-case
strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


# ---------------------------------------------------------------------------
# Axes
# ---------------------------------------------------------------------------

COLD_HEAT = "cold_heat"
DEF_EXCESS = "def_excess"
DAMP_DRY = "damp_dry"
QI_STAGNATION = "qi_stagnation"
SHEN_UNSETTLED = "shen_unsettled"

AXES = [COLD_HEAT, DEF_EXCESS, DAMP_DRY, QI_STAGNATION, SHEN_UNSETTLED]

# Bidirectional axes swing both ways; one-sided axes never go negative.
AXIS_BOUNDS: dict[str, tuple[int, int]] = {
    COLD_HEAT: (-10, 10),
    DEF_EXCESS: (-10, 10),
    DAMP_DRY: (-10, 10),
    QI_STAGNATION: (0, 10),
    SHEN_UNSETTLED: (0, 10),
}


def _clamp(value: int, lo: int, hi: int) -> int:
    """Clamp a value to [lo, hi]."""
    return max(lo, min(hi, value))


@dataclass(frozen=True)
class Vector:
    """Five-axis terrain vector. Every axis is clamped to its bounds."""

    cold_heat: int = 0
    def_excess: int = 0
    damp_dry: int = 0
    qi_stagnation: int = 0
    shen_unsettled: int = 0

    def __post_init__(self) -> None:
        for axis in AXES:
            lo, hi = AXIS_BOUNDS[axis]
            object.__setattr__(self, axis, _clamp(int(getattr(self, axis)), lo, hi))

    def add(self, deltas: dict[str, int | float], weight: float = 1.0) -> Vector:
        """Return a new vector with weighted deltas applied and clamped.

        Each weighted delta is truncated toward zero before it is added.
        Unknown axis names are ignored.
        """
        values = self.as_dict()
        for axis, delta in deltas.items():
            if axis not in values:
                continue
            values[axis] += int(delta * weight)
        return Vector(**values)

    def as_dict(self) -> dict[str, int]:
        return {axis: getattr(self, axis) for axis in AXES}


# ---------------------------------------------------------------------------
# Primary types
# ---------------------------------------------------------------------------

COLD_DEFICIENT = "cold_deficient_low_flame"
COLD_BALANCED = "cold_balanced_cool_core"
NEUTRAL_DEFICIENT = "neutral_deficient_low_battery"
NEUTRAL_BALANCED = "neutral_balanced_steady_core"
NEUTRAL_EXCESS = "neutral_excess_busy_mind"
WARM_BALANCED = "warm_balanced_high_flame"
WARM_EXCESS = "warm_excess_overclocked"
WARM_DEFICIENT = "warm_deficient_bright_but_thin"

ThermalBand = Literal["cold", "neutral", "warm"]
ReserveBand = Literal["deficient", "balanced", "excess"]

# Inclusive: exactly -3 / +3 falls into the extreme band.
BAND_THRESHOLD = 3


@dataclass(frozen=True)
class TerrainType:
    """Display metadata for one of the eight primary types."""

    id: str
    label: str
    nickname: str
    thermal: ThermalBand
    reserve: ReserveBand

    @property
    def is_cold(self) -> bool:
        return self.thermal == "cold"

    @property
    def is_warm(self) -> bool:
        return self.thermal == "warm"

    @property
    def is_deficient(self) -> bool:
        return self.reserve == "deficient"

    @property
    def is_excess(self) -> bool:
        return self.reserve == "excess"


TERRAIN_TYPES: dict[str, TerrainType] = {
    t.id: t
    for t in (
        TerrainType(COLD_DEFICIENT, "Cold + Deficient", "Low Flame", "cold", "deficient"),
        TerrainType(COLD_BALANCED, "Cold + Balanced", "Cool Core", "cold", "balanced"),
        TerrainType(NEUTRAL_DEFICIENT, "Neutral + Deficient", "Low Battery", "neutral", "deficient"),
        TerrainType(NEUTRAL_BALANCED, "Neutral + Balanced", "Steady Core", "neutral", "balanced"),
        TerrainType(NEUTRAL_EXCESS, "Neutral + Excess", "Busy Mind", "neutral", "excess"),
        TerrainType(WARM_BALANCED, "Warm + Balanced", "High Flame", "warm", "balanced"),
        TerrainType(WARM_EXCESS, "Warm + Excess", "Overclocked", "warm", "excess"),
        TerrainType(WARM_DEFICIENT, "Warm + Deficient", "Bright but Thin", "warm", "deficient"),
    )
}

# (thermal, reserve) -> type id. Cold + excess has no type of its own.
_TYPE_BY_BANDS: dict[tuple[str, str], str] = {
    ("cold", "deficient"): COLD_DEFICIENT,
    ("cold", "balanced"): COLD_BALANCED,
    ("cold", "excess"): COLD_BALANCED,
    ("neutral", "deficient"): NEUTRAL_DEFICIENT,
    ("neutral", "balanced"): NEUTRAL_BALANCED,
    ("neutral", "excess"): NEUTRAL_EXCESS,
    ("warm", "deficient"): WARM_DEFICIENT,
    ("warm", "balanced"): WARM_BALANCED,
    ("warm", "excess"): WARM_EXCESS,
}


def thermal_band(cold_heat: int) -> ThermalBand:
    if cold_heat <= -BAND_THRESHOLD:
        return "cold"
    if cold_heat >= BAND_THRESHOLD:
        return "warm"
    return "neutral"


def reserve_band(def_excess: int) -> ReserveBand:
    if def_excess <= -BAND_THRESHOLD:
        return "deficient"
    if def_excess >= BAND_THRESHOLD:
        return "excess"
    return "balanced"


def primary_type_for(vector: Vector) -> str:
    """Map a vector's thermal and reserve axes to a primary type id."""
    bands = (thermal_band(vector.cold_heat), reserve_band(vector.def_excess))
    return _TYPE_BY_BANDS[bands]


def terrain_type(type_id: str) -> TerrainType:
    """Look up a type by id, defaulting to neutral balanced for unknown ids."""
    return TERRAIN_TYPES.get(type_id, TERRAIN_TYPES[NEUTRAL_BALANCED])


DEFICIENT_TYPES = frozenset(t.id for t in TERRAIN_TYPES.values() if t.is_deficient)
EXCESS_TYPES = frozenset(t.id for t in TERRAIN_TYPES.values() if t.is_excess)
COLD_TYPES = frozenset(t.id for t in TERRAIN_TYPES.values() if t.is_cold)
WARM_TYPES = frozenset(t.id for t in TERRAIN_TYPES.values() if t.is_warm)


# ---------------------------------------------------------------------------
# Modifiers
# ---------------------------------------------------------------------------

Modifier = Literal["shen", "stagnation", "damp", "dry", "none"]

MODIFIER_SHEN = "shen"
MODIFIER_STAGNATION = "stagnation"
MODIFIER_DAMP = "damp"
MODIFIER_DRY = "dry"
MODIFIER_NONE = "none"

MODIFIERS = [MODIFIER_SHEN, MODIFIER_STAGNATION, MODIFIER_DAMP, MODIFIER_DRY, MODIFIER_NONE]

MODIFIER_DISPLAY_NAMES = {
    MODIFIER_SHEN: "Shen (Restless)",
    MODIFIER_STAGNATION: "Stagnation (Stuck)",
    MODIFIER_DAMP: "Damp (Heavy)",
    MODIFIER_DRY: "Dry (Thirsty)",
    MODIFIER_NONE: "",
}

# Short names used inside sentences ("with a Shen modifier").
MODIFIER_SHORT_NAMES = {
    MODIFIER_SHEN: "Shen",
    MODIFIER_STAGNATION: "Stagnation",
    MODIFIER_DAMP: "Damp",
    MODIFIER_DRY: "Dry",
    MODIFIER_NONE: "",
}

SHEN_THRESHOLD = 4
STAGNATION_THRESHOLD = 4
FLUID_THRESHOLD = 5

# Lower value wins an exact magnitude tie.
MODIFIER_TIE_PRIORITY = {
    MODIFIER_SHEN: 0,
    MODIFIER_STAGNATION: 1,
    MODIFIER_DRY: 2,
    MODIFIER_DAMP: 2,
}


def normalize_modifier(modifier_id: str | None) -> str:
    """Return a known modifier id, mapping None and unknown ids to 'none'."""
    if modifier_id in MODIFIER_DISPLAY_NAMES:
        return modifier_id
    return MODIFIER_NONE


# ---------------------------------------------------------------------------
# Flags
# ---------------------------------------------------------------------------

FLAG_REFLUX = "reflux"
FLAG_LOOSE_STOOL = "loose_stool"
FLAG_CONSTIPATION = "constipation"
FLAG_STICKY_STOOL = "sticky_stool"
FLAG_NIGHT_SWEATS = "night_sweats"
FLAG_WAKE_THIRSTY_HOT = "wake_thirsty_hot"


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScoringResult:
    """Outcome of one classification run. Superseded results are discarded."""

    vector: Vector
    primary_type: str
    modifier: str = MODIFIER_NONE
    flags: frozenset[str] = field(default_factory=frozenset)

    @property
    def terrain(self) -> TerrainType:
        return TERRAIN_TYPES[self.primary_type]

    def to_dict(self) -> dict:
        terrain = self.terrain
        return {
            "vector": self.vector.as_dict(),
            "terrain_type_id": terrain.id,
            "label": terrain.label,
            "nickname": terrain.nickname,
            "modifier": self.modifier,
            "modifier_display_name": MODIFIER_DISPLAY_NAMES[self.modifier],
            "flags": sorted(self.flags),
        }
