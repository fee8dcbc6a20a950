"""Canonical measurement types, fixed-point converters and unit preferences.

Lengths are stored as whole centimeters and temperatures as Celsius x 10
("Cx10"). Conversions into a canonical unit round once; conversions out of
one stay unrounded so display code decides the precision.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Mapping


class UnitValueError(ValueError):
    """Raised when an unknown unit tag or preference field reaches the boundary."""


class UnitSystem(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class DepthUnit(str, Enum):
    METERS = "m"
    FEET = "ft"


class TempUnit(str, Enum):
    CELSIUS = "c"
    FAHRENHEIT = "f"


class PressureUnit(str, Enum):
    BAR = "bar"
    PSI = "psi"


class WeightUnit(str, Enum):
    KILOGRAMS = "kg"
    POUNDS = "lb"


class MeasurementKind(str, Enum):
    DEPTH = "depth"
    TEMPERATURE = "temperature"
    DISTANCE = "distance"
    PRESSURE = "pressure"
    WEIGHT = "weight"


_FIELD_ENUMS: dict[str, type[Enum]] = {
    "depth": DepthUnit,
    "temperature": TempUnit,
    "pressure": PressureUnit,
    "weight": WeightUnit,
}


@dataclass(frozen=True)
class UnitPreferences:
    depth: DepthUnit
    temperature: TempUnit
    pressure: PressureUnit
    weight: WeightUnit

    def __post_init__(self) -> None:
        # Normalize raw tags so equality and hashing only ever see enum members.
        for name, enum_cls in _FIELD_ENUMS.items():
            object.__setattr__(self, name, _coerce_tag(enum_cls, getattr(self, name), f"{name} unit"))

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any] | None,
        base: "UnitPreferences | None" = None,
    ) -> "UnitPreferences":
        """
        Build preferences from a partial mapping of raw tags.
        Missing or null fields fall back to `base` (the defaults when omitted).
        """
        base = base or DEFAULT_UNIT_PREFERENCES
        merged = base.to_dict()
        for key, value in (data or {}).items():
            if key not in _FIELD_ENUMS:
                raise UnitValueError(f"Unknown unit preference field: {key}")
            if value is None:
                continue
            merged[key] = value
        return cls(**merged)

    def to_dict(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name).value for f in fields(self)}


def _coerce_tag(enum_cls: type[Enum], value: Any, field: str) -> Any:
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip().lower() if value is not None else ""
    try:
        return enum_cls(text)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise UnitValueError(f"Invalid {field}: {value!r} (expected one of: {allowed})") from None


# Product default before a user has chosen anything; not derived from UnitSystem.
DEFAULT_UNIT_PREFERENCES = UnitPreferences(
    depth=DepthUnit.FEET,
    temperature=TempUnit.FAHRENHEIT,
    pressure=PressureUnit.PSI,
    weight=WeightUnit.POUNDS,
)

_METRIC_PREFERENCES = UnitPreferences(
    depth=DepthUnit.METERS,
    temperature=TempUnit.CELSIUS,
    pressure=PressureUnit.BAR,
    weight=WeightUnit.KILOGRAMS,
)

_IMPERIAL_PREFERENCES = UnitPreferences(
    depth=DepthUnit.FEET,
    temperature=TempUnit.FAHRENHEIT,
    pressure=PressureUnit.PSI,
    weight=WeightUnit.POUNDS,
)


def parse_unit_system(value: Any) -> UnitSystem:
    return _coerce_tag(UnitSystem, value, "unit system")


def unit_system_to_preferences(unit_system: UnitSystem | str) -> UnitPreferences:
    if UnitSystem(unit_system) is UnitSystem.METRIC:
        return _METRIC_PREFERENCES
    return _IMPERIAL_PREFERENCES


def preferences_to_unit_system(prefs: UnitPreferences) -> UnitSystem:
    """Metric only when every field is metric; any imperial field means imperial."""
    if (
        prefs.depth is DepthUnit.METERS
        and prefs.temperature is TempUnit.CELSIUS
        and prefs.pressure is PressureUnit.BAR
        and prefs.weight is WeightUnit.KILOGRAMS
    ):
        return UnitSystem.METRIC
    return UnitSystem.IMPERIAL


# Fixed-point conversion constants
CM_PER_FOOT = 30.48
CM_PER_METER = 100
CX10_PER_CELSIUS = 10


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    if not math.isfinite(value):
        raise ValueError(f"Cannot round non-finite value {value!r} to a canonical integer")
    magnitude = abs(value)
    whole = math.floor(magnitude)
    # magnitude - whole is exact for floats, unlike magnitude + 0.5.
    if magnitude - whole >= 0.5:
        whole += 1
    return whole if value >= 0 else -whole


def feet_to_cm(feet: float) -> int:
    return round_half_away(feet * CM_PER_FOOT)


def cm_to_feet(cm: float) -> float:
    return cm / CM_PER_FOOT


def meters_to_cm(meters: float) -> int:
    return round_half_away(meters * CM_PER_METER)


def cm_to_meters(cm: float) -> float:
    return cm / CM_PER_METER


def celsius_to_cx10(celsius: float) -> int:
    return round_half_away(celsius * CX10_PER_CELSIUS)


def cx10_to_celsius(cx10: float) -> float:
    return cx10 / CX10_PER_CELSIUS


def fahrenheit_to_cx10(fahrenheit: float) -> int:
    celsius = (fahrenheit - 32) * 5 / 9
    return round_half_away(celsius * CX10_PER_CELSIUS)


def cx10_to_fahrenheit(cx10: float) -> float:
    celsius = cx10 / CX10_PER_CELSIUS
    return celsius * 9 / 5 + 32
