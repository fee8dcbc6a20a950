"""Display helpers: canonical centimeters / Cx10 -> render-ready values and labels."""

from __future__ import annotations

import math
from typing import Any, NamedTuple

from utils.unit_input import CanonicalRange, coerce_number, depth_to_cm, temperature_to_cx10
from utils.units import (
    DepthUnit,
    MeasurementKind,
    PressureUnit,
    TempUnit,
    UnitPreferences,
    UnitSystem,
    WeightUnit,
    cm_to_feet,
    cm_to_meters,
    cx10_to_celsius,
    cx10_to_fahrenheit,
    round_half_away,
    unit_system_to_preferences,
)

DATA_UNAVAILABLE = "Data unavailable"

DEPTH_LABELS = {DepthUnit.METERS: "m", DepthUnit.FEET: "ft"}
TEMPERATURE_LABELS = {TempUnit.CELSIUS: "°C", TempUnit.FAHRENHEIT: "°F"}
PRESSURE_LABELS = {PressureUnit.BAR: "bar", PressureUnit.PSI: "psi"}
WEIGHT_LABELS = {WeightUnit.KILOGRAMS: "kg", WeightUnit.POUNDS: "lb"}


class DisplayValue(NamedTuple):
    value: str
    unit: str


def _is_number(value: Any) -> bool:
    return (
        value is not None
        and not isinstance(value, bool)
        and isinstance(value, (int, float))
        and math.isfinite(value)
    )


def format_integer(value: float) -> str:
    if not _is_number(value):
        return ""
    return str(round_half_away(value))


def format_value(value: float, decimals: int = 1) -> str:
    if not _is_number(value):
        return ""
    return f"{value:.{decimals}f}"


def cm_to_ui(depth_cm: int | None, depth_unit: DepthUnit | str) -> float | None:
    depth_unit = DepthUnit(depth_unit)
    if not _is_number(depth_cm):
        return None
    if depth_unit is DepthUnit.FEET:
        return cm_to_feet(depth_cm)
    return cm_to_meters(depth_cm)


def cx10_to_ui(temp_cx10: int | None, temp_unit: TempUnit | str) -> float | None:
    temp_unit = TempUnit(temp_unit)
    if not _is_number(temp_cx10):
        return None
    if temp_unit is TempUnit.FAHRENHEIT:
        return cx10_to_fahrenheit(temp_cx10)
    return cx10_to_celsius(temp_cx10)


def display_depth(depth_cm: int | None, depth_unit: DepthUnit | str) -> DisplayValue:
    """Whole meters or feet; an absent depth renders as an empty value with the unit label."""
    depth_unit = DepthUnit(depth_unit)
    label = DEPTH_LABELS[depth_unit]
    ui_value = cm_to_ui(depth_cm, depth_unit)
    if ui_value is None:
        return DisplayValue("", label)
    return DisplayValue(format_integer(ui_value), label)


def display_distance(distance_cm: int | None, depth_unit: DepthUnit | str) -> DisplayValue:
    # Visibility and distance share the depth preference.
    return display_depth(distance_cm, depth_unit)


def display_temperature(temp_cx10: int | None, temp_unit: TempUnit | str) -> DisplayValue:
    temp_unit = TempUnit(temp_unit)
    label = TEMPERATURE_LABELS[temp_unit]
    ui_value = cx10_to_ui(temp_cx10, temp_unit)
    if ui_value is None:
        return DisplayValue("", label)
    return DisplayValue(format_integer(ui_value), label)


def _as_range(source: Any) -> CanonicalRange | None:
    if isinstance(source, CanonicalRange):
        return source
    if _is_number(source):
        return CanonicalRange(int(source), int(source))
    if isinstance(source, (tuple, list)) and len(source) == 2 and all(_is_number(v) for v in source):
        return CanonicalRange(int(source[0]), int(source[1]))
    return None


def _format_range(low: float, high: float, label: str) -> str:
    low_text = format_integer(low)
    high_text = format_integer(high)
    if low_text == high_text:
        return f"{low_text}{label}"
    return f"{low_text}-{high_text}{label}"


def format_temperature_range(source: Any, temp_unit: TempUnit | str) -> str:
    """
    Render a Cx10 range (or single value) as "24-26°C" / "78°F".
    Pre-written phrases from the narrative service pass through untouched.
    """
    temp_unit = TempUnit(temp_unit)
    if isinstance(source, str):
        return source if source.strip() else DATA_UNAVAILABLE
    canonical = _as_range(source)
    if canonical is None:
        return DATA_UNAVAILABLE
    return _format_range(
        cx10_to_ui(canonical.min, temp_unit),
        cx10_to_ui(canonical.max, temp_unit),
        TEMPERATURE_LABELS[temp_unit],
    )


def format_distance_range(source: Any, depth_unit: DepthUnit | str) -> str:
    """Render a centimeter range as "15-25m" / "50-100ft"; phrases pass through."""
    depth_unit = DepthUnit(depth_unit)
    if isinstance(source, str):
        return source if source.strip() else DATA_UNAVAILABLE
    canonical = _as_range(source)
    if canonical is None:
        return DATA_UNAVAILABLE
    return _format_range(
        cm_to_ui(canonical.min, depth_unit),
        cm_to_ui(canonical.max, depth_unit),
        DEPTH_LABELS[depth_unit],
    )


def get_unit_label(kind: MeasurementKind | str, units: UnitPreferences | UnitSystem | str) -> str:
    kind = MeasurementKind(kind)
    prefs = units if isinstance(units, UnitPreferences) else unit_system_to_preferences(units)
    if kind in (MeasurementKind.DEPTH, MeasurementKind.DISTANCE):
        return DEPTH_LABELS[prefs.depth]
    if kind is MeasurementKind.TEMPERATURE:
        return TEMPERATURE_LABELS[prefs.temperature]
    if kind is MeasurementKind.PRESSURE:
        return PRESSURE_LABELS[prefs.pressure]
    return WEIGHT_LABELS[prefs.weight]


def ui_to_metric(
    ui_value: Any,
    unit_system: UnitSystem | str,
    kind: MeasurementKind | str,
) -> float | None:
    """
    Convert a value typed in the active unit system to meters / Celsius.
    Goes through the canonical form so the result matches what gets stored.
    Pressure and weight values pass through unchanged.
    """
    kind = MeasurementKind(kind)
    prefs = unit_system_to_preferences(unit_system)
    number = coerce_number(ui_value)
    if number is None:
        return None
    if kind in (MeasurementKind.DEPTH, MeasurementKind.DISTANCE):
        cm = depth_to_cm(number, prefs.depth)
        return None if cm is None else cm_to_meters(cm)
    if kind is MeasurementKind.TEMPERATURE:
        cx10 = temperature_to_cx10(number, prefs.temperature)
        return None if cx10 is None else cx10_to_celsius(cx10)
    return number


def metric_to_ui(
    metric_value: Any,
    unit_system: UnitSystem | str,
    kind: MeasurementKind | str,
) -> float | None:
    """Inverse of ui_to_metric: meters / Celsius -> active unit system (unrounded)."""
    kind = MeasurementKind(kind)
    prefs = unit_system_to_preferences(unit_system)
    number = coerce_number(metric_value)
    if number is None:
        return None
    if kind in (MeasurementKind.DEPTH, MeasurementKind.DISTANCE):
        return cm_to_ui(depth_to_cm(number, DepthUnit.METERS), prefs.depth)
    if kind is MeasurementKind.TEMPERATURE:
        return cx10_to_ui(temperature_to_cx10(number, TempUnit.CELSIUS), prefs.temperature)
    return number
