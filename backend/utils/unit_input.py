"""Input parsing: raw UI/HTTP values -> canonical centimeters and Cx10."""

from __future__ import annotations

import math
import re
from numbers import Number
from typing import Any, NamedTuple

from utils.units import (
    CM_PER_FOOT,
    CM_PER_METER,
    CX10_PER_CELSIUS,
    DepthUnit,
    TempUnit,
    celsius_to_cx10,
    fahrenheit_to_cx10,
    feet_to_cm,
    meters_to_cm,
)


class CanonicalRange(NamedTuple):
    min: int
    max: int


_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def coerce_number(value: Any) -> float | None:
    """
    Coerce form/JSON input to a finite float.
    None, blank text, non-decimal text, booleans and NaN/inf all become None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Number) and not isinstance(value, complex):
        source = value
    elif isinstance(value, str):
        source = value.strip()
        if not _DECIMAL_RE.fullmatch(source):
            return None
    else:
        return None
    try:
        number = float(source)
    except (ValueError, OverflowError):
        # Signaling-NaN decimals and ints too large for a float.
        return None
    if not math.isfinite(number):
        return None
    return number


def _scales_finitely(value: float, factor: float) -> bool:
    return math.isfinite(value) and math.isfinite(value * factor)


# Inner layer: already-numeric input only.

def depth_to_cm(value: float | None, unit: DepthUnit | str) -> int | None:
    unit = DepthUnit(unit)
    if value is None:
        return None
    if unit is DepthUnit.FEET:
        return feet_to_cm(value) if _scales_finitely(value, CM_PER_FOOT) else None
    return meters_to_cm(value) if _scales_finitely(value, CM_PER_METER) else None


def distance_to_cm(value: float | None, unit: DepthUnit | str) -> int | None:
    return depth_to_cm(value, unit)


def temperature_to_cx10(value: float | None, unit: TempUnit | str) -> int | None:
    unit = TempUnit(unit)
    if value is None or not math.isfinite(value):
        return None
    if unit is TempUnit.FAHRENHEIT:
        if not math.isfinite((value - 32) * 5 / 9 * CX10_PER_CELSIUS):
            return None
        return fahrenheit_to_cx10(value)
    return celsius_to_cx10(value) if _scales_finitely(value, CX10_PER_CELSIUS) else None


# Boundary layer: numbers, numeric strings or absent values from forms and payloads.

def depth_input_to_cm(value: Any, unit: DepthUnit | str) -> int | None:
    return depth_to_cm(coerce_number(value), unit)


def distance_input_to_cm(value: Any, unit: DepthUnit | str) -> int | None:
    return distance_to_cm(coerce_number(value), unit)


def temperature_input_to_cx10(value: Any, unit: TempUnit | str) -> int | None:
    return temperature_to_cx10(coerce_number(value), unit)


# AI briefing strings such as "24-26°C", "78-82°F", "15-25m" or "50-100 ft".

_NUMBER = r"(-?\d+(?:\.\d+)?)"
_RANGE_RE = re.compile(_NUMBER + r"\s*[-–—]\s*" + _NUMBER)
_SINGLE_RE = re.compile(_NUMBER)
_FAHRENHEIT_RE = re.compile(r"°\s*F\b|\d\s*F\b|\bF\b|fahrenheit", re.IGNORECASE)
_FEET_RE = re.compile(r"(?<![a-z])(?:ft|feet|foot)\b", re.IGNORECASE)


def _extract_bounds(text: str) -> tuple[float, float] | None:
    match = _RANGE_RE.search(text)
    if match:
        return float(match.group(1)), float(match.group(2))
    match = _SINGLE_RE.search(text)
    if match:
        value = float(match.group(1))
        return value, value
    return None


def _canonical_range(low: int | None, high: int | None) -> CanonicalRange | None:
    if low is None or high is None:
        return None
    return CanonicalRange(low, high)


def parse_temperature_string(text: Any) -> CanonicalRange | None:
    """Parse a temperature phrase into a Cx10 range; Celsius unless Fahrenheit is marked."""
    if not isinstance(text, str) or not text.strip():
        return None
    cleaned = text.strip()
    bounds = _extract_bounds(cleaned)
    if bounds is None:
        return None
    unit = TempUnit.FAHRENHEIT if _FAHRENHEIT_RE.search(cleaned) else TempUnit.CELSIUS
    low, high = bounds
    return _canonical_range(temperature_to_cx10(low, unit), temperature_to_cx10(high, unit))


def parse_distance_string(text: Any) -> CanonicalRange | None:
    """Parse a depth/visibility phrase into a centimeter range; meters unless feet are marked."""
    if not isinstance(text, str) or not text.strip():
        return None
    cleaned = text.strip()
    bounds = _extract_bounds(cleaned)
    if bounds is None:
        return None
    unit = DepthUnit.FEET if _FEET_RE.search(cleaned) else DepthUnit.METERS
    low, high = bounds
    return _canonical_range(distance_to_cm(low, unit), distance_to_cm(high, unit))
