"""Normalize dive-plan/log measurements entered in UI units into canonical integers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from utils.unit_display import display_depth, display_distance, display_temperature
from utils.unit_input import coerce_number, depth_input_to_cm, distance_input_to_cm, temperature_input_to_cx10
from utils.units import UnitPreferences, round_half_away

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiveMeasurements:
    max_depth_cm: int | None = None
    water_temp_cx10: int | None = None
    visibility_cm: int | None = None


def _note_dropped(field: str, raw: Any, canonical: int | None) -> None:
    if canonical is None and raw not in (None, ""):
        logger.debug(f"Dropped unparseable {field} value: {raw!r}")


def normalize_dive_measurements(raw: dict[str, Any], prefs: UnitPreferences) -> DiveMeasurements:
    """
    Convert raw `max_depth`, `water_temp` and `visibility` values, typed in the
    user's preferred units, into centimeters and Cx10 for persistence.
    """
    max_depth = depth_input_to_cm(raw.get("max_depth"), prefs.depth)
    water_temp = temperature_input_to_cx10(raw.get("water_temp"), prefs.temperature)
    visibility = distance_input_to_cm(raw.get("visibility"), prefs.depth)

    _note_dropped("max_depth", raw.get("max_depth"), max_depth)
    _note_dropped("water_temp", raw.get("water_temp"), water_temp)
    _note_dropped("visibility", raw.get("visibility"), visibility)

    return DiveMeasurements(
        max_depth_cm=max_depth,
        water_temp_cx10=water_temp,
        visibility_cm=visibility,
    )


def display_dive_measurements(measurements: DiveMeasurements, prefs: UnitPreferences) -> dict[str, dict[str, str]]:
    return {
        "max_depth": display_depth(measurements.max_depth_cm, prefs.depth)._asdict(),
        "water_temp": display_temperature(measurements.water_temp_cx10, prefs.temperature)._asdict(),
        "visibility": display_distance(measurements.visibility_cm, prefs.depth)._asdict(),
    }


def normalize_bottom_time(value: Any) -> int | None:
    """Bottom time in whole minutes; unit-free, so only coerced and rounded."""
    minutes = coerce_number(value)
    if minutes is None:
        return None
    return round_half_away(minutes)
