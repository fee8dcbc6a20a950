from __future__ import annotations

import logging
from typing import Optional, Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ai.context_builder import build_dive_conditions_context, format_unit_preferences
from config import settings
from services.dive_measurement_service import (
    display_dive_measurements,
    normalize_bottom_time,
    normalize_dive_measurements,
)
from utils.units import (
    UnitPreferences,
    UnitValueError,
    parse_unit_system,
    preferences_to_unit_system,
    unit_system_to_preferences,
)

router = APIRouter(prefix="/dive-plans", tags=["dive-plans"])
logger = logging.getLogger(__name__)

RawMeasurement = Optional[Union[float, str]]


class DivePlanPreviewRequest(BaseModel):
    site_name: Optional[str] = None
    max_depth: RawMeasurement = None
    water_temp: RawMeasurement = None
    visibility: RawMeasurement = None
    bottom_time: RawMeasurement = None
    unit_system: Optional[str] = None  # metric | imperial
    preferences: Optional[dict[str, Optional[str]]] = None  # granular override of unit_system


def _resolve_preferences(body: DivePlanPreviewRequest) -> UnitPreferences:
    if body.preferences is not None:
        return UnitPreferences.from_mapping(body.preferences)
    if body.unit_system:
        return unit_system_to_preferences(parse_unit_system(body.unit_system))
    return unit_system_to_preferences(settings.guest_unit_system)


@router.post("/preview")
def preview_dive_plan(body: DivePlanPreviewRequest):
    """Convert UI-entered plan values to canonical units and build the narrative context."""
    try:
        prefs = _resolve_preferences(body)
    except UnitValueError as exc:
        logger.warning(f"Rejected dive plan preview units: {exc}")
        raise HTTPException(status_code=400, detail=str(exc))

    raw = body.model_dump(include={"max_depth", "water_temp", "visibility"})
    measurements = normalize_dive_measurements(raw, prefs)
    bottom_time = normalize_bottom_time(body.bottom_time)
    unit_system = preferences_to_unit_system(prefs)

    narrative_context = "\n".join(
        [
            format_unit_preferences(prefs),
            build_dive_conditions_context(
                measurements,
                unit_system,
                site_name=body.site_name,
                bottom_time_min=bottom_time,
            ),
        ]
    )
    return {
        "max_depth_cm": measurements.max_depth_cm,
        "water_temp_cx10": measurements.water_temp_cx10,
        "visibility_cm": measurements.visibility_cm,
        "bottom_time_min": bottom_time,
        "preferences": prefs.to_dict(),
        "unit_system": unit_system.value,
        "display": display_dive_measurements(measurements, prefs),
        "narrative_context": narrative_context,
    }
