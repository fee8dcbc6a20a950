import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from config import settings
from utils.units import (
    DEFAULT_UNIT_PREFERENCES,
    UnitPreferences,
    UnitValueError,
    parse_unit_system,
    preferences_to_unit_system,
    unit_system_to_preferences,
)

router = APIRouter(prefix="/units", tags=["units"])
logger = logging.getLogger(__name__)


class UnitSystemRequest(BaseModel):
    unit_system: str  # metric | imperial


class UnitPreferencesPayload(BaseModel):
    depth: Optional[str] = None  # m | ft
    temperature: Optional[str] = None  # c | f
    pressure: Optional[str] = None  # bar | psi
    weight: Optional[str] = None  # kg | lb


@router.get("/defaults")
def unit_defaults():
    return {
        "preferences": DEFAULT_UNIT_PREFERENCES.to_dict(),
        "unit_system": preferences_to_unit_system(DEFAULT_UNIT_PREFERENCES).value,
        "guest_unit_system": settings.guest_unit_system.value,
    }


@router.post("/preferences/resolve")
def resolve_preferences(body: UnitSystemRequest):
    try:
        unit_system = parse_unit_system(body.unit_system)
    except UnitValueError as exc:
        logger.warning(f"Rejected unit system toggle: {exc}")
        raise HTTPException(status_code=400, detail=str(exc))
    return {
        "unit_system": unit_system.value,
        "preferences": unit_system_to_preferences(unit_system).to_dict(),
    }


@router.post("/preferences/classify")
def classify_preferences(body: UnitPreferencesPayload):
    try:
        prefs = UnitPreferences.from_mapping(body.model_dump(exclude_none=True))
    except UnitValueError as exc:
        logger.warning(f"Rejected unit preferences: {exc}")
        raise HTTPException(status_code=400, detail=str(exc))
    return {
        "preferences": prefs.to_dict(),
        "unit_system": preferences_to_unit_system(prefs).value,
    }
