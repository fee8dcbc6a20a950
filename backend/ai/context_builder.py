from services.dive_measurement_service import DiveMeasurements
from utils.unit_display import get_unit_label
from utils.units import MeasurementKind, UnitPreferences, UnitSystem, cm_to_meters, cx10_to_celsius

_DEFAULT_CONTEXT_MAX_CHARS = 1200


def _clip_block(text: str, max_chars: int) -> str:
    raw = (text or "").strip()
    if len(raw) <= max_chars:
        return raw
    keep = max(80, max_chars - 24)
    return f"{raw[:keep].rstrip()}\n...[truncated]"


def _format_meters(cm_value: int) -> str:
    return f"{cm_to_meters(cm_value):.1f} m"


def _format_celsius(cx10_value: int) -> str:
    return f"{cx10_to_celsius(cx10_value):.1f} °C"


def format_unit_preferences(prefs: UnitPreferences) -> str:
    return (
        f"- Preferred units: depth={prefs.depth.value}, temperature={prefs.temperature.value}, "
        f"pressure={prefs.pressure.value}, weight={prefs.weight.value}"
    )


def build_dive_conditions_context(
    measurements: DiveMeasurements,
    unit_system: UnitSystem,
    site_name: str | None = None,
    bottom_time_min: int | None = None,
    max_chars: int = _DEFAULT_CONTEXT_MAX_CHARS,
) -> str:
    """
    Format planned dive conditions for the narrative generator.
    Values are always given in meters / Celsius; the closing instruction tells
    the generator which unit system its prose must use.
    """
    unit_system = UnitSystem(unit_system)
    lines = ["Planned dive (metric values):"]
    if site_name:
        lines.append(f"- Site: {site_name.strip()}")
    if measurements.max_depth_cm is not None:
        lines.append(f"- Max depth: {_format_meters(measurements.max_depth_cm)}")
    if bottom_time_min is not None:
        lines.append(f"- Bottom time: {bottom_time_min} min")
    if measurements.water_temp_cx10 is not None:
        lines.append(f"- Water temperature: {_format_celsius(measurements.water_temp_cx10)}")
    if measurements.visibility_cm is not None:
        lines.append(f"- Visibility: {_format_meters(measurements.visibility_cm)}")

    depth_label = get_unit_label(MeasurementKind.DEPTH, unit_system)
    temp_label = get_unit_label(MeasurementKind.TEMPERATURE, unit_system)
    lines.append(
        f"Unit system: {unit_system.value}. Write all depths and distances in {depth_label} "
        f"and all temperatures in {temp_label}."
    )
    return _clip_block("\n".join(lines), max_chars)
