from __future__ import annotations

import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from utils.unit_display import (  # noqa: E402
    DATA_UNAVAILABLE,
    DisplayValue,
    cm_to_ui,
    cx10_to_ui,
    display_depth,
    display_distance,
    display_temperature,
    format_distance_range,
    format_integer,
    format_temperature_range,
    format_value,
    get_unit_label,
    metric_to_ui,
    ui_to_metric,
)
from utils.unit_input import CanonicalRange, depth_input_to_cm, temperature_input_to_cx10  # noqa: E402
from utils.units import DEFAULT_UNIT_PREFERENCES, MeasurementKind, UnitSystem, unit_system_to_preferences  # noqa: E402


def test_display_depth_metric_and_imperial():
    assert display_depth(2500, "m") == DisplayValue("25", "m")
    assert display_depth(1829, "ft") == ("60", "ft")
    assert display_depth(0, "ft") == ("0", "ft")


def test_display_temperature_metric_and_imperial():
    assert display_temperature(250, "c") == DisplayValue("25", "°C")
    assert display_temperature(250, "f") == ("77", "°F")
    assert display_temperature(-100, "c") == ("-10", "°C")
    assert display_temperature(0, "f") == ("32", "°F")


def test_display_distance_uses_depth_units():
    assert display_distance(1500, "m") == ("15", "m")
    assert display_distance(3048, "ft") == ("100", "ft")


def test_formatters_return_placeholder_for_absent_values():
    assert display_depth(None, "m") == ("", "m")
    assert display_depth(float("nan"), "ft") == ("", "ft")
    assert display_temperature(None, "f") == ("", "°F")
    assert display_distance(None, "m") == ("", "m")


def test_parse_then_display_round_trips_user_input():
    assert display_depth(depth_input_to_cm(60, "ft"), "ft") == ("60", "ft")
    cx10 = temperature_input_to_cx10("78", "f")
    assert cx10 == 256
    assert display_temperature(cx10, "f").value == "78"


def test_format_helpers():
    assert format_integer(59.5) == "60"
    assert format_integer(float("inf")) == ""
    assert format_value(18.29) == "18.3"
    assert format_value(None) == ""


def test_ui_values_stay_unrounded():
    assert cm_to_ui(1829, "ft") == pytest.approx(60.0066, abs=1e-4)
    assert cm_to_ui(150, "m") == 1.5
    assert cx10_to_ui(256, "f") == pytest.approx(78.08)
    assert cx10_to_ui(None, "c") is None


def test_temperature_range_formatting():
    assert format_temperature_range(CanonicalRange(240, 260), "c") == "24-26°C"
    assert format_temperature_range(CanonicalRange(256, 278), "f") == "78-82°F"
    assert format_temperature_range(250, "f") == "77°F"
    assert format_temperature_range((250, 254), "c") == "25°C"


def test_distance_range_formatting():
    assert format_distance_range(CanonicalRange(1500, 2500), "m") == "15-25m"
    assert format_distance_range(CanonicalRange(1524, 3048), "ft") == "50-100ft"
    assert format_distance_range(1500, "m") == "15m"


def test_range_formatters_pass_phrases_through():
    phrase = "Warm, roughly bath temperature"
    assert format_temperature_range(phrase, "c") == phrase
    assert format_distance_range("Excellent, 30m+", "ft") == "Excellent, 30m+"


def test_range_formatters_report_unavailable_data():
    assert format_temperature_range(None, "f") == DATA_UNAVAILABLE
    assert format_distance_range({"min": 1}, "m") == DATA_UNAVAILABLE


def test_unit_labels_from_preferences_or_system():
    assert get_unit_label("depth", UnitSystem.METRIC) == "m"
    assert get_unit_label(MeasurementKind.DISTANCE, "imperial") == "ft"
    assert get_unit_label("temperature", DEFAULT_UNIT_PREFERENCES) == "°F"
    assert get_unit_label("temperature", unit_system_to_preferences("metric")) == "°C"
    assert get_unit_label("pressure", "metric") == "bar"
    assert get_unit_label("weight", DEFAULT_UNIT_PREFERENCES) == "lb"


def test_ui_to_metric_goes_through_canonical_units():
    assert ui_to_metric("60", "imperial", "depth") == pytest.approx(18.29)
    assert ui_to_metric(25, "metric", "distance") == 25.0
    assert ui_to_metric("77", UnitSystem.IMPERIAL, "temperature") == 25.0
    assert ui_to_metric(3, "metric", "pressure") == 3.0


def test_ui_to_metric_keeps_zero_and_drops_invalid_input():
    assert ui_to_metric(0, "metric", "depth") == 0.0
    assert ui_to_metric("", "metric", "depth") is None
    assert ui_to_metric("abc", "imperial", "temperature") is None
    assert ui_to_metric(None, "imperial", "weight") is None


def test_metric_to_ui():
    assert metric_to_ui(18.29, "imperial", "depth") == pytest.approx(60.0, abs=0.01)
    assert metric_to_ui(25, "imperial", "temperature") == pytest.approx(77.0)
    assert metric_to_ui(25, "metric", "temperature") == 25.0
    assert metric_to_ui(None, "metric", "depth") is None


@pytest.mark.parametrize("blank", ["", "   "])
def test_range_formatters_treat_blank_phrases_as_unavailable(blank):
    assert format_temperature_range(blank, "c") == DATA_UNAVAILABLE
    assert format_distance_range(blank, "ft") == DATA_UNAVAILABLE


def test_bridging_helpers_drop_values_that_overflow_canonical_units():
    assert ui_to_metric("1e307", "imperial", "depth") is None
    assert ui_to_metric("1e308", "imperial", "temperature") is None
    assert metric_to_ui(1e307, "imperial", "distance") is None
