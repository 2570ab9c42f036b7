"""Tests for background gradient selection."""
import pytest
from fetch_state import Error, Idle, Loading, Success
from weather_background import (
    DEFAULT_GRADIENT,
    INDIGO,
    LIGHT_YELLOW,
    SKY_BLUE,
    WHITE,
    gradient_colors,
    gradient_for_state,
    to_hex,
)
from weather_record import ConditionDescriptor, WeatherRecord


def make_record(*categories):
    return WeatherRecord(
        location="Testville",
        temperature_celsius=10.0,
        humidity_percent=50,
        pressure_hpa=1000,
        conditions=tuple(ConditionDescriptor(c, c.lower(), "01d") for c in categories),
        wind_speed_ms=1.0,
    )


def test_clear_gradient():
    """Clear skies end in a sunny yellow."""
    colors = gradient_colors("Clear")
    assert colors[0] == SKY_BLUE
    assert colors[-1] == LIGHT_YELLOW
    assert len(colors) == 3


@pytest.mark.parametrize("condition", ["clear", "CLEAR", "Clear"])
def test_gradient_case_insensitive(condition):
    assert gradient_colors(condition) == gradient_colors("Clear")


def test_rain_and_drizzle_share_gradient():
    assert gradient_colors("Rain") == gradient_colors("Drizzle")


def test_mist_fog_haze_share_gradient():
    assert gradient_colors("Mist") == gradient_colors("Fog") == gradient_colors("Haze")


def test_thunderstorm_is_dark():
    assert INDIGO in gradient_colors("Thunderstorm")


def test_snow_ends_white():
    assert gradient_colors("Snow")[-1] == WHITE


@pytest.mark.parametrize("condition", [None, "", "Tornado", "Smoke"])
def test_default_gradient(condition):
    assert gradient_colors(condition) == DEFAULT_GRADIENT


def test_gradient_colors_returns_copy():
    colors = gradient_colors("Clear")
    colors.append((0, 0, 0))
    assert len(gradient_colors("Clear")) == 3


def test_gradient_for_success_uses_primary_condition():
    state = Success(make_record("Snow", "Clear"))
    assert gradient_for_state(state) == gradient_colors("Snow")


@pytest.mark.parametrize("state", [Idle(), Loading(), Error("nope"), Success(make_record())])
def test_gradient_for_other_states_is_default(state):
    assert gradient_for_state(state) == DEFAULT_GRADIENT


def test_to_hex():
    assert to_hex(SKY_BLUE) == "#87ceeb"
    assert to_hex((0, 0, 0)) == "#000000"
