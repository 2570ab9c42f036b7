"""Background gradient selection - pure functions of the weather condition."""
from typing import List, Optional, Tuple
from fetch_state import FetchState, Success

RGB = Tuple[int, int, int]

SKY_BLUE = (0x87, 0xCE, 0xEB)
LIGHT_BLUE = (0xE0, 0xF6, 0xFF)
LIGHT_YELLOW = (0xFF, 0xE4, 0xB5)
LIGHT_STEEL_BLUE = (0xB0, 0xC4, 0xDE)
LIGHT_GRAY = (0xD3, 0xD3, 0xD3)
LAVENDER = (0xE6, 0xE6, 0xFA)
SLATE_GRAY = (0x70, 0x80, 0x90)
LIGHT_SLATE_GRAY = (0x77, 0x88, 0x99)
DARK_SLATE_GRAY = (0x2F, 0x4F, 0x4F)
INDIGO = (0x4B, 0x00, 0x82)
DARK_SLATE_BLUE = (0x48, 0x3D, 0x8B)
GAINSBORO = (0xE0, 0xE0, 0xE0)
WHITE_SMOKE = (0xF5, 0xF5, 0xF5)
WHITE = (0xFF, 0xFF, 0xFF)

DEFAULT_GRADIENT = [SKY_BLUE, LIGHT_BLUE]

# Keyed by lowercase OpenWeather "main" category
_GRADIENTS = {
    "clear": [SKY_BLUE, LIGHT_BLUE, LIGHT_YELLOW],
    "clouds": [LIGHT_STEEL_BLUE, LIGHT_GRAY, LAVENDER],
    "rain": [SLATE_GRAY, LIGHT_SLATE_GRAY, LIGHT_STEEL_BLUE],
    "drizzle": [SLATE_GRAY, LIGHT_SLATE_GRAY, LIGHT_STEEL_BLUE],
    "thunderstorm": [DARK_SLATE_GRAY, INDIGO, DARK_SLATE_BLUE],
    "snow": [GAINSBORO, WHITE_SMOKE, WHITE],
    "mist": [LIGHT_GRAY, GAINSBORO, WHITE_SMOKE],
    "fog": [LIGHT_GRAY, GAINSBORO, WHITE_SMOKE],
    "haze": [LIGHT_GRAY, GAINSBORO, WHITE_SMOKE],
}


def gradient_colors(condition: Optional[str]) -> List[RGB]:
    """
    Get top-to-bottom gradient colors for a weather condition.

    Args:
        condition: OpenWeather primary category (e.g., "Clear", "Rain"), any case

    Returns:
        List of (r, g, b) tuples; the default sky gradient for unknown or None
    """
    if condition is None:
        return list(DEFAULT_GRADIENT)
    return list(_GRADIENTS.get(condition.lower(), DEFAULT_GRADIENT))


def gradient_for_state(state: FetchState) -> List[RGB]:
    """Gradient for whatever the screen currently shows."""
    if isinstance(state, Success):
        condition = state.weather.primary_condition
        return gradient_colors(condition.primary_category if condition else None)
    return gradient_colors(None)


def to_hex(color: RGB) -> str:
    r, g, b = color
    return f"#{r:02x}{g:02x}{b:02x}"
