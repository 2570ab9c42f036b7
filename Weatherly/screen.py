"""Screen layout and terminal rendering for the four fetch states."""
from typing import List, Optional, Sequence
from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from fetch_state import Error, FetchState, Idle, Loading, Success
from weather_background import RGB, gradient_for_state, to_hex
from weather_record import WeatherRecord

TITLE = "Weather Today"


def format_temperature(temp_c: float) -> str:
    """Whole degrees, truncated toward zero, e.g. 15.5 -> "15°C"."""
    return f"{int(temp_c)}°C"


def format_weather_lines(weather: WeatherRecord) -> List[str]:
    """
    Lines of the weather card.

    Args:
        weather: Record from a successful fetch

    Returns:
        Location, icon URL and description (when a condition exists),
        temperature, then humidity, wind speed and pressure
    """
    lines = [weather.location]
    condition = weather.primary_condition
    if condition is not None:
        description = condition.description[:1].upper() + condition.description[1:]
        lines.append(f"Icon: {condition.icon_url}")
        lines.append(description)
    lines.append(format_temperature(weather.temperature_celsius))
    lines.append(f"Humidity {weather.humidity_percent}%")
    lines.append(f"Wind Speed {weather.wind_speed_ms} m/s")
    lines.append(f"Pressure {weather.pressure_hpa} hPa")
    return lines


def state_lines(state: FetchState) -> List[str]:
    """Text content for a state, independent of colors."""
    if isinstance(state, Idle):
        return ["Search for Weather", "Enter a city name above to get started"]
    if isinstance(state, Loading):
        return ["Loading weather data..."]
    if isinstance(state, Success):
        return format_weather_lines(state.weather)
    if isinstance(state, Error):
        return ["Error", state.message]
    raise TypeError(f"Unknown fetch state: {state!r}")


def blend(colors: Sequence[RGB], position: float) -> RGB:
    """
    Color at a position (0.0 top, 1.0 bottom) of an evenly spaced gradient.
    """
    if len(colors) == 1:
        return colors[0]
    position = min(max(position, 0.0), 1.0)
    scaled = position * (len(colors) - 1)
    index = min(int(scaled), len(colors) - 2)
    ratio = scaled - index
    start, end = colors[index], colors[index + 1]
    return tuple(round(a + (b - a) * ratio) for a, b in zip(start, end))


def text_color(background: RGB) -> str:
    """Black on light backgrounds, white on dark ones."""
    r, g, b = background
    luminance = 0.299 * r + 0.587 * g + 0.114 * b
    return "black" if luminance >= 128 else "white"


class ScreenRenderer:
    """
    Draws the current fetch state as a gradient panel.

    Instances are observers: pass one to FetchStateMachine.subscribe().
    """

    def __init__(self, console: Optional[Console] = None, width: int = 56):
        self.console = console or Console()
        self.width = width

    def __call__(self, state: FetchState) -> None:
        self.render(state)

    def build(self, state: FetchState) -> Panel:
        colors = gradient_for_state(state)
        lines = state_lines(state)
        inner_width = self.width - 4
        body = Text(justify="center")
        for row, line in enumerate(lines):
            background = blend(colors, row / max(len(lines) - 1, 1))
            style = f"{text_color(background)} on {to_hex(background)}"
            if row == 0:
                style = "bold " + style
            body.append(line.center(inner_width), style=style)
            if row < len(lines) - 1:
                body.append("\n")
        return Panel(
            body,
            title=TITLE,
            width=self.width,
            border_style=to_hex(colors[0]),
        )

    def render(self, state: FetchState) -> None:
        self.console.print(self.build(state))
