"""Fetch state - the four things the screen can show."""
from dataclasses import dataclass
from typing import Union
from weather_record import WeatherRecord


@dataclass(frozen=True)
class Idle:
    """No fetch attempted yet, or the screen was reset."""


@dataclass(frozen=True)
class Loading:
    """A fetch is in flight."""


@dataclass(frozen=True)
class Success:
    """The most recent fetch completed and parsed."""
    weather: WeatherRecord


@dataclass(frozen=True)
class Error:
    """The most recent fetch failed."""
    message: str


FetchState = Union[Idle, Loading, Success, Error]

IDLE = Idle()
LOADING = Loading()
