"""OpenWeather Current Weather API client implementation."""
import logging
import requests
from typing import Any, Optional
from weather_client import (
    AuthError,
    DecodeError,
    HttpError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    WeatherClientBase,
)
from weather_record import ConditionDescriptor, WeatherRecord


DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5/"


class OpenWeatherClient(WeatherClientBase):
    """
    Weather client using the OpenWeather Current Weather API.

    Queries by city name: https://openweathermap.org/current#name
    Always requests metric units, so temperatures arrive in Celsius.
    """

    UNITS = "metric"

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: Optional[float] = None):
        """
        Initialize OpenWeather client.

        Args:
            base_url: API root; the "weather" path is appended to it
            timeout: HTTP timeout in seconds (None keeps the requests default)
        """
        if not base_url.endswith("/"):
            base_url += "/"
        self.base_url = base_url
        self.timeout = timeout

    @property
    def url(self) -> str:
        return self.base_url + "weather"

    def fetch(self, city_query: str, credential: str) -> WeatherRecord:
        """
        Fetch current weather for a city from OpenWeather.

        Returns:
            WeatherRecord: Current weather information

        Raises:
            AuthError, NotFoundError, RateLimitError, HttpError: Non-success status
            NetworkError: The request never produced a response
            DecodeError: Success status but the body has the wrong shape
        """
        params = {
            "q": city_query,
            "appid": credential,
            "units": self.UNITS,
        }

        try:
            logging.info(f"Making OpenWeather API request: {self.url}")
            logging.debug(f"Request parameters: q={city_query!r}, units={self.UNITS}")
            response = requests.get(self.url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise NetworkError(f"Network error: {e}") from e

        logging.info(f"API response status: {response.status_code}")

        if not 200 <= response.status_code < 300:
            self._raise_for_status(response)

        try:
            data = response.json()
        except ValueError as e:
            logging.error(f"Response body is not JSON: {e}")
            raise DecodeError(f"Failed to parse response: {e}", status_code=response.status_code) from e

        logging.debug(f"API response (truncated): {str(data)[:500]}...")
        record = parse_weather(data)
        logging.info(f"Successfully parsed weather data: {record.location}, {record.temperature_celsius}°C")
        return record

    def _raise_for_status(self, response: requests.Response) -> None:
        """Map a non-success response onto the failure taxonomy."""
        status = response.status_code
        body = _safe_text(response)
        logging.error(f"API request failed with status {status}, body: {(body or '')[:500]}")

        if status == 401:
            raise AuthError("HTTP 401: unauthorized", status_code=status, body=body)
        if status == 404:
            raise NotFoundError("HTTP 404: city not found", status_code=status, body=body)
        if status == 429:
            raise RateLimitError("HTTP 429: too many requests", status_code=status, body=body)
        raise HttpError(status, reason=response.reason or "", body=body)


def parse_weather(data: Any) -> WeatherRecord:
    """
    Build a WeatherRecord from a decoded current weather payload.

    Every required field must be present with the right type; anything
    else raises DecodeError rather than producing a partial record.
    """
    if not isinstance(data, dict):
        raise DecodeError(f"Failed to parse response: expected object, got {type(data).__name__}")

    main_data = _field(data, "main", dict)
    wind_data = _field(data, "wind", dict)
    weather_array = _field(data, "weather", list)

    conditions = []
    for index, item in enumerate(weather_array):
        if not isinstance(item, dict):
            raise DecodeError(f"Failed to parse response: 'weather[{index}]' is not an object")
        conditions.append(ConditionDescriptor(
            primary_category=_field(item, "main", str, f"weather[{index}]."),
            description=_field(item, "description", str, f"weather[{index}]."),
            icon_code=_field(item, "icon", str, f"weather[{index}]."),
        ))

    return WeatherRecord(
        location=_field(data, "name", str),
        temperature_celsius=_number(main_data, "temp", "main."),
        humidity_percent=_integer(main_data, "humidity", "main."),
        pressure_hpa=_integer(main_data, "pressure", "main."),
        conditions=tuple(conditions),
        wind_speed_ms=_number(wind_data, "speed", "wind."),
    )


def _field(data: dict, key: str, kind: type, prefix: str = "") -> Any:
    if key not in data:
        raise DecodeError(f"Response missing '{prefix}{key}'")
    value = data[key]
    if not isinstance(value, kind):
        raise DecodeError(f"Response field '{prefix}{key}' is not {kind.__name__}")
    return value


def _number(data: dict, key: str, prefix: str = "") -> float:
    value = data.get(key)
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        if key not in data:
            raise DecodeError(f"Response missing '{prefix}{key}'")
        raise DecodeError(f"Response field '{prefix}{key}' is not a number")
    return float(value)


def _integer(data: dict, key: str, prefix: str = "") -> int:
    value = _number(data, key, prefix)
    if not value.is_integer():
        raise DecodeError(f"Response field '{prefix}{key}' is not an integer")
    return int(value)


def _safe_text(response: requests.Response) -> Optional[str]:
    try:
        text = response.text
    except (ValueError, requests.exceptions.RequestException):
        return None
    return text if isinstance(text, str) else None
