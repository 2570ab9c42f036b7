"""Weather client abstraction and failure taxonomy."""
from abc import ABC, abstractmethod
from typing import Optional
from weather_record import WeatherRecord


class WeatherClientBase(ABC):
    """Abstract base class for current weather clients."""

    @abstractmethod
    def fetch(self, city_query: str, credential: str) -> WeatherRecord:
        """
        Fetch current weather for a free-text city query.

        Args:
            city_query: City name as typed by the user, passed through verbatim
            credential: API key for the upstream service

        Returns:
            WeatherRecord: Current weather for the resolved city

        Raises:
            WeatherClientError: One of its subclasses, depending on the failure
        """
        pass


class WeatherClientError(Exception):
    """Base exception raised when a weather fetch fails."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AuthError(WeatherClientError):
    """HTTP 401: the credential was rejected."""


class NotFoundError(WeatherClientError):
    """HTTP 404: the city query did not resolve."""


class RateLimitError(WeatherClientError):
    """HTTP 429: too many requests for this credential."""


class HttpError(WeatherClientError):
    """Any other non-success HTTP status."""

    def __init__(self, status_code: int, reason: str = "", body: Optional[str] = None):
        super().__init__(f"HTTP {status_code}: {reason}".rstrip(": "), status_code=status_code, body=body)
        self.reason = reason


class NetworkError(WeatherClientError):
    """Transport failure: DNS, refused connection, timeout, dropped connection."""


class DecodeError(WeatherClientError):
    """A 200 response whose body does not have the expected shape."""
