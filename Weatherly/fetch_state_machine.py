"""Fetch state machine - drives one weather search from Idle to Success or Error."""
import asyncio
import logging
from typing import Callable, List, Optional, Set
from fetch_state import IDLE, LOADING, Error, FetchState, Success
from weather_client import (
    AuthError,
    HttpError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    WeatherClientBase,
)


EMPTY_CITY_MESSAGE = "Please enter a city name"
MISSING_CREDENTIAL_MESSAGE = (
    "API key not found. Please add WEATHER_API_KEY to your environment "
    "or .env file and restart."
)

Observer = Callable[[FetchState], None]


def mask_credential(credential: str) -> str:
    """Loggable form of the API key: first four characters only."""
    if not credential or not credential.strip():
        return "EMPTY"
    return f"{credential[:4]}..."


def describe_error(error: BaseException) -> str:
    """
    Turn a fetch failure into the text shown on the error screen.

    Args:
        error: Exception raised by the weather client (or anything else)

    Returns:
        Human-readable message saying what went wrong and what to do
    """
    if isinstance(error, AuthError):
        if error.body and "Invalid API key" in error.body:
            return (
                "Invalid API key. Please verify your API key on the OpenWeatherMap website. "
                "Make sure the key is active and correctly copied to WEATHER_API_KEY. "
                "Note: New API keys may take 10-15 minutes to fully activate."
            )
        return (
            "Invalid API key. Please check your OpenWeatherMap API key in WEATHER_API_KEY. "
            "Note: New API keys may take a few minutes to activate."
        )
    if isinstance(error, NotFoundError):
        return "City not found. Please check the city name and try again."
    if isinstance(error, RateLimitError):
        return "Too many requests. Please wait a moment and try again."
    if isinstance(error, HttpError):
        return f"Error {error.status_code}: {error.reason}".rstrip(": ")
    if isinstance(error, NetworkError):
        return "Network error: Please check your internet connection and try again."
    return f"Failed to fetch weather data: {str(error) or 'Unknown error'}"


class FetchStateMachine:
    """
    Holds the current fetch state and runs weather searches.

    There is a single writer (this object) and any number of observers.
    Searches are never cancelled: when two overlap, whichever finishes
    last decides the published state.
    """

    def __init__(self, client: WeatherClientBase, credential: str):
        """
        Initialize the state machine in the Idle state.

        Args:
            client: Weather client used for every search
            credential: API key passed to the client; blank means not configured
        """
        self.client = client
        self._credential = credential or ""
        self._state: FetchState = IDLE
        self._observers: List[Observer] = []
        self._tasks: Set[asyncio.Task] = set()
        logging.debug(f"API key loaded: {mask_credential(self._credential)}")

    @property
    def state(self) -> FetchState:
        return self._state

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register an observer called with every new state.

        Returns:
            Callable that removes the observer again
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def reset(self) -> None:
        self._publish(IDLE)

    def request_fetch(self, city_name: str) -> Optional["asyncio.Task[None]"]:
        """
        Start a weather search for a city.

        Input problems are reported synchronously as an Error state and no
        request is made. Otherwise the state becomes Loading and a task is
        scheduled on the running event loop; it is returned so callers can
        await completion.

        Must be called from inside a running event loop.
        """
        if not city_name or not city_name.strip():
            self._publish(Error(EMPTY_CITY_MESSAGE))
            return None

        if not self._credential.strip():
            logging.error("API key is empty!")
            self._publish(Error(MISSING_CREDENTIAL_MESSAGE))
            return None

        logging.info(f"Fetching weather for: {city_name}")
        logging.debug(f"Using API key: {mask_credential(self._credential)}")

        loop = asyncio.get_running_loop()
        self._publish(LOADING)
        task = loop.create_task(self._run_fetch(city_name))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run_fetch(self, city_name: str) -> None:
        try:
            weather = await asyncio.to_thread(self.client.fetch, city_name, self._credential)
        except Exception as e:
            logging.error(f"Weather fetch for {city_name!r} failed: {e}")
            self._publish(Error(describe_error(e)))
            return

        logging.info(f"Weather fetch successful: {weather.location}, {weather.temperature_celsius}°C")
        self._publish(Success(weather))

    def _publish(self, state: FetchState) -> None:
        self._state = state
        logging.debug(f"State -> {type(state).__name__}")
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception:
                logging.exception(f"Observer {observer!r} failed on {type(state).__name__}")
