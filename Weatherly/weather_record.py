"""Weather record - immutable mirror of the OpenWeather current weather payload."""
from dataclasses import dataclass
from typing import Optional, Tuple


ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}@2x.png"


@dataclass(frozen=True)
class ConditionDescriptor:
    """One reported weather condition."""
    primary_category: str  # e.g., "Clear", "Rain", "Clouds"
    description: str  # e.g., "clear sky", "light rain"
    icon_code: str  # e.g., "01d"

    @property
    def icon_url(self) -> str:
        return ICON_URL_TEMPLATE.format(icon=self.icon_code)


@dataclass(frozen=True)
class WeatherRecord:
    """Decoded result of one successful weather query."""
    location: str
    temperature_celsius: float
    humidity_percent: int
    pressure_hpa: int
    conditions: Tuple[ConditionDescriptor, ...]
    wind_speed_ms: float

    @property
    def primary_condition(self) -> Optional[ConditionDescriptor]:
        """First reported condition, or None when the API sent none."""
        return self.conditions[0] if self.conditions else None
