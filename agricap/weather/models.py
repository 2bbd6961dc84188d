from enum import Enum
from dataclasses import dataclass
from typing import Tuple


class WeatherKind(Enum):
    HEAT = "heat"
    WETNESS = "wetness"


@dataclass(frozen=True)
class WeatherBand:
    threshold: float  # in standard deviations from 1.0
    message: str


@dataclass(frozen=True)
class WeatherReading:
    wetness: float
    heat: float


# Ordered by ascending threshold; looked up from the top down.
HEAT_BANDS: Tuple[WeatherBand, ...] = (
    WeatherBand(-3.0, "This was a glacial year "),
    WeatherBand(-2.5, "This was a freezing year "),
    WeatherBand(-2.0, "This was a frigid year "),
    WeatherBand(-1.5, "This was a bracing year "),
    WeatherBand(-1.0, "This was a chilly year "),
    WeatherBand(-0.5, "This was a mild year "),
    WeatherBand(0.5, "This was a warm year "),
    WeatherBand(1.0, "This was a hot year "),
    WeatherBand(1.5, "This was a sultry year "),
    WeatherBand(2.0, "This was a sweltering year "),
    WeatherBand(2.5, "This was a scorching year "),
)

WETNESS_BANDS: Tuple[WeatherBand, ...] = (
    WeatherBand(-3.0, "with an arid climate."),
    WeatherBand(-2.5, "with minimal precipitation."),
    WeatherBand(-2.0, "with scattered drizzle."),
    WeatherBand(-1.5, "with scarce rainfall."),
    WeatherBand(-1.0, "with light showers."),
    WeatherBand(-0.5, "with moderate rainfall."),
    WeatherBand(0.5, "with considerable precipitation."),
    WeatherBand(1.0, "with heavy rainfall."),
    WeatherBand(1.5, "with some squalling."),
    WeatherBand(2.0, "with torrential downpours."),
    WeatherBand(2.5, "with monsoon storms."),
)
