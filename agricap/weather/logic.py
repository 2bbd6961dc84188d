import logging
import random
from typing import Optional, Sequence

from ..common.config_manager import GameSettings
from .models import WeatherBand, WeatherKind, WeatherReading, HEAT_BANDS, WETNESS_BANDS

logger = logging.getLogger(__name__)


class WeatherGenerationError(RuntimeError):
    """The random source kept producing values outside the allowed range."""


class WeatherGenerator:
    """Draws heat and wetness from a normal distribution around 1.0, cut off at +/- N deviations."""

    def __init__(self, rng: random.Random, settings: Optional[GameSettings] = None):
        self.rng = rng
        self.settings = settings or GameSettings()

    def deviation(self, kind: WeatherKind) -> float:
        if kind is WeatherKind.HEAT:
            return self.settings.heat_deviation
        return self.settings.wetness_deviation

    def bounds(self, kind: WeatherKind):
        spread = self.settings.cutoff_sigmas * self.deviation(kind)
        return 1 - spread, 1 + spread

    def generate(self, kind: WeatherKind) -> float:
        """Rejection-sample until the draw falls inside the bounds."""
        low, high = self.bounds(kind)
        deviation = self.deviation(kind)
        for attempt in range(self.settings.max_weather_draws):
            value = self.rng.gauss(1.0, deviation)
            if low <= value <= high:
                logger.debug("%s drawn: %.4f (attempt %d)", kind.value, value, attempt + 1)
                return value
            logger.debug("%s draw %.4f rejected", kind.value, value)
        raise WeatherGenerationError(
            f"no {kind.value} value within [{low:.3f}, {high:.3f}] "
            f"after {self.settings.max_weather_draws} draws")

    def next_year(self) -> WeatherReading:
        # wetness is drawn first; keeps seeded games reproducible
        wetness = self.generate(WeatherKind.WETNESS)
        heat = self.generate(WeatherKind.HEAT)
        return WeatherReading(wetness=wetness, heat=heat)


def describe_band(value: float, deviation: float, bands: Sequence[WeatherBand]) -> str:
    """Message of the highest band whose lower edge the value reaches, or ''."""
    for band in reversed(bands):
        if value >= 1 + deviation * band.threshold:
            return band.message
    return ""


def describe_weather(reading: WeatherReading, settings: Optional[GameSettings] = None) -> str:
    settings = settings or GameSettings()
    report = describe_band(reading.heat, settings.heat_deviation, HEAT_BANDS)
    report += describe_band(reading.wetness, settings.wetness_deviation, WETNESS_BANDS)
    return report
