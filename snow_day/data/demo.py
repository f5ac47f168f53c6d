"""
Synthetic weather for the Snow Day Calculator.

Produces plausible winter conditions when no real observation is available.
Canadian postal codes get colder, snowier, windier values than US codes.
"""

import logging
from typing import Optional

import numpy as np

from snow_day.core import WeatherObservation, WeatherSource, round_half_up
from snow_day.config import DEMO_SEED
from snow_day.engine.location import is_canadian_postal_code

logger = logging.getLogger(__name__)


# (low, span) pairs: value = low + U[0,1) * span
CANADIAN_TEMPERATURE = (-15.0, 30.0)   # -15 to 15°F
CANADIAN_MAX_SNOW_IN = 10.0
CANADIAN_MAX_WIND_MPH = 30.0

US_TEMPERATURE = (-10.0, 40.0)         # -10 to 30°F
US_MAX_SNOW_IN = 8.0
US_MAX_WIND_MPH = 25.0


def round_to_half_inch(value: float) -> float:
    return round_half_up(value * 2) / 2


class DemoWeatherSource(WeatherSource):
    """Generates a random observation shaped by the postal code's country."""

    def __init__(self, rng: Optional[np.random.Generator] = None):
        """
        Initialize the demo source.

        Args:
            rng: Random generator. If None, seeded from DEMO_SEED (or OS entropy).
        """
        self.rng = rng if rng is not None else np.random.default_rng(DEMO_SEED)

    def observe(self, postal_code: str) -> WeatherObservation:
        """Return synthetic conditions for a postal code."""
        if is_canadian_postal_code(postal_code or ""):
            temp_low, temp_span = CANADIAN_TEMPERATURE
            max_snow = CANADIAN_MAX_SNOW_IN
            max_wind = CANADIAN_MAX_WIND_MPH
        else:
            temp_low, temp_span = US_TEMPERATURE
            max_snow = US_MAX_SNOW_IN
            max_wind = US_MAX_WIND_MPH

        observation = WeatherObservation(
            temperature_f=float(round_half_up(temp_low + self.rng.random() * temp_span)),
            snowfall_in=round_to_half_inch(self.rng.random() * max_snow),
            wind_speed_mph=float(round_half_up(self.rng.random() * max_wind)),
        )

        logger.warning(
            f"Using demo weather for {postal_code!r}: {observation.temperature_f:g}°F, "
            f"{observation.snowfall_in:g} in, {observation.wind_speed_mph:g} mph"
        )
        return observation
