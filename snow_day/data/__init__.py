"""Weather data sources for the Snow Day Calculator."""

from snow_day.data.demo import (
    DemoWeatherSource,
    round_to_half_inch,
)

__all__ = [
    "DemoWeatherSource",
    "round_to_half_inch",
]
