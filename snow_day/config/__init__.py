"""Configuration module for the Snow Day Calculator."""

from snow_day.config.presets import (
    DEFAULT,
    CONSERVATIVE,
    BALANCED,
    SNOW_SENSITIVE,
    PRESETS,
    DEFAULT_WEIGHTS,
    get_preset,
    list_presets,
)

from snow_day.config.settings import (
    # Probability Limits
    PROBABILITY_CEILING,
    PROBABILITY_FLOOR,
    # Forecast Parameters
    FORECAST_HOURS,
    FORECAST_SEED,
    # Demo Data
    DEMO_SEED,
    # Weights
    DEFAULT_PRESET,
    # Logging
    LOG_LEVEL,
    LOG_FORMAT,
)

__all__ = [
    # Presets
    "DEFAULT",
    "CONSERVATIVE",
    "BALANCED",
    "SNOW_SENSITIVE",
    "PRESETS",
    "DEFAULT_WEIGHTS",
    "get_preset",
    "list_presets",
    # Probability Limits
    "PROBABILITY_CEILING",
    "PROBABILITY_FLOOR",
    # Forecast Parameters
    "FORECAST_HOURS",
    "FORECAST_SEED",
    # Demo Data
    "DEMO_SEED",
    # Weights
    "DEFAULT_PRESET",
    # Logging
    "LOG_LEVEL",
    "LOG_FORMAT",
]
