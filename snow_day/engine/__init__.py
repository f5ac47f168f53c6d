"""
Closure probability engine for the Snow Day Calculator.

Contains modules for classifying postal codes, scoring weather factors,
projecting a 48-hour trend and deriving practical advice.
"""

from snow_day.engine.location import (
    classify_postal_code,
    is_canadian_postal_code,
    extract_zip_number,
)

from snow_day.engine.probability import (
    ClosureProbabilityEngine,
    compute,
    wind_chill,
    temperature_factor,
    snowfall_factor,
    wind_factor,
    visibility_factor,
    ice_factor,
    score_factors,
    combine_factor_scores,
    hard_floor,
)

from snow_day.engine.forecast import (
    ForecastProjector,
    project,
    summarize,
)

from snow_day.engine.recommendations import generate_advice

__all__ = [
    # Location
    "classify_postal_code",
    "is_canadian_postal_code",
    "extract_zip_number",
    # Probability
    "ClosureProbabilityEngine",
    "compute",
    "wind_chill",
    "temperature_factor",
    "snowfall_factor",
    "wind_factor",
    "visibility_factor",
    "ice_factor",
    "score_factors",
    "combine_factor_scores",
    "hard_floor",
    # Forecast
    "ForecastProjector",
    "project",
    "summarize",
    # Advice
    "generate_advice",
]
