"""
Snow Day Calculator - School closure probability from winter weather.

Scores temperature, snowfall, wind, visibility and ice conditions, adjusts
for region and school district type, and applies user weights to estimate
the chance that school is cancelled.
"""

__version__ = "0.1.0"

from snow_day.core import (
    # Enums
    RegionCategory,
    DistrictType,
    RiskLevel,
    # Data classes
    WeatherObservation,
    LocationClassification,
    WeightConfig,
    FactorScores,
    CalculationResult,
    ForecastPoint,
    ForecastSummary,
    Advice,
)

from snow_day.config import (
    DEFAULT_WEIGHTS,
    get_preset,
    list_presets,
)

from snow_day.engine import (
    ClosureProbabilityEngine,
    ForecastProjector,
    classify_postal_code,
    compute,
    project,
    summarize,
    generate_advice,
)

__all__ = [
    # Version
    "__version__",
    # Enums
    "RegionCategory",
    "DistrictType",
    "RiskLevel",
    # Data classes
    "WeatherObservation",
    "LocationClassification",
    "WeightConfig",
    "FactorScores",
    "CalculationResult",
    "ForecastPoint",
    "ForecastSummary",
    "Advice",
    # Config
    "DEFAULT_WEIGHTS",
    "get_preset",
    "list_presets",
    # Engine
    "ClosureProbabilityEngine",
    "ForecastProjector",
    "classify_postal_code",
    "compute",
    "project",
    "summarize",
    "generate_advice",
]
