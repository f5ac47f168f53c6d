"""Core data models and interfaces."""

from snow_day.core.models import (
    # Enums
    RegionCategory,
    DistrictType,
    RiskLevel,
    AdviceCategory,
    AdvicePriority,
    # Data classes
    WeatherObservation,
    LocationClassification,
    WeightConfig,
    FactorScores,
    CalculationResult,
    ForecastPoint,
    ForecastSummary,
    Advice,
    # Constants and helpers
    MIN_WEIGHT,
    MAX_WEIGHT,
    WEIGHT_KEYS,
    round_half_up,
    # Abstract interfaces
    WeatherSource,
)

__all__ = [
    "RegionCategory",
    "DistrictType",
    "RiskLevel",
    "AdviceCategory",
    "AdvicePriority",
    "WeatherObservation",
    "LocationClassification",
    "WeightConfig",
    "FactorScores",
    "CalculationResult",
    "ForecastPoint",
    "ForecastSummary",
    "Advice",
    "MIN_WEIGHT",
    "MAX_WEIGHT",
    "WEIGHT_KEYS",
    "round_half_up",
    "WeatherSource",
]
