"""
Shared data models and interfaces for the Snow Day Calculator.

All engine, data and CLI modules import their types from here.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional


# =============================================================================
# ENUMS
# =============================================================================

class RegionCategory(Enum):
    """Broad region a postal code belongs to, with its closure multiplier."""
    CANADIAN = "canadian"          # Higher tolerance for winter weather
    NORTHERN_US = "northern_us"    # Used to severe cold
    SOUTHERN_US = "southern_us"    # Closes at much lower thresholds
    OTHER_US = "other_us"          # Unclassifiable, neutral

    @property
    def multiplier(self) -> float:
        return _REGION_MULTIPLIERS[self]


class DistrictType(Enum):
    """Setting of a school district, inferred from the postal code."""
    RURAL = "rural"
    URBAN = "urban"
    SUBURBAN = "suburban"

    @property
    def multiplier(self) -> float:
        return _DISTRICT_MULTIPLIERS[self]

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


_REGION_MULTIPLIERS: Dict[RegionCategory, float] = {
    RegionCategory.CANADIAN: 0.7,
    RegionCategory.NORTHERN_US: 0.8,
    RegionCategory.SOUTHERN_US: 1.4,
    RegionCategory.OTHER_US: 1.0,
}

_DISTRICT_MULTIPLIERS: Dict[DistrictType, float] = {
    DistrictType.RURAL: 1.3,     # Long bus routes, closes early
    DistrictType.URBAN: 0.8,     # Better snow removal, higher threshold
    DistrictType.SUBURBAN: 1.0,
}


class RiskLevel(Enum):
    """
    Recommendation band for a closure probability.

    Each member is (lower_bound, label, description). Bands are checked
    top-down with inclusive lower bounds.
    """
    EXTREMELY_HIGH = (90, "Extremely High Risk", "School closure almost certain!")
    VERY_HIGH = (80, "Very High Risk", "School closure extremely likely!")
    HIGH = (70, "High Risk", "Strong chance of school closure")
    MODERATE = (55, "Moderate Risk", "Monitor school announcements closely")
    LOW_TO_MODERATE = (35, "Low to Moderate Risk", "Prepare for potential closure")
    LOW = (15, "Low Risk", "School likely to remain open")
    VERY_LOW = (0, "Very Low Risk", "School will almost certainly remain open")

    def __init__(self, lower_bound: float, label: str, description: str):
        self.lower_bound = lower_bound
        self.label = label
        self.description = description

    @property
    def text(self) -> str:
        """Full recommendation text, e.g. 'High Risk - Strong chance of school closure'."""
        return f"{self.label} - {self.description}"

    @classmethod
    def for_probability(cls, probability: float) -> "RiskLevel":
        for level in cls:
            if probability >= level.lower_bound:
                return level
        return cls.VERY_LOW


class AdviceCategory(Enum):
    PREPARATION = "preparation"
    SAFETY = "safety"
    TIMING = "timing"
    ALTERNATIVE = "alternative"


class AdvicePriority(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# =============================================================================
# DATA CLASSES - INPUTS
# =============================================================================

def _require_finite(name: str, value: float) -> None:
    if value is None or not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {value!r}")


@dataclass(frozen=True)
class WeatherObservation:
    """
    Weather conditions fed into one calculation.

    Temperature is in Fahrenheit, snowfall in inches, wind in mph.
    """
    temperature_f: float
    snowfall_in: float
    wind_speed_mph: float

    def __post_init__(self):
        _require_finite("temperature_f", self.temperature_f)
        _require_finite("snowfall_in", self.snowfall_in)
        _require_finite("wind_speed_mph", self.wind_speed_mph)
        if self.snowfall_in < 0:
            raise ValueError(f"snowfall_in must be non-negative, got {self.snowfall_in}")
        if self.wind_speed_mph < 0:
            raise ValueError(f"wind_speed_mph must be non-negative, got {self.wind_speed_mph}")


@dataclass(frozen=True)
class LocationClassification:
    """Region and district inferred from a postal code."""
    postal_code: str
    region: RegionCategory
    district: DistrictType
    is_fallback: bool = False      # True when the code could not be parsed

    @property
    def is_canadian(self) -> bool:
        return self.region == RegionCategory.CANADIAN

    @property
    def combined_multiplier(self) -> float:
        return self.region.multiplier * self.district.multiplier


MIN_WEIGHT = 0.0
MAX_WEIGHT = 10.0

WEIGHT_KEYS = ("temperature", "snowfall", "wind_speed", "school_district")


@dataclass(frozen=True)
class WeightConfig:
    """
    User-adjustable factor weights.

    Weights are relative: the engine divides each by their sum before use.
    """
    temperature: float
    snowfall: float
    wind_speed: float
    school_district: float

    def __post_init__(self):
        for key in WEIGHT_KEYS:
            value = getattr(self, key)
            _require_finite(key, value)
            if not MIN_WEIGHT <= value <= MAX_WEIGHT:
                raise ValueError(
                    f"Weight '{key}' must be between {MIN_WEIGHT:g} and {MAX_WEIGHT:g}, got {value}"
                )

    @property
    def total(self) -> float:
        return self.temperature + self.snowfall + self.wind_speed + self.school_district

    def as_dict(self) -> Dict[str, float]:
        return {key: getattr(self, key) for key in WEIGHT_KEYS}

    def normalized(self) -> Dict[str, float]:
        """Weights divided by their sum. A zero sum yields all zeros."""
        total = self.total
        if total <= 0:
            return {key: 0.0 for key in WEIGHT_KEYS}
        return {key: getattr(self, key) / total for key in WEIGHT_KEYS}

    def percentages(self) -> Dict[str, float]:
        """Share of the total weight per factor, in percent."""
        return {key: w * 100 for key, w in self.normalized().items()}

    def replace(self, **overrides: Optional[float]) -> "WeightConfig":
        """Return a copy with the non-None overrides applied."""
        values = self.as_dict()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return WeightConfig(**values)


# =============================================================================
# DATA CLASSES - OUTPUTS
# =============================================================================

@dataclass(frozen=True)
class FactorScores:
    """Independent 0-100 severity scores computed from one observation."""
    temperature: float
    snowfall: float
    wind: float
    visibility: float
    ice: float
    apparent_temperature_f: float

    def as_list(self) -> List[float]:
        return [self.temperature, self.snowfall, self.wind, self.visibility, self.ice]


@dataclass(frozen=True)
class CalculationResult:
    """
    Immutable snapshot of one closure probability calculation.

    A new result is built for every calculation; results are never updated.
    """
    probability: int                         # Rounded, 0-98
    raw_probability: float                   # Unrounded final value
    recommendation: RiskLevel
    factor_contributions: Mapping[str, float]  # Weighted points per factor, read-only
    applied_weights: WeightConfig
    location: str                            # e.g. "US Location (12345) (Urban District)"
    classification: LocationClassification
    observation: WeatherObservation
    factors: FactorScores
    base_probability: float                  # After multipliers and floors
    weighted_probability: float              # Sum of contributions
    floor: float = 0.0                       # Hard floor that applied (0 if none)
    calculated_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        object.__setattr__(
            self, "factor_contributions", MappingProxyType(dict(self.factor_contributions))
        )

    @property
    def total_weight(self) -> float:
        return self.applied_weights.total

    @property
    def recommendation_text(self) -> str:
        return self.recommendation.text

    def describe_factors(self) -> Dict[str, str]:
        """Display strings for the raw inputs."""
        obs = self.observation
        apparent = self.factors.apparent_temperature_f
        temperature = f"{obs.temperature_f:g}°F"
        if apparent != obs.temperature_f:
            temperature += f" (feels like {round_half_up(apparent)}°F)"
        return {
            "temperature": temperature,
            "snowfall": f"{obs.snowfall_in:g} inches",
            "wind_speed": f"{obs.wind_speed_mph:g} mph",
        }

    def contribution_shares(self) -> Dict[str, float]:
        """Percentage of the weighted probability attributable to each factor."""
        total = sum(self.factor_contributions.values())
        if total <= 0:
            return {key: 0.0 for key in self.factor_contributions}
        return {key: value / total * 100 for key, value in self.factor_contributions.items()}

    def to_narrative_request(self) -> Dict[str, object]:
        """Payload handed to a narrative-generation collaborator."""
        return {
            "zipCode": self.classification.postal_code,
            "temperature": self.observation.temperature_f,
            "snowfall": self.observation.snowfall_in,
            "windSpeed": self.observation.wind_speed_mph,
            "schoolDistrict": self.classification.district.value,
            "probability": self.probability,
        }

    def to_dict(self) -> Dict[str, object]:
        return {
            "probability": self.probability,
            "raw_probability": self.raw_probability,
            "recommendation": self.recommendation.text,
            "risk_level": self.recommendation.label,
            "location": self.location,
            "region": self.classification.region.value,
            "district": self.classification.district.value,
            "factors": self.describe_factors(),
            "raw_values": {
                "temperature": self.observation.temperature_f,
                "snowfall": self.observation.snowfall_in,
                "wind_speed": self.observation.wind_speed_mph,
            },
            "factor_scores": {
                "temperature": self.factors.temperature,
                "snowfall": self.factors.snowfall,
                "wind": self.factors.wind,
                "visibility": self.factors.visibility,
                "ice": self.factors.ice,
                "apparent_temperature": self.factors.apparent_temperature_f,
            },
            "factor_contributions": dict(self.factor_contributions),
            "applied_weights": self.applied_weights.as_dict(),
            "total_weight": self.total_weight,
            "base_probability": self.base_probability,
            "weighted_probability": self.weighted_probability,
            "calculated_at": self.calculated_at.isoformat(),
        }


@dataclass(frozen=True)
class ForecastPoint:
    """One hourly sample of the projected closure probability."""
    timestamp: datetime
    probability: int

    @property
    def hour(self) -> int:
        return self.timestamp.hour


@dataclass(frozen=True)
class ForecastSummary:
    """Headline numbers for a projected series."""
    points: List[ForecastPoint]
    peak: int
    average: int


@dataclass(frozen=True)
class Advice:
    """A practical suggestion derived from a calculation."""
    category: AdviceCategory
    title: str
    description: str
    priority: AdvicePriority


# =============================================================================
# HELPERS
# =============================================================================

def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return int(math.floor(value + 0.5))


# =============================================================================
# ABSTRACT INTERFACES
# =============================================================================

class WeatherSource(ABC):
    """Anything that can supply a weather observation for a postal code."""

    @abstractmethod
    def observe(self, postal_code: str) -> WeatherObservation:
        """
        Return current conditions for a postal code.

        Args:
            postal_code: Raw US ZIP or Canadian postal code

        Returns:
            WeatherObservation for the location
        """
        pass
