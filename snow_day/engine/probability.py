"""
Closure Probability Engine

Step 1: Wind chill
- Apparent temperature from the NWS wind-chill approximation

Step 2: Factor scores
- Independent 0-100 severity scores from fixed threshold ladders
  (temperature, snowfall, wind, visibility, ice)

Step 3: Combination
- Worst factor plus overall severity, scaled by region and district,
  with hard floors for known high-risk combinations

Step 4: Weighting
- User weights split the result into per-factor contributions and
  produce the final, capped closure probability
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from snow_day.core import (
    CalculationResult,
    FactorScores,
    LocationClassification,
    RiskLevel,
    WeatherObservation,
    WeightConfig,
    round_half_up,
)
from snow_day.config import DEFAULT_WEIGHTS, PROBABILITY_CEILING, PROBABILITY_FLOOR
from snow_day.engine.location import classify_postal_code

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Wind chill is only defined for cold, windy conditions
WIND_CHILL_MAX_TEMP_F = 50.0
WIND_CHILL_MIN_WIND_MPH = 3.0

# Threshold ladders: (threshold, score), checked top-down, first match wins.
# Apparent temperature is checked before raw temperature.
APPARENT_TEMPERATURE_LADDER: Tuple[Tuple[float, float], ...] = (
    (-25, 95),
    (-15, 85),
)
TEMPERATURE_LADDER: Tuple[Tuple[float, float], ...] = (
    (-20, 90),
    (-10, 75),
    (0, 55),
    (15, 35),
    (25, 20),
    (32, 10),
)
SNOWFALL_LADDER: Tuple[Tuple[float, float], ...] = (
    (8, 95),
    (6, 85),
    (4, 65),
    (2, 40),
    (1, 25),
    (0.5, 15),
)
WIND_LADDER: Tuple[Tuple[float, float], ...] = (
    (40, 85),
    (30, 70),
    (20, 45),
    (15, 25),
    (10, 10),
)
# (min wind mph, min snowfall in, score)
VISIBILITY_LADDER: Tuple[Tuple[float, float, float], ...] = (
    (25, 2, 90),    # < 0.25 mi
    (15, 1, 60),    # 0.25 - 0.5 mi
    (10, 0.5, 30),  # 0.5 - 1 mi
)
TRACE_SNOW_SCORE = 5.0

FREEZING_RAIN_TEMP_RANGE = (28.0, 32.0)
FREEZING_RAIN_ICE_SCORE = 70.0
BLACK_ICE_SCORE = 50.0
GENERAL_ICE_SCORE = 30.0

# Combination of factor scores
MAX_FACTOR_WEIGHT = 0.6
MEAN_FACTOR_WEIGHT = 0.4

# Hard floors on the closure probability
EXTREME_COLD_FLOOR = 90.0    # temp < -10 and snow > 6
BLIZZARD_FLOOR = 85.0        # wind > 30 and snow > 2
FREEZING_RAIN_FLOOR = 80.0   # 28 <= temp <= 32 and any snow

# Share of the combined probability carried by the school district weight
DISTRICT_CONTRIBUTION_SCALE = 0.2
# Share of the visibility score folded into the wind contribution
VISIBILITY_WIND_SHARE = 0.5


# =============================================================================
# FACTOR FUNCTIONS
# =============================================================================


def wind_chill(temperature_f: float, wind_speed_mph: float) -> float:
    """
    Apparent temperature in Fahrenheit.

    Returns the raw temperature above 50°F or below 3 mph, where the
    formula does not apply.
    """
    if temperature_f > WIND_CHILL_MAX_TEMP_F or wind_speed_mph < WIND_CHILL_MIN_WIND_MPH:
        return temperature_f
    wind_term = wind_speed_mph ** 0.16
    return 35.74 + 0.6215 * temperature_f - 35.75 * wind_term + 0.4275 * temperature_f * wind_term


def _at_or_below(value: float, ladder: Sequence[Tuple[float, float]]) -> Optional[float]:
    for threshold, score in ladder:
        if value <= threshold:
            return score
    return None


def _at_or_above(value: float, ladder: Sequence[Tuple[float, float]]) -> Optional[float]:
    for threshold, score in ladder:
        if value >= threshold:
            return score
    return None


def temperature_factor(temperature_f: float, apparent_temperature_f: float) -> float:
    score = _at_or_below(apparent_temperature_f, APPARENT_TEMPERATURE_LADDER)
    if score is not None:
        return score
    score = _at_or_below(temperature_f, TEMPERATURE_LADDER)
    return score if score is not None else 0.0


def snowfall_factor(snowfall_in: float) -> float:
    score = _at_or_above(snowfall_in, SNOWFALL_LADDER)
    if score is not None:
        return score
    return TRACE_SNOW_SCORE if snowfall_in > 0 else 0.0


def wind_factor(wind_speed_mph: float) -> float:
    score = _at_or_above(wind_speed_mph, WIND_LADDER)
    return score if score is not None else 0.0


def visibility_factor(wind_speed_mph: float, snowfall_in: float) -> float:
    """Blowing-snow visibility score. Needs both wind and snow."""
    for min_wind, min_snow, score in VISIBILITY_LADDER:
        if wind_speed_mph >= min_wind and snowfall_in >= min_snow:
            return score
    return 0.0


def _is_freezing_rain(temperature_f: float, snowfall_in: float) -> bool:
    low, high = FREEZING_RAIN_TEMP_RANGE
    return low <= temperature_f <= high and snowfall_in > 0


def ice_factor(temperature_f: float, snowfall_in: float, wind_speed_mph: float) -> float:
    """Road ice score. First matching regime wins."""
    if _is_freezing_rain(temperature_f, snowfall_in):
        return FREEZING_RAIN_ICE_SCORE
    if temperature_f <= 32 and wind_speed_mph >= 10:
        return BLACK_ICE_SCORE
    if temperature_f <= 25:
        return GENERAL_ICE_SCORE
    return 0.0


def score_factors(observation: WeatherObservation) -> FactorScores:
    """Compute every factor score for one observation."""
    temp = observation.temperature_f
    snow = observation.snowfall_in
    wind = observation.wind_speed_mph
    apparent = wind_chill(temp, wind)

    return FactorScores(
        temperature=temperature_factor(temp, apparent),
        snowfall=snowfall_factor(snow),
        wind=wind_factor(wind),
        visibility=visibility_factor(wind, snow),
        ice=ice_factor(temp, snow, wind),
        apparent_temperature_f=apparent,
    )


def combine_factor_scores(scores: List[float]) -> float:
    """Reward the single worst condition while reflecting overall severity."""
    if not scores:
        return 0.0
    return max(scores) * MAX_FACTOR_WEIGHT + (sum(scores) / len(scores)) * MEAN_FACTOR_WEIGHT


def hard_floor(observation: WeatherObservation) -> float:
    """
    Minimum closure probability for known high-risk combinations.

    Returns the highest floor that applies, or 0 when none do.
    """
    temp = observation.temperature_f
    snow = observation.snowfall_in
    wind = observation.wind_speed_mph

    floors = [0.0]
    if temp < -10 and snow > 6:
        floors.append(EXTREME_COLD_FLOOR)
    if wind > 30 and snow > 2:
        floors.append(BLIZZARD_FLOOR)
    if _is_freezing_rain(temp, snow):
        floors.append(FREEZING_RAIN_FLOOR)
    return max(floors)


def clamp_probability(value: float) -> float:
    return max(PROBABILITY_FLOOR, min(PROBABILITY_CEILING, value))


def location_label(
    classification: LocationClassification,
    location_name: Optional[str] = None,
) -> str:
    """Human-readable location, e.g. 'Buffalo, US (Suburban District)'."""
    if not location_name:
        country = "Canadian" if classification.is_canadian else "US"
        location_name = f"{country} Location ({classification.postal_code})"
    return f"{location_name} ({classification.district.display_name} District)"


# =============================================================================
# CLOSURE PROBABILITY ENGINE
# =============================================================================


class ClosureProbabilityEngine:
    """
    Converts weather and location into a weighted closure probability.

    Pipeline:
        observation -> factor scores -> base probability (x region x district,
        floored) -> weighted contributions -> final probability (x region x
        district, floored, capped at 98)

    Every call is independent and side-effect free.
    """

    def __init__(self, weights: Optional[WeightConfig] = None):
        """
        Initialize the engine.

        Args:
            weights: Default weights used when compute() is not given any.
                    If None, uses DEFAULT_WEIGHTS.
        """
        self.weights = weights or DEFAULT_WEIGHTS

    def contributions(
        self,
        factors: FactorScores,
        base_probability: float,
        weights: WeightConfig,
    ) -> Dict[str, float]:
        """Weighted points each named factor adds to the final probability."""
        normalized = weights.normalized()
        return {
            "temperature": factors.temperature * normalized["temperature"],
            "snowfall": factors.snowfall * normalized["snowfall"],
            "wind_speed": (
                factors.wind + factors.visibility * VISIBILITY_WIND_SHARE
            ) * normalized["wind_speed"],
            "school_district": (
                base_probability * DISTRICT_CONTRIBUTION_SCALE * normalized["school_district"]
            ),
        }

    def compute(
        self,
        observation: WeatherObservation,
        postal_code: str,
        weights: Optional[WeightConfig] = None,
        location_name: Optional[str] = None,
    ) -> CalculationResult:
        """
        Calculate the closure probability for one location.

        Args:
            observation: Current weather conditions
            postal_code: US ZIP or Canadian postal code (malformed input is
                        classified with defaults)
            weights: Factor weights; falls back to the engine's weights
            location_name: Optional display name for the location

        Returns:
            A new CalculationResult
        """
        weights = weights or self.weights
        classification = classify_postal_code(postal_code)
        multiplier = classification.combined_multiplier

        factors = score_factors(observation)
        floor = hard_floor(observation)

        base_probability = combine_factor_scores(factors.as_list()) * multiplier
        base_probability = max(base_probability, floor)

        contributions = self.contributions(factors, base_probability, weights)
        weighted_probability = sum(contributions.values())

        final_probability = clamp_probability(max(weighted_probability * multiplier, floor))
        recommendation = RiskLevel.for_probability(final_probability)

        logger.info(
            f"Closure probability for {classification.postal_code or '<blank>'}: "
            f"{final_probability:.1f}% ({recommendation.label}), "
            f"base={base_probability:.1f}, weighted={weighted_probability:.1f}, "
            f"multiplier={multiplier:.2f}"
        )

        return CalculationResult(
            probability=round_half_up(final_probability),
            raw_probability=final_probability,
            recommendation=recommendation,
            factor_contributions=contributions,
            applied_weights=weights,
            location=location_label(classification, location_name),
            classification=classification,
            observation=observation,
            factors=factors,
            base_probability=base_probability,
            weighted_probability=weighted_probability,
            floor=floor,
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def compute(
    observation: WeatherObservation,
    postal_code: str,
    weights: Optional[WeightConfig] = None,
    location_name: Optional[str] = None,
) -> CalculationResult:
    """
    Convenience function to calculate a closure probability.

    Args:
        observation: Current weather conditions
        postal_code: US ZIP or Canadian postal code
        weights: Optional custom weights. Uses DEFAULT_WEIGHTS if None.
        location_name: Optional display name for the location

    Returns:
        CalculationResult
    """
    engine = ClosureProbabilityEngine(weights=weights)
    return engine.compute(observation, postal_code, location_name=location_name)
