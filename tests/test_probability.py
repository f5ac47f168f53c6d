"""
Tests for the closure probability engine.

Step 1: Wind chill
Step 2: Factor scores
Step 3: Combination, multipliers and floors
Step 4: Weighting and final probability
"""

import pytest

from snow_day.core import (
    CalculationResult,
    DistrictType,
    RegionCategory,
    RiskLevel,
    WeatherObservation,
    WeightConfig,
)
from snow_day.config import DEFAULT_WEIGHTS, BALANCED
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
    location_label,
    BLIZZARD_FLOOR,
    EXTREME_COLD_FLOOR,
    FREEZING_RAIN_FLOOR,
)
from snow_day.engine.location import classify_postal_code


# =============================================================================
# TEST DATA HELPERS
# =============================================================================

ZERO_WEIGHTS = WeightConfig(temperature=0, snowfall=0, wind_speed=0, school_district=0)


def make_observation(temp: float = 20.0, snow: float = 0.0, wind: float = 0.0) -> WeatherObservation:
    """Create a test observation with sensible defaults."""
    return WeatherObservation(temperature_f=temp, snowfall_in=snow, wind_speed_mph=wind)


# =============================================================================
# WIND CHILL TESTS
# =============================================================================


class TestWindChill:
    """Tests for the apparent temperature calculation."""

    def test_warm_temperature_unchanged(self):
        assert wind_chill(60.0, 20.0) == 60.0

    def test_light_wind_unchanged(self):
        assert wind_chill(10.0, 2.9) == 10.0

    def test_boundary_50f_uses_formula(self):
        assert wind_chill(50.0, 10.0) != 50.0

    def test_boundary_3mph_uses_formula(self):
        assert wind_chill(20.0, 3.0) != 20.0

    def test_matches_nws_table(self):
        # NWS wind chill chart: 0°F at 15 mph feels like -19°F
        assert wind_chill(0.0, 15.0) == pytest.approx(-19.4, abs=0.1)
        # 10°F at 25 mph feels like -11°F
        assert wind_chill(10.0, 25.0) == pytest.approx(-10.7, abs=0.1)

    def test_more_wind_feels_colder(self):
        assert wind_chill(10.0, 30.0) < wind_chill(10.0, 10.0)


# =============================================================================
# TEMPERATURE FACTOR TESTS
# =============================================================================


class TestTemperatureFactor:
    """Tests for the temperature ladder."""

    @pytest.mark.parametrize("temp,apparent,expected", [
        (-20, -14, 90),
        (-10, -10, 75),
        (0, 0, 55),
        (15, 15, 35),
        (25, 25, 20),
        (32, 32, 10),
        (33, 33, 0),
        (70, 70, 0),
    ])
    def test_raw_ladder(self, temp, apparent, expected):
        assert temperature_factor(temp, apparent) == expected

    def test_apparent_extreme_takes_precedence(self):
        # Raw 5°F would score 35, but it feels like -30°F
        assert temperature_factor(5.0, -30.0) == 95

    def test_apparent_severe_takes_precedence(self):
        assert temperature_factor(0.0, -19.4) == 85

    def test_apparent_not_cold_enough_falls_through(self):
        # Feels like -13°F: raw ladder applies
        assert temperature_factor(5.0, -13.0) == 35

    def test_apparent_beats_raw_extreme(self):
        # Raw -30 alone would be 90; apparent check wins first
        assert temperature_factor(-30.0, -30.0) == 95

    def test_cold_wind_scores_95_regardless_of_raw(self):
        # Any raw temperature whose wind chill is <= -25 scores 95
        for temp in (-25, -10, 0):
            for wind in (3, 10, 30, 50):
                apparent = wind_chill(temp, wind)
                if apparent <= -25:
                    assert temperature_factor(temp, apparent) == 95

    def test_scored_from_observation(self):
        factors = score_factors(make_observation(temp=0.0, wind=15.0))
        assert factors.temperature == 85


# =============================================================================
# SNOWFALL AND WIND FACTOR TESTS
# =============================================================================


class TestSnowfallFactor:
    """Tests for the snowfall ladder."""

    @pytest.mark.parametrize("snow,expected", [
        (0, 0),
        (0.1, 5),
        (0.5, 15),
        (1, 25),
        (2, 40),
        (4, 65),
        (6, 85),
        (8, 95),
        (20, 95),
    ])
    def test_breakpoints(self, snow, expected):
        assert snowfall_factor(snow) == expected

    def test_monotonic(self):
        previous = -1
        for i in range(0, 41):
            score = snowfall_factor(i * 0.25)
            assert score >= previous
            previous = score


class TestWindFactor:
    """Tests for the wind ladder."""

    @pytest.mark.parametrize("wind,expected", [
        (0, 0),
        (9.9, 0),
        (10, 10),
        (15, 25),
        (20, 45),
        (30, 70),
        (40, 85),
        (75, 85),
    ])
    def test_breakpoints(self, wind, expected):
        assert wind_factor(wind) == expected

    def test_monotonic(self):
        previous = -1
        for wind in range(0, 61):
            score = wind_factor(wind)
            assert score >= previous
            previous = score


# =============================================================================
# VISIBILITY AND ICE FACTOR TESTS
# =============================================================================


class TestVisibilityFactor:
    """Tests for the blowing-snow visibility score."""

    def test_whiteout(self):
        assert visibility_factor(25, 2) == 90

    def test_just_below_whiteout_wind(self):
        assert visibility_factor(24, 2) == 60

    def test_reduced(self):
        assert visibility_factor(15, 0.9) == 30

    def test_wind_without_snow(self):
        assert visibility_factor(50, 0) == 0

    def test_snow_without_wind(self):
        assert visibility_factor(9, 10) == 0


class TestIceFactor:
    """Tests for the road ice score."""

    def test_freezing_rain(self):
        assert ice_factor(30, 1, 0) == 70

    def test_freezing_rain_range_inclusive(self):
        assert ice_factor(28, 0.5, 0) == 70
        assert ice_factor(32, 0.5, 0) == 70

    def test_freezing_rain_wins_over_black_ice(self):
        assert ice_factor(30, 1, 25) == 70

    def test_black_ice_needs_wind(self):
        assert ice_factor(30, 0, 15) == 50

    def test_black_ice_at_low_temperature(self):
        # Black ice is checked before general icing
        assert ice_factor(10, 5, 25) == 50

    def test_general_icing(self):
        assert ice_factor(20, 0, 0) == 30

    def test_no_ice_above_freezing(self):
        assert ice_factor(40, 1, 20) == 0

    def test_cold_but_not_icy(self):
        assert ice_factor(27, 0, 5) == 0


# =============================================================================
# COMBINATION TESTS
# =============================================================================


class TestCombineFactorScores:
    """Tests for the max/mean combination."""

    def test_worst_condition_dominates(self):
        assert combine_factor_scores([90, 0, 0, 0, 0]) == pytest.approx(90 * 0.6 + 18 * 0.4)

    def test_uniform_scores(self):
        assert combine_factor_scores([50] * 5) == pytest.approx(50)

    def test_all_zero(self):
        assert combine_factor_scores([0] * 5) == 0

    def test_empty(self):
        assert combine_factor_scores([]) == 0


class TestHardFloor:
    """Tests for the high-risk combination floors."""

    def test_no_floor(self):
        assert hard_floor(make_observation(temp=10, snow=5, wind=25)) == 0

    def test_extreme_cold_with_heavy_snow(self):
        assert hard_floor(make_observation(temp=-11, snow=6.5)) == EXTREME_COLD_FLOOR

    def test_extreme_cold_bounds_are_strict(self):
        assert hard_floor(make_observation(temp=-10, snow=7)) == 0
        assert hard_floor(make_observation(temp=-20, snow=6)) == 0

    def test_blizzard(self):
        assert hard_floor(make_observation(temp=20, snow=2.5, wind=31)) == BLIZZARD_FLOOR

    def test_freezing_rain(self):
        assert hard_floor(make_observation(temp=30, snow=0.5)) == FREEZING_RAIN_FLOOR

    def test_multiple_floors_take_maximum(self):
        obs = make_observation(temp=-20, snow=10, wind=40)
        assert hard_floor(obs) == EXTREME_COLD_FLOOR


# =============================================================================
# ENGINE TESTS
# =============================================================================


class TestWorkedExample:
    """10°F, 5 in of snow, 25 mph wind in ZIP 12345 with default weights."""

    @pytest.fixture
    def result(self) -> CalculationResult:
        return compute(make_observation(temp=10, snow=5, wind=25), "12345")

    def test_classification(self, result):
        # 12345 falls in the 10000-19999 urban block
        assert result.classification.region == RegionCategory.NORTHERN_US
        assert result.classification.district == DistrictType.URBAN

    def test_factor_scores(self, result):
        f = result.factors
        assert f.temperature == 35
        assert f.snowfall == 65
        assert f.wind == 45
        assert f.visibility == 90
        assert f.ice == 50
        assert f.apparent_temperature_f == pytest.approx(-10.72, abs=0.01)

    def test_base_probability(self, result):
        # (90 * 0.6 + 57 * 0.4) * 0.8 * 0.8
        assert result.base_probability == pytest.approx(76.8 * 0.64)

    def test_contributions(self, result):
        c = result.factor_contributions
        assert c["temperature"] == pytest.approx(35 * 0.3)
        assert c["snowfall"] == pytest.approx(65 * 0.4)
        assert c["wind_speed"] == pytest.approx((45 + 45) * 0.2)
        assert c["school_district"] == pytest.approx(76.8 * 0.64 * 0.2 * 0.1)

    def test_final_probability(self, result):
        assert result.weighted_probability == pytest.approx(55.48304)
        assert result.raw_probability == pytest.approx(55.48304 * 0.64)
        assert result.probability == 36
        assert result.recommendation == RiskLevel.LOW_TO_MODERATE

    def test_applied_weights_recorded(self, result):
        assert result.applied_weights == DEFAULT_WEIGHTS
        assert result.total_weight == 10.0

    def test_location_label(self, result):
        assert result.location == "US Location (12345) (Urban District)"


class TestEngineBounds:
    """Tests for the final clamp and floor guarantees."""

    def test_calm_day_is_zero(self):
        result = compute(make_observation(temp=45, snow=0, wind=5), "12345")
        assert result.probability == 0
        assert result.recommendation == RiskLevel.VERY_LOW

    def test_capped_at_98(self):
        # Southern ZIP, extreme everything: 133% before the cap
        result = compute(make_observation(temp=-30, snow=12, wind=45), "35203")
        assert result.raw_probability == 98.0
        assert result.probability == 98
        assert result.recommendation == RiskLevel.EXTREMELY_HIGH

    def test_always_within_bounds(self):
        engine = ClosureProbabilityEngine()
        for temp in range(-40, 65, 5):
            for half_inches in range(0, 25, 3):
                for wind in range(0, 55, 5):
                    for code in ("12345", "35203", "59001", "K1A 0A6", "???"):
                        result = engine.compute(make_observation(temp, half_inches / 2, wind), code)
                        assert 0 <= result.raw_probability <= 98
                        assert 0 <= result.probability <= 98

    def test_extreme_cold_floor_ignores_skewed_weights(self):
        # Only wind is weighted, and there is no wind
        weights = WeightConfig(temperature=0, snowfall=0, wind_speed=10, school_district=0)
        result = compute(make_observation(temp=-15, snow=7, wind=0), "12345", weights)
        assert result.weighted_probability == 0
        assert result.probability >= 90
        assert result.floor == EXTREME_COLD_FLOOR

    def test_blizzard_floor(self):
        result = compute(make_observation(temp=20, snow=3, wind=35), "12345", BALANCED)
        assert result.probability >= 85

    def test_freezing_rain_floor(self):
        result = compute(make_observation(temp=30, snow=1, wind=5), "90210")
        assert result.probability >= 80
        assert result.factors.ice == 70


class TestZeroWeights:
    """Degenerate weight configuration."""

    def test_no_division_by_zero(self):
        result = compute(make_observation(temp=10, snow=5, wind=25), "12345", ZERO_WEIGHTS)
        assert result.weighted_probability == 0
        assert all(v == 0 for v in result.factor_contributions.values())
        assert result.probability == 0

    def test_floor_still_applies(self):
        result = compute(make_observation(temp=-20, snow=8, wind=0), "12345", ZERO_WEIGHTS)
        assert result.weighted_probability == 0
        assert result.probability == 90


class TestMultipliers:
    """Region and district multipliers flow into the result."""

    def _raw(self, code: str) -> float:
        weights = WeightConfig(temperature=5, snowfall=5, wind_speed=0, school_district=0)
        return compute(make_observation(temp=20, snow=2, wind=0), code, weights).raw_probability

    def test_canadian_multiplier_ignores_digits(self):
        # temp 20 -> 20, snow 2 -> 40; weighted = 30; x0.7 x1.0
        assert self._raw("K1A 0A6") == pytest.approx(30 * 0.7)

    def test_southern_suburban(self):
        assert self._raw("35203") == pytest.approx(30 * 1.4)

    def test_northern_rural(self):
        assert self._raw("02134") == pytest.approx(30 * 0.8 * 1.3)

    def test_unparseable_is_neutral(self):
        assert self._raw("not a zip") == pytest.approx(30)

    def test_southern_schools_close_more(self):
        assert self._raw("75001") > self._raw("45001")


class TestEngineWeights:
    """Weight handling on the engine class."""

    def test_engine_default_weights(self):
        engine = ClosureProbabilityEngine()
        assert engine.weights == DEFAULT_WEIGHTS

    def test_call_weights_override_engine_weights(self):
        engine = ClosureProbabilityEngine(BALANCED)
        obs = make_observation(temp=10, snow=5, wind=25)
        result = engine.compute(obs, "12345", ZERO_WEIGHTS)
        assert result.applied_weights == ZERO_WEIGHTS

    def test_only_relative_weights_matter(self):
        obs = make_observation(temp=10, snow=5, wind=25)
        small = WeightConfig(temperature=1, snowfall=2, wind_speed=1, school_district=1)
        large = WeightConfig(temperature=2, snowfall=4, wind_speed=2, school_district=2)
        assert compute(obs, "12345", small).raw_probability == pytest.approx(
            compute(obs, "12345", large).raw_probability
        )

    def test_snow_weight_raises_snowy_result(self):
        obs = make_observation(temp=40, snow=8, wind=0)
        snow_heavy = WeightConfig(temperature=1, snowfall=9, wind_speed=0, school_district=0)
        temp_heavy = WeightConfig(temperature=9, snowfall=1, wind_speed=0, school_district=0)
        assert compute(obs, "45001", snow_heavy).raw_probability > compute(obs, "45001", temp_heavy).raw_probability


class TestLocationLabel:
    """Tests for the display label."""

    def test_named_location(self):
        label = location_label(classify_postal_code("59001"), "Billings, US")
        assert label == "Billings, US (Rural District)"

    def test_canadian_default_name(self):
        label = location_label(classify_postal_code("K1A 0A6"))
        assert label == "Canadian Location (K1A 0A6) (Suburban District)"

    def test_result_uses_location_name(self):
        result = compute(make_observation(), "10001", location_name="New York, US")
        assert result.location == "New York, US (Urban District)"
