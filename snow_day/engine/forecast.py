"""
Forecast Projector

Builds a 48-hour decorative trend around a single closure probability.
Each hour gets bounded, independent random perturbations; the series is
regenerated on every call and is not a predictive model.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

import numpy as np

from snow_day.core import ForecastPoint, ForecastSummary, round_half_up
from snow_day.config import FORECAST_HOURS, FORECAST_SEED

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Night and early morning (22:00-06:59) lean towards higher probability
NIGHT_START_HOUR = 22
NIGHT_END_HOUR = 6
NIGHT_NOISE = (-5.0, 10.0)

# Extra spread for the second 24-hour block
SECOND_DAY_NOISE = (-10.0, 10.0)

# Applied to every hour
GENERAL_NOISE = (-5.0, 5.0)

MIN_PROJECTED = 0.0
MAX_PROJECTED = 100.0


def is_night_hour(hour: int) -> bool:
    return hour >= NIGHT_START_HOUR or hour <= NIGHT_END_HOUR


class ForecastProjector:
    """
    Projects a base probability onto an hourly series.

    Randomness comes from a numpy Generator, so tests and callers can seed
    it. Without a generator, a fresh one is created per projector.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        hours: int = FORECAST_HOURS,
    ):
        """
        Initialize the projector.

        Args:
            rng: Random generator. If None, seeded from FORECAST_SEED (or OS entropy).
            hours: Number of hourly points to generate
        """
        self.rng = rng if rng is not None else np.random.default_rng(FORECAST_SEED)
        self.hours = hours

    def _perturb(self, base_probability: float, hour_index: int, timestamp: datetime) -> int:
        probability = base_probability

        if is_night_hour(timestamp.hour):
            probability += self.rng.uniform(*NIGHT_NOISE)

        if hour_index // 24 == 1:
            probability += self.rng.uniform(*SECOND_DAY_NOISE)

        probability += self.rng.uniform(*GENERAL_NOISE)

        probability = max(MIN_PROJECTED, min(MAX_PROJECTED, probability))
        return round_half_up(probability)

    def project(
        self,
        base_probability: float,
        now: Optional[datetime] = None,
    ) -> List[ForecastPoint]:
        """
        Generate the hourly series.

        Args:
            base_probability: Center of the series (0-100)
            now: Start time of the first point (default: now)

        Returns:
            List of ForecastPoint, one per hour, strictly increasing in time
        """
        start = now or datetime.now()

        points = []
        for i in range(self.hours):
            timestamp = start + timedelta(hours=i)
            points.append(ForecastPoint(
                timestamp=timestamp,
                probability=self._perturb(base_probability, i, timestamp),
            ))

        logger.debug(
            f"Projected {len(points)} hourly points around {base_probability:.1f}% "
            f"starting {start:%Y-%m-%d %H:%M}"
        )
        return points


def summarize(points: List[ForecastPoint]) -> ForecastSummary:
    """Peak and rounded average of a projected series."""
    if not points:
        return ForecastSummary(points=[], peak=0, average=0)

    values = np.array([p.probability for p in points], dtype=float)
    return ForecastSummary(
        points=list(points),
        peak=int(values.max()),
        average=round_half_up(float(values.mean())),
    )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def project(
    base_probability: float,
    now: Optional[datetime] = None,
    rng: Optional[np.random.Generator] = None,
) -> List[ForecastPoint]:
    """
    Convenience function to project a 48-hour series.

    Args:
        base_probability: Center of the series (0-100)
        now: Start time (default: now)
        rng: Optional numpy Generator for reproducible output

    Returns:
        List of 48 ForecastPoint objects
    """
    projector = ForecastProjector(rng=rng)
    return projector.project(base_probability, now)
