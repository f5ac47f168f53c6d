"""Practical advice derived from a closure calculation."""

from typing import List

from snow_day.core import (
    Advice,
    AdviceCategory,
    AdvicePriority,
    CalculationResult,
    DistrictType,
)

PREPARE_PROBABILITY = 70
ALTERNATIVES_PROBABILITY = 30
EXTREME_COLD_F = 20
HEAVY_SNOW_IN = 6
HIGH_WIND_MPH = 20

MONITOR_OFFICIAL_CHANNELS = Advice(
    category=AdviceCategory.TIMING,
    title="Monitor Official Channels",
    description="Check school website and local news between 5-6 AM for closure announcements.",
    priority=AdvicePriority.MEDIUM,
)


def generate_advice(result: CalculationResult) -> List[Advice]:
    """
    Build an ordered list of suggestions for a calculation.

    Always ends with a reminder to monitor official channels.
    """
    obs = result.observation
    advice = []

    if result.probability >= PREPARE_PROBABILITY:
        advice.append(Advice(
            category=AdviceCategory.PREPARATION,
            title="Prepare for School Closure",
            description="High probability of snow day. Arrange childcare and work-from-home plans.",
            priority=AdvicePriority.HIGH,
        ))

    if obs.temperature_f <= EXTREME_COLD_F:
        advice.append(Advice(
            category=AdviceCategory.SAFETY,
            title="Extreme Cold Precautions",
            description="Dangerous temperatures. Limit outdoor exposure and check on elderly neighbors.",
            priority=AdvicePriority.HIGH,
        ))

    if obs.snowfall_in >= HEAVY_SNOW_IN:
        advice.append(Advice(
            category=AdviceCategory.PREPARATION,
            title="Heavy Snow Preparation",
            description="Stock up on essentials and ensure you have backup power sources.",
            priority=AdvicePriority.HIGH,
        ))

    if obs.wind_speed_mph >= HIGH_WIND_MPH:
        advice.append(Advice(
            category=AdviceCategory.SAFETY,
            title="High Wind Advisory",
            description="Strong winds may cause power outages. Secure outdoor items.",
            priority=AdvicePriority.MEDIUM,
        ))

    if result.classification.district == DistrictType.RURAL:
        advice.append(Advice(
            category=AdviceCategory.TIMING,
            title="Rural District Alert",
            description="Rural districts often close earlier. Check announcements by 5 AM.",
            priority=AdvicePriority.MEDIUM,
        ))

    if result.probability >= ALTERNATIVES_PROBABILITY:
        advice.append(Advice(
            category=AdviceCategory.ALTERNATIVE,
            title="Plan Alternative Activities",
            description="Prepare indoor activities and educational resources for potential home day.",
            priority=AdvicePriority.LOW,
        ))

    advice.append(MONITOR_OFFICIAL_CHANNELS)
    return advice
