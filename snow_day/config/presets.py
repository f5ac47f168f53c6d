"""
Weight presets for the Snow Day Calculator.

Add new presets here to offer them on the command line.
"""

from typing import Dict

from snow_day.core.models import WeightConfig


# =============================================================================
# PRESET DEFINITIONS
# =============================================================================

DEFAULT = WeightConfig(
    temperature=3.0,
    snowfall=4.0,
    wind_speed=2.0,
    school_district=1.0,
)

CONSERVATIVE = WeightConfig(
    temperature=3.5,
    snowfall=3.0,
    wind_speed=2.0,
    school_district=1.5,
)

BALANCED = WeightConfig(
    temperature=2.5,
    snowfall=2.5,
    wind_speed=2.5,
    school_district=2.5,
)

SNOW_SENSITIVE = WeightConfig(
    temperature=1.5,
    snowfall=6.0,
    wind_speed=1.5,
    school_district=1.0,
)

# =============================================================================
# PRESET REGISTRY
# =============================================================================

PRESETS: Dict[str, WeightConfig] = {
    "default": DEFAULT,
    "conservative": CONSERVATIVE,
    "balanced": BALANCED,
    "snow-sensitive": SNOW_SENSITIVE,
}

DEFAULT_WEIGHTS = DEFAULT


def get_preset(name: str) -> WeightConfig:
    """
    Get a weight preset by name.

    Args:
        name: Preset name (e.g., "balanced")

    Returns:
        WeightConfig for the requested preset

    Raises:
        KeyError: If preset name is not found
    """
    key = name.strip().lower().replace("_", "-")
    if key not in PRESETS:
        available = ", ".join(PRESETS.keys())
        raise KeyError(f"Preset '{name}' not found. Available: {available}")
    return PRESETS[key]


def list_presets() -> list[str]:
    """Return list of available preset names."""
    return list(PRESETS.keys())
