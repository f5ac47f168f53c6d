"""
Global settings and constants for the Snow Day Calculator.

Values can be overridden through environment variables or a .env file.
"""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _optional_int(name: str):
    value = os.getenv(name)
    return int(value) if value not in (None, "") else None


# =============================================================================
# PROBABILITY LIMITS
# =============================================================================

# Never claim certainty
PROBABILITY_CEILING = 98.0
PROBABILITY_FLOOR = 0.0


# =============================================================================
# FORECAST PARAMETERS
# =============================================================================

FORECAST_HOURS = 48
FORECAST_SEED = _optional_int("FORECAST_SEED")  # None = fresh randomness per run


# =============================================================================
# DEMO DATA
# =============================================================================

DEMO_SEED = _optional_int("DEMO_SEED")


# =============================================================================
# WEIGHTS
# =============================================================================

DEFAULT_PRESET = os.getenv("DEFAULT_PRESET", "default")


# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
