"""
Postal code classification.

Maps a raw US ZIP or Canadian postal code to a region category and a school
district type. Classification is a best-effort heuristic: unparseable input
falls back to OTHER_US / SUBURBAN instead of raising.
"""

import logging
import re
from typing import Optional, Tuple

from snow_day.core import DistrictType, LocationClassification, RegionCategory

logger = logging.getLogger(__name__)


# =============================================================================
# PATTERNS AND RANGES
# =============================================================================

CANADIAN_POSTAL_RE = re.compile(r"^[A-Z]\d[A-Z]\s?\d[A-Z]\d$")
US_ZIP_RE = re.compile(r"^(\d{5})(?:-\d{4})?$")
DIGIT_RUN_RE = re.compile(r"\d+")

# Inclusive ZIP ranges
SOUTHERN_US_RANGES: Tuple[Tuple[int, int], ...] = (
    (30000, 39999),
    (70000, 79999),
    (85000, 88999),
)
RURAL_RANGES: Tuple[Tuple[int, int], ...] = (
    (0, 9999),
    (59000, 59999),
)
URBAN_RANGES: Tuple[Tuple[int, int], ...] = (
    (10000, 19999),
    (90000, 99999),
)


def _in_ranges(value: int, ranges: Tuple[Tuple[int, int], ...]) -> bool:
    return any(low <= value <= high for low, high in ranges)


def is_canadian_postal_code(code: str) -> bool:
    """True for codes shaped like 'K1A 0A6' or 'K1A0A6' (case-insensitive)."""
    return bool(CANADIAN_POSTAL_RE.match(code.strip().upper()))


def extract_zip_number(code: str) -> Optional[int]:
    """
    Pull the numeric part of a postal code.

    Well-formed ZIP and ZIP+4 codes use their first five digits. Anything
    else uses the first five digits of its first digit run. Returns None
    when there are no digits.
    """
    cleaned = code.strip()
    match = US_ZIP_RE.match(cleaned)
    if match:
        return int(match.group(1))

    run = DIGIT_RUN_RE.search(cleaned)
    if run:
        return int(run.group(0)[:5])
    return None


def region_for_zip(zip_number: int) -> RegionCategory:
    if _in_ranges(zip_number, SOUTHERN_US_RANGES):
        return RegionCategory.SOUTHERN_US
    return RegionCategory.NORTHERN_US


def district_for_zip(zip_number: int) -> DistrictType:
    if _in_ranges(zip_number, RURAL_RANGES):
        return DistrictType.RURAL
    if _in_ranges(zip_number, URBAN_RANGES):
        return DistrictType.URBAN
    return DistrictType.SUBURBAN


def classify_postal_code(postal_code: Optional[str]) -> LocationClassification:
    """
    Classify a postal code into region and district type.

    Args:
        postal_code: Raw user input (ZIP, ZIP+4, Canadian code, or anything else)

    Returns:
        LocationClassification. Never raises.
    """
    raw = postal_code if isinstance(postal_code, str) else ""

    if is_canadian_postal_code(raw):
        # Canadian districts are treated as suburban
        return LocationClassification(
            postal_code=raw.strip(),
            region=RegionCategory.CANADIAN,
            district=DistrictType.SUBURBAN,
        )

    zip_number = extract_zip_number(raw)
    if zip_number is None:
        logger.debug(f"Could not classify postal code {postal_code!r}, using defaults")
        return LocationClassification(
            postal_code=raw.strip(),
            region=RegionCategory.OTHER_US,
            district=DistrictType.SUBURBAN,
            is_fallback=True,
        )

    if not US_ZIP_RE.match(raw.strip()):
        logger.debug(f"Non-standard postal code {postal_code!r}, classifying by {zip_number}")

    return LocationClassification(
        postal_code=raw.strip(),
        region=region_for_zip(zip_number),
        district=district_for_zip(zip_number),
    )
