"""Utility modules for the Snow Day Calculator."""

from snow_day.utils.logging import setup_logging, get_logger

__all__ = ["setup_logging", "get_logger"]
