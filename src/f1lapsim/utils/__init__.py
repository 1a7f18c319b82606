"""Utility helpers."""

from f1lapsim.utils.constants import GRAVITY, STANDARD_AIR_DENSITY
from f1lapsim.utils.logging import configure_logging

__all__ = ["STANDARD_AIR_DENSITY", "GRAVITY", "configure_logging"]
