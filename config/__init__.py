"""Configuration module for TideCurve."""

from .settings import Settings
from .colors import Colors

__all__ = ["Settings", "Colors"]
