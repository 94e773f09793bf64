"""Visualization layers."""

from .base import BaseLayer
from .background_layer import BackgroundLayer
from .curve_layer import TideCurveLayer

__all__ = [
    "BaseLayer",
    "BackgroundLayer",
    "TideCurveLayer",
]
