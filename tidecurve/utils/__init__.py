"""Utility helpers."""

from .math import clamp, ease_in_out_quad, lerp, map_range

__all__ = ["clamp", "ease_in_out_quad", "lerp", "map_range"]
