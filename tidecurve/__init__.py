"""TideCurve - live tide-level curve from sparse high/low predictions."""

__version__ = "0.1.0"
