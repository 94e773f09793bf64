"""Prediction sources and station metadata."""

from .predictions import (
    PredictionLoadError,
    load_predictions,
    parse_predictions,
    save_predictions,
    synthesize_predictions,
)
from .stations import DEFAULT_STATION, STATIONS, Station, get_station, next_station

__all__ = [
    "PredictionLoadError",
    "load_predictions",
    "parse_predictions",
    "save_predictions",
    "synthesize_predictions",
    "DEFAULT_STATION",
    "STATIONS",
    "Station",
    "get_station",
    "next_station",
]
