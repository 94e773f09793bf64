"""
Loading and synthesizing high/low water predictions.

Prediction files are JSON arrays of records:

    [{"type": "high", "time": "2024-05-01T03:12:00Z", "level": 3.21}, ...]

`time` is ISO-8601 (a trailing "Z" means UTC; naive times are taken as UTC)
and `level` is metres above the level datum.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List
import json
import logging

from config.constants import HALF_CYCLE_SECONDS
from tidecurve.core.events import TidalEvent, TideKind

logger = logging.getLogger(__name__)


class PredictionLoadError(Exception):
    """Prediction file missing, unreadable or not a JSON array."""


def parse_timestamp(value: str) -> float:
    """ISO-8601 string to POSIX seconds."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def parse_record(record: Dict[str, Any]) -> TidalEvent:
    """Convert one JSON record to a TidalEvent (raises on malformed input)."""
    return TidalEvent(
        kind=TideKind(str(record["type"]).lower()),
        time=parse_timestamp(str(record["time"])),
        level=float(record["level"]),
    )


def parse_predictions(records: List[Dict[str, Any]]) -> List[TidalEvent]:
    """Parse records, skipping malformed ones, sorted by time."""
    events = []
    for index, record in enumerate(records):
        try:
            events.append(parse_record(record))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping prediction record {index}: {e}")
    events.sort(key=lambda event: event.time)
    return events


def load_predictions(path: Path | str) -> List[TidalEvent]:
    """
    Read a prediction file.

    Args:
        path: JSON file in the format described in the module docstring

    Returns:
        Time-ordered extrema

    Raises:
        PredictionLoadError: file unreadable or not a JSON array
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise PredictionLoadError(f"Cannot read predictions from {path}: {e}") from e

    if not isinstance(data, list):
        raise PredictionLoadError(f"{path} does not contain a JSON array")

    events = parse_predictions(data)
    logger.info(f"Loaded {len(events)} predictions from {path}")
    return events


def save_predictions(events: List[TidalEvent], path: Path | str) -> None:
    """Write extrema in the prediction file format."""
    path = Path(path)
    records = [
        {
            "type": event.kind.value,
            "time": datetime.fromtimestamp(event.time, tz=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": round(event.level, 3),
        }
        for event in events
    ]
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(records, f, indent=2)


def synthesize_predictions(
    start: float,
    end: float,
    mean_level: float = 0.5,
    amplitude: float = 3.0,
    half_cycle: float = HALF_CYCLE_SECONDS,
    phase: float = 0.0,
    first_kind: TideKind = TideKind.HIGH
) -> List[TidalEvent]:
    """
    Alternating demo extrema covering [start, end].

    Args:
        start: First candidate time, POSIX seconds
        end: Last allowed time
        mean_level: Level midway between high and low water
        amplitude: High-to-low range in metres
        half_cycle: Spacing between extrema
        phase: Offset applied to start, seconds
        first_kind: Kind of the first extremum
    """
    if half_cycle <= 0:
        raise ValueError(f"half_cycle must be positive, got {half_cycle}")

    events = []
    kind = first_kind
    t = start + phase
    while t <= end:
        sign = 1.0 if kind is TideKind.HIGH else -1.0
        events.append(TidalEvent(kind, t, mean_level + sign * amplitude / 2))
        kind = kind.opposite
        t += half_cycle
    return events
