"""Tide gauge stations on the tidal Thames."""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Station:
    """A gauge and the parameters used to synthesize demo extrema for it."""
    id: str
    name: str
    cd_to_datum: float  # Chart datum -> level datum offset, metres
    mean_level: float
    amplitude: float


STATIONS: List[Station] = [
    Station("tower-pier", "Tower Pier", -2.97, 0.45, 3.2),
    Station("silvertown", "Silvertown", -2.79, 0.40, 3.0),
    Station("hammersmith", "Hammersmith", -1.06, 0.90, 2.4),
    Station("richmond", "Richmond", 0.34, 1.60, 1.4),
    Station("tilbury", "Tilbury", -2.60, 0.30, 2.8),
    Station("southend", "Southend", -2.51, 0.25, 2.6),
]

DEFAULT_STATION = STATIONS[0]


def get_station(station_id: str) -> Optional[Station]:
    """Look up a station by id."""
    for station in STATIONS:
        if station.id == station_id:
            return station
    return None


def next_station(current: Station) -> Station:
    """Cycle to the following station in the table."""
    index = STATIONS.index(current) if current in STATIONS else -1
    return STATIONS[(index + 1) % len(STATIONS)]
