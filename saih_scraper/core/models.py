"""
Data models for the station scraper.

Station rows and chart points keep whatever columns/fields the site emits,
so they stay plain dicts. Detail entries have a fixed shape.
"""

from dataclasses import asdict, dataclass
from typing import Any

# Site constants
BASE_URL = "https://www.saihduero.es/"
LISTING_URL = "https://www.saihduero.es/resultados-risr?q=&tipo=TT"
SOURCE_TIMEZONE = "Europe/Madrid"
STATION_KIND = "Aforo"

# Reserved keys
STATION_ID_KEY = "stationId"
TIMESTAMP_KEY = "@timestamp"

# Header -> cell text, plus optional "stationId"
StationRecord = dict[str, str]

# Decoded chart element: "d", "v", any extra fields, and "@timestamp"
ChartPoint = dict[str, Any]


@dataclass(frozen=True)
class DetailEntry:
    """A metric available for a station and the URL of its historic page."""

    type: str  # lowercased metric name, e.g. "nivel", "caudal"
    url: str

    def to_dict(self) -> dict:
        return asdict(self)
