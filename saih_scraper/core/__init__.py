"""
Core layer - stable foundation for the scraper.

Components:
- models: DetailEntry and the row/point shapes, site constants
- results: Outcome/Failure tagged results
- timestamps: Europe/Madrid -> UTC normalization
- literal: Tolerant decoder for embedded array literals
- http_client: Single-shot async HTTP client
"""

from .models import (
    BASE_URL,
    LISTING_URL,
    SOURCE_TIMEZONE,
    STATION_KIND,
    ChartPoint,
    DetailEntry,
    StationRecord,
)
from .results import Failure, FailureKind, Outcome
from .timestamps import TimestampError, normalize_timestamp
from .literal import LiteralDecodeError, decode_array_literal
from .http_client import HttpClient

__all__ = [
    "BASE_URL",
    "LISTING_URL",
    "SOURCE_TIMEZONE",
    "STATION_KIND",
    "ChartPoint",
    "DetailEntry",
    "StationRecord",
    "Failure",
    "FailureKind",
    "Outcome",
    "TimestampError",
    "normalize_timestamp",
    "LiteralDecodeError",
    "decode_array_literal",
    "HttpClient",
]
