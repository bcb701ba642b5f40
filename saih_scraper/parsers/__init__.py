"""
Parsers - pure functions from page markup to records.

- stations: station listing table -> station records
- detail: station page -> metric/historic URL entries
- chart: historic page -> enriched chart points
"""

from .stations import extract_stations, parse_stations
from .detail import extract_station_detail, parse_station_detail
from .chart import extract_chart_series, parse_chart_series

__all__ = [
    "extract_stations",
    "parse_stations",
    "extract_station_detail",
    "parse_station_detail",
    "extract_chart_series",
    "parse_chart_series",
]
