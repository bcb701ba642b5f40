"""
Fetch orchestration for the station API.

Each operation builds a URL, performs one GET, and hands the markup to the
matching parser. Nothing raises: transport failures are logged and turned
into the operation's empty shape.

Coordinates:
- Station listing (listing page -> station records)
- Station detail (station page -> metric entries)
- Station series (station page -> metric page -> chart points)
"""

from typing import Awaitable, Callable, Optional, Union

import structlog

from .config.loader import HttpConfig, SiteConfig
from .core.http_client import HttpClient
from .core.models import ChartPoint, DetailEntry, StationRecord
from .core.results import FailureKind, Outcome
from .parsers.chart import extract_chart_series
from .parsers.detail import extract_station_detail
from .parsers.stations import extract_stations

logger = structlog.get_logger(__name__)


Fetch = Callable[[str], Awaitable[str]]


class StationService:
    """
    Station operations over a fetch capability.

    Args:
        fetch: Coroutine function url -> markup; raises on any failure
        site: Site settings (URLs, timezone, station kind)
    """

    def __init__(self, fetch: Fetch, site: Optional[SiteConfig] = None):
        self.fetch = fetch
        self.site = site or SiteConfig()

    def station_url(self, station_id: str) -> str:
        return f"{self.site.station_url_prefix}{station_id}"

    async def _get(self, url: str) -> Outcome[Optional[str]]:
        """Fetch markup, tagging any failure as a transport failure."""
        try:
            return Outcome(await self.fetch(url))
        except Exception as e:
            return Outcome.fail(None, FailureKind.TRANSPORT, "fetch_failed", url=url, error=str(e))

    async def list_all_stations(self) -> list[StationRecord]:
        """All flow-gauging stations from the listing page."""
        page = await self._get(self.site.listing_url)
        if not page.ok:
            page.unwrap(logger, operation="list_all_stations")
            return []

        stations = extract_stations(page.value, self.site.station_kind).unwrap(logger)
        logger.info("stations_listed", count=len(stations))
        return stations

    async def _station_detail(self, station_id: str) -> Outcome[list[DetailEntry]]:
        page = await self._get(self.station_url(station_id))
        if not page.ok:
            return Outcome([], page.failure)

        return extract_station_detail(page.value, self.site.base_url)

    async def get_station_detail(self, station_id: str) -> Union[list[DetailEntry], dict]:
        """
        Metric entries of a station.

        Returns an empty dict (not a list) when the station page cannot be
        fetched, and an empty list when it has no historic links.
        """
        outcome = await self._station_detail(station_id)
        if outcome.failure and outcome.failure.kind == FailureKind.TRANSPORT:
            outcome.unwrap(logger, operation="get_station_detail", station_id=station_id)
            return {}

        return outcome.unwrap(logger, station_id=station_id)

    async def get_station_series(self, station_id: str, metric_type: str) -> list[ChartPoint]:
        """
        Chart series of one metric of a station.

        Looks up the metric's historic URL on the station page, then parses
        that page. Unknown metrics return an empty list without a second fetch.
        """
        detail = await self._station_detail(station_id)
        if detail.failure:
            detail.unwrap(logger, operation="get_station_series", station_id=station_id)
            return []

        wanted = metric_type.lower()
        entry = next((e for e in detail.value if e.type == wanted), None)
        if entry is None:
            logger.warning(
                "metric_not_found",
                station_id=station_id,
                metric=metric_type,
                available=[e.type for e in detail.value],
            )
            return []

        page = await self._get(entry.url)
        if not page.ok:
            page.unwrap(logger, operation="get_station_series", station_id=station_id)
            return []

        series = extract_chart_series(page.value, self.site.timezone).unwrap(
            logger, station_id=station_id, metric=wanted
        )
        logger.info("series_loaded", station_id=station_id, metric=wanted, points=len(series))
        return series


def _default_http_client(http: Optional[HttpConfig]) -> HttpClient:
    http = http or HttpConfig()
    return HttpClient(timeout=http.timeout, user_agent=http.user_agent)


async def list_all_stations(
    site: Optional[SiteConfig] = None,
    http: Optional[HttpConfig] = None,
) -> list[StationRecord]:
    """
    Convenience function listing all gauging stations.

    Args:
        site: Optional site settings
        http: Optional HTTP settings

    Returns:
        List of station records (empty on any failure)
    """
    async with _default_http_client(http) as client:
        return await StationService(client.get_text, site).list_all_stations()


async def get_station_detail(
    station_id: str,
    site: Optional[SiteConfig] = None,
    http: Optional[HttpConfig] = None,
) -> Union[list[DetailEntry], dict]:
    """
    Convenience function returning a station's metric entries.

    Args:
        station_id: Station identifier, e.g. "EA013"
        site: Optional site settings
        http: Optional HTTP settings

    Returns:
        List of DetailEntry, or {} when the page cannot be fetched
    """
    async with _default_http_client(http) as client:
        return await StationService(client.get_text, site).get_station_detail(station_id)


async def get_station_series(
    station_id: str,
    metric_type: str,
    site: Optional[SiteConfig] = None,
    http: Optional[HttpConfig] = None,
) -> list[ChartPoint]:
    """
    Convenience function returning a station's chart series for a metric.

    Args:
        station_id: Station identifier, e.g. "EA013"
        metric_type: Metric name, case-insensitive (e.g. "Nivel")
        site: Optional site settings
        http: Optional HTTP settings

    Returns:
        List of enriched chart points (empty on any failure)
    """
    async with _default_http_client(http) as client:
        return await StationService(client.get_text, site).get_station_series(
            station_id, metric_type
        )
