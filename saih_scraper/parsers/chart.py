"""
Chart data parser.

Historic pages render their chart from an inline script:

    var chartData = [{d: "20/11/2025 00:00", v: 1.18}, ...];

The array is decoded without evaluating it and every point is enriched
with a UTC "@timestamp".
"""

import re
from typing import Any, Optional

from bs4 import BeautifulSoup

import structlog

from saih_scraper.core.literal import LiteralDecodeError, decode_array_literal
from saih_scraper.core.models import SOURCE_TIMEZONE, TIMESTAMP_KEY, ChartPoint
from saih_scraper.core.results import FailureKind, Outcome
from saih_scraper.core.timestamps import TimestampError, normalize_timestamp

logger = structlog.get_logger(__name__)


CHART_DATA_MARKER = "var chartData = ["
CHART_DATA_PATTERN = re.compile(r"var chartData = (\[.*?\]);", re.DOTALL)


def find_chart_literal(soup: BeautifulSoup) -> Optional[str]:
    """Return the chartData array literal of the first script declaring it."""
    for script in soup.find_all("script"):
        content = script.string or script.get_text()
        if not content or CHART_DATA_MARKER not in content:
            continue

        match = CHART_DATA_PATTERN.search(content)
        if match:
            return match.group(1)

    return None


def enrich_point(point: dict[str, Any], tz_name: str = SOURCE_TIMEZONE) -> ChartPoint:
    """
    Copy a chart point and add its UTC "@timestamp".

    Points whose "d" is missing or malformed get a None timestamp.
    """
    enriched: ChartPoint = dict(point)
    try:
        enriched[TIMESTAMP_KEY] = normalize_timestamp(point.get("d"), tz_name)
    except TimestampError as e:
        logger.warning("invalid_point_date", d=point.get("d"), error=str(e))
        enriched[TIMESTAMP_KEY] = None
    return enriched


def extract_chart_series(markup: str, tz_name: str = SOURCE_TIMEZONE) -> Outcome[list[ChartPoint]]:
    """
    Extract and enrich the chartData series of a historic page.

    Args:
        markup: Historic page HTML
        tz_name: Timezone the point dates are expressed in

    Returns:
        Outcome with one enriched point per decoded element
    """
    try:
        soup = BeautifulSoup(markup, "lxml")

        literal = find_chart_literal(soup)
        if literal is None:
            return Outcome.fail([], FailureKind.STRUCTURE, "chart_data_not_found")

        try:
            points = decode_array_literal(literal)
        except LiteralDecodeError as e:
            return Outcome.fail([], FailureKind.DECODE, "chart_data_decode_failed", error=str(e))

        return Outcome([enrich_point(point, tz_name) for point in points])

    except Exception as e:
        return Outcome.fail([], FailureKind.DECODE, "chart_page_parse_failed", error=str(e))


def parse_chart_series(markup: str, tz_name: str = SOURCE_TIMEZONE) -> list[ChartPoint]:
    """
    Parse the embedded chart series of a historic page.

    Never raises: pages without a chartData declaration, or with a
    malformed one, yield an empty list.
    """
    return extract_chart_series(markup, tz_name).unwrap(logger)
