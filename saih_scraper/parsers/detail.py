"""
Station detail parser.

A station page lists its signals in a table; each signal row links to a
historic page at "risr/<ID>/historico/<token>". The first cell of the row
names the metric (Nivel, Caudal, ...).
"""

import re

from bs4 import BeautifulSoup

import structlog

from saih_scraper.core.models import BASE_URL, DetailEntry
from saih_scraper.core.results import FailureKind, Outcome

logger = structlog.get_logger(__name__)


HISTORIC_LINK_SELECTOR = 'a[href*="/historico/"]'
HISTORIC_HREF_PATTERN = re.compile(r"risr/[A-Z0-9]+/historico/[A-Za-z0-9]+")


def extract_station_detail(markup: str, base_url: str = BASE_URL) -> Outcome[list[DetailEntry]]:
    """
    Extract the historic-data links of a station page.

    Args:
        markup: Station page HTML
        base_url: Prefix joined to the relative hrefs

    Returns:
        Outcome with one entry per valid link, in document order
    """
    try:
        soup = BeautifulSoup(markup, "lxml")
        entries: list[DetailEntry] = []

        for link in soup.select(HISTORIC_LINK_SELECTOR):
            href = link.get("href")
            if not href or not HISTORIC_HREF_PATTERN.fullmatch(href):
                continue

            row = link.find_parent("tr")
            if row is None:
                continue

            first_cell = row.find("td")
            if first_cell is None:
                continue

            metric = first_cell.get_text().strip().lower()
            if not metric:
                continue

            entries.append(DetailEntry(type=metric, url=base_url + href))

    except Exception as e:
        return Outcome.fail([], FailureKind.DECODE, "station_detail_parse_failed", error=str(e))

    if not entries:
        return Outcome.fail([], FailureKind.STRUCTURE, "historic_links_not_found")

    return Outcome(entries)


def parse_station_detail(markup: str, base_url: str = BASE_URL) -> list[DetailEntry]:
    """
    Parse a station page into (metric type -> historic URL) entries.

    Never raises: pages without valid historic links yield an empty list.
    """
    return extract_station_detail(markup, base_url).unwrap(logger)
