"""
Station list parser.

Reads the station search results table and keeps the flow-gauging
("Aforo") rows. Column names come from the table header, so new or
renamed columns flow through untouched.
"""

from typing import Optional

from bs4 import BeautifulSoup, Tag

import structlog

from saih_scraper.core.models import STATION_ID_KEY, STATION_KIND, StationRecord
from saih_scraper.core.results import FailureKind, Outcome

logger = structlog.get_logger(__name__)


STATIONS_TABLE_SELECTOR = "#table-estaciones-pagination"


def _cell_text(cell: Tag) -> str:
    return cell.get_text().strip()


def _station_id(cells: list[Tag]) -> Optional[str]:
    """Last path segment of the link in the second column."""
    if len(cells) < 2:
        return None

    link = cells[1].find("a")
    if link is None:
        return None

    href = link.get("href")
    if not href:
        return None

    return href.split("/")[-1]


def _body_rows(table: Tag) -> list[Tag]:
    """Data rows of the table, with or without an explicit <tbody>."""
    return [
        row for row in table.find_all("tr")
        if row.find_parent(["thead", "tfoot"]) is None
    ]


def extract_stations(markup: str, station_kind: str = STATION_KIND) -> Outcome[list[StationRecord]]:
    """
    Extract station records from the listing markup.

    Args:
        markup: Listing page HTML
        station_kind: Value the first column must equal for a row to be kept

    Returns:
        Outcome with the kept records in table order
    """
    try:
        soup = BeautifulSoup(markup, "lxml")

        table = soup.select_one(STATIONS_TABLE_SELECTOR)
        if table is None:
            return Outcome.fail([], FailureKind.STRUCTURE, "stations_table_not_found")

        headers = [_cell_text(th) for th in table.select("thead th")]
        if not headers:
            return Outcome.fail([], FailureKind.STRUCTURE, "stations_headers_not_found")

        rows = _body_rows(table)
        records: list[StationRecord] = []

        for row in rows:
            cells = row.find_all("td")

            # Trailing headers without a cell stay unset
            record: StationRecord = {
                header: _cell_text(cell) for header, cell in zip(headers, cells)
            }

            station_id = _station_id(cells)
            if station_id is not None:
                record[STATION_ID_KEY] = station_id

            if record.get(headers[0]) == station_kind:
                records.append(record)

    except Exception as e:
        return Outcome.fail([], FailureKind.DECODE, "stations_parse_failed", error=str(e))

    if not records:
        return Outcome.fail(
            [],
            FailureKind.STRUCTURE,
            "no_matching_stations",
            rows=len(rows),
            station_kind=station_kind,
        )

    return Outcome(records)


def parse_stations(markup: str, station_kind: str = STATION_KIND) -> list[StationRecord]:
    """
    Parse the station listing into records.

    Only rows whose first column equals `station_kind` are returned.
    Never raises: missing or malformed markup yields an empty list.
    """
    return extract_stations(markup, station_kind).unwrap(logger)
