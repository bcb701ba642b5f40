"""Integration tests for the JSON API and chart view."""

import httpx
import pytest
from aiohttp import test_utils

from saih_scraper.web.server import create_app

LISTING_URL = "https://www.saihduero.es/resultados-risr?q=&tipo=TT"
STATION_URL = "https://www.saihduero.es/risr/EA013"
NIVEL_URL = "https://www.saihduero.es/risr/EA013/historico/xATSOFURfNTMwEUR"


@pytest.fixture
def pages(stations_html, station_detail_html, station_nivel_html):
    return {
        LISTING_URL: stations_html,
        STATION_URL: station_detail_html,
        NIVEL_URL: station_nivel_html,
    }


def make_fetch(pages: dict):
    async def fetch(url: str) -> str:
        if url not in pages:
            raise httpx.ConnectError(f"No route to {url}")
        return pages[url]
    return fetch


def api_client(pages: dict) -> test_utils.TestClient:
    """Test client for an app serving the given pages."""
    return test_utils.TestClient(test_utils.TestServer(create_app(fetch=make_fetch(pages))))


class TestApiRoutes:
    """Tests for the data routes."""

    @pytest.mark.asyncio
    async def test_health(self, pages):
        """Health check answers OK."""
        async with api_client(pages) as client:
            resp = await client.get("/health")
            assert resp.status == 200
            assert await resp.text() == "OK"

    @pytest.mark.asyncio
    async def test_all_stations(self, pages):
        """All Aforo stations are served as JSON."""
        async with api_client(pages) as client:
            resp = await client.get("/station/aforo/all")
            data = await resp.json()

            assert resp.status == 200
            assert [s["stationId"] for s in data] == ["EA153", "EA013", "EA046"]
            assert data[1]["Descripción"] == "Duero en Aranda de Duero"

    @pytest.mark.asyncio
    async def test_station_detail(self, pages):
        """Detail entries are served as {type, url} objects."""
        async with api_client(pages) as client:
            resp = await client.get("/station/aforo/EA013")

            assert resp.status == 200
            assert await resp.json() == [
                {"type": "nivel", "url": NIVEL_URL},
                {"type": "caudal", "url": "https://www.saihduero.es/risr/EA013/historico/xATVRFURfNTMwEUR"},
            ]

    @pytest.mark.asyncio
    async def test_station_series(self, pages):
        """The series of a metric is served with timestamps."""
        async with api_client(pages) as client:
            resp = await client.get("/station/aforo/EA013/nivel")
            data = await resp.json()

            assert resp.status == 200
            assert len(data) == 5
            assert data[0]["@timestamp"] == "2025-11-19T23:00:00.000Z"


class TestApiFailures:
    """Failures surface as empty 200 payloads."""

    @pytest.mark.asyncio
    async def test_all_stations_unreachable(self):
        """Unreachable listing gives []."""
        async with api_client({}) as client:
            resp = await client.get("/station/aforo/all")
            assert resp.status == 200
            assert await resp.json() == []

    @pytest.mark.asyncio
    async def test_detail_unreachable(self):
        """Unreachable station page gives {}."""
        async with api_client({}) as client:
            resp = await client.get("/station/aforo/EA013")
            assert resp.status == 200
            assert await resp.json() == {}

    @pytest.mark.asyncio
    async def test_unknown_metric(self, pages):
        """Unknown metric gives []."""
        async with api_client(pages) as client:
            resp = await client.get("/station/aforo/EA013/temperatura")
            assert resp.status == 200
            assert await resp.json() == []


class TestGraphView:
    """Tests for the rendered chart."""

    @pytest.mark.asyncio
    async def test_graph_renders_series(self, pages):
        """The chart page embeds the series."""
        async with api_client(pages) as client:
            resp = await client.get("/station/aforo/EA013/Nivel/graph")
            html = await resp.text()

            assert resp.status == 200
            assert resp.content_type == "text/html"
            assert "EA013" in html
            assert "2025-11-19T23:00:00.000Z" in html
            assert "5 puntos" in html

    @pytest.mark.asyncio
    async def test_graph_without_data(self):
        """The chart page shows an empty state when there is no data."""
        async with api_client({}) as client:
            resp = await client.get("/station/aforo/EA013/nivel/graph")
            html = await resp.text()

            assert resp.status == 200
            assert "Sin datos" in html
