"""
JSON API and chart view for the gauging stations.

Routes:
- GET /station/aforo/all               -> all gauging stations
- GET /station/aforo/{id}              -> metric entries of a station
- GET /station/aforo/{id}/{type}       -> chart series of a metric
- GET /station/aforo/{id}/{type}/graph -> rendered chart of that series
- GET /health                          -> liveness probe

Data routes always answer 200; "no data" is an empty array or object.
"""

import asyncio
import json
from functools import partial
from pathlib import Path
from typing import Optional

import aiohttp_jinja2
import jinja2
import structlog
from aiohttp import web

from saih_scraper.config.loader import Settings
from saih_scraper.core.http_client import HttpClient
from saih_scraper.core.models import TIMESTAMP_KEY
from saih_scraper.orchestrator import Fetch, StationService

logger = structlog.get_logger(__name__)


SERVICE_KEY = web.AppKey("service", StationService)
SETTINGS_KEY = web.AppKey("settings", Settings)

json_response = partial(web.json_response, dumps=partial(json.dumps, ensure_ascii=False))


async def handle_stations(request: web.Request) -> web.Response:
    """All gauging stations."""
    stations = await request.app[SERVICE_KEY].list_all_stations()
    return json_response(stations)


async def handle_detail(request: web.Request) -> web.Response:
    """Metric entries of one station."""
    detail = await request.app[SERVICE_KEY].get_station_detail(request.match_info["id"])
    if isinstance(detail, list):
        return json_response([entry.to_dict() for entry in detail])
    return json_response(detail)


async def handle_series(request: web.Request) -> web.Response:
    """Chart series of one metric."""
    series = await request.app[SERVICE_KEY].get_station_series(
        request.match_info["id"],
        request.match_info["type"],
    )
    return json_response(series)


@aiohttp_jinja2.template("graph.html")
async def handle_graph(request: web.Request) -> dict:
    """Rendered chart of one metric."""
    station_id = request.match_info["id"]
    metric = request.match_info["type"].lower()
    series = await request.app[SERVICE_KEY].get_station_series(station_id, metric)

    return {
        "station_id": station_id,
        "metric": metric,
        "points": len(series),
        "labels": [point.get(TIMESTAMP_KEY) for point in series],
        "values": [point.get("v") for point in series],
    }


async def handle_health(request: web.Request) -> web.Response:
    """Liveness probe."""
    return web.Response(text="OK", status=200)


def create_app(settings: Optional[Settings] = None, fetch: Optional[Fetch] = None) -> web.Application:
    """
    Build the aiohttp application.

    Args:
        settings: Loaded settings (defaults when omitted)
        fetch: Optional fetch coroutine; when omitted the app opens its
               own HttpClient on startup and closes it on cleanup

    Returns:
        Configured web.Application
    """
    settings = settings or Settings()

    app = web.Application()
    app[SETTINGS_KEY] = settings

    # Setup Jinja2
    template_dir = Path(__file__).parent / "templates"
    aiohttp_jinja2.setup(app, loader=jinja2.FileSystemLoader(str(template_dir)))

    if fetch is not None:
        app[SERVICE_KEY] = StationService(fetch, settings.site)
    else:
        app.cleanup_ctx.append(_http_client_ctx)

    # Routes
    app.router.add_get("/health", handle_health)
    app.router.add_get("/station/aforo/all", handle_stations)
    app.router.add_get("/station/aforo/{id}", handle_detail)
    app.router.add_get("/station/aforo/{id}/{type}", handle_series)
    app.router.add_get("/station/aforo/{id}/{type}/graph", handle_graph)

    return app


async def _http_client_ctx(app: web.Application):
    """Own one HttpClient for the lifetime of the app."""
    settings = app[SETTINGS_KEY]
    client = HttpClient(timeout=settings.http.timeout, user_agent=settings.http.user_agent)
    async with client:
        app[SERVICE_KEY] = StationService(client.get_text, settings.site)
        yield


async def start_web_server(settings: Settings) -> None:
    """Start the API server and serve until cancelled."""
    app = create_app(settings)

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, settings.server.host, settings.server.port)
    await site.start()

    logger.info(
        "server_started",
        url=f"http://{settings.server.host}:{settings.server.port}",
    )

    try:
        # Keep running indefinitely
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()
