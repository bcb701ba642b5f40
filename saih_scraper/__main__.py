"""
CLI entry point for saih-scraper.

Usage:
    python -m saih_scraper serve --port 3000
    python -m saih_scraper stations
    python -m saih_scraper detail EA013
    python -m saih_scraper series EA013 nivel
"""

import argparse
import asyncio
import json
import logging
import sys

import structlog

# Log level mapping
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def setup_logging(level: str = "INFO", json_output: bool = False):
    """Configure structured logging."""
    log_level = LOG_LEVELS.get(level.upper(), logging.INFO)

    if json_output:
        processors = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr so command output stays valid JSON
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="saih_scraper",
        description="SAIH Duero gauging-station scraper and JSON API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the API server
  python -m saih_scraper serve --port 3000

  # List all gauging stations
  python -m saih_scraper stations

  # Metrics available for a station
  python -m saih_scraper detail EA013

  # Level series of a station
  python -m saih_scraper series EA013 nivel
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to settings.yml config file",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: from config, INFO)",
    )

    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Output logs as JSON (for production)",
    )

    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )

    commands = parser.add_subparsers(dest="command")

    serve = commands.add_parser("serve", help="Run the JSON API server")
    serve.add_argument("--host", type=str, help="Bind address (default: from config)")
    serve.add_argument("--port", type=int, help="Port (default: from config, 3000)")

    commands.add_parser("stations", help="Print all gauging stations")

    detail = commands.add_parser("detail", help="Print the metrics of a station")
    detail.add_argument("station_id", help="Station identifier, e.g. EA013")

    series = commands.add_parser("series", help="Print the chart series of a metric")
    series.add_argument("station_id", help="Station identifier, e.g. EA013")
    series.add_argument("metric", help="Metric name, e.g. nivel or caudal")

    return parser.parse_args(argv)


def _dump(data) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


async def main_async(args, settings) -> int:
    """Async main function."""
    from .orchestrator import get_station_detail, get_station_series, list_all_stations
    from .web.server import start_web_server

    logger = structlog.get_logger(__name__)

    if args.command == "serve":
        if args.host:
            settings.server.host = args.host
        if args.port:
            settings.server.port = args.port
        await start_web_server(settings)
        return 0

    if args.command == "stations":
        stations = await list_all_stations(settings.site, settings.http)
        _dump(stations)
        return 0 if stations else 1

    if args.command == "detail":
        detail = await get_station_detail(args.station_id, settings.site, settings.http)
        _dump([entry.to_dict() for entry in detail] if isinstance(detail, list) else detail)
        return 0 if detail else 1

    if args.command == "series":
        points = await get_station_series(
            args.station_id, args.metric, settings.site, settings.http
        )
        _dump(points)
        return 0 if points else 1

    logger.error("no_command")
    return 2


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    # Version check
    if args.version:
        from . import __version__
        print(f"saih-scraper {__version__}")
        sys.exit(0)

    from .config.loader import load_settings

    try:
        settings = load_settings(args.config)
    except Exception as e:
        setup_logging(args.log_level or "INFO", args.json_logs)
        structlog.get_logger(__name__).error("config_load_failed", error=str(e))
        sys.exit(1)

    # Setup logging
    setup_logging(args.log_level or settings.logging.level, args.json_logs or settings.logging.json)

    # Run async main
    try:
        sys.exit(asyncio.run(main_async(args, settings)))
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        logger = structlog.get_logger(__name__)
        logger.exception("fatal_error", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
