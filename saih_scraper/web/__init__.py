"""Web layer - JSON API and chart view."""

from .server import create_app, start_web_server

__all__ = ["create_app", "start_web_server"]
