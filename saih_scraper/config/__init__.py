"""
Configuration module for scraper settings.

Provides:
- YAML config loading
- Typed settings sections
- Environment variable substitution
"""

from .loader import (
    ConfigLoader,
    HttpConfig,
    LoggingConfig,
    ServerConfig,
    Settings,
    SiteConfig,
    load_settings,
)

__all__ = [
    "ConfigLoader",
    "HttpConfig",
    "LoggingConfig",
    "ServerConfig",
    "Settings",
    "SiteConfig",
    "load_settings",
]
