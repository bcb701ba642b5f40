"""
YAML settings loader.

Loads scraper settings from YAML files with:
- Environment variable substitution
- Typed sections with default values
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
import structlog

from saih_scraper.core.http_client import DEFAULT_USER_AGENT
from saih_scraper.core.models import BASE_URL, LISTING_URL, SOURCE_TIMEZONE, STATION_KIND

logger = structlog.get_logger(__name__)


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variables in text.

    Supports formats:
    - ${VAR_NAME} - required, empty string (with a warning) if missing
    - ${VAR_NAME:-default} - optional with default

    Args:
        text: Text with env var placeholders

    Returns:
        Text with substituted values
    """
    def replace(match):
        var_expr = match.group(1)
        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return os.getenv(var_name, default)
        else:
            value = os.getenv(var_expr)
            if value is None:
                logger.warning("env_var_not_set", var=var_expr)
                return ""
            return value

    return re.sub(r"\$\{([^}]+)\}", replace, text)


@dataclass
class SiteConfig:
    """Where and how to scrape."""
    base_url: str = BASE_URL
    listing_url: str = LISTING_URL
    timezone: str = SOURCE_TIMEZONE
    station_kind: str = STATION_KIND

    @property
    def station_url_prefix(self) -> str:
        return f"{self.base_url}risr/"


@dataclass
class HttpConfig:
    """Outbound HTTP settings."""
    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class ServerConfig:
    """API server bind address."""
    host: str = "0.0.0.0"
    port: int = 3000


@dataclass
class LoggingConfig:
    """Log level and renderer."""
    level: str = "INFO"
    json: bool = False


@dataclass
class Settings:
    """All settings sections."""
    site: SiteConfig = field(default_factory=SiteConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        """Create from dictionary (e.g., from YAML)."""
        site = data.get("site") or {}
        http = data.get("http") or {}
        server = data.get("server") or {}
        log = data.get("logging") or {}

        base_url = site.get("base_url") or BASE_URL
        if not base_url.endswith("/"):
            base_url += "/"

        return cls(
            site=SiteConfig(
                base_url=base_url,
                listing_url=site.get("listing_url") or LISTING_URL,
                timezone=site.get("timezone") or SOURCE_TIMEZONE,
                station_kind=site.get("station_kind") or STATION_KIND,
            ),
            http=HttpConfig(
                timeout=float(http.get("timeout") or 30.0),
                user_agent=http.get("user_agent") or DEFAULT_USER_AGENT,
            ),
            server=ServerConfig(
                host=str(server.get("host") or "0.0.0.0"),
                port=int(server.get("port") or 3000),
            ),
            logging=LoggingConfig(
                level=str(log.get("level") or "INFO").upper(),
                json=bool(log.get("json", False)),
            ),
        )


class ConfigLoader:
    """
    Configuration loader for scraper settings.

    Loads YAML config files and maps them onto Settings.
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_dir: Directory containing config files
                       (defaults to package config directory)
        """
        if config_dir:
            self.config_dir = Path(config_dir)
        else:
            self.config_dir = Path(__file__).parent

    def load_file(self, filename: str) -> dict:
        """
        Load YAML config file.

        Args:
            filename: Config file name (relative to config_dir)

        Returns:
            Parsed config dict
        """
        filepath = self.config_dir / filename

        if not filepath.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        logger.debug("loading_config", file=str(filepath))

        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()

        # Substitute environment variables
        content = substitute_env_vars(content)

        # Parse YAML
        config = yaml.safe_load(content)

        return config or {}

    def load_settings(self, filename: str = "settings.yml") -> Settings:
        """
        Load settings from YAML.

        Args:
            filename: Settings file name

        Returns:
            Settings object
        """
        return Settings.from_dict(self.load_file(filename))


def load_settings(config_path: Optional[str] = None) -> Settings:
    """
    Convenience function to load settings.

    Args:
        config_path: Optional path to a settings YAML file

    Returns:
        Settings object
    """
    if config_path:
        config_dir = str(Path(config_path).parent)
        filename = Path(config_path).name
        loader = ConfigLoader(config_dir)
        return loader.load_settings(filename)
    else:
        loader = ConfigLoader()
        return loader.load_settings()
