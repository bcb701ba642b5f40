"""
SAIH Scraper - gauging-station data from the SAIH Duero website.

Architecture:
- core/: Stable foundation (models, HTTP client, timestamps, literal decoder)
- parsers/: Extraction of station lists, detail pages and chart series
- orchestrator: Fetch + parse operations that never raise
- web/: JSON API and chart view
- config/: YAML-driven settings
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
