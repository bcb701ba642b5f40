"""Shared fixtures: saved SAIH Duero pages."""

from pathlib import Path

import pytest
import structlog

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration made by a test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def stations_html():
    """Station listing page."""
    return read_fixture("estaciones.html")


@pytest.fixture
def station_detail_html():
    """Detail page of station EA013 (Aranda de Duero)."""
    return read_fixture("risr-estacion-aranda.html")


@pytest.fixture
def station_nivel_html():
    """Historic "Nivel" page of station EA013."""
    return read_fixture("risr-estacion-aranda-nivel.html")
