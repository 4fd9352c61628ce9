"""Shared pytest fixtures for loading HTML test fixtures."""

from pathlib import Path

import pytest
from bs4 import BeautifulSoup

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture()
def results_sample_html() -> str:
    return (FIXTURES_DIR / "results_sample.html").read_text(encoding="utf-8")


@pytest.fixture()
def results_locations_html() -> str:
    return (FIXTURES_DIR / "results_locations.html").read_text(encoding="utf-8")


@pytest.fixture()
def results_empty_html() -> str:
    return (FIXTURES_DIR / "results_empty.html").read_text(encoding="utf-8")


@pytest.fixture()
def make_cell():
    """Build a standalone <td> from an HTML fragment."""
    def _make(inner: str, cls: str = "cell"):
        soup = BeautifulSoup(
            f'<table><tr><td class="{cls}">{inner}</td></tr></table>', "html.parser",
        )
        return soup.find("td")
    return _make
