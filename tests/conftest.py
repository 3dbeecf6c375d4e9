"""Pytest configuration and shared fixtures."""

import pytest
from datetime import date
from pathlib import Path

from edgar_app.data.models import CatalogEntry, KeyValuePair


@pytest.fixture
def symbol_catalog() -> tuple[CatalogEntry, ...]:
    """Small label-sorted symbol catalog."""
    return (
        CatalogEntry(value="AAPL", label="Apple"),
        CatalogEntry(value="MSFT", label="Microsoft"),
    )


@pytest.fixture
def catalog_text() -> str:
    """Raw catalog resource, unsorted, CRLF line endings and a trailing newline."""
    return "MSFT,Microsoft Corp\r\nTSLA,Tesla Inc.\r\nAAPL,Apple Inc.\r\n"


@pytest.fixture
def catalog_file(tmp_path: Path, catalog_text: str) -> Path:
    """Catalog resource written to disk."""
    path = tmp_path / "symbols.csv"
    path.write_text(catalog_text, encoding="utf-8")
    return path


@pytest.fixture
def persisted_pairs() -> list[KeyValuePair]:
    """requiredKeys as saved by a previous session."""
    return [
        KeyValuePair(key="symbols", value=("MSFT",)),
        KeyValuePair(key="formTypes", value=("8-K",)),
        KeyValuePair(key="startDate", value=20230105),
        KeyValuePair(key="endDate", value=20231231),
    ]


@pytest.fixture
def today() -> date:
    """Fixed reference day for default date ranges."""
    return date(2024, 3, 15)
