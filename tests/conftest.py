"""Pytest configuration and shared catalog fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


# Ensure the package is importable when running tests without an editable
# install. ``streamcatalog`` sits at the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


from streamcatalog.config import Settings  # noqa: E402
from streamcatalog.models import Movie, Plan, Series, User  # noqa: E402
from streamcatalog.services.catalog import CatalogService  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def service(settings: Settings) -> CatalogService:
    return CatalogService(settings)


@pytest.fixture
def premium() -> Plan:
    return Plan(id="premium", name="Premium", monthly_price=799.0, screen_limit=4, quality="4K")


@pytest.fixture
def basic() -> Plan:
    return Plan(id="basic", name="Basic", monthly_price=199.0, screen_limit=1, quality="SD")


@pytest.fixture
def alice() -> User:
    return User(id="u1", name="Alice", email="alice@example.com")


@pytest.fixture
def bob() -> User:
    return User(id="u2", name="Bob", email="bob@example.com")


@pytest.fixture
def mansion() -> Series:
    return Series(
        id="s1",
        title="Mystery Mansion",
        genre="Thriller",
        year=2021,
        rating=8.1,
        episode_count=8,
        episode_minutes=45,
        showrunner="R. Vale",
    )


@pytest.fixture
def voyage() -> Movie:
    return Movie(
        id="m1",
        title="Deep Voyage",
        genre="Sci-Fi",
        year=2019,
        rating=8.5,
        duration_minutes=128,
        director="K. Orin",
    )
