"""Pytest fixtures and configuration."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from movie_catalog.catalog import Catalog
from movie_catalog.database import build_engine, build_session_factory, init_db
from movie_catalog.sample_data import generate_test_data
from movie_catalog.storage import CatalogStore


@pytest.fixture
def catalog() -> Catalog:
    """An empty catalog."""
    return Catalog()


@pytest.fixture
def seeded_catalog(catalog: Catalog) -> Catalog:
    """A catalog holding the sample people and movies."""
    generate_test_data(catalog)
    return catalog


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """URL of a file-backed SQLite database private to the test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}"


@pytest.fixture
async def store(database_url: str) -> AsyncGenerator[CatalogStore]:
    """A catalog store over freshly created tables."""
    engine = build_engine(database_url)
    await init_db(engine)
    yield CatalogStore(build_session_factory(engine))
    await engine.dispose()
