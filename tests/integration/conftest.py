"""Shared fixtures for integration tests.

These tests run the store against real SQLite databases, in memory or
in a temporary file, and drive the CLI end to end.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from movie_tracker.errors import MetadataNotFoundError
from movie_tracker.types import MovieMetadata

# ---------------------------------------------------------------------------
# Auto-mark all tests in this directory as "integration"
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Auto-apply ``@pytest.mark.integration`` to every test collected here."""
    integration_marker = pytest.mark.integration
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(integration_marker)


# ---------------------------------------------------------------------------
# Database files
# ---------------------------------------------------------------------------


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    """URL of a not-yet-created SQLite file in a nested directory."""
    return f"sqlite:///{tmp_path / 'data' / 'movies.db'}"


# ---------------------------------------------------------------------------
# Metadata source double
# ---------------------------------------------------------------------------


class FakeDataSource:
    """In-memory MovieDataSource keyed by IMDb id."""

    def __init__(self, movies: dict[str, MovieMetadata]) -> None:
        self.movies = movies
        self.calls: list[tuple[str, str, str]] = []

    def get_movie_data(self, imdb_id: str, title: str, year: str) -> MovieMetadata:
        self.calls.append((imdb_id, title, year))
        for metadata in self.movies.values():
            if imdb_id and metadata["imdb_id"] == imdb_id:
                return metadata
            if not imdb_id and metadata["title"] == title and (not year or metadata["year"] == year):
                return metadata
        raise MetadataNotFoundError("Movie not found!")

    def __enter__(self) -> FakeDataSource:
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None


@pytest.fixture
def fake_source(shawshank_metadata: dict[str, str]) -> FakeDataSource:
    """Source that knows The Shawshank Redemption only."""
    return FakeDataSource({"tt0111161": MovieMetadata(**shawshank_metadata)})
