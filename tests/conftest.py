"""Shared pytest fixtures for Movie Tracker tests."""

from collections.abc import Generator

import pytest

from movie_tracker.database import MovieStore
from movie_tracker.types import MovieRecord


@pytest.fixture(autouse=True, scope="function")
def mock_env_for_tests(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mock environment variables for reproducible tests."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("LOG_TO_FILE", "false")

    # Database settings
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("DB_CONNECT_TIMEOUT", "5")

    # OMDb settings
    monkeypatch.setenv("OMDB_API_KEY", "test_omdb_key")
    monkeypatch.setenv("OMDB_BASE_URL", "https://omdb.test/")


@pytest.fixture
def store() -> Generator[MovieStore, None, None]:
    """Open store on a private in-memory SQLite database."""
    with MovieStore("sqlite://") as movie_store:
        yield movie_store


@pytest.fixture
def shawshank() -> MovieRecord:
    """Unsaved record for The Shawshank Redemption."""
    return MovieRecord(
        external_id="tt0111161",
        title="The Shawshank Redemption",
        year="1994",
        content_rating="R",
        genres=["Drama"],
        cast=["Tim Robbins", "Morgan Freeman"],
        rating="9.3",
        runtime="142",
        description="Two imprisoned men bond over a number of years...",
    )


@pytest.fixture
def godfather() -> MovieRecord:
    """Unsaved record for The Godfather."""
    return MovieRecord(
        external_id="tt0068646",
        title="The Godfather",
        year="1972",
        content_rating="R",
        genres=["Crime", "Drama"],
        cast=["Marlon Brando", "Al Pacino", "James Caan"],
        rating="9.2",
        runtime="175",
        description="The aging patriarch of an organized crime dynasty...",
    )


@pytest.fixture
def airplane() -> MovieRecord:
    """Unsaved record for Airplane!."""
    return MovieRecord(
        external_id="tt0080339",
        title="Airplane!",
        year="1980",
        content_rating="PG",
        genres=["Comedy"],
        cast=["Robert Hays", "Julie Hagerty", "Leslie Nielsen"],
        rating="7.7",
        runtime="88",
        description="After the crew becomes sick with food poisoning...",
    )


@pytest.fixture
def shawshank_metadata() -> dict[str, str]:
    """Metadata mapping as returned by a metadata source."""
    return {
        "imdb_id": "tt0111161",
        "title": "The Shawshank Redemption",
        "year": "1994",
        "content_rating": "R",
        "genres": "Drama",
        "actors": "Tim Robbins, Morgan Freeman, Bob Gunton",
        "rating": "9.3",
        "runtime": "142",
        "plot": "Two imprisoned men bond over a number of years...",
    }
