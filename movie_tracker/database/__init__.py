"""Database package for Movie Tracker.

Provides connection management, the ORM model, repositories and the
MovieStore data-access component.

Usage:
    from movie_tracker.database import MovieStore

    with MovieStore() as store:
        movies = store.search({"year": "1994"})
"""

from movie_tracker.database.connection import DatabaseConnection
from movie_tracker.database.models import Base, Movie
from movie_tracker.database.repositories import (
    BaseRepository,
    MovieRepository,
    build_search_statement,
)
from movie_tracker.database.store import MovieStore, close_store, get_store

__all__ = [
    # Connection
    "DatabaseConnection",
    # Models
    "Base",
    "Movie",
    # Repositories
    "BaseRepository",
    "MovieRepository",
    "build_search_statement",
    # Store
    "MovieStore",
    "get_store",
    "close_store",
]
