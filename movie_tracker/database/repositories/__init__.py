"""Database repositories for Movie Tracker.

Usage:
    from movie_tracker.database.connection import DatabaseConnection
    from movie_tracker.database.repositories import MovieRepository

    db = DatabaseConnection()
    with db.session() as session:
        movies = MovieRepository(session).get_all()
"""

from movie_tracker.database.repositories.base import BaseRepository
from movie_tracker.database.repositories.movie import (
    MovieRepository,
    build_search_statement,
)

__all__ = [
    "BaseRepository",
    "MovieRepository",
    "build_search_statement",
]
