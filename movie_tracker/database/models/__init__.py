"""SQLAlchemy ORM models for the Movie Tracker database.

Usage:
    from movie_tracker.database.models import Base, Movie

Tables:
    - movies: One row per tracked movie
"""

from movie_tracker.database.models.base import Base
from movie_tracker.database.models.movie import Movie

__all__ = [
    "Base",
    "Movie",
]
