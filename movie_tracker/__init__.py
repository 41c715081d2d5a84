"""Movie Tracker - a personal movie collection backed by a single SQL table.

Usage:
    from movie_tracker import MovieRecord, MovieStore

    with MovieStore() as store:
        store.insert(MovieRecord(external_id="tt0111161", title="The Shawshank Redemption"))
"""

from movie_tracker.database import MovieStore
from movie_tracker.errors import (
    ConstraintViolationError,
    MetadataNotFoundError,
    MetadataSourceError,
    MovieNotFoundError,
    MovieStoreConnectionError,
    MovieStoreError,
    MovieTrackerError,
    QueryError,
)
from movie_tracker.types import MovieMetadata, MovieRecord, SearchFilter

__version__ = "0.1.0"

__all__ = [
    "MovieStore",
    "MovieRecord",
    "MovieMetadata",
    "SearchFilter",
    "MovieTrackerError",
    "MovieStoreError",
    "MovieStoreConnectionError",
    "ConstraintViolationError",
    "MovieNotFoundError",
    "QueryError",
    "MetadataSourceError",
    "MetadataNotFoundError",
]
