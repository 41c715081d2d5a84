"""External movie metadata sources.

Usage:
    from movie_tracker.sources import OMDbClient

    with OMDbClient() as source:
        metadata = source.get_movie_data("tt0111161", "", "")
"""

from movie_tracker.sources.base import MovieDataSource
from movie_tracker.sources.omdb import OMDbClient, OMDbRateLimitError, normalize_payload

__all__ = [
    "MovieDataSource",
    "OMDbClient",
    "OMDbRateLimitError",
    "normalize_payload",
]
