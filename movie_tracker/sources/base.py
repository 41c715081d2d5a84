"""Contract for external movie metadata sources."""

from typing import Protocol, runtime_checkable

from movie_tracker.types import MovieMetadata


@runtime_checkable
class MovieDataSource(Protocol):
    """Anything that can look up movie metadata.

    Implementations raise ``MetadataSourceError`` (an ``OSError``) when the
    lookup fails and ``MetadataNotFoundError`` when no movie matches.
    """

    def get_movie_data(self, imdb_id: str, title: str, year: str) -> MovieMetadata:
        """Fetch metadata for one movie.

        Args:
            imdb_id: IMDb identifier; preferred when not empty.
            title: Movie title, used when imdb_id is empty.
            year: Release year narrowing a title lookup (may be empty).

        Returns:
            Field name to value mapping.
        """
        ...
