"""External data source settings."""

from movie_tracker.settings.sources.omdb import OMDbSettings

__all__ = ["OMDbSettings"]
