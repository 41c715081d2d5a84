"""Value types shared across Movie Tracker."""

from movie_tracker.types.movie import (
    MovieMetadata,
    MovieRecord,
    SearchFilter,
    join_list,
    split_list,
)

__all__ = [
    "MovieMetadata",
    "MovieRecord",
    "SearchFilter",
    "join_list",
    "split_list",
]
