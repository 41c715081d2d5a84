"""Movie value types.

``MovieRecord`` is the immutable value exchanged with the store,
``SearchFilter`` describes optional AND-combined search constraints and
``MovieMetadata`` is the mapping returned by metadata sources.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any, TypedDict

from movie_tracker.errors import QueryError

LIST_SEPARATOR = ", "


class MovieMetadata(TypedDict):
    """Movie data returned by a metadata source.

    List-valued fields (genres, actors) are comma-separated strings.
    """

    imdb_id: str
    title: str
    year: str
    content_rating: str
    genres: str
    actors: str
    rating: str
    runtime: str
    plot: str


def split_list(value: str | None) -> tuple[str, ...]:
    """Split a comma-separated string into trimmed, non-empty entries.

    Args:
        value: Joined string (e.g. "Crime, Drama").

    Returns:
        Tuple of entries, empty for None or blank input.
    """
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


def join_list(values: Iterable[str]) -> str:
    """Join list entries with the storage separator."""
    return LIST_SEPARATOR.join(values)


def _checked_entries(name: str, values: Iterable[str]) -> tuple[str, ...]:
    """Freeze list entries, rejecting any that split_list would alter.

    Entries must be non-blank, carry no surrounding whitespace and contain
    no comma.
    """
    entries = tuple(values)
    for entry in entries:
        if not isinstance(entry, str) or not entry.strip():
            raise ValueError(f"{name} entries must be non-blank strings, got {entry!r}")
        if entry != entry.strip():
            raise ValueError(f"{name} entry {entry!r} has surrounding whitespace")
        if "," in entry:
            raise ValueError(f"{name} entry {entry!r} contains the list separator ','")
    return entries


# =============================================================================
# MOVIE RECORD
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class MovieRecord:
    """One movie's metadata.

    Attributes:
        id: Store-assigned identifier, None before insertion.
        external_id: Unique external identifier (IMDb id, e.g. 'tt0111161').
        title: Movie title.
        year: Release year.
        content_rating: Content rating (e.g. 'R').
        genres: Ordered genre names.
        cast: Ordered actor names.
        rating: Audience rating (e.g. '9.3').
        runtime: Runtime in minutes.
        description: Plot summary.
    """

    id: str | None = None
    external_id: str
    title: str = ""
    year: str = ""
    content_rating: str = ""
    genres: tuple[str, ...] = field(default_factory=tuple)
    cast: tuple[str, ...] = field(default_factory=tuple)
    rating: str = ""
    runtime: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        """Freeze list fields and normalize the id to its string form.

        Raises:
            ValueError: If external_id is blank, or a list entry could not be
                stored and read back unchanged.
        """
        if not self.external_id or not self.external_id.strip():
            raise ValueError("external_id must not be blank")

        object.__setattr__(self, "genres", _checked_entries("genres", self.genres))
        object.__setattr__(self, "cast", _checked_entries("cast", self.cast))
        if self.id is not None:
            object.__setattr__(self, "id", str(self.id))

    @property
    def genre_text(self) -> str:
        """Genres joined into a single string."""
        return join_list(self.genres)

    @property
    def cast_text(self) -> str:
        """Cast joined into a single string."""
        return join_list(self.cast)

    def with_id(self, record_id: str | int | None) -> "MovieRecord":
        """Return a copy of this record carrying another id."""
        return replace(self, id=None if record_id is None else str(record_id))

    @classmethod
    def from_metadata(cls, metadata: Mapping[str, str]) -> "MovieRecord":
        """Build an unsaved record from a metadata source mapping.

        Args:
            metadata: Mapping with the ``MovieMetadata`` keys. Missing keys
                are treated as empty strings.

        Returns:
            MovieRecord without an id.

        Raises:
            ValueError: If the mapping has no imdb_id.
        """
        return cls(
            external_id=metadata.get("imdb_id", ""),
            title=metadata.get("title", ""),
            year=metadata.get("year", ""),
            content_rating=metadata.get("content_rating", ""),
            genres=split_list(metadata.get("genres")),
            cast=split_list(metadata.get("actors")),
            rating=metadata.get("rating", ""),
            runtime=metadata.get("runtime", ""),
            description=metadata.get("plot", ""),
        )

    def __str__(self) -> str:
        """Return the multi-line display block."""
        return (
            f"ID: {self.id or ''}\n"
            f"IMDB Id: {self.external_id}\n"
            f"Title: {self.title}\n"
            f"Year: {self.year}\n"
            f"Content Rating: {self.content_rating}\n"
            f"Genre: {self.genre_text}\n"
            f"Stars: {self.cast_text}\n"
            f"Rating: {self.rating}\n"
            f"Movie Length: {self.runtime}\n"
            f"Description: {self.description}\n"
        )


# =============================================================================
# SEARCH FILTER
# =============================================================================


@dataclass(frozen=True)
class SearchFilter:
    """Optional search constraints, combined with AND.

    A field that is None, empty or whitespace-only is not filtered on.
    ``genre`` and ``cast`` are substring matches against the joined lists,
    the other fields are exact matches.
    """

    title: str | None = None
    year: str | None = None
    content_rating: str | None = None
    genre: str | None = None
    cast: str | None = None
    rating: str | None = None

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Names of the recognized filter fields."""
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "SearchFilter":
        """Build a filter from a plain mapping.

        Args:
            values: Mapping of filter field name to value.

        Returns:
            SearchFilter instance.

        Raises:
            QueryError: On unknown keys or non-string values.
        """
        unknown = set(values) - set(cls.field_names())
        if unknown:
            raise QueryError(f"Unknown filter fields: {', '.join(sorted(unknown))}")

        for name, value in values.items():
            if value is not None and not isinstance(value, str):
                raise QueryError(
                    f"Filter field '{name}' must be a string, got {type(value).__name__}"
                )

        return cls(**values)

    def active_fields(self) -> dict[str, str]:
        """Return the set fields with surrounding whitespace stripped."""
        active: dict[str, str] = {}
        for name in self.field_names():
            value = getattr(self, name)
            if value is not None and value.strip():
                active[name] = value.strip()
        return active

    @property
    def is_empty(self) -> bool:
        """True when no field is set."""
        return not self.active_fields()
