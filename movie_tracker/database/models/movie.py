"""Movie model - the single table of the collection.

Column names follow the historical ``movies`` schema.
"""

from typing import Any

from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from movie_tracker.database.models.base import Base
from movie_tracker.types import MovieRecord, split_list

# INTEGER on SQLite so the key aliases ROWID and auto-increments
_ID_TYPE = BigInteger().with_variant(Integer, "sqlite")


class Movie(Base):
    """Stored movie row.

    Attributes:
        id: Auto-incremented primary key (column ``_id``).
        imdb_id: IMDb identifier, unique.
        genres: Genre names joined with ", ".
        actors: Cast names joined with ", ".
        plot: Plot summary.
    """

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column("_id", _ID_TYPE, primary_key=True, autoincrement=True)
    imdb_id: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    title: Mapped[str | None] = mapped_column(String(255))
    year: Mapped[str | None] = mapped_column(String(255))
    content_rating: Mapped[str | None] = mapped_column(String(255))
    genres: Mapped[str | None] = mapped_column(String(255))
    actors: Mapped[str | None] = mapped_column(String(255))
    rating: Mapped[str | None] = mapped_column(String(255))
    runtime: Mapped[str | None] = mapped_column(String(255))
    plot: Mapped[str | None] = mapped_column(Text)

    @staticmethod
    def values_from_record(record: MovieRecord) -> dict[str, Any]:
        """Column values for a record, excluding the primary key."""
        return {
            "imdb_id": record.external_id,
            "title": record.title,
            "year": record.year,
            "content_rating": record.content_rating,
            "genres": record.genre_text,
            "actors": record.cast_text,
            "rating": record.rating,
            "runtime": record.runtime,
            "plot": record.description,
        }

    @classmethod
    def from_record(cls, record: MovieRecord) -> "Movie":
        """Build an unsaved row from a record (its id is ignored)."""
        return cls(**cls.values_from_record(record))

    def to_record(self) -> MovieRecord:
        """Convert the row back into an immutable record."""
        return MovieRecord(
            id=str(self.id),
            external_id=self.imdb_id,
            title=self.title or "",
            year=self.year or "",
            content_rating=self.content_rating or "",
            genres=split_list(self.genres),
            cast=split_list(self.actors),
            rating=self.rating or "",
            runtime=self.runtime or "",
            description=self.plot or "",
        )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<Movie(id={self.id}, imdb_id='{self.imdb_id}', title='{self.title}')>"
