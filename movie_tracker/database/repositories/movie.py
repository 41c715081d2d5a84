"""Movie repository with the filter-to-query builder.

Every filter value is a bound parameter; nothing is interpolated
into SQL text.
"""

from typing import Any

from sqlalchemy import Select, select, update

from movie_tracker.database.models import Movie
from movie_tracker.database.repositories.base import BaseRepository
from movie_tracker.types import SearchFilter

# Filter field -> column compared for equality
_EXACT_COLUMNS = {
    "title": Movie.title,
    "year": Movie.year,
    "content_rating": Movie.content_rating,
    "rating": Movie.rating,
}

# Filter field -> joined list column searched for a substring
_CONTAINS_COLUMNS = {
    "genre": Movie.genres,
    "cast": Movie.actors,
}


def build_search_statement(search_filter: SearchFilter) -> Select:
    """Build the SELECT for a search filter.

    Exact fields compare with ``=``. Genre and cast use a case-insensitive
    LIKE with ``%``, ``_`` and the escape character escaped, so the value
    always matches literally.

    Args:
        search_filter: Filter whose set fields are AND-combined.

    Returns:
        Select statement ordered by id.
    """
    stmt = select(Movie)
    for name, value in search_filter.active_fields().items():
        if name in _EXACT_COLUMNS:
            stmt = stmt.where(_EXACT_COLUMNS[name] == value)
        else:
            stmt = stmt.where(_CONTAINS_COLUMNS[name].icontains(value, autoescape=True))
    return stmt.order_by(Movie.id)


class MovieRepository(BaseRepository[Movie]):
    """Repository for Movie entity operations."""

    model = Movie

    def update_by_id(self, movie_id: int, values: dict[str, Any]) -> int:
        """Overwrite columns of one movie.

        Args:
            movie_id: Primary key.
            values: Attribute name to new value.

        Returns:
            Number of rows affected (0 when the id does not exist).
        """
        stmt = (
            update(Movie)
            .where(Movie.id == movie_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = self._session.execute(stmt)
        return result.rowcount

    def search(self, search_filter: SearchFilter) -> list[Movie]:
        """Find movies matching every set filter field.

        Args:
            search_filter: Search constraints.

        Returns:
            Matching movies ordered by id, empty when none match.
        """
        stmt = build_search_statement(search_filter)
        return list(self._session.scalars(stmt).all())
