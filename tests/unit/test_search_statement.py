"""Tests for the filter-to-query builder.

Statements are compiled, never executed: these tests check the SQL
shape and that every value travels as a bound parameter.
"""

from sqlalchemy.dialects import postgresql, sqlite

from movie_tracker.database.repositories import build_search_statement
from movie_tracker.types import SearchFilter


def _compile(search_filter: SearchFilter, dialect=None):
    """Compile the statement for a filter."""
    stmt = build_search_statement(search_filter)
    return stmt.compile(dialect=dialect or sqlite.dialect())


class TestBuildSearchStatement:
    """Tests for build_search_statement."""

    @staticmethod
    def test_empty_filter_has_no_where_clause() -> None:
        """An empty filter selects every row."""
        compiled = _compile(SearchFilter())
        sql = str(compiled)
        assert "WHERE" not in sql
        assert compiled.params == {}

    @staticmethod
    def test_results_are_ordered_by_id() -> None:
        """Rows come back by ascending id."""
        assert "ORDER BY movies._id" in str(_compile(SearchFilter(year="1994")))

    @staticmethod
    def test_exact_fields_use_equality() -> None:
        """title, year, content_rating and rating compare with '='."""
        compiled = _compile(
            SearchFilter(title="Heat", year="1995", content_rating="R", rating="8.3")
        )
        sql = str(compiled)
        assert "movies.title = " in sql
        assert "movies.year = " in sql
        assert "movies.content_rating = " in sql
        assert "movies.rating = " in sql
        assert sql.count(" AND ") == 3
        assert sorted(compiled.params.values()) == sorted(["Heat", "1995", "R", "8.3"])

    @staticmethod
    def test_list_fields_use_case_insensitive_like() -> None:
        """genre and cast are LIKE matches on lower-cased columns."""
        sql = str(_compile(SearchFilter(genre="Drama", cast="Freeman")))
        assert "lower(movies.genres) LIKE" in sql
        assert "lower(movies.actors) LIKE" in sql
        assert "ESCAPE" in sql

    @staticmethod
    def test_wildcards_are_escaped() -> None:
        """% and _ in a value are escaped so they match literally."""
        compiled = _compile(SearchFilter(genre="100%_Sci"))
        assert "100/%/_Sci" in compiled.params.values()

    @staticmethod
    def test_values_are_bound_not_interpolated() -> None:
        """Quotes in a value never reach the SQL text."""
        payload = "x' OR '1'='1"
        compiled = _compile(SearchFilter(title=payload, cast=payload))
        sql = str(compiled)
        assert payload not in sql
        assert "'1'='1" not in sql
        assert payload in compiled.params.values()

    @staticmethod
    def test_values_are_stripped() -> None:
        """Surrounding whitespace is not part of the parameter."""
        compiled = _compile(SearchFilter(year=" 1994 "))
        assert list(compiled.params.values()) == ["1994"]

    @staticmethod
    def test_compiles_for_postgresql() -> None:
        """The statement is portable to PostgreSQL."""
        sql = str(_compile(SearchFilter(genre="Drama", year="1994"), postgresql.dialect()))
        assert "movies.year = %(year_1)s" in sql
        assert "LIKE" in sql
