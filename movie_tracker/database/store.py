"""Data-access component for the movie collection.

``MovieStore`` owns one database connection for its lifetime and runs
every operation in its own session. SQLAlchemy failures are translated
into the ``MovieStoreError`` hierarchy; nothing is retried.

Usage:
    from movie_tracker.database import MovieStore
    from movie_tracker.types import MovieRecord

    with MovieStore("sqlite:///movies.db") as store:
        saved = store.insert(MovieRecord(external_id="tt0111161", title="The Shawshank Redemption"))
        dramas = store.search({"genre": "Drama"})
"""

from collections.abc import Generator, Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from types import TracebackType
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, DBAPIError, IntegrityError, SQLAlchemyError

from movie_tracker.database.connection import DatabaseConnection
from movie_tracker.database.models import Movie
from movie_tracker.database.repositories import MovieRepository
from movie_tracker.errors import (
    ConstraintViolationError,
    MovieNotFoundError,
    MovieStoreConnectionError,
    MovieStoreError,
    QueryError,
)
from movie_tracker.settings import settings
from movie_tracker.settings.database import is_file_sqlite_url
from movie_tracker.types import MovieRecord, SearchFilter
from movie_tracker.utils.logger import setup_logger

logger = setup_logger("database.store")

_MIN_ID = -(2**63)
_MAX_ID = 2**63 - 1


def _parse_id(record_id: str | int | None) -> int | None:
    """Convert a record id to its integer key, None if it cannot exist.

    Keys are signed 64-bit, so larger values never reach the driver.
    """
    if record_id is None or isinstance(record_id, bool):
        return None
    try:
        movie_id = int(str(record_id).strip())
    except ValueError:
        return None
    if not _MIN_ID <= movie_id <= _MAX_ID:
        return None
    return movie_id


@contextmanager
def _translate_errors(action: str) -> Iterator[None]:
    """Re-raise SQLAlchemy exceptions as MovieStoreError subclasses.

    Args:
        action: Operation name used in error messages.
    """
    try:
        yield
    except MovieStoreError:
        raise
    except IntegrityError as e:
        logger.warning(f"{action} violated a constraint: {e.orig}")
        raise ConstraintViolationError(f"{action} failed: {e.orig}") from e
    except DBAPIError as e:
        # No statement means the failure happened while acquiring a connection
        if e.connection_invalidated or e.statement is None:
            logger.warning(f"{action} lost the database connection")
            raise MovieStoreConnectionError(f"{action} failed: connection lost") from e
        logger.warning(f"{action} failed: {e.orig}")
        raise QueryError(f"{action} failed: {e.orig}") from e
    except SQLAlchemyError as e:
        logger.warning(f"{action} failed: {e}")
        raise QueryError(f"{action} failed: {e}") from e


class MovieStore:
    """Durable storage and retrieval of MovieRecord values.

    Delete policy: deleting an id with no row is a no-op that returns False.
    Ordering: fetch_all() and search() return records by ascending id.
    """

    def __init__(self, url: str | None = None, connect_timeout: float | None = None) -> None:
        """Configure the store without connecting.

        Args:
            url: SQLAlchemy connection URL. Defaults to the configured database.
            connect_timeout: Connection timeout in seconds.
        """
        self._url = url or settings.database.sync_url
        self._connect_timeout = connect_timeout
        self._db: DatabaseConnection | None = None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def open(self) -> "MovieStore":
        """Connect to the database and create the movies table if absent.

        Returns:
            The opened store.

        Raises:
            MovieStoreConnectionError: If the driver cannot be loaded, the URL
                is invalid, or the database is unreachable.
        """
        if self._db is not None:
            return self

        db: DatabaseConnection | None = None
        try:
            if is_file_sqlite_url(self._url):
                _ensure_sqlite_directory(self._url)
            db = DatabaseConnection(self._url, connect_timeout=self._connect_timeout)
            db.create_schema()
        except (ArgumentError, ImportError, SQLAlchemyError, OSError) as e:
            if db is not None:
                db.dispose()
            logger.error(f"Database connection failed: {e}")
            raise MovieStoreConnectionError(f"Cannot open movie database: {e}") from e

        self._db = db
        logger.info(f"Database ready ({db.url})")
        return self

    def close(self) -> None:
        """Release the database connection. Safe to call more than once."""
        if self._db is not None:
            self._db.dispose()
            self._db = None
            logger.info("Database connection closed")

    @property
    def is_open(self) -> bool:
        """True between open() and close()."""
        return self._db is not None

    def __enter__(self) -> "MovieStore":
        """Open the store."""
        return self.open()

    def __exit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        """Close the store on every exit path."""
        self.close()

    @contextmanager
    def _repository(self) -> Generator[MovieRepository, None, None]:
        """Yield a repository bound to a fresh transactional session."""
        if self._db is None:
            raise MovieStoreConnectionError("Movie store is not open")
        with self._db.session() as session:
            yield MovieRepository(session)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def insert(self, record: MovieRecord) -> MovieRecord:
        """Persist a new movie.

        Args:
            record: Movie to store; its id, if any, is ignored.

        Returns:
            The record carrying the store-assigned id.

        Raises:
            ConstraintViolationError: If the external id is already stored.
        """
        with _translate_errors("insert"):
            with self._repository() as repo:
                movie = repo.create(Movie.from_record(record))
                new_id = movie.id

        logger.debug(f"Inserted movie {new_id} ({record.external_id})")
        return record.with_id(new_id)

    def update(self, record: MovieRecord) -> MovieRecord:
        """Overwrite every field of an existing movie.

        Args:
            record: New values, keyed by record.id.

        Returns:
            The updated record.

        Raises:
            MovieNotFoundError: If record.id does not reference a stored movie.
            ConstraintViolationError: If the new external id belongs to another movie.
        """
        movie_id = _parse_id(record.id)
        if movie_id is None:
            raise MovieNotFoundError(f"No movie with id {record.id!r}")

        with _translate_errors("update"):
            with self._repository() as repo:
                affected = repo.update_by_id(movie_id, Movie.values_from_record(record))
                if affected == 0:
                    raise MovieNotFoundError(f"No movie with id {record.id!r}")

        logger.debug(f"Updated movie {movie_id}")
        return record

    def delete_by_id(self, record_id: str | int) -> bool:
        """Remove a movie.

        Args:
            record_id: Store-assigned id.

        Returns:
            True if a movie was removed, False if no movie had that id.
        """
        movie_id = _parse_id(record_id)
        if movie_id is None:
            logger.debug(f"Delete ignored, no movie with id {record_id!r}")
            return False

        with _translate_errors("delete"):
            with self._repository() as repo:
                deleted = repo.delete_by_id(movie_id)

        logger.debug(f"Delete movie {movie_id}: {'removed' if deleted else 'absent'}")
        return deleted

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_by_id(self, record_id: str | int) -> MovieRecord | None:
        """Retrieve one movie, or None if the id is unknown."""
        movie_id = _parse_id(record_id)
        if movie_id is None:
            return None

        with _translate_errors("get"):
            with self._repository() as repo:
                movie = repo.get_by_id(movie_id)
                return movie.to_record() if movie else None

    def fetch_all(self) -> list[MovieRecord]:
        """Return every stored movie ordered by id."""
        with _translate_errors("fetch_all"):
            with self._repository() as repo:
                return [movie.to_record() for movie in repo.get_all()]

    def search(self, search_filter: SearchFilter | Mapping[str, Any]) -> list[MovieRecord]:
        """Return the movies matching every set filter field.

        Args:
            search_filter: SearchFilter, or a mapping of filter field to value.

        Returns:
            Matching records ordered by id; an empty list when none match.

        Raises:
            QueryError: On a malformed filter or a failed query.
        """
        if not isinstance(search_filter, SearchFilter):
            search_filter = SearchFilter.from_mapping(search_filter)

        with _translate_errors("search"):
            with self._repository() as repo:
                records = [movie.to_record() for movie in repo.search(search_filter)]

        logger.debug(f"Search {search_filter.active_fields()} matched {len(records)} movie(s)")
        return records

    def count(self) -> int:
        """Number of stored movies."""
        with _translate_errors("count"):
            with self._repository() as repo:
                return repo.count()


def _ensure_sqlite_directory(url: str) -> None:
    """Create the parent directory of a SQLite database file."""
    database = make_url(url).database
    if database:
        Path(database).expanduser().parent.mkdir(parents=True, exist_ok=True)


# =============================================================================
# MODULE-LEVEL CONVENIENCE FUNCTIONS
# =============================================================================

_store: MovieStore | None = None


def get_store() -> MovieStore:
    """Get the process-wide store for the configured database.

    Opens it on first call (lazy initialization).

    Returns:
        Open MovieStore instance.
    """
    global _store  # noqa: PLW0603
    if _store is None:
        _store = MovieStore().open()
    return _store


def close_store() -> None:
    """Close the process-wide store.

    Call during application shutdown to release resources.
    """
    global _store  # noqa: PLW0603
    if _store is not None:
        _store.close()
        _store = None
