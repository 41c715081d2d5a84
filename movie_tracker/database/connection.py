"""Database engine and session management with SQLAlchemy 2.0.

Provides a transactional session scope per operation and explicit
engine lifecycle (create on construction, release with ``dispose``).
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from movie_tracker.database.models import Base
from movie_tracker.settings import settings


class DatabaseConnection:
    """Owns the SQLAlchemy engine and session factory for one database.

    Attributes:
        url: SQLAlchemy connection URL.
        connect_timeout: Seconds to wait when acquiring a connection.

    Example:
        ```python
        db = DatabaseConnection("sqlite://")
        with db.session() as session:
            movies = MovieRepository(session).get_all()
        db.dispose()
        ```
    """

    def __init__(
        self,
        url: str | None = None,
        connect_timeout: float | None = None,
        echo: bool | None = None,
    ) -> None:
        """Create the engine and session factory.

        Creating the engine loads the DBAPI driver but does not connect.

        Args:
            url: Connection URL. Defaults to the configured database.
            connect_timeout: Connection timeout in seconds.
            echo: Log emitted SQL. Defaults to DEBUG.

        Raises:
            sqlalchemy.exc.ArgumentError: On a malformed URL or unknown dialect.
            ImportError: When the DBAPI driver is not installed.
        """
        self._url = url or settings.database.sync_url
        self._connect_timeout = connect_timeout or settings.database.connect_timeout
        self._echo = settings.debug if echo is None else echo

        self._sync_engine = self._create_sync_engine()
        self._sync_session_factory = self._create_sync_session_factory()

    def _create_sync_engine(self) -> Engine:
        """Create the SQLAlchemy engine for the configured backend.

        Returns:
            SQLAlchemy Engine.
        """
        return create_engine(self._url, echo=self._echo, **self._engine_options())

    def _engine_options(self) -> dict[str, Any]:
        """Backend-specific pooling and timeout options."""
        parsed = make_url(self._url)
        backend = parsed.get_backend_name()

        if backend == "sqlite":
            connect_args: dict[str, Any] = {"timeout": self._connect_timeout}
            if parsed.database in (None, "", ":memory:"):
                # One shared connection, otherwise each session gets an empty database
                connect_args["check_same_thread"] = False
                return {"poolclass": StaticPool, "connect_args": connect_args}
            return {"connect_args": connect_args}

        options: dict[str, Any] = {
            "pool_size": settings.database.pool_size,
            "max_overflow": settings.database.pool_overflow,
            "pool_timeout": self._connect_timeout,
            "pool_pre_ping": True,
        }
        if backend == "postgresql":
            options["connect_args"] = {"connect_timeout": max(1, int(self._connect_timeout))}
        return options

    def _create_sync_session_factory(self) -> sessionmaker[Session]:
        """Create synchronous session factory.

        Returns:
            Configured sessionmaker for sync sessions.
        """
        return sessionmaker(
            bind=self._sync_engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Provide a transactional session scope.

        Automatically commits on success, rolls back on exception,
        and closes the session when done.

        Yields:
            SQLAlchemy Session instance.

        Raises:
            Exception: Re-raises any exception after rollback.
        """
        session = self._sync_session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_schema(self) -> None:
        """Create missing tables (CREATE TABLE IF NOT EXISTS semantics).

        Raises:
            sqlalchemy.exc.SQLAlchemyError: When the database is unreachable.
        """
        Base.metadata.create_all(bind=self._sync_engine)

    def dispose(self) -> None:
        """Dispose the connection pool and release resources."""
        self._sync_engine.dispose()

    @property
    def url(self) -> str:
        """Connection URL with the password hidden."""
        return make_url(self._url).render_as_string(hide_password=True)

    @property
    def sync_engine(self) -> Engine:
        """Get the underlying sync engine.

        Returns:
            SQLAlchemy Engine instance.
        """
        return self._sync_engine
