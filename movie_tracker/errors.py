"""Exception hierarchy for Movie Tracker.

Store errors wrap the underlying SQLAlchemy exception as ``__cause__``.
Metadata source errors are I/O errors (subclasses of ``OSError``).
"""


class MovieTrackerError(Exception):
    """Base exception for all Movie Tracker errors."""

    pass


# =============================================================================
# DATA-ACCESS ERRORS
# =============================================================================


class MovieStoreError(MovieTrackerError):
    """Base exception for movie store failures."""

    pass


class MovieStoreConnectionError(MovieStoreError):
    """Raised when the backing database cannot be reached or loaded."""

    pass


class ConstraintViolationError(MovieStoreError):
    """Raised when a write violates a database constraint."""

    pass


class MovieNotFoundError(MovieStoreError):
    """Raised when an operation targets a movie id that does not exist."""

    pass


class QueryError(MovieStoreError):
    """Raised for malformed filters or failed queries."""

    pass


# =============================================================================
# METADATA SOURCE ERRORS
# =============================================================================


class MetadataSourceError(MovieTrackerError, OSError):
    """Raised when movie metadata cannot be fetched."""

    pass


class MetadataNotFoundError(MetadataSourceError):
    """Raised when the metadata source has no matching movie."""

    pass
