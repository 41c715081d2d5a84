"""OMDb API client.

Looks up movie metadata on https://www.omdbapi.com by IMDb id, or by
title and year, and normalizes the payload into ``MovieMetadata``.
"""

import logging
import re
from types import TracebackType
from typing import Any

import httpx
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from movie_tracker.errors import MetadataNotFoundError, MetadataSourceError
from movie_tracker.settings import settings
from movie_tracker.types import MovieMetadata

logger = logging.getLogger(__name__)

_MISSING = "N/A"
_RUNTIME_PATTERN = re.compile(r"^\s*(\d+)\s*min", re.IGNORECASE)

# OMDb payload key -> MovieMetadata key
_FIELD_MAP = {
    "imdbID": "imdb_id",
    "Title": "title",
    "Year": "year",
    "Rated": "content_rating",
    "Genre": "genres",
    "Actors": "actors",
    "imdbRating": "rating",
    "Runtime": "runtime",
    "Plot": "plot",
}


class OMDbRateLimitError(MetadataSourceError):
    """Raised when OMDb answers 429 Too Many Requests."""

    pass


def normalize_payload(payload: dict[str, Any]) -> MovieMetadata:
    """Convert an OMDb payload into MovieMetadata.

    "N/A" values become empty strings and "142 min" becomes "142".

    Args:
        payload: Successful OMDb JSON response.

    Returns:
        Normalized metadata mapping.
    """
    values: dict[str, str] = {}
    for omdb_key, key in _FIELD_MAP.items():
        value = str(payload.get(omdb_key) or "").strip()
        values[key] = "" if value == _MISSING else value

    match = _RUNTIME_PATTERN.match(values["runtime"])
    if match:
        values["runtime"] = match.group(1)

    return MovieMetadata(**values)


class OMDbClient:
    """HTTP client for the OMDb API.

    Use as a context manager so the underlying HTTP connection pool is
    released. Timeouts and rate-limited requests are retried with
    exponential backoff.

    Example:
        ```python
        with OMDbClient() as client:
            data = client.get_movie_data("tt0111161", "", "")
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize OMDb client, falling back to settings for each option.

        Args:
            api_key: OMDb API key.
            base_url: API base URL.
            timeout: Request timeout in seconds.
            max_retries: Attempts for timeouts and rate-limited requests.
            transport: Custom httpx transport (used by tests).

        Raises:
            MetadataSourceError: If no API key is configured.
        """
        self._api_key = api_key if api_key is not None else settings.omdb.api_key
        if not self._api_key:
            msg = "OMDB_API_KEY is not configured"
            raise MetadataSourceError(msg)

        self._base_url = base_url or settings.omdb.base_url
        self._timeout = timeout or settings.omdb.timeout
        self._max_retries = max_retries or settings.omdb.max_retries
        self._plot = settings.omdb.plot
        self._transport = transport
        self._client: httpx.Client | None = None

    # -------------------------------------------------------------------------
    # Context Manager
    # -------------------------------------------------------------------------

    def __enter__(self) -> "OMDbClient":
        """Enter context and create HTTP client."""
        self._client = httpx.Client(timeout=self._timeout, transport=self._transport)
        return self

    def __exit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        """Exit context and close HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    # -------------------------------------------------------------------------
    # HTTP
    # -------------------------------------------------------------------------

    def _request(self, params: dict[str, str]) -> dict[str, Any]:
        """Execute one GET request.

        Raises:
            MetadataSourceError: On API errors.
            OMDbRateLimitError: When rate limited.
            httpx.TimeoutException: On timeout.
        """
        if self._client is None:
            msg = "Client not initialized. Use context manager."
            raise MetadataSourceError(msg)

        request_params = {"apikey": self._api_key, "plot": self._plot, **params}
        response = self._client.get(self._base_url, params=request_params)
        return self._handle_response(response)

    @staticmethod
    def _handle_response(response: httpx.Response) -> dict[str, Any]:
        """Check the HTTP status and decode the JSON body.

        Raises:
            MetadataSourceError: On HTTP errors or undecodable bodies.
            OMDbRateLimitError: When rate limit exceeded (429).
        """
        if response.status_code == 401:
            raise MetadataSourceError("OMDb rejected the API key")

        if response.status_code == 429:
            logger.warning("OMDb rate limit reached")
            raise OMDbRateLimitError("OMDb rate limit exceeded")

        if response.status_code != 200:
            error_msg = f"OMDb API error {response.status_code}"
            logger.error(error_msg)
            raise MetadataSourceError(error_msg)

        try:
            return response.json()
        except ValueError as e:
            raise MetadataSourceError("OMDb returned invalid JSON") from e

    def _get(self, params: dict[str, str]) -> dict[str, Any]:
        """Execute GET request with retries on timeouts and rate limits."""
        retryer = Retrying(
            retry=retry_if_exception_type((httpx.TimeoutException, OMDbRateLimitError)),
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=1, min=1, max=8),
            reraise=True,
        )
        try:
            return retryer(self._request, params)
        except httpx.TimeoutException as e:
            logger.warning(f"OMDb request timed out: {params}")
            raise MetadataSourceError("OMDb request timed out") from e
        except httpx.HTTPError as e:
            raise MetadataSourceError(f"OMDb request failed: {e}") from e

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_movie_data(self, imdb_id: str, title: str, year: str) -> MovieMetadata:
        """Fetch metadata by IMDb id, or by title and optional year.

        Args:
            imdb_id: IMDb identifier; used when not empty.
            title: Movie title for lookups without an IMDb id.
            year: Release year narrowing a title lookup.

        Returns:
            Normalized metadata.

        Raises:
            ValueError: If neither imdb_id nor title is given.
            MetadataNotFoundError: If OMDb has no matching movie.
            MetadataSourceError: On any other failure.
        """
        if imdb_id:
            params = {"i": imdb_id}
        elif title:
            params = {"t": title}
            if year:
                params["y"] = year
        else:
            raise ValueError("Provide imdb_id or title")

        payload = self._get(params)

        if payload.get("Response") != "True":
            error = payload.get("Error", "Unknown OMDb error")
            if "not found" in error.lower():
                raise MetadataNotFoundError(f"{error} ({params})")
            raise MetadataSourceError(error)

        logger.debug(f"OMDb returned {payload.get('imdbID')} for {params}")
        return normalize_payload(payload)
