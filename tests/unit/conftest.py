"""Shared fixtures for unit tests.

Provides OMDb payloads and a factory for clients backed by
``httpx.MockTransport``. No test here touches the network.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from movie_tracker.sources import OMDbClient

# ---------------------------------------------------------------------------
# Auto-mark all tests in this directory as "unit"
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Auto-apply ``@pytest.mark.unit`` to every test collected here."""
    unit_marker = pytest.mark.unit
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(unit_marker)


# ---------------------------------------------------------------------------
# OMDb payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def omdb_shawshank_payload() -> dict[str, Any]:
    """Successful OMDb response for tt0111161 (trimmed)."""
    return {
        "Title": "The Shawshank Redemption",
        "Year": "1994",
        "Rated": "R",
        "Released": "14 Oct 1994",
        "Runtime": "142 min",
        "Genre": "Drama",
        "Director": "Frank Darabont",
        "Actors": "Tim Robbins, Morgan Freeman, Bob Gunton",
        "Plot": "Two imprisoned men bond over a number of years...",
        "Awards": "N/A",
        "imdbRating": "9.3",
        "imdbID": "tt0111161",
        "Type": "movie",
        "Response": "True",
    }


# ---------------------------------------------------------------------------
# Client factory
# ---------------------------------------------------------------------------

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_omdb_client() -> Callable[..., OMDbClient]:
    """Return a factory building OMDbClient instances on a mock transport."""

    def factory(handler: Handler, **kwargs: Any) -> OMDbClient:
        return OMDbClient(
            api_key="test_key",
            base_url="https://omdb.test/",
            transport=httpx.MockTransport(handler),
            **kwargs,
        )

    return factory
