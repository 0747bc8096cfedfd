from __future__ import annotations

import logging
from typing import Any, Mapping

import requests

from unstreamed.config import Settings
from unstreamed.integrations.tmdb.client import TmdbClientError, search_movies
from unstreamed.models.movies import ResolvedIdentity

logger = logging.getLogger(__name__)


def _year_from_release_date(value: Any) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return None
    year = value.strip().split("-", 1)[0]
    return year or None


def parse_identity_from_search(payload: Mapping[str, Any], *, fallback_year: str | None) -> ResolvedIdentity | None:
    """
    Pick the first ranked search result as the match.

    Returns None when the result list is empty. Raises `ValueError` when the
    payload or the first result is malformed.
    """

    results = payload.get("results")
    if not isinstance(results, list):
        raise ValueError("search response has no results list")
    if not results:
        return None

    first = results[0]
    if not isinstance(first, Mapping):
        raise ValueError("first search result is not an object")
    movie_id = first.get("id")
    if isinstance(movie_id, bool) or not isinstance(movie_id, int):
        raise ValueError(f"first search result has no integer id: {movie_id!r}")

    release_year = _year_from_release_date(first.get("release_date")) or fallback_year
    adult = first.get("adult")
    return ResolvedIdentity(id=movie_id, release_year=release_year, adult=adult if isinstance(adult, bool) else None)


class IdentityResolver:
    """Resolves a movie title (and optional year) to its TMDb id."""

    def __init__(self, settings: Settings, *, session: requests.Session | None = None) -> None:
        self._api_key = settings.tmdb_api_key
        self._timeout_seconds = settings.request_timeout_seconds
        self._session = session

    def resolve(self, title: str, year: str | None = None) -> ResolvedIdentity | None:
        # Lookup failures are reported the same way as "no match".
        try:
            payload = search_movies(
                title,
                year=year,
                api_key=self._api_key,
                session=self._session,
                timeout_seconds=self._timeout_seconds,
            )
            return parse_identity_from_search(payload, fallback_year=year)
        except (TmdbClientError, requests.RequestException, ValueError) as exc:
            logger.warning('Error fetching "%s": %s', title, exc)
            return None
