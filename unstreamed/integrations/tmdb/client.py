from __future__ import annotations

from typing import Any, Mapping

import requests

TMDB_API_BASE_URL = "https://api.themoviedb.org/3"
DEFAULT_TIMEOUT_SECONDS = 20.0


class TmdbClientError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, body_snippet: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_snippet = body_snippet


def _require_api_key(api_key: str | None) -> str:
    resolved = (api_key or "").strip()
    if not resolved:
        raise TmdbClientError("TMDb API key is required.")
    return resolved


def _request_json(
    session: requests.Session,
    url: str,
    *,
    params: Mapping[str, Any] | None = None,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> dict[str, Any]:
    """
    Issue a single GET and return the decoded JSON object.

    There is no retry: every failure mode (transport, timeout, HTTP status,
    body shape) surfaces as `TmdbClientError` so callers have one thing to catch.
    """

    headers = {
        "accept": "application/json",
        "user-agent": "unstreamed/0.1",
    }
    try:
        resp = session.get(url, params=params, headers=headers, timeout=timeout_seconds)
    except requests.RequestException as exc:
        raise TmdbClientError(f"TMDb request failed: {exc}") from exc

    if resp.status_code != 200:
        raise TmdbClientError(
            f"TMDb request failed with HTTP {resp.status_code}.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        )

    try:
        payload = resp.json()
    except ValueError as exc:
        raise TmdbClientError(
            "TMDb returned non-JSON response.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        ) from exc

    if not isinstance(payload, dict):
        raise TmdbClientError("TMDb returned unexpected JSON shape (not an object).")
    return payload


def search_movies(
    title: str,
    *,
    year: str | None = None,
    api_key: str | None = None,
    session: requests.Session | None = None,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> dict[str, Any]:
    """
    Search TMDb movies by title (and optional release year).

    Returns the full JSON object as returned by `/3/search/movie`; callers
    read the ranked `results` array.
    """

    api_key = _require_api_key(api_key)
    session = session or requests.Session()
    params: dict[str, Any] = {"query": title, "api_key": api_key}
    if year:
        params["year"] = year
    url = f"{TMDB_API_BASE_URL}/search/movie"
    return _request_json(session, url, params=params, timeout_seconds=timeout_seconds)


def fetch_movie_watch_providers(
    movie_id: int,
    *,
    api_key: str | None = None,
    session: requests.Session | None = None,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> dict[str, Any]:
    api_key = _require_api_key(api_key)
    session = session or requests.Session()
    url = f"{TMDB_API_BASE_URL}/movie/{int(movie_id)}/watch/providers"
    return _request_json(session, url, params={"api_key": api_key}, timeout_seconds=timeout_seconds)
