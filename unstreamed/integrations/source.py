from __future__ import annotations

import logging
from typing import Mapping

import requests

from unstreamed.models.movies import RawMovie

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class SourceLoadError(RuntimeError):
    pass


def fetch_source_movies(
    url: str,
    *,
    session: requests.Session | None = None,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> list[RawMovie]:
    """
    Fetch the raw movie list (a JSON array of objects with `title` and optional `release_year`).

    Failing to read the list is fatal for the run and raised as `SourceLoadError`.
    Objects without a usable title are kept and passed through unchanged.
    """

    session = session or requests.Session()
    try:
        resp = session.get(url, headers={"accept": "application/json"}, timeout=timeout_seconds)
    except requests.RequestException as exc:
        raise SourceLoadError(f"Source request failed: {exc}") from exc

    if resp.status_code != 200:
        raise SourceLoadError(f"Source request failed with HTTP {resp.status_code}.")

    try:
        payload = resp.json()
    except ValueError as exc:
        raise SourceLoadError("Source returned non-JSON response.") from exc

    if not isinstance(payload, list):
        raise SourceLoadError("Source returned unexpected JSON shape (not an array).")

    movies: list[RawMovie] = []
    for position, item in enumerate(payload):
        if not isinstance(item, Mapping):
            raise SourceLoadError(f"Source entry #{position} is not an object (got {type(item).__name__}).")
        try:
            movies.append(RawMovie.from_payload(item))
        except ValueError as exc:
            logger.warning("Source entry #%d kept unchanged without lookup: %s", position, exc)
            movies.append(RawMovie.untitled(item))

    logger.info("Loaded %d movies from %s", len(movies), url)
    return movies
