from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

import requests

from unstreamed.config import Settings
from unstreamed.integrations.tmdb.client import TmdbClientError, fetch_movie_watch_providers

logger = logging.getLogger(__name__)


def pick_available_services(
    payload: Mapping[str, Any],
    *,
    region: str,
    services: Iterable[str],
) -> frozenset[str]:
    """
    Return the configured services offering the title by subscription (`flatrate`) in `region`.

    A missing region, or a region without a `flatrate` list, yields an empty set.
    """

    wanted = {s.strip().lower() for s in services if isinstance(s, str) and s.strip()}
    results = payload.get("results")
    if not isinstance(results, Mapping):
        return frozenset()
    region_block = results.get(region)
    if not isinstance(region_block, Mapping):
        return frozenset()

    flatrate = region_block.get("flatrate")
    if not isinstance(flatrate, list):
        return frozenset()

    available: set[str] = set()
    for item in flatrate:
        if not isinstance(item, Mapping):
            continue
        name = item.get("provider_name")
        if not isinstance(name, str):
            continue
        normalized = name.strip().lower()
        if normalized in wanted:
            available.add(normalized)
    return frozenset(available)


class AvailabilityChecker:
    def __init__(self, settings: Settings, *, session: requests.Session | None = None) -> None:
        self._api_key = settings.tmdb_api_key
        self._timeout_seconds = settings.request_timeout_seconds
        self._region = settings.country
        self._services = tuple(settings.streaming_services)
        self._session = session

    def availability(self, movie_id: int) -> frozenset[str]:
        """
        Configured services that currently stream `movie_id` in the configured region.

        Never raises for lookup failures: an unreachable provider endpoint
        counts as "not available" so the movie is kept.
        """

        try:
            payload = fetch_movie_watch_providers(
                movie_id,
                api_key=self._api_key,
                session=self._session,
                timeout_seconds=self._timeout_seconds,
            )
        except (TmdbClientError, requests.RequestException) as exc:
            logger.warning("Error fetching streaming availability for ID %s: %s", movie_id, exc)
            return frozenset()
        return pick_available_services(payload, region=self._region, services=self._services)
