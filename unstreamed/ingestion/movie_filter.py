from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, Protocol, Sequence

import requests

from unstreamed.config import Settings
from unstreamed.ingestion.availability import AvailabilityChecker
from unstreamed.ingestion.identity import IdentityResolver
from unstreamed.models.movies import (
    FilterSummary,
    MovieDecision,
    MovieOutcome,
    RawMovie,
    ResolvedIdentity,
    build_enriched_movie,
)

logger = logging.getLogger(__name__)


class Resolver(Protocol):
    def resolve(self, title: str, year: str | None = None) -> ResolvedIdentity | None: ...


class Checker(Protocol):
    def availability(self, movie_id: int) -> frozenset[str]: ...


def filter_one_movie(raw: RawMovie, *, resolver: Resolver, checker: Checker, index: int = 0) -> MovieOutcome:
    if not raw.has_title:
        return MovieOutcome(index=index, raw=raw, decision=MovieDecision.NOT_FOUND, record=raw.to_payload())

    identity = resolver.resolve(raw.title, raw.release_year)
    if identity is None:
        logger.debug("No TMDb match for %r; keeping source record", raw.title)
        return MovieOutcome(index=index, raw=raw, decision=MovieDecision.NOT_FOUND, record=raw.to_payload())

    available = checker.availability(identity.id)
    if available:
        logger.debug("Excluding %r (id=%s): streaming on %s", raw.title, identity.id, ", ".join(sorted(available)))
        return MovieOutcome(
            index=index,
            raw=raw,
            decision=MovieDecision.EXCLUDED,
            identity=identity,
            available=available,
        )

    return MovieOutcome(
        index=index,
        raw=raw,
        decision=MovieDecision.INCLUDED,
        record=build_enriched_movie(raw, identity),
        identity=identity,
    )


def _summarize(outcomes: list[MovieOutcome]) -> FilterSummary:
    counts = {decision: 0 for decision in MovieDecision}
    for outcome in outcomes:
        counts[outcome.decision] += 1
    return FilterSummary(
        attempted=len(outcomes),
        included=counts[MovieDecision.INCLUDED],
        passthrough=counts[MovieDecision.NOT_FOUND],
        excluded=counts[MovieDecision.EXCLUDED],
        outcomes=outcomes,
    )


def filter_movies(
    raw_movies: Iterable[RawMovie],
    *,
    resolver: Resolver,
    checker: Checker,
    concurrency: int = 1,
) -> FilterSummary:
    """
    Keep the movies that are not streaming on any configured service.

    Movies without a TMDb match are kept unchanged, matched movies with no
    configured service are kept enriched, the rest are dropped. With
    `concurrency > 1`, at most that many movies are looked up at once and the
    outcomes are re-ordered by input position before returning.
    """

    if concurrency < 1:
        raise ValueError(f"concurrency must be >= 1 (got {concurrency}).")

    movies = list(raw_movies)
    if concurrency == 1 or len(movies) <= 1:
        outcomes = [
            filter_one_movie(raw, resolver=resolver, checker=checker, index=index)
            for index, raw in enumerate(movies)
        ]
        return _summarize(outcomes)

    outcomes = []
    with ThreadPoolExecutor(max_workers=concurrency) as pool:
        futures = [
            pool.submit(filter_one_movie, raw, resolver=resolver, checker=checker, index=index)
            for index, raw in enumerate(movies)
        ]
        for fut in futures:
            outcomes.append(fut.result())
    outcomes.sort(key=lambda o: o.index)
    return _summarize(outcomes)


class MovieFilterPipeline:
    """Resolver + checker wired from a single `Settings` snapshot."""

    def __init__(
        self,
        settings: Settings,
        *,
        session: requests.Session | None = None,
        resolver: Resolver | None = None,
        checker: Checker | None = None,
    ) -> None:
        self.settings = settings
        self.resolver = resolver or IdentityResolver(settings, session=session)
        self.checker = checker or AvailabilityChecker(settings, session=session)

    def run_with_summary(self, raw_movies: Sequence[RawMovie], *, concurrency: int | None = None) -> FilterSummary:
        return filter_movies(
            raw_movies,
            resolver=self.resolver,
            checker=self.checker,
            concurrency=concurrency if concurrency is not None else self.settings.concurrency,
        )

    def run(self, raw_movies: Sequence[RawMovie]) -> list[dict[str, Any]]:
        return self.run_with_summary(raw_movies).movies
