"""
Domain models shared across scripts and services.
"""

from unstreamed.models.movies import (
    FilterSummary,
    MovieDecision,
    MovieOutcome,
    RawMovie,
    ResolvedIdentity,
    build_enriched_movie,
    clean_title,
)

__all__ = [
    "FilterSummary",
    "MovieDecision",
    "MovieOutcome",
    "RawMovie",
    "ResolvedIdentity",
    "build_enriched_movie",
    "clean_title",
]
