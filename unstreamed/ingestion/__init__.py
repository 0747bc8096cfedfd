"""
Enrichment and filtering of the source movie list.
"""

from unstreamed.ingestion.availability import AvailabilityChecker, pick_available_services
from unstreamed.ingestion.identity import IdentityResolver, parse_identity_from_search
from unstreamed.ingestion.movie_filter import MovieFilterPipeline, filter_movies, filter_one_movie

__all__ = [
    "AvailabilityChecker",
    "IdentityResolver",
    "MovieFilterPipeline",
    "filter_movies",
    "filter_one_movie",
    "parse_identity_from_search",
    "pick_available_services",
]
