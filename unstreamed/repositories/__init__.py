"""
Persistence for the exported movie list.
"""

from unstreamed.repositories.filtered_movies import (
    FilteredMoviesStoreError,
    read_filtered_movies,
    write_filtered_movies,
)

__all__ = [
    "FilteredMoviesStoreError",
    "read_filtered_movies",
    "write_filtered_movies",
]
