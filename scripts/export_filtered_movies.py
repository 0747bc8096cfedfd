#!/usr/bin/env python3
from __future__ import annotations

import argparse
import dataclasses
import logging
import sys

from unstreamed.config import ConfigError, Settings, load_settings
from unstreamed.ingestion.movie_filter import MovieFilterPipeline
from unstreamed.integrations.source import SourceLoadError, fetch_source_movies
from unstreamed.repositories.filtered_movies import write_filtered_movies
from unstreamed.utils.env import EnvFileError, load_env


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="export_filtered_movies",
        description="Export source movies that are not streaming on the configured services, then serve the file.",
    )
    parser.add_argument("--output", default=None, help="Output JSON path (default: OUTPUT_FILE or filteredMovies.json).")
    parser.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="Max movies looked up at once (default: FILTER_CONCURRENCY or 1).",
    )
    parser.add_argument("--port", type=int, default=None, help="Port for the static server (default: PORT or 5432).")
    parser.add_argument("--no-serve", action="store_true", help="Export the file and exit without serving it.")
    parser.add_argument("--env-file", default=None, help="Load variables from this dotenv file instead of ./.env.")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")
    return parser.parse_args(argv)


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    overrides: dict[str, object] = {}
    if args.output:
        overrides["output_path"] = args.output
    if args.concurrency is not None:
        if args.concurrency < 1:
            raise ConfigError(f"--concurrency must be >= 1 (got {args.concurrency}).")
        overrides["concurrency"] = args.concurrency
    if args.port is not None:
        overrides["port"] = args.port
    return dataclasses.replace(settings, **overrides) if overrides else settings


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        load_env(env_file=args.env_file)
        settings = _apply_overrides(load_settings(), args)
        raw_movies = fetch_source_movies(settings.source_url, timeout_seconds=settings.request_timeout_seconds)
    except (ConfigError, EnvFileError, SourceLoadError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    summary = MovieFilterPipeline(settings).run_with_summary(raw_movies)
    path = write_filtered_movies(summary.movies, settings.output_path)

    print(
        "FILTER summary "
        f"attempted={summary.attempted} "
        f"included={summary.included} "
        f"passthrough={summary.passthrough} "
        f"excluded={summary.excluded}"
    )
    print(f"Exported {len(summary.movies)} filtered movies to {path}")

    if args.no_serve:
        return 0

    from api.main import serve

    serve(settings)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
