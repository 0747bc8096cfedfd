from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_OUTPUT_FILE = "filteredMovies.json"
DEFAULT_PORT = 5432
DEFAULT_TIMEOUT_SECONDS = 20.0
DEFAULT_CONCURRENCY = 1

REQUIRED_ENV_VARS = ("TMDB_API_KEY", "SOURCE_URL", "COUNTRY", "STREAMING_SERVICES")


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class Settings:
    """
    Process-wide configuration snapshot, built once at startup.

    `country` is upper-cased (TMDb region keys are `US`, `GB`, ...) and
    `streaming_services` is lower-cased so lookups can compare directly.
    """

    tmdb_api_key: str
    source_url: str
    country: str
    streaming_services: tuple[str, ...]
    output_path: str = DEFAULT_OUTPUT_FILE
    port: int = DEFAULT_PORT
    request_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    concurrency: int = DEFAULT_CONCURRENCY


def parse_streaming_services(value: str | None) -> tuple[str, ...]:
    out: list[str] = []
    for raw in (value or "").split(","):
        name = raw.strip().lower()
        if name and name not in out:
            out.append(name)
    return tuple(out)


def _env_str(environ: Mapping[str, str], name: str) -> str:
    return (environ.get(name) or "").strip()


def _env_int(environ: Mapping[str, str], name: str, default: int, *, minimum: int) -> int:
    raw = _env_str(environ, name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer (got {raw!r}).") from exc
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum} (got {value}).")
    return value


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = _env_str(environ, name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number (got {raw!r}).") from exc
    if value <= 0:
        raise ConfigError(f"{name} must be positive (got {value}).")
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build `Settings` from the process environment (or an explicit mapping).

    Raises `ConfigError` naming every missing required variable.
    """

    env = os.environ if environ is None else environ

    missing = [name for name in REQUIRED_ENV_VARS if not _env_str(env, name)]
    if missing:
        raise ConfigError(f"Missing required configuration: {', '.join(missing)}.")

    services = parse_streaming_services(env.get("STREAMING_SERVICES"))
    if not services:
        raise ConfigError("STREAMING_SERVICES must list at least one service name.")

    return Settings(
        tmdb_api_key=_env_str(env, "TMDB_API_KEY"),
        source_url=_env_str(env, "SOURCE_URL"),
        country=_env_str(env, "COUNTRY").upper(),
        streaming_services=services,
        output_path=_env_str(env, "OUTPUT_FILE") or DEFAULT_OUTPUT_FILE,
        port=_env_int(env, "PORT", DEFAULT_PORT, minimum=1),
        request_timeout_seconds=_env_float(env, "TMDB_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        concurrency=_env_int(env, "FILTER_CONCURRENCY", DEFAULT_CONCURRENCY, minimum=1),
    )
