"""
Unstreamed static API - FastAPI application.

Serves the exported movie list (and the static assets next to it) over plain HTTP.
There are no other routes and no authentication.
"""
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from unstreamed.config import DEFAULT_OUTPUT_FILE, Settings

logger = logging.getLogger(__name__)


def get_static_dir() -> Path:
    """
    Directory served at `/`: the one holding the exported file.
    Set OUTPUT_FILE to move it; relative paths resolve against the working directory.
    """
    output_file = (os.getenv("OUTPUT_FILE") or "").strip() or DEFAULT_OUTPUT_FILE
    return Path(output_file).resolve().parent


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    logger.info("Serving static files from %s", app.state.static_dir)
    yield
    logger.info("Shutting down static server...")


class PublicStaticFiles(StaticFiles):
    """Static files minus dotfiles and dot-directories (`.env`, `.git`, ...)."""

    def lookup_path(self, path: str):
        if any(part.startswith(".") and part not in (".", "..") for part in Path(path).parts):
            return "", None
        return super().lookup_path(path)


def create_app(static_dir: str | Path | None = None) -> FastAPI:
    directory = Path(static_dir) if static_dir is not None else get_static_dir()
    app = FastAPI(
        title="Unstreamed",
        description="Movies that are not streaming on the configured services",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.static_dir = directory
    app.mount("/", PublicStaticFiles(directory=str(directory)), name="static")
    return app


def serve(settings: Settings) -> None:
    """Block serving the export directory on `settings.port`."""
    import uvicorn

    output_path = Path(settings.output_path)
    app = create_app(output_path.resolve().parent)
    logger.info("Server running at http://localhost:%s/%s", settings.port, output_path.name)
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level="info")


app = create_app()
