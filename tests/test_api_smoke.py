"""
Smoke tests for the static export server.

These tests serve a temporary directory; no network or real export is needed.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from api import main as api_main
from unstreamed.config import Settings
from unstreamed.repositories.filtered_movies import write_filtered_movies


@pytest.fixture
def export_dir(tmp_path: Path) -> Path:
    write_filtered_movies([{"title": "Inception", "id": 27205, "clean_title": "inception"}], tmp_path / "filteredMovies.json")
    (tmp_path / "index.html").write_text("<h1>Unstreamed</h1>", encoding="utf-8")
    (tmp_path / ".env").write_text("TMDB_API_KEY=secret-key\n", encoding="utf-8")
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "config").write_text("[core]\n", encoding="utf-8")
    return tmp_path


def test_serves_exported_file(export_dir: Path) -> None:
    with TestClient(api_main.create_app(export_dir)) as client:
        response = client.get("/filteredMovies.json")
    assert response.status_code == 200
    assert response.json() == [{"title": "Inception", "id": 27205, "clean_title": "inception"}]


def test_serves_adjacent_static_assets(export_dir: Path) -> None:
    with TestClient(api_main.create_app(export_dir)) as client:
        response = client.get("/index.html")
    assert response.status_code == 200
    assert "Unstreamed" in response.text


@pytest.mark.parametrize("path", ["/missing.json", "/docs", "/openapi.json", "/health", "/.env", "/.git/config", "/sub/../.env"])
def test_no_other_routes(export_dir: Path, path: str) -> None:
    with TestClient(api_main.create_app(export_dir)) as client:
        response = client.get(path)
    assert response.status_code == 404


def test_post_is_not_allowed(export_dir: Path) -> None:
    with TestClient(api_main.create_app(export_dir)) as client:
        response = client.post("/filteredMovies.json")
    assert response.status_code == 405


def test_static_dir_follows_output_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OUTPUT_FILE", str(tmp_path / "exports" / "movies.json"))
    assert api_main.get_static_dir() == (tmp_path / "exports").resolve()


def test_serve_runs_uvicorn_on_configured_port(export_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import uvicorn

    run_mock = MagicMock()
    monkeypatch.setattr(uvicorn, "run", run_mock)
    settings = Settings(
        tmdb_api_key="fake",
        source_url="http://source.invalid/movies.json",
        country="US",
        streaming_services=("netflix",),
        output_path=str(export_dir / "filteredMovies.json"),
        port=5999,
    )

    api_main.serve(settings)

    app = run_mock.call_args.args[0]
    assert app.state.static_dir == export_dir.resolve()
    assert run_mock.call_args.kwargs["port"] == 5999


def test_dotfiles_are_never_served(export_dir: Path) -> None:
    with TestClient(api_main.create_app(export_dir)) as client:
        response = client.get("/.env")
    assert response.status_code == 404
    assert "secret-key" not in response.text
