from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, Mapping

EXPORT_FILE_MODE = 0o644


class FilteredMoviesStoreError(RuntimeError):
    pass


def write_filtered_movies(movies: Iterable[Mapping[str, Any]], path: str | Path) -> Path:
    """
    Write the filtered movie list as pretty-printed JSON.

    The file is replaced atomically so the static server never reads a half-written export.
    """

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    rows = [dict(m) for m in movies]
    body = json.dumps(rows, indent=2, ensure_ascii=False) + "\n"

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(body)
        os.chmod(tmp_name, EXPORT_FILE_MODE)
        os.replace(tmp_name, target)
    except OSError:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return target


def read_filtered_movies(path: str | Path) -> list[dict[str, Any]]:
    target = Path(path)
    try:
        payload = json.loads(target.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise FilteredMoviesStoreError(f"Unable to read filtered movies from {target}: {exc}") from exc
    if not isinstance(payload, list):
        raise FilteredMoviesStoreError(f"{target} does not contain a JSON array.")
    return [row for row in payload if isinstance(row, dict)]
