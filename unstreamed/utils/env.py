from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv


class EnvFileError(RuntimeError):
    pass


def _default_env_files() -> list[Path]:
    return [
        Path.cwd() / ".env",
        Path(__file__).resolve().parents[2] / ".env",
    ]


def load_env(*, env_file: str | Path | None = None, override: bool = False) -> Path | None:
    """
    Populate the process environment from a dotenv file before settings are read.

    An explicit `env_file` must exist. Otherwise the working directory's `.env`
    wins over the project checkout's; neither being present is fine, since the
    variables may already be exported.
    """

    if env_file is not None:
        path = Path(env_file)
        if not path.is_file():
            raise EnvFileError(f"Env file not found: {path}")
        load_dotenv(dotenv_path=path, override=override)
        return path

    for path in _default_env_files():
        if path.is_file():
            load_dotenv(dotenv_path=path, override=override)
            return path
    return None
