"""Load grouped input configuration from ``.env`` files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional

from dotenv import load_dotenv

_ENV_FILENAME = ".env"
DOTENV_DIR_ENV_VAR = "GROUPED_INPUT_DOTENV_DIR"
_loaded_path: Optional[Path] = None
_attempted = False


def _candidate_directories() -> Iterable[Path]:
    """Yield directories that may contain the ``.env`` file."""

    custom_dir = os.getenv(DOTENV_DIR_ENV_VAR)
    if custom_dir:
        yield Path(custom_dir)

    yield Path.cwd()

    # When running from source, the repository root is one level above this file.
    yield Path(__file__).resolve().parent.parent


def load_application_env(force: bool = False) -> Optional[Path]:
    """Load the first ``.env`` file found; existing variables are kept.

    The lookup runs once per process unless *force* is set.
    """

    global _loaded_path, _attempted

    if _attempted and not force:
        return _loaded_path
    _attempted = True

    tried: set[Path] = set()
    for directory in _candidate_directories():
        path = Path(directory) / _ENV_FILENAME
        if path in tried:
            continue
        tried.add(path)
        if path.is_file():
            load_dotenv(dotenv_path=path, override=False)
            _loaded_path = path
            return path

    _loaded_path = None
    return None


def reset_env_cache() -> None:
    global _loaded_path, _attempted
    _loaded_path = None
    _attempted = False


__all__ = ["DOTENV_DIR_ENV_VAR", "load_application_env", "reset_env_cache"]
