"""Logging configuration for grouped input applications."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from tempfile import gettempdir
from typing import Optional

_CONSOLE_HANDLER_MARK = "__grouped_input_console_handler__"
_FILE_HANDLER_MARK = "__grouped_input_file_handler__"

LOG_DIR_NAME = "logs"
LOG_FILE_NAME = "grouped_input.log"
ROTATING_MAX_BYTES = 1024 * 1024  # 1 MB
ROTATING_BACKUP_COUNT = 3
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

_configured = False
_log_path: Optional[Path] = None


def _candidate_log_directories() -> list[Path]:
    cwd_logs = Path.cwd() / LOG_DIR_NAME
    home_logs = Path.home() / ".grouped_input" / LOG_DIR_NAME
    temp_logs = Path(gettempdir()) / "grouped_input_logs"
    return [cwd_logs, home_logs, temp_logs]


def _ensure_log_directory(preferred: Optional[Path] = None) -> Path:
    candidates = [preferred] if preferred is not None else []
    candidates.extend(_candidate_log_directories())
    for directory in candidates:
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError:
            continue
        else:
            return directory
    return Path.cwd()


def enable_console_logging(level: int = logging.INFO) -> bool:
    """Stream log records to stderr; repeated calls add no extra handlers.

    Returns
    -------
    bool
        ``True`` when a console stream is available.
    """

    root_logger = logging.getLogger()

    for handler in root_logger.handlers:
        if getattr(handler, _CONSOLE_HANDLER_MARK, False):
            return True

    stream = sys.stderr if sys.stderr is not None else sys.stdout
    if stream is None:
        return False

    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    setattr(console_handler, _CONSOLE_HANDLER_MARK, True)
    root_logger.addHandler(console_handler)
    return True


def setup_logging(log_dir: Optional[Path] = None, level: int = logging.DEBUG) -> Path:
    """Attach a rotating file handler to the root logger.

    Returns
    -------
    Path
        Path to the active log file.
    """

    global _configured, _log_path

    if _configured and _log_path is not None:
        return _log_path

    directory = _ensure_log_directory(log_dir)
    log_path = directory / LOG_FILE_NAME

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Drop our own handlers from a previous configuration.
    for handler in list(root_logger.handlers):
        if getattr(handler, _FILE_HANDLER_MARK, False):
            root_logger.removeHandler(handler)
            handler.close()

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=ROTATING_MAX_BYTES,
        backupCount=ROTATING_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(file_handler, _FILE_HANDLER_MARK, True)
    root_logger.addHandler(file_handler)

    _configured = True
    _log_path = log_path

    root_logger.debug("Logging configured. Log file: %s", log_path)
    return log_path


def get_log_file_path() -> Path:
    """Return the active log file, configuring logging when necessary."""

    if not _configured or _log_path is None:
        return setup_logging()
    return _log_path


def reset_logging() -> None:
    """Remove handlers installed by this module."""

    global _configured, _log_path
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, _FILE_HANDLER_MARK, False) or getattr(
            handler, _CONSOLE_HANDLER_MARK, False
        ):
            root_logger.removeHandler(handler)
            handler.close()
    _configured = False
    _log_path = None
