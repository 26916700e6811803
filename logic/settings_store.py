"""Persistent storage for the user's grouped input preferences."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .env_loader import load_application_env
from .locale_profile import LOCALE_ENV_VAR
from .user_config import get_appdata_dir

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"
ROUNDING_CORRECTION_ENV_VAR = "GROUPED_INPUT_ROUNDING_CORRECTION"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _settings_path() -> Path:
    """Return absolute path to the user settings JSON file."""

    path = Path(get_appdata_dir()) / SETTINGS_FILENAME
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _load_raw() -> Dict[str, Any]:
    path = _settings_path()
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        if isinstance(data, dict):
            return data
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
    return {}


def _normalize_locale(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    cleaned = value.strip().replace("-", "_")
    return cleaned or None


def _normalize_flag(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    return default


def load_settings() -> Dict[str, Any]:
    """Return sanitized dictionary with all user settings."""

    raw = _load_raw()
    return {
        "locale": _normalize_locale(raw.get("locale")),
        "rounding_correction": _normalize_flag(raw.get("rounding_correction")),
    }


def save_settings(settings: Dict[str, Any]) -> None:
    """Persist *settings* to disk after validation."""

    validated = {
        "locale": _normalize_locale(settings.get("locale")),
        "rounding_correction": _normalize_flag(settings.get("rounding_correction")),
    }
    path = _settings_path()
    with path.open("w", encoding="utf-8") as fh:
        json.dump(validated, fh, ensure_ascii=False, indent=2)


def update_locale(locale_name: Optional[str]) -> None:
    settings = load_settings()
    settings["locale"] = locale_name
    save_settings(settings)


def effective_settings(
    locale: Optional[str] = None, rounding_correction: Optional[bool] = None
) -> Dict[str, Any]:
    """Merge explicit values, environment variables and the settings file.

    Explicit arguments win over the environment (``.env`` files included),
    which in turn wins over the stored settings.
    """

    load_application_env()
    settings = load_settings()

    env_locale = _normalize_locale(os.getenv(LOCALE_ENV_VAR))
    if env_locale:
        settings["locale"] = env_locale
    env_flag = os.getenv(ROUNDING_CORRECTION_ENV_VAR)
    if env_flag is not None:
        settings["rounding_correction"] = _normalize_flag(
            env_flag, settings["rounding_correction"]
        )

    if locale:
        settings["locale"] = _normalize_locale(locale)
    if rounding_correction is not None:
        settings["rounding_correction"] = bool(rounding_correction)
    return settings
