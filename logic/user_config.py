import os
import platform

APP_NAME = "GroupedInput"
APPDATA_ENV_VAR = "GROUPED_INPUT_HOME"


def _appdata_base() -> str:
    system = platform.system().lower()
    home = os.path.expanduser("~")
    if "windows" in system:
        base = os.environ.get("APPDATA") or os.path.join(home, "AppData", "Roaming")
        return base
    if "darwin" in system:  # macOS
        return os.path.join(home, "Library", "Application Support")
    # linux/other
    return os.path.join(home, ".config")


def get_appdata_dir() -> str:
    """Return the per-user directory for settings, creating it if needed."""
    override = os.environ.get(APPDATA_ENV_VAR)
    path = override or os.path.join(_appdata_base(), APP_NAME)
    os.makedirs(path, exist_ok=True)
    return path
