"""Entry point for the grouped number input demo."""

from __future__ import annotations

import argparse
import sys

from PySide6.QtWidgets import QApplication

from gui.main_window import GroupedInputWindow
from logic.locale_profile import LocaleProfile
from logic.logging_utils import enable_console_logging, setup_logging
from logic.settings_store import effective_settings


def _parse_cli_arguments(argv: list[str]) -> tuple[argparse.Namespace, list[str]]:
    """Extract arguments intended for this module and leave the rest for Qt.

    Parameters
    ----------
    argv:
        Raw command-line arguments.

    Returns
    -------
    tuple[argparse.Namespace, list[str]]
        The parsed options and the remaining arguments that should be passed
        to :class:`QApplication`.
    """

    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--locale", dest="locale", default=None)
    parser.add_argument(
        "--rounding-correction",
        dest="rounding_correction",
        action="store_true",
        default=None,
    )
    parser.add_argument("--console-log", dest="console_log", action="store_true")

    parsed, remaining = parser.parse_known_args(argv[1:])

    # Ensure Qt receives only the arguments that are relevant to it.
    qt_arguments = [argv[0], *remaining]
    return parsed, qt_arguments


def main() -> int:
    options, qt_arguments = _parse_cli_arguments(sys.argv)

    setup_logging()
    if options.console_log:
        enable_console_logging()

    settings = effective_settings(
        locale=options.locale, rounding_correction=options.rounding_correction
    )
    profile = LocaleProfile.default(settings["locale"])

    app = QApplication(qt_arguments)
    window = GroupedInputWindow(
        profile=profile,
        rounding_correction=settings["rounding_correction"],
    )
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
