"""Locale-aware live number formatting with cursor tracking."""

from .cursor_tracker import CursorTracker, EditDelta, TrackerState
from .edit_controller import EditController, EditOutcome, TextFieldHost
from .format_engine import FormatEngine, FormattedResult
from .locale_profile import LocaleProfile, LocaleProfileError

__all__ = [
    "CursorTracker",
    "EditController",
    "EditDelta",
    "EditOutcome",
    "FormatEngine",
    "FormattedResult",
    "LocaleProfile",
    "LocaleProfileError",
    "TextFieldHost",
    "TrackerState",
]
