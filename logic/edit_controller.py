"""Coordinate one edit cycle of a grouped number field.

The controller sits between a host text widget and the application.  The host
reports each edit in two steps (before and after the text changes); the
controller reformats the new text, restores the cursor next to the same digit
and reports the parsed value through ``on_changed``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from .cursor_tracker import CursorTracker, EditDelta
from .format_engine import FormatEngine, FormattedResult
from .locale_profile import LocaleProfile

logger = logging.getLogger(__name__)

__all__ = ["EditController", "EditOutcome", "TextFieldHost"]

ValueCallback = Callable[[Optional[float]], None]


class TextFieldHost(Protocol):
    """Minimal interface of the widget a controller writes back to."""

    def set_text(self, text: str) -> None: ...

    def set_cursor(self, offset: int) -> None: ...


@dataclass(frozen=True)
class EditOutcome:
    """Result of an edit cycle as applied to the host."""

    display_text: str
    cursor_offset: Optional[int]
    value: Optional[float]


class EditController:
    """Reformat a live text field after every single-character edit."""

    def __init__(
        self,
        profile: LocaleProfile,
        on_changed: Optional[ValueCallback] = None,
        host: Optional[TextFieldHost] = None,
        rounding_correction: bool = False,
    ) -> None:
        self.engine = FormatEngine(profile)
        self.tracker = CursorTracker(profile.grouping_separator, rounding_correction)
        self._on_changed = on_changed
        self._host = host
        self._detached = False
        self._self_write = False

    @property
    def profile(self) -> LocaleProfile:
        return self.engine.profile

    @property
    def host(self) -> Optional[TextFieldHost]:
        return self._host

    @property
    def is_attached(self) -> bool:
        return not self._detached

    @property
    def is_writing(self) -> bool:
        """``True`` while the controller writes its own text to the host."""
        return self._self_write

    def set_profile(self, profile: LocaleProfile) -> None:
        """Switch to another locale; any pending anchor is dropped."""
        self.engine = FormatEngine(profile)
        self.tracker = CursorTracker(
            profile.grouping_separator, self.tracker.rounding_correction
        )

    def on_before_edit(self, delta: EditDelta) -> Optional[int]:
        """Record the digit anchor of an edit that is about to be applied."""

        if self._detached or self._self_write:
            return None
        anchor = self.tracker.compute_anchor(delta)
        logger.debug(
            "Edit at %d (-%d/+%d) in %r, anchor=%s",
            delta.start,
            delta.removed,
            delta.inserted,
            delta.text_before_edit,
            anchor,
        )
        return anchor

    def on_after_edit(self, new_raw_text: str) -> Optional[EditOutcome]:
        """Reformat *new_raw_text*, write it back and report the value.

        Returns ``None`` when the notification was ignored because the
        controller is detached or the text change is its own write.
        """

        if self._detached or self._self_write:
            return None

        if not new_raw_text:
            self.tracker.reset()
            outcome = EditOutcome("", None, None)
            self._apply(outcome)
            self._notify(None)
            return outcome

        result: FormattedResult = self.engine.reformat(new_raw_text)
        length_delta = self.engine.rounding_delta(new_raw_text, result.text)
        offset = self.tracker.resolve_offset(result.text, length_delta)
        outcome = EditOutcome(result.text, offset, result.value)
        logger.debug(
            "Reformatted %r as %r, cursor=%s, value=%s",
            new_raw_text,
            result.text,
            offset,
            result.value,
        )
        self._apply(outcome)
        self._notify(result.value)
        return outcome

    def display_value(self, value: Optional[float]) -> str:
        """Show *value* in the host without running an edit cycle.

        ``on_changed`` is not invoked; the cursor is left where the host puts
        it after the write.
        """

        text = self.engine.format_value(value)
        if self._detached:
            return text
        self.tracker.reset()
        self._apply(EditOutcome(text, None, value))
        return text

    def _apply(self, outcome: EditOutcome) -> None:
        host = self._host
        if host is None:
            return
        self._self_write = True
        try:
            host.set_text(outcome.display_text)
            if outcome.cursor_offset is not None:
                host.set_cursor(outcome.cursor_offset)
        except Exception:
            logger.exception("Failed to write %r back to the field", outcome.display_text)
        finally:
            self._self_write = False

    def _notify(self, value: Optional[float]) -> None:
        if self._on_changed is not None:
            self._on_changed(value)

    def detach(self) -> None:
        """Release the host and ignore all further notifications."""

        if self._detached:
            return
        self._detached = True
        self._host = None
        self._on_changed = None
        self.tracker.reset()
        logger.debug("Edit controller detached")
