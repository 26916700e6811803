"""Live thousands grouping for ``QLineEdit`` widgets."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QLineEdit

from logic.cursor_tracker import EditDelta
from logic.edit_controller import EditController
from logic.locale_profile import LocaleProfile

logger = logging.getLogger(__name__)

__all__ = ["GroupedNumberEdit", "QLineEditHost", "attach_grouped_input"]


class QLineEditHost:
    """Adapt a ``QLineEdit`` to the host interface of :class:`EditController`."""

    def __init__(self, line_edit: QLineEdit) -> None:
        self._line_edit = line_edit

    def set_text(self, text: str) -> None:
        self._line_edit.setText(text)

    def set_cursor(self, offset: int) -> None:
        self._line_edit.setCursorPosition(offset)


class GroupedNumberEdit(QObject):
    """Regroup the digits of a line edit on every keystroke.

    ``QLineEdit`` has no notification before its text changes, so each edit
    is reconstructed from the previously formatted text, the new text and
    the cursor position Qt reports after the change.
    """

    valueChanged = Signal(object)

    def __init__(
        self,
        line_edit: QLineEdit,
        profile: Optional[LocaleProfile] = None,
        on_changed: Optional[Callable[[Optional[float]], None]] = None,
        rounding_correction: bool = False,
    ) -> None:
        super().__init__(line_edit)
        self._line_edit: Optional[QLineEdit] = line_edit
        self._callback = on_changed
        self._value: Optional[float] = None
        self._controller = EditController(
            profile or LocaleProfile.default(),
            on_changed=self._emit_value,
            host=QLineEditHost(line_edit),
            rounding_correction=rounding_correction,
        )
        self._snapshot = ""
        line_edit.textChanged.connect(self._on_text_changed)

        initial = line_edit.text()
        if initial:
            # No edit to anchor to; Qt leaves the cursor at the end.
            self._controller.on_after_edit(initial)
            self._snapshot = line_edit.text()

    @property
    def controller(self) -> EditController:
        return self._controller

    @property
    def profile(self) -> LocaleProfile:
        return self._controller.profile

    @property
    def line_edit(self) -> Optional[QLineEdit]:
        return self._line_edit

    def value(self) -> Optional[float]:
        return self._value

    def _emit_value(self, value: Optional[float]) -> None:
        self._value = value
        self.valueChanged.emit(value)
        if self._callback is not None:
            self._callback(value)

    def _on_text_changed(self, text: str) -> None:
        line_edit = self._line_edit
        if line_edit is None or self._controller.is_writing:
            return
        delta = EditDelta.from_texts(self._snapshot, text, line_edit.cursorPosition())
        self._controller.on_before_edit(delta)
        self._controller.on_after_edit(text)
        self._snapshot = line_edit.text()

    def set_value(self, value: Optional[float]) -> None:
        """Display *value* formatted for the current locale."""

        if self._line_edit is None:
            return
        self._controller.display_value(value)
        self._snapshot = self._line_edit.text()
        self._value = value

    def set_profile(self, profile: LocaleProfile) -> None:
        """Switch locale and show the current value in the new format."""

        if self._line_edit is None:
            return
        logger.info("Switching grouped input to locale %s", profile.locale_name)
        self._controller.set_profile(profile)
        self.set_value(self._value)

    def detach(self) -> None:
        """Stop formatting the line edit; safe to call more than once."""

        line_edit = self._line_edit
        if line_edit is None:
            return
        self._line_edit = None
        try:
            line_edit.textChanged.disconnect(self._on_text_changed)
        except (RuntimeError, TypeError):
            logger.debug("textChanged was already disconnected")
        self._controller.detach()
        self._callback = None


def attach_grouped_input(
    line_edit: QLineEdit,
    on_changed: Optional[Callable[[Optional[float]], None]] = None,
    profile: Optional[LocaleProfile] = None,
    rounding_correction: bool = False,
) -> GroupedNumberEdit:
    """Start live grouping on *line_edit* and return the controlling object."""

    return GroupedNumberEdit(
        line_edit,
        profile=profile,
        on_changed=on_changed,
        rounding_correction=rounding_correction,
    )
