"""Demo window with a locale picker and one grouped amount field."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QGroupBox,
    QLabel,
    QLineEdit,
    QMainWindow,
    QVBoxLayout,
    QWidget,
)

from gui.grouped_number_edit import GroupedNumberEdit
from gui.styles import APP_STYLE
from logic.locale_profile import LocaleProfile, LocaleProfileError
from logic.settings_store import update_locale

logger = logging.getLogger(__name__)

DEMO_LOCALES: Sequence[str] = ("en_US", "de_DE", "fr_FR", "en_IN", "ru_RU", "de_CH")


class GroupedInputWindow(QMainWindow):
    """Single amount field formatted live for a selectable locale."""

    def __init__(
        self,
        profile: Optional[LocaleProfile] = None,
        rounding_correction: bool = False,
        persist_locale: bool = True,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Grouped number input")
        self.setStyleSheet(APP_STYLE)
        self._persist_locale = persist_locale

        profile = profile or LocaleProfile.default()

        central = QWidget(self)
        layout = QVBoxLayout(central)
        group = QGroupBox("Amount", central)
        form = QFormLayout(group)

        self.locale_combo = QComboBox(group)
        locales = list(DEMO_LOCALES)
        if profile.locale_name not in locales:
            locales.insert(0, profile.locale_name)
        self.locale_combo.addItems(locales)
        self.locale_combo.setCurrentText(profile.locale_name)
        form.addRow("Locale", self.locale_combo)

        self.amount_edit = QLineEdit(group)
        self.amount_edit.setObjectName("amountEdit")
        self.amount_edit.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        form.addRow("Value", self.amount_edit)

        self.value_label = QLabel("—", group)
        self.value_label.setObjectName("valueLabel")
        form.addRow("Parsed", self.value_label)

        layout.addWidget(group)
        layout.addStretch(1)
        self.setCentralWidget(central)

        self.grouped = GroupedNumberEdit(
            self.amount_edit,
            profile=profile,
            rounding_correction=rounding_correction,
        )
        self.grouped.valueChanged.connect(self._show_value)
        self.locale_combo.currentTextChanged.connect(self._on_locale_changed)

    def _show_value(self, value: Optional[float]) -> None:
        self.value_label.setText("—" if value is None else repr(value))

    def _on_locale_changed(self, name: str) -> None:
        try:
            profile = LocaleProfile.for_locale(name)
        except LocaleProfileError:
            logger.warning("Locale %s cannot be used for grouped input", name)
            return
        self.grouped.set_profile(profile)
        if self._persist_locale:
            try:
                update_locale(profile.locale_name)
            except OSError:
                logger.exception("Failed to store locale %s", profile.locale_name)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.grouped.detach()
        super().closeEvent(event)
