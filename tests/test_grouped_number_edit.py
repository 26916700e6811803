import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

QtWidgets = pytest.importorskip("PySide6.QtWidgets", exc_type=ImportError)
QApplication = QtWidgets.QApplication
QLineEdit = QtWidgets.QLineEdit

from gui.grouped_number_edit import GroupedNumberEdit, attach_grouped_input
from logic.locale_profile import LocaleProfile


@pytest.fixture(scope="module")
def qt_app():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def line_edit(qt_app):
    widget = QLineEdit()
    yield widget
    widget.deleteLater()


@pytest.fixture
def grouped(line_edit):
    values = []
    grouped = attach_grouped_input(
        line_edit, on_changed=values.append, profile=LocaleProfile.for_locale("en_US")
    )
    grouped.values = values
    yield grouped
    grouped.detach()


def test_typing_groups_digits(grouped, line_edit):
    emitted = []
    grouped.valueChanged.connect(emitted.append)
    for char in "1234":
        line_edit.insert(char)
    assert line_edit.text() == "1,234"
    assert line_edit.cursorPosition() == 5
    assert grouped.values == [1.0, 12.0, 123.0, 1234.0]
    assert emitted == grouped.values
    assert grouped.value() == 1234.0


def test_interior_insert_keeps_cursor(grouped, line_edit):
    for char in "1234":
        line_edit.insert(char)
    line_edit.setCursorPosition(2)
    line_edit.insert("9")
    assert line_edit.text() == "19,234"
    assert line_edit.cursorPosition() == 2


def test_backspace_regroups(grouped, line_edit):
    for char in "12345":
        line_edit.insert(char)
    assert line_edit.text() == "12,345"
    line_edit.backspace()
    assert line_edit.text() == "1,234"
    assert line_edit.cursorPosition() == 5
    assert grouped.value() == 1234.0


def test_decimal_fraction(grouped, line_edit):
    for char in "123.":
        line_edit.insert(char)
    assert line_edit.text() == "123."
    line_edit.insert("5")
    assert line_edit.text() == "123.5"
    assert grouped.value() == 123.5


def test_clear_reports_none(grouped, line_edit):
    line_edit.insert("5")
    line_edit.clear()
    assert line_edit.text() == ""
    assert grouped.values[-1] is None
    assert grouped.value() is None


def test_set_value_and_profile(grouped, line_edit):
    grouped.set_value(1234.5)
    assert line_edit.text() == "1,234.5"
    assert grouped.values == []
    grouped.set_profile(LocaleProfile.for_locale("de_DE"))
    assert line_edit.text() == "1.234,5"
    assert grouped.profile.locale_name == "de_DE"


def test_detach_stops_formatting(grouped, line_edit):
    grouped.detach()
    grouped.detach()
    line_edit.setText("1234")
    assert line_edit.text() == "1234"
    assert grouped.line_edit is None
    assert not grouped.controller.is_attached


def test_initial_text_is_formatted(qt_app):
    widget = QLineEdit("1234567")
    try:
        grouped = GroupedNumberEdit(widget, profile=LocaleProfile.for_locale("en_US"))
        assert widget.text() == "1,234,567"
        assert grouped.value() == 1234567.0
        grouped.detach()
    finally:
        widget.deleteLater()


def test_demo_window_switches_locale(qt_app):
    from gui.main_window import GroupedInputWindow

    window = GroupedInputWindow(
        profile=LocaleProfile.for_locale("en_US"), persist_locale=False
    )
    try:
        window.amount_edit.insert("1")
        window.amount_edit.insert("2")
        window.amount_edit.insert("3")
        window.amount_edit.insert("4")
        assert window.amount_edit.text() == "1,234"
        assert window.value_label.text() == "1234.0"
        window.locale_combo.setCurrentText("de_DE")
        assert window.amount_edit.text() == "1.234"
        assert window.grouped.profile.decimal_marker == ","
    finally:
        window.grouped.detach()
        window.deleteLater()


def test_window_without_profile_uses_stored_locale(qt_app, monkeypatch, tmp_path):
    from gui.main_window import GroupedInputWindow
    from logic import env_loader
    from logic.settings_store import update_locale

    monkeypatch.setenv("GROUPED_INPUT_HOME", str(tmp_path / "home"))
    monkeypatch.setenv("GROUPED_INPUT_DOTENV_DIR", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GROUPED_INPUT_LOCALE", raising=False)
    env_loader.reset_env_cache()
    update_locale("de_DE")

    window = GroupedInputWindow(persist_locale=False)
    try:
        assert window.grouped.profile.locale_name == "de_DE"
        assert window.locale_combo.currentText() == "de_DE"
    finally:
        window.grouped.detach()
        window.deleteLater()
        env_loader.reset_env_cache()
