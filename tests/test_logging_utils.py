from __future__ import annotations

import logging

import pytest

from logic import logging_utils


@pytest.fixture(autouse=True)
def clean_logging():
    logging_utils.reset_logging()
    yield
    logging_utils.reset_logging()


def test_setup_logging_writes_to_requested_directory(tmp_path):
    path = logging_utils.setup_logging(tmp_path)
    assert path == tmp_path / logging_utils.LOG_FILE_NAME
    logging.getLogger("logic.test").info("hello grouped input")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "hello grouped input" in path.read_text(encoding="utf-8")


def test_setup_logging_is_configured_once(tmp_path):
    first = logging_utils.setup_logging(tmp_path / "a")
    second = logging_utils.setup_logging(tmp_path / "b")
    assert first == second
    assert logging_utils.get_log_file_path() == first


def test_console_handler_added_once():
    assert logging_utils.enable_console_logging()
    assert logging_utils.enable_console_logging()
    marked = [
        handler
        for handler in logging.getLogger().handlers
        if getattr(handler, "__grouped_input_console_handler__", False)
    ]
    assert len(marked) == 1
