"""PySide6 widgets for grouped number input."""

from .grouped_number_edit import GroupedNumberEdit, QLineEditHost, attach_grouped_input

__all__ = ["GroupedNumberEdit", "QLineEditHost", "attach_grouped_input"]
