"""Reformat raw field text into grouped, locale-correct numbers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .locale_profile import LocaleProfile

__all__ = ["FormatEngine", "FormattedResult"]


@dataclass(frozen=True)
class FormattedResult:
    """Display text of a field and the value it represents.

    ``value`` is ``None`` for an empty field, which is distinct from ``0.0``.
    """

    text: str
    value: Optional[float]

    @property
    def is_empty(self) -> bool:
        return self.value is None


class FormatEngine:
    """Strip, parse and regroup field text for one :class:`LocaleProfile`."""

    def __init__(self, profile: LocaleProfile) -> None:
        self.profile = profile

    @property
    def grouping_separator(self) -> str:
        return self.profile.grouping_separator

    @property
    def decimal_marker(self) -> str:
        return self.profile.decimal_marker

    def strip_grouping(self, text: str) -> str:
        """Remove every grouping separator from *text*."""
        return text.replace(self.grouping_separator, "")

    def count_significant(self, text: str) -> int:
        """Return the number of characters in *text* that are not separators."""
        return len(text) - text.count(self.grouping_separator)

    def sticky_suffix(self, raw_text: str) -> str:
        """Return the half-typed fraction the formatter would otherwise drop.

        A trailing decimal marker and a marker followed by a single ``0`` are
        kept verbatim while the user is still typing the fraction.
        """

        marker = self.decimal_marker
        trailing_zero = f"{marker}0"
        if raw_text.endswith(trailing_zero):
            return trailing_zero
        if raw_text.endswith(marker):
            return marker
        return ""

    def format_value(self, value: Optional[float]) -> str:
        """Render *value* for display; ``None`` renders as an empty field."""
        if value is None:
            return ""
        return self.profile.format(value)

    def reformat(self, raw_text: str) -> FormattedResult:
        """Regroup *raw_text* and parse its value."""

        if not raw_text:
            return FormattedResult("", None)

        digits_only = self.strip_grouping(raw_text)
        value = self.profile.parse(digits_only)
        formatted = self.profile.format(value) + self.sticky_suffix(raw_text)
        return FormattedResult(formatted, value)

    def rounding_delta(self, raw_text: str, formatted_text: str) -> int:
        """Return how many significant characters formatting dropped.

        The sticky suffix is excluded from *formatted_text* before counting, so
        the result reflects only what the number formatter itself changed.
        """

        suffix = self.sticky_suffix(raw_text)
        if suffix and formatted_text.endswith(suffix):
            formatted_text = formatted_text[: -len(suffix)]
        return self.count_significant(raw_text) - self.count_significant(formatted_text)
