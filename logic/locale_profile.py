"""Locale-specific symbols and number conversion for grouped input fields.

A :class:`LocaleProfile` bundles the grouping separator and decimal marker of a
single locale together with the formatting and parsing rules derived from
Babel's CLDR data.  Profiles are immutable; a new one is resolved whenever the
active locale changes.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from functools import lru_cache
from typing import Optional, Union

from babel import Locale, UnknownLocaleError, default_locale
from babel.numbers import (
    NumberFormatError,
    format_decimal,
    get_decimal_symbol,
    get_group_symbol,
    parse_decimal,
)

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_LOCALE",
    "LOCALE_ENV_VAR",
    "MAX_FRACTION_DIGITS",
    "LocaleProfile",
    "LocaleProfileError",
    "resolve_locale_name",
]

NumberLike = Union[int, float, Decimal]

DEFAULT_LOCALE = "en_US"
LOCALE_ENV_VAR = "GROUPED_INPUT_LOCALE"
MAX_FRACTION_DIGITS = 2


class LocaleProfileError(ValueError):
    """Raised when a locale cannot back a grouped number field."""


def _normalise_name(name: str) -> str:
    return (name or "").strip().replace("-", "_")


def _parse_locale(name: str) -> Locale:
    """Return a Babel locale for *name*, retrying with the bare language."""

    normalized = _normalise_name(name)
    if not normalized:
        raise LocaleProfileError("Locale name is empty")

    try:
        return Locale.parse(normalized)
    except (UnknownLocaleError, ValueError):
        base = normalized.split("_")[0]
        if not base or base == normalized:
            raise LocaleProfileError(f"Unknown locale: {name!r}") from None
    try:
        locale = Locale.parse(base)
    except (UnknownLocaleError, ValueError):
        raise LocaleProfileError(f"Unknown locale: {name!r}") from None
    logger.warning("Locale %s is not available, using %s instead", name, base)
    return locale


def _grouping_pattern(locale: Locale, fraction_digits: int) -> str:
    """Build a decimal pattern keeping the locale's grouping style.

    Only the positive sub-pattern is used and its fractional part is replaced
    so that at most *fraction_digits* digits are rendered.
    """

    number_pattern = locale.decimal_formats.get(None)
    source = getattr(number_pattern, "pattern", None) or "#,##0.###"
    positive = source.split(";")[0]
    integer_part = positive.split(".")[0]
    if fraction_digits <= 0:
        return integer_part
    return f"{integer_part}.{'#' * fraction_digits}"


@lru_cache(maxsize=None)
def _babel_locale(name: str) -> Locale:
    """Locale data backing a profile; unknown names use ``en_US`` data."""

    try:
        return _parse_locale(name)
    except LocaleProfileError as exc:
        logger.warning("%s, formatting with %s data", exc, DEFAULT_LOCALE)
        return Locale.parse(DEFAULT_LOCALE)


def _swap_symbols(text: str, mapping: dict[str, str]) -> str:
    return "".join(mapping.get(char, char) for char in text)


def resolve_locale_name(preferred: Optional[str] = None) -> str:
    """Return the locale name a field should use.

    The lookup order is *preferred*, the ``GROUPED_INPUT_LOCALE`` environment
    variable (``.env`` files included), the stored settings, the process
    default reported by Babel and finally ``en_US``.
    """

    # settings_store imports this module for LOCALE_ENV_VAR
    from .settings_store import effective_settings

    try:
        configured = effective_settings(locale=preferred)["locale"]
    except OSError as exc:
        logger.warning("Settings are not available: %s", exc)
        configured = next(
            (
                _normalise_name(candidate)
                for candidate in (preferred, os.getenv(LOCALE_ENV_VAR))
                if candidate and candidate.strip()
            ),
            None,
        )
    if configured:
        return configured
    try:
        detected = default_locale()
    except (ValueError, UnknownLocaleError):
        detected = None
    return detected or DEFAULT_LOCALE


@dataclass(frozen=True)
class LocaleProfile:
    """Grouping and decimal symbols of one locale plus conversion helpers."""

    locale_name: str
    grouping_separator: str
    decimal_marker: str
    max_fraction_digits: int = MAX_FRACTION_DIGITS
    pattern: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if len(self.grouping_separator) != 1 or len(self.decimal_marker) != 1:
            raise LocaleProfileError(
                f"Locale {self.locale_name} uses multi-character symbols "
                f"({self.grouping_separator!r}, {self.decimal_marker!r})"
            )
        if self.grouping_separator == self.decimal_marker:
            raise LocaleProfileError(
                f"Locale {self.locale_name} uses {self.decimal_marker!r} "
                "both as grouping separator and decimal marker"
            )
        if self.max_fraction_digits < 0:
            raise LocaleProfileError("max_fraction_digits must not be negative")

    @classmethod
    def for_locale(
        cls, name: str, max_fraction_digits: int = MAX_FRACTION_DIGITS
    ) -> "LocaleProfile":
        """Resolve the profile of locale *name* (``en_US``, ``de-DE``, ``fr``)."""

        locale = _parse_locale(name)
        return cls(
            locale_name=str(locale),
            grouping_separator=get_group_symbol(locale),
            decimal_marker=get_decimal_symbol(locale),
            max_fraction_digits=max_fraction_digits,
            pattern=_grouping_pattern(locale, max_fraction_digits),
        )

    @classmethod
    def default(cls, preferred: Optional[str] = None) -> "LocaleProfile":
        """Return the profile of the configured locale, falling back to ``en_US``."""

        name = resolve_locale_name(preferred)
        try:
            return cls.for_locale(name)
        except LocaleProfileError as exc:
            logger.warning("Falling back to %s: %s", DEFAULT_LOCALE, exc)
            return cls.for_locale(DEFAULT_LOCALE)

    def _quantize(self, value: NumberLike) -> Decimal:
        number = value if isinstance(value, Decimal) else Decimal(repr(float(value)))
        exponent = Decimal(1).scaleb(-self.max_fraction_digits)
        try:
            return number.quantize(exponent, rounding=ROUND_HALF_EVEN)
        except InvalidOperation:
            # Too many digits for the decimal context; keep the value as is.
            return number

    def _babel_symbols(self, locale: Locale) -> dict[str, str]:
        """Map Babel's symbols for *locale* to the ones of this profile."""

        mapping = {}
        group = get_group_symbol(locale)
        decimal = get_decimal_symbol(locale)
        if group != self.grouping_separator:
            mapping[group] = self.grouping_separator
        if decimal != self.decimal_marker:
            mapping[decimal] = self.decimal_marker
        return mapping

    def format(self, value: NumberLike) -> str:
        """Render *value* grouped, with at most ``max_fraction_digits`` decimals."""

        locale = _babel_locale(self.locale_name)
        pattern = self.pattern or _grouping_pattern(locale, self.max_fraction_digits)
        text = format_decimal(self._quantize(value), format=pattern, locale=locale)
        return _swap_symbols(text, self._babel_symbols(locale))

    def parse(self, text: str) -> float:
        """Parse locale-grouped *text* leniently.

        Malformed input, including a lone decimal marker, yields ``0.0``
        instead of an error so that half-typed numbers never break editing.
        """

        if not text:
            return 0.0
        locale = _babel_locale(self.locale_name)
        reverse = {ours: theirs for theirs, ours in self._babel_symbols(locale).items()}
        try:
            number = parse_decimal(_swap_symbols(text, reverse), locale=locale)
        except (NumberFormatError, ValueError, InvalidOperation):
            return 0.0
        if not number.is_finite():
            return 0.0
        result = float(number)
        return result if math.isfinite(result) else 0.0
