"""Keep the cursor next to the same digit while a field is regrouped.

Before an edit the tracker records a *digit anchor*: the number of
non-separator characters that will precede the cursor once the edit is
applied.  After the text is reformatted the anchor is replayed against the new
string to find the cursor offset, independent of where separators moved.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

__all__ = ["CursorTracker", "EditDelta", "TrackerState"]


class TrackerState(enum.Enum):
    IDLE = "idle"
    ANCHOR_PENDING = "anchor_pending"


@dataclass(frozen=True)
class EditDelta:
    """A single edit: *removed* characters at *start* replaced by *inserted* ones."""

    text_before_edit: str
    start: int
    removed: int = 0
    inserted: int = 0

    @classmethod
    def from_texts(cls, before: str, after: str, cursor_after: Optional[int] = None) -> "EditDelta":
        """Derive the edit that turned *before* into *after*.

        Hosts without a before-change notification only know both snapshots
        and the cursor position after the edit.  The cursor disambiguates
        edits inside runs of equal characters (typing ``1`` into ``11``); when
        it does not describe a consistent edit the common prefix and suffix of
        both strings are used instead.
        """

        grown = len(after) - len(before)
        if cursor_after is not None and 0 <= cursor_after <= len(after):
            if grown > 0:
                start = cursor_after - grown
                if (
                    start >= 0
                    and after[:start] == before[:start]
                    and after[cursor_after:] == before[start:]
                ):
                    return cls(before, start, 0, grown)
            elif grown < 0:
                start = cursor_after
                if (
                    start <= len(after)
                    and after[:start] == before[:start]
                    and after[start:] == before[start - grown:]
                ):
                    return cls(before, start, -grown, 0)

        prefix = 0
        limit = min(len(before), len(after))
        while prefix < limit and before[prefix] == after[prefix]:
            prefix += 1
        suffix = 0
        while (
            suffix < limit - prefix
            and before[len(before) - 1 - suffix] == after[len(after) - 1 - suffix]
        ):
            suffix += 1
        return cls(
            before,
            prefix,
            len(before) - prefix - suffix,
            len(after) - prefix - suffix,
        )


class CursorTracker:
    """Two-phase digit anchor bookkeeping for one text field.

    ``compute_anchor`` moves the tracker from ``IDLE`` to ``ANCHOR_PENDING``
    and ``resolve_offset`` consumes the anchor and returns to ``IDLE``.
    Resolving while idle is a no-op.
    """

    def __init__(self, grouping_separator: str, rounding_correction: bool = False) -> None:
        self.grouping_separator = grouping_separator
        self.rounding_correction = rounding_correction
        self._anchor: Optional[int] = None

    @property
    def anchor(self) -> Optional[int]:
        return self._anchor

    @property
    def state(self) -> TrackerState:
        if self._anchor is None:
            return TrackerState.IDLE
        return TrackerState.ANCHOR_PENDING

    def reset(self) -> None:
        self._anchor = None

    def _count(self, text: str) -> int:
        return len(text) - text.count(self.grouping_separator)

    def compute_anchor(self, delta: EditDelta) -> Optional[int]:
        """Record and return the digit anchor for *delta*.

        ``None`` means no cursor adjustment is needed after the edit; the
        tracker then stays idle.
        """

        if self._anchor is not None:
            logger.debug("Discarding unresolved anchor %s", self._anchor)

        text = delta.text_before_edit or ""
        # Multi-character edits are not expected; treat them as single ones.
        inserted = min(max(delta.inserted, 0), 1)
        start = min(max(delta.start, 0), len(text))

        if not text:
            anchor: Optional[int] = 1 if inserted else None
        elif not inserted:
            anchor = self._count(text[:start])
        elif start == len(text):
            anchor = self._count(text) + 1
        else:
            anchor = self._count(text[: start + 1])

        self._anchor = anchor
        return anchor

    def resolve_offset(self, new_text: str, length_delta: int = 0) -> Optional[int]:
        """Consume the pending anchor and return the cursor offset in *new_text*.

        With ``rounding_correction`` enabled *length_delta* (significant
        characters dropped by formatting) widens or narrows the scanned range;
        positions past the end count as digits.  An anchor that cannot be
        reached clamps to the end of the text.
        """

        anchor = self._anchor
        if anchor is None:
            return None
        self._anchor = None
        if anchor <= 0:
            return 0

        scan_length = len(new_text)
        if self.rounding_correction:
            scan_length = max(0, scan_length + length_delta)

        seen = 0
        for index in range(scan_length):
            if index >= len(new_text) or new_text[index] != self.grouping_separator:
                seen += 1
            if seen == anchor:
                return min(index + 1, len(new_text))
        return len(new_text)
