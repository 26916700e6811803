from __future__ import annotations

import pytest

from logic.cursor_tracker import CursorTracker, EditDelta, TrackerState


@pytest.fixture
def tracker():
    return CursorTracker(",")


def test_insert_into_empty_text(tracker):
    assert tracker.compute_anchor(EditDelta("", 0, 0, 1)) == 1
    assert tracker.state is TrackerState.ANCHOR_PENDING


def test_delete_from_empty_text_leaves_tracker_idle(tracker):
    assert tracker.compute_anchor(EditDelta("", 0, 1, 0)) is None
    assert tracker.state is TrackerState.IDLE
    assert tracker.resolve_offset("") is None


def test_deletion_counts_digits_before_start(tracker):
    assert tracker.compute_anchor(EditDelta("1,234", 4, 1, 0)) == 3
    assert tracker.resolve_offset("123") == 3


def test_insertion_at_end(tracker):
    assert tracker.compute_anchor(EditDelta("123", 3, 0, 1)) == 4
    assert tracker.resolve_offset("1,234") == 5


def test_interior_insertion(tracker):
    assert tracker.compute_anchor(EditDelta("1,234", 2, 0, 1)) == 2
    assert tracker.resolve_offset("19,234") == 2


def test_deletion_at_start_puts_cursor_at_start(tracker):
    assert tracker.compute_anchor(EditDelta("1,234", 0, 1, 0)) == 0
    assert tracker.resolve_offset("234") == 0


def test_anchor_is_consumed_once(tracker):
    tracker.compute_anchor(EditDelta("12", 2, 0, 1))
    assert tracker.resolve_offset("123") == 3
    assert tracker.state is TrackerState.IDLE
    assert tracker.anchor is None
    assert tracker.resolve_offset("123") is None


def test_anchor_beyond_text_clamps_to_end(tracker):
    tracker.compute_anchor(EditDelta("1,234", 5, 0, 1))
    assert tracker.resolve_offset("12") == 2


def test_reset_discards_anchor(tracker):
    tracker.compute_anchor(EditDelta("12", 2, 0, 1))
    tracker.reset()
    assert tracker.state is TrackerState.IDLE
    assert tracker.resolve_offset("123") is None


@pytest.mark.parametrize(
    "delta, anchor",
    [
        (EditDelta("1,234", 10, 3, 5), 5),
        (EditDelta("123", -4, 0, 1), 1),
        (EditDelta("1,234", 99, 2, 0), 4),
        (EditDelta("1,234", 2, 0, 4), 2),
    ],
)
def test_out_of_range_deltas_do_not_fail(tracker, delta, anchor):
    assert tracker.compute_anchor(delta) == anchor


def test_rounding_correction_narrows_scan():
    corrected = CursorTracker(",", rounding_correction=True)
    plain = CursorTracker(",")
    for item in (corrected, plain):
        item.compute_anchor(EditDelta("123", 1, 0, 1))

    assert plain.resolve_offset("1234", length_delta=-3) == 2
    assert corrected.resolve_offset("1234", length_delta=-3) == 4


def test_rounding_correction_counts_dropped_digits_past_end():
    corrected = CursorTracker(",", rounding_correction=True)
    corrected.compute_anchor(EditDelta("1.99", 4, 0, 1))
    assert corrected.resolve_offset("2", length_delta=4) == 1


def test_rounding_correction_keeps_regular_edits():
    corrected = CursorTracker(",", rounding_correction=True)
    corrected.compute_anchor(EditDelta("123", 3, 0, 1))
    assert corrected.resolve_offset("123.", length_delta=1) == 4


@pytest.mark.parametrize(
    "before, after, cursor, expected",
    [
        ("11", "111", 1, (0, 0, 1)),
        ("11", "111", 3, (2, 0, 1)),
        ("1,234", "1,34", 2, (2, 1, 0)),
        ("123", "1293", None, (2, 0, 1)),
        ("123", "193", 2, (1, 1, 1)),
        ("", "5", 1, (0, 0, 1)),
        ("1,234", "", 0, (0, 5, 0)),
    ],
)
def test_delta_from_snapshots(before, after, cursor, expected):
    delta = EditDelta.from_texts(before, after, cursor)
    assert delta.text_before_edit == before
    assert (delta.start, delta.removed, delta.inserted) == expected


def test_delta_from_snapshots_ignores_inconsistent_cursor():
    delta = EditDelta.from_texts("123", "1293", 0)
    assert (delta.start, delta.removed, delta.inserted) == (2, 0, 1)
