"""
Unit Tests for the selection engine.

Each range is replayed against the row in declared order; out-of-bounds
positions are skipped and overlaps repeat values.
"""

import pytest

from csvcut.domain.models import (
    Interval,
    LeftOpen,
    RightOpen,
    SelectedRow,
    Selector,
    Single,
)
from csvcut.services.parser import parse_selector
from csvcut.services.selection import RecordRow, select


def cut(ranges, fields):
    return list(select(Selector(ranges=tuple(ranges)), RecordRow(fields)))


class TestSelectEmpty:
    """Empty selector / empty row."""

    def test_select_when_no_ranges_then_nothing(self):
        assert cut([], ["top"]) == []

    def test_select_when_empty_row_then_nothing(self):
        assert cut([Single(index=0)], []) == []

    @pytest.mark.parametrize(
        "rng",
        [Single(index=0), LeftOpen(start=0), RightOpen(end=3), Interval(start=0, end=3)],
    )
    def test_select_when_any_range_on_empty_row_then_nothing(self, rng):
        assert cut([rng], []) == []


class TestSelectSingle:
    def test_select_single_when_in_bounds_then_one_value(self):
        assert cut([Single(index=0)], ["top"]) == ["top"]

    def test_select_single_when_past_end_then_nothing(self):
        assert cut([Single(index=1)], ["top"]) == []


class TestSelectLeftOpen:
    def test_select_left_when_past_end_then_nothing(self):
        assert cut([LeftOpen(start=2)], ["top"]) == []

    def test_select_left_when_at_last_column_then_tail(self):
        assert cut([LeftOpen(start=1)], ["top", "two"]) == ["two"]

    def test_select_left_when_from_first_then_whole_row(self):
        assert cut([LeftOpen(start=0)], ["top", "two"]) == ["top", "two"]


class TestSelectRightOpen:
    def test_select_right_when_past_end_then_clamped_to_row(self):
        assert cut([RightOpen(end=3)], ["top", "two"]) == ["top", "two"]

    def test_select_right_when_first_column_then_one_value(self):
        assert cut([RightOpen(end=0)], ["top", "two"]) == ["top"]

    def test_select_right_when_bound_meets_length_then_whole_row(self):
        assert cut([RightOpen(end=1)], ["top", "two"]) == ["top", "two"]


class TestSelectInterval:
    def test_select_interval_when_fully_out_of_bounds_then_nothing(self):
        assert cut([Interval(start=2, end=3)], ["top"]) == []

    def test_select_interval_when_upper_out_of_bounds_then_clamped(self):
        assert cut([Interval(start=0, end=3)], ["top"]) == ["top"]

    def test_select_interval_when_equal_bounds_then_one_value(self):
        assert cut([Interval(start=1, end=1)], ["top", "two"]) == ["two"]

    def test_select_interval_when_decreasing_then_nothing(self):
        assert cut([Interval(start=1, end=0)], ["top", "two"]) == []

    @pytest.mark.parametrize("width", [0, 1, 3, 10])
    def test_select_interval_when_decreasing_then_nothing_for_any_row(self, width):
        fields = [str(i) for i in range(width)]
        assert cut([Interval(start=5, end=2)], fields) == []


class TestSelectCombined:
    """Order and duplication across several ranges."""

    def test_select_when_single_and_interval_then_concatenated(self, six_fields):
        assert cut([Single(index=0), Interval(start=3, end=4)], six_fields) == ["0", "3", "4"]

    def test_select_when_ranges_overlap_then_values_repeated_in_order(self, six_fields):
        assert cut([Single(index=3), Interval(start=2, end=4)], six_fields) == [
            "3",
            "2",
            "3",
            "4",
        ]

    def test_select_when_reordered_then_output_follows_selector(self, six_fields):
        assert cut([LeftOpen(start=4), RightOpen(end=1)], six_fields) == ["4", "5", "0", "1"]

    def test_select_when_parsed_selector_then_same_result(self, six_fields):
        selector = parse_selector("3,1-3")
        assert list(select(selector, RecordRow(six_fields))) == ["2", "0", "1", "2"]

    def test_select_when_called_twice_then_no_state_kept(self, six_fields):
        selector = parse_selector("2-")
        first = select(selector, RecordRow(six_fields))
        second = select(selector, RecordRow(["x", "y"]))
        assert first == SelectedRow(("1", "2", "3", "4", "5"))
        assert second == SelectedRow(("y",))


class TestRecordRow:
    def test_get_when_in_bounds_then_value(self):
        assert RecordRow(["a", "b"]).get(1) == "b"

    @pytest.mark.parametrize("index", [-1, 2, 100])
    def test_get_when_out_of_bounds_then_none(self, index):
        assert RecordRow(["a", "b"]).get(index) is None

    def test_len_when_fields_then_field_count(self):
        assert len(RecordRow(["a", "b", "c"])) == 3


class TestRangeBounds:
    """Half-open bounds for each range shape."""

    def test_bounds_when_single_then_one_wide(self):
        assert Single(index=2).bounds() == (2, 3)

    def test_bounds_when_left_open_then_unbounded(self):
        assert LeftOpen(start=2).bounds() == (2, None)

    def test_bounds_when_right_open_then_from_zero(self):
        assert RightOpen(end=2).bounds() == (0, 3)

    def test_bounds_when_interval_then_inclusive_upper(self):
        assert Interval(start=1, end=4).bounds() == (1, 5)

    def test_range_when_negative_index_then_rejected(self):
        with pytest.raises(ValueError):
            Single(index=-1)

    def test_selector_when_frozen_then_immutable(self):
        selector = parse_selector("1")
        with pytest.raises(ValueError):
            selector.ranges = ()  # type: ignore[misc]
