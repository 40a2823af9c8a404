"""Tests for the calendar index: keys, ordering, arithmetic, labels."""

from __future__ import annotations

from datetime import date

import pytest

from runwayctl.domain.calendar import (
    CalendarMonth,
    ParseError,
    add_months,
    compare,
    current_month,
    from_key,
    is_quarter_start,
    is_year_start,
    month_label,
    month_range,
    months_between,
    quarter_label,
    quarter_of,
    subtract_months,
    to_key,
)


class TestCalendarMonth:
    def test_rejects_month_zero(self) -> None:
        with pytest.raises(ValueError):
            CalendarMonth(2025, 0)

    def test_rejects_month_thirteen(self) -> None:
        with pytest.raises(ValueError):
            CalendarMonth(2025, 13)

    def test_ordering_matches_ordinal(self) -> None:
        months = [CalendarMonth(2024, 12), CalendarMonth(2025, 1), CalendarMonth(2025, 2)]
        assert sorted(reversed(months)) == months
        assert all(a.ordinal < b.ordinal for a, b in zip(months, months[1:], strict=False))

    def test_hashable_and_equal(self) -> None:
        assert {CalendarMonth(2025, 3), CalendarMonth(2025, 3)} == {CalendarMonth(2025, 3)}

    def test_str_is_key(self) -> None:
        assert str(CalendarMonth(2025, 3)) == "2025-03"


class TestKeys:
    @pytest.mark.parametrize(
        "month",
        [
            CalendarMonth(2025, 1),
            CalendarMonth(1999, 12),
            CalendarMonth(2100, 6),
            CalendarMonth(0, 1),
            CalendarMonth(10000, 1),
            CalendarMonth(-1, 5),
            add_months(CalendarMonth(9999, 12), 1),
        ],
    )
    def test_round_trip(self, month: CalendarMonth) -> None:
        assert from_key(to_key(month)) == month

    def test_zero_padded(self) -> None:
        assert to_key(CalendarMonth(2025, 3)) == "2025-03"

    def test_accepts_unpadded_month(self) -> None:
        assert from_key("2025-3") == CalendarMonth(2025, 3)

    def test_wide_year(self) -> None:
        assert to_key(CalendarMonth(10000, 1)) == "10000-01"
        assert from_key("10000-01") == CalendarMonth(10000, 1)

    @pytest.mark.parametrize("bad", ["", "2025", "2025-13", "2025-00", "abc-01", "2025/03", "role-pm"])
    def test_rejects_malformed(self, bad: str) -> None:
        with pytest.raises(ParseError):
            from_key(bad)

    def test_parse_error_is_value_error(self) -> None:
        assert issubclass(ParseError, ValueError)


class TestArithmetic:
    def test_add_across_year(self) -> None:
        assert add_months(CalendarMonth(2025, 11), 3) == CalendarMonth(2026, 2)

    def test_add_negative(self) -> None:
        assert add_months(CalendarMonth(2025, 2), -3) == CalendarMonth(2024, 11)

    def test_subtract_across_year(self) -> None:
        assert subtract_months(CalendarMonth(2025, 1), 1) == CalendarMonth(2024, 12)

    def test_subtract_negative_adds(self) -> None:
        assert subtract_months(CalendarMonth(2025, 1), -12) == CalendarMonth(2026, 1)

    @pytest.mark.parametrize("n", [-25, -1, 0, 1, 11, 12, 37])
    def test_add_consistent_with_order(self, n: int) -> None:
        base = CalendarMonth(2025, 6)
        shifted = add_months(base, n)
        assert compare(base, shifted) == (0 if n == 0 else (-1 if n > 0 else 1))
        assert months_between(base, shifted) == n

    def test_compare(self) -> None:
        a, b = CalendarMonth(2025, 1), CalendarMonth(2025, 2)
        assert compare(a, b) == -1
        assert compare(b, a) == 1
        assert compare(a, a) == 0


class TestLabels:
    @pytest.mark.parametrize(
        ("month", "quarter"),
        [(1, 1), (3, 1), (4, 2), (6, 2), (7, 3), (9, 3), (10, 4), (12, 4)],
    )
    def test_quarter_of(self, month: int, quarter: int) -> None:
        assert quarter_of(CalendarMonth(2025, month)) == quarter

    def test_quarter_label(self) -> None:
        assert quarter_label(CalendarMonth(2025, 8)) == "Q3 2025"

    def test_month_label(self) -> None:
        assert month_label(CalendarMonth(2025, 1)) == "Jan 2025"
        assert month_label(CalendarMonth(2025, 12), with_year=False) == "Dec"

    def test_quarter_and_year_starts(self) -> None:
        starts = [m for m in range(1, 13) if is_quarter_start(CalendarMonth(2025, m))]
        assert starts == [1, 4, 7, 10]
        assert is_year_start(CalendarMonth(2025, 1))
        assert not is_year_start(CalendarMonth(2025, 4))


class TestRanges:
    def test_month_range_contiguous(self) -> None:
        months = list(month_range(CalendarMonth(2024, 11), 4))
        assert [to_key(m) for m in months] == ["2024-11", "2024-12", "2025-01", "2025-02"]

    def test_month_range_empty(self) -> None:
        assert list(month_range(CalendarMonth(2025, 1), 0)) == []

    def test_current_month(self) -> None:
        assert current_month(date(2025, 7, 31)) == CalendarMonth(2025, 7)
