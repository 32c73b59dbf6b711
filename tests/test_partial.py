from dataclasses import FrozenInstanceError

import pytest

from calfield.cascade import CascadeMode, cascade_add
from calfield.errors import IllegalArgumentError, IllegalFieldValueError
from calfield.fieldtypes import (
    CENTURY_OF_ERA,
    DAY_OF_MONTH,
    HOUR_OF_DAY,
    MINUTE_OF_HOUR,
    MONTH_OF_YEAR,
    SECOND_OF_MINUTE,
    YEAR,
    YEAR_OF_CENTURY,
)
from calfield.iso import IsoChronology
from calfield.partial import Partial

iso = IsoChronology()


def ymd(year: int, month: int, day: int) -> Partial:
    return iso.partial((YEAR, year), (MONTH_OF_YEAR, month), (DAY_OF_MONTH, day))


class TestConstruction:
    def test_accessors(self) -> None:
        partial = ymd(2001, 2, 28)
        assert partial.size == 3
        assert partial.values == (2001, 2, 28)
        assert partial.field(1) is iso.field(MONTH_OF_YEAR)
        assert partial.field_type(2) == DAY_OF_MONTH
        assert partial.value(0) == 2001
        assert partial.get(MONTH_OF_YEAR) == 2
        assert partial.index_of(DAY_OF_MONTH) == 2
        assert partial.index_of(HOUR_OF_DAY) is None
        assert str(partial) == "[year=2001, month_of_year=2, day_of_month=28]"

    def test_is_immutable(self) -> None:
        partial = ymd(2001, 2, 28)
        with pytest.raises(FrozenInstanceError):
            partial.values = (2002, 1, 1)  # type: ignore[misc]

    def test_get_missing_field(self) -> None:
        with pytest.raises(IllegalArgumentError, match="not part of this partial"):
            ymd(2001, 2, 28).get(HOUR_OF_DAY)

    def test_rejects_wrong_order(self) -> None:
        with pytest.raises(IllegalArgumentError, match="largest-smallest"):
            iso.partial((DAY_OF_MONTH, 1), (YEAR, 2001))

    def test_rejects_duplicates(self) -> None:
        with pytest.raises(IllegalArgumentError, match="duplicate"):
            iso.partial((YEAR, 2001), (YEAR, 2002))

    def test_orders_same_unit_fields_by_range(self) -> None:
        assert iso.partial((YEAR, 2001), (YEAR_OF_CENTURY, 1)).size == 2
        partial = iso.partial((CENTURY_OF_ERA, 20), (YEAR_OF_CENTURY, 1))
        assert partial.values == (20, 1)
        with pytest.raises(IllegalArgumentError, match="largest-smallest"):
            iso.partial((YEAR_OF_CENTURY, 1), (YEAR, 2001))

    def test_rejects_mismatched_lengths(self) -> None:
        with pytest.raises(IllegalArgumentError, match="one value per field"):
            Partial((iso.field(YEAR),), (2001, 1))

    def test_rejects_value_out_of_field_range(self) -> None:
        with pytest.raises(IllegalFieldValueError, match=r"\[1,12\]"):
            ymd(2001, 13, 1)

    def test_rejects_value_invalid_for_larger_fields(self) -> None:
        with pytest.raises(IllegalFieldValueError, match=r"\[1,28\]"):
            ymd(2001, 2, 29)
        assert ymd(2004, 2, 29).values == (2004, 2, 29)

    def test_day_without_year_allows_leap_february(self) -> None:
        partial = iso.partial((MONTH_OF_YEAR, 2), (DAY_OF_MONTH, 29))
        assert partial.values == (2, 29)

    def test_is_contiguous(self) -> None:
        assert ymd(2001, 1, 1).is_contiguous()
        assert iso.partial((HOUR_OF_DAY, 1), (MINUTE_OF_HOUR, 2)).is_contiguous()
        assert not iso.partial((YEAR, 2001), (DAY_OF_MONTH, 1)).is_contiguous()
        assert not iso.partial(
            (YEAR, 2001), (MONTH_OF_YEAR, 1), (HOUR_OF_DAY, 5)
        ).is_contiguous()


class TestCascadingAdd:
    def test_month_add_clamps_day(self) -> None:
        assert ymd(2001, 1, 31).plus(MONTH_OF_YEAR, 1).values == (2001, 2, 28)

    def test_month_add_keeps_leap_day_across_leap_years(self) -> None:
        assert ymd(2004, 2, 29).plus(MONTH_OF_YEAR, 48).values == (2008, 2, 29)

    def test_day_add_carries_into_month(self) -> None:
        assert ymd(2001, 1, 31).plus(DAY_OF_MONTH, 1).values == (2001, 2, 1)
        assert ymd(2001, 12, 31).plus(DAY_OF_MONTH, 1).values == (2002, 1, 1)

    def test_day_subtract_borrows_from_month(self) -> None:
        assert ymd(2001, 3, 1).plus(DAY_OF_MONTH, -1).values == (2001, 2, 28)
        assert ymd(2004, 3, 1).plus(DAY_OF_MONTH, -1).values == (2004, 2, 29)

    def test_day_add_spanning_months(self) -> None:
        assert ymd(2001, 1, 1).plus(DAY_OF_MONTH, 59).values == (2001, 3, 1)
        assert ymd(2001, 3, 1).plus(DAY_OF_MONTH, -59).values == (2001, 1, 1)

    def test_month_as_largest_field_wraps(self) -> None:
        partial = iso.partial((MONTH_OF_YEAR, 11), (DAY_OF_MONTH, 30))
        assert partial.plus(MONTH_OF_YEAR, 3).values == (2, 29)
        assert partial.plus(MONTH_OF_YEAR, -11).values == (12, 30)

    def test_month_add_in_non_contiguous_partial(self) -> None:
        partial = iso.partial((YEAR, 2001), (MONTH_OF_YEAR, 12), (HOUR_OF_DAY, 5))
        assert partial.plus(MONTH_OF_YEAR, 13).values == (2003, 1, 5)

    def test_carry_past_largest_field_fails(self) -> None:
        partial = iso.partial((HOUR_OF_DAY, 23), (MINUTE_OF_HOUR, 59))
        with pytest.raises(IllegalArgumentError, match="Maximum value exceeded"):
            partial.plus(MINUTE_OF_HOUR, 1)
        with pytest.raises(IllegalArgumentError, match="Minimum value exceeded"):
            iso.partial((HOUR_OF_DAY, 0), (MINUTE_OF_HOUR, 0)).plus(
                MINUTE_OF_HOUR, -1
            )

    def test_wrap_partial_wraps_largest_field(self) -> None:
        partial = iso.partial((HOUR_OF_DAY, 23), (MINUTE_OF_HOUR, 59))
        assert partial.plus_wrap_partial(MINUTE_OF_HOUR, 1).values == (0, 0)
        assert partial.plus_wrap_partial(HOUR_OF_DAY, 2).values == (1, 59)
        midnight = iso.partial((HOUR_OF_DAY, 0), (MINUTE_OF_HOUR, 0))
        assert midnight.plus_wrap_partial(MINUTE_OF_HOUR, -1).values == (23, 59)

    def test_three_level_carry(self) -> None:
        partial = iso.partial(
            (HOUR_OF_DAY, 22), (MINUTE_OF_HOUR, 59), (SECOND_OF_MINUTE, 59)
        )
        assert partial.plus(SECOND_OF_MINUTE, 1).values == (23, 0, 0)
        assert partial.plus(SECOND_OF_MINUTE, 61).values == (23, 1, 0)

    def test_mismatched_neighbour_cannot_carry(self) -> None:
        partial = iso.partial((YEAR, 2001), (DAY_OF_MONTH, 31))
        with pytest.raises(IllegalArgumentError, match="Fields invalid for add"):
            partial.plus(DAY_OF_MONTH, 1)

    def test_zero_add_is_identity(self) -> None:
        partial = ymd(2001, 1, 31)
        assert partial.plus(DAY_OF_MONTH, 0) == partial

    def test_caller_values_are_not_mutated(self) -> None:
        partial = ymd(2001, 1, 31)
        values = [2001, 1, 31]
        result = iso.field(DAY_OF_MONTH).add_partial(partial, 2, values, 1)
        assert result == [2001, 2, 1]
        assert values == [2001, 1, 31]

    def test_cascade_modes_are_explicit(self) -> None:
        partial = iso.partial((HOUR_OF_DAY, 23), (MINUTE_OF_HOUR, 59))
        minute = iso.field(MINUTE_OF_HOUR)
        wrapped = cascade_add(minute, partial, 1, partial.values, 1, CascadeMode.WRAP)
        assert wrapped == [0, 0]
        with pytest.raises(IllegalArgumentError):
            cascade_add(minute, partial, 1, partial.values, 1, CascadeMode.CARRY)


class TestSetAndWrapField:
    def test_with_value_clamps_smaller_fields(self) -> None:
        assert ymd(2004, 2, 29).with_value(YEAR, 2005).values == (2005, 2, 28)
        assert ymd(2001, 1, 31).with_value(MONTH_OF_YEAR, 4).values == (2001, 4, 30)

    def test_with_value_rejects_invalid_value(self) -> None:
        with pytest.raises(IllegalFieldValueError, match=r"\[1,28\]"):
            ymd(2001, 2, 1).with_value(DAY_OF_MONTH, 29)

    def test_plus_wrap_field_leaves_larger_fields(self) -> None:
        assert ymd(2001, 12, 31).plus_wrap_field(MONTH_OF_YEAR, 2).values == (
            2001,
            2,
            28,
        )
        assert ymd(2001, 1, 31).plus_wrap_field(DAY_OF_MONTH, 1).values == (
            2001,
            1,
            1,
        )
        assert ymd(2001, 2, 1).plus_wrap_field(DAY_OF_MONTH, -1).values == (
            2001,
            2,
            28,
        )
