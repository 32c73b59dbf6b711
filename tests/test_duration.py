import pytest

from calfield.duration import (
    DecoratedDurationField,
    PreciseDurationField,
    ScaledDurationField,
    millis_duration,
)
from calfield.errors import ArithmeticOverflowError, IllegalArgumentError
from calfield.fieldtypes import DAYS, HOURS, MILLIS, MINUTES, WEEKS
from calfield.util import DAY, HOUR, INSTANT_MAX, INSTANT_MIN, MINUTE, WEEK

minutes = PreciseDurationField(MINUTES, MINUTE)
hours = PreciseDurationField(HOURS, HOUR)
days = PreciseDurationField(DAYS, DAY)
weeks = ScaledDurationField(days, WEEKS, 7)


def test_precise_duration_conversions() -> None:
    assert hours.is_supported
    assert hours.is_precise
    assert hours.name == "hours"
    assert hours.unit_millis == HOUR
    assert hours.unit_length() == HOUR
    assert hours.unit_length(12345) == HOUR
    assert hours.to_units(3 * HOUR + 5) == 3
    assert hours.to_units(-(3 * HOUR + 5)) == -3
    assert hours.from_units(2) == 2 * HOUR


def test_precise_duration_add_subtract_difference() -> None:
    assert hours.add(0, 5) == 5 * HOUR
    assert hours.add(HOUR, -2) == -HOUR
    assert hours.subtract(5 * HOUR, 2) == 3 * HOUR
    assert hours.difference(5 * HOUR + 1, 0) == 5
    assert hours.difference(0, 5 * HOUR + 1) == -5


def test_precise_duration_rejects_nonpositive_length() -> None:
    with pytest.raises(IllegalArgumentError, match="at least 1"):
        PreciseDurationField(HOURS, 0)


def test_add_overflow() -> None:
    with pytest.raises(ArithmeticOverflowError):
        hours.add(INSTANT_MAX, 1)
    with pytest.raises(ArithmeticOverflowError):
        hours.add(0, INSTANT_MAX)


def test_subtract_overflow() -> None:
    with pytest.raises(ArithmeticOverflowError):
        millis_duration.subtract(0, INSTANT_MIN)


def test_millis_duration() -> None:
    assert millis_duration.type == MILLIS
    assert millis_duration.unit_millis == 1
    assert millis_duration.is_precise
    assert millis_duration.to_units(123) == 123
    assert millis_duration.from_units(-123) == -123
    assert millis_duration.add(10, 5) == 15
    assert millis_duration.difference(10, 15) == -5


def test_compare_orders_by_length() -> None:
    assert hours < days
    assert days > hours
    assert hours <= hours
    assert minutes.compare(hours) == -1
    assert days.compare(days) == 0
    assert sorted([days, millis_duration, weeks, hours]) == [
        millis_duration,
        hours,
        days,
        weeks,
    ]


def test_compare_ignores_type_on_equal_length() -> None:
    seven_days = PreciseDurationField(WEEKS, WEEK)
    assert seven_days.compare(weeks) == 0
    assert seven_days is not weeks


def test_scaled_duration() -> None:
    assert weeks.type == WEEKS
    assert weeks.scalar == 7
    assert weeks.wrapped is days
    assert weeks.is_precise
    assert weeks.unit_millis == WEEK
    assert weeks.add(0, 2) == 2 * WEEK
    assert weeks.difference(15 * DAY, 0) == 2
    assert weeks.difference(-15 * DAY, 0) == -2
    assert weeks.to_units(-15 * DAY) == -2
    assert weeks.from_units(3) == 3 * WEEK


@pytest.mark.parametrize("scalar", [-1, 0, 1])
def test_scaled_rejects_trivial_scalar(scalar: int) -> None:
    with pytest.raises(IllegalArgumentError, match="scalar"):
        ScaledDurationField(days, WEEKS, scalar)


def test_scaled_overflow() -> None:
    with pytest.raises(ArithmeticOverflowError):
        weeks.add(0, INSTANT_MAX // 7)


def test_decorated_duration_forwards() -> None:
    renamed = DecoratedDurationField(hours, MINUTES)
    assert renamed.type == MINUTES
    assert renamed.unit_millis == HOUR
    assert renamed.add(0, 1) == HOUR
    assert renamed.difference(2 * HOUR, 0) == 2
