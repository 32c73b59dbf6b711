import pytest

from calfield.duration import PreciseDurationField
from calfield.errors import IllegalFieldValueError
from calfield.fieldtypes import DAY_OF_MONTH, DAYS, HOUR_OF_DAY, HOURS, MONTH_OF_YEAR
from calfield.iso import IsoChronology
from calfield.leniency import (
    LenientDateTimeField,
    StrictDateTimeField,
    lenient,
    strict,
)
from calfield.precise import PreciseDateTimeField
from calfield.util import DAY, HOUR

hours = PreciseDurationField(HOURS, HOUR)
days = PreciseDurationField(DAYS, DAY)
hour_of_day = PreciseDateTimeField(HOUR_OF_DAY, hours, days)

iso = IsoChronology()


def test_lenient_set_carries_out_of_range_values() -> None:
    field = lenient(hour_of_day)
    assert field.is_lenient
    assert field.set(0, 25) == DAY + HOUR
    assert field.set(0, -1) == -HOUR
    assert field.set(3 * DAY + 17, 5) == 3 * DAY + 5 * HOUR + 17


def test_lenient_day_of_month_rolls_into_next_month() -> None:
    field = lenient(iso.field(DAY_OF_MONTH))
    assert field.set(iso.instant(2001, 1, 15), 32) == iso.instant(2001, 2, 1)
    assert field.set(iso.instant(2001, 2, 15), 29) == iso.instant(2001, 3, 1)
    assert field.set(iso.instant(2001, 3, 15), 0) == iso.instant(2001, 2, 28)


def test_strict_set_checks_bounds_at_the_instant() -> None:
    field = strict(iso.field(DAY_OF_MONTH))
    assert not field.is_lenient
    assert field.set(iso.instant(2004, 2, 1), 29) == iso.instant(2004, 2, 29)
    with pytest.raises(IllegalFieldValueError, match=r"\[1,28\]"):
        field.set(iso.instant(2001, 2, 1), 29)


def test_same_mode_rewrap_returns_same_instance() -> None:
    lenient_field = lenient(hour_of_day)
    strict_field = strict(hour_of_day)
    assert lenient(lenient_field) is lenient_field
    assert strict(strict_field) is strict_field


def test_opposite_mode_unwraps_first() -> None:
    lenient_field = lenient(hour_of_day)
    flipped = strict(lenient_field)
    assert isinstance(flipped, StrictDateTimeField)
    assert flipped.wrapped is hour_of_day

    flipped_back = lenient(flipped)
    assert isinstance(flipped_back, LenientDateTimeField)
    assert flipped_back.wrapped is hour_of_day


def test_outermost_mode_wins() -> None:
    field = strict(lenient(hour_of_day))
    with pytest.raises(IllegalFieldValueError):
        field.set(0, 24)

    field = lenient(strict(hour_of_day))
    assert field.set(0, 24) == DAY


def test_wrappers_are_transparent_for_valid_values() -> None:
    month = iso.field(MONTH_OF_YEAR)
    instant = iso.instant(2001, 8, 31, 12)
    for field in (lenient(month), strict(month)):
        assert field.type == MONTH_OF_YEAR
        assert field.get(instant) == month.get(instant)
        assert field.add(instant, 7) == month.add(instant, 7)
        assert field.round_floor(instant) == month.round_floor(instant)
        for value in range(1, 13):
            assert field.set(instant, value) == month.set(instant, value)
