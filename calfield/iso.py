"""Reference calendar: proleptic Gregorian in UTC, counted in milliseconds.

Builds the duration units and fields of the ISO calendar out of the generic
building blocks, so it doubles as a worked example of composing them:

    >>> iso = IsoChronology()
    >>> instant = iso.instant(2001, 1, 31)
    >>> iso.field(MONTH_OF_YEAR).add(instant, 1) == iso.instant(2001, 2, 28)
    True

Only the calendar arithmetic is here. There are no time zones, no eras and no
week-based years; those fields are present as unsupported placeholders.
"""

import logging
from collections.abc import Sequence
from datetime import date, datetime, timedelta, timezone
from typing import Literal

from dateutil.parser import isoparse
from typing_extensions import override

from calfield import cascade
from calfield.arith import safe_add, safe_multiply, verify_value_bounds
from calfield.decorated import (
    DividedDateTimeField,
    RemainderDateTimeField,
    ZeroIsMaxDateTimeField,
)
from calfield.duration import (
    DurationField,
    PreciseDurationField,
    ScaledDurationField,
    millis_duration,
)
from calfield.errors import IllegalArgumentError
from calfield.field import DateTimeField
from calfield.fieldtypes import (
    CENTURY_OF_ERA,
    CLOCKHOUR_OF_DAY,
    CLOCKHOUR_OF_HALFDAY,
    DAY_OF_MONTH,
    DAY_OF_WEEK,
    DAY_OF_YEAR,
    DAYS,
    ERA,
    ERAS,
    HALFDAY_OF_DAY,
    HALFDAYS,
    HOUR_OF_DAY,
    HOUR_OF_HALFDAY,
    HOURS,
    MILLIS_OF_DAY,
    MILLIS_OF_SECOND,
    MINUTE_OF_DAY,
    MINUTE_OF_HOUR,
    MINUTES,
    MONTH_OF_YEAR,
    SECOND_OF_DAY,
    SECOND_OF_MINUTE,
    SECONDS,
    WEEK_OF_WEEKYEAR,
    WEEKS,
    WEEKYEAR,
    WEEKYEAR_OF_CENTURY,
    WEEKYEARS,
    YEAR,
    YEAR_OF_CENTURY,
    YEAR_OF_ERA,
    DateTimeFieldType,
    DurationFieldType,
)
from calfield.imprecise import ImpreciseDateTimeField
from calfield.leniency import lenient, strict
from calfield.partial import Partial
from calfield.precise import PreciseDateTimeField, PreciseDurationDateTimeField
from calfield.unsupported import unsupported_duration_field, unsupported_field
from calfield.util import DAY, HALFDAY, HOUR, MINUTE, MONTH, SECOND, YEAR as YEAR_MILLIS

logger = logging.getLogger(__name__)

# Year range whose every millisecond fits a signed 64-bit instant
MIN_YEAR = -292275054
MAX_YEAR = 292278993

Mode = Literal["default", "lenient", "strict"]


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


# 1-indexed days per month
_MONTHDAYS = [0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


def days_in_month(year: int, month: int) -> int:
    return _MONTHDAYS[month] + (month == 2 and is_leap_year(year))


def days_from_civil(year: int, month: int, day: int) -> int:
    """Days since 1970-01-01 for a proleptic Gregorian date."""
    # Count from 1 March so the leap day falls at the end of the cycle year
    y = year - (month <= 2)
    era = y // 400
    year_of_era = y - era * 400
    day_of_year = (153 * ((month + 9) % 12) + 2) // 5 + day - 1
    day_of_era = (
        year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
    )
    return era * 146_097 + day_of_era - 719_468


def civil_from_days(days: int) -> tuple[int, int, int]:
    """Inverse of :func:`days_from_civil`: ``(year, month, day)``."""
    z = days + 719_468
    era = z // 146_097
    day_of_era = z - era * 146_097
    year_of_era = (
        day_of_era
        - day_of_era // 1460
        + day_of_era // 36_524
        - day_of_era // 146_096
    ) // 365
    day_of_year = day_of_era - (
        365 * year_of_era + year_of_era // 4 - year_of_era // 100
    )
    shifted_month = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * shifted_month + 2) // 5 + 1
    month = shifted_month + 3 if shifted_month < 10 else shifted_month - 9
    return era * 400 + year_of_era + (month <= 2), month, day


def _split(instant: int) -> tuple[int, int, int, int]:
    """``(year, month, day, millis_of_day)`` of an instant."""
    days, millis_of_day = divmod(instant, DAY)
    year, month, day = civil_from_days(days)
    return year, month, day, millis_of_day


def _join(year: int, month: int, day: int, millis_of_day: int) -> int:
    return safe_add(
        safe_multiply(days_from_civil(year, month, day), DAY), millis_of_day
    )


class _YearField(ImpreciseDateTimeField):

    def __init__(self, days: DurationField):
        super().__init__(YEAR, YEAR_MILLIS)
        self._days = days

    @override
    def get(self, instant: int) -> int:
        return _split(instant)[0]

    @override
    def set(self, instant: int, value: int) -> int:
        verify_value_bounds(self, value, MIN_YEAR, MAX_YEAR)
        _, month, day, millis_of_day = _split(instant)
        day = min(day, days_in_month(value, month))
        return _join(value, month, day, millis_of_day)

    @override
    def add(self, instant: int, value: int) -> int:
        if value == 0:
            return instant
        return self.set(instant, self.get(instant) + value)

    @override
    def difference(self, minuend_instant: int, subtrahend_instant: int) -> int:
        if minuend_instant < subtrahend_instant:
            return -self.difference(subtrahend_instant, minuend_instant)
        # Same date and time in the minuend's year, or one year less if that
        # lands past the minuend
        difference = self.get(minuend_instant) - self.get(subtrahend_instant)
        if self.add(subtrahend_instant, difference) > minuend_instant:
            difference -= 1
        return difference

    @property
    @override
    def range_duration_field(self) -> DurationField | None:
        return None

    @override
    def is_leap(self, instant: int) -> bool:
        return is_leap_year(self.get(instant))

    @override
    def leap_amount(self, instant: int) -> int:
        return 1 if self.is_leap(instant) else 0

    @property
    @override
    def leap_duration_field(self) -> DurationField:
        return self._days

    @override
    def minimum_value(self) -> int:
        return MIN_YEAR

    @override
    def maximum_value(self) -> int:
        return MAX_YEAR

    @override
    def round_floor(self, instant: int) -> int:
        return _join(self.get(instant), 1, 1, 0)


class _MonthOfYearField(ImpreciseDateTimeField):

    def __init__(self, years: DurationField, days: DurationField):
        super().__init__(MONTH_OF_YEAR, MONTH)
        self._years = years
        self._days = days

    @override
    def get(self, instant: int) -> int:
        return _split(instant)[1]

    @override
    def set(self, instant: int, value: int) -> int:
        verify_value_bounds(self, value, 1, 12)
        year, _, day, millis_of_day = _split(instant)
        day = min(day, days_in_month(year, value))
        return _join(year, value, day, millis_of_day)

    @override
    def add(self, instant: int, value: int) -> int:
        if value == 0:
            return instant
        year, month, day, millis_of_day = _split(instant)
        year, month0 = divmod(year * 12 + month - 1 + value, 12)
        verify_value_bounds(YEAR.name, year, MIN_YEAR, MAX_YEAR)
        month = month0 + 1
        day = min(day, days_in_month(year, month))
        return _join(year, month, day, millis_of_day)

    @override
    def add_partial(
        self, partial: Partial, field_index: int, values: Sequence[int], value: int
    ) -> list[int]:
        """Add months to a partial.

        As the largest field of the partial, the month wraps on its own. In a
        contiguous partial such as year-month-day the add happens on a real
        instant, so the day clamps once at the end instead of at every step:
        29 February plus 48 months stays on the 29th.
        """
        if value == 0:
            return list(values)
        if field_index == 0 and partial.field_type(0) == MONTH_OF_YEAR:
            values = list(values)
            values[0] = (values[0] - 1 + value) % 12 + 1
            return self.set_partial(partial, 0, values, values[0])
        if partial.is_contiguous():
            return cascade.add_via_instant(self, partial, values, value)
        return super().add_partial(partial, field_index, values, value)

    @property
    @override
    def range_duration_field(self) -> DurationField:
        return self._years

    @override
    def is_leap(self, instant: int) -> bool:
        year, month, _, _ = _split(instant)
        return month == 2 and is_leap_year(year)

    @override
    def leap_amount(self, instant: int) -> int:
        return 1 if self.is_leap(instant) else 0

    @property
    @override
    def leap_duration_field(self) -> DurationField:
        return self._days

    @override
    def minimum_value(self) -> int:
        return 1

    @override
    def maximum_value(self) -> int:
        return 12

    @override
    def round_floor(self, instant: int) -> int:
        year, month, _, _ = _split(instant)
        return _join(year, month, 1, 0)


class _DayOfMonthField(PreciseDurationDateTimeField):

    def __init__(self, days: DurationField, months: DurationField):
        super().__init__(DAY_OF_MONTH, days)
        self._months = months

    @override
    def get(self, instant: int) -> int:
        return _split(instant)[2]

    @property
    @override
    def range_duration_field(self) -> DurationField:
        return self._months

    @override
    def is_leap(self, instant: int) -> bool:
        _, month, day, _ = _split(instant)
        return month == 2 and day == 29

    @override
    def leap_amount(self, instant: int) -> int:
        return 1 if self.is_leap(instant) else 0

    @property
    @override
    def leap_duration_field(self) -> DurationField:
        return self.duration_field

    @override
    def minimum_value(self) -> int:
        return 1

    @override
    def maximum_value(self) -> int:
        return 31

    @override
    def maximum_value_at(self, instant: int) -> int:
        year, month, _, _ = _split(instant)
        return days_in_month(year, month)

    @override
    def maximum_value_for(
        self, partial: Partial, values: Sequence[int] | None = None
    ) -> int:
        if values is None:
            values = partial.values
        month_index = partial.index_of(MONTH_OF_YEAR)
        if month_index is None:
            return 31
        month = values[month_index]
        year_index = partial.index_of(YEAR)
        if year_index is None:
            # Without a year, February may still be a leap February
            return _MONTHDAYS[month] + (month == 2)
        return days_in_month(values[year_index], month)


class _DayOfYearField(PreciseDurationDateTimeField):

    def __init__(self, days: DurationField, years: DurationField):
        super().__init__(DAY_OF_YEAR, days)
        self._years = years

    @override
    def get(self, instant: int) -> int:
        days = instant // DAY
        year = civil_from_days(days)[0]
        return days - days_from_civil(year, 1, 1) + 1

    @property
    @override
    def range_duration_field(self) -> DurationField:
        return self._years

    @override
    def minimum_value(self) -> int:
        return 1

    @override
    def maximum_value(self) -> int:
        return 366

    @override
    def maximum_value_at(self, instant: int) -> int:
        return 366 if is_leap_year(_split(instant)[0]) else 365

    @override
    def maximum_value_for(
        self, partial: Partial, values: Sequence[int] | None = None
    ) -> int:
        if values is None:
            values = partial.values
        year_index = partial.index_of(YEAR)
        if year_index is None:
            return 366
        return 366 if is_leap_year(values[year_index]) else 365


class _DayOfWeekField(PreciseDurationDateTimeField):
    """ISO day of week, Monday 1 through Sunday 7."""

    def __init__(self, days: DurationField, weeks: DurationField):
        super().__init__(DAY_OF_WEEK, days)
        self._weeks = weeks

    @override
    def get(self, instant: int) -> int:
        # 1970-01-01 was a Thursday
        return (instant // DAY + 3) % 7 + 1

    @property
    @override
    def range_duration_field(self) -> DurationField:
        return self._weeks

    @override
    def minimum_value(self) -> int:
        return 1

    @override
    def maximum_value(self) -> int:
        return 7


class IsoChronology:
    """The ISO calendar's units and fields, assembled once and shared.

    Args:
        mode: ``"lenient"`` wraps every supported field so ``set`` carries
            out-of-range values, ``"strict"`` so ``set`` always bounds-checks
            against the value at that instant; ``"default"`` leaves the
            fields as built.
    """

    def __init__(self, mode: Mode = "default"):
        if mode not in ("default", "lenient", "strict"):
            raise IllegalArgumentError(
                f"Unknown mode {mode!r}.\n"
                f"Hint: use one of 'default', 'lenient' or 'strict'"
            )
        self._mode: Mode = mode
        self._durations: dict[DurationFieldType, DurationField] = {}
        self._fields: dict[DateTimeFieldType, DateTimeField] = {}
        self._assemble()
        logger.debug(
            "Assembled ISO chronology (%s mode) with %d fields",
            mode,
            len(self._fields),
        )

    def _assemble(self) -> None:
        seconds = PreciseDurationField(SECONDS, SECOND)
        minutes = PreciseDurationField(MINUTES, MINUTE)
        hours = PreciseDurationField(HOURS, HOUR)
        halfdays = PreciseDurationField(HALFDAYS, HALFDAY)
        days = PreciseDurationField(DAYS, DAY)
        weeks = ScaledDurationField(days, WEEKS, 7)

        year = _YearField(days)
        month_of_year = _MonthOfYearField(year.duration_field, days)
        century_of_era = DividedDateTimeField(
            year,
            CENTURY_OF_ERA,
            100,
            range_field=unsupported_duration_field(ERAS),
        )
        hour_of_day = PreciseDateTimeField(HOUR_OF_DAY, hours, days)
        hour_of_halfday = PreciseDateTimeField(HOUR_OF_HALFDAY, hours, halfdays)

        durations: list[DurationField] = [
            millis_duration,
            seconds,
            minutes,
            hours,
            halfdays,
            days,
            weeks,
            month_of_year.duration_field,
            year.duration_field,
            century_of_era.duration_field,
            unsupported_duration_field(WEEKYEARS),
            unsupported_duration_field(ERAS),
        ]
        for duration in durations:
            self._durations[duration.type] = duration

        fields: list[DateTimeField] = [
            PreciseDateTimeField(MILLIS_OF_SECOND, millis_duration, seconds),
            PreciseDateTimeField(MILLIS_OF_DAY, millis_duration, days),
            PreciseDateTimeField(SECOND_OF_MINUTE, seconds, minutes),
            PreciseDateTimeField(SECOND_OF_DAY, seconds, days),
            PreciseDateTimeField(MINUTE_OF_HOUR, minutes, hours),
            PreciseDateTimeField(MINUTE_OF_DAY, minutes, days),
            hour_of_day,
            ZeroIsMaxDateTimeField(hour_of_day, CLOCKHOUR_OF_DAY),
            hour_of_halfday,
            ZeroIsMaxDateTimeField(hour_of_halfday, CLOCKHOUR_OF_HALFDAY),
            PreciseDateTimeField(HALFDAY_OF_DAY, halfdays, days),
            _DayOfWeekField(days, weeks),
            _DayOfMonthField(days, month_of_year.duration_field),
            _DayOfYearField(days, year.duration_field),
            month_of_year,
            year,
            century_of_era,
            RemainderDateTimeField.from_divided(century_of_era, YEAR_OF_CENTURY),
        ]
        if self._mode == "lenient":
            fields = [lenient(field) for field in fields]
        elif self._mode == "strict":
            fields = [strict(field) for field in fields]
        for field in fields:
            self._fields[field.type] = field

        placeholders = (
            ERA,
            YEAR_OF_ERA,
            WEEKYEAR,
            WEEKYEAR_OF_CENTURY,
            WEEK_OF_WEEKYEAR,
        )
        for field_type in placeholders:
            self._fields[field_type] = self.field(field_type)

    @property
    def mode(self) -> Mode:
        return self._mode

    def duration(self, duration_type: DurationFieldType) -> DurationField:
        """The unit for ``duration_type``; a placeholder if the calendar lacks it."""
        duration = self._durations.get(duration_type)
        if duration is None:
            return unsupported_duration_field(duration_type)
        return duration

    def field(self, field_type: DateTimeFieldType) -> DateTimeField:
        """The field for ``field_type``; a placeholder if the calendar lacks it."""
        field = self._fields.get(field_type)
        if field is None:
            duration = self.duration(field_type.duration_type)
            return unsupported_field(field_type, duration)
        return field

    def instant(
        self,
        year: int,
        month: int = 1,
        day: int = 1,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millis: int = 0,
    ) -> int:
        """The instant of a UTC date and time, every component bounds-checked."""
        verify_value_bounds(YEAR.name, year, MIN_YEAR, MAX_YEAR)
        verify_value_bounds(MONTH_OF_YEAR.name, month, 1, 12)
        verify_value_bounds(DAY_OF_MONTH.name, day, 1, days_in_month(year, month))
        verify_value_bounds(HOUR_OF_DAY.name, hour, 0, 23)
        verify_value_bounds(MINUTE_OF_HOUR.name, minute, 0, 59)
        verify_value_bounds(SECOND_OF_MINUTE.name, second, 0, 59)
        verify_value_bounds(MILLIS_OF_SECOND.name, millis, 0, 999)
        millis_of_day = hour * HOUR + minute * MINUTE + second * SECOND + millis
        return _join(year, month, day, millis_of_day)

    def partial(self, *pairs: tuple[DateTimeFieldType, int]) -> Partial:
        """A partial of this calendar's fields.

        Example: ``iso.partial((YEAR, 2001), (MONTH_OF_YEAR, 2))``
        """
        return Partial(
            tuple(self.field(field_type) for field_type, _ in pairs),
            tuple(value for _, value in pairs),
        )

    def to_instant(self, value: int | str | datetime | date) -> int:
        """Convert an int, ISO 8601 string, aware datetime or date to an instant.

        Accepts:
        - int: Passed through as-is (milliseconds since the epoch)
        - str: Parsed with ``dateutil.parser.isoparse``; must carry an offset
        - datetime: Must be timezone-aware
        - date: Midnight UTC

        Sub-millisecond precision is truncated.

        Raises:
            TypeError: If value is an unsupported type or naive datetime
            ValueError: If a string is not valid ISO 8601
        """
        if isinstance(value, bool):
            raise TypeError(f"Expected an instant, got bool {value!r}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            value = isoparse(value)
        if isinstance(value, datetime):
            if value.tzinfo is None:
                raise TypeError(
                    f"Instant must come from a timezone-aware datetime.\n"
                    f"Got naive datetime: {value!r}\n"
                    f"Hint: Add timezone info:\n"
                    f"  dt = datetime(..., tzinfo=timezone.utc)"
                )
            value = value.astimezone(timezone.utc)
            return self.instant(
                value.year,
                value.month,
                value.day,
                value.hour,
                value.minute,
                value.second,
                value.microsecond // 1000,
            )
        if isinstance(value, date):
            return self.instant(value.year, value.month, value.day)
        raise TypeError(
            f"Cannot convert {type(value).__name__} to an instant.\n"
            f"Supported types: int, str, datetime, date"
        )

    def to_datetime(self, instant: int) -> datetime:
        """The UTC datetime of ``instant``; only years 1-9999 are representable."""
        year, month, day, millis_of_day = _split(instant)
        return datetime(year, month, day, tzinfo=timezone.utc) + timedelta(
            milliseconds=millis_of_day
        )

    def __repr__(self) -> str:
        return f"IsoChronology[{self._mode}]"
