"""Type tags identifying duration units and calendar fields.

Tags carry no arithmetic; they name a concept ("months", "day_of_month") so
that fields built by different calendar systems can be matched by kind.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DurationFieldType:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class DateTimeFieldType:
    """Tag for a calendar field: its step unit type and its range unit type.

    ``range_type`` is None for a field with no larger enclosing unit, such as
    the year or the era.
    """

    name: str
    duration_type: DurationFieldType
    range_type: DurationFieldType | None

    def __str__(self) -> str:
        return self.name


ERAS = DurationFieldType("eras")
CENTURIES = DurationFieldType("centuries")
WEEKYEARS = DurationFieldType("weekyears")
YEARS = DurationFieldType("years")
MONTHS = DurationFieldType("months")
WEEKS = DurationFieldType("weeks")
DAYS = DurationFieldType("days")
HALFDAYS = DurationFieldType("halfdays")
HOURS = DurationFieldType("hours")
MINUTES = DurationFieldType("minutes")
SECONDS = DurationFieldType("seconds")
MILLIS = DurationFieldType("millis")

ERA = DateTimeFieldType("era", ERAS, None)
YEAR_OF_ERA = DateTimeFieldType("year_of_era", YEARS, ERAS)
CENTURY_OF_ERA = DateTimeFieldType("century_of_era", CENTURIES, ERAS)
YEAR_OF_CENTURY = DateTimeFieldType("year_of_century", YEARS, CENTURIES)
YEAR = DateTimeFieldType("year", YEARS, None)
DAY_OF_YEAR = DateTimeFieldType("day_of_year", DAYS, YEARS)
MONTH_OF_YEAR = DateTimeFieldType("month_of_year", MONTHS, YEARS)
DAY_OF_MONTH = DateTimeFieldType("day_of_month", DAYS, MONTHS)
WEEKYEAR_OF_CENTURY = DateTimeFieldType("weekyear_of_century", WEEKYEARS, CENTURIES)
WEEKYEAR = DateTimeFieldType("weekyear", WEEKYEARS, None)
WEEK_OF_WEEKYEAR = DateTimeFieldType("week_of_weekyear", WEEKS, WEEKYEARS)
DAY_OF_WEEK = DateTimeFieldType("day_of_week", DAYS, WEEKS)
HALFDAY_OF_DAY = DateTimeFieldType("halfday_of_day", HALFDAYS, DAYS)
HOUR_OF_HALFDAY = DateTimeFieldType("hour_of_halfday", HOURS, HALFDAYS)
CLOCKHOUR_OF_HALFDAY = DateTimeFieldType("clockhour_of_halfday", HOURS, HALFDAYS)
CLOCKHOUR_OF_DAY = DateTimeFieldType("clockhour_of_day", HOURS, DAYS)
HOUR_OF_DAY = DateTimeFieldType("hour_of_day", HOURS, DAYS)
MINUTE_OF_DAY = DateTimeFieldType("minute_of_day", MINUTES, DAYS)
MINUTE_OF_HOUR = DateTimeFieldType("minute_of_hour", MINUTES, HOURS)
SECOND_OF_DAY = DateTimeFieldType("second_of_day", SECONDS, DAYS)
SECOND_OF_MINUTE = DateTimeFieldType("second_of_minute", SECONDS, MINUTES)
MILLIS_OF_DAY = DateTimeFieldType("millis_of_day", MILLIS, DAYS)
MILLIS_OF_SECOND = DateTimeFieldType("millis_of_second", MILLIS, SECONDS)
