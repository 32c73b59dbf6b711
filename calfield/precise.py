"""Fields stepped in a fixed-length unit.

With a fixed step length, reading the field is integer division of the
instant and setting it is a plain offset, so nothing here needs to know about
months or leap years.
"""

from typing_extensions import override

from calfield.arith import (
    safe_add,
    safe_multiply,
    safe_subtract,
    verify_value_bounds,
    wrap_add,
)
from calfield.duration import DurationField
from calfield.errors import IllegalArgumentError
from calfield.field import DateTimeField
from calfield.fieldtypes import DateTimeFieldType


class PreciseDurationDateTimeField(DateTimeField):
    """Field whose step unit is precise; the range may still vary.

    Subclasses supply ``get``, the range unit and the maximum. Day-of-month is
    the typical case: every step is a day, but the range is a month.
    """

    def __init__(self, field_type: DateTimeFieldType, unit: DurationField):
        super().__init__(field_type)
        if not unit.is_precise:
            raise IllegalArgumentError(
                f"Unit duration field must be precise, got {unit!r}"
            )
        if unit.unit_millis < 1:
            raise IllegalArgumentError(
                f"The unit milliseconds must be at least 1, got {unit.unit_millis}"
            )
        self._unit_field: DurationField = unit
        self._unit_millis: int = unit.unit_millis

    @property
    def unit_millis(self) -> int:
        return self._unit_millis

    @override
    def set(self, instant: int, value: int) -> int:
        verify_value_bounds(
            self,
            value,
            self.minimum_value(),
            self._maximum_value_for_set(instant, value),
        )
        return safe_add(
            instant,
            safe_multiply(safe_subtract(value, self.get(instant)), self._unit_millis),
        )

    def _maximum_value_for_set(self, instant: int, value: int) -> int:
        return self.maximum_value_at(instant)

    @override
    def round_floor(self, instant: int) -> int:
        return safe_subtract(instant, instant % self._unit_millis)

    @override
    def round_ceiling(self, instant: int) -> int:
        floor = self.round_floor(instant)
        if floor == instant:
            return instant
        return safe_add(floor, self._unit_millis)

    @override
    def remainder(self, instant: int) -> int:
        return instant % self._unit_millis

    @property
    @override
    def duration_field(self) -> DurationField:
        return self._unit_field

    @override
    def minimum_value(self) -> int:
        return 0


class PreciseDateTimeField(PreciseDurationDateTimeField):
    """Field whose step and range units are both precise, e.g. minute-of-hour.

    Values run from 0 to ``range / unit - 1``.
    """

    def __init__(
        self,
        field_type: DateTimeFieldType,
        unit: DurationField,
        range_field: DurationField,
    ):
        super().__init__(field_type, unit)
        if not range_field.is_precise:
            raise IllegalArgumentError(
                f"Range duration field must be precise, got {range_field!r}"
            )
        self._range: int = range_field.unit_millis // self.unit_millis
        if self._range < 2:
            raise IllegalArgumentError(
                f"The effective range must be at least 2, got {self._range} "
                f"({range_field.name} / {unit.name})"
            )
        self._range_field: DurationField = range_field

    @property
    def range(self) -> int:
        """Number of distinct values, ``maximum_value() + 1``."""
        return self._range

    @override
    def get(self, instant: int) -> int:
        return (instant // self.unit_millis) % self._range

    @override
    def add_wrap_field(self, instant: int, value: int) -> int:
        current = self.get(instant)
        wrapped = wrap_add(current, value, self.minimum_value(), self.maximum_value())
        return safe_add(instant, (wrapped - current) * self.unit_millis)

    @override
    def set(self, instant: int, value: int) -> int:
        verify_value_bounds(self, value, self.minimum_value(), self.maximum_value())
        return safe_add(instant, (value - self.get(instant)) * self.unit_millis)

    @property
    @override
    def range_duration_field(self) -> DurationField:
        return self._range_field

    @override
    def maximum_value(self) -> int:
        return self._range - 1
