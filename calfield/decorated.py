"""Fields that wrap another field and adjust part of its behavior.

Each wrapper holds exactly one inner field, overrides the few operations it
changes and forwards the rest, so wrappers nest freely: a clock-hour field is
a zero-is-max wrapper around a precise hour-of-day field.
"""

from abc import abstractmethod
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from typing_extensions import override

from calfield.arith import (
    safe_multiply,
    truncated_divide,
    verify_value_bounds,
    wrap_add,
)
from calfield.duration import DurationField, ScaledDurationField
from calfield.errors import IllegalArgumentError, IllegalFieldValueError
from calfield.field import DateTimeField
from calfield.fieldtypes import DateTimeFieldType
from calfield.util import VALUE_MAX, VALUE_MIN

if TYPE_CHECKING:
    from calfield.partial import Partial


def _require_field(field: DateTimeField) -> DateTimeField:
    if field is None:
        raise IllegalArgumentError("The wrapped field must not be None")
    return field


class DelegatedDateTimeField(DateTimeField):
    """Forwards every operation to the wrapped field, optionally renaming it."""

    def __init__(
        self, field: DateTimeField, field_type: DateTimeFieldType | None = None
    ):
        field = _require_field(field)
        super().__init__(field_type if field_type is not None else field.type)
        self._field: DateTimeField = field

    @property
    def wrapped(self) -> DateTimeField:
        return self._field

    @property
    @override
    def is_supported(self) -> bool:
        return self._field.is_supported

    @property
    @override
    def is_lenient(self) -> bool:
        return self._field.is_lenient

    @override
    def get(self, instant: int) -> int:
        return self._field.get(instant)

    @override
    def set(self, instant: int, value: int) -> int:
        return self._field.set(instant, value)

    @override
    def add(self, instant: int, value: int) -> int:
        return self._field.add(instant, value)

    @override
    def add_wrap_field(self, instant: int, value: int) -> int:
        return self._field.add_wrap_field(instant, value)

    @override
    def difference(self, minuend_instant: int, subtrahend_instant: int) -> int:
        return self._field.difference(minuend_instant, subtrahend_instant)

    @override
    def add_partial(
        self, partial: "Partial", field_index: int, values: Sequence[int], value: int
    ) -> list[int]:
        return self._field.add_partial(partial, field_index, values, value)

    @override
    def add_wrap_partial(
        self, partial: "Partial", field_index: int, values: Sequence[int], value: int
    ) -> list[int]:
        return self._field.add_wrap_partial(partial, field_index, values, value)

    @override
    def add_wrap_field_partial(
        self, partial: "Partial", field_index: int, values: Sequence[int], value: int
    ) -> list[int]:
        return self._field.add_wrap_field_partial(partial, field_index, values, value)

    @override
    def set_partial(
        self,
        partial: "Partial",
        field_index: int,
        values: Sequence[int],
        new_value: int,
    ) -> list[int]:
        return self._field.set_partial(partial, field_index, values, new_value)

    @override
    def verify_partial_value(
        self, partial: "Partial", values: Sequence[int], value: int
    ) -> None:
        self._field.verify_partial_value(partial, values, value)

    @property
    @override
    def duration_field(self) -> DurationField:
        return self._field.duration_field

    @property
    @override
    def range_duration_field(self) -> DurationField | None:
        return self._field.range_duration_field

    @override
    def is_leap(self, instant: int) -> bool:
        return self._field.is_leap(instant)

    @override
    def leap_amount(self, instant: int) -> int:
        return self._field.leap_amount(instant)

    @property
    @override
    def leap_duration_field(self) -> DurationField | None:
        return self._field.leap_duration_field

    @override
    def minimum_value(self) -> int:
        return self._field.minimum_value()

    @override
    def minimum_value_at(self, instant: int) -> int:
        return self._field.minimum_value_at(instant)

    @override
    def minimum_value_for(
        self, partial: "Partial", values: Sequence[int] | None = None
    ) -> int:
        return self._field.minimum_value_for(partial, values)

    @override
    def maximum_value(self) -> int:
        return self._field.maximum_value()

    @override
    def maximum_value_at(self, instant: int) -> int:
        return self._field.maximum_value_at(instant)

    @override
    def maximum_value_for(
        self, partial: "Partial", values: Sequence[int] | None = None
    ) -> int:
        return self._field.maximum_value_for(partial, values)

    @override
    def round_floor(self, instant: int) -> int:
        return self._field.round_floor(instant)

    @override
    def round_ceiling(self, instant: int) -> int:
        return self._field.round_ceiling(instant)

    @override
    def round_half_floor(self, instant: int) -> int:
        return self._field.round_half_floor(instant)

    @override
    def round_half_ceiling(self, instant: int) -> int:
        return self._field.round_half_ceiling(instant)

    @override
    def round_half_even(self, instant: int) -> int:
        return self._field.round_half_even(instant)

    @override
    def remainder(self, instant: int) -> int:
        return self._field.remainder(instant)


class DecoratedDateTimeField(DateTimeField):
    """Base for wrappers that change values but keep the wrapped units.

    Only reading, writing, flooring and the context-free bounds are forwarded;
    everything else falls back to the generic implementations, which route
    through this wrapper's own ``get`` and ``set``.
    """

    def __init__(self, field: DateTimeField, field_type: DateTimeFieldType):
        field = _require_field(field)
        super().__init__(field_type)
        if not field.is_supported:
            raise IllegalArgumentError(
                f"The wrapped field must be supported, got {field!r}"
            )
        self._field: DateTimeField = field

    @property
    def wrapped(self) -> DateTimeField:
        return self._field

    @property
    @override
    def is_lenient(self) -> bool:
        return self._field.is_lenient

    @override
    def get(self, instant: int) -> int:
        return self._field.get(instant)

    @override
    def set(self, instant: int, value: int) -> int:
        return self._field.set(instant, value)

    @property
    @override
    def duration_field(self) -> DurationField:
        return self._field.duration_field

    @property
    @override
    def range_duration_field(self) -> DurationField | None:
        return self._field.range_duration_field

    @override
    def minimum_value(self) -> int:
        return self._field.minimum_value()

    @override
    def maximum_value(self) -> int:
        return self._field.maximum_value()

    @override
    def round_floor(self, instant: int) -> int:
        return self._field.round_floor(instant)


class OffsetDateTimeField(DecoratedDateTimeField):
    """Shifts every value by a fixed, non-zero amount.

    The usable range is the wrapped range shifted by the offset, narrowed
    further by ``min_value``/``max_value`` when given.
    """

    def __init__(
        self,
        field: DateTimeField,
        offset: int,
        *,
        field_type: DateTimeFieldType | None = None,
        min_value: int = VALUE_MIN,
        max_value: int = VALUE_MAX,
    ):
        field = _require_field(field)
        super().__init__(field, field_type if field_type is not None else field.type)
        if offset == 0:
            raise IllegalArgumentError("The offset cannot be zero")
        self._offset: int = offset
        self._min: int = max(min_value, field.minimum_value() + offset)
        self._max: int = min(max_value, field.maximum_value() + offset)

    @property
    def offset(self) -> int:
        return self._offset

    @override
    def get(self, instant: int) -> int:
        return super().get(instant) + self._offset

    @override
    def add(self, instant: int, value: int) -> int:
        instant = super().add(instant, value)
        verify_value_bounds(self, self.get(instant), self._min, self._max)
        return instant

    @override
    def add_wrap_field(self, instant: int, value: int) -> int:
        return self.set(
            instant, wrap_add(self.get(instant), value, self._min, self._max)
        )

    @override
    def set(self, instant: int, value: int) -> int:
        verify_value_bounds(self, value, self._min, self._max)
        return super().set(instant, value - self._offset)

    @override
    def is_leap(self, instant: int) -> bool:
        return self._field.is_leap(instant)

    @override
    def leap_amount(self, instant: int) -> int:
        return self._field.leap_amount(instant)

    @property
    @override
    def leap_duration_field(self) -> DurationField | None:
        return self._field.leap_duration_field

    @override
    def minimum_value(self) -> int:
        return self._min

    @override
    def maximum_value(self) -> int:
        return self._max

    @override
    def round_ceiling(self, instant: int) -> int:
        return self._field.round_ceiling(instant)

    @override
    def round_half_floor(self, instant: int) -> int:
        return self._field.round_half_floor(instant)

    @override
    def round_half_ceiling(self, instant: int) -> int:
        return self._field.round_half_ceiling(instant)

    @override
    def round_half_even(self, instant: int) -> int:
        return self._field.round_half_even(instant)

    @override
    def remainder(self, instant: int) -> int:
        return self._field.remainder(instant)


class _RemappedDateTimeField(DelegatedDateTimeField):
    """Delegates in the wrapped field's value space, renumbering on the way.

    Partial values arrive in this field's numbering; the entry at
    ``field_index`` is translated before delegating and the result is
    translated back, so carries and bounds checks happen where they are valid.
    """

    def __init__(self, field: DateTimeField, skip: int = 0):
        super().__init__(field)
        self._skip: int = skip

    @property
    def skip(self) -> int:
        return self._skip

    @abstractmethod
    def _to_wrapped(self, value: int) -> int:
        pass

    @abstractmethod
    def _from_wrapped(self, value: int) -> int:
        pass

    def _delegate_partial(
        self,
        operation: Callable[["Partial", int, list[int], int], list[int]],
        partial: "Partial",
        field_index: int,
        values: Sequence[int],
        value: int,
    ) -> list[int]:
        values = list(values)
        values[field_index] = self._to_wrapped(values[field_index])
        result = operation(partial, field_index, values, value)
        result[field_index] = self._from_wrapped(result[field_index])
        return result

    @override
    def get(self, instant: int) -> int:
        return self._from_wrapped(self._field.get(instant))

    @override
    def set(self, instant: int, value: int) -> int:
        verify_value_bounds(self, value, self.minimum_value(), self.maximum_value())
        return self._field.set(instant, self._to_wrapped(value))

    @override
    def add_partial(
        self, partial: "Partial", field_index: int, values: Sequence[int], value: int
    ) -> list[int]:
        return self._delegate_partial(
            self._field.add_partial, partial, field_index, values, value
        )

    @override
    def add_wrap_partial(
        self, partial: "Partial", field_index: int, values: Sequence[int], value: int
    ) -> list[int]:
        return self._delegate_partial(
            self._field.add_wrap_partial, partial, field_index, values, value
        )

    @override
    def add_wrap_field_partial(
        self, partial: "Partial", field_index: int, values: Sequence[int], value: int
    ) -> list[int]:
        return self._delegate_partial(
            self._field.add_wrap_field_partial, partial, field_index, values, value
        )

    @override
    def set_partial(
        self,
        partial: "Partial",
        field_index: int,
        values: Sequence[int],
        new_value: int,
    ) -> list[int]:
        self.verify_partial_value(partial, values, new_value)
        return self._delegate_partial(
            self._field.set_partial,
            partial,
            field_index,
            values,
            self._to_wrapped(new_value),
        )

    @override
    def verify_partial_value(
        self, partial: "Partial", values: Sequence[int], value: int
    ) -> None:
        verify_value_bounds(
            self,
            value,
            self.minimum_value_for(partial, values),
            self.maximum_value_for(partial, values),
        )

    @override
    def minimum_value(self) -> int:
        return self._min

    @override
    def minimum_value_at(self, instant: int) -> int:
        return self._min

    @override
    def minimum_value_for(
        self, partial: "Partial", values: Sequence[int] | None = None
    ) -> int:
        return self._min


class SkipDateTimeField(_RemappedDateTimeField):
    """Removes one value from the sequence, e.g. the year zero.

    Values at or below ``skip`` read one lower, so the wrapped sequence
    -1, 0, 1 reads as -2, -1, 1.
    """

    def __init__(self, field: DateTimeField, skip: int = 0):
        super().__init__(field, skip)
        wrapped_min = self._field.minimum_value()
        self._min: int = wrapped_min - 1 if wrapped_min <= skip else wrapped_min

    def _reject_skipped(self, value: int) -> None:
        if value == self._skip:
            raise IllegalFieldValueError(
                self.name, value, reason="does not exist in this calendar"
            )

    @override
    def _to_wrapped(self, value: int) -> int:
        self._reject_skipped(value)
        return value + 1 if value < self._skip else value

    @override
    def _from_wrapped(self, value: int) -> int:
        return value - 1 if value <= self._skip else value

    @override
    def verify_partial_value(
        self, partial: "Partial", values: Sequence[int], value: int
    ) -> None:
        super().verify_partial_value(partial, values, value)
        self._reject_skipped(value)


class SkipUndoDateTimeField(_RemappedDateTimeField):
    """Puts a skipped value back, the inverse of :class:`SkipDateTimeField`.

    Values below ``skip`` read one higher, so -2, -1, 1 reads as -1, 0, 1.
    """

    def __init__(self, field: DateTimeField, skip: int = 0):
        super().__init__(field, skip)
        wrapped_min = self._field.minimum_value()
        self._min: int = wrapped_min + 1 if wrapped_min < skip else wrapped_min

    @override
    def _to_wrapped(self, value: int) -> int:
        return value - 1 if value <= self._skip else value

    @override
    def _from_wrapped(self, value: int) -> int:
        return value + 1 if value < self._skip else value


class ZeroIsMaxDateTimeField(DecoratedDateTimeField):
    """Reads a wrapped zero as one past the wrapped maximum.

    Turns hour-of-day (0-23) into clock-hour-of-day (1-24).
    """

    def __init__(
        self, field: DateTimeField, field_type: DateTimeFieldType | None = None
    ):
        field = _require_field(field)
        super().__init__(field, field_type if field_type is not None else field.type)
        if field.minimum_value() != 0:
            raise IllegalArgumentError(
                f"Wrapped field's minimum value must be zero, "
                f"got {field.minimum_value()} for {field.name}"
            )

    @override
    def get(self, instant: int) -> int:
        value = self._field.get(instant)
        if value == 0:
            value = self.maximum_value()
        return value

    @override
    def add(self, instant: int, value: int) -> int:
        return self._field.add(instant, value)

    @override
    def add_wrap_field(self, instant: int, value: int) -> int:
        return self._field.add_wrap_field(instant, value)

    @override
    def difference(self, minuend_instant: int, subtrahend_instant: int) -> int:
        return self._field.difference(minuend_instant, subtrahend_instant)

    @override
    def set(self, instant: int, value: int) -> int:
        maximum = self.maximum_value()
        verify_value_bounds(self, value, 1, maximum)
        if value == maximum:
            value = 0
        return self._field.set(instant, value)

    @override
    def is_leap(self, instant: int) -> bool:
        return self._field.is_leap(instant)

    @override
    def leap_amount(self, instant: int) -> int:
        return self._field.leap_amount(instant)

    @property
    @override
    def leap_duration_field(self) -> DurationField | None:
        return self._field.leap_duration_field

    @override
    def minimum_value(self) -> int:
        return 1

    @override
    def minimum_value_at(self, instant: int) -> int:
        return 1

    @override
    def minimum_value_for(
        self, partial: "Partial", values: Sequence[int] | None = None
    ) -> int:
        return 1

    @override
    def maximum_value(self) -> int:
        return self._field.maximum_value() + 1

    @override
    def maximum_value_at(self, instant: int) -> int:
        return self._field.maximum_value_at(instant) + 1

    @override
    def maximum_value_for(
        self, partial: "Partial", values: Sequence[int] | None = None
    ) -> int:
        return self._field.maximum_value_for(partial, values) + 1

    @override
    def round_ceiling(self, instant: int) -> int:
        return self._field.round_ceiling(instant)

    @override
    def round_half_floor(self, instant: int) -> int:
        return self._field.round_half_floor(instant)

    @override
    def round_half_ceiling(self, instant: int) -> int:
        return self._field.round_half_ceiling(instant)

    @override
    def round_half_even(self, instant: int) -> int:
        return self._field.round_half_even(instant)

    @override
    def remainder(self, instant: int) -> int:
        return self._field.remainder(instant)


class DividedDateTimeField(DecoratedDateTimeField):
    """Groups the wrapped values by ``divisor``, e.g. century from year.

    The step unit becomes ``divisor`` wrapped units. Negative wrapped values
    divide toward negative infinity, so -1 belongs to group -1.
    """

    def __init__(
        self,
        field: DateTimeField,
        field_type: DateTimeFieldType,
        divisor: int,
        *,
        range_field: DurationField | None = None,
        duration_field: DurationField | None = None,
    ):
        super().__init__(field, field_type)
        if divisor < 2:
            raise IllegalArgumentError(f"The divisor must be at least 2, got {divisor}")
        if duration_field is None:
            duration_field = ScaledDurationField(
                field.duration_field, field_type.duration_type, divisor
            )
        self._divisor: int = divisor
        self._duration_field: DurationField = duration_field
        self._range_field: DurationField | None = (
            range_field if range_field is not None else field.range_duration_field
        )
        self._min: int = field.minimum_value() // divisor
        self._max: int = field.maximum_value() // divisor

    @classmethod
    def from_remainder(
        cls, remainder_field: "RemainderDateTimeField", field_type: DateTimeFieldType
    ) -> "DividedDateTimeField":
        """Build the quotient field matching an existing remainder field."""
        return cls(
            remainder_field.wrapped,
            field_type,
            remainder_field.divisor,
            duration_field=remainder_field.range_duration_field,
        )

    @property
    def divisor(self) -> int:
        return self._divisor

    @override
    def get(self, instant: int) -> int:
        return self._field.get(instant) // self._divisor

    @override
    def add(self, instant: int, value: int) -> int:
        return self._field.add(instant, safe_multiply(value, self._divisor))

    @override
    def add_wrap_field(self, instant: int, value: int) -> int:
        return self.set(
            instant, wrap_add(self.get(instant), value, self._min, self._max)
        )

    @override
    def difference(self, minuend_instant: int, subtrahend_instant: int) -> int:
        return truncated_divide(
            self._field.difference(minuend_instant, subtrahend_instant),
            self._divisor,
        )

    @override
    def set(self, instant: int, value: int) -> int:
        verify_value_bounds(self, value, self._min, self._max)
        remainder = self._field.get(instant) % self._divisor
        return self._field.set(instant, value * self._divisor + remainder)

    @property
    @override
    def duration_field(self) -> DurationField:
        return self._duration_field

    @property
    @override
    def range_duration_field(self) -> DurationField | None:
        return self._range_field

    @override
    def minimum_value(self) -> int:
        return self._min

    @override
    def maximum_value(self) -> int:
        return self._max

    @override
    def round_floor(self, instant: int) -> int:
        field = self._field
        return field.round_floor(field.set(instant, self.get(instant) * self._divisor))


class RemainderDateTimeField(DecoratedDateTimeField):
    """The wrapped value modulo ``divisor``, e.g. year-of-century from year.

    Values run from 0 to ``divisor - 1`` and range over a unit of ``divisor``
    wrapped units.
    """

    def __init__(
        self,
        field: DateTimeField,
        field_type: DateTimeFieldType,
        divisor: int,
        *,
        range_field: DurationField | None = None,
    ):
        super().__init__(field, field_type)
        if divisor < 2:
            raise IllegalArgumentError(f"The divisor must be at least 2, got {divisor}")
        if range_field is None:
            if field_type.range_type is None:
                raise IllegalArgumentError(
                    f"{field_type.name} needs a range type to scale the range unit"
                )
            range_field = ScaledDurationField(
                field.duration_field, field_type.range_type, divisor
            )
        self._divisor: int = divisor
        self._range_field: DurationField = range_field

    @classmethod
    def from_divided(
        cls, divided_field: DividedDateTimeField, field_type: DateTimeFieldType
    ) -> "RemainderDateTimeField":
        """Build the remainder field matching an existing quotient field."""
        return cls(
            divided_field.wrapped,
            field_type,
            divided_field.divisor,
            range_field=divided_field.duration_field,
        )

    @property
    def divisor(self) -> int:
        return self._divisor

    @override
    def get(self, instant: int) -> int:
        return self._field.get(instant) % self._divisor

    @override
    def add_wrap_field(self, instant: int, value: int) -> int:
        return self.set(
            instant, wrap_add(self.get(instant), value, 0, self._divisor - 1)
        )

    @override
    def set(self, instant: int, value: int) -> int:
        verify_value_bounds(self, value, 0, self._divisor - 1)
        divided = self._field.get(instant) // self._divisor
        return self._field.set(instant, divided * self._divisor + value)

    @property
    @override
    def range_duration_field(self) -> DurationField:
        return self._range_field

    @override
    def minimum_value(self) -> int:
        return 0

    @override
    def maximum_value(self) -> int:
        return self._divisor - 1

    @override
    def round_ceiling(self, instant: int) -> int:
        return self._field.round_ceiling(instant)

    @override
    def round_half_floor(self, instant: int) -> int:
        return self._field.round_half_floor(instant)

    @override
    def round_half_ceiling(self, instant: int) -> int:
        return self._field.round_half_ceiling(instant)

    @override
    def round_half_even(self, instant: int) -> int:
        return self._field.round_half_even(instant)

    @override
    def remainder(self, instant: int) -> int:
        return self._field.remainder(instant)
