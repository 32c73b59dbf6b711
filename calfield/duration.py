"""Duration units: a named length of time that instants can be advanced by.

A precise unit has the same length wherever it is applied (seconds, hours).
An imprecise unit, such as the month, only has a nominal length; its exact
length is worked out from the instant it is applied to, which is why the
conversions accept an optional reference instant.
"""

from abc import ABC, abstractmethod

from typing_extensions import override

from calfield.arith import (
    safe_add,
    safe_divide,
    safe_multiply,
    safe_negate,
    safe_subtract,
    truncated_divide,
)
from calfield.errors import IllegalArgumentError
from calfield.fieldtypes import MILLIS, DurationFieldType


class DurationField(ABC):

    @property
    @abstractmethod
    def type(self) -> DurationFieldType:
        pass

    @property
    def name(self) -> str:
        return self.type.name

    @property
    @abstractmethod
    def is_supported(self) -> bool:
        pass

    @property
    @abstractmethod
    def is_precise(self) -> bool:
        """True if every unit has the same length regardless of position."""
        pass

    @property
    @abstractmethod
    def unit_millis(self) -> int:
        """Length of one unit; the nominal length when the unit is imprecise."""
        pass

    def unit_length(self, instant: int | None = None) -> int:
        """Exact length of the single unit starting at ``instant``."""
        return self.from_units(1, instant)

    @abstractmethod
    def to_units(self, duration: int, instant: int | None = None) -> int:
        """Convert a millisecond duration into whole units, truncating toward zero.

        Imprecise units measure the duration forward from ``instant`` when one
        is given, and fall back to the nominal unit length otherwise.
        """
        pass

    @abstractmethod
    def from_units(self, value: int, instant: int | None = None) -> int:
        """Convert a unit count into milliseconds, checked for overflow."""
        pass

    @abstractmethod
    def add(self, instant: int, value: int) -> int:
        pass

    def subtract(self, instant: int, value: int) -> int:
        return self.add(instant, safe_negate(value))

    @abstractmethod
    def difference(self, minuend_instant: int, subtrahend_instant: int) -> int:
        """Largest ``n`` with ``add(subtrahend, n)`` not passing ``minuend``."""
        pass

    def compare(self, other: "DurationField") -> int:
        """Order units by length: -1, 0 or 1.

        Imprecise units compare by nominal length. Ties compare equal, so
        this ordering ignores the type tag and is inconsistent with ``==``.
        """
        this_millis = self.unit_millis
        other_millis = other.unit_millis
        return (this_millis > other_millis) - (this_millis < other_millis)

    def __lt__(self, other: "DurationField") -> bool:
        return self.compare(other) < 0

    def __le__(self, other: "DurationField") -> bool:
        return self.compare(other) <= 0

    def __gt__(self, other: "DurationField") -> bool:
        return self.compare(other) > 0

    def __ge__(self, other: "DurationField") -> bool:
        return self.compare(other) >= 0

    @override
    def __repr__(self) -> str:
        return f"DurationField[{self.name}]"


class BaseDurationField(DurationField):
    """Supported unit identified by a type tag; conversions use the unit length."""

    def __init__(self, field_type: DurationFieldType):
        if field_type is None:
            raise IllegalArgumentError("The duration type must not be None")
        self._type: DurationFieldType = field_type

    @property
    @override
    def type(self) -> DurationFieldType:
        return self._type

    @property
    @override
    def is_supported(self) -> bool:
        return True

    @override
    def to_units(self, duration: int, instant: int | None = None) -> int:
        return safe_divide(duration, self.unit_millis)

    @override
    def from_units(self, value: int, instant: int | None = None) -> int:
        return safe_multiply(value, self.unit_millis)


class PreciseDurationField(BaseDurationField):
    """Unit with a fixed length in milliseconds."""

    def __init__(self, field_type: DurationFieldType, unit_millis: int):
        super().__init__(field_type)
        if unit_millis < 1:
            raise IllegalArgumentError(
                f"The unit milliseconds must be at least 1, got {unit_millis}"
            )
        self._unit_millis: int = unit_millis

    @property
    @override
    def is_precise(self) -> bool:
        return True

    @property
    @override
    def unit_millis(self) -> int:
        return self._unit_millis

    @override
    def add(self, instant: int, value: int) -> int:
        return safe_add(instant, safe_multiply(value, self._unit_millis))

    @override
    def difference(self, minuend_instant: int, subtrahend_instant: int) -> int:
        return safe_divide(
            safe_subtract(minuend_instant, subtrahend_instant), self._unit_millis
        )


class MillisDurationField(PreciseDurationField):
    """The base unit every instant is counted in."""

    def __init__(self) -> None:
        super().__init__(MILLIS, 1)

    @override
    def to_units(self, duration: int, instant: int | None = None) -> int:
        return duration

    @override
    def from_units(self, value: int, instant: int | None = None) -> int:
        return value

    @override
    def add(self, instant: int, value: int) -> int:
        return safe_add(instant, value)

    @override
    def difference(self, minuend_instant: int, subtrahend_instant: int) -> int:
        return safe_subtract(minuend_instant, subtrahend_instant)


millis_duration: MillisDurationField = MillisDurationField()


class DecoratedDurationField(BaseDurationField):
    """Forwards everything to a wrapped unit; subclasses adjust a subset."""

    def __init__(self, field: DurationField, field_type: DurationFieldType):
        super().__init__(field_type)
        if field is None:
            raise IllegalArgumentError("The wrapped duration field must not be None")
        if not field.is_supported:
            raise IllegalArgumentError(
                f"The wrapped duration field must be supported, got {field!r}"
            )
        self._field: DurationField = field

    @property
    def wrapped(self) -> DurationField:
        return self._field

    @property
    @override
    def is_precise(self) -> bool:
        return self._field.is_precise

    @property
    @override
    def unit_millis(self) -> int:
        return self._field.unit_millis

    @override
    def to_units(self, duration: int, instant: int | None = None) -> int:
        return self._field.to_units(duration, instant)

    @override
    def from_units(self, value: int, instant: int | None = None) -> int:
        return self._field.from_units(value, instant)

    @override
    def add(self, instant: int, value: int) -> int:
        return self._field.add(instant, value)

    @override
    def difference(self, minuend_instant: int, subtrahend_instant: int) -> int:
        return self._field.difference(minuend_instant, subtrahend_instant)


class ScaledDurationField(DecoratedDurationField):
    """A unit that is a whole multiple of another, e.g. a week of seven days."""

    def __init__(
        self, field: DurationField, field_type: DurationFieldType, scalar: int
    ):
        super().__init__(field, field_type)
        if scalar in (-1, 0, 1):
            raise IllegalArgumentError(
                f"The scalar must not be 0, 1 or -1, got {scalar}"
            )
        self._scalar: int = scalar

    @property
    def scalar(self) -> int:
        return self._scalar

    @property
    @override
    def unit_millis(self) -> int:
        return safe_multiply(self._field.unit_millis, self._scalar)

    @override
    def to_units(self, duration: int, instant: int | None = None) -> int:
        return truncated_divide(self._field.to_units(duration, instant), self._scalar)

    @override
    def from_units(self, value: int, instant: int | None = None) -> int:
        return self._field.from_units(safe_multiply(value, self._scalar), instant)

    @override
    def add(self, instant: int, value: int) -> int:
        return self._field.add(instant, safe_multiply(value, self._scalar))

    @override
    def difference(self, minuend_instant: int, subtrahend_instant: int) -> int:
        return truncated_divide(
            self._field.difference(minuend_instant, subtrahend_instant),
            self._scalar,
        )
