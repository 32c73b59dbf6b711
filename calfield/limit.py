"""A field that only operates on instants inside a fixed range.

Both the instant passed in and any instant produced are checked, so a limited
year field cannot step a value past the range either.

    >>> limited = LimitDateTimeField(year, lower=iso.instant(1900))
    >>> limited.add(iso.instant(1900, 6), -1)
    Traceback (most recent call last):
    ...
    InstantLimitError: The resulting instant ... is below the supported minimum ...
"""

from typing_extensions import override

from calfield.decorated import DelegatedDateTimeField
from calfield.errors import IllegalArgumentError, InstantLimitError
from calfield.field import DateTimeField


class LimitDateTimeField(DelegatedDateTimeField):
    """Rejects instants below ``lower`` or at or after ``upper``.

    Args:
        field: The field to limit
        lower: Inclusive lower bound, or None for no lower bound
        upper: Exclusive upper bound, or None for no upper bound
    """

    def __init__(
        self,
        field: DateTimeField,
        *,
        lower: int | None = None,
        upper: int | None = None,
    ):
        super().__init__(field)
        if lower is not None and upper is not None and lower >= upper:
            raise IllegalArgumentError(
                f"The lower limit must be before the upper limit, "
                f"got [{lower}, {upper})"
            )
        self._lower: int | None = lower
        self._upper: int | None = upper

    @property
    def lower(self) -> int | None:
        return self._lower

    @property
    def upper(self) -> int | None:
        return self._upper

    def _check(self, instant: int, desc: str | None = None) -> int:
        if self._lower is not None and instant < self._lower:
            raise InstantLimitError(instant, self._lower, True, desc)
        if self._upper is not None and instant >= self._upper:
            raise InstantLimitError(instant, self._upper, False, desc)
        return instant

    @override
    def get(self, instant: int) -> int:
        return self._field.get(self._check(instant))

    @override
    def set(self, instant: int, value: int) -> int:
        result = self._field.set(self._check(instant), value)
        return self._check(result, "resulting")

    @override
    def add(self, instant: int, value: int) -> int:
        result = self._field.add(self._check(instant), value)
        return self._check(result, "resulting")

    @override
    def add_wrap_field(self, instant: int, value: int) -> int:
        result = self._field.add_wrap_field(self._check(instant), value)
        return self._check(result, "resulting")

    @override
    def difference(self, minuend_instant: int, subtrahend_instant: int) -> int:
        self._check(minuend_instant, "minuend")
        self._check(subtrahend_instant, "subtrahend")
        return self._field.difference(minuend_instant, subtrahend_instant)

    @override
    def is_leap(self, instant: int) -> bool:
        return self._field.is_leap(self._check(instant))

    @override
    def leap_amount(self, instant: int) -> int:
        return self._field.leap_amount(self._check(instant))

    @override
    def minimum_value_at(self, instant: int) -> int:
        return self._field.minimum_value_at(self._check(instant))

    @override
    def maximum_value_at(self, instant: int) -> int:
        return self._field.maximum_value_at(self._check(instant))

    @override
    def round_floor(self, instant: int) -> int:
        result = self._field.round_floor(self._check(instant))
        return self._check(result, "resulting")

    @override
    def round_ceiling(self, instant: int) -> int:
        result = self._field.round_ceiling(self._check(instant))
        return self._check(result, "resulting")

    @override
    def round_half_floor(self, instant: int) -> int:
        result = self._field.round_half_floor(self._check(instant))
        return self._check(result, "resulting")

    @override
    def round_half_ceiling(self, instant: int) -> int:
        result = self._field.round_half_ceiling(self._check(instant))
        return self._check(result, "resulting")

    @override
    def round_half_even(self, instant: int) -> int:
        result = self._field.round_half_even(self._check(instant))
        return self._check(result, "resulting")

    @override
    def remainder(self, instant: int) -> int:
        # A remainder is a duration, not an instant
        return self._field.remainder(self._check(instant))

    @override
    def __repr__(self) -> str:
        return f"LimitDateTimeField[{self.name}, {self._lower}, {self._upper}]"
