"""Wrappers that decide what ``set`` does with an out-of-range value.

Use the :func:`lenient` and :func:`strict` composers rather than the classes:
they unwrap an opposite wrapper first and return an existing wrapper of the
requested kind unchanged.
"""

from typing_extensions import override

from calfield.arith import safe_subtract, verify_value_bounds
from calfield.decorated import DelegatedDateTimeField
from calfield.field import DateTimeField


class LenientDateTimeField(DelegatedDateTimeField):
    """Accepts any value in ``set`` and carries the excess into larger fields.

    Setting day-of-month 32 in January lands on 1 February.
    """

    @property
    @override
    def is_lenient(self) -> bool:
        return True

    @override
    def set(self, instant: int, value: int) -> int:
        minimum = self.minimum_value_at(instant)
        instant = self._field.set(instant, minimum)
        return self._field.add(instant, safe_subtract(value, minimum))


class StrictDateTimeField(DelegatedDateTimeField):
    """Rejects any value in ``set`` outside the bounds at that instant."""

    @property
    @override
    def is_lenient(self) -> bool:
        return False

    @override
    def set(self, instant: int, value: int) -> int:
        verify_value_bounds(
            self,
            value,
            self.minimum_value_at(instant),
            self.maximum_value_at(instant),
        )
        return self._field.set(instant, value)


def lenient(field: DateTimeField) -> DateTimeField:
    """Wrap ``field`` so ``set`` carries instead of failing."""
    if isinstance(field, LenientDateTimeField):
        return field
    if isinstance(field, StrictDateTimeField):
        field = field.wrapped
    return LenientDateTimeField(field)


def strict(field: DateTimeField) -> DateTimeField:
    """Wrap ``field`` so ``set`` always bounds-checks."""
    if isinstance(field, StrictDateTimeField):
        return field
    if isinstance(field, LenientDateTimeField):
        field = field.wrapped
    return StrictDateTimeField(field)
