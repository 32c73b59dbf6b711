"""Fields stepped in a unit whose length depends on where it is applied.

Months and years cannot be computed by division, so subclasses implement
``get``, ``set`` and ``add`` against their calendar directly. This module
supplies the rest: a difference that inverts ``add`` exactly, and a duration
unit that routes back through the field.
"""

from abc import abstractmethod

from typing_extensions import override

from calfield.arith import safe_add, safe_divide, safe_subtract
from calfield.duration import BaseDurationField, DurationField
from calfield.fieldtypes import DateTimeFieldType
from calfield.field import DateTimeField


class ImpreciseDateTimeField(DateTimeField):

    def __init__(self, field_type: DateTimeFieldType, unit_millis: int):
        """
        Args:
            field_type: Type tag; its duration type names the linked unit
            unit_millis: Nominal length of one step, used for first guesses
        """
        super().__init__(field_type)
        self._unit_millis: int = unit_millis
        self._duration_field: DurationField = LinkedDurationField(self)

    @abstractmethod
    @override
    def add(self, instant: int, value: int) -> int:
        pass

    @override
    def difference(self, minuend_instant: int, subtrahend_instant: int) -> int:
        """Whole steps from subtrahend to minuend, exactly inverting :meth:`add`.

        Algorithm: guess with the nominal unit length, then walk the guess one
        step at a time until ``add(subtrahend, guess)`` is the last step not
        past the minuend.
        """
        if minuend_instant < subtrahend_instant:
            return -self.difference(subtrahend_instant, minuend_instant)

        difference = safe_divide(
            safe_subtract(minuend_instant, subtrahend_instant), self._unit_millis
        )
        if self.add(subtrahend_instant, difference) < minuend_instant:
            while True:
                difference += 1
                if self.add(subtrahend_instant, difference) > minuend_instant:
                    break
            difference -= 1
        elif self.add(subtrahend_instant, difference) > minuend_instant:
            while True:
                difference -= 1
                if self.add(subtrahend_instant, difference) <= minuend_instant:
                    break
        return difference

    @property
    @override
    def duration_field(self) -> DurationField:
        return self._duration_field

    @property
    def unit_millis(self) -> int:
        return self._unit_millis


class LinkedDurationField(BaseDurationField):
    """Duration unit backed by an imprecise field's own add and difference."""

    def __init__(self, field: ImpreciseDateTimeField):
        super().__init__(field.type.duration_type)
        self._field: ImpreciseDateTimeField = field

    @property
    @override
    def is_precise(self) -> bool:
        return False

    @property
    @override
    def unit_millis(self) -> int:
        return self._field.unit_millis

    @override
    def to_units(self, duration: int, instant: int | None = None) -> int:
        if instant is None:
            return super().to_units(duration)
        return self._field.difference(safe_add(instant, duration), instant)

    @override
    def from_units(self, value: int, instant: int | None = None) -> int:
        if instant is None:
            return super().from_units(value)
        return safe_subtract(self._field.add(instant, value), instant)

    @override
    def add(self, instant: int, value: int) -> int:
        return self._field.add(instant, value)

    @override
    def difference(self, minuend_instant: int, subtrahend_instant: int) -> int:
        return self._field.difference(minuend_instant, subtrahend_instant)
