"""The calendar field contract.

A field reads one calendar quantity out of an instant and writes it back,
stepping in one duration unit and ranging over another. Fields hold no
per-call state: every operation maps its inputs to a new instant or a new
list of partial values.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

from typing_extensions import override

from calfield import cascade
from calfield.arith import verify_value_bounds, wrap_add
from calfield.duration import DurationField
from calfield.errors import IllegalArgumentError
from calfield.fieldtypes import DateTimeFieldType

if TYPE_CHECKING:
    from calfield.partial import Partial


class DateTimeField(ABC):

    def __init__(self, field_type: DateTimeFieldType):
        if field_type is None:
            raise IllegalArgumentError("The field type must not be None")
        self._type: DateTimeFieldType = field_type

    @property
    def type(self) -> DateTimeFieldType:
        return self._type

    @property
    def name(self) -> str:
        return self._type.name

    @property
    def is_supported(self) -> bool:
        return True

    @property
    def is_lenient(self) -> bool:
        """True if ``set`` accepts out-of-range values by carrying them."""
        return False

    # Main access API

    @abstractmethod
    def get(self, instant: int) -> int:
        pass

    @abstractmethod
    def set(self, instant: int, value: int) -> int:
        """Return ``instant`` with this field set to ``value``.

        Larger fields are unchanged; smaller fields are clamped if the new
        value makes them invalid (setting February clamps day 31).
        """
        pass

    def add(self, instant: int, value: int) -> int:
        """Add ``value`` step units, carrying into larger fields."""
        return self.duration_field.add(instant, value)

    def add_wrap_field(self, instant: int, value: int) -> int:
        """Add ``value``, wrapping within this field so larger fields never change."""
        current = self.get(instant)
        wrapped = wrap_add(
            current,
            value,
            self.minimum_value_at(instant),
            self.maximum_value_at(instant),
        )
        return self.set(instant, wrapped)

    def difference(self, minuend_instant: int, subtrahend_instant: int) -> int:
        return self.duration_field.difference(minuend_instant, subtrahend_instant)

    # Partial API

    def add_partial(
        self, partial: "Partial", field_index: int, values: Sequence[int], value: int
    ) -> list[int]:
        """Add to the value at ``field_index``, carrying into larger fields.

        Raises:
            IllegalArgumentError: when the carry would pass the largest field
        """
        return cascade.cascade_add(
            self, partial, field_index, values, value, cascade.CascadeMode.CARRY
        )

    def add_wrap_partial(
        self, partial: "Partial", field_index: int, values: Sequence[int], value: int
    ) -> list[int]:
        """Like :meth:`add_partial`, but the largest field wraps instead of failing."""
        return cascade.cascade_add(
            self, partial, field_index, values, value, cascade.CascadeMode.WRAP
        )

    def add_wrap_field_partial(
        self, partial: "Partial", field_index: int, values: Sequence[int], value: int
    ) -> list[int]:
        current = values[field_index]
        wrapped = wrap_add(
            current,
            value,
            self.minimum_value_for(partial, values),
            self.maximum_value_for(partial, values),
        )
        return self.set_partial(partial, field_index, values, wrapped)

    def set_partial(
        self,
        partial: "Partial",
        field_index: int,
        values: Sequence[int],
        new_value: int,
    ) -> list[int]:
        return cascade.cascade_set(self, partial, field_index, values, new_value)

    def verify_partial_value(
        self, partial: "Partial", values: Sequence[int], value: int
    ) -> None:
        """Raise :class:`IllegalFieldValueError` unless ``value`` fits the partial."""
        verify_value_bounds(
            self,
            value,
            self.minimum_value_for(partial, values),
            self.maximum_value_for(partial, values),
        )

    # Extra information API

    @property
    @abstractmethod
    def duration_field(self) -> DurationField:
        """The step unit."""
        pass

    @property
    @abstractmethod
    def range_duration_field(self) -> DurationField | None:
        """The unit this field ranges over, or None for the largest field."""
        pass

    def is_leap(self, instant: int) -> bool:
        return False

    def leap_amount(self, instant: int) -> int:
        return 0

    @property
    def leap_duration_field(self) -> DurationField | None:
        return None

    @abstractmethod
    def minimum_value(self) -> int:
        pass

    def minimum_value_at(self, instant: int) -> int:
        return self.minimum_value()

    def minimum_value_for(
        self, partial: "Partial", values: Sequence[int] | None = None
    ) -> int:
        return self.minimum_value()

    @abstractmethod
    def maximum_value(self) -> int:
        pass

    def maximum_value_at(self, instant: int) -> int:
        return self.maximum_value()

    def maximum_value_for(
        self, partial: "Partial", values: Sequence[int] | None = None
    ) -> int:
        return self.maximum_value()

    # Rounding API

    @abstractmethod
    def round_floor(self, instant: int) -> int:
        """Largest instant not after ``instant`` on a step-unit boundary."""
        pass

    def round_ceiling(self, instant: int) -> int:
        floor = self.round_floor(instant)
        if floor != instant:
            instant = self.add(floor, 1)
        return instant

    def round_half_floor(self, instant: int) -> int:
        floor = self.round_floor(instant)
        ceiling = self.round_ceiling(instant)
        if instant - floor <= ceiling - instant:
            # closer to the floor, or halfway
            return floor
        return ceiling

    def round_half_ceiling(self, instant: int) -> int:
        floor = self.round_floor(instant)
        ceiling = self.round_ceiling(instant)
        if ceiling - instant <= instant - floor:
            # closer to the ceiling, or halfway
            return ceiling
        return floor

    def round_half_even(self, instant: int) -> int:
        floor = self.round_floor(instant)
        ceiling = self.round_ceiling(instant)
        diff_from_floor = instant - floor
        diff_to_ceiling = ceiling - instant
        if diff_from_floor < diff_to_ceiling:
            return floor
        if diff_to_ceiling < diff_from_floor:
            return ceiling
        # Halfway: pick whichever makes this field even, ceiling if both do
        if self.get(ceiling) % 2 == 0:
            return ceiling
        return floor

    def remainder(self, instant: int) -> int:
        return instant - self.round_floor(instant)

    @override
    def __repr__(self) -> str:
        return f"DateTimeField[{self.name}]"
