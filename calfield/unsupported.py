"""Placeholders for units and fields a calendar does not have.

A placeholder answers identity questions (type, name, support) so it can sit
in a calendar's field table, but any computation raises
:class:`~calfield.errors.UnsupportedFieldError`. Placeholders are shared per
type through a process-wide cache, so ``is`` comparisons between two
lookups of the same type hold.
"""

import logging
import threading
from collections.abc import Sequence
from typing import TYPE_CHECKING, NoReturn

from typing_extensions import override

from calfield.duration import DurationField
from calfield.errors import IllegalArgumentError, UnsupportedFieldError
from calfield.field import DateTimeField
from calfield.fieldtypes import DateTimeFieldType, DurationFieldType

if TYPE_CHECKING:
    from calfield.partial import Partial

logger = logging.getLogger(__name__)


class UnsupportedDurationField(DurationField):
    """Duration unit that exists only as a name.

    Its unit length is 0, so it orders below every supported unit.
    """

    def __init__(self, field_type: DurationFieldType):
        if field_type is None:
            raise IllegalArgumentError("The duration type must not be None")
        self._type: DurationFieldType = field_type

    def _unsupported(self) -> NoReturn:
        raise UnsupportedFieldError(f"{self._type.name} field is unsupported")

    @property
    @override
    def type(self) -> DurationFieldType:
        return self._type

    @property
    @override
    def is_supported(self) -> bool:
        return False

    @property
    @override
    def is_precise(self) -> bool:
        return True

    @property
    @override
    def unit_millis(self) -> int:
        return 0

    @override
    def to_units(self, duration: int, instant: int | None = None) -> int:
        self._unsupported()

    @override
    def from_units(self, value: int, instant: int | None = None) -> int:
        self._unsupported()

    @override
    def add(self, instant: int, value: int) -> int:
        self._unsupported()

    @override
    def difference(self, minuend_instant: int, subtrahend_instant: int) -> int:
        self._unsupported()

    @override
    def __repr__(self) -> str:
        return f"UnsupportedDurationField[{self.name}]"


class UnsupportedDateTimeField(DateTimeField):
    """Calendar field that exists only as a name.

    ``add`` and ``difference`` go through the step unit, which fails unless
    the calendar paired this placeholder with a supported unit.
    """

    def __init__(self, field_type: DateTimeFieldType, duration_field: DurationField):
        super().__init__(field_type)
        if duration_field is None:
            raise IllegalArgumentError("The duration field must not be None")
        self._duration_field: DurationField = duration_field

    def _unsupported(self) -> NoReturn:
        raise UnsupportedFieldError(f"{self.name} field is unsupported")

    @property
    @override
    def is_supported(self) -> bool:
        return False

    @override
    def get(self, instant: int) -> int:
        self._unsupported()

    @override
    def set(self, instant: int, value: int) -> int:
        self._unsupported()

    @override
    def add(self, instant: int, value: int) -> int:
        return self._duration_field.add(instant, value)

    @override
    def add_wrap_field(self, instant: int, value: int) -> int:
        self._unsupported()

    @override
    def difference(self, minuend_instant: int, subtrahend_instant: int) -> int:
        return self._duration_field.difference(minuend_instant, subtrahend_instant)

    @override
    def add_partial(
        self, partial: "Partial", field_index: int, values: Sequence[int], value: int
    ) -> list[int]:
        self._unsupported()

    @override
    def add_wrap_partial(
        self, partial: "Partial", field_index: int, values: Sequence[int], value: int
    ) -> list[int]:
        self._unsupported()

    @override
    def add_wrap_field_partial(
        self, partial: "Partial", field_index: int, values: Sequence[int], value: int
    ) -> list[int]:
        self._unsupported()

    @override
    def set_partial(
        self,
        partial: "Partial",
        field_index: int,
        values: Sequence[int],
        new_value: int,
    ) -> list[int]:
        self._unsupported()

    @property
    @override
    def duration_field(self) -> DurationField:
        return self._duration_field

    @property
    @override
    def range_duration_field(self) -> DurationField | None:
        return None

    @override
    def is_leap(self, instant: int) -> bool:
        self._unsupported()

    @override
    def leap_amount(self, instant: int) -> int:
        self._unsupported()

    @override
    def minimum_value(self) -> int:
        self._unsupported()

    @override
    def minimum_value_at(self, instant: int) -> int:
        self._unsupported()

    @override
    def minimum_value_for(
        self, partial: "Partial", values: Sequence[int] | None = None
    ) -> int:
        self._unsupported()

    @override
    def maximum_value(self) -> int:
        self._unsupported()

    @override
    def maximum_value_at(self, instant: int) -> int:
        self._unsupported()

    @override
    def maximum_value_for(
        self, partial: "Partial", values: Sequence[int] | None = None
    ) -> int:
        self._unsupported()

    @override
    def round_floor(self, instant: int) -> int:
        self._unsupported()

    @override
    def round_ceiling(self, instant: int) -> int:
        self._unsupported()

    @override
    def round_half_floor(self, instant: int) -> int:
        self._unsupported()

    @override
    def round_half_ceiling(self, instant: int) -> int:
        self._unsupported()

    @override
    def round_half_even(self, instant: int) -> int:
        self._unsupported()

    @override
    def remainder(self, instant: int) -> int:
        self._unsupported()

    @override
    def __repr__(self) -> str:
        return f"UnsupportedDateTimeField[{self.name}]"


_cache_lock = threading.Lock()
_duration_fields: dict[DurationFieldType, UnsupportedDurationField] = {}
_fields: dict[DateTimeFieldType, UnsupportedDateTimeField] = {}


def unsupported_duration_field(
    field_type: DurationFieldType,
) -> UnsupportedDurationField:
    """The shared placeholder unit for ``field_type``, created on first use."""
    field = _duration_fields.get(field_type)
    if field is not None:
        return field
    with _cache_lock:
        field = _duration_fields.get(field_type)
        if field is None:
            field = UnsupportedDurationField(field_type)
            _duration_fields[field_type] = field
            logger.debug("Created unsupported duration field %s", field_type.name)
    return field


def unsupported_field(
    field_type: DateTimeFieldType, duration_field: DurationField
) -> UnsupportedDateTimeField:
    """The shared placeholder field for ``field_type`` stepped in ``duration_field``.

    A cached placeholder built around a different step unit is replaced, so
    the returned field always reports the unit asked for.
    """
    field = _fields.get(field_type)
    if field is not None and field.duration_field is duration_field:
        return field
    with _cache_lock:
        field = _fields.get(field_type)
        if field is None or field.duration_field is not duration_field:
            field = UnsupportedDateTimeField(field_type, duration_field)
            _fields[field_type] = field
            logger.debug(
                "Created unsupported field %s over %s",
                field_type.name,
                duration_field.name,
            )
    return field
