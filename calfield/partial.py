"""Partial values: calendar fields with values but no instant.

A partial such as ``[year=2001, month_of_year=2]`` names a month without a
day or a time. Arithmetic on it goes through the fields themselves, which
carry between neighbouring entries and clamp smaller ones into range.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from typing_extensions import override

from calfield.arith import verify_value_bounds
from calfield.errors import IllegalArgumentError
from calfield.field import DateTimeField
from calfield.fieldtypes import DateTimeFieldType


@dataclass(frozen=True)
class Partial:
    """An ordered set of calendar fields with values, but no instant.

    Fields run from largest to smallest, and every value lies within the
    bounds its field allows given the values to its left, so
    ``[year=2001, month_of_year=2, day_of_month=29]`` is rejected.
    """

    fields: tuple[DateTimeField, ...]
    values: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "values", tuple(self.values))
        if len(self.fields) != len(self.values):
            raise IllegalArgumentError(
                f"Partial needs one value per field, got {len(self.fields)} "
                f"fields and {len(self.values)} values"
            )
        self._verify_order()
        self._verify_values()

    def _verify_order(self) -> None:
        for i in range(1, len(self.fields)):
            last = self.fields[i - 1]
            current = self.fields[i]
            compare = last.duration_field.compare(current.duration_field)
            unsupported = not current.duration_field.is_supported
            if compare < 0 or (compare != 0 and unsupported):
                raise IllegalArgumentError(
                    f"Partial fields must be in order largest-smallest: "
                    f"{last.name} < {current.name}"
                )
            if compare != 0:
                continue
            last_range = last.range_duration_field
            current_range = current.range_duration_field
            if last_range is None:
                if current_range is None:
                    raise IllegalArgumentError(
                        f"Partial must not contain duplicate field: {current.name}"
                    )
                continue
            if current_range is None:
                raise IllegalArgumentError(
                    f"Partial fields must be in order largest-smallest: "
                    f"{last.name} < {current.name}"
                )
            range_compare = last_range.compare(current_range)
            if range_compare < 0:
                raise IllegalArgumentError(
                    f"Partial fields must be in order largest-smallest: "
                    f"{last.name} < {current.name}"
                )
            if range_compare == 0:
                raise IllegalArgumentError(
                    f"Partial must not contain duplicate field: {current.name}"
                )

    def _verify_values(self) -> None:
        # Context-free bounds first, so the context-sensitive checks below
        # only ever see sane values for the larger fields
        for field, value in zip(self.fields, self.values):
            verify_value_bounds(
                field, value, field.minimum_value(), field.maximum_value()
            )
        for field, value in zip(self.fields, self.values):
            field.verify_partial_value(self, self.values, value)

    @property
    def size(self) -> int:
        return len(self.fields)

    def field(self, index: int) -> DateTimeField:
        return self.fields[index]

    def field_type(self, index: int) -> DateTimeFieldType:
        return self.fields[index].type

    def value(self, index: int) -> int:
        return self.values[index]

    def index_of(self, field_type: DateTimeFieldType) -> int | None:
        for i, field in enumerate(self.fields):
            if field.type == field_type:
                return i
        return None

    def _require_index(self, field_type: DateTimeFieldType) -> int:
        index = self.index_of(field_type)
        if index is None:
            present = ", ".join(field.name for field in self.fields)
            raise IllegalArgumentError(
                f"Field {field_type.name!r} is not part of this partial.\n"
                f"Fields present: {present}"
            )
        return index

    def get(self, field_type: DateTimeFieldType) -> int:
        return self.values[self._require_index(field_type)]

    def is_contiguous(self) -> bool:
        """True if each field ranges over exactly the step unit of the one before."""
        last_type = None
        for i, field in enumerate(self.fields):
            if i > 0:
                range_field = field.range_duration_field
                if range_field is None or range_field.type != last_type:
                    return False
            last_type = field.duration_field.type
        return True

    def with_values(self, values: Sequence[int]) -> "Partial":
        return Partial(self.fields, tuple(values))

    def with_value(self, field_type: DateTimeFieldType, value: int) -> "Partial":
        index = self._require_index(field_type)
        return self.with_values(
            self.fields[index].set_partial(self, index, self.values, value)
        )

    def plus(self, field_type: DateTimeFieldType, amount: int) -> "Partial":
        index = self._require_index(field_type)
        return self.with_values(
            self.fields[index].add_partial(self, index, self.values, amount)
        )

    def plus_wrap_partial(
        self, field_type: DateTimeFieldType, amount: int
    ) -> "Partial":
        index = self._require_index(field_type)
        return self.with_values(
            self.fields[index].add_wrap_partial(self, index, self.values, amount)
        )

    def plus_wrap_field(self, field_type: DateTimeFieldType, amount: int) -> "Partial":
        index = self._require_index(field_type)
        return self.with_values(
            self.fields[index].add_wrap_field_partial(self, index, self.values, amount)
        )

    @override
    def __str__(self) -> str:
        pairs = ", ".join(
            f"{field.name}={value}" for field, value in zip(self.fields, self.values)
        )
        return f"[{pairs}]"
