"""Carry and borrow between the fields of a partial value.

Adding to one field of a partial may overflow it. The overflow is carried
one unit at a time into the next larger field, because the bounds of the
smaller field depend on the larger ones (a day-of-month carry into February
sees a different maximum than one into March).
"""

from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING

from calfield.arith import safe_to_int
from calfield.errors import IllegalArgumentError

if TYPE_CHECKING:
    from calfield.field import DateTimeField
    from calfield.partial import Partial


class CascadeMode(Enum):
    """What happens when a carry runs past the largest field of the partial."""

    CARRY = "carry"  # fail
    WRAP = "wrap"  # wrap the largest field around its own range


def _larger_field(
    field: "DateTimeField", partial: "Partial", field_index: int
) -> "DateTimeField":
    larger = partial.field(field_index - 1)
    range_field = field.range_duration_field
    # Carrying is only meaningful when one unit of the larger field is
    # exactly the range of this one
    if range_field is None or range_field.type != larger.duration_field.type:
        raise IllegalArgumentError(
            f"Fields invalid for add: cannot carry from {field.name} "
            f"into {larger.name}"
        )
    return larger


def _carry(
    larger: "DateTimeField",
    partial: "Partial",
    field_index: int,
    values: list[int],
    amount: int,
    mode: CascadeMode,
) -> list[int]:
    if mode is CascadeMode.WRAP:
        return larger.add_wrap_partial(partial, field_index, values, amount)
    return larger.add_partial(partial, field_index, values, amount)


def cascade_add(
    field: "DateTimeField",
    partial: "Partial",
    field_index: int,
    values: Sequence[int],
    value_to_add: int,
    mode: CascadeMode = CascadeMode.CARRY,
) -> list[int]:
    """Add ``value_to_add`` to ``values[field_index]``, carrying as needed.

    Returns a new list; ``values`` itself is left untouched. Smaller fields are
    clamped into validity once the final value is known.

    Raises:
        IllegalArgumentError: if a carry passes index 0 in CARRY mode, or the
            neighbouring field's unit does not match this field's range
    """
    values = list(values)
    if value_to_add == 0:
        return values

    larger: "DateTimeField | None" = None

    while value_to_add > 0:
        maximum = field.maximum_value_for(partial, values)
        proposed = values[field_index] + value_to_add
        if proposed <= maximum:
            values[field_index] = safe_to_int(proposed)
            break
        if larger is None:
            if field_index == 0:
                if mode is CascadeMode.CARRY:
                    raise IllegalArgumentError(
                        f"Maximum value exceeded for add: {field.name} is the "
                        f"largest field of {partial}"
                    )
                value_to_add -= (maximum + 1) - values[field_index]
                values[field_index] = field.minimum_value_for(partial, values)
                continue
            larger = _larger_field(field, partial, field_index)
        value_to_add -= (maximum + 1) - values[field_index]
        values = _carry(larger, partial, field_index - 1, values, 1, mode)
        values[field_index] = field.minimum_value_for(partial, values)

    while value_to_add < 0:
        minimum = field.minimum_value_for(partial, values)
        proposed = values[field_index] + value_to_add
        if proposed >= minimum:
            values[field_index] = safe_to_int(proposed)
            break
        if larger is None:
            if field_index == 0:
                if mode is CascadeMode.CARRY:
                    raise IllegalArgumentError(
                        f"Minimum value exceeded for add: {field.name} is the "
                        f"largest field of {partial}"
                    )
                value_to_add -= (minimum - 1) - values[field_index]
                values[field_index] = field.maximum_value_for(partial, values)
                continue
            larger = _larger_field(field, partial, field_index)
        value_to_add -= (minimum - 1) - values[field_index]
        values = _carry(larger, partial, field_index - 1, values, -1, mode)
        values[field_index] = field.maximum_value_for(partial, values)

    return field.set_partial(partial, field_index, values, values[field_index])


def cascade_set(
    field: "DateTimeField",
    partial: "Partial",
    field_index: int,
    values: Sequence[int],
    new_value: int,
) -> list[int]:
    """Set ``values[field_index]`` and clamp every smaller field into range."""
    values = list(values)
    field.verify_partial_value(partial, values, new_value)
    values[field_index] = new_value

    for i in range(field_index + 1, partial.size):
        smaller = partial.field(i)
        maximum = smaller.maximum_value_for(partial, values)
        if values[i] > maximum:
            values[i] = maximum
        minimum = smaller.minimum_value_for(partial, values)
        if values[i] < minimum:
            values[i] = minimum
    return values


def add_via_instant(
    field: "DateTimeField",
    partial: "Partial",
    values: Sequence[int],
    value_to_add: int,
) -> list[int]:
    """Add by materializing the partial as an instant.

    Only valid for contiguous partials, where setting each field in turn from
    the epoch yields an instant that reads back the same values. Unlike the
    unit-by-unit carry, this keeps smaller fields that are only transiently
    invalid, such as 29 February when adding whole years of months.
    """
    instant = 0
    for i in range(partial.size):
        instant = partial.field(i).set(instant, values[i])
    instant = field.add(instant, value_to_add)
    return [partial.field(i).get(instant) for i in range(partial.size)]
