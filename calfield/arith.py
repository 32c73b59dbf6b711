"""Overflow-checked integer arithmetic shared by every field and unit.

Python integers never overflow, so the fixed widths of instants (64-bit) and
field values (32-bit) are enforced here. Division helpers truncate toward
zero; callers wanting floor semantics use ``//`` directly.
"""

from typing import TYPE_CHECKING

from calfield.errors import (
    ArithmeticOverflowError,
    IllegalArgumentError,
    IllegalFieldValueError,
)
from calfield.util import INSTANT_MAX, INSTANT_MIN, VALUE_MAX, VALUE_MIN

if TYPE_CHECKING:
    from calfield.field import DateTimeField


def _check_long(result: int, description: str) -> int:
    if INSTANT_MIN <= result <= INSTANT_MAX:
        return result
    raise ArithmeticOverflowError(
        f"The calculation caused an overflow: {description}"
    )


def safe_add(val1: int, val2: int) -> int:
    """Add two 64-bit values, raising if the total does not fit."""
    return _check_long(val1 + val2, f"{val1} + {val2}")


def safe_subtract(val1: int, val2: int) -> int:
    """Subtract ``val2`` from ``val1``, raising if the result does not fit."""
    return _check_long(val1 - val2, f"{val1} - {val2}")


def safe_multiply(val1: int, val2: int) -> int:
    """Multiply two 64-bit values, raising if the product does not fit."""
    return _check_long(val1 * val2, f"{val1} * {val2}")


def safe_negate(value: int) -> int:
    if value == INSTANT_MIN:
        raise ArithmeticOverflowError(f"{value} cannot be negated")
    return -value


def truncated_divide(dividend: int, divisor: int) -> int:
    """Divide, rounding toward zero rather than toward negative infinity."""
    quotient = abs(dividend) // abs(divisor)
    return quotient if (dividend >= 0) == (divisor > 0) else -quotient


def safe_divide(dividend: int, divisor: int) -> int:
    """Truncating 64-bit division.

    Raises:
        ZeroDivisionError: if ``divisor`` is zero
        ArithmeticOverflowError: for ``INSTANT_MIN / -1``
    """
    if divisor == 0:
        raise ZeroDivisionError(f"Cannot divide {dividend} by zero")
    return _check_long(
        truncated_divide(dividend, divisor), f"{dividend} / {divisor}"
    )


def safe_to_int(value: int) -> int:
    """Narrow a 64-bit value to the 32-bit field-value width."""
    if VALUE_MIN <= value <= VALUE_MAX:
        return value
    raise ArithmeticOverflowError(f"Value cannot fit in an int: {value}")


def safe_multiply_to_int(val1: int, val2: int) -> int:
    return safe_to_int(safe_multiply(val1, val2))


def verify_value_bounds(
    field: "DateTimeField | str", value: int, lower_bound: int, upper_bound: int
) -> None:
    """Raise :class:`IllegalFieldValueError` unless ``lower <= value <= upper``.

    ``field`` may be a field or just its name.
    """
    if value < lower_bound or value > upper_bound:
        name = field if isinstance(field, str) else field.name
        raise IllegalFieldValueError(name, value, lower_bound, upper_bound)


def get_wrapped_value(value: int, min_value: int, max_value: int) -> int:
    """Fit ``value`` into ``[min_value, max_value]`` by wrapping around.

    The result is periodic in ``value`` with period ``max - min + 1`` and
    equals ``value`` whenever it is already in range.

    Raises:
        IllegalArgumentError: if ``min_value >= max_value``
    """
    if min_value >= max_value:
        raise IllegalArgumentError(
            f"Wrap range minimum ({min_value}) must be less than "
            f"maximum ({max_value})"
        )
    wrap_range = max_value - min_value + 1
    return (value - min_value) % wrap_range + min_value


def wrap_add(current: int, amount: int, min_value: int, max_value: int) -> int:
    """Add ``amount`` to ``current`` and wrap the total into range."""
    return get_wrapped_value(current + amount, min_value, max_value)
