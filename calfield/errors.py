"""Exception types raised by calfield.

Every error derives from :class:`CalfieldError` and from the closest builtin,
so callers can catch either ``ValueError``/``OverflowError`` or the
library-specific type.
"""


class CalfieldError(Exception):
    """Base class for all calfield errors."""


class IllegalArgumentError(CalfieldError, ValueError):
    """A constructor or operation received an argument it cannot accept."""


class IllegalFieldValueError(IllegalArgumentError):
    """A value lies outside the bounds of the field it was given to."""

    def __init__(
        self,
        field_name: str,
        value: int,
        lower_bound: int | None = None,
        upper_bound: int | None = None,
        reason: str | None = None,
    ):
        self.field_name: str = field_name
        self.value: int = value
        self.lower_bound: int | None = lower_bound
        self.upper_bound: int | None = upper_bound

        message = f"Value {value} for {field_name} "
        if lower_bound is not None and upper_bound is not None:
            message += f"must be in the range [{lower_bound},{upper_bound}]"
        elif reason is not None:
            message += reason
        else:
            message += "is not supported"
        super().__init__(message)


class ArithmeticOverflowError(CalfieldError, OverflowError):
    """An integer result does not fit the width required of it."""


class UnsupportedFieldError(CalfieldError, NotImplementedError):
    """A computation was requested from a placeholder field or unit."""


class InstantLimitError(IllegalArgumentError):
    """An instant lies outside the range a limited field accepts."""

    def __init__(self, instant: int, limit: int, is_low: bool, desc: str | None = None):
        self.instant: int = instant
        self.limit: int = limit
        self.is_low: bool = is_low

        subject = f"The {desc} instant" if desc else "The instant"
        if is_low:
            message = f"{subject} {instant} is below the supported minimum of {limit}"
        else:
            message = f"{subject} {instant} is above the supported maximum of {limit}"
        super().__init__(message)
