from .arith import (
    get_wrapped_value,
    safe_add,
    safe_divide,
    safe_multiply,
    safe_multiply_to_int,
    safe_negate,
    safe_subtract,
    safe_to_int,
    verify_value_bounds,
)
from .cascade import CascadeMode
from .decorated import (
    DecoratedDateTimeField,
    DelegatedDateTimeField,
    DividedDateTimeField,
    OffsetDateTimeField,
    RemainderDateTimeField,
    SkipDateTimeField,
    SkipUndoDateTimeField,
    ZeroIsMaxDateTimeField,
)
from .duration import (
    BaseDurationField,
    DecoratedDurationField,
    DurationField,
    MillisDurationField,
    PreciseDurationField,
    ScaledDurationField,
    millis_duration,
)
from .errors import (
    ArithmeticOverflowError,
    CalfieldError,
    IllegalArgumentError,
    IllegalFieldValueError,
    InstantLimitError,
    UnsupportedFieldError,
)
from .field import DateTimeField
from .fieldtypes import DateTimeFieldType, DurationFieldType
from .imprecise import ImpreciseDateTimeField, LinkedDurationField
from .iso import IsoChronology
from .leniency import LenientDateTimeField, StrictDateTimeField, lenient, strict
from .limit import LimitDateTimeField
from .partial import Partial
from .precise import PreciseDateTimeField, PreciseDurationDateTimeField
from .unsupported import (
    UnsupportedDateTimeField,
    UnsupportedDurationField,
    unsupported_duration_field,
    unsupported_field,
)

__all__ = [
    "DurationFieldType",
    "DateTimeFieldType",
    "DurationField",
    "BaseDurationField",
    "PreciseDurationField",
    "MillisDurationField",
    "DecoratedDurationField",
    "ScaledDurationField",
    "LinkedDurationField",
    "millis_duration",
    "DateTimeField",
    "PreciseDurationDateTimeField",
    "PreciseDateTimeField",
    "ImpreciseDateTimeField",
    "DelegatedDateTimeField",
    "DecoratedDateTimeField",
    "OffsetDateTimeField",
    "SkipDateTimeField",
    "SkipUndoDateTimeField",
    "ZeroIsMaxDateTimeField",
    "DividedDateTimeField",
    "RemainderDateTimeField",
    "LenientDateTimeField",
    "StrictDateTimeField",
    "LimitDateTimeField",
    "lenient",
    "strict",
    "UnsupportedDurationField",
    "UnsupportedDateTimeField",
    "unsupported_duration_field",
    "unsupported_field",
    "Partial",
    "CascadeMode",
    "IsoChronology",
    "safe_add",
    "safe_subtract",
    "safe_multiply",
    "safe_negate",
    "safe_divide",
    "safe_to_int",
    "safe_multiply_to_int",
    "verify_value_bounds",
    "get_wrapped_value",
    "CalfieldError",
    "IllegalArgumentError",
    "IllegalFieldValueError",
    "InstantLimitError",
    "ArithmeticOverflowError",
    "UnsupportedFieldError",
]
