"""Utility constants for calfield.

Time unit constants represent durations in milliseconds, the base unit of
every instant the engine handles. Instants are counted from 1970-01-01T00:00Z.
"""

# Time unit constants (all values in milliseconds)
MILLISECOND = 1
SECOND = 1000
MINUTE = 60_000
HOUR = 3_600_000
HALFDAY = 43_200_000
DAY = 86_400_000
WEEK = 604_800_000

# Nominal lengths of the variable units (365.2425 day Gregorian year)
MONTH = 2_629_746_000
YEAR = 31_556_952_000

# Integer widths: instants are signed 64-bit, field values signed 32-bit
INSTANT_MIN = -(2**63)
INSTANT_MAX = 2**63 - 1
VALUE_MIN = -(2**31)
VALUE_MAX = 2**31 - 1
