import pytest
from typing_extensions import override

from calfield.duration import DurationField, PreciseDurationField
from calfield.fieldtypes import DAYS, DateTimeFieldType, DurationFieldType
from calfield.imprecise import ImpreciseDateTimeField
from calfield.util import DAY, HALFDAY, VALUE_MAX, VALUE_MIN

LUNATIONS = DurationFieldType("lunations")
LUNATION = DateTimeFieldType("lunation", LUNATIONS, None)

days = PreciseDurationField(DAYS, DAY)


class AlternatingMonths(ImpreciseDateTimeField):
    """Counts months since the epoch, alternately 30 and 31 days long."""

    def __init__(self):
        super().__init__(LUNATION, 30 * DAY + HALFDAY)

    @staticmethod
    def _start(index: int) -> int:
        return (index // 2) * 61 * DAY + (index % 2) * 30 * DAY

    @staticmethod
    def _length(index: int) -> int:
        return 31 * DAY if index % 2 else 30 * DAY

    @override
    def get(self, instant: int) -> int:
        pair, day = divmod(instant // DAY, 61)
        return pair * 2 + (1 if day >= 30 else 0)

    @override
    def set(self, instant: int, value: int) -> int:
        offset = instant - self._start(self.get(instant))
        return self._start(value) + min(offset, self._length(value) - 1)

    @override
    def add(self, instant: int, value: int) -> int:
        return self.set(instant, self.get(instant) + value)

    @property
    @override
    def range_duration_field(self) -> DurationField | None:
        return None

    @override
    def minimum_value(self) -> int:
        return VALUE_MIN

    @override
    def maximum_value(self) -> int:
        return VALUE_MAX

    @override
    def round_floor(self, instant: int) -> int:
        return self._start(self.get(instant))


months = AlternatingMonths()

SAMPLE_INSTANTS = [
    0,
    29 * DAY,
    30 * DAY,
    # The 31st day of a long month, which clamps in every short month
    60 * DAY + 5,
    -1,
    -45 * DAY,
    1000 * DAY + 12345,
]


def test_get_and_set() -> None:
    assert months.get(0) == 0
    assert months.get(29 * DAY) == 0
    assert months.get(30 * DAY) == 1
    assert months.get(61 * DAY) == 2
    assert months.get(-1) == -1
    assert months.set(60 * DAY, 2) == 91 * DAY - 1
    assert months.set(60 * DAY, 3) == 91 * DAY + 30 * DAY


def test_difference_inverts_add() -> None:
    for instant in SAMPLE_INSTANTS:
        for amount in range(-40, 41):
            added = months.add(instant, amount)
            assert months.difference(added, instant) == amount


def test_difference_of_large_spans() -> None:
    assert months.difference(months.add(0, 1000), 0) == 1000
    assert months.difference(0, months.add(0, 1000)) == -1000


def test_difference_counts_whole_months_only() -> None:
    assert months.difference(30 * DAY - 1, 0) == 0
    assert months.difference(30 * DAY, 0) == 1
    assert months.difference(61 * DAY - 1, 0) == 1
    assert months.difference(0, 30 * DAY - 1) == 0


def test_linked_duration_field() -> None:
    unit = months.duration_field
    assert unit.type == LUNATIONS
    assert unit.is_supported
    assert not unit.is_precise
    assert unit.unit_millis == 30 * DAY + HALFDAY
    assert unit.add(0, 2) == months.add(0, 2)
    assert unit.difference(61 * DAY, 0) == 2


def test_linked_duration_exact_length_depends_on_position() -> None:
    unit = months.duration_field
    assert unit.unit_length(0) == 30 * DAY
    assert unit.unit_length(30 * DAY) == 31 * DAY
    assert unit.from_units(2, 0) == 61 * DAY
    assert unit.to_units(31 * DAY, 30 * DAY) == 1
    assert unit.to_units(30 * DAY, 30 * DAY) == 0


def test_linked_duration_without_instant_uses_nominal_length() -> None:
    unit = months.duration_field
    assert unit.from_units(2) == 61 * DAY
    assert unit.to_units(61 * DAY) == 2
    assert unit.to_units(-61 * DAY) == -2


def test_linked_duration_orders_by_nominal_length() -> None:
    assert months.duration_field > days
    assert days < months.duration_field


def test_add_must_be_implemented() -> None:
    class NoAdd(ImpreciseDateTimeField):
        pass

    with pytest.raises(TypeError):
        NoAdd(LUNATION, DAY)  # type: ignore[abstract]
