import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from calfield.duration import PreciseDurationField, millis_duration
from calfield.errors import UnsupportedFieldError
from calfield.fieldtypes import (
    DAYS,
    ERA,
    ERAS,
    HOURS,
    YEARS,
    DateTimeFieldType,
    DurationFieldType,
)
from calfield.unsupported import (
    UnsupportedDateTimeField,
    UnsupportedDurationField,
    unsupported_duration_field,
    unsupported_field,
)
from calfield.util import DAY, HOUR

days = PreciseDurationField(DAYS, DAY)
hours = PreciseDurationField(HOURS, HOUR)


class TestUnsupportedDurationField:
    def test_identity_queries(self) -> None:
        eras = unsupported_duration_field(ERAS)
        assert isinstance(eras, UnsupportedDurationField)
        assert eras.type == ERAS
        assert eras.name == "eras"
        assert not eras.is_supported
        assert eras.is_precise
        assert eras.unit_millis == 0
        assert repr(eras) == "UnsupportedDurationField[eras]"

    def test_orders_below_every_supported_unit(self) -> None:
        eras = unsupported_duration_field(ERAS)
        assert eras < millis_duration
        assert days > eras

    def test_computations_fail(self) -> None:
        eras = unsupported_duration_field(ERAS)
        with pytest.raises(UnsupportedFieldError, match="eras field is unsupported"):
            eras.add(0, 1)
        with pytest.raises(NotImplementedError):
            eras.difference(1, 0)
        with pytest.raises(UnsupportedFieldError):
            eras.to_units(1)
        with pytest.raises(UnsupportedFieldError):
            eras.unit_length()
        with pytest.raises(UnsupportedFieldError):
            eras.subtract(0, 1)

    def test_cached_per_type(self) -> None:
        assert unsupported_duration_field(ERAS) is unsupported_duration_field(ERAS)
        assert unsupported_duration_field(ERAS) is not unsupported_duration_field(
            YEARS
        )


class TestUnsupportedDateTimeField:
    def test_identity_queries(self) -> None:
        eras = unsupported_duration_field(ERAS)
        era = unsupported_field(ERA, eras)
        assert isinstance(era, UnsupportedDateTimeField)
        assert era.type == ERA
        assert not era.is_supported
        assert not era.is_lenient
        assert era.duration_field is eras
        assert era.range_duration_field is None
        assert era.leap_duration_field is None
        assert repr(era) == "UnsupportedDateTimeField[era]"

    @pytest.mark.parametrize(
        "operation",
        [
            lambda field: field.get(0),
            lambda field: field.set(0, 1),
            lambda field: field.add_wrap_field(0, 1),
            lambda field: field.minimum_value(),
            lambda field: field.maximum_value_at(0),
            lambda field: field.round_floor(0),
            lambda field: field.round_half_even(0),
            lambda field: field.remainder(0),
            lambda field: field.is_leap(0),
            lambda field: field.leap_amount(0),
        ],
    )
    def test_computations_fail(self, operation) -> None:
        era = unsupported_field(ERA, unsupported_duration_field(ERAS))
        with pytest.raises(UnsupportedFieldError, match="era field is unsupported"):
            operation(era)

    def test_add_goes_through_the_step_unit(self) -> None:
        fortnight = DateTimeFieldType("fortnight_of_test", DAYS, None)
        field = unsupported_field(fortnight, days)
        assert field.add(0, 2) == 2 * DAY
        assert field.difference(3 * DAY, 0) == 3

        with pytest.raises(UnsupportedFieldError):
            unsupported_field(ERA, unsupported_duration_field(ERAS)).add(0, 1)

    def test_cache_replaces_entry_with_a_different_unit(self) -> None:
        field_type = DateTimeFieldType("replaced_in_test", DAYS, None)
        over_days = unsupported_field(field_type, days)
        assert unsupported_field(field_type, days) is over_days

        over_hours = unsupported_field(field_type, hours)
        assert over_hours is not over_days
        assert over_hours.duration_field is hours
        assert unsupported_field(field_type, hours) is over_hours


def test_concurrent_first_access_creates_one_instance() -> None:
    field_type = DurationFieldType("concurrent_in_test")
    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(
            pool.map(lambda _: unsupported_duration_field(field_type), range(64))
        )
    assert len({id(result) for result in results}) == 1


def test_creation_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="calfield.unsupported")
    unsupported_duration_field(DurationFieldType("logged_in_test"))
    assert "Created unsupported duration field logged_in_test" in caplog.text

    caplog.clear()
    unsupported_duration_field(DurationFieldType("logged_in_test"))
    assert caplog.text == ""
