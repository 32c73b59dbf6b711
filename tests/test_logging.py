import io
import json
import logging
from collections.abc import Generator

import pytest

from calfield.fieldtypes import DurationFieldType
from calfield.iso import IsoChronology
from calfield.logging import configure_logging
from calfield.unsupported import unsupported_duration_field


@pytest.fixture(autouse=True)
def _restore_calfield_logger() -> Generator[None]:
    calfield_logger = logging.getLogger("calfield")
    handlers = calfield_logger.handlers[:]
    level = calfield_logger.level
    propagate = calfield_logger.propagate
    yield
    calfield_logger.handlers = handlers
    calfield_logger.setLevel(level)
    calfield_logger.propagate = propagate


def test_only_the_calfield_logger_is_configured() -> None:
    root = logging.getLogger()
    root_handlers = root.handlers[:]
    root_level = root.level

    handler = configure_logging("DEBUG", stream=io.StringIO())

    calfield_logger = logging.getLogger("calfield")
    assert calfield_logger.level == logging.DEBUG
    assert calfield_logger.handlers[-1] is handler
    assert not calfield_logger.propagate
    assert root.handlers == root_handlers
    assert root.level == root_level


def test_json_lines_carry_structured_fields() -> None:
    stream = io.StringIO()
    configure_logging(logging.DEBUG, json=True, stream=stream)
    IsoChronology(mode="lenient")

    records = [json.loads(line) for line in stream.getvalue().splitlines()]
    assembled = [r for r in records if r["event"].startswith("Assembled ISO")]
    assert len(assembled) == 1
    assert assembled[0]["event"].endswith("(lenient mode) with 23 fields")
    assert assembled[0]["level"] == "debug"
    assert assembled[0]["logger"] == "calfield.iso"
    assert "timestamp" in assembled[0]


def test_console_output_is_plain_text() -> None:
    stream = io.StringIO()
    configure_logging("DEBUG", stream=stream)
    unsupported_duration_field(DurationFieldType("rendered_in_test"))
    output = stream.getvalue()
    assert "Created unsupported duration field rendered_in_test" in output
    assert "calfield.unsupported" in output
    assert "\x1b[" not in output


def test_quiet_at_the_default_level() -> None:
    stream = io.StringIO()
    configure_logging(json=True, stream=stream)
    unsupported_duration_field(DurationFieldType("quiet_in_test"))
    IsoChronology()
    assert stream.getvalue() == ""


def test_repeated_calls_replace_the_handler() -> None:
    calfield_logger = logging.getLogger("calfield")
    existing = len(calfield_logger.handlers)
    first = io.StringIO()
    second = io.StringIO()
    replaced = configure_logging("DEBUG", stream=first)
    handler = configure_logging("DEBUG", json=True, stream=second)

    assert len(calfield_logger.handlers) == existing + 1
    assert handler in calfield_logger.handlers
    assert replaced not in calfield_logger.handlers
    IsoChronology(mode="strict")
    assert first.getvalue() == ""
    assert "strict mode" in second.getvalue()
