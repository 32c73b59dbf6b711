"""Opt-in rendering of calfield's log records through structlog.

The library logs through the standard ``logging`` module only, at DEBUG, when
it builds something worth knowing about: a calendar assembly or a new
placeholder field. Nothing is shown unless the application configures it::

    from calfield.logging import configure_logging

    configure_logging("DEBUG", json=True)

Only the ``calfield`` logger is touched. The application's root logger and its
handlers stay as they are.
"""

import logging
import sys
from typing import TextIO

import structlog

_handler: logging.Handler | None = None


def configure_logging(
    level: int | str = logging.WARNING,
    *,
    json: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Send calfield's records at ``level`` and above to ``stream``.

    Args:
        level: Threshold for the ``calfield`` logger, as a number or a name
        json: One JSON object per line instead of console output
        stream: Destination, stderr by default

    Returns:
        The installed handler. Calling again replaces it rather than adding a
        second one.
    """
    global _handler

    if json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(formatter)

    calfield_logger = logging.getLogger("calfield")
    if _handler is not None:
        calfield_logger.removeHandler(_handler)
    calfield_logger.addHandler(handler)
    calfield_logger.setLevel(level)
    calfield_logger.propagate = False
    _handler = handler
    return handler
