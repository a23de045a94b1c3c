"""Package logger for blockmarkup.

Rendering never fails on odd but recoverable input; it normalizes it and says
so on this logger. Two levels sit between the standard ones:

- NOTICE (25): input that was normalized (depth jumps, clipped ranges,
  unknown entity keys)
- TRACE (15): one line per rendered block

The logger is silent (ERROR) until setup_logger() is called.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

NOTICE_LEVEL = 25
TRACE_LEVEL = 15

logging.addLevelName(NOTICE_LEVEL, "NOTICE")
logging.addLevelName(TRACE_LEVEL, "TRACE")

# Indexed by verbosity; anything past the end means DEBUG
_VERBOSITY_LEVELS = (logging.ERROR, NOTICE_LEVEL, TRACE_LEVEL, logging.DEBUG)


class BlockMarkupLogger(logging.Logger):
    """Logger with notice() and trace() for the two package levels."""

    def notice(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(NOTICE_LEVEL):
            self._log(NOTICE_LEVEL, msg, args, **kwargs)

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, **kwargs)


def get_logger() -> BlockMarkupLogger:
    """Return the shared ``blockmarkup`` logger."""
    logging.setLoggerClass(BlockMarkupLogger)
    logger = logging.getLogger("blockmarkup")
    assert isinstance(logger, BlockMarkupLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Send blockmarkup messages at or above a verbosity to a stream.

    Replaces any handler installed by an earlier call.

    Args:
        verbosity: 0=errors only, 1=notices, 2=trace, 3 or more=debug
        stream: Destination (defaults to sys.stderr)
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(_VERBOSITY_LEVELS[max(0, min(verbosity, len(_VERBOSITY_LEVELS) - 1))])

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Drop handlers and return to errors-only."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.ERROR)
