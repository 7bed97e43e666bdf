"""
Logging for nsiosc. Import the package logger as

    from nsiosc.utils.log import logging, set_verbosity

and use `logging.info(...)`, `logging.debug(...)`, `logging.trace(...)` etc.
A `TRACE` level below `DEBUG` is registered for very chatty output such as
per-call timing.
"""

from __future__ import absolute_import

from enum import IntEnum
import logging as _logging


__all__ = ["TRACE", "Levels", "logging", "tprofile", "set_verbosity"]


TRACE = 5
_logging.addLevelName(TRACE, "TRACE")


def _trace(self, message, *args, **kwargs):
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)  # pylint: disable=protected-access


_logging.Logger.trace = _trace


class Levels(IntEnum):
    """Verbosity levels understood by `set_verbosity`"""

    WARN = 0
    INFO = 1
    DEBUG = 2
    TRACE = 3


_LEVEL_MAP = {
    Levels.WARN: _logging.WARNING,
    Levels.INFO: _logging.INFO,
    Levels.DEBUG: _logging.DEBUG,
    Levels.TRACE: TRACE,
}

_FORMAT = "[%(levelname)8s] %(message)s"

logging = _logging.getLogger("nsiosc")
"""Package logger (shadows the standard library module on purpose so calls
read `logging.warning(...)`)"""

tprofile = _logging.getLogger("nsiosc.tprofile")
"""Logger for timing information, see `nsiosc.utils.profiler`"""

if not logging.handlers:
    _handler = _logging.StreamHandler()
    _handler.setFormatter(_logging.Formatter(_FORMAT))
    logging.addHandler(_handler)
logging.setLevel(_logging.WARNING)


def set_verbosity(verbosity):
    """Set the package log level.

    Parameters
    ----------
    verbosity : int or Levels
        0 = warnings and errors only, 1 = info, 2 = debug, 3 = trace; values
        above 3 are clipped

    """
    if verbosity is None:
        return
    verbosity = int(verbosity)
    if verbosity < 0:
        raise ValueError("verbosity must be >= 0, got %d" % verbosity)
    level = _LEVEL_MAP[Levels(min(verbosity, Levels.TRACE))]
    logging.setLevel(level)
