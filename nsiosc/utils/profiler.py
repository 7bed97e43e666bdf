"""
Timing decorator; results go to the `tprofile` logger at TRACE level, so they
cost nothing unless `set_verbosity(3)` was called.
"""

from __future__ import absolute_import

from functools import wraps
from timeit import default_timer

from nsiosc.utils.log import TRACE, tprofile


__all__ = ["profile"]


def profile(func):
    """Log the wall time spent in `func` (milliseconds) at TRACE level"""

    @wraps(func)
    def profiled(*args, **kwargs):
        if not tprofile.isEnabledFor(TRACE):
            return func(*args, **kwargs)
        start_t = default_timer()
        try:
            return func(*args, **kwargs)
        finally:
            end_t = default_timer()
            tprofile.trace(
                "module %s, function %s: %.4f ms",
                func.__module__,
                func.__name__,
                (end_t - start_t) * 1000.0,
            )

    return profiled
