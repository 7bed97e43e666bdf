"""
Tests of the verbosity switch and the timing decorator.
"""

from __future__ import absolute_import

import logging as std_logging

import pytest

from nsiosc.utils.log import TRACE, Levels, logging, set_verbosity, tprofile
from nsiosc.utils.profiler import profile


class _ListHandler(std_logging.Handler):
    def __init__(self):
        super(_ListHandler, self).__init__(level=TRACE)
        self.records = []

    def emit(self, record):
        self.records.append(record)


def test_set_verbosity():
    try:
        set_verbosity(Levels.DEBUG)
        assert logging.level == std_logging.DEBUG
        set_verbosity(7)
        assert logging.level == TRACE
        set_verbosity(None)
        assert logging.level == TRACE
        with pytest.raises(ValueError):
            set_verbosity(-1)
    finally:
        set_verbosity(0)
    assert logging.level == std_logging.WARNING


def test_profile():
    @profile
    def add(a, b):
        return a + b

    handler = _ListHandler()
    tprofile.addHandler(handler)
    try:
        assert add(1, 2) == 3
        assert not handler.records
        set_verbosity(3)
        assert add(2, 2) == 4
        assert len(handler.records) == 1
        assert "function add" in handler.records[0].getMessage()
    finally:
        set_verbosity(0)
        tprofile.removeHandler(handler)
