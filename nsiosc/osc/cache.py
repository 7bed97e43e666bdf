"""
Validity of a previously computed eigensystem.
"""

from __future__ import absolute_import

from enum import Enum


__all__ = ["CacheState", "CacheValidity"]


class CacheState(Enum):
    """State of the cached eigensystem"""

    UNSET = 0
    """nothing computed yet"""

    VALID = 1
    """cached eigensystem matches the current inputs"""

    STALE = 2
    """an input changed after the last diagonalization"""


class CacheValidity(object):
    """
    Tri-state flag owned by the engine that holds the eigensystem.

    Inputs report every write through `update(changed)`; the flag follows
    ``valid = valid and not changed``. Only the owner calls `mark_valid`,
    right after diagonalizing.
    """

    def __init__(self):
        self._state = CacheState.UNSET

    def __repr__(self):
        return "%s(%s)" % (self.__class__.__name__, self._state.name)

    @property
    def state(self):
        """current `CacheState`"""
        return self._state

    @property
    def is_valid(self):
        return self._state is CacheState.VALID

    def update(self, changed):
        """Apply the result of one write; a change spoils a valid cache,
        anything else leaves the state alone"""
        if changed and self._state is CacheState.VALID:
            self._state = CacheState.STALE

    def invalidate(self):
        self.update(True)

    def mark_valid(self):
        self._state = CacheState.VALID
