"""
Tolerances for comparing floating point results.
"""

from __future__ import absolute_import


__all__ = ["EQUALITY_SIGFIGS", "EQUALITY_PREC", "ALLCLOSE_KW"]


EQUALITY_SIGFIGS = 12
"""Significant figures for considering two results equal"""

EQUALITY_PREC = 10.0 ** -EQUALITY_SIGFIGS
"""Relative precision for considering two results equal"""

ALLCLOSE_KW = dict(rtol=EQUALITY_PREC, atol=0, equal_nan=True)
"""Keyword args to pass to `np.allclose` and `np.isclose`; pass an explicit
`atol` where entries may legitimately round to (almost) zero"""
