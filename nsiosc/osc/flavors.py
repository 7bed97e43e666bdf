"""
Flavour indices. The numbering 0 = e, 1 = mu, 2 = tau is part of the
serialized parameter format and must not change.
"""

from __future__ import absolute_import


__all__ = ["NUE", "NUMU", "NUTAU", "NUM_FLAVORS", "FLAVOR_NAMES",
           "NSI_PAIRS", "eps_name"]


NUE = 0
NUMU = 1
NUTAU = 2

NUM_FLAVORS = 3

FLAVOR_NAMES = ("e", "mu", "tau")

NSI_PAIRS = (
    (NUE, NUE),
    (NUMU, NUMU),
    (NUTAU, NUTAU),
    (NUE, NUMU),
    (NUE, NUTAU),
    (NUMU, NUTAU),
)
"""Upper-triangle flavour pairs in the order they are set by `set_nsi`"""


def eps_name(flv_i, flv_j):
    """Human readable name of a coupling, e.g. `eps_name(0, 2)` -> 'eps_etau';
    indices outside the valid range are rendered numerically"""
    if 0 <= flv_i < NUM_FLAVORS and 0 <= flv_j < NUM_FLAVORS:
        return "eps_%s%s" % (FLAVOR_NAMES[flv_i], FLAVOR_NAMES[flv_j])
    return "eps_%d%d" % (flv_i, flv_j)
