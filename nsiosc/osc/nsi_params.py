"""
NSIParams: Characterize non-standard neutrino interaction coupling strengths
"""

from __future__ import absolute_import, division

from collections import namedtuple
from enum import Enum
import math

import numpy as np

from nsiosc import CTYPE
from nsiosc.osc.flavors import NUM_FLAVORS, NSI_PAIRS, eps_name
from nsiosc.utils.log import logging


__all__ = ["IndexStatus", "EpsUpdate", "NSIParams"]

__license__ = """Copyright (c) 2014-2025, The IceCube Collaboration

 Licensed under the Apache License, Version 2.0 (the "License");
 you may not use this file except in compliance with the License.
 You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

 Unless required by applicable law or agreed to in writing, software
 distributed under the License is distributed on an "AS IS" BASIS,
 WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
 See the License for the specific language governing permissions and
 limitations under the License."""


class IndexStatus(Enum):
    """Outcome of validating a flavour index pair"""

    VALID = 0
    SWAPPED = 1
    """given as (j, i) and reordered to (i, j)"""
    INVALID = 2
    """out of range; the request was ignored"""


EpsUpdate = namedtuple("EpsUpdate", ["status", "changed"])
EpsUpdate.__doc__ = """Result of `NSIParams.set_eps`: the `IndexStatus` of the
request and whether the stored value actually changed"""


class NSIParams(object):
    """
    Holds the matter NSI couplings eps_ab (a, b in e, mu, tau) for
    propagating neutrinos. The NSI matrix is Hermitian; only the upper
    triangle (i <= j) is stored and the lower triangle is implied by
    conjugation.

    Diagonal couplings are real, off-diagonal ones are set from an absolute
    value and a phase. The stored electron-electron entry is ``eps_ee + 1``:
    the standard charged-current potential is folded into the NSI matrix, so
    the matter term of the Hamiltonian is just V * eps. `get_eps(0, 0)`
    returns this stored value, offset included.

    Parameters
    ----------
    on_change : callable, optional
        Called as ``on_change(changed)`` after every accepted write, with
        `changed` False if the new value is exactly the stored one. The owner
        of the eigensystem cache uses it to decide whether to recompute.

    log_hook : callable, optional
        Receives diagnostics as ``log_hook(msg, *args)``; defaults to
        `logging.warning` of the package logger.

    Attributes
    ----------
    eps_matrix : 2d complex array of shape (3, 3)
        Full Hermitian NSI matrix (copy)

    eps_upper : 2d complex array of shape (3, 3)
        Upper triangle as stored, zeros below the diagonal (copy)

    """

    def __init__(self, on_change=None, log_hook=None):
        self._on_change = on_change
        self._log = log_hook if log_hook is not None else logging.warning
        self._eps = np.zeros((NUM_FLAVORS, NUM_FLAVORS), dtype=CTYPE)
        self.reset()

    def __repr__(self):
        return "%s(\n%s)" % (self.__class__.__name__, self._eps)

    def reset(self):
        """Go back to the zero-coupling state (only the eps_ee offset of 1)"""
        self.set_nsi(0., 0., 0., 0., 0., 0., 0., 0., 0.)

    def _check_indices(self, flv_i, flv_j, action):
        status = IndexStatus.VALID
        if flv_i > flv_j:
            self._log(
                "First flavour index should not exceed the second; "
                "using %s instead of eps_%d%d",
                eps_name(flv_j, flv_i), flv_i, flv_j,
            )
            flv_i, flv_j = flv_j, flv_i
            status = IndexStatus.SWAPPED
        if (flv_i < 0 or flv_i >= NUM_FLAVORS or flv_j < flv_i
                or flv_j >= NUM_FLAVORS):
            self._log(
                "%s not valid for %d neutrino flavours, %s",
                eps_name(flv_i, flv_j), NUM_FLAVORS, action,
            )
            status = IndexStatus.INVALID
        return flv_i, flv_j, status

    def set_eps(self, flv_i, flv_j, val, phase=0.):
        """Set a single NSI coupling.

        Flavours are 0 = nue, 1 = numu, 2 = nutau. If flv_i > flv_j the
        indices are swapped (with a diagnostic); invalid pairs are reported
        and ignored.

        Parameters
        ----------
        flv_i, flv_j : int
            Flavour indices
        val : float
            Absolute value of the coupling (the real value on the diagonal)
        phase : float
            Complex phase in radians, ignored on the diagonal

        Returns
        -------
        EpsUpdate

        """
        flv_i, flv_j, status = self._check_indices(
            flv_i, flv_j, "doing nothing"
        )
        if status is IndexStatus.INVALID:
            return EpsUpdate(status, False)

        if flv_i != flv_j:
            h = val * complex(math.cos(phase), math.sin(phase))
        elif flv_i == 0:
            h = complex(val) + 1.
        else:
            h = complex(val)

        # exact comparison: only a different request counts as a change
        changed = not self._eps[flv_i, flv_j] == h
        self._eps[flv_i, flv_j] = h

        if self._on_change is not None:
            self._on_change(changed)
        return EpsUpdate(status, changed)

    def get_eps(self, flv_i, flv_j):
        """Stored value of a coupling (the eps_ee entry includes the +1
        offset); 0 for an invalid flavour pair"""
        flv_i, flv_j, status = self._check_indices(
            flv_i, flv_j, "returning 0"
        )
        if status is IndexStatus.INVALID:
            return CTYPE(0)
        return self._eps[flv_i, flv_j]

    def set_nsi(self, eps_ee, eps_emu, eps_etau, eps_mumu, eps_mutau,
                eps_tautau, delta_emu, delta_etau, delta_mutau):
        """Set all NSI parameters at once, diagonal first.

        Parameters
        ----------
        eps_ee, eps_mumu, eps_tautau : float
            Real diagonal couplings
        eps_emu, eps_etau, eps_mutau : float
            Absolute values of the off-diagonal couplings
        delta_emu, delta_etau, delta_mutau : float
            Phases of the off-diagonal couplings in radians

        Returns
        -------
        changed : bool
            True if any stored value changed

        """
        values = (
            (eps_ee, 0.),
            (eps_mumu, 0.),
            (eps_tautau, 0.),
            (eps_emu, delta_emu),
            (eps_etau, delta_etau),
            (eps_mutau, delta_mutau),
        )
        changed = False
        for (flv_i, flv_j), (val, phase) in zip(NSI_PAIRS, values):
            changed |= self.set_eps(flv_i, flv_j, val, phase).changed
        return changed

    def set_eps_ee(self, a):
        return self.set_eps(0, 0, a, 0.)

    def set_eps_mumu(self, a):
        return self.set_eps(1, 1, a, 0.)

    def set_eps_tautau(self, a):
        return self.set_eps(2, 2, a, 0.)

    def set_eps_emu(self, a, phi):
        return self.set_eps(0, 1, a, phi)

    def set_eps_etau(self, a, phi):
        return self.set_eps(0, 2, a, phi)

    def set_eps_mutau(self, a, phi):
        return self.set_eps(1, 2, a, phi)

    @property
    def eps_upper(self):
        """Upper triangle of the NSI matrix as stored"""
        return np.triu(self._eps)

    @property
    def eps_matrix(self):
        """Hermitian matrix of NSI coupling parameters"""
        upper = np.triu(self._eps)
        return upper + np.triu(upper, k=1).conj().T
