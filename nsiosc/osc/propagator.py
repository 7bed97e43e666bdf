"""
NSIPropagator: three-flavour neutrino propagation engine with non-standard
interactions in matter of constant density.

The engine owns the inputs of the Hamiltonian (oscillation parameters, NSI
couplings, energy, path, neutrino/antineutrino), the Hamiltonian buffer and
the validity flag of the cached eigensystem. The Hamiltonian is rebuilt and
diagonalized only when an input actually changed since the last call.
"""

from __future__ import absolute_import, division

from collections import namedtuple

import numpy as np

from nsiosc import CTYPE, FTYPE
from nsiosc.osc.cache import CacheValidity
from nsiosc.osc.constants import STD_DENSITY, STD_PATH_LENGTH_KM, STD_ZOA
from nsiosc.osc.matter_hamiltonian import (
    build_hamiltonians,
    get_H_mat_nsi_hostfunc,
    get_H_vac_hostfunc,
    matter_potential,
)
from nsiosc.osc.nsi_params import NSIParams
from nsiosc.osc.osc_params import OscParams
from nsiosc.utils.config_parser import parse_config
from nsiosc.utils.log import logging
from nsiosc.utils.profiler import profile


__all__ = ["Path", "NSIPropagator"]

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


Path = namedtuple("Path", ["length", "density", "zoa"])
Path.__doc__ = """Constant-density matter path: length [km], density
[g/cm^3] and electron-to-nucleon ratio zoa"""


def _check_path(path):
    if path.length < 0:
        raise ValueError("Path length must be >= 0, got %s" % path.length)
    if path.density < 0:
        raise ValueError("Density must be >= 0, got %s" % path.density)
    if not 0 <= path.zoa <= 1:
        raise ValueError("zoa must be within [0, 1], got %s" % path.zoa)


class NSIPropagator(object):
    """
    Oscillation engine for three flavours with matter NSI.

    Parameters
    ----------
    osc_params : OscParams, optional
        Standard oscillation parameters; NuFit 4.0 defaults if None

    energy : float
        Neutrino energy in [GeV]

    nubar : bool
        True for antineutrinos

    path : Path, optional
        Matter path; the standard path (1000 km, 2.6 g/cm^3, Z/A = 0.5) if
        None

    nsi_log_hook : callable, optional
        Diagnostics hook handed to the `NSIParams` store

    Notes
    -----
    All setters feed the same rule into the cache flag: the cached
    eigensystem survives a write only if it was valid and the written value
    is identical to the previous one. Only `get_eigensystem` marks it valid.

    """

    def __init__(self, osc_params=None, energy=1., nubar=False, path=None,
                 nsi_log_hook=None):
        self._cache = CacheValidity()
        self._hms_stale = True
        self._hms = np.zeros((3, 3), dtype=CTYPE)
        self._ham = np.zeros((3, 3), dtype=CTYPE)
        self._eigenvalues = None
        self._eigenvectors = None
        self._num_diagonalizations = 0

        self._nsi = NSIParams(on_change=self._cache.update,
                              log_hook=nsi_log_hook)

        self._osc_params = None
        self.osc_params = OscParams() if osc_params is None else osc_params

        self._energy = None
        self.energy = energy
        self._nubar = None
        self.nubar = nubar
        self._path = None
        if path is None:
            self.set_std_path()
        else:
            self.path = path

    @classmethod
    def from_config(cls, source):
        """Build an engine from a configuration file or string, see
        `nsiosc.utils.config_parser.parse_config`"""
        cfg = parse_config(source)
        propagator = cls(
            osc_params=OscParams(**cfg["osc"]),
            energy=cfg["neutrino"]["energy"],
            nubar=cfg["neutrino"]["nubar"],
            path=Path(**cfg["path"]),
        )
        propagator.set_nsi(**cfg["nsi"])
        return propagator

    # -- inputs -------------------------------------------------------------

    def _on_osc_change(self, changed):
        if changed:
            self._hms_stale = True
        self._cache.update(changed)

    @property
    def osc_params(self):
        """Standard oscillation parameters; edits are tracked"""
        return self._osc_params

    @osc_params.setter
    def osc_params(self, value):
        if not isinstance(value, OscParams):
            raise TypeError("Expected OscParams, got %s" % type(value))
        if self._osc_params is not None:
            self._osc_params.on_change = None
        value.on_change = self._on_osc_change
        self._osc_params = value
        self._on_osc_change(True)

    @property
    def nsi_params(self):
        """The NSI coupling store"""
        return self._nsi

    @property
    def energy(self):
        """Neutrino energy [GeV]"""
        return self._energy

    @energy.setter
    def energy(self, value):
        value = float(value)
        if not value > 0:
            raise ValueError("Energy must be positive, got %s GeV" % value)
        self._cache.update(not self._energy == value)
        self._energy = value

    @property
    def nubar(self):
        """True when propagating antineutrinos"""
        return self._nubar

    @nubar.setter
    def nubar(self, value):
        value = bool(value)
        self._cache.update(not self._nubar == value)
        self._nubar = value

    @property
    def path(self):
        """Current `Path`"""
        return self._path

    @path.setter
    def path(self, value):
        value = Path(*(float(v) for v in value))
        _check_path(value)
        # the length does not enter the Hamiltonian
        if self._path is None:
            self._cache.update(True)
        else:
            self._cache.update(
                not (self._path.density == value.density
                     and self._path.zoa == value.zoa)
            )
        self._path = value

    def set_path(self, length, density, zoa=STD_ZOA):
        self.path = Path(length, density, zoa)

    def set_std_path(self):
        """Standard path: 1000 km of crust-like matter"""
        self.set_path(STD_PATH_LENGTH_KM, STD_DENSITY, STD_ZOA)

    def set_nsi(self, eps_ee=0., eps_emu=0., eps_etau=0., eps_mumu=0.,
                eps_mutau=0., eps_tautau=0., delta_emu=0., delta_etau=0.,
                delta_mutau=0.):
        """Set all NSI couplings at once, see `NSIParams.set_nsi`"""
        return self._nsi.set_nsi(eps_ee, eps_emu, eps_etau, eps_mumu,
                                 eps_mutau, eps_tautau, delta_emu,
                                 delta_etau, delta_mutau)

    def set_eps(self, flv_i, flv_j, val, phase=0.):
        return self._nsi.set_eps(flv_i, flv_j, val, phase)

    def get_eps(self, flv_i, flv_j):
        return self._nsi.get_eps(flv_i, flv_j)

    # -- outputs ------------------------------------------------------------

    @property
    def cache_state(self):
        """`CacheState` of the eigensystem"""
        return self._cache.state

    @property
    def num_diagonalizations(self):
        """How often the eigensystem was actually computed"""
        return self._num_diagonalizations

    @property
    def matter_potential(self):
        """Charged-current potential along the current path [eV]"""
        return matter_potential(self._path.density, self._path.zoa)

    @property
    def hms(self):
        """Mass-squared matrix in flavour basis [eV^2] (copy)"""
        self._build_hms()
        return self._hms.copy()

    @property
    def hamiltonian(self):
        """Hamiltonian as last built, upper triangle [eV] (copy)"""
        return self._ham.copy()

    def _build_hms(self):
        if not self._hms_stale:
            return
        mix = self._osc_params.mix_matrix
        get_H_vac_hostfunc(mix, np.ascontiguousarray(mix.conj().T),
                           self._osc_params.dm_vector, self._hms)
        self._hms_stale = False
        logging.trace("Rebuilt mass-squared matrix:\n%s", self._hms)

    @profile
    def update_hamiltonian(self):
        """Assemble the Hamiltonian for the current inputs into the buffer"""
        self._build_hms()
        get_H_mat_nsi_hostfunc(
            self._hms,
            self._energy,
            self._path.density,
            self._path.zoa,
            self._nsi.eps_upper,
            -1 if self._nubar else 1,
            self._ham,
        )

    @profile
    def get_eigensystem(self):
        """Eigenvalues [eV] (ascending) and eigenvectors (columns) of the
        current Hamiltonian; recomputed only if an input changed"""
        if not self._cache.is_valid:
            self.update_hamiltonian()
            self._eigenvalues, self._eigenvectors = np.linalg.eigh(
                self._ham, UPLO="U"
            )
            self._num_diagonalizations += 1
            self._cache.mark_valid()
            logging.debug(
                "Diagonalized Hamiltonian for E = %s GeV, nubar = %s",
                self._energy, self._nubar,
            )
        return self._eigenvalues.copy(), self._eigenvectors.copy()

    @profile
    def scan_hamiltonians(self, energies):
        """Hamiltonians for an array of energies [GeV] with all other inputs
        as currently set; the cached eigensystem is not touched

        Returns
        -------
        complex array of shape energies.shape + (3, 3), upper triangles

        """
        energies = np.asarray(energies, dtype=FTYPE)
        if np.any(~(energies > 0)):
            raise ValueError("Energies must be positive")
        self._build_hms()
        out = np.zeros(energies.shape + (3, 3), dtype=CTYPE)
        build_hamiltonians(
            self._hms,
            energies,
            self._path.density,
            self._path.zoa,
            self._nsi.eps_upper,
            -1 if self._nubar else 1,
            out=out,
        )
        return out
