# pylint: disable = not-callable, invalid-name
"""
Hamiltonian of three-flavour neutrino propagation in matter of constant
density, including non-standard interactions.

The vacuum part is the mass-squared matrix in the flavour basis divided by
2E; the matter part is the charged-current potential V times the NSI matrix,
whose electron-electron entry already contains the standard +1. Only the
upper triangle (i <= j) is computed; the full matrix is Hermitian.
"""

from __future__ import absolute_import, division, print_function

__all__ = [
    "matter_potential",
    "get_H_vac",
    "get_H_vac_hostfunc",
    "get_H_mat_nsi",
    "get_H_mat_nsi_hostfunc",
    "build_hamiltonians",
]

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

import math

import numpy as np
from numba import guvectorize, njit

from nsiosc import CTYPE, FTYPE, ITYPE, TARGET
from nsiosc.osc.constants import GEV_TO_EV, MATTER_POTENTIAL_COEFF
from nsiosc.osc.osc_params import OscParams
from nsiosc.utils.comparisons import ALLCLOSE_KW
from nsiosc.utils.log import logging, set_verbosity
from nsiosc.utils.numba_tools import (
    myjit,
    conjugate,
    conjugate_transpose,
    matrix_dot_matrix,
    clear_matrix,
    ctype,
)


assert FTYPE == np.float64, str(FTYPE)

FX = "f8"
"""Float string code to use, understood by both Numba and Numpy"""

CX = "c16"
"""Complex string code to use, understood by both Numba and Numpy"""

IX = "i8" if ITYPE == np.int64 else "i4"
"""Signed integer string code to use, understood by both Numba and Numpy"""

HAM_ALLCLOSE_KW = dict(ALLCLOSE_KW, atol=1e-30)
"""Hamiltonian entries are O(1e-13) eV; entries that cancel to zero need a
tiny absolute tolerance"""


def matter_potential(density, zoa):
    """Charged-current matter potential in [eV]

    Parameters
    ----------
    density : float
        Matter density in [g/cm^3]
    zoa : float
        Electron-to-nucleon ratio (Z/A)

    """
    return MATTER_POTENTIAL_COEFF * density * zoa


# ---------------------------------------------------------------------------- #


@myjit
def get_H_vac(mix, mix_conj_transp, dm_vector, H_vac):
    """ Calculate the mass-squared matrix in flavour basis

    Parameters:
    -----------
    mix : complex 2d-array
        Mixing matrix

    mix_conj_transp : complex 2d-array
        conjugate transpose of mixing matrix

    dm_vector : 1d-array
        Squared masses relative to the first mass state [eV^2]

    H_vac : complex 2d-array (empty)
        Vacuum Hamiltonian modulo a factor 1 / (2 * energy), [eV^2]

    Notes
    ------
    The same matrix serves neutrinos and antineutrinos; the antineutrino
    conjugation happens in `get_H_mat_nsi`.

    """
    dm_vac_diag = np.zeros((3, 3), dtype=ctype)
    tmp = np.zeros((3, 3), dtype=ctype)

    for k in range(3):
        dm_vac_diag[k, k] = dm_vector[k] + 0j

    matrix_dot_matrix(dm_vac_diag, mix_conj_transp, tmp)
    matrix_dot_matrix(mix, tmp, H_vac)


@njit([f"void({CX}[:,:], {CX}[:,:], {FX}[:], {CX}[:,:])"])
def get_H_vac_hostfunc(mix, mix_conj_transp, dm_vector, H_vac):
    """wrapper to run `get_H_vac` from host"""
    get_H_vac(mix, mix_conj_transp, dm_vector, H_vac)


def _reference_mix():
    """PMNS matrix with large CP violation, used by the unit tests"""
    return OscParams(deltacp=math.radians(270.)).mix_matrix


def test_get_H_vac():
    """unit tests for get_H_vac / get_H_vac_hostfunc"""
    mix = _reference_mix()
    dm_vector = np.array([0., 7.39e-5, 2.523e-3], dtype=FTYPE)
    H_vac = np.ones(shape=(3, 3), dtype=CTYPE)

    mix_conj_transp = np.empty_like(mix)
    conjugate_transpose(mix, mix_conj_transp)

    get_H_vac_hostfunc(mix, mix_conj_transp, dm_vector, H_vac)

    ref = mix @ np.diag(dm_vector) @ mix.conj().T
    assert np.allclose(H_vac, ref, **dict(ALLCLOSE_KW, atol=1e-18)), \
        f"test:\n{H_vac}\n!= ref:\n{ref}"
    assert np.allclose(H_vac, H_vac.conj().T, **dict(ALLCLOSE_KW, atol=1e-18))
    assert np.allclose(
        np.linalg.eigvalsh(H_vac), np.sort(dm_vector),
        **dict(ALLCLOSE_KW, rtol=1e-9, atol=1e-15)
    )
    logging.info("<< PASS : test_get_H_vac >>")


# ---------------------------------------------------------------------------- #


@myjit
def get_H_mat_nsi(H_vac, energy, density, zoa, nsi_eps, nubar, H_mat):
    """ Calculate the full Hamiltonian in matter, upper triangle only

    Parameters:
    -----------
    H_vac : complex 2d-array
        Mass-squared matrix in flavour basis [eV^2]

    energy : float
        Neutrino energy [GeV]

    density : float
        Matter density [g/cm^3]

    zoa : float
        Electron-to-nucleon ratio

    nsi_eps : complex 2d-array
        NSI matrix, upper triangle, eps_ee entry including the +1

    nubar : int
        >0 for neutrinos, <0 for antineutrinos

    H_mat : complex 2d-array
        Hamiltonian in [eV]; entries below the diagonal are not touched

    Notes
    -----
    For antineutrinos both the matter potential and the complex phases flip:
    the sign of the matter term is reversed first and the sum of both terms
    is conjugated cell by cell.

    """
    lv = 2. * GEV_TO_EV * energy
    v_mat = MATTER_POTENTIAL_COEFF * density * zoa

    for i in range(3):
        for j in range(i, 3):
            if nubar > 0:
                H_mat[i, j] = H_vac[i, j] / lv + v_mat * nsi_eps[i, j]
            else:
                H_mat[i, j] = conjugate(
                    H_vac[i, j] / lv - v_mat * nsi_eps[i, j]
                )


@njit([f"void({CX}[:,:], {FX}, {FX}, {FX}, {CX}[:,:], {IX}, {CX}[:,:])"])
def get_H_mat_nsi_hostfunc(H_vac, energy, density, zoa, nsi_eps, nubar,
                           H_mat):
    """wrapper to run `get_H_mat_nsi` from host"""
    get_H_mat_nsi(H_vac, energy, density, zoa, nsi_eps, nubar, H_mat)


def _reference_nsi_eps():
    nsi_eps = np.zeros((3, 3), dtype=CTYPE)
    nsi_eps[0, 0] = 1. + 0.3
    nsi_eps[1, 1] = -0.1
    nsi_eps[2, 2] = 0.2
    nsi_eps[0, 1] = 0.05 * np.exp(0.7j)
    nsi_eps[0, 2] = 0.2 * np.exp(-1.2j)
    nsi_eps[1, 2] = 0.01 * np.exp(2.5j)
    return nsi_eps


def test_get_H_mat_nsi():
    """unit tests for get_H_mat_nsi / get_H_mat_nsi_hostfunc"""
    mix = _reference_mix()
    dm_vector = np.array([0., 7.39e-5, 2.523e-3], dtype=FTYPE)
    H_vac = np.zeros(shape=(3, 3), dtype=CTYPE)
    get_H_vac_hostfunc(mix, mix.conj().T.copy(), dm_vector, H_vac)

    nsi_eps = _reference_nsi_eps()
    energy, density, zoa = 2.5, 2.84, 0.5
    lv = 2. * GEV_TO_EV * energy
    v_mat = matter_potential(density, zoa)

    for nubar in (1, -1):
        H_mat = np.zeros(shape=(3, 3), dtype=CTYPE)
        get_H_mat_nsi_hostfunc(H_vac, energy, density, zoa, nsi_eps, nubar,
                               H_mat)
        for i in range(3):
            for j in range(3):
                if j < i:
                    assert H_mat[i, j] == 0
                elif nubar > 0:
                    ref = H_vac[i, j] / lv + v_mat * nsi_eps[i, j]
                    assert np.isclose(H_mat[i, j], ref, **HAM_ALLCLOSE_KW)
                else:
                    ref = np.conj(H_vac[i, j] / lv - v_mat * nsi_eps[i, j])
                    assert np.isclose(H_mat[i, j], ref, **HAM_ALLCLOSE_KW)
    logging.info("<< PASS : test_get_H_mat_nsi >>")


# ---------------------------------------------------------------------------- #


@guvectorize(
    [f"void({CX}[:,:], {FX}, {FX}, {FX}, {CX}[:,:], {IX}, {CX}[:,:])"],
    "(a,b),(),(),(),(c,d),()->(a,b)",
    target=TARGET,
)
def build_hamiltonians(H_vac, energy, density, zoa, nsi_eps, nubar, H_mat):
    """Vectorized `get_H_mat_nsi` for scans over energy and/or path; the
    lower triangle of each output matrix is zeroed"""
    clear_matrix(H_mat)
    get_H_mat_nsi(H_vac, energy, density, zoa, nsi_eps, nubar, H_mat)


def test_build_hamiltonians():
    """vectorized build agrees with one build per energy"""
    mix = _reference_mix()
    dm_vector = np.array([0., 7.39e-5, -2.45e-3], dtype=FTYPE)
    H_vac = np.zeros(shape=(3, 3), dtype=CTYPE)
    get_H_vac_hostfunc(mix, mix.conj().T.copy(), dm_vector, H_vac)
    nsi_eps = _reference_nsi_eps()

    energies = np.logspace(-1, 2, 7, dtype=FTYPE)
    for nubar in (1, -1):
        out = np.ones(energies.shape + (3, 3), dtype=CTYPE)
        build_hamiltonians(H_vac, energies, 3.3, 0.49, nsi_eps, nubar,
                           out=out)
        for k, energy in enumerate(energies):
            ref = np.zeros((3, 3), dtype=CTYPE)
            get_H_mat_nsi_hostfunc(H_vac, energy, 3.3, 0.49, nsi_eps, nubar,
                                   ref)
            assert np.allclose(out[k], ref, **HAM_ALLCLOSE_KW), \
                f"E = {energy} GeV:\n{out[k]}\n!= ref:\n{ref}"
    logging.info("<< PASS : test_build_hamiltonians >>")


if __name__ == "__main__":
    set_verbosity(1)
    test_get_H_vac()
    test_get_H_mat_nsi()
    test_build_hamiltonians()
