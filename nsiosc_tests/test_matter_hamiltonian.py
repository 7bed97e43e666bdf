"""
Tests of the matter Hamiltonian assembly: neutrino/antineutrino relation,
Standard Model limit and the physical constants.
"""

from __future__ import absolute_import

import math

import numpy as np

from nsiosc import CTYPE
from nsiosc.osc.constants import (
    GEV_TO_EV,
    MATTER_POTENTIAL_COEFF,
    STD_DENSITY,
    STD_ZOA,
)
from nsiosc.osc.matter_hamiltonian import (
    HAM_ALLCLOSE_KW,
    get_H_mat_nsi_hostfunc,
    get_H_vac_hostfunc,
    matter_potential,
    # unit tests living next to the kernels
    test_build_hamiltonians,
    test_get_H_mat_nsi,
    test_get_H_vac,
)
from nsiosc.osc.nsi_params import NSIParams
from nsiosc.osc.osc_params import OscParams


def _hms(osc_params=None):
    osc_params = OscParams() if osc_params is None else osc_params
    mix = osc_params.mix_matrix
    hms = np.zeros((3, 3), dtype=CTYPE)
    get_H_vac_hostfunc(mix, mix.conj().T.copy(), osc_params.dm_vector, hms)
    return hms


def _build(hms, energy, density, zoa, nsi_eps, nubar):
    ham = np.zeros((3, 3), dtype=CTYPE)
    get_H_mat_nsi_hostfunc(hms, energy, density, zoa, nsi_eps, nubar, ham)
    return ham


def test_matter_potential_constant():
    """sqrt(2) G_F N_e in eV for N_e given as density * Z/A"""
    assert GEV_TO_EV == 1e9
    assert np.isclose(MATTER_POTENTIAL_COEFF, 7.6325e-14, rtol=1e-4)
    assert matter_potential(0., 0.5) == 0
    assert np.isclose(
        matter_potential(STD_DENSITY, STD_ZOA),
        MATTER_POTENTIAL_COEFF * 1.3, rtol=1e-15,
    )


def test_antineutrino_transform():
    """nubar cell = conj(vac/lv - V eps) and nu cell = vac/lv + V eps"""
    hms = _hms(OscParams(deltacp=math.radians(300.)))
    nsi = NSIParams()
    nsi.set_nsi(0.2, 0.05, 0.1, -0.3, 0.02, 0.15, 0.4, 1.9, -2.2)
    energy, density, zoa = 3.1, 4.5, 0.47
    lv = 2. * GEV_TO_EV * energy
    v_mat = matter_potential(density, zoa)

    for eps in (nsi.eps_upper, np.zeros((3, 3), dtype=CTYPE)):
        h_nu = _build(hms, energy, density, zoa, eps, 1)
        h_nubar = _build(hms, energy, density, zoa, eps, -1)
        for i in range(3):
            for j in range(i, 3):
                vac = hms[i, j] / lv
                mat = v_mat * eps[i, j]
                assert np.isclose(h_nu[i, j], vac + mat, **HAM_ALLCLOSE_KW)
                assert np.isclose(h_nubar[i, j], np.conj(vac - mat),
                                  **HAM_ALLCLOSE_KW)

    # all-zero couplings: antineutrino reduces to the conjugate vacuum term
    zero = np.zeros((3, 3), dtype=CTYPE)
    h_nubar = _build(hms, energy, density, zoa, zero, -1)
    assert np.allclose(np.triu(h_nubar), np.triu(hms.conj() / lv),
                       **HAM_ALLCLOSE_KW)


def test_antineutrino_not_global_conjugate():
    """the matter term flips sign before the conjugation, so the nubar
    matrix differs from conj(nu matrix) by -2 V eps*"""
    hms = _hms()
    nsi = NSIParams()
    nsi.set_nsi(0.1, 0.2, 0.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0)
    eps = nsi.eps_upper
    energy, density, zoa = 1.0, 2.6, 0.5
    v_mat = matter_potential(density, zoa)

    h_nu = _build(hms, energy, density, zoa, eps, 1)
    h_nubar = _build(hms, energy, density, zoa, eps, -1)
    diff = np.triu(h_nubar - h_nu.conj())
    assert np.allclose(diff, np.triu(-2. * v_mat * eps.conj()),
                       rtol=1e-9, atol=1e-30)


def test_standard_model_limit():
    """zero couplings: matter enters only via V on the ee cell"""
    hms = _hms()
    nsi = NSIParams()
    energy, density, zoa = 0.8, 2.6, 0.5
    lv = 2. * GEV_TO_EV * energy
    v_mat = matter_potential(density, zoa)

    for nubar, sign in ((1, 1.), (-1, -1.)):
        ham = _build(hms, energy, density, zoa, nsi.eps_upper, nubar)
        vac = hms / lv if nubar > 0 else hms.conj() / lv
        matter_part = np.triu(ham - vac)
        expected = np.zeros((3, 3), dtype=CTYPE)
        expected[0, 0] = sign * v_mat
        assert np.allclose(matter_part, expected, rtol=1e-9, atol=1e-30), \
            f"nubar = {nubar}:\n{matter_part}"
        for i in range(3):
            for j in range(i, 3):
                if (i, j) != (0, 0):
                    assert matter_part[i, j] == 0

    # and the vacuum limit is the bare mass matrix / 2E
    ham = _build(hms, energy, 0., zoa, nsi.eps_upper, 1)
    assert np.allclose(np.triu(ham), np.triu(hms) / lv, **HAM_ALLCLOSE_KW)


def test_nsi_shifts_eigenvalues():
    """a flavour-universal diagonal NSI shifts all eigenvalues equally"""
    hms = _hms()
    energy, density, zoa = 5.0, 3.0, 0.5
    v_mat = matter_potential(density, zoa)

    nsi = NSIParams()
    ham_sm = _build(hms, energy, density, zoa, nsi.eps_upper, 1)
    nsi.set_nsi(0.3, 0., 0., 0.3, 0., 0.3, 0., 0., 0.)
    ham_nsi = _build(hms, energy, density, zoa, nsi.eps_upper, 1)

    ev_sm = np.linalg.eigvalsh(ham_sm, UPLO="U")
    ev_nsi = np.linalg.eigvalsh(ham_nsi, UPLO="U")
    assert np.allclose(ev_nsi - ev_sm, 0.3 * v_mat, rtol=1e-6, atol=0)
