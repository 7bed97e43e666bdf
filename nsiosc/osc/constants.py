"""
Physical constants entering the matter Hamiltonian. The quantities are built
with pint so the units are explicit; the kernels use the plain float
magnitudes.
"""

from __future__ import absolute_import

import numpy as np

from nsiosc import ureg


__all__ = [
    "GEV_TO_EV",
    "FERMI_COUPLING",
    "HBARC",
    "MATTER_POTENTIAL_COEFF",
    "STD_PATH_LENGTH_KM",
    "STD_DENSITY",
    "STD_ZOA",
]


GEV_TO_EV = (1.0 * ureg.GeV).m_as("eV")
"""Neutrino energies are given in GeV, the Hamiltonian is built in eV"""

FERMI_COUPLING = 1.1663787e-5 * ureg.GeV ** -2
"""Fermi coupling constant G_F"""

HBARC = (1.0 * ureg.hbar * ureg.speed_of_light).to("GeV * cm")
"""Conversion constant hbar*c"""

MATTER_POTENTIAL_COEFF = float(
    (np.sqrt(2.0) * FERMI_COUPLING * ureg.avogadro_number * HBARC ** 3).m_as(
        "eV * cm**3"
    )
)
"""sqrt(2) G_F N_A (hbar c)^3 in eV cm^3. Multiplied by a density in g/cm^3
and the electron-to-nucleon ratio this is the charged-current matter
potential in eV (about 7.63e-14 eV per g/cm^3)."""

STD_PATH_LENGTH_KM = 1000.0
"""Baseline of the default path [km]"""

STD_DENSITY = 2.6
"""Matter density of the default path [g/cm^3] (average crust)"""

STD_ZOA = 0.5
"""Electron-to-nucleon ratio of the default path"""
