"""
OscParams: Characterize neutrino oscillation parameters
           (mixing angles, Dirac-type CP-violating phase, mass splittings)
"""

from __future__ import absolute_import, division

import math

import numpy as np

from nsiosc import CTYPE, FTYPE


__all__ = ["OscParams"]


class OscParams(object):
    """
    Holds neutrino oscillation parameters, i.e., mixing angles, squared-mass
    differences, and a Dirac-type CPV phase. The neutrino mixing (PMNS) matrix
    constructed from these parameters is given in the standard
    parameterization. Defaults are the NuFit 4.0 normal-ordering best fit.

    Parameters
    ----------
    theta12, theta13, theta23 : float
        Mixing angles in [rad]

    deltacp : float
        Value of CPV phase in [rad]

    dm21 : float
        "Solar" mass splitting m_2^2 - m_1^2 in [eV^2]

    dm31 : float
        "Atmospheric" mass splitting m_3^2 - m_1^2 in [eV^2], negative for
        the inverted ordering

    on_change : callable, optional
        Called as ``on_change(changed)`` whenever a parameter is assigned,
        `changed` being False if the value is exactly the previous one


    Attributes
    ----------
    mix_matrix : 2d complex array of shape (3, 3)
        Neutrino mixing (PMNS) matrix in standard parameterization

    dm_vector : 1d float array of shape (3,)
        Squared masses relative to m_1^2, i.e. (0, dm21, dm31)

    """

    def __init__(self, theta12=math.radians(33.82),
                 theta13=math.radians(8.61), theta23=math.radians(48.3),
                 deltacp=math.radians(222.), dm21=7.39e-5, dm31=2.523e-3,
                 on_change=None):
        self._on_change = None
        self.theta12 = theta12
        self.theta13 = theta13
        self.theta23 = theta23
        self.deltacp = deltacp
        self.dm21 = dm21
        self.dm31 = dm31
        self._on_change = on_change

    def __repr__(self):
        return (
            "%s(theta12=%r, theta13=%r, theta23=%r, deltacp=%r, dm21=%r, "
            "dm31=%r)" % (self.__class__.__name__, self._theta12,
                          self._theta13, self._theta23, self._deltacp,
                          self._dm21, self._dm31)
        )

    @property
    def on_change(self):
        """Hook called as `on_change(changed)` after every assignment"""
        return self._on_change

    @on_change.setter
    def on_change(self, hook):
        self._on_change = hook

    def _set(self, attr, value):
        value = float(value)
        if not math.isfinite(value):
            raise ValueError("%s must be finite, got %s" % (attr[1:], value))
        changed = not getattr(self, attr, None) == value
        setattr(self, attr, value)
        if self._on_change is not None:
            self._on_change(changed)

    @property
    def theta12(self):
        """1-2 mixing angle"""
        return self._theta12

    @theta12.setter
    def theta12(self, value):
        self._set("_theta12", value)

    @property
    def theta13(self):
        """1-3 mixing angle"""
        return self._theta13

    @theta13.setter
    def theta13(self, value):
        self._set("_theta13", value)

    @property
    def theta23(self):
        """2-3 mixing angle"""
        return self._theta23

    @theta23.setter
    def theta23(self, value):
        self._set("_theta23", value)

    @property
    def deltacp(self):
        """CPV phase"""
        return self._deltacp

    @deltacp.setter
    def deltacp(self, value):
        self._set("_deltacp", value)

    @property
    def dm21(self):
        """'Solar' mass splitting"""
        return self._dm21

    @dm21.setter
    def dm21(self, value):
        self._set("_dm21", value)

    @property
    def dm31(self):
        """'Atmospheric' mass splitting"""
        return self._dm31

    @dm31.setter
    def dm31(self, value):
        self._set("_dm31", value)

    @property
    def mix_matrix(self):
        """Neutrino mixing matrix"""
        s12, c12 = math.sin(self._theta12), math.cos(self._theta12)
        s13, c13 = math.sin(self._theta13), math.cos(self._theta13)
        s23, c23 = math.sin(self._theta23), math.cos(self._theta23)
        eid = complex(math.cos(self._deltacp), math.sin(self._deltacp))

        mix = np.zeros((3, 3), dtype=CTYPE)

        mix[0, 0] = c12 * c13
        mix[0, 1] = s12 * c13
        mix[0, 2] = s13 * eid.conjugate()
        mix[1, 0] = -s12 * c23 - c12 * s23 * s13 * eid
        mix[1, 1] = c12 * c23 - s12 * s23 * s13 * eid
        mix[1, 2] = s23 * c13
        mix[2, 0] = s12 * s23 - c12 * c23 * s13 * eid
        mix[2, 1] = -c12 * s23 - s12 * c23 * s13 * eid
        mix[2, 2] = c23 * c13

        return mix

    @property
    def dm_vector(self):
        """Squared masses relative to the first mass state"""
        return np.array([0., self._dm21, self._dm31], dtype=FTYPE)
