"""
Tests of the configuration parsing and `NSIPropagator.from_config`.
"""

from __future__ import absolute_import

import math

import numpy as np
import pytest
from pint import DimensionalityError

from nsiosc.osc.propagator import NSIPropagator, Path
from nsiosc.utils.config_parser import DEFAULTS, parse_config, parse_quantity


EXAMPLE_CFG = """
[osc]
theta12 = 33.44 * units.degree
theta13 = 0.15
deltacp = 195 * units.degree
dm31 = 2.5e-3 * units.eV**2

[nsi]
eps_ee = 0.1
eps_emu = 0.05
delta_emu = 90 * units.degree
eps_tautau = -0.02

[path]
length = 1300 * units.km
density = 2840 * units.kg / units.m**3
zoa = 0.5

[neutrino]
energy = 2500 * units.MeV
nubar = true
"""


def test_parse_quantity():
    assert parse_quantity("3.5", "km") == 3.5
    assert np.isclose(parse_quantity("180 * units.degree", "rad"), math.pi,
                      rtol=1e-14)
    assert np.isclose(parse_quantity("1 * units.g / units.cm**3",
                                     "g / cm**3"), 1., rtol=1e-14)
    with pytest.raises(ValueError):
        parse_quantity("abc * units.km", "km")
    with pytest.raises(ValueError):
        parse_quantity("1 * units.furlongz", "km")


def test_parse_config():
    cfg = parse_config(EXAMPLE_CFG)
    assert list(cfg) == ["osc", "nsi", "path", "neutrino"]
    assert np.isclose(cfg["osc"]["theta12"], math.radians(33.44), rtol=1e-12)
    assert cfg["osc"]["theta13"] == 0.15
    assert cfg["osc"]["theta23"] == DEFAULTS["osc"]["theta23"]
    assert cfg["osc"]["dm31"] == 2.5e-3
    assert np.isclose(cfg["nsi"]["delta_emu"], math.pi / 2, rtol=1e-12)
    assert cfg["nsi"]["eps_mumu"] == 0.
    assert np.isclose(cfg["path"]["density"], 2.84, rtol=1e-12)
    assert np.isclose(cfg["neutrino"]["energy"], 2.5, rtol=1e-12)
    assert cfg["neutrino"]["nubar"] is True


def test_from_config():
    prop = NSIPropagator.from_config(EXAMPLE_CFG)
    assert prop.nubar
    assert np.isclose(prop.energy, 2.5, rtol=1e-12)
    assert prop.path.length == 1300.
    assert np.isclose(prop.get_eps(0, 0), 1.1, rtol=1e-15)
    assert np.isclose(prop.get_eps(0, 1), 0.05j, rtol=0, atol=1e-16)
    assert prop.get_eps(2, 2) == -0.02
    values, _ = prop.get_eigensystem()
    assert values.shape == (3,)


def test_from_config_file(tmp_path):
    cfg_file = tmp_path / "nsi.cfg"
    cfg_file.write_text(EXAMPLE_CFG)
    prop = NSIPropagator.from_config(str(cfg_file))
    assert isinstance(prop.path, Path)
    assert prop.path.zoa == 0.5


def test_empty_config_gives_defaults():
    prop = NSIPropagator.from_config("")
    ref = NSIPropagator()
    assert prop.path == ref.path
    assert np.array_equal(prop.nsi_params.eps_upper, ref.nsi_params.eps_upper)
    assert np.array_equal(prop.hms, ref.hms)


@pytest.mark.parametrize("text", [
    "[nsi]\neps_xx = 0.1\n",
    "[detector]\ndepth = 2\n",
    "[path]\ndensity = 2 * units.km\n",
])
def test_bad_config(text):
    with pytest.raises((ValueError, DimensionalityError)):
        parse_config(text)


def test_missing_config_file(tmp_path):
    with pytest.raises(ValueError, match="not found"):
        parse_config(str(tmp_path / "no_such_settings.cfg"))
    with pytest.raises(ValueError, match="not found"):
        NSIPropagator.from_config("/no/such/settings.cfg")


def test_malformed_config_text():
    with pytest.raises(ValueError):
        parse_config("eps_ee = 0.1\n")
    with pytest.raises(ValueError):
        parse_config("[nsi]\neps_ee = 0.1\neps_ee = 0.2\n")
