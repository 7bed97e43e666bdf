"""
Parse a parameter configuration (INI format) for `NSIPropagator`.

Example::

    [osc]
    theta12 = 33.82 * units.degree
    theta13 = 8.61 * units.degree
    theta23 = 48.3 * units.degree
    deltacp = 222 * units.degree
    dm21 = 7.39e-5 * units.eV**2
    dm31 = 2.523e-3 * units.eV**2

    [nsi]
    eps_ee = 0.1
    eps_emu = 0.05
    delta_emu = 90 * units.degree

    [path]
    length = 1300 * units.km
    density = 2.84 * units.g / units.cm**3
    zoa = 0.5

    [neutrino]
    energy = 2.5 * units.GeV
    nubar = false

Every section and key is optional; missing values take the defaults below.
Values without units are taken to be in the default unit of the key.
Unknown sections or keys are an error.
"""

from __future__ import absolute_import

from collections import OrderedDict
import configparser
import math
from os.path import isfile

from pint.errors import UndefinedUnitError

from nsiosc import Q_
from nsiosc.osc.constants import STD_DENSITY, STD_PATH_LENGTH_KM, STD_ZOA
from nsiosc.utils.log import logging


__all__ = ["PARAM_UNITS", "DEFAULTS", "parse_quantity", "parse_config"]


PARAM_UNITS = OrderedDict([
    ("osc", OrderedDict([
        ("theta12", "rad"),
        ("theta13", "rad"),
        ("theta23", "rad"),
        ("deltacp", "rad"),
        ("dm21", "eV**2"),
        ("dm31", "eV**2"),
    ])),
    ("nsi", OrderedDict([
        ("eps_ee", "dimensionless"),
        ("eps_emu", "dimensionless"),
        ("eps_etau", "dimensionless"),
        ("eps_mumu", "dimensionless"),
        ("eps_mutau", "dimensionless"),
        ("eps_tautau", "dimensionless"),
        ("delta_emu", "rad"),
        ("delta_etau", "rad"),
        ("delta_mutau", "rad"),
    ])),
    ("path", OrderedDict([
        ("length", "km"),
        ("density", "g / cm**3"),
        ("zoa", "dimensionless"),
    ])),
    ("neutrino", OrderedDict([
        ("energy", "GeV"),
        ("nubar", None),
    ])),
])
"""Known sections and keys with the units values are converted to"""

DEFAULTS = {
    "osc": dict(
        theta12=math.radians(33.82),
        theta13=math.radians(8.61),
        theta23=math.radians(48.3),
        deltacp=math.radians(222.),
        dm21=7.39e-5,
        dm31=2.523e-3,
    ),
    "nsi": dict(
        eps_ee=0., eps_emu=0., eps_etau=0., eps_mumu=0., eps_mutau=0.,
        eps_tautau=0., delta_emu=0., delta_etau=0., delta_mutau=0.,
    ),
    "path": dict(length=STD_PATH_LENGTH_KM, density=STD_DENSITY, zoa=STD_ZOA),
    "neutrino": dict(energy=1., nubar=False),
}


def parse_quantity(string, units):
    """Parse "<value> [* units.<unit expression>]" and return the magnitude
    in `units`

    Parameters
    ----------
    string : str
    units : str
        Target units, also assumed when `string` carries none

    Returns
    -------
    float

    """
    value_str, _, unit_str = string.partition("*")
    try:
        magnitude = float(value_str.strip())
    except ValueError:
        raise ValueError("Cannot parse a number from '%s'" % string)
    unit_str = unit_str.strip().replace("units.", "")
    if not unit_str:
        return magnitude
    try:
        quantity = Q_(magnitude, unit_str)
    except UndefinedUnitError as err:
        raise ValueError("Unknown units in '%s': %s" % (string, err))
    return float(quantity.m_as(units))


def parse_config(source):
    """Read a configuration file (or a string holding its contents).

    Parameters
    ----------
    source : str
        Path to an existing file, otherwise the configuration text itself

    Returns
    -------
    cfg : OrderedDict
        One dict per section ('osc', 'nsi', 'path', 'neutrino') mapping each
        key to a float in the default units (bool for 'nubar'), defaults
        filled in

    Raises
    ------
    ValueError
        on a missing configuration file, on malformed INI text, on unknown
        sections, keys or units and on unparsable values
    pint.DimensionalityError
        if a value carries units incompatible with its key

    """
    parser = configparser.ConfigParser()
    try:
        if isfile(source):
            logging.debug("Reading configuration from '%s'", source)
            with open(source, "r") as f:
                parser.read_file(f)
        elif source.strip() and "\n" not in source and "[" not in source:
            raise ValueError("Configuration file '%s' not found" % source)
        else:
            parser.read_string(source)
    except configparser.Error as err:
        raise ValueError("Cannot read configuration: %s" % err)

    unknown = set(parser.sections()) - set(PARAM_UNITS)
    if unknown:
        raise ValueError("Unknown section(s) %s" % sorted(unknown))

    cfg = OrderedDict()
    for section, units in PARAM_UNITS.items():
        values = dict(DEFAULTS[section])
        if parser.has_section(section):
            for key, string in parser.items(section):
                if key not in units:
                    raise ValueError(
                        "Unknown key '%s' in section [%s]" % (key, section)
                    )
                if units[key] is None:
                    values[key] = parser.getboolean(section, key)
                else:
                    values[key] = parse_quantity(string, units[key])
        cfg[section] = values
        logging.trace("[%s] %s", section, values)
    return cfg
