"""
nsiosc: three-flavour neutrino Hamiltonian in matter with non-standard
interactions (NSI).

Package-wide numerical types, the numba target and the unit registry are
defined here so that every module agrees on them.
"""

from __future__ import absolute_import

import os

import numpy as np
from pint import UnitRegistry


__all__ = ["FTYPE", "CTYPE", "ITYPE", "TARGET", "ureg", "Q_", "__version__"]

__version__ = "0.1.0"

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


ureg = UnitRegistry()
"""Unit registry shared by the whole package"""

Q_ = ureg.Quantity

FTYPE = np.float64
"""Floating point type used throughout (the Hamiltonian entries of order
1e-13 eV do not survive single precision)"""

CTYPE = np.complex128
"""Complex type matching `FTYPE`"""

ITYPE = np.int64
"""Signed integer type"""

TARGET = os.environ.get("NSIOSC_TARGET", "cpu").strip().lower()
"""Numba target for the vectorized kernels, "cpu" or "parallel"; set via the
NSIOSC_TARGET environment variable"""

if TARGET not in ("cpu", "parallel"):
    raise ValueError(
        "NSIOSC_TARGET must be 'cpu' or 'parallel', got '%s'" % TARGET
    )
