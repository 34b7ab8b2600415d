# Copyright 2023-2025, Stavroula Biri
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import numpy as np
from .errors import ShapeMismatch

CtoK = 273.15
""" Conversion factor for degC to K """

kappa = 0.4
""" von Karman's constant """

R_dry = 287.05
""" specific gas constant of dry air (J/kg/K) """

R_vap = 461.495
""" specific gas constant of water vapour (J/kg/K) """

reps0 = R_dry/R_vap
""" ratio of gas constants, ~0.622 """

rctv0 = R_vap/R_dry-1
""" virtual temperature factor, ~0.608 """

cp_dry = 1005.
""" specific heat of dry air at constant pressure (J/kg/K) """

cp_vap = 1860.
""" specific heat of water vapour at constant pressure (J/kg/K) """

sigma_sb = 5.67e-8
""" Stefan-Boltzmann constant (W/m^2/K^4) """

emiss_w = 0.97
""" emissivity of the sea surface """

rdct_qsat_salt = 0.98
""" reduction of saturation specific humidity over salty water """

Cx_min = 1e-6
""" smallest bulk transfer coefficient allowed """

ref10 = 10.
""" reference height of neutral 10m quantities (m) """
#------------------------------------------------------------------------------


def check_sizes(count, sizes):
    """ Compares the expected number of samples with a set of array lengths

    Parameters
    ----------
    count : int
        expected number of samples
    sizes : sequence of int
        lengths to check

    Returns
    -------
    status : int
        0 if every length equals count, else the number of lengths that
        disagree
    """
    return sum(1 for size in sizes if int(size) != int(count))
# ---------------------------------------------------------------------


def check_arrays(count, **arrays):
    """ Raises ShapeMismatch for the first array that is not 1-D of length count

    Arrays given as None are skipped.
    """
    for name, arr in arrays.items():
        if arr is None:
            continue
        shape = np.shape(arr)
        if len(shape) != 1:
            raise ShapeMismatch(name, count, shape)
        if check_sizes(count, shape) != 0:
            raise ShapeMismatch(name, count, shape[0])
# ---------------------------------------------------------------------


def lvap(sst):
    """ Latent heat of vaporization of sea water

    Parameters
    ----------
    sst : float
        sea surface temperature [K]

    Returns
    -------
    lv : float
        latent heat of vaporization [J/kg]
    """
    sst = np.asarray(sst, dtype=float)
    return (2.501-0.00237*(sst-CtoK))*1e6
# ---------------------------------------------------------------------


def gc(lat, lon=None):
    """ Computes gravity relative to latitude

    Parameters
    ----------
    lat : float
        latitude (degrees)
    lon : float
        longitude (degrees, optional)

    Returns
    -------
    gc : float
        gravity constant (m/s^2)
    """
    gamma = 9.7803267715
    c1 = 0.0052790414
    c2 = 0.0000232718
    c3 = 0.0000001262
    c4 = 0.0000000007
    if lon is not None:
        lon_m, lat_m = np.meshgrid(lon, lat)
    else:
        lat_m = np.asarray(lat, dtype=float)
    phi = lat_m*np.pi/180.
    xx = np.sin(phi)
    gc = (gamma*(1+c1*np.power(xx, 2)+c2*np.power(xx, 4)+c3*np.power(xx, 6) +
          c4*np.power(xx, 8)))
    return gc
# ---------------------------------------------------------------------


def visc_air(T):
    """ Computes the kinematic viscosity of dry air as a function of air temp.
    following Andreas (1989), CRREL Report 89-11.

    Parameters
    ----------
    T : float
        air temperature [K]

    Returns
    -------
    visa : float
        kinematic viscosity (m^2/s)
    """
    T = np.asarray(T, dtype=float)-CtoK
    visa = 1.326e-5*(1+6.542e-3*T+8.301e-6*np.power(T, 2) -
                     4.84e-9*np.power(T, 3))
    return visa
# ---------------------------------------------------------------------


def cp_air(q):
    """ Specific heat of moist air (J/kg/K), q in kg/kg """
    return cp_dry+cp_vap*q
# ---------------------------------------------------------------------


def rho_air(T, q, P):
    """ Density of moist air (kg/m^3)

    Parameters
    ----------
    T : float
        air temperature [K]
    q : float
        specific humidity [kg/kg]
    P : float
        air pressure [Pa]
    """
    return P/(R_dry*T*(1+rctv0*q))
# ---------------------------------------------------------------------


def gamma_dry(grav, q):
    """ Dry adiabatic lapse rate (K/m) """
    return grav/cp_air(q)
