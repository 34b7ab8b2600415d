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

import warnings
import numpy as np
from .errors import ShapeMismatch
from .util_subs import check_arrays
from .hum_subs import liquid_methods

skins = ("C35", "ecmwf")


def _as_batch(name, arr):
    arr = np.asarray(arr, dtype=float)
    if arr.ndim != 1:
        raise ShapeMismatch(name, "a one-dimensional array", arr.shape)
    return arr


def _as_height(name, h):
    if np.ndim(h) != 0:
        raise ValueError(f"{name} must be a scalar height, got {h!r}")
    h = float(h)
    if not (np.isfinite(h) and h > 0):
        raise ValueError(f"{name} must be a positive height [m], got {h}")
    return h


def get_init(zt, zu, sst, t_zt, q_zt, U_zu, V_zu, slp, rad_sw=None,
             rad_lw=None, niter=5, gust=None, qmeth="Buck2", lat=None,
             skin=None, wl=0, nworkers=1, default_gust=(0, 0, 0),
             default_skin="C35"):
    """
    Checks initial input values and sets defaults if needed

    Parameters
    ----------
    zt : float
        height of the air temperature and humidity [m]
    zu : float
        height of the wind [m]
    sst : float
        sea surface temperature [K]
    t_zt : float
        air temperature at zt [K]
    q_zt : float
        specific humidity at zt [kg/kg]
    U_zu, V_zu : float
        eastward and northward wind at zu [m/s]
    slp : float
        sea level pressure [Pa]
    rad_sw : float
        downwelling shortwave radiation [W/m^2], optional
    rad_lw : float
        downwelling longwave radiation [W/m^2], optional
    niter : int
        number of iterations, values below 1 are reset to 1
    gust : int
        3x1 [x, beta, zi] x=1 to include the effect of gustiness, else 0
        beta gustiness parameter, zi PBL height (m);
        None for the method default, 0 to switch gustiness off
    qmeth : str
        saturation vapour pressure formula, default Buck2
    lat : float
        latitude (deg), scalar or one value per sample, default 45deg
    skin : str
        cool skin method "C35" or "ecmwf", None for the method default
    wl : int
        warm layer correction (0: off default, 1: on, needs radiation)
    nworkers : int
        number of threads sharing the batch
    default_gust, default_skin :
        defaults of the bulk method

    Returns
    -------
    arrays : dict
        float64 input arrays keyed by name, lat expanded to the batch
        and radiation set to None when not given
    config : dict
        niter, gust, qmeth, skin, wl, nworkers

    Raises
    ------
    ShapeMismatch
        if an input is not one-dimensional or its length differs from sst
    ValueError
        for any other invalid configuration
    """
    if (rad_sw is None) != (rad_lw is None):
        raise ValueError("rad_sw and rad_lw must be given together")
    arrays = {"sst": sst, "t_zt": t_zt, "q_zt": q_zt, "U_zu": U_zu,
              "V_zu": V_zu, "slp": slp, "rad_sw": rad_sw, "rad_lw": rad_lw}
    arrays = {name: None if arr is None else _as_batch(name, arr)
              for name, arr in arrays.items()}
    nlen = arrays["sst"].shape[0]
    if lat is None:
        lat = 45
    if np.ndim(lat) == 0:
        arrays["lat"] = np.full(nlen, float(lat))
    else:
        arrays["lat"] = _as_batch("lat", lat)
    check_arrays(nlen, **arrays)

    zt, zu = _as_height("zt", zt), _as_height("zu", zu)

    if isinstance(niter, bool) or not isinstance(niter, (int, np.integer)):
        raise ValueError(f"niter must be an integer, got {niter!r}")
    if niter < 1:
        warnings.warn(f"Iteration number {niter} < 1 - resetting to 1.")
        niter = 1

    if gust is None:
        gust = list(default_gust)
    elif np.size(gust) == 1 and np.all(np.asarray(gust) == 0):
        gust = [0, 0, 0]
    if np.size(gust) != 3:
        raise ValueError("gust input must be a 3x1 array")
    gust = [float(g) for g in np.ravel(gust)]
    if gust[0] not in (0, 1):
        raise ValueError("gust at position 0 must be 0 or 1")
    if gust[0] == 1 and not (gust[1] > 0 and gust[2] > 0):
        raise ValueError("gust beta and zi must be positive")

    if qmeth not in liquid_methods:
        raise ValueError(f"unknown q-method {qmeth!r}")

    skin = default_skin if skin is None else skin
    if skin not in skins:
        raise ValueError(f"skin must be one of {skins}, got {skin!r}")
    if wl not in (0, 1):
        raise ValueError("wl must be 0 or 1")
    if wl == 1 and rad_sw is None:
        raise ValueError("warm layer correction needs rad_sw and rad_lw")

    if (isinstance(nworkers, bool) or
            not isinstance(nworkers, (int, np.integer)) or nworkers < 1):
        raise ValueError(f"nworkers must be a positive integer, "
                         f"got {nworkers!r}")

    config = {"zt": zt, "zu": zu, "niter": int(niter), "gust": gust,
              "qmeth": qmeth, "skin": skin, "wl": wl,
              "nworkers": int(nworkers)}
    return arrays, config
