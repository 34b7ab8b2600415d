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
from .util_subs import (kappa, visc_air, rctv0, ref10)

meths = ("C30", "C35", "NCAR", "ecmwf")
# ---------------------------------------------------------------------


def _check_meth(meth):
    if meth not in meths:
        raise ValueError(f"unknown method {meth!r}, expected one of {meths}")
# ---------------------------------------------------------------------


def charnock_calc(u10n, meth="C35"):
    """
    Calculates the Charnock parameter

    Parameters
    ----------
    u10n : float
        neutral 10m wind speed [m/s]
    meth : str
        "C30", "C35" or "ecmwf"

    Returns
    -------
    charn : float
    """
    u10n = np.asarray(u10n, dtype=float)
    if meth == "C30":
        # 0.011 below 10m/s rising linearly to 0.018 at 18m/s
        charn = np.clip(0.011+(u10n-10)*(0.018-0.011)/(18-10), 0.011, 0.018)
    elif meth == "C35":
        # Edson et al. (2013)
        charn = np.clip(0.0017*u10n-0.005, 0, 0.028)
    elif meth == "ecmwf":
        # eq. (3.26) p.38 over sea IFS Documentation cy46r1
        charn = np.full(u10n.shape, 0.018)
    else:
        raise ValueError(f"no Charnock parameter for method {meth!r}")
    return charn
# ---------------------------------------------------------------------


def cdn_calc(u10n, meth="NCAR"):
    """
    Calculates neutral drag coefficient following Large and Yeager (2004)

    Parameters
    ----------
    u10n : float
        neutral 10m wind speed [m/s]
    meth : str

    Returns
    -------
    cdn : float
    """
    if meth != "NCAR":
        raise ValueError(f"no neutral drag polynomial for method {meth!r}")
    u10n = np.asarray(u10n, dtype=float)
    uu = np.maximum(u10n, 0.5)
    cdn = (2.7/uu+0.142+uu/13.09-3.14807e-10*np.power(uu, 6))*1e-3
    cdn = np.where(u10n > 33, 2.34e-3, cdn)
    return cdn
# ---------------------------------------------------------------------


def ctqn_calc(zol, cdn, meth="NCAR"):
    """
    Calculates neutral heat and moisture exchange coefficients
    following Large and Yeager (2004)

    Parameters
    ----------
    zol  : float
        height over MO length
    cdn  : float
        neutral drag coefficient
    meth : str

    Returns
    -------
    ctn : float
        neutral heat exchange coefficient
    cqn : float
        neutral moisture exchange coefficient
    """
    if meth != "NCAR":
        raise ValueError(f"no neutral exchange coefficients for {meth!r}")
    sqrt_cdn = np.sqrt(cdn)
    ctn = np.where(zol >= 0, 18*1e-3*sqrt_cdn, 32.7*1e-3*sqrt_cdn)
    cqn = 34.6*1e-3*sqrt_cdn
    return ctn, cqn
# ---------------------------------------------------------------------


def get_zo(u10n, usr, Ta, grav, meth="C35"):
    """
    Calculates the momentum roughness length

    Parameters
    ----------
    u10n : float
        neutral 10m wind speed [m/s]
    usr : float
        friction velocity      [m/s]
    Ta : float
        air temperature        [K]
    grav : float
        acceleration of gravity [m/s^2]
    meth : str

    Returns
    -------
    zo : float
        roughness length [m]
    """
    _check_meth(meth)
    if meth == "NCAR":
        # roughness equivalent to the neutral drag coefficient at 10m
        return ref10*np.exp(-kappa/np.sqrt(cdn_calc(u10n, meth)))
    zo = (charnock_calc(u10n, meth)*np.power(usr, 2)/grav +
          0.11*visc_air(Ta)/usr)
    return np.minimum(np.maximum(np.abs(zo), 1e-9), 1)
# ---------------------------------------------------------------------


def get_zot(zo, usr, Ta, u10n=None, zol=None, meth="C35"):
    """
    Calculates the temperature and moisture roughness lengths

    Parameters
    ----------
    zo : float
        momentum roughness length [m]
    usr : float
        friction velocity [m/s]
    Ta : float
        air temperature   [K]
    u10n : float
        neutral 10m wind speed [m/s], NCAR only
    zol : float
        height over MO length, NCAR only
    meth : str

    Returns
    -------
    zot : float
        temperature roughness length [m]
    zoq : float
        moisture roughness length    [m]
    """
    _check_meth(meth)
    if meth == "C30":
        rr = zo*usr/visc_air(Ta)
        zoq = np.minimum(1.15e-4, 5.5e-5*np.power(rr, -0.6))
        zot = np.copy(zoq)
    elif meth == "C35":
        rr = zo*usr/visc_air(Ta)
        zoq = np.minimum(1.6e-4, 5.8e-5*np.power(rr, -0.72))
        zot = np.copy(zoq)
    elif meth == "ecmwf":
        # eq. (3.26) p.38 over sea IFS Documentation cy46r1
        zot = 0.40*visc_air(Ta)/usr
        zoq = 0.62*visc_air(Ta)/usr
    else:
        cdn = cdn_calc(u10n, meth)
        ctn, cqn = ctqn_calc(zol, cdn, meth)
        zot = ref10*np.exp(-kappa*np.sqrt(cdn)/ctn)
        zoq = ref10*np.exp(-kappa*np.sqrt(cdn)/cqn)
    return zot, zoq
# ---------------------------------------------------------------------


def psim_calc(zol, meth="C35"):
    """
    Calculates momentum stability function

    Parameters
    ----------
    zol : float
        height over MO length
    meth : str

    Returns
    -------
    psim : float
    """
    _check_meth(meth)
    zol = np.asarray(zol, dtype=float)
    if meth in ("C30", "C35"):
        psim = psiu_26(zol, meth)
    elif meth == "ecmwf":
        psim = np.where(zol < 0, psim_conv(zol), psim_ecmwf(zol))
    else:
        psim = np.where(zol < 0, psim_conv(zol), psi_stab(zol))
    return psim
# ---------------------------------------------------------------------


def psit_calc(zol, meth="C35"):
    """
    Calculates heat stability function

    Parameters
    ----------
    zol : float
        height over MO length
    meth : str
        parameterisation method

    Returns
    -------
    psit : float
    """
    _check_meth(meth)
    zol = np.asarray(zol, dtype=float)
    if meth in ("C30", "C35"):
        psit = psit_26(zol)
    elif meth == "ecmwf":
        psit = np.where(zol < 0, psi_conv(zol), psi_ecmwf(zol))
    else:
        psit = np.where(zol < 0, psi_conv(zol), psi_stab(zol))
    return psit
# ---------------------------------------------------------------------


def psi_conv(zol, alpha=16, beta=0.25):
    """
    Calculates heat stability function for unstable conditions
    (Businger-Dyer)
    """
    xtmp = np.power(1-alpha*np.minimum(zol, 0), beta)
    return 2*np.log((1+np.power(xtmp, 2))*0.5)
# ---------------------------------------------------------------------


def psim_conv(zol, alpha=16, beta=0.25):
    """
    Calculates momentum stability function for unstable conditions
    (Businger-Dyer)
    """
    xtmp = np.power(1-alpha*np.minimum(zol, 0), beta)
    return (2*np.log((1+xtmp)*0.5)+np.log((1+np.power(xtmp, 2))*0.5) -
            2*np.arctan(xtmp)+np.pi/2)
# ---------------------------------------------------------------------


def psi_stab(zol, gamma=5):
    """ Calculates linear stability function for stable conditions """
    return -gamma*zol
# ---------------------------------------------------------------------


def psim_ecmwf(zol):
    """
    Calculates momentum stability function for stable conditions
    for method ecmwf (Beljaars and Holtslag, 1991)

    Parameters
    ----------
    zol : float
        height over MO length

    Returns
    -------
    psim : float
    """
    # eq (3.22) p. 37 IFS Documentation cy46r1
    a, b, c, d = 1, 2/3, 5, 0.35
    zs = np.maximum(zol, 0)
    return -b*(zs-c/d)*np.exp(-d*zs)-a*zs-(b*c)/d
# ---------------------------------------------------------------------


def psi_ecmwf(zol):
    """
    Calculates heat stability function for stable conditions
    for method ecmwf

    Parameters
    ----------
    zol : float
        height over MO length

    Returns
    -------
    psit : float
    """
    # eq (3.22) p. 37 IFS Documentation cy46r1
    a, b, c, d = 1, 2/3, 5, 0.35
    zs = np.maximum(zol, 0)
    return -b*(zs-c/d)*np.exp(-d*zs)-np.power(1+(2/3)*a*zs, 1.5)-(b*c)/d+1
# ---------------------------------------------------------------------


def _psi_free_convection(zu, gamma):
    x = np.power(1-gamma*zu, 1/3)
    return (1.5*np.log((1+x+np.power(x, 2))/3)-np.sqrt(3) *
            np.arctan((1+2*x)/np.sqrt(3))+4*np.arctan(1)/np.sqrt(3))


def psiu_26(zol, meth="C35"):
    """
    Computes velocity structure function as in COARE 3.0 / 3.5

    Parameters
    ----------
    zol : float
        height over MO length
    meth : str
        "C30" or "C35"

    Returns
    -------
    psi : float
    """
    zs, zu = np.maximum(zol, 0), np.minimum(zol, 0)
    if meth == "C30":
        a, b = 1, 2/3
    else:
        a, b = 0.7, 3/4
    c, d = 5, 0.35
    dzol = np.minimum(50, d*zs)  # stable
    psi_s = -1*(a*zs+b*(zs-c/d)*np.exp(-dzol)+b*c/d)
    x = np.power(1-15*zu, 1/4)  # unstable
    psik = (2*np.log((1+x)/2)+np.log((1+x*x)/2)-2*np.arctan(x) +
            2*np.arctan(1))
    psic = _psi_free_convection(zu, 10.15)
    f = np.power(zu, 2)/(1+np.power(zu, 2))
    return np.where(zol < 0, (1-f)*psik+f*psic, psi_s)
# ---------------------------------------------------------------------


def psit_26(zol):
    """
    Computes temperature structure function as in COARE 3.0 / 3.5

    Parameters
    ----------
    zol : float
        height over MO length

    Returns
    -------
    psi : float
    """
    zs, zu = np.maximum(zol, 0), np.minimum(zol, 0)
    b, c, d = 2/3, 5, 0.35
    dzol = np.minimum(d*zs, 50)
    psi_s = -1*(np.power(1+b*zs, 1.5)+b*(zs-c/d)*np.exp(-dzol)+b*c/d-1)
    x = np.sqrt(1-15*zu)
    psik = 2*np.log((1+x)/2)
    psic = _psi_free_convection(zu, 34.15)
    f = np.power(zu, 2)/(1+np.power(zu, 2))
    return np.where(zol < 0, (1-f)*psik+f*psic, psi_s)
# ---------------------------------------------------------------------


def get_gust(beta, zi, Ta, usr, tsrv, grav):
    """
    Computes gustiness

    Parameters
    ----------
    beta : float
        constant
    zi : int
        scale height of the boundary layer depth [m]
    Ta : float
        air temperature   [K]
    usr : float
        friction velocity [m/s]
    tsrv : float
        star virtual temperature of air [K]
    grav : float
        acceleration of gravity [m/s^2]

    Returns
    -------
    ug : float        [m/s]
    """
    Bf = (-grav/Ta)*usr*tsrv
    return np.where(Bf > 0, beta*np.power(np.maximum(Bf, 0)*zi, 1/3), 0)
# ---------------------------------------------------------------------


def get_tsrv(tsr, qsr, Ta, qair):
    """ Virtual star temperature [K] """
    return tsr*(1+rctv0*qair)+rctv0*Ta*qsr
# ---------------------------------------------------------------------


def get_Linv(usr, tsr, qsr, Ta, qair, grav):
    """
    Calculates the inverse of the Monin-Obukhov length

    Parameters
    ----------
    usr : float
        friction velocity [m/s]
    tsr : float
        star temperature [K]
    qsr : float
        star specific humidity [kg/kg]
    Ta : float
        air (potential) temperature at wind height [K]
    qair : float
        air specific humidity at wind height [kg/kg]
    grav : float
        acceleration of gravity [m/s^2]

    Returns
    -------
    Linv : float
        1/L [1/m], bounded to +/-200
    """
    tsrv = get_tsrv(tsr, qsr, Ta, qair)
    Linv = grav*kappa*tsrv/(np.power(usr, 2)*Ta*(1+rctv0*qair))
    return np.sign(Linv)*np.minimum(np.abs(Linv), 200)
# ---------------------------------------------------------------------


def get_Rb(grav, hin, Ta, qair, Ts, qsea, wind):
    """
    Calculates the bulk Richardson number

    Parameters
    ----------
    grav : float
        acceleration of gravity [m/s^2]
    hin : float
        height of the wind [m]
    Ta : float
        air (potential) temperature [K]
    qair : float
        air specific humidity [kg/kg]
    Ts : float
        sea surface temperature [K]
    qsea : float
        specific humidity at the sea surface [kg/kg]
    wind : float
        bulk wind speed [m/s]

    Returns
    -------
    Rb : float
    """
    thva = Ta*(1+rctv0*qair)
    thvs = Ts*(1+rctv0*qsea)
    return grav*hin*(thva-thvs)/(0.5*(thva+thvs)*np.power(wind, 2))
# ---------------------------------------------------------------------


def zeta_from_Rb(Rb, cc, hin, beta, zi, gust=True):
    """
    First guess of the stability parameter from the bulk Richardson number
    following Grachev and Fairall (1997)

    Parameters
    ----------
    Rb : float
        bulk Richardson number
    cc : float
        ratio kappa*Ct/Cd of the neutral coefficients
    hin : float
        height of the wind [m]
    beta, zi : float
        gustiness parameters
    gust : bool
        True if gustiness limits free convection

    Returns
    -------
    zol : float
    """
    if gust:
        Ribcu = -hin/(zi*0.004*np.power(beta, 3))
        unstable = cc*Rb/(1+Rb/Ribcu)
    else:
        unstable = cc*Rb
    return np.where(Rb < 0, unstable, cc*Rb*(1+27/9*Rb/cc))
# ---------------------------------------------------------------------


def get_strs(hin, zol, wind, zo, zot, zoq, dt, dq, psim, psit):
    """
    calculates star wind speed, temperature and specific humidity

    Parameters
    ----------
    hin : float
        sensor heights [m] (wind, temperature, humidity)
    zol : float
        stability parameters at the three heights
    wind : float
        bulk wind speed [m/s]
    zo : float
        momentum roughness length    [m]
    zot : float
        temperature roughness length [m]
    zoq : float
        moisture roughness length    [m]
    dt : float
        air minus surface temperature [K]
    dq : float
        air minus surface specific humidity [kg/kg]
    psim, psit : callable
        momentum and heat stability functions of the closure

    Returns
    -------
    usr : float
        friction wind speed [m/s]
    tsr : float
        star temperature    [K]
    qsr : float
        star specific humidity [kg/kg]
    """
    usr = wind*kappa/(np.log(hin[0]/zo)-psim(zol[0]))
    tsr = dt*kappa/(np.log(hin[1]/zot)-psit(zol[1]))
    qsr = dq*kappa/(np.log(hin[2]/zoq)-psit(zol[2]))
    return usr, tsr, qsr
