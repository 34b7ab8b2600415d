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

"""
    Saturation vapour pressure and saturation specific humidity

    The vapour pressure formulas follow the compilation of Holger Voemel
    (NCAR/EOL), ported to Python by S. Biri. Temperatures are in K, air
    pressure in hPa and the vapour pressure is returned in hPa.
"""
import logging
import numpy as np
from .util_subs import CtoK, reps0, rdct_qsat_salt

logger = logging.getLogger(__name__)

liquid_methods = ("HylandWexler", "Hardy", "Preining", "Wexler",
                  "GoffGratch", "CIMO", "MagnusTetens", "Buck", "Buck2",
                  "WMO", "Sonntag", "Bolton", "IAPWS", "MurphyKoop")
ice_methods = ("HylandWexler", "GoffGratch", "Buck", "Buck2", "MurphyKoop")


def _es_liquid(T, P, meth):
    temp = T-CtoK
    if meth == "HylandWexler":
        # Hyland and Wexler (1983), ASHRAE Trans, 89(2A), 500-519
        return np.exp(-0.58002206e4/T+0.13914993e1-0.48640239e-1*T +
                      0.41764768e-4*np.power(T, 2) -
                      0.14452093e-7*np.power(T, 3) +
                      0.65459673e1*np.log(T))/100
    if meth == "Hardy":
        # Hardy (1998), ITS-90 formulations for vapor pressure
        return np.exp(-2.8365744e3/np.power(T, 2)-6.028076559e3/T +
                      1.954263612e1-2.737830188e-2*T +
                      1.6261698e-5*np.power(T, 2) +
                      7.0229056e-10*np.power(T, 3) -
                      1.8680009e-13*np.power(T, 4) +
                      2.7150305*np.log(T))/100
    if meth == "Preining":
        # Vehkamaeki et al. (2002), JGR, 107
        return np.exp(-7235.424651/T+77.34491296+5.7113e-3*T -
                      8.2*np.log(T))/100
    if meth == "Wexler":
        # Wexler (1976), J. Res. NBS, 80A, 775-785
        return np.exp(-0.29912729e4*np.power(T, -2) -
                      0.60170128e4*np.power(T, -1) +
                      0.1887643854e2-0.28354721e-1*T +
                      0.17838301e-4*np.power(T, 2) -
                      0.84150417e-9*np.power(T, 3) +
                      0.44412543e-12*np.power(T, 4) +
                      2.858487*np.log(T))/100
    if meth == "GoffGratch":
        # Smithsonian Meteorological Tables, 5th edition, p. 350, 1984
        Ts = 373.16  # steam point temperature in K
        ews = 1013.246  # saturation pressure at steam point temperature
        return np.power(10, -7.90298*(Ts/T-1)+5.02808*np.log10(Ts/T) -
                        1.3816e-7*(np.power(10, 11.344*(1-T/Ts))-1) +
                        8.1328e-3*(np.power(10, -3.49149*(Ts/T-1))-1) +
                        np.log10(ews))
    if meth == "CIMO":
        # WMO Publication No 8, 7th edition, Annex 4B
        return (6.112*np.exp(17.62*temp/(243.12+temp)) *
                (1.0016+3.15e-6*P-0.074/P))
    if meth == "MagnusTetens":
        # Murray (1967), J. Appl. Meteorol., 6, 203-204
        return 6.1078*np.exp(17.269388*temp/(temp+237.3))
    if meth == "Buck":
        # Buck (1981), J. Appl. Meteorol., 20, 1527-1532
        return (6.1121*np.exp(17.502*temp/(240.97+temp)) *
                (1.0007+(3.46e-6*P)))
    if meth == "Buck2":
        # Buck Research, Model CR-1A Hygrometer Operating Manual, Sep 2001
        return (6.1121*np.exp((18.678-temp/234.5)*temp/(257.14+temp)) *
                (1+1e-4*(7.2+P*(0.0320+5.9e-6*np.power(temp, 2)))))
    if meth == "WMO":
        # Goff (1957) as intended by WMO-NO 49, App. A
        Ts = 273.16  # triple point temperature in K
        return np.power(10, 10.79574*(1-Ts/T)-5.028*np.log10(T/Ts) +
                        1.50475e-4*(1-np.power(10, -8.2969*(T/Ts-1))) +
                        0.42873e-3*(np.power(10, 4.76955*(1-Ts/T))-1) +
                        0.78614)
    if meth == "Sonntag":
        # Sonntag (1994), Meteorol. Z., N. F., 3, 51-66
        return np.exp(-6096.9385*np.power(T, -1)+16.635794 -
                      2.711193e-2*T+1.673952e-5*np.power(T, 2) +
                      2.433502*np.log(T))
    if meth == "Bolton":
        # Bolton (1980), MWR, 108, 1046-1053, eq. (10)
        return 6.112*np.exp(17.67*temp/(temp+243.5))
    if meth == "IAPWS":
        # Wagner and Pruss (2002), J. Phys. Chem. Ref. Data, 31(2), 387-535
        Tc = 647.096   # K   : Temperature at the critical point
        Pc = 22.064e4  # hPa : Vapor pressure at the critical point
        nu = (1-T/Tc)
        a1, a2, a3 = -7.85951783, 1.84408259, -11.7866497
        a4, a5, a6 = 22.6807411, -15.9618719, 1.80122502
        return (Pc*np.exp(Tc/T*(a1*nu+a2*np.power(nu, 1.5) +
                a3*np.power(nu, 3)+a4*np.power(nu, 3.5) +
                a5*np.power(nu, 4)+a6*np.power(nu, 7.5))))
    if meth == "MurphyKoop":
        # Murphy and Koop (2005), QJRMS, 131, 1539-1565
        return np.exp(54.842763-6763.22/T-4.210*np.log(T)+0.000367*T +
                      np.tanh(0.0415*(T-218.8))*(53.878-1331.22/T -
                      9.44523*np.log(T)+0.014025*T))/100
    raise ValueError("unknown vapour pressure method over liquid: "
                     f"{meth!r}, expected one of {liquid_methods}")


def _es_ice(T, P, meth):
    temp = T-CtoK
    if meth == "HylandWexler":
        Psat = np.exp(-0.56745359e4/T+0.63925247e1-0.96778430e-2*T +
                      0.62215701e-6*np.power(T, 2) +
                      0.20747825e-8*np.power(T, 3) -
                      0.9484024e-12*np.power(T, 4) +
                      0.41635019e1*np.log(T))/100
    elif meth == "GoffGratch":
        ei0 = 6.1071  # mbar
        T0 = 273.16   # triple point in K
        Psat = np.power(10, -9.09718*(T0/T-1)-3.56654*np.log10(T0/T) +
                        0.876793*(1-T/T0)+np.log10(ei0))
    elif meth == "Buck":
        Psat = (6.1115*np.exp(22.452*temp/(272.55+temp)) *
                (1.0003+(4.18e-6*P)))
    elif meth == "Buck2":
        Psat = (6.1115*np.exp((23.036-temp/333.7)*temp/(279.82+temp)) *
                (1+1e-4*(2.2+P*(0.0383+6.4e-6*np.power(temp, 2)))))
    elif meth == "MurphyKoop":
        Psat = np.exp(9.550426-5723.265/T+3.53068*np.log(T) -
                      0.00728332*T)/100
    else:
        raise ValueError("unknown vapour pressure method over ice: "
                         f"{meth!r}, expected one of {ice_methods}")
    # above freezing use Hyland and Wexler over water
    return np.where(temp > 0, _es_liquid(T, P, "HylandWexler"), Psat)
# ---------------------------------------------------------------------


def VaporPressure(T, P, phase="liquid", meth="Buck2"):
    """
    Calculates the saturation vapor pressure

    Parameters
    ----------
    T : float
        temperature [K]
    P : float
        air pressure [hPa]
    phase : str
        'liquid' : vapor pressure over liquid water
        'ice' : vapor pressure over ice (liquid above freezing)
    meth : str
        formula to be used, one of liquid_methods (ice_methods)

    Returns
    -------
    Psat : float
        saturation vapor pressure [hPa]
    """
    T = np.asarray(T, dtype=float)
    P = np.asarray(P, dtype=float)
    logger.debug("saturation vapour pressure over %s from %s", phase, meth)
    if phase == "liquid":
        return _es_liquid(T, P, meth)
    elif phase == "ice":
        return _es_ice(T, P, meth)
    raise ValueError(f"phase must be 'liquid' or 'ice', got {phase!r}")
# ---------------------------------------------------------------------


def q_from_e(e, P):
    """ Specific humidity (kg/kg) from vapour pressure e and air pressure P
    (same units) """
    return reps0*e/(P-(1-reps0)*e)
# ---------------------------------------------------------------------


def qsat_sea(T, P, qmeth="Buck2"):
    """
    Computes the saturation specific humidity at the sea surface

    Parameters
    ----------
    T : float
        sea surface temperature [K]
    P : float
        pressure [Pa]
    qmeth : str
        method to calculate vapor pressure

    Returns
    -------
    qs : float
        specific humidity [kg/kg], reduced by 2% for salinity
    """
    P = np.asarray(P, dtype=float)/100
    es = rdct_qsat_salt*VaporPressure(T, P, "liquid", qmeth)
    return q_from_e(es, P)
# ---------------------------------------------------------------------


def qsat_air(T, P, rh=100, qmeth="Buck2"):
    """
    Computes the specific humidity of air at a given relative humidity

    Parameters
    ----------
    T : float
        air temperature [K]
    P : float
        pressure [Pa]
    rh : float
        relative humidity [%]
    qmeth : str
        method to calculate vapor pressure

    Returns
    -------
    q : float
        specific humidity [kg/kg]
    """
    P = np.asarray(P, dtype=float)/100
    es = VaporPressure(T, P, "liquid", qmeth)
    return q_from_e(np.asarray(rh, dtype=float)/100*es, P)
