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
    Cool skin and warm layer corrections of the sea surface temperature

    All surface heat fluxes in this module are heat losses of the ocean,
    positive upward. The corrections are returned as positive numbers:
    dter is the cooling of the skin below the bulk sst and dtwl the warming
    of the near-surface layer above it.
"""
import numpy as np
from .util_subs import (CtoK, kappa, sigma_sb, emiss_w)

# density, specific heat, kinematic viscosity and thermal conductivity
# of sea water
rho_w, cp_w, visc_w, k_w = 1025, 4190, 1e-6, 0.6
albedo_corr = 0.945
# ---------------------------------------------------------------------


def get_Rnl(Ts, Rl):
    """
    Net longwave heat loss of the sea surface

    Parameters
    ----------
    Ts : float
        skin temperature [K]
    Rl : float
        downwelling longwave radiation [W/m^2]

    Returns
    -------
    Rnl : float
        upwelling minus absorbed downwelling longwave [W/m^2]
    """
    return emiss_w*(sigma_sb*np.power(Ts, 4)-Rl)
# ---------------------------------------------------------------------


def get_Qnsol(rho, Rnl, cp, lv, usr, tsr, qsr):
    """ Non-solar heat loss: net longwave, sensible and latent [W/m^2] """
    shf = -rho*cp*usr*tsr
    lhf = -rho*lv*usr*qsr
    return Rnl+shf+lhf, lhf
# ---------------------------------------------------------------------


def solar_fraction(delta):
    """ Fraction of the solar radiation absorbed in a layer of thickness
    delta, Fairall et al. (1996) """
    return 0.065+11*delta-6.6e-5/delta*(1-np.exp(-delta/8.0e-4))
# ---------------------------------------------------------------------


def cs_C35(sst, rho, Rs, Rnl, cp, lv, delta, usr, tsr, qsr, grav):
    """
    Computes cool skin
    following COARE3.5 (Fairall et al. 1996, Edson et al. 2013)

    Parameters
    ----------
    sst : float
        sea surface temperature      [K]
    rho : float
        density of air               [kg/m^3]
    Rs : float
        downward shortwave radiation [Wm-2]
    Rnl : float
        net upwelling IR radiation   [Wm-2]
    cp : float
       specific heat of air at constant pressure [J/K/kg]
    lv : float
       latent heat of vaporization   [J/kg]
    delta : float
       cool skin thickness from the previous step [m]
    usr : float
       friction velocity             [m/s]
    tsr : float
       star temperature              [K]
    qsr : float
       star humidity                 [kg/kg]
    grav : float
       acceleration of gravity       [m/s^2]

    Returns
    -------
    dter : float
        cool skin correction         [K]
    delta : float
       cool skin thickness           [m]
    """
    # coded following Saunders (1967) with lambda = 6
    rhow, cpw = 1022, 4000
    aw = 2.1e-5*np.power(np.maximum(sst-CtoK+3.2, 0), 0.79)
    bigc = (16*grav*cpw*np.power(rhow*visc_w, 3) /
            (np.power(k_w, 2)*np.power(rho, 2)))
    Rns = albedo_corr*Rs
    Qnsol, lhf = get_Qnsol(rho, Rnl, cp, lv, usr, tsr, qsr)
    qcol = Qnsol-Rns*solar_fraction(delta)
    alq = aw*qcol+0.026*lhf*cpw/lv
    xlamx = np.where(alq > 0, 6/np.power(
        1+np.power(bigc*np.maximum(alq, 0)/np.power(usr, 4), 0.75), 1/3), 6)
    delta = xlamx*visc_w/(np.sqrt(rho/rhow)*usr)
    delta = np.where(alq > 0, delta, np.minimum(delta, 0.01))
    dter = qcol*delta/k_w
    return dter, delta
# ---------------------------------------------------------------------


def delta(aw, Q, usr, grav):
    """
    Computes the thickness (m) of the viscous skin layer.
    Based on Fairall et al., 1996 and cited in IFS Documentation Cy46r1
    eq. 8.155 p. 164

    Parameters
    ----------
    aw : float
        thermal expansion coefficient of sea-water  [1/K]
    Q : float
        heat loss at the surface net of absorbed solar [W/m^2]
    usr : float
        friction velocity in the air (u*) [m/s]
    grav : float
       acceleration of gravity  [m/s^2]

    Returns
    -------
    delta : float
        the thickness (m) of the viscous skin layer
    """
    # u* in the water
    usr_w = np.maximum(usr, 1e-4)*np.sqrt(1.2/rho_w)  # rhoa=1.2
    rcst_cs = 16*grav*rho_w*cp_w*np.power(visc_w, 3)/np.power(k_w, 2)
    lm = 6/np.power(1+np.power(np.maximum(Q*aw*rcst_cs /
                                          np.power(usr_w, 4), 0), 3/4), 1/3)
    return np.minimum(lm*visc_w/usr_w, 0.007)
# ---------------------------------------------------------------------


def cs_ecmwf(rho, Rs, Rnl, cp, lv, usr, tsr, qsr, sst, grav):
    """
    cool skin adjustment based on IFS Documentation cy46r1

    Parameters
    ----------
    rho : float
        density of air               [kg/m^3]
    Rs : float
        downward solar radiation [Wm-2]
    Rnl : float
        net upwelling thermal radiation [Wm-2]
    cp : float
       specific heat of air at constant pressure [J/K/kg]
    lv : float
       latent heat of vaporization   [J/kg]
    usr : float
       friction velocity         [m/s]
    tsr : float
       star temperature              [K]
    qsr : float
       star humidity                 [kg/kg]
    sst : float
        sea surface temperature  [K]
    grav : float
       acceleration of gravity   [m/s^2]

    Returns
    -------
    dter : float
        cool skin temperature correction [K]
    delta : float
        cool skin thickness [m]
    """
    aw = np.maximum(1e-5, 1e-5*(sst-CtoK))
    Rns = albedo_corr*Rs
    Qnsol, _ = get_Qnsol(rho, Rnl, cp, lv, usr, tsr, qsr)  # eq. 8.152
    d = delta(aw, Qnsol, usr, grav)
    for jc in range(10):  # implicit in terms of delta
        # fraction of the solar radiation absorbed in layer delta eq. 8.153
        Q = Qnsol-solar_fraction(d)*Rns
        d = delta(aw, Q, usr, grav)
    Q = Qnsol-solar_fraction(d)*Rns
    dter = Q*d/k_w  # eq. 8.151
    return dter, d
# ---------------------------------------------------------------------


def wl_ecmwf(rho, Rs, Rnl, cp, lv, usr, tsr, qsr, sst, dtwl, grav):
    """
    warm layer correction following IFS Documentation cy46r1
    and aerobulk (Brodeau et al., 2016)

    Parameters
    ----------
    rho : float
        density of air               [kg/m^3]
    Rs : float
        downward solar radiation    [Wm-2]
    Rnl : float
        net upwelling thermal radiation [Wm-2]
    cp : float
       specific heat of air at constant pressure [J/K/kg]
    lv : float
       latent heat of vaporization   [J/kg]
    usr : float
        friction velocity           [m/s]
    tsr : float
       star temperature              [K]
    qsr : float
       star humidity                 [kg/kg]
    sst : float
        bulk sst                    [K]
    dtwl : float
        warm layer correction from the previous step [K]
    grav : float
        acceleration of gravity     [m/s^2]

    Returns
    -------
    dtwl : float
        warm layer correction       [K]
    """
    rd0 = 3  # depth of the warm layer [m]
    Rns = albedo_corr*Rs
    aw = np.maximum(2.1e-5*np.power(np.maximum(sst-CtoK+3.2, 0), 0.79),
                    1e-5)
    # fraction of solar radiation absorbed in the warm layer
    a1, a2, a3 = 0.28, 0.27, 0.45
    b1, b2, b3 = -71.5, -2.8, -0.06  # [m-1]
    Rd = 1-(a1*np.exp(b1*rd0)+a2*np.exp(b2*rd0)+a3*np.exp(b3*rd0))
    Qnsol, _ = get_Qnsol(rho, Rnl, cp, lv, usr, tsr, qsr)
    # net heating of the layer, buoyancy flux in water
    ZSRD = (Rns*Rd-Qnsol)/(rho_w*cp_w)
    usr = np.maximum(usr, 1e-4)
    usrw = usr*np.sqrt(1.2/rho_w)  # u* in the water
    zc3 = rd0*kappa*grav/np.power(1.2/rho_w, 3/2)
    zc4 = (0.3+1)*kappa/rd0
    zc5 = (0.3+1)/(0.3*rd0)
    ztmp = np.maximum(dtwl, 0)
    zdl = np.power(usrw, 2)*np.sqrt(ztmp/(5*rd0*grav*aw/visc_w))
    zdl = np.where(ZSRD > 0, 2*zdl+ZSRD, zdl)
    zdL = zc3*aw*zdl/np.power(usr, 3)
    # stability function Phi_t(-z/L) (zdL is -z/L)
    zphi = np.where(zdL > 0, 1+(5*zdL+4*np.power(zdL, 2)) /
                    (1+3*zdL+0.25*np.power(zdL, 2)),
                    1/np.sqrt(1+16*np.abs(zdL)))
    zz = zc4*usrw/zphi
    zz = np.maximum(np.abs(zz), 1e-4)*np.where(zz < 0, -1, 1)
    return np.maximum(0, zc5*ZSRD/zz)
