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

import logging
from concurrent.futures import ThreadPoolExecutor
import numpy as np
import pandas as pd
from .algo_subs import Algorithm, get_algorithm, algorithm_to_string
from .errors import UnknownAlgorithm
from .get_init import get_init
from .util_subs import (kappa, gc, lvap, cp_air, rho_air, gamma_dry, Cx_min,
                        ref10)
from .hum_subs import qsat_sea
from .flux_subs import (get_zo, get_zot, psim_calc, psit_calc, get_gust,
                        get_tsrv, get_Linv, get_Rb, zeta_from_Rb, get_strs)
from .cs_wl_subs import (get_Rnl, cs_C35, cs_ecmwf, wl_ecmwf)

logger = logging.getLogger(__name__)

res_vars = ("QL", "QH", "Tau_x", "Tau_y", "T_s", "tau", "monob", "cd",
            "cd10n", "ct", "ct10n", "cq", "cq10n", "usr", "tsr", "qsr",
            "tsrv", "psim", "psit", "psiq", "u10n", "t10n", "q10n", "zo",
            "zot", "zoq", "t_zu", "q_zu", "qsea", "dter", "dqer", "dtwl",
            "tkt", "Rl", "Rs", "Rnl", "ug", "wind", "Rb", "rho", "lv")
""" columns available in the AeroBulk output """


def _median(x):
    x = np.asarray(x)
    x = x[np.isfinite(x)]
    return np.median(x) if x.size else np.nan


class BulkSolver:
    """
    Iteration skeleton shared by all bulk algorithms

    A bulk algorithm is defined by its roughness lengths (``roughness``)
    and stability functions (``psim``, ``psit``). The built-in closures
    pick them from ``flux_subs`` through ``meth``; a closure for
    ``Algorithm.OTHER`` subclasses BulkSolver and overrides the three
    methods.
    """

    def roughness(self, u10n, usr, Ta, zol):
        """ Returns the momentum, heat and moisture roughness lengths [m] """
        zo = get_zo(u10n, usr, Ta, self.grav, self.meth)
        zot, zoq = get_zot(zo, usr, Ta, u10n=u10n, zol=zol, meth=self.meth)
        return zo, zot, zoq

    def psim(self, zol):
        """ Momentum stability function """
        return psim_calc(zol, self.meth)

    def psit(self, zol):
        """ Heat and moisture stability function """
        return psit_calc(zol, self.meth)

    @property
    def name(self):
        return self.meth if self.meth is not None else type(self).__name__

    def add_variables(self, sst, t_zt, q_zt, U_zu, V_zu, slp, lat,
                      rad_sw=None, rad_lw=None):
        self.nlen = len(sst)
        self.SST = sst
        self.T = t_zt
        self.qair = q_zt
        self.U, self.V = U_zu, V_zu
        self.spd = np.sqrt(np.power(U_zu, 2)+np.power(V_zu, 2))
        self.P = slp
        self.lat = lat
        self.grav = gc(lat)
        self.cskin = 0 if rad_sw is None else 1
        self.Rs = np.full(self.nlen, np.nan) if rad_sw is None else rad_sw
        self.Rl = np.full(self.nlen, np.nan) if rad_lw is None else rad_lw

    def get_heights(self, zt, zu):
        self.zt, self.zu = zt, zu
        self.h_in = np.array([zu, zt, zt])
        self.h_zu = np.array([zu, zu, zu])

    def add_gust(self, gust=None):
        self.gust = self.default_gust if gust is None else gust

    def set_coolskin_warmlayer(self, skin=None, wl=0):
        self.skin = self.skin if skin is None else skin
        self.wl = wl*self.cskin

    def get_specHumidity(self, qmeth="Buck2"):
        self.qmeth = qmeth
        self.qsea = qsat_sea(self.SST, self.P, qmeth)
        # potential temperature at zt from the dry adiabatic lapse rate
        self.cp = cp_air(self.qair)
        self.theta = self.T+gamma_dry(self.grav, self.qair)*self.zt

    def _clip_zol(self, zol):
        return np.sign(zol)*np.minimum(np.abs(zol), self.zeta_abs_max)

    def _get_zol(self):
        zol_u = self._clip_zol(self.zu*self.Linv)
        zol_t = self._clip_zol(self.zt*self.Linv)
        self.zol = np.array([zol_u, zol_t, zol_t])

    def _get_diffs(self):
        """ air minus surface differences, keeping a minimum magnitude """
        dt = self.t_zu-self.skt
        dq = self.q_zu-self.skq
        dt = np.where(dt < 0, -1, 1)*np.maximum(np.abs(dt), 1e-6)
        dq = np.where(dq < 0, -1, 1)*np.maximum(np.abs(dq), 1e-9)
        return dt, dq

    def _wind_iterate(self):
        if self.gust[0] == 1:
            self.tsrv = get_tsrv(self.tsr, self.qsr, self.t_zu, self.q_zu)
            self.ug = get_gust(self.gust[1], self.gust[2], self.t_zu,
                               self.usr, self.tsrv, self.grav)
            self.wind = np.maximum(np.sqrt(np.power(self.spd, 2) +
                                           np.power(self.ug, 2)), 0.2)
        else:
            self.ug = np.zeros(self.nlen)
            self.wind = np.maximum(self.spd, 0.5)

    def _adjust_heights(self):
        # bring theta and q from zt to zu along the similarity profiles
        if self.zt == self.zu:
            self.t_zu, self.q_zu = np.copy(self.theta), np.copy(self.qair)
            return
        ztmp = (np.log(self.zt/self.zu) +
                self.psit(self._clip_zol(self.zu*self.Linv)) -
                self.psit(self._clip_zol(self.zt*self.Linv)))
        self.t_zu = self.theta-self.tsr/kappa*ztmp
        self.q_zu = self.qair-self.qsr/kappa*ztmp

    def _update_air(self):
        self.rho = rho_air(self.t_zu, self.q_zu, self.P)
        self.cp = cp_air(self.q_zu)

    def _update_coolskin_warmlayer(self):
        if self.cskin == 0:
            return
        self.Rnl = get_Rnl(self.skt, self.Rl)
        if self.skin == "C35":
            self.dter, self.tkt = cs_C35(
                self.SST, self.rho, self.Rs, self.Rnl, self.cp, self.lv,
                self.tkt, self.usr, self.tsr, self.qsr, self.grav)
        else:
            self.dter, self.tkt = cs_ecmwf(
                self.rho, self.Rs, self.Rnl, self.cp, self.lv, self.usr,
                self.tsr, self.qsr, self.SST, self.grav)
        if self.wl == 1:
            self.dtwl = wl_ecmwf(
                self.rho, self.Rs, self.Rnl, self.cp, self.lv, self.usr,
                self.tsr, self.qsr, self.SST, self.dtwl, self.grav)
        self.skt = self.SST-self.dter+self.dtwl
        self.skq = qsat_sea(self.skt, self.P, self.qmeth)
        self.dqer = self.qsea-self.skq
        self.lv = lvap(self.skt)

    def _first_guess(self):
        zeros = np.zeros(self.nlen)
        self.skt, self.skq = np.copy(self.SST), np.copy(self.qsea)
        self.lv = lvap(self.skt)
        self.dter, self.dqer, self.dtwl = [np.copy(zeros) for _ in range(3)]
        self.tkt = np.full(self.nlen, 0.001) if self.cskin else zeros
        self.Rnl = (get_Rnl(self.skt, self.Rl) if self.cskin else
                    np.full(self.nlen, np.nan))
        self.t_zu, self.q_zu = np.copy(self.theta), np.copy(self.qair)
        self._update_air()
        dt, dq = self._get_diffs()

        # 0.5 m/s of gustiness as first guess
        self.wind = np.maximum(np.sqrt(np.power(self.spd, 2)+0.25), 0.2)
        self.ug = np.sqrt(np.power(self.wind, 2)-np.power(self.spd, 2))
        self.usr = 0.035*self.wind*np.log(ref10/1e-4)/np.log(self.zu/1e-4)
        self.u10n = np.copy(self.wind)
        self.zo, self.zot, self.zoq = self.roughness(
            self.u10n, self.usr, self.t_zu, zeros)

        # Rb eq. 11, zeta eq. 12 Grachev & Fairall 1997
        self.Rb = get_Rb(self.grav, self.zu, self.t_zu, self.q_zu, self.skt,
                         self.skq, self.wind)
        cd = np.power(kappa/np.log(self.zu/self.zo), 2)
        ct = kappa/np.log(self.zt/self.zot)
        zol = zeta_from_Rb(self.Rb, kappa*ct/cd, self.zu, self.gust[1],
                           self.gust[2], gust=self.gust[0] == 1)
        self.Linv = self._clip_zol(zol)/self.zu
        self._get_zol()
        self.usr, self.tsr, self.qsr = get_strs(
            self.h_in, self.zol, self.wind, self.zo, self.zot, self.zoq, dt,
            dq, self.psim, self.psit)
        self._adjust_heights()

    def iterate(self, niter=5):
        """ Runs the first guess followed by niter similarity passes """
        logger.info('method %s | %s samples | %s iterations', self.name,
                    self.nlen, niter)
        self._first_guess()
        for it in range(1, niter+1):
            self._update_air()
            dt, dq = self._get_diffs()
            self.Linv = get_Linv(self.usr, self.tsr, self.qsr, self.t_zu,
                                 self.q_zu, self.grav)
            self._get_zol()
            self._wind_iterate()
            self.zo, self.zot, self.zoq = self.roughness(
                self.u10n, self.usr, self.t_zu, self.zol[0])
            # turbulent scales at zu
            self.usr, self.tsr, self.qsr = get_strs(
                self.h_zu, self.zol[[0, 0, 0]], self.wind, self.zo, self.zot,
                self.zoq, dt, dq, self.psim, self.psit)
            self.u10n = self.usr/kappa*np.log(ref10/self.zo)
            self._adjust_heights()
            self._update_air()
            self._update_coolskin_warmlayer()

            if logger.isEnabledFor(logging.DEBUG):
                log_vars = {"dter": 2, "tkt": 5, "usr": 3, "tsr": 4,
                            "qsr": 7, "Linv": 5}
                log_vars = [np.round(_median(getattr(self, V)), R)
                            for V, R in log_vars.items()]
                logger.debug(
                    'method {} | it {} | dter = {} | tkt = {} | usr = {} |'
                    ' tsr = {} | qsr = {} | 1/L = {}'.format(
                        self.name, it, *log_vars))
        self._get_fluxes()

    def _get_fluxes(self):
        dt, dq = self._get_diffs()
        self.Rb = get_Rb(self.grav, self.zu, self.t_zu, self.q_zu, self.skt,
                         self.skq, self.wind)
        self.cd = np.maximum(np.power(self.usr/self.wind, 2), Cx_min)
        self.ct = np.maximum(self.usr*self.tsr/(self.wind*dt), Cx_min)
        self.cq = np.maximum(self.usr*self.qsr/(self.wind*dq), Cx_min)
        self.QH = self.rho*self.cp*self.ct*self.wind*dt
        self.QL = self.rho*self.lv*self.cq*self.wind*dq
        self.Tau_x = self.rho*self.cd*self.wind*self.U
        self.Tau_y = self.rho*self.cd*self.wind*self.V
        self.tau = self.rho*self.cd*self.wind*self.spd
        self.T_s = self.skt

    def get_fluxes(self):
        """ Returns QL, QH, Tau_x, Tau_y (and T_s with radiation) """
        fluxes = (self.QL, self.QH, self.Tau_x, self.Tau_y)
        return fluxes+(self.T_s,) if self.cskin else fluxes

    def _flag(self):
        """Set the general flags."""
        flag = np.full(self.nlen, "n", dtype="object")
        inputs = self.spd+self.T+self.SST+self.qair+self.P
        if self.cskin == 1:
            inputs = inputs+self.Rs+self.Rl
        flag = np.where(np.isnan(inputs), "m", flag)
        checks = (("u", (self.u10n < 0) | (self.u10n > 200)),
                  ("q", self.q_zu < 0),
                  ("l", (self.Rb < -0.5) | (self.Rb > 0.2)))
        for letter, cond in checks:
            flag = np.where(cond & (flag == "n"), letter,
                            np.where(cond & (flag != "n") & (flag != "m"),
                                     flag+","+letter, flag))
        self.flag = flag

    def get_output(self, out_var=None):
        """
        Collects the requested output variables into a pandas DataFrame

        Parameters
        ----------
        out_var : sequence of str
            names from res_vars, default all

        Returns
        -------
        resAll : pandas.DataFrame
            one row per sample plus a "flag" column ("n": normal,
            "m": missing input, "u": u10n<0 or u10n>200,
            "q": negative humidity at zu, "l": Rb<-0.5 or Rb>0.2)
        """
        out_var = res_vars if out_var is None else tuple(out_var)
        with np.errstate(all="ignore"):
            self._flag()
            self._diagnostics()
        alias = {"psim": "psim_", "psit": "psit_", "psiq": "psiq_"}
        res = {V: np.asarray(getattr(self, alias.get(V, V)), dtype=float)
               for V in out_var}
        resAll = pd.DataFrame(data=res, index=range(self.nlen),
                              columns=list(out_var))
        resAll["flag"] = self.flag
        return resAll

    def _diagnostics(self):
        self.monob = 1/self.Linv
        self.tsrv = get_tsrv(self.tsr, self.qsr, self.t_zu, self.q_zu)
        self.psim_, self.psit_, self.psiq_ = (
            self.psim(self.zol[0]), self.psit(self.zol[0]),
            self.psit(self.zol[0]))
        lzo = np.log(ref10/self.zo)
        self.cd10n = np.power(kappa/lzo, 2)
        self.ct10n = np.power(kappa, 2)/(lzo*np.log(ref10/self.zot))
        self.cq10n = np.power(kappa, 2)/(lzo*np.log(ref10/self.zoq))
        self.t10n = self.skt+self.tsr/kappa*np.log(ref10/self.zot)
        self.q10n = self.skq+self.qsr/kappa*np.log(ref10/self.zoq)

    def __init__(self):
        self.meth = None
        self.default_gust = [0, 0, 0]
        self.skin = "C35"
        self.zeta_abs_max = 50


class COARE(BulkSolver):
    """ COARE 3.0 (Fairall et al., 2003) """

    def __init__(self):
        self.meth = "C30"
        self.default_gust = [1, 1.2, 600]
        self.skin = "C35"
        self.zeta_abs_max = 50


class COARE35(COARE):
    """ COARE 3.5 / 3.6 (Edson et al., 2013) """

    def __init__(self):
        self.meth = "C35"
        self.default_gust = [1, 1.2, 600]
        self.skin = "C35"
        self.zeta_abs_max = 50


class NCAR(BulkSolver):
    """ Large and Yeager (2004, 2009) """

    def __init__(self):
        self.meth = "NCAR"
        self.default_gust = [0, 0, 0]
        self.skin = "C35"
        self.zeta_abs_max = 10


class ECMWF(BulkSolver):
    """ ECMWF IFS cy46r1 """

    def __init__(self):
        self.meth = "ecmwf"
        self.default_gust = [1, 1, 1000]
        self.skin = "ecmwf"
        self.zeta_abs_max = 5


method_lookup_dict = {Algorithm.COARE: COARE,
                      Algorithm.COARE35: COARE35,
                      Algorithm.NCAR: NCAR,
                      Algorithm.ECMWF: ECMWF}
# ---------------------------------------------------------------------


def closure_for(algo, closure=None):
    """
    Returns the solver class of an algorithm

    Parameters
    ----------
    algo : Algorithm, int or str
    closure : type
        subclass of BulkSolver, required with Algorithm.OTHER and
        not accepted otherwise

    Returns
    -------
    iclass : type
    """
    algo = get_algorithm(algo)
    if algo == Algorithm.OTHER:
        if isinstance(closure, type) and issubclass(closure, BulkSolver):
            return closure
        raise UnknownAlgorithm(
            algo, "algorithm Other needs a closure: a subclass of "
            f"BulkSolver, got {closure!r}")
    if closure is not None:
        raise ValueError("a closure is only used with algorithm Other, "
                         f"not with {algorithm_to_string(algo)}")
    return method_lookup_dict[algo]
# ---------------------------------------------------------------------


_options = ("gust", "qmeth", "lat", "skin", "wl")


def _setup(algo, zt, zu, sst, t_zt, q_zt, U_zu, V_zu, slp, rad_sw, rad_lw,
           niter, closure, nworkers, kwargs):
    unknown = sorted(set(kwargs)-set(_options))
    if unknown:
        raise TypeError(f"unexpected keyword argument(s): {unknown}")
    iclass = closure_for(algo, closure)
    proto = iclass()
    arrays, config = get_init(zt, zu, sst, t_zt, q_zt, U_zu, V_zu, slp,
                              rad_sw=rad_sw, rad_lw=rad_lw, niter=niter,
                              nworkers=nworkers,
                              default_gust=proto.default_gust,
                              default_skin=proto.skin, **kwargs)
    return iclass, arrays, config


def _solve(iclass, arrays, config, sl):
    iclass = iclass()
    with np.errstate(all="ignore"):
        iclass.add_variables(**{k: None if v is None else v[sl]
                                for k, v in arrays.items()})
        iclass.get_heights(config["zt"], config["zu"])
        iclass.add_gust(gust=config["gust"])
        iclass.set_coolskin_warmlayer(skin=config["skin"], wl=config["wl"])
        iclass.get_specHumidity(qmeth=config["qmeth"])
        iclass.iterate(niter=config["niter"])
    return iclass


def _run(iclass, arrays, config):
    nlen = arrays["sst"].shape[0]
    nworkers = min(config["nworkers"], max(nlen, 1))
    bounds = np.linspace(0, nlen, nworkers+1).astype(int)
    slices = [slice(i, j) for i, j in zip(bounds[:-1], bounds[1:])]
    if nworkers == 1:
        return [_solve(iclass, arrays, config, slices[0])]
    logger.debug('%s samples split over %s workers', nlen, nworkers)
    with ThreadPoolExecutor(max_workers=nworkers) as executor:
        return list(executor.map(
            lambda sl: _solve(iclass, arrays, config, sl), slices))
# ---------------------------------------------------------------------


def model(algo, zt, zu, sst, t_zt, q_zt, U_zu, V_zu, slp, rad_sw=None,
          rad_lw=None, niter=5, closure=None, nworkers=1, **kwargs):
    """
    Computes turbulent air-sea fluxes with a bulk algorithm

    Parameters
    ----------
    algo : Algorithm, int or str
        "coare", "coare35", "ncar", "ecmwf" or "other" (with closure)
    zt : float
        height of air temperature and humidity [m]
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
    rad_sw, rad_lw : float
        downwelling shortwave and longwave radiation [W/m^2]; when both
        are given the cool skin correction is applied and T_s returned
    niter : int
        number of iterations (default 5)
    closure : type
        subclass of BulkSolver used with algorithm "other"
    nworkers : int
        number of threads sharing the batch (default 1)
    **kwargs :
        gust, qmeth, lat, skin, wl, see get_init

    Returns
    -------
    QL : float
        latent heat flux [W/m^2], positive into the ocean
    QH : float
        sensible heat flux [W/m^2], positive into the ocean
    Tau_x, Tau_y : float
        wind stress components [N/m^2]
    T_s : float
        skin temperature [K], only with radiation

    Raises
    ------
    ShapeMismatch
        when the input arrays do not share one length
    UnknownAlgorithm
        for an unknown algorithm tag
    """
    iclass, arrays, config = _setup(
        algo, zt, zu, sst, t_zt, q_zt, U_zu, V_zu, slp, rad_sw, rad_lw,
        niter, closure, nworkers, kwargs)
    nout = 4 if arrays["rad_sw"] is None else 5
    if arrays["sst"].shape[0] == 0:
        return tuple(np.empty(0) for _ in range(nout))
    solved = [iclass.get_fluxes() for iclass in _run(iclass, arrays, config)]
    return tuple(np.concatenate([fluxes[i] for fluxes in solved])
                 for i in range(nout))
# ---------------------------------------------------------------------


def AeroBulk(algo, zt, zu, sst, t_zt, q_zt, U_zu, V_zu, slp, rad_sw=None,
             rad_lw=None, niter=5, closure=None, nworkers=1, out_var=None,
             logfile=None, **kwargs):
    """
    Calculate turbulent surface fluxes and their diagnostics as a table

    Takes the same arguments as model.

    Parameters
    ----------
    out_var : sequence of str
        output columns chosen from res_vars, default all
    logfile : str
        if given, log to this file (INFO level) and capture warnings

    Returns
    -------
    res : pandas.DataFrame
        one row per sample, that contains
                   1. latent heat flux, positive downward (QL)
                   2. sensible heat flux, positive downward (QH)
                   3. eastward, northward wind stress (Tau_x, Tau_y)
                   4. skin temperature (T_s)
                   5. wind stress magnitude (tau)
                   6. Monin-Obukhov length (monob)
                   7. drag, heat and moisture exchange coefficients
                      (cd, ct, cq) and their neutral 10m values
                      (cd10n, ct10n, cq10n)
                   8. star wind speed, temperature, specific humidity and
                      virtual temperature (usr, tsr, qsr, tsrv)
                   9. stability functions (psim, psit, psiq)
                   10. 10m neutral wind, temperature, humidity
                       (u10n, t10n, q10n)
                   11. roughness lengths (zo, zot, zoq)
                   12. potential temperature and humidity at zu (t_zu, q_zu)
                   13. saturation humidity at the bulk sst (qsea)
                   14. cool skin, humidity and warm layer corrections
                       (dter, dqer, dtwl) and cool skin thickness (tkt)
                   15. radiation inputs and net longwave loss (Rl, Rs, Rnl)
                   16. gustiness and bulk wind (ug, wind)
                   17. bulk Richardson number (Rb)
                   18. air density (rho), latent heat of vaporization (lv)
                   19. flag ("n": normal, "m": missing,
                             "u": u10n<0 or u10n>200,
                             "q": humidity at zu < 0,
                             "l": Rb<-0.5 or Rb>0.2)
    """
    if logfile is not None:
        logging.basicConfig(filename=logfile, filemode="w",
                            format='%(asctime)s %(message)s',
                            level=logging.INFO)
        logging.captureWarnings(True)
    if out_var is not None:
        unknown = [V for V in out_var if V not in res_vars]
        if unknown:
            raise ValueError(f"unknown output variable(s) {unknown}")
    iclass, arrays, config = _setup(
        algo, zt, zu, sst, t_zt, q_zt, U_zu, V_zu, slp, rad_sw, rad_lw,
        niter, closure, nworkers, kwargs)
    columns = list(res_vars if out_var is None else out_var)+["flag"]
    if arrays["sst"].shape[0] == 0:
        return pd.DataFrame(columns=columns)
    resAll = pd.concat([iclass.get_output(out_var)
                        for iclass in _run(iclass, arrays, config)],
                       ignore_index=True)
    return resAll
