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

import os
from .AeroBulk import (AeroBulk, model, closure_for, BulkSolver, COARE,
                       COARE35, NCAR, ECMWF, method_lookup_dict, res_vars)

from .algo_subs import Algorithm, algorithm_to_string, get_algorithm
from .errors import AeroBulkError, ShapeMismatch, UnknownAlgorithm
from .cs_wl_subs import (cs_C35, cs_ecmwf, delta, get_Rnl, get_Qnsol,
                         solar_fraction, wl_ecmwf)
from .flux_subs import (cdn_calc, charnock_calc, ctqn_calc, get_Linv, get_Rb,
                        get_gust, get_strs, get_tsrv, get_zo, get_zot,
                        psim_calc, psit_calc, psi_ecmwf, psit_26, psi_conv,
                        psi_stab, psim_ecmwf, psiu_26, psim_conv,
                        zeta_from_Rb)
from .hum_subs import qsat_air, qsat_sea, VaporPressure
from .util_subs import (CtoK, kappa, check_sizes, check_arrays, lvap, gc,
                        visc_air, cp_air, rho_air)

__all__ = ['AeroBulk', 'model', 'closure_for', 'BulkSolver', 'COARE',
           'COARE35', 'NCAR', 'ECMWF', 'method_lookup_dict', 'res_vars',
           'Algorithm', 'algorithm_to_string', 'get_algorithm',
           'AeroBulkError', 'ShapeMismatch', 'UnknownAlgorithm', 'cs_C35',
           'cs_ecmwf', 'delta', 'get_Rnl', 'get_Qnsol', 'solar_fraction',
           'wl_ecmwf', 'cdn_calc', 'charnock_calc', 'ctqn_calc', 'get_Linv',
           'get_Rb', 'get_gust', 'get_strs', 'get_tsrv', 'get_zo', 'get_zot',
           'psim_calc', 'psit_calc', 'psi_ecmwf', 'psit_26', 'psi_conv',
           'psi_stab', 'psim_ecmwf', 'psiu_26', 'psim_conv', 'zeta_from_Rb',
           'qsat_air', 'qsat_sea', 'VaporPressure', 'CtoK', 'kappa',
           'check_sizes', 'check_arrays', 'lvap', 'gc', 'visc_air', 'cp_air',
           'rho_air']

__base__ = os.path.dirname(__file__)

__version__ = '1.0.0'
