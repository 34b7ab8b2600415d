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

from enum import IntEnum
from .errors import UnknownAlgorithm


class Algorithm(IntEnum):
    """ Bulk algorithm tags; OTHER is the slot for a caller supplied closure """
    OTHER = 0
    COARE = 1
    COARE35 = 2
    NCAR = 3
    ECMWF = 4


_names = {Algorithm.OTHER: "Other",
          Algorithm.COARE: "COARE 3.0",
          Algorithm.COARE35: "COARE 3.5",
          Algorithm.NCAR: "NCAR",
          Algorithm.ECMWF: "ECMWF"}
# ---------------------------------------------------------------------


def get_algorithm(algo):
    """ Resolves an algorithm tag

    Parameters
    ----------
    algo : Algorithm, int or str
        enumeration member, its integer value (0-4) or its name
        (case-insensitive, e.g. "coare35")

    Returns
    -------
    algo : Algorithm

    Raises
    ------
    UnknownAlgorithm
        if algo does not name one of the five variants
    """
    if isinstance(algo, Algorithm):
        return algo
    if isinstance(algo, bool):
        raise UnknownAlgorithm(algo)
    if isinstance(algo, str):
        try:
            return Algorithm[algo.strip().upper()]
        except KeyError:
            raise UnknownAlgorithm(algo) from None
    try:
        return Algorithm(algo)
    except (ValueError, TypeError):
        raise UnknownAlgorithm(algo) from None
# ---------------------------------------------------------------------


def algorithm_to_string(algo):
    """ Display name of an algorithm, e.g. "COARE 3.5" """
    return _names[get_algorithm(algo)]
