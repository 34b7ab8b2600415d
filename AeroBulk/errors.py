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

"""AeroBulk error types.

Only two conditions abort a call, and both are detected before any
numerical work starts: inputs of disagreeing length and an unrecognised
algorithm tag. Numerically degenerate samples are never raised; they come
back as non-finite values in the output arrays.

Example:
    try:
        QL, QH, taux, tauy = AeroBulk.model("coare", 2, 10, sst, t, q, u, v, slp)
    except AeroBulk.ShapeMismatch as e:
        print(f"'{e.field}' has length {e.got}, expected {e.expected}")
"""


class AeroBulkError(Exception):
    """Base class for all AeroBulk errors."""

    pass


class ShapeMismatch(AeroBulkError, ValueError):
    """Raised when the arrays of a batch do not share the same length.

    Attributes:
        field: Name of the first offending input.
        expected: Length shared by the batch.
        got: Length (or shape) actually provided.
    """

    def __init__(self, field, expected, got):
        message = (
            f"Input size mismatch for '{field}':\n"
            f"  Expected: {expected}\n"
            f"  Got: {got}\n"
            "All arrays of a batch must be one-dimensional with the same "
            "length."
        )
        super().__init__(message)
        self.field = field
        self.expected = expected
        self.got = got


class UnknownAlgorithm(AeroBulkError, ValueError):
    """Raised for an algorithm tag outside the registered set.

    Attributes:
        algo: The rejected value.
    """

    def __init__(self, algo, message=None):
        if message is None:
            message = (f"Unknown algorithm {algo!r}; expected one of "
                       "Other, COARE, COARE35, NCAR, ECMWF")
        super().__init__(message)
        self.algo = algo
