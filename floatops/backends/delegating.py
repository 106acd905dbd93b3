#    Copyright 2026 Two Sigma Open Source, LLC
#
#    Licensed under the Apache License, Version 2.0 (the "License");
#    you may not use this file except in compliance with the License.
#    You may obtain a copy of the License at
#
#        http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS,
#    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#    See the License for the specific language governing permissions and
#    limitations under the License.

"""Delegating backend: forward every operation to numpy.

Delegating Backend
==================

numpy already provides the per-width predicates, truncation and math
routines, so this backend is a thin forwarding layer. It only adds what the
host lacks:

    - classify / is_normal: composed from isnan, isinf and the smallest
      normal magnitude reported by numpy.finfo
    - integer_decode: bit-level decode of the binary64 pattern; binary32
      values are widened to binary64 first
    - log: ln(x) / ln(base)

The host is trusted as-is, so no platform overrides apply here.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

import numpy as np

from floatops.backends.interface import FloatOps
from floatops.backends.op_tables import TRANSCENDENTAL_OPERATIONS, Source
from floatops.config import F64, BuildTarget, FloatFormat
from floatops.float_types import Bits, Classification, IntegerDecomposition, Real
from floatops.utils.bits import decode_bits
from floatops.utils.validation import assert_bit_width, assert_int32, assert_integral

__all__ = ["DelegatingFloatOps"]


class DelegatingFloatOps(FloatOps):
    """FloatOps forwarded to numpy's scalar routines for the width."""

    backend_name = "delegating"

    def __init__(self, fmt: FloatFormat, target: BuildTarget) -> None:
        super().__init__(fmt, target)
        self._finfo = np.finfo(fmt.dtype)

    def _apply(self, func: Callable, *args: Real) -> np.floating:
        with np.errstate(all="ignore"):
            return self.format.dtype(func(*(self.narrow(arg) for arg in args)))

    # ------------------------------------------------------------------
    # Bit access
    # ------------------------------------------------------------------

    def to_bits(self, x: Real) -> Bits:
        return Bits(int(self.narrow(x).view(self.format.uint_dtype)))

    def from_bits(self, bits: int) -> np.floating:
        assert_bit_width(bits, self.format.bits, f"{self.format.name} bit pattern")
        return self.format.uint_dtype(bits).view(self.format.dtype)

    # ------------------------------------------------------------------
    # Sentinels
    # ------------------------------------------------------------------

    def nan(self) -> np.floating:
        return self.format.dtype(np.nan)

    def infinity(self) -> np.floating:
        return self.format.dtype(np.inf)

    def neg_infinity(self) -> np.floating:
        return self.format.dtype(-np.inf)

    def neg_zero(self) -> np.floating:
        return self.format.dtype(-0.0)

    def epsilon(self) -> np.floating:
        return self.format.dtype(self._finfo.eps)

    # ------------------------------------------------------------------
    # Classification and sign
    # ------------------------------------------------------------------

    @np.errstate(invalid="ignore")
    def classify(self, x: Real) -> Classification:
        x = self.narrow(x)
        if np.isnan(x):
            return Classification.NAN
        if np.isinf(x):
            return Classification.INFINITE
        if x == 0:
            return Classification.ZERO
        if np.abs(x) < self._finfo.smallest_normal:
            return Classification.SUBNORMAL
        return Classification.NORMAL

    @np.errstate(invalid="ignore")
    def is_nan(self, x: Real) -> bool:
        return bool(np.isnan(self.narrow(x)))

    @np.errstate(invalid="ignore")
    def is_infinite(self, x: Real) -> bool:
        return bool(np.isinf(self.narrow(x)))

    @np.errstate(invalid="ignore")
    def is_finite(self, x: Real) -> bool:
        return bool(np.isfinite(self.narrow(x)))

    @np.errstate(invalid="ignore")
    def is_normal(self, x: Real) -> bool:
        x = self.narrow(x)
        return bool(np.isfinite(x) and np.abs(x) >= self._finfo.smallest_normal)

    def is_sign_positive(self, x: Real) -> bool:
        return not np.signbit(self.narrow(x))

    def is_sign_negative(self, x: Real) -> bool:
        return bool(np.signbit(self.narrow(x)))

    # ------------------------------------------------------------------
    # Derived operations
    # ------------------------------------------------------------------

    def trunc(self, x: Real) -> np.floating:
        return self._apply(np.trunc, x)

    def recip(self, x: Real) -> np.floating:
        return self._apply(np.reciprocal, x)

    # ------------------------------------------------------------------
    # Transcendental operations
    # ------------------------------------------------------------------

    def powi(self, x: Real, n: int) -> np.floating:
        assert_integral(n, "powi exponent")
        n = int(n)
        assert_int32(n, "powi exponent")
        # Exponent kept in binary64 so odd exponents above 2**24 stay odd
        with np.errstate(all="ignore"):
            return self.narrow(np.power(F64.dtype(self.narrow(x)), F64.dtype(n)))

    def powf(self, x: Real, n: Real) -> np.floating:
        return self._apply(np.power, x, n)

    def exp(self, x: Real) -> np.floating:
        return self._apply(np.exp, x)

    def exp2(self, x: Real) -> np.floating:
        return self._apply(np.exp2, x)

    def ln(self, x: Real) -> np.floating:
        return self._apply(np.log, x)

    def log2(self, x: Real) -> np.floating:
        return self._apply(np.log2, x)

    def log10(self, x: Real) -> np.floating:
        return self._apply(np.log10, x)

    def cbrt(self, x: Real) -> np.floating:
        return self._apply(np.cbrt, x)

    def hypot(self, x: Real, other: Real) -> np.floating:
        return self._apply(np.hypot, x, other)

    def exp_m1(self, x: Real) -> np.floating:
        return self._apply(np.expm1, x)

    def ln_1p(self, x: Real) -> np.floating:
        return self._apply(np.log1p, x)

    # ------------------------------------------------------------------
    # Decomposition
    # ------------------------------------------------------------------

    def integer_decode(self, x: Real) -> IntegerDecomposition:
        # TODO: decode binary32 with its own bias and width instead of widening
        wide = F64.dtype(self.narrow(x))
        return decode_bits(int(wide.view(F64.uint_dtype)), F64)

    def sources(self) -> Mapping[str, Source]:
        table = {name: Source.PRIMITIVE for name in TRANSCENDENTAL_OPERATIONS}
        table["log"] = Source.FALLBACK
        return table
