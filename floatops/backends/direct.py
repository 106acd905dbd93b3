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

"""Direct backend: every operation built from the IEEE 754 bit layout.

Direct Backend
==============

This backend relies on the host only for arithmetic in the width and for
the transcendental routines selected by the dispatch table. Everything else
is computed from the bit pattern, read with a value-preserving numpy
view of the scalar:

    - Classification: mask exponent and mantissa fields
    - Sign: reciprocal trick, 1 / +-0.0 == +-inf; NaN sign from the sign bit
    - trunc: clear the fractional mantissa bits
    - Sentinels and epsilon: assembled from bit patterns
    - integer_decode: exact per-width decode (bias 127 / 1023)

Special Value Handling:
    - NaN: payload and sign bit preserved by to_bits/from_bits
    - Infinity: +-Inf handled per IEEE 754
    - Zero: Both +0 and -0 supported; -0.0 classifies as ZERO and is
      sign-negative
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

import numpy as np

from floatops.backends.interface import FloatOps
from floatops.backends.op_tables import Source, resolve_operations
from floatops.config import BuildTarget, FloatFormat
from floatops.exceptions import LibraryLoadError
from floatops.ffi.libm import MathLibrary, load_libm
from floatops.float_types import Bits, Classification, IntegerDecomposition, Real
from floatops.utils.bits import bits_to_float, decode_bits, float_to_bits, split_fields
from floatops.utils.validation import assert_bit_width

__all__ = ["DirectFloatOps"]

logger = logging.getLogger(__name__)


def _load_libm_or_none(target: BuildTarget) -> MathLibrary | None:
    try:
        return load_libm(target.libm)
    except LibraryLoadError as exc:
        logger.warning("C math library unavailable, using fallbacks: %s", exc)
        return None


class DirectFloatOps(FloatOps):
    """FloatOps computed from bit patterns plus dispatched math routines."""

    backend_name = "direct"

    def __init__(self, fmt: FloatFormat, target: BuildTarget) -> None:
        super().__init__(fmt, target)
        self._table = resolve_operations(fmt, target, _load_libm_or_none(target))
        self._one = fmt.dtype(1.0)
        self._nan = bits_to_float(fmt.canonical_nan, fmt)
        self._infinity = bits_to_float(fmt.exponent_mask, fmt)
        self._neg_infinity = bits_to_float(fmt.sign_mask | fmt.exponent_mask, fmt)
        self._neg_zero = bits_to_float(fmt.sign_mask, fmt)
        # 2**-mantissa_bits: biased exponent (bias - mantissa_bits), mantissa 0
        self._epsilon = bits_to_float(
            (fmt.bias - fmt.mantissa_bits) << fmt.mantissa_bits, fmt
        )

    # ------------------------------------------------------------------
    # Bit access
    # ------------------------------------------------------------------

    def to_bits(self, x: Real) -> Bits:
        return float_to_bits(x, self.format)

    def from_bits(self, bits: int) -> np.floating:
        assert_bit_width(bits, self.format.bits, f"{self.format.name} bit pattern")
        return bits_to_float(bits, self.format)

    # ------------------------------------------------------------------
    # Sentinels
    # ------------------------------------------------------------------

    def nan(self) -> np.floating:
        return self._nan

    def infinity(self) -> np.floating:
        return self._infinity

    def neg_infinity(self) -> np.floating:
        return self._neg_infinity

    def neg_zero(self) -> np.floating:
        return self._neg_zero

    def epsilon(self) -> np.floating:
        return self._epsilon

    # ------------------------------------------------------------------
    # Classification and sign
    # ------------------------------------------------------------------

    def classify(self, x: Real) -> Classification:
        fmt = self.format
        bits = self.to_bits(x)
        exponent = bits & fmt.exponent_mask
        mantissa = bits & fmt.mantissa_mask
        if exponent == 0:
            return Classification.ZERO if mantissa == 0 else Classification.SUBNORMAL
        if exponent == fmt.exponent_mask:
            return Classification.INFINITE if mantissa == 0 else Classification.NAN
        return Classification.NORMAL

    def is_nan(self, x: Real) -> bool:
        fmt = self.format
        return (self.to_bits(x) & ~fmt.sign_mask) > fmt.exponent_mask

    def is_infinite(self, x: Real) -> bool:
        fmt = self.format
        return (self.to_bits(x) & ~fmt.sign_mask) == fmt.exponent_mask

    def is_normal(self, x: Real) -> bool:
        return self.classify(x) is Classification.NORMAL

    def is_sign_positive(self, x: Real) -> bool:
        x = self.narrow(x)
        if self.is_nan(x):
            return not self.to_bits(x) & self.format.sign_mask
        return bool(x > 0 or (x == 0 and self.recip(x) > 0))

    def is_sign_negative(self, x: Real) -> bool:
        x = self.narrow(x)
        if self.is_nan(x):
            return bool(self.to_bits(x) & self.format.sign_mask)
        return bool(x < 0 or (x == 0 and self.recip(x) < 0))

    # ------------------------------------------------------------------
    # Derived operations
    # ------------------------------------------------------------------

    def trunc(self, x: Real) -> np.floating:
        fmt = self.format
        bits = self.to_bits(x)
        _, raw_exponent, _ = split_fields(bits, fmt)
        unbiased = raw_exponent - fmt.bias
        if unbiased >= fmt.mantissa_bits:
            # Already integral, or infinite/NaN
            return self.narrow(x)
        if unbiased < 0:
            # |x| < 1: signed zero
            return bits_to_float(bits & fmt.sign_mask, fmt)
        fraction_mask = fmt.mantissa_mask >> unbiased
        return bits_to_float(bits & ~fraction_mask, fmt)

    def recip(self, x: Real) -> np.floating:
        with np.errstate(divide="ignore"):
            return self._one / self.narrow(x)

    # ------------------------------------------------------------------
    # Transcendental operations
    # ------------------------------------------------------------------

    def powi(self, x: Real, n: int) -> np.floating:
        return self._table["powi"].impl(self.narrow(x), n)

    def powf(self, x: Real, n: Real) -> np.floating:
        return self._table["powf"].impl(self.narrow(x), self.narrow(n))

    def exp(self, x: Real) -> np.floating:
        return self._table["exp"].impl(self.narrow(x))

    def exp2(self, x: Real) -> np.floating:
        return self._table["exp2"].impl(self.narrow(x))

    def ln(self, x: Real) -> np.floating:
        return self._table["ln"].impl(self.narrow(x))

    def log(self, x: Real, base: Real) -> np.floating:
        return self._table["log"].impl(self.narrow(x), self.narrow(base))

    def log2(self, x: Real) -> np.floating:
        return self._table["log2"].impl(self.narrow(x))

    def log10(self, x: Real) -> np.floating:
        return self._table["log10"].impl(self.narrow(x))

    def cbrt(self, x: Real) -> np.floating:
        return self._table["cbrt"].impl(self.narrow(x))

    def hypot(self, x: Real, other: Real) -> np.floating:
        return self._table["hypot"].impl(self.narrow(x), self.narrow(other))

    def exp_m1(self, x: Real) -> np.floating:
        return self._table["exp_m1"].impl(self.narrow(x))

    def ln_1p(self, x: Real) -> np.floating:
        return self._table["ln_1p"].impl(self.narrow(x))

    # ------------------------------------------------------------------
    # Decomposition
    # ------------------------------------------------------------------

    def integer_decode(self, x: Real) -> IntegerDecomposition:
        return decode_bits(self.to_bits(x), self.format)

    def sources(self) -> Mapping[str, Source]:
        return {name: resolution.source for name, resolution in self._table.items()}
