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

"""The FloatOps interface implemented by every backend.

FloatOps
========

One FloatOps object serves one width (F32 or F64). Operations accept any
real, narrow it to the width once, and return scalars of the width's numpy
type (predicates return bool).

Operation Catalog:
    - Sentinels: nan, infinity, neg_infinity, neg_zero, epsilon
    - Classification: classify, is_nan, is_infinite, is_finite, is_normal
    - Sign: is_sign_positive, is_sign_negative
    - Derived: trunc, fract, recip
    - Transcendental: powi, powf, exp, exp2, ln, log, log2, log10, cbrt,
      hypot, exp_m1, ln_1p
    - Decomposition: integer_decode
    - Bit access: to_bits, from_bits

Every operation is total. Domain errors yield NaN or a signed infinity as
the underlying routine defines them; nothing raises for a numeric input.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping

import numpy as np

from floatops.backends.op_tables import Source
from floatops.capabilities import ApproxEq, Signed
from floatops.config import BuildTarget, FloatFormat
from floatops.float_types import Bits, Classification, IntegerDecomposition, Real
from floatops.utils.bits import narrow

__all__ = ["FloatOps"]


class FloatOps(Signed, ApproxEq):
    """Uniform operation set for one IEEE 754 width."""

    backend_name = ""

    def __init__(self, fmt: FloatFormat, target: BuildTarget) -> None:
        self.format = fmt
        self.target = target

    @property
    def name(self) -> str:
        return f"{self.backend_name}:{self.format.name}"

    def narrow(self, x: Real) -> np.floating:
        """Round x to this width's scalar type."""
        return narrow(x, self.format)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.format.name}, {self.target!r})"

    # ------------------------------------------------------------------
    # Sentinels and constants
    # ------------------------------------------------------------------

    @abstractmethod
    def nan(self) -> np.floating: ...

    @abstractmethod
    def infinity(self) -> np.floating: ...

    @abstractmethod
    def neg_infinity(self) -> np.floating: ...

    @abstractmethod
    def neg_zero(self) -> np.floating: ...

    @abstractmethod
    def epsilon(self) -> np.floating:
        """Difference between 1.0 and the next representable value."""

    # ------------------------------------------------------------------
    # Classification and sign
    # ------------------------------------------------------------------

    @abstractmethod
    def classify(self, x: Real) -> Classification: ...

    @abstractmethod
    def is_nan(self, x: Real) -> bool: ...

    @abstractmethod
    def is_infinite(self, x: Real) -> bool: ...

    def is_finite(self, x: Real) -> bool:
        return not (self.is_nan(x) or self.is_infinite(x))

    @abstractmethod
    def is_normal(self, x: Real) -> bool: ...

    @abstractmethod
    def is_sign_positive(self, x: Real) -> bool:
        """True when the sign bit is clear, including +0.0 and +NaN."""

    @abstractmethod
    def is_sign_negative(self, x: Real) -> bool:
        """True when the sign bit is set, including -0.0 and -NaN."""

    # ------------------------------------------------------------------
    # Derived operations
    # ------------------------------------------------------------------

    @abstractmethod
    def trunc(self, x: Real) -> np.floating:
        """Round toward zero, keeping the sign of zero."""

    def fract(self, x: Real) -> np.floating:
        """x - trunc(x); carries the sign of x for non-integers."""
        x = self.narrow(x)
        with np.errstate(invalid="ignore"):
            return x - self.trunc(x)

    @abstractmethod
    def recip(self, x: Real) -> np.floating:
        """1 / x, with 1 / +-0.0 == +-inf."""

    # ------------------------------------------------------------------
    # Transcendental operations
    # ------------------------------------------------------------------

    @abstractmethod
    def powi(self, x: Real, n: int) -> np.floating:
        """x raised to a signed 32-bit integer power."""

    @abstractmethod
    def powf(self, x: Real, n: Real) -> np.floating: ...

    @abstractmethod
    def exp(self, x: Real) -> np.floating: ...

    @abstractmethod
    def exp2(self, x: Real) -> np.floating: ...

    @abstractmethod
    def ln(self, x: Real) -> np.floating: ...

    def log(self, x: Real, base: Real) -> np.floating:
        """Logarithm to an arbitrary base, ln(x) / ln(base)."""
        with np.errstate(all="ignore"):
            return self.ln(x) / self.ln(base)

    @abstractmethod
    def log2(self, x: Real) -> np.floating: ...

    @abstractmethod
    def log10(self, x: Real) -> np.floating: ...

    @abstractmethod
    def cbrt(self, x: Real) -> np.floating: ...

    @abstractmethod
    def hypot(self, x: Real, other: Real) -> np.floating:
        """sqrt(x*x + other*other) without intermediate overflow."""

    @abstractmethod
    def exp_m1(self, x: Real) -> np.floating:
        """exp(x) - 1, accurate for x near zero."""

    @abstractmethod
    def ln_1p(self, x: Real) -> np.floating:
        """ln(1 + x), accurate for x near zero."""

    # ------------------------------------------------------------------
    # Decomposition and bit access
    # ------------------------------------------------------------------

    @abstractmethod
    def integer_decode(self, x: Real) -> IntegerDecomposition:
        """Exact (mantissa, exponent, sign) with x == sign * mantissa * 2**exponent."""

    @abstractmethod
    def to_bits(self, x: Real) -> Bits: ...

    @abstractmethod
    def from_bits(self, bits: int) -> np.floating: ...

    @abstractmethod
    def sources(self) -> Mapping[str, Source]:
        """Source each transcendental operation resolved to."""
