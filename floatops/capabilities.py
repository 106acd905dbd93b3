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

"""Companion capability contracts extended by FloatOps.

Capabilities
============

Signed
    Absolute value and sign queries on a signed number.

ApproxEq
    Equality with a relative tolerance.

Both contracts are written against the small set of FloatOps members they
need (format, narrow, to_bits, from_bits, is_nan, is_infinite,
is_sign_negative, nan, epsilon) so that every backend gets them without
re-implementing them.
"""

from __future__ import annotations

from abc import ABC

import numpy as np

from floatops.float_types import Real


class Signed(ABC):
    """Signed-number contract: abs and sign queries."""

    def abs(self, x: Real) -> np.floating:
        """Clear the sign bit. abs(-NaN) is a NaN with the sign bit clear."""
        fmt = self.format
        return self.from_bits(self.to_bits(x) & ~fmt.sign_mask & fmt.value_mask)

    def signum(self, x: Real) -> np.floating:
        """1.0 or -1.0 following the sign bit; NaN for NaN.

        signum(-0.0) is -1.0: the sign bit is set even though -0.0 == 0.0.
        """
        if self.is_nan(x):
            return self.nan()
        dtype = self.format.dtype
        return dtype(-1.0) if self.is_sign_negative(x) else dtype(1.0)

    def is_positive(self, x: Real) -> bool:
        """Strictly greater than zero (False for +0.0 and NaN)."""
        return bool(self.narrow(x) > 0)

    def is_negative(self, x: Real) -> bool:
        """Strictly less than zero (False for -0.0 and NaN)."""
        return bool(self.narrow(x) < 0)


class ApproxEq(ABC):
    """Approximate equality with a relative tolerance."""

    def approx_epsilon(self) -> np.floating:
        return self.format.dtype(4) * self.epsilon()

    def approx_eq(self, a: Real, b: Real, epsilon: Real | None = None) -> bool:
        """Compare two values with a tolerance scaled by their magnitude.

        True when a == b (which covers equal infinities), False when either
        is NaN or only one side is infinite, otherwise |a - b| <= epsilon * max(1, |a|, |b|).

        Args:
            a: First value
            b: Second value
            epsilon: Relative tolerance; defaults to approx_epsilon()
        """
        a = self.narrow(a)
        b = self.narrow(b)
        if a == b:
            return True
        if self.is_nan(a) or self.is_nan(b):
            return False
        if self.is_infinite(a) or self.is_infinite(b):
            return False
        tolerance = self.approx_epsilon() if epsilon is None else self.narrow(epsilon)
        with np.errstate(all="ignore"):
            scale = max(self.format.dtype(1), abs(a), abs(b))
            return bool(abs(a - b) <= tolerance * scale)
