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

"""Manual fallbacks for the C math library routines.

Fallbacks
=========

Used by the direct backend when the C math library, or one of its four
entry points, cannot be loaded. Each routine works in binary64 and is
narrowed by the caller, so binary32 results are correctly rounded in all
but rare double-rounding cases.

Special values follow C99 Annex F:
    - cbrt(+-0) = +-0, cbrt(+-inf) = +-inf
    - hypot(+-inf, y) = +inf even when y is NaN
    - expm1(-inf) = -1, expm1(+inf) = +inf, expm1(+-0) = +-0
    - log1p(-1) = -inf, log1p(x < -1) = NaN, log1p(+-0) = +-0
"""

from __future__ import annotations

import numpy as np

__all__ = ["cbrt", "hypot", "exp_m1", "ln_1p"]


@np.errstate(all="ignore")
def cbrt(x: float) -> np.float64:
    """Cube root via pow on the magnitude plus one Newton step."""
    x = np.float64(x)
    if x == 0 or not np.isfinite(x):
        return x
    root = np.copysign(np.power(np.abs(x), 1.0 / 3.0), x)
    # Newton step for r**3 = x, written to avoid forming r**3
    return (2.0 * root + x / (root * root)) / 3.0


@np.errstate(all="ignore")
def hypot(x: float, y: float) -> np.float64:
    """Euclidean norm scaled by the larger magnitude."""
    x = np.abs(np.float64(x))
    y = np.abs(np.float64(y))
    if np.isinf(x) or np.isinf(y):
        return np.float64(np.inf)
    if np.isnan(x) or np.isnan(y):
        return np.float64(np.nan)
    big, small = (x, y) if x >= y else (y, x)
    if big == 0:
        return np.float64(0.0)
    ratio = small / big
    return big * np.sqrt(1.0 + ratio * ratio)


@np.errstate(all="ignore")
def exp_m1(x: float) -> np.float64:
    """exp(x) - 1 using Kahan's correction (u - 1) * x / ln(u)."""
    x = np.float64(x)
    u = np.exp(x)
    if u == 1.0:
        return x
    u_minus_1 = u - 1.0
    if u_minus_1 == -1.0 or np.isinf(u):
        return u_minus_1
    return u_minus_1 * x / np.log(u)


@np.errstate(all="ignore")
def ln_1p(x: float) -> np.float64:
    """ln(1 + x) using Kahan's correction ln(u) * x / (u - 1)."""
    x = np.float64(x)
    u = 1.0 + x
    if u == 1.0:
        return x
    if np.isinf(u) or u == 0.0:
        return np.log(u)
    return np.log(u) * x / (u - 1.0)
