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

"""Interchangeable implementations of the FloatOps interface.

Modules
-------
interface
    The FloatOps abstract base class: the full operation catalog.

direct
    DirectFloatOps, built from bit-pattern masking, arithmetic identities
    and dispatched math routines (numeric primitives, the C math library,
    manual fallbacks, platform overrides).

delegating
    DelegatingFloatOps, forwarding each operation to numpy and adding only
    classify and integer_decode.

op_tables
    Source enum, the static dispatch table and platform overrides, and the
    resolver that binds them once per (width, build target).

fallbacks
    Manual binary64 routines for cbrt, hypot, expm1 and log1p.

Usage
-----
Backends are normally obtained through get_float_ops, which resolves each
(width, target) pair once and caches the result::

    from floatops.backends import get_float_ops

    f32 = get_float_ops(32, backend="direct")
    f32.cbrt(1.0)           # 1.0
    f32.sources()["hypot"]  # Source.LIBM
"""

from __future__ import annotations

import functools

from floatops.backends.delegating import DelegatingFloatOps
from floatops.backends.direct import DirectFloatOps
from floatops.backends.interface import FloatOps
from floatops.backends.op_tables import Source
from floatops.config import BuildTarget, FloatFormat, detect_target, format_for_width

__all__ = [
    "BACKEND_CLASSES",
    "DelegatingFloatOps",
    "DirectFloatOps",
    "FloatOps",
    "Source",
    "get_float_ops",
]

BACKEND_CLASSES: dict[str, type[FloatOps]] = {
    "direct": DirectFloatOps,
    "delegating": DelegatingFloatOps,
}


@functools.lru_cache(maxsize=None)
def _build(fmt: FloatFormat, target: BuildTarget) -> FloatOps:
    return BACKEND_CLASSES[target.backend](fmt, target)


def get_float_ops(
    width: int | FloatFormat = 64,
    backend: str | None = None,
    target: BuildTarget | None = None,
) -> FloatOps:
    """Return the FloatOps object for a width.

    Args:
        width: 32, 64, or a FloatFormat
        backend: "direct" or "delegating"; overrides target.backend
        target: Build target; defaults to detect_target()

    Returns:
        A cached FloatOps instance for (width, target)

    Raises:
        UnsupportedWidthError: If width is not 32 or 64
        ConfigurationError: If the backend name is unknown
    """
    fmt = format_for_width(width)
    if target is None:
        target = detect_target()
    if backend is not None:
        target = target.with_backend(backend)
    return _build(fmt, target)
