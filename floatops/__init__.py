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

"""floatops: a uniform, introspectable interface over IEEE 754 floats.

This package gives binary32 and binary64 values one operation set:
classification, sign queries, exact integer decomposition, and the
transcendental functions (exp, ln, pow, cbrt, hypot, expm1, log1p, ...).

Package Structure
-----------------

Subpackages:
    backends
        The FloatOps interface and its two implementations: the direct
        backend (bit-level, with a dispatch table over numeric primitives,
        the C math library and manual fallbacks) and the delegating backend
        (forwards to numpy)

    ffi
        ctypes binding to the platform C math library

    utils
        Bit reinterpretation, field decoding and argument validation

Modules:
    config
        Width constant tables (F32, F64) and build target detection

    float_types
        Classification, IntegerDecomposition and field type aliases

    capabilities
        Signed and ApproxEq companion contracts

    exceptions
        Exception hierarchy for configuration and environment failures

Quick Start
-----------
::

    import floatops

    f64 = floatops.get_float_ops(64)
    f64.classify(-0.0)          # Classification.ZERO
    f64.is_sign_negative(-0.0)  # True
    f64.integer_decode(1.0)     # (4503599627370496, -52, 1)
    f64.hypot(1.0, 1.0)         # 1.4142135623730951
"""

from floatops.backends import FloatOps, Source, get_float_ops
from floatops.config import F32, F64, BuildTarget, FloatFormat, detect_target
from floatops.exceptions import (
    ConfigurationError,
    FloatOpsError,
    LibraryLoadError,
    UnsupportedWidthError,
)
from floatops.float_types import Classification, IntegerDecomposition

__version__ = "0.1.0"

__all__ = [
    "BuildTarget",
    "Classification",
    "ConfigurationError",
    "F32",
    "F64",
    "FloatFormat",
    "FloatOps",
    "FloatOpsError",
    "IntegerDecomposition",
    "LibraryLoadError",
    "Source",
    "UnsupportedWidthError",
    "detect_target",
    "get_float_ops",
]
