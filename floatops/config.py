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

"""Central configuration: width constant tables and build target selection.

Config
======

Width Tables:
    F32 and F64 describe the IEEE 754 binary32 and binary64 layouts. Every
    bit mask, bias and sentinel pattern used by the backends is derived from
    these two tables, so the shared algorithms never hard-code a width.

        binary32: sign(1) | exponent(8, bias 127)   | mantissa(23)
        binary64: sign(1) | exponent(11, bias 1023) | mantissa(52)

Build Target:
    BuildTarget names the compiler/ABI environment and operating system the
    math backend is resolved for, plus the backend choice and an optional C
    math library override. It is read once from the process environment by
    detect_target() and then frozen; backends resolve their dispatch table
    against it at construction time.

Environment Variables:
    FLOATOPS_BACKEND     "direct" (default) or "delegating"
    FLOATOPS_TARGET_ENV  compiler/ABI environment, e.g. "msvc", "gnu"
    FLOATOPS_TARGET_OS   operating system, e.g. "linux", "android"
    FLOATOPS_LIBM        name or path of the C math library to load
"""

from __future__ import annotations

import os
import platform
import sys
from dataclasses import dataclass

import numpy as np

from floatops.exceptions import ConfigurationError, UnsupportedWidthError

__all__ = [
    "FloatFormat",
    "F32",
    "F64",
    "FORMATS",
    "BuildTarget",
    "BACKENDS",
    "DEFAULT_BACKEND",
    "format_for_width",
    "detect_target",
]


@dataclass(frozen=True)
class FloatFormat:
    """Constant table for one IEEE 754 binary interchange width."""

    name: str
    bits: int
    exponent_bits: int
    mantissa_bits: int
    dtype: type
    uint_dtype: type

    @property
    def bias(self) -> int:
        return (1 << (self.exponent_bits - 1)) - 1

    @property
    def value_mask(self) -> int:
        return (1 << self.bits) - 1

    @property
    def sign_mask(self) -> int:
        return 1 << (self.bits - 1)

    @property
    def exponent_max(self) -> int:
        """Raw exponent field of infinities and NaNs (all ones)."""
        return (1 << self.exponent_bits) - 1

    @property
    def exponent_mask(self) -> int:
        return self.exponent_max << self.mantissa_bits

    @property
    def mantissa_mask(self) -> int:
        return (1 << self.mantissa_bits) - 1

    @property
    def implicit_bit(self) -> int:
        """Leading significand bit that normal numbers leave implicit."""
        return 1 << self.mantissa_bits

    @property
    def quiet_bit(self) -> int:
        """Most significant mantissa bit; set for quiet NaNs."""
        return 1 << (self.mantissa_bits - 1)

    @property
    def canonical_nan(self) -> int:
        return self.exponent_mask | self.quiet_bit

    def __repr__(self) -> str:
        return f"FloatFormat({self.name})"


F32 = FloatFormat(
    name="f32",
    bits=32,
    exponent_bits=8,
    mantissa_bits=23,
    dtype=np.float32,
    uint_dtype=np.uint32,
)

F64 = FloatFormat(
    name="f64",
    bits=64,
    exponent_bits=11,
    mantissa_bits=52,
    dtype=np.float64,
    uint_dtype=np.uint64,
)

FORMATS = {32: F32, 64: F64}

BACKENDS = ("direct", "delegating")
DEFAULT_BACKEND = "direct"


def format_for_width(width: int | FloatFormat) -> FloatFormat:
    """Look up the constant table for a bit width (or pass a table through)."""
    if isinstance(width, FloatFormat):
        return width
    try:
        return FORMATS[width]
    except KeyError:
        raise UnsupportedWidthError(
            f"No IEEE 754 binary format of width {width!r}",
            width=width,
        ) from None


@dataclass(frozen=True)
class BuildTarget:
    """Static description of the platform a backend is resolved for.

    Attributes:
        env: Compiler/ABI environment ("msvc", "gnu", ...)
        os: Operating system ("linux", "darwin", "win32", "android", ...)
        backend: Backend strategy name, one of BACKENDS
        libm: C math library name or path; None means auto-detect
    """

    env: str = "gnu"
    os: str = "linux"
    backend: str = DEFAULT_BACKEND
    libm: str | None = None

    def __post_init__(self) -> None:
        if self.backend not in BACKENDS:
            raise ConfigurationError(
                f"Unknown backend {self.backend!r}, expected one of {BACKENDS}"
            )

    @property
    def is_msvc(self) -> bool:
        return self.env == "msvc"

    @property
    def is_android(self) -> bool:
        return self.os == "android"

    def with_backend(self, backend: str) -> BuildTarget:
        return BuildTarget(env=self.env, os=self.os, backend=backend, libm=self.libm)


def _detect_env() -> str:
    # CPython reports e.g. "MSC v.1937 64 bit (AMD64)" when built with MSVC
    if platform.python_compiler().startswith("MSC"):
        return "msvc"
    return "gnu"


def _detect_os() -> str:
    if hasattr(sys, "getandroidapilevel"):
        return "android"
    return sys.platform


def detect_target() -> BuildTarget:
    """Build the target description for the running interpreter.

    Environment variables take precedence over detection, which allows the
    per-platform overrides to be exercised on any host.
    """
    return BuildTarget(
        env=os.environ.get("FLOATOPS_TARGET_ENV", _detect_env()),
        os=os.environ.get("FLOATOPS_TARGET_OS", _detect_os()),
        backend=os.environ.get("FLOATOPS_BACKEND", DEFAULT_BACKEND),
        libm=os.environ.get("FLOATOPS_LIBM") or None,
    )
