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

"""Operation tables mapping transcendental operations to their sources.

Op Tables
=========

This module is the central registry that connects each transcendental
operation to the implementation that serves it for a given width and
build target. Each operation resolves to exactly one source:

    1. PRIMITIVE: Typed numeric routine for the width (numpy ufunc loop, or
       an exact in-width algorithm such as square-and-multiply powi)
    2. LIBM: C math library entry point (see floatops.ffi.libm)
    3. FALLBACK: Manual expression over other operations or in binary64
    4. OVERRIDE: Platform substitute replacing the default for one width

Table Structure:
    DISPATCH_TABLE maps: operation -> candidate sources in precedence order

    - powi, powf, exp, exp2, ln, log2, log10: PRIMITIVE
    - cbrt, exp_m1, hypot, ln_1p: LIBM, then FALLBACK
    - log: FALLBACK (ln(x) / ln(base))

    PLATFORM_OVERRIDES lists (operation, width, target predicate, factory)
    entries that take precedence over DISPATCH_TABLE:

    - msvc environment, f32 exp/ln/log10: widen to f64, compute, narrow
    - android, f32 log2: ln(x) / LN_2 in f64, narrowed

Resolution runs once when a backend is built. The resolved table holds
plain callables, so no call ever branches on the platform.

Example Usage:
    >>> table = resolve_operations(F32, BuildTarget(env="msvc"), libm)
    >>> table["exp"].source
    <Source.OVERRIDE: 'override'>
    >>> table["exp"].impl(np.float32(1.0))
    2.7182817
"""

from __future__ import annotations

import functools
import logging
import math
import operator
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import numpy as np

from floatops.backends import fallbacks
from floatops.config import F64, BuildTarget, FloatFormat
from floatops.exceptions import ConfigurationError, LibraryLoadError
from floatops.ffi.libm import MathLibrary
from floatops.utils.validation import assert_int32, assert_integral

__all__ = [
    "Source",
    "TRANSCENDENTAL_OPERATIONS",
    "DISPATCH_TABLE",
    "PLATFORM_OVERRIDES",
    "PlatformOverride",
    "Resolution",
    "resolve_operations",
]

logger = logging.getLogger(__name__)

LN_2 = np.float64(math.log(2.0))


class Source(Enum):
    """Where a resolved operation comes from."""

    PRIMITIVE = "primitive"
    LIBM = "libm"
    FALLBACK = "fallback"
    OVERRIDE = "override"


# Resolution order; log comes after ln because its fallback is built on it.
TRANSCENDENTAL_OPERATIONS = (
    "powi",
    "powf",
    "exp",
    "exp2",
    "ln",
    "log",
    "log2",
    "log10",
    "cbrt",
    "hypot",
    "exp_m1",
    "ln_1p",
)

DISPATCH_TABLE: dict[str, tuple[Source, ...]] = {
    "powi": (Source.PRIMITIVE,),
    "powf": (Source.PRIMITIVE,),
    "exp": (Source.PRIMITIVE,),
    "exp2": (Source.PRIMITIVE,),
    "ln": (Source.PRIMITIVE,),
    "log": (Source.FALLBACK,),
    "log2": (Source.PRIMITIVE,),
    "log10": (Source.PRIMITIVE,),
    "cbrt": (Source.LIBM, Source.FALLBACK),
    "hypot": (Source.LIBM, Source.FALLBACK),
    "exp_m1": (Source.LIBM, Source.FALLBACK),
    "ln_1p": (Source.LIBM, Source.FALLBACK),
}


# ============================================================================
# Implementation factories: (fmt, resolved) -> callable
# ============================================================================


def _quiet(func: Callable) -> Callable:
    """Run func with numpy floating-point warnings suppressed."""

    @functools.wraps(func)
    def wrapper(*args):
        with np.errstate(all="ignore"):
            return func(*args)

    return wrapper


def _ufunc(ufunc: np.ufunc) -> Callable:
    def factory(fmt: FloatFormat, resolved: dict) -> Callable:
        dtype = fmt.dtype

        def call(*args):
            return dtype(ufunc(*args))

        call.__name__ = f"{ufunc.__name__}_{fmt.name}"
        return call

    return factory


def _powi(fmt: FloatFormat, resolved: dict) -> Callable:
    one = fmt.dtype(1.0)

    def powi(x, n):
        assert_integral(n, "powi exponent")
        n = int(n)
        assert_int32(n, "powi exponent")
        base = x
        result = one
        remaining = abs(n)
        while remaining:
            if remaining & 1:
                result = result * base
            remaining >>= 1
            if remaining:
                base = base * base
        return one / result if n < 0 else result

    return powi


def _in_double(routine: Callable) -> Callable:
    def factory(fmt: FloatFormat, resolved: dict) -> Callable:
        dtype = fmt.dtype

        def call(*args):
            return dtype(routine(*args))

        call.__name__ = f"{routine.__name__}_{fmt.name}"
        return call

    return factory


def _log_via_ln(fmt: FloatFormat, resolved: dict) -> Callable:
    ln = resolved["ln"].impl

    def log(x, base):
        return ln(x) / ln(base)

    return log


def _widened(ufunc: np.ufunc) -> Callable:
    def factory(fmt: FloatFormat, resolved: dict) -> Callable:
        dtype = fmt.dtype

        def call(x):
            return dtype(ufunc(F64.dtype(x)))

        call.__name__ = f"{ufunc.__name__}_widened_{fmt.name}"
        return call

    return factory


def _log2_via_ln(fmt: FloatFormat, resolved: dict) -> Callable:
    dtype = fmt.dtype

    def log2(x):
        return dtype(np.log(F64.dtype(x)) / LN_2)

    return log2


PRIMITIVES: dict[str, Callable] = {
    "powi": _powi,
    "powf": _ufunc(np.power),
    "exp": _ufunc(np.exp),
    "exp2": _ufunc(np.exp2),
    "ln": _ufunc(np.log),
    "log2": _ufunc(np.log2),
    "log10": _ufunc(np.log10),
}

FALLBACKS: dict[str, Callable] = {
    "log": _log_via_ln,
    "cbrt": _in_double(fallbacks.cbrt),
    "hypot": _in_double(fallbacks.hypot),
    "exp_m1": _in_double(fallbacks.exp_m1),
    "ln_1p": _in_double(fallbacks.ln_1p),
}


@dataclass(frozen=True)
class PlatformOverride:
    """Platform substitute for one operation at one width."""

    operation: str
    width: int
    applies: Callable[[BuildTarget], bool]
    factory: Callable
    reason: str


PLATFORM_OVERRIDES: tuple[PlatformOverride, ...] = (
    PlatformOverride(
        "exp", 32, operator.attrgetter("is_msvc"), _widened(np.exp),
        "msvc f32 expf is inaccurate",
    ),
    PlatformOverride(
        "ln", 32, operator.attrgetter("is_msvc"), _widened(np.log),
        "msvc f32 logf is inaccurate",
    ),
    PlatformOverride(
        "log10", 32, operator.attrgetter("is_msvc"), _widened(np.log10),
        "msvc f32 log10f is inaccurate",
    ),
    PlatformOverride(
        "log2", 32, operator.attrgetter("is_android"), _log2_via_ln,
        "android lacks log2f",
    ),
)


@dataclass(frozen=True)
class Resolution:
    """A resolved operation: its source and the callable serving it."""

    operation: str
    source: Source
    impl: Callable


def _find_override(
    operation: str, fmt: FloatFormat, target: BuildTarget
) -> PlatformOverride | None:
    for override in PLATFORM_OVERRIDES:
        if (
            override.operation == operation
            and override.width == fmt.bits
            and override.applies(target)
        ):
            return override
    return None


def _resolve_one(
    operation: str,
    fmt: FloatFormat,
    target: BuildTarget,
    libm: MathLibrary | None,
    resolved: dict[str, Resolution],
) -> Resolution:
    override = _find_override(operation, fmt, target)
    if override is not None:
        logger.debug("%s/%s overridden: %s", operation, fmt.name, override.reason)
        return Resolution(
            operation, Source.OVERRIDE, override.factory(fmt, resolved)
        )

    for source in DISPATCH_TABLE[operation]:
        if source is Source.PRIMITIVE:
            return Resolution(operation, source, PRIMITIVES[operation](fmt, resolved))
        if source is Source.LIBM:
            if libm is None:
                continue
            try:
                return Resolution(operation, source, libm.bind(operation, fmt))
            except LibraryLoadError as exc:
                logger.warning("%s/%s falls back: %s", operation, fmt.name, exc)
                continue
        if source is Source.FALLBACK:
            return Resolution(operation, source, FALLBACKS[operation](fmt, resolved))

    raise ConfigurationError(f"No source resolves {operation} for {fmt.name}")


def resolve_operations(
    fmt: FloatFormat, target: BuildTarget, libm: MathLibrary | None
) -> dict[str, Resolution]:
    """Resolve every transcendental operation for a width and target.

    Args:
        fmt: Width to resolve for
        target: Build target selecting platform overrides
        libm: Loaded C math library, or None if unavailable

    Returns:
        Mapping of operation name to Resolution, with warnings suppressed
        around each implementation
    """
    resolved: dict[str, Resolution] = {}
    for operation in TRANSCENDENTAL_OPERATIONS:
        resolution = _resolve_one(operation, fmt, target, libm, resolved)
        resolved[operation] = Resolution(
            operation, resolution.source, _quiet(resolution.impl)
        )
        logger.debug(
            "Resolved %s/%s -> %s", operation, fmt.name, resolution.source.value
        )
    return resolved
