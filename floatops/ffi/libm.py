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

"""Foreign-function boundary to the platform C math library.

LIBM
====

Exactly four routines are taken from the C math library, each with a
binary64 entry point and a binary32 entry point carrying the conventional
trailing "f":

    operation   binary64   binary32
    ---------   --------   --------
    cbrt        cbrt       cbrtf
    exp_m1      expm1      expm1f
    hypot       hypot      hypotf
    ln_1p       log1p      log1pf

Every other transcendental operation resolves to a numeric primitive and
never crosses this boundary. Bound entry points take and return scalars of
the format's numpy type, so callers cannot tell which source served them.

Library lookup order: explicit name (BuildTarget.libm / FLOATOPS_LIBM),
then ctypes.util.find_library("m"), then the platform's conventional name.
"""

from __future__ import annotations

import ctypes
import ctypes.util
import logging
import sys
from collections.abc import Callable

from floatops.config import FloatFormat
from floatops.exceptions import LibraryLoadError

__all__ = ["LIBM_SYMBOLS", "LIBM_ARITY", "MathLibrary", "load_libm"]

logger = logging.getLogger(__name__)

# operation -> (binary64 symbol, binary32 symbol)
LIBM_SYMBOLS: dict[str, tuple[str, str]] = {
    "cbrt": ("cbrt", "cbrtf"),
    "exp_m1": ("expm1", "expm1f"),
    "hypot": ("hypot", "hypotf"),
    "ln_1p": ("log1p", "log1pf"),
}

LIBM_ARITY: dict[str, int] = {
    "cbrt": 1,
    "exp_m1": 1,
    "hypot": 2,
    "ln_1p": 1,
}


def _library_candidates(name: str | None) -> list[str]:
    if name:
        return [name]
    candidates = []
    found = ctypes.util.find_library("m")
    if found:
        candidates.append(found)
    if sys.platform == "win32":
        candidates.append("ucrtbase")
    elif sys.platform == "darwin":
        candidates.append("libSystem.dylib")
    else:
        candidates.append("libm.so.6")
    return candidates


class MathLibrary:
    """Loaded C math library with typed per-width entry points."""

    def __init__(self, handle: ctypes.CDLL, name: str) -> None:
        self._handle = handle
        self.name = name

    def symbol_for(self, operation: str, fmt: FloatFormat) -> str:
        """Return the C symbol implementing an operation at a width."""
        double_name, single_name = LIBM_SYMBOLS[operation]
        return double_name if fmt.bits == 64 else single_name

    def bind(self, operation: str, fmt: FloatFormat) -> Callable:
        """Bind the entry point for an operation at a width.

        Args:
            operation: One of LIBM_SYMBOLS
            fmt: Width whose entry point to bind

        Returns:
            Callable taking and returning scalars of fmt.dtype

        Raises:
            LibraryLoadError: If the library does not export the symbol
        """
        symbol = self.symbol_for(operation, fmt)
        try:
            func = getattr(self._handle, symbol)
        except AttributeError:
            raise LibraryLoadError(
                f"{self.name} does not export {symbol}",
                library=self.name,
                symbol=symbol,
            ) from None

        c_type = ctypes.c_double if fmt.bits == 64 else ctypes.c_float
        func.argtypes = [c_type] * LIBM_ARITY[operation]
        func.restype = c_type
        dtype = fmt.dtype

        if LIBM_ARITY[operation] == 1:

            def call(x):
                return dtype(func(float(x)))

        else:

            def call(x, y):
                return dtype(func(float(x), float(y)))

        call.__name__ = symbol
        call.__qualname__ = f"{self.name}.{symbol}"
        return call

    def __repr__(self) -> str:
        return f"MathLibrary({self.name!r})"


def load_libm(name: str | None = None) -> MathLibrary:
    """Load the C math library.

    Args:
        name: Library name or path; None to auto-detect

    Returns:
        The loaded library

    Raises:
        LibraryLoadError: If no candidate could be loaded
    """
    failures = []
    for candidate in _library_candidates(name):
        try:
            handle = ctypes.CDLL(candidate)
        except OSError as exc:
            failures.append(f"{candidate}: {exc}")
            continue
        logger.info("Loaded C math library %s", candidate)
        return MathLibrary(handle, candidate)
    raise LibraryLoadError(
        "Unable to load a C math library (" + "; ".join(failures) + ")",
        library=name,
    )
