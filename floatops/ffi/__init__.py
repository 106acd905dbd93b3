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

"""Foreign-function interfaces used by the direct backend.

Modules
-------
libm
    ctypes binding to the platform C math library: cbrt, expm1, hypot and
    log1p in binary64 and binary32 variants.
"""

from floatops.ffi.libm import LIBM_SYMBOLS, MathLibrary, load_libm

__all__ = ["LIBM_SYMBOLS", "MathLibrary", "load_libm"]
