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

"""Utility functions shared by the backends.

Modules
-------
bits
    IEEE 754 bit-level helpers:
    - Narrowing a real to a format's scalar type
    - Float <-> unsigned integer reinterpretation
    - Field splitting and exact integer decomposition

validation
    Argument checks with context-rich errors:
    - ValidationError (an AssertionError with a context dict)
    - Bit width and signed 32-bit range checks

Usage
-----
Import utilities as needed::

    from floatops.config import F64
    from floatops.utils.bits import float_to_bits, decode_bits

    bits = float_to_bits(-0.0, F64)       # 0x8000000000000000
    mantissa, exponent, sign = decode_bits(bits, F64)
"""

from floatops.utils.bits import (
    bits_to_float,
    decode_bits,
    float_to_bits,
    narrow,
    split_fields,
)
from floatops.utils.validation import ValidationError

__all__ = [
    "bits_to_float",
    "decode_bits",
    "float_to_bits",
    "narrow",
    "split_fields",
    "ValidationError",
]
