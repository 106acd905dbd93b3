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

"""Bit reinterpretation and field extraction for IEEE 754 values.

BITS
====

This module provides the width-generic bit helpers shared by the backends:
- Narrowing any real to a format's scalar type
- Value-preserving float <-> unsigned integer reinterpretation (numpy view)
- Splitting a bit pattern into sign, exponent and mantissa fields
- The exact integer decomposition of a bit pattern

Reinterpretation views the scalar as the unsigned type of matching width,
which copies the bytes without converting the value. The value never passes
through a Python float, so signaling NaNs stay signaling and payloads are
not canonicalized.
"""

from __future__ import annotations

import numpy as np

from floatops.config import FloatFormat
from floatops.float_types import (
    Bits,
    Exponent,
    IntegerDecomposition,
    Mantissa,
    Real,
    Sign,
)

__all__ = [
    "narrow",
    "float_to_bits",
    "bits_to_float",
    "split_fields",
    "decode_bits",
]


def narrow(value: Real, fmt: FloatFormat) -> np.floating:
    """Round a real to the nearest value of the format's scalar type.

    Args:
        value: Any real (Python float/int or numpy scalar)
        fmt: Target format

    Returns:
        Scalar of fmt.dtype; out-of-range magnitudes become signed infinity
    """
    if type(value) is fmt.dtype:
        return value
    with np.errstate(over="ignore"):
        return fmt.dtype(value)


def float_to_bits(value: Real, fmt: FloatFormat) -> Bits:
    """Reinterpret a float as an unsigned integer of the format width.

    Example:
        >>> hex(float_to_bits(1.0, F32))
        '0x3f800000'
        >>> hex(float_to_bits(-0.0, F64))
        '0x8000000000000000'
    """
    return Bits(int(narrow(value, fmt).view(fmt.uint_dtype)))


def bits_to_float(bits: int, fmt: FloatFormat) -> np.floating:
    """Reinterpret an unsigned integer of the format width as a float."""
    return fmt.uint_dtype(bits & fmt.value_mask).view(fmt.dtype)


def split_fields(bits: int, fmt: FloatFormat) -> tuple[int, int, int]:
    """Split a bit pattern into (sign, raw exponent, raw mantissa) fields."""
    sign = (bits & fmt.sign_mask) >> (fmt.bits - 1)
    exponent = (bits & fmt.exponent_mask) >> fmt.mantissa_bits
    mantissa = bits & fmt.mantissa_mask
    return sign, exponent, mantissa


def decode_bits(bits: int, fmt: FloatFormat) -> IntegerDecomposition:
    """Decode a bit pattern into an exact (mantissa, exponent, sign) triple.

    Normal numbers get the implicit leading bit ORed in. Zeros and
    subnormals have no implicit bit; their mantissa is shifted left by one
    instead, so that the same rebiased exponent applies to both cases:

        exponent = raw_exponent - bias - mantissa_bits

    Example:
        >>> decode_bits(float_to_bits(1.0, F64), F64)
        IntegerDecomposition(mantissa=4503599627370496, exponent=-52, sign=1)
    """
    sign_bit, raw_exponent, raw_mantissa = split_fields(bits, fmt)
    if raw_exponent == 0:
        mantissa = raw_mantissa << 1
    else:
        mantissa = raw_mantissa | fmt.implicit_bit
    exponent = raw_exponent - (fmt.bias + fmt.mantissa_bits)
    return IntegerDecomposition(
        Mantissa(mantissa),
        Exponent(exponent),
        Sign(-1 if sign_bit else 1),
    )
