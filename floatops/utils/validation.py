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

"""Validation utilities for arguments crossing the package boundary.

Validation Utilities
====================

Numeric inputs are never validated: out-of-domain values produce IEEE
sentinels. The checks here guard the integer arguments whose width is part
of the operation's contract, such as raw bit patterns handed to from_bits
and the signed 32-bit exponent of powi.

Provided Utilities:

    ValidationError: AssertionError carrying a context dict
        - Stores context as attributes
        - Formats context in error message

    Assertion Functions:
        - assert_in_range(): Check value bounds
        - assert_bit_width(): Ensure value fits in bit width
        - assert_integral(): Reject fractional, infinite and NaN values
        - assert_int32(): Signed 32-bit range

Example:
    >>> try:
    ...     assert_bit_width(0x1_0000_0000, 32, "f32 bit pattern")
    ... except ValidationError as e:
    ...     print(e.context['bits'])  # 32
"""

from typing import Any

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1


class ValidationError(AssertionError):
    """Enhanced assertion error with context."""

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize with message and context."""
        self.context = context
        context_str = "\n".join(f"  {k}: {v}" for k, v in context.items())
        super().__init__(f"{message}\nContext:\n{context_str}" if context else message)


def assert_in_range(
    value: int, min_val: int, max_val: int, name: str = "value"
) -> None:
    """Assert value is within range."""
    if not min_val <= value <= max_val:
        raise ValidationError(
            f"{name} out of range",
            value=value,
            min=min_val,
            max=max_val,
            out_by=min(abs(value - min_val), abs(value - max_val)),
        )


def assert_bit_width(value: int, bits: int, name: str = "value") -> None:
    """Assert value fits in specified bit width."""
    max_val = (1 << bits) - 1
    if value < 0 or value > max_val:
        raise ValidationError(
            f"{name} exceeds {bits}-bit width",
            value=hex(value),
            bits=bits,
            max_value=hex(max_val),
        )


def assert_int32(value: int, name: str = "value") -> None:
    """Assert value is representable as a signed 32-bit integer."""
    assert_in_range(value, INT32_MIN, INT32_MAX, name)


def assert_integral(value: Any, name: str = "value") -> None:
    """Assert value is a whole number (an int, or a float with no fraction)."""
    try:
        integral = int(value) == value
    except (OverflowError, ValueError):
        # int() of an infinity or NaN
        integral = False
    if not integral:
        raise ValidationError(f"{name} is not an integer", value=value)
