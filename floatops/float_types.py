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

"""Type aliases and value types shared by all backends.

Types
=====

This module defines NewTypes for the raw integer fields of a floating-point
value, the Classification enum and the IntegerDecomposition triple.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import NamedTuple, NewType, Union

import numpy as np

# Bit-pattern types
Bits = NewType("Bits", int)
"""Raw bit pattern of a float, as an unsigned integer of the format width."""

# Decomposition field types
Mantissa = NewType("Mantissa", int)
"""Unsigned 64-bit integer significand."""

Exponent = NewType("Exponent", int)
"""Signed 16-bit binary exponent."""

Sign = NewType("Sign", int)
"""Signed 8-bit sign, either 1 or -1."""

Real = Union[float, int, np.floating, np.integer]
"""Anything an operation accepts as input before narrowing to its width."""


class Classification(Enum):
    """IEEE 754 class of a value, derived from its exponent and mantissa."""

    ZERO = "zero"
    SUBNORMAL = "subnormal"
    NORMAL = "normal"
    INFINITE = "infinite"
    NAN = "nan"


class IntegerDecomposition(NamedTuple):
    """Exact integer triple such that value == sign * mantissa * 2**exponent."""

    mantissa: Mantissa
    exponent: Exponent
    sign: Sign

    def value(self) -> float:
        """Reconstruct the decoded magnitude with its sign.

        math.ldexp is exact here: the mantissa fits in 53 bits and the
        exponent keeps the product inside the binary64 range for every
        finite binary32 or binary64 input.
        """
        return self.sign * math.ldexp(float(self.mantissa), self.exponent)
