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

"""Shared fixtures: backends per width and constrained-random bit patterns.

All fixtures build against a fixed gnu/linux BuildTarget so that the host's
own environment variables and compiler never switch on platform overrides
behind a test's back. Override behaviour is tested explicitly in
test_dispatch.py.
"""

from __future__ import annotations

import random
from collections.abc import Callable

import pytest

from floatops import F32, F64, BuildTarget, Classification, FloatFormat, get_float_ops

BACKENDS = ("direct", "delegating")
RANDOM_SEED = 0x5EED
PATTERNS_PER_CLASS = 200


@pytest.fixture(params=BACKENDS)
def backend(request) -> str:
    return request.param


@pytest.fixture
def f32(backend):
    return get_float_ops(32, target=BuildTarget(backend=backend))


@pytest.fixture
def f64(backend):
    return get_float_ops(64, target=BuildTarget(backend=backend))


@pytest.fixture(params=[F32, F64], ids=["f32", "f64"])
def ops(request, backend):
    return get_float_ops(request.param, target=BuildTarget(backend=backend))


@pytest.fixture(params=[F32, F64], ids=["f32", "f64"])
def direct(request):
    return get_float_ops(request.param, target=BuildTarget(backend="direct"))


@pytest.fixture
def rng() -> random.Random:
    return random.Random(RANDOM_SEED)


def random_pattern(rng: random.Random, fmt: FloatFormat, cls: Classification) -> int:
    """Generate a random bit pattern of the requested class."""
    sign = fmt.sign_mask if rng.getrandbits(1) else 0
    if cls is Classification.ZERO:
        return sign
    if cls is Classification.SUBNORMAL:
        return sign | rng.randint(1, fmt.mantissa_mask)
    if cls is Classification.NORMAL:
        exponent = rng.randint(1, fmt.exponent_max - 1)
        return sign | (exponent << fmt.mantissa_bits) | rng.getrandbits(fmt.mantissa_bits)
    if cls is Classification.INFINITE:
        return sign | fmt.exponent_mask
    # Quiet and signaling NaNs alike: any non-zero mantissa
    return sign | fmt.exponent_mask | rng.randint(1, fmt.mantissa_mask)


@pytest.fixture
def patterns(rng) -> Callable[[FloatFormat, Classification], list[int]]:
    """Factory for PATTERNS_PER_CLASS random patterns of one class."""

    def make(fmt: FloatFormat, cls: Classification, count: int = PATTERNS_PER_CLASS):
        return [random_pattern(rng, fmt, cls) for _ in range(count)]

    return make
