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

"""Transcendental operations on both backends.

What This Tests:
    - Known values for cbrt, hypot, exp_m1, ln_1p in each width
    - The log(x, base) == ln(x) / ln(base) identity
    - IEEE domain conventions: NaN propagation, ln(0) == -inf, ln(-1) NaN
    - Precision of exp_m1/ln_1p for tiny arguments
    - Agreement between the direct and delegating backends

Reference values come from the C math library. The direct backend calls it
for cbrt, hypot, exp_m1 and ln_1p and must match exactly. numpy may serve
any routine from its own SIMD kernels, so everything numpy computes is
checked to within REFERENCE_ULPS.
"""

import math

import numpy as np
import pytest

from floatops import F32, F64, BuildTarget, get_float_ops
from floatops.utils.validation import ValidationError

UNARY = ("exp", "exp2", "ln", "log2", "log10", "cbrt", "exp_m1", "ln_1p")
REFERENCE_ULPS = 4


def assert_reference(ops, actual, expected):
    expected = ops.narrow(expected)
    if ops.backend_name == "direct":
        assert actual == expected
    else:
        assert_close(ops, actual, expected)


def assert_close(ops, actual, expected):
    tolerance = REFERENCE_ULPS * float(ops.epsilon())
    assert ops.approx_eq(actual, expected, epsilon=tolerance), (actual, expected)


class TestKnownValuesF32:
    def test_cbrt(self, f32):
        assert_reference(f32, f32.cbrt(1.0), np.float32(1.0))

    def test_hypot(self, f32):
        assert_reference(f32, f32.hypot(1.0, 1.0), np.float32(1.4142135))

    def test_exp_m1(self, f32):
        assert_reference(f32, f32.exp_m1(1.0), np.float32(1.7182817))

    def test_ln_1p(self, f32):
        assert_reference(f32, f32.ln_1p(1.0), np.float32(0.6931472))

    def test_results_are_single_precision(self, f32):
        for name in UNARY:
            assert isinstance(getattr(f32, name)(0.5), np.float32), name
        assert isinstance(f32.hypot(3.0, 4.0), np.float32)
        assert isinstance(f32.powf(2.0, 0.5), np.float32)
        assert isinstance(f32.powi(2.0, 3), np.float32)
        assert isinstance(f32.log(8.0, 2.0), np.float32)


class TestKnownValuesF64:
    def test_cbrt(self, f64):
        assert_reference(f64, f64.cbrt(1.0), 1.0)

    def test_hypot(self, f64):
        assert_reference(f64, f64.hypot(1.0, 1.0), 1.4142135623730951)

    def test_exp_m1(self, f64):
        assert_reference(f64, f64.exp_m1(1.0), 1.718281828459045)

    def test_ln_1p(self, f64):
        assert_reference(f64, f64.ln_1p(1.0), 0.6931471805599453)

    def test_results_are_double_precision(self, f64):
        for name in UNARY:
            assert isinstance(getattr(f64, name)(0.5), np.float64), name


class TestReferenceValues:
    def test_powers_of_two_and_ten(self, ops):
        assert_close(ops, ops.exp2(10.0), 1024.0)
        assert_close(ops, ops.log2(1024.0), 10.0)
        assert_close(ops, ops.log2(8.0), 3.0)
        assert_close(ops, ops.log10(1000.0), 3.0)
        assert_close(ops, ops.exp(1.0), math.e)

    def test_identities_at_zero_and_one(self, ops):
        assert ops.exp(0.0) == 1.0
        assert ops.ln(1.0) == 0.0
        assert ops.exp_m1(0.0) == 0.0
        assert ops.ln_1p(0.0) == 0.0

    def test_cbrt_perfect_cubes(self, ops):
        assert_close(ops, ops.cbrt(8.0), 2.0)
        assert_close(ops, ops.cbrt(-27.0), -3.0)
        assert ops.cbrt(0.0) == 0.0
        assert ops.is_sign_negative(ops.cbrt(-0.0))
        assert ops.cbrt(-math.inf) == -math.inf

    def test_hypot_pythagorean(self, ops):
        assert_close(ops, ops.hypot(3.0, 4.0), 5.0)
        assert_close(ops, ops.hypot(-3.0, 4.0), 5.0)
        assert ops.hypot(0.0, -0.0) == 0.0

    def test_hypot_avoids_overflow(self, ops):
        big = ops.narrow(np.finfo(ops.format.dtype).max) / ops.format.dtype(2)
        result = ops.hypot(big, big)
        assert ops.is_finite(result)
        assert_close(ops, result, big * ops.narrow(math.sqrt(2.0)))

    def test_hypot_avoids_underflow(self, ops):
        tiny = ops.from_bits(ops.format.implicit_bit)
        result = ops.hypot(tiny, tiny)
        assert result > tiny


class TestPowi:
    def test_values(self, ops):
        assert_close(ops, ops.powi(2.0, 10), 1024.0)
        assert_close(ops, ops.powi(2.0, -2), 0.25)
        assert_close(ops, ops.powi(-3.0, 3), -27.0)
        assert ops.powi(5.0, 0) == 1.0
        assert ops.powi(math.nan, 0) == 1.0

    def test_overflow_gives_infinity(self, ops):
        assert ops.powi(10.0, 400) == math.inf
        assert ops.powi(-10.0, 401) == -math.inf
        assert ops.powi(10.0, -400) == 0.0

    def test_accepts_numpy_integers(self, ops):
        assert_close(ops, ops.powi(2.0, np.int32(4)), 16.0)

    def test_exponent_outside_int32_rejected(self, ops):
        with pytest.raises(ValidationError):
            ops.powi(2.0, 1 << 31)
        with pytest.raises(ValidationError):
            ops.powi(2.0, -(1 << 31) - 1)

    @pytest.mark.parametrize("n", [2.5, -0.5, math.inf, math.nan, np.float32(1.5)])
    def test_fractional_exponent_rejected(self, ops, n):
        with pytest.raises(ValidationError) as exc_info:
            ops.powi(2.0, n)
        assert "not an integer" in str(exc_info.value)

    def test_integral_float_exponent_accepted(self, ops):
        assert_close(ops, ops.powi(2.0, 3.0), 8.0)
        assert_close(ops, ops.powi(2.0, np.float64(-1.0)), 0.5)

    def test_matches_powf_for_small_exponents(self, ops, rng):
        tolerance = 64 * float(ops.epsilon())
        for _ in range(100):
            x = ops.narrow(rng.uniform(0.5, 2.0))
            n = rng.randint(-20, 20)
            assert ops.approx_eq(ops.powi(x, n), ops.powf(x, n), epsilon=tolerance)

    def test_direct_powi_is_exact_for_small_integers(self, direct):
        assert direct.powi(2.0, 10) == 1024.0
        assert direct.powi(-3.0, 3) == -27.0
        assert direct.powi(2.0, -2) == 0.25


class TestPowiPrecision:
    """direct multiplies in the width; delegating evaluates in binary64."""

    X = np.float32(1.0000001)
    N = 100000

    def test_delegating_rounds_once_from_binary64(self):
        ops = get_float_ops(F32, target=BuildTarget(backend="delegating"))
        expected = np.float32(np.power(np.float64(self.X), np.float64(self.N)))
        assert ops.powi(self.X, self.N) == expected

    def test_direct_repeats_rounding_in_the_width(self):
        ops = get_float_ops(F32, target=BuildTarget(backend="direct"))
        result = ops.powi(self.X, self.N)
        base, expected = self.X, np.float32(1.0)
        remaining = self.N
        while remaining:
            if remaining & 1:
                expected = expected * base
            remaining >>= 1
            if remaining:
                base = base * base
        assert result == expected

    def test_backends_differ_by_accumulated_rounding_only(self):
        direct = get_float_ops(F32, target=BuildTarget(backend="direct"))
        delegating = get_float_ops(F32, target=BuildTarget(backend="delegating"))
        a = direct.powi(self.X, self.N)
        b = delegating.powi(self.X, self.N)
        assert direct.approx_eq(a, b, epsilon=64 * float(direct.epsilon()))

    def test_backends_agree_for_exact_powers(self):
        direct = get_float_ops(F32, target=BuildTarget(backend="direct"))
        delegating = get_float_ops(F32, target=BuildTarget(backend="delegating"))
        for n in range(-30, 31):
            assert direct.powi(2.0, n) == delegating.powi(2.0, n), n


class TestPowf:
    def test_values(self, ops):
        assert_close(ops, ops.powf(4.0, 0.5), 2.0)
        assert_close(ops, ops.powf(2.0, -1.0), 0.5)
        assert_close(ops, ops.powf(2.0, 0.5), math.sqrt(2.0))

    def test_negative_base_fractional_exponent_is_nan(self, ops):
        assert ops.is_nan(ops.powf(-8.0, 1.0 / 3.0))


class TestLog:
    def test_identity_on_random_values(self, ops, rng):
        for _ in range(300):
            x = ops.narrow(rng.uniform(1e-3, 1e6))
            base = ops.narrow(rng.choice([rng.uniform(0.01, 0.99), rng.uniform(1.01, 100.0)]))
            expected = ops.ln(x) / ops.ln(base)
            assert ops.approx_eq(ops.log(x, base), expected)

    def test_known_values(self, ops):
        assert_close(ops, ops.log(8.0, 2.0), 3.0)
        assert_close(ops, ops.log(100.0, 10.0), 2.0)
        assert_close(ops, ops.log(0.25, 0.5), 2.0)

    def test_base_one_gives_infinity(self, ops):
        assert ops.log(2.0, 1.0) == math.inf


class TestDomain:
    def test_ln_of_zero_is_negative_infinity(self, ops):
        assert ops.ln(0.0) == -math.inf
        assert ops.ln(-0.0) == -math.inf
        assert ops.log2(0.0) == -math.inf
        assert ops.log10(0.0) == -math.inf

    def test_ln_of_negative_is_nan(self, ops):
        assert ops.is_nan(ops.ln(-1.0))
        assert ops.is_nan(ops.log2(-1.0))
        assert ops.is_nan(ops.log10(-1.0))
        assert ops.is_nan(ops.ln_1p(-2.0))

    def test_ln_1p_of_minus_one(self, ops):
        assert ops.ln_1p(-1.0) == -math.inf

    @pytest.mark.parametrize("name", UNARY)
    def test_nan_propagates(self, ops, name):
        assert ops.is_nan(getattr(ops, name)(math.nan))

    def test_nan_propagates_binary(self, ops):
        assert ops.is_nan(ops.powf(math.nan, 2.0))
        assert ops.is_nan(ops.hypot(math.nan, 1.0))
        assert ops.is_nan(ops.log(math.nan, 2.0))

    def test_hypot_infinity_beats_nan(self, ops):
        assert ops.hypot(math.inf, math.nan) == math.inf
        assert ops.hypot(math.nan, -math.inf) == math.inf

    def test_exp_limits(self, ops):
        assert ops.exp(math.inf) == math.inf
        assert ops.exp(-math.inf) == 0.0
        assert ops.exp(1000.0) == math.inf
        assert ops.exp_m1(-math.inf) == -1.0
        assert ops.exp_m1(math.inf) == math.inf

    def test_signed_zero_preserved(self, ops):
        assert ops.is_sign_negative(ops.exp_m1(-0.0))
        assert ops.is_sign_negative(ops.ln_1p(-0.0))


class TestSmallArguments:
    def test_exp_m1_keeps_precision(self, f64):
        x = 1e-10
        assert math.isclose(f64.exp_m1(x), x + x * x / 2, rel_tol=1e-15)
        assert f64.exp(x) - 1.0 != f64.exp_m1(x)

    def test_ln_1p_keeps_precision(self, f64):
        x = 1e-10
        assert math.isclose(f64.ln_1p(x), x - x * x / 2, rel_tol=1e-15)

    def test_single_precision(self, f32):
        x = np.float32(1e-6)
        assert math.isclose(f32.exp_m1(x), float(x), rel_tol=1e-5)
        assert math.isclose(f32.ln_1p(x), float(x), rel_tol=1e-5)


@pytest.mark.parametrize("fmt", [F32, F64], ids=["f32", "f64"])
def test_backends_agree(fmt, rng):
    direct = get_float_ops(fmt, target=BuildTarget(backend="direct"))
    delegating = get_float_ops(fmt, target=BuildTarget(backend="delegating"))
    tolerance = 8 * float(direct.epsilon())
    for _ in range(200):
        x = direct.narrow(rng.uniform(0.01, 50.0))
        for name in UNARY:
            a = getattr(direct, name)(x)
            b = getattr(delegating, name)(x)
            assert direct.approx_eq(a, b, epsilon=tolerance), (name, x, a, b)
        y = direct.narrow(rng.uniform(-50.0, 50.0))
        assert direct.approx_eq(direct.hypot(x, y), delegating.hypot(x, y), epsilon=tolerance)
