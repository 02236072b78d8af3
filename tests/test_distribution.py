"""
tests/test_distribution.py
--------------------------
Unit testy dla modułu weibull_fit.distribution.
Funkcje R(t), F(t), h(t), B-life oraz generowanie krzywych.
"""

import math

import pytest

from weibull_fit.distribution import (
    b_life,
    b_life_values,
    cumulative_failure_probability,
    failure_probability_curve,
    failure_rate,
    failure_rate_curve,
    generate_curves,
    reliability,
    reliability_curve,
)
from weibull_fit.errors import InvalidArgumentError
from weibull_fit.estimator import FittedParameters


def make_params(beta: float, eta: float = 1000.0) -> FittedParameters:
    return FittedParameters(
        beta=beta,
        eta=eta,
        r2=1.0,
        mtbf=eta * math.gamma(1 + 1 / beta),
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def wear_out() -> FittedParameters:
    """β = 2 (rozkład Rayleigha), η = 1000."""
    return make_params(2.0)


# ---------------------------------------------------------------------------
# Testy: reliability / cumulative_failure_probability
# ---------------------------------------------------------------------------


class TestReliability:
    def test_reliability_at_zero_is_one(self, wear_out):
        assert reliability(wear_out, 0.0) == 1.0

    def test_known_values_rayleigh(self, wear_out):
        assert reliability(wear_out, 1000.0) == pytest.approx(math.exp(-1), rel=1e-12)
        assert reliability(wear_out, 2000.0) == pytest.approx(math.exp(-4), rel=1e-12)

    def test_known_values_exponential(self):
        params = make_params(1.0)
        assert reliability(params, 2000.0) == pytest.approx(math.exp(-2), rel=1e-12)

    @pytest.mark.parametrize("beta", [0.5, 1.0, 2.0, 3.5])
    def test_strictly_decreasing(self, beta):
        params = make_params(beta)
        values = [reliability(params, t) for t in (0.0, 10.0, 250.0, 900.0, 1500.0, 3000.0)]
        assert all(a > b for a, b in zip(values, values[1:]))

    @pytest.mark.parametrize("t", [0.0, 1.0, 500.0, 1000.0, 2500.0])
    def test_complementarity(self, wear_out, t):
        """F(t) + R(t) = 1."""
        total = cumulative_failure_probability(wear_out, t) + reliability(wear_out, t)
        assert total == pytest.approx(1.0, abs=1e-15)

    def test_known_failure_probability(self, wear_out):
        assert cumulative_failure_probability(wear_out, 1000.0) == pytest.approx(0.6321, abs=1e-4)

    @pytest.mark.parametrize("t", [-1.0, math.nan, math.inf])
    def test_invalid_time_raises(self, wear_out, t):
        with pytest.raises(InvalidArgumentError):
            reliability(wear_out, t)


# ---------------------------------------------------------------------------
# Testy: failure_rate
# ---------------------------------------------------------------------------


class TestFailureRate:
    def test_constant_for_beta_one(self):
        params = make_params(1.0)
        assert failure_rate(params, 500.0) == pytest.approx(0.001)
        assert failure_rate(params, 1500.0) == pytest.approx(0.001)

    def test_increasing_for_beta_two(self, wear_out):
        assert failure_rate(wear_out, 500.0) == pytest.approx(0.001)
        assert failure_rate(wear_out, 1000.0) == pytest.approx(0.002)
        assert failure_rate(wear_out, 2000.0) == pytest.approx(0.004)

    def test_decreasing_for_beta_half(self):
        params = make_params(0.5)
        assert failure_rate(params, 250.0) == pytest.approx(0.001)
        assert failure_rate(params, 1000.0) == pytest.approx(0.0005)
        assert failure_rate(params, 4000.0) == pytest.approx(0.00025)

    def test_at_zero_depends_on_beta(self):
        assert failure_rate(make_params(2.0), 0.0) == 0.0
        assert failure_rate(make_params(1.0), 0.0) == pytest.approx(0.001)
        assert math.isinf(failure_rate(make_params(0.5), 0.0))

    def test_negative_time_raises(self, wear_out):
        with pytest.raises(InvalidArgumentError, match="nieujemny"):
            failure_rate(wear_out, -10.0)


# ---------------------------------------------------------------------------
# Testy: b_life
# ---------------------------------------------------------------------------


class TestBLife:
    @pytest.mark.parametrize("beta", [0.4, 1.0, 1.8, 4.0])
    def test_b10_before_b50(self, beta):
        params = make_params(beta)
        assert b_life(params, 0.10) < b_life(params, 0.50)

    def test_b50_formula(self, wear_out):
        """B50 = η · (ln 2)^(1/β)."""
        assert b_life(wear_out, 0.5) == pytest.approx(1000.0 * math.sqrt(math.log(2)))

    def test_characteristic_life(self, wear_out):
        """F(η) = 1 − e⁻¹ niezależnie od β → B_63.2 = η."""
        assert b_life(wear_out, 1 - math.exp(-1)) == pytest.approx(1000.0)

    def test_inverse_of_failure_probability(self, wear_out):
        t = b_life(wear_out, 0.10)
        assert cumulative_failure_probability(wear_out, t) == pytest.approx(0.10)

    @pytest.mark.parametrize("p", [0.0, 1.0, -0.1, 1.5, math.nan])
    def test_out_of_range_raises(self, wear_out, p):
        with pytest.raises(InvalidArgumentError, match="przedziału"):
            b_life(wear_out, p)

    def test_b_life_values(self, wear_out):
        values = b_life_values(wear_out)
        assert values.b10 == pytest.approx(b_life(wear_out, 0.10))
        assert values.b50 == pytest.approx(b_life(wear_out, 0.50))
        assert set(values.to_dict()) == {"B10", "B50"}


# ---------------------------------------------------------------------------
# Testy: krzywe
# ---------------------------------------------------------------------------


class TestCurves:
    def test_reliability_curve_shape(self, wear_out):
        df = reliability_curve(wear_out, 2000.0)
        assert list(df.columns) == ["Time", "Reliability"]
        assert len(df) == 101
        assert df["Time"].iloc[0] == 0.0
        assert df["Time"].iloc[-1] == pytest.approx(2000.0)

    def test_reliability_curve_monotonic(self, wear_out):
        df = reliability_curve(wear_out, 3000.0, num_points=30)
        assert df["Reliability"].is_monotonic_decreasing
        assert df["Reliability"].iloc[0] == 1.0

    def test_failure_probability_curve(self, wear_out):
        df = failure_probability_curve(wear_out, 1000.0, num_points=10)
        assert list(df.columns) == ["Time", "Failure_Probability"]
        assert df["Failure_Probability"].iloc[-1] == pytest.approx(1 - math.exp(-1))

    def test_failure_rate_curve_with_offset(self):
        """Dla β < 1 start > 0 omija nieskończoność w t = 0."""
        params = make_params(0.5)
        df = failure_rate_curve(params, 1000.0, num_points=20, start=1.0)
        assert df["Time"].iloc[0] == 1.0
        assert df["Failure_Rate"].map(math.isfinite).all()

    def test_generate_curves_columns(self, wear_out):
        df = generate_curves(wear_out, 2000.0, num_points=50)
        assert list(df.columns) == ["Time", "Reliability", "Failure_Probability", "Failure_Rate"]
        assert len(df) == 51
        assert ((df["Reliability"] + df["Failure_Probability"]) - 1.0).abs().max() < 1e-12

    @pytest.mark.parametrize("horizon", [0.0, -100.0, math.inf])
    def test_invalid_horizon_raises(self, wear_out, horizon):
        with pytest.raises(InvalidArgumentError, match="Horyzont"):
            generate_curves(wear_out, horizon)

    def test_invalid_num_points_raises(self, wear_out):
        with pytest.raises(InvalidArgumentError):
            reliability_curve(wear_out, 1000.0, num_points=0)


# ---------------------------------------------------------------------------
# Testy: wartości graniczne dla bardzo dużych t
# ---------------------------------------------------------------------------


class TestLargeTimeLimits:
    @pytest.fixture
    def steep(self) -> FittedParameters:
        return make_params(3.0, eta=1.0)

    def test_reliability_tends_to_zero(self, steep):
        assert reliability(steep, 1e200) == 0.0

    def test_failure_probability_tends_to_one(self, steep):
        assert cumulative_failure_probability(steep, 1e200) == 1.0

    def test_failure_rate_tends_to_inf(self, steep):
        assert failure_rate(steep, 1e200) == math.inf

    def test_rayleigh_at_large_time(self):
        params = FittedParameters(beta=2.0, eta=1.0, r2=1.0, mtbf=0.886)
        assert reliability(params, 1e200) == 0.0

    def test_curve_over_huge_horizon(self, steep):
        df = generate_curves(steep, 1e200, num_points=4)
        assert df["Reliability"].iloc[-1] == 0.0
        assert df["Failure_Probability"].iloc[-1] == 1.0
        assert df["Failure_Rate"].iloc[-1] == math.inf

    def test_b_life_beyond_float_range(self):
        """(−ln 0.01)^(1/β) dla β = 0.001 przekracza zakres float."""
        params = FittedParameters(beta=0.001, eta=1.0, r2=1.0, mtbf=1.0)
        assert b_life(params, 0.99) == math.inf
