"""
tests/test_analysis.py
----------------------
Testy integracyjne klasy WeibullAnalysis (pełny przebieg run()).
"""

import math
import warnings

import pytest

from weibull_fit import (
    InsufficientDataError,
    InvalidArgumentError,
    InvalidObservationError,
    Observation,
    ObservationKind,
    WeibullAnalysis,
)

SUMMARY_KEYS = {
    "beta", "eta", "r2", "mtbf", "simple_mtbf", "B10", "B50",
    "failure_pattern", "interval", "reason", "strategy",
    "n_failures", "n_suspensions",
}


def _quantile_observations(beta: float, eta: float, n: int) -> list:
    return [
        Observation(eta * (-math.log(1.0 - (i - 0.3) / (n + 0.4))) ** (1.0 / beta))
        for i in range(1, n + 1)
    ]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def observations() -> list:
    return [Observation(t) for t in (100.0, 200.0, 300.0, 400.0, 500.0)]


@pytest.fixture
def analysis(observations) -> WeibullAnalysis:
    a = WeibullAnalysis(observations)
    a.run()
    return a


# ---------------------------------------------------------------------------
# Testy: wynik run()
# ---------------------------------------------------------------------------


class TestRunSummary:
    def test_summary_keys(self, observations):
        summary = WeibullAnalysis(observations).run()
        assert set(summary) == SUMMARY_KEYS

    def test_summary_values(self, observations):
        summary = WeibullAnalysis(observations).run()
        assert summary["beta"] == pytest.approx(1.624, abs=0.01)
        assert summary["simple_mtbf"] == pytest.approx(300.0)
        assert summary["B10"] < summary["B50"]
        assert summary["failure_pattern"] == "wear-out"
        assert summary["interval"] is not None
        assert summary["n_failures"] == 5
        assert summary["n_suspensions"] == 0

    def test_early_life_has_no_interval(self):
        summary = WeibullAnalysis(_quantile_observations(0.6, 100.0, 8)).run()
        assert summary["beta"] == pytest.approx(0.6, rel=1e-6)
        assert summary["failure_pattern"] == "early-life"
        assert summary["interval"] is None
        assert summary["strategy"] == "Run-to-Failure"


# ---------------------------------------------------------------------------
# Testy: właściwości
# ---------------------------------------------------------------------------


class TestProperties:
    @pytest.mark.parametrize(
        "name", ["df_plot_points", "fitted", "b_life", "df_curves", "recommendation"]
    )
    def test_results_require_run(self, observations, name):
        a = WeibullAnalysis(observations)
        with pytest.raises(RuntimeError, match="run"):
            getattr(a, name)

    def test_input_properties_available_before_run(self, observations):
        a = WeibullAnalysis(observations)
        assert a.n_failures == 5
        assert list(a.df_observations.columns) == ["Time", "Kind"]
        assert a.observations == observations

    def test_results_after_run(self, analysis):
        assert len(analysis.df_plot_points) == 5
        assert analysis.fitted.eta == pytest.approx(352.5, rel=0.01)
        assert analysis.b_life.b10 < analysis.b_life.b50
        assert analysis.recommendation.strategy == "Preventive Maintenance"

    def test_default_curve_horizon(self, analysis):
        df = analysis.df_curves
        assert len(df) == 101
        assert df["Time"].iloc[0] == 0.0
        assert df["Time"].iloc[-1] == pytest.approx(2 * analysis.fitted.eta)

    def test_custom_curve_grid(self, observations):
        a = WeibullAnalysis(observations, time_horizon=1000.0, num_points=20, curve_start=5.0)
        a.run()
        assert len(a.df_curves) == 21
        assert a.df_curves["Time"].iloc[0] == 5.0
        assert a.df_curves["Time"].iloc[-1] == pytest.approx(1000.0)


# ---------------------------------------------------------------------------
# Testy: ostrzeżenia
# ---------------------------------------------------------------------------


class TestWarnings:
    def test_suspensions_warned(self, observations):
        mixed = observations + [Observation(250.0, ObservationKind.SUSPENSION)]
        with pytest.warns(UserWarning, match="zawieszeń"):
            summary = WeibullAnalysis(mixed).run()
        assert summary["n_suspensions"] == 1
        assert summary["n_failures"] == 5

    def test_poor_fit_warned(self):
        obs = [Observation(t) for t in (1.0, 1.0, 1.0, 1.0, 1000.0)]
        with pytest.warns(UserWarning, match="Słabe dopasowanie"):
            summary = WeibullAnalysis(obs).run()
        assert summary["r2"] < 0.9

    def test_good_fit_not_warned(self, observations):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            WeibullAnalysis(observations).run()


# ---------------------------------------------------------------------------
# Testy: obsługa błędów
# ---------------------------------------------------------------------------


class TestErrors:
    def test_insufficient_data_on_run(self):
        a = WeibullAnalysis([Observation(100.0)])
        with pytest.raises(InsufficientDataError):
            a.run()

    def test_invalid_observation_at_construction(self):
        with pytest.raises(InvalidObservationError):
            WeibullAnalysis([Observation(100.0), Observation(-1.0)])

    @pytest.mark.parametrize("horizon, start", [(0.0, 0.0), (5.0, 10.0)])
    def test_invalid_horizon(self, observations, horizon, start):
        with pytest.raises(InvalidArgumentError, match="Horyzont"):
            WeibullAnalysis(observations, time_horizon=horizon, curve_start=start)

    def test_invalid_num_points(self, observations):
        with pytest.raises(InvalidArgumentError):
            WeibullAnalysis(observations, num_points=0)


# ---------------------------------------------------------------------------
# Testy: walidacja parametrów w konstruktorze
# ---------------------------------------------------------------------------


class TestEagerValidation:
    @pytest.mark.parametrize("start", [-1.0, math.nan, math.inf])
    def test_invalid_curve_start(self, observations, start):
        with pytest.raises(InvalidArgumentError, match="Początek krzywych"):
            WeibullAnalysis(observations, curve_start=start)

    @pytest.mark.parametrize("horizon", [math.nan, math.inf])
    def test_non_finite_horizon(self, observations, horizon):
        with pytest.raises(InvalidArgumentError, match="Horyzont"):
            WeibullAnalysis(observations, time_horizon=horizon)
