"""
maintenance.py
--------------
Interpretacja parametru kształtu β i dobór interwału obsługi prewencyjnej (PM).

Klasyfikacja wzorca awarii:
┌──────────────────────┬──────────────┬────────────────────────────────────┐
│ Warunek              │ Wzorzec      │ Zalecenie                          │
├──────────────────────┼──────────────┼────────────────────────────────────┤
│ β < 1                │ early-life   │ run-to-failure (+ burn-in)         │
│ |β − 1| < 0.05       │ random       │ run-to-failure                     │
│ β > 1                │ wear-out     │ PM co t = η·(1 − (1/β)^(1/β))      │
└──────────────────────┴──────────────┴────────────────────────────────────┘

Model kosztów (horyzont T, interwał τ):
    C(τ) = ⌊T/τ⌋ · C_PM + ⌊T/τ⌋ · F(τ) · C_CM
    C(∞) = C_CM · T / MTBF              (run-to-failure)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Literal

import pandas as pd

from .distribution import cumulative_failure_probability, reliability
from .errors import InvalidArgumentError
from .estimator import FittedParameters

FailurePattern = Literal["early-life", "random", "wear-out"]

# ---------------------------------------------------------------------------
# Stałe konfiguracyjne
# ---------------------------------------------------------------------------

RANDOM_PATTERN_TOLERANCE: float = 0.05  # |β − 1| poniżej tej wartości → "random"

DEFAULT_TARGET_RELIABILITY: float = 0.90
ZERO_DOWNTIME_TARGET_RELIABILITY: float = 0.95
ZERO_DOWNTIME_MTBF_FACTOR: float = 0.5

CRITICAL_DOWNTIME_HOURS: float = 24.0   # dopuszczalny przestój uznawany za krytyczny
DEFAULT_COST_CURVE_POINTS: int = 50

STRATEGY_PM = "Preventive Maintenance"
STRATEGY_RTF = "Run-to-Failure"


# ---------------------------------------------------------------------------
# Wyniki — dataclass
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MaintenanceRecommendation:
    """Zalecany interwał PM (None → brak PM, eksploatacja do awarii)."""

    interval: float | None
    reason: str
    strategy: str

    def to_dict(self) -> dict:
        return {
            "interval": self.interval,
            "reason": self.reason,
            "strategy": self.strategy,
        }


@dataclass
class MaintenancePlan:
    """Wynik optymalizacji kosztowej interwału PM."""

    optimal_interval: float          # math.inf dla run-to-failure
    optimal_cost: float
    strategy: str
    reason: str
    mtbf: float
    reliability_at_optimal: float | None
    reliability_based_interval: float | None
    target_reliability: float | None
    cost_curve: pd.DataFrame = field(repr=False)

    @property
    def is_run_to_failure(self) -> bool:
        return math.isinf(self.optimal_interval)

    def to_dict(self) -> dict:
        return {
            "optimal_interval": self.optimal_interval,
            "optimal_cost": round(self.optimal_cost, 4),
            "strategy": self.strategy,
            "reason": self.reason,
            "mtbf": self.mtbf,
            "reliability_at_optimal": self.reliability_at_optimal,
            "reliability_based_interval": self.reliability_based_interval,
            "target_reliability": self.target_reliability,
        }


# ---------------------------------------------------------------------------
# Klasyfikacja i zalecenie
# ---------------------------------------------------------------------------


def classify_failure_pattern(
    beta: float,
    tolerance: float = RANDOM_PATTERN_TOLERANCE,
) -> FailurePattern:
    """Klasyfikuje wzorzec awarii na podstawie β (bez efektów ubocznych)."""
    if abs(beta - 1.0) < tolerance:
        return "random"
    if beta < 1.0:
        return "early-life"
    return "wear-out"


def recommended_interval(params: FittedParameters) -> MaintenanceRecommendation:
    """
    Zwraca zalecany interwał obsługi prewencyjnej.

    Dla β ≤ 1 intensywność awarii jest stała lub malejąca; obsługa zależna
    od wieku nie zmniejsza ryzyka awarii, więc interwał = None.
    Dla β > 1 (zużycie) interwał = η · (1 − (1/β)^(1/β)).
    """
    beta, eta = params.beta, params.eta
    if beta <= 1.0:
        return MaintenanceRecommendation(
            interval=None,
            reason=(
                f"β = {beta:.3f} ≤ 1: stała lub malejąca intensywność awarii. "
                "Obsługa prewencyjna nie jest skuteczna, zalecana eksploatacja do awarii."
            ),
            strategy=STRATEGY_RTF,
        )

    interval = eta * (1.0 - (1.0 / beta) ** (1.0 / beta))
    return MaintenanceRecommendation(
        interval=interval,
        reason=(
            f"β = {beta:.3f} > 1: awarie zużyciowe. "
            f"Wykonuj obsługę prewencyjną co {interval:.1f} jednostek czasu."
        ),
        strategy=STRATEGY_PM,
    )


def reliability_based_interval(params: FittedParameters, target_reliability: float) -> float:
    """Interwał, po którym R(t) spada do zadanej wartości: t = η · (−ln R)^(1/β)."""
    if not (0.0 < target_reliability < 1.0):
        raise InvalidArgumentError(
            f"Docelowa niezawodność musi należeć do przedziału (0, 1), otrzymano {target_reliability}."
        )
    try:
        return params.eta * (-math.log(target_reliability)) ** (1.0 / params.beta)
    except OverflowError:
        return math.inf


# ---------------------------------------------------------------------------
# Model kosztów
# ---------------------------------------------------------------------------


def validate_costs(pm_cost: float, failure_cost: float, time_horizon: float) -> None:
    if math.isnan(pm_cost) or pm_cost < 0:
        raise InvalidArgumentError("Koszt obsługi prewencyjnej musi być liczbą nieujemną.")
    if math.isnan(failure_cost) or failure_cost <= 0:
        raise InvalidArgumentError("Koszt awarii (obsługi korekcyjnej) musi być liczbą dodatnią.")
    if not math.isfinite(time_horizon) or time_horizon <= 0:
        raise InvalidArgumentError("Horyzont czasowy musi być skończoną liczbą dodatnią.")


def calculate_total_cost(
    interval: float,
    params: FittedParameters,
    pm_cost: float,
    failure_cost: float,
    time_horizon: float,
) -> float:
    """
    Całkowity koszt utrzymania w horyzoncie czasowym przy interwale PM.

    Parametry
    ----------
    interval : float
        Interwał PM; math.inf oznacza eksploatację do awarii.
    params : FittedParameters
        Dopasowane parametry (MTBF używany dla run-to-failure).
    pm_cost, failure_cost : float
        Koszt jednej obsługi prewencyjnej / jednej awarii.
    time_horizon : float
        Horyzont analizy (te same jednostki co interval).
    """
    validate_costs(pm_cost, failure_cost, time_horizon)
    if math.isnan(interval) or interval <= 0:
        raise InvalidArgumentError(f"Interwał PM musi być dodatni, otrzymano {interval}.")

    if math.isinf(interval):
        expected_failures = time_horizon / params.mtbf
        return failure_cost * expected_failures

    num_pm = math.floor(time_horizon / interval)
    expected_failures = num_pm * cumulative_failure_probability(params, interval)
    return num_pm * pm_cost + expected_failures * failure_cost


def _cost_curve(
    params: FittedParameters,
    pm_cost: float,
    failure_cost: float,
    time_horizon: float,
    num_points: int,
) -> pd.DataFrame:
    max_interval = min(2.0 * params.eta, time_horizon)
    step = max_interval / num_points
    intervals = [i * step for i in range(1, num_points + 1)]
    return pd.DataFrame(
        {
            "Interval": intervals,
            "Cost": [
                calculate_total_cost(tau, params, pm_cost, failure_cost, time_horizon)
                for tau in intervals
            ],
        }
    )


# ---------------------------------------------------------------------------
# Optymalizacja
# ---------------------------------------------------------------------------


def optimize_maintenance_interval(
    params: FittedParameters,
    *,
    pm_cost: float,
    failure_cost: float,
    time_horizon: float,
    max_downtime: float | None = None,
    target_reliability: float = DEFAULT_TARGET_RELIABILITY,
    num_points: int = DEFAULT_COST_CURVE_POINTS,
) -> MaintenancePlan:
    """
    Dobiera interwał PM minimalizujący koszt całkowity.

    Reguły decyzyjne (w kolejności):
      1. max_downtime == 0 → PM co 0.5·MTBF (docelowe R = 0.95).
      2. 0 < max_downtime ≤ 24 h i β ≤ 1 → PM co MTBF·max(0.6, 1 − d/24)
         (docelowe R = max(0.8, 1 − d/48)).
      3. β ≤ 1 → eksploatacja do awarii.
      4. β > 1 → przeszukanie siatki (0, 2η] ∩ (0, T] oraz interwał
         analityczny; wygrywa tańszy.

    Parametry
    ----------
    params : FittedParameters
        Dopasowane parametry Weibulla.
    pm_cost : float
        Koszt jednej obsługi prewencyjnej (≥ 0).
    failure_cost : float
        Koszt jednej awarii (> 0).
    time_horizon : float
        Horyzont analizy kosztów (> 0).
    max_downtime : float, opcjonalnie
        Dopuszczalny przestój [h]. None → brak ograniczenia.
    target_reliability : float
        Docelowa niezawodność dla interwału alternatywnego (reguły 3–4).
    num_points : int
        Liczba punktów krzywej kosztów.

    Zwraca
    -------
    MaintenancePlan
        Optymalny interwał, koszt, strategia, krzywa kosztów [Interval, Cost].
    """
    validate_costs(pm_cost, failure_cost, time_horizon)
    if num_points < 1:
        raise InvalidArgumentError(f"Liczba punktów krzywej kosztów musi być ≥ 1, otrzymano {num_points}.")
    if max_downtime is not None and (math.isnan(max_downtime) or max_downtime < 0):
        raise InvalidArgumentError("Dopuszczalny przestój musi być liczbą nieujemną.")

    beta, mtbf = params.beta, params.mtbf

    def _plan(interval: float, strategy: str, reason: str, target: float) -> MaintenancePlan:
        return MaintenancePlan(
            optimal_interval=interval,
            optimal_cost=calculate_total_cost(interval, params, pm_cost, failure_cost, time_horizon),
            strategy=strategy,
            reason=reason,
            mtbf=mtbf,
            reliability_at_optimal=reliability(params, interval),
            reliability_based_interval=reliability_based_interval(params, target),
            target_reliability=target,
            cost_curve=_cost_curve(params, pm_cost, failure_cost, time_horizon, num_points),
        )

    # Reguła 1 — zerowa tolerancja przestoju
    if max_downtime == 0:
        return _plan(
            ZERO_DOWNTIME_MTBF_FACTOR * mtbf,
            STRATEGY_PM,
            "Zerowa tolerancja przestoju wymaga obsługi prewencyjnej przed wystąpieniem awarii.",
            ZERO_DOWNTIME_TARGET_RELIABILITY,
        )

    # Reguła 2 — ograniczony przestój przy awariach losowych / wczesnych
    if max_downtime is not None and 0 < max_downtime <= CRITICAL_DOWNTIME_HOURS and beta <= 1.0:
        factor = max(0.6, 1.0 - max_downtime / CRITICAL_DOWNTIME_HOURS)
        return _plan(
            mtbf * factor,
            STRATEGY_PM,
            f"Mimo β ≤ 1 ograniczony przestój ({max_downtime:g} h) wymaga obsługi prewencyjnej.",
            max(0.8, 1.0 - max_downtime / (2.0 * CRITICAL_DOWNTIME_HOURS)),
        )

    # Reguła 3 — β ≤ 1: eksploatacja do awarii
    if beta <= 1.0:
        cost = calculate_total_cost(math.inf, params, pm_cost, failure_cost, time_horizon)
        return MaintenancePlan(
            optimal_interval=math.inf,
            optimal_cost=cost,
            strategy=STRATEGY_RTF,
            reason="Dla β ≤ 1 awarie są wczesne lub losowe, obsługa prewencyjna jest nieopłacalna.",
            mtbf=mtbf,
            reliability_at_optimal=None,
            reliability_based_interval=None,
            target_reliability=None,
            cost_curve=pd.DataFrame({"Interval": [params.eta], "Cost": [cost]}),
        )

    # Reguła 4 — β > 1: minimalizacja kosztu
    cost_curve = _cost_curve(params, pm_cost, failure_cost, time_horizon, num_points)
    best = cost_curve.loc[cost_curve["Cost"].idxmin()]
    optimal_interval = float(best["Interval"])
    optimal_cost = float(best["Cost"])

    analytical = recommended_interval(params).interval
    if analytical is not None and analytical <= time_horizon:
        analytical_cost = calculate_total_cost(
            analytical, params, pm_cost, failure_cost, time_horizon
        )
        if analytical_cost < optimal_cost:
            optimal_interval, optimal_cost = analytical, analytical_cost

    return MaintenancePlan(
        optimal_interval=optimal_interval,
        optimal_cost=optimal_cost,
        strategy=STRATEGY_PM,
        reason="Dla β > 1 awarie zużyciowe są przewidywalne, obsługa prewencyjna jest optymalna.",
        mtbf=mtbf,
        reliability_at_optimal=reliability(params, optimal_interval),
        reliability_based_interval=reliability_based_interval(params, target_reliability),
        target_reliability=target_reliability,
        cost_curve=cost_curve,
    )
