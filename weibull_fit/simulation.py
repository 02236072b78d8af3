"""
simulation.py
-------------
Symulacja Monte Carlo eksploatacji komponentu o dopasowanym rozkładzie Weibulla.

Czasy do awarii losowane są metodą odwrotnej dystrybuanty:
    t = η · (−ln(1 − U))^(1/β),   U ~ U[0, 1)

Strategie:
    - bez PM (pm_interval=None): komponent pracuje do awarii, po awarii
      wymieniany jest na nowy (proces odnowy),
    - z PM co τ: w każdym cyklu długości τ albo awaria przed końcem cyklu
      (koszt awarii + PM na granicy cyklu), albo obsługa prewencyjna.

Wynik: średni koszt i średnia liczba awarii na przebieg oraz histogram
czasów awarii (20 przedziałów w horyzoncie T).
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field

import pandas as pd

from .errors import InvalidArgumentError
from .estimator import FittedParameters
from .maintenance import validate_costs

# ---------------------------------------------------------------------------
# Stałe
# ---------------------------------------------------------------------------

HISTOGRAM_BINS: int = 20
DEFAULT_NUMBER_OF_RUNS: int = 1000


# ---------------------------------------------------------------------------
# Wynik — dataclass
# ---------------------------------------------------------------------------


@dataclass
class SimulationResult:
    """Uśrednione wyniki symulacji Monte Carlo."""

    average_cost: float        # średni koszt na przebieg
    average_failures: float    # średnia liczba awarii na przebieg
    number_of_runs: int
    histogram: pd.DataFrame = field(repr=False)   # [Bin_Start, Bin_End, Count]

    def to_dict(self) -> dict:
        return {
            "average_cost": round(self.average_cost, 4),
            "average_failures": round(self.average_failures, 4),
            "number_of_runs": self.number_of_runs,
        }


# ---------------------------------------------------------------------------
# Losowanie czasu do awarii
# ---------------------------------------------------------------------------


def weibull_inverse_cdf(params: FittedParameters, p: float) -> float:
    """
    Odwrotna dystrybuanta rozkładu Weibulla: t = η · (−ln(1 − p))^(1/β).

    Przyjmuje p ∈ [0, 1); dla p = 0 zwraca 0. Wynik poza zakresem float
    zwracany jest jako math.inf.
    """
    if not (0.0 <= p < 1.0):
        raise InvalidArgumentError(
            f"Prawdopodobieństwo musi należeć do przedziału [0, 1), otrzymano {p}."
        )
    try:
        return params.eta * (-math.log(1.0 - p)) ** (1.0 / params.beta)
    except OverflowError:
        return math.inf


def _run_to_failure(
    params: FittedParameters,
    rng: random.Random,
    time_horizon: float,
    failure_cost: float,
) -> tuple[float, list[float]]:
    time = 0.0
    cost = 0.0
    failures: list[float] = []
    while True:
        ttf = weibull_inverse_cdf(params, rng.random())
        if time + ttf >= time_horizon:
            break
        time += ttf
        cost += failure_cost
        failures.append(time)
    return cost, failures


def _with_pm(
    params: FittedParameters,
    rng: random.Random,
    time_horizon: float,
    pm_interval: float,
    pm_cost: float,
    failure_cost: float,
) -> tuple[float, list[float]]:
    cycle_start = 0.0
    cost = 0.0
    failures: list[float] = []
    while cycle_start < time_horizon:
        ttf = weibull_inverse_cdf(params, rng.random())
        if ttf < pm_interval and cycle_start + ttf < time_horizon:
            # Awaria w trakcie cyklu: naprawa, a następnie PM na granicy cyklu
            failures.append(cycle_start + ttf)
            cost += failure_cost + pm_cost
        elif cycle_start + pm_interval < time_horizon:
            cost += pm_cost
        else:
            break
        cycle_start += pm_interval
    return cost, failures


def _histogram(failure_times: list[float], time_horizon: float) -> pd.DataFrame:
    bin_width = time_horizon / HISTOGRAM_BINS
    counts = [0] * HISTOGRAM_BINS
    for t in failure_times:
        counts[min(int(t // bin_width), HISTOGRAM_BINS - 1)] += 1
    return pd.DataFrame(
        {
            "Bin_Start": [i * bin_width for i in range(HISTOGRAM_BINS)],
            "Bin_End": [(i + 1) * bin_width for i in range(HISTOGRAM_BINS)],
            "Count": counts,
        }
    )


# ---------------------------------------------------------------------------
# Funkcja główna
# ---------------------------------------------------------------------------


def run_simulation(
    params: FittedParameters,
    *,
    time_horizon: float,
    pm_cost: float,
    failure_cost: float,
    number_of_runs: int = DEFAULT_NUMBER_OF_RUNS,
    pm_interval: float | None = None,
    seed: int | None = None,
) -> SimulationResult:
    """
    Symuluje eksploatację komponentu w horyzoncie czasowym.

    Parametry
    ----------
    params : FittedParameters
        Dopasowane parametry β, η.
    time_horizon : float
        Horyzont pojedynczego przebiegu (> 0).
    pm_cost, failure_cost : float
        Koszt jednej obsługi prewencyjnej (≥ 0) / jednej awarii (> 0).
    number_of_runs : int
        Liczba niezależnych przebiegów (≥ 1).
    pm_interval : float, opcjonalnie
        Interwał PM; None → eksploatacja do awarii.
    seed : int, opcjonalnie
        Ziarno generatora (powtarzalne wyniki).

    Zwraca
    -------
    SimulationResult
        Średni koszt, średnia liczba awarii, histogram [Bin_Start, Bin_End, Count].

    Przykład
    --------
    >>> result = run_simulation(params, time_horizon=3650, pm_cost=500,
    ...                         failure_cost=5000, seed=42)
    >>> print(result.average_failures)
    """
    validate_costs(pm_cost, failure_cost, time_horizon)
    if number_of_runs < 1:
        raise InvalidArgumentError(
            f"Liczba przebiegów symulacji musi być ≥ 1, otrzymano {number_of_runs}."
        )
    if pm_interval is not None and (not math.isfinite(pm_interval) or pm_interval <= 0):
        raise InvalidArgumentError(
            f"Interwał PM musi być skończony i dodatni, otrzymano {pm_interval}."
        )

    rng = random.Random(seed)
    total_cost = 0.0
    all_failures: list[float] = []
    for _ in range(number_of_runs):
        if pm_interval is None:
            cost, failures = _run_to_failure(params, rng, time_horizon, failure_cost)
        else:
            cost, failures = _with_pm(
                params, rng, time_horizon, pm_interval, pm_cost, failure_cost
            )
        total_cost += cost
        all_failures.extend(failures)

    return SimulationResult(
        average_cost=total_cost / number_of_runs,
        average_failures=len(all_failures) / number_of_runs,
        number_of_runs=number_of_runs,
        histogram=_histogram(all_failures, time_horizon),
    )
