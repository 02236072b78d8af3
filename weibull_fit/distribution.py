"""
distribution.py
---------------
Funkcje niezawodnościowe dopasowanego rozkładu Weibulla i krzywe do wykresów.

    R(t) = exp(−(t/η)^β)                 – niezawodność
    F(t) = 1 − R(t)                      – skumulowane prawdopodobieństwo awarii
    h(t) = (β/η) · (t/η)^(β−1)           – intensywność awarii (hazard)
    B_p  = η · (−ln(1 − p))^(1/β)        – czas, po którym awarii ulega p populacji
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import pandas as pd

from .errors import InvalidArgumentError
from .estimator import FittedParameters

# ---------------------------------------------------------------------------
# Stałe
# ---------------------------------------------------------------------------

B_LIFE_PERCENTILES: dict[str, float] = {
    "B10": 0.10,
    "B50": 0.50,   # mediana czasu życia
}

DEFAULT_CURVE_POINTS: int = 100


# ---------------------------------------------------------------------------
# Walidacja
# ---------------------------------------------------------------------------


def _check_time(t: float) -> float:
    if not math.isfinite(t) or t < 0:
        raise InvalidArgumentError(f"Czas t musi być skończony i nieujemny, otrzymano {t}.")
    return float(t)


# ---------------------------------------------------------------------------
# B-life
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BLifeValues:
    """Percentylowe czasy życia B10 i B50."""

    b10: float
    b50: float

    def to_dict(self) -> dict[str, float]:
        return {"B10": self.b10, "B50": self.b50}


def b_life(params: FittedParameters, percentile: float) -> float:
    """
    Oblicza czas, po którym ulegnie awarii zadany ułamek populacji.

    Parametry
    ----------
    params : FittedParameters
        Dopasowane parametry β, η.
    percentile : float
        Skumulowany ułamek awarii p ∈ (0, 1), np. 0.10 dla B10.

    Zwraca
    -------
    float
        t_p = η · (−ln(1 − p))^(1/β)

    Rzuca
    ------
    InvalidArgumentError
        Gdy percentyl leży poza przedziałem otwartym (0, 1).

    Przykład
    --------
    >>> b_life(params, 0.5)   # mediana czasu życia
    """
    if not (0.0 < percentile < 1.0):
        raise InvalidArgumentError(
            f"Percentyl B-life musi należeć do przedziału (0, 1), otrzymano {percentile}."
        )
    try:
        return params.eta * (-math.log(1.0 - percentile)) ** (1.0 / params.beta)
    except OverflowError:
        return math.inf


def b_life_values(params: FittedParameters) -> BLifeValues:
    """Zwraca standardowe wartości B10 i B50."""
    return BLifeValues(
        b10=b_life(params, B_LIFE_PERCENTILES["B10"]),
        b50=b_life(params, B_LIFE_PERCENTILES["B50"]),
    )


# ---------------------------------------------------------------------------
# Funkcje niezawodnościowe
# ---------------------------------------------------------------------------


def reliability(params: FittedParameters, t: float) -> float:
    """
    Niezawodność R(t) = exp(−(t/η)^β), dziedzina t ≥ 0, zakres [0, 1].

    Dla t ≫ η, gdy (t/η)^β wykracza poza zakres float, zwraca granicę 0.0.
    """
    t = _check_time(t)
    try:
        z = (t / params.eta) ** params.beta
    except OverflowError:
        return 0.0
    return math.exp(-z)


def cumulative_failure_probability(params: FittedParameters, t: float) -> float:
    """Skumulowane prawdopodobieństwo awarii F(t) = 1 − R(t)."""
    return 1.0 - reliability(params, t)


def failure_rate(params: FittedParameters, t: float) -> float:
    """
    Intensywność awarii h(t) = (β/η) · (t/η)^(β−1).

    W punkcie t = 0 wartość zależy od β: 0 dla β > 1, 1/η dla β = 1
    oraz +inf dla β < 1 (krzywe dla β < 1 warto zaczynać od małego t > 0).
    Wynik poza zakresem float (bardzo duże t przy β > 1) zwracany jest jako +inf.
    """
    t = _check_time(t)
    beta, eta = params.beta, params.eta
    if t == 0.0:
        if beta > 1.0:
            return 0.0
        if beta == 1.0:
            return 1.0 / eta
        return math.inf
    try:
        return (beta / eta) * (t / eta) ** (beta - 1.0)
    except OverflowError:
        return math.inf


# ---------------------------------------------------------------------------
# Krzywe
# ---------------------------------------------------------------------------


def _time_grid(time_horizon: float, num_points: int, start: float) -> list[float]:
    if num_points < 1:
        raise InvalidArgumentError(f"Liczba punktów krzywej musi być ≥ 1, otrzymano {num_points}.")
    start = _check_time(start)
    if not math.isfinite(time_horizon) or time_horizon <= start:
        raise InvalidArgumentError(
            f"Horyzont czasowy ({time_horizon}) musi być skończony i większy od start ({start})."
        )
    step = (time_horizon - start) / num_points
    return [start + i * step for i in range(num_points + 1)]


def reliability_curve(
    params: FittedParameters,
    time_horizon: float,
    num_points: int = DEFAULT_CURVE_POINTS,
    *,
    start: float = 0.0,
) -> pd.DataFrame:
    """Krzywa R(t): kolumny [Time, Reliability], num_points + 1 wierszy."""
    times = _time_grid(time_horizon, num_points, start)
    return pd.DataFrame(
        {"Time": times, "Reliability": [reliability(params, t) for t in times]}
    )


def failure_probability_curve(
    params: FittedParameters,
    time_horizon: float,
    num_points: int = DEFAULT_CURVE_POINTS,
    *,
    start: float = 0.0,
) -> pd.DataFrame:
    """Krzywa F(t): kolumny [Time, Failure_Probability]."""
    times = _time_grid(time_horizon, num_points, start)
    return pd.DataFrame(
        {
            "Time": times,
            "Failure_Probability": [cumulative_failure_probability(params, t) for t in times],
        }
    )


def failure_rate_curve(
    params: FittedParameters,
    time_horizon: float,
    num_points: int = DEFAULT_CURVE_POINTS,
    *,
    start: float = 0.0,
) -> pd.DataFrame:
    """Krzywa h(t): kolumny [Time, Failure_Rate]."""
    times = _time_grid(time_horizon, num_points, start)
    return pd.DataFrame(
        {"Time": times, "Failure_Rate": [failure_rate(params, t) for t in times]}
    )


def generate_curves(
    params: FittedParameters,
    time_horizon: float,
    num_points: int = DEFAULT_CURVE_POINTS,
    *,
    start: float = 0.0,
) -> pd.DataFrame:
    """
    Generuje wszystkie trzy krzywe na wspólnej siatce czasu.

    Zwraca
    -------
    pd.DataFrame
        Kolumny: [Time, Reliability, Failure_Probability, Failure_Rate].
    """
    df = reliability_curve(params, time_horizon, num_points, start=start)
    df["Failure_Probability"] = 1.0 - df["Reliability"]
    df["Failure_Rate"] = [failure_rate(params, t) for t in df["Time"]]
    return df
