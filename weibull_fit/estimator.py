"""
estimator.py
------------
Estymacja parametrów rozkładu Weibulla metodą regresji rang medianowych
(Median Rank Regression, MRR).

Algorytm:
    1. Sortowanie czasów awarii rosnąco:   t_1 ≤ t_2 ≤ … ≤ t_n
    2. Rangi medianowe (aproksymacja Bernarda):
           F_i = (i − 0.3) / (n + 0.4)
    3. Linearyzacja:
           x_i = ln(t_i),   y_i = ln(−ln(1 − F_i))
    4. Regresja MNK y względem x:
           slope     = (nΣxy − ΣxΣy) / (nΣx² − (Σx)²)
           intercept = (Σy − slope·Σx) / n
    5. Parametry:
           β = slope,   η = exp(−intercept / β)
    6. R² = 1 − SS_res / SS_tot
    7. MTBF = η · Γ(1 + 1/β)

Uwaga: obserwacje typu "suspension" (zawieszenia, dane cenzurowane) są
przyjmowane, ale pomijane w regresji. Jest to uproszczenie względem metod
uwzględniających cenzurowanie (MLE, rangi skorygowane Johnsona).
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

import pandas as pd

from .errors import DegenerateDataError, InsufficientDataError, InvalidObservationError
from .gamma import MAX_EXPONENT, gamma

# ---------------------------------------------------------------------------
# Stałe
# ---------------------------------------------------------------------------

MIN_FAILURES: int = 2  # minimalna liczba punktów awarii do regresji

BERNARD_OFFSET: float = 0.3
BERNARD_DENOMINATOR_OFFSET: float = 0.4


# ---------------------------------------------------------------------------
# Model danych
# ---------------------------------------------------------------------------


class ObservationKind(str, Enum):
    """Rodzaj obserwacji czasu."""

    FAILURE = "failure"          # awaria (czas do / między awariami)
    SUSPENSION = "suspension"    # zawieszenie, np. PM przed awarią


@dataclass(frozen=True)
class Observation:
    """Pojedyncza obserwacja czasu (TTF / TBF) wraz z rodzajem."""

    time: float
    kind: ObservationKind = ObservationKind.FAILURE

    @property
    def is_failure(self) -> bool:
        return self.kind == ObservationKind.FAILURE


@dataclass(frozen=True)
class FittedParameters:
    """Dopasowane parametry rozkładu Weibulla."""

    beta: float   # parametr kształtu β [-]
    eta: float    # parametr skali η [jednostka czasu wejścia]
    r2: float     # współczynnik determinacji regresji [-]
    mtbf: float   # Mean Time Between Failures [jednostka czasu wejścia]

    def to_dict(self) -> dict[str, float]:
        return {
            "beta": self.beta,
            "eta": self.eta,
            "r2": self.r2,
            "mtbf": self.mtbf,
        }


# ---------------------------------------------------------------------------
# Walidacja i przygotowanie danych
# ---------------------------------------------------------------------------


def validate_observations(observations: Iterable[Observation]) -> list[Observation]:
    """
    Sprawdza, czy każdy czas obserwacji jest skończony i dodatni.

    Dotyczy zarówno awarii, jak i zawieszeń: ln(0) i ln(t<0) są
    nieokreślone, więc takie rekordy muszą zostać odrzucone przed regresją.

    Rzuca
    ------
    InvalidObservationError
        Gdy którykolwiek czas jest ≤ 0, NaN, nieskończony lub nieliczbowy.
    """
    checked = list(observations)
    for idx, obs in enumerate(checked):
        time = obs.time
        if isinstance(time, bool) or not isinstance(time, numbers.Real):
            raise InvalidObservationError(
                f"Obserwacja #{idx}: czas musi być liczbą, otrzymano {time!r}."
            )
        if not math.isfinite(time) or time <= 0:
            raise InvalidObservationError(
                f"Obserwacja #{idx}: czas musi być skończony i dodatni, otrzymano {time}."
            )
    return checked


def failure_times(observations: Iterable[Observation]) -> list[float]:
    """
    Zwraca posortowane rosnąco czasy awarii (po walidacji wszystkich obserwacji).

    Rzuca
    ------
    InvalidObservationError
        Gdy którykolwiek czas jest niepoprawny.
    InsufficientDataError
        Gdy pozostaje mniej niż 2 punkty awarii.
    """
    checked = validate_observations(observations)
    times = sorted(float(obs.time) for obs in checked if obs.is_failure)
    if len(times) < MIN_FAILURES:
        raise InsufficientDataError(
            f"Wymagane są co najmniej {MIN_FAILURES} punkty awarii do dopasowania "
            f"rozkładu Weibulla, otrzymano {len(times)}."
        )
    return times


def median_ranks(n: int) -> list[float]:
    """Rangi medianowe Bernarda F_i = (i − 0.3) / (n + 0.4) dla i = 1..n."""
    return [
        (i - BERNARD_OFFSET) / (n + BERNARD_DENOMINATOR_OFFSET)
        for i in range(1, n + 1)
    ]


def _linearize(times: Sequence[float]) -> tuple[list[float], list[float], list[float]]:
    ranks = median_ranks(len(times))
    xs = [math.log(t) for t in times]
    ys = [math.log(-math.log(1.0 - f)) for f in ranks]
    return ranks, xs, ys


# ---------------------------------------------------------------------------
# Punkty wykresu Weibulla
# ---------------------------------------------------------------------------


def weibull_plot_points(observations: Iterable[Observation]) -> pd.DataFrame:
    """
    Zwraca punkty papieru Weibulla dla czasów awarii.

    Zwraca
    -------
    pd.DataFrame
        Kolumny: [Time, Median_Rank, X, Y], gdzie X = ln(Time),
        Y = ln(−ln(1 − Median_Rank)). Wiersze posortowane rosnąco po Time.
    """
    times = failure_times(observations)
    ranks, xs, ys = _linearize(times)
    return pd.DataFrame(
        {
            "Time": times,
            "Median_Rank": ranks,
            "X": xs,
            "Y": ys,
        }
    )


# ---------------------------------------------------------------------------
# Funkcja główna
# ---------------------------------------------------------------------------


def fit(observations: Iterable[Observation]) -> FittedParameters:
    """
    Dopasowuje dwuparametrowy rozkład Weibulla metodą rang medianowych.

    Parametry
    ----------
    observations : Iterable[Observation]
        Obserwacje w kolejności rejestracji. Do regresji trafiają wyłącznie
        awarie (ObservationKind.FAILURE).

    Zwraca
    -------
    FittedParameters
        β, η, R² oraz MTBF = η · Γ(1 + 1/β).

    Rzuca
    ------
    InvalidObservationError
        Czas niedodatni lub nieskończony w którejkolwiek obserwacji.
    InsufficientDataError
        Mniej niż 2 punkty awarii.
    DegenerateDataError
        Wszystkie czasy awarii identyczne (mianownik regresji = 0)
        lub β ≤ 0; η albo MTBF poza zakresem float.

    Przykład
    --------
    >>> obs = [Observation(t) for t in (100, 200, 300, 400, 500)]
    >>> params = fit(obs)
    >>> print(f"β={params.beta:.3f}, η={params.eta:.1f}")   # β≈1.624, η≈352.5
    """
    times = failure_times(observations)
    if times[0] == times[-1]:
        raise DegenerateDataError(
            "Wszystkie czasy awarii są identyczne, regresja jest nieokreślona. "
            "Potrzebne są zróżnicowane dane."
        )

    _, xs, ys = _linearize(times)
    n = len(xs)

    sum_x = sum(xs)
    sum_y = sum(ys)
    sum_xy = sum(x * y for x, y in zip(xs, ys))
    sum_x2 = sum(x * x for x in xs)

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        raise DegenerateDataError("Mianownik regresji równy zero (brak zmienności ln(t)).")

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    beta = slope
    if beta <= 0:
        raise DegenerateDataError(
            f"Regresja dała niefizyczny parametr kształtu β={beta:.6g} (β musi być > 0)."
        )
    log_eta = -intercept / beta
    if abs(log_eta) > MAX_EXPONENT:
        raise DegenerateDataError(
            f"Parametr skali η = exp({log_eta:.6g}) leży poza zakresem liczb zmiennoprzecinkowych "
            f"(β={beta:.6g}). Rozrzut czasów awarii jest zbyt duży."
        )
    eta = math.exp(log_eta)

    # R²: dopasowanie prostej na papierze Weibulla
    y_mean = sum_y / n
    ss_total = sum((y - y_mean) ** 2 for y in ys)
    ss_residual = sum((y - (slope * x + intercept)) ** 2 for x, y in zip(xs, ys))
    if ss_total == 0:
        if ss_residual != 0:
            raise DegenerateDataError("SS_total = 0 przy niezerowych residuach, R² nieokreślone.")
        r2 = 1.0
    else:
        r2 = 1.0 - ss_residual / ss_total

    mtbf = eta * gamma(1.0 + 1.0 / beta)
    if not math.isfinite(mtbf):
        raise DegenerateDataError(
            f"MTBF = η·Γ(1 + 1/β) przekracza zakres liczb zmiennoprzecinkowych "
            f"(β={beta:.6g}, η={eta:.6g}). Rozrzut czasów awarii jest zbyt duży."
        )

    return FittedParameters(beta=beta, eta=eta, r2=r2, mtbf=mtbf)
