"""
analysis.py
-----------
Zintegrowana analiza Weibulla łącząca wszystkie kroki:

    1. Walidacja obserwacji     – czasy skończone i dodatnie
    2. Punkty papieru Weibulla  – rangi medianowe Bernarda, linearyzacja
    3. Dopasowanie MRR          – β, η, R², MTBF
    4. B-life                   – B10, B50
    5. Krzywe                   – R(t), F(t), h(t) w horyzoncie czasowym
    6. Interpretacja            – wzorzec awarii, zalecany interwał PM

Wynik run() to płaski słownik gotowy do raportowania lub zapisu
w zewnętrznym magazynie danych.
"""

from __future__ import annotations

import math
import warnings
from typing import Any, Iterable

import pandas as pd

from .distribution import DEFAULT_CURVE_POINTS, BLifeValues, b_life_values, generate_curves
from .errors import InvalidArgumentError
from .estimator import (
    FittedParameters,
    Observation,
    fit,
    validate_observations,
    weibull_plot_points,
)
from .maintenance import (
    RANDOM_PATTERN_TOLERANCE,
    MaintenanceRecommendation,
    classify_failure_pattern,
    recommended_interval,
)
from .observations import observations_to_frame

# ---------------------------------------------------------------------------
# Stałe domyślne
# ---------------------------------------------------------------------------

R2_WARNING_THRESHOLD: float = 0.9
DEFAULT_HORIZON_ETA_FACTOR: float = 2.0   # horyzont krzywych = 2·η, gdy nie podano


# ---------------------------------------------------------------------------
# Klasa główna
# ---------------------------------------------------------------------------


class WeibullAnalysis:
    """
    Pełna analiza Weibulla dla jednego zbioru obserwacji.

    Parametry
    ----------
    observations : Iterable[Observation]
        Obserwacje czasu (awarie i zawieszenia).
    time_horizon : float, opcjonalnie
        Koniec osi czasu krzywych. Domyślnie 2·η.
    num_points : int
        Liczba odcinków siatki czasu krzywych. Domyślnie 100.
    curve_start : float
        Początek osi czasu krzywych (dla β < 1 warto podać małe t > 0).
    r2_warning_threshold : float
        Poniżej tej wartości R² emitowane jest ostrzeżenie o słabym dopasowaniu.
    pattern_tolerance : float
        Tolerancja |β − 1| dla wzorca "random".

    Przykład
    --------
    >>> analysis = WeibullAnalysis([Observation(t) for t in (100, 200, 300)])
    >>> summary = analysis.run()
    >>> print(summary["beta"], summary["B10"], summary["interval"])
    """

    def __init__(
        self,
        observations: Iterable[Observation],
        *,
        time_horizon: float | None = None,
        num_points: int = DEFAULT_CURVE_POINTS,
        curve_start: float = 0.0,
        r2_warning_threshold: float = R2_WARNING_THRESHOLD,
        pattern_tolerance: float = RANDOM_PATTERN_TOLERANCE,
    ) -> None:
        self._observations = validate_observations(observations)

        if not math.isfinite(curve_start) or curve_start < 0:
            raise InvalidArgumentError(
                f"Początek krzywych musi być skończony i nieujemny, otrzymano {curve_start}."
            )
        if time_horizon is not None and not math.isfinite(time_horizon):
            raise InvalidArgumentError(
                f"Horyzont czasowy musi być skończony, otrzymano {time_horizon}."
            )
        if time_horizon is not None and time_horizon <= curve_start:
            raise InvalidArgumentError(
                f"Horyzont czasowy ({time_horizon}) musi być większy od początku krzywych ({curve_start})."
            )
        if num_points < 1:
            raise InvalidArgumentError(f"Liczba punktów krzywej musi być ≥ 1, otrzymano {num_points}.")

        self.time_horizon = time_horizon
        self.num_points = num_points
        self.curve_start = curve_start
        self.r2_warning_threshold = r2_warning_threshold
        self.pattern_tolerance = pattern_tolerance

        # Wyniki pośrednie (dostępne po run)
        self._df_plot_points: pd.DataFrame | None = None
        self._fitted: FittedParameters | None = None
        self._b_life: BLifeValues | None = None
        self._df_curves: pd.DataFrame | None = None
        self._recommendation: MaintenanceRecommendation | None = None

    # ------------------------------------------------------------------
    # Właściwości
    # ------------------------------------------------------------------

    @property
    def observations(self) -> list[Observation]:
        return list(self._observations)

    @property
    def n_failures(self) -> int:
        return sum(1 for obs in self._observations if obs.is_failure)

    @property
    def n_suspensions(self) -> int:
        return len(self._observations) - self.n_failures

    @property
    def df_observations(self) -> pd.DataFrame:
        """Tabela wejściowa [Time, Kind]."""
        return observations_to_frame(self._observations)

    @property
    def df_plot_points(self) -> pd.DataFrame:
        """Punkty papieru Weibulla [Time, Median_Rank, X, Y]."""
        if self._df_plot_points is None:
            raise RuntimeError("Wywołaj najpierw run().")
        return self._df_plot_points

    @property
    def fitted(self) -> FittedParameters:
        """Dopasowane parametry β, η, R², MTBF."""
        if self._fitted is None:
            raise RuntimeError("Wywołaj najpierw run().")
        return self._fitted

    @property
    def b_life(self) -> BLifeValues:
        if self._b_life is None:
            raise RuntimeError("Wywołaj najpierw run().")
        return self._b_life

    @property
    def df_curves(self) -> pd.DataFrame:
        """Krzywe [Time, Reliability, Failure_Probability, Failure_Rate]."""
        if self._df_curves is None:
            raise RuntimeError("Wywołaj najpierw run().")
        return self._df_curves

    @property
    def recommendation(self) -> MaintenanceRecommendation:
        if self._recommendation is None:
            raise RuntimeError("Wywołaj najpierw run().")
        return self._recommendation

    # ------------------------------------------------------------------
    # Główna metoda
    # ------------------------------------------------------------------

    def run(self) -> dict[str, Any]:
        """
        Uruchamia pełną analizę.

        Zwraca
        -------
        dict[str, Any]
            - beta, eta, r2, mtbf (float)
            - simple_mtbf (float: średnia arytmetyczna czasów awarii)
            - B10, B50 (float)
            - failure_pattern (str: early-life / random / wear-out)
            - interval (float lub None), strategy, reason (str)
            - n_failures, n_suspensions (int)

        Raises
        ------
        InsufficientDataError
            Mniej niż 2 punkty awarii.
        DegenerateDataError
            Regresja nieokreślona (np. identyczne czasy).
        """
        if self.n_suspensions:
            warnings.warn(
                f"Pominięto {self.n_suspensions} zawieszeń (danych cenzurowanych): "
                f"regresja uwzględnia wyłącznie awarie.",
                UserWarning,
                stacklevel=2,
            )

        self._df_plot_points = weibull_plot_points(self._observations)

        fitted = fit(self._observations)
        self._fitted = fitted
        if fitted.r2 < self.r2_warning_threshold:
            warnings.warn(
                f"Słabe dopasowanie rozkładu Weibulla: R² = {fitted.r2:.4f} "
                f"< {self.r2_warning_threshold}.",
                UserWarning,
                stacklevel=2,
            )

        self._b_life = b_life_values(fitted)

        horizon = self.time_horizon
        if horizon is None:
            horizon = max(DEFAULT_HORIZON_ETA_FACTOR * fitted.eta, self.curve_start + fitted.eta)
        self._df_curves = generate_curves(
            fitted, horizon, self.num_points, start=self.curve_start
        )

        self._recommendation = recommended_interval(fitted)

        return {
            **fitted.to_dict(),
            "simple_mtbf": float(self._df_plot_points["Time"].mean()),
            **self._b_life.to_dict(),
            "failure_pattern": classify_failure_pattern(fitted.beta, self.pattern_tolerance),
            **self._recommendation.to_dict(),
            "n_failures": self.n_failures,
            "n_suspensions": self.n_suspensions,
        }
