"""
observations.py
---------------
Przygotowanie obserwacji czasu dla estymatora:

    - ręczne wpisy (liczby rozdzielone przecinkami lub znakami nowej linii),
    - dziennik zdarzeń obsługowych → odstępy między zdarzeniami
      (CM = awaria, PM = zawieszenie / dane cenzurowane),
    - przeliczanie jednostek czasu (bazowo: dni).
"""

from __future__ import annotations

import math
import re
import warnings
from typing import Iterable, Sequence

import pandas as pd

from .errors import InvalidArgumentError, InvalidObservationError
from .estimator import Observation, ObservationKind

# ---------------------------------------------------------------------------
# Stałe
# ---------------------------------------------------------------------------

# Współczynnik przeliczenia jednostki na dni
TIME_UNIT_FACTORS: dict[str, float] = {
    "hours": 1.0 / 24.0,
    "days": 1.0,
    "months": 30.0,
    "years": 365.0,
}

DEFAULT_FAILURE_EVENT_TYPES: tuple[str, ...] = ("CM",)

_ENTRY_SEPARATOR = re.compile(r"[\n,]")


# ---------------------------------------------------------------------------
# Jednostki czasu
# ---------------------------------------------------------------------------


def convert_times(
    times: Iterable[float],
    from_unit: str,
    to_unit: str = "days",
) -> list[float]:
    """
    Przelicza czasy między jednostkami (hours, days, months, years).

    Rzuca
    ------
    InvalidArgumentError
        Gdy jednostka nie występuje w TIME_UNIT_FACTORS.
    """
    for unit in (from_unit, to_unit):
        if unit not in TIME_UNIT_FACTORS:
            raise InvalidArgumentError(
                f"Nieznana jednostka czasu '{unit}'. "
                f"Dostępne: {sorted(TIME_UNIT_FACTORS)}"
            )
    factor = TIME_UNIT_FACTORS[from_unit] / TIME_UNIT_FACTORS[to_unit]
    return [t * factor for t in times]


# ---------------------------------------------------------------------------
# Wpisy ręczne
# ---------------------------------------------------------------------------


def parse_time_entries(text: str, unit: str = "days") -> list[Observation]:
    """
    Zamienia ręczny wpis czasów (TBF) na obserwacje awarii w dniach.

    Wartości nieliczbowe, niedodatnie i nieskończone są pomijane
    z ostrzeżeniem; puste pola (np. podwójny przecinek) po cichu.

    Parametry
    ----------
    text : str
        Liczby rozdzielone przecinkami lub znakami nowej linii.
    unit : str
        Jednostka wpisanych wartości (hours, days, months, years).

    Zwraca
    -------
    list[Observation]
        Obserwacje typu FAILURE w kolejności wpisu, czas w dniach.

    Rzuca
    ------
    InvalidObservationError
        Gdy nie udało się odczytać żadnej poprawnej wartości.

    Przykład
    --------
    >>> parse_time_entries("213\\n28, 56\\n134")
    """
    values: list[float] = []
    rejected: list[str] = []
    for token in _ENTRY_SEPARATOR.split(text):
        token = token.strip()
        if not token:
            continue
        try:
            value = float(token)
        except ValueError:
            rejected.append(token)
            continue
        if not math.isfinite(value) or value <= 0:
            rejected.append(token)
            continue
        values.append(value)

    if rejected:
        warnings.warn(
            f"Pominięto niepoprawne wpisy czasu: {rejected}.",
            UserWarning,
            stacklevel=2,
        )
    if not values:
        raise InvalidObservationError("Brak poprawnych wartości czasu we wpisie.")

    return [Observation(t, ObservationKind.FAILURE) for t in convert_times(values, unit)]


# ---------------------------------------------------------------------------
# Dziennik zdarzeń obsługowych
# ---------------------------------------------------------------------------


def observations_from_events(
    df_events: pd.DataFrame,
    *,
    date_col: str = "Event_Date",
    type_col: str = "Event_Type",
    failure_types: Sequence[str] = DEFAULT_FAILURE_EVENT_TYPES,
) -> list[Observation]:
    """
    Wyznacza obserwacje z chronologicznego dziennika zdarzeń obsługowych.

    Każde zdarzenie (poza pierwszym, które tylko uruchamia zegar) daje
    obserwację równą odstępowi w dniach od poprzedniego zdarzenia.
    Zdarzenia korekcyjne (CM) są awariami, pozostałe (np. PM)
    zawieszeniami.

    Parametry
    ----------
    df_events : pd.DataFrame
        Dziennik z kolumnami daty i typu zdarzenia (nazwy konfigurowalne).
    date_col : str
        Kolumna z datą zdarzenia (parsowana przez pd.to_datetime).
    type_col : str
        Kolumna z typem zdarzenia, np. "CM" / "PM".
    failure_types : Sequence[str]
        Typy zdarzeń traktowane jako awarie.

    Zwraca
    -------
    list[Observation]
        Obserwacje w kolejności chronologicznej.

    Rzuca
    ------
    KeyError
        Gdy brakuje wymaganych kolumn.
    InvalidObservationError
        Gdy kolumna dat zawiera wartości nieparsowalne.
    """
    required = {date_col, type_col}
    missing = required - set(df_events.columns)
    if missing:
        raise KeyError(f"Brakujące kolumny w DataFrame: {missing}")

    df = df_events[[date_col, type_col]].copy()
    df[date_col] = pd.to_datetime(df[date_col], errors="coerce")
    if df[date_col].isna().any():
        raise InvalidObservationError(
            f"Kolumna '{date_col}' zawiera niepoprawne lub puste daty."
        )

    df = df.sort_values(date_col, kind="stable").reset_index(drop=True)
    df["Gap_Days"] = df[date_col].diff().dt.total_seconds() / 86400.0
    df = df.iloc[1:]

    # Zdarzenia tego samego dnia/chwili dają odstęp 0 → ln(0) nieokreślony
    zero_mask = df["Gap_Days"] <= 0
    if zero_mask.any():
        warnings.warn(
            f"Pominięto {int(zero_mask.sum())} zdarzeń o zerowym odstępie czasu.",
            UserWarning,
            stacklevel=2,
        )
        df = df[~zero_mask]

    is_failure = df[type_col].astype(str).str.strip().isin(set(failure_types))
    return [
        Observation(
            float(gap),
            ObservationKind.FAILURE if failure else ObservationKind.SUSPENSION,
        )
        for gap, failure in zip(df["Gap_Days"], is_failure)
    ]


def observations_to_frame(observations: Iterable[Observation]) -> pd.DataFrame:
    """Tabela obserwacji: kolumny [Time, Kind] (Kind = 'failure' / 'suspension')."""
    rows = [{"Time": obs.time, "Kind": ObservationKind(obs.kind).value} for obs in observations]
    return pd.DataFrame(rows, columns=["Time", "Kind"])
