"""
errors.py
---------
Hierarchia wyjątków estymatora Weibulla.

Wszystkie wyjątki dziedziczą po ``ValueError``: błędne dane wejściowe
sygnalizujemy tak samo jak w pozostałych modułach obliczeniowych.
"""


class WeibullError(ValueError):
    """Bazowy wyjątek dla błędów analizy Weibulla."""


class InsufficientDataError(WeibullError):
    """Za mało punktów awarii (wymagane co najmniej 2)."""


class InvalidObservationError(WeibullError):
    """Czas obserwacji niedodatni lub nieskończony (NaN / inf)."""


class DegenerateDataError(WeibullError):
    """Regresja nieokreślona matematycznie lub β ≤ 0."""


class InvalidArgumentError(WeibullError):
    """Argument funkcji pochodnej (np. percentyl B-life) poza zakresem."""
