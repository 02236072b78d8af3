"""
Weibull Calculator Package
Estymacja parametrów rozkładu Weibulla (regresja rang medianowych) oraz
wskaźniki niezawodności: MTBF, B-life, R(t), F(t), h(t), interwał PM.
"""

from .analysis import WeibullAnalysis

from .errors import (
    WeibullError,
    InsufficientDataError,
    InvalidObservationError,
    DegenerateDataError,
    InvalidArgumentError,
)
from .gamma import gamma
from .estimator import (
    fit,
    median_ranks,
    weibull_plot_points,
    Observation,
    ObservationKind,
    FittedParameters,
)
from .distribution import (
    b_life,
    b_life_values,
    reliability,
    cumulative_failure_probability,
    failure_rate,
    reliability_curve,
    failure_probability_curve,
    failure_rate_curve,
    generate_curves,
    BLifeValues,
)
from .maintenance import (
    classify_failure_pattern,
    recommended_interval,
    reliability_based_interval,
    calculate_total_cost,
    optimize_maintenance_interval,
    MaintenanceRecommendation,
    MaintenancePlan,
)
from .simulation import (
    weibull_inverse_cdf,
    run_simulation,
    SimulationResult,
)
from .observations import (
    convert_times,
    parse_time_entries,
    observations_from_events,
    observations_to_frame,
    TIME_UNIT_FACTORS,
)

__all__ = [
    "WeibullAnalysis",
    # Wyjątki
    "WeibullError",
    "InsufficientDataError",
    "InvalidObservationError",
    "DegenerateDataError",
    "InvalidArgumentError",
    # Estymacja
    "gamma",
    "fit",
    "median_ranks",
    "weibull_plot_points",
    "Observation",
    "ObservationKind",
    "FittedParameters",
    # Rozkład
    "b_life",
    "b_life_values",
    "reliability",
    "cumulative_failure_probability",
    "failure_rate",
    "reliability_curve",
    "failure_probability_curve",
    "failure_rate_curve",
    "generate_curves",
    "BLifeValues",
    # Obsługa
    "classify_failure_pattern",
    "recommended_interval",
    "reliability_based_interval",
    "calculate_total_cost",
    "optimize_maintenance_interval",
    "MaintenanceRecommendation",
    "MaintenancePlan",
    # Symulacja
    "weibull_inverse_cdf",
    "run_simulation",
    "SimulationResult",
    # Dane wejściowe
    "convert_times",
    "parse_time_entries",
    "observations_from_events",
    "observations_to_frame",
    "TIME_UNIT_FACTORS",
]
