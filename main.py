"""
main.py – Demo Kalkulatora Weibulla (regresja rang medianowych)
================================================================
Uruchom: python main.py
"""

import warnings

import pandas as pd

from weibull_fit import (
    WeibullAnalysis,
    WeibullError,
    observations_from_events,
    optimize_maintenance_interval,
    parse_time_entries,
    reliability,
    run_simulation,
)

# ---------------------------------------------------------------------------
# Przykładowe dane (symulacja)
# ---------------------------------------------------------------------------

MANUAL_ENTRY = """
213
28, 56
134
367, 92
181
"""

MAINTENANCE_LOG = pd.DataFrame({
    "Event_Date": [
        "2023-01-04", "2023-03-18", "2023-06-02", "2023-07-21",
        "2023-10-30", "2024-01-15", "2024-02-27", "2024-06-11",
        "2024-09-03", "2024-12-20",
    ],
    "Event_Type": ["CM", "CM", "PM", "CM", "CM", "PM", "CM", "CM", "CM", "PM"],
})

CHECK_TIMES = [30.0, 90.0, 180.0, 365.0]
SIMULATION_SEED = 2024


def print_separator(char: str = "─", width: int = 80) -> None:
    print(char * width)


def print_report(title: str, analysis: WeibullAnalysis) -> None:
    print()
    print("=" * 80)
    print(f"  {title}")
    print("=" * 80)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        summary = analysis.run()
    for w in caught:
        print(f"  ⚠ {w.message}")

    print(f"\n📋 PUNKTY PAPIERU WEIBULLA (n = {summary['n_failures']})\n")
    print(f"{'Czas [dni]':>12} | {'Ranga F_i':>10} | {'ln(t)':>8} | {'ln(-ln(1-F))':>13}")
    print_separator(width=55)
    for _, row in analysis.df_plot_points.iterrows():
        print(f"{row['Time']:>12.1f} | {row['Median_Rank']:>10.4f} | {row['X']:>8.4f} | {row['Y']:>13.4f}")

    print(f"\n🔢 PARAMETRY ROZKŁADU\n")
    print(f"  β (kształt)        = {summary['beta']:.4f}")
    print(f"  η (skala)          = {summary['eta']:.2f} dni")
    print(f"  R²                 = {summary['r2']:.4f}")
    print(f"  MTBF (Weibull)     = {summary['mtbf']:.2f} dni")
    print(f"  MTBF (średnia)     = {summary['simple_mtbf']:.2f} dni")
    print(f"  B10                = {summary['B10']:.2f} dni")
    print(f"  B50                = {summary['B50']:.2f} dni")
    print(f"  Wzorzec awarii     = {summary['failure_pattern']}")

    print(f"\n📊 NIEZAWODNOŚĆ R(t)\n")
    for t in CHECK_TIMES:
        print(f"  R({t:>5.0f} dni) = {reliability(analysis.fitted, t):>7.2%}")

    print(f"\n✅ ZALECENIE\n")
    print(f"  {summary['strategy']}: {summary['reason']}")

    plan = optimize_maintenance_interval(
        analysis.fitted,
        pm_cost=500.0,
        failure_cost=5000.0,
        time_horizon=3650.0,
    )
    interval = "∞" if plan.is_run_to_failure else f"{plan.optimal_interval:.1f} dni"
    print(f"\n💰 OPTYMALIZACJA KOSZTOWA (C_PM=500, C_CM=5000, T=10 lat)\n")
    print(f"  Interwał optymalny = {interval}")
    print(f"  Koszt całkowity    = {plan.optimal_cost:,.0f}")

    pm_interval = None if plan.is_run_to_failure else plan.optimal_interval
    sim = run_simulation(
        analysis.fitted,
        time_horizon=3650.0,
        pm_cost=500.0,
        failure_cost=5000.0,
        pm_interval=pm_interval,
        seed=SIMULATION_SEED,
    )
    print(f"\n🎲 SYMULACJA MONTE CARLO ({sim.number_of_runs} przebiegów, interwał = {interval})\n")
    print(f"  Średni koszt       = {sim.average_cost:,.0f}")
    print(f"  Średnia l. awarii  = {sim.average_failures:.2f}")


def run_demo() -> None:
    try:
        manual = parse_time_entries(MANUAL_ENTRY, unit="days")
        print_report("ANALIZA WEIBULLA – WPIS RĘCZNY (TBF)", WeibullAnalysis(manual))

        from_log = observations_from_events(MAINTENANCE_LOG)
        print_report("ANALIZA WEIBULLA – DZIENNIK ZDARZEŃ (CM / PM)", WeibullAnalysis(from_log))
    except WeibullError as e:
        print(f"\n[!] Błąd analizy: {e}")

    print()
    print("=" * 80)
    print("  Koniec analizy Weibulla.")
    print("=" * 80)
    print()


if __name__ == "__main__":
    run_demo()
