"""Orchestration entry points for the Statistics Engine.

The Statistics Engine is a pure, non-Django module that accepts in-memory
records and returns DTOs. It must not import Django, log, or mutate its input.
"""

from __future__ import annotations

from collections.abc import Sequence

from .demographics import DEFAULT_REFERENCE_YEAR, age_groups, case_complexity
from .dto import StrategicAnalytics
from .records import CaseRecord
from .stations import (
    build_station_table,
    fatality_rates,
    high_risk_stations,
    hit_and_run_stations,
    resource_priority,
    response_distances,
)
from .temporal import day_of_week_pattern, peak_hours


def analyze_records(
    records: Sequence[CaseRecord],
    *,
    reference_year: int = DEFAULT_REFERENCE_YEAR,
) -> StrategicAnalytics:
    """Compute every aggregate shown on the analytics page.

    Args:
        records: Loaded case records.
        reference_year: Year used to derive ages from birth years.

    Returns:
        StrategicAnalytics. Calling twice with the same records yields equal
        results; an empty collection yields empty rankings, zero-filled
        histograms and zero rates.
    """

    table = build_station_table(records)
    return StrategicAnalytics(
        fatality_rates=fatality_rates(table),
        response_distances=response_distances(table),
        high_risk_stations=high_risk_stations(table),
        hit_and_run_stations=hit_and_run_stations(table),
        resource_priority=resource_priority(table),
        peak_hours=peak_hours(records),
        day_of_week=day_of_week_pattern(records),
        complexity=case_complexity(records),
        age_groups=age_groups(records, reference_year=reference_year),
    )
