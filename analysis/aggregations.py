"""Aggregation helpers for the Statistics Engine.

This module provides the dashboard summary and the record filters used by the
map and overview pages, without introducing Django dependencies.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import datetime

from .dto import DashboardStats
from .rates import mean, round_half_up
from .records import CaseRecord

UNKNOWN_KEYWORD = "Unknown"


def summarize(records: Sequence[CaseRecord]) -> DashboardStats:
    """Compute the headline dashboard numbers.

    Args:
        records: Loaded case records.

    Returns:
        DashboardStats. An empty collection yields zeros and an "Unknown"
        top keyword.
    """

    return DashboardStats(
        total_incidents=len(records),
        total_stations=len({record.station_id for record in records}),
        peak_month_incidents=peak_month_incidents(records),
        top_keyword=top_keyword(records),
        avg_distance_km=round_half_up(
            mean(record.occurrence.distance_from_station_km for record in records), 1
        ),
    )


def peak_month_incidents(records: Iterable[CaseRecord]) -> int:
    """Return the record count of the busiest calendar month.

    Records without a parseable FIR timestamp are not counted.
    """

    months: Counter[tuple[int, int]] = Counter()
    for record in records:
        if record.reported_at is None:
            continue
        months[(record.reported_at.year, record.reported_at.month)] += 1
    if not months:
        return 0
    return max(months.values())


def top_keyword(records: Iterable[CaseRecord]) -> str:
    """Return the most frequent keyword, ties going to the first one seen."""

    counts: Counter[str] = Counter()
    for record in records:
        counts.update(record.keywords)
    # most_common keeps insertion order among equal counts.
    ranked = counts.most_common(1)
    if not ranked:
        return UNKNOWN_KEYWORD
    return ranked[0][0]


def unique_stations(records: Iterable[CaseRecord]) -> list[str]:
    """Return distinct station ids, sorted."""

    return sorted({record.station_id for record in records})


def unique_keywords(records: Iterable[CaseRecord]) -> list[str]:
    """Return distinct keywords across all records, sorted."""

    keywords: set[str] = set()
    for record in records:
        keywords.update(record.keywords)
    return sorted(keywords)


def filter_records(
    records: Iterable[CaseRecord],
    *,
    station: str | None = None,
    keyword: str | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
) -> tuple[CaseRecord, ...]:
    """Filter records by station, keyword and an inclusive FIR date range.

    Args:
        records: Loaded case records.
        station: Optional exact station id.
        keyword: Optional keyword that must appear in the record's keywords.
        start: Optional inclusive lower bound on `reported_at`.
        end: Optional inclusive upper bound on `reported_at`.

    Returns:
        Matching records in input order. When a date bound is given, records
        without a parseable timestamp are excluded.
    """

    filtered: list[CaseRecord] = []
    for record in records:
        if station and record.station_id != station:
            continue
        if keyword and keyword not in record.keywords:
            continue
        if start is not None or end is not None:
            reported_at = record.reported_at
            if reported_at is None:
                continue
            if start is not None and reported_at < start:
                continue
            if end is not None and reported_at > end:
                continue
        filtered.append(record)
    return tuple(filtered)
