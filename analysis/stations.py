"""Per-station workload and risk rankings.

A single pass over the records builds one `StationTally` per reporting
station; every ranking is derived from that table independently.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .dto import (
    HighRiskStation,
    ResourcePriority,
    StationFatalityRate,
    StationHitAndRun,
    StationResponseDistance,
)
from .rates import clamped_percent, mean, ratio, round_half_up
from .records import CaseRecord

TOP_N = 5
HIGH_RISK_DISTANCE_KM = 20.0

FATALITY_WEIGHT = 50.0
DISTANCE_SCORE_CAP = 30.0
WORKLOAD_SCORE_CAP = 20.0
WORKLOAD_INCIDENTS_PER_POINT = 5.0


@dataclass(slots=True)
class StationTally:
    """Running totals for one station.

    Attributes:
        name: Station id.
        incidents: Records reported by the station.
        fatalities: Persons recorded as dead.
        injuries: Persons recorded as injured.
        distances: Distance from station (km) of each record.
        hit_and_run_cases: Records with an unregistered accused vehicle.
        total_cases: Records considered for the hit-and-run rate.
    """

    name: str
    incidents: int = 0
    fatalities: int = 0
    injuries: int = 0
    distances: list[float] = field(default_factory=list)
    hit_and_run_cases: int = 0
    total_cases: int = 0

    @property
    def fatality_rate(self) -> int:
        return clamped_percent(self.fatalities, self.incidents)

    @property
    def avg_distance_km(self) -> float:
        return round_half_up(mean(self.distances), 1)

    @property
    def hit_and_run_rate(self) -> int:
        return clamped_percent(self.hit_and_run_cases, self.total_cases)


def build_station_table(records: Iterable[CaseRecord]) -> tuple[StationTally, ...]:
    """Tally records per station.

    Args:
        records: Loaded case records.

    Returns:
        One tally per distinct station, in first-encountered order. A station
        only appears once at least one record maps to it.
    """

    table: dict[str, StationTally] = {}
    for record in records:
        tally = table.get(record.station_id)
        if tally is None:
            tally = table[record.station_id] = StationTally(name=record.station_id)

        tally.incidents += 1
        tally.distances.append(record.occurrence.distance_from_station_km)
        for person in record.persons:
            if person.is_dead:
                tally.fatalities += 1
            if person.is_injured:
                tally.injuries += 1
        if record.is_hit_and_run:
            tally.hit_and_run_cases += 1
        tally.total_cases += 1
    return tuple(table.values())


def fatality_rates(table: Sequence[StationTally]) -> tuple[StationFatalityRate, ...]:
    """Rank every station by fatality rate, descending."""

    rows = [
        StationFatalityRate(
            name=tally.name,
            incidents=tally.incidents,
            fatalities=tally.fatalities,
            fatality_rate=tally.fatality_rate,
        )
        for tally in table
        if tally.incidents > 0
    ]
    rows.sort(key=lambda row: row.fatality_rate, reverse=True)
    return tuple(rows)


def response_distances(table: Sequence[StationTally]) -> tuple[StationResponseDistance, ...]:
    """Rank every station by mean distance from the station, descending."""

    rows = [
        StationResponseDistance(
            name=tally.name,
            incidents=tally.incidents,
            avg_distance_km=tally.avg_distance_km,
        )
        for tally in table
        if tally.distances
    ]
    rows.sort(key=lambda row: row.avg_distance_km, reverse=True)
    return tuple(rows)


def hit_and_run_stations(
    table: Sequence[StationTally], *, limit: int = TOP_N
) -> tuple[StationHitAndRun, ...]:
    """Return the stations with the highest hit-and-run rate."""

    rows = [
        StationHitAndRun(
            name=tally.name,
            hit_and_run_rate=tally.hit_and_run_rate,
            total_cases=tally.total_cases,
        )
        for tally in table
        if tally.total_cases > 0
    ]
    rows.sort(key=lambda row: row.hit_and_run_rate, reverse=True)
    return tuple(rows[:limit])


def high_risk_stations(
    table: Sequence[StationTally], *, limit: int = TOP_N
) -> tuple[HighRiskStation, ...]:
    """Return stations with any fatalities or a long average response distance.

    Stations qualify when their fatality rate is above zero or their average
    distance exceeds 20 km; they are ranked by `fatality_rate + avg_distance`.
    """

    rows: list[HighRiskStation] = []
    for tally in table:
        if tally.incidents == 0:
            continue
        row = HighRiskStation(
            name=tally.name,
            fatality_rate=tally.fatality_rate,
            avg_distance_km=tally.avg_distance_km,
        )
        if row.fatality_rate > 0 or row.avg_distance_km > HIGH_RISK_DISTANCE_KM:
            rows.append(row)
    rows.sort(key=lambda row: row.risk_score, reverse=True)
    return tuple(rows[:limit])


def priority_score(tally: StationTally) -> int:
    """Return the composite resource-priority score for a station.

    The score adds a fatality component (up to 50), a distance component
    (half the mean distance, up to 30) and a workload component (one point
    per five incidents, up to 20).
    """

    fatality_score = min(ratio(tally.fatalities, tally.incidents) * FATALITY_WEIGHT, FATALITY_WEIGHT)
    distance_score = min(mean(tally.distances) / 2, DISTANCE_SCORE_CAP)
    workload_score = min(tally.incidents / WORKLOAD_INCIDENTS_PER_POINT, WORKLOAD_SCORE_CAP)
    return int(round_half_up(fatality_score + distance_score + workload_score))


def resource_priority(
    table: Sequence[StationTally], *, limit: int = TOP_N
) -> tuple[ResourcePriority, ...]:
    """Return the stations with the highest resource-priority score."""

    rows = [
        ResourcePriority(name=tally.name, priority_score=priority_score(tally))
        for tally in table
        if tally.incidents > 0
    ]
    rows.sort(key=lambda row: row.priority_score, reverse=True)
    return tuple(rows[:limit])
