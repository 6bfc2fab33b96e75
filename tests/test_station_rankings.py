"""Golden tests for per-station workload and risk rankings."""

from __future__ import annotations

import pytest

from analysis.records import Person, Vehicle
from analysis.stations import (
    build_station_table,
    fatality_rates,
    high_risk_stations,
    hit_and_run_stations,
    priority_score,
    resource_priority,
    response_distances,
)

pytestmark = pytest.mark.unit

DEAD = Person(role="Victim", name="V", life_status="Dead")
INJURED = Person(role="Victim", name="I", injury_status="Injured")


def _by_name(rows) -> dict[str, object]:
    return {row.name: row for row in rows}


def test_two_station_scenario(make_record) -> None:
    """Station A (10 km, 20 km, one death) and B (5 km) produce the expected rates."""

    records = [
        make_record(station="A", distance=10.0, persons=[DEAD]),
        make_record(station="A", distance=20.0),
        make_record(station="B", distance=5.0),
    ]
    table = build_station_table(records)

    rates = _by_name(fatality_rates(table))
    distances = _by_name(response_distances(table))
    assert len(table) == 2
    assert rates["A"].fatality_rate == 50
    assert rates["B"].fatality_rate == 0
    assert distances["A"].avg_distance_km == pytest.approx(15.0)
    assert distances["B"].avg_distance_km == pytest.approx(5.0)


def test_station_table_counts_sum_to_total(make_record) -> None:
    records = [make_record(station=name) for name in ["A", "B", "A", "C", "A"]]
    table = build_station_table(records)

    assert sum(tally.incidents for tally in table) == len(records)
    assert [tally.name for tally in table] == ["A", "B", "C"]


def test_station_table_counts_fatalities_and_injuries(make_record) -> None:
    records = [
        make_record(station="A", persons=[DEAD, INJURED, INJURED]),
        make_record(station="A", persons=[DEAD]),
    ]
    (tally,) = build_station_table(records)
    assert tally.fatalities == 2
    assert tally.injuries == 2
    assert tally.distances == [1.0, 1.0]


def test_fatality_rate_is_capped_at_one_hundred(make_record) -> None:
    """Several deaths in one incident cannot push the rate above 100."""

    table = build_station_table([make_record(station="A", persons=[DEAD, DEAD, DEAD])])
    assert fatality_rates(table)[0].fatality_rate == 100


def test_fatality_rates_sorted_descending_and_stable(make_record) -> None:
    records = [
        make_record(station="Low"),
        make_record(station="High", persons=[DEAD]),
        make_record(station="AlsoLow"),
    ]
    names = [row.name for row in fatality_rates(build_station_table(records))]
    assert names == ["High", "Low", "AlsoLow"]


def test_hit_and_run_requires_unregistered_accused_vehicle(make_record) -> None:
    """Only an accused vehicle without a registration marks a hit-and-run."""

    fled = make_record(station="A", vehicles=[Vehicle(role="Accused Vehicle", registration_number="")])
    registered = make_record(
        station="B", vehicles=[Vehicle(role="Accused Vehicle", registration_number="MH21AB1234")]
    )
    witness = make_record(station="C", vehicles=[Vehicle(role="Witness Vehicle", registration_number=None)])

    rows = _by_name(hit_and_run_stations(build_station_table([fled, registered, witness])))
    assert rows["A"].hit_and_run_rate == 100
    assert rows["B"].hit_and_run_rate == 0
    assert rows["C"].hit_and_run_rate == 0


def test_hit_and_run_rate_rounds_half_up(make_record) -> None:
    fled = Vehicle(role="Accused Vehicle", registration_number=None)
    records = [make_record(station="A", vehicles=[fled])] + [make_record(station="A") for _ in range(7)]
    (row,) = hit_and_run_stations(build_station_table(records))
    # 1/8 = 12.5% rounds up.
    assert row.hit_and_run_rate == 13
    assert row.total_cases == 8


def test_rankings_are_limited_to_top_five(make_record) -> None:
    fled = Vehicle(role="Accused Vehicle", registration_number=None)
    records = [
        make_record(station=f"S{i}", distance=30.0 + i, persons=[DEAD], vehicles=[fled]) for i in range(7)
    ]
    table = build_station_table(records)

    assert len(fatality_rates(table)) == 7
    assert len(response_distances(table)) == 7
    assert len(hit_and_run_stations(table)) == 5
    assert len(high_risk_stations(table)) == 5
    assert len(resource_priority(table)) == 5


def test_high_risk_filters_and_ranks_by_rate_plus_distance(make_record) -> None:
    records = [
        make_record(station="Safe", distance=3.0),
        make_record(station="Far", distance=25.0),
        make_record(station="Fatal", distance=2.0, persons=[DEAD]),
        make_record(station="Fatal", distance=2.0),
    ]
    rows = high_risk_stations(build_station_table(records))

    assert [row.name for row in rows] == ["Fatal", "Far"]
    assert rows[0].fatality_rate == 50
    assert rows[0].risk_score == pytest.approx(52.0)


def test_high_risk_excludes_exactly_twenty_km(make_record) -> None:
    rows = high_risk_stations(build_station_table([make_record(station="Edge", distance=20.0)]))
    assert rows == ()


def test_priority_score_caps_each_component(make_record) -> None:
    """Fatality weight tops out at 50, distance at 30 and workload at 20."""

    records = [make_record(station="A", distance=200.0, persons=[DEAD, DEAD]) for _ in range(150)]
    (tally,) = build_station_table(records)
    assert priority_score(tally) == 100


def test_priority_score_combines_components(make_record) -> None:
    # fatality 1/2*50 = 25, distance 15/2 = 7.5, workload 2/5 = 0.4 -> 32.9 -> 33
    records = [
        make_record(station="A", distance=10.0, persons=[DEAD]),
        make_record(station="A", distance=20.0),
    ]
    (tally,) = build_station_table(records)
    assert priority_score(tally) == 33


def test_empty_collection_has_no_rankings() -> None:
    table = build_station_table([])
    assert table == ()
    assert fatality_rates(table) == ()
    assert resource_priority(table) == ()
