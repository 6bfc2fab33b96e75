"""Pytest fixtures shared across unit and Django integration tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timezone

import pytest

from analysis.records import CaseRecord, Occurrence, Person, Vehicle
from core.records import reset_snapshot


def build_record(
    *,
    station: str = "Station A",
    distance: float = 1.0,
    fir_number: str = "1",
    reported_at: datetime | None = None,
    start_time: str = "10:00",
    day_of_week: str = "Monday",
    persons: Sequence[Person] = (),
    vehicles: Sequence[Vehicle] = (),
    keywords: Sequence[str] = (),
    address: str | None = None,
    latitude: float | None = None,
    longitude: float | None = None,
) -> CaseRecord:
    """Return a CaseRecord with sensible defaults for aggregation tests."""

    if reported_at is None:
        reported_at = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    return CaseRecord(
        fir_number=fir_number,
        station_id=station,
        occurrence=Occurrence(
            distance_from_station_km=distance,
            address=address,
            latitude=latitude,
            longitude=longitude,
        ),
        reported_at=reported_at,
        reported_at_raw=reported_at.isoformat(),
        start_time=start_time,
        day_of_week=day_of_week,
        persons=tuple(persons),
        vehicles=tuple(vehicles),
        keywords=tuple(keywords),
    )


@pytest.fixture
def make_record() -> Callable[..., CaseRecord]:
    """Return the CaseRecord builder."""

    return build_record


@pytest.fixture
def fir_payload() -> list[dict[str, object]]:
    """Return a small decoded FIR document in the dataset's JSON shape."""

    return [
        {
            "firDetails": {
                "firNumber": "0012",
                "policeStation": "Jalna Taluka",
                "district": "Jalna",
                "firTimestamp": "2024-01-14T21:40:00",
            },
            "incidentDetails": {
                "startTime": "20:15",
                "dayOfWeek": "Sunday",
                "placeOfOccurrence": {
                    "address": "Aurangabad-Jalna Road",
                    "distanceFromPS_km": 18.5,
                    "latitude": 19.8671,
                    "longitude": 75.7268,
                },
            },
            "sectionsApplied": [{"act": "IPC", "section": "304A"}],
            "personsInvolved": [
                {"role": "Victim", "name": "Suresh Pawar", "yob": 2001, "status": "Dead", "injuryStatus": None},
                {"role": "Accused", "name": "Unknown driver", "yob": 0, "status": None, "injuryStatus": None},
            ],
            "vehiclesInvolved": [
                {"registrationNumber": None, "vehicleType": "Truck", "make": "Unknown", "role": "Accused Vehicle"},
            ],
            "narrativeSummary": {"summary_en": "Truck hit a motorcycle.", "keywords": ["road accident"]},
        },
        {
            "firDetails": {
                "firNumber": "0003",
                "policeStation": "Kadim Jalna",
                "firTimestamp": "03/02/2024 10:05",
            },
            "incidentDetails": {
                "startTime": "08:30",
                "dayOfWeek": "Saturday",
                "placeOfOccurrence": {"address": "Old Jalna market", "distanceFromPS_km": 2, "latitude": 0, "longitude": 0},
            },
            "personsInvolved": [],
            "vehiclesInvolved": [],
            "narrativeSummary": {"summary_en": "Two-wheeler stolen.", "keywords": ["vehicle theft"]},
        },
    ]


@pytest.fixture
def fresh_snapshot():
    """Discard the Record Store snapshot before and after a test."""

    reset_snapshot()
    yield
    reset_snapshot()


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no Django request cycle or IO.
    - `integration`: tests touching Django views, settings, files or network.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
