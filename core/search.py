"""Case search and case-detail helpers for the search pages."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from analysis.records import (
    ROLE_ACCUSED,
    ROLE_COMPLAINANT,
    ROLE_UNKNOWN,
    ROLE_VICTIM,
    ROLE_WITNESS,
    CaseRecord,
    Person,
)
from analysis.severity import severity


@dataclass(frozen=True, slots=True)
class SearchItem:
    """A single search result row.

    Attributes:
        fir_number: FIR number used for the case-detail link.
        station_id: Reporting station.
        reported_at: Raw FIR timestamp.
        address: Place of occurrence, if recorded.
        keywords: Narrative keywords.
        severity: Severity label ("High", "Medium", "Low").
        persons: Number of persons involved.
        vehicles: Number of vehicles involved.
    """

    fir_number: str
    station_id: str
    reported_at: str
    address: str | None
    keywords: tuple[str, ...]
    severity: str
    persons: int
    vehicles: int

    def as_json(self) -> dict[str, object]:
        """Return a JSON-serializable representation."""

        payload: dict[str, object] = {
            "firNumber": self.fir_number,
            "policeStation": self.station_id,
            "firTimestamp": self.reported_at,
            "keywords": list(self.keywords),
            "severity": self.severity,
            "persons": self.persons,
            "vehicles": self.vehicles,
        }
        if self.address:
            payload["address"] = self.address
        return payload


@dataclass(frozen=True, slots=True)
class PersonView:
    """A de-duplicated person with a derived age."""

    person: Person
    age: int | None

    def as_json(self) -> dict[str, object]:
        return {
            "name": self.person.name,
            "role": self.person.role,
            "age": self.age,
            "injuryStatus": self.person.injury_status,
            "status": self.person.life_status,
            "address": self.person.address,
            "mobileNumber": self.person.mobile_number,
        }


@dataclass(frozen=True)
class CaseDetail:
    """Everything shown on the case-detail page.

    Attributes:
        record: The underlying case record.
        severity: Severity label.
        accused: Persons with the Accused role.
        victims: Persons with the Victim role.
        complainants: Persons with the Complainant role.
        witnesses: Witnesses and persons with an unknown or empty role.
        deceased_count: De-duplicated persons recorded as dead.
        injured_count: De-duplicated persons recorded as injured.
    """

    record: CaseRecord
    severity: str
    accused: tuple[PersonView, ...]
    victims: tuple[PersonView, ...]
    complainants: tuple[PersonView, ...]
    witnesses: tuple[PersonView, ...]
    deceased_count: int
    injured_count: int

    def as_json(self) -> dict[str, object]:
        """Return a JSON-serializable representation."""

        record = self.record
        occurrence = record.occurrence
        return {
            "firNumber": record.fir_number,
            "policeStation": record.station_id,
            "district": record.district,
            "firTimestamp": record.reported_at_raw,
            "startTime": record.start_time,
            "dayOfWeek": record.day_of_week,
            "severity": self.severity,
            "place": {
                "address": occurrence.address,
                "distanceFromPS_km": occurrence.distance_from_station_km,
                "latitude": occurrence.latitude,
                "longitude": occurrence.longitude,
            },
            "accused": [person.as_json() for person in self.accused],
            "victims": [person.as_json() for person in self.victims],
            "complainants": [person.as_json() for person in self.complainants],
            "witnesses": [person.as_json() for person in self.witnesses],
            "deceasedCount": self.deceased_count,
            "injuredCount": self.injured_count,
            "vehicles": [
                {
                    "registrationNumber": vehicle.registration_number,
                    "vehicleType": vehicle.vehicle_type,
                    "make": vehicle.make,
                    "role": vehicle.role,
                }
                for vehicle in record.vehicles
            ],
            "keywords": list(record.keywords),
            "summary": record.summary,
            "sectionsApplied": [{"act": s.act, "section": s.section} for s in record.sections],
        }


def _haystack(record: CaseRecord) -> str:
    """Return the lower-cased text a search query is matched against."""

    parts = [
        record.fir_number,
        record.occurrence.address or "",
        " ".join(person.name or "" for person in record.persons),
        " ".join(vehicle.registration_number or "" for vehicle in record.vehicles),
    ]
    return " ".join(parts).lower()


_LEADING_INTEGER = re.compile(r"[+-]?[0-9]+")


def _fir_sort_key(record: CaseRecord) -> int:
    """Return the leading signed integer of the FIR number, or 0 when there is none."""

    match = _LEADING_INTEGER.match(record.fir_number.strip())
    return int(match.group()) if match else 0


def search_records(records: Iterable[CaseRecord], query: str) -> list[CaseRecord]:
    """Return records matching a free-text query.

    Args:
        records: Loaded case records.
        query: Raw user query; matched case-insensitively as a substring of the
            FIR number, address, person names and vehicle registrations.

    Returns:
        Matching records ordered by numeric FIR number (ascending). An empty
        query matches every record.
    """

    q = query.strip().lower()
    matches = [record for record in records if not q or q in _haystack(record)]
    matches.sort(key=_fir_sort_key)
    return matches


def build_search_items(records: Iterable[CaseRecord], *, query: str, limit: int | None = None) -> list[SearchItem]:
    """Build search result rows for a query.

    Args:
        records: Loaded case records.
        query: Raw user query.
        limit: Optional maximum number of rows.

    Returns:
        Ordered list of search results.
    """

    items = [
        SearchItem(
            fir_number=record.fir_number,
            station_id=record.station_id,
            reported_at=record.reported_at_raw,
            address=record.occurrence.address,
            keywords=record.keywords,
            severity=severity(record).value,
            persons=len(record.persons),
            vehicles=len(record.vehicles),
        )
        for record in search_records(records, query)
    ]
    if limit is not None:
        return items[:limit]
    return items


def find_case(records: Iterable[CaseRecord], fir_number: str) -> CaseRecord | None:
    """Return the record with an exact FIR number, or None."""

    for record in records:
        if record.fir_number == fir_number:
            return record
    return None


def merge_persons(persons: Sequence[Person]) -> list[Person]:
    """De-duplicate persons by name.

    A person named more than once keeps the first occurrence's values, with
    any missing role, injury status, life status, mobile number or address
    filled in from later occurrences.
    """

    merged: list[Person] = []
    index_by_name: dict[str | None, int] = {}
    for person in persons:
        existing_index = index_by_name.get(person.name)
        if existing_index is None:
            index_by_name[person.name] = len(merged)
            merged.append(person)
            continue
        existing = merged[existing_index]
        merged[existing_index] = replace(
            existing,
            role=existing.role or person.role,
            injury_status=existing.injury_status or person.injury_status,
            life_status=existing.life_status or person.life_status,
            mobile_number=existing.mobile_number or person.mobile_number,
            address=existing.address or person.address,
        )
    return merged


def person_age(person: Person, *, reference_year: int) -> int | None:
    """Return a person's age in the reference year, or None when unknown."""

    if not person.has_known_birth_year or person.year_of_birth > reference_year:
        return None
    return reference_year - person.year_of_birth


def case_detail(record: CaseRecord, *, reference_year: int) -> CaseDetail:
    """Build the case-detail view for a record.

    Args:
        record: The case to describe.
        reference_year: Year used to derive ages from birth years.

    Returns:
        CaseDetail with persons grouped by role.
    """

    persons = merge_persons(record.persons)

    def _views(selected: Iterable[Person]) -> tuple[PersonView, ...]:
        return tuple(PersonView(person=p, age=person_age(p, reference_year=reference_year)) for p in selected)

    return CaseDetail(
        record=record,
        severity=severity(record).value,
        accused=_views(p for p in persons if p.role == ROLE_ACCUSED),
        victims=_views(p for p in persons if p.role == ROLE_VICTIM),
        complainants=_views(p for p in persons if p.role == ROLE_COMPLAINANT),
        witnesses=_views(p for p in persons if p.role in (ROLE_WITNESS, ROLE_UNKNOWN, None)),
        deceased_count=sum(1 for p in persons if p.is_dead),
        injured_count=sum(1 for p in persons if p.is_injured),
    )
