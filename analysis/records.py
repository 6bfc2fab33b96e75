"""Typed FIR case record model consumed by the Statistics Engine.

Records are produced by the Record Store (`core.records`) and are treated as
immutable for the lifetime of a snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Final

ROLE_ACCUSED: Final[str] = "Accused"
ROLE_VICTIM: Final[str] = "Victim"
ROLE_COMPLAINANT: Final[str] = "Complainant"
ROLE_WITNESS: Final[str] = "Witness"
ROLE_UNKNOWN: Final[str] = "Unknown"

VEHICLE_ROLE_ACCUSED: Final[str] = "Accused Vehicle"

LIFE_STATUS_DEAD: Final[str] = "Dead"
INJURY_STATUS_INJURED: Final[str] = "Injured"


@dataclass(frozen=True, slots=True)
class Occurrence:
    """Place of occurrence for an incident.

    Attributes:
        address: Free-text address, if recorded.
        distance_from_station_km: Distance from the reporting station (km).
        latitude: Latitude, or None when the location is unknown.
        longitude: Longitude, or None when the location is unknown.
    """

    distance_from_station_km: float
    address: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    @property
    def has_location(self) -> bool:
        """Return True when both coordinates are known."""

        return bool(self.latitude) and bool(self.longitude)


@dataclass(frozen=True, slots=True)
class Person:
    """A person named in a case.

    Attributes:
        role: Complainant, Accused, Victim, Witness, Unknown, or None.
        name: Recorded name, if any.
        year_of_birth: Birth year, or None when unknown.
        injury_status: e.g. "Injured".
        life_status: e.g. "Dead".
        address: Recorded address, if any.
        mobile_number: Recorded mobile number, if any.
    """

    role: str | None = None
    name: str | None = None
    year_of_birth: int | None = None
    injury_status: str | None = None
    life_status: str | None = None
    address: str | None = None
    mobile_number: str | None = None

    @property
    def is_dead(self) -> bool:
        return self.life_status == LIFE_STATUS_DEAD

    @property
    def is_injured(self) -> bool:
        return self.injury_status == INJURY_STATUS_INJURED

    @property
    def has_known_birth_year(self) -> bool:
        return self.year_of_birth is not None and self.year_of_birth > 0


@dataclass(frozen=True, slots=True)
class Vehicle:
    """A vehicle named in a case."""

    role: str | None = None
    registration_number: str | None = None
    vehicle_type: str | None = None
    make: str | None = None

    @property
    def is_unregistered_accused(self) -> bool:
        """Return True for an accused vehicle with no registration on file."""

        return self.role == VEHICLE_ROLE_ACCUSED and not self.registration_number


@dataclass(frozen=True, slots=True)
class SectionApplied:
    """A legal section applied to the case."""

    act: str
    section: str


@dataclass(frozen=True, slots=True)
class CaseRecord:
    """One First Information Report.

    Attributes:
        fir_number: FIR number as printed on the report.
        station_id: Reporting police station; used as a grouping key.
        occurrence: Place of occurrence, including distance from the station.
        reported_at: Parsed FIR timestamp, or None when unparseable.
        reported_at_raw: Raw FIR timestamp string.
        start_time: Incident start time (`HH:MM`).
        day_of_week: Weekday name of the incident.
        district: Reporting district, if recorded.
        persons: Persons involved, in report order.
        vehicles: Vehicles involved, in report order.
        keywords: Narrative keywords.
        summary: English narrative summary.
        sections: Legal sections applied.
    """

    fir_number: str
    station_id: str
    occurrence: Occurrence
    reported_at: datetime | None = None
    reported_at_raw: str = ""
    start_time: str = ""
    day_of_week: str = ""
    district: str | None = None
    persons: tuple[Person, ...] = ()
    vehicles: tuple[Vehicle, ...] = ()
    keywords: tuple[str, ...] = ()
    summary: str | None = None
    sections: tuple[SectionApplied, ...] = ()

    @property
    def has_fatality(self) -> bool:
        return any(person.is_dead for person in self.persons)

    @property
    def has_injury(self) -> bool:
        return any(person.is_injured for person in self.persons)

    @property
    def is_hit_and_run(self) -> bool:
        """Return True when any accused vehicle fled unregistered."""

        return any(vehicle.is_unregistered_accused for vehicle in self.vehicles)

    @property
    def has_unnamed_accused(self) -> bool:
        """Return True when an accused person is recorded under an "Unknown" name."""

        return any(
            person.role == ROLE_ACCUSED and person.name and "Unknown" in person.name
            for person in self.persons
        )
