"""Parsing utilities for the FIR JSON dataset.

The dataset is a JSON array of FIR objects with nested camelCase sections
(`firDetails`, `incidentDetails`, `personsInvolved`, ...). Parsing follows two
rules:

- A record without a police station or a usable distance from the station is
  malformed. It is skipped and reported; the rest of the document still loads.
- Every other field is best-effort: missing or malformed values become None
  or empty instead of failing.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from analysis.records import CaseRecord, Occurrence, Person, SectionApplied, Vehicle


class RecordParseError(ValueError):
    """Raised when the decoded document or a record does not have the FIR shape."""


@dataclass(frozen=True, slots=True)
class ParsedRecords:
    """Outcome of parsing a dataset document.

    Attributes:
        records: Well-formed records in document order.
        skipped: One message per malformed record that was left out.
    """

    records: tuple[CaseRecord, ...]
    skipped: tuple[str, ...] = ()


def parse_records(payload: Any) -> ParsedRecords:
    """Parse a decoded JSON document into case records.

    Args:
        payload: The decoded JSON document (expected to be a list of objects).

    Returns:
        ParsedRecords holding the well-formed records and a message for each
        record that was skipped.

    Raises:
        RecordParseError: When the document itself is not a JSON array.
    """

    if not isinstance(payload, list):
        raise RecordParseError(f"Expected a JSON array of records, got {type(payload).__name__}.")

    records: list[CaseRecord] = []
    skipped: list[str] = []
    for index, raw in enumerate(payload):
        if not isinstance(raw, Mapping):
            skipped.append(f"Record {index} is not an object.")
            continue
        try:
            records.append(parse_record(raw))
        except RecordParseError as exc:
            skipped.append(f"Record {index}: {exc}")
    return ParsedRecords(records=tuple(records), skipped=tuple(skipped))


def parse_record(raw: Mapping[str, Any]) -> CaseRecord:
    """Parse one FIR object into a CaseRecord.

    Args:
        raw: One element of the dataset array.

    Returns:
        CaseRecord with typed fields.

    Raises:
        RecordParseError: When the police station or distance is missing.
    """

    fir_details = _section(raw, "firDetails")
    incident = _section(raw, "incidentDetails")
    place = _section(incident, "placeOfOccurrence")
    narrative = _section(raw, "narrativeSummary")

    station_id = _parse_text(fir_details.get("policeStation"))
    if station_id is None:
        raise RecordParseError("missing firDetails.policeStation.")

    distance = _parse_float(place.get("distanceFromPS_km"))
    if distance is None or distance < 0:
        raise RecordParseError("missing or negative placeOfOccurrence.distanceFromPS_km.")

    reported_at_raw = _parse_text(fir_details.get("firTimestamp")) or ""

    return CaseRecord(
        fir_number=_parse_text(fir_details.get("firNumber")) or "",
        station_id=station_id,
        district=_parse_text(fir_details.get("district")),
        reported_at=parse_timestamp(reported_at_raw),
        reported_at_raw=reported_at_raw,
        start_time=_parse_text(incident.get("startTime")) or "",
        day_of_week=_parse_text(incident.get("dayOfWeek")) or "",
        occurrence=Occurrence(
            distance_from_station_km=distance,
            address=_parse_text(place.get("address")),
            latitude=_parse_coordinate(place.get("latitude")),
            longitude=_parse_coordinate(place.get("longitude")),
        ),
        persons=tuple(_parse_person(item) for item in _items(raw, "personsInvolved")),
        vehicles=tuple(_parse_vehicle(item) for item in _items(raw, "vehiclesInvolved")),
        keywords=tuple(
            keyword
            for keyword in (_parse_text(value) for value in _list(narrative.get("keywords")))
            if keyword is not None
        ),
        summary=_parse_text(narrative.get("summary_en")),
        sections=tuple(_parse_section(item) for item in _items(raw, "sectionsApplied")),
    )


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an FIR timestamp into a timezone-aware datetime.

    Values carrying an explicit offset keep it, so the calendar date stays the
    one written in the report. Naive values are taken as UTC.
    """

    if not value:
        return None

    value = value.strip()
    formats = [
        "%Y-%m-%d %H:%M:%S",
        "%Y-%m-%d %H:%M",
        "%Y-%m-%d",
        "%d/%m/%Y %H:%M:%S",
        "%d/%m/%Y %H:%M",
        "%d/%m/%Y",
        "%d-%m-%Y %H:%M",
        "%d-%m-%Y",
    ]
    for fmt in formats:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return parsed.replace(tzinfo=timezone.utc)

    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_person(raw: Mapping[str, Any]) -> Person:
    year_of_birth = _parse_int(raw.get("yob"))
    return Person(
        role=_parse_text(raw.get("role")),
        name=_parse_text(raw.get("name")),
        year_of_birth=year_of_birth if year_of_birth is not None and year_of_birth > 0 else None,
        injury_status=_parse_text(raw.get("injuryStatus")),
        life_status=_parse_text(raw.get("status")),
        address=_parse_text(raw.get("address")),
        mobile_number=_parse_text(raw.get("mobileNumber")),
    )


def _parse_vehicle(raw: Mapping[str, Any]) -> Vehicle:
    return Vehicle(
        role=_parse_text(raw.get("role")),
        registration_number=_parse_text(raw.get("registrationNumber")),
        vehicle_type=_parse_text(raw.get("vehicleType")),
        make=_parse_text(raw.get("make")),
    )


def _parse_section(raw: Mapping[str, Any]) -> SectionApplied:
    return SectionApplied(
        act=_parse_text(raw.get("act")) or "",
        section=_parse_text(raw.get("section")) or "",
    )


def _section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    """Return a nested object, or an empty mapping when absent or malformed."""

    value = raw.get(key)
    if isinstance(value, Mapping):
        return value
    return {}


def _list(value: Any) -> list[Any]:
    if isinstance(value, list):
        return value
    return []


def _items(raw: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    """Return the object elements of a nested array, skipping anything else."""

    return [item for item in _list(raw.get(key)) if isinstance(item, Mapping)]


def _parse_text(value: Any) -> str | None:
    """Return a trimmed string, or None when empty or not a scalar."""

    if value is None or isinstance(value, (dict, list, bool)):
        return None
    cleaned = str(value).strip()
    if not cleaned:
        return None
    return cleaned


def _parse_float(value: Any) -> float | None:
    """Parse a finite float if possible."""

    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = float(str(value).strip().replace(",", ""))
    except ValueError:
        return None
    if not math.isfinite(parsed):
        return None
    return parsed


def _parse_int(value: Any) -> int | None:
    """Parse a base-10 integer if possible."""

    parsed = _parse_float(value)
    if parsed is None or not parsed.is_integer():
        return None
    return int(parsed)


def _parse_coordinate(value: Any) -> float | None:
    """Parse a coordinate; 0 is the dataset's "unknown location" sentinel."""

    parsed = _parse_float(value)
    if parsed is None or parsed == 0:
        return None
    return parsed
