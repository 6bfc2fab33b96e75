"""Severity classification and map points for incident markers.

Severity drives badge colours in search results and the intensity of the
heatmap layer on the incident map.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .dto import MapPoint, Severity
from .records import CaseRecord

# Jalna district centre, used when no record carries a known location.
DEFAULT_MAP_CENTER: tuple[float, float] = (19.8333, 75.8833)

_BASE_INTENSITY = {Severity.HIGH: 3.0, Severity.MEDIUM: 2.0, Severity.LOW: 1.0}
_PERSON_INTENSITY_STEP = 0.2
_PERSON_INTENSITY_CAP = 1.0

_CATEGORY_MARKERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("accident", ("accident", "collision")),
    ("theft", ("theft", "robbery")),
    ("violence", ("assault", "violence")),
)


def severity(record: CaseRecord) -> Severity:
    """Classify a case: High with a fatality, Medium with an injury, else Low."""

    if record.has_fatality:
        return Severity.HIGH
    if record.has_injury:
        return Severity.MEDIUM
    return Severity.LOW


def heat_intensity(record: CaseRecord) -> float:
    """Return the heatmap weight for a case.

    The base weight comes from severity (3/2/1); every person involved adds
    0.2, up to one extra point.
    """

    extra = min(len(record.persons) * _PERSON_INTENSITY_STEP, _PERSON_INTENSITY_CAP)
    return _BASE_INTENSITY[severity(record)] + extra


def incident_category(keywords: Iterable[str]) -> str:
    """Return the marker category for a keyword list.

    Categories are checked in priority order: accident, theft, violence.
    """

    keywords = tuple(keywords)
    for category, markers in _CATEGORY_MARKERS:
        if any(marker in keyword for keyword in keywords for marker in markers):
            return category
    return "other"


def map_points(records: Iterable[CaseRecord]) -> tuple[MapPoint, ...]:
    """Build a map point for every record with a known location."""

    points: list[MapPoint] = []
    for record in records:
        occurrence = record.occurrence
        if not occurrence.has_location:
            continue
        points.append(
            MapPoint(
                fir_number=record.fir_number,
                station_id=record.station_id,
                latitude=float(occurrence.latitude),
                longitude=float(occurrence.longitude),
                intensity=heat_intensity(record),
                severity=severity(record),
                category=incident_category(record.keywords),
            )
        )
    return tuple(points)


def map_center(points: Sequence[MapPoint]) -> tuple[float, float]:
    """Return the mean coordinate of the points, or the district centre."""

    if not points:
        return DEFAULT_MAP_CENTER
    latitude = sum(point.latitude for point in points) / len(points)
    longitude = sum(point.longitude for point in points) / len(points)
    return (latitude, longitude)
