"""DTO types returned by the Statistics Engine.

DTOs are plain data containers used to transport aggregates to the
presentation layer. They intentionally avoid any Django dependencies. Each DTO
exposes `as_json()` using the camelCase keys the dashboard front-end expects.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Severity(StrEnum):
    """Case severity derived from the persons involved."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class AgeGroup(StrEnum):
    """Age buckets used by the demographics histogram."""

    UNDER_18 = "Under 18"
    AGE_18_29 = "18-29"
    AGE_30_44 = "30-44"
    AGE_45_59 = "45-59"
    AGE_60_PLUS = "60+"


@dataclass(frozen=True, slots=True)
class DashboardStats:
    """Headline numbers shown at the top of the dashboard.

    Attributes:
        total_incidents: Number of records.
        total_stations: Number of distinct reporting stations.
        peak_month_incidents: Record count of the busiest calendar month.
        top_keyword: Most frequent narrative keyword, or "Unknown".
        avg_distance_km: Mean distance from station, one decimal place.
    """

    total_incidents: int
    total_stations: int
    peak_month_incidents: int
    top_keyword: str
    avg_distance_km: float

    def as_json(self) -> dict[str, object]:
        return {
            "totalIncidents": self.total_incidents,
            "totalStations": self.total_stations,
            "peakMonthIncidents": self.peak_month_incidents,
            "topKeyword": self.top_keyword,
            "avgDistanceKm": self.avg_distance_km,
        }


@dataclass(frozen=True, slots=True)
class StationFatalityRate:
    name: str
    incidents: int
    fatalities: int
    fatality_rate: int

    def as_json(self) -> dict[str, object]:
        return {
            "name": self.name,
            "totalIncidents": self.incidents,
            "fatalities": self.fatalities,
            "fatalityRate": self.fatality_rate,
        }


@dataclass(frozen=True, slots=True)
class StationResponseDistance:
    name: str
    incidents: int
    avg_distance_km: float

    def as_json(self) -> dict[str, object]:
        return {"name": self.name, "incidents": self.incidents, "avgDistance": self.avg_distance_km}


@dataclass(frozen=True, slots=True)
class StationHitAndRun:
    name: str
    hit_and_run_rate: int
    total_cases: int

    def as_json(self) -> dict[str, object]:
        return {"name": self.name, "hitAndRunRate": self.hit_and_run_rate, "totalCases": self.total_cases}


@dataclass(frozen=True, slots=True)
class HighRiskStation:
    """A station flagged for fatalities or long response distances."""

    name: str
    fatality_rate: int
    avg_distance_km: float

    @property
    def risk_score(self) -> float:
        return self.fatality_rate + self.avg_distance_km

    def as_json(self) -> dict[str, object]:
        return {"name": self.name, "fatalityRate": self.fatality_rate, "avgDistance": self.avg_distance_km}


@dataclass(frozen=True, slots=True)
class ResourcePriority:
    name: str
    priority_score: int

    def as_json(self) -> dict[str, object]:
        return {"name": self.name, "priorityScore": self.priority_score}


@dataclass(frozen=True, slots=True)
class HourBucket:
    hour: str
    incidents: int

    def as_json(self) -> dict[str, object]:
        return {"hour": self.hour, "incidents": self.incidents}


@dataclass(frozen=True, slots=True)
class DayBucket:
    day: str
    incidents: int

    def as_json(self) -> dict[str, object]:
        return {"day": self.day, "incidents": self.incidents}


@dataclass(frozen=True, slots=True)
class AgeGroupCount:
    group: AgeGroup
    count: int

    def as_json(self) -> dict[str, object]:
        return {"range": self.group.value, "count": self.count}


@dataclass(frozen=True, slots=True)
class CaseComplexity:
    """Case-complexity metrics across the whole collection.

    Attributes:
        avg_people_per_case: Mean persons per record, one decimal place.
        unknown_suspect_rate: Percent of records with an unnamed accused.
        multi_vehicle_rate: Percent of records with more than one vehicle.
    """

    avg_people_per_case: float
    unknown_suspect_rate: int
    multi_vehicle_rate: int


@dataclass(frozen=True, slots=True)
class MapPoint:
    """A located incident for map markers and the heatmap layer."""

    fir_number: str
    station_id: str
    latitude: float
    longitude: float
    intensity: float
    severity: Severity
    category: str

    def as_json(self) -> dict[str, object]:
        return {
            "firNumber": self.fir_number,
            "policeStation": self.station_id,
            "lat": self.latitude,
            "lng": self.longitude,
            "intensity": self.intensity,
            "severity": self.severity.value,
            "category": self.category,
        }


@dataclass(frozen=True)
class StrategicAnalytics:
    """Every aggregate rendered on the analytics page.

    Attributes:
        fatality_rates: All stations by fatality rate, descending.
        response_distances: All stations by average distance, descending.
        high_risk_stations: Top 5 stations by fatality rate + distance.
        hit_and_run_stations: Top 5 stations by hit-and-run rate.
        resource_priority: Top 5 stations by composite priority score.
        peak_hours: 24 hourly buckets, 00:00 to 23:00.
        day_of_week: 7 daily buckets, Monday to Sunday.
        complexity: Case-complexity metrics.
        age_groups: Non-empty age buckets by count, descending.
    """

    fatality_rates: tuple[StationFatalityRate, ...] = ()
    response_distances: tuple[StationResponseDistance, ...] = ()
    high_risk_stations: tuple[HighRiskStation, ...] = ()
    hit_and_run_stations: tuple[StationHitAndRun, ...] = ()
    resource_priority: tuple[ResourcePriority, ...] = ()
    peak_hours: tuple[HourBucket, ...] = ()
    day_of_week: tuple[DayBucket, ...] = ()
    complexity: CaseComplexity = CaseComplexity(0.0, 0, 0)
    age_groups: tuple[AgeGroupCount, ...] = ()

    def as_json(self) -> dict[str, object]:
        """Return a JSON-serializable representation."""

        return {
            "fatalityRates": [row.as_json() for row in self.fatality_rates],
            "responseDistances": [row.as_json() for row in self.response_distances],
            "highRiskStations": [row.as_json() for row in self.high_risk_stations],
            "hitAndRunStations": [row.as_json() for row in self.hit_and_run_stations],
            "resourcePriority": [row.as_json() for row in self.resource_priority],
            "peakHours": [row.as_json() for row in self.peak_hours],
            "dayOfWeekPatterns": [row.as_json() for row in self.day_of_week],
            "avgPeoplePerCase": self.complexity.avg_people_per_case,
            "unknownSuspectRate": self.complexity.unknown_suspect_rate,
            "multiVehicleRate": self.complexity.multi_vehicle_rate,
            "ageGroups": [row.as_json() for row in self.age_groups],
        }
