"""Temporal histograms: incidents by hour of day and by weekday."""

from __future__ import annotations

from collections.abc import Iterable

from .dto import DayBucket, HourBucket
from .records import CaseRecord

HOURS_PER_DAY = 24
WEEKDAYS: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


def hour_of(start_time: str) -> int | None:
    """Return the hour component of an `HH:MM` time string.

    Args:
        start_time: Raw incident start time.

    Returns:
        Hour in 0..23, or None when the value is missing or malformed.
    """

    head = start_time.split(":", 1)[0].strip()
    if not head.isdecimal():
        return None
    hour = int(head)
    if hour >= HOURS_PER_DAY:
        return None
    return hour


def weekday_of(day_of_week: str) -> str | None:
    """Return the canonical weekday name, or None when unrecognized."""

    candidate = day_of_week.strip().capitalize()
    if candidate in WEEKDAYS:
        return candidate
    return None


def peak_hours(records: Iterable[CaseRecord]) -> tuple[HourBucket, ...]:
    """Count incidents per start hour.

    Returns:
        Exactly 24 buckets labelled `00:00` through `23:00`, in hour order.
        Hours with no incidents report 0.
    """

    counts = [0] * HOURS_PER_DAY
    for record in records:
        hour = hour_of(record.start_time)
        if hour is not None:
            counts[hour] += 1
    return tuple(
        HourBucket(hour=f"{hour:02d}:00", incidents=count) for hour, count in enumerate(counts)
    )


def day_of_week_pattern(records: Iterable[CaseRecord]) -> tuple[DayBucket, ...]:
    """Count incidents per weekday.

    Returns:
        Exactly 7 buckets, Monday through Sunday. Days with no incidents
        report 0.
    """

    counts = dict.fromkeys(WEEKDAYS, 0)
    for record in records:
        day = weekday_of(record.day_of_week)
        if day is not None:
            counts[day] += 1
    return tuple(DayBucket(day=day, incidents=counts[day]) for day in WEEKDAYS)
