"""Case-complexity and age demographics."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from .dto import AgeGroup, AgeGroupCount, CaseComplexity
from .rates import clamped_percent, ratio, round_half_up
from .records import CaseRecord

DEFAULT_REFERENCE_YEAR = 2024


def case_complexity(records: Sequence[CaseRecord]) -> CaseComplexity:
    """Compute people-per-case, unknown-suspect and multi-vehicle metrics.

    Args:
        records: Loaded case records.

    Returns:
        CaseComplexity; every field is 0 for an empty collection.
    """

    total = len(records)
    total_persons = sum(len(record.persons) for record in records)
    unnamed_accused = sum(1 for record in records if record.has_unnamed_accused)
    multi_vehicle = sum(1 for record in records if len(record.vehicles) > 1)
    return CaseComplexity(
        avg_people_per_case=round_half_up(ratio(total_persons, total), 1),
        unknown_suspect_rate=clamped_percent(unnamed_accused, total),
        multi_vehicle_rate=clamped_percent(multi_vehicle, total),
    )


def age_group_for(age: int) -> AgeGroup:
    if age < 18:
        return AgeGroup.UNDER_18
    if age < 30:
        return AgeGroup.AGE_18_29
    if age < 45:
        return AgeGroup.AGE_30_44
    if age < 60:
        return AgeGroup.AGE_45_59
    return AgeGroup.AGE_60_PLUS


def age_groups(
    records: Sequence[CaseRecord], *, reference_year: int = DEFAULT_REFERENCE_YEAR
) -> tuple[AgeGroupCount, ...]:
    """Bucket every person with a known birth year by age.

    Args:
        records: Loaded case records.
        reference_year: Year ages are measured against. This is the dataset's
            reference year, not the current year, so results stay reproducible.

    Returns:
        Non-empty buckets sorted by count descending; equal counts keep the
        order in which the bucket was first seen.
    """

    counts: Counter[AgeGroup] = Counter()
    for record in records:
        for person in record.persons:
            if not person.has_known_birth_year:
                continue
            counts[age_group_for(reference_year - person.year_of_birth)] += 1
    return tuple(AgeGroupCount(group=group, count=count) for group, count in counts.most_common())
