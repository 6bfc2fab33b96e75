"""Golden tests for case complexity and the age histogram."""

from __future__ import annotations

import pytest

from analysis.demographics import age_group_for, age_groups, case_complexity
from analysis.dto import AgeGroup, CaseComplexity
from analysis.records import Person, Vehicle

pytestmark = pytest.mark.unit

REFERENCE_YEAR = 2024


def test_case_complexity_empty_collection_is_all_zero() -> None:
    assert case_complexity([]) == CaseComplexity(
        avg_people_per_case=0.0,
        unknown_suspect_rate=0,
        multi_vehicle_rate=0,
    )


def test_case_complexity_metrics(make_record) -> None:
    unknown_accused = Person(role="Accused", name="Unknown person")
    named_accused = Person(role="Accused", name="Vijay Shinde")
    unknown_witness = Person(role="Witness", name="Unknown")
    car = Vehicle(role="Victim Vehicle", registration_number="MH21")

    records = [
        make_record(persons=[unknown_accused, Person(role="Victim", name="A")], vehicles=[car, car]),
        make_record(persons=[named_accused, unknown_witness]),
        make_record(persons=[Person(role="Complainant", name="B")], vehicles=[car]),
    ]
    complexity = case_complexity(records)

    assert complexity.avg_people_per_case == pytest.approx(1.7)
    assert complexity.unknown_suspect_rate == 33
    assert complexity.multi_vehicle_rate == 33


def test_unknown_suspect_match_is_case_sensitive(make_record) -> None:
    """The literal "Unknown" marker is matched as written."""

    records = [make_record(persons=[Person(role="Accused", name="unknown male")])]
    assert case_complexity(records).unknown_suspect_rate == 0


def test_reference_year_minus_25_is_in_18_29(make_record) -> None:
    person = Person(role="Victim", name="A", year_of_birth=REFERENCE_YEAR - 25)
    groups = age_groups([make_record(persons=[person])], reference_year=REFERENCE_YEAR)
    assert [(row.group, row.count) for row in groups] == [(AgeGroup.AGE_18_29, 1)]


def test_unknown_birth_years_are_excluded(make_record) -> None:
    persons = [
        Person(role="Victim", name="A", year_of_birth=None),
        Person(role="Victim", name="B", year_of_birth=0),
        Person(role="Victim", name="C", year_of_birth=-5),
    ]
    assert age_groups([make_record(persons=persons)], reference_year=REFERENCE_YEAR) == ()


@pytest.mark.parametrize(
    ("age", "expected"),
    [
        (0, AgeGroup.UNDER_18),
        (17, AgeGroup.UNDER_18),
        (18, AgeGroup.AGE_18_29),
        (29, AgeGroup.AGE_18_29),
        (30, AgeGroup.AGE_30_44),
        (44, AgeGroup.AGE_30_44),
        (45, AgeGroup.AGE_45_59),
        (59, AgeGroup.AGE_45_59),
        (60, AgeGroup.AGE_60_PLUS),
        (95, AgeGroup.AGE_60_PLUS),
    ],
)
def test_age_group_boundaries(age: int, expected: AgeGroup) -> None:
    assert age_group_for(age) is expected


def test_age_groups_sorted_by_count_with_first_seen_ties(make_record) -> None:
    persons = [
        Person(name="a", year_of_birth=1960),
        Person(name="b", year_of_birth=2000),
        Person(name="c", year_of_birth=1990),
        Person(name="d", year_of_birth=1999),
        Person(name="e", year_of_birth=1992),
    ]
    groups = age_groups([make_record(persons=persons)], reference_year=REFERENCE_YEAR)
    assert [(row.group, row.count) for row in groups] == [
        (AgeGroup.AGE_18_29, 2),
        (AgeGroup.AGE_30_44, 2),
        (AgeGroup.AGE_60_PLUS, 1),
    ]


def test_age_groups_use_reference_year_not_current_year(make_record) -> None:
    person = Person(name="a", year_of_birth=2010)
    young = age_groups([make_record(persons=[person])], reference_year=2024)
    older = age_groups([make_record(persons=[person])], reference_year=2040)
    assert young[0].group is AgeGroup.UNDER_18
    assert older[0].group is AgeGroup.AGE_30_44
