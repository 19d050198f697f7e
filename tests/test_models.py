"""Tests for Day, Time and Session value objects."""

import itertools

import pytest

from roster import Day, Parent, Student, Time
from roster.errors import InvalidFormatError, InvalidRangeError, OverlappingSessionError
from conftest import make_session


@pytest.mark.parametrize("token", ["Mon", "mon", "MON", "Monday", "monday", " Mon "])
def test_day_accepts_codes_and_full_names(token):
    assert Day.parse(token) == Day("Mon")
    assert str(Day.parse(token)) == "Mon"


@pytest.mark.parametrize("token", ["", "Mo", "Mond", "Funday", "1"])
def test_day_rejects_unknown_tokens(token):
    with pytest.raises(InvalidFormatError):
        Day.parse(token)


def test_day_weekday_index():
    assert Day.parse("Mon").weekday == 0
    assert Day.parse("Sunday").weekday == 6


def test_day_hash_follows_canonical_value():
    assert len({Day("Tue"), Day("tuesday"), Day("TUE")}) == 1


@pytest.mark.parametrize(
    "token, start, end",
    [
        ("12pm-1pm", 720, 780),
        ("12:30pm-1:30pm", 750, 810),
        ("9am-10:15am", 540, 615),
        ("12am-1am", 0, 60),
        ("11am - 12pm", 660, 720),
        ("3PM-4PM", 900, 960),
        ("10pm-11:59pm", 1320, 1439),
    ],
)
def test_time_parse_to_minutes(token, start, end):
    time = Time.parse(token)
    assert (time.start, time.end) == (start, end)


@pytest.mark.parametrize(
    "token", ["12-1", "12pm", "13pm-2pm", "0am-1am", "12:60pm-1pm", "noon-1pm", "", 5, None],
)
def test_time_rejects_bad_grammar(token):
    with pytest.raises(InvalidFormatError):
        Time.parse(token)


@pytest.mark.parametrize("token", ["1pm-12pm", "2pm-2pm", "11pm-12am"])
def test_time_rejects_start_not_before_end(token):
    with pytest.raises(InvalidRangeError):
        Time.parse(token)


def test_time_must_fit_in_one_day():
    with pytest.raises(InvalidRangeError):
        Time(1400, 1440)


def test_time_canonical_text():
    assert str(Time.parse("12PM-1PM")) == "12pm-1pm"
    assert str(Time.parse("12:30pm-1:30pm")) == "12:30pm-1:30pm"
    assert str(Time.parse("12am-9:05am")) == "12am-9:05am"


def test_touching_sessions_do_not_overlap():
    first = make_session("Mon", "12pm-1pm")
    second = make_session("Mon", "1pm-2pm")
    assert not first.overlaps(second)
    assert not second.overlaps(first)


def test_intersecting_sessions_overlap():
    first = make_session("Mon", "12pm-1pm")
    second = make_session("Mon", "12:30pm-1:30pm")
    assert first.overlaps(second)
    assert second.overlaps(first)


def test_same_time_on_other_day_does_not_overlap():
    assert not make_session("Mon", "12pm-1pm").overlaps(make_session("Tue", "12pm-1pm"))


def test_contained_session_overlaps():
    outer = make_session("Wed", "9am-12pm")
    inner = make_session("Wed", "10am-11am")
    assert outer.overlaps(inner) and inner.overlaps(outer)


def test_equal_sessions_overlap_and_hash_alike():
    first = make_session("Mon", "12pm-1pm")
    second = make_session("monday", "12:00pm-1:00pm")
    assert first == second
    assert first.overlaps(second)
    assert first.overlaps(first)
    assert len({first, second}) == 1


EDGE_SESSIONS = [
    make_session(day, time)
    for day in ("Mon", "Tue")
    for time in (
        "12am-12:01am", "12am-1am", "12:30am-1am", "1am-2am",
        "9am-12pm", "10am-11am", "11:59am-12pm", "12pm-1pm",
        "12:30pm-1:30pm", "1pm-2pm", "11pm-11:59pm",
    )
]


@pytest.mark.parametrize("first, second", list(itertools.product(EDGE_SESSIONS, repeat=2)))
def test_overlap_is_symmetric_and_half_open(first, second):
    expected = (
        first.day == second.day
        and first.time.start < second.time.end
        and second.time.start < first.time.end
    )
    assert first.overlaps(second) == expected
    assert second.overlaps(first) == expected


def test_student_rejects_overlapping_sessions_at_construction():
    with pytest.raises(OverlappingSessionError):
        Student(
            "Alice Tan", "91234567", "12 Clementi Rd",
            sessions={make_session("Mon", "12pm-1pm"), make_session("Mon", "12:30pm-2pm")},
        )


def test_student_coerces_collections_to_frozensets():
    student = Student("Alice Tan", "91234567", "12 Clementi Rd", tags=["sec3"], sessions=[])
    assert student.tags == frozenset({"sec3"})
    assert isinstance(student.sessions, frozenset)


@pytest.mark.parametrize(
    "name, phone, address",
    [
        ("", "91234567", "addr"),
        ("Alice_Tan", "91234567", "addr"),
        ("Alice", "12", "addr"),
        ("Alice", "9123abc", "addr"),
        ("Alice", "91234567", "   "),
        ("Alice", 91234567, "addr"),
        ("Alice", "91234567", None),
    ],
)
def test_person_field_validation(name, phone, address):
    with pytest.raises(InvalidFormatError):
        Parent(name, phone, address)


def test_person_role_and_identity():
    parent = Parent("Ben Tan", "98765432", "12 Clementi Rd")
    assert parent.role == "parent"
    assert parent.is_same_person(Parent("ben tan", "11111111", "elsewhere"))
