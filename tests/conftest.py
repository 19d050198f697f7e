"""Shared fixtures for the roster tests."""

import pytest

from roster import Day, Parent, Roster, Session, Student, Time


def make_session(day: str, time: str) -> Session:
    return Session(Day.parse(day), Time.parse(time))


@pytest.fixture
def alice() -> Student:
    return Student("Alice Tan", "91234567", "12 Clementi Rd", parent_name="Ben Tan")


@pytest.fixture
def ben() -> Parent:
    return Parent("Ben Tan", "98765432", "12 Clementi Rd")


@pytest.fixture
def roster(alice: Student, ben: Parent) -> Roster:
    return Roster([alice, ben])
