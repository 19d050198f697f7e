"""Tests for person-level commands and their formatting."""

import pytest

from logic.parser import RosterParser
from roster import Roster
from roster.errors import (
    DuplicatePersonError, InvalidFormatError, InvalidIndexError, NotAStudentError,
)


def run(roster, line):
    return RosterParser().parse_command(line).execute(roster)


def test_add_and_list():
    roster = Roster()
    assert run(roster, "add n/Alice Tan p/91234567 a/12 Clementi Rd r/student").feedback == (
        "New person added: Alice Tan")
    run(roster, "add n/Ben Tan p/98765432 a/12 Clementi Rd r/parent")

    assert run(roster, "list").feedback == (
        "Listed all persons\n"
        "1. Alice Tan (student) 91234567\n"
        "2. Ben Tan (parent) 98765432"
    )


def test_add_duplicate_person(roster):
    with pytest.raises(DuplicatePersonError):
        run(roster, "add n/ALICE TAN p/90000000 a/Elsewhere r/student")


def test_find_filters_displayed_list(roster):
    result = run(roster, "find ben")
    assert result.feedback.splitlines()[0] == "1 persons listed!"
    assert [p.name for p in roster.filtered_persons] == ["Ben Tan"]


def test_delete_person(roster):
    assert run(roster, "delete 2").feedback == "Deleted person: Ben Tan"
    assert len(roster) == 1
    with pytest.raises(InvalidIndexError):
        run(roster, "delete 2")


def test_view_student_details(roster):
    run(roster, "addsession 1 d/Mon ti/12pm-1pm")
    assert run(roster, "view 1").feedback == (
        "Name: Alice Tan\n"
        "Phone: 91234567\n"
        "Address: 12 Clementi Rd\n"
        "Role: student\n"
        "Parent: Ben Tan\n"
        "Tags: -\n"
        "Sessions: Mon 12pm-1pm\n"
        "Remark: -"
    )


def test_view_parent_lists_children(roster):
    details = run(roster, "view 2").feedback
    assert "Role: parent" in details
    assert "Children: Alice Tan" in details


def test_remark_keeps_sessions(roster):
    run(roster, "addsession 1 d/Mon ti/12pm-1pm")
    assert run(roster, "remark 1 rm/Prefers mornings").feedback == "Added remark to Alice Tan"

    student = roster.persons[0]
    assert student.remark == "Prefers mornings"
    assert len(student.sessions) == 1

    assert run(roster, "remark 1 rm/").feedback == "Removed remark from Alice Tan"
    assert roster.persons[0].remark == ""


def test_exit_requests_exit(roster):
    assert run(roster, "exit").should_exit


def test_find_by_role(roster):
    result = run(roster, "find r/parent")
    assert result.feedback == "1 persons listed!\n1. Ben Tan (parent) 98765432"

    run(roster, "find tan r/student")
    assert [p.name for p in roster.filtered_persons] == ["Alice Tan"]

    run(roster, "find alice r/parent")
    assert roster.filtered_persons == []


def test_edit_student_keeps_sessions(roster):
    run(roster, "addsession 1 d/Mon ti/12pm-1pm")
    original = roster.persons[0]

    assert run(roster, "edit 1 n/Alice Lim p/90001111 t/sec4").feedback == (
        "Edited person: Alice Lim")

    edited = roster.persons[0]
    assert edited.name == "Alice Lim"
    assert edited.phone == "90001111"
    assert edited.address == "12 Clementi Rd"
    assert edited.tags == frozenset({"sec4"})
    assert edited.sessions == original.sessions
    assert original.name == "Alice Tan"


def test_edit_clears_tags_and_parent(roster):
    run(roster, "edit 1 t/sec3")
    run(roster, "edit 1 t/ par/")
    student = roster.persons[0]
    assert student.tags == frozenset()
    assert student.parent_name is None


def test_edit_resolves_index_in_filtered_list(roster):
    run(roster, "find ben")
    run(roster, "edit 1 p/90000000")
    assert roster.persons[1].phone == "90000000"
    assert len(roster.filtered_persons) == 2


def test_edit_rejects_student_fields_on_parent(roster):
    before = roster.persons
    with pytest.raises(NotAStudentError):
        run(roster, "edit 2 t/vip")
    assert roster.persons == before


def test_edit_failures_leave_roster_unchanged(roster):
    before = roster.persons
    with pytest.raises(DuplicatePersonError):
        run(roster, "edit 1 n/ben tan")
    with pytest.raises(InvalidFormatError):
        run(roster, "edit 1 p/12")
    with pytest.raises(InvalidIndexError):
        run(roster, "edit 3 p/91234567")
    assert all(a is b for a, b in zip(roster.persons, before))


def test_renaming_parent_relinks_children(roster):
    run(roster, "edit 2 n/Benjamin Tan")
    assert roster.persons[0].parent_name == "Benjamin Tan"
    assert "Children: Alice Tan" in run(roster, "view 2").feedback


def test_deleting_parent_unlinks_children(roster):
    run(roster, "delete 2")
    assert roster.persons[0].parent_name is None
    assert "Parent: -" in run(roster, "view 1").feedback


def test_clear_empties_roster(roster):
    run(roster, "find ben")
    assert run(roster, "clear").feedback == "Roster has been cleared!"
    assert len(roster) == 0
    assert run(roster, "list").feedback == "Listed all persons"
