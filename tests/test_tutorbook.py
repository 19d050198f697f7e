"""Tests for the command-line entry point."""

import builtins

import pytest

import tutorbook
from storage import JsonRosterStorage


ADD_ALICE = "add n/Alice Tan p/91234567 a/12 Clementi Rd r/student"


def test_single_command_is_saved(tmp_path, capsys):
    data = tmp_path / "roster.json"

    tutorbook.main(["--data", str(data), "-c", ADD_ALICE])
    tutorbook.main(["--data", str(data), "-c", "addsession 1 d/Mon ti/12pm-1pm"])

    out = capsys.readouterr().out
    assert "New person added: Alice Tan" in out
    assert "New session added for Alice Tan" in out
    student = JsonRosterStorage(data).load().persons[0]
    assert [str(s) for s in student.sorted_sessions()] == ["Mon 12pm-1pm"]


def test_failed_command_exits_with_error(tmp_path, capsys):
    data = tmp_path / "roster.json"
    tutorbook.main(["--data", str(data), "-c", ADD_ALICE])
    tutorbook.main(["--data", str(data), "-c", "addsession 1 d/Mon ti/12pm-1pm"])

    with pytest.raises(SystemExit) as excinfo:
        tutorbook.main(["--data", str(data), "-c", "addsession 1 d/Mon ti/12:30pm-1:30pm"])

    assert excinfo.value.code == 1
    assert "overlaps with another existing session" in capsys.readouterr().err
    assert len(JsonRosterStorage(data).load().persons[0].sessions) == 1


def test_interactive_loop_reports_errors_and_continues(tmp_path, capsys, monkeypatch):
    lines = iter([ADD_ALICE, "addsession 1 d/Mon ti/12pm-1pm", "addsession 1 d/Mon ti/12pm-1pm", "exit"])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(lines))

    tutorbook.main(["--data", str(tmp_path / "roster.json")])

    captured = capsys.readouterr()
    assert "New session added for Alice Tan" in captured.out
    assert "Error: This session already exists for the person" in captured.err
    assert "Exiting TutorBook" in captured.out


def test_interactive_loop_stops_at_end_of_input(tmp_path, monkeypatch):
    def no_input(prompt=""):
        raise EOFError

    monkeypatch.setattr(builtins, "input", no_input)
    tutorbook.main(["--data", str(tmp_path / "roster.json")])


def test_export_appends_extension(tmp_path, capsys):
    data = tmp_path / "roster.json"
    tutorbook.main(["--data", str(data), "-c", ADD_ALICE])
    tutorbook.main(["--data", str(data), "-c", "addsession 1 d/Tue ti/4pm-5pm"])

    output = tmp_path / "week"
    tutorbook.main(["--data", str(data), "--export", str(output), "--week-of", "2026-10-22"])

    out = capsys.readouterr().out
    assert "Exported 1 sessions" in out
    assert "Week of: 2026-10-19" in out
    assert (tmp_path / "week.ics").exists()


def test_default_data_path_from_environment(monkeypatch):
    monkeypatch.setenv("TUTORBOOK_DATA", "/tmp/elsewhere.json")
    assert tutorbook.get_default_data_path() == "/tmp/elsewhere.json"
    monkeypatch.delenv("TUTORBOOK_DATA")
    assert tutorbook.get_default_data_path() == "data/roster.json"


def test_interactive_loop_survives_odd_index(tmp_path, capsys, monkeypatch):
    lines = iter([ADD_ALICE, "viewsession ²", "addsession ² d/Mon ti/12pm-1pm", "exit"])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(lines))

    tutorbook.main(["--data", str(tmp_path / "roster.json")])

    captured = capsys.readouterr()
    assert captured.err.count("Error: Index is not a non-zero unsigned integer.") == 2
    assert "Exiting TutorBook" in captured.out


def test_unreadable_stored_session_exits_with_error(tmp_path, capsys):
    data = tmp_path / "roster.json"
    data.write_text(
        '{"persons": [{"role": "student", "name": "Ann", "phone": "123", "address": "x",'
        ' "sessions": [{"day": "Mon", "time": 5}]}]}',
        encoding="utf-8",
    )

    with pytest.raises(SystemExit) as excinfo:
        tutorbook.main(["--data", str(data), "-c", "list"])

    assert excinfo.value.code == 1
    assert "Could not load roster" in capsys.readouterr().err
