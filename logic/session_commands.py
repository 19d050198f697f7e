"""Commands that add, edit, delete and view a student's tuition sessions."""

from abc import abstractmethod
from typing import Optional

from roster import Day, Roster, Session, Student, Time
from roster.errors import NotAStudentError
from .commands import Command, CommandResult, person_at
from .formatting import format_sessions
from .syntax import PREFIX_DAY, PREFIX_NEW_DAY, PREFIX_NEW_TIME, PREFIX_TIME


def student_at(roster: Roster, index: int) -> Student:
    """Student at zero-based ``index`` of the displayed list.

    Raises:
        InvalidIndexError: If ``index`` is outside the displayed list.
        NotAStudentError: If the person there is not a student.
    """
    person = person_at(roster, index)
    if not isinstance(person, Student):
        raise NotAStudentError()
    return person


class SessionCommand(Command):
    """Shared flow of the commands that change one student's sessions.

    Subclasses compute the updated student in ``apply``; this class looks
    the student up, installs the new snapshot in place of the old one and
    resets the displayed list.
    """

    MESSAGE_SUCCESS = ""

    def __init__(self, index: int, day: Day, time: Time) -> None:
        self.index = index
        self.day = day
        self.time = time

    @property
    def session(self) -> Session:
        return Session(self.day, self.time)

    @abstractmethod
    def apply(self, student: Student) -> Student:
        """Return the updated copy of ``student``; raise if the change is invalid."""
        pass

    def success_message(self, student: Student) -> str:
        return self.MESSAGE_SUCCESS.format(name=student.name, session=self.session)

    def execute(self, roster: Roster) -> CommandResult:
        student = student_at(roster, self.index)
        updated = self.apply(student)
        roster.set_person(student, updated)
        roster.update_filter(None)
        return CommandResult(self.success_message(student))


class AddSessionCommand(SessionCommand):
    COMMAND_WORD = "addsession"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Adds a tuition session to the student identified "
        f"by the index number used in the displayed person list.\n"
        f"Parameters: INDEX (must be a positive integer) {PREFIX_DAY}DAY {PREFIX_TIME}TIME\n"
        f"Example: {COMMAND_WORD} 1 {PREFIX_DAY}Mon {PREFIX_TIME}12pm-1pm"
    )
    MESSAGE_SUCCESS = "New session added for {name}"

    def apply(self, student: Student) -> Student:
        return student.with_added_session(self.session)


class DeleteSessionCommand(SessionCommand):
    COMMAND_WORD = "deletesession"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Removes a tuition session from the student identified "
        f"by the index number used in the displayed person list.\n"
        f"Parameters: INDEX (must be a positive integer) {PREFIX_DAY}DAY {PREFIX_TIME}TIME\n"
        f"Example: {COMMAND_WORD} 1 {PREFIX_DAY}Mon {PREFIX_TIME}12pm-1pm"
    )
    MESSAGE_SUCCESS = "Session removed for {name}: {session}"

    def apply(self, student: Student) -> Student:
        return student.with_removed_session(self.session)


class EditSessionCommand(SessionCommand):
    COMMAND_WORD = "editsession"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Moves a tuition session of the student identified "
        f"by the index number used in the displayed person list to a new day and time.\n"
        f"Parameters: INDEX (must be a positive integer) {PREFIX_DAY}DAY {PREFIX_TIME}TIME "
        f"{PREFIX_NEW_DAY}NEW_DAY {PREFIX_NEW_TIME}NEW_TIME\n"
        f"Example: {COMMAND_WORD} 1 {PREFIX_DAY}Mon {PREFIX_TIME}12pm-1pm "
        f"{PREFIX_NEW_DAY}Tue {PREFIX_NEW_TIME}2pm-3pm"
    )
    MESSAGE_SUCCESS = "Session updated for {name}: {session} -> {new_session}"

    def __init__(self, index: int, day: Day, time: Time, new_day: Day, new_time: Time) -> None:
        super().__init__(index, day, time)
        self.new_day = new_day
        self.new_time = new_time

    def apply(self, student: Student) -> Student:
        return student.with_edited_session(self.session, self.new_day, self.new_time)

    def success_message(self, student: Student) -> str:
        return self.MESSAGE_SUCCESS.format(
            name=student.name,
            session=self.session,
            new_session=Session(self.new_day, self.new_time),
        )


class ViewSessionCommand(Command):
    COMMAND_WORD = "viewsession"
    COMMAND_WORD_CAMEL = "viewSession"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Shows the tuition sessions of the student identified by the "
        f"index number, or of every displayed student when no index is given.\n"
        f"Parameters: [INDEX]\n"
        f"Example: {COMMAND_WORD} 1"
    )
    MESSAGE_NO_SESSIONS = "No sessions scheduled"

    def __init__(self, index: Optional[int] = None) -> None:
        self.index = index

    def execute(self, roster: Roster) -> CommandResult:
        if self.index is not None:
            return CommandResult(format_sessions(student_at(roster, self.index)))

        students = [
            person for person in roster.filtered_persons
            if isinstance(person, Student) and person.sessions
        ]
        if not students:
            return CommandResult(self.MESSAGE_NO_SESSIONS)
        return CommandResult("\n".join(format_sessions(student) for student in students))
