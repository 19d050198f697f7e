"""Command base class and the person-level commands."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any, Sequence

from roster import Parent, Person, Roster, Student
from roster.errors import InvalidIndexError, NotAStudentError
from .formatting import format_person, format_person_line
from .syntax import (
    PREFIX_ADDRESS,
    PREFIX_NAME,
    PREFIX_PARENT,
    PREFIX_PHONE,
    PREFIX_REMARK,
    PREFIX_ROLE,
    PREFIX_TAG,
)


@dataclass(frozen=True)
class CommandResult:
    """Feedback produced by a successfully executed command."""

    feedback: str
    should_exit: bool = False


class Command(ABC):
    """Abstract base class for commands run against a roster.

    A command is built once from parsed arguments and executed once.
    Subclasses set ``COMMAND_WORD`` and ``MESSAGE_USAGE``.
    """

    COMMAND_WORD = ""
    MESSAGE_USAGE = ""

    @abstractmethod
    def execute(self, roster: Roster) -> CommandResult:
        """Run the command.

        Args:
            roster: Roster to read from and update.

        Returns:
            Feedback for the user.

        Raises:
            RosterError: If the command cannot be applied. The roster is
                left unchanged in that case.
        """
        pass

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and vars(other) == vars(self)

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in vars(self).items())
        return f"{type(self).__name__}({fields})"


def person_at(roster: Roster, index: int) -> Person:
    """Person at zero-based ``index`` of the displayed list.

    Raises:
        InvalidIndexError: If ``index`` is outside the displayed list.
    """
    shown = roster.filtered_persons
    if not 0 <= index < len(shown):
        raise InvalidIndexError()
    return shown[index]


class AddCommand(Command):
    COMMAND_WORD = "add"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Adds a person to the roster. "
        f"Parameters: {PREFIX_NAME}NAME {PREFIX_PHONE}PHONE {PREFIX_ADDRESS}ADDRESS "
        f"{PREFIX_ROLE}student|parent [{PREFIX_TAG}TAG]... [{PREFIX_PARENT}PARENT]\n"
        f"Example: {COMMAND_WORD} {PREFIX_NAME}John Doe {PREFIX_PHONE}98765432 "
        f"{PREFIX_ADDRESS}311, Clementi Ave 2 {PREFIX_ROLE}student {PREFIX_TAG}sec3"
    )
    MESSAGE_SUCCESS = "New person added: {}"

    def __init__(self, person: Person) -> None:
        self.person = person

    def execute(self, roster: Roster) -> CommandResult:
        roster.add_person(self.person)
        return CommandResult(self.MESSAGE_SUCCESS.format(self.person.name))


class DeleteCommand(Command):
    COMMAND_WORD = "delete"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Deletes the person identified by the index number "
        f"used in the displayed person list.\n"
        f"Parameters: INDEX (must be a positive integer)\n"
        f"Example: {COMMAND_WORD} 1"
    )
    MESSAGE_SUCCESS = "Deleted person: {}"

    def __init__(self, index: int) -> None:
        self.index = index

    def execute(self, roster: Roster) -> CommandResult:
        person = person_at(roster, self.index)
        if isinstance(person, Parent):
            roster.relink_children(person, None)
        roster.remove_person(person)
        return CommandResult(self.MESSAGE_SUCCESS.format(person.name))


class EditCommand(Command):
    """Changes some fields of a person, keeping the rest (sessions included).

    ``changes`` maps Person or Student field names to their new values.
    """

    COMMAND_WORD = "edit"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Edits the details of the person identified by the index number "
        f"used in the displayed person list. Given values overwrite the existing ones; "
        f"an empty {PREFIX_TAG} clears the tags and an empty {PREFIX_PARENT} clears the parent.\n"
        f"Parameters: INDEX (must be a positive integer) [{PREFIX_NAME}NAME] [{PREFIX_PHONE}PHONE] "
        f"[{PREFIX_ADDRESS}ADDRESS] [{PREFIX_TAG}TAG]... [{PREFIX_PARENT}PARENT]\n"
        f"Example: {COMMAND_WORD} 1 {PREFIX_PHONE}91234567 {PREFIX_TAG}sec4"
    )
    MESSAGE_SUCCESS = "Edited person: {}"
    MESSAGE_NOT_EDITED = "At least one field to edit must be provided."
    MESSAGE_STUDENT_FIELDS = "Tags and parent can only be set on students"

    STUDENT_FIELDS = frozenset({"tags", "parent_name"})

    def __init__(self, index: int, changes: dict[str, Any]) -> None:
        self.index = index
        self.changes = changes

    def execute(self, roster: Roster) -> CommandResult:
        person = person_at(roster, self.index)
        if not isinstance(person, Student) and self.STUDENT_FIELDS & self.changes.keys():
            raise NotAStudentError(self.MESSAGE_STUDENT_FIELDS)

        edited = replace(person, **self.changes)
        roster.set_person(person, edited)
        if isinstance(person, Parent) and edited.name != person.name:
            roster.relink_children(person, edited.name)
        roster.update_filter(None)
        return CommandResult(self.MESSAGE_SUCCESS.format(edited.name))


class ClearCommand(Command):
    COMMAND_WORD = "clear"
    MESSAGE_USAGE = f"{COMMAND_WORD}: Removes every person from the roster."
    MESSAGE_SUCCESS = "Roster has been cleared!"

    def execute(self, roster: Roster) -> CommandResult:
        roster.clear()
        return CommandResult(self.MESSAGE_SUCCESS)


class ListCommand(Command):
    COMMAND_WORD = "list"
    MESSAGE_USAGE = f"{COMMAND_WORD}: Lists all persons in the roster."
    MESSAGE_SUCCESS = "Listed all persons"

    def execute(self, roster: Roster) -> CommandResult:
        roster.update_filter(None)
        lines = [self.MESSAGE_SUCCESS]
        lines.extend(
            format_person_line(position, person)
            for position, person in enumerate(roster.filtered_persons, start=1)
        )
        return CommandResult("\n".join(lines))


class FindCommand(Command):
    COMMAND_WORD = "find"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Finds all persons whose names contain any of the given "
        f"keywords and, with {PREFIX_ROLE}, whose role is one of the given roles "
        f"(case-insensitive), and lists them with index numbers.\n"
        f"Parameters: [KEYWORD]... [{PREFIX_ROLE}ROLE]...\n"
        f"Example: {COMMAND_WORD} alice bob {PREFIX_ROLE}student"
    )
    MESSAGE_SUCCESS = "{} persons listed!"

    def __init__(self, keywords: list[str], roles: Sequence[str] = ()) -> None:
        self.keywords = [keyword.casefold() for keyword in keywords]
        self.roles = [role.casefold() for role in roles]

    def _matches(self, person: Person) -> bool:
        if self.roles and person.role not in self.roles:
            return False
        if not self.keywords:
            return True
        words = person.name.casefold().split()
        return any(keyword in words for keyword in self.keywords)

    def execute(self, roster: Roster) -> CommandResult:
        roster.update_filter(self._matches)
        shown = roster.filtered_persons
        lines = [self.MESSAGE_SUCCESS.format(len(shown))]
        lines.extend(
            format_person_line(position, person)
            for position, person in enumerate(shown, start=1)
        )
        return CommandResult("\n".join(lines))


class ViewCommand(Command):
    COMMAND_WORD = "view"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Shows the details of the person identified by the index number.\n"
        f"Parameters: INDEX (must be a positive integer)\n"
        f"Example: {COMMAND_WORD} 1"
    )

    def __init__(self, index: int) -> None:
        self.index = index

    def execute(self, roster: Roster) -> CommandResult:
        person = person_at(roster, self.index)
        children = roster.children_of(person) if isinstance(person, Parent) else ()
        return CommandResult(format_person(person, children))


class RemarkCommand(Command):
    COMMAND_WORD = "remark"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Sets the remark of the person identified by the index number. "
        f"An empty remark removes it.\n"
        f"Parameters: INDEX {PREFIX_REMARK}[REMARK]\n"
        f"Example: {COMMAND_WORD} 1 {PREFIX_REMARK}Likes to swim."
    )
    MESSAGE_ADD_SUCCESS = "Added remark to {}"
    MESSAGE_DELETE_SUCCESS = "Removed remark from {}"

    def __init__(self, index: int, remark: str) -> None:
        self.index = index
        self.remark = remark

    def execute(self, roster: Roster) -> CommandResult:
        person = person_at(roster, self.index)
        roster.set_person(person, replace(person, remark=self.remark))
        roster.update_filter(None)
        message = self.MESSAGE_ADD_SUCCESS if self.remark else self.MESSAGE_DELETE_SUCCESS
        return CommandResult(message.format(person.name))


class HelpCommand(Command):
    COMMAND_WORD = "help"
    MESSAGE_USAGE = f"{COMMAND_WORD}: Shows the usage of every command."

    def __init__(self, usage: str) -> None:
        self.usage = usage

    def execute(self, roster: Roster) -> CommandResult:
        return CommandResult(self.usage)


class ExitCommand(Command):
    COMMAND_WORD = "exit"
    MESSAGE_USAGE = f"{COMMAND_WORD}: Exits the program."
    MESSAGE_EXIT = "Exiting TutorBook as requested ..."

    def execute(self, roster: Roster) -> CommandResult:
        return CommandResult(self.MESSAGE_EXIT, should_exit=True)
