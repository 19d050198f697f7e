"""Turns a line of user input into a Command."""

import logging
import re
from typing import Any, Callable, Optional, Union

from roster import Day, Parent, Person, Student, Time
from roster.errors import InvalidFormatError, ParseError
from .commands import (
    AddCommand,
    ClearCommand,
    Command,
    DeleteCommand,
    EditCommand,
    ExitCommand,
    FindCommand,
    HelpCommand,
    ListCommand,
    RemarkCommand,
    ViewCommand,
)
from .session_commands import (
    AddSessionCommand,
    DeleteSessionCommand,
    EditSessionCommand,
    ViewSessionCommand,
)
from .syntax import (
    EDIT_PERSON_PREFIXES,
    EDIT_SESSION_PREFIXES,
    PERSON_PREFIXES,
    PREFIX_ADDRESS,
    PREFIX_DAY,
    PREFIX_NAME,
    PREFIX_NEW_DAY,
    PREFIX_NEW_TIME,
    PREFIX_PARENT,
    PREFIX_PHONE,
    PREFIX_REMARK,
    PREFIX_ROLE,
    PREFIX_TAG,
    PREFIX_TIME,
    SESSION_PREFIXES,
)
from .tokenizer import ArgumentMultimap, tokenize


logger = logging.getLogger(__name__)

BASIC_COMMAND_FORMAT = re.compile(r"^(?P<command_word>\S+)(?P<arguments>.*)$", re.DOTALL)

MESSAGE_INVALID_COMMAND_FORMAT = "Invalid command format!\n{}"
MESSAGE_UNKNOWN_COMMAND = "Unknown command"
MESSAGE_INVALID_INDEX = "Index is not a non-zero unsigned integer."

ALL_COMMANDS = (
    AddCommand, EditCommand, DeleteCommand, ClearCommand, ListCommand, FindCommand,
    ViewCommand, RemarkCommand,
    AddSessionCommand, EditSessionCommand, DeleteSessionCommand, ViewSessionCommand,
    HelpCommand, ExitCommand,
)


def parse_index(text: str) -> int:
    """Convert a one-based index typed by the user into a zero-based one.

    Raises:
        ParseError: If ``text`` is not a positive integer.
    """
    text = text.strip()
    # isdigit() also accepts digits such as "²" that int() rejects.
    if not (text.isascii() and text.isdigit()) or int(text) == 0:
        raise ParseError(MESSAGE_INVALID_INDEX)
    return int(text) - 1


def _invalid_format(usage: str) -> ParseError:
    return ParseError(MESSAGE_INVALID_COMMAND_FORMAT.format(usage))


def _require(arg_map: ArgumentMultimap, usage: str, *prefixes: str) -> None:
    if not arg_map.has(*prefixes):
        raise _invalid_format(usage)
    arg_map.verify_no_duplicate_prefixes_for(*prefixes)


def _parse_preamble_index(arg_map: ArgumentMultimap, usage: str) -> int:
    if not arg_map.preamble:
        raise _invalid_format(usage)
    return parse_index(arg_map.preamble)


class RosterParser:
    """Parses raw command lines.

    The first word picks the command; the rest is split on the prefixes
    that command accepts.
    """

    def __init__(self) -> None:
        self._parsers: dict[str, Callable[[str], Command]] = {
            AddCommand.COMMAND_WORD: self._parse_add,
            EditCommand.COMMAND_WORD: self._parse_edit,
            DeleteCommand.COMMAND_WORD: lambda args: DeleteCommand(
                self._parse_plain_index(args, DeleteCommand.MESSAGE_USAGE)),
            ClearCommand.COMMAND_WORD: lambda args: ClearCommand(),
            ListCommand.COMMAND_WORD: lambda args: ListCommand(),
            FindCommand.COMMAND_WORD: self._parse_find,
            ViewCommand.COMMAND_WORD: lambda args: ViewCommand(
                self._parse_plain_index(args, ViewCommand.MESSAGE_USAGE)),
            RemarkCommand.COMMAND_WORD: self._parse_remark,
            AddSessionCommand.COMMAND_WORD: lambda args: self._parse_session(args, AddSessionCommand),
            EditSessionCommand.COMMAND_WORD: self._parse_edit_session,
            DeleteSessionCommand.COMMAND_WORD: lambda args: self._parse_session(args, DeleteSessionCommand),
            HelpCommand.COMMAND_WORD: lambda args: HelpCommand(self.usage()),
            ExitCommand.COMMAND_WORD: lambda args: ExitCommand(),
        }
        for word in (ViewSessionCommand.COMMAND_WORD, ViewSessionCommand.COMMAND_WORD_CAMEL):
            self._parsers[word] = self._parse_view_session
            self._parsers["/" + word] = self._parse_view_session

    @staticmethod
    def usage() -> str:
        return "\n\n".join(command.MESSAGE_USAGE for command in ALL_COMMANDS)

    def parse_command(self, user_input: str) -> Command:
        """Parse one line of input.

        Args:
            user_input: Full command line, e.g. "addsession 1 d/Mon ti/12pm-1pm".

        Returns:
            Command ready to execute.

        Raises:
            ParseError: If the command word is unknown or arguments are missing.
            InvalidFormatError: If a field value is malformed.
            InvalidRangeError: If a time range ends before it starts.
        """
        match = BASIC_COMMAND_FORMAT.match(user_input.strip())
        if not match:
            raise _invalid_format(HelpCommand.MESSAGE_USAGE)

        command_word = match["command_word"]
        arguments = match["arguments"]
        logger.debug("Command word: %s; Arguments: %s", command_word, arguments)

        parse = self._parsers.get(command_word)
        if parse is None:
            logger.debug("Unknown command word in input: %s", user_input)
            raise ParseError(MESSAGE_UNKNOWN_COMMAND)
        return parse(arguments)

    @staticmethod
    def _parse_plain_index(args: str, usage: str) -> int:
        if not args.strip():
            raise _invalid_format(usage)
        return parse_index(args)

    @staticmethod
    def _parse_add(args: str) -> AddCommand:
        usage = AddCommand.MESSAGE_USAGE
        arg_map = tokenize(args, PERSON_PREFIXES)
        if arg_map.preamble:
            raise _invalid_format(usage)
        _require(arg_map, usage, PREFIX_NAME, PREFIX_PHONE, PREFIX_ADDRESS, PREFIX_ROLE)
        arg_map.verify_no_duplicate_prefixes_for(PREFIX_PARENT)

        name = arg_map.get_value(PREFIX_NAME)
        phone = arg_map.get_value(PREFIX_PHONE)
        address = arg_map.get_value(PREFIX_ADDRESS)
        role = arg_map.get_value(PREFIX_ROLE).lower()

        person: Person
        if role == "student":
            parent_name: Optional[str] = arg_map.get_value(PREFIX_PARENT) or None
            person = Student(
                name, phone, address,
                tags=frozenset(arg_map.get_all_values(PREFIX_TAG)),
                parent_name=parent_name,
            )
        elif role == "parent":
            # Tags and parent only apply to students and are dropped here.
            person = Parent(name, phone, address)
        else:
            raise InvalidFormatError("Role should be either 'student' or 'parent'")
        return AddCommand(person)

    @staticmethod
    def _parse_edit(args: str) -> EditCommand:
        usage = EditCommand.MESSAGE_USAGE
        arg_map = tokenize(args, EDIT_PERSON_PREFIXES)
        index = _parse_preamble_index(arg_map, usage)
        arg_map.verify_no_duplicate_prefixes_for(
            PREFIX_NAME, PREFIX_PHONE, PREFIX_ADDRESS, PREFIX_PARENT)

        changes: dict[str, Any] = {}
        for prefix, field_name in (
            (PREFIX_NAME, "name"), (PREFIX_PHONE, "phone"), (PREFIX_ADDRESS, "address"),
        ):
            if arg_map.has(prefix):
                changes[field_name] = arg_map.get_value(prefix)
        if arg_map.has(PREFIX_TAG):
            # A lone "t/" clears the tags.
            changes["tags"] = frozenset(tag for tag in arg_map.get_all_values(PREFIX_TAG) if tag)
        if arg_map.has(PREFIX_PARENT):
            changes["parent_name"] = arg_map.get_value(PREFIX_PARENT) or None

        if not changes:
            raise ParseError(EditCommand.MESSAGE_NOT_EDITED)
        return EditCommand(index, changes)

    @staticmethod
    def _parse_find(args: str) -> FindCommand:
        arg_map = tokenize(args, (PREFIX_ROLE,))
        keywords = arg_map.preamble.split()
        roles = [role for value in arg_map.get_all_values(PREFIX_ROLE) for role in value.split()]
        if not keywords and not roles:
            raise _invalid_format(FindCommand.MESSAGE_USAGE)
        return FindCommand(keywords, roles)

    @staticmethod
    def _parse_remark(args: str) -> RemarkCommand:
        usage = RemarkCommand.MESSAGE_USAGE
        arg_map = tokenize(args, (PREFIX_REMARK,))
        _require(arg_map, usage, PREFIX_REMARK)
        index = _parse_preamble_index(arg_map, usage)
        return RemarkCommand(index, arg_map.get_value(PREFIX_REMARK))

    @staticmethod
    def _parse_session(
        args: str, command_cls: type[Union[AddSessionCommand, DeleteSessionCommand]],
    ) -> Union[AddSessionCommand, DeleteSessionCommand]:
        usage = command_cls.MESSAGE_USAGE
        arg_map = tokenize(args, SESSION_PREFIXES)
        _require(arg_map, usage, *SESSION_PREFIXES)
        index = _parse_preamble_index(arg_map, usage)
        return command_cls(
            index,
            Day.parse(arg_map.get_value(PREFIX_DAY)),
            Time.parse(arg_map.get_value(PREFIX_TIME)),
        )

    @staticmethod
    def _parse_edit_session(args: str) -> EditSessionCommand:
        usage = EditSessionCommand.MESSAGE_USAGE
        arg_map = tokenize(args, EDIT_SESSION_PREFIXES)
        _require(arg_map, usage, *EDIT_SESSION_PREFIXES)
        index = _parse_preamble_index(arg_map, usage)
        return EditSessionCommand(
            index,
            Day.parse(arg_map.get_value(PREFIX_DAY)),
            Time.parse(arg_map.get_value(PREFIX_TIME)),
            Day.parse(arg_map.get_value(PREFIX_NEW_DAY)),
            Time.parse(arg_map.get_value(PREFIX_NEW_TIME)),
        )

    @staticmethod
    def _parse_view_session(args: str) -> ViewSessionCommand:
        if not args.strip():
            return ViewSessionCommand()
        return ViewSessionCommand(parse_index(args))
