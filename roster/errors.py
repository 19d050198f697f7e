"""Error kinds reported to the user by roster operations and commands."""

from typing import Optional


class RosterError(Exception):
    """Base class for all errors that are shown to the user as text.

    Subclasses define a default message so callers can raise them bare.
    """

    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidFormatError(RosterError, ValueError):
    """A token (day, time, name, ...) did not match its grammar."""

    default_message = "Invalid format"


class InvalidRangeError(RosterError, ValueError):
    """A time range parsed but its start is not before its end."""

    default_message = "Start time must be before end time"


class InvalidIndexError(RosterError):
    default_message = "The person index provided is invalid"


class NotAStudentError(RosterError):
    default_message = "This command can only be used on students"


class DuplicateSessionError(RosterError):
    default_message = "This session already exists for the person"


class OverlappingSessionError(RosterError):
    default_message = "This session overlaps with another existing session."


class SessionNotFoundError(RosterError):
    default_message = "This session does not exist for the person"


class DuplicatePersonError(RosterError):
    default_message = "This person already exists in the roster"


class PersonNotFoundError(RosterError, LookupError):
    default_message = "The person is not in the roster"


class ParseError(RosterError):
    """User input could not be turned into a command."""

    default_message = "Invalid command format"


class StorageError(RosterError):
    """Roster data could not be read from or written to disk."""

    default_message = "Roster data file could not be read"
