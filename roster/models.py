"""Data models for the tutoring roster."""

import re
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from .errors import (
    DuplicateSessionError,
    InvalidFormatError,
    InvalidRangeError,
    OverlappingSessionError,
    SessionNotFoundError,
)


DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

MINUTES_PER_DAY = 24 * 60

_DAY_LOOKUP = {
    **{code.lower(): code for code in DAYS},
    **{name.lower(): code for name, code in zip(DAY_NAMES, DAYS)},
}

_TIME_PATTERN = re.compile(
    r"^(?P<start_hour>\d{1,2})(?::(?P<start_minute>\d{2}))?(?P<start_suffix>am|pm)"
    r"\s*-\s*"
    r"(?P<end_hour>\d{1,2})(?::(?P<end_minute>\d{2}))?(?P<end_suffix>am|pm)$",
    re.IGNORECASE,
)

_NAME_PATTERN = re.compile(r"^[^\W_](?:[^\W_]|[ .'-])*$")
_PHONE_PATTERN = re.compile(r"^\d{3,}$")
_TAG_PATTERN = re.compile(r"^[^\W_]+$")


@dataclass(frozen=True)
class Day:
    """A weekday, stored as its canonical 3-letter code (``Mon`` .. ``Sun``).

    Any accepted spelling may be passed in; it is canonicalized on
    construction, so ``Day("monday") == Day("Mon")``.
    """

    value: str

    def __post_init__(self) -> None:
        canonical = _DAY_LOOKUP.get(str(self.value).strip().lower())
        if canonical is None:
            raise InvalidFormatError(
                f"Day should be one of {', '.join(DAYS)} (or the full day name), "
                f"got '{self.value}'"
            )
        object.__setattr__(self, "value", canonical)

    @classmethod
    def parse(cls, token: str) -> "Day":
        """Parse a user-supplied weekday token.

        Args:
            token: Day token such as "Mon", "mon" or "Monday".

        Returns:
            Canonicalized Day.

        Raises:
            InvalidFormatError: If the token is not a recognized weekday.
        """
        return cls(token)

    @property
    def weekday(self) -> int:
        """Index of the day, 0 = Monday .. 6 = Sunday."""
        return DAYS.index(self.value)

    def __str__(self) -> str:
        return self.value


def _to_minutes(hour: str, minute: Optional[str], suffix: str) -> int:
    hour_value = int(hour)
    minute_value = int(minute) if minute else 0
    if not 1 <= hour_value <= 12 or not 0 <= minute_value <= 59:
        raise ValueError(f"{hour}:{minute or '00'}{suffix}")
    return (hour_value % 12 + (12 if suffix.lower() == "pm" else 0)) * 60 + minute_value


def _format_minutes(minutes: int) -> str:
    hour, minute = divmod(minutes, 60)
    suffix = "am" if hour < 12 else "pm"
    hour_12 = hour % 12 or 12
    if minute:
        return f"{hour_12}:{minute:02d}{suffix}"
    return f"{hour_12}{suffix}"


@dataclass(frozen=True)
class Time:
    """Half-open time range ``[start, end)`` in minutes since midnight."""

    start: int
    end: int

    def __post_init__(self) -> None:
        for bound in (self.start, self.end):
            if not 0 <= bound < MINUTES_PER_DAY:
                raise InvalidRangeError("Time range must lie within a single day")
        if self.start >= self.end:
            raise InvalidRangeError()

    @classmethod
    def parse(cls, token: str) -> "Time":
        """Parse a time range token such as "12pm-1pm" or "12:30pm-1:30pm".

        Args:
            token: Time range with 12-hour clock bounds and am/pm suffixes.

        Returns:
            Parsed Time range.

        Raises:
            InvalidFormatError: If the token does not match the grammar.
            InvalidRangeError: If the start is not before the end.
        """
        match = _TIME_PATTERN.match(token.strip()) if isinstance(token, str) else None
        if not match:
            raise InvalidFormatError(
                f"Time should look like 12pm-1pm or 12:30pm-1:30pm, got '{token}'"
            )

        try:
            start = _to_minutes(match["start_hour"], match["start_minute"], match["start_suffix"])
            end = _to_minutes(match["end_hour"], match["end_minute"], match["end_suffix"])
        except ValueError as e:
            raise InvalidFormatError(f"Invalid clock time: {e}") from e

        return cls(start, end)

    def intersects(self, other: "Time") -> bool:
        """Check whether two ranges share at least one minute.

        Touching ranges such as 12pm-1pm and 1pm-2pm do not intersect.
        """
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return f"{_format_minutes(self.start)}-{_format_minutes(self.end)}"


@dataclass(frozen=True)
class Session:
    """One weekly tuition slot: a day plus a time range."""

    day: Day
    time: Time

    def overlaps(self, other: "Session") -> bool:
        """Check whether two sessions clash (same day and intersecting times).

        Symmetric, and every session overlaps itself.
        """
        return self.day == other.day and self.time.intersects(other.time)

    def sort_key(self) -> tuple[int, int, int]:
        return self.day.weekday, self.time.start, self.time.end

    def __str__(self) -> str:
        return f"{self.day} {self.time}"


@dataclass(frozen=True)
class Person:
    """Fields shared by every entry in the roster.

    Attributes:
        name: Display name, also used to tell persons apart.
        phone: Phone number, digits only.
        address: Postal address.
        remark: Free-form note, empty when unset.
    """

    name: str
    phone: str
    address: str
    remark: str = ""

    def __post_init__(self) -> None:
        for value in (self.name, self.phone, self.address, self.remark):
            if not isinstance(value, str):
                raise InvalidFormatError(f"Person fields should be text, got {value!r}")
        if not _NAME_PATTERN.match(self.name):
            raise InvalidFormatError(
                "Names should only contain letters, digits, spaces and .'- "
                "and should not be blank"
            )
        if not _PHONE_PATTERN.match(self.phone):
            raise InvalidFormatError("Phone numbers should only contain digits, at least 3 long")
        if not self.address.strip():
            raise InvalidFormatError("Addresses can take any values, and should not be blank")

    @property
    def role(self) -> str:
        return type(self).__name__.lower()

    def is_same_person(self, other: "Person") -> bool:
        """Two entries denote the same person when their names match, ignoring case."""
        return self.name.casefold() == other.name.casefold()


@dataclass(frozen=True)
class Parent(Person):
    """A parent entry. Parents have no sessions."""


@dataclass(frozen=True)
class Student(Person):
    """A student entry holding its weekly tuition sessions.

    Instances never change. The ``with_*_session`` operations validate the
    change and return a new Student; the receiver stays as it was.

    Attributes:
        tags: Labels attached to the student.
        sessions: Weekly sessions; no two of them overlap.
        parent_name: Name of the student's parent, if recorded.
    """

    tags: frozenset[str] = field(default_factory=frozenset)
    sessions: frozenset[Session] = field(default_factory=frozenset)
    parent_name: Optional[str] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "tags", frozenset(self.tags))
        object.__setattr__(self, "sessions", frozenset(self.sessions))

        for tag in self.tags:
            if not _TAG_PATTERN.match(tag):
                raise InvalidFormatError(f"Tag names should be alphanumeric, got '{tag}'")
        if self.parent_name is not None and not _NAME_PATTERN.match(self.parent_name):
            raise InvalidFormatError(f"Invalid parent name: '{self.parent_name}'")

        ordered = sorted(self.sessions, key=Session.sort_key)
        for i, session in enumerate(ordered):
            for other in ordered[i + 1:]:
                if session.overlaps(other):
                    raise OverlappingSessionError(
                        f"Sessions {session} and {other} of {self.name} overlap"
                    )

    def has_session(self, session: Session) -> bool:
        return session in self.sessions

    def sorted_sessions(self) -> list[Session]:
        """Sessions ordered by weekday, then start time."""
        return sorted(self.sessions, key=Session.sort_key)

    @staticmethod
    def _check_fits(candidate: Session, existing: Iterable[Session]) -> None:
        # An exact duplicate also overlaps itself, so it must be reported first.
        existing = list(existing)
        if candidate in existing:
            raise DuplicateSessionError()
        if any(candidate.overlaps(session) for session in existing):
            raise OverlappingSessionError()

    def with_added_session(self, new_session: Session) -> "Student":
        """Return a copy of this student with one more session.

        Args:
            new_session: Session to add.

        Returns:
            New Student holding the extra session.

        Raises:
            DuplicateSessionError: If the same session is already held.
            OverlappingSessionError: If it clashes with a held session.
        """
        self._check_fits(new_session, self.sessions)
        return replace(self, sessions=self.sessions | {new_session})

    def with_edited_session(self, target: Session, new_day: Day, new_time: Time) -> "Student":
        """Return a copy of this student with ``target`` moved to a new slot.

        The new slot is checked against every other session; ``target``
        itself is left out of the comparison.

        Args:
            target: Session to replace.
            new_day: Day of the replacement session.
            new_time: Time range of the replacement session.

        Returns:
            New Student holding the replacement instead of ``target``.

        Raises:
            SessionNotFoundError: If ``target`` is not held.
            DuplicateSessionError: If the replacement equals another session.
            OverlappingSessionError: If the replacement clashes with another session.
        """
        if target not in self.sessions:
            raise SessionNotFoundError()

        candidate = Session(new_day, new_time)
        remaining = self.sessions - {target}
        self._check_fits(candidate, remaining)
        return replace(self, sessions=remaining | {candidate})

    def with_removed_session(self, target: Session) -> "Student":
        """Return a copy of this student without ``target``.

        Raises:
            SessionNotFoundError: If ``target`` is not held.
        """
        if target not in self.sessions:
            raise SessionNotFoundError()
        return replace(self, sessions=self.sessions - {target})
