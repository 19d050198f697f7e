"""Plain-text rendering of persons and sessions for command feedback."""

from typing import Iterable

from roster.models import Parent, Person, Student


def _or_dash(value: str) -> str:
    return value if value and value.strip() else "-"


def format_person(person: Person, children: Iterable[Student] = ()) -> str:
    """Multi-line details of a person.

    Args:
        person: Person to describe.
        children: For a parent, the students that list them as parent.

    Returns:
        Lines of "Field: value", with "-" for empty values.
    """
    lines = [
        f"Name: {person.name}",
        f"Phone: {person.phone}",
        f"Address: {person.address}",
        f"Role: {person.role}",
    ]
    if isinstance(person, Student):
        lines.append(f"Parent: {_or_dash(person.parent_name or '')}")
        lines.append(f"Tags: {_or_dash(', '.join(sorted(person.tags)))}")
        lines.append(f"Sessions: {_or_dash(', '.join(str(s) for s in person.sorted_sessions()))}")
    elif isinstance(person, Parent):
        names = sorted(child.name for child in children)
        lines.append(f"Children: {_or_dash(', '.join(names))}")
    lines.append(f"Remark: {_or_dash(person.remark)}")
    return "\n".join(lines)


def format_person_line(position: int, person: Person) -> str:
    """One-line summary used when listing persons, numbered from 1."""
    return f"{position}. {person.name} ({person.role}) {person.phone}"


def format_sessions(student: Student) -> str:
    sessions = student.sorted_sessions()
    if not sessions:
        return f"{student.name} has no sessions"
    body = "\n".join(f"  {session}" for session in sessions)
    return f"Sessions for {student.name}:\n{body}"
