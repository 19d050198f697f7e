"""JSON file storage for the roster."""

import json
import logging
from pathlib import Path
from typing import Any, Union

from roster import Day, Parent, Person, Roster, Session, Student, Time
from roster.errors import RosterError, StorageError


logger = logging.getLogger(__name__)


def _session_to_dict(session: Session) -> dict[str, str]:
    return {"day": str(session.day), "time": str(session.time)}


def person_to_dict(person: Person) -> dict[str, Any]:
    """Plain-data form of a person, with sessions in weekday order."""
    data: dict[str, Any] = {
        "role": person.role,
        "name": person.name,
        "phone": person.phone,
        "address": person.address,
        "remark": person.remark,
    }
    if isinstance(person, Student):
        data["tags"] = sorted(person.tags)
        data["sessions"] = [_session_to_dict(s) for s in person.sorted_sessions()]
        data["parent"] = person.parent_name
    return data


def person_from_dict(data: dict[str, Any]) -> Person:
    """Rebuild a person, re-running all model validation.

    Raises:
        StorageError: If the record is incomplete or has an unknown role.
        RosterError: If a field fails validation (e.g. overlapping sessions).
    """
    try:
        role = data["role"]
        fields = dict(
            name=data["name"],
            phone=data["phone"],
            address=data["address"],
            remark=data.get("remark", ""),
        )
    except (KeyError, TypeError) as e:
        raise StorageError(f"Incomplete person record: {e}") from e

    if role == "parent":
        return Parent(**fields)
    if role != "student":
        raise StorageError(f"Unknown role in person record: {role!r}")

    sessions = frozenset(
        Session(Day.parse(entry["day"]), Time.parse(entry["time"]))
        for entry in data.get("sessions", [])
    )
    return Student(
        **fields,
        tags=frozenset(data.get("tags", [])),
        sessions=sessions,
        parent_name=data.get("parent"),
    )


class JsonRosterStorage:
    """Reads and writes a roster as a single JSON document."""

    def __init__(self, path: Union[str, Path]) -> None:
        """Initialize the storage.

        Args:
            path: Location of the JSON file; it need not exist yet.
        """
        self.path = Path(path)

    def load(self) -> Roster:
        """Load the roster from disk.

        Returns:
            The stored roster, or an empty one if the file does not exist.

        Raises:
            StorageError: If the file cannot be read or holds invalid data.
        """
        if not self.path.exists():
            logger.info("No data file at %s, starting with an empty roster", self.path)
            return Roster()

        try:
            with open(self.path, encoding="utf-8") as f:
                document = json.load(f)
            roster = Roster(person_from_dict(entry) for entry in document["persons"])
        except StorageError:
            logger.error("Invalid data in %s", self.path)
            raise
        except (OSError, ValueError, KeyError, TypeError, AttributeError, RosterError) as e:
            logger.error("Could not load roster from %s: %s", self.path, e)
            raise StorageError(f"Could not load roster from {self.path}: {e}") from e

        logger.info("Loaded %d persons from %s", len(roster), self.path)
        return roster

    def save(self, roster: Roster) -> None:
        """Write the roster to disk, creating parent directories as needed.

        Raises:
            StorageError: If the file cannot be written.
        """
        document = {"persons": [person_to_dict(person) for person in roster.persons]}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error("Could not save roster to %s: %s", self.path, e)
            raise StorageError(f"Could not save roster to {self.path}: {e}") from e
        logger.info("Saved %d persons to %s", len(roster), self.path)
