"""In-memory roster holding every person and the currently displayed subset."""

import logging
from dataclasses import replace
from typing import Callable, Iterable, Optional

from .errors import DuplicatePersonError, PersonNotFoundError
from .models import Parent, Person, Student


logger = logging.getLogger(__name__)

PersonPredicate = Callable[[Person], bool]


def show_all_persons(person: Person) -> bool:
    return True


class Roster:
    """Authoritative, ordered list of persons with a filtered view.

    Commands read the filtered view to resolve display indices and write
    back through ``set_person``, which swaps a single entry found by object
    identity.
    """

    def __init__(self, persons: Iterable[Person] = ()) -> None:
        self._persons: list[Person] = []
        self._predicate: PersonPredicate = show_all_persons
        for person in persons:
            self.add_person(person)

    @property
    def persons(self) -> tuple[Person, ...]:
        """All persons, in insertion order."""
        return tuple(self._persons)

    @property
    def filtered_persons(self) -> list[Person]:
        """Persons that match the current filter, in roster order."""
        return [person for person in self._persons if self._predicate(person)]

    def __len__(self) -> int:
        return len(self._persons)

    def has_person(self, person: Person) -> bool:
        return any(existing.is_same_person(person) for existing in self._persons)

    def add_person(self, person: Person) -> None:
        """Append a person.

        Raises:
            DuplicatePersonError: If a person with the same name exists.
        """
        if self.has_person(person):
            raise DuplicatePersonError()
        self._persons.append(person)
        logger.debug("Added %s '%s'", person.role, person.name)

    def _position_of(self, target: Person) -> int:
        for position, person in enumerate(self._persons):
            if person is target:
                return position
        raise PersonNotFoundError()

    def set_person(self, target: Person, edited: Person) -> None:
        """Replace ``target`` (matched by identity) with ``edited``.

        Args:
            target: The exact object currently stored in the roster.
            edited: Its replacement.

        Raises:
            PersonNotFoundError: If ``target`` is not stored in the roster.
            DuplicatePersonError: If ``edited`` takes the name of another person.
        """
        position = self._position_of(target)
        if not target.is_same_person(edited) and self.has_person(edited):
            raise DuplicatePersonError()
        self._persons[position] = edited
        logger.debug("Replaced entry %d ('%s')", position, edited.name)

    def remove_person(self, target: Person) -> None:
        position = self._position_of(target)
        del self._persons[position]
        logger.debug("Removed entry %d ('%s')", position, target.name)

    def update_filter(self, predicate: Optional[PersonPredicate] = None) -> None:
        """Change which persons are displayed; ``None`` shows everyone."""
        self._predicate = predicate or show_all_persons

    def children_of(self, parent: Parent) -> list[Student]:
        """Students that name ``parent`` as their parent."""
        key = parent.name.casefold()
        return [
            person for person in self._persons
            if isinstance(person, Student)
            and person.parent_name is not None
            and person.parent_name.casefold() == key
        ]

    def relink_children(self, parent: Parent, new_parent_name: Optional[str]) -> None:
        """Point every child of ``parent`` at ``new_parent_name``; ``None`` unlinks them."""
        for child in self.children_of(parent):
            self.set_person(child, replace(child, parent_name=new_parent_name))

    def clear(self) -> None:
        """Remove every person and show the (empty) full list."""
        count = len(self._persons)
        self._persons.clear()
        self._predicate = show_all_persons
        logger.debug("Cleared %d persons", count)
