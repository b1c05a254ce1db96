"""
AddressBook - the canonical, duplicate-free list of clients.

Persons are kept in insertion order. Uniqueness uses Person.is_same_person();
removal and replacement look up the exact stored value.

Every structural change is published to subscribed listeners so that views
built on top of the address book can refresh.
"""
import logging
from datetime import date
from typing import Callable, Iterable, Iterator, Optional, Protocol, Sequence

from api.services.errors import (
    DuplicatePersonError,
    PersonNotFoundError,
    require_non_null,
)
from api.services.person import Person
from api.services.reminders import (
    DEFAULT_BIRTHDAY_WINDOW_DAYS,
    DEFAULT_LAST_MET_OVERDUE_DAYS,
    overdue_last_met,
    scheduled_meetings,
    upcoming_birthdays,
)

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class ReadOnlyAddressBook(Protocol):
    """Read-only view of an address book, as handed to storage."""

    def get_person_list(self) -> Sequence[Person]:
        ...


class UniquePersonList:
    """
    List of persons that never holds two identity-equal persons.

    All mutators validate before changing anything, so a failed call leaves
    the list as it was.
    """

    def __init__(self):
        self._persons: list[Person] = []

    def contains(self, person: Person) -> bool:
        require_non_null(person, names=("person",))
        return any(person.is_same_person(p) for p in self._persons)

    def add(self, person: Person) -> None:
        if self.contains(person):
            raise DuplicatePersonError(person.name)
        self._persons.append(person)

    def set_person(self, target: Person, edited: Person) -> None:
        """Replace target with edited at the same position."""
        require_non_null(target, edited, names=("target", "edited"))
        index = self._index_of(target)
        if index is None:
            raise PersonNotFoundError(target.name)
        if not target.is_same_person(edited) and self.contains(edited):
            raise DuplicatePersonError(edited.name)
        self._persons[index] = edited

    def remove(self, person: Person) -> None:
        require_non_null(person, names=("person",))
        index = self._index_of(person)
        if index is None:
            raise PersonNotFoundError(person.name)
        del self._persons[index]

    def set_persons(self, persons: Iterable[Person]) -> None:
        """Replace the whole list; the replacement must be duplicate-free."""
        require_non_null(persons, names=("persons",))
        replacement = list(persons)
        for i, person in enumerate(replacement):
            if any(person.is_same_person(other) for other in replacement[i + 1:]):
                raise DuplicatePersonError(person.name)
        self._persons = replacement

    def _index_of(self, person: Person) -> Optional[int]:
        for i, p in enumerate(self._persons):
            if p == person:
                return i
        return None

    def as_tuple(self) -> tuple[Person, ...]:
        return tuple(self._persons)

    def __iter__(self) -> Iterator[Person]:
        return iter(list(self._persons))

    def __len__(self) -> int:
        return len(self._persons)

    def __eq__(self, other) -> bool:
        if not isinstance(other, UniquePersonList):
            return NotImplemented
        return self._persons == other._persons


class AddressBook:
    """
    Wraps the client list at the address-book level.

    Duplicates are not allowed (by Person.is_same_person comparison).
    """

    def __init__(self, to_be_copied: Optional[ReadOnlyAddressBook] = None):
        self._persons = UniquePersonList()
        self._listeners: list[Listener] = []
        if to_be_copied is not None:
            self.reset_data(to_be_copied)

    # ------------------------------------------------------------------ #
    # Change notification
    # ------------------------------------------------------------------ #

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback fired after every structural change.

        Returns:
            A callable that unsubscribes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    # ------------------------------------------------------------------ #
    # List-level operations
    # ------------------------------------------------------------------ #

    def set_persons(self, persons: Iterable[Person]) -> None:
        """Replace the contents of the person list; must not contain duplicates."""
        self._persons.set_persons(persons)
        self._notify()

    def reset_data(self, new_data: ReadOnlyAddressBook) -> None:
        """Reset the existing data of this AddressBook with new_data."""
        require_non_null(new_data, names=("new_data",))
        self.set_persons(new_data.get_person_list())
        logger.debug(f"Address book reset with {len(self._persons)} persons")

    # ------------------------------------------------------------------ #
    # Person-level operations
    # ------------------------------------------------------------------ #

    def has_person(self, person: Person) -> bool:
        """True if a person with the same identity exists in the address book."""
        return self._persons.contains(person)

    def add_person(self, person: Person) -> None:
        """Add a person; raises DuplicatePersonError if they already exist."""
        self._persons.add(person)
        self._notify()

    def set_person(self, target: Person, edited: Person) -> None:
        """
        Replace target with edited.

        Raises:
            PersonNotFoundError: target is not in the address book
            DuplicatePersonError: edited duplicates another existing person
        """
        self._persons.set_person(target, edited)
        self._notify()

    def remove_person(self, key: Person) -> None:
        """Remove key; raises PersonNotFoundError if it is not in the address book."""
        self._persons.remove(key)
        self._notify()

    # ------------------------------------------------------------------ #
    # Reminder queries
    # ------------------------------------------------------------------ #

    def get_overdue_last_met(self, today: date,
                             overdue_days: int = DEFAULT_LAST_MET_OVERDUE_DAYS) -> list[Person]:
        return overdue_last_met(self._persons, today, overdue_days)

    def get_schedules(self) -> list[Person]:
        return scheduled_meetings(self._persons)

    def get_persons_with_upcoming_birthdays(
        self, today: date, window_days: int = DEFAULT_BIRTHDAY_WINDOW_DAYS
    ) -> list[Person]:
        return upcoming_birthdays(self._persons, today, window_days)

    # ------------------------------------------------------------------ #
    # Read access
    # ------------------------------------------------------------------ #

    def get_person_list(self) -> tuple[Person, ...]:
        return self._persons.as_tuple()

    def __len__(self) -> int:
        return len(self._persons)

    def __eq__(self, other) -> bool:
        if other is self:
            return True
        if not isinstance(other, AddressBook):
            return NotImplemented
        return self._persons == other._persons

    def __repr__(self) -> str:
        return f"AddressBook(persons={len(self._persons)})"
