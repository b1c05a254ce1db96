"""
Live sorted/filtered projection of the address book.

The view holds no copy of the persons: every read recomputes
sort(filter(address_book, predicate), comparator), so store mutations are
visible immediately. Date-relative sort keys use the view's clock.
Subscribers are told when the store changes or when the predicate or
comparator is replaced.
"""
import logging
from collections.abc import Sequence
from datetime import date
from typing import Callable, Iterator

from api.services.address_book import AddressBook
from api.services.errors import require_non_null
from api.services.person import Person
from api.services.person_filters import (
    COMPARATOR_SHOW_ORIGINAL_ORDER,
    PREDICATE_SHOW_ALL_PERSONS,
    PersonComparator,
    PersonPredicate,
)

logger = logging.getLogger(__name__)


class SortedFilteredPersonList(Sequence[Person]):
    """Read-only, observable sequence of persons backed by an AddressBook."""

    def __init__(
        self,
        address_book: AddressBook,
        predicate: PersonPredicate = PREDICATE_SHOW_ALL_PERSONS,
        comparator: PersonComparator = COMPARATOR_SHOW_ORIGINAL_ORDER,
        clock: Callable[[], date] = date.today,
    ):
        self._address_book = address_book
        self._predicate = predicate
        self._comparator = comparator
        self._clock = clock
        self._listeners: list[Callable[[], None]] = []
        address_book.subscribe(self._notify)

    @property
    def predicate(self) -> PersonPredicate:
        return self._predicate

    @property
    def comparator(self) -> PersonComparator:
        return self._comparator

    def set_predicate(self, predicate: PersonPredicate) -> None:
        require_non_null(predicate, names=("predicate",))
        self._predicate = predicate
        self._notify()

    def set_comparator(self, comparator: PersonComparator) -> None:
        require_non_null(comparator, names=("comparator",))
        self._comparator = comparator
        logger.debug(f"Sorting persons by {comparator.name}")
        self._notify()

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register a change callback; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def _compute(self) -> list[Person]:
        filtered = [p for p in self._address_book.get_person_list() if self._predicate(p)]
        return self._comparator.sort(filtered, self._clock())

    def to_list(self) -> list[Person]:
        """Snapshot of the current view contents."""
        return self._compute()

    def __getitem__(self, index):
        return self._compute()[index]

    def __len__(self) -> int:
        return len(self._compute())

    def __iter__(self) -> Iterator[Person]:
        return iter(self._compute())

    def is_empty(self) -> bool:
        return len(self) == 0

    def __eq__(self, other) -> bool:
        if isinstance(other, SortedFilteredPersonList):
            return self._compute() == other._compute()
        if isinstance(other, (list, tuple)):
            return self._compute() == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"SortedFilteredPersonList(size={len(self)}, sort={self._comparator.name})"
