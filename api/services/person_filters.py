"""
Predicates and comparators for the sorted/filtered client view.

Predicates are callables Person -> bool. The classes here are frozen
dataclasses so two predicates built from the same keywords compare equal.

Comparators are PersonComparator objects wrapping a sort key. Keys take the
person and "today", so date-relative orders follow the caller's clock.
Sorting is always stable, so persons with equal keys keep their address-book
order.
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Optional

from api.services.errors import InvalidArgumentError
from api.services.person import Person, Priority
from api.utils.datetime_utils import days_until_birthday

PersonPredicate = Callable[[Person], bool]


# ============================================================================
# Predicates
# ============================================================================

def _show_all(person: Person) -> bool:
    return True


PREDICATE_SHOW_ALL_PERSONS: PersonPredicate = _show_all


@dataclass(frozen=True)
class NameContainsKeywordsPredicate:
    """Matches persons whose name contains any keyword as a full word."""

    keywords: tuple[str, ...]

    def __call__(self, person: Person) -> bool:
        words = person.name.lower().split()
        return any(keyword.lower() in words for keyword in self.keywords)


@dataclass(frozen=True)
class TagContainsKeywordsPredicate:
    """Matches persons carrying any of the given tags."""

    tags: tuple[str, ...]

    def __call__(self, person: Person) -> bool:
        return any(tag.strip().lower() in person.tags for tag in self.tags)


@dataclass(frozen=True)
class PriorityPredicate:
    priority: Priority

    def __call__(self, person: Person) -> bool:
        return person.priority is self.priority


@dataclass(frozen=True)
class HasPolicyPredicate:
    """Matches persons holding the policy ID, or any policy when ID is None."""

    policy_id: Optional[str] = None

    def __call__(self, person: Person) -> bool:
        if self.policy_id is None:
            return len(person.policies) > 0
        return self.policy_id in person.policies


@dataclass(frozen=True)
class AllOfPredicate:
    predicates: tuple[PersonPredicate, ...]

    def __call__(self, person: Person) -> bool:
        return all(predicate(person) for predicate in self.predicates)


def all_of(*predicates: PersonPredicate) -> PersonPredicate:
    """Compose predicates; a person must satisfy every one of them."""
    if not predicates:
        return PREDICATE_SHOW_ALL_PERSONS
    if len(predicates) == 1:
        return predicates[0]
    return AllOfPredicate(tuple(predicates))


# ============================================================================
# Comparators
# ============================================================================

@dataclass(frozen=True)
class PersonComparator:
    """Named sort order over persons."""

    name: str
    key: Callable[[Person, date], Any]
    reverse: bool = False

    def sort(self, persons, today: Optional[date] = None) -> list[Person]:
        today = today or date.today()
        return sorted(persons, key=lambda p: self.key(p, today), reverse=self.reverse)


def _missing_last(value) -> tuple:
    # None sorts after every real value
    return (value is None, value)


def _birthday_key(person: Person, today: date) -> tuple:
    if person.birthday is None:
        return (True, 0)
    return (False, days_until_birthday(person.birthday, today))


COMPARATOR_SHOW_ORIGINAL_ORDER = PersonComparator("original", lambda p, today: 0)
COMPARATOR_BY_NAME = PersonComparator("name", lambda p, today: p.name.lower())
COMPARATOR_BY_PRIORITY = PersonComparator("priority", lambda p, today: -p.priority.value)
COMPARATOR_BY_LAST_MET = PersonComparator("last_met", lambda p, today: _missing_last(p.last_met))
COMPARATOR_BY_SCHEDULE = PersonComparator("schedule", lambda p, today: _missing_last(p.schedule))
COMPARATOR_BY_BIRTHDAY = PersonComparator("birthday", _birthday_key)

COMPARATORS = {
    c.name: c
    for c in (
        COMPARATOR_SHOW_ORIGINAL_ORDER,
        COMPARATOR_BY_NAME,
        COMPARATOR_BY_PRIORITY,
        COMPARATOR_BY_LAST_MET,
        COMPARATOR_BY_SCHEDULE,
        COMPARATOR_BY_BIRTHDAY,
    )
}


def comparator_for(name: str) -> PersonComparator:
    """Look up a comparator by name (e.g. "priority")."""
    try:
        return COMPARATORS[name.strip().lower()]
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown sort order '{name}'. Expected one of: {', '.join(sorted(COMPARATORS))}"
        ) from None
