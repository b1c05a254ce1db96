"""
Reminder derivation for ClientBook.

Three categories of clients needing follow-up, computed fresh from the
current person list on every query:
- LAST_MET: not met for longer than the overdue threshold
- SCHEDULES: clients with a scheduled next meeting
- BIRTHDAYS: birthdays falling within the upcoming window
"""
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Iterator

from api.services.person import Person
from api.utils.datetime_utils import days_until_birthday

DEFAULT_LAST_MET_OVERDUE_DAYS = 90
DEFAULT_BIRTHDAY_WINDOW_DAYS = 7


class ReminderType(Enum):
    LAST_MET = "last_met"
    SCHEDULES = "schedules"
    BIRTHDAYS = "birthdays"

    @property
    def title(self) -> str:
        return {
            ReminderType.LAST_MET: "Overdue follow-ups",
            ReminderType.SCHEDULES: "Scheduled meetings",
            ReminderType.BIRTHDAYS: "Upcoming birthdays",
        }[self]


@dataclass(frozen=True)
class ReminderList:
    """A reminder category tagged with its type and the qualifying persons."""

    reminder_type: ReminderType
    persons: tuple[Person, ...] = ()

    def __iter__(self) -> Iterator[Person]:
        return iter(self.persons)

    def __len__(self) -> int:
        return len(self.persons)

    def is_empty(self) -> bool:
        return not self.persons


def is_last_met_overdue(person: Person, today: date,
                        overdue_days: int = DEFAULT_LAST_MET_OVERDUE_DAYS) -> bool:
    """True if the client was last met more than overdue_days before today."""
    if person.last_met is None:
        return False
    return person.last_met < today - timedelta(days=overdue_days)


def overdue_last_met(persons: Iterable[Person], today: date,
                     overdue_days: int = DEFAULT_LAST_MET_OVERDUE_DAYS) -> list[Person]:
    """Overdue clients, longest since last met first."""
    overdue = [p for p in persons if is_last_met_overdue(p, today, overdue_days)]
    # sorted() is stable: equal dates keep store order
    return sorted(overdue, key=lambda p: p.last_met)


def scheduled_meetings(persons: Iterable[Person]) -> list[Person]:
    """Clients with a scheduled meeting, soonest first (past meetings included)."""
    return sorted((p for p in persons if p.schedule is not None), key=lambda p: p.schedule)


def upcoming_birthdays(persons: Iterable[Person], today: date,
                       window_days: int = DEFAULT_BIRTHDAY_WINDOW_DAYS) -> list[Person]:
    """
    Clients whose birthday falls within window_days from today.

    Today counts as day 0, so a window of 7 covers today plus the next 7 days.
    """
    upcoming = [
        p for p in persons
        if p.birthday is not None and days_until_birthday(p.birthday, today) <= window_days
    ]
    return sorted(upcoming, key=lambda p: days_until_birthday(p.birthday, today))
