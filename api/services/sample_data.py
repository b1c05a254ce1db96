"""
Sample clients used to populate a fresh address book on first start.
"""
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from api.services.address_book import AddressBook
from api.services.person import Person, Priority
from api.services.policy import Policy, PolicyList


def get_sample_persons(today: Optional[date] = None) -> list[Person]:
    today = today or date.today()
    next_week = datetime.combine(today + timedelta(days=7), datetime.min.time(), tzinfo=timezone.utc)
    return [
        Person(
            name="Alex Yeoh", phone="87438807", email="alexyeoh@example.com",
            address="Blk 30 Geylang Street 29, #06-40",
            birthday=date(1990, today.month, min(today.day, 28)),
            priority=Priority.HIGH, last_met=today - timedelta(days=120),
            tags=frozenset({"friends"}),
            policies=PolicyList((
                Policy("LIFE-001", "Whole life", date(2020, 1, 1), date(2060, 1, 1), 180.0),
            )),
        ),
        Person(
            name="Bernice Yu", phone="99272758", email="berniceyu@example.com",
            address="Blk 30 Lorong 3 Serangoon Gardens, #07-18",
            priority=Priority.MEDIUM, last_met=today - timedelta(days=10),
            schedule=next_week, tags=frozenset({"colleagues", "friends"}),
        ),
        Person(
            name="Charlotte Oliveiro", phone="93210283", email="charlotte@example.com",
            address="Blk 11 Ang Mo Kio Street 74, #11-04",
            priority=Priority.LOW, tags=frozenset({"neighbours"}),
        ),
        Person(
            name="David Li", phone="91031282", email="lidavid@example.com",
            address="Blk 436 Serangoon Gardens Street 26, #16-43",
            remark="Prefers evening calls", tags=frozenset({"family"}),
            policies=PolicyList((
                Policy("HLTH-204", "Health shield", date(2022, 6, 1), None, 45.5),
            )),
        ),
    ]


def get_sample_address_book() -> AddressBook:
    book = AddressBook()
    for person in get_sample_persons():
        book.add_person(person)
    return book
