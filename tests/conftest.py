"""
Pytest configuration and shared fixtures for ClientBook tests.

Test Categories:
- unit: Fast tests with no external dependencies (< 100ms each)
- integration: Tests that go through the FastAPI app and JSON files on disk

Run categories:
- pytest -m unit              # Fast unit tests only
- pytest -m "not integration" # Skip integration tests
- pytest                      # All tests
"""
from datetime import date, datetime, timedelta, timezone

import pytest

from api.services.person import Person, Priority
from api.services.policy import Policy, PolicyList

# Fixed "today" so reminder tests do not depend on the calendar
TODAY = date(2024, 3, 15)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (app + files on disk)")


def pytest_collection_modifyitems(config, items):
    """Tests in test_*_api.py get the 'integration' marker."""
    for item in items:
        if str(item.fspath).endswith("_api.py"):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def clock():
    return lambda: TODAY


@pytest.fixture
def alice():
    return Person(
        name="Alice Pauline",
        phone="94351253",
        email="alice@example.com",
        address="123, Jurong West Ave 6, #08-111",
        birthday=date(1990, 3, 17),
        priority=Priority.HIGH,
        last_met=TODAY - timedelta(days=400),
        tags=frozenset({"friends"}),
        policies=PolicyList((Policy("P-100", "Term life", date(2020, 1, 1), date(2040, 1, 1), 120.0),)),
    )


@pytest.fixture
def bob():
    return Person(
        name="Bob Choo",
        phone="98765432",
        email="bob@example.com",
        birthday=date(1985, 12, 1),
        priority=Priority.LOW,
        last_met=TODAY - timedelta(days=2),
        schedule=datetime(2024, 3, 20, 10, 0, tzinfo=timezone.utc),
        tags=frozenset({"owesmoney", "friends"}),
    )


@pytest.fixture
def carol():
    return Person(
        name="Carol Meier",
        phone="95352563",
        email="carol@example.com",
        priority=Priority.MEDIUM,
        schedule=datetime(2024, 3, 18, 9, 30, tzinfo=timezone.utc),
    )


@pytest.fixture
def dave():
    return Person(
        name="Dave Kurz",
        phone="87652533",
        email="dave@example.com",
        birthday=date(1979, 3, 15),
        last_met=TODAY - timedelta(days=100),
        tags=frozenset({"family"}),
    )


@pytest.fixture
def typical_persons(alice, bob, carol, dave):
    return [alice, bob, carol, dave]


@pytest.fixture
def typical_address_book(typical_persons):
    from api.services.address_book import AddressBook

    book = AddressBook()
    for person in typical_persons:
        book.add_person(person)
    return book


@pytest.fixture
def model(typical_address_book, clock):
    from api.services.model_manager import ModelManager

    return ModelManager(typical_address_book, clock=clock)


@pytest.fixture
def test_settings(tmp_path):
    """
    Settings pointing at temporary files.

    Uses temporary paths to avoid affecting real data.
    """
    from config.settings import Settings

    return Settings(
        data_path=tmp_path / "clientbook.json",
        prefs_path=tmp_path / "preferences.json",
        seed_sample_data=False,
    )
