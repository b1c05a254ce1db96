"""
Tests for api/services/person.py and api/services/phone_utils.py
"""
import dataclasses
from datetime import date, datetime, timezone

import pytest

from api.services.errors import InvalidArgumentError
from api.services.person import Person, Priority
from api.services.phone_utils import normalize_phone
from api.services.policy import Policy, PolicyList

pytestmark = pytest.mark.unit


class TestPriority:
    @pytest.mark.parametrize("value,expected", [
        ("high", Priority.HIGH),
        ("H", Priority.HIGH),
        ("medium", Priority.MEDIUM),
        ("l", Priority.LOW),
        (None, Priority.NONE),
        ("", Priority.NONE),
        ("-", Priority.NONE),
        (Priority.MEDIUM, Priority.MEDIUM),
    ])
    def test_parse(self, value, expected):
        assert Priority.parse(value) is expected

    def test_parse_unknown(self):
        with pytest.raises(InvalidArgumentError):
            Priority.parse("urgent")


class TestPersonValidation:
    def test_minimal_person(self):
        person = Person(name="Amy Bee", phone="85355255")
        assert person.email == ""
        assert person.priority is Priority.NONE
        assert person.tags == frozenset()
        assert len(person.policies) == 0

    def test_name_whitespace_collapsed(self):
        assert Person(name="  Amy   Bee ", phone="123").name == "Amy Bee"

    @pytest.mark.parametrize("name", ["", "   ", "*Amy", "Amy$"])
    def test_invalid_name(self, name):
        with pytest.raises(InvalidArgumentError):
            Person(name=name, phone="85355255")

    @pytest.mark.parametrize("phone", ["", "12", "91a", "phone"])
    def test_invalid_phone(self, phone):
        with pytest.raises(InvalidArgumentError):
            Person(name="Amy", phone=phone)

    def test_phone_formatting_stripped(self):
        assert Person(name="Amy", phone="(901) 229-5017").phone == "9012295017"

    def test_invalid_email(self):
        with pytest.raises(InvalidArgumentError):
            Person(name="Amy", phone="123", email="not-an-email")

    def test_tags_normalized(self):
        person = Person(name="Amy", phone="123", tags=frozenset({" Friends ", "VIP"}))
        assert person.tags == frozenset({"friends", "vip"})

    def test_invalid_tag(self):
        with pytest.raises(InvalidArgumentError):
            Person(name="Amy", phone="123", tags=frozenset({"two words"}))

    def test_naive_schedule_becomes_utc(self):
        person = Person(name="Amy", phone="123", schedule=datetime(2024, 1, 1, 9, 0))
        assert person.schedule.tzinfo == timezone.utc

    def test_priority_accepts_string(self):
        assert Person(name="Amy", phone="123", priority="high").priority is Priority.HIGH


class TestPersonEquality:
    def test_is_same_person_ignores_case_and_spacing(self, alice):
        other = Person(name="alice   PAULINE", phone="11111")
        assert alice.is_same_person(other)
        assert alice != other

    def test_is_same_person_different_name(self, alice, bob):
        assert not alice.is_same_person(bob)

    def test_is_same_person_none(self, alice):
        assert not alice.is_same_person(None)

    def test_full_equality(self, alice):
        copy = Person.from_dict(alice.to_dict())
        assert copy == alice
        assert copy.with_changes(remark="changed") != alice


class TestWithChanges:
    def test_returns_new_person(self, alice):
        edited = alice.with_changes(phone="11112222")
        assert edited.phone == "11112222"
        assert alice.phone == "94351253"
        assert edited.is_same_person(alice)

    def test_validates_changes(self, alice):
        with pytest.raises(InvalidArgumentError):
            alice.with_changes(email="bad")

    def test_person_is_frozen(self, alice):
        with pytest.raises(dataclasses.FrozenInstanceError):
            alice.name = "Someone Else"


class TestSerialization:
    def test_to_dict(self, bob):
        data = bob.to_dict()
        assert data["name"] == "Bob Choo"
        assert data["priority"] == "LOW"
        assert data["birthday"] == "1985-12-01"
        assert data["tags"] == ["friends", "owesmoney"]
        assert data["schedule"].startswith("2024-03-20T10:00:00")
        assert data["policies"] == []

    def test_from_dict_with_missing_optional_fields(self):
        person = Person.from_dict({"name": "Amy Bee", "phone": "85355255"})
        assert person.birthday is None
        assert person.last_met is None
        assert person.schedule is None
        assert person.priority is Priority.NONE

    def test_from_dict_accepts_legacy_timestamp_birthday(self):
        person = Person.from_dict({
            "name": "Amy Bee",
            "phone": "85355255",
            "birthday": "2000-08-07T00:00:00+00:00",
            "schedule": "2024-05-01T10:00:00Z",
        })
        assert person.birthday == date(2000, 8, 7)
        assert person.schedule == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)

    def test_from_dict_with_policies(self):
        person = Person.from_dict({
            "name": "Amy Bee",
            "phone": "85355255",
            "policies": [{"policy_id": "X1", "name": "Car", "premium": 12.5}],
        })
        assert person.policies == PolicyList((Policy("X1", "Car", premium=12.5),))


class TestPhoneUtils:
    def test_normalize_keeps_plus(self):
        assert normalize_phone("+65 9123 4567") == "+6591234567"

    def test_normalize_rejects_short(self):
        assert normalize_phone("12") is None

    def test_normalize_rejects_letters(self):
        assert normalize_phone("12ab34") is None

