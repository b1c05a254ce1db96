"""
Person - the client record held by the address book.

Persons are immutable values. Editing a client (including adding or removing
a policy) builds a new Person with with_changes() and substitutes it in the
store.

Two notions of equality:
- is_same_person(): identity by name, used for duplicate detection
- ==: every field, used for change detection
"""
import dataclasses
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional

from api.services.errors import InvalidArgumentError
from api.services.phone_utils import normalize_phone
from api.services.policy import PolicyList
from api.utils.datetime_utils import make_aware, parse_date, parse_datetime


NAME_PATTERN = re.compile(r"^[\w][\w .'\-]*$")
EMAIL_PATTERN = re.compile(r"^[\w.+\-]+@[\w\-]+(\.[\w\-]+)*$")
TAG_PATTERN = re.compile(r"^[\w\-]+$")


class Priority(Enum):
    """Client priority, ordered NONE < LOW < MEDIUM < HIGH."""

    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @classmethod
    def parse(cls, value) -> "Priority":
        """Accept a Priority, its name ("high") or its initial ("H")."""
        if isinstance(value, Priority):
            return value
        if value is None or value == "" or value == "-":
            return cls.NONE
        text = str(value).strip().upper()
        for member in cls:
            if text == member.name or (member is not cls.NONE and text == member.name[0]):
                return member
        raise InvalidArgumentError(f"Unknown priority: {value}")


def _normalize_name(name: str) -> str:
    return " ".join(name.split()).lower()


@dataclass(frozen=True)
class Person:
    """
    A client with contact details, reminder dates and insurance policies.

    Only name and phone are required.
    """

    name: str
    phone: str
    email: str = ""
    address: str = ""
    birthday: Optional[date] = None
    priority: Priority = Priority.NONE
    remark: str = ""
    last_met: Optional[date] = None  # Date of the last meeting
    schedule: Optional[datetime] = None  # Next scheduled meeting
    tags: frozenset = field(default_factory=frozenset)
    policies: PolicyList = field(default_factory=PolicyList)

    def __post_init__(self):
        name = " ".join((self.name or "").split())
        if not name or not NAME_PATTERN.match(name):
            raise InvalidArgumentError(f"Invalid name: {self.name!r}")

        phone = normalize_phone(self.phone or "")
        if phone is None:
            raise InvalidArgumentError(f"Invalid phone number: {self.phone!r}")

        email = (self.email or "").strip()
        if email and not EMAIL_PATTERN.match(email):
            raise InvalidArgumentError(f"Invalid email: {self.email!r}")

        tags = frozenset(t.strip().lower() for t in self.tags if t and t.strip())
        for tag in tags:
            if not TAG_PATTERN.match(tag):
                raise InvalidArgumentError(f"Invalid tag: {tag!r}")

        # Frozen dataclass: normalised values go through object.__setattr__
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "phone", phone)
        object.__setattr__(self, "email", email)
        object.__setattr__(self, "address", (self.address or "").strip())
        object.__setattr__(self, "remark", (self.remark or "").strip())
        object.__setattr__(self, "priority", Priority.parse(self.priority))
        object.__setattr__(self, "schedule", make_aware(self.schedule))
        object.__setattr__(self, "tags", tags)
        if self.policies is None:
            object.__setattr__(self, "policies", PolicyList())

    def is_same_person(self, other: Optional["Person"]) -> bool:
        """
        Identity check used for duplicate detection.

        Names are compared case-insensitively with whitespace collapsed.
        """
        if other is self:
            return True
        if other is None:
            return False
        return _normalize_name(self.name) == _normalize_name(other.name)

    def with_changes(self, **changes) -> "Person":
        """Return a new Person with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict:
        """Convert to dict for JSON serialization."""
        return {
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "address": self.address,
            "birthday": self.birthday.isoformat() if self.birthday else None,
            "priority": self.priority.name,
            "remark": self.remark,
            "last_met": self.last_met.isoformat() if self.last_met else None,
            "schedule": self.schedule.isoformat() if self.schedule else None,
            "tags": sorted(self.tags),
            "policies": self.policies.to_list(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Person":
        """Create Person from dict, tolerating missing optional fields."""
        return cls(
            name=data.get("name", ""),
            phone=data.get("phone", ""),
            email=data.get("email") or "",
            address=data.get("address") or "",
            birthday=parse_date(data.get("birthday")),
            priority=Priority.parse(data.get("priority")),
            remark=data.get("remark") or "",
            last_met=parse_date(data.get("last_met")),
            schedule=parse_datetime(data.get("schedule")),
            tags=frozenset(data.get("tags") or []),
            policies=PolicyList.from_list(data.get("policies")),
        )

    def __str__(self) -> str:
        parts = [self.name, f"Phone: {self.phone}"]
        if self.email:
            parts.append(f"Email: {self.email}")
        if self.tags:
            parts.append("Tags: " + ", ".join(sorted(self.tags)))
        return "; ".join(parts)
