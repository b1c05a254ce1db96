"""
Pydantic request/response models for the client routes.
"""
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from api.services.person import Person
from api.services.policy import Policy
from api.services.reminders import ReminderList


# ============================================================================
# Policy models
# ============================================================================

class PolicyRequest(BaseModel):
    policy_id: str = Field(..., min_length=1, description="Policy ID, unique per client")
    name: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    premium: float = Field(default=0.0, ge=0)

    def to_policy(self) -> Policy:
        return Policy(
            policy_id=self.policy_id,
            name=self.name,
            start_date=self.start_date,
            end_date=self.end_date,
            premium=self.premium,
        )


class PolicyResponse(BaseModel):
    policy_id: str
    name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    premium: float

    @classmethod
    def from_policy(cls, policy: Policy) -> "PolicyResponse":
        return cls(
            policy_id=policy.policy_id,
            name=policy.name,
            start_date=policy.start_date,
            end_date=policy.end_date,
            premium=policy.premium,
        )


# ============================================================================
# Client models
# ============================================================================

class ClientCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: str = ""
    address: str = ""
    birthday: Optional[date] = None
    priority: Optional[str] = None  # "low", "medium", "high" or initial
    remark: str = ""
    last_met: Optional[date] = None
    schedule: Optional[datetime] = None
    tags: list[str] = []

    def to_person(self) -> Person:
        return Person(
            name=self.name,
            phone=self.phone,
            email=self.email,
            address=self.address,
            birthday=self.birthday,
            priority=self.priority,
            remark=self.remark,
            last_met=self.last_met,
            schedule=self.schedule,
            tags=frozenset(self.tags),
        )


class ClientUpdateRequest(BaseModel):
    """Only fields present in the request are changed; null clears optional dates."""

    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    birthday: Optional[date] = None
    priority: Optional[str] = None
    remark: Optional[str] = None
    last_met: Optional[date] = None
    schedule: Optional[datetime] = None
    tags: Optional[list[str]] = None

    def apply_to(self, person: Person) -> Person:
        changes = self.model_dump(exclude_unset=True)
        if "tags" in changes:
            changes["tags"] = frozenset(changes["tags"] or [])
        for text_field in ("email", "address", "remark"):
            if text_field in changes and changes[text_field] is None:
                changes[text_field] = ""
        return person.with_changes(**changes)


class ClientResponse(BaseModel):
    name: str
    phone: str
    email: str = ""
    address: str = ""
    birthday: Optional[date] = None
    priority: str = "NONE"
    remark: str = ""
    last_met: Optional[date] = None
    schedule: Optional[datetime] = None
    tags: list[str] = []
    policies: list[PolicyResponse] = []
    total_premium: float = 0.0

    @classmethod
    def from_person(cls, person: Person) -> "ClientResponse":
        return cls(
            name=person.name,
            phone=person.phone,
            email=person.email,
            address=person.address,
            birthday=person.birthday,
            priority=person.priority.name,
            remark=person.remark,
            last_met=person.last_met,
            schedule=person.schedule,
            tags=sorted(person.tags),
            policies=[PolicyResponse.from_policy(p) for p in person.policies],
            total_premium=person.policies.total_premium(),
        )


class ClientListResponse(BaseModel):
    clients: list[ClientResponse]
    total: int
    sort: str
    display_client: Optional[ClientResponse] = None


class ViewRequest(BaseModel):
    """Filter/sort request; no filters shows every client."""

    keywords: list[str] = []
    tags: list[str] = []
    priority: Optional[str] = None
    policy_id: Optional[str] = None
    sort: Optional[str] = Field(default=None, description="original, name, priority, last_met, schedule, birthday")


class DisplayClientResponse(BaseModel):
    display_client: Optional[ClientResponse] = None


# ============================================================================
# Reminder models
# ============================================================================

class ReminderListResponse(BaseModel):
    reminder_type: str
    title: str
    clients: list[ClientResponse]
    count: int

    @classmethod
    def from_reminder_list(cls, reminders: ReminderList) -> "ReminderListResponse":
        return cls(
            reminder_type=reminders.reminder_type.value,
            title=reminders.reminder_type.title,
            clients=[ClientResponse.from_person(p) for p in reminders],
            count=len(reminders),
        )


class RemindersResponse(BaseModel):
    last_met: ReminderListResponse
    schedules: ReminderListResponse
    birthdays: ReminderListResponse
