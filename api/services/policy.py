"""
Insurance policies attached to a client.

Policy and PolicyList are immutable. Adding or deleting a policy returns a
new PolicyList, so a Person holding the old list is never affected.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Iterator, Optional

from api.services.errors import (
    DuplicatePolicyError,
    InvalidArgumentError,
    PolicyNotFoundError,
)
from api.utils.datetime_utils import parse_date


@dataclass(frozen=True)
class Policy:
    """A single insurance policy, identified by its policy ID."""

    policy_id: str
    name: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    premium: float = 0.0

    def __post_init__(self):
        policy_id = (self.policy_id or "").strip()
        if not policy_id:
            raise InvalidArgumentError("Policy ID must not be blank")
        if self.premium < 0:
            raise InvalidArgumentError(f"Premium must not be negative: {self.premium}")
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise InvalidArgumentError(
                f"Policy {policy_id} ends ({self.end_date}) before it starts ({self.start_date})"
            )
        object.__setattr__(self, "policy_id", policy_id)
        object.__setattr__(self, "name", (self.name or "").strip())

    def to_dict(self) -> dict:
        return {
            "policy_id": self.policy_id,
            "name": self.name,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "premium": self.premium,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Policy":
        return cls(
            policy_id=data.get("policy_id", ""),
            name=data.get("name", ""),
            start_date=parse_date(data.get("start_date")),
            end_date=parse_date(data.get("end_date")),
            premium=float(data.get("premium") or 0.0),
        )


@dataclass(frozen=True)
class PolicyList:
    """
    Ordered collection of policies with IDs unique within the list.

    Insertion order is kept; with_policy appends.
    """

    policies: tuple[Policy, ...] = field(default_factory=tuple)

    def __post_init__(self):
        policies = tuple(self.policies)
        seen: set[str] = set()
        for policy in policies:
            if policy.policy_id in seen:
                raise DuplicatePolicyError(policy.policy_id)
            seen.add(policy.policy_id)
        object.__setattr__(self, "policies", policies)

    def __iter__(self) -> Iterator[Policy]:
        return iter(self.policies)

    def __len__(self) -> int:
        return len(self.policies)

    def __contains__(self, policy_id: object) -> bool:
        return any(p.policy_id == policy_id for p in self.policies)

    def get(self, policy_id: str) -> Optional[Policy]:
        """Get a policy by ID, or None if absent."""
        for policy in self.policies:
            if policy.policy_id == policy_id:
                return policy
        return None

    def with_policy(self, policy: Policy) -> "PolicyList":
        """
        Return a new list with the policy appended.

        Raises:
            DuplicatePolicyError: if a policy with the same ID exists
        """
        if policy.policy_id in self:
            raise DuplicatePolicyError(policy.policy_id)
        return PolicyList(self.policies + (policy,))

    def without_policy(self, policy_id: str) -> "PolicyList":
        """
        Return a new list with the given policy removed.

        Raises:
            PolicyNotFoundError: if no policy has that ID
        """
        if policy_id not in self:
            raise PolicyNotFoundError(policy_id)
        return PolicyList(tuple(p for p in self.policies if p.policy_id != policy_id))

    def total_premium(self) -> float:
        return sum(p.premium for p in self.policies)

    def to_list(self) -> list[dict]:
        return [p.to_dict() for p in self.policies]

    @classmethod
    def from_list(cls, data: Optional[list]) -> "PolicyList":
        return cls(tuple(Policy.from_dict(item) for item in data or []))
