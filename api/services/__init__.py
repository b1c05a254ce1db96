"""
ClientBook Services Package.

This package contains the in-memory model, reminder rules and storage.

Example:
    from api.services import ModelManager, Person, Policy

Key service modules:
- person / policy: immutable client and policy records
- address_book: duplicate-free client list
- person_view / person_filters: live sorted/filtered view
- reminders: overdue, schedule and birthday reminders
- model_manager: facade used by the routes
- storage: JSON persistence
"""

# ============================================================================
# Model
# ============================================================================

from api.services.person import Person, Priority
from api.services.policy import Policy, PolicyList
from api.services.address_book import AddressBook
from api.services.model_manager import ModelManager
from api.services.reminders import ReminderList, ReminderType

# ============================================================================
# Errors
# ============================================================================

from api.services.errors import (
    ClientBookError,
    DataLoadingError,
    DuplicateEntryError,
    InvalidArgumentError,
    NotFoundError,
)

# ============================================================================
# Storage
# ============================================================================

from api.services.storage import StorageManager


__all__ = [
    # Model
    "Person",
    "Priority",
    "Policy",
    "PolicyList",
    "AddressBook",
    "ModelManager",
    "ReminderList",
    "ReminderType",
    # Errors
    "ClientBookError",
    "DataLoadingError",
    "DuplicateEntryError",
    "InvalidArgumentError",
    "NotFoundError",
    # Storage
    "StorageManager",
]
