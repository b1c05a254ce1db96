"""
The client currently shown in the detail panel.

Holds at most one Person. It is not kept in sync with the address book:
after a delete or edit the caller re-selects (see ModelManager).
"""
from typing import Optional

from api.services.person import Person


class DisplayClient:
    def __init__(self, person: Optional[Person] = None):
        self._person = person

    def get_display_client(self) -> Optional[Person]:
        return self._person

    def set_display_client(self, person: Optional[Person]) -> None:
        """Select a person; None clears the selection."""
        self._person = person

    def clear(self) -> None:
        self._person = None

    def has_display_client(self) -> bool:
        return self._person is not None

    def __eq__(self, other) -> bool:
        if not isinstance(other, DisplayClient):
            return NotImplemented
        return self._person == other._person

    def __repr__(self) -> str:
        return f"DisplayClient({self._person.name if self._person else None})"
