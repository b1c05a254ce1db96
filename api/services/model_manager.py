"""
ModelManager - in-memory model of the ClientBook data.

Single entry point for the command layer:
- person CRUD and policy changes (delegated to AddressBook)
- the live sorted/filtered view and its predicate/comparator
- the displayed client selection
- reminder queries (overdue last-met, schedules, birthdays)
- user preferences

The model does no I/O. Loading and saving is done by api/services/storage.py.
"""
import logging
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from api.services.address_book import AddressBook, ReadOnlyAddressBook
from api.services.display_client import DisplayClient
from api.services.errors import require_non_null
from api.services.person import Person
from api.services.person_filters import (
    COMPARATOR_SHOW_ORIGINAL_ORDER,
    PREDICATE_SHOW_ALL_PERSONS,
    PersonComparator,
    PersonPredicate,
)
from api.services.person_view import SortedFilteredPersonList
from api.services.policy import Policy
from api.services.reminders import (
    DEFAULT_BIRTHDAY_WINDOW_DAYS,
    DEFAULT_LAST_MET_OVERDUE_DAYS,
    ReminderList,
    ReminderType,
)
from api.services.user_prefs import GuiSettings, UserPrefs

logger = logging.getLogger(__name__)


class ModelManager:
    """Represents the in-memory model of the address book data."""

    def __init__(
        self,
        address_book: Optional[ReadOnlyAddressBook] = None,
        user_prefs: Optional[UserPrefs] = None,
        last_met_overdue_days: int = DEFAULT_LAST_MET_OVERDUE_DAYS,
        birthday_window_days: int = DEFAULT_BIRTHDAY_WINDOW_DAYS,
        clock: Callable[[], date] = date.today,
    ):
        """
        Initialize the model with a copy of the given address book and prefs.

        Args:
            address_book: Initial data (empty if None)
            user_prefs: Initial preferences (defaults if None)
            last_met_overdue_days: Days since last meeting before a client is overdue
            birthday_window_days: How far ahead birthday reminders look
            clock: Returns "today"; injectable for tests
        """
        logger.debug(f"Initializing with address book: {address_book!r} and user prefs {user_prefs!r}")

        self._address_book = AddressBook(address_book)
        self._user_prefs = UserPrefs()
        if user_prefs is not None:
            self._user_prefs.reset_data(user_prefs)
        self._last_met_overdue_days = last_met_overdue_days
        self._birthday_window_days = birthday_window_days
        self._clock = clock

        self._sorted_filtered_persons = SortedFilteredPersonList(
            self._address_book,
            PREDICATE_SHOW_ALL_PERSONS,
            COMPARATOR_SHOW_ORIGINAL_ORDER,
            clock=clock,
        )
        self._display_client = DisplayClient()
        self.set_display_client_as_first_in_sorted_filtered_person_list()

    # ------------------------------------------------------------------ #
    # UserPrefs
    # ------------------------------------------------------------------ #

    def set_user_prefs(self, user_prefs: UserPrefs) -> None:
        require_non_null(user_prefs, names=("user_prefs",))
        self._user_prefs.reset_data(user_prefs)

    def get_user_prefs(self) -> UserPrefs:
        return self._user_prefs

    def get_gui_settings(self) -> GuiSettings:
        return self._user_prefs.gui_settings

    def set_gui_settings(self, gui_settings: GuiSettings) -> None:
        self._user_prefs.set_gui_settings(gui_settings)

    def get_address_book_file_path(self) -> Path:
        return self._user_prefs.address_book_file_path

    def set_address_book_file_path(self, path: Path) -> None:
        self._user_prefs.set_address_book_file_path(path)

    # ------------------------------------------------------------------ #
    # AddressBook
    # ------------------------------------------------------------------ #

    def set_address_book(self, address_book: ReadOnlyAddressBook) -> None:
        self._address_book.reset_data(address_book)

    def get_address_book(self) -> AddressBook:
        return self._address_book

    def has_person(self, person: Person) -> bool:
        require_non_null(person, names=("person",))
        return self._address_book.has_person(person)

    def delete_person(self, target: Person) -> None:
        self._address_book.remove_person(target)
        logger.info(f"Deleted client '{target.name}'")

    def add_person(self, person: Person) -> None:
        """Add a person and reset the view to show everyone."""
        self._address_book.add_person(person)
        self.update_filtered_person_list(PREDICATE_SHOW_ALL_PERSONS)
        logger.info(f"Added client '{person.name}'")

    def set_person(self, target: Person, edited_person: Person) -> None:
        require_non_null(target, edited_person, names=("target", "edited_person"))
        self._address_book.set_person(target, edited_person)
        logger.info(f"Updated client '{target.name}'")

    def add_policy(self, target: Person, policy: Policy) -> Person:
        """
        Add a policy to a person in the address book.

        The target is replaced by a new Person whose policy list has the
        policy appended. If either step fails nothing changes.

        Returns:
            The replacement Person now stored in the address book
        """
        require_non_null(target, policy, names=("target", "policy"))
        edited = target.with_changes(policies=target.policies.with_policy(policy))
        self.set_person(target, edited)
        logger.info(f"Added policy {policy.policy_id} to '{target.name}'")
        return edited

    def delete_policy(self, target: Person, policy_id: str) -> Person:
        """
        Delete a policy from a person in the address book.

        Raises:
            PolicyNotFoundError: the person holds no policy with that ID

        Returns:
            The replacement Person now stored in the address book
        """
        require_non_null(target, policy_id, names=("target", "policy_id"))
        edited = target.with_changes(policies=target.policies.without_policy(policy_id))
        self.set_person(target, edited)
        logger.info(f"Deleted policy {policy_id} from '{target.name}'")
        return edited

    # ------------------------------------------------------------------ #
    # Sorted/filtered person list
    # ------------------------------------------------------------------ #

    def get_sorted_filtered_person_list(self) -> SortedFilteredPersonList:
        """Live view of the persons, filtered by the predicate and sorted by the comparator."""
        return self._sorted_filtered_persons

    def update_filtered_person_list(self, predicate: PersonPredicate) -> None:
        self._sorted_filtered_persons.set_predicate(predicate)

    def update_sort_person_comparator(self, comparator: PersonComparator) -> None:
        """Change the sort order of the view; the address book order is untouched."""
        self._sorted_filtered_persons.set_comparator(comparator)

    # ------------------------------------------------------------------ #
    # Client being displayed
    # ------------------------------------------------------------------ #

    def get_display_client(self) -> Optional[Person]:
        return self._display_client.get_display_client()

    def has_display_client(self) -> bool:
        return self._display_client.has_display_client()

    def clear_display_client(self) -> None:
        self._display_client.clear()

    def set_display_client(self, person: Optional[Person]) -> None:
        """Show the given person; None is the same as clear_display_client()."""
        self._display_client.set_display_client(person)

    def set_display_client_as_first_in_sorted_filtered_person_list(self) -> None:
        """Display the first person in the current view, or nobody if it is empty."""
        persons = self._sorted_filtered_persons.to_list()
        self._display_client.set_display_client(persons[0] if persons else None)

    # ------------------------------------------------------------------ #
    # Reminders
    # ------------------------------------------------------------------ #

    def get_overdue_last_met(self) -> ReminderList:
        persons = self._address_book.get_overdue_last_met(self._clock(), self._last_met_overdue_days)
        return ReminderList(ReminderType.LAST_MET, tuple(persons))

    def get_schedules(self) -> ReminderList:
        return ReminderList(ReminderType.SCHEDULES, tuple(self._address_book.get_schedules()))

    def get_birthday_reminders(self) -> ReminderList:
        persons = self._address_book.get_persons_with_upcoming_birthdays(
            self._clock(), self._birthday_window_days
        )
        return ReminderList(ReminderType.BIRTHDAYS, tuple(persons))

    def __eq__(self, other) -> bool:
        if other is self:
            return True
        if not isinstance(other, ModelManager):
            return NotImplemented
        return (
            self._address_book == other._address_book
            and self._user_prefs == other._user_prefs
            and self._sorted_filtered_persons == other._sorted_filtered_persons
        )
