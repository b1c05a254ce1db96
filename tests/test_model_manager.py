"""
Tests for api/services/model_manager.py
"""
from datetime import timedelta
from pathlib import Path

import pytest

from api.services.address_book import AddressBook
from api.services.errors import (
    DuplicatePersonError,
    DuplicatePolicyError,
    InvalidArgumentError,
    PersonNotFoundError,
    PolicyNotFoundError,
)
from api.services.model_manager import ModelManager
from api.services.person import Person
from api.services.person_filters import (
    COMPARATOR_BY_BIRTHDAY,
    COMPARATOR_BY_NAME,
    PREDICATE_SHOW_ALL_PERSONS,
    NameContainsKeywordsPredicate,
    TagContainsKeywordsPredicate,
)
from api.services.policy import Policy
from api.services.reminders import ReminderType
from api.services.user_prefs import GuiSettings, UserPrefs

pytestmark = pytest.mark.unit


class TestConstruction:
    def test_defaults(self):
        model = ModelManager()
        assert model.get_address_book() == AddressBook()
        assert model.get_user_prefs() == UserPrefs()
        assert model.get_sorted_filtered_person_list().to_list() == []

    def test_empty_store_has_no_display_client(self):
        model = ModelManager()
        assert model.get_display_client() is None
        assert not model.has_display_client()

    def test_first_person_displayed_on_start(self, model, alice):
        assert model.get_display_client() == alice

    def test_address_book_is_copied(self, typical_address_book, alice, clock):
        model = ModelManager(typical_address_book, clock=clock)
        typical_address_book.remove_person(alice)
        assert model.has_person(alice)


class TestUserPrefs:
    def test_set_user_prefs(self, model):
        prefs = UserPrefs(GuiSettings(800, 700, 10, 20), Path("elsewhere/book.json"))
        model.set_user_prefs(prefs)
        assert model.get_user_prefs() == prefs
        assert model.get_user_prefs() is not prefs

    def test_set_user_prefs_none_rejected(self, model):
        with pytest.raises(InvalidArgumentError):
            model.set_user_prefs(None)

    def test_gui_settings(self, model):
        settings = GuiSettings(1024, 768, 0, 0)
        model.set_gui_settings(settings)
        assert model.get_gui_settings() == settings

    def test_gui_settings_none_rejected(self, model):
        with pytest.raises(InvalidArgumentError):
            model.set_gui_settings(None)

    def test_address_book_file_path(self, model):
        model.set_address_book_file_path(Path("address/book/file/path"))
        assert model.get_address_book_file_path() == Path("address/book/file/path")

    def test_address_book_file_path_none_rejected(self, model):
        with pytest.raises(InvalidArgumentError):
            model.set_address_book_file_path(None)


class TestPersons:
    def test_has_person_none_rejected(self, model):
        with pytest.raises(InvalidArgumentError):
            model.has_person(None)

    def test_has_person(self, model, alice):
        assert model.has_person(alice)
        assert not ModelManager().has_person(alice)

    def test_add_person_resets_filter(self, model):
        model.update_filtered_person_list(NameContainsKeywordsPredicate(("Alice",)))
        assert len(model.get_sorted_filtered_person_list()) == 1
        model.add_person(Person(name="Elle Meyer", phone="9482224"))
        assert model.get_sorted_filtered_person_list().predicate is PREDICATE_SHOW_ALL_PERSONS
        assert len(model.get_sorted_filtered_person_list()) == 5

    def test_add_duplicate_rejected(self, model, alice):
        with pytest.raises(DuplicatePersonError):
            model.add_person(alice.with_changes(phone="111"))

    def test_delete_person(self, model, bob):
        model.delete_person(bob)
        assert not model.has_person(bob)
        assert bob not in model.get_sorted_filtered_person_list()

    def test_delete_missing_person(self, model):
        with pytest.raises(PersonNotFoundError):
            model.delete_person(Person(name="Nobody Here", phone="000"))

    def test_set_person(self, model, carol):
        edited = carol.with_changes(remark="Likes tea")
        model.set_person(carol, edited)
        assert model.get_address_book().get_person_list()[2] == edited

    def test_set_person_none_rejected(self, model, carol):
        with pytest.raises(InvalidArgumentError):
            model.set_person(carol, None)

    def test_set_address_book(self, model):
        model.set_address_book(AddressBook())
        assert model.get_sorted_filtered_person_list().is_empty()


class TestPolicies:
    def test_add_policy_replaces_person(self, model, bob):
        policy = Policy("CAR-1", "Motor", premium=60.0)
        edited = model.add_policy(bob, policy)
        assert "CAR-1" in edited.policies
        assert model.get_address_book().get_person_list()[1] == edited
        assert not any(p == bob for p in model.get_address_book().get_person_list())

    def test_add_then_delete_restores_person(self, model, bob):
        edited = model.add_policy(bob, Policy("CAR-1", "Motor"))
        restored = model.delete_policy(edited, "CAR-1")
        assert restored == bob
        assert model.get_address_book().get_person_list()[1] == bob

    def test_duplicate_policy_leaves_store_unchanged(self, model, alice):
        before = model.get_address_book().get_person_list()
        with pytest.raises(DuplicatePolicyError):
            model.add_policy(alice, Policy("P-100", "Again"))
        assert model.get_address_book().get_person_list() == before

    def test_delete_missing_policy(self, model, bob):
        before = model.get_address_book().get_person_list()
        with pytest.raises(PolicyNotFoundError):
            model.delete_policy(bob, "NOPE")
        assert model.get_address_book().get_person_list() == before

    def test_add_policy_to_stale_person_rejected(self, model, bob):
        stale = bob.with_changes(remark="outdated")
        with pytest.raises(PersonNotFoundError):
            model.add_policy(stale, Policy("CAR-1"))

    def test_add_policy_none_rejected(self, model, bob):
        with pytest.raises(InvalidArgumentError):
            model.add_policy(bob, None)


class TestView:
    def test_filter(self, model, alice, bob):
        model.update_filtered_person_list(TagContainsKeywordsPredicate(("friends",)))
        assert model.get_sorted_filtered_person_list().to_list() == [alice, bob]

    def test_sort(self, model, typical_persons):
        model.update_sort_person_comparator(COMPARATOR_BY_NAME)
        assert [p.name for p in model.get_sorted_filtered_person_list()] == sorted(
            p.name for p in typical_persons
        )

    def test_birthday_sort_follows_model_clock(self, model, alice, bob, carol, dave):
        model.update_sort_person_comparator(COMPARATOR_BY_BIRTHDAY)
        assert model.get_sorted_filtered_person_list().to_list() == [dave, alice, bob, carol]

    def test_birthday_sort_agrees_with_birthday_reminders(self, model):
        model.update_sort_person_comparator(COMPARATOR_BY_BIRTHDAY)
        upcoming = list(model.get_birthday_reminders())
        view = model.get_sorted_filtered_person_list().to_list()
        assert view[:len(upcoming)] == upcoming

    def test_none_predicate_rejected(self, model):
        with pytest.raises(InvalidArgumentError):
            model.update_filtered_person_list(None)

    def test_none_comparator_rejected(self, model):
        with pytest.raises(InvalidArgumentError):
            model.update_sort_person_comparator(None)

    def test_view_tracks_mutations(self, model):
        view = model.get_sorted_filtered_person_list()
        elle = Person(name="Elle Meyer", phone="9482224")
        model.add_person(elle)
        assert view[-1] == elle


class TestDisplayClient:
    def test_set_display_client(self, carol, dave, clock):
        book = AddressBook()
        book.add_person(carol)
        book.add_person(dave)
        model = ModelManager(book, clock=clock)
        model.set_display_client(dave)
        assert model.get_display_client() == dave

    def test_set_none_clears(self, model):
        model.set_display_client(None)
        assert not model.has_display_client()

    def test_clear(self, model):
        model.clear_display_client()
        assert model.get_display_client() is None

    def test_first_in_view(self, model, carol):
        model.update_filtered_person_list(NameContainsKeywordsPredicate(("Carol",)))
        model.set_display_client_as_first_in_sorted_filtered_person_list()
        assert model.get_display_client() == carol

    def test_first_in_empty_view_clears(self, model):
        model.update_filtered_person_list(NameContainsKeywordsPredicate(("Zed",)))
        model.set_display_client_as_first_in_sorted_filtered_person_list()
        assert model.get_display_client() is None


class TestReminders:
    def test_overdue_last_met(self, model, alice, dave):
        reminders = model.get_overdue_last_met()
        assert reminders.reminder_type is ReminderType.LAST_MET
        assert list(reminders) == [alice, dave]

    def test_schedules(self, model, bob, carol):
        reminders = model.get_schedules()
        assert reminders.reminder_type is ReminderType.SCHEDULES
        assert list(reminders) == [carol, bob]

    def test_birthdays(self, model, alice, dave):
        reminders = model.get_birthday_reminders()
        assert reminders.reminder_type is ReminderType.BIRTHDAYS
        assert list(reminders) == [dave, alice]

    def test_thresholds_configurable(self, typical_address_book, alice, bob, dave, today):
        model = ModelManager(
            typical_address_book,
            last_met_overdue_days=1,
            birthday_window_days=0,
            clock=lambda: today,
        )
        assert list(model.get_overdue_last_met()) == [alice, dave, bob]
        assert list(model.get_birthday_reminders()) == [dave]

    def test_clock_advances(self, typical_address_book, alice, dave, today):
        model = ModelManager(typical_address_book, clock=lambda: today + timedelta(days=3))
        # 15 Mar and 17 Mar birthdays have both passed by 18 Mar
        assert list(model.get_birthday_reminders()) == []

    def test_reminders_after_edit(self, model, bob, today):
        model.set_person(bob, bob.with_changes(last_met=today - timedelta(days=365 * 2)))
        names = [p.name for p in model.get_overdue_last_met()]
        assert names[0] == "Bob Choo"


class TestEquality:
    def test_same_data_is_equal(self, typical_address_book, clock):
        prefs = UserPrefs()
        first = ModelManager(typical_address_book, prefs, clock=clock)
        second = ModelManager(typical_address_book, prefs, clock=clock)
        assert first == second
        assert first == first

    def test_different_filter_not_equal(self, typical_address_book, clock):
        first = ModelManager(typical_address_book, clock=clock)
        second = ModelManager(typical_address_book, clock=clock)
        second.update_filtered_person_list(NameContainsKeywordsPredicate(("Alice",)))
        assert first != second

    def test_different_prefs_not_equal(self, typical_address_book, clock):
        first = ModelManager(typical_address_book, clock=clock)
        second = ModelManager(typical_address_book, clock=clock)
        second.set_address_book_file_path(Path("other.json"))
        assert first != second

    def test_not_equal_to_other_types(self, model):
        assert model != 5
        assert model is not None
