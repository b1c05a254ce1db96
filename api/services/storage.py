"""
JSON storage for the address book and user preferences.

Files:
- address book: {"persons": [Person.to_dict(), ...]}
- user prefs:   UserPrefs.to_dict()

Saves write to a temp file in the same directory and rename it over the
target, so a crash mid-write never leaves a truncated file behind.
"""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from api.services.address_book import AddressBook, ReadOnlyAddressBook
from api.services.errors import ClientBookError, DataLoadingError
from api.services.person import Person
from api.services.user_prefs import UserPrefs

logger = logging.getLogger(__name__)


def _read_json(path: Path):
    """Read a JSON file; None if missing or empty."""
    if not path.exists():
        logger.info(f"No existing data file at {path}")
        return None
    if path.stat().st_size == 0:
        logger.info(f"Empty data file at {path}")
        return None
    try:
        with open(path, "r") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise DataLoadingError(f"Could not read {path}: {e}") from e


def _write_json_atomic(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_fd, temp_path = tempfile.mkstemp(suffix=".json", dir=path.parent)
    try:
        with os.fdopen(temp_fd, "w") as f:
            json.dump(data, f, indent=2)
        # Atomic rename (same filesystem = atomic on POSIX)
        shutil.move(temp_path, path)
    except Exception:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise


class JsonAddressBookStorage:
    def __init__(self, file_path):
        self.file_path = Path(file_path)

    def read_address_book(self) -> Optional[AddressBook]:
        """
        Load the address book.

        Returns:
            The AddressBook, or None if the file does not exist

        Raises:
            DataLoadingError: the file is unreadable, malformed, or holds
                invalid or duplicate persons
        """
        data = _read_json(self.file_path)
        if data is None:
            return None
        if not isinstance(data, dict) or not isinstance(data.get("persons", []), list):
            raise DataLoadingError(f"Unexpected address book format in {self.file_path}")

        try:
            persons = [Person.from_dict(item) for item in data.get("persons", [])]
            book = AddressBook()
            book.set_persons(persons)
        except (ClientBookError, ValueError, TypeError, AttributeError) as e:
            raise DataLoadingError(f"Illegal values in {self.file_path}: {e}") from e

        logger.info(f"Loaded {len(book)} clients from {self.file_path}")
        return book

    def save_address_book(self, address_book: ReadOnlyAddressBook) -> None:
        persons = [p.to_dict() for p in address_book.get_person_list()]
        _write_json_atomic(self.file_path, {"persons": persons})
        logger.debug(f"Saved {len(persons)} clients to {self.file_path}")


class JsonUserPrefsStorage:
    def __init__(self, file_path):
        self.file_path = Path(file_path)

    def read_user_prefs(self) -> Optional[UserPrefs]:
        data = _read_json(self.file_path)
        if data is None:
            return None
        if not isinstance(data, dict):
            raise DataLoadingError(f"Unexpected preferences format in {self.file_path}")
        try:
            return UserPrefs.from_dict(data)
        except (ValueError, TypeError) as e:
            raise DataLoadingError(f"Illegal values in {self.file_path}: {e}") from e

    def save_user_prefs(self, user_prefs: UserPrefs) -> None:
        _write_json_atomic(self.file_path, user_prefs.to_dict())


class StorageManager:
    """Combines address book and user prefs storage."""

    def __init__(self, address_book_storage: JsonAddressBookStorage,
                 user_prefs_storage: JsonUserPrefsStorage):
        self.address_book_storage = address_book_storage
        self.user_prefs_storage = user_prefs_storage

    @property
    def address_book_file_path(self) -> Path:
        return self.address_book_storage.file_path

    @property
    def user_prefs_file_path(self) -> Path:
        return self.user_prefs_storage.file_path

    def read_address_book(self) -> Optional[AddressBook]:
        return self.address_book_storage.read_address_book()

    def save_address_book(self, address_book: ReadOnlyAddressBook) -> None:
        self.address_book_storage.save_address_book(address_book)

    def read_user_prefs(self) -> Optional[UserPrefs]:
        return self.user_prefs_storage.read_user_prefs()

    def save_user_prefs(self, user_prefs: UserPrefs) -> None:
        self.user_prefs_storage.save_user_prefs(user_prefs)
