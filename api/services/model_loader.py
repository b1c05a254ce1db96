"""
Builds the ModelManager from storage at start-up.

- Preferences missing or unreadable: defaults
- Address book missing: sample data (if enabled), else empty
- Address book unreadable: empty, the bad file is left untouched until the next save
"""
import logging
from datetime import date
from typing import Callable

from api.services.address_book import AddressBook
from api.services.errors import DataLoadingError
from api.services.model_manager import ModelManager
from api.services.sample_data import get_sample_address_book
from api.services.storage import StorageManager
from api.services.user_prefs import UserPrefs
from config.settings import Settings

logger = logging.getLogger(__name__)


def load_user_prefs(storage: StorageManager) -> UserPrefs:
    try:
        prefs = storage.read_user_prefs()
    except DataLoadingError as e:
        logger.warning(f"Preferences file is not in the correct format, using defaults: {e}")
        return UserPrefs()
    if prefs is None:
        logger.info(f"Creating new preferences file {storage.user_prefs_file_path}")
        return UserPrefs()
    return prefs


def load_address_book(storage: StorageManager, seed_sample_data: bool = True) -> AddressBook:
    try:
        book = storage.read_address_book()
    except DataLoadingError as e:
        logger.warning(f"Data file could not be loaded, starting with an empty address book: {e}")
        return AddressBook()
    if book is None:
        if seed_sample_data:
            logger.info(f"Data file {storage.address_book_file_path} not found, starting with sample clients")
            return get_sample_address_book()
        return AddressBook()
    return book


def init_model(storage: StorageManager, app_settings: Settings,
               clock: Callable[[], date] = date.today) -> ModelManager:
    user_prefs = load_user_prefs(storage)
    user_prefs.set_address_book_file_path(storage.address_book_file_path)
    address_book = load_address_book(storage, app_settings.seed_sample_data)
    return ModelManager(
        address_book,
        user_prefs,
        last_met_overdue_days=app_settings.last_met_overdue_days,
        birthday_window_days=app_settings.birthday_window_days,
        clock=clock,
    )
