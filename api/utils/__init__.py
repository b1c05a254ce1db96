"""
Shared utility functions for ClientBook API services.
"""

from api.utils.datetime_utils import days_until_birthday, make_aware, next_birthday

__all__ = ["days_until_birthday", "make_aware", "next_birthday"]
