"""
Phone number utilities for ClientBook.

Client phone numbers are stored as plain digit strings, with an optional
leading "+" for international numbers.
"""
import re
from typing import Optional

MIN_PHONE_DIGITS = 3


def normalize_phone(raw: str) -> Optional[str]:
    """
    Normalize a phone number by stripping formatting characters.

    Args:
        raw: Raw phone number in any common format

    Returns:
        Digits (with a leading "+" if one was given) or None if invalid

    Examples:
        >>> normalize_phone("(901) 229-5017")
        '9012295017'
        >>> normalize_phone("+65 9123 4567")
        '+6591234567'
        >>> normalize_phone("12")
        None
    """
    if not raw:
        return None

    raw = raw.strip()
    # Reject letters outright; only separators may be stripped
    if re.search(r'[^\d\s\-().+]', raw):
        return None

    digits = re.sub(r'\D', '', raw)
    if len(digits) < MIN_PHONE_DIGITS:
        return None

    if raw.startswith("+"):
        return f"+{digits}"
    return digits
