"""Shared validation utilities"""

import re
from datetime import datetime
from typing import Optional


def validate_required_text(value: Optional[str], message: str) -> Optional[str]:
    """
    Trim a required text field.

    Args:
        value: Raw string from the request body
        message: Error message used when the value is blank

    Returns:
        The trimmed string (None is passed through for partial updates)

    Raises:
        ValueError: If the value is empty after trimming
    """
    if value is None:
        return value

    value = value.strip()
    if not value:
        raise ValueError(message)
    return value


def validate_optional_text(value: Optional[str]) -> Optional[str]:
    """Trim an optional text field, treating blank as absent"""
    if value is None:
        return value
    value = value.strip()
    return value or None


def validate_min(value, minimum, message: str):
    """Reject numbers below `minimum` (None passes through)"""
    if value is not None and value < minimum:
        raise ValueError(message)
    return value


def validate_name_list(names: Optional[list[str]]) -> Optional[list[str]]:
    """Trim every name and drop empty entries"""
    if names is None:
        return names
    return [n.strip() for n in names if n and n.strip()]


def validate_location_link(link: Optional[str]) -> Optional[str]:
    """
    Validate a map/location URL.

    Raises:
        ValueError: If the link is not an http(s) URL
    """
    link = validate_optional_text(link)
    if link is None:
        return link

    if not re.match(r"^https?://\S+$", link, re.IGNORECASE):
        raise ValueError("Konum linki geçerli bir URL olmalıdır")
    return link


def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime to naive local time.

    Visit dates are stored naive in server-local time so the daily rollover
    can compare them with local midnight.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)
