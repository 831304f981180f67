# app/utils/validators.py
import re
from datetime import date
from typing import Any, Iterable, Mapping, Optional

PHONE_PATTERN = re.compile(r"^[6-9]\d{9}$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
UNSAFE_CHARS = re.compile(r"['\"`;\\]")


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def validate_required_fields(data: Mapping[str, Any], required_fields: Iterable[str]) -> Optional[str]:
    for field in required_fields:
        if is_missing(data.get(field)):
            return f"Missing required field: {field}"
    return None


def is_valid_phone_number(phone: Any) -> bool:
    """Indian 10-digit mobile number."""
    return isinstance(phone, str) and bool(PHONE_PATTERN.match(phone))


def parse_date(value: Any) -> Optional[date]:
    """YYYY-MM-DD to date, or None when the string is not a real calendar date."""
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def sanitize_input(value: Optional[str]) -> Optional[str]:
    """Trim and strip quote/semicolon/backslash characters. Queries stay parameterized regardless."""
    if value is None:
        return None
    return UNSAFE_CHARS.sub("", value.strip())
