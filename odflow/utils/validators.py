"""
Validation utilities
"""

import re
from datetime import date, datetime, timedelta
from typing import Any, List, Optional

from odflow.utils.exceptions import ValidationError
from odflow.utils.time_periods import FULL_DAY, PERIOD_IDS

STUDENT_YEARS = ['1st', '2nd', '3rd', '4th']


def validate_email(email: str) -> bool:
    """
    Validate email format

    Args:
        email: Email to validate

    Returns:
        True if valid email
    """
    if not email or not isinstance(email, str):
        return False

    pattern = r'^[^\s@]+@[^\s@]+\.[^\s@]+$'
    return bool(re.match(pattern, email.strip()))


def validate_required(value: Any, field_name: str) -> None:
    """
    Validate required field

    Args:
        value: Value to validate
        field_name: Name of the field for error message

    Raises:
        ValidationError: If value is empty or None
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required")
    if isinstance(value, (list, tuple)) and not value:
        raise ValidationError(f"{field_name} is required")


def validate_string_length(value: str, min_length: int = 1, max_length: Optional[int] = None,
                           field_name: str = "Field") -> None:
    """
    Validate string length

    Args:
        value: String to validate
        min_length: Minimum length
        max_length: Maximum length
        field_name: Name of the field for error message

    Raises:
        ValidationError: If length is invalid
    """
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")

    if len(value.strip()) < min_length:
        raise ValidationError(f"{field_name} must be at least {min_length} characters")

    if max_length and len(value) > max_length:
        raise ValidationError(f"{field_name} must be no more than {max_length} characters")


def validate_phone_number(phone: str) -> bool:
    """
    Validate phone number format

    Spaces and dashes are ignored; 10-13 digits with an optional leading +.
    """
    if not phone or not isinstance(phone, str):
        return False

    compact = re.sub(r'[\s-]', '', phone)
    return bool(re.match(r'^\+?[0-9]{10,13}$', compact))


def validate_roll_number(roll_number: str) -> bool:
    if not roll_number or not isinstance(roll_number, str):
        return False
    return bool(re.match(r'^[A-Za-z0-9]+$', roll_number.strip()))


def validate_file_extension(filename: str, allowed_extensions: set) -> bool:
    """
    Validate file extension

    Args:
        filename: Name of the file
        allowed_extensions: Set of allowed extensions

    Returns:
        True if extension is allowed
    """
    if not filename:
        return False

    # Get file extension
    if '.' not in filename:
        return False

    extension = filename.rsplit('.', 1)[1].lower()
    return extension in allowed_extensions


def parse_date(value: Any, field_name: str) -> date:
    """
    Parse an ISO ``YYYY-MM-DD`` date

    Raises:
        ValidationError: If missing or malformed
    """
    validate_required(value, field_name)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), '%Y-%m-%d').date()
    except ValueError:
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format")


def validate_od_dates(from_date: date, to_date: date, today: date, advance_days: int = 3) -> None:
    """
    Check the submission window of an OD request

    Args:
        from_date: First day of the OD
        to_date: Last day of the OD
        today: Submission day
        advance_days: Minimum number of days between today and from_date

    Raises:
        ValidationError: If the window is not respected
    """
    if (from_date - today).days < advance_days:
        earliest = today + timedelta(days=advance_days)
        raise ValidationError(
            f"OD requests must be submitted at least {advance_days} days in advance. "
            f"Please select a from date on or after {earliest.isoformat()}."
        )

    if to_date < from_date:
        raise ValidationError("To date cannot be before from date.")


def validate_time_periods(periods: List[str]) -> None:
    """
    Validate normalized OD periods

    Raises:
        ValidationError: If no period is selected or an id is unknown
    """
    if not periods:
        raise ValidationError("Please select at least one time period")

    unknown = [period for period in periods if period != FULL_DAY and period not in PERIOD_IDS]
    if unknown:
        raise ValidationError(f"Unknown time period: {', '.join(unknown)}")
