from datetime import date

import pytest

from odflow.utils.exceptions import ValidationError
from odflow.utils.validators import (
    parse_date, validate_email, validate_od_dates, validate_phone_number,
    validate_roll_number, validate_time_periods
)

TODAY = date(2024, 10, 10)


def test_phone_numbers():
    assert validate_phone_number('+91 9876543210')
    assert validate_phone_number('98765-43210')
    assert not validate_phone_number('12345')
    assert not validate_phone_number('+91 98765 43210 999')


def test_email_and_roll_number():
    assert validate_email('john.doe@college.edu')
    assert not validate_email('john.doe@college')
    assert validate_roll_number('CSE001')
    assert not validate_roll_number('CSE-001')


def test_parse_date():
    assert parse_date('2024-10-15', 'From date') == date(2024, 10, 15)
    with pytest.raises(ValidationError, match='YYYY-MM-DD'):
        parse_date('15/10/2024', 'From date')
    with pytest.raises(ValidationError, match='From date is required'):
        parse_date('', 'From date')


def test_three_days_in_advance_is_accepted():
    validate_od_dates(date(2024, 10, 13), date(2024, 10, 13), TODAY)


def test_less_than_three_days_in_advance_is_rejected():
    with pytest.raises(ValidationError) as excinfo:
        validate_od_dates(date(2024, 10, 12), date(2024, 10, 12), TODAY)
    assert '2024-10-13' in str(excinfo.value)


def test_to_date_before_from_date():
    with pytest.raises(ValidationError, match='To date cannot be before from date'):
        validate_od_dates(date(2024, 10, 20), date(2024, 10, 19), TODAY)


def test_time_periods():
    validate_time_periods(['full-day'])
    validate_time_periods(['08:00-09:00', '16:00-17:00'])
    with pytest.raises(ValidationError, match='at least one time period'):
        validate_time_periods([])
    with pytest.raises(ValidationError, match='Unknown time period'):
        validate_time_periods(['17:00-18:00'])
