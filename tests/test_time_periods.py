from odflow.utils.time_periods import (
    format_multiple_time_periods, format_time_period, format_time_period_with_number,
    format_time_periods_list, get_period_number, normalize_od_time
)


def test_format_single_period_uses_12_hour_clock():
    assert format_time_period('14:00-15:00') == '2:00 PM - 3:00 PM'
    assert format_time_period('08:00-09:00') == '8:00 AM - 9:00 AM'
    assert format_time_period('12:00-13:00') == '12:00 PM - 1:00 PM'


def test_full_day_label():
    assert format_time_period('full-day') == 'Full Day (8:00 AM - 5:00 PM)'
    assert format_time_period_with_number('full-day') == 'Full Day (8:00 AM - 5:00 PM)'
    assert get_period_number('full-day') == 'Full Day'


def test_period_numbers():
    assert get_period_number('09:00-10:00') == 'Period 2'
    assert get_period_number('16:00-17:00') == 'Period 9'
    assert get_period_number('18:00-19:00') == '18:00-19:00'
    assert format_time_period_with_number('09:00-10:00') == 'Period 2: 9:00 AM - 10:00 AM'


def test_multiple_periods_span_first_to_last():
    assert format_multiple_time_periods(['09:00-10:00', '10:00-11:00', '11:00-12:00']) == '9:00 AM - 12:00 PM'
    assert format_multiple_time_periods(['14:00-15:00']) == '2:00 PM - 3:00 PM'
    assert format_multiple_time_periods('14:00-15:00') == '2:00 PM - 3:00 PM'
    assert format_multiple_time_periods([]) == 'No time selected'


def test_periods_list_uses_short_labels():
    assert format_time_periods_list(['12:00-13:00', '13:00-14:00']) == '12-1, 1-2'
    assert format_time_periods_list([]) == 'No periods selected'


def test_normalize_sorts_and_dedupes():
    assert normalize_od_time(['11:00-12:00', '09:00-10:00', '11:00-12:00']) == ['09:00-10:00', '11:00-12:00']
    assert normalize_od_time('10:00-11:00, 08:00-09:00') == ['08:00-09:00', '10:00-11:00']
    assert normalize_od_time(None) == []


def test_normalize_full_day_wins():
    assert normalize_od_time(['09:00-10:00', 'full-day']) == ['full-day']
