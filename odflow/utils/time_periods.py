"""
Formatting of OD time periods

An OD request covers either the whole college day (``full-day``) or a list
of hourly periods identified by their 24h range, e.g. ``09:00-10:00``.
"""

from typing import List, Union

FULL_DAY = 'full-day'
FULL_DAY_LABEL = 'Full Day (8:00 AM - 5:00 PM)'

TIME_PERIODS = [
    ('08:00-09:00', '8-9', 'Period 1'),
    ('09:00-10:00', '9-10', 'Period 2'),
    ('10:00-11:00', '10-11', 'Period 3'),
    ('11:00-12:00', '11-12', 'Period 4'),
    ('12:00-13:00', '12-1', 'Period 5'),
    ('13:00-14:00', '1-2', 'Period 6'),
    ('14:00-15:00', '2-3', 'Period 7'),
    ('15:00-16:00', '3-4', 'Period 8'),
    ('16:00-17:00', '4-5', 'Period 9'),
]

PERIOD_IDS = [period_id for period_id, _, _ in TIME_PERIODS]
SHORT_LABELS = {period_id: short for period_id, short, _ in TIME_PERIODS}
PERIOD_NUMBERS = {period_id: label for period_id, _, label in TIME_PERIODS}
PERIOD_NUMBERS[FULL_DAY] = 'Full Day'


def _to_12_hour(time: str) -> str:
    hours, minutes = time.split(':')
    hour = int(hours)
    ampm = 'PM' if hour >= 12 else 'AM'
    if hour == 0:
        display_hour = 12
    elif hour > 12:
        display_hour = hour - 12
    else:
        display_hour = hour
    return f"{display_hour}:{minutes} {ampm}"


def format_time_period(time_string: str) -> str:
    """
    Format a single period for display

    Args:
        time_string: ``full-day`` or a 24h range such as ``14:00-15:00``

    Returns:
        Human readable range, e.g. ``2:00 PM - 3:00 PM``
    """
    if time_string == FULL_DAY:
        return FULL_DAY_LABEL

    if '-' in time_string:
        start, end = time_string.split('-', 1)
        return f"{_to_12_hour(start)} - {_to_12_hour(end)}"

    return time_string


def get_period_number(time_string: str) -> str:
    return PERIOD_NUMBERS.get(time_string, time_string)


def format_time_period_with_number(time_string: str) -> str:
    """``Period 2: 9:00 AM - 10:00 AM``; full day is shown without a number"""
    time_range = format_time_period(time_string)
    if time_string == FULL_DAY:
        return time_range
    return f"{get_period_number(time_string)}: {time_range}"


def format_multiple_time_periods(od_time: Union[str, List[str]]) -> str:
    """Span from the start of the first period to the end of the last"""
    if isinstance(od_time, str):
        return format_time_period(od_time)

    if od_time:
        if len(od_time) == 1:
            return format_time_period(od_time[0])

        first_time = od_time[0].split('-')[0]
        last_time = od_time[-1].split('-')[-1]
        return format_time_period(f"{first_time}-{last_time}")

    return 'No time selected'


def format_time_periods_list(od_time: Union[str, List[str]]) -> str:
    """Comma separated short labels, e.g. ``9-10, 10-11``"""
    if isinstance(od_time, str):
        return format_time_period(od_time)

    if od_time:
        return ', '.join(SHORT_LABELS.get(period, period) for period in od_time)

    return 'No periods selected'


def normalize_od_time(od_time: Union[str, List[str], None]) -> List[str]:
    """
    Normalize submitted periods into a sorted list of known period ids

    ``full-day`` (alone or among periods) wins over individual periods.
    Unknown ids are returned unchanged so the caller can reject them.
    """
    if od_time is None:
        return []
    if isinstance(od_time, str):
        od_time = [part.strip() for part in od_time.split(',') if part.strip()]

    periods = []
    for period in od_time:
        if period == FULL_DAY:
            return [FULL_DAY]
        if period not in periods:
            periods.append(period)

    order = {period_id: index for index, period_id in enumerate(PERIOD_IDS)}
    return sorted(periods, key=lambda period: order.get(period, len(order)))
