"""Schedule line helpers.

A schedule line is the single display string for recurring classes, e.g.
``"Monday, Wednesday 18:00–20:00"``.  Editors build it from checkbox days and
two time dropdowns and parse it back when a saved record is opened again.
Parsing is best effort: unknown day spellings and missing times simply come
back empty so a malformed legacy line can still be corrected in the editor.
"""

import re
from typing import List, NamedTuple, Sequence, Tuple

DASH = '–'

WEEKDAYS = [
    'Monday',
    'Tuesday',
    'Wednesday',
    'Thursday',
    'Friday',
    'Saturday',
    'Sunday',
]

WEEKDAYS_BG = [
    'Понеделник',
    'Вторник',
    'Сряда',
    'Четвъртък',
    'Петък',
    'Събота',
    'Неделя',
]

WEEKDAY_LABELS = dict(zip(WEEKDAYS, WEEKDAYS_BG))

TIME_RANGE_RE = re.compile(r'(\d{1,2}:\d{2})\s*[–-]\s*(\d{1,2}:\d{2})')
CLOCK_RE = re.compile(r'(\d{1,2}):(\d{2})')


class ParsedSchedule(NamedTuple):
    days: List[str]
    start: str
    end: str


def build_schedule_line(days: Sequence[str], start: str = '', end: str = '') -> str:
    days_part = ', '.join(days or [])
    start = (start or '').strip()
    end = (end or '').strip()
    if start and end:
        time_part = f'{start}{DASH}{end}'
    else:
        time_part = start
    line = f'{days_part} {time_part}' if time_part else days_part
    return line.strip()


def parse_schedule_line(line: str, day_names: Sequence[str] = WEEKDAYS) -> ParsedSchedule:
    line = line or ''
    # canonical order, not the order in the line
    days = [day for day in day_names if day in line]
    match = TIME_RANGE_RE.search(line)
    if not match:
        return ParsedSchedule(days, '', '')
    return ParsedSchedule(days, match.group(1), match.group(2))


def pad_time(value: str) -> str:
    """``"9:00"`` -> ``"09:00"`` so times compare and match the dropdowns."""
    value = (value or '').strip()
    match = CLOCK_RE.fullmatch(value)
    if not match:
        return value
    return f'{int(match.group(1)):02d}:{match.group(2)}'


def split_time_range(value: str) -> Tuple[str, str]:
    """``"18:00–20:00"`` (or with a hyphen) -> ``("18:00", "20:00")``."""
    raw = (value or '').strip().replace('-', DASH)
    if not raw:
        return '', ''
    parts = [part.strip() for part in raw.split(DASH)]
    start = parts[0]
    end = parts[1] if len(parts) > 1 else ''
    return pad_time(start), pad_time(end)


def join_time_range(start: str, end: str) -> str:
    return f'{start}{DASH}{end}'


def filter_days(values, day_names: Sequence[str] = WEEKDAYS) -> List[str]:
    if not isinstance(values, (list, tuple)):
        return []
    return [value for value in values if value in day_names]


def time_options(step_minutes=30, first_hour=0, last_hour=23, last_minute=59) -> List[str]:
    options = []
    for hour in range(first_hour, last_hour + 1):
        for minute in range(0, 60, step_minutes):
            if hour == last_hour and minute > last_minute:
                break
            options.append(f'{hour:02d}:{minute:02d}')
    return options


# Course editor: 07:00 .. 22:00 every half hour
COURSE_TIME_OPTIONS = time_options(30, 7, 22, last_minute=0)
# Calligraphy editor: whole day in 5 minute steps
CALLIGRAPHY_TIME_OPTIONS = time_options(5)
