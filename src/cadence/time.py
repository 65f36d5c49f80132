# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum


def now_local() -> pendulum.DateTime:
    return pendulum.now("local")


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    """
    Parse an ISO-8601 timestamp.

    Raises ValueError for anything that is not a date with a time, including
    other ISO-8601 values such as plain dates or durations.
    """
    parsed = pendulum.parse(datetime)
    if not isinstance(parsed, pendulum.DateTime):
        raise ValueError(f"Not a timestamp: '{datetime}'")
    return parsed


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def datetime_to_display_local_datetime_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY-MM-DD ddd HH:mm")


def datetime_to_display_local_datetime_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_display_local_datetime_str(datetime)


def date_to_str(date: pendulum.Date) -> str:
    """Format a calendar date as 'YYYY-MM-DD'."""
    return date.to_date_string()


def date_from_str_optional(date_str: Optional[str]) -> Optional[pendulum.Date]:
    """
    Parse a 'YYYY-MM-DD' string into a pendulum.Date.

    Returns None for None, empty or unparseable input.
    """
    if not date_str:
        return None
    try:
        parsed = pendulum.parse(date_str, exact=True)
    except ValueError:
        return None
    if isinstance(parsed, pendulum.DateTime):
        return parsed.date()
    if isinstance(parsed, pendulum.Date):
        return parsed
    return None


def clock_from_str(clock: str) -> Optional[tuple[int, int]]:
    """
    Parse an '(H)H:MM' clock string into (hour, minute).

    Returns None when the string is not a valid 24h clock time.
    """
    parts = clock.strip().split(":")
    if len(parts) != 2:
        return None
    hour_str, minute_str = parts
    if not (hour_str + minute_str).isascii():
        return None
    if not (hour_str.isdigit() and minute_str.isdigit()) or len(minute_str) != 2:
        return None
    hour, minute = int(hour_str), int(minute_str)
    if hour > 23 or minute > 59:
        return None
    return (hour, minute)


def clock_to_str(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"
