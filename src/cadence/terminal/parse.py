# SPDX-License-Identifier: MIT

import os
import re
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

import pendulum
import typer

from cadence.time import date_from_str_optional

WEEKDAY_ABBREVIATIONS = {
    "sun": 0,
    "mon": 1,
    "tue": 2,
    "wed": 3,
    "thu": 4,
    "fri": 5,
    "sat": 6,
}


def parse_datetime(datetime_param: Optional[str]) -> Optional[pendulum.DateTime]:
    """
    Parse a review timestamp given on the command line.

    Accepts YYYY-MM-DD with an optional time part, (H)H:mm for today, and
    "now" / "n".
    """
    if datetime_param is None:
        return None

    datetime = str(datetime_param).strip()

    if datetime == "now" or datetime == "n":
        return pendulum.now("local")

    # Match YYYY-MM-DD format (with optional time component)
    if re.match(r"\d{4}-\d{2}-\d{2}", datetime):
        try:
            parsed = pendulum.parse(datetime, tz="local")
        except ValueError:
            raise typer.BadParameter(f"Invalid date: '{datetime}'")
        if isinstance(parsed, pendulum.DateTime):
            return parsed
        raise typer.BadParameter(f"Invalid date: '{datetime}'")

    # Match (H)H:mm format (time only, use today's date)
    time_match = re.match(r"^(\d{1,2}):(\d{2})$", datetime)
    if time_match:
        hour = int(time_match.group(1))
        minute = int(time_match.group(2))

        if hour < 0 or hour > 23:
            raise typer.BadParameter(f"Hour must be between 0 and 23, got {hour}")
        if minute < 0 or minute > 59:
            raise typer.BadParameter(f"Minute must be between 0 and 59, got {minute}")

        return pendulum.today("local").set(hour=hour, minute=minute)

    raise typer.BadParameter("Incorrect datetime format")


def parse_date(date_param: Optional[str]) -> Optional[pendulum.Date]:
    if date_param is None:
        return None
    date = date_from_str_optional(date_param)
    if date is None:
        raise typer.BadParameter(
            f"Date must be in YYYY-MM-DD format, got '{date_param}'"
        )
    return date


def parse_weekdays(weekdays_param: Optional[str]) -> Optional[list[int]]:
    """
    Parse a comma-separated list of weekdays.

    Args:
        weekdays_param: Numbers (0 = Sunday ... 6 = Saturday) and/or three-letter
            names, e.g. "1,3" or "mon,wed"

    Returns:
        List of weekday numbers in the given order, deduplicated

    Raises:
        typer.BadParameter: If an item is neither a weekday number nor a name
    """
    if weekdays_param is None:
        return None

    weekdays: list[int] = []
    for item in (part.strip().lower() for part in weekdays_param.split(",")):
        if not item:
            continue
        if item[:3] in WEEKDAY_ABBREVIATIONS and item.isalpha():
            weekdays.append(WEEKDAY_ABBREVIATIONS[item[:3]])
            continue
        try:
            day = int(item)
        except ValueError:
            raise typer.BadParameter(f"Invalid weekday: '{item}'")
        if day < 0 or day > 6:
            raise typer.BadParameter(
                f"Weekday must be between 0 (Sunday) and 6 (Saturday), got {day}"
            )
        weekdays.append(day)

    if len(weekdays) == 0:
        raise typer.BadParameter("No valid weekdays provided")

    return list(dict.fromkeys(weekdays))


def open_editor_for_text(initial_text: Optional[str] = None) -> Optional[str]:
    """
    Open the user's preferred editor to edit note text.
    Returns the edited text with trailing newlines removed, or None if empty.
    """
    editor = os.environ.get("EDITOR", "nano")

    with tempfile.NamedTemporaryFile(mode="w+", suffix=".txt") as tf:
        if initial_text is not None:
            tf.write(initial_text)
            tf.flush()

        subprocess.run([editor, tf.name], check=True)
        text = Path(tf.name).read_text()
        if not text.strip():
            return None
        # Remove trailing newlines but preserve internal empty lines
        return text.rstrip("\n")
