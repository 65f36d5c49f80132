# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from cadence.configuration import DEFAULT_FALLBACK_REVIEW_HOURS, DEFAULT_REVIEW_TIME
from cadence.model.cadence_rule import (
    KIND_DEFAULT_HOURS,
    WEEKDAY_NAMES,
    CadenceKinds,
    CadenceRule,
)
from cadence.time import date_to_str

NEVER_REVIEWED = "Never reviewed"
DUE_NOW = "Due now"
SUMMARY_SEPARATOR = " • "


def format_elapsed(duration: Optional[pendulum.Duration]) -> str:
    if duration is None:
        return NEVER_REVIEWED

    seconds = max(int(duration.total_seconds()), 0)
    if seconds < 60:
        return f"{seconds} seconds ago"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes} minutes ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours} hours ago"
    return f"{hours // 24} days ago"


def format_remaining(duration: pendulum.Duration) -> str:
    seconds = int(duration.total_seconds())
    if seconds <= 0:
        return DUE_NOW

    days = seconds // 86400
    hours = (seconds % 86400) // 3600
    minutes = (seconds % 3600) // 60
    if days > 0:
        return f"in {days}d {hours}h {minutes}m"
    if hours > 0:
        return f"in {hours}h {minutes}m"
    if minutes > 0:
        return f"in {minutes}m"
    return "in <1m"


def render_cadence_summary(
    rule: Optional[CadenceRule],
    fallback_hours: int = DEFAULT_FALLBACK_REVIEW_HOURS,
) -> str:
    """
    Describe a rule in one line, e.g. "Review weekly on Monday at 09:00".

    Notes without a usable rule are described by the fallback interval.
    """
    if rule is None:
        return f"Review every {fallback_hours} hours"

    time = rule["time"] or DEFAULT_REVIEW_TIME
    kind = rule["kind"]
    summary: list[str] = []

    if kind == CadenceKinds.EVERY_INTERVAL:
        parts = []
        if rule["hours"]:
            parts.append(f"{rule['hours']}h")
        if rule["minutes"]:
            parts.append(f"{rule['minutes']}m")
        interval = " ".join(parts) or f"{KIND_DEFAULT_HOURS[kind]}h"
        summary.append(f"Review every {interval}")
    elif kind == CadenceKinds.DAILY:
        summary.append(f"Review daily at {time}")
    elif kind == CadenceKinds.WEEKLY:
        selected = ", ".join(
            WEEKDAY_NAMES[day] for day in (rule["weekdays"] or []) if 0 <= day <= 6
        )
        summary.append(f"Review weekly on {selected or 'all days'} at {time}")
    elif kind == CadenceKinds.MONTHLY:
        summary.append(f"Review monthly on day {rule['day_of_month'] or 1} at {time}")
    elif kind == CadenceKinds.YEARLY:
        day, month = rule["day_of_month"] or 1, rule["month"] or 1
        summary.append(f"Review yearly on {day}/{month} at {time}")

    if rule["start_date"] is not None:
        summary.append(f"Starts: {date_to_str(rule['start_date'])}")
    if rule["end_date"] is not None:
        summary.append(f"Ends: {date_to_str(rule['end_date'])}")

    return SUMMARY_SEPARATOR.join(summary)
