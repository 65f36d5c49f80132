# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from cadence.configuration import DEFAULT_FALLBACK_REVIEW_HOURS, DEFAULT_REVIEW_TIME
from cadence.model.cadence_rule import CadenceKinds, CadenceRule
from cadence.time import clock_from_str

logger = logging.getLogger(__name__)

# Upper bound on the day-by-day weekly scan
WEEKLY_SCAN_DAYS = 14


def next_due(
    rule: Optional[CadenceRule],
    last_reviewed_at: Optional[pendulum.DateTime],
    now: pendulum.DateTime,
    fallback_hours: int = DEFAULT_FALLBACK_REVIEW_HOURS,
) -> pendulum.DateTime:
    """
    Compute when a watched note is next due for review.

    - every-x-hours: last review + interval, or `now` when never reviewed
    - daily / weekly / monthly / yearly: the first matching clock time strictly
      after the base instant, where base is the last review if it lies in the
      future and `now` otherwise
    - no rule: `now` when never reviewed, else last review + `fallback_hours`

    Calendar arithmetic happens in the timezone of `now`. The result depends
    only on the arguments.
    """
    if rule is None:
        return _fallback(last_reviewed_at, now, fallback_hours)

    kind = rule["kind"]
    if kind == CadenceKinds.EVERY_INTERVAL:
        if last_reviewed_at is None:
            return now
        return last_reviewed_at.add(
            hours=max(rule["hours"] or 0, 0), minutes=max(rule["minutes"] or 0, 0)
        )

    tz = now.timezone if now.timezone is not None else "UTC"
    base = get_base_time(last_reviewed_at, now).in_tz(tz)
    hour, minute = _clock(rule)

    if kind == CadenceKinds.DAILY:
        return _next_daily(base, hour, minute)
    elif kind == CadenceKinds.WEEKLY:
        return _next_weekly(base, hour, minute, rule["weekdays"] or [])
    elif kind == CadenceKinds.MONTHLY:
        return _next_monthly(base, hour, minute, rule["day_of_month"])
    elif kind == CadenceKinds.YEARLY:
        return _next_yearly(base, hour, minute, rule["month"], rule["day_of_month"])

    logger.debug("unknown cadence kind %r, using fallback", kind)
    return _fallback(last_reviewed_at, now, fallback_hours)


def get_base_time(
    last_reviewed_at: Optional[pendulum.DateTime], now: pendulum.DateTime
) -> pendulum.DateTime:
    """The instant calendar cadences search forward from."""
    if last_reviewed_at is not None and last_reviewed_at > now:
        return last_reviewed_at
    return now


def _fallback(
    last_reviewed_at: Optional[pendulum.DateTime],
    now: pendulum.DateTime,
    fallback_hours: int,
) -> pendulum.DateTime:
    if last_reviewed_at is None:
        return now
    return last_reviewed_at.add(hours=fallback_hours)


def _clock(rule: CadenceRule) -> tuple[int, int]:
    clock = clock_from_str(rule["time"]) if rule["time"] else None
    if clock is None:
        return clock_from_str(DEFAULT_REVIEW_TIME) or (9, 0)
    return clock


def _at_clock(day: pendulum.DateTime, hour: int, minute: int) -> pendulum.DateTime:
    return day.set(hour=hour, minute=minute, second=0, microsecond=0)


def _weekday(datetime: pendulum.DateTime) -> int:
    """Day of week with 0 = Sunday."""
    return datetime.isoweekday() % 7


def _on_date(
    base: pendulum.DateTime, year: int, month: int, day: int, hour: int, minute: int
) -> pendulum.DateTime:
    """
    Build a local instant, clamping month to 1-12 and day to the month's length.
    """
    month = min(max(month, 1), 12)
    day = min(max(day, 1), pendulum.date(year, month, 1).days_in_month)
    return pendulum.datetime(year, month, day, hour, minute, tz=base.timezone)


def _next_daily(base: pendulum.DateTime, hour: int, minute: int) -> pendulum.DateTime:
    candidate = _at_clock(base, hour, minute)
    if candidate <= base:
        candidate = candidate.add(days=1)
    return candidate


def _next_weekly(
    base: pendulum.DateTime, hour: int, minute: int, weekdays: list[int]
) -> pendulum.DateTime:
    candidate = _at_clock(base, hour, minute)
    for _ in range(WEEKLY_SCAN_DAYS):
        if _weekday(candidate) in weekdays and candidate > base:
            return candidate
        candidate = candidate.add(days=1)

    # No configured weekday matched inside the scan window
    logger.debug("weekly cadence without usable weekdays %r", weekdays)
    return candidate


def _next_monthly(
    base: pendulum.DateTime, hour: int, minute: int, day_of_month: Optional[int]
) -> pendulum.DateTime:
    day = day_of_month or 1
    candidate = _on_date(base, base.year, base.month, day, hour, minute)
    if candidate <= base:
        following = base.start_of("month").add(months=1)
        candidate = _on_date(base, following.year, following.month, day, hour, minute)
    return candidate


def _next_yearly(
    base: pendulum.DateTime,
    hour: int,
    minute: int,
    month: Optional[int],
    day_of_month: Optional[int],
) -> pendulum.DateTime:
    target_month = month or 1
    day = day_of_month or 1
    candidate = _on_date(base, base.year, target_month, day, hour, minute)
    if candidate <= base:
        candidate = _on_date(base, base.year + 1, target_month, day, hour, minute)
    return candidate
