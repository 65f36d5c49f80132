# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from cadence.configuration import DEFAULT_FALLBACK_REVIEW_HOURS
from cadence.model.cadence_rule import CadenceRule
from cadence.model.review_state import ReviewState, ReviewStateType
from cadence.service.recurrence import next_due

ZERO = pendulum.duration()


def is_overdue(
    rule: Optional[CadenceRule],
    last_reviewed_at: Optional[pendulum.DateTime],
    now: pendulum.DateTime,
    fallback_hours: int = DEFAULT_FALLBACK_REVIEW_HOURS,
) -> bool:
    """True exactly when `now` has reached the next due instant."""
    return now >= next_due(rule, last_reviewed_at, now, fallback_hours)


def review_state(
    rule: Optional[CadenceRule],
    last_reviewed_at: Optional[pendulum.DateTime],
    now: pendulum.DateTime,
    fallback_hours: int = DEFAULT_FALLBACK_REVIEW_HOURS,
) -> ReviewStateType:
    if last_reviewed_at is None:
        return ReviewState.FRESH  # type: ignore[return-value]
    if is_overdue(rule, last_reviewed_at, now, fallback_hours):
        return ReviewState.OVERDUE  # type: ignore[return-value]
    return ReviewState.PENDING  # type: ignore[return-value]


def elapsed_since(
    last_reviewed_at: Optional[pendulum.DateTime], now: pendulum.DateTime
) -> Optional[pendulum.Duration]:
    """Time since the last review, or None when the note was never reviewed."""
    if last_reviewed_at is None:
        return None
    return _duration_between(last_reviewed_at, now)


def remaining_until(
    due: pendulum.DateTime, now: pendulum.DateTime
) -> pendulum.Duration:
    """Time left until `due`, zero once it has passed."""
    if due <= now:
        return ZERO
    return _duration_between(now, due)


def overdue_by(due: pendulum.DateTime, now: pendulum.DateTime) -> pendulum.Duration:
    """How long `due` has passed, zero while it is still ahead."""
    if now <= due:
        return ZERO
    return _duration_between(due, now)


def _duration_between(
    start: pendulum.DateTime, end: pendulum.DateTime
) -> pendulum.Duration:
    return pendulum.duration(seconds=(end - start).total_seconds())
