# SPDX-License-Identifier: MIT

import pendulum

from cadence.model.review_state import ReviewState
from cadence.service.overdue import (
    elapsed_since,
    is_overdue,
    overdue_by,
    remaining_until,
    review_state,
)


def test_overdue_exactly_at_due_instant(make_rule, utc):
    rule = make_rule("every-x-hours", hours=4)
    last = utc(2024, 1, 1, 10, 0)
    due = utc(2024, 1, 1, 14, 0)

    assert not is_overdue(rule, last, due.subtract(microseconds=1))
    assert is_overdue(rule, last, due)
    assert is_overdue(rule, last, due.add(seconds=1))


def test_never_reviewed_is_due_immediately(make_rule, utc):
    now = utc(2024, 1, 1, 10, 0)
    assert is_overdue(make_rule("every-x-hours", hours=4), None, now)
    assert is_overdue(None, None, now)


def test_calendar_rule_is_never_overdue_when_computed_from_now(make_rule, utc):
    rule = make_rule("daily", time="09:00")
    assert not is_overdue(rule, None, utc(2024, 1, 2, 8, 0))
    assert not is_overdue(rule, utc(2023, 1, 1), utc(2024, 1, 2, 8, 0))


def test_review_states(make_rule, utc):
    rule = make_rule("every-x-hours", hours=4)
    last = utc(2024, 1, 1, 10, 0)

    assert review_state(rule, None, last) == ReviewState.FRESH
    assert review_state(rule, last, utc(2024, 1, 1, 12, 0)) == ReviewState.PENDING
    assert review_state(rule, last, utc(2024, 1, 1, 14, 0)) == ReviewState.OVERDUE


def test_fallback_interval_is_used_without_rule(utc):
    last = utc(2024, 1, 1, 0, 0)
    assert review_state(None, last, utc(2024, 1, 1, 11, 59)) == ReviewState.PENDING
    assert review_state(None, last, utc(2024, 1, 1, 12, 0)) == ReviewState.OVERDUE
    assert (
        review_state(None, last, utc(2024, 1, 1, 3, 0), fallback_hours=2)
        == ReviewState.OVERDUE
    )


def test_elapsed_since(utc):
    assert elapsed_since(None, utc(2024, 1, 1)) is None
    elapsed = elapsed_since(utc(2024, 1, 1, 10, 0), utc(2024, 1, 1, 12, 30))
    assert elapsed is not None
    assert elapsed.total_seconds() == 2.5 * 3600


def test_remaining_is_clamped_to_zero(utc):
    due = utc(2024, 1, 1, 12, 0)
    assert remaining_until(due, utc(2024, 1, 1, 11, 0)).total_seconds() == 3600
    assert remaining_until(due, due).total_seconds() == 0
    assert remaining_until(due, utc(2024, 1, 2)).total_seconds() == 0


def test_overdue_by_is_clamped_to_zero(utc):
    due = utc(2024, 1, 1, 12, 0)
    assert overdue_by(due, utc(2024, 1, 1, 11, 0)).total_seconds() == 0
    assert overdue_by(due, utc(2024, 1, 1, 13, 30)).total_seconds() == 5400
    assert overdue_by(due, utc(2024, 1, 1, 13, 30)) > pendulum.duration(hours=1)
