# SPDX-License-Identifier: MIT

import logging
from typing import Optional, cast

import pendulum

from cadence.configuration import DEFAULT_FALLBACK_REVIEW_HOURS
from cadence.model.cadence_rule import (
    CADENCE_KINDS,
    KIND_DEFAULT_HOURS,
    CadenceKind,
    CadenceKinds,
    CadenceRule,
)
from cadence.model.note import Note
from cadence.model.note_id import NoteId
from cadence.model.review_state import ReviewState, WatchStatus
from cadence.repository.note import NoteRepository
from cadence.repository.review_ledger import ReviewLedger
from cadence.service import codec
from cadence.service.overdue import overdue_by, remaining_until, review_state
from cadence.service.recurrence import next_due
from cadence.template.cadence_rule import get_cadence_rule_template
from cadence.time import clock_from_str, clock_to_str

logger = logging.getLogger(__name__)


class CadenceValidationError(Exception):
    """Raised when a cadence built from user input is invalid."""

    pass


def build_rule(
    kind: str,
    hours: Optional[int] = None,
    minutes: Optional[int] = None,
    interval_days: Optional[int] = None,
    time: Optional[str] = None,
    weekdays: Optional[list[int]] = None,
    day_of_month: Optional[int] = None,
    month: Optional[int] = None,
    start_date: Optional[pendulum.Date] = None,
    end_date: Optional[pendulum.Date] = None,
) -> CadenceRule:
    """
    Build a cadence rule from user supplied settings.

    - every-x-hours: interval is `interval_days * 24 + hours` hours plus minutes
    - daily, weekly, monthly, yearly: hours are set to the kind's nominal
      period (24, 168, 720, 8760) for display, minutes to 0

    Raises CadenceValidationError for unknown kinds, negative numbers, bad
    clock times, weekdays outside 0-6, days outside 1-31 or months outside 1-12.
    """
    if kind not in CADENCE_KINDS:
        raise CadenceValidationError(
            f"Invalid cadence type: {kind}. Valid options: {', '.join(CADENCE_KINDS)}"
        )
    for name, value in (
        ("hours", hours),
        ("minutes", minutes),
        ("interval days", interval_days),
    ):
        if value is not None and value < 0:
            raise CadenceValidationError(f"{name} must not be negative, got {value}")

    rule = get_cadence_rule_template(cast(CadenceKind, kind))

    if time is not None:
        clock = clock_from_str(time)
        if clock is None:
            raise CadenceValidationError(
                f"Time must be in HH:mm format (e.g., 8:00 or 17:30), got '{time}'"
            )
        rule["time"] = clock_to_str(*clock)

    if weekdays is not None:
        invalid = [day for day in weekdays if not 0 <= day <= 6]
        if invalid:
            raise CadenceValidationError(
                f"Weekdays must be between 0 (Sunday) and 6 (Saturday), got {invalid}"
            )
        rule["weekdays"] = list(dict.fromkeys(weekdays))
    if day_of_month is not None and not 1 <= day_of_month <= 31:
        raise CadenceValidationError(
            f"Day of month must be between 1 and 31, got {day_of_month}"
        )
    if month is not None and not 1 <= month <= 12:
        raise CadenceValidationError(f"Month must be between 1 and 12, got {month}")
    if start_date is not None and end_date is not None and end_date < start_date:
        raise CadenceValidationError("End date must not be before start date")

    if kind == CadenceKinds.EVERY_INTERVAL:
        total_hours = (hours or 0) + (interval_days or 0) * 24
        if total_hours == 0 and not minutes:
            raise CadenceValidationError("Interval must be longer than zero")
        rule["hours"] = total_hours
        rule["minutes"] = minutes or 0
    else:
        rule["hours"] = KIND_DEFAULT_HOURS[kind]
        rule["minutes"] = 0

    if kind == CadenceKinds.WEEKLY and not rule["weekdays"]:
        raise CadenceValidationError("Weekly cadence needs at least one weekday")

    rule["day_of_month"] = day_of_month
    rule["month"] = month
    rule["start_date"] = start_date
    rule["end_date"] = end_date
    return rule


def get_watch_status(
    note: Note,
    ledger: ReviewLedger,
    now: pendulum.DateTime,
    fallback_hours: int = DEFAULT_FALLBACK_REVIEW_HOURS,
) -> WatchStatus:
    note_id = cast(NoteId, note["id"])
    rule = codec.decode_from_text(note["text"])
    if rule is None:
        logger.debug("note %s has no usable cadence, using fallback", note_id)
    last_reviewed = ledger.last_reviewed(note_id)
    due = next_due(rule, last_reviewed, now, fallback_hours)

    return {
        "note_id": note_id,
        "rule": rule,
        "last_reviewed": last_reviewed,
        "next_due": due,
        "state": review_state(rule, last_reviewed, now, fallback_hours),
        "overdue_by": overdue_by(due, now),
        "remaining": remaining_until(due, now),
    }


def get_watched_notes(notes: list[Note]) -> list[Note]:
    return [
        note
        for note in notes
        if note["deleted"] is None and codec.is_watched(note["text"])
    ]


def get_watchlist(
    notes: list[Note],
    ledger: ReviewLedger,
    now: pendulum.DateTime,
    fallback_hours: int = DEFAULT_FALLBACK_REVIEW_HOURS,
) -> list[WatchStatus]:
    """Status of every watched note, soonest due first."""
    statuses = [
        get_watch_status(note, ledger, now, fallback_hours)
        for note in get_watched_notes(notes)
    ]
    return sorted(statuses, key=lambda status: status["next_due"])


def find_overdue(
    notes: list[Note],
    ledger: ReviewLedger,
    now: pendulum.DateTime,
    fallback_hours: int = DEFAULT_FALLBACK_REVIEW_HOURS,
) -> list[WatchStatus]:
    """Watched notes that are due now, most overdue first.

    Dismissed notes and notes snoozed past `now` are left out.
    """
    statuses = [
        get_watch_status(note, ledger, now, fallback_hours)
        for note in get_watched_notes(notes)
        if not codec.is_dismissed(note["text"])
        and not codec.is_snoozed(note["text"], now)
    ]
    due = [status for status in statuses if now >= status["next_due"]]
    return sorted(due, key=lambda status: status["overdue_by"], reverse=True)


def count_by_state(statuses: list[WatchStatus]) -> dict[str, int]:
    counts = {ReviewState.FRESH: 0, ReviewState.PENDING: 0, ReviewState.OVERDUE: 0}
    for status in statuses:
        counts[status["state"]] += 1
    return counts


def mark_reviewed(
    note_id: NoteId, ledger: ReviewLedger, now: pendulum.DateTime
) -> pendulum.DateTime:
    ledger.record_review(note_id, now)
    return now


def forget_review(note_id: NoteId, ledger: ReviewLedger) -> bool:
    return ledger.forget(note_id)


def set_cadence(note_id: NoteId, rule: CadenceRule, note_repo: NoteRepository) -> str:
    """Write the cadence line and make sure the note is on the watchlist."""
    note_repo.replace_cadence_line(note_id, rule)
    text = codec.add_watch_tag(note_repo.get_note_text(note_id))
    note_repo.modify_note_text(note_id, text)
    return text


def watch(note_id: NoteId, note_repo: NoteRepository) -> str:
    text = codec.add_watch_tag(note_repo.get_note_text(note_id))
    note_repo.modify_note_text(note_id, text)
    return text


def unwatch(note_id: NoteId, note_repo: NoteRepository) -> str:
    """Take the note off the watchlist, dropping its cadence line too."""
    text = codec.remove_watch_tag(
        codec.remove_cadence_line(note_repo.get_note_text(note_id))
    )
    note_repo.modify_note_text(note_id, text)
    logger.info("unwatched note %s", note_id)
    return text


def snooze(
    note_id: NoteId, until: pendulum.DateTime, note_repo: NoteRepository
) -> str:
    """Hide the note from overdue listings until `until`."""
    text = codec.replace_snooze_line(note_repo.get_note_text(note_id), until)
    note_repo.modify_note_text(note_id, text)
    logger.info("snoozed note %s until %s", note_id, until)
    return text


def unsnooze(note_id: NoteId, note_repo: NoteRepository) -> str:
    text = codec.remove_snooze_line(note_repo.get_note_text(note_id))
    note_repo.modify_note_text(note_id, text)
    return text
