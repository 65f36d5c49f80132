# SPDX-License-Identifier: MIT

"""
Encoding and decoding of cadence rules.

A rule travels as a single tag line inside a note's text:

    meta::review_cadence::type=weekly;hours=168;minutes=0;time=09:00;days=1,3

Decoding is lenient: unknown or malformed segments are skipped and only a
missing or unknown ``type`` makes the whole rule unusable.
"""

import logging
from typing import Optional, cast

import pendulum

from cadence.model.cadence_rule import (
    CADENCE_KINDS,
    KIND_DEFAULT_HOURS,
    CadenceKind,
    CadenceKinds,
    CadenceRule,
)
from cadence.template.cadence_rule import get_cadence_rule_template
from cadence.time import (
    clock_from_str,
    clock_to_str,
    date_from_str_optional,
    date_to_str,
    datetime_from_str,
    datetime_to_iso_str,
)

logger = logging.getLogger(__name__)

CADENCE_TAG_PREFIX = "meta::review_cadence::"
WATCH_TAG = "meta::watch"
DISMISSED_TAG = "meta::reminder_dismissed"
SNOOZE_TAG_PREFIX = "meta::reminder_snooze::"


def encode(rule: CadenceRule) -> str:
    segments = [
        f"type={rule['kind']}",
        f"hours={rule['hours']}",
        f"minutes={rule['minutes']}",
    ]
    if rule["time"]:
        segments.append(f"time={rule['time']}")
    if rule["weekdays"] is not None:
        segments.append(f"days={','.join(str(day) for day in rule['weekdays'])}")
    if rule["day_of_month"] is not None:
        segments.append(f"day={rule['day_of_month']}")
    if rule["month"] is not None:
        segments.append(f"month={rule['month']}")
    if rule["start_date"] is not None:
        segments.append(f"start={date_to_str(rule['start_date'])}")
    if rule["end_date"] is not None:
        segments.append(f"end={date_to_str(rule['end_date'])}")
    return ";".join(segments)


def decode(text: str) -> Optional[CadenceRule]:
    """
    Parse a rule body (with or without the tag prefix).

    Returns None when no segment names a known cadence kind.
    """
    body = text.strip()
    if body.startswith(CADENCE_TAG_PREFIX):
        body = body[len(CADENCE_TAG_PREFIX) :]

    fields: dict[str, str] = {}
    for segment in body.split(";"):
        key, separator, value = segment.partition("=")
        key = key.strip()
        if not key or not separator:
            continue
        fields[key] = value.strip()

    kind = fields.get("type")
    if kind not in CADENCE_KINDS:
        logger.debug("no usable cadence type in %r", text)
        return None

    rule = get_cadence_rule_template(cast(CadenceKind, kind))

    hours = _parse_non_negative_int(fields.get("hours"))
    minutes = _parse_non_negative_int(fields.get("minutes"))
    if hours is None:
        # An interval given only in minutes keeps zero hours
        if rule["kind"] == CadenceKinds.EVERY_INTERVAL and minutes is not None:
            hours = 0
        else:
            hours = KIND_DEFAULT_HOURS[rule["kind"]]
    rule["hours"] = hours
    rule["minutes"] = minutes if minutes is not None else 0

    if "time" in fields:
        clock = clock_from_str(fields["time"])
        if clock is not None:
            rule["time"] = clock_to_str(*clock)
    if "days" in fields:
        rule["weekdays"] = _parse_weekdays(fields["days"])
    rule["day_of_month"] = _parse_non_negative_int(fields.get("day"))
    rule["month"] = _parse_non_negative_int(fields.get("month"))
    rule["start_date"] = date_from_str_optional(fields.get("start"))
    rule["end_date"] = date_from_str_optional(fields.get("end"))

    return rule


def _parse_non_negative_int(value: Optional[str]) -> Optional[int]:
    if value is None or not (value.isascii() and value.isdigit()):
        return None
    return int(value)


def _parse_weekdays(value: str) -> list[int]:
    weekdays = [
        int(item)
        for item in (part.strip() for part in value.split(","))
        if item.isascii() and item.isdigit() and int(item) <= 6
    ]
    return list(dict.fromkeys(weekdays))


# ─────────────────────────────────────────────────────────────
# Note text helpers
# ─────────────────────────────────────────────────────────────


def encode_line(rule: CadenceRule) -> str:
    return f"{CADENCE_TAG_PREFIX}{encode(rule)}"


def find_cadence_line(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    for line in text.split("\n"):
        if line.startswith(CADENCE_TAG_PREFIX):
            return line
    return None


def decode_from_text(text: Optional[str]) -> Optional[CadenceRule]:
    line = find_cadence_line(text)
    if line is None:
        return None
    return decode(line)


def replace_cadence_line(text: str, rule: CadenceRule) -> str:
    """
    Replace the note's cadence line in place, or append one if it has none.

    All other lines are preserved as they are.
    """
    new_line = encode_line(rule)
    lines = text.split("\n") if text else []
    for index, line in enumerate(lines):
        if line.startswith(CADENCE_TAG_PREFIX):
            lines[index] = new_line
            return "\n".join(lines)
    lines.append(new_line)
    return "\n".join(lines)


def remove_cadence_line(text: str) -> str:
    lines = [
        line for line in text.split("\n") if not line.startswith(CADENCE_TAG_PREFIX)
    ]
    return "\n".join(lines)


def is_watched(text: Optional[str]) -> bool:
    if not text:
        return False
    return any(line.strip() == WATCH_TAG for line in text.split("\n"))


def is_dismissed(text: Optional[str]) -> bool:
    if not text:
        return False
    return DISMISSED_TAG in text


def find_snooze_until(text: Optional[str]) -> Optional[pendulum.DateTime]:
    """
    Instant a reminder is snoozed until, from a line such as
    `meta::reminder_snooze::until=2024-01-02T09:00:00+00:00`.

    Returns None when there is no snooze line or its timestamp is unreadable.
    """
    if not text:
        return None
    for line in text.split("\n"):
        if not line.startswith(SNOOZE_TAG_PREFIX):
            continue
        for segment in line[len(SNOOZE_TAG_PREFIX) :].split(";"):
            key, _, value = segment.partition("=")
            if key.strip() != "until":
                continue
            try:
                return datetime_from_str(value.strip())
            except ValueError:
                logger.debug("unreadable snooze timestamp %r", value)
                return None
    return None


def is_snoozed(text: Optional[str], now: pendulum.DateTime) -> bool:
    """True while the note's snooze instant lies after `now`."""
    until = find_snooze_until(text)
    return until is not None and until > now


def replace_snooze_line(text: str, until: pendulum.DateTime) -> str:
    new_line = f"{SNOOZE_TAG_PREFIX}until={datetime_to_iso_str(until)}"
    lines = remove_snooze_line(text).split("\n") if text else []
    lines.append(new_line)
    return "\n".join(lines)


def remove_snooze_line(text: str) -> str:
    lines = [
        line for line in text.split("\n") if not line.startswith(SNOOZE_TAG_PREFIX)
    ]
    return "\n".join(lines)


def add_watch_tag(text: str) -> str:
    if is_watched(text):
        return text
    if not text:
        return WATCH_TAG
    return f"{text}\n{WATCH_TAG}"


def remove_watch_tag(text: str) -> str:
    lines = [line for line in text.split("\n") if line.strip() != WATCH_TAG]
    return "\n".join(lines)
