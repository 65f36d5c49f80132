# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict, get_args

import pendulum

CadenceKind = Literal["every-x-hours", "daily", "weekly", "monthly", "yearly"]

CADENCE_KINDS: tuple[str, ...] = get_args(CadenceKind)


class CadenceKinds:
    EVERY_INTERVAL = "every-x-hours"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


# Hours used when a rule does not set them; display-only for calendar kinds
KIND_DEFAULT_HOURS: dict[str, int] = {
    CadenceKinds.EVERY_INTERVAL: 12,
    CadenceKinds.DAILY: 24,
    CadenceKinds.WEEKLY: 24 * 7,
    CadenceKinds.MONTHLY: 24 * 30,
    CadenceKinds.YEARLY: 24 * 365,
}

WEEKDAY_NAMES = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]


class CadenceRule(TypedDict):
    kind: CadenceKind
    hours: int  # every-x-hours interval, display value for other kinds
    minutes: int
    time: Optional[str]  # HH:MM, daily/weekly/monthly/yearly
    weekdays: Optional[list[int]]  # 0 = Sunday, weekly only
    day_of_month: Optional[int]  # monthly, yearly
    month: Optional[int]  # yearly
    start_date: Optional[pendulum.Date]
    end_date: Optional[pendulum.Date]
