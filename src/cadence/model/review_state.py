# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from cadence.model.cadence_rule import CadenceRule
from cadence.model.note_id import NoteId

ReviewStateType = Literal["fresh", "pending", "overdue"]


class ReviewState:
    FRESH = "fresh"  # never reviewed
    PENDING = "pending"  # now < next due
    OVERDUE = "overdue"  # now >= next due


class WatchStatus(TypedDict):
    note_id: NoteId
    rule: Optional[CadenceRule]
    last_reviewed: Optional[pendulum.DateTime]
    next_due: pendulum.DateTime
    state: ReviewStateType
    overdue_by: pendulum.Duration
    remaining: pendulum.Duration
