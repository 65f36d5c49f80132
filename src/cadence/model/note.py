# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from cadence.model.note_id import NoteId


class Note(TypedDict):
    id: Optional[NoteId]
    text: str
    created: pendulum.DateTime
    updated: pendulum.DateTime
    deleted: Optional[pendulum.DateTime]
