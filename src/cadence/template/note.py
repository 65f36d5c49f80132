# SPDX-License-Identifier: MIT

from cadence.model.note import Note
from cadence.time import now_utc


def get_note_template() -> Note:
    now = now_utc()
    return {
        "id": None,
        "text": "",
        "created": now,
        "updated": now,
        "deleted": None,
    }
