# SPDX-License-Identifier: MIT

from typing import Optional

from cadence.model.note_id import NoteId

META_TAG_PREFIX = "meta::"
SHORT_ID_LENGTH = 8


def short_id(note_id: Optional[NoteId]) -> str:
    if note_id is None:
        return ""
    return note_id[:SHORT_ID_LENGTH]


def first_line(text: Optional[str], max_length: int = 48) -> str:
    """
    First line of a note that is not a meta tag, truncated for table cells.
    """
    if not text:
        return ""
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped or stripped.startswith(META_TAG_PREFIX):
            continue
        if len(stripped) > max_length:
            return stripped[: max_length - 1] + "…"
        return stripped
    return ""
