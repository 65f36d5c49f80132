# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Optional, cast

import yaml.representer
from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from cadence import configuration, time
from cadence.model.cadence_rule import CadenceRule
from cadence.model.note import Note
from cadence.model.note_id import NoteId, generate_note_id
from cadence.service import codec
from cadence.time import now_utc

logger = logging.getLogger(__name__)


class NoteNotFoundError(LookupError):
    """Raised when no note matches the given id or id prefix."""

    pass


class AmbiguousNoteIdError(LookupError):
    """Raised when an id prefix matches more than one note."""

    pass


class LiteralString(str):
    """String subclass to trigger literal block scalar style in YAML."""

    pass


def literal_string_representer(dumper: Any, data: str) -> Any:
    """YAML representer for literal block scalar (|) style."""
    text = str(data)
    if "\n" in text:
        if not text.endswith("\n"):
            text = text + "\n"
        return dumper.represent_scalar("tag:yaml.org,2002:str", text, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", text)


yaml.representer.Representer.add_representer(LiteralString, literal_string_representer)
yaml.representer.SafeRepresenter.add_representer(
    LiteralString, literal_string_representer
)
Dumper.add_representer(LiteralString, literal_string_representer)


class NoteRepository:
    def __init__(self) -> None:
        self._notes: Optional[list[Note]] = None
        self.is_dirty = False

    @property
    def notes(self) -> list[Note]:
        if self._notes is None:
            self.__load_data()
        if self._notes is None:
            raise ValueError()
        return self._notes

    def __load_data(self) -> None:
        self._notes = []
        if not configuration.DATA_NOTES_PATH.is_file():
            return
        notes_data = load(configuration.DATA_NOTES_PATH.read_text(), Loader=Loader)
        if notes_data is None:
            return
        raw_notes = notes_data.get("notes") or []
        self._notes = [
            self.__convert_note_for_deserialization(note) for note in raw_notes
        ]

    def __save_data(self, notes: list[Note]) -> None:
        serializable_notes = [
            self.__convert_note_for_serialization(note) for note in deepcopy(notes)
        ]
        notes_data = {"notes": serializable_notes}
        configuration.DATA_NOTES_PATH.write_text(dump(notes_data, Dumper=Dumper))

    def flush(self) -> bool:
        if self._notes is not None and self.is_dirty:
            self.__save_data(self._notes)
            self.is_dirty = False
            return True
        return False

    def __convert_note_for_serialization(self, note: Note) -> dict[str, Any]:
        serializable_note = cast(dict[str, Any], note)
        serializable_note["created"] = time.datetime_to_iso_str(
            serializable_note["created"]
        )
        serializable_note["updated"] = time.datetime_to_iso_str(
            serializable_note["updated"]
        )
        serializable_note["deleted"] = time.datetime_to_iso_str_optional(
            serializable_note["deleted"]
        )
        # Multi-line text is written as a block scalar
        serializable_note["text"] = LiteralString(serializable_note["text"] or "")
        return serializable_note

    def __convert_note_for_deserialization(self, note: dict[str, Any]) -> Note:
        deserializable_note = note
        deserializable_note["text"] = (deserializable_note.get("text") or "").rstrip(
            "\n"
        )
        deserializable_note["created"] = time.datetime_from_str(
            deserializable_note["created"]
        )
        deserializable_note["updated"] = time.datetime_from_str(
            deserializable_note["updated"]
        )
        deserializable_note["deleted"] = time.datetime_from_str_optional(
            deserializable_note.get("deleted")
        )
        return cast(Note, deserializable_note)

    def __find(self, id: NoteId) -> Note:
        for note in self.notes:
            if note["id"] == id:
                return note
        raise NoteNotFoundError(f"No note with id '{id}'")

    def save_new_note(self, note: Note) -> NoteId:
        self.is_dirty = True

        note["id"] = generate_note_id()
        self.notes.append(note)
        logger.debug("created note %s", note["id"])

        return note["id"]

    def modify_note_text(self, id: NoteId, text: str) -> None:
        self.is_dirty = True

        note = self.__find(id)
        note["text"] = text
        note["updated"] = now_utc()

    def delete_note(self, id: NoteId) -> None:
        self.is_dirty = True

        note = self.__find(id)
        note["deleted"] = now_utc()
        note["updated"] = note["deleted"]

    def get_all_notes(self) -> list[Note]:
        return deepcopy(self.notes)

    def get_note(self, id: NoteId) -> Note:
        return deepcopy(self.__find(id))

    def get_note_text(self, id: NoteId) -> str:
        return self.__find(id)["text"]

    def replace_cadence_line(self, id: NoteId, rule: CadenceRule) -> str:
        """
        Write `rule` as the note's single cadence line, keeping all other lines.

        Returns the updated note text.
        """
        text = codec.replace_cadence_line(self.get_note_text(id), rule)
        self.modify_note_text(id, text)
        logger.info("set cadence of note %s to %s", id, codec.encode(rule))
        return text

    def resolve_note_id(self, id_or_prefix: str) -> NoteId:
        """
        Resolve a full note id or a unique prefix of one.

        Raises:
            NoteNotFoundError: If nothing matches
            AmbiguousNoteIdError: If the prefix matches several notes
        """
        candidate = id_or_prefix.strip()
        if not candidate:
            raise NoteNotFoundError("Empty note id")

        matches = [
            cast(NoteId, note["id"])
            for note in self.notes
            if note["id"] is not None and note["id"].startswith(candidate)
        ]
        if candidate in matches:
            return candidate
        if len(matches) == 0:
            raise NoteNotFoundError(f"No note with id '{candidate}'")
        if len(matches) > 1:
            raise AmbiguousNoteIdError(
                f"Id prefix '{candidate}' matches {len(matches)} notes"
            )
        return matches[0]


NOTE_REPO = NoteRepository()
