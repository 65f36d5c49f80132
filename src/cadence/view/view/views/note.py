# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from cadence.model.note import Note
from cadence.service import codec
from cadence.service.summary import render_cadence_summary
from cadence.time import datetime_to_display_local_datetime_str_optional
from cadence.view.view.util import first_line, short_id
from cadence.view.view.views.header import header


def notes_view(report_name: str, notes: list[Note], fallback_hours: int) -> None:
    header(report_name)

    notes_table = Table(box=box.SIMPLE)
    notes_table.add_column("id", no_wrap=True)
    notes_table.add_column("note")
    notes_table.add_column("watched")
    notes_table.add_column("cadence")
    notes_table.add_column("updated")

    for note in notes:
        watched = codec.is_watched(note["text"])
        cadence = ""
        if watched:
            cadence = render_cadence_summary(
                codec.decode_from_text(note["text"]), fallback_hours
            )
        notes_table.add_row(
            short_id(note["id"]),
            first_line(note["text"]),
            "✓" if watched else "",
            cadence,
            datetime_to_display_local_datetime_str_optional(note["updated"]) or "",
        )

    console = Console()
    console.print(notes_table)


def single_note_view(note: Note, fallback_hours: int) -> None:
    header("note")

    note_table = Table(box=box.SIMPLE)
    note_table.add_column("property")
    note_table.add_column("value")

    watched = codec.is_watched(note["text"])
    rule = codec.decode_from_text(note["text"])
    note_table.add_row("id", note["id"] or "")
    note_table.add_row("watched", "yes" if watched else "no")
    note_table.add_row(
        "cadence", render_cadence_summary(rule, fallback_hours) if watched else ""
    )
    note_table.add_row(
        "created", datetime_to_display_local_datetime_str_optional(note["created"])
    )
    note_table.add_row(
        "updated", datetime_to_display_local_datetime_str_optional(note["updated"])
    )
    note_table.add_row(
        "deleted", datetime_to_display_local_datetime_str_optional(note["deleted"])
    )
    note_table.add_row("text", note["text"])

    console = Console()
    console.print(note_table)
