# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from cadence.model.note_id import NoteId
from cadence.repository.configuration import CONFIGURATION_REPO
from cadence.repository.note import NOTE_REPO, AmbiguousNoteIdError, NoteNotFoundError
from cadence.service import codec
from cadence.template.note import get_note_template
from cadence.terminal.custom_typer import AliasedTyperGroup
from cadence.terminal.parse import open_editor_for_text
from cadence.view.view.views import note as note_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def resolve_note_id(id: str) -> NoteId:
    try:
        return NOTE_REPO.resolve_note_id(id)
    except (NoteNotFoundError, AmbiguousNoteIdError) as e:
        typer.echo(str(e))
        raise typer.Exit(1)


@app.command("add, a")
def add(
    text: Annotated[
        Optional[str],
        typer.Argument(help="note text; opens $EDITOR when omitted"),
    ] = None,
    watch: Annotated[
        bool, typer.Option("--watch", "-w", help="put the note on the watchlist")
    ] = False,
) -> None:
    """Create a new note."""
    config = CONFIGURATION_REPO.get_config()

    if text is None:
        text = open_editor_for_text()
    if text is None:
        typer.echo("Note creation cancelled (no text provided)")
        return

    if watch:
        text = codec.add_watch_tag(text)

    note = get_note_template()
    note["text"] = text
    id = NOTE_REPO.save_new_note(note)

    note_report.single_note_view(
        NOTE_REPO.get_note(id), config["fallback_review_hours"]
    )


@app.command("list, ls")
def list_notes(
    all: Annotated[
        bool, typer.Option("--all", "-a", help="include deleted notes")
    ] = False,
) -> None:
    """List notes."""
    config = CONFIGURATION_REPO.get_config()

    notes = NOTE_REPO.get_all_notes()
    if not all:
        notes = [note for note in notes if note["deleted"] is None]
    notes = sorted(notes, key=lambda note: note["created"])

    note_report.notes_view("notes", notes, config["fallback_review_hours"])


@app.command("show, s", no_args_is_help=True)
def show(id: str) -> None:
    """Show a single note."""
    config = CONFIGURATION_REPO.get_config()

    note = NOTE_REPO.get_note(resolve_note_id(id))
    note_report.single_note_view(note, config["fallback_review_hours"])


@app.command("edit, e", no_args_is_help=True)
def edit(id: str) -> None:
    """Edit a note's text in $EDITOR."""
    config = CONFIGURATION_REPO.get_config()

    note_id = resolve_note_id(id)
    text = open_editor_for_text(NOTE_REPO.get_note_text(note_id))
    if text is None:
        typer.echo("Edit cancelled (no text provided)")
        return
    NOTE_REPO.modify_note_text(note_id, text)

    note_report.single_note_view(
        NOTE_REPO.get_note(note_id), config["fallback_review_hours"]
    )


@app.command("delete, del", no_args_is_help=True)
def delete(id: str) -> None:
    """Soft delete a note."""
    note_id = resolve_note_id(id)
    NOTE_REPO.delete_note(note_id)
    typer.echo(f"Deleted note {note_id}")
