# SPDX-License-Identifier: MIT

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from cadence.model.note import Note
from cadence.model.note_id import NoteId
from cadence.model.review_state import ReviewState, WatchStatus
from cadence.service.overdue import elapsed_since
from cadence.service.summary import (
    format_elapsed,
    format_remaining,
    render_cadence_summary,
)
from cadence.time import datetime_to_display_local_datetime_str_optional
from cadence.view.view.util import first_line, short_id
from cadence.view.view.views.header import header

STATE_COLORS = {
    ReviewState.FRESH: "cyan",
    ReviewState.PENDING: "green",
    ReviewState.OVERDUE: "red",
}


def _state_cell(state: str) -> str:
    color = STATE_COLORS.get(state, "white")
    return f"[{color}]{state}[/{color}]"


def watchlist_table(
    report_name: str,
    statuses: list[WatchStatus],
    notes_by_id: dict[NoteId, Note],
    now: pendulum.DateTime,
    fallback_hours: int,
) -> Table:
    table = Table(title=report_name, box=box.SIMPLE)
    table.add_column("id", no_wrap=True)
    table.add_column("note")
    table.add_column("cadence")
    table.add_column("last review")
    table.add_column("next due")
    table.add_column("remaining")
    table.add_column("state")

    for status in statuses:
        note = notes_by_id.get(status["note_id"])
        elapsed = elapsed_since(status["last_reviewed"], now)
        last_review = format_elapsed(elapsed)
        if status["last_reviewed"] is not None:
            display = datetime_to_display_local_datetime_str_optional(
                status["last_reviewed"]
            )
            last_review = f"{display} ({last_review})"

        table.add_row(
            short_id(status["note_id"]),
            first_line(note["text"]) if note is not None else "",
            render_cadence_summary(status["rule"], fallback_hours),
            last_review,
            datetime_to_display_local_datetime_str_optional(status["next_due"]) or "",
            format_remaining(status["remaining"]),
            _state_cell(status["state"]),
        )
    return table


def watchlist_view(
    report_name: str,
    statuses: list[WatchStatus],
    notes_by_id: dict[NoteId, Note],
    now: pendulum.DateTime,
    fallback_hours: int,
) -> None:
    header(report_name)
    console = Console()
    console.print(
        watchlist_table(report_name, statuses, notes_by_id, now, fallback_hours)
    )


def overdue_view(
    statuses: list[WatchStatus],
    notes_by_id: dict[NoteId, Note],
    fallback_hours: int,
) -> None:
    header("overdue")

    console = Console()
    if len(statuses) == 0:
        console.print("[green]Nothing is due for review.[/green]")
        return

    table = Table(box=box.SIMPLE)
    table.add_column("id", no_wrap=True)
    table.add_column("note")
    table.add_column("cadence")
    table.add_column("due")
    table.add_column("overdue by")

    for status in statuses:
        note = notes_by_id.get(status["note_id"])
        due = datetime_to_display_local_datetime_str_optional(status["next_due"])
        overdue = format_elapsed(status["overdue_by"]).removesuffix(" ago")
        table.add_row(
            short_id(status["note_id"]),
            first_line(note["text"]) if note is not None else "",
            render_cadence_summary(status["rule"], fallback_hours),
            due or "",
            f"[red]{overdue}[/red]",
        )
    console.print(table)
