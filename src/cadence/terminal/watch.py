# SPDX-License-Identifier: MIT

from time import sleep
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console

from cadence.model.cadence_rule import CADENCE_KINDS, CadenceKinds
from cadence.model.note import Note
from cadence.model.note_id import NoteId
from cadence.repository.configuration import CONFIGURATION_REPO
from cadence.repository.note import NOTE_REPO
from cadence.repository.review_ledger import REVIEW_LEDGER_REPO
from cadence.service import watchlist
from cadence.service.summary import render_cadence_summary
from cadence.terminal.custom_typer import AliasedTyperGroup
from cadence.terminal.note import resolve_note_id
from cadence.terminal.parse import parse_date, parse_datetime, parse_weekdays
from cadence.time import datetime_to_display_local_datetime_str, now_local
from cadence.view.view.views import watch as watch_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _notes_by_id() -> dict[NoteId, Note]:
    return {note["id"]: note for note in NOTE_REPO.get_all_notes() if note["id"]}


@app.command("add, a", no_args_is_help=True)
def add(id: str) -> None:
    """Put a note on the watchlist, reviewed every fallback interval."""
    note_id = resolve_note_id(id)
    watchlist.watch(note_id, NOTE_REPO)
    typer.echo(f"Watching note {note_id}")


@app.command("set, st", no_args_is_help=True)
def set_cadence(
    id: str,
    kind: Annotated[
        str,
        typer.Option(
            "--type",
            "-t",
            help=", ".join(CADENCE_KINDS),
        ),
    ] = CadenceKinds.EVERY_INTERVAL,
    hours: Annotated[
        Optional[int], typer.Option("--hours", "-h", help="every-x-hours interval")
    ] = None,
    minutes: Annotated[
        Optional[int], typer.Option("--minutes", "-m", help="every-x-hours interval")
    ] = None,
    interval_days: Annotated[
        Optional[int],
        typer.Option("--every-days", "-ed", help="every-x-hours interval in days"),
    ] = None,
    time: Annotated[
        Optional[str],
        typer.Option("--time", "-tm", help="HH:mm, defaults to the configured time"),
    ] = None,
    weekdays: Annotated[
        Optional[str],
        typer.Option(
            "--weekdays",
            "-w",
            help="weekly days, e.g. 1,3 or mon,wed (0 = Sunday)",
        ),
    ] = None,
    day: Annotated[
        Optional[int], typer.Option("--day", "-d", help="day of month (1-31)")
    ] = None,
    month: Annotated[
        Optional[int], typer.Option("--month", "-mo", help="month for yearly (1-12)")
    ] = None,
    start: Annotated[
        Optional[str], typer.Option("--start", "-s", help="YYYY-MM-DD")
    ] = None,
    end: Annotated[
        Optional[str], typer.Option("--end", "-e", help="YYYY-MM-DD")
    ] = None,
) -> None:
    """Set or replace a note's review cadence."""
    config = CONFIGURATION_REPO.get_config()
    note_id = resolve_note_id(id)

    if time is None and kind != CadenceKinds.EVERY_INTERVAL:
        time = config["default_review_time"]

    try:
        rule = watchlist.build_rule(
            kind,
            hours=hours,
            minutes=minutes,
            interval_days=interval_days,
            time=time,
            weekdays=parse_weekdays(weekdays),
            day_of_month=day,
            month=month,
            start_date=parse_date(start),
            end_date=parse_date(end),
        )
    except watchlist.CadenceValidationError as e:
        typer.echo(str(e))
        raise typer.Exit(1)

    watchlist.set_cadence(note_id, rule, NOTE_REPO)
    typer.echo(
        f"{render_cadence_summary(rule, config['fallback_review_hours'])} "
        f"for note {note_id}"
    )


@app.command("review, r", no_args_is_help=True)
def review(
    id: str,
    at: Annotated[
        Optional[pendulum.DateTime],
        typer.Option(
            "--at",
            parser=parse_datetime,
            help="valid inputs: YYYY-MM-DD [HH:mm], HH:mm, now",
        ),
    ] = None,
) -> None:
    """Mark a note as reviewed."""
    config = CONFIGURATION_REPO.get_config()
    note_id = resolve_note_id(id)

    now = now_local()
    reviewed_at = watchlist.mark_reviewed(
        note_id, REVIEW_LEDGER_REPO, at if at is not None else now
    )
    status = watchlist.get_watch_status(
        NOTE_REPO.get_note(note_id),
        REVIEW_LEDGER_REPO,
        now,
        config["fallback_review_hours"],
    )
    typer.echo(
        f"Reviewed {note_id} at {datetime_to_display_local_datetime_str(reviewed_at)}, "
        f"next review {datetime_to_display_local_datetime_str(status['next_due'])}"
    )


@app.command("forget, f", no_args_is_help=True)
def forget(id: str) -> None:
    """Forget a note's last review."""
    note_id = resolve_note_id(id)
    if watchlist.forget_review(note_id, REVIEW_LEDGER_REPO):
        typer.echo(f"Forgot last review of note {note_id}")
    else:
        typer.echo(f"Note {note_id} has no recorded review")


@app.command("snooze, sn", no_args_is_help=True)
def snooze(
    id: str,
    until: Annotated[
        Optional[pendulum.DateTime],
        typer.Option(
            "--until",
            "-u",
            parser=parse_datetime,
            help="valid inputs: YYYY-MM-DD [HH:mm], HH:mm, now",
        ),
    ] = None,
    clear: Annotated[
        bool, typer.Option("--clear", "-c", help="remove the snooze")
    ] = False,
) -> None:
    """Keep a note out of the overdue list until a given time."""
    note_id = resolve_note_id(id)

    if clear:
        watchlist.unsnooze(note_id, NOTE_REPO)
        typer.echo(f"Cleared snooze of note {note_id}")
        return
    if until is None:
        raise typer.BadParameter("Provide --until or --clear")

    watchlist.snooze(note_id, until, NOTE_REPO)
    typer.echo(
        f"Snoozed note {note_id} until "
        f"{datetime_to_display_local_datetime_str(until)}"
    )


@app.command("remove, rm", no_args_is_help=True)
def remove(id: str) -> None:
    """Take a note off the watchlist and drop its cadence."""
    note_id = resolve_note_id(id)
    watchlist.unwatch(note_id, NOTE_REPO)
    typer.echo(f"Stopped watching note {note_id}")


@app.command("list, ls")
def list_watchlist() -> None:
    """Show every watched note with its next review."""
    config = CONFIGURATION_REPO.get_config()
    now = now_local()

    statuses = watchlist.get_watchlist(
        NOTE_REPO.get_all_notes(),
        REVIEW_LEDGER_REPO,
        now,
        config["fallback_review_hours"],
    )
    watch_report.watchlist_view(
        "watchlist", statuses, _notes_by_id(), now, config["fallback_review_hours"]
    )


@app.command("overdue, o")
def overdue() -> None:
    """Show watched notes that are due for review, most overdue first."""
    config = CONFIGURATION_REPO.get_config()

    statuses = watchlist.find_overdue(
        NOTE_REPO.get_all_notes(),
        REVIEW_LEDGER_REPO,
        now_local(),
        config["fallback_review_hours"],
    )
    watch_report.overdue_view(statuses, _notes_by_id(), config["fallback_review_hours"])


@app.command("monitor, mon")
def monitor(
    interval: Annotated[
        Optional[int],
        typer.Option("--interval", "-i", help="seconds between refreshes"),
    ] = None,
    count: Annotated[
        Optional[int],
        typer.Option("--count", "-n", help="stop after this many refreshes"),
    ] = None,
) -> None:
    """Refresh the watchlist periodically until interrupted."""
    config = CONFIGURATION_REPO.get_config()
    seconds = interval if interval is not None else config["monitor_interval_seconds"]
    if seconds < 1:
        raise typer.BadParameter("Interval must be at least 1 second")

    console = Console()
    refreshes = 0
    try:
        while count is None or refreshes < count:
            now = now_local()
            statuses = watchlist.get_watchlist(
                NOTE_REPO.get_all_notes(),
                REVIEW_LEDGER_REPO,
                now,
                config["fallback_review_hours"],
            )
            counts = watchlist.count_by_state(statuses)
            console.clear()
            console.print(
                watch_report.watchlist_table(
                    f"watchlist ({counts['overdue']} overdue)",
                    statuses,
                    _notes_by_id(),
                    now,
                    config["fallback_review_hours"],
                )
            )
            refreshes += 1
            if count is None or refreshes < count:
                sleep(seconds)
    except KeyboardInterrupt:
        pass
