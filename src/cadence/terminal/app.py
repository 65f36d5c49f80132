# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from cadence.terminal import configuration, note, watch
from cadence.terminal.custom_typer import OrderedAliasedTyperGroup
from cadence.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="cadence - review watched notes on a schedule",
    no_args_is_help=True,
)
app.add_typer(note.app, name="note, n")
app.add_typer(watch.app, name="watch, w")
app.add_typer(configuration.app, name="config, c")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
) -> None:
    """
    cadence - review watched notes on a schedule

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)


def run() -> None:
    app()
