# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from cadence import configuration
from cadence.repository.configuration import CONFIGURATION_REPO
from cadence.terminal.custom_typer import AliasedTyperGroup
from cadence.time import clock_from_str, clock_to_str

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("default_review_time", config["default_review_time"])
    table.add_row("fallback_review_hours", str(config["fallback_review_hours"]))
    table.add_row("monitor_interval_seconds", str(config["monitor_interval_seconds"]))
    table.add_row("log_level", config["log_level"])
    table.add_row("config_file", str(configuration.APP_CONFIG_PATH))

    console.print(table)


@app.command("set, s")
def set_config(
    show_header: Annotated[
        Optional[bool], typer.Option("--show-header/--hide-header")
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="directory for notes.yaml and reviews.yaml"),
    ] = None,
    remove_data_path: Annotated[
        bool, typer.Option("--remove-data-path", help="use the default data path")
    ] = False,
    default_review_time: Annotated[
        Optional[str],
        typer.Option("--default-time", help="HH:mm used by calendar cadences"),
    ] = None,
    fallback_review_hours: Annotated[
        Optional[int],
        typer.Option(
            "--fallback-hours", help="review interval for notes without a cadence"
        ),
    ] = None,
    monitor_interval_seconds: Annotated[
        Optional[int], typer.Option("--monitor-interval")
    ] = None,
    log_level: Annotated[
        Optional[str], typer.Option("--log-level", help=", ".join(LOG_LEVELS))
    ] = None,
) -> None:
    """Update configuration settings."""
    if default_review_time is not None:
        clock = clock_from_str(default_review_time)
        if clock is None:
            raise typer.BadParameter(
                "Time must be in HH:mm format (e.g., 8:00 or 17:30), "
                f"got '{default_review_time}'"
            )
        default_review_time = clock_to_str(*clock)
    if fallback_review_hours is not None and fallback_review_hours < 1:
        raise typer.BadParameter("Fallback hours must be at least 1")
    if monitor_interval_seconds is not None and monitor_interval_seconds < 1:
        raise typer.BadParameter("Monitor interval must be at least 1 second")
    if log_level is not None:
        log_level = log_level.upper()
        if log_level not in LOG_LEVELS:
            raise typer.BadParameter(
                f"Invalid log level: {log_level}. "
                f"Valid options: {', '.join(LOG_LEVELS)}"
            )

    CONFIGURATION_REPO.update_config(
        show_header=show_header,
        data_path=data_path,
        remove_data_path=remove_data_path,
        default_review_time=default_review_time,
        fallback_review_hours=fallback_review_hours,
        monitor_interval_seconds=monitor_interval_seconds,
        log_level=log_level,
    )
    if log_level is not None:
        logging.getLogger().setLevel(log_level)

    view()
