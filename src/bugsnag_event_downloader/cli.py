"""CLI interface for bugsnag-event-downloader using Typer framework."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from bugsnag_event_downloader import __description__, __version__
from bugsnag_event_downloader.commands import ErrorEventsCommand
from bugsnag_event_downloader.config import LogLevel, load_config
from bugsnag_event_downloader.errors import MappingLoadError, UpstreamError, ValidationError
from bugsnag_event_downloader.utils.dates import parse_cli_timestamp

EXIT_VALIDATION = 1
EXIT_MAPPING = 3
EXIT_UPSTREAM = 4

_LOG_LEVELS = {
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.DEBUG.value: logging.DEBUG,
}

app = typer.Typer(
    name="bugsnag-event-downloader",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console(stderr=True, soft_wrap=True)


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"bugsnag-event-downloader version {__version__}")
        raise typer.Exit()


def _configure_logging(level: str) -> None:
    """Route package logging through rich on stderr."""
    logging.basicConfig(
        level=_LOG_LEVELS.get(LogLevel(level).value, logging.INFO),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _timestamp_option(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return parse_cli_timestamp(value)
    except ValueError:
        raise typer.BadParameter(f"not an ISO 8601 timestamp: {value}")


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """Download Bugsnag error events as CSV."""
    pass


@app.command("error-events")
def error_events(
    project_id: Annotated[
        Optional[str],
        typer.Option("--project-id", help="Bugsnag project id")
    ] = None,
    error_id: Annotated[
        Optional[str],
        typer.Option("--error-id", help="Bugsnag error id")
    ] = None,
    csv_map_path: Annotated[
        Optional[Path],
        typer.Option("--csv-map-path", help="CSV file mapping output headers to event field paths")
    ] = None,
    start_date: Annotated[
        Optional[datetime],
        typer.Option("--start-date", parser=_timestamp_option, help="Window start, ISO 8601 (naive = UTC)")
    ] = None,
    end_date: Annotated[
        Optional[datetime],
        typer.Option("--end-date", parser=_timestamp_option, help="Window end, ISO 8601 (naive = UTC)")
    ] = None,
    out: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write CSV to this file (default: stdout)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .bugsnag-downloader.json)")
    ] = None,
    token: Annotated[
        Optional[str],
        typer.Option("--token", help="Bugsnag personal auth token (overrides config and BUGSNAG_AUTH_TOKEN)")
    ] = None,
) -> None:
    """Download the events of one error within a time window as CSV."""
    try:
        downloader_config = load_config(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_VALIDATION)

    _configure_logging(downloader_config.logging.level)
    if token:
        downloader_config.api.auth_token = token

    try:
        command = ErrorEventsCommand(
            project_id=project_id,
            error_id=error_id,
            csv_map_path=csv_map_path,
            start_date=start_date,
            end_date=end_date,
            config=downloader_config,
        )
        csv_text = command.get()
    except ValidationError as e:
        console.print(f"[red]Error:[/red] missing or invalid options: {escape(', '.join(e.attributes))}")
        raise typer.Exit(EXIT_VALIDATION)
    except MappingLoadError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_MAPPING)
    except UpstreamError as e:
        console.print(f"[red]Bugsnag API error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_UPSTREAM)

    if out:
        with open(out, "w", encoding="utf-8", newline="") as f:
            f.write(csv_text)
        console.print(f"[green]OK[/green] Wrote {escape(str(out))}")
    else:
        typer.echo(csv_text, nl=False)


if __name__ == "__main__":
    app()
