"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..config import AppConfig
from ..domain.business_hours_engine import BusinessHoursEngine
from ..domain.exceptions import ConfigurationError, DeadlineOutOfRangeError
from ..domain.parsing import format_date_time, parse_starting_date_time

app = typer.Typer(
    name="bhcalc",
    help="Calculate pickup deadlines that respect business hours",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]


def _load_config(config_file: Optional[Path]) -> AppConfig:
    try:
        return AppConfig.load_or_default(config_file)
    except ConfigurationError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


def configure_logging(level: str) -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def _build_engine(config: AppConfig) -> BusinessHoursEngine:
    return BusinessHoursEngine(
        business_hours=config.build_business_hours(),
        interval_unit=config.interval_unit,
    )


@app.command()
def serve(
    config_file: ConfigOption = None,
    host: Annotated[Optional[str], typer.Option("--host", help="Bind address")] = None,
    port: Annotated[Optional[int], typer.Option("--port", "-p", help="Bind port")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR")] = None,
):
    """
    Run the REST API.

    Examples:

        bhcalc serve
        bhcalc serve --config config.yaml --port 9000
    """
    import uvicorn

    from ..api.app import create_app

    config = _load_config(config_file)
    level = (log_level or config.logging.level).upper()
    configure_logging(level)

    bind_host = host or config.server.host
    bind_port = port or config.server.port
    console.print(
        f"[bold cyan]Business Hours Calculator[/bold cyan] on http://{bind_host}:{bind_port}/api"
    )
    uvicorn.run(
        create_app(config),
        host=bind_host,
        port=bind_port,
        log_level=level.lower(),
    )


@app.command()
def deadline(
    starting_date_time: Annotated[str, typer.Argument(help="Start in the format 'YYYY-MM-DD H:mm'")],
    time_interval: Annotated[int, typer.Argument(min=0, help="Interval in the configured unit")],
    config_file: ConfigOption = None,
):
    """
    Calculate a single expected pickup time.

    Example:

        bhcalc deadline "2024-03-01 9:30" 8
    """
    config = _load_config(config_file)
    configure_logging(config.logging.level)

    parsed = parse_starting_date_time(starting_date_time, config.timezone)
    if not parsed.ok:
        console.print(f"[bold red]Error:[/bold red] {parsed.error}")
        raise typer.Exit(1)

    engine = _build_engine(config)
    try:
        expected = engine.calculate_deadline(time_interval, parsed.value)
    except DeadlineOutOfRangeError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"Expected pickup time: [bold green]{format_date_time(expected)}[/bold green]")
    console.print(f"[dim]{time_interval} {config.interval_unit} from {starting_date_time} ({config.timezone})[/dim]")


@app.command()
def hours(config_file: ConfigOption = None):
    """
    Show the configured business hours.
    """
    config = _load_config(config_file)
    business_hours = config.build_business_hours()

    table = Table(
        title=f"Business hours ({business_hours.timezone})",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Days", style="bold yellow")
    table.add_column("Hours")

    for segment in business_hours.segments:
        table.add_row(segment.days_label(), segment.hours_label())

    console.print()
    console.print(table)
    console.print(f"[dim]Encoded: {_build_engine(config).prepare_business_hours_data()}[/dim]")
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]bhcalc[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
