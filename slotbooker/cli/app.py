"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, Any, Dict, Optional

import typer
from pendulum.parsing.exceptions import ParserError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..adapters.calendly_client import CalendlyClient
from ..adapters.mock_calendly_client import MockCalendlyClient
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import SlotBookerError
from ..domain.models import Spot
from ..services.slot_booker import BookingRunReport, RunStatus, SlotBookerService

app = typer.Typer(
    name="slotbooker",
    help="Find the first open Calendly slot and book it",
    add_completion=False
)

console = Console()

MOCK_BOOKING_URL = "https://calendly.com/mock/30min"

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
UrlOption = Annotated[Optional[str], typer.Option("--url", help="Booking page URL, e.g. https://calendly.com/acme/30min")]
DaysOption = Annotated[Optional[int], typer.Option("--days", help="Lookahead window in days")]
MockOption = Annotated[bool, typer.Option("--mock", help="Use bundled mock data instead of the Calendly API.")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True
    )


def _load_config(
    *,
    config_file: Optional[Path],
    url: Optional[str],
    days: Optional[int] = None,
    name: Optional[str] = None,
    email: Optional[str] = None,
    mock: bool = False
) -> AppConfig:
    """
    Load the config file (if any) and apply command-line overrides.

    A missing default config file is fine as long as a URL is given on the
    command line or mock mode is active.
    """
    config_path = config_file or get_default_config_path()

    data: Dict[str, Any] = {}
    if config_path.exists() or config_file is not None:
        data = AppConfig.load_from_yaml(config_path).model_dump()
    elif not url and not mock:
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            f"Pass --url or create a config.yaml file. See config.example.yaml for reference."
        )

    if url:
        data["booking_url"] = url
    if mock:
        data.setdefault("booking_url", MOCK_BOOKING_URL)
    if days is not None:
        data["lookahead_days"] = days

    invitee = dict(data.get("invitee") or {})
    if name:
        invitee["full_name"] = name
    if email:
        invitee["email"] = email
    data["invitee"] = invitee

    return AppConfig(**data)


def _build_client(config: AppConfig, mock: bool) -> CalendlyClient | MockCalendlyClient:
    if mock:
        console.print("[yellow]⚠  MOCK MODE: using bundled test data[/yellow]\n")
        return MockCalendlyClient(booking_url=config.booking_url, preferences=config.get_preferences())

    return CalendlyClient(
        config.booking_url,
        base_url=config.base_url,
        lookahead_days=config.lookahead_days,
        preferences=config.get_preferences(),
        timeout=config.request_timeout_seconds
    )


def _format_spot_time(spot: Spot) -> str:
    """Short start time for tables, or the raw value if it cannot be parsed."""
    try:
        return spot.start_datetime().format("HH:mm")
    except (ParserError, ValueError):
        return spot.start_time


def _render_report(report: BookingRunReport) -> None:
    """Print the outcome of a booking run."""
    if report.selection is not None:
        console.print(
            f"[green]✓ Found available slot on {report.selection.day} "
            f"at {report.selection.start_time}[/green]"
        )

    if report.status is RunStatus.AVAILABILITY_FAILED:
        console.print(f"[bold red]❌ Error in main process:[/bold red] {report.error_message}")
    elif report.status is RunStatus.NO_SLOTS:
        console.print("[yellow]⚠ No available time slots found[/yellow]")
    elif report.status is RunStatus.NO_BOOKABLE_SPOT:
        console.print("[yellow]⚠ No available spots found[/yellow]")
    elif report.status is RunStatus.SLOT_FOUND:
        console.print("[dim]Dry run: no booking was made.[/dim]")
    elif report.status is RunStatus.BOOKING_FAILED:
        console.print(f"[bold red]❌ Booking failed:[/bold red] {report.error_message}")
    elif report.status is RunStatus.INCOMPLETE:
        console.print("[yellow]❌ Booking process completed but response is incomplete[/yellow]")
    elif report.status is RunStatus.BOOKED:
        result = report.result
        console.print(Panel.fit(
            f"[bold green]✅ Booking successful![/bold green]\n\n"
            f"[bold]Event Name:[/bold] {result.event.name}\n"
            f"[bold]Start Time:[/bold] {result.event.start_time}\n"
            f"[bold]End Time:[/bold] {result.event.end_time}\n"
            f"[bold]Booking URI:[/bold] {result.uri}\n"
            f"[bold]Booking UUID:[/bold] {result.uuid}",
            title="✓ Booking"
        ))


@app.command()
def book(
    config_file: ConfigOption = None,
    url: UrlOption = None,
    name: Annotated[Optional[str], typer.Option("--name", help="Invitee full name")] = None,
    email: Annotated[Optional[str], typer.Option("--email", help="Invitee email")] = None,
    days: DaysOption = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Find a slot but do not book it.")] = False,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Find the first open slot in the lookahead window and book it.

    Examples:

        slotbooker book --url https://calendly.com/acme/30min

        slotbooker book --name "Jane Roe" --email jane@example.com

        slotbooker book --mock --dry-run
    """
    _configure_logging(verbose)

    try:
        config = _load_config(
            config_file=config_file,
            url=url,
            days=days,
            name=name,
            email=email,
            mock=mock
        )
        client = _build_client(config, mock)
    except (FileNotFoundError, ValueError, SlotBookerError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"[bold cyan]🗓️  Searching {config.lookahead_days} day(s) for an open slot...[/bold cyan]")

    service = SlotBookerService(
        client=client,
        invitee=config.invitee.to_identity(),
        reuse_event_type=config.reuse_event_type
    )
    try:
        report = service.run(book=not dry_run)
        _render_report(report)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print()

    if not report.succeeded:
        raise typer.Exit(1)


@app.command()
def availability(
    config_file: ConfigOption = None,
    url: UrlOption = None,
    days: DaysOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Show availability for the lookahead window.
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file=config_file, url=url, days=days, mock=mock)
        client = _build_client(config, mock)
        available_days = client.list_availability()
    except (FileNotFoundError, ValueError, SlotBookerError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if not available_days:
        console.print("[yellow]⚠ No availability returned.[/yellow]")
        return

    table = Table(
        title="Availability",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Date", style="bold yellow")
    table.add_column("Status")
    table.add_column("Bookable spots", style="dim")

    for day in available_days:
        bookable = [_format_spot_time(spot) for spot in day.spots if spot.is_bookable()]
        table.add_row(day.date, day.status, ", ".join(bookable) or "-")

    console.print()
    console.print(table)
    console.print()


@app.command()
def event_type(
    config_file: ConfigOption = None,
    url: UrlOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Show the event type behind the booking page.
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file=config_file, url=url, mock=mock)
        client = _build_client(config, mock)
        descriptor = client.fetch_event_type_details()
    except (FileNotFoundError, ValueError, SlotBookerError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    location = descriptor.resolve_location()
    console.print(Panel.fit(
        f"[bold]Name:[/bold] {descriptor.name or 'N/A'}\n"
        f"[bold]Duration:[/bold] {descriptor.duration_minutes or 'N/A'} min\n"
        f"[bold]Event type UUID:[/bold] {descriptor.uuid}\n"
        f"[bold]Scheduling link:[/bold] {descriptor.scheduling_link_uid}\n"
        f"[bold]Location:[/bold] {location.kind}"
        + (f" ({location.location})" if location.location else ""),
        title="Event type"
    ))


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]slotbooker[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
