"""
Main CLI application using Typer.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Annotated

import pendulum
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..adapters.json_store_source import JsonStoreSource
from ..adapters.store_api_client import StoreApiClient
from ..config import AppConfig
from ..domain.exceptions import StoreHoursError
from ..domain.models import MealPeriod
from ..domain.slot_projector import format_hours, format_time_12h, rolling_window_start
from ..domain.timezone_converter import current_date_in_timezone, parse_civil_date
from ..services.store_hours_service import StoreHoursService

app = typer.Typer(
    name="storehours",
    help="Store opening hours and booking slots, in any timezone",
    add_completion=False
)

console = Console()

_state = {"verbose": False}


ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]


class DisplayZone(str, Enum):
    """Which timezone to show hours in."""
    DEVICE = "device"
    STORE = "store"


DisplayZoneOption = Annotated[
    Optional[DisplayZone],
    typer.Option(
        "--tz",
        help="Show hours in the device or the store timezone. Defaults to the config setting."
    )
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Store hours command line interface.
    """
    _state["verbose"] = verbose


def _configure_logging(config: AppConfig) -> None:
    level = logging.DEBUG if _state["verbose"] else getattr(logging, config.log_level)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_service(config: AppConfig, display_zone: Optional[DisplayZone]) -> StoreHoursService:
    """
    Build the service from configuration.

    Local JSON files win over the API when configured. The --tz option
    overrides the configured timezone preference for this invocation only.
    """
    if config.data.enabled:
        source = JsonStoreSource(
            store_times_file=config.data.store_times_file,
            overrides_file=config.data.overrides_file
        )
    else:
        source = StoreApiClient(
            base_url=config.api.base_url,
            timeout=config.api.timeout_seconds
        )

    if display_zone is None:
        use_device_timezone = config.use_device_timezone
    else:
        use_device_timezone = display_zone == DisplayZone.DEVICE

    return StoreHoursService(
        source=source,
        home_timezone=config.home_timezone,
        use_device_timezone=use_device_timezone,
        device_timezone=config.device_timezone
    )


def _load(
    config_file: Optional[Path],
    display_zone: Optional[DisplayZone] = None,
) -> tuple[AppConfig, StoreHoursService]:
    config = AppConfig.load(config_file)
    _configure_logging(config)
    return config, _build_service(config, display_zone)


def _resolve_date(value: Optional[str], config: AppConfig) -> str:
    """Validate a YYYY-MM-DD argument, defaulting to today in the store timezone."""
    if value is None:
        return current_date_in_timezone(config.home_timezone)
    return parse_civil_date(value).to_date_string()


@app.command()
def day(
    date: Annotated[Optional[str], typer.Argument(help="Date (YYYY-MM-DD). Defaults to today.")] = None,
    config_file: ConfigOption = None,
    display_zone: DisplayZoneOption = None,
):
    """
    Show whether the store is open on a date and its hours.

    Examples:

        storehours day

        storehours day 2025-08-04 --tz device
    """
    try:
        config, service = _load(config_file, display_zone)
        target = _resolve_date(date, config)
        schedule = service.load_schedule()

        info = schedule.selected_date_info(target, display_timezone=service.display_timezone)

        if info.is_open:
            status = "[bold green]Open[/bold green]"
            hours = service.day_hours(schedule, target)
        else:
            status = "[bold red]Closed[/bold red]"
            hours = "-"

        console.print(Panel.fit(
            f"{status}\n\n"
            f"[bold]Hours:[/bold] {hours}\n"
            f"[bold]Timezone:[/bold] {service.display_label()}",
            title=f"{info.day_name}, {info.date_label}"
        ))

    except (StoreHoursError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def slots(
    meal: Annotated[MealPeriod, typer.Argument(help="Meal period.")],
    date: Annotated[Optional[str], typer.Argument(help="Date (YYYY-MM-DD). Defaults to today.")] = None,
    config_file: ConfigOption = None,
):
    """
    List bookable time slots for a meal period. Slots are in store time.

    Examples:

        storehours slots dinner

        storehours slots breakfast 2025-08-04
    """
    try:
        config, service = _load(config_file)
        target = _resolve_date(date, config)
        schedule = service.load_schedule()

        available = service.slots(schedule, meal, target)

        console.print()
        if not available:
            console.print(
                f"[yellow]⚠ No available time slots for {meal.value} on {target}.[/yellow]"
            )
        else:
            console.print(
                f"[bold green]✓ {len(available)} slot(s) for {meal.value} on {target}:[/bold green]\n"
            )
            for slot in available:
                console.print(f"  {format_time_12h(slot)}")
        console.print()

    except (StoreHoursError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def upcoming(
    start: Annotated[Optional[str], typer.Option("--start", help="First date (YYYY-MM-DD). Defaults to today.")] = None,
    days: Annotated[Optional[int], typer.Option("--days", "-n", help="Number of days to show.")] = None,
    select: Annotated[Optional[str], typer.Option("--select", help="Date to highlight. The window moves only if it falls outside.")] = None,
    config_file: ConfigOption = None,
):
    """
    Show open/closed status for the next few days.

    Examples:

        storehours upcoming --days 7

        storehours upcoming --select 2025-08-12
    """
    try:
        config, service = _load(config_file)
        schedule = service.load_schedule()

        count = days if days is not None else config.upcoming_days
        window_start = _resolve_date(start, config)
        selected = None
        if select is not None:
            selected = parse_civil_date(select).to_date_string()
            window_start = rolling_window_start(window_start, selected, count)

        summaries = schedule.upcoming_days(start_date=window_start, count=count)

        table = Table(
            title="Upcoming days",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Day", style="bold yellow")
        table.add_column("Date")
        table.add_column("Status")
        table.add_column("Hours", style="dim")

        for summary in summaries:
            label = "Today" if summary.is_today else summary.day_name
            if summary.date == selected:
                label = f"> {label}"
            status = "[green]Open[/green]" if summary.is_open else "[red]Closed[/red]"
            table.add_row(
                label,
                f"{summary.month_name} {summary.day_of_month}",
                status,
                service.day_hours(schedule, summary.date)
            )

        console.print()
        console.print(table)
        console.print()

    except (StoreHoursError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def month(
    year_month: Annotated[Optional[str], typer.Argument(help="Month (YYYY-MM). Defaults to this month.")] = None,
    from_date: Annotated[Optional[str], typer.Option("--from", help="Earliest date shown (YYYY-MM-DD). Defaults to today.")] = None,
    config_file: ConfigOption = None,
):
    """
    Show which remaining dates of a month the store is open.

    Examples:

        storehours month

        storehours month 2025-12 --from 2025-12-01
    """
    try:
        config, service = _load(config_file)
        today = _resolve_date(from_date, config)
        first = parse_civil_date(f"{year_month}-01" if year_month else today)
        schedule = service.load_schedule()

        status = schedule.month_status(first.year, first.month, today=today)

        label = first.format("MMMM YYYY", locale="en")
        if not status:
            console.print(f"\n[yellow]⚠ No remaining dates in {label}.[/yellow]\n")
            return

        table = Table(
            title=label,
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Date", style="bold yellow")
        table.add_column("Day")
        table.add_column("Status")

        for date_string, is_open in status.items():
            table.add_row(
                date_string,
                parse_civil_date(date_string).format("ddd", locale="en"),
                "[green]Open[/green]" if is_open else "[red]Closed[/red]"
            )

        console.print()
        console.print(table)
        console.print()

    except (StoreHoursError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def week(
    config_file: ConfigOption = None,
):
    """
    Show the recurring weekly hours in store time.
    """
    try:
        _, service = _load(config_file)
        schedule = service.load_schedule()

        table = Table(
            title=f"Weekly hours ({schedule.home_timezone})",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Day", style="bold yellow")
        table.add_column("Hours")

        for weekday in schedule.weekly_schedule():
            hours = format_hours(weekday.entries) or "[red]Closed[/red]"
            table.add_row(weekday.day_name, hours)

        console.print()
        console.print(table)
        console.print()

    except (StoreHoursError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def greeting(
    config_file: ConfigOption = None,
    display_zone: DisplayZoneOption = None,
):
    """
    Print the time-of-day greeting.
    """
    try:
        _, service = _load(config_file, display_zone)
        console.print(f"\n[bold cyan]{service.greeting(now=pendulum.now())}[/bold cyan]\n")

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]storehours[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
