"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..chat import ChatMessage, MessageSender, MessageStatus
from ..dispatcher import Envelope, Provenance
from ..log import configure_logging
from ..network import NetworkStatus
from ..storage import Language, PreferencesRepository
from .providers import (
    get_dispatcher,
    get_location_service,
    get_position_source,
    get_settings,
    get_store,
)

# Load environment variables
load_dotenv()

app = typer.Typer(
    name="smartkissan",
    help="Farmer dashboard client: weather, crop advice, field analytics and chat",
    no_args_is_help=True,
    add_completion=True,
)

console = Console()

_SOURCE_STYLES = {
    Provenance.LIVE: "green",
    Provenance.HEURISTIC: "cyan",
    Provenance.MOCK: "yellow",
    Provenance.SYNTHETIC: "magenta",
}


def _source_line(envelope: Envelope) -> str:
    style = _SOURCE_STYLES[envelope.source]
    line = f"[{style}]source: {envelope.source.value}[/{style}]"
    if envelope.error:
        line += f" [dim]({envelope.error})[/dim]"
    return line


@app.callback()
def main(
    log_level: str = typer.Option(
        None,
        "--log-level",
        "-L",
        help="Log level: debug, info, warning or error (default: SMARTKISSAN_LOG_LEVEL)"
    )
):
    """Configure logging before any command runs."""
    configure_logging(log_level or get_settings().log_level)


@app.command()
def weather(
    location: str = typer.Argument(None, help="Place name (default: Punjab, India)"),
    latitude: float = typer.Option(None, "--lat", help="Latitude"),
    longitude: float = typer.Option(None, "--lon", help="Longitude"),
):
    """Show current conditions and the forecast."""
    async def _weather():
        async with get_dispatcher(get_settings()) as dispatcher:
            envelope = await dispatcher.get_weather(
                {"location": location, "latitude": latitude, "longitude": longitude}
            )

        snapshot = envelope.data
        current = snapshot.current
        place = ", ".join(p for p in (snapshot.location, snapshot.region, snapshot.country) if p)
        body = (
            f"[bold]{current.temperature:.0f}°C[/bold]  {current.description}\n"
            f"Humidity {current.humidity:.0f}%  Rainfall {current.rainfall:.1f} mm"
        )
        if current.wind_speed is not None:
            body += f"\nWind {current.wind_speed:.0f} km/h {current.wind_direction or ''}"
        console.print(Panel(body, title=place, border_style="cyan"))

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Day", style="cyan")
        table.add_column("Temp", justify="right")
        table.add_column("Rain (mm)", justify="right")
        table.add_column("Conditions")
        for day in snapshot.forecast:
            table.add_row(day.day, f"{day.temperature:.0f}°C", f"{day.rainfall:.1f}", day.description)
        console.print(table)
        console.print(_source_line(envelope))

    asyncio.run(_weather())


@app.command()
def recommend(
    location: str = typer.Option(None, "--location", "-l", help="Place name for the weather heuristic"),
    soil_type: str = typer.Option(None, "--soil", "-s", help="Soil type"),
):
    """Recommend crops for a soil type or location."""
    async def _recommend():
        async with get_dispatcher(get_settings()) as dispatcher:
            envelope = await dispatcher.get_crop_recommendations(
                {"location": location, "soilType": soil_type}
            )

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("#", style="dim", width=3)
        table.add_column("Crop", style="green")
        table.add_column("Confidence", justify="right")
        table.add_column("Soil")
        table.add_column("Season")
        for crop in envelope.data:
            confidence = f"{crop.confidence:.0%}" if crop.confidence is not None else "-"
            table.add_row(str(crop.id), crop.name, confidence, crop.soil_type or "-", crop.season or "-")
        console.print(table)
        console.print(_source_line(envelope))

    asyncio.run(_recommend())


@app.command()
def yields(
    crop: str = typer.Option(None, "--crop", "-c", help="Crop name"),
    location: str = typer.Option(None, "--location", "-l", help="Place name"),
):
    """Show predicted yields."""
    async def _yields():
        async with get_dispatcher(get_settings()) as dispatcher:
            envelope = await dispatcher.get_yield_predictions({"crop": crop, "location": location})

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Crop", style="green")
        table.add_column("Predicted yield", justify="right")
        table.add_column("Probability", justify="right")
        for prediction in envelope.data:
            table.add_row(
                prediction.crop,
                f"{prediction.predicted_yield:.1f} {prediction.unit}",
                f"{prediction.probability:.0%}",
            )
        console.print(table)
        console.print(_source_line(envelope))

    asyncio.run(_yields())


@app.command()
def prices(
    crop: str = typer.Option(None, "--crop", "-c", help="Crop name"),
    period: str = typer.Option(None, "--period", "-p", help="Forecast period"),
):
    """Show the monthly price forecast."""
    async def _prices():
        async with get_dispatcher(get_settings()) as dispatcher:
            envelope = await dispatcher.get_price_forecasts({"crop": crop, "period": period})

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Month", style="cyan")
        table.add_column("Price (₹/quintal)", justify="right")
        for point in envelope.data:
            table.add_row(point.month, f"{point.price:,.0f}")
        console.print(table)
        console.print(_source_line(envelope))

    asyncio.run(_prices())


@app.command()
def satellite(
    location: str = typer.Option(None, "--location", "-l", help="Field location"),
    seed: int = typer.Option(None, "--seed", help="Seed for the simulated NDVI history"),
):
    """Show satellite field data and the NDVI assessment."""
    async def _satellite():
        async with get_dispatcher(get_settings()) as dispatcher:
            data = await dispatcher.get_satellite_data({"location": location})
            ndvi = await dispatcher.get_ndvi_analysis({"location": location, "seed": seed})

        field = data.data
        table = Table(show_header=False, box=None)
        table.add_column("Metric", style="bold cyan", width=15)
        table.add_column("Value")
        table.add_row("NDVI", f"{field.ndvi:.2f}")
        table.add_row("Soil moisture", f"{field.soil_moisture:.0f}%")
        table.add_row("Health", field.health_status.value)
        table.add_row("Last updated", field.last_updated.isoformat())
        console.print(table)
        console.print(_source_line(data))

        analysis = ndvi.data
        if analysis.current_ndvi is not None:
            console.print(
                f"\n[bold]NDVI history[/bold]: current {analysis.current_ndvi:.2f}, "
                f"recent average {analysis.recent_average:.2f}, health {analysis.health.value}"
            )
            for tip in analysis.recommendations:
                console.print(f"  • {tip}")
        console.print(_source_line(ndvi))

    asyncio.run(_satellite())


@app.command()
def geocode(
    latitude: float = typer.Argument(..., help="Latitude"),
    longitude: float = typer.Argument(..., help="Longitude"),
):
    """Resolve coordinates to a place name."""
    async def _geocode():
        async with get_dispatcher(get_settings()) as dispatcher:
            envelope = await dispatcher.reverse_geocode(latitude, longitude)

        if not envelope.success or envelope.data is None:
            console.print(f"[yellow]No place found for {latitude:.4f}, {longitude:.4f}[/yellow]")
            console.print(_source_line(envelope))
            raise typer.Exit(code=1)
        console.print(f"[green]{envelope.data.display_name}[/green]")

    asyncio.run(_geocode())


@app.command()
def locate(
    latitude: float = typer.Option(None, "--lat", help="Use these coordinates instead of the IP lookup"),
    longitude: float = typer.Option(None, "--lon", help="Use these coordinates instead of the IP lookup"),
    force: bool = typer.Option(False, "--force", "-f", help="Ignore the cached location"),
):
    """Determine the farmer's location and remember it."""
    async def _locate():
        settings = get_settings()
        store = get_store(settings)
        source = get_position_source(settings, latitude, longitude)
        try:
            await store.connect()
            async with get_dispatcher(settings) as dispatcher:
                service = get_location_service(settings, dispatcher, source, store)
                location = await service.locate(force=force)
        finally:
            await source.close()
            await store.disconnect()

        if location.error:
            console.print(f"[yellow]Location unavailable: {location.error}[/yellow]")
            console.print(f"[dim]Using default {location.describe()}[/dim]")
        else:
            console.print(f"[green]{location.describe()}[/green]")
            console.print(f"[dim]{location.latitude:.4f}, {location.longitude:.4f}[/dim]")

    asyncio.run(_locate())


@app.command()
def status():
    """Check connectivity and which integrations are reachable."""
    async def _status():
        async with get_dispatcher(get_settings()) as dispatcher:
            network = await dispatcher.network.probe() if dispatcher.network else None
            descriptors = await dispatcher.api_registry().refresh()

        if network is not None:
            style = "green" if network is NetworkStatus.ONLINE else "red"
            console.print(f"Network: [{style}]{network.value}[/{style}]")

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Integration", style="cyan")
        table.add_column("Category")
        table.add_column("Available")
        for descriptor in descriptors:
            table.add_row(
                descriptor.name,
                descriptor.category,
                "[green]yes[/green]" if descriptor.is_available else "[red]no[/red]",
            )
        console.print(table)

    asyncio.run(_status())


@app.command()
def chat(
    language: Language = typer.Option(
        None,
        "--language",
        "-l",
        help="Reply language (default: saved preference)"
    ),
    clear: bool = typer.Option(False, "--clear", help="Start with an empty transcript"),
):
    """Chat with the farming assistant."""
    async def _chat():
        settings = get_settings()
        store = get_store(settings)
        try:
            await store.connect()
            preferences = await PreferencesRepository(store).load_preferences()
            async with get_dispatcher(settings) as dispatcher:
                source = get_position_source(settings, *preferences.default_location)
                service = get_location_service(settings, dispatcher, source, store)
                location = await service.preferred(preferences)
                session = dispatcher.open_chat_session(
                    store=store,
                    language=(language or preferences.language).value,
                    location=location,
                    limit=settings.transcript_limit,
                )
                if clear:
                    await session.clear()
                else:
                    await session.load()

                for message in session.messages:
                    _print_message(message)
                console.print("[dim]Type 'exit', 'quit', or 'q' to leave; 'retry' resends a failed message[/dim]\n")

                while True:
                    try:
                        user_input = console.input("[bold yellow]You:[/bold yellow] ")
                    except (KeyboardInterrupt, EOFError):
                        console.print("\n[dim]Goodbye![/dim]")
                        break

                    if not user_input.strip():
                        continue
                    if user_input.strip().lower() in ('exit', 'quit', 'q'):
                        console.print("[dim]Goodbye![/dim]")
                        break

                    if user_input.strip().lower() == "retry":
                        failed = [m for m in session.messages if m.status is MessageStatus.FAILED]
                        if not failed:
                            console.print("[dim]Nothing to retry[/dim]")
                            continue
                        answer = await session.retry(failed[-1].id)
                    else:
                        answer = await session.send(user_input)

                    if answer is None:
                        console.print("[red]Message failed; type 'retry' to resend[/red]")
                    else:
                        _print_message(answer)
        finally:
            await store.disconnect()

    asyncio.run(_chat())


def _print_message(message: ChatMessage) -> None:
    if message.sender is MessageSender.USER:
        console.print(f"[bold yellow]You:[/bold yellow] {message.text}")
    else:
        console.print(f"[bold green]Assistant:[/bold green] {message.text}\n")


@app.command()
def prefs(
    language: Language = typer.Option(None, "--language", "-l", help="Preferred language"),
    dark_mode: bool = typer.Option(None, "--dark-mode/--light-mode", help="Dashboard theme"),
    notifications: bool = typer.Option(None, "--notifications/--no-notifications", help="Alerts"),
    use_current_location: bool = typer.Option(
        None,
        "--use-location/--no-use-location",
        help="Use the device location instead of the default one"
    ),
):
    """Show or change saved preferences."""
    async def _prefs():
        settings = get_settings()
        store = get_store(settings)
        try:
            await store.connect()
            repository = PreferencesRepository(store)
            changes = {
                name: value
                for name, value in (
                    ("language", language),
                    ("dark_mode", dark_mode),
                    ("notifications_enabled", notifications),
                    ("use_current_location", use_current_location),
                )
                if value is not None
            }
            if changes:
                preferences = await repository.update_preferences(**changes)
                console.print("[green]Preferences saved[/green]")
            else:
                preferences = await repository.load_preferences()
        finally:
            await store.disconnect()

        table = Table(show_header=False, box=None)
        table.add_column("Setting", style="bold cyan", width=22)
        table.add_column("Value")
        table.add_row("Language", preferences.language.value)
        table.add_row("Dark mode", str(preferences.dark_mode))
        table.add_row("Notifications", str(preferences.notifications_enabled))
        table.add_row("Use current location", str(preferences.use_current_location))
        latitude, longitude = preferences.default_location
        table.add_row("Default location", f"{latitude:.4f}, {longitude:.4f}")
        console.print(table)

    asyncio.run(_prefs())


if __name__ == "__main__":
    app()
