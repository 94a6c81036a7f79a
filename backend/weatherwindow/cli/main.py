import asyncio
import logging
from typing import Optional

import typer

from weatherwindow.config import Settings
from weatherwindow.domain.state import Failed, Loaded, ViewState
from weatherwindow.services.location_resolver import default_geolocation
from weatherwindow.services.weather_service import WeatherService
from weatherwindow.services.weather_view import HourTable, build_view

app = typer.Typer(help="Current weather plus the previous and next 24 hours")


def _build_service() -> WeatherService:
    settings = Settings.from_env()
    return WeatherService(settings, geolocation=default_geolocation(settings))


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log fetch details to stderr")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("show")
def cli_show(
    location: Optional[str] = typer.Argument(None, help="Location, e.g. 'Manila, PH' or '40.7128,-74.0060'"),
    lat: Optional[float] = typer.Option(None, help="Latitude"),
    lon: Optional[float] = typer.Option(None, help="Longitude"),
):
    service = _build_service()
    if location is not None:
        state = asyncio.run(service.search(location))
    elif lat is not None and lon is not None:
        state = asyncio.run(service.search_coordinates(lat, lon))
    else:
        typer.echo("Enter a location to search, or pass --lat and --lon", err=True)
        raise typer.Exit(code=2)
    _print_state(state, service)


@app.command("here")
def cli_here():
    """Weather for the host's own position."""
    service = _build_service()
    state = asyncio.run(service.use_my_location())
    _print_state(state, service)


def _print_state(state: ViewState, service: WeatherService) -> None:
    if isinstance(state, Failed):
        typer.echo(state.status, err=True)
        raise typer.Exit(code=1)
    if not isinstance(state, Loaded):
        typer.echo("Weather fetch did not complete", err=True)
        raise typer.Exit(code=1)
    view = build_view(state.response, service.settings.unit_system)
    typer.echo(view.address)
    if view.current is not None:
        cc = view.current
        typer.echo(cc.as_of)
        typer.echo(f"{cc.icon} {cc.conditions}")
        typer.echo(f"Temperature\t{cc.temperature}")
        typer.echo(f"Wind speed\t{cc.wind_speed}")
        typer.echo(f"Likelihood of rain\t{cc.rain_chance}")
    for table in (view.previous, view.next):
        _print_table(table)


def _print_table(table: HourTable) -> None:
    typer.echo("")
    typer.echo(table.title)
    if not table.rows:
        typer.echo(table.empty_message)
        return
    typer.echo("Time\tTemp\tWind\tRain %\tConditions")
    for row in table.rows:
        typer.echo(f"{row.time}\t{row.temperature}\t{row.wind_speed}\t{row.rain_chance}\t{row.icon} {row.conditions}")


if __name__ == "__main__":
    app()
