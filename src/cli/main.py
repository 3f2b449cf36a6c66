"""CLI de astro-explorer (Typer + Rich).

La CLI es solo presentación: arma consultas, las pasa al coordinador y dibuja
el `AggregateResult` que recibe.
"""

from __future__ import annotations

import asyncio
import datetime as dt
import logging
from typing import Any, Awaitable, Callable

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from adapters.http_client import HttpTransport
from cli.doctor import app as doctor_app
from cli.ui_components import (
    build_error_panel,
    build_neo_table,
    build_pictures_table,
    build_rover_photos_table,
    build_rovers_table,
    build_summary_panel,
)
from core.config import AppSettings
from core.domain.language import Language
from core.domain.models import AggregateResult
from core.domain.queries import NeoById, NeoByRange, PictureRange, RoverPhotos, SinglePicture
from core.domain.rovers import ROVERS
from core.services.coordinator import RequestCoordinator

app = typer.Typer(no_args_is_help=True, help="Explore NASA open data from the terminal.")
rovers_app = typer.Typer(no_args_is_help=True, help="Mars rover imagery.")
neo_app = typer.Typer(no_args_is_help=True, help="Near-Earth objects.")
app.add_typer(rovers_app, name="rovers")
app.add_typer(neo_app, name="neo")
app.add_typer(doctor_app, name="doctor")

_console = Console()

# Punto de inyección para tests (p.ej. `httpx.MockTransport`).
_transport_factory: Callable[[AppSettings], HttpTransport] = HttpTransport.from_settings


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # httpx registra la URL completa (con la credencial) a nivel INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    try:
        settings = AppSettings()
    except ValidationError as exc:
        _console.print(build_error_panel(exc))
        raise typer.Exit(code=2) from None
    _configure_logging("DEBUG" if verbose else settings.log_level)


Action = Callable[[RequestCoordinator], Awaitable[AggregateResult[Any]]]


async def _execute(settings: AppSettings, action: Action) -> AggregateResult[Any]:
    async with _transport_factory(settings) as transport:
        coordinator = RequestCoordinator.from_transport(transport, settings)
        return await action(coordinator)


def _run_query(action: Action) -> tuple[AppSettings, AggregateResult[Any]]:
    settings = AppSettings()
    result = asyncio.run(_execute(settings, action))
    if result.last_error is not None:
        _console.print(build_error_panel(result.last_error))
        raise typer.Exit(code=1)
    return settings, result


def _print_json(result: AggregateResult[Any]) -> None:
    _console.print_json(data=result.as_dict())


@app.command()
def picture(
    date: str | None = typer.Option(None, "--date", help="ISO date (YYYY-MM-DD); defaults to today."),
    json_output: bool = typer.Option(False, "--json", help="Print raw JSON."),
) -> None:
    """Picture of the day."""

    query = SinglePicture(date=date)
    _, result = _run_query(lambda coordinator: coordinator.run(query))
    if json_output:
        _print_json(result)
        return
    _console.print(build_pictures_table(result.items))
    for record in result.items:
        _console.print(f"\n[bold]{record.title}[/bold]\n{record.explanation}")


@app.command()
def pictures(
    start: str | None = typer.Option(None, "--start", help="Range start (YYYY-MM-DD)."),
    end: str | None = typer.Option(None, "--end", help="Range end (YYYY-MM-DD)."),
    last: int | None = typer.Option(None, "--last", min=1, help="Last N days ending today."),
    json_output: bool = typer.Option(False, "--json", help="Print raw JSON."),
) -> None:
    """Pictures for a date range, newest first."""

    if last is not None:
        today = dt.date.today()
        start, end = (today - dt.timedelta(days=last)).isoformat(), today.isoformat()

    query = PictureRange(start=start, end=end)
    _, result = _run_query(lambda coordinator: coordinator.run(query))
    if json_output:
        _print_json(result)
        return
    _console.print(build_pictures_table(result.items))


@rovers_app.command("list")
def rovers_list() -> None:
    """Known rovers and their cameras."""

    _console.print(build_rovers_table(ROVERS.values()))


@rovers_app.command("photos")
def rovers_photos(
    rover: str = typer.Argument(..., help="curiosity, opportunity or spirit."),
    sol: int | None = typer.Option(None, "--sol", min=0, help="Martian day of the mission."),
    earth_date: str | None = typer.Option(None, "--earth-date", help="Earth date (YYYY-MM-DD)."),
    camera: str | None = typer.Option(None, "--camera", help="Camera code, or ALL."),
    pages: int = typer.Option(1, "--pages", min=1, help="Pages to load."),
    json_output: bool = typer.Option(False, "--json", help="Print raw JSON."),
) -> None:
    """Rover photos for one day, loading up to N pages."""

    query = RoverPhotos(rover=rover, sol=sol, earth_date=earth_date, camera=camera)

    async def action(coordinator: RequestCoordinator) -> AggregateResult[Any]:
        result = await coordinator.run(query)
        loaded = 1
        while loaded < pages and result.has_more and result.last_error is None:
            result = await coordinator.load_more()
            loaded += 1
        return result

    _, result = _run_query(action)
    if json_output:
        _print_json(result)
        return
    _console.print(build_rover_photos_table(result.items))
    more = "more pages available" if result.has_more else "no more pages"
    _console.print(f"[dim]{len(result.items)} photos, {more}[/dim]")


@neo_app.command("feed")
def neo_feed(
    start: str | None = typer.Option(None, "--start", help="Range start (YYYY-MM-DD)."),
    end: str | None = typer.Option(None, "--end", help="Range end (YYYY-MM-DD)."),
    next_days: int | None = typer.Option(None, "--next", min=1, help="Next N days starting today."),
    lang: Language | None = typer.Option(None, "--lang", help="Label language."),
    json_output: bool = typer.Option(False, "--json", help="Print raw JSON."),
) -> None:
    """Near-Earth objects approaching in a date range."""

    if next_days is not None:
        today = dt.date.today()
        start, end = today.isoformat(), (today + dt.timedelta(days=next_days)).isoformat()

    query = NeoByRange(start=start, end=end)
    settings, result = _run_query(lambda coordinator: coordinator.run(query))
    if json_output:
        _print_json(result)
        return
    language = lang or settings.default_language
    if result.summary is not None:
        _console.print(build_summary_panel(result.summary))
    _console.print(build_neo_table(result.items, result.hazards, language=language))


@neo_app.command("lookup")
def neo_lookup(
    neo_id: str = typer.Argument(..., help="Object id."),
    lang: Language | None = typer.Option(None, "--lang", help="Label language."),
    json_output: bool = typer.Option(False, "--json", help="Print raw JSON."),
) -> None:
    """One near-Earth object with all its close approaches."""

    query = NeoById(neo_id=neo_id)
    settings, result = _run_query(lambda coordinator: coordinator.run(query))
    if json_output:
        _print_json(result)
        return
    language = lang or settings.default_language
    _console.print(build_neo_table(result.items, result.hazards, language=language))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
