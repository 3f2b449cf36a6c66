"""Componentes de UI para CLI (Rich).

Separa los detalles visuales de los comandos: tablas y paneles reutilizables
que solo leen lo que devuelve el coordinador.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.language import Language
from core.domain.models import (
    DailyPictureRecord,
    FeedSummary,
    HazardLevel,
    NearEarthObjectRecord,
    RoverImageRecord,
)
from core.domain.rovers import RoverInfo

_HAZARD_STYLES = {
    HazardLevel.HIGH: "bold red",
    HazardLevel.MEDIUM: "yellow",
    HazardLevel.LOW: "dim",
}


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("astro-explorer", style="bold cyan")
    subtitle = Text("Picture of the day • Rover imagery • Near-Earth objects", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_pictures_table(records: Iterable[DailyPictureRecord]) -> Table:
    table = Table(title="Pictures of the Day")
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Media", style="green")
    table.add_column("URL", style="magenta")
    table.add_column("Credit", style="dim")
    for record in records:
        table.add_row(
            record.date.isoformat(),
            record.title,
            record.media_type,
            record.hd_url or record.url,
            record.copyright or "",
        )
    return table


def build_rover_photos_table(records: Iterable[RoverImageRecord]) -> Table:
    table = Table(title="Rover Photos")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Sol", style="white")
    table.add_column("Earth date", style="white")
    table.add_column("Camera", style="green")
    table.add_column("Image", style="magenta")
    for record in records:
        table.add_row(
            str(record.id),
            str(record.sol),
            record.earth_date.isoformat(),
            record.camera.name,
            record.img_src,
        )
    return table


def build_rovers_table(rovers: Iterable[RoverInfo]) -> Table:
    table = Table(title="Rovers")
    table.add_column("Rover", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Landing", style="white")
    table.add_column("Location", style="green")
    table.add_column("Cameras", style="magenta")
    for rover in rovers:
        table.add_row(
            rover.key,
            rover.status,
            rover.landing_date.isoformat(),
            rover.location,
            ", ".join(rover.camera_codes()),
        )
    return table


def build_neo_table(
    records: Iterable[NearEarthObjectRecord],
    hazards: dict[str, HazardLevel],
    *,
    language: Language = Language.ENGLISH,
) -> Table:
    table = Table(title="Near-Earth Objects")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Approach", style="white")
    table.add_column("Miss (km)", justify="right")
    table.add_column("Velocity (km/h)", justify="right")
    table.add_column("Diameter (m)", justify="right")
    table.add_column("Risk")
    for record in records:
        approach = record.first_approach
        level = hazards.get(record.id, HazardLevel.LOW)
        diameter = record.estimated_diameter_m
        table.add_row(
            record.id,
            record.name,
            approach.date.isoformat() if approach else "-",
            f"{approach.miss_distance_km:,.0f}" if approach else "-",
            f"{approach.relative_velocity_kmh:,.0f}" if approach else "-",
            f"{diameter.min_m:,.0f}–{diameter.max_m:,.0f}",
            Text(level.label(language), style=_HAZARD_STYLES[level]),
        )
    return table


def build_summary_panel(summary: FeedSummary) -> Panel:
    body = Text()
    body.append(f"Objects: {summary.total_count}\n")
    body.append(f"Potentially hazardous: {summary.hazardous_count}\n", style="red")
    body.append(f"Sentry: {summary.sentry_count}")
    if summary.dates:
        body.append(f"\nDates: {summary.dates[0].isoformat()} → {summary.dates[-1].isoformat()}", style="dim")
    return Panel(body, title=Text("Feed summary", style="bold yellow"), border_style="yellow")


def build_error_panel(error: Exception) -> Panel:
    title = Text(type(error).__name__, style="bold red")
    return Panel(Text(str(error)), title=title, border_style="red")
