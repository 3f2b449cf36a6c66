"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from cli.ui_components import print_banner
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get("/")
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, type(exc).__name__


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip the connectivity check."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    print_banner(_console)

    table = Table(title="astro-explorer Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.api_key == "DEMO_KEY":
        table.add_row("API key", "LIMITED", "DEMO_KEY is heavily rate-limited -> run `doctor setup-key`")
    else:
        table.add_row("API key", "OK", "Personal key configured")
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Rover page size", "OK", str(settings.rover_page_size))
    table.add_row("NEO feed max days", "OK", str(settings.neo_feed_max_days))
    table.add_row("Label language", "OK", settings.default_language.label())

    # Connectivity (best-effort)
    if offline:
        table.add_row("HTTP connectivity", "SKIPPED", "--offline")
    else:
        ok_http, detail_http = asyncio.run(_check_http(settings))
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)


@app.command(name="setup-key")
def setup_key() -> None:
    """Store the API key in the user config .env (no manual editing)."""

    api_key = typer.prompt("API key", hide_input=True, confirmation_prompt=False).strip()
    if not api_key:
        raise typer.BadParameter("api key is required")

    env_path = write_user_env_vars({"ASTRO_EXPLORER_API_KEY": api_key})
    _console.print(f"[green]Saved API key to:[/green] {env_path}")
