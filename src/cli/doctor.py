"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import shutil

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.artifact_manager import ArtifactManager
from adapters.http_client import build_async_client
from adapters.shell_executor import OSASCRIPT
from core.config import AppSettings, ToolConfig, build_tool_config, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

PASSWORD_ENV_VAR = "SECURE_PROPS_DEFAULT_PASSWORD"


async def _check_http(config: ToolConfig, *, transport: httpx.AsyncBaseTransport | None = None) -> tuple[bool, str]:
    # Streamed GET, closed after the headers; the body is never read.
    try:
        async with build_async_client(config, transport=transport) as client:
            async with client.stream("GET", config.download_url) as response:
                return response.is_success, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or exc.__class__.__name__


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip the download endpoint check."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    config = build_tool_config(settings)

    table = Table(title="secure-props Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    java = shutil.which(config.java_executable)
    table.add_row("Java runtime", "OK" if java else "FAIL", java or f"'{config.java_executable}' not on PATH")

    if config.bridge == "applescript":
        osascript = shutil.which(OSASCRIPT)
        table.add_row("AppleScript bridge", "OK" if osascript else "FAIL", osascript or "osascript not found")

    manager = ArtifactManager(config)
    if manager.exists():
        table.add_row("Tool JAR", "OK", str(manager.path))
    else:
        table.add_row("Tool JAR", "MISSING", "Downloaded on first use (or run `secure-props download`)")

    if offline:
        table.add_row("Download endpoint", "SKIPPED", config.download_url)
    else:
        ok_http, detail_http = asyncio.run(_check_http(config))
        table.add_row("Download endpoint", "OK" if ok_http else "FAIL", detail_http)

    if settings.default_password:
        table.add_row("Default password", "OK", "Configured")
    else:
        table.add_row("Default password", "OPTIONAL", "Not set -> pass --password on every call")

    _console.print(table)

    if not java:
        _console.print("\n[yellow]Note:[/yellow] Install a Java 17+ runtime to run the tool.")


@app.command(name="set-password")
def set_password() -> None:
    """Store the default password in the user config .env."""

    password = typer.prompt("Default password", hide_input=True, confirmation_prompt=True)
    if not password:
        raise typer.BadParameter("password must not be empty")

    env_path = write_user_env_vars({PASSWORD_ENV_VAR: password})
    _console.print(f"[green]Saved default password to:[/green] {env_path}")
