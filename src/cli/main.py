"""CLI entry point (Typer).

The commands only collect input and present results; the pipeline in
`core.services.operation_pipeline` does the work.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Optional

import typer
from rich.console import Console

from adapters.artifact_manager import ArtifactManager
from adapters.clipboard import copy_to_clipboard
from cli import doctor
from cli.logging_setup import configure_logging
from cli.ui_components import (
    build_error_panel,
    build_options_table,
    build_success_panel,
    build_summary_line,
)
from core import messages
from core.config import AppSettings, ToolConfig, build_tool_config
from core.domain.errors import DownloadError
from core.domain.models import (
    DEFAULT_ALGORITHM,
    DEFAULT_MODE,
    Algorithm,
    Mode,
    Operation,
    OperationInput,
    OperationOutcome,
    OutcomeStatus,
)
from core.error_classifier import error_text, explain
from core.services.operation_pipeline import PipelineHooks, run_operation

app = typer.Typer(
    no_args_is_help=True,
    help="Encrypt and decrypt Mule secure property values with the MuleSoft Secure Properties Tool.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()

EXIT_FAILED = 1
EXIT_INVALID_INPUT = 2
EXIT_PASSWORD_MISSING = 3

_EXIT_CODES = {
    OutcomeStatus.SUCCESS: 0,
    OutcomeStatus.FAILED: EXIT_FAILED,
    OutcomeStatus.INVALID_INPUT: EXIT_INVALID_INPUT,
    OutcomeStatus.PASSWORD_MISSING: EXIT_PASSWORD_MISSING,
}


def _load_config() -> tuple[AppSettings, ToolConfig]:
    settings = AppSettings()
    return settings, build_tool_config(settings)


def _read_text(text: str) -> str:
    if text == "-":
        return sys.stdin.read().rstrip("\n")
    return text


def _announce_download() -> None:
    _console.print(f"[green]Download Complete:[/green] {messages.JAR_DOWNLOADED}")


def _report(outcome: OperationOutcome, *, operation: Operation, copy: bool, raw: bool) -> None:
    if outcome.ok:
        output = outcome.output or ""
        copied = copy_to_clipboard(output) if copy else False
        if raw:
            typer.echo(output)
        else:
            panel = build_success_panel(outcome, operation=operation, copy_requested=copy, copied=copied)
            _console.print(panel)
        raise typer.Exit(code=0)

    if outcome.status is OutcomeStatus.PASSWORD_MISSING:
        _console.print(build_error_panel("Password Required", outcome.message))
        _console.print("Run [bold]secure-props doctor set-password[/bold] to store a default password.")
    elif outcome.status is OutcomeStatus.INVALID_INPUT:
        _console.print(build_error_panel("Validation Error", outcome.message))
    else:
        _console.print(build_error_panel(f"{operation.label()} Error", outcome.message))
    raise typer.Exit(code=_EXIT_CODES[outcome.status])


def _run(data: OperationInput, *, copy: bool, raw: bool, flag: bool) -> None:
    settings, config = _load_config()
    if not raw:
        _console.print(
            build_summary_line(data.operation, algorithm=data.algorithm, mode=data.mode, flag=flag)
        )
    outcome = asyncio.run(
        run_operation(
            data,
            settings=settings,
            config=config,
            hooks=PipelineHooks(artifact_downloaded=_announce_download),
        )
    )
    _report(outcome, operation=data.operation, copy=copy, raw=raw)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs on stderr."),
) -> None:
    configure_logging(verbose=verbose)


@app.command()
def encrypt(
    text: str = typer.Argument(..., help="Text to encrypt ('-' reads stdin)."),
    password: Optional[str] = typer.Option(
        None, "--password", "-p", help="Encryption password. Falls back to the stored default."
    ),
    algorithm: Algorithm = typer.Option(DEFAULT_ALGORITHM, "--algorithm", "-a", case_sensitive=False),
    mode: Mode = typer.Option(DEFAULT_MODE, "--mode", "-m", case_sensitive=False),
    random_iv: bool = typer.Option(
        False, "--random-iv", help="Use a random initialization vector (recommended for better security)."
    ),
    copy: bool = typer.Option(True, "--copy/--no-copy", help="Copy the result to the clipboard."),
    raw: bool = typer.Option(False, "--raw", help="Print only the result (for scripts)."),
) -> None:
    """Encrypt TEXT and copy the result to the clipboard."""

    data = OperationInput(
        operation=Operation.ENCRYPT,
        input_text=_read_text(text),
        password=password,
        algorithm=algorithm.value,
        mode=mode.value,
        use_random_iv=random_iv,
        strip_wrapper=False,
    )
    _run(data, copy=copy, raw=raw, flag=random_iv)


@app.command()
def decrypt(
    text: str = typer.Argument(..., help="Encrypted text, with or without ![...] ('-' reads stdin)."),
    password: Optional[str] = typer.Option(
        None, "--password", "-p", help="Decryption password. Falls back to the stored default."
    ),
    algorithm: Algorithm = typer.Option(DEFAULT_ALGORITHM, "--algorithm", "-a", case_sensitive=False),
    mode: Mode = typer.Option(DEFAULT_MODE, "--mode", "-m", case_sensitive=False),
    strip_wrapper: bool = typer.Option(
        True, "--strip-wrapper/--keep-wrapper", help="Remove a ![...] wrapper before decrypting."
    ),
    copy: bool = typer.Option(True, "--copy/--no-copy", help="Copy the result to the clipboard."),
    raw: bool = typer.Option(False, "--raw", help="Print only the result (for scripts)."),
) -> None:
    """Decrypt TEXT and copy the plain value to the clipboard."""

    data = OperationInput(
        operation=Operation.DECRYPT,
        input_text=_read_text(text),
        password=password,
        algorithm=algorithm.value,
        mode=mode.value,
        use_random_iv=False,
        strip_wrapper=strip_wrapper,
    )
    _run(data, copy=copy, raw=raw, flag=strip_wrapper)


@app.command()
def download() -> None:
    """Download the tool JAR now if it is not present yet."""

    _, config = _load_config()
    manager = ArtifactManager(config)
    try:
        fetched = asyncio.run(manager.ensure())
    except DownloadError as exc:
        _console.print(build_error_panel("Download Error", explain(error_text(exc))))
        _console.print(messages.JAR_DOWNLOAD_FAILED)
        raise typer.Exit(code=EXIT_FAILED)

    if fetched:
        _announce_download()
    else:
        _console.print(f"Already present: {manager.path}")


@app.command()
def options() -> None:
    """List supported algorithms and modes."""

    _console.print(build_options_table())


def run() -> None:
    app()
