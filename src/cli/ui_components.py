"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from presentation details.
- Lets `encrypt`, `decrypt` and `download` share panels and tables.
"""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core import messages
from core.domain.models import (
    DEFAULT_ALGORITHM,
    DEFAULT_MODE,
    Algorithm,
    Mode,
    Operation,
    OperationOutcome,
)


def build_summary_line(
    operation: Operation,
    *,
    algorithm: str,
    mode: str,
    flag: bool,
) -> Text:
    """One-line configuration summary shown before running the tool."""

    flag_name = "Random IV" if operation is Operation.ENCRYPT else "Auto-strip Wrapper"
    return Text(
        f"Algorithm: {algorithm} | Mode: {mode} | {flag_name}: {'Yes' if flag else 'No'}",
        style="dim",
    )


def build_options_table() -> Table:
    table = Table(title="Supported Options")
    table.add_column("Kind", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_column("Label", style="magenta")
    table.add_column("Default", style="green")
    for algorithm in Algorithm:
        table.add_row("algorithm", algorithm.value, algorithm.label(), "yes" if algorithm is DEFAULT_ALGORITHM else "")
    for mode in Mode:
        table.add_row("mode", mode.value, mode.label(), "yes" if mode is DEFAULT_MODE else "")
    return table


def build_success_panel(
    outcome: OperationOutcome,
    *,
    operation: Operation,
    copy_requested: bool,
    copied: bool,
) -> Panel:
    body = Text()
    if copied:
        body.append(outcome.message + "\n", style="bold green")
    else:
        done = messages.ENCRYPT_DONE if operation is Operation.ENCRYPT else messages.DECRYPT_DONE
        body.append(done + "\n", style="bold green")
        if copy_requested:
            body.append(messages.CLIPBOARD_UNAVAILABLE + "\n", style="yellow")
    body.append(outcome.output or "")
    return Panel(body, title=Text("👌 Done", style="bold green"), border_style="green")


def build_error_panel(title: str, message: str) -> Panel:
    return Panel(Text(message), title=Text(title, style="bold red"), border_style="red")
