"""Contracts for running the external tool.

Why Protocol:
- A structural contract without rigid inheritance.
- Lets the pipeline run against a fake executor in tests, or another bridge,
  without coupling the Core to `asyncio` subprocesses.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class CommandExecutor(Protocol):
    """Minimal contract for launching the tool.

    Design rules:
    - Both methods are async because they wait on another process.
    - They return captured stdout and raise `ExecError` on failure.
    """

    async def run(self, command: str) -> str:
        """Run a full shell command line through the privileged bridge."""

        ...

    async def run_argv(self, argv: Sequence[str]) -> str:
        """Run an argument vector directly."""

        ...
