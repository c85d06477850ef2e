"""Process execution for the tool.

Two bridges:
- `run_argv` spawns the process directly from an argument vector. No shell is
  involved, so user text needs no escaping. This is the default.
- `run` hands a full shell command line to macOS `do shell script` through
  `osascript`, escaping the whole command for the AppleScript string literal.

Both return the captured standard output and raise `ExecError` with the raw
message on failure. Classification happens one layer up.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Sequence

from core.domain.errors import ExecError

logger = logging.getLogger(__name__)

OSASCRIPT = "osascript"
_ESCAPE_RE = re.compile(r'(["\n\\])')


def escape_command(command: str) -> str:
    """Backslash-escape double quotes, backslashes and newlines in `command`."""

    return _ESCAPE_RE.sub(r"\\\1", command)


def build_bridge_script(command: str) -> str:
    return f'do shell script "{escape_command(command)}"'


def _strip_line_terminator(text: str) -> str:
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n"):
        return text[:-1]
    return text


class ShellExecutor:
    def __init__(self, *, timeout_seconds: float | None = None) -> None:
        self._timeout = timeout_seconds

    async def run(self, command: str) -> str:
        """Run a shell command line through the AppleScript bridge."""

        return await self.run_argv([OSASCRIPT, "-e", build_bridge_script(command)])

    async def run_argv(self, argv: Sequence[str]) -> str:
        """Run `argv` directly and return its standard output.

        Only the single line terminator the program prints last is removed.
        """

        if not argv:
            raise ExecError("Command is required.")

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise ExecError(f"Command not found: {argv[0]}", exit_code=127) from exc
        except PermissionError as exc:
            raise ExecError(f"Permission denied: {argv[0]}", exit_code=126) from exc

        try:
            stdout_b, stderr_b = await asyncio.wait_for(process.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError as exc:
            await self._kill(process)
            raise ExecError(f"Command timed out after {self._timeout} seconds.", exit_code=124) from exc
        except asyncio.CancelledError:
            await self._kill(process)
            raise

        stdout = stdout_b.decode("utf-8", errors="replace")
        stderr = stderr_b.decode("utf-8", errors="replace")

        if process.returncode != 0:
            raw = stderr.strip() or stdout.strip() or f"Command failed with exit code {process.returncode}."
            logger.debug("Command exited with %s: %s", process.returncode, raw)
            raise ExecError(raw, exit_code=process.returncode)

        if stderr.strip():
            logger.debug("Command stderr: %s", stderr.strip())
        return _strip_line_terminator(stdout)

    @staticmethod
    async def _kill(process: asyncio.subprocess.Process) -> None:
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
            await process.wait()
