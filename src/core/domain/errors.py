"""Error taxonomy.

Validation errors are shown to the user as-is. Download and execution errors
carry the raw low-level text so the classifier can enrich it without losing
detail.
"""

from __future__ import annotations


class SecurePropsError(Exception):
    """Base class for every error raised by this package."""


class RequestValidationError(SecurePropsError):
    """Missing or invalid user input; nothing external was called."""


class PasswordNotSetError(RequestValidationError):
    """Neither a per-call password nor a stored default is available."""


class DownloadError(SecurePropsError):
    """The tool JAR could not be fetched or written."""


class ExecError(SecurePropsError):
    """The external tool could not be run or exited with a failure."""

    def __init__(self, raw_message: str, *, exit_code: int | None = None) -> None:
        super().__init__(raw_message)
        self.raw_message = raw_message
        self.exit_code = exit_code
