"""Friendly explanations for raw tool errors.

The table is ordered: the first entry whose substring occurs in the raw
message wins. Every explanation keeps the raw message as a suffix.
"""

from __future__ import annotations

from dataclasses import dataclass

ORIGINAL_ERROR_DELIMITER = "\nOriginal Error: "
GENERIC_MESSAGE = "An error occurred during the operation. Please check your inputs and try again."
UNEXPECTED_ERROR = "An unexpected error occurred."


@dataclass(frozen=True)
class ErrorPattern:
    substring: str
    message: str


ERROR_PATTERNS: tuple[ErrorPattern, ...] = (
    ErrorPattern(
        "Input length must be multiple of 8",
        "The encrypted text might be missing padding or is incomplete. "
        "Please ensure you're using the complete encrypted string.",
    ),
    ErrorPattern(
        "Input byte array has wrong",
        "The text doesn't appear to be in the correct format. "
        "Please ensure you're using a properly encrypted string.",
    ),
    ErrorPattern(
        "Base64",
        "Invalid Base64 encoding. Please ensure you're using a properly encrypted string.",
    ),
    ErrorPattern(
        "Given final block not properly padded",
        "This may indicate an incorrect password or corrupted encrypted text.",
    ),
    ErrorPattern(
        "Illegal key size",
        "The key size is not supported. For AES, the key must be 32 characters long.",
    ),
)


def match(raw_message: str, patterns: tuple[ErrorPattern, ...] = ERROR_PATTERNS) -> ErrorPattern | None:
    for pattern in patterns:
        if pattern.substring in raw_message:
            return pattern
    return None


def explain(raw_message: str, patterns: tuple[ErrorPattern, ...] = ERROR_PATTERNS) -> str:
    """Return a curated explanation followed by the original message."""

    pattern = match(raw_message, patterns)
    friendly = pattern.message if pattern is not None else GENERIC_MESSAGE
    return friendly + ORIGINAL_ERROR_DELIMITER + raw_message


def error_text(error: object) -> str:
    """Best-effort message of an exception (or anything raised as one)."""

    if isinstance(error, BaseException):
        text = str(error)
        if text:
            return text
    return UNEXPECTED_ERROR
