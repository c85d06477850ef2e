"""Input clean-up applied before text reaches the tool."""

from __future__ import annotations

WRAPPER_PREFIX = "!["
WRAPPER_SUFFIX = "]"


def strip_wrapper(text: str) -> str:
    """Remove a `![...]` wrapper, as found around values in Mule property files.

    Surrounding whitespace is trimmed first. Only an exact leading `![` plus a
    trailing `]` is removed; brackets are not matched.
    """

    text = text.strip()
    if text.startswith(WRAPPER_PREFIX) and text.endswith(WRAPPER_SUFFIX):
        return text[len(WRAPPER_PREFIX) : -len(WRAPPER_SUFFIX)]
    return text
