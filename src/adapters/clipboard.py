"""Clipboard access (pyperclip)."""

from __future__ import annotations

import logging

import pyperclip

logger = logging.getLogger(__name__)


def copy_to_clipboard(text: str) -> bool:
    """Replace the clipboard content with `text`.

    Returns False when no clipboard mechanism is available (e.g. a headless
    Linux session without xclip/wl-copy); the caller still shows the text.
    """

    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as exc:
        logger.warning("Clipboard unavailable: %s", exc)
        return False
    return True
