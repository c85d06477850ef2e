"""Local copy of the Secure Properties Tool JAR.

Rules:
- The JAR lives at a fixed path in the user's home directory.
- It is downloaded once, on first use, and never re-fetched or verified
  afterwards.
- A failed download never leaves a partial file behind, so a later `exists()`
  cannot report a broken JAR as present.
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from pathlib import Path

import httpx

from adapters.http_client import build_async_client
from core.config import ToolConfig
from core.domain.errors import DownloadError

logger = logging.getLogger(__name__)

_LOCKS: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, dict[Path, asyncio.Lock]] = (
    weakref.WeakKeyDictionary()
)


def _path_lock(path: Path) -> asyncio.Lock:
    """One lock per destination path within the running event loop."""

    loop = asyncio.get_running_loop()
    locks = _LOCKS.setdefault(loop, {})
    lock = locks.get(path)
    if lock is None:
        lock = locks[path] = asyncio.Lock()
    return lock


class ArtifactManager:
    def __init__(self, config: ToolConfig, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._config = config
        self._transport = transport

    @property
    def path(self) -> Path:
        return self._config.jar_path

    def exists(self) -> bool:
        return self.path.is_file()

    async def ensure(self) -> bool:
        """Download the JAR if it is missing.

        Returns True when a download happened. Concurrent callers for the same
        path are serialized; the ones that wait see the finished file and
        return False.
        """

        async with _path_lock(self.path):
            if self.exists():
                return False
            await self._download()
            return True

    async def _download(self) -> None:
        url = self._config.download_url
        destination = self.path
        logger.info("Downloading %s to %s", url, destination)
        try:
            await self._stream_to(url, destination)
        except DownloadError:
            self._remove_partial(destination)
            raise
        except (httpx.HTTPError, OSError) as exc:
            self._remove_partial(destination)
            raise DownloadError(str(exc) or exc.__class__.__name__) from exc
        except asyncio.CancelledError:
            self._remove_partial(destination)
            raise
        logger.info("Downloaded %s (%d bytes)", destination, destination.stat().st_size)

    async def _stream_to(self, url: str, destination: Path) -> None:
        async with build_async_client(self._config, transport=self._transport) as client:
            async with client.stream("GET", url) as response:
                if not response.is_success:
                    # Discard the body so the connection is released.
                    await response.aclose()
                    raise DownloadError(f"Failed to download file. Status code: {response.status_code}")
                destination.parent.mkdir(parents=True, exist_ok=True)
                with destination.open("wb") as fh:
                    async for chunk in response.aiter_bytes():
                        fh.write(chunk)

    @staticmethod
    def _remove_partial(destination: Path) -> None:
        try:
            destination.unlink(missing_ok=True)
        except OSError as exc:
            logger.error("Error removing incomplete JAR file %s: %s", destination, exc)
