"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts, headers and redirect policy for every download.
- Eases testing: a transport (e.g. `httpx.MockTransport`) can be injected.
"""

from __future__ import annotations

import httpx

from core.config import ToolConfig


def build_async_client(
    config: ToolConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the tool's defaults."""

    headers: dict[str, str] = {
        "User-Agent": config.user_agent,
        "Accept": "application/java-archive,application/octet-stream,*/*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.download_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
