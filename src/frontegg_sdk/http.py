"""HTTP client construction for the Frontegg SDK.

Every request uses one fixed timeout taken from the configuration; the
SDK never retries or follows redirects on its own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from .telemetry import SDK_NAME, SDK_VERSION

if TYPE_CHECKING:
    from .config import FronteggConfig

USER_AGENT = f"{SDK_NAME}/{SDK_VERSION} Python"


def create_http_client(
    config: FronteggConfig,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create configured sync HTTP client.

    Args:
        config: SDK configuration.
        transport: Optional transport, e.g. ``httpx.MockTransport`` in tests.

    Returns:
        Configured httpx.Client.
    """
    return httpx.Client(
        timeout=httpx.Timeout(config.timeout),
        headers={
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        },
        follow_redirects=False,
        transport=transport,
    )
