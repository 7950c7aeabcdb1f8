"""Shared HTTP client utilities: reusable httpx client."""

import logging
from typing import Any

import httpx

from hydration.config import get_settings

logger = logging.getLogger(__name__)

# Module-level shared client (created lazily, lives for the process lifetime)
_client: httpx.AsyncClient | None = None


def get_shared_client() -> httpx.AsyncClient:
    """Return a shared httpx.AsyncClient, creating it on first call."""
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(timeout=get_settings().sanity_timeout)
    return _client


def sanity_headers() -> dict[str, str]:
    return {"Accept": "application/json"}


async def sanity_api_get(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
    context: str = "",
) -> dict[str, Any] | None:
    """Fetch a Sanity query URL and return the JSON envelope.

    Returns None on any error (network, non-200 status, undecodable or
    non-object body) so callers can apply their own fallback.
    """
    client = client or get_shared_client()
    suffix = f" ({context})" if context else ""
    try:
        kwargs: dict[str, Any] = {"headers": sanity_headers()}
        if timeout is not None:
            kwargs["timeout"] = timeout
        resp = await client.get(url, **kwargs)
        if resp.status_code != 200:
            logger.warning("Sanity API %d%s", resp.status_code, suffix)
            return None
        data = resp.json()
    except (httpx.HTTPError, ValueError):
        logger.exception("Sanity API error%s", suffix)
        return None
    if not isinstance(data, dict):
        logger.warning("Sanity API returned a non-object envelope%s", suffix)
        return None
    return data
