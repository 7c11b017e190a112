from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional, Protocol

import requests

from client_authn.config import load_authn_config

logger = logging.getLogger(__name__)


class FetchCapability(Protocol):
    """
    Async request/response callable handed to application code.

    Keyword arguments beyond `method` and `headers` are passed through to
    `requests.request` (json, data, params, timeout, ...).
    """

    async def __call__(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Optional[Mapping[str, str]] = None,
        **kwargs: Any,
    ) -> requests.Response: ...


async def plain_fetch(
    url: str,
    *,
    method: str = "GET",
    headers: Optional[Mapping[str, str]] = None,
    **kwargs: Any,
) -> requests.Response:
    """
    Unauthenticated fetch: no credentials are attached to the request.

    `requests` is blocking, so the call runs in a worker thread.
    """
    kwargs.setdefault("timeout", load_authn_config().fetch_timeout_seconds)
    logger.debug("%s %s", method.upper(), url)
    return await asyncio.to_thread(
        requests.request,
        method.upper(),
        url,
        headers=dict(headers or {}),
        **kwargs,
    )


def bearer_fetch(access_token: str, *, base: FetchCapability = plain_fetch) -> FetchCapability:
    """
    Build a fetch that sends `Authorization: Bearer <access_token>` on every request.

    Caller-supplied headers win, except for Authorization which is always replaced.
    """
    token = (access_token or "").strip()
    if not token:
        raise ValueError("Access token is required for an authenticated fetch")

    async def _fetch(
        url: str,
        *,
        method: str = "GET",
        headers: Optional[Mapping[str, str]] = None,
        **kwargs: Any,
    ) -> requests.Response:
        merged: Dict[str, str] = {k: v for k, v in (headers or {}).items() if k.lower() != "authorization"}
        merged["Authorization"] = f"Bearer {token}"
        return await base(url, method=method, headers=merged, **kwargs)

    return _fetch
