from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from client_authn.fetch import bearer_fetch, plain_fetch


@pytest.mark.asyncio
async def test_plain_fetch_uses_configured_timeout(monkeypatch) -> None:
    monkeypatch.setenv("AUTHN_FETCH_TIMEOUT_SECONDS", "5")
    resp = MagicMock(status_code=200)

    with patch("client_authn.fetch.requests.request", return_value=resp) as mock_request:
        out = await plain_fetch("https://pod.example/data", method="post", json={"a": 1})

    assert out is resp
    mock_request.assert_called_once_with("POST", "https://pod.example/data", headers={}, json={"a": 1}, timeout=5.0)


@pytest.mark.asyncio
async def test_plain_fetch_explicit_timeout_wins() -> None:
    with patch("client_authn.fetch.requests.request") as mock_request:
        await plain_fetch("https://pod.example/data", timeout=2)

    assert mock_request.call_args.kwargs["timeout"] == 2


@pytest.mark.asyncio
async def test_bearer_fetch_sets_authorization_header() -> None:
    base = AsyncMock(return_value="ok")
    fetch = bearer_fetch("tok", base=base)

    out = await fetch(
        "https://pod.example/data",
        method="PUT",
        headers={"authorization": "stale", "Content-Type": "text/plain"},
        data="x",
    )

    assert out == "ok"
    base.assert_awaited_once_with(
        "https://pod.example/data",
        method="PUT",
        headers={"Content-Type": "text/plain", "Authorization": "Bearer tok"},
        data="x",
    )


def test_bearer_fetch_requires_token() -> None:
    with pytest.raises(ValueError):
        bearer_fetch("  ")
