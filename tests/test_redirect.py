from __future__ import annotations

import pytest

from client_authn.errors import MalformedRedirectError
from client_authn.fetch import plain_fetch
from client_authn.redirect import FallbackRedirectHandler, parse_redirect_url


def test_parse_redirect_url_extracts_oidc_params() -> None:
    params = parse_redirect_url("https://app/cb?code=c1&state=s1&iss=https%3A%2F%2Fidp")
    assert params.code == "c1"
    assert params.state == "s1"
    assert params.iss == "https://idp"
    assert params.error is None
    assert params.has_oidc_params is True


def test_parse_redirect_url_without_params() -> None:
    params = parse_redirect_url("https://app/home")
    assert params.has_oidc_params is False


@pytest.mark.parametrize("url", ["", "not a url", "/cb?code=c", "ftp://app/cb"])
def test_parse_redirect_url_rejects_malformed(url: str) -> None:
    with pytest.raises(MalformedRedirectError):
        parse_redirect_url(url)


@pytest.mark.asyncio
async def test_fallback_handler_returns_unauthenticated_session() -> None:
    result = await FallbackRedirectHandler().handle("https://app/home")

    assert result.is_logged_in is False
    assert result.web_id is None
    assert result.session_id
    assert result.fetch is plain_fetch


@pytest.mark.asyncio
async def test_fallback_handler_gives_each_redirect_a_new_session() -> None:
    handler = FallbackRedirectHandler()
    a = await handler.handle("https://app/home")
    b = await handler.handle("https://app/home")
    assert a.session_id != b.session_id


@pytest.mark.asyncio
async def test_fallback_handler_rejects_provider_error() -> None:
    with pytest.raises(MalformedRedirectError, match="access_denied"):
        await FallbackRedirectHandler().handle("https://app/cb?error=access_denied&state=s1")


@pytest.mark.asyncio
async def test_fallback_handler_rejects_authorization_response() -> None:
    with pytest.raises(MalformedRedirectError):
        await FallbackRedirectHandler().handle("https://app/cb?code=c1&state=s1")
