from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, urlparse

from client_authn.errors import MalformedRedirectError
from client_authn.fetch import plain_fetch
from client_authn.models import RedirectResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RedirectParams:
    """OIDC parameters found in the query of an incoming redirect URL."""

    code: Optional[str] = None
    state: Optional[str] = None
    iss: Optional[str] = None
    error: Optional[str] = None
    error_description: Optional[str] = None

    @property
    def has_oidc_params(self) -> bool:
        return bool(self.code or self.state or self.error)


def parse_redirect_url(url: str) -> RedirectParams:
    """
    Extract OIDC response parameters from a redirect URL.

    Raises MalformedRedirectError if the URL is not an absolute http(s) URL.
    """
    raw = (url or "").strip()
    try:
        parsed = urlparse(raw)
    except ValueError as e:
        raise MalformedRedirectError(f"Invalid redirect URL: {e}") from e
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise MalformedRedirectError("Redirect URL must be an absolute http(s) URL")

    qs = parse_qs(parsed.query)

    def _first(name: str) -> Optional[str]:
        values = qs.get(name) or []
        return values[0] if values and values[0] else None

    return RedirectParams(
        code=_first("code"),
        state=_first("state"),
        iss=_first("iss"),
        error=_first("error"),
        error_description=_first("error_description"),
    )


class FallbackRedirectHandler:
    """
    Redirect handler for URLs that carry no OIDC response (e.g. a plain page reload).

    Yields a fresh, logged-out session bound to the plain fetch. An OIDC error
    response, or a code/state pair it cannot complete, is rejected.
    """

    async def handle(self, url: str) -> RedirectResult:
        params = parse_redirect_url(url)
        if params.error:
            raise MalformedRedirectError(
                f"Identity provider returned an error: {params.error}"
                + (f" ({params.error_description})" if params.error_description else "")
            )
        if params.has_oidc_params:
            raise MalformedRedirectError("Redirect carries an authorization response this handler cannot complete")

        session_id = str(uuid.uuid4())
        logger.debug("No OIDC parameters in redirect; new unauthenticated session %s", session_id)
        return RedirectResult(fetch=plain_fetch, is_logged_in=False, session_id=session_id, web_id=None)
