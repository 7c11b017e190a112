"""
Value types exchanged between the coordinator, its callers and its collaborators.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from client_authn.fetch import FetchCapability

TokenType = Literal["DPoP", "Bearer"]

DEFAULT_TOKEN_TYPE: TokenType = "DPoP"


@dataclass(frozen=True)
class SessionInfo:
    """Snapshot of a session's authentication state."""

    session_id: str
    is_logged_in: bool
    web_id: Optional[str] = None


class LoginOptions(BaseModel):
    """
    Login input as supplied by the application.

    Accepts snake_case field names or their camelCase aliases (`oidcIssuer`, `clientId`, ...).
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    oidc_issuer: str
    redirect_url: str
    client_id: str
    client_secret: Optional[str] = None
    client_name: Optional[str] = None
    pop_up: Optional[bool] = None
    refresh_token: Optional[str] = None
    # Called with the authorization URL when the flow needs a browser redirect
    handle_redirect: Optional[Callable[[str], Any]] = None
    token_type: Optional[TokenType] = None


class LoginRequest(BaseModel):
    """Normalized login options plus the session they apply to."""

    model_config = ConfigDict(frozen=True)

    session_id: str
    oidc_issuer: str
    redirect_url: str
    client_id: str
    client_secret: Optional[str] = None
    client_name: str
    pop_up: bool
    refresh_token: Optional[str] = None
    handle_redirect: Optional[Callable[[str], Any]] = None
    token_type: TokenType


@dataclass(frozen=True)
class LoginResult:
    """Returned by a login handler that completed the flow without a redirect."""

    fetch: FetchCapability
    web_id: str


@dataclass(frozen=True)
class RedirectResult:
    fetch: FetchCapability
    is_logged_in: bool
    session_id: str
    web_id: Optional[str] = None


@dataclass(frozen=True)
class LoginCompleted:
    info: SessionInfo


@dataclass(frozen=True)
class LoginPendingRedirect:
    """The login continues once the identity provider redirects back to the app."""

    session_id: str


LoginOutcome = Union[LoginCompleted, LoginPendingRedirect]
