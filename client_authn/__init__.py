"""
Session-scoped client authentication for OIDC login/redirect/logout flows.

`ClientAuthentication` composes pluggable login, redirect, logout and session-info
handlers and tracks the fetch callers should use for the active session.
"""

from client_authn.coordinator import ClientAuthentication, normalize_login_options
from client_authn.config import AuthnConfig, configure_logging, load_authn_config
from client_authn.errors import AuthnError, MalformedRedirectError
from client_authn.fetch import FetchCapability, bearer_fetch, plain_fetch
from client_authn.models import (
    DEFAULT_TOKEN_TYPE,
    LoginCompleted,
    LoginOptions,
    LoginOutcome,
    LoginPendingRedirect,
    LoginRequest,
    LoginResult,
    RedirectResult,
    SessionInfo,
)

__all__ = [
    "ClientAuthentication",
    "AuthnConfig",
    "configure_logging",
    "load_authn_config",
    "normalize_login_options",
    "AuthnError",
    "MalformedRedirectError",
    "FetchCapability",
    "plain_fetch",
    "bearer_fetch",
    "DEFAULT_TOKEN_TYPE",
    "SessionInfo",
    "LoginOptions",
    "LoginRequest",
    "LoginResult",
    "RedirectResult",
    "LoginCompleted",
    "LoginPendingRedirect",
    "LoginOutcome",
]
