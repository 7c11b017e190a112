from __future__ import annotations


class AuthnError(Exception):
    """Base exception for client authentication errors."""


class MalformedRedirectError(AuthnError, ValueError):
    """Incoming redirect URL is not a usable OIDC redirect response."""
