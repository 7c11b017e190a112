"""
Collaborator interfaces consumed by `ClientAuthentication`.

Implementations own the OIDC wire protocol and storage; the coordinator only sequences them.
"""
from __future__ import annotations

from typing import List, Optional, Protocol

from client_authn.models import LoginRequest, LoginResult, RedirectResult, SessionInfo


class SessionInfoManager(Protocol):
    async def clear(self, session_id: str) -> None:
        """
        Reset a session's authentication state.

        Implementations may keep client registration data across the reset.
        """

    async def get(self, session_id: str) -> Optional[SessionInfo]: ...

    async def get_all(self) -> List[SessionInfo]: ...


class LoginHandler(Protocol):
    async def handle(self, request: LoginRequest) -> Optional[LoginResult]:
        """
        Start (and possibly complete) an OIDC login.

        Returns None when the flow has to continue through an incoming redirect.
        """


class RedirectHandler(Protocol):
    async def handle(self, url: str) -> RedirectResult:
        """
        Complete a login from the redirect URL the identity provider sent the user back to.

        Must always supply a fetch, including when the session is not logged in.
        """


class LogoutHandler(Protocol):
    async def handle(self, session_id: str) -> None: ...
