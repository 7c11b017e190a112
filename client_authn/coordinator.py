from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Union

from client_authn.fetch import FetchCapability, plain_fetch
from client_authn.handlers import LoginHandler, LogoutHandler, RedirectHandler, SessionInfoManager
from client_authn.models import (
    DEFAULT_TOKEN_TYPE,
    LoginCompleted,
    LoginOptions,
    LoginOutcome,
    LoginPendingRedirect,
    LoginRequest,
    SessionInfo,
)

logger = logging.getLogger(__name__)


def normalize_login_options(session_id: str, options: Union[LoginOptions, Mapping[str, Any]]) -> LoginRequest:
    """
    Fill in login defaults: client name falls back to the client id, pop-up is off,
    and the token type is DPoP. Everything else passes through as given.
    """
    opts = options if isinstance(options, LoginOptions) else LoginOptions.model_validate(options)
    return LoginRequest(
        session_id=session_id,
        oidc_issuer=opts.oidc_issuer,
        redirect_url=opts.redirect_url,
        client_id=opts.client_id,
        client_secret=opts.client_secret,
        client_name=opts.client_name if opts.client_name is not None else opts.client_id,
        pop_up=bool(opts.pop_up),
        refresh_token=opts.refresh_token,
        handle_redirect=opts.handle_redirect,
        token_type=opts.token_type or DEFAULT_TOKEN_TYPE,
    )


class ClientAuthentication:
    """
    Session authentication coordinator.

    Sequences the login, redirect, logout and session-info collaborators and owns a
    single piece of state: the fetch callers should use right now. That slot tracks
    whichever session last completed a login, redirect or logout; it is not per
    session. Concurrent calls on one instance are not serialized (last rebind wins).
    """

    def __init__(
        self,
        login_handler: LoginHandler,
        redirect_handler: RedirectHandler,
        logout_handler: LogoutHandler,
        session_info_manager: SessionInfoManager,
    ) -> None:
        self._login_handler = login_handler
        self._redirect_handler = redirect_handler
        self._logout_handler = logout_handler
        self._session_info_manager = session_info_manager
        self._fetch: FetchCapability = plain_fetch

    @property
    def fetch(self) -> FetchCapability:
        """Current fetch. Read it per request; login and logout rebind it."""
        return self._fetch

    async def start_login(self, session_id: str, options: Union[LoginOptions, Mapping[str, Any]]) -> LoginOutcome:
        # Clean start: stale OIDC params (e.g. after browser back-navigation) must not
        # leak into the new attempt. The store decides what registration data survives.
        await self._session_info_manager.clear(session_id)

        request = normalize_login_options(session_id, options)
        result = await self._login_handler.handle(request)
        if result is None:
            logger.debug("Login for session %s continues via redirect", session_id)
            return LoginPendingRedirect(session_id=session_id)

        self._fetch = result.fetch
        logger.info("Login completed for session %s (webid=%s)", session_id, result.web_id)
        return LoginCompleted(info=SessionInfo(session_id=session_id, is_logged_in=True, web_id=result.web_id))

    async def login(
        self, session_id: str, options: Union[LoginOptions, Mapping[str, Any]]
    ) -> Optional[SessionInfo]:
        """
        Log a session in.

        Returns None when the login has to be finished by `handle_incoming_redirect`.
        """
        outcome = await self.start_login(session_id, options)
        if isinstance(outcome, LoginCompleted):
            return outcome.info
        return None

    async def handle_incoming_redirect(self, url: str) -> SessionInfo:
        info = await self._redirect_handler.handle(url)

        # The redirect handler decides the post-redirect fetch, logged in or not.
        self._fetch = info.fetch
        logger.info("Handled incoming redirect for session %s (logged_in=%s)", info.session_id, info.is_logged_in)
        return SessionInfo(session_id=info.session_id, is_logged_in=info.is_logged_in, web_id=info.web_id)

    async def logout(self, session_id: str) -> None:
        try:
            await self._logout_handler.handle(session_id)
        finally:
            # Back to unauthenticated requests, whichever session was bound.
            self._fetch = plain_fetch
        logger.info("Logged out session %s", session_id)

    async def get_session_info(self, session_id: str) -> Optional[SessionInfo]:
        return await self._session_info_manager.get(session_id)

    async def get_all_session_info(self) -> List[SessionInfo]:
        return await self._session_info_manager.get_all()
