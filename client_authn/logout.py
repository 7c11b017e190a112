from __future__ import annotations

import logging

from client_authn.handlers import SessionInfoManager

logger = logging.getLogger(__name__)


class SessionClearingLogoutHandler:
    """Local logout: resets the stored session state. The identity provider session is left alone."""

    def __init__(self, session_info_manager: SessionInfoManager) -> None:
        self._session_info_manager = session_info_manager

    async def handle(self, session_id: str) -> None:
        await self._session_info_manager.clear(session_id)
        logger.debug("Cleared stored state for session %s on logout", session_id)
