from __future__ import annotations

import json
import logging
from typing import Dict, List, Optional, Protocol

from itsdangerous import BadSignature, URLSafeSerializer
from pydantic import BaseModel, ValidationError

from client_authn.config import load_authn_config
from client_authn.models import SessionInfo, TokenType

logger = logging.getLogger(__name__)

STORAGE_SALT = "client-authn-session-v1"
_KEY_PREFIX = "client-authn:session:"


class KeyValueStorage(Protocol):
    """
    Minimal async string storage. Implementations can be in-process, Redis, browser storage, etc.
    """

    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def keys(self) -> List[str]: ...


class InMemoryStorage(KeyValueStorage):
    """Process-local storage; keys are listed in insertion order."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def keys(self) -> List[str]:
        return list(self._data)


class SessionRecord(BaseModel):
    """Persisted state for one session (session state + client registration data)."""

    session_id: str
    is_logged_in: bool = False
    web_id: Optional[str] = None

    # Client registration; survives `clear`.
    issuer: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    client_name: Optional[str] = None
    token_type: Optional[TokenType] = None

    # Per-login state; dropped by `clear`.
    redirect_url: Optional[str] = None
    refresh_token: Optional[str] = None

    def to_session_info(self) -> SessionInfo:
        return SessionInfo(session_id=self.session_id, is_logged_in=self.is_logged_in, web_id=self.web_id)


class StorageSessionInfoManager:
    """
    Session info store on top of a `KeyValueStorage`.

    Records are stored as JSON. With a `secret` (default: `AUTHN_STORAGE_SECRET`), they
    are signed and a record whose signature does not verify reads as absent.
    """

    def __init__(self, storage: KeyValueStorage, *, secret: Optional[str] = None) -> None:
        self._storage = storage
        if secret is None:
            secret = load_authn_config().storage_secret
        self._serializer = URLSafeSerializer(secret_key=secret, salt=STORAGE_SALT) if secret else None

    @staticmethod
    def _key(session_id: str) -> str:
        return f"{_KEY_PREFIX}{session_id}"

    def _encode(self, record: SessionRecord) -> str:
        raw = json.dumps(record.model_dump(mode="json"), separators=(",", ":"), sort_keys=True)
        if self._serializer is None:
            return raw
        return self._serializer.dumps(raw)

    def _decode(self, value: str) -> Optional[SessionRecord]:
        try:
            raw = self._serializer.loads(value) if self._serializer is not None else value
            return SessionRecord.model_validate(json.loads(raw))
        except BadSignature:
            logger.warning("Ignoring session record with an invalid signature")
            return None
        except (ValidationError, ValueError):
            logger.warning("Ignoring unreadable session record")
            return None

    async def save(self, record: SessionRecord) -> None:
        await self._storage.set(self._key(record.session_id), self._encode(record))

    async def get_record(self, session_id: str) -> Optional[SessionRecord]:
        value = await self._storage.get(self._key(session_id))
        if value is None:
            return None
        return self._decode(value)

    async def get(self, session_id: str) -> Optional[SessionInfo]:
        record = await self.get_record(session_id)
        return record.to_session_info() if record is not None else None

    async def get_all(self) -> List[SessionInfo]:
        out: List[SessionInfo] = []
        for key in await self._storage.keys():
            if not key.startswith(_KEY_PREFIX):
                continue
            value = await self._storage.get(key)
            record = self._decode(value) if value is not None else None
            if record is not None:
                out.append(record.to_session_info())
        return out

    async def clear(self, session_id: str) -> None:
        """
        Reset a session to logged out.

        Client registration data is kept so a dynamically registered client does not
        have to register again on the next login.
        """
        record = await self.get_record(session_id)
        if record is None:
            await self._storage.delete(self._key(session_id))
            return
        cleared = record.model_copy(
            update={"is_logged_in": False, "web_id": None, "redirect_url": None, "refresh_token": None}
        )
        await self.save(cleared)
        logger.debug("Cleared session %s", session_id)
