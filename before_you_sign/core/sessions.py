"""
Server-held login sessions.

The browser only ever carries an opaque session id, signed with itsdangerous
so a forged or tampered cookie is rejected before the store is consulted.
Records live in process memory and expire a fixed time after creation.
"""
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from itsdangerous import BadSignature, URLSafeTimedSerializer

from .config import settings
from ..models.user import Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionContext:
    """What a handler knows about the logged-in browser."""

    user_id: int
    username: str
    role: Role
    email: str


@dataclass
class _SessionRecord:
    context: SessionContext
    created_at: datetime


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SessionStore:
    def __init__(self, secret_key: str, max_age_seconds: int):
        self.max_age = timedelta(seconds=max_age_seconds)
        self._signer = URLSafeTimedSerializer(secret_key, salt="before-you-sign-session")
        self._records: Dict[str, _SessionRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def create(self, context: SessionContext) -> str:
        """Store a new session and return the signed cookie value for it."""
        self.purge_expired()
        session_id = secrets.token_urlsafe(32)
        self._records[session_id] = _SessionRecord(context=context, created_at=_now())
        return self._signer.dumps(session_id)

    def get(self, cookie_value: Optional[str]) -> Optional[SessionContext]:
        session_id = self._unsign(cookie_value)
        if session_id is None:
            return None
        record = self._records.get(session_id)
        if record is None:
            return None
        if _now() - record.created_at >= self.max_age:
            self._records.pop(session_id, None)
            return None
        return record.context

    def destroy(self, cookie_value: Optional[str]) -> bool:
        session_id = self._unsign(cookie_value)
        if session_id is None:
            return False
        return self._records.pop(session_id, None) is not None

    def purge_expired(self) -> int:
        cutoff = _now() - self.max_age
        expired = [sid for sid, rec in list(self._records.items()) if rec.created_at <= cutoff]
        for sid in expired:
            self._records.pop(sid, None)
        if expired:
            logger.debug("Purged %d expired sessions", len(expired))
        return len(expired)

    def clear(self) -> None:
        self._records.clear()

    def _unsign(self, cookie_value: Optional[str]) -> Optional[str]:
        if not cookie_value:
            return None
        try:
            return self._signer.loads(cookie_value, max_age=int(self.max_age.total_seconds()))
        except BadSignature:
            return None


session_store = SessionStore(settings.SECRET_KEY, settings.SESSION_MAX_AGE_SECONDS)


def get_session_store() -> SessionStore:
    return session_store
