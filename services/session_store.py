"""In-process session store with a fixed TTL.

Backed by ``cachetools.TTLCache`` so expired sessions are evicted without a
sweeper task. ``Session.expires_at`` is checked as well, so a record never
outlives its own expiry even if the cache timer is lenient.
"""

import logging
import secrets
from datetime import UTC, datetime, timedelta

from cachetools import TTLCache  # type: ignore[import-untyped]

from shared.models import Session

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, expire_days: int = 7, maxsize: int = 10_000):
        self.ttl = timedelta(days=expire_days)
        self._sessions: TTLCache = TTLCache(maxsize=maxsize, ttl=self.ttl.total_seconds())

    @staticmethod
    def new_session_id() -> str:
        return secrets.token_urlsafe(32)

    def create(
        self,
        *,
        user_id: str,
        username: str,
        avatar_hash: str | None,
        is_developer: bool,
        global_name: str | None = None,
        session_id: str | None = None,
    ) -> Session:
        """Write a session record.

        Passing the id of an existing session replaces that record entirely;
        nothing from the old record is carried over.
        """
        now = datetime.now(UTC)
        session = Session(
            session_id=session_id or self.new_session_id(),
            user_id=user_id,
            username=username,
            avatar_hash=avatar_hash,
            is_developer=is_developer,
            created_at=now,
            expires_at=now + self.ttl,
            global_name=global_name,
        )
        self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str | None) -> Session | None:
        if not session_id:
            return None
        session: Session | None = self._sessions.get(session_id)
        if session is None:
            return None
        if session.is_expired():
            self._sessions.pop(session_id, None)
            return None
        return session

    def destroy(self, session_id: str | None) -> bool:
        if not session_id:
            return False
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)
