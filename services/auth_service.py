"""Session cookie signing service"""

import logging
from datetime import UTC, datetime

import jwt

logger = logging.getLogger(__name__)


class AuthService:
    """Sign and verify the opaque session id carried in the session cookie.

    The cookie only holds the session id; user data stays server-side in the
    session store.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        if not secret_key:
            raise ValueError("Session secret cannot be empty")

        self.secret_key = secret_key
        self.algorithm = algorithm

    def create_session_token(self, session_id: str, expires_at: datetime) -> str:
        """Create a signed cookie value for a session id"""
        payload = {
            "sid": session_id,
            "exp": expires_at,
            "iat": datetime.now(UTC),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> str | None:
        """Return the session id if the cookie value is authentic and unexpired"""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            logger.debug("Session cookie expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid session cookie: {e}")
            return None

        session_id = payload.get("sid")
        if not session_id:
            logger.warning("Session cookie missing sid")
            return None
        return str(session_id)
