"""Ownership gate for mutating operations."""

from dataclasses import dataclass

from shared.models import Session

CAPABILITY_SESSION = "session"
CAPABILITY_OWNER = "owner"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str | None = None


ALLOW = Decision(allowed=True)


def authorize(
    session: Session | None,
    owner_id: str | None,
    capability: str = CAPABILITY_OWNER,
) -> Decision:
    """Decide whether ``session`` may act with ``capability``.

    Deny reasons, checked in order: unauthenticated, bot_not_configured,
    forbidden. ``session`` capability only needs a live session.
    """
    if session is None:
        return Decision(allowed=False, reason="unauthenticated")
    if capability == CAPABILITY_SESSION:
        return ALLOW
    if owner_id is None:
        return Decision(allowed=False, reason="bot_not_configured")
    if session.user_id != owner_id:
        return Decision(allowed=False, reason="forbidden")
    return ALLOW
