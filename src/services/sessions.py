"""Session store and rolling-renewal policy."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from src.models.session import AuthSession
from src.models.user import User
from src.services.errors import NotFoundError

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Current time as naive UTC, matching how session timestamps are stored."""
    return datetime.now(UTC).replace(tzinfo=None)


@dataclass(frozen=True)
class SessionInfo:
    """A validated session with its owner and timestamps."""

    user: User
    last_activity: datetime
    expires_at: datetime


def should_renew(expires_at: datetime, now: datetime, duration: timedelta) -> bool:
    """Check whether more than half of the session lifetime has elapsed."""
    return expires_at - now < duration / 2


class SessionStore:
    """Persistent token-to-user mapping with expiry.

    Validity is decided against ``clock()``; a row expiring exactly now is
    already invalid.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.clock = clock

    def now(self) -> datetime:
        return self.clock()

    def create_session(self, token: str, user_id: int, expires_at: datetime) -> AuthSession:
        """Insert a new session. Duplicate tokens surface as IntegrityError."""
        session = AuthSession(
            token=token,
            user_id=user_id,
            expires_at=expires_at,
            last_activity=self.now(),
        )
        self.db.add(session)
        self.db.commit()
        return session

    def validate_session(self, token: str) -> User:
        """Return the user owning a live session."""
        return self.validate_session_with_info(token).user

    def validate_session_with_info(self, token: str) -> SessionInfo:
        """Return the owner and timestamps of a live session.

        Raises NotFoundError whether the token never existed or has expired.
        """
        row = (
            self.db.query(User, AuthSession.last_activity, AuthSession.expires_at)
            .join(AuthSession, AuthSession.user_id == User.id)
            .filter(AuthSession.token == token, AuthSession.expires_at > self.now())
            .first()
        )
        if row is None:
            raise NotFoundError("Session not found")

        user, last_activity, expires_at = row
        return SessionInfo(user=user, last_activity=last_activity, expires_at=expires_at)

    def renew_session(self, token: str, new_expires_at: datetime) -> None:
        """Push the expiry forward and touch last_activity.

        Does not re-check validity; callers validate first.
        """
        self.db.query(AuthSession).filter(AuthSession.token == token).update(
            {
                AuthSession.expires_at: new_expires_at,
                AuthSession.last_activity: self.now(),
            },
            synchronize_session=False,
        )
        self.db.commit()

    def delete_session(self, token: str) -> None:
        """Remove a session. Unknown tokens are ignored."""
        self.db.query(AuthSession).filter(AuthSession.token == token).delete(
            synchronize_session=False
        )
        self.db.commit()

    def clean_expired_sessions(self) -> int:
        """Delete every expired session and return how many were removed."""
        removed = (
            self.db.query(AuthSession)
            .filter(AuthSession.expires_at <= self.now())
            .delete(synchronize_session=False)
        )
        self.db.commit()
        if removed:
            logger.info(f"Removed {removed} expired sessions")
        return removed
