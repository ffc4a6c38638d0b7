"""Login session model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base


class AuthSession(Base):
    """Server-side session keyed by the opaque token stored in the client cookie.

    Timestamps are naive UTC. A row whose ``expires_at`` is not in the future
    is treated as absent even before the sweep removes it.
    """

    __tablename__ = "sessions"

    token = Column(String(64), primary_key=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    expires_at = Column(DateTime, nullable=False, index=True)
    last_activity = Column(DateTime, nullable=False)

    # Relationships
    user = relationship("User", back_populates="sessions")
