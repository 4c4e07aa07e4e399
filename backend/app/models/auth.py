"""Authentication/session models."""
import uuid
from datetime import datetime

from sqlalchemy import Column, ForeignKey, Index, String
from sqlalchemy.orm import relationship

from app.database import Base


class RefreshSession(Base):
    """One row per issued refresh token; rows are revoked, never deleted."""

    __tablename__ = "refresh_tokens"
    __table_args__ = (
        Index("ix_refresh_tokens_user_active", "user_id", "revoked_at"),
        Index("ix_refresh_tokens_expires_at", "expires_at"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    session_id = Column(String(36), unique=True, nullable=False, index=True)
    token_hash = Column(String(64), nullable=False)  # sha256 of the encoded refresh token
    user_agent = Column(String(255))
    ip = Column(String(45))
    created_at = Column(String(26), default=lambda: datetime.utcnow().isoformat())
    expires_at = Column(String(26), nullable=False)
    revoked_at = Column(String(26))

    user = relationship("User", back_populates="refresh_sessions")

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return True once expires_at is no longer in the future."""
        now = now or datetime.utcnow()
        return datetime.fromisoformat(self.expires_at) <= now
