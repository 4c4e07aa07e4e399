"""Durable store of issued refresh sessions.

Every call goes to the database so a refresh always sees the latest
revocation. Revocations are single conditional UPDATE statements, which keeps
concurrent refresh/logout on the same session atomic at the row level.
"""
from datetime import datetime

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.models.auth import RefreshSession


class RefreshStore:
    """Repository for ``RefreshSession`` rows."""

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        user_id: str,
        session_id: str,
        token_hash: str,
        user_agent: str | None,
        ip: str | None,
        expires_at: datetime,
    ) -> RefreshSession:
        """Insert a new active record."""
        record = RefreshSession(
            user_id=user_id,
            session_id=session_id,
            token_hash=token_hash,
            user_agent=user_agent[:255] if user_agent else None,
            ip=ip,
            expires_at=expires_at.isoformat(),
        )
        self.db.add(record)
        self.db.flush()
        return record

    def find_by_session(self, session_id: str, user_id: str) -> RefreshSession | None:
        """Look up a record whatever its state; both keys must match."""
        return self.db.query(RefreshSession).filter(
            RefreshSession.session_id == session_id,
            RefreshSession.user_id == user_id,
        ).first()

    def find_active_by_session(self, session_id: str, user_id: str) -> RefreshSession | None:
        """Look up a record that is neither revoked nor expired."""
        record = self.db.query(RefreshSession).filter(
            RefreshSession.session_id == session_id,
            RefreshSession.user_id == user_id,
            RefreshSession.revoked_at.is_(None),
        ).first()
        if record is None or record.is_expired():
            return None
        return record

    def revoke(self, session_id: str, user_id: str, token_hash: str) -> bool:
        """Revoke one session if it is unrevoked and the hash matches.

        Returns whether a row changed; absent or already revoked rows are a
        no-op.
        """
        result = self.db.execute(
            update(RefreshSession)
            .where(
                RefreshSession.session_id == session_id,
                RefreshSession.user_id == user_id,
                RefreshSession.token_hash == token_hash,
                RefreshSession.revoked_at.is_(None),
            )
            .values(revoked_at=datetime.utcnow().isoformat())
        )
        return result.rowcount > 0

    def revoke_all_for_user(self, user_id: str) -> int:
        """Revoke every active session of a user."""
        result = self.db.execute(
            update(RefreshSession)
            .where(
                RefreshSession.user_id == user_id,
                RefreshSession.revoked_at.is_(None),
            )
            .values(revoked_at=datetime.utcnow().isoformat())
        )
        return result.rowcount
