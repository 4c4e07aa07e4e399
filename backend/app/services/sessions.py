"""Session lifecycle: register, login, refresh, logout and global logout.

A refresh session moves through ISSUED -> ACTIVE -> (ROTATED | REVOKED |
EXPIRED). Each login mints a fresh session_id, so a session_id is never
reused once it leaves ACTIVE.

Refresh re-issues the access token only. The refresh token keeps working
until its own expiry or an explicit revocation.
"""
from dataclasses import dataclass
from datetime import datetime
import logging
import uuid

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.user import User
from app.schemas.auth import (
    AccessClaims,
    RefreshClaims,
    SessionTokens,
    UserLogin,
    UserRegister,
)
from app.services.errors import (
    ConflictError,
    Expired,
    HashMismatch,
    InvalidCredentials,
    InvalidOrExpired,
    InvalidToken,
    NotRegistered,
    Revoked,
    SessionLookupFailed,
    StaleVersion,
    Unauthorized,
)
from app.services.passwords import DUMMY_HASH, get_password_hash, verify_password
from app.services.refresh_store import RefreshStore
from app.services.tokens import TokenSigner, hash_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogoutOutcome:
    """Result of a best-effort logout."""

    revoked: bool
    reason: str | None = None


def normalize_email(email: str) -> str:
    return email.strip().lower()


class SessionManager:
    """Orchestrates the credential lifecycle over one database session."""

    def __init__(self, db: Session, signer: TokenSigner):
        self.db = db
        self.signer = signer
        self.store = RefreshStore(db)

    def _issue_session(self, user: User, user_agent: str | None, ip: str | None) -> SessionTokens:
        """Mint an access/refresh pair and persist the refresh record."""
        session_id = str(uuid.uuid4())
        refresh_token = self.signer.sign_refresh(
            RefreshClaims(
                user_id=user.id,
                email=user.email,
                token_version=user.token_version or 0,
                session_id=session_id,
            )
        )
        self.store.create(
            user_id=user.id,
            session_id=session_id,
            token_hash=hash_token(refresh_token),
            user_agent=user_agent,
            ip=ip,
            expires_at=datetime.utcnow() + self.signer.refresh_ttl,
        )
        access_token = self.signer.sign_access(AccessClaims(user_id=user.id, email=user.email))
        return SessionTokens(
            access_token=access_token,
            refresh_token=refresh_token,
            session_id=session_id,
        )

    def register(
        self,
        payload: UserRegister,
        user_agent: str | None = None,
        ip: str | None = None,
    ) -> tuple[User, SessionTokens]:
        """Create a user and open their first session."""
        email = normalize_email(payload.email)
        if self.db.query(User).filter(User.email == email).first():
            raise ConflictError("email already registered")

        user = User(
            email=email,
            password_hash=get_password_hash(payload.password),
            display_name=payload.display_name,
            favorite_base=payload.favorite_base,
            token_version=0,
        )
        self.db.add(user)
        try:
            self.db.flush()
        except IntegrityError as exc:
            # Lost a race against a concurrent registration.
            self.db.rollback()
            raise ConflictError("email already registered") from exc

        tokens = self._issue_session(user, user_agent, ip)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Registered user {user.id} (session {tokens.session_id})")
        return user, tokens

    def login(
        self,
        payload: UserLogin,
        user_agent: str | None = None,
        ip: str | None = None,
    ) -> tuple[User, SessionTokens]:
        """Check credentials and open a new session."""
        user = self.db.query(User).filter(User.email == normalize_email(payload.email)).first()
        if user is None:
            verify_password(payload.password, DUMMY_HASH)
            raise InvalidCredentials("unknown email")
        if not verify_password(payload.password, user.password_hash):
            raise InvalidCredentials("wrong password")

        tokens = self._issue_session(user, user_agent, ip)
        self.db.commit()
        logger.info(f"User {user.id} logged in (session {tokens.session_id})")
        return user, tokens

    def refresh(self, refresh_token: str | None) -> str:
        """Validate a refresh token and return a new access token."""
        try:
            claims = self.signer.verify_refresh(refresh_token or "")
        except InvalidToken as exc:
            raise InvalidOrExpired("refresh token failed verification") from exc

        try:
            self._check_session(claims, refresh_token)
        except SQLAlchemyError as exc:
            logger.exception(f"Storage error while refreshing session {claims.session_id}")
            self.db.rollback()
            raise SessionLookupFailed("storage failure") from exc

        return self.signer.sign_access(AccessClaims(user_id=claims.user_id, email=claims.email))

    def _check_session(self, claims: RefreshClaims, refresh_token: str) -> None:
        """Match a verified refresh token against its record and user."""
        record = self.store.find_by_session(claims.session_id, claims.user_id)
        if record is None:
            raise NotRegistered("no refresh record for session")
        if record.is_revoked:
            raise Revoked("refresh session revoked")
        # Hash before version so forged claim sets are rejected cheaply.
        if hash_token(refresh_token) != record.token_hash:
            raise HashMismatch("refresh token is not the one on record")
        if record.is_expired():
            raise Expired("refresh session expired")

        user = self.db.get(User, claims.user_id)
        if user is None:
            raise NotRegistered("user no longer exists")
        if (user.token_version or 0) != claims.token_version:
            raise StaleVersion("token version predates global logout")

    def logout(self, refresh_token: str | None) -> LogoutOutcome:
        """Revoke the presented session if the token verifies."""
        if not refresh_token:
            return LogoutOutcome(revoked=False, reason="no refresh token")
        try:
            claims = self.signer.verify_refresh(refresh_token)
        except InvalidToken:
            return LogoutOutcome(revoked=False, reason="refresh token failed verification")

        try:
            revoked = self.store.revoke(claims.session_id, claims.user_id, hash_token(refresh_token))
            self.db.commit()
        except SQLAlchemyError:
            logger.warning(f"Storage error while revoking session {claims.session_id}", exc_info=True)
            self.db.rollback()
            return LogoutOutcome(revoked=False, reason="storage failure")
        if revoked:
            logger.info(f"Revoked session {claims.session_id} for user {claims.user_id}")
            return LogoutOutcome(revoked=True)
        return LogoutOutcome(revoked=False, reason="no active matching session")

    def logout_all(self, user_id: str) -> int:
        """Invalidate every refresh token of a user."""
        self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(token_version=User.token_version + 1)
        )
        revoked = self.store.revoke_all_for_user(user_id)
        self.db.commit()
        logger.info(f"Global logout for user {user_id}: revoked {revoked} sessions")
        return revoked

    def whoami(self, access_token: str | None) -> AccessClaims:
        """Verify an access token and return its claims."""
        try:
            return self.signer.verify_access(access_token or "")
        except InvalidToken as exc:
            raise Unauthorized("access token failed verification") from exc
