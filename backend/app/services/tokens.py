"""Credential signer: issues and verifies signed, expiring JWTs.

The signer is built once from ``Settings`` and injected wherever tokens are
minted or checked; it never reads configuration on its own. ``verify`` folds
every failure (bad signature, expiry, wrong token type, missing claims) into
one ``InvalidToken`` so callers cannot tell the checks apart.
"""
from datetime import datetime, timedelta, timezone
import hashlib
import re

from jose import JWTError, jwt

from app.config import Settings
from app.schemas.auth import AccessClaims, RefreshClaims
from app.services.errors import InvalidToken

ACCESS = "access"
REFRESH = "refresh"

DEFAULT_TTL = timedelta(minutes=15)

_TTL_PATTERN = re.compile(r"^(\d+)([smhd])$")
_TTL_UNITS = {
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


def parse_ttl(value: str) -> timedelta:
    """Parse a TTL such as ``15m`` or ``7d``; unparseable values mean 15 minutes."""
    match = _TTL_PATTERN.match(value.strip()) if value else None
    if not match:
        return DEFAULT_TTL
    amount, unit = match.groups()
    return timedelta(**{_TTL_UNITS[unit]: int(amount)})


def hash_token(token: str) -> str:
    """Hash an encoded refresh token before persisting."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class TokenSigner:
    """HMAC-signed access/refresh token factory."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        access_ttl: timedelta = DEFAULT_TTL,
        refresh_ttl: timedelta = timedelta(days=7),
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenSigner":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            access_ttl=parse_ttl(settings.jwt_access_expires),
            refresh_ttl=parse_ttl(settings.jwt_refresh_expires),
        )

    def _encode(self, payload: dict, token_type: str, ttl: timedelta) -> str:
        to_encode = payload.copy()
        expire = datetime.now(timezone.utc) + ttl
        to_encode.update({"exp": expire, "type": token_type})
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def sign_access(self, claims: AccessClaims) -> str:
        """Create a short-lived access token."""
        return self._encode({"sub": claims.user_id, "email": claims.email}, ACCESS, self.access_ttl)

    def sign_refresh(self, claims: RefreshClaims, ttl: timedelta | None = None) -> str:
        """Create a refresh token bound to ``claims.session_id``."""
        payload = {
            "sub": claims.user_id,
            "email": claims.email,
            "ver": claims.token_version,
            "jti": claims.session_id,
        }
        return self._encode(payload, REFRESH, ttl or self.refresh_ttl)

    def verify(self, token: str, token_type: str | None = None) -> dict:
        """Return the decoded payload or raise ``InvalidToken``."""
        if not token:
            raise InvalidToken()
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as exc:
            raise InvalidToken() from exc
        if token_type is not None and payload.get("type") != token_type:
            raise InvalidToken()
        if not payload.get("sub"):
            raise InvalidToken()
        return payload

    def verify_access(self, token: str) -> AccessClaims:
        payload = self.verify(token, ACCESS)
        return AccessClaims(user_id=payload["sub"], email=payload.get("email", ""))

    def verify_refresh(self, token: str) -> RefreshClaims:
        payload = self.verify(token, REFRESH)
        session_id = payload.get("jti")
        if not session_id:
            raise InvalidToken()
        try:
            token_version = int(payload.get("ver") or 0)
        except (TypeError, ValueError) as exc:
            raise InvalidToken() from exc
        return RefreshClaims(
            user_id=payload["sub"],
            email=payload.get("email", ""),
            token_version=token_version,
            session_id=session_id,
        )
