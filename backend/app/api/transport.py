"""Cookie/header transport for session credentials."""
from dataclasses import dataclass

from fastapi import Request, Response

from app.config import get_settings
from app.schemas.auth import SessionTokens
from app.services.tokens import TokenSigner

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"

settings = get_settings()


@dataclass(frozen=True)
class Credentials:
    """Tokens presented by a request."""

    access_token: str | None
    refresh_token: str | None


def get_credentials(request: Request) -> Credentials:
    """Read the access token (cookie, then Bearer header) and refresh token (cookie)."""
    access_token = request.cookies.get(ACCESS_COOKIE)
    if not access_token:
        auth_header = request.headers.get("authorization", "")
        if auth_header.startswith("Bearer "):
            access_token = auth_header[7:].strip() or None
    return Credentials(
        access_token=access_token,
        refresh_token=request.cookies.get(REFRESH_COOKIE),
    )


def get_request_ip(request: Request) -> str | None:
    """Extract best-effort client IP for session metadata."""
    xff = request.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",")[0].strip()
    if request.client:
        return request.client.host
    return None


def _set_cookie(response: Response, key: str, value: str, max_age: int) -> None:
    response.set_cookie(
        key=key,
        value=value,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        path=settings.cookie_path,
        max_age=max_age,
    )


def set_access_cookie(response: Response, access_token: str, signer: TokenSigner) -> None:
    _set_cookie(response, ACCESS_COOKIE, access_token, int(signer.access_ttl.total_seconds()))


def set_session_cookies(response: Response, tokens: SessionTokens, signer: TokenSigner) -> None:
    """Write both credentials as HttpOnly cookies."""
    _set_cookie(response, REFRESH_COOKIE, tokens.refresh_token, int(signer.refresh_ttl.total_seconds()))
    set_access_cookie(response, tokens.access_token, signer)


def clear_auth_cookies(response: Response) -> None:
    """Clear both credential cookies."""
    for key in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(
            key=key,
            path=settings.cookie_path,
            secure=settings.cookie_secure,
            httponly=True,
            samesite=settings.cookie_samesite,
        )
