"""Authentication API endpoints."""
import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from app.api.deps import get_current_claims, get_session_manager, get_token_signer
from app.api.transport import (
    clear_auth_cookies,
    get_credentials,
    get_request_ip,
    set_access_cookie,
    set_session_cookies,
)
from app.schemas.auth import (
    AccessClaims,
    Envelope,
    RefreshResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from app.services.errors import AuthenticationError
from app.services.sessions import SessionManager
from app.services.tokens import TokenSigner

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=Envelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def register(
    user_data: UserRegister,
    request: Request,
    response: Response,
    manager: SessionManager = Depends(get_session_manager),
    signer: TokenSigner = Depends(get_token_signer),
):
    """Register a new user and start a session."""
    user, tokens = manager.register(
        user_data,
        user_agent=request.headers.get("user-agent"),
        ip=get_request_ip(request),
    )
    set_session_cookies(response, tokens, signer)
    return Envelope(ok=True, user=UserResponse.model_validate(user).model_dump())


@router.post("/login", response_model=Envelope, response_model_exclude_none=True)
def login(
    user_data: UserLogin,
    request: Request,
    response: Response,
    manager: SessionManager = Depends(get_session_manager),
    signer: TokenSigner = Depends(get_token_signer),
):
    """Login and receive session cookies."""
    user, tokens = manager.login(
        user_data,
        user_agent=request.headers.get("user-agent"),
        ip=get_request_ip(request),
    )
    set_session_cookies(response, tokens, signer)
    return Envelope(ok=True, user=UserResponse.model_validate(user).model_dump())


@router.post("/refresh", response_model=RefreshResponse)
def refresh_tokens(
    request: Request,
    response: Response,
    manager: SessionManager = Depends(get_session_manager),
    signer: TokenSigner = Depends(get_token_signer),
):
    """Issue a new access token from the refresh cookie."""
    try:
        access_token = manager.refresh(get_credentials(request).refresh_token)
    except AuthenticationError as exc:
        logger.warning(f"Refresh rejected: {exc.__class__.__name__} ({exc.reason})")
        failure = JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"ok": False, "message": exc.public_message},
        )
        clear_auth_cookies(failure)
        return failure

    set_access_cookie(response, access_token, signer)
    return RefreshResponse(ok=True, rotated=False)


@router.post("/logout", response_model=Envelope, response_model_exclude_none=True)
def logout(
    request: Request,
    response: Response,
    manager: SessionManager = Depends(get_session_manager),
):
    """Revoke the current refresh session, if any, and clear cookies."""
    # Logout always succeeds for the caller; the outcome is only logged.
    outcome = manager.logout(get_credentials(request).refresh_token)
    if not outcome.revoked:
        logger.debug(f"Logout without revocation: {outcome.reason}")
    clear_auth_cookies(response)
    return Envelope(ok=True)


@router.post("/logout_all", response_model=Envelope, response_model_exclude_none=True)
def logout_all(
    response: Response,
    claims: AccessClaims = Depends(get_current_claims),
    manager: SessionManager = Depends(get_session_manager),
):
    """Invalidate every session of the current user."""
    manager.logout_all(claims.user_id)
    clear_auth_cookies(response)
    return Envelope(ok=True)


@router.get("/whoami", response_model=Envelope, response_model_exclude_none=True)
def whoami(claims: AccessClaims = Depends(get_current_claims)):
    """Return the claims of the presented access token."""
    return Envelope(ok=True, user={"id": claims.user_id, "email": claims.email})
