"""Shared FastAPI dependencies."""
from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.api.transport import get_credentials
from app.config import get_settings
from app.database import get_db
from app.schemas.auth import AccessClaims
from app.services.sessions import SessionManager
from app.services.tokens import TokenSigner

__all__ = ["get_db", "get_token_signer", "get_session_manager", "get_current_claims"]


@lru_cache
def get_token_signer() -> TokenSigner:
    """Signer built once from settings at first use."""
    return TokenSigner.from_settings(get_settings())


def get_session_manager(
    db: Session = Depends(get_db),
    signer: TokenSigner = Depends(get_token_signer),
) -> SessionManager:
    return SessionManager(db, signer)


def get_current_claims(
    request: Request,
    manager: SessionManager = Depends(get_session_manager),
) -> AccessClaims:
    """Require a valid access token; raises Unauthorized otherwise."""
    return manager.whoami(get_credentials(request).access_token)
