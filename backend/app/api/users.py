"""Current-user profile endpoint."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_claims, get_db
from app.models.user import User
from app.schemas.auth import AccessClaims, Envelope, UserResponse

router = APIRouter(tags=["users"])


@router.get("/me", response_model=Envelope, response_model_exclude_none=True)
def get_me(
    db: Session = Depends(get_db),
    claims: AccessClaims = Depends(get_current_claims),
):
    """Get the current user's stored profile."""
    user = db.get(User, claims.user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return Envelope(ok=True, user=UserResponse.model_validate(user).model_dump())
