"""Preference API endpoints."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.models.preference import UserPreference
from app.schemas.catalog import PreferenceCreate, PreferenceCreated, PreferenceResponse

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.post("", response_model=PreferenceCreated, status_code=status.HTTP_201_CREATED)
def save_preferences(
    preference_data: PreferenceCreate,
    db: Session = Depends(get_db),
):
    """Store questionnaire answers."""
    preference = UserPreference(
        nombre=preference_data.nombre,
        sabor=preference_data.sabor,
        con_alcohol=preference_data.con_alcohol,
    )
    db.add(preference)
    db.commit()
    db.refresh(preference)

    return PreferenceCreated(
        message="Preferences saved",
        data=PreferenceResponse.model_validate(preference),
    )
