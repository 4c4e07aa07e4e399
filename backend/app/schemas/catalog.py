"""Catalog and preference schemas."""
from pydantic import BaseModel, Field


class LiquorBaseResponse(BaseModel):
    code: str
    label: str

    class Config:
        from_attributes = True


class CatalogResponse(BaseModel):
    ok: bool = True
    items: list[LiquorBaseResponse]


class PreferenceCreate(BaseModel):
    """Questionnaire answers."""

    nombre: str = Field(..., min_length=1, max_length=100)
    sabor: str = Field(..., min_length=1, max_length=100)
    con_alcohol: bool | None = None


class PreferenceResponse(BaseModel):
    id: str
    nombre: str
    sabor: str
    con_alcohol: bool | None
    created_at: str

    class Config:
        from_attributes = True


class PreferenceCreated(BaseModel):
    ok: bool = True
    message: str
    data: PreferenceResponse
