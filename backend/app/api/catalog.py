"""Catalog API endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.schemas.catalog import CatalogResponse, LiquorBaseResponse
from app.services.catalog_loader import get_liquor_bases

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/bases", response_model=CatalogResponse)
def list_bases(db: Session = Depends(get_db)):
    """List liquor bases (no auth required)."""
    bases = get_liquor_bases(db)
    return CatalogResponse(items=[LiquorBaseResponse.model_validate(b) for b in bases])
