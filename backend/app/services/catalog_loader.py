"""Service to load the liquor-base catalog from YAML into the database."""
import logging
from pathlib import Path

import yaml
from sqlalchemy.orm import Session

from app.config import get_settings
from app.models.catalog import LiquorBase

logger = logging.getLogger(__name__)
settings = get_settings()


def load_liquor_bases(db: Session, catalog_file: Path | None = None) -> list[LiquorBase]:
    """Upsert liquor bases from the catalog YAML file.

    Returns list of loaded/updated LiquorBase objects.
    """
    catalog_file = catalog_file or settings.catalog_file
    if not catalog_file.exists():
        logger.warning(f"Catalog file not found: {catalog_file}")
        return []

    with open(catalog_file, "r") as f:
        data = yaml.safe_load(f) or {}

    loaded = []
    for entry in data.get("bases", []):
        code = entry.get("code")
        if not code:
            logger.warning(f"Catalog entry missing code in {catalog_file}: {entry}")
            continue

        existing = db.get(LiquorBase, code)
        if existing:
            existing.label = entry.get("label", existing.label)
            loaded.append(existing)
        else:
            base = LiquorBase(code=code, label=entry.get("label", code))
            db.add(base)
            loaded.append(base)

    db.commit()
    logger.info(f"Loaded {len(loaded)} liquor bases")
    return loaded


def get_liquor_bases(db: Session) -> list[LiquorBase]:
    """Get all liquor bases ordered by label."""
    return db.query(LiquorBase).order_by(LiquorBase.label).all()
