"""Catalog models."""
from sqlalchemy import Column, String

from app.database import Base


class LiquorBase(Base):
    """Liquor base offered in the catalog (seeded from YAML)."""

    __tablename__ = "liquor_bases"

    code = Column(String(20), primary_key=True)
    label = Column(String(100), nullable=False)
