"""Taste preference model."""
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, String

from app.database import Base


class UserPreference(Base):
    """Anonymous taste preferences submitted from the questionnaire."""

    __tablename__ = "user_preferences"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    nombre = Column(String(100), nullable=False)
    sabor = Column(String(100), nullable=False)
    con_alcohol = Column(Boolean)
    created_at = Column(String(26), default=lambda: datetime.utcnow().isoformat())
