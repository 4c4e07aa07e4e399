"""SQLAlchemy models package."""
from app.models.user import User
from app.models.auth import RefreshSession
from app.models.catalog import LiquorBase
from app.models.preference import UserPreference

__all__ = [
    "User",
    "RefreshSession",
    "LiquorBase",
    "UserPreference",
]
