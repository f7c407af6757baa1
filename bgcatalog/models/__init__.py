"""SQLAlchemy ORM models."""

from bgcatalog.models.account import Account, Password, Role
from bgcatalog.models.base import Base
from bgcatalog.models.boardgame import Boardgame, Category, boardgame_categories

__all__ = [
    "Account",
    "Base",
    "Boardgame",
    "Category",
    "Password",
    "Role",
    "boardgame_categories",
]
