"""Pydantic request/response schemas."""

from bgcatalog.schemas.account import (
    AccountOut,
    AccountQuery,
    Credentials,
    Identity,
    PasswordIn,
    RoleOut,
)
from bgcatalog.schemas.boardgame import (
    BoardgameCreate,
    BoardgameFilters,
    BoardgameOut,
    BoardgameUpdate,
    CategoryOut,
    CategoryRef,
)
from bgcatalog.schemas.health import HealthResponse

__all__ = [
    "AccountOut",
    "AccountQuery",
    "BoardgameCreate",
    "BoardgameFilters",
    "BoardgameOut",
    "BoardgameUpdate",
    "CategoryOut",
    "CategoryRef",
    "Credentials",
    "HealthResponse",
    "Identity",
    "PasswordIn",
    "RoleOut",
]
