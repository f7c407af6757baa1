"""Boardgame endpoints: public filtered search and admin create/update/delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query
from pydantic import ValidationError
from sqlalchemy.orm import Session

from bgcatalog.api.v1.auth import require_authorization
from bgcatalog.core.database import get_db
from bgcatalog.core.errors import ValidationFailure
from bgcatalog.schemas.account import Identity
from bgcatalog.schemas.boardgame import (
    BoardgameCreate,
    BoardgameFilters,
    BoardgameOut,
    BoardgameUpdate,
)
from bgcatalog.services.boardgames import (
    create_boardgame,
    delete_boardgame,
    update_boardgame,
)
from bgcatalog.services.catalog_search import search_boardgames

router = APIRouter()


@router.get("", response_model=list[BoardgameOut])
def get_boardgames(
    db: Annotated[Session, Depends(get_db)],
    category: Annotated[str | None, Query(description="Comma-separated category names")] = None,
    players: Annotated[int | None, Query(ge=1)] = None,
    time: Annotated[int | None, Query(ge=1, description="Available play time in minutes")] = None,
    minage: Annotated[int | None, Query(ge=1)] = None,
) -> list[BoardgameOut]:
    """
    Search the catalog. Filters combine with AND; several categories match if any applies.

    - **category**: boardgames tagged with any of the listed categories
    - **players**: boardgames playable with that many players
    - **time**: boardgames whose minimum play time fits in the given minutes
    - **minage**: boardgames suitable from that age

    Each boardgame is returned with all of its categories.
    """
    try:
        filters = BoardgameFilters.model_validate(
            {"categories": category, "players": players, "time": time, "min_age": minage}
        )
    except ValidationError as e:
        raise ValidationFailure("Badly formatted request", e.errors(include_url=False)) from e
    return search_boardgames(db, filters)


@router.post("", response_model=BoardgameOut)
def post_boardgame(
    body: BoardgameCreate,
    _admin: Annotated[Identity, Depends(require_authorization)],
    db: Annotated[Session, Depends(get_db)],
) -> BoardgameOut:
    return create_boardgame(db, body)


@router.put("/{boardgame_id}", response_model=BoardgameOut)
def put_boardgame(
    boardgame_id: Annotated[int, Path(ge=1)],
    body: BoardgameUpdate,
    _admin: Annotated[Identity, Depends(require_authorization)],
    db: Annotated[Session, Depends(get_db)],
) -> BoardgameOut:
    """Partially update a boardgame; the title must stay unique across the catalog."""
    return update_boardgame(db, boardgame_id, body)


@router.delete("/{boardgame_id}", response_model=BoardgameOut)
def remove_boardgame(
    boardgame_id: Annotated[int, Path(ge=1)],
    _admin: Annotated[Identity, Depends(require_authorization)],
    db: Annotated[Session, Depends(get_db)],
) -> BoardgameOut:
    """Delete a boardgame and its category links; returns the deleted boardgame."""
    return delete_boardgame(db, boardgame_id)
