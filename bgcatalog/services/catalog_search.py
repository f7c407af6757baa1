"""
Filtered boardgame search.

Two phases: resolve the ids of matching boardgames using every filter predicate, then
fetch all (boardgame, category) rows for exactly those ids so each result carries its
complete category set rather than only the categories that matched the filter.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError
from sqlalchemy import ColumnElement, Select, and_, select
from sqlalchemy.orm import Session

from bgcatalog.core.errors import StoreCorruption
from bgcatalog.models import Boardgame, Category, boardgame_categories
from bgcatalog.schemas.boardgame import BoardgameFilters, BoardgameOut

logger = logging.getLogger(__name__)

BOARDGAME_FIELDS = (
    "id",
    "title",
    "image_url",
    "description",
    "min_players",
    "max_players",
    "min_time",
    "max_time",
    "min_age",
)


def build_predicates(filters: BoardgameFilters) -> list[ColumnElement[bool]]:
    """
    Translate filters into bound-parameter predicates over boardgame x category.

    Absent dimensions add nothing. Category names match if any of them applies;
    the dimensions themselves are combined with AND by the caller.
    """
    predicates: list[ColumnElement[bool]] = []
    if filters.categories:
        predicates.append(Category.name.in_(filters.categories))
    if filters.players is not None:
        predicates.append(
            and_(
                Boardgame.min_players <= filters.players,
                Boardgame.max_players >= filters.players,
            )
        )
    if filters.time is not None:
        # Lower bound only: the requested time must cover the minimum play time.
        predicates.append(Boardgame.min_time <= filters.time)
    if filters.min_age is not None:
        predicates.append(Boardgame.min_age <= filters.min_age)
    return predicates


def _joined(stmt: Select, outer: bool = False) -> Select:
    """Join boardgames to their categories through the association table."""
    return stmt.select_from(Boardgame).join(
        boardgame_categories,
        boardgame_categories.c.boardgame_id == Boardgame.id,
        isouter=outer,
    ).join(
        Category,
        Category.id == boardgame_categories.c.category_id,
        isouter=outer,
    )


def matching_ids_query(filters: BoardgameFilters) -> Select:
    """Phase 1: distinct ids of boardgames satisfying every predicate."""
    return _joined(select(Boardgame.id)).where(*build_predicates(filters)).distinct()


def entry_rows_query(outer: bool = False) -> Select:
    """One row per (boardgame, category) pair, rows of one boardgame kept contiguous."""
    columns = [getattr(Boardgame, field) for field in BOARDGAME_FIELDS]
    stmt = select(
        *columns,
        Category.id.label("category_id"),
        Category.name.label("category_name"),
    )
    return _joined(stmt, outer=outer).order_by(Boardgame.id, Category.id)


def group_rows(rows: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """
    Fold flattened (boardgame, category) rows into one dict per boardgame.

    Only contiguity of rows sharing an id is assumed, not a global sort by id.
    A row with a null category (outer join) contributes no category.
    """
    grouped: list[dict[str, Any]] = []
    for row in rows:
        if not grouped or grouped[-1]["id"] != row["id"]:
            entry = {field: row[field] for field in BOARDGAME_FIELDS}
            entry["categories"] = []
            grouped.append(entry)
        if row["category_id"] is not None:
            grouped[-1]["categories"].append(
                {"id": row["category_id"], "name": row["category_name"]}
            )
    return grouped


def validate_entries(entries: list[dict[str, Any]]) -> list[BoardgameOut]:
    """Validate every grouped entry; one invalid entry fails the whole call."""
    result: list[BoardgameOut] = []
    for entry in entries:
        try:
            result.append(BoardgameOut.model_validate(entry))
        except ValidationError as e:
            logger.error(
                "Stored boardgame failed validation",
                extra={"boardgame_id": entry.get("id"), "error_count": e.error_count()},
            )
            raise StoreCorruption(
                f"Corrupt boardgame information in the database, boardgameid: {entry.get('id')}",
                e.errors(include_url=False),
            ) from e
    return result


def search_boardgames(db: Session, filters: BoardgameFilters) -> list[BoardgameOut]:
    """Return every boardgame matching the filters, each with its full category list."""
    ids = matching_ids_query(filters)
    stmt = entry_rows_query().where(Boardgame.id.in_(ids))
    rows = db.execute(stmt).mappings().all()
    boardgames = validate_entries(group_rows(rows))
    logger.debug(
        "Boardgame search completed",
        extra={"result_count": len(boardgames), "row_count": len(rows)},
    )
    return boardgames
