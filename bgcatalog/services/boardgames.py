"""Catalog store: create, read, update and delete boardgames with their category tags."""

import logging

from pydantic import ValidationError
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bgcatalog.core.database import transaction
from bgcatalog.core.errors import (
    Conflict,
    Forbidden,
    NotFound,
    StoreCorruption,
    ValidationFailure,
)
from bgcatalog.models import Boardgame, Category, boardgame_categories
from bgcatalog.schemas.boardgame import (
    BoardgameCreate,
    BoardgameOut,
    BoardgameUpdate,
    CategoryRef,
)
from bgcatalog.services.catalog_search import (
    BOARDGAME_FIELDS,
    entry_rows_query,
    group_rows,
    validate_entries,
)

logger = logging.getLogger(__name__)

# Scalar columns copied from a validated payload onto the ORM row.
_WRITABLE_FIELDS = tuple(f for f in BOARDGAME_FIELDS if f != "id")


def _read_one(db: Session, where, description: str) -> BoardgameOut:
    rows = db.execute(entry_rows_query(outer=True).where(where)).mappings().all()
    entries = validate_entries(group_rows(rows))
    if not entries:
        raise NotFound(f"Boardgame not found by {description}")
    if len(entries) > 1:
        raise StoreCorruption(f"Corrupt DB, multiple boardgames with {description}")
    return entries[0]


def read_boardgame_by_id(db: Session, boardgame_id: int) -> BoardgameOut:
    return _read_one(db, Boardgame.id == boardgame_id, f"boardgameid: {boardgame_id}")


def read_boardgame_by_title(db: Session, title: str) -> BoardgameOut:
    return _read_one(db, Boardgame.title == title, f"title: {title}")


def _resolve_categories(db: Session, refs: list[CategoryRef]) -> list[Category]:
    """Load the referenced categories; unknown ids are a client error."""
    wanted = {ref.id for ref in refs}
    found = db.scalars(select(Category).where(Category.id.in_(wanted))).all()
    missing = wanted - {c.id for c in found}
    if missing:
        raise ValidationFailure(
            "Badly formatted request",
            {"unknown_category_ids": sorted(missing)},
        )
    return sorted(found, key=lambda c: c.id)


def create_boardgame(db: Session, payload: BoardgameCreate) -> BoardgameOut:
    """Insert the boardgame and its category links together; duplicate title is a Conflict."""
    try:
        with transaction(db):
            categories = _resolve_categories(db, payload.categories)
            row = Boardgame(**{f: getattr(payload, f) for f in _WRITABLE_FIELDS})
            row.categories = categories
            db.add(row)
            db.flush()
            boardgame_id = row.id
    except IntegrityError as e:
        raise Conflict("Boardgame already exists") from e
    logger.info(
        "Boardgame created",
        extra={"boardgame_id": boardgame_id, "category_count": len(payload.categories)},
    )
    return read_boardgame_by_id(db, boardgame_id)


def update_boardgame(
    db: Session, boardgame_id: int, changes: BoardgameUpdate
) -> BoardgameOut:
    """
    Apply the provided fields to a stored boardgame.

    The merged result is re-validated, the title must not belong to another boardgame,
    and the category links are replaced (delete all, insert all) in the same
    transaction as the column update.
    """
    current = read_boardgame_by_id(db, boardgame_id)
    merged_data = current.model_dump()
    merged_data.update(changes.model_dump(exclude_unset=True, exclude_none=True))
    try:
        merged = BoardgameCreate.model_validate(merged_data)
    except ValidationError as e:
        raise ValidationFailure("Badly formatted request", e.errors(include_url=False)) from e

    try:
        holder = read_boardgame_by_title(db, merged.title)
    except NotFound:
        holder = None
    if holder is not None and holder.id != boardgame_id:
        raise Forbidden(f"Cannot update boardgame with name: {merged.title}")

    try:
        with transaction(db):
            categories = _resolve_categories(db, merged.categories)
            row = db.get(Boardgame, boardgame_id)
            if row is None:
                raise NotFound(f"Boardgame not found by boardgameid: {boardgame_id}")
            for field in _WRITABLE_FIELDS:
                setattr(row, field, getattr(merged, field))
            row.categories = categories
            db.flush()
    except IntegrityError as e:
        raise Conflict("Boardgame already exists") from e
    logger.info("Boardgame updated", extra={"boardgame_id": boardgame_id})
    return read_boardgame_by_id(db, boardgame_id)


def delete_boardgame(db: Session, boardgame_id: int) -> BoardgameOut:
    """Remove the category links, then the boardgame; returns what was deleted."""
    boardgame = read_boardgame_by_id(db, boardgame_id)
    with transaction(db):
        db.execute(
            delete(boardgame_categories).where(
                boardgame_categories.c.boardgame_id == boardgame_id
            )
        )
        db.execute(delete(Boardgame).where(Boardgame.id == boardgame_id))
    logger.info("Boardgame deleted", extra={"boardgame_id": boardgame_id})
    return boardgame
