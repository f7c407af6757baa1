"""Category endpoint: the full list of category tags."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bgcatalog.core.database import get_db
from bgcatalog.schemas.boardgame import CategoryOut
from bgcatalog.services.categories import list_categories

router = APIRouter()


@router.get("", response_model=list[CategoryOut])
def get_categories(
    db: Annotated[Session, Depends(get_db)],
) -> list[CategoryOut]:
    return list_categories(db)
