"""Category store: the shared list of category tags."""

from pydantic import ValidationError
from sqlalchemy.orm import Session

from bgcatalog.core.errors import StoreCorruption
from bgcatalog.models import Category
from bgcatalog.schemas.boardgame import CategoryOut


def list_categories(db: Session) -> list[CategoryOut]:
    """Return every category; a row that fails validation fails the whole call."""
    categories: list[CategoryOut] = []
    for row in db.query(Category).order_by(Category.id).all():
        try:
            categories.append(CategoryOut.model_validate(row))
        except ValidationError as e:
            raise StoreCorruption(
                f"Corrupt category information in the database, categoryid: {row.id}",
                e.errors(include_url=False),
            ) from e
    return categories
