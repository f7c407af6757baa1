"""ORM models for catalog entries (boardgames) and their category tags."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from bgcatalog.models.base import Base

boardgame_categories = Table(
    "boardgame_categories",
    Base.metadata,
    Column(
        "boardgame_id",
        Integer,
        ForeignKey("boardgames.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "category_id",
        Integer,
        ForeignKey("categories.id"),
        primary_key=True,
    ),
)


class Category(Base):
    """Category label shared by any number of boardgames."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False, unique=True)


class Boardgame(Base):
    """
    Catalog entry. Player counts, play time and minimum age are positive integers;
    tags are attached through boardgame_categories.
    """

    __tablename__ = "boardgames"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False, unique=True, index=True)
    image_url = Column(String(255), nullable=True)
    description = Column(String(500), nullable=False)
    min_players = Column(Integer, nullable=False)
    max_players = Column(Integer, nullable=False)
    min_time = Column(Integer, nullable=False)
    max_time = Column(Integer, nullable=False)
    min_age = Column(Integer, nullable=False)

    categories = relationship(Category, secondary=boardgame_categories)
