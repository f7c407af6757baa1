"""Shared test fixtures: in-memory database with seeded roles and categories."""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bgcatalog.models import Base, Category, Role
from bgcatalog.schemas.boardgame import BoardgameCreate, CategoryRef

ADMIN_ROLE_ID = 1
MEMBER_ROLE_ID = 2
CATEGORIES = {"Strategy": 1, "Party": 2, "Family": 3, "Cooperative": 4}


def make_session_factory() -> sessionmaker[Session]:
    """Fresh in-memory database shared by every session of the returned factory."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    with factory() as db:
        db.add_all(
            [Role(id=ADMIN_ROLE_ID, name="admin"), Role(id=MEMBER_ROLE_ID, name="member")]
        )
        db.add_all([Category(id=cid, name=name) for name, cid in CATEGORIES.items()])
        db.commit()
    return factory


def boardgame_payload(
    title: str = "Catan",
    categories: tuple[str, ...] = ("Strategy",),
    **kwargs: object,
) -> BoardgameCreate:
    """Build a valid BoardgameCreate for tests."""
    defaults = {
        "image_url": None,
        "description": "Trade and build on the island.",
        "min_players": 2,
        "max_players": 4,
        "min_time": 60,
        "max_time": 120,
        "min_age": 10,
    }
    defaults.update(kwargs)
    return BoardgameCreate(
        title=title,
        categories=[CategoryRef(id=CATEGORIES[name]) for name in categories],
        **defaults,
    )
