"""Tests for the catalog store: create, read, update (tag replacement) and delete."""

import unittest

from bgcatalog.core.errors import Conflict, Forbidden, NotFound, ValidationFailure
from bgcatalog.models import boardgame_categories
from bgcatalog.schemas.boardgame import BoardgameUpdate, CategoryRef
from bgcatalog.services.boardgames import (
    create_boardgame,
    delete_boardgame,
    read_boardgame_by_id,
    read_boardgame_by_title,
    update_boardgame,
)
from bgcatalog.services.categories import list_categories
from tests.helpers import CATEGORIES, boardgame_payload, make_session_factory


def _category_names(boardgame) -> set[str]:
    return {c.name for c in boardgame.categories}


class CatalogStoreTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()

    def tearDown(self) -> None:
        self.db.close()

    def _link_count(self, boardgame_id: int) -> int:
        rows = self.db.execute(
            boardgame_categories.select().where(
                boardgame_categories.c.boardgame_id == boardgame_id
            )
        ).fetchall()
        return len(rows)


class TestCreateAndRead(CatalogStoreTestCase):
    def test_round_trip_categories(self) -> None:
        created = create_boardgame(
            self.db, boardgame_payload("Catan", ("Strategy", "Family"))
        )
        read = read_boardgame_by_id(self.db, created.id)
        self.assertEqual(_category_names(read), {"Strategy", "Family"})
        self.assertEqual(read.title, "Catan")
        self.assertEqual(read.min_players, 2)

    def test_read_by_title(self) -> None:
        created = create_boardgame(self.db, boardgame_payload("Catan"))
        self.assertEqual(read_boardgame_by_title(self.db, "Catan").id, created.id)

    def test_image_url_kept(self) -> None:
        created = create_boardgame(
            self.db,
            boardgame_payload("Catan", image_url="https://img.example.com/catan.png"),
        )
        self.assertEqual(created.image_url, "https://img.example.com/catan.png")

    def test_duplicate_title_conflicts(self) -> None:
        create_boardgame(self.db, boardgame_payload("Catan"))
        with self.assertRaises(Conflict):
            create_boardgame(self.db, boardgame_payload("Catan", ("Party",)))

    def test_unknown_category_rejected(self) -> None:
        payload = boardgame_payload("Catan")
        payload.categories = [CategoryRef(id=404)]
        with self.assertRaises(ValidationFailure):
            create_boardgame(self.db, payload)
        with self.assertRaises(NotFound):
            read_boardgame_by_title(self.db, "Catan")

    def test_read_unknown(self) -> None:
        with self.assertRaises(NotFound):
            read_boardgame_by_id(self.db, 12345)


class TestUpdate(CatalogStoreTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.catan = create_boardgame(self.db, boardgame_payload("Catan", ("Strategy",)))
        self.dixit = create_boardgame(self.db, boardgame_payload("Dixit", ("Party",)))

    def test_partial_update_keeps_other_fields(self) -> None:
        updated = update_boardgame(self.db, self.catan.id, BoardgameUpdate(max_players=6))
        self.assertEqual(updated.max_players, 6)
        self.assertEqual(updated.title, "Catan")
        self.assertEqual(_category_names(updated), {"Strategy"})

    def test_categories_replaced(self) -> None:
        changes = BoardgameUpdate(
            categories=[CategoryRef(id=CATEGORIES["Party"]), CategoryRef(id=CATEGORIES["Family"])]
        )
        updated = update_boardgame(self.db, self.catan.id, changes)
        self.assertEqual(_category_names(updated), {"Party", "Family"})
        self.assertEqual(self._link_count(self.catan.id), 2)

    def test_same_title_is_allowed(self) -> None:
        updated = update_boardgame(self.db, self.catan.id, BoardgameUpdate(title="Catan"))
        self.assertEqual(updated.title, "Catan")

    def test_title_of_other_boardgame_forbidden(self) -> None:
        with self.assertRaises(Forbidden) as ctx:
            update_boardgame(self.db, self.catan.id, BoardgameUpdate(title="Dixit"))
        self.assertIn("Dixit", ctx.exception.message)
        self.assertEqual(read_boardgame_by_id(self.db, self.catan.id).title, "Catan")

    def test_unknown_category_leaves_links_intact(self) -> None:
        with self.assertRaises(ValidationFailure):
            update_boardgame(
                self.db,
                self.catan.id,
                BoardgameUpdate(title="Catan 2", categories=[CategoryRef(id=404)]),
            )
        current = read_boardgame_by_id(self.db, self.catan.id)
        self.assertEqual(current.title, "Catan")
        self.assertEqual(_category_names(current), {"Strategy"})

    def test_update_unknown(self) -> None:
        with self.assertRaises(NotFound):
            update_boardgame(self.db, 999, BoardgameUpdate(title="X"))


class TestDelete(CatalogStoreTestCase):
    def test_delete_removes_links_and_entry(self) -> None:
        created = create_boardgame(self.db, boardgame_payload("Catan", ("Strategy", "Party")))
        deleted = delete_boardgame(self.db, created.id)
        self.assertEqual(deleted.id, created.id)
        self.assertEqual(self._link_count(created.id), 0)
        with self.assertRaises(NotFound):
            read_boardgame_by_id(self.db, created.id)

    def test_delete_unknown(self) -> None:
        with self.assertRaises(NotFound):
            delete_boardgame(self.db, 999)


class TestCategories(CatalogStoreTestCase):
    def test_lists_seeded_categories(self) -> None:
        names = [c.name for c in list_categories(self.db)]
        self.assertEqual(names, list(CATEGORIES))


if __name__ == "__main__":
    unittest.main()
