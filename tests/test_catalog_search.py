"""Tests for bgcatalog.services.catalog_search: predicates, row grouping and two-phase search."""

import unittest

from bgcatalog.core.errors import StoreCorruption
from bgcatalog.schemas.boardgame import BoardgameFilters
from bgcatalog.services.boardgames import create_boardgame
from bgcatalog.services.catalog_search import (
    build_predicates,
    group_rows,
    search_boardgames,
    validate_entries,
)
from tests.helpers import boardgame_payload, make_session_factory


def _row(boardgame_id: int, category_id: int | None, category_name: str | None, **kwargs):
    row = {
        "id": boardgame_id,
        "title": f"Game {boardgame_id}",
        "image_url": None,
        "description": "A game.",
        "min_players": 2,
        "max_players": 4,
        "min_time": 30,
        "max_time": 60,
        "min_age": 8,
        "category_id": category_id,
        "category_name": category_name,
    }
    row.update(kwargs)
    return row


class TestBuildPredicates(unittest.TestCase):
    def test_no_filters_no_predicates(self) -> None:
        self.assertEqual(build_predicates(BoardgameFilters()), [])

    def test_one_predicate_per_present_dimension(self) -> None:
        filters = BoardgameFilters(categories="Party,Family", players=3, time=45, min_age=10)
        self.assertEqual(len(build_predicates(filters)), 4)

    def test_values_are_bound_not_spliced(self) -> None:
        filters = BoardgameFilters(categories="O'Brien")
        (predicate,) = build_predicates(filters)
        compiled = predicate.compile()
        self.assertNotIn("O'Brien", str(compiled))
        self.assertIn(["O'Brien"], list(compiled.params.values()))


class TestBoardgameFilters(unittest.TestCase):
    def test_comma_separated_categories(self) -> None:
        filters = BoardgameFilters(categories="Party,Strategy")
        self.assertEqual(filters.categories, ["Party", "Strategy"])

    def test_newlines_stripped(self) -> None:
        filters = BoardgameFilters(categories="Par\nty")
        self.assertEqual(filters.categories, ["Party"])

    def test_statement_separator_rejected(self) -> None:
        with self.assertRaises(ValueError):
            BoardgameFilters(categories="Party;DROP TABLE boardgames")

    def test_non_positive_numbers_rejected(self) -> None:
        for field in ("players", "time", "min_age"):
            with self.assertRaises(ValueError):
                BoardgameFilters(**{field: 0})

    def test_empty_category_value_means_no_filter(self) -> None:
        self.assertIsNone(BoardgameFilters(categories="").categories)


class TestGroupRows(unittest.TestCase):
    """Rows sharing an id fold into one entry as long as they are contiguous."""

    def test_groups_contiguous_rows(self) -> None:
        rows = [
            _row(1, 1, "Strategy"),
            _row(1, 2, "Party"),
            _row(2, 2, "Party"),
        ]
        grouped = group_rows(rows)
        self.assertEqual([g["id"] for g in grouped], [1, 2])
        self.assertEqual(
            grouped[0]["categories"],
            [{"id": 1, "name": "Strategy"}, {"id": 2, "name": "Party"}],
        )
        self.assertEqual(grouped[1]["categories"], [{"id": 2, "name": "Party"}])

    def test_does_not_require_sorted_ids(self) -> None:
        rows = [_row(9, 1, "Strategy"), _row(3, 2, "Party"), _row(3, 3, "Family")]
        grouped = group_rows(rows)
        self.assertEqual([g["id"] for g in grouped], [9, 3])
        self.assertEqual(len(grouped[1]["categories"]), 2)

    def test_null_category_adds_nothing(self) -> None:
        grouped = group_rows([_row(1, None, None)])
        self.assertEqual(grouped[0]["categories"], [])

    def test_empty_rows(self) -> None:
        self.assertEqual(group_rows([]), [])

    def test_invalid_entry_fails_whole_call(self) -> None:
        grouped = group_rows([_row(1, 1, "Strategy"), _row(2, 1, "Strategy", min_players=0)])
        with self.assertRaises(StoreCorruption) as ctx:
            validate_entries(grouped)
        self.assertIn("boardgameid: 2", ctx.exception.message)


class TestSearchBoardgames(unittest.TestCase):
    """Search against an in-memory store."""

    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.a = create_boardgame(
            self.db,
            boardgame_payload("Alpha", ("Strategy", "Party"), min_players=2, max_players=4),
        )
        self.b = create_boardgame(
            self.db,
            boardgame_payload(
                "Beta", ("Party",), min_players=3, max_players=8, min_time=15, min_age=6
            ),
        )
        self.c = create_boardgame(
            self.db,
            boardgame_payload("Gamma", ("Family",), min_players=1, max_players=2, min_age=14),
        )

    def tearDown(self) -> None:
        self.db.close()

    def _titles(self, **filters: object) -> list[str]:
        return [bg.title for bg in search_boardgames(self.db, BoardgameFilters(**filters))]

    def test_no_filters_returns_every_entry_with_full_tags(self) -> None:
        result = search_boardgames(self.db, BoardgameFilters())
        self.assertEqual([bg.title for bg in result], ["Alpha", "Beta", "Gamma"])
        self.assertEqual({c.name for c in result[0].categories}, {"Strategy", "Party"})

    def test_category_filter_keeps_complete_tag_set(self) -> None:
        result = search_boardgames(self.db, BoardgameFilters(categories="Party"))
        self.assertEqual([bg.title for bg in result], ["Alpha", "Beta"])
        alpha = result[0]
        self.assertEqual({c.name for c in alpha.categories}, {"Strategy", "Party"})

    def test_categories_combine_with_or(self) -> None:
        self.assertEqual(self._titles(categories="Strategy,Family"), ["Alpha", "Gamma"])

    def test_player_filter_inclusive_range(self) -> None:
        self.assertEqual(self._titles(players=3), ["Alpha", "Beta"])
        self.assertEqual(self._titles(players=5), ["Beta"])
        self.assertEqual(self._titles(players=1), ["Gamma"])

    def test_time_filter_checks_minimum_play_time_only(self) -> None:
        self.assertEqual(self._titles(time=15), ["Beta"])
        # Above every max_time still matches: only the lower bound applies.
        self.assertEqual(self._titles(time=500), ["Alpha", "Beta", "Gamma"])

    def test_age_filter(self) -> None:
        self.assertEqual(self._titles(min_age=6), ["Beta"])
        self.assertEqual(self._titles(min_age=10), ["Alpha", "Beta"])

    def test_dimensions_combine_with_and(self) -> None:
        self.assertEqual(self._titles(categories="Party", players=5), ["Beta"])
        self.assertEqual(self._titles(categories="Family", players=5), [])

    def test_unknown_category_matches_nothing(self) -> None:
        self.assertEqual(self._titles(categories="Nope"), [])


if __name__ == "__main__":
    unittest.main()
