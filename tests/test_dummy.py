"""Unit tests for dummy data generation, catalog files and the models."""

from __future__ import annotations

import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

from gamestore.dummy import GENRES, PLATFORMS, TITLES, Catalog, DummyData, load_catalog
from gamestore.models import Game, Purchase


class TestDummyData(unittest.TestCase):
    def test_game_fields(self):
        game = DummyData(seed=1).game(7)
        self.assertEqual(game.id, 7)
        base, _, digit = game.title.rpartition(" ")
        self.assertIn(base, TITLES)
        self.assertIn(int(digit), range(1, 10))
        self.assertIn(game.genre, GENRES)
        self.assertTrue(10.0 <= game.price <= 60.0)
        self.assertEqual(game.price, int(game.price))
        self.assertIsNone(game.release_date)

    def test_same_seed_same_data(self):
        a = [DummyData(seed=42).game(i) for i in range(1, 4)]
        b = [DummyData(seed=42).game(i) for i in range(1, 4)]
        self.assertEqual(a, b)

    def test_purchase_within_last_year(self):
        now = datetime(2026, 6, 1, tzinfo=timezone.utc)
        dummy = DummyData(seed=3)
        for i in range(1, 50):
            purchase = dummy.purchase(i, game_id=2, now=now)
            self.assertEqual(purchase.game_id, 2)
            self.assertIn(purchase.platform, PLATFORMS)
            self.assertLessEqual(purchase.bought_at, now)
            self.assertGreaterEqual(purchase.bought_at, now - timedelta(days=365))

    def test_game_id_and_release_offsets_in_range(self):
        dummy = DummyData(seed=9)
        for _ in range(100):
            self.assertIn(dummy.game_id(50), range(1, 51))
            self.assertIn(dummy.release_days_ago(), range(100, 2001))

    def test_custom_catalog(self):
        dummy = DummyData(seed=5, catalog=Catalog(titles=["Solo"], genres=["Puzzle"], platforms=["Arcade"]))
        self.assertTrue(dummy.game(1).title.startswith("Solo "))
        self.assertEqual(dummy.game(2).genre, "Puzzle")
        self.assertEqual(dummy.purchase(1, 1).platform, "Arcade")


class TestLoadCatalog(unittest.TestCase):
    def _write(self, text: str) -> Path:
        tmp = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False, encoding="utf-8")
        tmp.write(text)
        tmp.close()
        self.addCleanup(Path(tmp.name).unlink)
        return Path(tmp.name)

    def test_partial_override(self):
        catalog = load_catalog(self._write("genres:\n  - Puzzle\n  - Racing\n"))
        self.assertEqual(catalog.genres, ["Puzzle", "Racing"])
        self.assertEqual(catalog.titles, TITLES)
        self.assertEqual(catalog.platforms, PLATFORMS)

    def test_empty_file_keeps_defaults(self):
        self.assertEqual(load_catalog(self._write("")), Catalog())

    def test_empty_list_rejected(self):
        with self.assertRaises(ValueError):
            load_catalog(self._write("titles: []\n"))

    def test_non_mapping_rejected(self):
        with self.assertRaises(ValueError):
            load_catalog(self._write("- just\n- a list\n"))


class TestModels(unittest.TestCase):
    def test_game_from_row(self):
        row = {"id": 3, "title": "Cyber Drift 4", "genre": "Action", "price": 25.0,
               "releaseDate": "2024-02-01"}
        game = Game.from_row(row)
        self.assertEqual(game.release_date, "2024-02-01")
        self.assertEqual(game.to_params(), (3, "Cyber Drift 4", "Action", 25.0))

    def test_game_from_v1_row(self):
        game = Game.from_row({"id": 1, "title": "SkyQuest 1", "genre": "RPG", "price": 10})
        self.assertIsNone(game.release_date)
        self.assertIsInstance(game.price, float)

    def test_purchase_params(self):
        bought = datetime(2026, 3, 4, 5, 6, 7, tzinfo=timezone.utc)
        purchase = Purchase(id=1, game_id=2, platform="PC", bought_at=bought)
        self.assertEqual(purchase.to_params(), (1, 2, "PC", "2026-03-04 05:06:07"))

    def test_purchase_from_row(self):
        purchase = Purchase.from_row({"id": 1, "gameID": 2, "platform": "PS5",
                                      "boughtAt": "2026-03-04 05:06:07"})
        self.assertEqual(purchase.bought_at, datetime(2026, 3, 4, 5, 6, 7, tzinfo=timezone.utc))


if __name__ == "__main__":
    unittest.main()
