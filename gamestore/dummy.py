"""Random "fake" data so the tables can be filled without real game info."""

from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import yaml

from gamestore.models import Game, Purchase

TITLES = ["SkyQuest", "Pixel Dungeon", "Cyber Drift",
          "Mystic Valley", "Robot Rampage", "Star Traders"]
GENRES = ["Action", "RPG", "Adventure", "Strategy", "Simulation"]
PLATFORMS = ["PC", "Switch", "PS5", "Xbox", "Mobile"]

PRICE_RANGE = (10, 60)
PURCHASE_WINDOW_SECONDS = 86_400 * 365
RELEASE_DAYS_AGO = (100, 2000)


@dataclass(frozen=True)
class Catalog:
    """Name pools the generator draws from."""

    titles: list[str] = field(default_factory=lambda: list(TITLES))
    genres: list[str] = field(default_factory=lambda: list(GENRES))
    platforms: list[str] = field(default_factory=lambda: list(PLATFORMS))


def load_catalog(path: Path) -> Catalog:
    """Read a YAML file with optional ``titles``/``genres``/``platforms`` lists.

    Missing keys keep the built-in pools; an empty list is rejected.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Catalog file {path} must contain a mapping")

    catalog = Catalog()
    overrides = {}
    for key in ("titles", "genres", "platforms"):
        if key not in data:
            continue
        values = data[key]
        if not isinstance(values, list) or not values:
            raise ValueError(f"Catalog key '{key}' must be a non-empty list")
        overrides[key] = [str(v) for v in values]
    return replace(catalog, **overrides)


class DummyData:
    """Generator of games, purchases and release-date offsets."""

    def __init__(self, seed: Optional[int] = None, catalog: Optional[Catalog] = None):
        self._rng = random.Random(seed)
        self.catalog = catalog or Catalog()

    def game(self, id: int) -> Game:
        return Game(
            id=id,
            title=f"{self._rng.choice(self.catalog.titles)} {self._rng.randint(1, 9)}",
            genre=self._rng.choice(self.catalog.genres),
            price=float(self._rng.randint(*PRICE_RANGE)),
        )

    def purchase(self, id: int, game_id: int, now: Optional[datetime] = None) -> Purchase:
        now = now or datetime.now(timezone.utc)
        seconds_ago = self._rng.uniform(0, PURCHASE_WINDOW_SECONDS)
        return Purchase(
            id=id,
            game_id=game_id,
            platform=self._rng.choice(self.catalog.platforms),
            bought_at=now - timedelta(seconds=seconds_ago),
        )

    def game_id(self, game_count: int) -> int:
        return self._rng.randint(1, game_count)

    def release_days_ago(self) -> int:
        return self._rng.randint(*RELEASE_DAYS_AGO)
