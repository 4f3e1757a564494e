"""Domain models — games in the catalogue and purchases of them."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

BOUGHT_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class Game:
    """A catalogue entry. ``release_date`` only exists from schema v1.1 on."""

    id: int
    title: str
    genre: str
    price: float
    release_date: Optional[str] = None

    def to_params(self) -> tuple[int, str, str, float]:
        return (self.id, self.title, self.genre, self.price)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Game":
        return cls(
            id=row["id"],
            title=row["title"],
            genre=row["genre"],
            price=float(row["price"]),
            release_date=row.get("releaseDate"),
        )


@dataclass
class Purchase:
    """One sale of a game on a platform. ``game_id`` must reference ``Game.id``."""

    id: int
    game_id: int
    platform: str
    bought_at: datetime

    def bought_at_text(self) -> str:
        # SQLite date functions understand this form directly.
        return self.bought_at.astimezone(timezone.utc).strftime(BOUGHT_AT_FORMAT)

    def to_params(self) -> tuple[int, int, str, str]:
        return (self.id, self.game_id, self.platform, self.bought_at_text())

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Purchase":
        return cls(
            id=row["id"],
            game_id=row["gameID"],
            platform=row["platform"],
            bought_at=datetime.strptime(row["boughtAt"], BOUGHT_AT_FORMAT).replace(tzinfo=timezone.utc),
        )
