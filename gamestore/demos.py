"""
The six GameStore data-storage demos, run in order against one ``Database``:

1. Create table v1.0, then add a column (v1.1)
2. Insert dummy games in one transaction; 2b. backfill release dates
3. GROUP BY / ORDER BY: titles per genre as a bar chart
4. Aggregation: COUNT, MIN, MAX, AVG price per genre
5. Transaction rolled back after a constraint violation
6. Migration: Purchase table (v2.0) with a foreign key, index and bulk insert
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from gamestore.db import schema
from gamestore.db.database import Database, PreparedStatement, Row
from gamestore.dummy import DummyData
from gamestore.models import Game, Purchase

logger = logging.getLogger(__name__)

BAR_WIDTH = 20
BAR_LABEL_WIDTH = 15


@dataclass(frozen=True)
class Check:
    message: str
    passed: bool


def report(condition: bool, message: str) -> Check:
    """Print a ✅ or 🛑 marker instead of failing hard."""
    if condition:
        print(f"✅ {message}")
        logger.info(f"Check passed: {message}")
    else:
        print(f"🛑 {message}")
        logger.error(f"Check failed: {message}")
    return Check(message=message, passed=condition)


def render_bar(label: str, value: int, max_value: int, width: int = BAR_WIDTH) -> str:
    """One row of an ASCII bar chart, at most ``width`` cells long."""
    cells = int(value / max_value * width) if max_value > 0 else 0
    return f"{label[:BAR_LABEL_WIDTH]:<{BAR_LABEL_WIDTH}} {'█' * cells}"


# ---------------------------------------------------------------------------
# Demo 1: DDL (CREATE + ALTER)
# ---------------------------------------------------------------------------

def create_and_alter_tables(db: Database) -> Check:
    # Purchase references Game, so drop with foreign-key checks off.
    with db.foreign_keys_suspended():
        for statement in schema.DROP_TABLES:
            db.execute(statement).check()

    db.execute(schema.GAME_TABLE_DDL).check()
    db.execute(schema.GAME_RELEASE_DATE_DDL).check()

    return report(db.column_exists("Game", "releaseDate"),
                  "Data Definition Language: CREATE + ALTER")


# ---------------------------------------------------------------------------
# Demo 2: dummy data
# ---------------------------------------------------------------------------

def insert_dummy_games(db: Database, dummy: DummyData, count: int = 50) -> Check:
    def insert_all(statement: PreparedStatement) -> None:
        for game_id in range(1, count + 1):
            statement.run(dummy.game(game_id).to_params())

    # One transaction instead of ``count`` autocommits
    with db.transaction():
        db.prepare(schema.INSERT_GAME, insert_all)

    return report(db.scalar_int("SELECT COUNT(*) FROM Game") == count,
                  f"Inserted {count} dummy games")


def backfill_release_dates(
    db: Database, dummy: DummyData, game_count: int = 50
) -> tuple[Optional[str], Optional[str]]:
    """Give every game a release date 100..2000 days in the past."""
    def update_all(statement: PreparedStatement) -> None:
        for game_id in range(1, game_count + 1):
            statement.run((f"-{dummy.release_days_ago()} days", game_id))

    with db.transaction():
        db.prepare(schema.SET_RELEASE_DATE, update_all)

    oldest = _game_by_release(db, "ASC")
    newest = _game_by_release(db, "DESC")
    if oldest is None or newest is None:
        print("Release dates between ? and ?")
        return None, None
    print(f"Release dates between {oldest.release_date} ({oldest.title}) "
          f"and {newest.release_date} ({newest.title})")
    return oldest.release_date, newest.release_date


def _game_by_release(db: Database, order: str) -> Optional[Game]:
    rows = db.query(
        "SELECT * FROM Game WHERE releaseDate IS NOT NULL "
        f"ORDER BY releaseDate {order}, id LIMIT 1;"
    )
    return Game.from_row(rows[0]) if rows else None


# ---------------------------------------------------------------------------
# Demo 3: GROUP BY / ORDER BY
# ---------------------------------------------------------------------------

def genre_breakdown(db: Database) -> list[Row]:
    rows = db.query("""
        SELECT genre, COUNT(*) AS titles
        FROM Game
        GROUP BY genre
        ORDER BY titles DESC;
        """)
    top = max((int(row["titles"]) for row in rows), default=1)  # type: ignore[arg-type]
    for row in rows:
        print(render_bar(str(row["genre"]), int(row["titles"]), top))  # type: ignore[arg-type]
    return rows


# ---------------------------------------------------------------------------
# Demo 4: aggregation
# ---------------------------------------------------------------------------

PRICE_STATS_SQL = """
    SELECT genre,
           COUNT(*)            AS titles,
           MIN(price)          AS cheap,
           MAX(price)          AS pricey,
           ROUND(AVG(price),1) AS avg
    FROM Game
    GROUP BY genre
    ORDER BY avg DESC;
    """


def price_stats(db: Database) -> Check:
    rows = db.query(PRICE_STATS_SQL)
    check = report(bool(rows), "Aggregation succeeded")
    for row in rows:
        print(row)
    return check


# ---------------------------------------------------------------------------
# Demo 5: transaction rollback
# ---------------------------------------------------------------------------

def rollback_on_violation(db: Database) -> Check:
    total_sql = "SELECT ROUND(SUM(price)) FROM Game"
    before = db.scalar_int(total_sql)

    db.begin()
    try:
        db.execute("UPDATE Game SET price = price * 1.10;").check()
        # title is NOT NULL; this one is meant to fail
        result = db.execute("UPDATE Game SET title = NULL WHERE id = 1;")
        if not result.ok:
            print(f"SQLite expected error ({result.error_code}): {result.error.message}")  # type: ignore[union-attr]
    finally:
        db.rollback()

    after = db.scalar_int(total_sql)
    return report(before == after, "Rollback preserved totals")


# ---------------------------------------------------------------------------
# Demo 6: migration v2.0
# ---------------------------------------------------------------------------

def create_purchase_table(db: Database) -> None:
    """Additive v2.0 migration; safe to run more than once."""
    db.execute(schema.PURCHASE_TABLE_DDL).check()
    # Speeds up joins and lookups by gameID
    db.execute(schema.PURCHASE_INDEX_DDL).check()


def migrate_purchases(
    db: Database, dummy: DummyData, count: int = 200, game_count: int = 50
) -> Check:
    create_purchase_table(db)

    def insert_all(statement: PreparedStatement) -> None:
        for purchase_id in range(1, count + 1):
            purchase = dummy.purchase(purchase_id, dummy.game_id(game_count))
            statement.run(purchase.to_params())

    with db.transaction():
        db.prepare(schema.INSERT_PURCHASE, insert_all)

    check = report(db.scalar_int("SELECT COUNT(*) FROM Purchase") == count,
                   f"Migration & {count} purchases ok")
    for purchase in recent_purchases(db):
        print(f"  #{purchase.id} game {purchase.game_id} on {purchase.platform} "
              f"at {purchase.bought_at_text()}")
    return check


def recent_purchases(db: Database, limit: int = 3) -> list[Purchase]:
    """The latest purchases, newest first."""
    rows = db.query("SELECT * FROM Purchase ORDER BY boughtAt DESC, id LIMIT ?;", (limit,))
    return [Purchase.from_row(row) for row in rows]


def run_all(
    db: Database, dummy: DummyData, game_count: int = 50, purchase_count: int = 200
) -> list[Check]:
    """Run every demo in order and collect the check outcomes."""
    checks = [
        create_and_alter_tables(db),
        insert_dummy_games(db, dummy, game_count),
    ]
    backfill_release_dates(db, dummy, game_count)
    genre_breakdown(db)
    checks.append(price_stats(db))
    checks.append(rollback_on_violation(db))
    checks.append(migrate_purchases(db, dummy, purchase_count, game_count))
    logger.info(f"{sum(c.passed for c in checks)}/{len(checks)} checks passed")
    return checks
