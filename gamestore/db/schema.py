"""Database schema DDL — Game (v1.0, v1.1) and Purchase (v2.0)."""

DROP_TABLES = (
    "DROP TABLE IF EXISTS Purchase;",
    "DROP TABLE IF EXISTS Game;",
)

# ==========================================================================
# v1.0 Game table
# ==========================================================================
GAME_TABLE_DDL = """
-- v1.0
CREATE TABLE Game(
  id      INTEGER PRIMARY KEY,
  title   TEXT    NOT NULL,
  genre   TEXT    NOT NULL,
  price   REAL    NOT NULL
);
"""

# ==========================================================================
# v1.1 release date
# ==========================================================================
GAME_RELEASE_DATE_DDL = "ALTER TABLE Game ADD COLUMN releaseDate DATE;"

# ==========================================================================
# v2.0 Purchase table (additive migration)
# ==========================================================================
PURCHASE_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS Purchase(
  id       INTEGER PRIMARY KEY,
  gameID   INTEGER NOT NULL,
  platform TEXT    NOT NULL,
  boughtAt DATE    NOT NULL,
  FOREIGN KEY(gameID) REFERENCES Game(id)
);
"""

PURCHASE_INDEX_NAME = "idx_purchase_game"
PURCHASE_INDEX_DDL = f"CREATE INDEX IF NOT EXISTS {PURCHASE_INDEX_NAME} ON Purchase(gameID);"

# ==========================================================================
# DML
# ==========================================================================
INSERT_GAME = "INSERT INTO Game(id, title, genre, price) VALUES (?, ?, ?, ?)"
INSERT_PURCHASE = "INSERT INTO Purchase(id, gameID, platform, boughtAt) VALUES (?, ?, ?, ?)"
SET_RELEASE_DATE = "UPDATE Game SET releaseDate = date('now', ?) WHERE id = ?"
