"""
Central configuration loader.
Reads from environment variables (via .env); validates numeric keys.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# ---------------------------------------------------------------------------
# Load .env from repo root (if present)
# ---------------------------------------------------------------------------
_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env")

DB_FILENAME = "gamestore.sqlite"


def _get(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    val = os.getenv(key, default)
    if required and not val:
        raise EnvironmentError(f"Missing required environment variable: {key}")
    return val


def _get_int(key: str, default: int) -> int:
    raw = _get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise EnvironmentError(f"Environment variable {key} must be an integer, got {raw!r}") from None


# ---------------------------------------------------------------------------
# Demo run config
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class DemoConfig:
    db_path: Path
    game_count: int
    purchase_count: int
    seed: Optional[int]
    log_level: str


def get_demo_config() -> DemoConfig:
    raw_seed = _get("GAMESTORE_SEED")
    return DemoConfig(
        db_path=get_db_path(),
        game_count=_get_int("GAMESTORE_GAME_COUNT", 50),
        purchase_count=_get_int("GAMESTORE_PURCHASE_COUNT", 200),
        seed=_get_int("GAMESTORE_SEED", 0) if raw_seed else None,
        log_level=_get("GAMESTORE_LOG_LEVEL", default="WARNING").upper(),  # type: ignore[union-attr]
    )


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
def get_db_path() -> Path:
    override = _get("GAMESTORE_DB_PATH")
    if override:
        return Path(override)
    return Path(tempfile.gettempdir()) / DB_FILENAME
