"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
load_dotenv()


@pytest.fixture(autouse=True)
def _isolated_db_path(tmp_path, monkeypatch):
    """Keep the default database path out of the shared temp directory."""
    if "GAMESTORE_DB_PATH" not in os.environ:
        monkeypatch.setenv("GAMESTORE_DB_PATH", str(tmp_path / "gamestore.sqlite"))
