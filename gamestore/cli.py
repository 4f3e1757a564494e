#!/usr/bin/env python3
"""Run the GameStore data-storage demos against a SQLite file."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from gamestore.config import get_demo_config
from gamestore.db.database import DatabaseError, open_database
from gamestore.demos import run_all
from gamestore.dummy import DummyData, load_catalog

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    config = get_demo_config()
    parser = argparse.ArgumentParser(description="GameStore SQLite demos")
    parser.add_argument("--db-path", type=str, default=str(config.db_path),
                        help="SQLite file to (re)create")
    parser.add_argument("--games", type=int, default=config.game_count,
                        help="Number of dummy games to insert")
    parser.add_argument("--purchases", type=int, default=config.purchase_count,
                        help="Number of dummy purchases to insert")
    parser.add_argument("--seed", type=int, default=config.seed,
                        help="Random seed for reproducible dummy data")
    parser.add_argument("--catalog", type=str,
                        help="YAML file overriding the titles/genres/platforms pools")
    parser.add_argument("--log-level", type=str, default=config.log_level,
                        help="Logging level (DEBUG, INFO, WARNING, ...)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.games < 1:
        print("--games must be at least 1", file=sys.stderr)
        return 2
    if args.purchases < 0:
        print("--purchases must not be negative", file=sys.stderr)
        return 2

    catalog = load_catalog(Path(args.catalog)) if args.catalog else None
    dummy = DummyData(seed=args.seed, catalog=catalog)

    print("=" * 60)
    print("GAMESTORE DATA-STORAGE DEMO")
    print("=" * 60)
    print(f"Database: {args.db_path}")

    try:
        with open_database(args.db_path) as db:
            checks = run_all(db, dummy, game_count=args.games, purchase_count=args.purchases)
    except DatabaseError as exc:
        logger.error(f"Unexpected database error: {exc}")
        raise SystemExit(str(exc)) from exc

    failed = [c for c in checks if not c.passed]
    print(f"\n{len(checks) - len(failed)}/{len(checks)} checks passed.")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
