"""
Database seeding script for the game leaderboard.

Populates one game partition with random score submissions, going through
the service so every row passes the same validation as an API call.

Usage:
    python -m leaderboard.seed_db --game-id pudding_jump --count 500
"""

import argparse
import logging
import random
import time
from typing import Optional

from leaderboard.app import configure_logging
from leaderboard.config import get_settings
from leaderboard.schemas import RankingRecord
from leaderboard.service import RankingService
from leaderboard.store import RankingStore

logger = logging.getLogger(__name__)

PLAYER_NAMES = ["inho", "mina", "jisoo", "minho", "yuna", "taeyang", "hana", "doyun"]


def seed(service: RankingService, game_id: str, count: int,
         rng: Optional[random.Random] = None) -> list[RankingRecord]:
    """Submit ``count`` random scores to ``game_id`` and return the created records."""
    rng = rng or random.Random()
    created = []
    for _ in range(count):
        name = f"{rng.choice(PLAYER_NAMES)}_{rng.randint(1, 99)}"
        created.append(service.submit(game_id, name, rng.randint(0, 10000)))
    return created


def main(argv=None):
    parser = argparse.ArgumentParser(description="Seed the leaderboard with random scores.")
    parser.add_argument("--game-id", default="pudding_jump")
    parser.add_argument("--count", type=int, default=100)
    parser.add_argument("--seed", type=int, default=None, help="random seed for repeatable data")
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level)

    store = RankingStore(settings.database_url)
    store.init_schema()
    try:
        logger.info("⏳ Inserting %d submissions into %r …", args.count, args.game_id)
        start = time.time()
        records = seed(RankingService(store), args.game_id, args.count, random.Random(args.seed))
        logger.info("✓ %d submissions inserted in %.1fs", len(records), time.time() - start)
    finally:
        store.dispose()


if __name__ == "__main__":
    main()
