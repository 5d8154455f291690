# seed_all.py
# Runs every seed step in order. Called on startup and usable as a script.

import logging

from matchday_backend.core.config import SEED_DEMO
from matchday_backend.seed.seed_accounts import seed_manager_account
from matchday_backend.seed.seed_players import seed_demo_players

logger = logging.getLogger(__name__)


def seed_all():
    logger.info("🌱 Seeding database...")

    logger.info("➡️  Step 1: Manager account...")
    seed_manager_account()

    if SEED_DEMO:
        logger.info("➡️  Step 2: Demo roster...")
        seed_demo_players()

    logger.info("✅ Seeding complete.")


if __name__ == "__main__":
    seed_all()
