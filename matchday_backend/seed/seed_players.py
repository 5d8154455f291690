"""
seed_players.py
---------------
Seeds a demo roster so a fresh install has someone to pick teams from.
Only runs when MATCHDAY_SEED_DEMO is set and the roster is empty.
"""

import logging
from sqlmodel import Session, select

from matchday_backend.core.database import sync_engine
from matchday_backend.models.player_model import Player

logger = logging.getLogger(__name__)

# (name, nickname)
DEMO_PLAYERS = [
    ("Alex Morgan", None),
    ("Ben Carter", "Benny"),
    ("Chris Dunn", None),
    ("Dan Ellis", "Wall"),
    ("Eddie Flynn", None),
    ("Frank Gale", None),
    ("George Hart", "G"),
    ("Harry Irwin", None),
    ("Ian Jones", None),
    ("Jack Kemp", "Keeper"),
]


def seed_demo_players():
    with Session(sync_engine) as session:
        if session.exec(select(Player)).first():
            logger.info("✅ Roster already populated. Skipping demo players.")
            return 0

        for name, nickname in DEMO_PLAYERS:
            session.add(Player(name=name, nickname=nickname))
        session.commit()
        logger.info("➕ Added %d demo players", len(DEMO_PLAYERS))
        return len(DEMO_PLAYERS)


if __name__ == "__main__":
    seed_demo_players()
