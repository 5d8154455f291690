"""
seed_accounts.py
----------------
Creates the bootstrap manager account from MATCHDAY_MANAGER_USERNAME /
MATCHDAY_MANAGER_PASSWORD.

✅ Safe to run multiple times: an existing account is left untouched.

Usage:
    python -m matchday_backend.seed.seed_accounts
"""

import logging
from sqlmodel import Session, select

from matchday_backend.core.config import MANAGER_USERNAME, MANAGER_PASSWORD
from matchday_backend.core.database import sync_engine
from matchday_backend.core.security import hash_password
from matchday_backend.models.user_model import User

logger = logging.getLogger(__name__)


def seed_manager_account():
    with Session(sync_engine) as session:
        existing = session.exec(select(User).where(User.username == MANAGER_USERNAME)).first()
        if existing:
            logger.info("✅ Manager account already exists: %s", MANAGER_USERNAME)
            return existing

        manager = User(
            username=MANAGER_USERNAME,
            password_hash=hash_password(MANAGER_PASSWORD),
            role="manager",
        )
        session.add(manager)
        session.commit()
        session.refresh(manager)
        logger.info("➕ Created manager account: %s", MANAGER_USERNAME)
        return manager


if __name__ == "__main__":
    seed_manager_account()
