import os
import logging
from sqlmodel import SQLModel, Session
from sqlalchemy import create_engine as create_sync_engine
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from matchday_backend.core.config import DB_PATH, SQL_ECHO

logger = logging.getLogger(__name__)

# Ensure the DB directory exists (prevents async context errors)
db_dir = os.path.dirname(DB_PATH)
if db_dir and not os.path.exists(db_dir):
    os.makedirs(db_dir, exist_ok=True)

# --- Database URLs ---
DATABASE_URL = f"sqlite+aiosqlite:///{DB_PATH}"    # Async engine (read-only stats routes)
SYNC_DATABASE_URL = f"sqlite:///{DB_PATH}"         # Sync engine (write routes/seeding)

# --- Engines ---
# NullPool: aiosqlite connections are bound to the event loop that opened them.
engine = create_async_engine(DATABASE_URL, echo=SQL_ECHO, poolclass=NullPool)
sync_engine = create_sync_engine(
    SYNC_DATABASE_URL,
    echo=SQL_ECHO,
    connect_args={"check_same_thread": False},
)

# --- Async session maker ---
async_session_maker = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


# --- Async DB session (used in read routes) ---
async def get_db():
    async with async_session_maker() as session:
        yield session


# --- Initialize DB tables ---
async def init_db():
    """Create tables asynchronously if they don't exist."""
    from matchday_backend import models  # noqa: F401  (registers tables)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database ready at %s", DB_PATH)


# --- Sync session (used in write routes) ---
def get_session():
    with Session(sync_engine) as session:
        yield session
