"""Database helpers: engines, session factories and DB initialization.

Provides read/write session factories and an `init_db` helper that creates
the document table and seeds the food and recipe catalog when it is empty.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from core import config
from core.logger import get_logger
from .models import Base

logger = get_logger("database")

# Read/Write partitioning pattern
# In production, set WRITE_DATABASE_URL and READ_DATABASE_URL to different DB instances.
WRITE_DATABASE_URL = config.WRITE_DATABASE_URL
READ_DATABASE_URL = config.READ_DATABASE_URL


def _connect_args(url: str) -> dict:
    return {"check_same_thread": False} if url.startswith("sqlite") else {}


# Engines
write_engine = create_engine(WRITE_DATABASE_URL, connect_args=_connect_args(WRITE_DATABASE_URL))
read_engine = create_engine(READ_DATABASE_URL, connect_args=_connect_args(READ_DATABASE_URL))

# Session factories
WriteSessionLocal = sessionmaker(bind=write_engine)
ReadSessionLocal = sessionmaker(bind=read_engine)


def seed_catalog(session) -> dict:
    """Seed the `foods` and `recipes` collections from the bundled dataset.

    Collections that already hold documents are left untouched.

    Returns:
        Mapping of collection name to the number of documents inserted.
    """
    from core.repository import CollectionRepository
    from data.foods_dataset import FOODS_DATA, RECIPES_DATA

    added = {}
    for collection, rows in (("foods", FOODS_DATA), ("recipes", RECIPES_DATA)):
        repo = CollectionRepository(session, collection)
        if repo.count() > 0:
            added[collection] = 0
            continue
        repo.create_many(rows)
        added[collection] = len(rows)
    logger.info("Catalog seed: %s", added)
    return added


def init_db(engine=None, session_factory=None):
    """Initialize database schema and seed the catalog.

    Args:
        engine: Optional engine to initialize (defaults to the write engine).
        session_factory: Optional session factory bound to `engine`.
    """
    engine = engine or write_engine
    session_factory = session_factory or WriteSessionLocal
    Base.metadata.create_all(bind=engine)
    session = session_factory()
    try:
        seed_catalog(session)
    finally:
        session.close()


# Convenience generators for dependency injection
def get_write_session():
    """Yield a write-enabled SQLAlchemy session for the request scope."""
    db = WriteSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_read_session():
    """Yield a read-only SQLAlchemy session for the request scope."""
    db = ReadSessionLocal()
    try:
        yield db
    finally:
        db.close()
