"""
Database engine, session management, and base model.

Every model inherits from Base. Every request gets its own
session from get_db(), and that session is the transaction
handle passed into each service.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from finance_os.config import get_settings

settings = get_settings()

# --- Engine ---
# pool_pre_ping=True tests connections before using them,
# which handles a restarted database or a stale connection.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
)

# --- Session Factory ---
# autocommit=False: the caller decides when a unit of work is
# committed, so a journal row and its balance effect land
# together or not at all.
# autoflush=False: SQL is only sent on an explicit flush or
# commit.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    The session is always closed when the request finishes,
    even if an error occurs, so no connection leaks back into
    the pool half-used.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
