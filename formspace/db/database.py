"""Database connection and session management.

This module provides the SQLAlchemy engine, the session factory, the
FastAPI session dependency and a transaction helper for services.

Usage:
    from formspace.db.database import get_db, unit_of_work

    def create_something(db: Session) -> None:
        with unit_of_work(db):
            db.add(...)
"""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from formspace.settings import settings
from formspace.utils import get_logger

logger = get_logger(__name__)


def _build_database_url() -> str:
    url = settings.get_database_url_auto()
    # A bare mysql:// URL would pick the MySQLdb driver
    if url.startswith("mysql://"):
        url = url.replace("mysql://", "mysql+pymysql://", 1)

    return url


def build_engine(database_url: str) -> Engine:
    """Create an engine with the options appropriate for the backend."""
    is_sqlite = database_url.startswith("sqlite")
    engine_kwargs: dict = {
        "echo": settings.debug and settings.environment == "local-dev",
    }

    if is_sqlite:
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url:
            # Every connection must see the same in-memory database
            engine_kwargs["poolclass"] = StaticPool
        logger.info(f"Using SQLite database: {database_url}")
    else:
        engine_kwargs.update(
            {
                "pool_size": settings.mysql_pool_size,
                "max_overflow": settings.mysql_max_overflow,
                "pool_pre_ping": settings.mysql_pool_pre_ping,
                "pool_recycle": 3600,
            }
        )
        logger.info(f"Using MySQL database: {database_url.split('@')[1] if '@' in database_url else 'unknown'}")

    new_engine = create_engine(database_url, **engine_kwargs)

    if is_sqlite:

        @event.listens_for(new_engine, "connect")
        def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            """SQLite ignores foreign keys unless asked."""
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


engine: Engine = build_engine(_build_database_url())

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request, closed afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def unit_of_work(db: Session) -> Generator[Session, None, None]:
    """Run a block of writes as one transaction on an existing session.

    Commits when the block finishes, rolls back and re-raises on any error,
    so either every write in the block is applied or none is.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def check_connection() -> bool:
    """Check if database connection is working."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False


def init_db() -> None:
    """Create tables if they do not exist. Called on application startup."""
    from formspace.db.models import Base

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise


def close_db() -> None:
    """Dispose pooled connections. Called on application shutdown."""
    engine.dispose()
    logger.info("Database connections closed")
