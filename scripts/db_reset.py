#!/usr/bin/env python3
"""Development database reset.

Drops every Formspace table (or the SQLite file) and recreates the schema.
Refuses to run outside local-dev and test.

Usage:
    python scripts/db_reset.py
"""

import sys

from formspace.db.database import engine, init_db
from formspace.db.models import Base
from formspace.settings import settings
from formspace.utils import get_logger

logger = get_logger(__name__)


def reset_database() -> None:
    if settings.environment not in ["local-dev", "test"]:
        logger.error("❌ Database reset is only allowed in local-dev or test environment")
        logger.error(f"   Current environment: {settings.environment}")
        sys.exit(1)

    logger.info(f"🗄️  Database type: {settings.database_type}")

    if settings.database_type == "sqlite":
        sqlite_path = settings.get_sqlite_path()
        if str(sqlite_path) == ":memory:":
            logger.info("ℹ️  Using in-memory database (nothing to delete)")
        else:
            engine.dispose()
            if sqlite_path.exists():
                sqlite_path.unlink()
                logger.info(f"✅ Deleted SQLite database: {sqlite_path}")
    else:
        logger.info("⚠️  Dropping all MySQL tables...")
        Base.metadata.drop_all(bind=engine)
        logger.info("✅ All MySQL tables dropped")

    init_db()
    logger.info("🎉 Database reset completed!")


if __name__ == "__main__":
    reset_database()
