#!/usr/bin/env python3
"""Clear all data from the database tables."""
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sqlalchemy import delete, func, select  # noqa: E402

from dairy.core.config import get_settings  # noqa: E402
from dairy.core.log import configure_logging, get_logger, log_context  # noqa: E402
from dairy.db import create_sync_engine, get_sqlalchemy_url, init_db  # noqa: E402
from dairy.models import Base  # noqa: E402

logger = get_logger(__name__)


def is_database_empty(engine) -> bool:
    """Check if the database has any data."""
    with engine.connect() as connection:
        for table in Base.metadata.sorted_tables:
            count = connection.execute(select(func.count()).select_from(table)).scalar()
            if count:
                logger.info(f"Found {count} rows in {table.name}, database is not empty")
                return False
    logger.info("Database appears to be empty")
    return True


def clear_database() -> None:
    """Clear all data from database tables in dependency order."""
    engine = create_sync_engine(get_sqlalchemy_url())
    init_db(engine)

    if is_database_empty(engine):
        logger.info("Database is empty, skipping clear operation")
        return

    with engine.begin() as connection:
        # Child tables first
        for table in reversed(Base.metadata.sorted_tables):
            result = connection.execute(delete(table))
            logger.info(f"Cleared {result.rowcount} rows from {table.name}")

    logger.info("Database clearing complete")


if __name__ == "__main__":
    configure_logging(get_settings(), app_name="clear-database")
    log_context.bind(job="clear_database")
    clear_database()
