import logging
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone

import settings
from database_schemas import (
    USERS_TABLE_SCHEMA,
    PAPERS_TABLE_SCHEMA,
    COMMENTS_TABLE_SCHEMA,
    MESSAGES_TABLE_SCHEMA,
    LIKES_TABLE_SCHEMA,
    INDEX_SCHEMAS,
)
from errors import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def get_db():
    """One connection per call. Uncommitted writes are rolled back on any error."""
    conn = sqlite3.connect(settings.DB_NAME, timeout=settings.DB_TIMEOUT_SECONDS)
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
    except sqlite3.Error as e:
        conn.rollback()
        logger.error(f"Database error: {e}", exc_info=True)
        raise StorageError() from e
    finally:
        conn.close()


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> str:
    # Microsecond precision keeps ORDER BY created_at in insertion order
    return datetime.now(timezone.utc).isoformat()


def init_db():
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(USERS_TABLE_SCHEMA)
        cursor.execute(PAPERS_TABLE_SCHEMA)
        cursor.execute(COMMENTS_TABLE_SCHEMA)
        cursor.execute(MESSAGES_TABLE_SCHEMA)
        cursor.execute(LIKES_TABLE_SCHEMA)
        for index_schema in INDEX_SCHEMAS:
            cursor.execute(index_schema)
        conn.commit()
    logger.info(f"Database initialized at {settings.DB_NAME}")


if __name__ == "__main__":
    init_db()
