"""Database initialization and migrations"""
import logging
import os
import sqlite3

from config import DATABASE_PATH

logger = logging.getLogger(__name__)


def init_db(db_path: str = DATABASE_PATH):
    """Initialize the database with schema"""
    # Create data directory if it doesn't exist
    db_dir = os.path.dirname(db_path)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)

    conn = sqlite3.connect(db_path)
    try:
        schema_path = os.path.join(os.path.dirname(__file__), 'schema.sql')
        with open(schema_path, 'r', encoding='utf-8') as f:
            schema = f.read()

        conn.executescript(schema)
        conn.commit()
    finally:
        conn.close()

    logger.info(f"Database initialized successfully at {db_path}")


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    init_db()
