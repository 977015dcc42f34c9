"""
stats_db.py: SQLite persistence for game counters and settings.
"""

import logging
import sqlite3
from typing import Optional

from .constants import DB_FILE

logger = logging.getLogger(__name__)


class SqliteCounterStore:
    """CounterStore backed by a SQLite file, surviving process restarts."""

    def __init__(self, db_file: str = DB_FILE):
        # check_same_thread=False lets a TickDriver thread record a game over
        self.conn = sqlite3.connect(db_file, check_same_thread=False)
        self.cur = self.conn.cursor()
        self.setup()

    def setup(self):
        """Creates tables if they don't exist."""
        self.cur.execute("""
            CREATE TABLE IF NOT EXISTS Counters (
                key TEXT PRIMARY KEY,
                value INTEGER NOT NULL DEFAULT 0
            )
        """)
        self.cur.execute("""
            CREATE TABLE IF NOT EXISTS Settings (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)
        self.conn.commit()
        logger.debug("Counter store schema ready")

    def get_int(self, key: str, default: int = 0) -> int:
        self.cur.execute("SELECT value FROM Counters WHERE key=?", (key,))
        row = self.cur.fetchone()
        return default if row is None else row[0]

    def set_int(self, key: str, value: int) -> None:
        self.cur.execute(
            "INSERT INTO Counters (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value", (key, value))
        self.conn.commit()

    def get_str(self, key: str) -> Optional[str]:
        self.cur.execute("SELECT value FROM Settings WHERE key=?", (key,))
        row = self.cur.fetchone()
        return None if row is None else row[0]

    def set_str(self, key: str, value: str) -> None:
        self.cur.execute(
            "INSERT INTO Settings (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value", (key, value))
        self.conn.commit()

    def close(self):
        self.conn.close()
