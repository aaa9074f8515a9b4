"""
Relational store backed by SQLite.

Each operation opens its own connection and closes it when done.  All
queries use parameterized statements.  Any ``sqlite3.Error`` is
re‑raised as ``StoreUnavailableError`` so that ``FallbackStore`` can
degrade to memory without knowing about SQLite.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterator, List

from ..core.db import get_connection, get_cursor, get_database_path, init_db
from ..core.exceptions import StoreUnavailableError
from ..schemas.comment import CommentRead
from ..schemas.user import UserRead
from .base import CommentStore, utc_now

logger = logging.getLogger(__name__)

# INTEGER PRIMARY KEY is a signed 64-bit value.
SQLITE_MIN_INTEGER = -(2**63)
SQLITE_MAX_INTEGER = 2**63 - 1


class SQLiteStore(CommentStore):
    """Store comments and users in an SQLite database file."""

    name = "sqlite"

    def __init__(self, database_url: str) -> None:
        self.db_path = get_database_path(database_url)

    def open(self) -> None:
        """Create the schema if needed and seed the demo users."""
        logger.info("Opening SQLite database at %s", self.db_path)
        try:
            with get_cursor(self.db_path) as cursor:
                init_db(cursor)
        except sqlite3.Error as exc:
            raise StoreUnavailableError(f"Cannot open database {self.db_path}: {exc}") from exc

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = get_connection(self.db_path)
            try:
                yield conn
                conn.commit()
            finally:
                conn.close()
        except (sqlite3.Error, UnicodeEncodeError, OverflowError) as exc:
            # Values sqlite3 cannot bind count as a failed query too.
            raise StoreUnavailableError(str(exc)) from exc

    async def list_comments(self) -> List[CommentRead]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM comments ORDER BY created_at DESC, id DESC"
            ).fetchall()
        return [self._row_to_comment(row) for row in rows]

    async def add_comment(self, author: str, body: str) -> CommentRead:
        created_at = utc_now()
        with self._connect() as conn:
            cursor = conn.execute(
                "INSERT INTO comments (author, body, created_at) VALUES (?, ?, ?)",
                (author, body, created_at.strftime("%Y-%m-%d %H:%M:%S")),
            )
            comment_id = cursor.lastrowid
        return CommentRead(id=comment_id, author=author, body=body, created_at=created_at)

    async def delete_comment(self, comment_id: int) -> bool:
        if not SQLITE_MIN_INTEGER <= comment_id <= SQLITE_MAX_INTEGER:
            return False
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM comments WHERE id = ?", (comment_id,))
            affected = cursor.rowcount
        return affected > 0

    async def list_users(self) -> List[UserRead]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM users ORDER BY id").fetchall()
        return [UserRead.model_validate(dict(row)) for row in rows]

    @staticmethod
    def _row_to_comment(row: sqlite3.Row) -> CommentRead:
        """Convert a database row to a CommentRead schema instance."""
        return CommentRead(
            id=row["id"],
            author=row["author"],
            body=row["body"],
            created_at=row["created_at"],
        )
