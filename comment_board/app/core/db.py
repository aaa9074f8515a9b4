"""
SQLite database integration and simple migration system.

This module provides functions for resolving the database location
(``get_database_path``), obtaining a connection (``get_connection``)
and applying migrations (``init_db``).  The relational store in
``stores.sqlite`` builds on these helpers; nothing else in the
application touches SQL directly.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Tuple

# Demo accounts.  Passwords are stored and served in clear text on
# purpose: the unprotected ``/users`` listing is part of the demo.
SAMPLE_USERS: List[Tuple[str, str, str]] = [
    ("admin", "admin123", "admin@example.com"),
    ("user1", "password123", "user1@example.com"),
    ("user2", "secret456", "user2@example.com"),
]

MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL,
            password TEXT NOT NULL,
            email TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS comments (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            author TEXT NOT NULL,
            body TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
    # Migration 2: listing is always newest first
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_comments_created_at ON comments(created_at);
        """,
    ),
]


def get_database_path(database_url: str) -> str:
    """Resolve ``database_url`` to an absolute file path.

    Relative paths are resolved against the current working directory.
    """
    return str(Path(database_url).expanduser().resolve())


def get_connection(db_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Timestamps are left as stored text; the schemas parse them.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(db_path: str) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db(cursor: sqlite3.Cursor) -> None:
    """Apply pending migrations and seed the demo users.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version and applies any newer entries of
    ``MIGRATIONS``.  Sample users are inserted only when the ``users``
    table is empty.
    """
    cursor.execute(
        "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
    )
    cursor.execute("SELECT MAX(version) as version FROM migrations")
    row = cursor.fetchone()
    current_version = row["version"] if row and row["version"] is not None else 0

    for version, sql in MIGRATIONS:
        if version > current_version:
            cursor.executescript(sql)
            cursor.execute(
                "INSERT INTO migrations (version) VALUES (?)", (version,)
            )
            current_version = version

    row = cursor.execute("SELECT COUNT(*) AS count FROM users").fetchone()
    if row["count"] == 0:
        cursor.executemany(
            "INSERT INTO users (username, password, email) VALUES (?, ?, ?)",
            SAMPLE_USERS,
        )
