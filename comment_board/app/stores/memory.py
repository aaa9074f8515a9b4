"""
In‑memory store.

Used alone when no database is configured or reachable, and as the
fallback behind the relational store.  Comments are kept newest first
so listing needs no sorting.
"""

import logging
from typing import List

from ..core.db import SAMPLE_USERS
from ..schemas.comment import CommentRead
from ..schemas.user import UserRead
from .base import CommentStore, utc_now

logger = logging.getLogger(__name__)


class InMemoryStore(CommentStore):
    """Process‑local store with the same shape as the relational one."""

    name = "memory"

    def __init__(self) -> None:
        created_at = utc_now()
        self._users: List[UserRead] = [
            UserRead(id=index, username=username, password=password, email=email, created_at=created_at)
            for index, (username, password, email) in enumerate(SAMPLE_USERS, start=1)
        ]
        self._comments: List[CommentRead] = []
        self._next_id = 1

    async def list_comments(self) -> List[CommentRead]:
        return list(self._comments)

    async def add_comment(self, author: str, body: str) -> CommentRead:
        comment = CommentRead(id=self._next_id, author=author, body=body, created_at=utc_now())
        self._next_id += 1
        self._comments.insert(0, comment)
        logger.debug("Stored comment %s in memory", comment.id)
        return comment

    async def delete_comment(self, comment_id: int) -> bool:
        remaining = [c for c in self._comments if c.id != comment_id]
        if len(remaining) == len(self._comments):
            return False
        self._comments = remaining
        return True

    async def list_users(self) -> List[UserRead]:
        return list(self._users)
