"""
Abstract store interface.

A store owns Comment and User records.  Every implementation returns
the same schema objects so callers cannot tell which backend served a
request.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List

from ..schemas.comment import CommentRead
from ..schemas.user import UserRead


def utc_now() -> datetime:
    """Current time as naive UTC with second precision.

    Matches what SQLite's ``CURRENT_TIMESTAMP`` produces.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)


class CommentStore(ABC):
    """Persistence for comments and users."""

    name: str = "abstract"

    def open(self) -> None:
        """Prepare the backend.  Raises ``StoreUnavailableError`` on failure."""

    def close(self) -> None:
        """Release backend resources."""

    @abstractmethod
    async def list_comments(self) -> List[CommentRead]:
        """Return all comments, newest first."""

    @abstractmethod
    async def add_comment(self, author: str, body: str) -> CommentRead:
        """Persist a comment and return it with its id and timestamp."""

    @abstractmethod
    async def delete_comment(self, comment_id: int) -> bool:
        """Delete a comment.  Returns ``False`` if it did not exist."""

    @abstractmethod
    async def list_users(self) -> List[UserRead]:
        """Return every user record unmodified."""
